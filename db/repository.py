"""
SQLite database layer for generated session telemetry.

Provides:
  - Schema creation (user_profiles and sessions tables).
  - SessionRepository class with insert and query operations.
  - Conversion between domain objects and DB rows.

Pre-conditions are enforced on all public methods.
"""

from __future__ import annotations

import sqlite3
from collections.abc import Iterable
from datetime import datetime, timezone
from pathlib import Path

from core.constants import SESSION_FIELDS, TIMESTAMP_FORMAT
from core.models import SessionRecord, UserProfile


# ===================================================================
# Schema DDL
# ===================================================================
_SCHEMA_SQL = """
CREATE TABLE IF NOT EXISTS user_profiles (
    user_id              TEXT PRIMARY KEY,
    preferred_hour       INTEGER NOT NULL,     -- 0..23 UTC
    avg_session_seconds  INTEGER NOT NULL
);

CREATE TABLE IF NOT EXISTS sessions (
    user_id               TEXT NOT NULL,
    session_id            TEXT PRIMARY KEY,
    timestamp             TEXT NOT NULL,       -- YYYY-MM-DDTHH:MM:SSZ
    session_duration_sec  INTEGER,
    domain_category       TEXT,
    domain_risk_score     REAL,                -- 0.0 to 1.0
    redirect_count        INTEGER,
    dwell_time_sec        INTEGER,
    download_flag         INTEGER,             -- 0/1 boolean
    click_count           INTEGER,
    typing_events         INTEGER,
    login_failures        INTEGER,
    mfa_challenge         INTEGER,             -- 0/1 boolean
    new_device_login      INTEGER,             -- 0/1 boolean
    label_malicious       INTEGER NOT NULL     -- 0/1 ground truth
);

CREATE INDEX IF NOT EXISTS idx_sessions_user
    ON sessions(user_id);
CREATE INDEX IF NOT EXISTS idx_sessions_label
    ON sessions(label_malicious);
CREATE INDEX IF NOT EXISTS idx_sessions_timestamp
    ON sessions(timestamp);
"""

_INSERT_SESSION_SQL = (
    f"INSERT INTO sessions ({', '.join(SESSION_FIELDS)}) "
    f"VALUES ({', '.join('?' for _ in SESSION_FIELDS)})"
)


# ===================================================================
# Helpers
# ===================================================================
def _dt_to_str(dt: datetime) -> str:
    """Format a timezone-aware datetime as a sortable UTC string with a Z suffix."""
    return dt.astimezone(timezone.utc).strftime(TIMESTAMP_FORMAT)


def _str_to_dt(s: str) -> datetime:
    """Parse a stored timestamp back to a timezone-aware UTC datetime."""
    return datetime.strptime(s, TIMESTAMP_FORMAT).replace(tzinfo=timezone.utc)


# ===================================================================
# Repository
# ===================================================================
class SessionRepository:
    """
    Data-access layer backed by SQLite.

    Pre-conditions:
      - db_path must be a valid path (or ':memory:' for in-memory).
      - All insert methods require domain objects that already satisfy
        their own invariants.
    """

    def __init__(self, db_path: str | Path = ":memory:") -> None:
        self._db_path = str(db_path)
        self._conn = sqlite3.connect(self._db_path)
        self._conn.row_factory = sqlite3.Row
        self._conn.executescript(_SCHEMA_SQL)

    # ------------------------------------------------------------------
    # Profiles
    # ------------------------------------------------------------------
    def insert_profiles_batch(self, profiles: Iterable[UserProfile]) -> None:
        """Insert multiple profiles in a single transaction."""
        rows = []
        for p in profiles:
            assert isinstance(p, UserProfile), f"Expected UserProfile, got {type(p)}"
            rows.append((p.user_id, p.preferred_hour, p.avg_session_seconds))
        self._conn.executemany(
            "INSERT INTO user_profiles (user_id, preferred_hour, avg_session_seconds) VALUES (?, ?, ?)",
            rows,
        )
        self._conn.commit()

    def get_profile(self, user_id: str) -> UserProfile | None:
        """Fetch a profile by user ID. Returns None if not found."""
        assert isinstance(user_id, str) and len(user_id) > 0
        row = self._conn.execute(
            "SELECT * FROM user_profiles WHERE user_id = ?", (user_id,)
        ).fetchone()
        if row is None:
            return None
        return UserProfile(
            user_id=row["user_id"],
            preferred_hour=row["preferred_hour"],
            avg_session_seconds=row["avg_session_seconds"],
        )

    def count_profiles(self) -> int:
        return self._conn.execute("SELECT COUNT(*) FROM user_profiles").fetchone()[0]

    # ------------------------------------------------------------------
    # Sessions
    # ------------------------------------------------------------------
    def insert_session(self, record: SessionRecord) -> None:
        """Insert a single session. Pre-condition: record is a valid SessionRecord."""
        assert isinstance(record, SessionRecord), f"Expected SessionRecord, got {type(record)}"
        self._conn.execute(_INSERT_SESSION_SQL, self._session_to_row(record))
        self._conn.commit()

    def insert_sessions_batch(self, records: Iterable[SessionRecord]) -> int:
        """Insert multiple sessions in a single transaction. Returns the number inserted."""
        rows = []
        for r in records:
            assert isinstance(r, SessionRecord), f"Expected SessionRecord, got {type(r)}"
            rows.append(self._session_to_row(r))
        self._conn.executemany(_INSERT_SESSION_SQL, rows)
        self._conn.commit()
        return len(rows)

    def get_session(self, session_id: str) -> SessionRecord | None:
        """Fetch a session by ID. Returns None if not found."""
        assert isinstance(session_id, str) and len(session_id) > 0
        row = self._conn.execute(
            "SELECT * FROM sessions WHERE session_id = ?", (session_id,)
        ).fetchone()
        if row is None:
            return None
        return self._row_to_session(row)

    def get_sessions_by_user(self, user_id: str) -> list[SessionRecord]:
        """All sessions for a user in generation order."""
        assert isinstance(user_id, str) and len(user_id) > 0
        rows = self._conn.execute(
            "SELECT * FROM sessions WHERE user_id = ? ORDER BY session_id", (user_id,)
        ).fetchall()
        return [self._row_to_session(r) for r in rows]

    def get_all_sessions(self) -> list[SessionRecord]:
        """All sessions in generation order."""
        rows = self._conn.execute("SELECT * FROM sessions ORDER BY session_id").fetchall()
        return [self._row_to_session(r) for r in rows]

    def count_sessions(self) -> int:
        return self._conn.execute("SELECT COUNT(*) FROM sessions").fetchone()[0]

    def count_sessions_by_label(self) -> dict[bool, int]:
        """Return {label_malicious: count}."""
        rows = self._conn.execute(
            """SELECT label_malicious, COUNT(*) AS cnt
               FROM sessions GROUP BY label_malicious"""
        ).fetchall()
        return {bool(r["label_malicious"]): r["cnt"] for r in rows}

    def count_sessions_by_category(self) -> dict[str, int]:
        """Return {domain_category: count}."""
        rows = self._conn.execute(
            """SELECT domain_category, COUNT(*) AS cnt
               FROM sessions GROUP BY domain_category"""
        ).fetchall()
        return {r["domain_category"]: r["cnt"] for r in rows}

    @staticmethod
    def _session_to_row(r: SessionRecord) -> tuple:
        return (
            r.user_id,
            r.session_id,
            _dt_to_str(r.timestamp),
            r.session_duration_sec,
            r.domain_category,
            r.domain_risk_score,
            r.redirect_count,
            r.dwell_time_sec,
            1 if r.download_flag else 0,
            r.click_count,
            r.typing_events,
            r.login_failures,
            1 if r.mfa_challenge else 0,
            1 if r.new_device_login else 0,
            1 if r.label_malicious else 0,
        )

    @staticmethod
    def _row_to_session(row: sqlite3.Row) -> SessionRecord:
        return SessionRecord(
            user_id=row["user_id"],
            session_id=row["session_id"],
            timestamp=_str_to_dt(row["timestamp"]),
            session_duration_sec=row["session_duration_sec"],
            domain_category=row["domain_category"],
            domain_risk_score=float(row["domain_risk_score"]),
            redirect_count=row["redirect_count"],
            dwell_time_sec=row["dwell_time_sec"],
            download_flag=bool(row["download_flag"]),
            click_count=row["click_count"],
            typing_events=row["typing_events"],
            login_failures=row["login_failures"],
            mfa_challenge=bool(row["mfa_challenge"]),
            new_device_login=bool(row["new_device_login"]),
            label_malicious=bool(row["label_malicious"]),
        )

    # ------------------------------------------------------------------
    # Cleanup
    # ------------------------------------------------------------------
    def close(self) -> None:
        self._conn.close()
