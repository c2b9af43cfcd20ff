"""
Domain entities for the telemetry generator.

Each entity enforces invariants in __post_init__ via assertions.

Entities:
  - UserProfile: a synthetic user's stable behavioral routine
  - SessionRecord: one generated session, the unit of output
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime

from core.constants import FIELD_RANGES


def _in_range(name: str, value: float) -> bool:
    lo, hi = FIELD_RANGES[name]
    return lo <= value <= hi


# ===================================================================
# UserProfile
# ===================================================================
@dataclass(frozen=True)
class UserProfile:
    """
    Behavioral routine that biases every session a user produces.

    Invariants:
      - user_id is a non-empty string.
      - preferred_hour is an hour of day in [0, 23].
      - avg_session_seconds is a positive integer.
    """

    user_id: str
    preferred_hour: int
    avg_session_seconds: int

    def __post_init__(self) -> None:
        # --- user_id ---
        assert isinstance(self.user_id, str) and len(self.user_id) > 0, (
            f"user_id must be a non-empty string, got {self.user_id!r}"
        )

        # --- preferred_hour ---
        assert isinstance(self.preferred_hour, int) and 0 <= self.preferred_hour <= 23, (
            f"preferred_hour must be in [0, 23], got {self.preferred_hour!r}"
        )

        # --- avg_session_seconds ---
        assert isinstance(self.avg_session_seconds, int) and self.avg_session_seconds >= 1, (
            f"avg_session_seconds must be >= 1, got {self.avg_session_seconds!r}"
        )


# ===================================================================
# SessionRecord
# ===================================================================
@dataclass(frozen=True)
class SessionRecord:
    """
    A single synthetic browsing session.

    Field order is the output column order.

    Invariants:
      - user_id and session_id are non-empty strings.
      - timestamp is a timezone-aware datetime with second precision.
      - session_duration_sec is in [20, 3600].
      - dwell_time_sec is in [1, session_duration_sec].
      - domain_category is a non-empty string.
      - domain_risk_score is in [0.0, 1.0] with at most 3 decimals.
      - redirect_count in [0, 10], click_count in [0, 80],
        typing_events in [0, 300], login_failures >= 0.
      - download_flag, mfa_challenge, new_device_login and
        label_malicious are booleans.
    """

    user_id: str
    session_id: str
    timestamp: datetime
    session_duration_sec: int
    domain_category: str
    domain_risk_score: float
    redirect_count: int
    dwell_time_sec: int
    download_flag: bool
    click_count: int
    typing_events: int
    login_failures: int
    mfa_challenge: bool
    new_device_login: bool
    label_malicious: bool

    def __post_init__(self) -> None:
        # --- identity ---
        assert isinstance(self.user_id, str) and len(self.user_id) > 0, (
            f"user_id must be a non-empty string, got {self.user_id!r}"
        )
        assert isinstance(self.session_id, str) and len(self.session_id) > 0, (
            f"session_id must be a non-empty string, got {self.session_id!r}"
        )

        # --- timestamp ---
        assert isinstance(self.timestamp, datetime), (
            f"timestamp must be a datetime, got {type(self.timestamp)}"
        )
        assert self.timestamp.tzinfo is not None, (
            "timestamp must be timezone-aware (UTC)"
        )
        assert self.timestamp.microsecond == 0, (
            f"timestamp must have second precision, got {self.timestamp.isoformat()}"
        )

        # --- session_duration_sec ---
        assert isinstance(self.session_duration_sec, int) and _in_range(
            "session_duration_sec", self.session_duration_sec
        ), (
            f"session_duration_sec must be in {FIELD_RANGES['session_duration_sec']}, "
            f"got {self.session_duration_sec!r}"
        )

        # --- dwell_time_sec ---
        assert isinstance(self.dwell_time_sec, int) and 1 <= self.dwell_time_sec <= self.session_duration_sec, (
            f"dwell_time_sec must be in [1, {self.session_duration_sec}], got {self.dwell_time_sec!r}"
        )

        # --- domain_category ---
        assert isinstance(self.domain_category, str) and len(self.domain_category) > 0, (
            f"domain_category must be a non-empty string, got {self.domain_category!r}"
        )

        # --- domain_risk_score ---
        assert isinstance(self.domain_risk_score, float) and _in_range(
            "domain_risk_score", self.domain_risk_score
        ), (
            f"domain_risk_score must be in [0.0, 1.0], got {self.domain_risk_score!r}"
        )
        assert round(self.domain_risk_score, 3) == self.domain_risk_score, (
            f"domain_risk_score must have at most 3 decimals, got {self.domain_risk_score!r}"
        )

        # --- counters ---
        for name in ("redirect_count", "click_count", "typing_events"):
            value = getattr(self, name)
            assert isinstance(value, int) and _in_range(name, value), (
                f"{name} must be in {FIELD_RANGES[name]}, got {value!r}"
            )
        assert isinstance(self.login_failures, int) and self.login_failures >= 0, (
            f"login_failures must be >= 0, got {self.login_failures!r}"
        )

        # --- flags ---
        for name in ("download_flag", "mfa_challenge", "new_device_login", "label_malicious"):
            value = getattr(self, name)
            assert isinstance(value, bool), (
                f"{name} must be a boolean, got {type(value)}"
            )
