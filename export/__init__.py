"""Serialization of generated sessions to CSV, JSON Lines, or SQLite."""

from __future__ import annotations

import sqlite3
from collections.abc import Iterable
from pathlib import Path

from core.enums import OutputFormat
from core.errors import ConfigurationError, WriterError
from core.models import SessionRecord, UserProfile
from db.repository import SessionRepository
from export.csv_writer import write_csv
from export.frame import read_csv, records_to_frame, summarize
from export.jsonl_writer import write_jsonl

__all__ = [
    "read_csv",
    "records_to_frame",
    "summarize",
    "write_csv",
    "write_dataset",
    "write_jsonl",
    "write_sqlite",
]


def write_sqlite(
    records: Iterable[SessionRecord],
    path: str | Path,
    profiles: Iterable[UserProfile] | None = None,
) -> int:
    """Persist profiles (optional) and sessions into a SQLite file. Returns sessions written."""
    repo = SessionRepository(path)
    try:
        if profiles is not None:
            repo.insert_profiles_batch(profiles)
        return repo.insert_sessions_batch(records)
    finally:
        repo.close()


def write_dataset(
    records: Iterable[SessionRecord],
    path: str | Path,
    fmt: str | OutputFormat | None = None,
    profiles: Iterable[UserProfile] | None = None,
) -> int:
    """
    Serialize ``records`` to ``path``. Returns the number of records written.

    The format is taken from ``fmt`` or inferred from the file extension
    (.csv, .jsonl/.ndjson, .db/.sqlite). Profiles are only persisted by the
    SQLite format.

    Raises:
      ConfigurationError: unknown format.
      WriterError: the target could not be written.
    """
    if fmt is None:
        output_format = OutputFormat.from_path(path)
    else:
        try:
            output_format = OutputFormat(fmt)
        except ValueError as e:
            raise ConfigurationError(
                f"format={fmt!r}: must be one of {sorted(f.value for f in OutputFormat)}"
            ) from e

    try:
        if output_format is OutputFormat.CSV:
            return write_csv(records, path)
        if output_format is OutputFormat.JSONL:
            return write_jsonl(records, path)
        return write_sqlite(records, path, profiles)
    except (OSError, sqlite3.Error) as e:
        raise WriterError(f"Failed to write {output_format.value} output to {path}: {e}") from e
