"""
Enumerations for the telemetry generator.
"""

from __future__ import annotations

from enum import Enum
from pathlib import Path

__all__ = ["OutputFormat"]


class OutputFormat(Enum):
    CSV = "csv"
    JSONL = "jsonl"
    SQLITE = "sqlite"

    @classmethod
    def from_path(cls, path: str | Path, default: "OutputFormat | None" = None) -> "OutputFormat":
        """Infer the format from a file extension. Unknown extensions fall back to default (CSV)."""
        suffix = Path(path).suffix.lower()
        return _SUFFIX_FORMATS.get(suffix, default or cls.CSV)


_SUFFIX_FORMATS = {
    ".csv": OutputFormat.CSV,
    ".jsonl": OutputFormat.JSONL,
    ".ndjson": OutputFormat.JSONL,
    ".db": OutputFormat.SQLITE,
    ".sqlite": OutputFormat.SQLITE,
    ".sqlite3": OutputFormat.SQLITE,
}
