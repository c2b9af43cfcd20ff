"""JSON Lines serialization: one self-describing object per session."""

from __future__ import annotations

import json
from collections.abc import Iterable, Mapping
from datetime import datetime, timezone
from pathlib import Path

from core.constants import TIMESTAMP_FORMAT
from core.models import SessionRecord
from export.frame import as_row


def _encode(row: dict) -> str:
    ts = row["timestamp"]
    if isinstance(ts, datetime):
        row["timestamp"] = ts.astimezone(timezone.utc).strftime(TIMESTAMP_FORMAT)
    return json.dumps(row, ensure_ascii=False)


def write_jsonl(records: Iterable[SessionRecord | Mapping], path: str | Path) -> int:
    """Stream records to ``path`` one line at a time. Returns lines written."""
    count = 0
    with open(path, "w", encoding="utf-8", newline="\n") as f:
        for item in records:
            f.write(_encode(as_row(item)))
            f.write("\n")
            count += 1
    return count
