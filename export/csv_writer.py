"""CSV serialization: header row, one session per line, booleans as 0/1."""

from __future__ import annotations

import csv
from collections.abc import Iterable, Mapping
from pathlib import Path

from core.models import SessionRecord
from export.frame import records_to_frame, to_tabular


def write_csv(records: Iterable[SessionRecord | Mapping], path: str | Path) -> int:
    """
    Write records to ``path`` in the fixed column order. Returns rows written.

    Absent values become empty fields. String fields containing the
    delimiter, a quote, or a newline are quoted with doubled quotes.
    """
    frame = to_tabular(records_to_frame(records))
    frame.to_csv(
        path,
        index=False,
        na_rep="",
        quoting=csv.QUOTE_MINIMAL,
        lineterminator="\n",
    )
    return len(frame)
