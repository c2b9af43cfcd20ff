"""
Tabular views of generated sessions.

Converts records into a pandas DataFrame in the fixed output column order,
loads a written CSV back for downstream consumers, and summarizes a
dataset (label balance, per-label feature means, category mix).

Every field may be absent (None) at this layer even though the generator
always populates them; absent values become pandas NA.
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from pathlib import Path

import numpy as np
import pandas as pd

from core.constants import (
    BOOL_FIELDS,
    FLOAT_FIELDS,
    INT_FIELDS,
    SESSION_FIELDS,
    STRING_FIELDS,
    TIMESTAMP_FORMAT,
)
from core.models import SessionRecord

_NUMERIC_FEATURES = [f for f in SESSION_FIELDS if f in INT_FIELDS or f in FLOAT_FIELDS]


def as_row(item: SessionRecord | Mapping) -> dict:
    """Field-ordered dict for a record or a partial mapping (missing keys -> None)."""
    if isinstance(item, SessionRecord):
        return {name: getattr(item, name) for name in SESSION_FIELDS}
    return {name: item.get(name) for name in SESSION_FIELDS}


def records_to_frame(records: Iterable[SessionRecord | Mapping]) -> pd.DataFrame:
    """DataFrame with one row per record, typed columns, UTC timestamps."""
    frame = pd.DataFrame([as_row(r) for r in records], columns=list(SESSION_FIELDS))
    frame["timestamp"] = pd.to_datetime(frame["timestamp"], utc=True)
    for name in SESSION_FIELDS:
        if name in INT_FIELDS:
            frame[name] = frame[name].astype("Int64")
        elif name in BOOL_FIELDS:
            frame[name] = frame[name].astype("boolean")
        elif name in FLOAT_FIELDS:
            frame[name] = frame[name].astype(np.float64)
        elif name in STRING_FIELDS and name != "timestamp":
            frame[name] = frame[name].astype(object)
    return frame


def to_tabular(frame: pd.DataFrame) -> pd.DataFrame:
    """Row-oriented form: booleans as 0/1, timestamps as sortable UTC strings."""
    out = frame.copy()
    out["timestamp"] = out["timestamp"].dt.strftime(TIMESTAMP_FORMAT)
    for name in BOOL_FIELDS:
        out[name] = out[name].astype("Int64")
    return out


def read_csv(path: str | Path) -> pd.DataFrame:
    """Load a telemetry CSV back into the typed frame produced by records_to_frame()."""
    dtypes = {name: "Int64" for name in INT_FIELDS | BOOL_FIELDS}
    dtypes.update({name: np.float64 for name in FLOAT_FIELDS})
    dtypes.update({name: str for name in STRING_FIELDS})
    frame = pd.read_csv(path, dtype=dtypes)
    assert list(frame.columns) == list(SESSION_FIELDS), (
        f"Unexpected columns in {path}: {list(frame.columns)}"
    )
    frame["timestamp"] = pd.to_datetime(frame["timestamp"], format=TIMESTAMP_FORMAT, utc=True)
    for name in BOOL_FIELDS:
        frame[name] = frame[name].astype("boolean")
    return frame


def summarize(frame: pd.DataFrame) -> dict:
    """
    Dataset statistics as plain Python values.

    Keys: records, users, malicious, malicious_fraction, categories
    (category -> count), and means (label -> feature -> mean).
    """
    n = len(frame)
    n_malicious = int(frame["label_malicious"].fillna(False).sum()) if n else 0
    means: dict[str, dict[str, float]] = {}
    if n:
        grouped = frame.groupby(frame["label_malicious"].fillna(False).astype(bool))
        for label, group in grouped:
            key = "malicious" if label else "benign"
            means[key] = {
                name: round(float(group[name].astype(np.float64).mean()), 3)
                for name in _NUMERIC_FEATURES
            }
    return {
        "records": n,
        "users": int(frame["user_id"].nunique()),
        "malicious": n_malicious,
        "malicious_fraction": n_malicious / n if n else 0.0,
        "categories": {str(k): int(v) for k, v in frame["domain_category"].value_counts().sort_index().items()},
        "means": means,
    }
