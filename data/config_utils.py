"""Config helpers for telemetry generation."""

from __future__ import annotations

_MISSING = object()


def get_cfg(cfg, *path: str, default=None):
    """Get nested config value. get_cfg(cfg, 'benign', 'download_pct', default=0.03).

    Accepts a DatasetConfig, a plain nested dict, or None. A missing key or a
    None value along the path yields ``default``.
    """
    if hasattr(cfg, "to_dict"):
        cfg = cfg.to_dict()
    node = cfg or {}
    for key in path:
        if not isinstance(node, dict):
            return default
        node = node.get(key, _MISSING)
        if node is _MISSING or node is None:
            return default
    return node
