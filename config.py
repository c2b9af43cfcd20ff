"""Dataset configuration for telemetry generation."""

from __future__ import annotations

from copy import deepcopy
from dataclasses import dataclass, field

from core.constants import (
    AVG_SESSION_SECONDS,
    DEFAULT_OUT_FILE,
    DEFAULT_SEED,
    DOMAIN_CATEGORIES,
    MALICIOUS_RATE,
    NUM_USERS,
    PREFERRED_HOURS,
    SESSIONS_PER_USER,
)
from core.enums import OutputFormat
from core.errors import ConfigurationError


def _default_config() -> dict:
    return {
        "population": {
            "num_users": NUM_USERS,
            "sessions_per_user": SESSIONS_PER_USER,
            "malicious_rate": MALICIOUS_RATE,
            "seed": DEFAULT_SEED,
        },
        "profiles": {
            "preferred_hours": list(PREFERRED_HOURS),
            "avg_session_seconds": list(AVG_SESSION_SECONDS),
        },
        "timestamps": {
            "max_days_back": 6,
            "jitter_minutes": 90,
        },
        "domains": {
            "categories": list(DOMAIN_CATEGORIES),
        },
        "benign": {
            "duration_sigma": 120,
            "redirect_mean": 1.0,
            "redirect_sigma": 1.5,
            "click_mean": 18.0,
            "click_sigma": 6.0,
            "typing_mean": 55.0,
            "typing_sigma": 20.0,
            "download_pct": 0.03,
            "new_device_pct": 0.05,
            "dwell_min_fraction": 0.25,
            "dwell_fraction_span": 0.30,
        },
        "malicious": {
            "mfa_challenge_pct": 0.60,
            "new_device_pct": 0.30,
        },
        "output": {
            "path": DEFAULT_OUT_FILE,
            "format": OutputFormat.CSV.value,
        },
    }


def validate_generation_params(num_users, sessions_per_user, malicious_rate) -> list[str]:
    """Return one message per invalid generation parameter (empty when all valid)."""
    errs: list[str] = []
    for name, val in (("num_users", num_users), ("sessions_per_user", sessions_per_user)):
        if isinstance(val, bool) or not isinstance(val, int) or val < 0:
            errs.append(f"{name}={val!r}: must be an integer >= 0")
    if isinstance(malicious_rate, bool) or not isinstance(malicious_rate, (int, float)) or not (
        0 <= malicious_rate <= 1
    ):
        errs.append(f"malicious_rate={malicious_rate!r}: must be in [0, 1]")
    return errs


@dataclass
class DatasetConfig:
    """Hierarchical dataset config: section -> parameter."""

    population: dict = field(default_factory=dict)
    profiles: dict = field(default_factory=dict)
    timestamps: dict = field(default_factory=dict)
    domains: dict = field(default_factory=dict)
    benign: dict = field(default_factory=dict)
    malicious: dict = field(default_factory=dict)
    output: dict = field(default_factory=dict)

    def __post_init__(self) -> None:
        default = _default_config()
        for key in default:
            d = getattr(self, key, None)
            if not d:
                setattr(self, key, deepcopy(default[key]))
            else:
                # Partial sections keep defaults for keys they omit
                merged = deepcopy(default[key])
                merged.update(d)
                setattr(self, key, merged)
        self._validate()

    def __getitem__(self, key: str):
        """Support dict-like access: config['population']."""
        return getattr(self, key, None)

    def to_dict(self) -> dict:
        """Return nested dict for get_cfg() and downstream consumers."""
        return {
            "population": self.population,
            "profiles": self.profiles,
            "timestamps": self.timestamps,
            "domains": self.domains,
            "benign": self.benign,
            "malicious": self.malicious,
            "output": self.output,
        }

    def _collect_pct_values(self, d: dict, prefix: str = "") -> list[tuple[str, float]]:
        """Recursively collect (path, value) for keys ending in _pct."""
        out: list[tuple[str, float]] = []
        for k, v in d.items():
            path = f"{prefix}.{k}" if prefix else k
            if isinstance(v, dict):
                out.extend(self._collect_pct_values(v, path))
            elif isinstance(v, (int, float)) and k.endswith("_pct"):
                out.append((path, float(v)))
        return out

    def _validate(self) -> None:
        """Raise ConfigurationError if any invariant is violated."""
        errs: list[str] = []

        for path, val in self._collect_pct_values(self.to_dict()):
            if not 0 <= val <= 1:
                errs.append(f"{path}={val}: must be in [0, 1]")

        errs.extend(
            f"population.{e}"
            for e in validate_generation_params(
                self.population.get("num_users"),
                self.population.get("sessions_per_user"),
                self.population.get("malicious_rate"),
            )
        )
        seed = self.population.get("seed")
        if isinstance(seed, bool) or not isinstance(seed, int):
            errs.append(f"population.seed={seed!r}: must be an integer")

        hours = self.profiles.get("preferred_hours") or []
        if not hours:
            errs.append("profiles.preferred_hours: must not be empty")
        for h in hours:
            if isinstance(h, bool) or not isinstance(h, int) or not 0 <= h <= 23:
                errs.append(f"profiles.preferred_hours={h!r}: must be an hour in [0, 23]")
        lengths = self.profiles.get("avg_session_seconds") or []
        if not lengths:
            errs.append("profiles.avg_session_seconds: must not be empty")
        for s in lengths:
            if isinstance(s, bool) or not isinstance(s, int) or s < 1:
                errs.append(f"profiles.avg_session_seconds={s!r}: must be an integer >= 1")

        for k in ("max_days_back", "jitter_minutes"):
            v = self.timestamps.get(k)
            if isinstance(v, bool) or not isinstance(v, int) or v < 0:
                errs.append(f"timestamps.{k}={v!r}: must be an integer >= 0")

        categories = self.domains.get("categories") or []
        if not categories:
            errs.append("domains.categories: must not be empty")
        for c in categories:
            if not isinstance(c, str) or not c.strip():
                errs.append(f"domains.categories={c!r}: must be a non-blank string")

        for k, v in self.benign.items():
            if k.endswith("_sigma") and (not isinstance(v, (int, float)) or v <= 0):
                errs.append(f"benign.{k}={v!r}: must be > 0")

        fmt = self.output.get("format")
        if fmt not in {f.value for f in OutputFormat}:
            errs.append(f"output.format={fmt!r}: must be one of {sorted(f.value for f in OutputFormat)}")

        if errs:
            raise ConfigurationError("Config invariants violated:\n  " + "\n  ".join(errs))


DATASET_CONFIG = DatasetConfig()
