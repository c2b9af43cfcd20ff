"""
Dataset assembly for the telemetry generator.

Generates:
  - One UserProfile per synthetic user (preferred hour, average session length).
  - sessions_per_user SessionRecords per user, users outer, sessions inner.

Design notes:
  - A single RandomSource is created per run from the seed; its draw
    order fixes the whole output, so generation is strictly sequential.
  - Session ids come from one global counter (1..N), never reset per user.
  - All timestamps are anchored to one ``now`` captured at the start of
    the run; the same seed and anchor give identical output.
"""

from __future__ import annotations

from datetime import datetime, timezone

from config import DatasetConfig, validate_generation_params
from core.constants import DEFAULT_SEED, MALICIOUS_RATE, NUM_USERS, SESSIONS_PER_USER
from core.errors import ConfigurationError
from core.models import SessionRecord, UserProfile
from data.config_utils import get_cfg
from data.profiles import generate_profiles
from data.random_source import RandomSource
from data.sessions import session_id_width, synthesize


def _resolve_now(now: datetime | None) -> datetime:
    """Time anchor for a run: timezone-aware UTC, truncated to the second."""
    if now is None:
        now = datetime.now(timezone.utc)
    elif now.tzinfo is None:
        now = now.replace(tzinfo=timezone.utc)
    return now.astimezone(timezone.utc).replace(microsecond=0)


def _as_config(config) -> DatasetConfig | None:
    """Validate a plain nested-dict config by loading it into DatasetConfig."""
    if config is None or isinstance(config, DatasetConfig):
        return config
    try:
        return DatasetConfig(**config)
    except TypeError as e:
        raise ConfigurationError(f"Unknown config section: {e}") from e


def _generate(
    num_users: int,
    sessions_per_user: int,
    malicious_rate: float,
    seed: int,
    config: dict | None,
    now: datetime | None,
) -> tuple[list[UserProfile], list[SessionRecord]]:
    errs = validate_generation_params(num_users, sessions_per_user, malicious_rate)
    if errs:
        raise ConfigurationError("Invalid generation parameters:\n  " + "\n  ".join(errs))
    config = _as_config(config)

    rng = RandomSource(seed)
    anchor = _resolve_now(now)
    width = session_id_width(num_users * sessions_per_user)

    print(f"Generating {num_users} users...")
    profiles = generate_profiles(num_users, rng, config)

    print(f"Generating {sessions_per_user} sessions per user (malicious rate {malicious_rate:.2%})...")
    records: list[SessionRecord] = []
    session_counter = 1
    for profile in profiles:
        for _ in range(sessions_per_user):
            records.append(synthesize(
                profile, session_counter, malicious_rate, rng, anchor, config, id_width=width,
            ))
            session_counter += 1

    n_malicious = sum(1 for r in records if r.label_malicious)
    print(f"  Created {len(records)} sessions ({n_malicious} malicious)")
    return profiles, records


# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------
def generate_dataset(
    num_users: int = NUM_USERS,
    sessions_per_user: int = SESSIONS_PER_USER,
    malicious_rate: float = MALICIOUS_RATE,
    seed: int = DEFAULT_SEED,
    config: dict | None = None,
    now: datetime | None = None,
) -> list[SessionRecord]:
    """
    Generate the labeled session sequence.

    Args:
        num_users: Number of synthetic users (>= 0).
        sessions_per_user: Sessions generated for each user (>= 0).
        malicious_rate: Probability in [0, 1] that a session is malicious.
        seed: Random seed for reproducibility.
        config: Distribution parameters (see config.DATASET_CONFIG).
        now: Time anchor for timestamps; defaults to the current UTC time.

    Returns:
      Records in generation order, exactly num_users * sessions_per_user long.

    Raises:
      ConfigurationError: on negative counts, a rate outside [0, 1], or an
        invalid config.
    """
    _, records = _generate(num_users, sessions_per_user, malicious_rate, seed, config, now)
    return records


def generate_all(
    config=None,
    now: datetime | None = None,
) -> tuple[list[UserProfile], list[SessionRecord]]:
    """
    Generate profiles and records using the config's population section.

    Returns:
      (profiles, records) - all validated domain objects.
    """
    return _generate(
        get_cfg(config, "population", "num_users", default=NUM_USERS),
        get_cfg(config, "population", "sessions_per_user", default=SESSIONS_PER_USER),
        get_cfg(config, "population", "malicious_rate", default=MALICIOUS_RATE),
        get_cfg(config, "population", "seed", default=DEFAULT_SEED),
        config,
        now,
    )
