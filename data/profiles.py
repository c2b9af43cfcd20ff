"""User profile generation: one stable routine per synthetic user."""

from __future__ import annotations

from core.constants import (
    AVG_SESSION_SECONDS,
    MIN_USER_ID_WIDTH,
    PREFERRED_HOURS,
    USER_ID_PREFIX,
)
from core.errors import ConfigurationError
from core.models import UserProfile
from data.config_utils import get_cfg
from data.random_source import RandomSource


def user_id_width(num_users: int) -> int:
    """Zero-pad width that keeps user ids sortable for num_users users."""
    return max(MIN_USER_ID_WIDTH, len(str(num_users)))


def format_user_id(ordinal: int, width: int = MIN_USER_ID_WIDTH) -> str:
    return f"{USER_ID_PREFIX}{ordinal:0{width}d}"


def generate_profiles(
    num_users: int,
    rng: RandomSource,
    config: dict | None = None,
) -> list[UserProfile]:
    """
    Generate one profile per ordinal 1..num_users.

    Each user gets a preferred hour of day and an average session length,
    drawn in that order.
    """
    if isinstance(num_users, bool) or not isinstance(num_users, int) or num_users < 0:
        raise ConfigurationError(f"num_users={num_users!r}: must be an integer >= 0")

    hours = get_cfg(config, "profiles", "preferred_hours", default=PREFERRED_HOURS)
    lengths = get_cfg(config, "profiles", "avg_session_seconds", default=AVG_SESSION_SECONDS)
    width = user_id_width(num_users)

    profiles: list[UserProfile] = []
    for ordinal in range(1, num_users + 1):
        preferred_hour = rng.pick_from(hours)
        avg_session_seconds = rng.pick_from(lengths)
        profiles.append(UserProfile(
            user_id=format_user_id(ordinal, width),
            preferred_hour=preferred_hour,
            avg_session_seconds=avg_session_seconds,
        ))
    return profiles
