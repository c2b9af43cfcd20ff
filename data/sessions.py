"""
Session feature synthesis: benign baseline plus malicious override.

Every session first gets a full benign baseline. Sessions labeled malicious
then have their risky features replaced wholesale (not blended) by the
"smash-and-grab" regime: short sessions on risky domains with a download
and repeated login failures.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from datetime import datetime, timedelta

from core.constants import (
    BENIGN_DURATION_RANGE,
    DOMAIN_CATEGORIES,
    FIELD_RANGES,
    MALICIOUS_DURATION_RANGE,
    MALICIOUS_MIN_LOGIN_FAILURES,
    MALICIOUS_RISK_FLOOR,
    MIN_SESSION_ID_WIDTH,
    SESSION_ID_PREFIX,
)
from core.models import SessionRecord, UserProfile
from data.config_utils import get_cfg
from data.random_source import RandomSource

# Malicious-regime integer ranges (inclusive)
_MALICIOUS_REDIRECTS = (3, 10)
_MALICIOUS_DWELL = (5, 34)
_MALICIOUS_CLICKS = (1, 10)
_MALICIOUS_TYPING = (1, 20)
_MALICIOUS_LOGIN_FAILURES = (MALICIOUS_MIN_LOGIN_FAILURES, 8)


# ---------------------------------------------------------------------------
# Numeric helpers
# ---------------------------------------------------------------------------
def clamp(x: float, lo: float, hi: float) -> float:
    """Constrain x to the inclusive range [lo, hi]."""
    return max(lo, min(hi, x))


def round_half_up(x: float) -> int:
    return math.floor(x + 0.5)


def round3(x: float) -> float:
    """Round to 3 decimals, halves away from zero for non-negative x."""
    return math.floor(x * 1000.0 + 0.5) / 1000.0


def _int_between(rng: RandomSource, bounds: tuple[int, int]) -> int:
    lo, hi = bounds
    return lo + rng.int_below(hi - lo + 1)


def session_id_width(total_sessions: int) -> int:
    """Zero-pad width that keeps session ids sortable for total_sessions sessions."""
    return max(MIN_SESSION_ID_WIDTH, len(str(total_sessions)))


def format_session_id(ordinal: int, width: int = MIN_SESSION_ID_WIDTH) -> str:
    return f"{SESSION_ID_PREFIX}{ordinal:0{width}d}"


# ---------------------------------------------------------------------------
# Feature blocks
# ---------------------------------------------------------------------------
@dataclass
class _Features:
    """Mutable scratch space for one session; frozen into a SessionRecord at the end."""

    session_duration_sec: int
    domain_category: str
    domain_risk_score: float
    redirect_count: int
    download_flag: bool
    click_count: int
    typing_events: int
    login_failures: int
    mfa_challenge: bool
    new_device_login: bool
    dwell_time_sec: int


def session_timestamp(
    profile: UserProfile,
    rng: RandomSource,
    now: datetime,
    config: dict | None = None,
) -> datetime:
    """Pick a day in the lookback window, snap to the preferred hour, then jitter by whole minutes."""
    max_days_back = get_cfg(config, "timestamps", "max_days_back", default=6)
    jitter = get_cfg(config, "timestamps", "jitter_minutes", default=90)

    day = now - timedelta(days=rng.int_below(max_days_back + 1))
    snapped = day.replace(hour=profile.preferred_hour, minute=0, second=0, microsecond=0)
    return snapped + timedelta(minutes=rng.int_below(2 * jitter + 1) - jitter)


def _benign_baseline(
    profile: UserProfile,
    rng: RandomSource,
    config: dict | None,
) -> _Features:
    """Ordinary browsing: duration around the user's average, low risk, no auth trouble."""
    categories = get_cfg(config, "domains", "categories", default=DOMAIN_CATEGORIES)
    sigma = get_cfg(config, "benign", "duration_sigma", default=120)

    duration = clamp(
        int(profile.avg_session_seconds + rng.gaussian() * sigma), *BENIGN_DURATION_RANGE
    )
    category = rng.pick_from(categories)
    risk = round3(rng.uniform() ** 2)  # skew low
    redirects = clamp(
        round_half_up(
            rng.gaussian() * get_cfg(config, "benign", "redirect_sigma", default=1.5)
            + get_cfg(config, "benign", "redirect_mean", default=1.0)
        ),
        *FIELD_RANGES["redirect_count"],
    )
    download = rng.uniform() < get_cfg(config, "benign", "download_pct", default=0.03)
    clicks = clamp(
        round_half_up(
            rng.gaussian() * get_cfg(config, "benign", "click_sigma", default=6.0)
            + get_cfg(config, "benign", "click_mean", default=18.0)
        ),
        *FIELD_RANGES["click_count"],
    )
    typing = clamp(
        round_half_up(
            rng.gaussian() * get_cfg(config, "benign", "typing_sigma", default=20.0)
            + get_cfg(config, "benign", "typing_mean", default=55.0)
        ),
        *FIELD_RANGES["typing_events"],
    )
    new_device = rng.uniform() < get_cfg(config, "benign", "new_device_pct", default=0.05)

    min_fraction = get_cfg(config, "benign", "dwell_min_fraction", default=0.25)
    span = get_cfg(config, "benign", "dwell_fraction_span", default=0.30)
    dwell = clamp(int(duration * (min_fraction + span * rng.uniform())), 1, duration)

    return _Features(
        session_duration_sec=duration,
        domain_category=category,
        domain_risk_score=risk,
        redirect_count=redirects,
        download_flag=download,
        click_count=clicks,
        typing_events=typing,
        login_failures=0,
        mfa_challenge=False,
        new_device_login=new_device,
        dwell_time_sec=dwell,
    )


def _apply_malicious_overrides(
    features: _Features,
    rng: RandomSource,
    config: dict | None,
) -> None:
    """
    Replace the benign values with the smash-and-grab regime, in draw order.

    Dwell is recomputed against the new, shorter duration so dwell never
    exceeds duration.
    """
    features.domain_risk_score = round3(
        MALICIOUS_RISK_FLOOR + (1.0 - MALICIOUS_RISK_FLOOR) * rng.uniform()
    )
    features.redirect_count = _int_between(rng, _MALICIOUS_REDIRECTS)
    features.download_flag = True
    features.session_duration_sec = _int_between(rng, MALICIOUS_DURATION_RANGE)
    features.dwell_time_sec = clamp(
        _int_between(rng, _MALICIOUS_DWELL), 1, features.session_duration_sec
    )
    features.click_count = clamp(_int_between(rng, _MALICIOUS_CLICKS), *FIELD_RANGES["click_count"])
    features.typing_events = clamp(_int_between(rng, _MALICIOUS_TYPING), *FIELD_RANGES["typing_events"])
    features.login_failures = _int_between(rng, _MALICIOUS_LOGIN_FAILURES)
    features.mfa_challenge = rng.uniform() < get_cfg(config, "malicious", "mfa_challenge_pct", default=0.60)
    features.new_device_login = rng.uniform() < get_cfg(config, "malicious", "new_device_pct", default=0.30)


# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------
def synthesize(
    profile: UserProfile,
    session_ordinal: int,
    malicious_rate: float,
    rng: RandomSource,
    now: datetime,
    config: dict | None = None,
    id_width: int = MIN_SESSION_ID_WIDTH,
) -> SessionRecord:
    """
    Produce one fully-populated session for ``profile``.

    Draw order: label, timestamp, benign baseline, then malicious overrides
    when labeled malicious. The label is ground truth, not inferred from
    the features.
    """
    malicious = rng.uniform() < malicious_rate
    ts = session_timestamp(profile, rng, now, config)

    features = _benign_baseline(profile, rng, config)
    if malicious:
        _apply_malicious_overrides(features, rng, config)

    return SessionRecord(
        user_id=profile.user_id,
        session_id=format_session_id(session_ordinal, id_width),
        timestamp=ts,
        session_duration_sec=features.session_duration_sec,
        domain_category=features.domain_category,
        domain_risk_score=features.domain_risk_score,
        redirect_count=features.redirect_count,
        dwell_time_sec=features.dwell_time_sec,
        download_flag=features.download_flag,
        click_count=features.click_count,
        typing_events=features.typing_events,
        login_failures=features.login_failures,
        mfa_challenge=features.mfa_challenge,
        new_device_login=features.new_device_login,
        label_malicious=malicious,
    )
