"""
System-wide constants for the telemetry generator.

Candidate sets, clamp ranges, output field order, and generation defaults.
"""

from __future__ import annotations

# ---------------------------------------------------------------------------
# User routine candidates (used by profiles)
# ---------------------------------------------------------------------------

PREFERRED_HOURS = (8, 9, 10, 13, 18, 20, 22)

AVG_SESSION_SECONDS = (180, 300, 600, 900, 1200)  # 3m..20m

DOMAIN_CATEGORIES = (
    "email", "shopping", "social", "news", "dev", "finance", "health", "travel",
)

# ---------------------------------------------------------------------------
# Clamp ranges (inclusive). Apply to both benign and malicious regimes.
# ---------------------------------------------------------------------------

BENIGN_DURATION_RANGE = (30, 3600)
MALICIOUS_DURATION_RANGE = (20, 120)
MALICIOUS_RISK_FLOOR = 0.7
MALICIOUS_MIN_LOGIN_FAILURES = 2

FIELD_RANGES: dict[str, tuple[float, float]] = {
    "session_duration_sec": (MALICIOUS_DURATION_RANGE[0], BENIGN_DURATION_RANGE[1]),
    "domain_risk_score": (0.0, 1.0),
    "redirect_count": (0, 10),
    "click_count": (0, 80),
    "typing_events": (0, 300),
}

# ---------------------------------------------------------------------------
# Output schema (column order is part of the output contract)
# ---------------------------------------------------------------------------

SESSION_FIELDS = (
    "user_id",
    "session_id",
    "timestamp",
    "session_duration_sec",
    "domain_category",
    "domain_risk_score",
    "redirect_count",
    "dwell_time_sec",
    "download_flag",
    "click_count",
    "typing_events",
    "login_failures",
    "mfa_challenge",
    "new_device_login",
    "label_malicious",
)

STRING_FIELDS = frozenset({"user_id", "session_id", "timestamp", "domain_category"})
BOOL_FIELDS = frozenset({"download_flag", "mfa_challenge", "new_device_login", "label_malicious"})
FLOAT_FIELDS = frozenset({"domain_risk_score"})
INT_FIELDS = frozenset(SESSION_FIELDS) - STRING_FIELDS - BOOL_FIELDS - FLOAT_FIELDS

TIMESTAMP_FORMAT = "%Y-%m-%dT%H:%M:%SZ"

USER_ID_PREFIX = "user_"
SESSION_ID_PREFIX = "sess_"
MIN_USER_ID_WIDTH = 3
MIN_SESSION_ID_WIDTH = 5

# ---------------------------------------------------------------------------
# Generation defaults
# ---------------------------------------------------------------------------

DEFAULT_SEED = 67
NUM_USERS = 10
SESSIONS_PER_USER = 20
MALICIOUS_RATE = 0.10
DEFAULT_OUT_FILE = "telemetry_raw.csv"
