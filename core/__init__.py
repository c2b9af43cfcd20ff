"""Core domain types shared across data, db, and export."""

from core.constants import (
    DOMAIN_CATEGORIES,
    FIELD_RANGES,
    NUM_USERS,
    SESSION_FIELDS,
    SESSIONS_PER_USER,
)
from core.enums import OutputFormat
from core.errors import ConfigurationError, TelemetryError, WriterError
from core.models import SessionRecord, UserProfile
from core.validate import enforce_label_invariants, validate_dataset

__all__ = [
    "ConfigurationError",
    "DOMAIN_CATEGORIES",
    "enforce_label_invariants",
    "FIELD_RANGES",
    "NUM_USERS",
    "OutputFormat",
    "SESSION_FIELDS",
    "SESSIONS_PER_USER",
    "SessionRecord",
    "TelemetryError",
    "UserProfile",
    "validate_dataset",
    "WriterError",
]
