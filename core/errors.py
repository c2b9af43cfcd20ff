"""Exception types raised at the configuration and output edges."""

from __future__ import annotations


class TelemetryError(Exception):
    """Base class for telemetry generator errors."""


class ConfigurationError(TelemetryError, ValueError):
    """Invalid generation parameters; raised before any record is produced."""


class WriterError(TelemetryError, OSError):
    """Serialization or persistence of a finished dataset failed."""
