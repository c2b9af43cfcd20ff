"""Persistence layer for generated session telemetry."""

from db.repository import SessionRepository, _dt_to_str, _str_to_dt

__all__ = ["SessionRepository", "_dt_to_str", "_str_to_dt"]
