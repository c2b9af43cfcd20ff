"""Synthetic session telemetry generation."""

from data.dataset import generate_all, generate_dataset
from data.profiles import generate_profiles
from data.random_source import RandomSource
from data.sessions import synthesize

__all__ = ["generate_all", "generate_dataset", "generate_profiles", "RandomSource", "synthesize"]
