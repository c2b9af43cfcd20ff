"""Pytest configuration and shared fixtures for telemetry generator tests."""

from datetime import datetime, timezone

import pytest

from core.models import SessionRecord, UserProfile

FIXED_NOW = datetime(2026, 1, 15, 12, 30, 45, tzinfo=timezone.utc)


def pytest_configure(config: pytest.Config) -> None:
    config.addinivalue_line(
        "markers",
        "slow: marks tests as slow (run with pytest -m slow or pytest --run-slow)",
    )


def pytest_addoption(parser: pytest.Parser) -> None:
    parser.addoption(
        "--run-slow",
        action="store_true",
        default=False,
        help="Run slow tests (disabled by default)",
    )


def pytest_collection_modifyitems(config: pytest.Config, items: list[pytest.Item]) -> None:
    if config.getoption("--run-slow"):
        return
    skip_slow = pytest.mark.skip(reason="slow test (use --run-slow to run)")
    for item in items:
        if "slow" in item.keywords:
            item.add_marker(skip_slow)


# ===================================================================
# Shared fixtures
# ===================================================================
@pytest.fixture
def fixed_now() -> datetime:
    """Time anchor so generated timestamps are reproducible."""
    return FIXED_NOW


@pytest.fixture
def profile() -> UserProfile:
    return UserProfile(user_id="user_001", preferred_hour=9, avg_session_seconds=600)


def make_record(**overrides) -> SessionRecord:
    """Valid benign SessionRecord with optional field overrides."""
    fields = dict(
        user_id="user_001",
        session_id="sess_00001",
        timestamp=datetime(2026, 1, 14, 9, 12, tzinfo=timezone.utc),
        session_duration_sec=600,
        domain_category="news",
        domain_risk_score=0.125,
        redirect_count=1,
        dwell_time_sec=200,
        download_flag=False,
        click_count=18,
        typing_events=55,
        login_failures=0,
        mfa_challenge=False,
        new_device_login=False,
        label_malicious=False,
    )
    fields.update(overrides)
    return SessionRecord(**fields)


def make_malicious_record(**overrides) -> SessionRecord:
    """Valid malicious SessionRecord with optional field overrides."""
    fields = dict(
        session_duration_sec=60,
        domain_risk_score=0.85,
        redirect_count=6,
        dwell_time_sec=20,
        download_flag=True,
        click_count=4,
        typing_events=7,
        login_failures=3,
        mfa_challenge=True,
        new_device_login=True,
        label_malicious=True,
    )
    fields.update(overrides)
    return make_record(**fields)
