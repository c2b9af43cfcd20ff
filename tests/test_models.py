"""
Unit tests for domain models: UserProfile, SessionRecord.

Tests cover:
  - Valid construction.
  - Invariant violations.
  - Immutability.
"""

import dataclasses
from datetime import datetime, timezone

import pytest

from conftest import make_malicious_record, make_record
from core.constants import SESSION_FIELDS
from core.models import SessionRecord, UserProfile


# ===================================================================
# UserProfile tests
# ===================================================================
class TestUserProfile:
    def test_valid_creation(self, profile: UserProfile) -> None:
        assert profile.user_id == "user_001"
        assert profile.preferred_hour == 9
        assert profile.avg_session_seconds == 600

    def test_empty_user_id_fails(self) -> None:
        with pytest.raises(AssertionError, match="user_id"):
            UserProfile(user_id="", preferred_hour=9, avg_session_seconds=600)

    @pytest.mark.parametrize("hour", [-1, 24])
    def test_hour_out_of_range_fails(self, hour: int) -> None:
        with pytest.raises(AssertionError, match="preferred_hour"):
            UserProfile(user_id="user_001", preferred_hour=hour, avg_session_seconds=600)

    def test_non_positive_length_fails(self) -> None:
        with pytest.raises(AssertionError, match="avg_session_seconds"):
            UserProfile(user_id="user_001", preferred_hour=9, avg_session_seconds=0)

    def test_frozen(self, profile: UserProfile) -> None:
        with pytest.raises(dataclasses.FrozenInstanceError):
            profile.preferred_hour = 10  # type: ignore[misc]


# ===================================================================
# SessionRecord tests
# ===================================================================
class TestSessionRecord:
    def test_valid_benign(self) -> None:
        r = make_record()
        assert r.label_malicious is False
        assert r.login_failures == 0

    def test_valid_malicious(self) -> None:
        r = make_malicious_record()
        assert r.label_malicious is True
        assert r.download_flag is True

    def test_field_order_matches_output_contract(self) -> None:
        names = tuple(f.name for f in dataclasses.fields(SessionRecord))
        assert names == SESSION_FIELDS
        assert len(names) == 15

    def test_frozen(self) -> None:
        r = make_record()
        with pytest.raises(dataclasses.FrozenInstanceError):
            r.click_count = 3  # type: ignore[misc]

    def test_naive_timestamp_fails(self) -> None:
        with pytest.raises(AssertionError, match="timezone-aware"):
            make_record(timestamp=datetime(2026, 1, 14, 9, 0))

    def test_sub_second_timestamp_fails(self) -> None:
        with pytest.raises(AssertionError, match="second precision"):
            make_record(timestamp=datetime(2026, 1, 14, 9, 0, 0, 500, tzinfo=timezone.utc))

    @pytest.mark.parametrize("duration", [19, 3601])
    def test_duration_out_of_range_fails(self, duration: int) -> None:
        with pytest.raises(AssertionError, match="session_duration_sec"):
            make_record(session_duration_sec=duration, dwell_time_sec=10)

    def test_dwell_exceeding_duration_fails(self) -> None:
        with pytest.raises(AssertionError, match="dwell_time_sec"):
            make_record(session_duration_sec=100, dwell_time_sec=101)

    def test_zero_dwell_fails(self) -> None:
        with pytest.raises(AssertionError, match="dwell_time_sec"):
            make_record(dwell_time_sec=0)

    def test_dwell_equal_to_duration_ok(self) -> None:
        r = make_record(session_duration_sec=30, dwell_time_sec=30)
        assert r.dwell_time_sec == r.session_duration_sec

    @pytest.mark.parametrize("score", [-0.001, 1.001])
    def test_risk_out_of_range_fails(self, score: float) -> None:
        with pytest.raises(AssertionError, match="domain_risk_score"):
            make_record(domain_risk_score=score)

    def test_risk_precision_fails(self) -> None:
        with pytest.raises(AssertionError, match="3 decimals"):
            make_record(domain_risk_score=0.1234)

    def test_integer_risk_fails(self) -> None:
        with pytest.raises(AssertionError, match="domain_risk_score"):
            make_record(domain_risk_score=1)

    @pytest.mark.parametrize(
        "field,value",
        [
            ("redirect_count", 11),
            ("redirect_count", -1),
            ("click_count", 81),
            ("typing_events", 301),
        ],
    )
    def test_counter_out_of_range_fails(self, field: str, value: int) -> None:
        with pytest.raises(AssertionError, match=field):
            make_record(**{field: value})

    def test_negative_login_failures_fails(self) -> None:
        with pytest.raises(AssertionError, match="login_failures"):
            make_record(login_failures=-1)

    def test_non_bool_flag_fails(self) -> None:
        with pytest.raises(AssertionError, match="download_flag must be a boolean"):
            make_record(download_flag=1)

    def test_empty_category_fails(self) -> None:
        with pytest.raises(AssertionError, match="domain_category"):
            make_record(domain_category="")
