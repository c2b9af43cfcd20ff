"""
Tests for cross-record validation (core/validate.py).

Tests cover:
  - Relational checks (user refs, duplicate users, session ordering).
  - Category membership and numeric ranges.
  - Benign/malicious regime checks.
"""

import pytest

from conftest import make_malicious_record, make_record
from core.models import UserProfile
from core.validate import enforce_label_invariants, session_ordinal, validate_dataset


@pytest.fixture
def profiles() -> list[UserProfile]:
    return [
        UserProfile(user_id="user_001", preferred_hour=9, avg_session_seconds=600),
        UserProfile(user_id="user_002", preferred_hour=20, avg_session_seconds=300),
    ]


class TestSessionOrdinal:
    @pytest.mark.parametrize("sid,expected", [("sess_00001", 1), ("sess_00042", 42), ("sess_123456", 123456)])
    def test_parses(self, sid: str, expected: int) -> None:
        assert session_ordinal(sid) == expected


class TestValidateDataset:
    def test_valid_dataset_passes(self, profiles) -> None:
        records = [
            make_record(session_id="sess_00001"),
            make_malicious_record(session_id="sess_00002"),
            make_record(user_id="user_002", session_id="sess_00003"),
        ]
        validate_dataset(profiles, records)

    def test_empty_dataset_passes(self) -> None:
        validate_dataset([], [])

    def test_duplicate_user_fails(self, profiles) -> None:
        with pytest.raises(AssertionError, match="Duplicate user_id"):
            validate_dataset(profiles + [profiles[0]], [])

    def test_unknown_user_fails(self, profiles) -> None:
        with pytest.raises(AssertionError, match="non-existent profile"):
            validate_dataset(profiles, [make_record(user_id="user_999")])

    @pytest.mark.parametrize("second", ["sess_00001", "sess_00000"])
    def test_non_increasing_ids_fail(self, profiles, second: str) -> None:
        records = [make_record(session_id="sess_00001"), make_record(session_id=second)]
        with pytest.raises(AssertionError, match="strictly increasing"):
            validate_dataset(profiles, records)

    def test_gaps_in_ids_allowed(self, profiles) -> None:
        records = [make_record(session_id="sess_00001"), make_record(session_id="sess_00007")]
        validate_dataset(profiles, records)

    def test_unknown_category_fails(self, profiles) -> None:
        with pytest.raises(AssertionError, match="domain_category"):
            validate_dataset(profiles, [make_record(domain_category="gambling")])

    def test_custom_categories(self, profiles) -> None:
        records = [make_record(domain_category="gambling")]
        validate_dataset(profiles, records, categories=["gambling"])
        with pytest.raises(AssertionError, match="domain_category"):
            validate_dataset(profiles, [make_record()], categories=["gambling"])

    def test_label_invariants_checked(self, profiles) -> None:
        with pytest.raises(AssertionError, match="benign login_failures"):
            validate_dataset(profiles, [make_record(login_failures=1)])


class TestEnforceLabelInvariants:
    def test_valid_records_pass(self) -> None:
        enforce_label_invariants([make_record(), make_malicious_record()])

    def test_malicious_low_risk_fails(self) -> None:
        with pytest.raises(AssertionError, match="domain_risk_score"):
            enforce_label_invariants([make_malicious_record(domain_risk_score=0.699)])

    def test_malicious_risk_floor_inclusive(self) -> None:
        enforce_label_invariants([make_malicious_record(domain_risk_score=0.7)])

    def test_malicious_few_login_failures_fails(self) -> None:
        with pytest.raises(AssertionError, match="login_failures"):
            enforce_label_invariants([make_malicious_record(login_failures=1)])

    def test_malicious_long_session_fails(self) -> None:
        with pytest.raises(AssertionError, match="session_duration_sec"):
            enforce_label_invariants([make_malicious_record(session_duration_sec=121)])

    def test_malicious_without_download_fails(self) -> None:
        with pytest.raises(AssertionError, match="without download"):
            enforce_label_invariants([make_malicious_record(download_flag=False)])

    def test_benign_mfa_fails(self) -> None:
        with pytest.raises(AssertionError, match="MFA"):
            enforce_label_invariants([make_record(mfa_challenge=True)])

    def test_benign_download_allowed(self) -> None:
        enforce_label_invariants([make_record(download_flag=True, new_device_login=True)])
