"""
Cross-record and labeling invariant validation.

Validates relational invariants (user_id refs, session ordering) and the
benign/malicious regime invariants on a finished dataset before it is
handed to a writer.
"""

from __future__ import annotations

from collections.abc import Iterable, Sequence

from core.constants import (
    DOMAIN_CATEGORIES,
    FIELD_RANGES,
    MALICIOUS_DURATION_RANGE,
    MALICIOUS_MIN_LOGIN_FAILURES,
    MALICIOUS_RISK_FLOOR,
)
from core.models import SessionRecord, UserProfile


def session_ordinal(session_id: str) -> int:
    """Numeric ordinal of a session id such as 'sess_00042'."""
    return int(session_id.rsplit("_", 1)[-1])


def enforce_label_invariants(records: Iterable[SessionRecord]) -> None:
    """
    Validate that each record matches the regime its label claims.

    Malicious: domain_risk_score >= 0.7, login_failures >= 2,
    session_duration_sec in [20, 120], download_flag set.
    Benign: login_failures == 0, no MFA challenge, duration >= 30.
    Raises AssertionError on violation.
    """
    for r in records:
        if r.label_malicious:
            if r.domain_risk_score < MALICIOUS_RISK_FLOOR:
                raise AssertionError(
                    f"Session {r.session_id}: malicious domain_risk_score "
                    f"{r.domain_risk_score} < {MALICIOUS_RISK_FLOOR}"
                )
            if r.login_failures < MALICIOUS_MIN_LOGIN_FAILURES:
                raise AssertionError(
                    f"Session {r.session_id}: malicious login_failures {r.login_failures} "
                    f"< {MALICIOUS_MIN_LOGIN_FAILURES}"
                )
            lo, hi = MALICIOUS_DURATION_RANGE
            if not lo <= r.session_duration_sec <= hi:
                raise AssertionError(
                    f"Session {r.session_id}: malicious session_duration_sec "
                    f"{r.session_duration_sec} outside [{lo}, {hi}]"
                )
            if not r.download_flag:
                raise AssertionError(f"Session {r.session_id}: malicious session without download")
        else:
            if r.login_failures != 0:
                raise AssertionError(
                    f"Session {r.session_id}: benign login_failures must be 0, got {r.login_failures}"
                )
            if r.mfa_challenge:
                raise AssertionError(f"Session {r.session_id}: benign session with MFA challenge")


def validate_dataset(
    profiles: Sequence[UserProfile],
    records: Sequence[SessionRecord],
    categories: Iterable[str] = DOMAIN_CATEGORIES,
) -> None:
    """
    Validate cross-record invariants on a generated dataset.

    Checks:
      - user_id is unique across profiles.
      - Every record.user_id exists in profiles.
      - session_id is unique and strictly increasing in generation order.
      - domain_category is a member of the category enumeration.
      - Every numeric field lies in its clamp range, dwell within duration.
      - Labels agree with the benign/malicious regimes.
    Raises AssertionError on violation.
    """
    user_ids: set[str] = set()
    for p in profiles:
        assert p.user_id not in user_ids, f"Duplicate user_id: {p.user_id!r}"
        user_ids.add(p.user_id)

    allowed = frozenset(categories)
    prev_ordinal = 0
    for r in records:
        assert r.user_id in user_ids, (
            f"Session {r.session_id}: user_id {r.user_id!r} references non-existent profile"
        )
        ordinal = session_ordinal(r.session_id)
        if ordinal <= prev_ordinal:
            raise AssertionError(
                f"Session {r.session_id}: session ids must be strictly increasing "
                f"(previous ordinal {prev_ordinal})"
            )
        prev_ordinal = ordinal
        assert r.domain_category in allowed, (
            f"Session {r.session_id}: domain_category {r.domain_category!r} not in {sorted(allowed)}"
        )
        for name, (lo, hi) in FIELD_RANGES.items():
            value = getattr(r, name)
            assert lo <= value <= hi, (
                f"Session {r.session_id}: {name}={value} outside [{lo}, {hi}]"
            )
        assert 0 < r.dwell_time_sec <= r.session_duration_sec, (
            f"Session {r.session_id}: dwell_time_sec {r.dwell_time_sec} "
            f"not in (0, {r.session_duration_sec}]"
        )

    enforce_label_invariants(records)
