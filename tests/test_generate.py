"""Tests for generate.py main entry point."""

from __future__ import annotations

import json
from datetime import datetime, timezone
from pathlib import Path

import pytest

from core.constants import SESSION_FIELDS
from db.repository import SessionRepository
from generate import main, parse_args

NOW = "2026-01-15T12:00:00Z"


def _run(tmp_path: Path, *extra: str, name: str = "out.csv") -> tuple[int, Path]:
    out = tmp_path / name
    code = main(["--users", "3", "--sessions-per-user", "4", "--out", str(out), "--now", NOW, *extra])
    return code, out


def test_parse_args_defaults() -> None:
    args = parse_args([])
    assert args.users == 10
    assert args.sessions_per_user == 20
    assert args.malicious_rate == 0.10
    assert args.seed == 67
    assert args.out == Path("telemetry_raw.csv")
    assert args.format is None
    assert args.now is None


def test_parse_now_accepts_z_suffix() -> None:
    assert parse_args(["--now", NOW]).now == datetime(2026, 1, 15, 12, 0, tzinfo=timezone.utc)


def test_parse_now_rejects_garbage() -> None:
    with pytest.raises(SystemExit) as exc:
        parse_args(["--now", "yesterday"])
    assert exc.value.code == 2


def test_writes_csv(tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
    code, out = _run(tmp_path)
    assert code == 0
    lines = out.read_text(encoding="utf-8").splitlines()
    assert lines[0] == ",".join(SESSION_FIELDS)
    assert len(lines) == 13
    stdout = capsys.readouterr().out
    assert f"Output path: {out}" in stdout
    assert "Wrote 12 sessions" in stdout
    assert "SUMMARY" in stdout
    assert f"Done. Output: {out}" in stdout


def test_reruns_are_byte_identical(tmp_path: Path) -> None:
    _, a = _run(tmp_path, name="a.csv")
    _, b = _run(tmp_path, name="b.csv")
    assert a.read_bytes() == b.read_bytes()


def test_seed_changes_output(tmp_path: Path) -> None:
    _, a = _run(tmp_path, name="a.csv")
    _, b = _run(tmp_path, "--seed", "68", name="b.csv")
    assert a.read_bytes() != b.read_bytes()


def test_all_malicious(tmp_path: Path) -> None:
    code, out = _run(tmp_path, "--malicious-rate", "1.0", name="m.jsonl")
    assert code == 0
    rows = [json.loads(line) for line in out.read_text(encoding="utf-8").splitlines()]
    assert len(rows) == 12
    assert all(r["label_malicious"] is True for r in rows)


def test_sqlite_output(tmp_path: Path) -> None:
    code, out = _run(tmp_path, "--format", "sqlite", name="t.sqlite")
    assert code == 0
    repo = SessionRepository(out)
    try:
        assert repo.count_sessions() == 12
        assert repo.count_profiles() == 3
    finally:
        repo.close()


def test_zero_users_writes_header_only(tmp_path: Path) -> None:
    out = tmp_path / "empty.csv"
    assert main(["--users", "0", "--out", str(out), "--now", NOW]) == 0
    assert out.read_text(encoding="utf-8") == ",".join(SESSION_FIELDS) + "\n"


def test_replaces_existing_output(tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
    out = tmp_path / "out.db"
    out.write_text("stale", encoding="utf-8")
    code, _ = _run(tmp_path, name="out.db")
    assert code == 0
    assert f"Removed previous output: {out}" in capsys.readouterr().out
    repo = SessionRepository(out)
    try:
        assert repo.count_sessions() == 12
    finally:
        repo.close()


@pytest.mark.parametrize(
    "args,message",
    [
        (["--users", "-1"], "num_users=-1"),
        (["--sessions-per-user", "-5"], "sessions_per_user=-5"),
        (["--malicious-rate", "1.5"], "malicious_rate=1.5"),
        (["--malicious-rate", "-0.1"], "malicious_rate=-0.1"),
    ],
)
def test_configuration_error_exit_code(
    tmp_path: Path, capsys: pytest.CaptureFixture[str], args: list[str], message: str
) -> None:
    out = tmp_path / "out.csv"
    assert main([*args, "--out", str(out)]) == 2
    err = capsys.readouterr().err
    assert "Configuration error" in err
    assert message in err
    assert not out.exists()


def test_write_failure_exit_code(tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
    out = tmp_path / "missing" / "out.csv"
    assert main(["--users", "1", "--sessions-per-user", "1", "--out", str(out), "--now", NOW]) == 1
    assert "Write failed" in capsys.readouterr().err
