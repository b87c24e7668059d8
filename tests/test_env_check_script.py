"""Tests for the environment validation and drift detection script."""

from __future__ import annotations

import os
from pathlib import Path

import pytest

from scripts import check_env

SETTINGS_ENV_KEYS = [
    "ANALYSIS_DB_PATH",
    "ANALYSIS_TABLE_NAME",
    "REPORTS_BUCKET",
    "REPORT_SIGNED_URL_TTL",
    "REPORT_TIMEZONE",
]


@pytest.fixture(autouse=True)
def _isolated_environ():
    # check_env copies .env values into os.environ; undo that after each test.
    saved = dict(os.environ)
    yield
    os.environ.clear()
    os.environ.update(saved)


def _write_env(env_path: Path, **values: str) -> None:
    contents = "\n".join(f"{key}={value}" for key, value in values.items())
    env_path.write_text(contents + "\n", encoding="utf-8")


def _clear_settings_env(monkeypatch: pytest.MonkeyPatch) -> None:
    for key in SETTINGS_ENV_KEYS:
        monkeypatch.delenv(key, raising=False)


@pytest.mark.parametrize("command", ["record", "verify", "check"])
def test_main_requires_existing_env_file(tmp_path: Path, command: str) -> None:
    env_file = tmp_path / ".missing-env"
    hash_file = tmp_path / ".env.sha256"

    argv = [command, "--env-file", str(env_file)]
    if command != "check":
        argv.extend(["--hash-file", str(hash_file)])

    exit_code = check_env.main(argv)
    assert exit_code == check_env.EXIT_RUNTIME_ERROR


def test_check_prints_resolved_targets(
    tmp_path: Path, monkeypatch: pytest.MonkeyPatch, capsys: pytest.CaptureFixture[str]
) -> None:
    env_file = tmp_path / ".env"
    _clear_settings_env(monkeypatch)
    _write_env(
        env_file,
        ANALYSIS_DB_PATH="/srv/melonai/analyses.db",
        REPORTS_BUCKET="melonai-reports",
        REPORT_TIMEZONE="Asia/Makassar",
    )

    exit_code = check_env.main(["check", "--env-file", str(env_file)])

    assert exit_code == check_env.EXIT_OK
    output = capsys.readouterr().out
    assert "/srv/melonai/analyses.db" in output
    assert "melonai-reports" in output
    assert "Asia/Makassar" in output


def test_record_and_verify_detects_mismatched_checksum(
    tmp_path: Path, monkeypatch: pytest.MonkeyPatch
) -> None:
    env_file = tmp_path / ".env"
    hash_file = tmp_path / ".env.sha256"

    _clear_settings_env(monkeypatch)
    _write_env(env_file, REPORTS_BUCKET="reports", REPORT_SIGNED_URL_TTL="3600")

    exit_code = check_env.main(
        ["record", "--env-file", str(env_file), "--hash-file", str(hash_file)]
    )
    assert exit_code == check_env.EXIT_OK
    assert hash_file.read_text(encoding="utf-8").strip()

    exit_code = check_env.main(
        ["verify", "--env-file", str(env_file), "--hash-file", str(hash_file)]
    )
    assert exit_code == check_env.EXIT_OK

    _write_env(env_file, REPORTS_BUCKET="other-bucket", REPORT_SIGNED_URL_TTL="3600")
    _clear_settings_env(monkeypatch)

    exit_code = check_env.main(
        ["verify", "--env-file", str(env_file), "--hash-file", str(hash_file)]
    )
    assert exit_code == check_env.EXIT_CHECKSUM_ERROR


def test_verify_without_baseline_is_a_runtime_error(
    tmp_path: Path, monkeypatch: pytest.MonkeyPatch
) -> None:
    env_file = tmp_path / ".env"
    _clear_settings_env(monkeypatch)
    _write_env(env_file, REPORTS_BUCKET="reports")

    exit_code = check_env.main(
        ["verify", "--env-file", str(env_file), "--hash-file", str(tmp_path / "none.sha256")]
    )

    assert exit_code == check_env.EXIT_RUNTIME_ERROR


@pytest.mark.parametrize(
    "bad_value",
    [
        {"REPORT_TIMEZONE": "Mars/Olympus_Mons"},
        {"REPORT_SIGNED_URL_TTL": "0"},
        {"ANALYSIS_TABLE_NAME": "analyses;drop"},
    ],
)
def test_validation_failure_for_invalid_values(
    tmp_path: Path, monkeypatch: pytest.MonkeyPatch, bad_value: dict[str, str]
) -> None:
    env_file = tmp_path / ".env"
    _clear_settings_env(monkeypatch)
    _write_env(env_file, REPORTS_BUCKET="reports", **bad_value)

    exit_code = check_env.main(["check", "--env-file", str(env_file)])

    assert exit_code == check_env.EXIT_VALIDATION_ERROR
