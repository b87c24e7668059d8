"""Verify the report service's environment configuration.

Two checks are available:

1. Settings validation: ``AppSettings`` is built from the supplied ``.env`` file
   so malformed values (an unknown ``REPORT_TIMEZONE``, a non-positive
   ``REPORT_SIGNED_URL_TTL``, a table name that is not an identifier) are caught
   before the API starts answering report requests.
2. Drift detection: a SHA256 checksum of the ``.env`` file can be recorded and
   later compared, so unexpected edits are noticed.

Example usages::

    python -m scripts.check_env check --env-file /srv/melonai/.env
    python -m scripts.check_env record --env-file /srv/melonai/.env \
        --hash-file /srv/melonai/.env.sha256
    python -m scripts.check_env verify --env-file /srv/melonai/.env \
        --hash-file /srv/melonai/.env.sha256
"""

from __future__ import annotations

import argparse
import hashlib
import sys
from pathlib import Path
from typing import Callable

from pydantic import ValidationError

from melon_reports.core.config import AppSettings, _load_env_file

EXIT_OK = 0
EXIT_VALIDATION_ERROR = 2
EXIT_CHECKSUM_ERROR = 3
EXIT_RUNTIME_ERROR = 5


def _compute_hash(env_file: Path) -> str:
    return hashlib.sha256(env_file.read_bytes()).hexdigest()


def _load_settings(env_file: Path) -> AppSettings:
    """Build settings with ``env_file`` applied on top of the process env."""
    _load_env_file(str(env_file))
    return AppSettings(_env_file=env_file)


def _describe(settings: AppSettings) -> str:
    return (
        f"analysis store: {settings.analysis_store.db_path} "
        f"(table {settings.analysis_store.table_name})\n"
        f"reports bucket: {settings.storage.bucket_name} "
        f"[{settings.storage.region_name}], links valid "
        f"{settings.storage.signed_url_ttl_seconds}s\n"
        f"report timezone: {settings.report.timezone}"
    )


def _print_summary(settings: AppSettings) -> int:
    print(_describe(settings))
    return EXIT_OK


def _record_checksum(env_file: Path, hash_file: Path) -> int:
    checksum = _compute_hash(env_file)
    hash_file.write_text(f"{checksum}\n", encoding="utf-8")
    print(f"Recorded checksum to {hash_file} ({checksum})")
    return EXIT_OK


def _verify_checksum(env_file: Path, hash_file: Path) -> int:
    if not hash_file.exists():
        print(
            f"Checksum baseline {hash_file} not found. "
            "Run the 'record' command first.",
            file=sys.stderr,
        )
        return EXIT_RUNTIME_ERROR

    expected = hash_file.read_text(encoding="utf-8").strip()
    actual = _compute_hash(env_file)
    if expected != actual:
        print(
            "Environment checksum mismatch!\n"
            f"  expected: {expected}\n"
            f"  actual:   {actual}",
            file=sys.stderr,
        )
        return EXIT_CHECKSUM_ERROR

    print("Environment checksum OK.")
    return EXIT_OK


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Validate report service settings and detect .env drift."
    )
    subparsers = parser.add_subparsers(dest="command", required=True)

    for name, help_text, needs_hash in (
        ("check", "Validate settings and print the resolved targets.", False),
        ("record", "Validate settings and store the checksum baseline.", True),
        ("verify", "Validate settings and compare against the baseline.", True),
    ):
        subparser = subparsers.add_parser(name, help=help_text)
        subparser.add_argument(
            "--env-file",
            default=".env",
            type=Path,
            help="Path to the environment file (default: .env).",
        )
        if needs_hash:
            subparser.add_argument(
                "--hash-file",
                required=True,
                type=Path,
                help="Checksum baseline location.",
            )

    return parser


def main(argv: list[str] | None = None) -> int:
    args = _build_parser().parse_args(argv)
    env_file: Path = args.env_file

    if not env_file.exists():
        print(f"Environment file {env_file} does not exist.", file=sys.stderr)
        return EXIT_RUNTIME_ERROR

    try:
        settings = _load_settings(env_file)
    except ValidationError as exc:
        print(
            "Settings validation failed:\n" f"{exc.json(indent=2)}",
            file=sys.stderr,
        )
        return EXIT_VALIDATION_ERROR

    handlers: dict[str, Callable[[], int]] = {
        "check": lambda: _print_summary(settings),
        "record": lambda: _record_checksum(env_file, args.hash_file),
        "verify": lambda: _verify_checksum(env_file, args.hash_file),
    }
    return handlers[args.command]()


if __name__ == "__main__":  # pragma: no cover - script entry point
    sys.exit(main())
