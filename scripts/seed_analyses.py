"""Load analysis records from a JSON file into the SQLite analysis store.

The file holds a list of objects shaped like the analyses table, e.g.::

    [{"id": "a-1", "created_at": "2025-03-05T08:00:00Z", "location": "Bogor",
      "watermelon_type": "merah:sugar baby", "maturity_status": "Matang",
      "confidence": 91, "sweetness_level": 8, "skin_quality": "baik"}]

Usage::

    python -m scripts.seed_analyses data/sample_analyses.json
"""

from __future__ import annotations

import argparse
import json
import logging
import sys
from pathlib import Path

from pydantic import ValidationError

from melon_reports.clients import AnalysisStore, AnalysisStoreError
from melon_reports.core.config import get_settings
from melon_reports.core.logging import configure_logging
from melon_reports.schemas import AnalysisRecord

logger = logging.getLogger(__name__)


def load_records(path: Path) -> list[AnalysisRecord]:
    raw = json.loads(path.read_text(encoding="utf-8"))
    if not isinstance(raw, list):
        raise ValueError(f"{path} must contain a JSON list of analysis records")
    return [AnalysisRecord(**item) for item in raw]


def seed(store: AnalysisStore, records: list[AnalysisRecord]) -> int:
    """Insert ``records`` as one batch; returns how many were written."""
    return store.insert_analyses(records)


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(description="Seed the analysis store from JSON.")
    parser.add_argument("source", type=Path, help="JSON file with analysis records.")
    parser.add_argument(
        "--db-path",
        default=None,
        help="SQLite file to write (default: ANALYSIS_DB_PATH).",
    )
    args = parser.parse_args(argv)

    settings = get_settings()
    configure_logging(settings.log_level)
    store = AnalysisStore(
        args.db_path or settings.analysis_store.db_path,
        table_name=settings.analysis_store.table_name,
    )

    try:
        records = load_records(args.source)
        written = seed(store, records)
    except (OSError, ValueError, ValidationError, AnalysisStoreError) as exc:
        logger.error("Seeding failed: %s", exc)
        return 1

    logger.info("Seeded %d analyses (store now holds %d)", written, store.count_analyses())
    return 0


if __name__ == "__main__":  # pragma: no cover - script entry point
    sys.exit(main())
