try:
    from . import _bootstrap  # noqa: F401
except Exception:  # pragma: no cover - fallback for direct execution
    import _bootstrap  # type: ignore # noqa: F401

from datetime import datetime, timezone

import pytest

from melon_reports.utils.formatting import format_id_date, format_id_datetime, round_half_up


@pytest.mark.parametrize(
    ("value", "expected"),
    [(0.5, 1), (1.5, 2), (2.5, 3), (33.333, 33), (66.667, 67), (12.5, 13), (0.0, 0)],
)
def test_round_half_up_matches_js_math_round(value: float, expected: int) -> None:
    assert round_half_up(value) == expected


def test_dates_are_shown_in_report_timezone() -> None:
    instant = datetime(2025, 3, 4, 18, 30, tzinfo=timezone.utc)

    assert format_id_date(instant, "Asia/Jakarta") == "5/3/2025"
    assert format_id_date(instant, "UTC") == "4/3/2025"


def test_naive_values_are_treated_as_utc() -> None:
    assert format_id_date(datetime(2025, 12, 31, 17, 0), "Asia/Jakarta") == "1/1/2026"


def test_datetime_uses_dotted_time() -> None:
    instant = datetime(2025, 3, 5, 7, 5, 9, tzinfo=timezone.utc)

    assert format_id_datetime(instant, "Asia/Jakarta") == "5/3/2025, 14.05.09"
