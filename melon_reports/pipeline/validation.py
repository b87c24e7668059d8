"""Turn a raw JSON body into a ``ReportRequest``."""

from __future__ import annotations

from datetime import datetime, timezone
from typing import Any, Optional

from melon_reports.core.errors import MissingParametersError
from melon_reports.schemas import ReportRequest


def _parse_instant(field: str, value: Any) -> datetime:
    if not isinstance(value, str):
        raise MissingParametersError(details=f"{field} must be an ISO-8601 string")
    try:
        parsed = datetime.fromisoformat(value.strip())
    except ValueError as exc:
        raise MissingParametersError(
            details=f"{field} is not a valid ISO-8601 date: {value!r}"
        ) from exc
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed


def _optional_filter(field: str, value: Any) -> Optional[str]:
    if value is None or value == "":
        return None
    if not isinstance(value, str):
        raise MissingParametersError(details=f"{field} must be a string")
    return value


def parse_report_request(payload: Any) -> ReportRequest:
    """Validate the request body.

    Both dates are required; their relative order is not checked. An empty
    string counts as absent for every field.
    """
    if not isinstance(payload, dict):
        raise MissingParametersError(details="Request body must be a JSON object")

    start_raw = payload.get("startDate")
    end_raw = payload.get("endDate")
    if not start_raw or not end_raw:
        missing = [name for name, raw in (("startDate", start_raw), ("endDate", end_raw)) if not raw]
        raise MissingParametersError(details=f"Missing: {', '.join(missing)}")

    return ReportRequest(
        start_date=_parse_instant("startDate", start_raw),
        end_date=_parse_instant("endDate", end_raw),
        location=_optional_filter("location", payload.get("location")),
        fruit_type=_optional_filter("fruitType", payload.get("fruitType")),
        fruit_variety=_optional_filter("fruitVariety", payload.get("fruitVariety")),
    )


__all__ = ["parse_report_request"]
