"""Locale helpers for the Indonesian (id-ID) report presentation."""

from __future__ import annotations

import math
from datetime import datetime, timezone
from zoneinfo import ZoneInfo


def round_half_up(value: float) -> int:
    """Round .5 away from zero for positive values, like JavaScript's Math.round."""
    return math.floor(value + 0.5)


def _localize(value: datetime, tz: ZoneInfo | str) -> datetime:
    zone = ZoneInfo(tz) if isinstance(tz, str) else tz
    if value.tzinfo is None:
        value = value.replace(tzinfo=timezone.utc)
    return value.astimezone(zone)


def format_id_date(value: datetime, tz: ZoneInfo | str) -> str:
    """Short id-ID date, e.g. ``5/3/2025`` (day/month/year, no padding)."""
    local = _localize(value, tz)
    return f"{local.day}/{local.month}/{local.year}"


def format_id_datetime(value: datetime, tz: ZoneInfo | str) -> str:
    """id-ID date and time, e.g. ``5/3/2025, 14.05.09``."""
    local = _localize(value, tz)
    return f"{format_id_date(local, local.tzinfo)}, {local:%H.%M.%S}"


__all__ = ["format_id_date", "format_id_datetime", "round_half_up"]
