from __future__ import annotations

import math
from datetime import datetime, time, timezone

from django.utils.dateparse import parse_date, parse_datetime


def _to_number(value: str, *, integer: bool) -> float | None:
    text = value.strip()
    if not text:
        return None
    try:
        number = int(text) if integer else float(text)
    except ValueError:
        return None
    if not math.isfinite(number):
        return None
    return number


def parse_time_to_seconds(value: str | None) -> float | None:
    """Parse ``[H:]MM:SS.ff`` into seconds; ``None`` when the text is not a duration."""
    if not value:
        return None
    parts = value.split(":")
    if len(parts) < 2 or len(parts) > 3:
        return None
    seconds = _to_number(parts[-1], integer=False)
    minutes = _to_number(parts[-2], integer=True)
    hours = _to_number(parts[0], integer=True) if len(parts) == 3 else 0
    if seconds is None or minutes is None or hours is None:
        return None
    return hours * 3600 + minutes * 60 + seconds


def format_seconds(seconds: float) -> str:
    total = max(0.0, float(seconds))
    hours = int(total // 3600)
    minutes = int((total % 3600) // 60)
    secs = f"{total % 60:05.2f}"
    if hours > 0:
        return f"{hours}:{minutes:02d}:{secs}"
    return f"{minutes:02d}:{secs}"


def _parse_moment(value: str) -> datetime | None:
    text = value.strip()
    if not text:
        return None
    try:
        moment = parse_datetime(text)
        if moment is None:
            day = parse_date(text)
            if day is None:
                return None
            moment = datetime.combine(day, time.min)
        if moment.tzinfo is None:
            moment = moment.replace(tzinfo=timezone.utc)
        return moment.astimezone(timezone.utc)
    except (ValueError, OverflowError):
        # impossible (2020-02-30) or outside the calendar once shifted to UTC
        return None


def parse_date_value(value: str | None) -> int | None:
    """Epoch milliseconds (UTC) for an ISO date or datetime string."""
    if not value:
        return None
    moment = _parse_moment(value)
    if moment is None:
        return None
    try:
        return int(round(moment.timestamp() * 1000))
    except (ValueError, OverflowError):
        return None


def format_date(value: str | None) -> str:
    if not value:
        return ""
    moment = _parse_moment(value)
    if moment is None:
        return value
    return moment.date().isoformat()
