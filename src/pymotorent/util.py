"""Shared utilities for validation and normalization."""

from __future__ import annotations

import math
import re
from datetime import UTC, date, datetime

from .exceptions import ValidationError

_TIME_OF_DAY_RE = re.compile(r"^\s*(\d{1,2}):(\d{2})(?::\d{2})?\s*$")


def parse_time_of_day(value: str) -> tuple[int, int]:
    if not isinstance(value, str):
        raise ValidationError("Time of day must be a string.")
    match = _TIME_OF_DAY_RE.match(value)
    if match is None:
        raise ValidationError("Time of day must use the HH:MM format.")
    hours, minutes = int(match.group(1)), int(match.group(2))
    if hours > 23 or minutes > 59:
        raise ValidationError("Time of day is out of range.")
    return hours, minutes


def _parse_iso_datetime(value: str) -> datetime:
    if not isinstance(value, str) or not value:
        raise ValidationError("Timestamp must be a non-empty string.")
    raw = value.strip()
    if raw.endswith("Z"):
        raw = f"{raw[:-1]}+00:00"
    try:
        return datetime.fromisoformat(raw)
    except ValueError as exc:
        raise ValidationError("Timestamp is not a valid ISO 8601 value.") from exc


def parse_timestamp(value: str) -> datetime:
    parsed = _parse_iso_datetime(value)
    if parsed.tzinfo is None:
        return parsed
    return parsed.astimezone(UTC)


def coerce_calendar_value(value: date | datetime | str) -> date | datetime:
    """Accept a date, a datetime or an ISO 8601 string.

    Strings keep their own UTC offset so the calendar day is the one written.
    """
    if isinstance(value, datetime | date):
        return value
    if isinstance(value, str):
        stripped = value.strip()
        if len(stripped) == 10:
            try:
                return date.fromisoformat(stripped)
            except ValueError as exc:
                raise ValidationError("Date is not a valid ISO 8601 value.") from exc
        return _parse_iso_datetime(stripped)
    raise ValidationError("Date must be a date, datetime or ISO 8601 string.")


def at_time_of_day(value: date | datetime, hours: int, minutes: int) -> datetime:
    if isinstance(value, datetime):
        return value.replace(hour=hours, minute=minutes, second=0, microsecond=0)
    return datetime(value.year, value.month, value.day, hours, minutes)


def format_utc_timestamp(value: datetime) -> str:
    if value.tzinfo is None:
        return value.replace(microsecond=0).isoformat()
    normalized = value.astimezone(UTC).replace(microsecond=0)
    return normalized.isoformat().replace("+00:00", "Z")


def format_amount(amount: float) -> int:
    """Round halves up, the way amounts are shown to customers."""
    return math.floor(amount + 0.5)
