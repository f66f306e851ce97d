from datetime import UTC, date, datetime, timedelta, timezone

import pytest

from pymotorent.exceptions import ValidationError
from pymotorent.util import (
    at_time_of_day,
    coerce_calendar_value,
    format_amount,
    format_utc_timestamp,
    parse_time_of_day,
    parse_timestamp,
)


def test_parse_time_of_day() -> None:
    assert parse_time_of_day("09:05") == (9, 5)
    assert parse_time_of_day(" 7:30 ") == (7, 30)
    assert parse_time_of_day("23:59:59") == (23, 59)


@pytest.mark.parametrize("value", ["", "9", "24:00", "12:60", "ab:cd", None])
def test_parse_time_of_day_invalid(value) -> None:
    with pytest.raises(ValidationError):
        parse_time_of_day(value)


def test_parse_timestamp_converts_offset_to_utc() -> None:
    parsed = parse_timestamp("2024-01-01T12:00:00+02:00")
    assert parsed == datetime(2024, 1, 1, 10, 0, tzinfo=UTC)


def test_parse_timestamp_accepts_zulu_suffix() -> None:
    assert parse_timestamp("2024-01-01T00:00:00.000Z").tzinfo is not None


def test_parse_timestamp_invalid() -> None:
    with pytest.raises(ValidationError):
        parse_timestamp("yesterday")


def test_coerce_calendar_value() -> None:
    assert coerce_calendar_value("2024-02-29") == date(2024, 2, 29)
    assert isinstance(coerce_calendar_value("2024-02-29T10:00:00Z"), datetime)
    with pytest.raises(ValidationError):
        coerce_calendar_value(20240229)


def test_coerce_calendar_value_keeps_offset() -> None:
    value = coerce_calendar_value("2024-01-02T04:00:00+05:30")
    assert value.date() == date(2024, 1, 2)
    assert value.utcoffset() == timedelta(hours=5, minutes=30)


def test_at_time_of_day_zeroes_seconds() -> None:
    value = datetime(2024, 1, 1, 8, 30, 45, 123)
    assert at_time_of_day(value, 10, 15) == datetime(2024, 1, 1, 10, 15)
    assert at_time_of_day(date(2024, 1, 1), 6, 0) == datetime(2024, 1, 1, 6, 0)


def test_format_utc_timestamp() -> None:
    dt = datetime(2024, 1, 1, 12, 0, tzinfo=timezone(timedelta(hours=2)))
    assert format_utc_timestamp(dt) == "2024-01-01T10:00:00Z"
    assert format_utc_timestamp(datetime(2024, 1, 1, 12, 0)) == "2024-01-01T12:00:00"


def test_format_amount_rounds_halves_up() -> None:
    assert format_amount(499.5) == 500
    assert format_amount(499.49) == 499
    assert format_amount(0) == 0
