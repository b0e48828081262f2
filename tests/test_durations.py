import datetime as dt

import pytest

from durations import InvalidDurationError, format_duration, parse_duration, round_duration


def test_parse_duration_simple_units():
    assert parse_duration("5m") == dt.timedelta(minutes=5)
    assert parse_duration("1h") == dt.timedelta(hours=1)
    assert parse_duration("45s") == dt.timedelta(seconds=45)
    assert parse_duration("300ms") == dt.timedelta(milliseconds=300)
    assert parse_duration("250us") == dt.timedelta(microseconds=250)
    assert parse_duration("250µs") == dt.timedelta(microseconds=250)


def test_parse_duration_compound_and_fractional():
    assert parse_duration("1h30m") == dt.timedelta(hours=1, minutes=30)
    assert parse_duration("2h45m10s") == dt.timedelta(hours=2, minutes=45, seconds=10)
    assert parse_duration("1.5h") == dt.timedelta(minutes=90)
    assert parse_duration(".5m") == dt.timedelta(seconds=30)


def test_parse_duration_sign_and_zero():
    assert parse_duration("0") == dt.timedelta(0)
    assert parse_duration("-2h") == dt.timedelta(hours=-2)
    assert parse_duration("+10s") == dt.timedelta(seconds=10)


@pytest.mark.parametrize("text", ["", "5", "abc", "1x", "1h 30m", ".s", "-", "h"])
def test_parse_duration_rejects_bad_input(text):
    with pytest.raises(InvalidDurationError):
        parse_duration(text)


def test_invalid_duration_is_a_value_error():
    with pytest.raises(ValueError):
        parse_duration("soon")


def test_round_duration_to_minute():
    assert round_duration(dt.timedelta(minutes=4, seconds=30)) == dt.timedelta(minutes=5)
    assert round_duration(dt.timedelta(minutes=4, seconds=29, microseconds=999999)) == dt.timedelta(minutes=4)
    assert round_duration(dt.timedelta(0)) == dt.timedelta(0)
    assert round_duration(dt.timedelta(seconds=29)) == dt.timedelta(0)
    assert round_duration(-dt.timedelta(minutes=4, seconds=30)) == -dt.timedelta(minutes=5)


def test_round_duration_non_positive_unit_is_identity():
    value = dt.timedelta(seconds=95)
    assert round_duration(value, dt.timedelta(0)) == value


def test_format_duration():
    assert format_duration(dt.timedelta(0)) == "0s"
    assert format_duration(dt.timedelta(minutes=5)) == "5m0s"
    assert format_duration(dt.timedelta(hours=1, minutes=30)) == "1h30m0s"
    assert format_duration(dt.timedelta(hours=2)) == "2h0m0s"
    assert format_duration(dt.timedelta(seconds=45)) == "45s"
    assert format_duration(dt.timedelta(seconds=1.5)) == "1.5s"
    assert format_duration(dt.timedelta(milliseconds=250)) == "250ms"
    assert format_duration(dt.timedelta(microseconds=1500)) == "1.5ms"
    assert format_duration(dt.timedelta(microseconds=12)) == "12µs"
    assert format_duration(-dt.timedelta(minutes=5)) == "-5m0s"
    assert format_duration(dt.timedelta(days=1)) == "24h0m0s"


def test_parse_duration_range():
    assert parse_duration("2562047h") == dt.timedelta(hours=2562047)
    with pytest.raises(InvalidDurationError, match="out of range"):
        parse_duration("2562048h")
    with pytest.raises(InvalidDurationError, match="out of range"):
        parse_duration("-100000000h")
