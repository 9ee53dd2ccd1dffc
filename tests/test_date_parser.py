"""Tests for date parser with relative dates."""

import pytest
from datetime import date, datetime, timedelta
from dateutil.relativedelta import relativedelta
from tillbook.utils.date_parser import parse_date, parse_datetime, get_date_range


def test_parse_absolute_date():
    """Test parsing absolute dates."""
    result = parse_date("2024-01-15")
    assert result == date(2024, 1, 15)


def test_parse_today():
    """Test parsing 'today'."""
    assert parse_date("today") == date.today()
    assert parse_date(" Today ") == date.today()


def test_parse_yesterday():
    """Test parsing 'yesterday'."""
    assert parse_date("yesterday") == date.today() - timedelta(days=1)


def test_parse_tomorrow():
    """Test parsing 'tomorrow'."""
    assert parse_date("tomorrow") == date.today() + timedelta(days=1)


def test_parse_standard_formats():
    """Test formats dateutil understands."""
    assert parse_date("Jan 15 2024") == date(2024, 1, 15)
    assert parse_date("2024/01/15") == date(2024, 1, 15)


def test_parse_invalid_date():
    with pytest.raises(ValueError):
        parse_date("not-a-date")


def test_parse_datetime_with_time():
    assert parse_datetime("2024-03-01 14:30") == datetime(2024, 3, 1, 14, 30)


def test_parse_datetime_bare_date_is_midnight():
    assert parse_datetime("2024-03-01") == datetime(2024, 3, 1, 0, 0)
    assert parse_datetime("yesterday") == datetime.combine(date.today() - timedelta(days=1), datetime.min.time())


def test_parse_datetime_now():
    result = parse_datetime("now")
    assert abs(datetime.now() - result) < timedelta(minutes=1)
    assert result.microsecond == 0


def test_parse_datetime_invalid():
    with pytest.raises(ValueError):
        parse_datetime("whenever")


def test_get_date_range_today():
    assert get_date_range("today") == (date.today(), date.today())


def test_get_date_range_yesterday():
    yesterday = date.today() - timedelta(days=1)
    assert get_date_range("yesterday") == (yesterday, yesterday)


def test_get_date_range_this_month():
    """Test getting date range for 'this-month'."""
    start, end = get_date_range("this-month")
    today = date.today()
    assert start == date(today.year, today.month, 1)
    assert end == today


def test_get_date_range_this_week():
    """Test getting date range for 'this-week'."""
    start, end = get_date_range("this-week")
    today = date.today()
    assert start == today - timedelta(days=today.weekday())
    assert start.weekday() == 0
    assert end == today


def test_get_date_range_last_month():
    """Test getting date range for 'last-month'."""
    start, end = get_date_range("last-month")
    today = date.today()
    expected_start = (today - relativedelta(months=1)).replace(day=1)
    assert start == expected_start
    assert end == today.replace(day=1) - timedelta(days=1)
    assert end.month == start.month


def test_get_date_range_last_week():
    """Test getting date range for 'last-week'."""
    start, end = get_date_range("last-week")
    assert start.weekday() == 0
    assert end.weekday() == 6
    assert (end - start).days == 6
    assert end < date.today() - timedelta(days=date.today().weekday()) + timedelta(days=1)


def test_get_date_range_invalid_period():
    """Test getting date range for invalid period."""
    with pytest.raises(ValueError, match="Unknown period"):
        get_date_range("next-decade")
