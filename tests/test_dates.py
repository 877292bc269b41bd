from datetime import date

import pytest

from utils.dates import (
    UNBOUNDED_FROM,
    UNBOUNDED_TO,
    format_display_date,
    from_storage_datetime,
    normalize_from,
    normalize_to,
    parse_date,
    to_storage_datetime,
)


@pytest.mark.parametrize(
    "text, expected",
    [
        ("2020-01-01", date(2020, 1, 1)),
        ("2020-06-15", date(2020, 6, 15)),
        ("2024-02-29", date(2024, 2, 29)),
        (" 2021-01-01 ", date(2021, 1, 1)),
    ],
)
def test_parse_date_valid(text, expected):
    assert parse_date(text) == expected
    assert normalize_from(text) == expected
    assert normalize_to(text) == expected


@pytest.mark.parametrize(
    "text",
    [
        None,
        "",
        "garbage",
        "2020-1-1",
        "2020/01/01",
        "2023-02-29",
        "2020-13-01",
        "20200101",
        "2020-01-01T10:00",
        "٢٠٢٠-01-01",
        "2020-٠1-01",
        "２０２０-01-01",
    ],
)
def test_invalid_or_absent_bounds_are_unbounded(text):
    assert parse_date(text) is None
    assert normalize_from(text) == UNBOUNDED_FROM
    assert normalize_to(text) == UNBOUNDED_TO


def test_sentinels_enclose_every_real_date():
    for real in (date(1, 1, 1), date(1970, 1, 1), date(2020, 6, 15), date(9999, 12, 31)):
        assert normalize_from("nope") <= real <= normalize_to("nope")


def test_invalid_to_is_not_today():
    assert normalize_to("garbage") != date.today()


def test_format_display_date():
    assert format_display_date(date(2020, 1, 1)) == "Wed Jan 01 2020"
    assert format_display_date(date(2021, 3, 15)) == "Mon Mar 15 2021"


def test_storage_datetime_keeps_the_day():
    stored = to_storage_datetime(date(2020, 6, 15))
    assert stored.hour == 0 and stored.minute == 0
    assert from_storage_datetime(stored) == date(2020, 6, 15)
    assert from_storage_datetime(date(2020, 6, 15)) == date(2020, 6, 15)
    assert from_storage_datetime("2020-06-15") == date(2020, 6, 15)


def test_storage_datetime_rejects_garbage():
    with pytest.raises(ValueError):
        from_storage_datetime("not a date")
