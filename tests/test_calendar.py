"""날짜 유틸리티 (대실/숙박 점유 구간, 토요일 계산, 표시 형식)"""

from datetime import date, datetime, timezone as dt_timezone

import pytest

from rooms.calendar import (
    format_korean_date,
    format_short_date,
    is_day_use,
    nights,
    occupancy_window,
    occupied_dates,
    occupies,
    stay_label,
    to_date_key,
    to_local_date,
    upcoming_saturday,
    weekday_key,
)


# --- to_local_date ---

def test_to_local_date_accepts_iso_date_string():
    assert to_local_date("2024-06-01") == date(2024, 6, 1)


def test_to_local_date_converts_utc_instant_to_seoul_date():
    # UTC 15:30 은 서울 다음날 00:30
    instant = datetime(2024, 5, 31, 15, 30, tzinfo=dt_timezone.utc)
    assert to_local_date(instant) == date(2024, 6, 1)
    assert to_date_key("2024-05-31T15:30:00Z") == "2024-06-01"


def test_to_local_date_rejects_garbage():
    with pytest.raises(ValueError):
        to_local_date("내일")


# --- 점유 구간 ---

def test_day_use_occupies_only_its_day():
    day = date(2024, 6, 3)
    assert is_day_use(day, day)
    assert occupied_dates(day, day) == [day]
    assert occupies(day, day, day)
    assert not occupies(day, day, date(2024, 6, 4))


def test_stay_occupies_nights_but_not_checkout_day():
    check_in = date(2024, 6, 3)
    check_out = date(2024, 6, 5)
    assert occupied_dates(check_in, check_out) == [date(2024, 6, 3), date(2024, 6, 4)]
    assert not occupies(check_in, check_out, check_out)
    assert nights(check_in, check_out) == 2


def test_inverted_range_occupies_nothing():
    assert occupancy_window(date(2024, 6, 5), date(2024, 6, 3)) is None
    assert occupied_dates(date(2024, 6, 5), date(2024, 6, 3)) == []


# --- 토요일 / 요일 ---

@pytest.mark.parametrize(
    "base, expected",
    [
        (date(2024, 5, 27), date(2024, 6, 1)),  # 월요일
        (date(2024, 5, 31), date(2024, 6, 1)),  # 금요일
        (date(2024, 6, 1), date(2024, 6, 1)),  # 토요일 당일
        (date(2024, 6, 2), date(2024, 6, 8)),  # 일요일
    ],
)
def test_upcoming_saturday(base, expected):
    assert upcoming_saturday(base) == expected


def test_weekday_key():
    assert weekday_key(date(2024, 6, 1)) == "saturday"
    assert weekday_key(date(2024, 6, 3)) == "monday"


# --- 표시 형식 ---

def test_korean_date_formats():
    assert format_korean_date(date(2024, 6, 1)) == "2024년 6월 1일"
    assert format_short_date(date(2024, 6, 1)) == "6/1(토)"


def test_stay_label():
    assert stay_label(date(2024, 6, 1), date(2024, 6, 1)) == "6/1(토) 대실"
    assert stay_label(date(2024, 6, 1), date(2024, 6, 3)) == "6/1(토) ~ 6/3(월) 2박"
