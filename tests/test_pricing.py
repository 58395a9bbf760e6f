"""요일별 가격 계산과 챗봇 할인가"""

from datetime import date
from types import SimpleNamespace

import pytest

from rooms.calendar import WEEKDAY_KEYS
from rooms.pricing import (
    apply_discount,
    discount_rate_for,
    quote_total_price,
    validate_prices,
)

from .conftest import make_prices


def make_room(prices=None, discount_rate=None):
    return SimpleNamespace(prices=prices or make_prices(), discount_rate=discount_rate)


# --- validate_prices ---

def test_complete_price_table_is_valid():
    assert validate_prices(make_prices()) is None


def test_missing_weekday_is_reported():
    prices = make_prices()
    del prices["sunday"]
    assert "sunday" in validate_prices(prices)


@pytest.mark.parametrize("bad", [-1, "50000", None, 1.5, True])
def test_price_must_be_non_negative_int(bad):
    prices = make_prices()
    prices["monday"]["stay_price"] = bad
    assert validate_prices(prices) is not None


def test_prices_must_be_object():
    assert validate_prices([]) is not None


# --- quote_total_price ---

def test_day_use_uses_checkin_weekday_day_use_price():
    room = make_room(make_prices(stay=50000, day_use=30000))
    assert quote_total_price(room, date(2024, 6, 3), date(2024, 6, 3)) == 30000


def test_stay_sums_each_night_by_weekday():
    # 금(50000) + 토(80000), 일요일 체크아웃은 포함하지 않음
    room = make_room(make_prices(stay=50000, saturday_stay=80000))
    assert quote_total_price(room, date(2024, 5, 31), date(2024, 6, 2)) == 130000


def test_quote_uses_every_weekday_key():
    prices = {key: {"stay_price": (i + 1) * 1000, "day_use_price": 0} for i, key in enumerate(WEEKDAY_KEYS)}
    room = make_room(prices)
    # 2024-06-03(월) ~ 2024-06-10(월): 7박
    assert quote_total_price(room, date(2024, 6, 3), date(2024, 6, 10)) == sum(
        (i + 1) * 1000 for i in range(7)
    )


# --- 할인 ---

def test_discount_rate_defaults_to_setting(settings):
    settings.CHATBOT_DEFAULT_DISCOUNT_RATE = 10
    assert discount_rate_for(make_room()) == 10
    assert discount_rate_for(make_room(discount_rate=0)) == 0
    assert discount_rate_for(make_room(discount_rate=25)) == 25


def test_apply_discount_floors_to_hundred_won():
    assert apply_discount(50000, 10) == 45000
    assert apply_discount(33333, 10) == 29900
    assert apply_discount(50000, 0) == 50000
