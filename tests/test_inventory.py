"""
재고 계산

- 실재고 = max(0, 기본재고 + 조정치)
- 판매수는 pending / confirmed 예약만 센다
- 숙박은 체크아웃 날짜를 점유하지 않는다
"""

from datetime import date
from types import SimpleNamespace

import pytest
from rest_framework.exceptions import NotFound, ValidationError

from rooms.inventory import (
    daily_inventory,
    effective_inventory,
    is_room_available,
    remaining,
    set_adjustment,
    sold_count,
)

from .memory_store import MemoryStore


@pytest.fixture
def store():
    return MemoryStore()


def book(store, room, check_in, check_out, status="pending"):
    return store.add_reservation(
        room=room,
        check_in=check_in,
        check_out=check_out,
        status=status,
        customer=SimpleNamespace(user_id=None),
    )


# --- 순수 계산 ---

def test_effective_inventory_applies_matching_adjustments_only(store):
    room = store.add_room(inventory=2)
    adjustments = [
        SimpleNamespace(room_id=room.room_id, date=date(2024, 6, 1), delta=-1),
        SimpleNamespace(room_id=room.room_id, date=date(2024, 6, 2), delta=3),
        SimpleNamespace(room_id=999, date=date(2024, 6, 1), delta=5),
    ]
    assert effective_inventory(room, date(2024, 6, 1), adjustments) == 1
    assert effective_inventory(room, date(2024, 6, 2), adjustments) == 5
    assert effective_inventory(room, date(2024, 6, 3), adjustments) == 2


def test_effective_inventory_never_negative(store):
    room = store.add_room(inventory=1)
    adjustments = [SimpleNamespace(room_id=room.room_id, date=date(2024, 6, 1), delta=-5)]
    assert effective_inventory(room, date(2024, 6, 1), adjustments) == 0


def test_sold_count_ignores_cancelled_and_rejected(store):
    room = store.add_room(inventory=5)
    book(store, room, date(2024, 6, 1), date(2024, 6, 2), status="pending")
    book(store, room, date(2024, 6, 1), date(2024, 6, 2), status="confirmed")
    for status in ("rejected", "cancelled_by_guest", "cancelled_by_admin"):
        book(store, room, date(2024, 6, 1), date(2024, 6, 2), status=status)

    reservations = store.get_reservations()
    assert sold_count(reservations, room.room_id, date(2024, 6, 1)) == 2
    assert sold_count(reservations, room.room_id, date(2024, 6, 2)) == 0


def test_two_night_stay_does_not_occupy_checkout_day(store):
    room = store.add_room(inventory=1)
    book(store, room, date(2024, 2, 1), date(2024, 2, 3))
    reservations = store.get_reservations()
    assert sold_count(reservations, room.room_id, date(2024, 2, 1)) == 1
    assert sold_count(reservations, room.room_id, date(2024, 2, 2)) == 1
    assert sold_count(reservations, room.room_id, date(2024, 2, 3)) == 0


def test_remaining(store):
    room = store.add_room(inventory=2)
    book(store, room, date(2024, 6, 1), date(2024, 6, 1))
    assert remaining(room, date(2024, 6, 1), store.get_reservations(), []) == 1


# --- is_room_available ---

def test_single_room_fills_and_exclusion_frees_it(store):
    room = store.add_room(inventory=1)
    assert is_room_available(room.room_id, "2024-06-01", "2024-06-02", store=store)

    first = book(store, room, date(2024, 6, 1), date(2024, 6, 2))
    assert not is_room_available(room.room_id, "2024-06-01", "2024-06-02", store=store)
    assert is_room_available(
        room.room_id,
        "2024-06-01",
        "2024-06-02",
        exclude_reservation_id=first.reservation_id,
        store=store,
    )


def test_checkout_day_stays_sellable(store):
    room = store.add_room(inventory=1)
    book(store, room, date(2024, 6, 1), date(2024, 6, 3))
    assert is_room_available(room.room_id, "2024-06-03", "2024-06-04", store=store)
    assert not is_room_available(room.room_id, "2024-06-02", "2024-06-02", store=store)


def test_every_night_must_be_free(store):
    room = store.add_room(inventory=1)
    store.set_room_inventory_adjustment(room.room_id, date(2024, 6, 2), -1)
    assert is_room_available(room.room_id, "2024-06-01", "2024-06-02", store=store)
    assert not is_room_available(room.room_id, "2024-06-01", "2024-06-03", store=store)


def test_positive_adjustment_adds_capacity(store):
    room = store.add_room(inventory=1)
    book(store, room, date(2024, 6, 1), date(2024, 6, 1))
    store.set_room_inventory_adjustment(room.room_id, date(2024, 6, 1), 1)
    assert is_room_available(room.room_id, "2024-06-01", "2024-06-01", store=store)


@pytest.mark.parametrize(
    "check_in, check_out",
    [("2024-06-03", "2024-06-01"), ("없는날짜", "2024-06-01")],
)
def test_invalid_or_inverted_dates_are_unavailable(store, check_in, check_out):
    room = store.add_room(inventory=3)
    assert not is_room_available(room.room_id, check_in, check_out, store=store)


def test_unknown_or_empty_room_is_unavailable(store):
    empty = store.add_room(inventory=0)
    assert not is_room_available(empty.room_id, "2024-06-01", "2024-06-01", store=store)
    assert not is_room_available(12345, "2024-06-01", "2024-06-01", store=store)


# --- set_adjustment ---

def test_set_adjustment_rejects_below_sold(store):
    room = store.add_room(inventory=2)
    book(store, room, date(2024, 6, 1), date(2024, 6, 1))
    book(store, room, date(2024, 6, 1), date(2024, 6, 1), status="confirmed")

    with pytest.raises(ValidationError):
        set_adjustment(room.room_id, "2024-06-01", -1, store=store)
    assert store.get_room_inventory_adjustment(room.room_id, date(2024, 6, 1)) == 0


def test_set_adjustment_zero_removes_record(store):
    room = store.add_room(inventory=2)
    set_adjustment(room.room_id, "2024-06-01", -1, store=store)
    assert store.get_room_inventory_adjustment(room.room_id, date(2024, 6, 1)) == -1

    set_adjustment(room.room_id, "2024-06-01", 0, store=store)
    assert store.get_room_inventory_adjustments(room_id=room.room_id) == []


def test_set_adjustment_unknown_room(store):
    with pytest.raises(NotFound):
        set_adjustment(42, "2024-06-01", 1, store=store)


def test_set_adjustment_bad_delta(store):
    room = store.add_room(inventory=2)
    with pytest.raises(ValidationError):
        set_adjustment(room.room_id, "2024-06-01", "many", store=store)


# --- daily_inventory ---

def test_daily_inventory_summary(store):
    room = store.add_room(inventory=3, room_type="디럭스")
    book(store, room, date(2024, 6, 1), date(2024, 6, 2))
    store.set_room_inventory_adjustment(room.room_id, date(2024, 6, 1), -1)

    (row,) = daily_inventory("2024-06-01", store=store)
    assert row == {
        "room_id": room.room_id,
        "room_type": "디럭스",
        "date": "2024-06-01",
        "inventory": 3,
        "delta": -1,
        "effective_inventory": 2,
        "sold": 1,
        "remaining": 1,
    }
