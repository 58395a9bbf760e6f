"""
재고 계산

재고는 예약 시 차감하지 않고 조회할 때마다 계산한다.

    실재고(effective) = max(0, 기본재고 + 해당 날짜 조정치 합)
    판매수(sold)      = 해당 날짜를 점유하는 pending/confirmed 예약 수
    잔여(remaining)   = max(0, 실재고 - 판매수)

숙박은 모든 박이 비어 있어야 예약 가능하다.
"""

from rest_framework.exceptions import NotFound, ValidationError

from rooms.calendar import occupancy_window, occupied_dates, occupies, to_local_date

from logger import get_logger

logger = get_logger("hoteldesk.rooms")

EFFECTIVE_STATUSES = ("pending", "confirmed")


def _default_store():
    from reservations.store import get_store

    return get_store()


def effective_inventory(room, day, adjustments):
    day = to_local_date(day)
    delta = sum(
        adj.delta
        for adj in adjustments
        if adj.room_id == room.room_id and to_local_date(adj.date) == day
    )
    return max(0, room.inventory + delta)


def sold_count(reservations, room_id, day, exclude_reservation_id=None):
    count = 0
    for reservation in reservations:
        if reservation.room_id != room_id:
            continue
        if reservation.status not in EFFECTIVE_STATUSES:
            continue
        if (
            exclude_reservation_id is not None
            and reservation.reservation_id == exclude_reservation_id
        ):
            continue
        if occupies(reservation.check_in, reservation.check_out, day):
            count += 1
    return count


def remaining(room, day, reservations, adjustments):
    return max(
        0,
        effective_inventory(room, day, adjustments)
        - sold_count(reservations, room.room_id, day),
    )


def is_room_available(
    room_id, check_in, check_out, exclude_reservation_id=None, store=None
):
    store = store or _default_store()

    room = store.get_room(room_id)
    if room is None or room.inventory <= 0:
        return False

    try:
        window = occupancy_window(check_in, check_out)
    except ValueError:
        return False
    if window is None:
        return False
    start, end = window

    reservations = store.get_reservations(room_id=room_id, statuses=EFFECTIVE_STATUSES)
    adjustments = store.get_room_inventory_adjustments(
        room_id=room_id, start=start, end=end
    )

    for day in occupied_dates(check_in, check_out):
        available = effective_inventory(room, day, adjustments)
        if available <= 0:
            return False
        if sold_count(reservations, room_id, day, exclude_reservation_id) >= available:
            logger.info(f"객실 {room_id} {day} 매진 (재고 {available})")
            return False
    return True


def set_adjustment(room_id, day, delta, store=None):
    """
    (객실, 날짜) 재고 조정치를 저장한다. delta 가 0 이면 조정 레코드를 삭제.
    조정 후 실재고가 이미 팔린 수보다 작아지면 ValidationError.
    """
    store = store or _default_store()

    room = store.get_room(room_id)
    if room is None:
        raise NotFound("객실을 찾을 수 없습니다.")
    try:
        day = to_local_date(day)
        delta = int(delta)
    except (TypeError, ValueError):
        raise ValidationError({"error": "date 또는 delta 형식이 올바르지 않습니다."})

    reservations = store.get_reservations(room_id=room_id, statuses=EFFECTIVE_STATUSES)
    sold = sold_count(reservations, room_id, day)
    if room.inventory + delta < sold:
        raise ValidationError(
            {
                "error": f"조정 후 재고({room.inventory + delta})가 "
                f"이미 판매된 객실 수({sold})보다 적을 수 없습니다."
            }
        )
    return store.set_room_inventory_adjustment(room_id, day, delta)


def daily_inventory(day, store=None):
    """날짜 하루의 객실별 재고 현황."""
    store = store or _default_store()
    day = to_local_date(day)

    rooms = store.get_rooms()
    reservations = store.get_reservations(statuses=EFFECTIVE_STATUSES)
    adjustments = store.get_room_inventory_adjustments(start=day, end=day)

    result = []
    for room in rooms:
        delta = sum(adj.delta for adj in adjustments if adj.room_id == room.room_id)
        effective = effective_inventory(room, day, adjustments)
        sold = sold_count(reservations, room.room_id, day)
        result.append(
            {
                "room_id": room.room_id,
                "room_type": room.room_type,
                "date": day.isoformat(),
                "inventory": room.inventory,
                "delta": delta,
                "effective_inventory": effective,
                "sold": sold,
                "remaining": max(0, effective - sold),
            }
        )
    return result
