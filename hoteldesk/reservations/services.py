"""
예약 생성 / 수정 / 상태 전이

관리자 API 와 챗봇이 공통으로 사용한다. 실패는 DRF 예외(ValidationError, NotFound)로 올린다.
"""

from rest_framework.exceptions import NotFound, ValidationError

from customers.models import Customer
from reservations.models import DEFAULT_RESERVATION_TYPE_ID, ReservationType
from reservations.store import get_store
from rooms.calendar import occupancy_window, to_instant
from rooms.inventory import is_room_available

from logger import get_logger

logger = get_logger("hoteldesk.reservations")

STATUSES = ("pending", "confirmed", "rejected", "cancelled_by_guest", "cancelled_by_admin")

# 관리자가 할 수 있는 전이
ADMIN_TRANSITIONS = {
    "pending": ("confirmed", "rejected"),
    "confirmed": ("cancelled_by_admin",),
}
# 고객(챗봇)이 할 수 있는 전이
GUEST_TRANSITIONS = {
    "pending": ("cancelled_by_guest",),
    "confirmed": ("cancelled_by_guest",),
}


def check_transition(current, new, actor="admin"):
    if new not in STATUSES:
        raise ValidationError({"error": f"알 수 없는 예약 상태입니다: {new}"})
    if current == new:
        return
    allowed = (GUEST_TRANSITIONS if actor == "guest" else ADMIN_TRANSITIONS).get(current, ())
    if new not in allowed:
        raise ValidationError(
            {"error": f"'{current}' 상태에서 '{new}' 상태로 변경할 수 없습니다."}
        )


def _validate_dates(check_in, check_out):
    try:
        window = occupancy_window(check_in, check_out)
    except (TypeError, ValueError):
        raise ValidationError({"error": "checkIn, checkOut 날짜 형식이 올바르지 않습니다."})
    if window is None:
        raise ValidationError({"error": "체크아웃은 체크인보다 빠를 수 없습니다."})


def _resolve_reservation_type(type_id):
    if not type_id:
        return ReservationType.objects.filter(type_id=DEFAULT_RESERVATION_TYPE_ID).first()
    reservation_type = ReservationType.objects.filter(type_id=type_id).first()
    if reservation_type is None:
        raise ValidationError({"error": f"존재하지 않는 예약 유형입니다: {type_id}"})
    return reservation_type


def _resolve_customer(customer_id, guest_name, guest_phone):
    if customer_id:
        customer = Customer.objects.filter(customer_id=customer_id).first()
        if customer is None:
            raise ValidationError({"error": "존재하지 않는 고객입니다."})
        return customer
    return Customer.objects.get_or_create_for_manual(guest_name, guest_phone)


def create_manual_reservation(
    room_id,
    check_in,
    check_out,
    customer_id=None,
    guest_name=None,
    guest_phone=None,
    total_price=None,
    reservation_type_id=None,
    admin_memo="",
    status="confirmed",
    source="manual",
    store=None,
):
    """관리자 수기 예약. 재고가 없으면 ValidationError."""
    store = store or get_store()

    room = store.get_room(room_id)
    if room is None:
        raise ValidationError({"error": "존재하지 않는 객실입니다."})
    _validate_dates(check_in, check_out)
    if status not in STATUSES:
        raise ValidationError({"error": f"알 수 없는 예약 상태입니다: {status}"})

    reservation_type = _resolve_reservation_type(reservation_type_id)
    customer = _resolve_customer(customer_id, guest_name, guest_phone)

    reservation = store.book_room(
        room.room_id,
        check_in,
        check_out,
        is_available=lambda r, ci, co: is_room_available(r, ci, co, store=store),
        customer=customer,
        source=source,
        reservation_type=reservation_type,
        status=status,
        total_price=total_price or 0,
        admin_memo=admin_memo or "",
    )
    if reservation is None:
        raise ValidationError({"error": "해당 기간에는 더 이상 예약 가능한 재고가 없습니다."})

    logger.info(f"수기 예약 생성: #{reservation.reservation_id} 객실 {room.room_id}")
    return reservation


def create_kakao_reservation(user_id, pending, phone, name=None, store=None):
    """
    챗봇 전화번호 입력 완료 -> pending/kakao 예약 생성.
    그 사이 매진되었으면 None.
    """
    store = store or get_store()
    customer = store.get_or_create_customer_by_user_id(user_id, name=name, phone=phone)
    reservation = store.book_room(
        pending.room_id,
        pending.check_in,
        pending.check_out,
        is_available=lambda r, ci, co: is_room_available(r, ci, co, store=store),
        customer=customer,
        source="kakao",
        reservation_type=_resolve_reservation_type(None),
        status="pending",
        total_price=pending.total_price,
    )
    if reservation is not None:
        logger.info(f"카카오 예약 요청 생성: #{reservation.reservation_id} ({user_id})")
    return reservation


def update_reservation(reservation_id, changes, actor="admin", store=None):
    """
    예약 수정. 상태 변경은 전이 규칙 검사, 객실/날짜 변경은 자신을 제외하고 재고 재확인.
    """
    store = store or get_store()
    reservation = store.get_reservation(reservation_id)
    if reservation is None:
        raise NotFound("예약을 찾을 수 없습니다.")

    changes = dict(changes)
    if "status" in changes:
        check_transition(reservation.status, changes["status"], actor=actor)

    if "reservation_type_id" in changes:
        changes["reservation_type"] = _resolve_reservation_type(
            changes.pop("reservation_type_id")
        )

    room_id = changes.pop("room_id", None)
    if room_id is not None:
        room = store.get_room(room_id)
        if room is None:
            raise ValidationError({"error": "존재하지 않는 객실입니다."})
        changes["room"] = room

    moved = (
        ("room" in changes and changes["room"].room_id != reservation.room_id)
        or "check_in" in changes
        or "check_out" in changes
    )
    if moved:
        check_in = changes.get("check_in", reservation.check_in)
        check_out = changes.get("check_out", reservation.check_out)
        _validate_dates(check_in, check_out)
        target_room = changes.get("room", reservation.room)
        new_status = changes.get("status", reservation.status)
        if new_status in ("pending", "confirmed") and not is_room_available(
            target_room.room_id,
            check_in,
            check_out,
            exclude_reservation_id=reservation.reservation_id,
            store=store,
        ):
            raise ValidationError(
                {"error": "해당 기간에는 더 이상 예약 가능한 재고가 없습니다."}
            )
        changes["check_in"] = to_instant(check_in)
        changes["check_out"] = to_instant(check_out)

    return store.update_reservation(reservation_id, **changes)


def cancel_by_guest(user_id, reservation_id, store=None):
    """
    챗봇에서 고객 본인 예약 취소.
    결과: "cancelled" | "not_found" | "already_cancelled"
    """
    store = store or get_store()
    reservation = store.get_reservation(reservation_id)
    if reservation is None or reservation.customer.user_id != user_id:
        return "not_found"
    if reservation.status not in ("pending", "confirmed"):
        return "already_cancelled"

    store.update_reservation(reservation.reservation_id, status="cancelled_by_guest")
    logger.info(f"고객 예약 취소: #{reservation.reservation_id} ({user_id})")
    return "cancelled"
