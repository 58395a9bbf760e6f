"""
예약 알림 발송 (SMS / 알림톡)

모든 발송은 부가 작업이다.
- DB 트랜잭션 커밋 이후에 실행 (transaction.on_commit)
- settings.NOTIFICATIONS_ASYNC 이면 워커 스레드에서 실행
- 실패는 로그만 남기고 호출한 쪽으로 올리지 않는다
"""

from concurrent.futures import ThreadPoolExecutor

from django.conf import settings
from django.db import transaction

from config import aligo
from config.exceptions import UpstreamError
from rooms.calendar import format_korean_date, is_day_use

from logger import get_logger

logger = get_logger("hoteldesk.notifications")

_executor = ThreadPoolExecutor(max_workers=2, thread_name_prefix="notify")

# 알림톡 템플릿이 없을 때 고객에게 보내는 SMS 문구
GUEST_SMS_TEMPLATES = {
    "confirmed": "[{hotel}] {room_type} {check_in} ~ {check_out} 예약이 확정되었습니다. "
    "결제 금액: {total_price}원",
    "rejected": "[{hotel}] 죄송합니다. {room_type} {check_in} ~ {check_out} 예약이 "
    "거절되었습니다.",
    "cancelled_by_admin": "[{hotel}] {room_type} {check_in} ~ {check_out} 예약이 "
    "호텔 사정으로 취소되었습니다.",
}

# 상태 -> (알림톡 템플릿 키, 제목)
GUEST_ALIMTALK = {
    "confirmed": ("confirm_guest", "예약 확정 안내"),
    "rejected": ("reject_guest", "예약 안내"),
    "cancelled_by_admin": ("admin_cancel_guest", "예약 안내"),
}

ADMIN_ALIMTALK_SUBJECT = "팰리스호텔 예약 알림"


def _run_safely(func, *args, **kwargs):
    try:
        func(*args, **kwargs)
    except UpstreamError as e:
        logger.error(f"알림 발송 실패 [{e.provider}] {e.message}")
    except Exception:
        logger.exception(f"알림 발송 중 예외 발생: {func.__name__}")


def dispatch(func, *args, **kwargs):
    """커밋 이후 func 실행을 예약한다. 반환값 없음."""

    def run():
        if settings.NOTIFICATIONS_ASYNC:
            _executor.submit(_run_safely, func, *args, **kwargs)
        else:
            _run_safely(func, *args, **kwargs)

    transaction.on_commit(run)


def format_price(value):
    return f"{int(value or 0):,}"


def reservation_variables(reservation):
    room = reservation.room
    day_use = is_day_use(reservation.check_in, reservation.check_out)
    return {
        "reservationId": reservation.reservation_id,
        "예약ID": reservation.reservation_id,
        "roomType": room.room_type,
        "checkIn": format_korean_date(reservation.check_in),
        "checkOut": format_korean_date(reservation.check_out),
        "totalPrice": format_price(reservation.total_price),
        "checkInTime": room.day_use_check_in if day_use else room.stay_check_in,
        "checkOutTime": room.day_use_check_out if day_use else room.stay_check_out,
    }


def admin_request_message(reservation_id):
    link = f"{settings.BASE_URL.rstrip('/')}/admin/reservation/{reservation_id}"
    return (
        f"[{settings.HOTEL_NAME}] 새로운 예약 요청이 있습니다. "
        f"나중에 카카오톡으로 보내드립니다. 확인: {link}"
    )


def _send_admin_sms(message):
    admin_phone = settings.ALIGO_ADMIN_PHONE
    if not admin_phone:
        raise UpstreamError("aligo", "관리자 전화번호(ALIGO_ADMIN_PHONE)가 설정되지 않았습니다.")
    aligo.send_sms(admin_phone, message)
    logger.info("관리자 SMS 발송 완료")


def _send_alimtalk(template_key, receiver, subject, variables, fallback=None):
    tpl_code = settings.ALIMTALK_TEMPLATES.get(template_key)
    if not tpl_code:
        raise UpstreamError("alimtalk", f"알림톡 템플릿 코드가 없습니다: {template_key}")

    content = aligo.get_template_content(tpl_code) or fallback
    if not content:
        raise UpstreamError("alimtalk", f"템플릿 {tpl_code} 의 본문을 가져올 수 없습니다.")
    aligo.send_alimtalk(
        tpl_code, receiver, subject, aligo.fill_template(content, variables)
    )
    logger.info(f"알림톡 발송 완료: {template_key} -> {receiver}")


def _send_admin_alimtalk(template_key, variables):
    admin_phone = settings.ALIGO_ADMIN_PHONE
    if not admin_phone:
        raise UpstreamError("alimtalk", "관리자 전화번호(ALIGO_ADMIN_PHONE)가 설정되지 않았습니다.")
    fallback = (
        f"[{settings.HOTEL_NAME}] 새로운 예약 요청이 있습니다. 관리자 채널에서 확인해 주세요."
    )
    _send_alimtalk(template_key, admin_phone, ADMIN_ALIMTALK_SUBJECT, variables, fallback)


def _send_guest_status(phone, status, variables):
    if not phone:
        raise UpstreamError("aligo", "고객 전화번호가 없어 알림을 보낼 수 없습니다.")

    template_key, subject = GUEST_ALIMTALK[status]
    if settings.ALIMTALK_TEMPLATES.get(template_key):
        _send_alimtalk(template_key, phone, subject, variables)
        return

    # 알림톡 템플릿이 없으면 SMS 로 대체
    message = GUEST_SMS_TEMPLATES[status].format(
        hotel=settings.HOTEL_NAME,
        room_type=variables.get("roomType", ""),
        check_in=variables.get("checkIn", ""),
        check_out=variables.get("checkOut", ""),
        total_price=variables.get("totalPrice", ""),
    )
    aligo.send_sms(phone, message)
    logger.info(f"고객 SMS 발송 완료: {status} -> {phone}")


def send_admin_sms(message):
    dispatch(_send_admin_sms, message)


def send_admin_alimtalk(template_key, variables):
    dispatch(_send_admin_alimtalk, template_key, variables)


def send_guest_status_notification(phone, status, variables):
    if status not in GUEST_ALIMTALK:
        logger.warning(f"고객 알림 대상이 아닌 상태: {status}")
        return
    dispatch(_send_guest_status, phone, status, variables)


def notify_reservation_requested(reservation):
    # 카카오 예약 요청 -> 관리자 SMS + 관리자 알림톡
    send_admin_sms(admin_request_message(reservation.reservation_id))
    send_admin_alimtalk("request_notify_admin", reservation_variables(reservation))


def notify_status_change(reservation, status):
    variables = reservation_variables(reservation)
    if status == "cancelled_by_guest":
        send_admin_alimtalk("guest_cancel_notify_admin", variables)
        return
    send_guest_status_notification(reservation.customer.phone, status, variables)
