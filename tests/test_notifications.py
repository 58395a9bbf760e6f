"""
예약 알림

알림은 커밋 이후 실행되므로 django_capture_on_commit_callbacks(execute=True) 안에서 확인한다.
"""

from datetime import date

import pytest

from config import aligo
from config.exceptions import UpstreamError
from customers.models import Customer
from reservations.models import Reservation
from reservations.notifications import admin_request_message, reservation_variables
from reservations.services import update_reservation
from rooms.calendar import to_instant

pytestmark = pytest.mark.django_db


@pytest.fixture
def kakao_guest(db):
    return Customer.objects.create(
        customer_name="카카오", phone="010-9999-8888", user_id="kakao-user"
    )


def make_reservation(room, customer, source="kakao", status="pending"):
    return Reservation.objects.create(
        room=room,
        customer=customer,
        source=source,
        status=status,
        check_in=to_instant(date(2024, 6, 1)),
        check_out=to_instant(date(2024, 6, 2)),
        total_price=45000,
    )


def test_kakao_request_notifies_admin(room, kakao_guest, outbox, django_capture_on_commit_callbacks):
    with django_capture_on_commit_callbacks(execute=True):
        reservation = make_reservation(room, kakao_guest)

    assert len(outbox["sms"]) == 1
    assert outbox["sms"][0]["receiver"] == "010-0000-0000"
    assert f"/admin/reservation/{reservation.reservation_id}" in outbox["sms"][0]["msg"]

    (alimtalk,) = outbox["alimtalk"]
    assert alimtalk["tpl_code"] == "TPL_ADMIN"
    assert alimtalk["receiver"] == "010-0000-0000"
    assert alimtalk["message"] == (
        f"예약번호 {reservation.reservation_id} / 스탠다드 2024년 6월 1일"
    )


def test_manual_reservation_sends_nothing(room, customer, outbox, django_capture_on_commit_callbacks):
    with django_capture_on_commit_callbacks(execute=True):
        make_reservation(room, customer, source="manual", status="confirmed")
    assert outbox == {"sms": [], "alimtalk": []}


def test_confirm_falls_back_to_guest_sms(room, kakao_guest, outbox, django_capture_on_commit_callbacks):
    reservation = make_reservation(room, kakao_guest)
    with django_capture_on_commit_callbacks(execute=True):
        update_reservation(reservation.reservation_id, {"status": "confirmed"})

    (sms,) = outbox["sms"]
    assert sms["receiver"] == "010-9999-8888"
    assert "확정" in sms["msg"]
    assert outbox["alimtalk"] == []


def test_confirm_uses_alimtalk_when_template_configured(
    room, kakao_guest, outbox, settings, django_capture_on_commit_callbacks
):
    settings.ALIMTALK_TEMPLATES = dict(settings.ALIMTALK_TEMPLATES, confirm_guest="TPL_CONFIRM")
    reservation = make_reservation(room, kakao_guest)
    with django_capture_on_commit_callbacks(execute=True):
        update_reservation(reservation.reservation_id, {"status": "confirmed"})

    (alimtalk,) = outbox["alimtalk"]
    assert alimtalk["tpl_code"] == "TPL_CONFIRM"
    assert alimtalk["receiver"] == "010-9999-8888"
    assert alimtalk["subject"] == "예약 확정 안내"
    assert outbox["sms"] == []


def test_guest_cancel_notifies_admin_alimtalk(room, kakao_guest, outbox, django_capture_on_commit_callbacks):
    reservation = make_reservation(room, kakao_guest, status="confirmed")
    with django_capture_on_commit_callbacks(execute=True):
        update_reservation(
            reservation.reservation_id, {"status": "cancelled_by_guest"}, actor="guest"
        )

    (alimtalk,) = outbox["alimtalk"]
    assert alimtalk["tpl_code"] == "TPL_GUEST_CANCEL"
    assert outbox["sms"] == []


def test_unchanged_status_sends_nothing(room, kakao_guest, outbox, django_capture_on_commit_callbacks):
    reservation = make_reservation(room, kakao_guest, status="confirmed")
    with django_capture_on_commit_callbacks(execute=True):
        update_reservation(reservation.reservation_id, {"admin_memo": "창가 방 요청"})
    assert outbox == {"sms": [], "alimtalk": []}


def test_provider_failure_does_not_break_status_change(
    room, kakao_guest, monkeypatch, django_capture_on_commit_callbacks
):
    def broken_send_sms(receiver, msg, testmode=None):
        raise UpstreamError("aligo", "잔액 부족")

    monkeypatch.setattr(aligo, "send_sms", broken_send_sms)
    reservation = make_reservation(room, kakao_guest)
    with django_capture_on_commit_callbacks(execute=True):
        update_reservation(reservation.reservation_id, {"status": "rejected"})

    reservation.refresh_from_db()
    assert reservation.status == "rejected"


def test_missing_admin_phone_is_swallowed(
    room, kakao_guest, outbox, settings, django_capture_on_commit_callbacks
):
    settings.ALIGO_ADMIN_PHONE = ""
    with django_capture_on_commit_callbacks(execute=True):
        make_reservation(room, kakao_guest)
    assert outbox == {"sms": [], "alimtalk": []}


def test_reservation_variables(room, kakao_guest):
    reservation = make_reservation(room, kakao_guest)
    variables = reservation_variables(reservation)
    assert variables["reservationId"] == reservation.reservation_id
    assert variables["checkIn"] == "2024년 6월 1일"
    assert variables["checkOut"] == "2024년 6월 2일"
    assert variables["totalPrice"] == "45,000"
    assert variables["checkInTime"] == room.stay_check_in


def test_admin_request_message_links_reservation(settings):
    settings.BASE_URL = "https://hotel.example.com/"
    assert "https://hotel.example.com/admin/reservation/7" in admin_request_message(7)
