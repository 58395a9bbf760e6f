"""
공용 픽스처

- 외부 발송(알리고, 카카오)은 모두 monkeypatch 로 가로챈다.
- 알림은 on_commit 이후 실행되므로 django_capture_on_commit_callbacks(execute=True) 로 확인.
"""

from datetime import date

import pytest
from rest_framework.test import APIClient

from config import aligo
from customers.models import Customer
from rooms.calendar import WEEKDAY_KEYS
from rooms.models import Room


def make_prices(stay=50000, day_use=30000, saturday_stay=None):
    prices = {key: {"stay_price": stay, "day_use_price": day_use} for key in WEEKDAY_KEYS}
    if saturday_stay is not None:
        prices["saturday"]["stay_price"] = saturday_stay
    return prices


@pytest.fixture(autouse=True)
def hotel_settings(settings):
    settings.NOTIFICATIONS_ASYNC = False
    settings.ALIGO_API_KEY = "test-key"
    settings.ALIGO_USER_ID = "tester"
    settings.ALIGO_SENDER = "0212345678"
    settings.ALIGO_SENDER_KEY = "sender-key"
    settings.ALIGO_ADMIN_PHONE = "010-0000-0000"
    settings.ALIMTALK_TEMPLATES = {
        "request_notify_admin": "TPL_ADMIN",
        "guest_cancel_notify_admin": "TPL_GUEST_CANCEL",
        "confirm_guest": "",
        "reject_guest": "",
        "admin_cancel_guest": "",
    }
    settings.KAKAO_BLOCK_IDS = {"day_use_date": "", "stay_date": ""}
    settings.CHATBOT_DEFAULT_DISCOUNT_RATE = 10
    settings.PENDING_RESERVATION_TTL_MINUTES = 10
    return settings


@pytest.fixture
def outbox(monkeypatch):
    """send_sms / send_alimtalk 호출을 기록"""
    sent = {"sms": [], "alimtalk": []}

    def fake_send_sms(receiver, msg, testmode=None):
        sent["sms"].append({"receiver": receiver, "msg": msg})
        return {"result_code": "1"}

    def fake_send_alimtalk(tpl_code, receiver, subject, message, recvname=None, testmode=None):
        sent["alimtalk"].append(
            {"tpl_code": tpl_code, "receiver": receiver, "subject": subject, "message": message}
        )
        return {"code": 0}

    def fake_template_content(tpl_code):
        return "예약번호 #{reservationId} / #{roomType} #{checkIn}"

    monkeypatch.setattr(aligo, "send_sms", fake_send_sms)
    monkeypatch.setattr(aligo, "send_alimtalk", fake_send_alimtalk)
    monkeypatch.setattr(aligo, "get_template_content", fake_template_content)
    return sent


@pytest.fixture
def api_client():
    return APIClient()


@pytest.fixture
def make_room(db):
    def _make_room(room_type="스탠다드", inventory=1, **kwargs):
        kwargs.setdefault("prices", make_prices())
        return Room.objects.create(room_type=room_type, inventory=inventory, **kwargs)

    return _make_room


@pytest.fixture
def room(make_room):
    return make_room()


@pytest.fixture
def customer(db):
    return Customer.objects.create(customer_name="홍길동", phone="010-1111-2222")


@pytest.fixture
def june_first():
    # 2024-06-01 은 토요일
    return date(2024, 6, 1)
