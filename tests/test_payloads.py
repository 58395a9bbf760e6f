"""스킬 요청 파싱"""

from datetime import date

import pytest

from chatbot.payloads import (
    DateChosen,
    DateRangeChosen,
    PlainUtterance,
    ReservationHistoryItemChosen,
    RoomSelected,
    SaturdayTypeChosen,
    SkillRequestError,
    parse_skill_request,
)


def body(utterance="안녕", extra=None, params=None, properties=None):
    return {
        "userRequest": {
            "utterance": utterance,
            "user": {"id": "kakao-user", "properties": properties or {}},
        },
        "action": {"params": params or {}, "clientExtra": extra or {}},
    }


def test_plain_utterance():
    request = parse_skill_request(body("오늘대실", properties={"nickname": "길동"}))
    assert request.user_id == "kakao-user"
    assert request.nickname == "길동"
    assert request.payload == PlainUtterance(text="오늘대실")


def test_room_selected_extra():
    request = parse_skill_request(
        body(extra={"roomId": "3", "checkIn": "2024-06-01", "checkOut": "2024-06-02", "totalPrice": 45000})
    )
    assert request.payload == RoomSelected(
        room_id=3, check_in=date(2024, 6, 1), check_out=date(2024, 6, 2), total_price=45000
    )


def test_saturday_type_extra():
    assert parse_skill_request(body(extra={"saturdayType": "day_use"})).payload == SaturdayTypeChosen("day_use")
    # 모르는 값은 무시
    assert parse_skill_request(body("토요일", extra={"saturdayType": "week"})).payload == PlainUtterance("토요일")


def test_reservation_item_extra():
    payload = parse_skill_request(body(extra={"reservationId": 7, "action": "cancel"})).payload
    assert payload == ReservationHistoryItemChosen(reservation_id=7, cancel=True)
    payload = parse_skill_request(body(extra={"reservationId": "7"})).payload
    assert payload == ReservationHistoryItemChosen(reservation_id=7, cancel=False)


def test_checkin_checkout_params_with_sys_date_json():
    params = {
        "checkin": '{"value": "2024-06-01", "userTimeZone": "UTC+9"}',
        "checkout": '{"date": "2024-06-03"}',
    }
    payload = parse_skill_request(body(params=params)).payload
    assert payload == DateRangeChosen(check_in=date(2024, 6, 1), check_out=date(2024, 6, 3))


def test_period_param():
    params = {"period": '{"from": {"date": "2024-06-01"}, "to": {"date": "2024-06-02"}}'}
    payload = parse_skill_request(body(params=params)).payload
    assert payload == DateRangeChosen(check_in=date(2024, 6, 1), check_out=date(2024, 6, 2))


def test_single_date_param():
    payload = parse_skill_request(body(params={"date": "2024-06-01"})).payload
    assert payload == DateChosen(day=date(2024, 6, 1))


def test_broken_room_extra_falls_back_to_utterance():
    payload = parse_skill_request(body("hello", extra={"roomId": 1, "checkIn": "never"})).payload
    assert payload == PlainUtterance("hello")


@pytest.mark.parametrize(
    "bad",
    [None, [], {}, {"userRequest": {}}, {"action": {}}, {"userRequest": "x", "action": {}}],
)
def test_missing_user_request_or_action(bad):
    with pytest.raises(SkillRequestError):
        parse_skill_request(bad)


def test_non_dict_params_are_ignored():
    data = body("예약내역")
    data["action"]["params"] = "oops"
    data["action"]["clientExtra"] = ["oops"]
    assert parse_skill_request(data).payload == PlainUtterance("예약내역")
