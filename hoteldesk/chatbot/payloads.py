"""
스킬 요청 파싱

버튼 extra(action.clientExtra)와 블록 파라미터(action.params)를 한 번만 해석해서
아래 중 하나의 payload 로 만든다. 해석할 수 없는 값은 PlainUtterance 로 떨어진다.
"""

import json
from dataclasses import dataclass, field
from datetime import date
from typing import Optional, Union

from rooms.calendar import to_local_date

SATURDAY_TYPES = ("day_use", "stay")


class SkillRequestError(ValueError):
    """userRequest / action 이 없는 요청"""


@dataclass(frozen=True)
class RoomSelected:
    room_id: int
    check_in: date
    check_out: date
    total_price: int


@dataclass(frozen=True)
class SaturdayTypeChosen:
    stay_type: str  # day_use | stay


@dataclass(frozen=True)
class ReservationHistoryItemChosen:
    reservation_id: int
    cancel: bool = False


@dataclass(frozen=True)
class DateRangeChosen:
    check_in: date
    check_out: date


@dataclass(frozen=True)
class DateChosen:
    day: date


@dataclass(frozen=True)
class PlainUtterance:
    text: str


Payload = Union[
    RoomSelected,
    SaturdayTypeChosen,
    ReservationHistoryItemChosen,
    DateRangeChosen,
    DateChosen,
    PlainUtterance,
]


@dataclass(frozen=True)
class SkillRequest:
    user_id: str
    utterance: str
    payload: Payload
    nickname: Optional[str] = None
    raw: dict = field(default_factory=dict, compare=False, repr=False)


def _param_date(value):
    """
    sys.date 파라미터 값 해석.
    "2024-06-01" 또는 '{"value": "2024-06-01", ...}' / '{"date": "2024-06-01"}' 형태.
    """
    if value is None:
        return None
    if isinstance(value, str):
        text = value.strip()
        if text.startswith("{"):
            try:
                value = json.loads(text)
            except ValueError:
                return None
        else:
            return to_local_date(text)
    if isinstance(value, dict):
        for key in ("value", "date", "origin"):
            if value.get(key):
                return _param_date(value[key])
    return None


def _param_period(value):
    # sys.date.period: {"from": {"date": ...}, "to": {"date": ...}}
    if isinstance(value, str):
        try:
            value = json.loads(value)
        except ValueError:
            return None
    if not isinstance(value, dict):
        return None
    start = _param_date(value.get("from"))
    end = _param_date(value.get("to"))
    if start is None or end is None:
        return None
    return start, end


def _parse_payload(params, extra, utterance):
    if "roomId" in extra:
        return RoomSelected(
            room_id=int(extra["roomId"]),
            check_in=to_local_date(extra["checkIn"]),
            check_out=to_local_date(extra["checkOut"]),
            total_price=int(extra.get("totalPrice") or 0),
        )

    saturday_type = extra.get("saturdayType")
    if saturday_type in SATURDAY_TYPES:
        return SaturdayTypeChosen(stay_type=saturday_type)

    if "reservationId" in extra:
        return ReservationHistoryItemChosen(
            reservation_id=int(extra["reservationId"]),
            cancel=extra.get("action") == "cancel",
        )

    check_in = _param_date(params.get("checkin") or params.get("checkIn"))
    check_out = _param_date(params.get("checkout") or params.get("checkOut"))
    if check_in and check_out:
        return DateRangeChosen(check_in=check_in, check_out=check_out)

    period = _param_period(params.get("period"))
    if period:
        return DateRangeChosen(check_in=period[0], check_out=period[1])

    day = _param_date(params.get("date"))
    if day:
        return DateChosen(day=day)

    return PlainUtterance(text=utterance)


def parse_skill_request(body):
    """
    카카오 스킬 요청 본문 -> SkillRequest.
    userRequest / action 이 없으면 SkillRequestError. 그 밖의 이상한 값은 PlainUtterance.
    """
    if not isinstance(body, dict):
        raise SkillRequestError("요청 본문이 JSON 객체가 아닙니다.")
    user_request = body.get("userRequest")
    action = body.get("action")
    if not isinstance(user_request, dict) or not isinstance(action, dict):
        raise SkillRequestError("userRequest, action 은 필수입니다.")

    user = user_request.get("user") or {}
    properties = user.get("properties") or {}
    user_id = str(user.get("id") or "")
    utterance = str(user_request.get("utterance") or "")

    params = action.get("params") or {}
    extra = action.get("clientExtra") or {}
    if not isinstance(params, dict):
        params = {}
    if not isinstance(extra, dict):
        extra = {}

    try:
        payload = _parse_payload(params, extra, utterance)
    except (KeyError, TypeError, ValueError):
        payload = PlainUtterance(text=utterance)

    return SkillRequest(
        user_id=user_id,
        utterance=utterance,
        payload=payload,
        nickname=properties.get("nickname"),
        raw=body,
    )
