"""
카카오 챗봇 스킬 처리 (사용자별 대화 상태)

- 대기(Idle): 임시 예약 없음. 키워드 / 버튼 extra / 날짜 선택 파라미터로 분기
- 전화번호 입력 대기(AwaitingPhone): 임시 예약 있음. 다음 발화를 전화번호로 해석

요청 하나에 응답 하나, 상태 변경은 최대 한 번.
어떤 입력이 와도 예외를 올리지 않고 기본 인사로 응답한다.
"""

import re
from datetime import timedelta

from django.conf import settings

from chatbot import kakao
from chatbot.messages import get_message
from chatbot.payloads import (
    DateChosen,
    DateRangeChosen,
    PlainUtterance,
    ReservationHistoryItemChosen,
    RoomSelected,
    SaturdayTypeChosen,
)
from customers.utils import normalize_phone
from reservations.models import Reservation
from reservations.services import cancel_by_guest, create_kakao_reservation
from reservations.store import get_store
from rooms.calendar import (
    is_day_use,
    stay_label,
    to_date_key,
    today,
    upcoming_saturday,
)
from rooms.inventory import EFFECTIVE_STATUSES, is_room_available
from rooms.images import public_image_url
from rooms.pricing import apply_discount, discount_rate_for, quote_total_price

from logger import get_logger

logger = get_logger("hoteldesk.chatbot")

CANCEL_KEYWORDS = ("취소", "예약취소")

STATUS_LABELS = dict(Reservation.STATUS_CHOICES)


def normalize_keyword(text):
    return re.sub(r"\s+", "", text or "").lower()


class SkillHandler:
    def __init__(self, store=None, clock=None):
        self.store = store or get_store()
        self.clock = clock or today
        # 정규화된 키워드 -> 처리 함수
        self.keyword_handlers = {
            "오늘대실": self.today_day_use,
            "오늘숙박": self.today_stay,
            "토요일예약": self.saturday_reservation,
            "토요일대실": lambda request: self.saturday_rooms("day_use"),
            "토요일숙박": lambda request: self.saturday_rooms("stay"),
            "예약하기": self.make_reservation,
            "예약내역": self.reservation_history,
            "처음으로": self.welcome,
            "시작": self.welcome,
        }

    def message(self, situation):
        return get_message(situation, self.store)

    def handle(self, request):
        try:
            return self.dispatch(request)
        except Exception:
            logger.exception(f"스킬 처리 중 예외 발생 (user={request.user_id})")
            return self.greeting()

    def dispatch(self, request):
        payload = request.payload

        # 객실 선택은 어느 상태에서든 임시 예약을 새로 저장 (마지막 선택 우선)
        if isinstance(payload, RoomSelected):
            return self.select_room(request, payload)

        # 전화번호 입력 대기 중에는 자유 발화만 전화번호로 해석 (버튼 payload 는 그대로 처리)
        if request.user_id and isinstance(payload, PlainUtterance):
            pending = self.store.get_pending_reservation(request.user_id)
            if pending is not None:
                return self.handle_phone_input(request, pending)

        if isinstance(payload, SaturdayTypeChosen):
            return self.saturday_rooms(payload.stay_type)
        if isinstance(payload, ReservationHistoryItemChosen):
            return self.reservation_detail(request, payload)
        if isinstance(payload, DateRangeChosen):
            return self.date_range_rooms(payload.check_in, payload.check_out)
        if isinstance(payload, DateChosen):
            return self.room_carousel(payload.day, payload.day, "date_select_day_use")
        if isinstance(payload, PlainUtterance):
            handler = self.keyword_handlers.get(normalize_keyword(payload.text))
            if handler is not None:
                return handler(request)
        return self.greeting()

    # 공통 빠른 답장
    def main_menu(self):
        return [
            kakao.quick_reply("오늘 대실", "오늘대실"),
            kakao.quick_reply("오늘 숙박", "오늘숙박"),
            kakao.quick_reply("토요일 예약", "토요일예약"),
            kakao.quick_reply("예약하기"),
            kakao.quick_reply("예약 내역", "예약내역"),
        ]

    def home_reply(self):
        return [kakao.quick_reply("처음으로")]

    def greeting(self):
        return kakao.text_response(self.message("default_greeting"), self.main_menu())

    def welcome(self, request=None):
        return kakao.text_response(self.message("channel_added"), self.main_menu())

    # 객실 목록
    def room_card(self, room, check_in, check_out):
        price = quote_total_price(room, check_in, check_out)
        rate = discount_rate_for(room)
        discounted = apply_discount(price, rate)
        day_use = is_day_use(check_in, check_out)
        times = (
            f"입실 {room.day_use_check_in} / 퇴실 {room.day_use_check_out}"
            if day_use
            else f"입실 {room.stay_check_in} / 퇴실 {room.stay_check_out}"
        )
        extra = {
            "roomId": room.room_id,
            "checkIn": to_date_key(check_in),
            "checkOut": to_date_key(check_out),
            "totalPrice": discounted,
        }
        return kakao.commerce_card(
            title=room.room_type,
            description=f"{stay_label(check_in, check_out)}\n{times}",
            price=price,
            discount_rate=rate,
            discounted_price=discounted,
            image_url=public_image_url(room),
            buttons=[
                kakao.button("예약하기", message_text=f"{room.room_type} 예약하기", extra=extra)
            ],
        )

    def room_carousel(self, check_in, check_out, situation):
        rooms = self.store.get_rooms()
        if not rooms:
            return kakao.text_response(self.message("room_sold_out"), self.home_reply())
        items = [self.room_card(room, check_in, check_out) for room in rooms]
        # 안내 문구 1개 + 캐로셀 최대 2개 (카드 20개)
        return kakao.skill_response(
            [kakao.simple_text(self.message(situation))]
            + kakao.carousels(items, max_outputs=kakao.MAX_OUTPUTS - 1),
            self.home_reply(),
        )

    def today_day_use(self, request=None):
        day = self.clock()
        return self.room_carousel(day, day, "today_day_use")

    def today_stay(self, request=None):
        day = self.clock()
        return self.room_carousel(day, day + timedelta(days=1), "today_stay")

    def saturday_reservation(self, request=None):
        return kakao.text_response(
            self.message("saturday_reservation"),
            [
                kakao.quick_reply("대실", "토요일대실", extra={"saturdayType": "day_use"}),
                kakao.quick_reply("숙박", "토요일숙박", extra={"saturdayType": "stay"}),
            ],
        )

    def saturday_rooms(self, stay_type):
        saturday = upcoming_saturday(self.clock())
        if stay_type == "day_use":
            return self.room_carousel(saturday, saturday, "saturday_day_use_confirm")
        return self.room_carousel(
            saturday, saturday + timedelta(days=1), "saturday_stay_confirm"
        )

    def make_reservation(self, request=None):
        # 날짜 선택 블록이 설정되어 있으면 블록으로, 아니면 오늘 기준 키워드로
        block_ids = settings.KAKAO_BLOCK_IDS
        return kakao.text_response(
            self.message("make_reservation"),
            [
                kakao.quick_reply("대실", "오늘대실", block_id=block_ids.get("day_use_date")),
                kakao.quick_reply("숙박", "오늘숙박", block_id=block_ids.get("stay_date")),
            ],
        )

    def date_range_rooms(self, check_in, check_out):
        if check_out < check_in:
            return self.greeting()
        if check_in == check_out:
            return self.room_carousel(check_in, check_out, "date_select_day_use")
        return self.room_carousel(check_in, check_out, "date_select_stay")

    # 예약 진행
    def select_room(self, request, payload):
        if not request.user_id:
            return self.greeting()
        # 지난 날짜는 선택 불가
        if payload.check_in < self.clock():
            return self.greeting()
        room = self.store.get_room(payload.room_id)
        if room is None or not is_room_available(
            payload.room_id, payload.check_in, payload.check_out, store=self.store
        ):
            return kakao.text_response(self.message("room_sold_out"), self.home_reply())

        # 버튼 extra 의 금액은 쓰지 않고 서버에서 다시 계산
        total_price = apply_discount(
            quote_total_price(room, payload.check_in, payload.check_out),
            discount_rate_for(room),
        )
        self.store.save_pending_reservation(
            request.user_id,
            room.room_id,
            payload.check_in,
            payload.check_out,
            total_price,
        )
        logger.info(f"임시 예약 저장: {request.user_id} 객실 {payload.room_id}")
        return kakao.text_response(
            self.message("phone_input_request"), [kakao.quick_reply("취소")]
        )

    def handle_phone_input(self, request, pending):
        if normalize_keyword(request.utterance) in CANCEL_KEYWORDS:
            self.store.delete_pending_reservation(request.user_id)
            return kakao.text_response(
                self.message("reservation_cancelled_by_user"), self.main_menu()
            )

        phone = normalize_phone(request.utterance)
        if phone is None:
            return kakao.text_response(
                self.message("phone_format_error"), [kakao.quick_reply("취소")]
            )

        reservation = create_kakao_reservation(
            request.user_id, pending, phone, name=request.nickname, store=self.store
        )
        self.store.delete_pending_reservation(request.user_id)
        if reservation is None:
            return kakao.text_response(self.message("room_sold_out"), self.home_reply())
        return kakao.text_response(self.message("reservation_request"), self.home_reply())

    # 예약 내역
    def reservation_history(self, request):
        reservations = []
        if request.user_id:
            reservations = self.store.get_reservations_for_user(
                request.user_id, limit=settings.CHATBOT_HISTORY_LIMIT
            )
        if not reservations:
            return kakao.text_response(self.message("reservation_empty"), self.main_menu())

        items = [
            kakao.list_item(
                title=f"{r.room.room_type} ({STATUS_LABELS.get(r.status, r.status)})",
                description=stay_label(r.check_in, r.check_out),
                message_text="예약 상세",
                extra={"reservationId": r.reservation_id},
            )
            for r in reservations
        ]
        return kakao.skill_response(
            [
                kakao.simple_text(self.message("reservation_inquiry")),
                kakao.list_card("예약 내역", items),
            ],
            self.home_reply(),
        )

    def reservation_detail(self, request, payload):
        if payload.cancel:
            result = cancel_by_guest(request.user_id, payload.reservation_id, store=self.store)
            situation = {
                "cancelled": "reservation_cancel",
                "already_cancelled": "reservation_already_cancelled",
            }.get(result, "reservation_not_found")
            return kakao.text_response(self.message(situation), self.main_menu())

        reservation = self.store.get_reservation(payload.reservation_id)
        if reservation is None or reservation.customer.user_id != request.user_id:
            return kakao.text_response(
                self.message("reservation_not_found"), self.main_menu()
            )

        room = reservation.room
        day_use = is_day_use(reservation.check_in, reservation.check_out)
        times = (
            f"입실 {room.day_use_check_in} / 퇴실 {room.day_use_check_out}"
            if day_use
            else f"입실 {room.stay_check_in} / 퇴실 {room.stay_check_out}"
        )
        description = (
            f"{stay_label(reservation.check_in, reservation.check_out)}\n"
            f"상태: {STATUS_LABELS.get(reservation.status, reservation.status)}\n"
            f"금액: {reservation.total_price:,}원\n"
            f"{times}"
        )
        buttons = None
        if reservation.status in EFFECTIVE_STATUSES:
            buttons = [
                kakao.button(
                    "예약 취소",
                    extra={"reservationId": reservation.reservation_id, "action": "cancel"},
                )
            ]
        return kakao.skill_response(
            [kakao.text_card(room.room_type, description, buttons)],
            [kakao.quick_reply("예약 내역", "예약내역"), kakao.quick_reply("처음으로")],
        )