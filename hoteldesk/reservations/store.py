"""
예약 저장소

챗봇 상태 머신과 재고 계산은 이 인터페이스로만 데이터에 접근한다.
기본 구현은 Django ORM (DjangoReservationStore), 테스트에서는 다른 구현을 넘길 수 있다.
"""

import abc
from datetime import timedelta

from django.conf import settings
from django.db import transaction
from django.utils import timezone

from chatbot.models import ChatbotMessage
from customers.models import Customer
from reservations.models import PendingReservation, Reservation
from rooms.calendar import to_instant, to_local_date
from rooms.models import Room, RoomInventoryAdjustment

from logger import get_logger

logger = get_logger("hoteldesk.reservations")


class ReservationStore(abc.ABC):
    @abc.abstractmethod
    def get_room(self, room_id): ...

    @abc.abstractmethod
    def get_rooms(self): ...

    @abc.abstractmethod
    def get_reservations(self, room_id=None, statuses=None): ...

    @abc.abstractmethod
    def get_reservation(self, reservation_id): ...

    @abc.abstractmethod
    def add_reservation(self, **fields): ...

    @abc.abstractmethod
    def update_reservation(self, reservation_id, **changes): ...

    @abc.abstractmethod
    def get_room_inventory_adjustment(self, room_id, day): ...

    @abc.abstractmethod
    def get_room_inventory_adjustments(self, room_id=None, start=None, end=None): ...

    @abc.abstractmethod
    def set_room_inventory_adjustment(self, room_id, day, delta): ...

    @abc.abstractmethod
    def get_pending_reservation(self, user_id): ...

    @abc.abstractmethod
    def save_pending_reservation(self, user_id, room_id, check_in, check_out, total_price): ...

    @abc.abstractmethod
    def delete_pending_reservation(self, user_id): ...

    @abc.abstractmethod
    def get_chatbot_message(self, situation): ...

    # 챗봇 / 서비스 계층에서 쓰는 보조 연산
    @abc.abstractmethod
    def get_reservations_for_user(self, user_id, limit=None): ...

    @abc.abstractmethod
    def book_room(self, room_id, check_in, check_out, is_available, **fields): ...

    @abc.abstractmethod
    def get_or_create_customer_by_user_id(self, user_id, name=None, phone=None): ...


class DjangoReservationStore(ReservationStore):
    def get_room(self, room_id):
        try:
            return Room.objects.filter(room_id=int(room_id)).first()
        except (TypeError, ValueError):
            return None

    def get_rooms(self):
        return list(Room.objects.all().order_by("sort_order", "room_id"))

    def get_reservations(self, room_id=None, statuses=None):
        queryset = Reservation.objects.select_related("room", "customer")
        if room_id is not None:
            queryset = queryset.filter(room_id=room_id)
        if statuses is not None:
            queryset = queryset.filter(status__in=statuses)
        return list(queryset)

    def get_reservation(self, reservation_id):
        try:
            return (
                Reservation.objects.select_related("room", "customer", "reservation_type")
                .filter(reservation_id=int(reservation_id))
                .first()
            )
        except (TypeError, ValueError):
            return None

    def get_reservations_for_user(self, user_id, limit=None):
        queryset = (
            Reservation.objects.select_related("room", "customer")
            .filter(customer__user_id=user_id)
            .order_by("-check_in", "-reservation_id")
        )
        if limit:
            queryset = queryset[:limit]
        return list(queryset)

    def add_reservation(self, **fields):
        for key in ("check_in", "check_out"):
            if key in fields:
                fields[key] = to_instant(fields[key])
        return Reservation.objects.create(**fields)

    def update_reservation(self, reservation_id, **changes):
        reservation = self.get_reservation(reservation_id)
        if reservation is None:
            return None
        for key, value in changes.items():
            if key in ("check_in", "check_out"):
                value = to_instant(value)
            setattr(reservation, key, value)
        # save() 로 저장해야 상태 변경 시그널(알림)이 동작한다
        reservation.save()
        return reservation

    def delete_reservation(self, reservation_id):
        deleted, _ = Reservation.objects.filter(reservation_id=reservation_id).delete()
        return deleted > 0

    def book_room(self, room_id, check_in, check_out, is_available, **fields):
        """
        객실 행을 잠근 상태에서 가용성 확인 후 예약 생성. 재고가 없으면 None.
        is_available 은 (room_id, check_in, check_out) -> bool.
        """
        with transaction.atomic():
            room = Room.objects.select_for_update().filter(room_id=room_id).first()
            if room is None or not is_available(room_id, check_in, check_out):
                return None
            return self.add_reservation(
                room=room, check_in=check_in, check_out=check_out, **fields
            )

    def get_room_inventory_adjustment(self, room_id, day):
        adjustment = RoomInventoryAdjustment.objects.filter(
            room_id=room_id, date=to_local_date(day)
        ).first()
        return adjustment.delta if adjustment else 0

    def get_room_inventory_adjustments(self, room_id=None, start=None, end=None):
        # start, end 모두 포함
        queryset = RoomInventoryAdjustment.objects.all().order_by("date", "room_id")
        if room_id is not None:
            queryset = queryset.filter(room_id=room_id)
        if start is not None:
            queryset = queryset.filter(date__gte=to_local_date(start))
        if end is not None:
            queryset = queryset.filter(date__lte=to_local_date(end))
        return list(queryset)

    def set_room_inventory_adjustment(self, room_id, day, delta):
        day = to_local_date(day)
        with transaction.atomic():
            if delta == 0:
                RoomInventoryAdjustment.objects.filter(room_id=room_id, date=day).delete()
                return RoomInventoryAdjustment(room_id=room_id, date=day, delta=0)
            adjustment, _ = RoomInventoryAdjustment.objects.update_or_create(
                room_id=room_id, date=day, defaults={"delta": delta}
            )
        return adjustment

    def _pending_expired(self, pending, now=None):
        now = now or timezone.now()
        ttl = timedelta(minutes=settings.PENDING_RESERVATION_TTL_MINUTES)
        return pending.created_at < now - ttl

    def get_pending_reservation(self, user_id):
        pending = (
            PendingReservation.objects.select_related("room").filter(user_id=user_id).first()
        )
        if pending is None:
            return None
        if self._pending_expired(pending):
            logger.info(f"만료된 임시 예약 삭제: {user_id}")
            pending.delete()
            return None
        return pending

    def save_pending_reservation(self, user_id, room_id, check_in, check_out, total_price):
        # 덮어쓰기 시 TTL 도 새로 시작
        with transaction.atomic():
            PendingReservation.objects.filter(user_id=user_id).delete()
            return PendingReservation.objects.create(
                user_id=user_id,
                room_id=room_id,
                check_in=to_instant(check_in),
                check_out=to_instant(check_out),
                total_price=total_price,
            )

    def delete_pending_reservation(self, user_id):
        deleted, _ = PendingReservation.objects.filter(user_id=user_id).delete()
        return deleted > 0

    def cleanup_expired_pending_reservations(self, now=None):
        now = now or timezone.now()
        ttl = timedelta(minutes=settings.PENDING_RESERVATION_TTL_MINUTES)
        deleted, _ = PendingReservation.objects.filter(created_at__lt=now - ttl).delete()
        return deleted

    def get_chatbot_message(self, situation):
        message = ChatbotMessage.objects.filter(situation=situation).first()
        return message.message if message else None

    def get_customer_by_user_id(self, user_id):
        return Customer.objects.get_by_user_id(user_id)

    def get_or_create_customer_by_user_id(self, user_id, name=None, phone=None):
        return Customer.objects.get_or_create_by_user_id(user_id, name=name, phone=phone)


_default_store = DjangoReservationStore()


def get_store():
    return _default_store
