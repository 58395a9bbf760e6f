from django.db import models

from customers.models import BaseModel, Customer
from rooms.models import Room

DEFAULT_RESERVATION_TYPE_ID = "default"


class ReservationType(BaseModel):
    type_id = models.CharField(max_length=50, primary_key=True)
    name = models.CharField(max_length=50)
    color = models.CharField(max_length=20, default="#3b82f6")

    def __str__(self):
        return self.name


class Reservation(BaseModel):
    SOURCE_CHOICES = [
        ("kakao", "카카오톡"),
        ("manual", "관리자 수기"),
    ]
    STATUS_CHOICES = [
        ("pending", "확인 대기"),
        ("confirmed", "확정"),
        ("rejected", "거절"),
        ("cancelled_by_guest", "고객 취소"),
        ("cancelled_by_admin", "관리자 취소"),
    ]

    reservation_id = models.AutoField(primary_key=True)
    room = models.ForeignKey(Room, on_delete=models.PROTECT, related_name="reservations")
    customer = models.ForeignKey(
        Customer, on_delete=models.PROTECT, related_name="reservations"
    )
    source = models.CharField(max_length=10, choices=SOURCE_CHOICES)
    reservation_type = models.ForeignKey(
        ReservationType,
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name="reservations",
    )
    check_in = models.DateTimeField()
    check_out = models.DateTimeField()  # 대실은 체크인과 같은 날짜
    status = models.CharField(max_length=20, choices=STATUS_CHOICES, default="pending")
    total_price = models.PositiveIntegerField(default=0)
    admin_memo = models.TextField(blank=True)
    guest_cancellation_confirmed = models.BooleanField(default=False)

    class Meta:
        ordering = ["-created_at"]

    def __str__(self):
        return f"#{self.reservation_id} {self.room_id} {self.status}"


class PendingReservation(BaseModel):
    # 객실 선택 후 전화번호 입력 대기 상태. 카카오 사용자당 하나
    user_id = models.CharField(max_length=100, primary_key=True)
    room = models.ForeignKey(Room, on_delete=models.CASCADE)
    check_in = models.DateTimeField()
    check_out = models.DateTimeField()
    total_price = models.PositiveIntegerField(default=0)
