from django.db import models

from customers.models import BaseModel


class Room(BaseModel):
    DAY_CHOICES = [
        ("monday", "월"),
        ("tuesday", "화"),
        ("wednesday", "수"),
        ("thursday", "목"),
        ("friday", "금"),
        ("saturday", "토"),
        ("sunday", "일"),
    ]
    room_id = models.AutoField(primary_key=True)
    room_type = models.CharField(max_length=100)  # 예: 스탠다드, 디럭스, 스위트
    room_image_url = models.TextField(blank=True)
    # {"monday": {"stay_price": 80000, "day_use_price": 40000}, ...} 요일 7개 모두
    prices = models.JSONField(default=dict)
    inventory = models.IntegerField(default=1)  # 기본 판매 객실 수
    discount_rate = models.PositiveSmallIntegerField(null=True, blank=True)  # %
    sort_order = models.IntegerField(null=True, blank=True)  # 작을수록 먼저 (카톡 캐로셀 순서)
    day_use_check_in = models.CharField(max_length=5, default="10:00")  # 대실 입실
    day_use_check_out = models.CharField(max_length=5, default="22:00")  # 대실 퇴실
    stay_check_in = models.CharField(max_length=5, default="15:00")  # 숙박 입실
    stay_check_out = models.CharField(max_length=5, default="11:00")  # 숙박 퇴실

    class Meta:
        ordering = ["sort_order", "room_id"]

    def __str__(self):
        return f"{self.room_type} (재고 {self.inventory})"


class RoomInventoryAdjustment(BaseModel):
    adjustment_id = models.AutoField(primary_key=True)
    room = models.ForeignKey(Room, on_delete=models.CASCADE, related_name="adjustments")
    date = models.DateField()
    delta = models.IntegerField()  # 기본 재고에 더해지는 조정치 (음수/양수)

    class Meta:
        unique_together = ("room", "date")
