import uuid

from rest_framework import serializers

from .models import DEFAULT_RESERVATION_TYPE_ID, Reservation, ReservationType


class ReservationSerializer(serializers.ModelSerializer):
    room_id = serializers.IntegerField(source="room.room_id", read_only=True)
    room_type = serializers.CharField(source="room.room_type", read_only=True)
    customer_id = serializers.IntegerField(source="customer.customer_id", read_only=True)
    guest_name = serializers.CharField(source="customer.customer_name", read_only=True)
    guest_phone = serializers.CharField(source="customer.phone", read_only=True)
    user_id = serializers.CharField(source="customer.user_id", read_only=True, allow_null=True)
    reservation_type_id = serializers.CharField(
        source="reservation_type.type_id", read_only=True, allow_null=True
    )

    class Meta:
        model = Reservation
        fields = [
            "reservation_id",
            "room_id",
            "room_type",
            "customer_id",
            "guest_name",
            "guest_phone",
            "user_id",
            "source",
            "reservation_type_id",
            "check_in",
            "check_out",
            "status",
            "total_price",
            "admin_memo",
            "guest_cancellation_confirmed",
            "created_at",
        ]


class ReservationTypeSerializer(serializers.ModelSerializer):
    type_id = serializers.CharField(max_length=50, required=False)

    class Meta:
        model = ReservationType
        fields = ["type_id", "name", "color", "created_at"]
        read_only_fields = ["created_at"]

    def validate_type_id(self, value):
        if self.instance is None and ReservationType.objects.filter(type_id=value).exists():
            raise serializers.ValidationError("이미 존재하는 예약 유형 ID 입니다.")
        return value

    def validate(self, data):
        if self.instance is not None and self.instance.type_id == DEFAULT_RESERVATION_TYPE_ID:
            raise serializers.ValidationError({"error": "기본 예약 유형은 수정할 수 없습니다."})
        if self.instance is not None and data.get("type_id", self.instance.type_id) != self.instance.type_id:
            raise serializers.ValidationError({"error": "예약 유형 ID 는 변경할 수 없습니다."})
        return data

    def create(self, validated_data):
        validated_data.setdefault("type_id", f"type_{uuid.uuid4().hex[:8]}")
        return super().create(validated_data)
