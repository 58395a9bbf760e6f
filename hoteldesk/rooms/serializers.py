from django.db.models import Max
from rest_framework import serializers

from .models import Room, RoomInventoryAdjustment
from .pricing import validate_prices


class RoomSerializer(serializers.ModelSerializer):
    class Meta:
        model = Room
        fields = [
            "room_id",
            "room_type",
            "room_image_url",
            "prices",
            "inventory",
            "discount_rate",
            "sort_order",
            "day_use_check_in",
            "day_use_check_out",
            "stay_check_in",
            "stay_check_out",
            "created_at",
            "updated_at",
        ]
        read_only_fields = ["room_id", "created_at", "updated_at"]

    def validate_prices(self, value):
        error = validate_prices(value)
        if error:
            raise serializers.ValidationError(error)
        return value

    def validate_inventory(self, value):
        if value < 0:
            raise serializers.ValidationError("inventory 는 0 이상이어야 합니다.")
        return value

    def validate_discount_rate(self, value):
        if value is not None and not 0 <= value <= 100:
            raise serializers.ValidationError("discount_rate 는 0~100 사이여야 합니다.")
        return value

    def create(self, validated_data):
        # sort_order 가 없으면 맨 뒤에 추가
        if validated_data.get("sort_order") is None:
            current_max = Room.objects.aggregate(m=Max("sort_order"))["m"]
            validated_data["sort_order"] = (current_max or 0) + 1
        return super().create(validated_data)


class RoomInventoryAdjustmentSerializer(serializers.ModelSerializer):
    room_id = serializers.IntegerField(read_only=True)
    date = serializers.DateField(format="%Y-%m-%d")

    class Meta:
        model = RoomInventoryAdjustment
        fields = ["room_id", "date", "delta"]
