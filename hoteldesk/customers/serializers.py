from rest_framework import serializers

from .models import Customer


class CustomerSerializer(serializers.ModelSerializer):
    class Meta:
        model = Customer
        fields = [
            "customer_id",
            "customer_name",
            "phone",
            "user_id",
            "memo",
            "created_at",
            "updated_at",
        ]
