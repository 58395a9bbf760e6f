from rest_framework import serializers

from .models import ChatbotMessage, ChatbotMessageHistory, ChatHistory


class ChatbotMessageSerializer(serializers.ModelSerializer):
    class Meta:
        model = ChatbotMessage
        fields = ["situation", "description", "message", "updated_at"]
        read_only_fields = ["situation", "updated_at"]


class ChatbotMessageHistorySerializer(serializers.ModelSerializer):
    class Meta:
        model = ChatbotMessageHistory
        fields = ["history_id", "message", "created_at"]


class ChatHistorySerializer(serializers.ModelSerializer):
    customer_id = serializers.IntegerField(source="customer.customer_id", read_only=True)
    customer_name = serializers.CharField(source="customer.customer_name", read_only=True)
    phone = serializers.CharField(source="customer.phone", read_only=True)
    user_id = serializers.CharField(source="customer.user_id", read_only=True)

    class Meta:
        model = ChatHistory
        fields = [
            "chat_history_id",
            "customer_id",
            "customer_name",
            "phone",
            "user_id",
            "messages",
            "created_at",
            "updated_at",
        ]


class ChatHistorySummarySerializer(ChatHistorySerializer):
    message_count = serializers.SerializerMethodField()
    last_message = serializers.SerializerMethodField()

    class Meta(ChatHistorySerializer.Meta):
        fields = [
            "chat_history_id",
            "customer_id",
            "customer_name",
            "phone",
            "user_id",
            "message_count",
            "last_message",
            "updated_at",
        ]

    def get_message_count(self, obj):
        return len(obj.messages or [])

    def get_last_message(self, obj):
        if not obj.messages:
            return None
        return obj.messages[-1].get("content")
