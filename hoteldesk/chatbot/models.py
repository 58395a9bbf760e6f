from django.db import models

from customers.models import BaseModel, Customer

MESSAGE_HISTORY_LIMIT = 10


class ChatbotMessage(BaseModel):
    situation = models.CharField(max_length=50, primary_key=True)  # 예: phone_input_request
    description = models.CharField(max_length=200, blank=True)
    message = models.TextField()

    def __str__(self):
        return self.situation


class ChatbotMessageHistory(BaseModel):
    history_id = models.AutoField(primary_key=True)
    chatbot_message = models.ForeignKey(
        ChatbotMessage, on_delete=models.CASCADE, related_name="histories"
    )
    message = models.TextField()  # 수정 전 문구

    class Meta:
        ordering = ["-created_at", "-history_id"]


class ChatHistory(BaseModel):
    chat_history_id = models.AutoField(primary_key=True)
    customer = models.OneToOneField(
        Customer, on_delete=models.CASCADE, related_name="chat_history"
    )
    # [{"id", "sender": "user"|"bot", "timestamp", "content", "raw"}]
    messages = models.JSONField(default=list)

    class Meta:
        ordering = ["-updated_at"]
