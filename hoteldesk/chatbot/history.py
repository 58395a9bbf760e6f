import uuid

from django.db import transaction
from django.utils import timezone

from chatbot.models import ChatHistory
from customers.models import Customer


def record_message(user_id, sender, content, raw=None, nickname=None):
    """카카오 사용자 채팅 기록에 메시지 한 건 추가. sender: user | bot"""
    if not user_id:
        return None
    customer = Customer.objects.get_or_create_by_user_id(user_id, name=nickname)
    entry = {
        "id": uuid.uuid4().hex,
        "sender": sender,
        "timestamp": timezone.now().isoformat(),
        "content": content,
        "raw": raw,
    }
    with transaction.atomic():
        history, _ = ChatHistory.objects.select_for_update().get_or_create(customer=customer)
        history.messages = list(history.messages or []) + [entry]
        history.save(update_fields=["messages", "updated_at"])
    return entry
