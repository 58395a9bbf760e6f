from django.db import transaction

from chatbot.data.default_messages import default_messages
from chatbot.models import MESSAGE_HISTORY_LIMIT, ChatbotMessage, ChatbotMessageHistory

from logger import get_logger

logger = get_logger("hoteldesk.chatbot")

DEFAULT_TEXTS = {item["situation"]: item["message"] for item in default_messages}
FALLBACK_TEXT = DEFAULT_TEXTS["default_greeting"]


def get_message(situation, store):
    """DB 멘트 우선, 없거나 조회 실패 시 기본 멘트."""
    try:
        text = store.get_chatbot_message(situation)
    except Exception:
        logger.exception(f"챗봇 멘트 조회 실패: {situation}")
        text = None
    if text:
        return text
    return DEFAULT_TEXTS.get(situation, FALLBACK_TEXT)


def seed_default_messages(overwrite=False):
    created = 0
    for item in default_messages:
        if overwrite:
            ChatbotMessage.objects.update_or_create(
                situation=item["situation"],
                defaults={"description": item["description"], "message": item["message"]},
            )
            continue
        _, is_new = ChatbotMessage.objects.get_or_create(
            situation=item["situation"],
            defaults={"description": item["description"], "message": item["message"]},
        )
        created += int(is_new)
    return created


def update_message(chatbot_message, new_text, description=None):
    # 이전 문구는 이력으로 (상황별 최근 10개만 유지)
    with transaction.atomic():
        if new_text != chatbot_message.message:
            ChatbotMessageHistory.objects.create(
                chatbot_message=chatbot_message, message=chatbot_message.message
            )
            stale_ids = list(
                chatbot_message.histories.order_by("-created_at", "-history_id").values_list(
                    "history_id", flat=True
                )[MESSAGE_HISTORY_LIMIT:]
            )
            if stale_ids:
                ChatbotMessageHistory.objects.filter(history_id__in=stale_ids).delete()
            chatbot_message.message = new_text
        if description is not None:
            chatbot_message.description = description
        chatbot_message.save()
    return chatbot_message
