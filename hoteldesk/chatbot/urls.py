from django.urls import path
from .views import (
    AlimtalkBatchSend,
    AlimtalkSend,
    ChatbotMessageDetail,
    ChatbotMessageHistoryDetail,
    ChatbotMessageHistoryList,
    ChatbotMessageList,
    ChatHistoryDetail,
    ChatHistoryList,
    KakaoAdminMessageSkill,
    KakaoEventSend,
    KakaoReservationHistorySkill,
    KakaoSkill,
)

urlpatterns = [
    # 카카오 스킬 / 이벤트
    path("kakao/skill/", KakaoSkill.as_view(), name="kakao-skill"),
    path(
        "kakao/skill/reservation-history/",
        KakaoReservationHistorySkill.as_view(),
        name="kakao-skill-reservation-history",
    ),
    path(
        "kakao/skill/admin-message/",
        KakaoAdminMessageSkill.as_view(),
        name="kakao-skill-admin-message",
    ),
    path("kakao/event/send/", KakaoEventSend.as_view(), name="kakao-event-send"),

    # 알림톡 수동 발송
    path("alimtalk/send/", AlimtalkSend.as_view(), name="alimtalk-send"),
    path("alimtalk/batch-send/", AlimtalkBatchSend.as_view(), name="alimtalk-batch-send"),

    # 챗봇 멘트
    path("chatbot-messages/", ChatbotMessageList.as_view(), name="chatbot-message-list"),
    path(
        "chatbot-messages/<str:situation>/",
        ChatbotMessageDetail.as_view(),
        name="chatbot-message-detail",
    ),
    path(
        "chatbot-messages/<str:situation>/history/",
        ChatbotMessageHistoryList.as_view(),
        name="chatbot-message-history",
    ),
    path(
        "chatbot-messages/<str:situation>/history/<int:index>/",
        ChatbotMessageHistoryDetail.as_view(),
        name="chatbot-message-history-detail",
    ),

    # 채팅 기록
    path("chat-histories/", ChatHistoryList.as_view(), name="chat-history-list"),
    path(
        "chat-histories/<int:chat_history_id>/",
        ChatHistoryDetail.as_view(),
        name="chat-history-detail",
    ),
]
