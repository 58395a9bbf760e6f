from django.core.cache import cache
from django.shortcuts import get_object_or_404
from rest_framework import status
from rest_framework.response import Response
from rest_framework.views import APIView

# Swagger 관련 import
from drf_yasg import openapi
from drf_yasg.utils import swagger_auto_schema

from config import aligo
from config.exceptions import UpstreamError
from config.kakaoapi import send_kakao_event

from . import kakao
from .history import record_message
from .models import ChatbotMessage, ChatHistory
from .payloads import SkillRequestError, parse_skill_request
from .serializers import (
    ChatbotMessageHistorySerializer,
    ChatbotMessageSerializer,
    ChatHistorySerializer,
    ChatHistorySummarySerializer,
)
from .messages import update_message
from .skill import SkillHandler

# 로깅 파일
from logger import get_logger

logger = get_logger("hoteldesk.chatbot")

ADMIN_MESSAGE_CACHE_KEY = "kakao:admin_message:{user_id}"
ADMIN_MESSAGE_TTL = 60 * 5  # 초

skill_request_schema = openapi.Schema(
    type=openapi.TYPE_OBJECT,
    properties={
        "userRequest": openapi.Schema(type=openapi.TYPE_OBJECT),
        "action": openapi.Schema(type=openapi.TYPE_OBJECT),
    },
    required=["userRequest", "action"],
)


def _record(user_id, sender, content, raw, nickname=None):
    # 채팅 기록 실패가 챗봇 응답을 막으면 안 됨
    try:
        record_message(user_id, sender, content, raw=raw, nickname=nickname)
    except Exception:
        logger.exception(f"채팅 기록 저장 실패 (user={user_id})")


def _run_skill(request, handle, label):
    try:
        skill_request = parse_skill_request(request.data)
    except SkillRequestError as e:
        return Response({"error": str(e)}, status=400)

    _record(
        skill_request.user_id,
        "user",
        skill_request.utterance,
        skill_request.raw,
        nickname=skill_request.nickname,
    )
    response = handle(skill_request)
    kakao.check_response_size(response, label)
    _record(skill_request.user_id, "bot", kakao.extract_text(response), response)
    return Response(response)


# 카카오 스킬 API
class KakaoSkill(APIView):
    @swagger_auto_schema(
        operation_summary="카카오 챗봇 스킬",
        operation_description="""
        카카오 i 오픈빌더 스킬 요청을 처리합니다.
        - 키워드: 오늘대실, 오늘숙박, 토요일예약, 예약하기, 예약내역, 처음으로
        - 객실 카드의 예약하기 버튼 -> 전화번호 입력 -> 예약 요청 생성
        """,
        request_body=skill_request_schema,
        responses={200: "스킬 응답 (version 2.0)", 400: "userRequest, action 누락"},
    )
    def post(self, request):
        handler = SkillHandler()
        return _run_skill(request, handler.handle, "skill")


class KakaoReservationHistorySkill(APIView):
    @swagger_auto_schema(
        operation_summary="카카오 예약내역 스킬",
        operation_description="사용자의 최근 예약 목록을 리스트 카드로 응답합니다.",
        request_body=skill_request_schema,
        responses={200: "스킬 응답 (version 2.0)", 400: "userRequest, action 누락"},
    )
    def post(self, request):
        handler = SkillHandler()

        def handle(skill_request):
            try:
                return handler.reservation_history(skill_request)
            except Exception:
                logger.exception("예약내역 스킬 처리 중 예외 발생")
                return handler.greeting()

        return _run_skill(request, handle, "예약내역")


def _admin_message_text(body, user_id):
    """
    관리자 메시지 텍스트 (우선순위)
    1. action.params.text
    2. action.clientExtra.text
    3. event.data.text
    4. 이벤트 발송 시 캐시에 넣어둔 메시지
    """
    action = body.get("action") or {}
    event_data = (body.get("event") or {}).get("data") or {}
    for candidate in (
        (action.get("params") or {}).get("text"),
        (action.get("clientExtra") or {}).get("text"),
        event_data.get("text") if isinstance(event_data, dict) else None,
    ):
        if isinstance(candidate, str) and candidate.strip():
            return candidate.strip()

    key = ADMIN_MESSAGE_CACHE_KEY.format(user_id=user_id)
    cached = cache.get(key)
    if cached:
        cache.delete(key)
        return cached.strip()
    return None


class KakaoAdminMessageSkill(APIView):
    @swagger_auto_schema(
        operation_summary="관리자 메시지 스킬",
        operation_description="이벤트 블록에서 호출됩니다. 관리자가 보낸 메시지를 그대로 말풍선으로 응답합니다.",
        request_body=skill_request_schema,
        responses={200: "스킬 응답 (version 2.0)", 400: "사용자 ID / 메시지 없음"},
    )
    def post(self, request):
        body = request.data if isinstance(request.data, dict) else {}
        user_id = str(((body.get("userRequest") or {}).get("user") or {}).get("id") or "")
        if not user_id or not isinstance(body.get("action"), dict):
            return Response({"error": "userRequest.user.id, action 이 필요합니다."}, status=400)

        text = _admin_message_text(body, user_id)
        if not text:
            return Response({"error": "전달된 메시지가 없습니다."}, status=400)

        response = kakao.text_response(text)
        _record(user_id, "bot", text, response)
        return Response(response)


class KakaoEventSend(APIView):
    @swagger_auto_schema(
        operation_summary="카카오 이벤트 발송 (관리자 채팅)",
        operation_description="""
        관리자 메시지를 캐시에 저장하고 카카오 Event API 로 이벤트 블록을 실행합니다.
        - user_id 또는 user_ids 중 하나 필수 (최대 100명)
        - event_name 생략 시 KAKAO_EVENT_NAME
        """,
        request_body=openapi.Schema(
            type=openapi.TYPE_OBJECT,
            properties={
                "user_id": openapi.Schema(type=openapi.TYPE_STRING),
                "user_ids": openapi.Schema(
                    type=openapi.TYPE_ARRAY, items=openapi.Schema(type=openapi.TYPE_STRING)
                ),
                "text": openapi.Schema(type=openapi.TYPE_STRING),
                "event_name": openapi.Schema(type=openapi.TYPE_STRING),
            },
        ),
        responses={200: "카카오 API 응답", 400: "사용자 ID 누락", 502: "카카오 API 실패"},
    )
    def post(self, request):
        user_ids = request.data.get("user_ids") or []
        if not user_ids and request.data.get("user_id"):
            user_ids = [request.data.get("user_id")]
        if not user_ids:
            return Response({"error": "user_id 또는 user_ids 를 넣어주세요."}, status=400)
        user_ids = [str(user_id) for user_id in user_ids]

        text = (request.data.get("text") or "").strip()
        if text:
            for user_id in user_ids:
                cache.set(
                    ADMIN_MESSAGE_CACHE_KEY.format(user_id=user_id), text, ADMIN_MESSAGE_TTL
                )

        try:
            result = send_kakao_event(
                user_ids,
                event_data={"text": text} if text else None,
                event_name=request.data.get("event_name"),
            )
        except UpstreamError as e:
            logger.error(f"카카오 이벤트 발송 실패: {e}")
            return Response({"error": e.message}, status=status.HTTP_502_BAD_GATEWAY)
        return Response(result)


def _alimtalk_message(tpl_code, message, params):
    # 본문이 없으면 템플릿 본문에 #{변수} 치환, 템플릿을 못 찾으면 None
    if message:
        return message
    content = aligo.get_template_content(tpl_code)
    if not content:
        return None
    return aligo.fill_template(content, params if isinstance(params, dict) else {})


def _send_alimtalk(tpl_code, receiver, subject, message, recvname=None, user_id=None):
    result = aligo.send_alimtalk(
        tpl_code, receiver, subject or "알림", message, recvname=recvname
    )
    user_id = str(user_id or "").strip()
    if user_id:
        _record(user_id, "bot", message, kakao.text_response(message))
    return result


alimtalk_common_properties = {
    "tpl_code": openapi.Schema(type=openapi.TYPE_STRING),
    "subject": openapi.Schema(type=openapi.TYPE_STRING),
    "message": openapi.Schema(type=openapi.TYPE_STRING),
    "params": openapi.Schema(type=openapi.TYPE_OBJECT),
}


class AlimtalkSend(APIView):
    @swagger_auto_schema(
        operation_summary="알림톡 1건 발송",
        operation_description="""
        - tpl_code, receiver 필수
        - message 생략 시 템플릿 본문을 조회해 params 로 #{변수} 치환
        - subject 생략 시 '알림'
        - userId 가 있으면 발송 성공 후 해당 사용자 채팅 기록에 저장
        """,
        request_body=openapi.Schema(
            type=openapi.TYPE_OBJECT,
            properties={
                **alimtalk_common_properties,
                "receiver": openapi.Schema(type=openapi.TYPE_STRING),
                "recvname": openapi.Schema(type=openapi.TYPE_STRING),
                "userId": openapi.Schema(type=openapi.TYPE_STRING),
            },
            required=["tpl_code", "receiver"],
        ),
        responses={200: "알리고 응답", 400: "필수값 누락 / 템플릿 없음", 502: "알리고 API 실패"},
    )
    def post(self, request):
        tpl_code = request.data.get("tpl_code")
        receiver = request.data.get("receiver")
        if not tpl_code or not receiver:
            return Response({"error": "tpl_code, receiver는 필수입니다."}, status=400)

        try:
            message = _alimtalk_message(
                tpl_code, request.data.get("message"), request.data.get("params")
            )
            if message is None:
                return Response({"error": "템플릿 본문을 가져올 수 없습니다."}, status=400)
            result = _send_alimtalk(
                tpl_code,
                receiver,
                request.data.get("subject"),
                message,
                recvname=request.data.get("recvname"),
                user_id=request.data.get("userId"),
            )
        except UpstreamError as e:
            logger.error(f"알림톡 발송 실패 ({tpl_code} -> {receiver}): {e}")
            return Response({"error": e.message}, status=status.HTTP_502_BAD_GATEWAY)
        except Exception as e:
            logger.exception(f"알림톡 발송 중 오류: {e}")
            return Response({"error": "알림톡 발송 실패"}, status=500)

        logger.info(f"알림톡 발송 ({tpl_code} -> {receiver})")
        return Response(result)


class AlimtalkBatchSend(APIView):
    @swagger_auto_schema(
        operation_summary="알림톡 일괄 발송",
        operation_description="""
        receivers 의 각 대상에게 같은 템플릿으로 알림톡을 보냅니다.
        대상별 실패는 집계만 하고 나머지 발송은 계속합니다.
        - code: 모두 실패면 -1, 그 외 0
        """,
        request_body=openapi.Schema(
            type=openapi.TYPE_OBJECT,
            properties={
                **alimtalk_common_properties,
                "receivers": openapi.Schema(
                    type=openapi.TYPE_ARRAY,
                    items=openapi.Schema(
                        type=openapi.TYPE_OBJECT,
                        properties={
                            "phone": openapi.Schema(type=openapi.TYPE_STRING),
                            "userId": openapi.Schema(type=openapi.TYPE_STRING),
                            "recvname": openapi.Schema(type=openapi.TYPE_STRING),
                        },
                    ),
                ),
            },
            required=["tpl_code", "receivers"],
        ),
        responses={200: "발송 결과 집계", 400: "필수값 누락 / 템플릿 없음", 502: "템플릿 조회 실패"},
    )
    def post(self, request):
        tpl_code = request.data.get("tpl_code")
        receivers = request.data.get("receivers")
        if not tpl_code or not isinstance(receivers, list) or not receivers:
            return Response({"error": "tpl_code, receivers는 필수입니다."}, status=400)
        receivers = [r for r in receivers if isinstance(r, dict) and r.get("phone")]
        if not receivers:
            return Response({"error": "전화번호가 있는 대상이 없습니다."}, status=400)

        try:
            message = _alimtalk_message(
                tpl_code, request.data.get("message"), request.data.get("params")
            )
        except UpstreamError as e:
            logger.error(f"알림톡 템플릿 조회 실패 ({tpl_code}): {e}")
            return Response({"error": e.message}, status=status.HTTP_502_BAD_GATEWAY)
        if message is None:
            return Response({"error": "템플릿 본문을 가져올 수 없습니다."}, status=400)

        success_count = 0
        fail_count = 0
        for receiver in receivers:
            try:
                _send_alimtalk(
                    tpl_code,
                    receiver["phone"],
                    request.data.get("subject"),
                    message,
                    recvname=receiver.get("recvname"),
                    user_id=receiver.get("userId"),
                )
                success_count += 1
            except Exception as e:
                logger.error(f"알림톡 일괄 발송 실패 ({tpl_code} -> {receiver['phone']}): {e}")
                fail_count += 1

        if success_count == 0:
            code, result_message = -1, "모든 대상에 대한 알림톡 발송에 실패했습니다."
        elif fail_count:
            code = 0
            result_message = f"일부 대상 발송 실패 (성공 {success_count}명, 실패 {fail_count}명)"
        else:
            code, result_message = 0, f"모든 대상({success_count}명)에게 알림톡 발송 성공"
        logger.info(f"알림톡 일괄 발송 ({tpl_code}): 성공 {success_count} / 실패 {fail_count}")
        return Response(
            {
                "code": code,
                "message": result_message,
                "successCount": success_count,
                "failCount": fail_count,
            }
        )


# 챗봇 멘트 API
class ChatbotMessageList(APIView):
    @swagger_auto_schema(
        operation_summary="챗봇 멘트 목록 조회",
        responses={200: ChatbotMessageSerializer(many=True)},
    )
    def get(self, request):
        messages = ChatbotMessage.objects.all().order_by("situation")
        return Response(ChatbotMessageSerializer(messages, many=True).data)


class ChatbotMessageDetail(APIView):
    @swagger_auto_schema(
        operation_summary="챗봇 멘트 조회",
        responses={200: ChatbotMessageSerializer, 404: "존재하지 않는 상황"},
    )
    def get(self, request, situation):
        message = get_object_or_404(ChatbotMessage, situation=situation)
        return Response(ChatbotMessageSerializer(message).data)

    @swagger_auto_schema(
        operation_summary="챗봇 멘트 수정",
        operation_description="이전 문구는 이력으로 저장됩니다. (상황별 최근 10개)",
        request_body=openapi.Schema(
            type=openapi.TYPE_OBJECT,
            properties={
                "message": openapi.Schema(type=openapi.TYPE_STRING),
                "description": openapi.Schema(type=openapi.TYPE_STRING),
            },
            required=["message"],
        ),
        responses={200: ChatbotMessageSerializer, 400: "message 누락", 404: "존재하지 않는 상황"},
    )
    def put(self, request, situation):
        chatbot_message = get_object_or_404(ChatbotMessage, situation=situation)
        text = request.data.get("message")
        if not isinstance(text, str) or not text.strip():
            return Response({"error": "message 가 필요합니다."}, status=400)
        update_message(chatbot_message, text, description=request.data.get("description"))
        return Response(ChatbotMessageSerializer(chatbot_message).data)


class ChatbotMessageHistoryList(APIView):
    @swagger_auto_schema(
        operation_summary="챗봇 멘트 수정 이력 조회",
        responses={200: ChatbotMessageHistorySerializer(many=True), 404: "존재하지 않는 상황"},
    )
    def get(self, request, situation):
        chatbot_message = get_object_or_404(ChatbotMessage, situation=situation)
        histories = chatbot_message.histories.all()
        return Response(ChatbotMessageHistorySerializer(histories, many=True).data)


class ChatbotMessageHistoryDetail(APIView):
    @swagger_auto_schema(
        operation_summary="챗봇 멘트 이력 삭제",
        operation_description="최신순 목록에서 index 번째(0부터) 이력을 삭제합니다.",
        responses={204: "삭제 완료", 404: "존재하지 않는 상황 또는 index"},
    )
    def delete(self, request, situation, index):
        chatbot_message = get_object_or_404(ChatbotMessage, situation=situation)
        histories = list(chatbot_message.histories.all())
        if index >= len(histories):
            return Response({"error": "해당 이력이 없습니다."}, status=404)
        histories[index].delete()
        return Response(status=status.HTTP_204_NO_CONTENT)


# 채팅 기록 API
class ChatHistoryList(APIView):
    @swagger_auto_schema(
        operation_summary="채팅 기록 목록 조회",
        manual_parameters=[
            openapi.Parameter("user_id", openapi.IN_QUERY, type=openapi.TYPE_STRING),
        ],
        responses={200: ChatHistorySummarySerializer(many=True)},
    )
    def get(self, request):
        histories = ChatHistory.objects.select_related("customer").order_by("-updated_at")
        user_id = request.query_params.get("user_id")
        if user_id:
            histories = histories.filter(customer__user_id=user_id)
        return Response(ChatHistorySummarySerializer(histories, many=True).data)


class ChatHistoryDetail(APIView):
    @swagger_auto_schema(
        operation_summary="채팅 기록 상세 조회",
        responses={200: ChatHistorySerializer, 404: "존재하지 않는 기록"},
    )
    def get(self, request, chat_history_id):
        history = get_object_or_404(
            ChatHistory.objects.select_related("customer"), chat_history_id=chat_history_id
        )
        return Response(ChatHistorySerializer(history).data)
