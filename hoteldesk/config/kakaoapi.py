import requests
from django.conf import settings

from config.exceptions import UpstreamError

KAKAO_BOT_API = "https://bot-api.kakao.com"

MAX_EVENT_USERS = 100


# 카카오 챗봇 Event API 로 이벤트 블록 실행 -> 사용자에게 말풍선 전송
def send_kakao_event(user_ids, event_data=None, event_name=None, user_key_type="botUserKey"):
    bot_id = settings.KAKAO_BOT_ID
    rest_api_key = settings.KAKAO_REST_API_KEY
    event_name = event_name or settings.KAKAO_EVENT_NAME

    if not bot_id or not rest_api_key or not event_name:
        raise UpstreamError(
            "kakao", "KAKAO_BOT_ID, KAKAO_REST_API_KEY, KAKAO_EVENT_NAME 이 필요합니다."
        )
    if not user_ids:
        raise UpstreamError("kakao", "최소 1명의 사용자 ID가 필요합니다.")
    if len(user_ids) > MAX_EVENT_USERS:
        raise UpstreamError("kakao", "한 번에 최대 100명까지 발송 가능합니다.")

    kakao_api_url = f"{KAKAO_BOT_API}/v2/bots/{bot_id}/talk"
    headers = {
        "Authorization": f"KakaoAK {rest_api_key}",
        "Content-Type": "application/json",
    }
    event = {"name": event_name}
    if event_data:
        event["data"] = event_data
    payload = {
        "event": event,
        "user": [{"type": user_key_type, "id": user_id} for user_id in user_ids],
    }

    try:
        response = requests.post(kakao_api_url, headers=headers, json=payload, timeout=10)
        response.raise_for_status()
        data = response.json()
    except requests.RequestException as e:
        raise UpstreamError("kakao", f"Kakao API 요청 실패 : {e}")
    except ValueError:
        raise UpstreamError("kakao", f"Kakao API 응답 파싱 실패: {response.text[:200]}")

    # status: SUCCESS | FAIL | ERROR
    if data.get("status") != "SUCCESS":
        raise UpstreamError("kakao", f"이벤트 발송 실패: {data.get('message')}", data)
    return data
