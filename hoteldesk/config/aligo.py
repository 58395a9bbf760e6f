"""
알리고 SMS / 알림톡 API 클라이언트

- SMS: https://apis.aligo.in/send/
- 알림톡: https://kakaoapi.aligo.in/akv10/...

모든 실패는 UpstreamError 로 올린다. 호출하는 쪽(reservations.notifications)에서
로깅 후 삼킨다.
"""

import re
import requests
from django.conf import settings

from config.exceptions import UpstreamError

ALIGO_SMS_URL = "https://apis.aligo.in/send/"
ALIGO_ALIMTALK_BASE = "https://kakaoapi.aligo.in"

REQUEST_TIMEOUT = 10  # 초


def _post_form(url, params):
    # 빈 값은 보내지 않음
    body = {k: str(v) for k, v in params.items() if v is not None and v != ""}
    try:
        response = requests.post(url, data=body, timeout=REQUEST_TIMEOUT)
        response.raise_for_status()
    except requests.RequestException as e:
        raise UpstreamError("aligo", f"요청 실패 : {e}")

    # 알리고는 text/html 로 JSON 을 내려주기도 함
    try:
        return response.json()
    except ValueError:
        raise UpstreamError("aligo", f"응답 파싱 실패: {response.text[:200]}")


def send_sms(receiver, msg, testmode=None):
    api_key = settings.ALIGO_API_KEY
    user_id = settings.ALIGO_USER_ID
    sender = settings.ALIGO_SENDER
    if not api_key or not user_id or not sender:
        raise UpstreamError(
            "aligo", "알리고 API 설정이 완료되지 않았습니다. secrets.json 을 확인하세요."
        )

    if testmode is None:
        testmode = settings.ALIGO_TEST_MODE

    data = _post_form(
        ALIGO_SMS_URL,
        {
            "key": api_key,
            "user_id": user_id,
            "sender": sender,
            "receiver": receiver,
            "msg": msg,
            "testmode_yn": "Y" if testmode else None,
        },
    )
    # result_code 는 "1" 이 성공
    if str(data.get("result_code")) != "1":
        raise UpstreamError(
            "aligo", f"SMS 발송 오류: {data.get('message') or data.get('result_code')}", data
        )
    return data


def _alimtalk_credentials():
    apikey = settings.ALIGO_API_KEY
    userid = settings.ALIGO_USER_ID
    senderkey = settings.ALIGO_SENDER_KEY
    sender = settings.ALIGO_SENDER
    if not apikey or not userid or not senderkey or not sender:
        raise UpstreamError(
            "alimtalk",
            "알림톡 API 설정이 완료되지 않았습니다. ALIGO_API_KEY, ALIGO_USER_ID, ALIGO_SENDER_KEY, ALIGO_SENDER 를 확인하세요.",
        )
    return apikey, userid, senderkey, sender


def get_template_list():
    apikey, userid, senderkey, _ = _alimtalk_credentials()
    data = _post_form(
        f"{ALIGO_ALIMTALK_BASE}/akv10/template/list/",
        {"apikey": apikey, "userid": userid, "senderkey": senderkey},
    )
    if data.get("code") != 0:
        raise UpstreamError("alimtalk", f"템플릿 목록 조회 실패: {data.get('message')}", data)

    templates = data.get("list") or []
    # 가끔 [[...]] 형태로 내려오는 경우가 있음
    if templates and isinstance(templates[0], list):
        templates = [t for group in templates for t in group]
    return templates


def get_template_content(tpl_code):
    for template in get_template_list():
        if template.get("templtCode") == tpl_code:
            return template.get("templtContent")
    return None


def fill_template(content, variables):
    # #{변수명} 치환, 모르는 변수는 그대로 둔다
    def replace(match):
        key = match.group(1)
        if key in variables and variables[key] is not None:
            return str(variables[key])
        return match.group(0)

    return re.sub(r"#\{([^}]+)\}", replace, content)


def send_alimtalk(tpl_code, receiver, subject, message, recvname=None, testmode=None):
    apikey, userid, senderkey, sender = _alimtalk_credentials()
    if testmode is None:
        testmode = settings.ALIGO_TEST_MODE

    data = _post_form(
        f"{ALIGO_ALIMTALK_BASE}/akv10/alimtalk/send/",
        {
            "apikey": apikey,
            "userid": userid,
            "senderkey": senderkey,
            "tpl_code": tpl_code,
            "sender": sender,
            "receiver_1": receiver,
            "recvname_1": recvname,
            "subject_1": subject,
            "message_1": message,
            "testMode": "Y" if testmode else "N",
        },
    )
    if data.get("code") != 0:
        raise UpstreamError("alimtalk", f"알림톡 발송 실패: {data.get('message')}", data)
    return data
