"""알리고 / 카카오 이벤트 API 클라이언트 (requests.post 대체)"""

import pytest
import requests

from config import aligo, kakaoapi
from config.exceptions import UpstreamError


class FakeResponse:
    def __init__(self, data=None, status_code=200, text=""):
        self._data = data
        self.status_code = status_code
        self.text = text

    def raise_for_status(self):
        if self.status_code >= 400:
            raise requests.HTTPError(f"{self.status_code} error")

    def json(self):
        if self._data is None:
            raise ValueError("not json")
        return self._data


@pytest.fixture
def posted(monkeypatch):
    calls = []
    responses = []

    def fake_post(url, **kwargs):
        calls.append({"url": url, **kwargs})
        return responses.pop(0)

    monkeypatch.setattr(requests, "post", fake_post)
    return calls, responses


# --- SMS ---

def test_send_sms_posts_form(posted, settings):
    settings.ALIGO_TEST_MODE = True
    calls, responses = posted
    responses.append(FakeResponse({"result_code": "1", "message": "success"}))

    aligo.send_sms("010-1234-5678", "안녕하세요")
    (call,) = calls
    assert call["url"] == aligo.ALIGO_SMS_URL
    assert call["data"]["receiver"] == "010-1234-5678"
    assert call["data"]["testmode_yn"] == "Y"


def test_send_sms_error_code(posted):
    _, responses = posted
    responses.append(FakeResponse({"result_code": "-101", "message": "인증오류"}))
    with pytest.raises(UpstreamError) as excinfo:
        aligo.send_sms("010-1234-5678", "안녕하세요")
    assert excinfo.value.provider == "aligo"
    assert "인증오류" in excinfo.value.message


def test_send_sms_without_credentials(settings):
    settings.ALIGO_API_KEY = ""
    with pytest.raises(UpstreamError):
        aligo.send_sms("010-1234-5678", "안녕하세요")


def test_unparseable_response(posted):
    _, responses = posted
    responses.append(FakeResponse(None, text="<html>"))
    with pytest.raises(UpstreamError):
        aligo.send_sms("010-1234-5678", "안녕하세요")


# --- 알림톡 ---

def test_template_content_flattens_nested_list(posted):
    _, responses = posted
    responses.append(
        FakeResponse({"code": 0, "list": [[{"templtCode": "TPL_A", "templtContent": "본문 #{roomType}"}]]})
    )
    assert aligo.get_template_content("TPL_A") == "본문 #{roomType}"


def test_fill_template_keeps_unknown_variables():
    assert aligo.fill_template("#{roomType} / #{모름}", {"roomType": "스위트"}) == "스위트 / #{모름}"


def test_send_alimtalk_failure(posted):
    _, responses = posted
    responses.append(FakeResponse({"code": -99, "message": "템플릿 없음"}))
    with pytest.raises(UpstreamError) as excinfo:
        aligo.send_alimtalk("TPL_A", "010-1234-5678", "제목", "본문")
    assert excinfo.value.provider == "alimtalk"


# --- 카카오 이벤트 ---

def test_kakao_event_payload(posted, settings):
    settings.KAKAO_BOT_ID = "bot-1"
    settings.KAKAO_REST_API_KEY = "rest-key"
    settings.KAKAO_EVENT_NAME = "admin_message"
    calls, responses = posted
    responses.append(FakeResponse({"status": "SUCCESS", "taskId": "t"}))

    kakaoapi.send_kakao_event(["u1", "u2"], event_data={"text": "안내"})
    (call,) = calls
    assert call["url"] == "https://bot-api.kakao.com/v2/bots/bot-1/talk"
    assert call["headers"]["Authorization"] == "KakaoAK rest-key"
    assert call["json"]["event"] == {"name": "admin_message", "data": {"text": "안내"}}
    assert [user["id"] for user in call["json"]["user"]] == ["u1", "u2"]


def test_kakao_event_limits(settings):
    settings.KAKAO_BOT_ID = "bot-1"
    settings.KAKAO_REST_API_KEY = "rest-key"
    with pytest.raises(UpstreamError):
        kakaoapi.send_kakao_event([])
    with pytest.raises(UpstreamError):
        kakaoapi.send_kakao_event([str(i) for i in range(101)])


def test_kakao_event_fail_status(posted, settings):
    settings.KAKAO_BOT_ID = "bot-1"
    settings.KAKAO_REST_API_KEY = "rest-key"
    _, responses = posted
    responses.append(FakeResponse({"status": "FAIL", "message": "invalid bot"}))
    with pytest.raises(UpstreamError) as excinfo:
        kakaoapi.send_kakao_event(["u1"])
    assert excinfo.value.payload == {"status": "FAIL", "message": "invalid bot"}
