"""카카오 응답 블록과 챗봇 멘트"""

import pytest

from chatbot import kakao
from chatbot.messages import DEFAULT_TEXTS, FALLBACK_TEXT, get_message


class BrokenStore:
    def get_chatbot_message(self, situation):
        raise RuntimeError("db down")


class DictStore:
    def __init__(self, messages):
        self.messages = messages

    def get_chatbot_message(self, situation):
        return self.messages.get(situation)


def test_text_response_shape():
    response = kakao.text_response("안녕", [kakao.quick_reply("처음으로")])
    assert response == {
        "version": "2.0",
        "template": {
            "outputs": [{"simpleText": {"text": "안녕"}}],
            "quickReplies": [
                {"label": "처음으로", "messageText": "처음으로", "action": "message"}
            ],
        },
    }


def test_block_button():
    data = kakao.button("날짜 선택", block_id="block-1")
    assert data["action"] == "block"
    assert data["blockId"] == "block-1"


def test_carousel_and_list_are_capped():
    assert len(kakao.carousel([{}] * 15)["carousel"]["items"]) == kakao.MAX_CAROUSEL_ITEMS
    assert len(kakao.list_card("내역", [{}] * 8)["listCard"]["items"]) == kakao.MAX_LIST_ITEMS


def test_carousels_split_by_ten_and_stop_at_output_limit():
    split = kakao.carousels([{"n": n} for n in range(12)])
    assert [len(c["carousel"]["items"]) for c in split] == [10, 2]
    assert split[1]["carousel"]["items"][0] == {"n": 10}

    capped = kakao.carousels([{}] * 35, max_outputs=2)
    assert [len(c["carousel"]["items"]) for c in capped] == [10, 10]
    assert kakao.carousels([]) == []


def test_commerce_card_without_discount_omits_discount_fields():
    card = kakao.commerce_card("스탠다드", "", 50000, 0, 50000, "http://img", [])
    assert "discountRate" not in card


def test_response_size_counts_utf8_bytes(settings):
    settings.KAKAO_RESPONSE_MAX_BYTES = 30720
    response = kakao.text_response("가" * 10)
    assert kakao.response_size(response) > 30
    assert kakao.check_response_size(response) == kakao.response_size(response)


def test_extract_text():
    assert kakao.extract_text(kakao.text_response("안녕")) == "안녕"
    card = kakao.skill_response([kakao.text_card("스탠다드", "설명")])
    assert kakao.extract_text(card) == "스탠다드"
    assert kakao.extract_text(kakao.skill_response([kakao.carousel([])])) == "메시지"


def test_get_message_prefers_store_text():
    store = DictStore({"today_stay": "편집된 멘트"})
    assert get_message("today_stay", store) == "편집된 멘트"
    assert get_message("today_day_use", store) == DEFAULT_TEXTS["today_day_use"]


@pytest.mark.parametrize("situation", ["today_stay", "no_such_situation"])
def test_get_message_falls_back_when_store_fails(situation):
    expected = DEFAULT_TEXTS.get(situation, FALLBACK_TEXT)
    assert get_message(situation, BrokenStore()) == expected
