"""
카카오 i 오픈빌더 스킬 응답 블록

응답 형식: {"version": "2.0", "template": {"outputs": [...], "quickReplies": [...]}}
"""

import json

from django.conf import settings

from logger import get_logger

logger = get_logger("hoteldesk.chatbot")

SKILL_VERSION = "2.0"
MAX_OUTPUTS = 3
MAX_CAROUSEL_ITEMS = 10
MAX_LIST_ITEMS = 5


def simple_text(text):
    return {"simpleText": {"text": text}}


def text_card(title, description="", buttons=None):
    card = {"title": title, "description": description}
    if buttons:
        card["buttons"] = buttons
    return {"textCard": card}


def button(label, message_text=None, block_id=None, extra=None):
    data = {"label": label}
    if block_id:
        data.update({"action": "block", "blockId": block_id})
    else:
        data["action"] = "message"
    data["messageText"] = message_text or label
    if extra:
        data["extra"] = extra
    return data


def quick_reply(label, message_text=None, block_id=None, extra=None):
    data = {"label": label, "messageText": message_text or label}
    if block_id:
        data.update({"action": "block", "blockId": block_id})
    else:
        data["action"] = "message"
    if extra:
        data["extra"] = extra
    return data


def commerce_card(title, description, price, discount_rate, discounted_price, image_url, buttons):
    card = {
        "title": title,
        "description": description,
        "price": price,
        "currency": "won",
        "thumbnails": [{"imageUrl": image_url, "altText": title}],
        "buttons": buttons,
    }
    if discount_rate:
        card["discountRate"] = discount_rate
        card["discountedPrice"] = discounted_price
    return card


def carousel(items, card_type="commerceCard"):
    if len(items) > MAX_CAROUSEL_ITEMS:
        logger.warning(
            f"캐로셀 카드 {len(items)}개 중 {len(items) - MAX_CAROUSEL_ITEMS}개가 잘립니다."
        )
    return {"carousel": {"type": card_type, "items": items[:MAX_CAROUSEL_ITEMS]}}


def carousels(items, max_outputs=MAX_OUTPUTS, card_type="commerceCard"):
    """카드를 10개씩 나눠 캐로셀 여러 개로. 출력 개수(max_outputs)를 넘는 카드는 경고 후 제외."""
    chunks = [
        items[start : start + MAX_CAROUSEL_ITEMS]
        for start in range(0, len(items), MAX_CAROUSEL_ITEMS)
    ]
    if len(chunks) > max_outputs:
        dropped = sum(len(chunk) for chunk in chunks[max_outputs:])
        logger.warning(f"캐로셀 출력 제한으로 카드 {dropped}개가 표시되지 않습니다.")
        chunks = chunks[:max_outputs]
    return [carousel(chunk, card_type) for chunk in chunks]


def list_item(title, description="", message_text=None, extra=None):
    item = {"title": title, "description": description, "action": "message"}
    item["messageText"] = message_text or title
    if extra:
        item["extra"] = extra
    return item


def list_card(header_title, items, buttons=None):
    if len(items) > MAX_LIST_ITEMS:
        logger.warning(f"리스트 카드 {len(items)}개 중 {len(items) - MAX_LIST_ITEMS}개가 잘립니다.")
    card = {"header": {"title": header_title}, "items": items[:MAX_LIST_ITEMS]}
    if buttons:
        card["buttons"] = buttons
    return {"listCard": card}


def skill_response(outputs, quick_replies=None):
    template = {"outputs": outputs}
    if quick_replies:
        template["quickReplies"] = quick_replies
    return {"version": SKILL_VERSION, "template": template}


def text_response(text, quick_replies=None):
    return skill_response([simple_text(text)], quick_replies)


def response_size(response):
    return len(json.dumps(response, ensure_ascii=False).encode("utf-8"))


def check_response_size(response, label="skill"):
    """카카오 응답 크기 제한 확인. 초과해도 자르지 않고 로그만 남긴다."""
    size = response_size(response)
    max_size = settings.KAKAO_RESPONSE_MAX_BYTES
    percent = size / max_size * 100
    logger.info(f"[응답 크기][{label}] {size:,} bytes / {max_size:,} bytes ({percent:.1f}%)")
    if size > max_size:
        logger.error(f"[{label}] 응답 크기가 제한을 초과했습니다! {size - max_size} bytes 초과")
    elif size > max_size * 0.9:
        logger.warning(f"[{label}] 응답 크기가 제한에 근접했습니다. ({percent:.1f}% 사용 중)")
    return size


def extract_text(response):
    # 채팅 기록용 대표 텍스트
    for output in (response.get("template") or {}).get("outputs") or []:
        if "simpleText" in output and output["simpleText"].get("text"):
            return output["simpleText"]["text"]
        if "textCard" in output:
            card = output["textCard"]
            if card.get("title"):
                return card["title"]
            if card.get("description"):
                return card["description"]
    return "메시지"
