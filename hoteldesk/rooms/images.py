"""
객실 이미지

관리자 화면에서 직접 올린 이미지는 data URL(base64)로 room_image_url 에 저장된다.
카카오 응답에는 data URL 대신 이미지 서빙 주소를 넣는다.
"""

import base64
import binascii
import re

from django.conf import settings

DATA_URL_PATTERN = re.compile(r"^data:([^;,]+);base64,(.+)$", re.DOTALL)


def is_data_url(value):
    return bool(value) and value.startswith("data:")


def parse_data_url(value):
    """data URL -> (mime_type, bytes). 형식이 맞지 않으면 None."""
    match = DATA_URL_PATTERN.match(value or "")
    if match is None:
        return None
    try:
        return match.group(1), base64.b64decode(match.group(2), validate=True)
    except (binascii.Error, ValueError):
        return None


def room_image_path(room_id):
    return f"/v1/rooms/{room_id}/image/"


def public_image_url(room):
    # 카드 썸네일용: 업로드 이미지는 서빙 주소, 외부 URL 은 그대로, 없으면 대체 이미지
    if is_data_url(room.room_image_url):
        return f"{settings.BASE_URL.rstrip('/')}{room_image_path(room.room_id)}"
    return room.room_image_url or settings.ROOM_PLACEHOLDER_IMAGE_URL
