"""
hoteldesk 프로젝트 설정

비밀값은 config.secrets.get_secret 으로 secrets.json / 환경변수에서 읽는다.
"""

from pathlib import Path

from config.secrets import get_secret, get_bool_secret

BASE_DIR = Path(__file__).resolve().parent.parent

SECRET_KEY = get_secret("SECRET_KEY", "django-insecure-hoteldesk-dev-key")

DEBUG = get_bool_secret("DEBUG", True)

ALLOWED_HOSTS = get_secret("ALLOWED_HOSTS", ["*"])


INSTALLED_APPS = [
    "django.contrib.auth",
    "django.contrib.contenttypes",
    "django.contrib.staticfiles",
    "rest_framework",
    "drf_yasg",
    "customers",
    "rooms",
    "reservations.apps.ReservationsConfig",
    "chatbot",
]

MIDDLEWARE = [
    "django.middleware.security.SecurityMiddleware",
    "django.middleware.common.CommonMiddleware",
]

ROOT_URLCONF = "config.urls"

TEMPLATES = [
    {
        "BACKEND": "django.template.backends.django.DjangoTemplates",
        "DIRS": [],
        "APP_DIRS": True,
        "OPTIONS": {
            "context_processors": [
                "django.template.context_processors.request",
            ],
        },
    },
]

WSGI_APPLICATION = "config.wsgi.application"


# Database
DATABASES = get_secret(
    "DATABASES",
    {
        "default": {
            "ENGINE": "django.db.backends.sqlite3",
            "NAME": BASE_DIR / "db.sqlite3",
        }
    },
)

CACHES = {
    "default": {
        "BACKEND": "django.core.cache.backends.locmem.LocMemCache",
        "LOCATION": "hoteldesk",
    }
}

LANGUAGE_CODE = "ko-kr"

TIME_ZONE = "Asia/Seoul"

USE_I18N = True

USE_TZ = True

STATIC_URL = "static/"

DEFAULT_AUTO_FIELD = "django.db.models.BigAutoField"


# 관리자 API 는 인증 없이 운영 (내부망 전용)
REST_FRAMEWORK = {
    "DEFAULT_AUTHENTICATION_CLASSES": [],
    "DEFAULT_PERMISSION_CLASSES": ["rest_framework.permissions.AllowAny"],
}

SWAGGER_SETTINGS = {
    "USE_SESSION_AUTH": False,
    "SECURITY_DEFINITIONS": {},
}


# 서비스 기본 주소 (SMS 링크, 객실 이미지 대체 URL)
BASE_URL = get_secret("BASE_URL", "http://localhost:8000")
HOTEL_NAME = get_secret("HOTEL_NAME", "팰리스호텔")
ROOM_PLACEHOLDER_IMAGE_URL = get_secret(
    "ROOM_PLACEHOLDER_IMAGE_URL", BASE_URL.rstrip("/") + "/static/room-placeholder.png"
)

# 알리고 SMS / 알림톡
ALIGO_API_KEY = get_secret("ALIGO_API_KEY", "")
ALIGO_USER_ID = get_secret("ALIGO_USER_ID", "")
ALIGO_SENDER = get_secret("ALIGO_SENDER", "")
ALIGO_SENDER_KEY = get_secret("ALIGO_SENDER_KEY", "")
ALIGO_ADMIN_PHONE = get_secret("ALIGO_ADMIN_PHONE", "")
ALIGO_TEST_MODE = get_bool_secret("ALIGO_TEST_MODE", True)

# 용도별 알림톡 템플릿 코드 (승인된 템플릿만 발송 가능)
ALIMTALK_TEMPLATES = {
    "request_notify_admin": get_secret("ALIMTALK_TEMPLATE_ADMIN", ""),
    "guest_cancel_notify_admin": get_secret("ALIMTALK_TEMPLATE_GUEST_CANCEL", ""),
    "confirm_guest": get_secret("ALIMTALK_TEMPLATE_CONFIRMED", ""),
    "reject_guest": get_secret("ALIMTALK_TEMPLATE_REJECTED", ""),
    "admin_cancel_guest": get_secret("ALIMTALK_TEMPLATE_ADMIN_CANCEL", ""),
}

# 알림은 커밋 이후 워커 스레드에서 발송 (테스트에서는 False 로 동기 실행)
NOTIFICATIONS_ASYNC = get_bool_secret("NOTIFICATIONS_ASYNC", True)

# 카카오 챗봇
KAKAO_BOT_ID = get_secret("KAKAO_BOT_ID", "")
KAKAO_REST_API_KEY = get_secret("KAKAO_REST_API_KEY", "")
KAKAO_EVENT_NAME = get_secret("KAKAO_EVENT_NAME", "admin_message")
KAKAO_RESPONSE_MAX_BYTES = 30720
KAKAO_BLOCK_IDS = {
    "day_use_date": get_secret("KAKAO_BLOCK_DAY_USE_DATE", ""),
    "stay_date": get_secret("KAKAO_BLOCK_STAY_DATE", ""),
}

PENDING_RESERVATION_TTL_MINUTES = 10
CHATBOT_DEFAULT_DISCOUNT_RATE = int(get_secret("CHATBOT_DEFAULT_DISCOUNT_RATE", 10))
CHATBOT_HISTORY_LIMIT = 5
