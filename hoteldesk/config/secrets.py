import os, json
from pathlib import Path
from django.core.exceptions import ImproperlyConfigured

BASE_DIR = Path(__file__).resolve().parent.parent

secret_file = Path(os.getenv("HOTELDESK_SECRETS_FILE", BASE_DIR / "secrets.json"))

# secrets.json 이 없으면 환경변수만 사용
if secret_file.exists():
    with open(secret_file, encoding="utf-8") as f:
        secrets = json.loads(f.read())
else:
    secrets = {}

_MISSING = object()


def get_secret(setting, default=_MISSING, secrets=secrets):
    # secrets.json -> 환경변수 -> 기본값 순서로 찾고, 어디에도 없으면 예외
    if setting in secrets:
        return secrets[setting]
    if setting in os.environ:
        return os.environ[setting]
    if default is not _MISSING:
        return default
    error_msg = "Set the {} environment variable".format(setting)
    raise ImproperlyConfigured(error_msg)


def get_bool_secret(setting, default=False):
    value = get_secret(setting, default)
    if isinstance(value, bool):
        return value
    return str(value).strip().upper() in ("1", "Y", "YES", "TRUE")
