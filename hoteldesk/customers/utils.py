import re

VALID_MOBILE_PREFIXES = ("010", "011", "016", "017", "018", "019")


def digits_only(value):
    return re.sub(r"\D", "", value or "")


def normalize_phone(value):
    """
    휴대폰 번호를 NNN-NNNN-NNNN (10자리는 NNN-NNNN-NNN) 형식으로 정규화.
    형식이 맞지 않으면 None.
    """
    digits = digits_only(value)
    if len(digits) not in (10, 11):
        return None
    if not digits.startswith(VALID_MOBILE_PREFIXES):
        return None
    return f"{digits[:3]}-{digits[3:7]}-{digits[7:]}"
