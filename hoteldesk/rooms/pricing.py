from datetime import timedelta

from django.conf import settings

from rooms.calendar import WEEKDAY_KEYS, is_day_use, to_local_date

PRICE_FIELDS = ("stay_price", "day_use_price")


def validate_prices(prices):
    """
    요일별 가격표 검증. 7개 요일 모두 stay_price / day_use_price 가 0 이상 정수여야 한다.
    문제가 있으면 한글 사유 문자열, 정상이면 None.
    """
    if not isinstance(prices, dict):
        return "prices 는 요일별 객체여야 합니다."
    for key in WEEKDAY_KEYS:
        day = prices.get(key)
        if not isinstance(day, dict):
            return f"{key} 가격이 누락되었습니다."
        for field in PRICE_FIELDS:
            value = day.get(field)
            if isinstance(value, bool) or not isinstance(value, int) or value < 0:
                return f"{key}.{field} 는 0 이상의 정수여야 합니다."
    return None


def day_price(room, day, field):
    prices = room.prices or {}
    entry = prices.get(WEEKDAY_KEYS[to_local_date(day).weekday()]) or {}
    return int(entry.get(field) or 0)


def quote_total_price(room, check_in, check_out):
    # 대실: 체크인 요일의 대실가 / 숙박: 박마다 해당 요일 숙박가 합산
    start = to_local_date(check_in)
    end = to_local_date(check_out)
    if is_day_use(start, end):
        return day_price(room, start, "day_use_price")

    total = 0
    current = start
    while current < end:
        total += day_price(room, current, "stay_price")
        current += timedelta(days=1)
    return total


def discount_rate_for(room):
    if room.discount_rate is not None:
        return room.discount_rate
    return settings.CHATBOT_DEFAULT_DISCOUNT_RATE


def apply_discount(price, rate):
    # 100원 단위 절사
    if not rate:
        return int(price)
    return int(price * (100 - rate) / 100 // 100 * 100)
