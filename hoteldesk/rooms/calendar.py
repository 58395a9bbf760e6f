"""
날짜 유틸리티

예약의 체크인/체크아웃은 시각(instant)으로 저장되지만, 재고 계산은 항상
서울 기준 날짜로 잘라서 한다.

- 대실: 체크인 날짜 == 체크아웃 날짜 -> 그 하루만 점유
- 숙박: 체크인 날짜(포함) ~ 체크아웃 날짜(미포함) 의 각 박(night)을 점유
"""

from datetime import date, datetime, time, timedelta

from django.utils import timezone
from django.utils.dateparse import parse_date, parse_datetime

WEEKDAY_KEYS = (
    "monday",
    "tuesday",
    "wednesday",
    "thursday",
    "friday",
    "saturday",
    "sunday",
)
WEEKDAY_LABELS = ("월", "화", "수", "목", "금", "토", "일")

SATURDAY = 5


def today():
    return timezone.localdate()


def to_local_date(value):
    """date / datetime / ISO 문자열을 서울 기준 날짜로 자른다. 해석할 수 없으면 ValueError."""
    if isinstance(value, datetime):
        if timezone.is_aware(value):
            value = timezone.localtime(value)
        return value.date()
    if isinstance(value, date):
        return value
    if isinstance(value, str):
        text = value.strip()
        parsed = parse_datetime(text)
        if parsed is not None:
            return to_local_date(parsed)
        parsed_date = parse_date(text)
        if parsed_date is not None:
            return parsed_date
    raise ValueError(f"날짜 형식이 올바르지 않습니다: {value!r}")


def to_instant(value):
    # 날짜만 들어오면 서울 자정으로 저장
    if isinstance(value, datetime):
        return value if timezone.is_aware(value) else timezone.make_aware(value)
    if isinstance(value, str):
        parsed = parse_datetime(value.strip())
        if parsed is not None and (parsed.hour or parsed.minute or parsed.tzinfo):
            return to_instant(parsed)
    day = to_local_date(value)
    return timezone.make_aware(datetime.combine(day, time.min))


def to_date_key(value):
    return to_local_date(value).isoformat()


def is_day_use(check_in, check_out):
    return to_local_date(check_in) == to_local_date(check_out)


def occupancy_window(check_in, check_out):
    """
    (시작일, 종료일) 반열린 구간을 돌려준다. 체크아웃이 체크인보다 앞이면 None.
    """
    start = to_local_date(check_in)
    end = to_local_date(check_out)
    if end < start:
        return None
    if end == start:
        end = start + timedelta(days=1)
    return start, end


def occupied_dates(check_in, check_out):
    window = occupancy_window(check_in, check_out)
    if window is None:
        return []
    start, end = window
    return [start + timedelta(days=i) for i in range((end - start).days)]


def occupies(check_in, check_out, day):
    window = occupancy_window(check_in, check_out)
    if window is None:
        return False
    start, end = window
    return start <= to_local_date(day) < end


def nights(check_in, check_out):
    return max(0, (to_local_date(check_out) - to_local_date(check_in)).days)


def weekday_key(day):
    return WEEKDAY_KEYS[to_local_date(day).weekday()]


def upcoming_saturday(base=None):
    # 오늘이 토요일이면 오늘
    base = to_local_date(base) if base is not None else today()
    return base + timedelta(days=(SATURDAY - base.weekday()) % 7)


def format_korean_date(value):
    day = to_local_date(value)
    return f"{day.year}년 {day.month}월 {day.day}일"


def format_short_date(value):
    day = to_local_date(value)
    return f"{day.month}/{day.day}({WEEKDAY_LABELS[day.weekday()]})"


def stay_label(check_in, check_out):
    if is_day_use(check_in, check_out):
        return f"{format_short_date(check_in)} 대실"
    return (
        f"{format_short_date(check_in)} ~ {format_short_date(check_out)} "
        f"{nights(check_in, check_out)}박"
    )
