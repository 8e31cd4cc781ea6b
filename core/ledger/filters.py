"""
기간 필터

기록의 date 텍스트와 기준 시각(now)으로 ALL / THIS_WEEK / THIS_MONTH 판정.
주 경계: 일요일 00:00 (now는 호출자가 지정한 타임존 기준).
"""

import re
from datetime import date, datetime, timedelta
from typing import Iterable, Iterator

from core.ledger.types import ExpenseRecord
from core.types import FilterMode

# YYYY-MM-DD (ASCII 숫자만)
_CANONICAL_DATE = re.compile(r"(\d{4})-(\d{2})-(\d{2})", re.ASCII)


def parse_iso_date(value: str | None) -> date | None:
    """정규 형식 날짜 파싱

    Args:
        value: "YYYY-MM-DD" 텍스트

    Returns:
        date. 형식이 다르거나 존재하지 않는 날짜(2024-02-30 등)면 None

    Example:
        >>> parse_iso_date("2024-03-10")
        datetime.date(2024, 3, 10)
        >>> parse_iso_date("2024-03-32") is None
        True
    """
    if not value:
        return None

    match = _CANONICAL_DATE.fullmatch(value)
    if match is None:
        return None

    year, month, day = (int(part) for part in match.groups())
    try:
        return date(year, month, day)
    except ValueError:
        return None


def is_canonical_date(value: str | None) -> bool:
    """정규 형식 날짜 여부"""
    return parse_iso_date(value) is not None


def start_of_week(day: date) -> date:
    """day가 속한 주의 시작 일요일"""
    # weekday(): 월=0 ... 일=6
    return day - timedelta(days=(day.weekday() + 1) % 7)


def is_same_week(a: date, b: date) -> bool:
    """일요일~토요일 기준 같은 주 여부"""
    return start_of_week(a) == start_of_week(b)


def is_same_month(a: date, b: date) -> bool:
    """같은 연/월 여부"""
    return (a.year, a.month) == (b.year, b.month)


def matches_filter(record_date: str | None, mode: FilterMode, now: datetime | date) -> bool:
    """필터 판정

    ALL은 날짜를 해석할 수 없는 기록도 통과.
    THIS_WEEK / THIS_MONTH는 해석 불가 날짜를 제외.

    Args:
        record_date: 기록의 date 텍스트
        mode: 필터 모드
        now: 기준 시각 (이미 대상 타임존으로 변환된 값)
    """
    if mode == FilterMode.ALL:
        return True

    parsed = parse_iso_date(record_date)
    if parsed is None:
        return False

    today = now.date() if isinstance(now, datetime) else now

    if mode == FilterMode.THIS_WEEK:
        return is_same_week(parsed, today)
    if mode == FilterMode.THIS_MONTH:
        return is_same_month(parsed, today)

    return True


def filter_records(
    records: Iterable[ExpenseRecord],
    mode: FilterMode,
    now: datetime | date,
) -> Iterator[ExpenseRecord]:
    """필터 통과 기록 (입력 순서 유지)"""
    for record in records:
        if matches_filter(record.date, mode, now):
            yield record
