"""
날짜 유틸리티

내부 저장: UTC 원칙 준수를 위한 헬퍼와
대출 상환일/기간 계산에 쓰는 달력 월 연산.
"""

import calendar
from datetime import date, datetime, timedelta, timezone


def now_utc() -> datetime:
    """현재 UTC 시간 반환 (타임존 명시)

    datetime.now(timezone.utc)의 축약형.

    Returns:
        현재 UTC 시간 (tzinfo=timezone.utc)
    """
    return datetime.now(timezone.utc)


def today_utc() -> date:
    """오늘 날짜 (UTC 기준)"""
    return now_utc().date()


def add_months(d: date, months: int) -> date:
    """달력 기준 월 더하기

    같은 일(day)을 유지하되, 대상 월에 그 일이 없으면 말일로 맞춘다.

    Example:
        >>> add_months(date(2026, 1, 31), 1)
        datetime.date(2026, 2, 28)
        >>> add_months(date(2026, 3, 15), -1)
        datetime.date(2026, 2, 15)
    """
    month_index = d.month - 1 + months
    year = d.year + month_index // 12
    month = month_index % 12 + 1
    last_day = calendar.monthrange(year, month)[1]
    return date(year, month, min(d.day, last_day))


def months_between(start: date, end: date) -> int:
    """두 날짜 사이의 완전한 달 수

    0 방향으로 버림. end가 start보다 이전이면 음수.

    Example:
        >>> months_between(date(2026, 1, 15), date(2026, 3, 14))
        1
        >>> months_between(date(2026, 1, 31), date(2026, 2, 28))
        1
    """
    if end < start:
        return -months_between(end, start)

    months = (end.year - start.year) * 12 + (end.month - start.month)
    if months > 0 and add_months(start, months) > end:
        months -= 1
    return months


def month_bounds(d: date) -> tuple[date, date]:
    """d가 속한 달의 (첫날, 말일)"""
    last_day = calendar.monthrange(d.year, d.month)[1]
    return d.replace(day=1), d.replace(day=last_day)


def days_ago(d: date, days: int) -> date:
    """d 기준 days일 전"""
    return d - timedelta(days=days)
