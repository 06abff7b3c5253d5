"""
유틸리티 패키지

날짜/달력 연산 등 공통 유틸리티
"""

from core.utils.dates import (
    now_utc,
    today_utc,
    add_months,
    months_between,
    month_bounds,
    days_ago,
)

__all__ = [
    "now_utc",
    "today_utc",
    "add_months",
    "months_between",
    "month_bounds",
    "days_ago",
]
