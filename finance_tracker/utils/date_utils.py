"""Date manipulation utilities"""

import calendar
from datetime import date
from typing import List, Tuple


def add_months(year: int, month: int, offset: int) -> Tuple[int, int]:
    """Advance a (year, month) pair by offset months, rolling the year over every 12"""
    index = year * 12 + (month - 1) + offset
    return index // 12, index % 12 + 1


def month_bounds(year: int, month: int) -> Tuple[date, date]:
    """First and last calendar day of a month (inclusive)"""
    last_day = calendar.monthrange(year, month)[1]
    return date(year, month, 1), date(year, month, last_day)


def trailing_months(year: int, month: int, count: int) -> List[Tuple[int, int]]:
    """The `count` months ending at (year, month), oldest first"""
    return [add_months(year, month, -(count - 1 - i)) for i in range(count)]


def month_label(month: int) -> str:
    """Short English month name ("Jan".."Dec")"""
    return calendar.month_abbr[month]
