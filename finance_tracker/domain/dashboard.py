"""Dashboard aggregation helpers - category breakdown, due dates and goal progress"""

import math
from dataclasses import dataclass
from datetime import date
from typing import Dict, List, Optional

UNCATEGORIZED_NAME = "Uncategorized"
UNCATEGORIZED_COLOR = "#6b7280"


@dataclass
class CategorySummary:
    """Expense total for one category within a month"""

    category_id: str
    category_name: str
    category_color: str
    total: float
    percentage: int


def calculate_percentage(value: float, total: float) -> int:
    """Whole percentage of value over total, rounding halves up; 0 when total is 0"""
    if total == 0:
        return 0
    return int(math.floor(value / total * 100 + 0.5))


def summarize_categories(
    totals: Dict[Optional[str], float],
    categories: Dict[str, tuple],
    grand_total: float,
) -> List[CategorySummary]:
    """
    Build the expenses-by-category breakdown.

    Args:
        totals: category_id → summed expense amount
        categories: category_id → (name, color) for known categories
        grand_total: all expenses of the month, the percentage base

    Returns:
        Summaries sorted by total, largest first
    """
    summaries = []
    for category_id, amount in totals.items():
        name, color = categories.get(category_id, (UNCATEGORIZED_NAME, UNCATEGORIZED_COLOR))
        summaries.append(
            CategorySummary(
                category_id=category_id or "",
                category_name=name,
                category_color=color,
                total=amount,
                percentage=calculate_percentage(amount, grand_total) if grand_total > 0 else 0,
            )
        )

    return sorted(summaries, key=lambda s: s.total, reverse=True)


def days_until_due(due_day: int, today_day: int) -> int:
    """
    Days until a fixed expense's next due day.

    Past due days wrap onto a nominal 30-day month.
    """
    if due_day >= today_day:
        return due_day - today_day
    return 30 - today_day + due_day


def due_urgency(days: int) -> str:
    """Bucket days-until-due: high (<= 3), medium (<= 7), low"""
    if days <= 3:
        return "high"
    elif days <= 7:
        return "medium"
    return "low"


def goal_progress(current_amount: float, target_amount: float) -> int:
    return calculate_percentage(current_amount, target_amount)


def is_goal_completed(current_amount: float, target_amount: float) -> bool:
    return current_amount >= target_amount


def days_left(deadline: date, today: date) -> int:
    """Whole days from today until the deadline (negative once it has passed)"""
    return (deadline - today).days
