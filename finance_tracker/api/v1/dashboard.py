"""GET /v1/dashboard - current month overview"""

import uuid
from datetime import date
from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from finance_tracker.api.v1.schemas import (
    CardBill,
    CategorySummarySchema,
    DashboardResponse,
    ExpenseResponse,
    GoalOverview,
    IncomeResponse,
    MonthlyData,
    UpcomingFixedExpense,
)
from finance_tracker.api.v1.credit_cards import to_purchase
from finance_tracker.api.dependencies import get_current_user_id
from finance_tracker.config import settings
from finance_tracker.infrastructure.database.session import get_db
from finance_tracker.infrastructure.database.repositories import (
    CategoryRepository,
    CreditCardRepository,
    ExpenseRepository,
    FixedExpenseRepository,
    GoalRepository,
    IncomeRepository,
)
from finance_tracker.domain.billing import card_usage
from finance_tracker.domain.dashboard import (
    days_left,
    days_until_due,
    due_urgency,
    goal_progress,
    summarize_categories,
)
from finance_tracker.domain.models import ReferenceMonth
from finance_tracker.utils.date_utils import month_bounds, month_label, trailing_months

router = APIRouter()


def build_dashboard(db: Session, user_id: uuid.UUID, today: date) -> DashboardResponse:
    """
    Aggregate the user's month.

    Covers:
    - Income, expenses and balance for the month containing `today`
    - Active fixed expense total and due urgency
    - Expenses by category
    - Income vs expenses for the trailing months
    - Credit card statement totals through the billing allocator
    """
    expense_repo = ExpenseRepository(db, user_id)
    income_repo = IncomeRepository(db, user_id)
    fixed_repo = FixedExpenseRepository(db, user_id)

    start_date, end_date = month_bounds(today.year, today.month)
    total_income = income_repo.total_between(start_date, end_date)
    total_expenses = expense_repo.total_between(start_date, end_date)

    # Expenses by category
    by_category = expense_repo.totals_by_category(start_date, end_date)
    categories = CategoryRepository(db, user_id).lookup([uuid.UUID(c) for c in by_category])
    category_summary = summarize_categories(by_category, categories, total_expenses)

    monthly_data = []
    for year, month in trailing_months(today.year, today.month, settings.dashboard_history_months):
        month_start, month_end = month_bounds(year, month)
        monthly_data.append(
            MonthlyData(
                year=year,
                month=month,
                label=month_label(month),
                income=income_repo.total_between(month_start, month_end),
                expenses=expense_repo.total_between(month_start, month_end),
            )
        )

    goals = [
        GoalOverview(
            id=g.id,
            name=g.name,
            target_amount=g.target_amount,
            current_amount=g.current_amount,
            progress=goal_progress(g.current_amount, g.target_amount),
            days_left=days_left(g.deadline, today),
        )
        for g in GoalRepository(db, user_id).list_open(settings.dashboard_goals_limit)
    ]

    upcoming = []
    for f in fixed_repo.list(active_only=True):
        days = days_until_due(f.due_day, today.day)
        upcoming.append(
            UpcomingFixedExpense(
                id=f.id,
                name=f.name,
                amount=f.amount,
                due_day=f.due_day,
                frequency=f.frequency,
                days_until_due=days,
                urgency=due_urgency(days),
            )
        )
    upcoming.sort(key=lambda u: u.days_until_due)
    upcoming = upcoming[: settings.dashboard_upcoming_limit]

    reference = ReferenceMonth.from_date(today)
    cards = []
    for card in CreditCardRepository(db, user_id).list():
        usage = card_usage([to_purchase(e) for e in card.expenses], card.closing_day, card.limit, reference)
        cards.append(
            CardBill(
                id=card.id,
                name=card.name,
                current_bill=usage.current_bill,
                usage_percent=usage.usage_percent,
                available_credit=usage.available_credit,
            )
        )

    limit = settings.recent_transactions_limit
    return DashboardResponse(
        total_income=total_income,
        total_expenses=total_expenses,
        balance=total_income - total_expenses,
        total_fixed_expenses=fixed_repo.active_total(),
        total_credit_card_bills=sum(c.current_bill for c in cards),
        expenses_by_category=[CategorySummarySchema.model_validate(s) for s in category_summary],
        monthly_data=monthly_data,
        recent_expenses=[ExpenseResponse.model_validate(e) for e in expense_repo.recent(limit)],
        recent_incomes=[IncomeResponse.model_validate(i) for i in income_repo.recent(limit)],
        investment_goals=goals,
        upcoming_fixed_expenses=upcoming,
        credit_cards=cards,
    )


@router.get("/dashboard", response_model=DashboardResponse)
def get_dashboard(
    user_id: uuid.UUID = Depends(get_current_user_id),
    db: Session = Depends(get_db),
):
    return build_dashboard(db, user_id, date.today())
