"""Data access layer - every query is scoped to the owning user"""

import uuid
from datetime import date, datetime, timezone
from typing import Any, Dict, List, Optional, Tuple
from sqlalchemy import func
from sqlalchemy.orm import Session
from finance_tracker.infrastructure.database.models import (
    Category,
    CreditCard,
    CreditCardExpense,
    Expense,
    FixedExpense,
    Income,
    InvestmentGoal,
    InvestmentSimulation,
    User,
)

DEFAULT_EXPENSE_CATEGORIES = [
    ("Food", "#ef4444"),
    ("Transport", "#f59e0b"),
    ("Housing", "#10b981"),
    ("Health", "#06b6d4"),
    ("Education", "#8b5cf6"),
    ("Leisure", "#ec4899"),
    ("Shopping", "#f97316"),
    ("Other", "#6b7280"),
]


class UserRepository:
    """Repository for user accounts"""

    def __init__(self, db: Session):
        self.db = db

    def get_by_id(self, user_id: uuid.UUID) -> Optional[User]:
        return self.db.query(User).filter(User.id == user_id).first()

    def get_by_email(self, email: str) -> Optional[User]:
        return self.db.query(User).filter(User.email == email.lower()).first()

    def create_user(self, name: str, email: str, password_hash: str) -> User:
        """Persist a user and seed the default expense categories"""
        db_user = User(name=name, email=email.lower(), password_hash=password_hash)
        self.db.add(db_user)
        self.db.flush()  # Get ID without committing

        for cat_name, color in DEFAULT_EXPENSE_CATEGORIES:
            self.db.add(Category(user_id=db_user.id, name=cat_name, color=color, type="EXPENSE"))

        return db_user


class UserScopedRepository:
    """Generic CRUD for models carrying a user_id column"""

    model: Any = None

    def __init__(self, db: Session, user_id: uuid.UUID):
        self.db = db
        self.user_id = user_id

    def _query(self):
        return self.db.query(self.model).filter(self.model.user_id == self.user_id)

    def get(self, record_id: uuid.UUID):
        """Fetch one record, None when missing or owned by another user"""
        return self._query().filter(self.model.id == record_id).first()

    def create(self, **fields):
        record = self.model(user_id=self.user_id, **fields)
        self.db.add(record)
        self.db.flush()
        return record

    def update(self, record, **fields):
        for key, value in fields.items():
            setattr(record, key, value)
        self.db.flush()
        return record

    def delete(self, record) -> None:
        self.db.delete(record)
        self.db.flush()


class CategoryRepository(UserScopedRepository):
    """Repository for categories"""

    model = Category

    def list(self, category_type: Optional[str] = None) -> List[Category]:
        query = self._query()
        if category_type:
            query = query.filter(Category.type == category_type)
        return query.order_by(Category.name.asc()).all()

    def get_by_name(self, name: str) -> Optional[Category]:
        return self._query().filter(Category.name == name).first()

    def lookup(self, category_ids: List[uuid.UUID]) -> Dict[str, Tuple[str, str]]:
        """category_id (str) → (name, color) for the given ids"""
        if not category_ids:
            return {}
        rows = self._query().filter(Category.id.in_(category_ids)).all()
        return {str(c.id): (c.name, c.color) for c in rows}


class ExpenseRepository(UserScopedRepository):
    """Repository for expenses"""

    model = Expense

    def list(
        self,
        category_id: Optional[uuid.UUID] = None,
        expense_type: Optional[str] = None,
        start_date: Optional[date] = None,
        end_date: Optional[date] = None,
    ) -> List[Expense]:
        query = self._query()
        if category_id:
            query = query.filter(Expense.category_id == category_id)
        if expense_type:
            query = query.filter(Expense.type == expense_type)
        if start_date:
            query = query.filter(Expense.date >= start_date)
        if end_date:
            query = query.filter(Expense.date <= end_date)
        return query.order_by(Expense.date.desc()).all()

    def total_between(self, start_date: date, end_date: date) -> float:
        return (
            self._query()
            .filter(Expense.date >= start_date, Expense.date <= end_date)
            .with_entities(func.coalesce(func.sum(Expense.amount), 0.0))
            .scalar()
        )

    def totals_by_category(self, start_date: date, end_date: date) -> Dict[str, float]:
        """category_id (str) → summed amount, categorized expenses only"""
        rows = (
            self._query()
            .filter(
                Expense.date >= start_date,
                Expense.date <= end_date,
                Expense.category_id.isnot(None),
            )
            .with_entities(Expense.category_id, func.sum(Expense.amount))
            .group_by(Expense.category_id)
            .all()
        )
        return {str(category_id): total or 0.0 for category_id, total in rows}

    def recent(self, limit: int) -> List[Expense]:
        return self._query().order_by(Expense.date.desc()).limit(limit).all()


class IncomeRepository(UserScopedRepository):
    """Repository for incomes"""

    model = Income

    def list(
        self,
        income_type: Optional[str] = None,
        start_date: Optional[date] = None,
        end_date: Optional[date] = None,
    ) -> List[Income]:
        query = self._query()
        if income_type:
            query = query.filter(Income.type == income_type)
        if start_date:
            query = query.filter(Income.date >= start_date)
        if end_date:
            query = query.filter(Income.date <= end_date)
        return query.order_by(Income.date.desc()).all()

    def total_between(self, start_date: date, end_date: date) -> float:
        return (
            self._query()
            .filter(Income.date >= start_date, Income.date <= end_date)
            .with_entities(func.coalesce(func.sum(Income.amount), 0.0))
            .scalar()
        )

    def recent(self, limit: int) -> List[Income]:
        return self._query().order_by(Income.date.desc()).limit(limit).all()


class FixedExpenseRepository(UserScopedRepository):
    """Repository for fixed expenses"""

    model = FixedExpense

    def list(self, active_only: bool = False) -> List[FixedExpense]:
        query = self._query()
        if active_only:
            query = query.filter(FixedExpense.is_active.is_(True))
        return query.order_by(FixedExpense.due_day.asc()).all()

    def active_total(self) -> float:
        return (
            self._query()
            .filter(FixedExpense.is_active.is_(True))
            .with_entities(func.coalesce(func.sum(FixedExpense.amount), 0.0))
            .scalar()
        )

    def set_paid(self, fixed_expense: FixedExpense, paid: bool) -> FixedExpense:
        """Stamp (or clear) the last payment time"""
        fixed_expense.last_paid_at = datetime.now(timezone.utc) if paid else None
        self.db.flush()
        return fixed_expense


class CreditCardRepository(UserScopedRepository):
    """Repository for credit cards (expenses load through the relationship)"""

    model = CreditCard

    def list(self) -> List[CreditCard]:
        return self._query().order_by(CreditCard.created_at.desc()).all()


class CreditCardExpenseRepository(UserScopedRepository):
    """Repository for purchases on a user's credit cards"""

    model = CreditCardExpense

    def list_for_card(self, credit_card_id: uuid.UUID) -> List[CreditCardExpense]:
        return (
            self._query()
            .filter(CreditCardExpense.credit_card_id == credit_card_id)
            .order_by(CreditCardExpense.date.desc())
            .all()
        )

    def get_for_card(self, credit_card_id: uuid.UUID, expense_id: uuid.UUID) -> Optional[CreditCardExpense]:
        return (
            self._query()
            .filter(
                CreditCardExpense.credit_card_id == credit_card_id,
                CreditCardExpense.id == expense_id,
            )
            .first()
        )


class GoalRepository(UserScopedRepository):
    """Repository for investment goals"""

    model = InvestmentGoal

    def list(self) -> List[InvestmentGoal]:
        return self._query().order_by(InvestmentGoal.deadline.asc()).all()

    def list_open(self, limit: int) -> List[InvestmentGoal]:
        """Uncompleted goals, nearest deadline first"""
        return (
            self._query()
            .filter(InvestmentGoal.is_completed.is_(False))
            .order_by(InvestmentGoal.deadline.asc())
            .limit(limit)
            .all()
        )


class SimulationRepository(UserScopedRepository):
    """Repository for saved investment simulations"""

    model = InvestmentSimulation

    def list(self) -> List[InvestmentSimulation]:
        return self._query().order_by(InvestmentSimulation.created_at.desc()).all()
