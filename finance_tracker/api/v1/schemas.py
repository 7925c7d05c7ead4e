"""Pydantic schemas for API request/response validation"""

import datetime as dt
import uuid
from typing import List, Literal, Optional
from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator
from finance_tracker.domain.models import InterestType
from finance_tracker.infrastructure.auth.passwords import MAX_PASSWORD_BYTES

MAX_AMOUNT = 999_999_999
HEX_COLOR = r"^#[0-9A-Fa-f]{6}$"
EMAIL_PATTERN = r"^[^@\s]+@[^@\s]+\.[^@\s]+$"

ExpenseType = Literal["FIXED", "VARIABLE"]
IncomeType = Literal["SALARY", "FREELANCE", "INVESTMENT", "BONUS", "GIFT", "EXTRA", "OTHER"]
CategoryType = Literal["EXPENSE", "INCOME"]
Frequency = Literal["WEEKLY", "MONTHLY", "YEARLY"]
CardBrand = Literal["VISA", "MASTERCARD", "ELO", "AMEX", "HIPERCARD", "OTHER"]


class ORMModel(BaseModel):
    """Response base that reads attributes straight off ORM rows"""

    model_config = ConfigDict(from_attributes=True)


# Auth


class RegisterRequest(BaseModel):
    """Request body for POST /v1/auth/register"""

    name: str = Field(..., min_length=2, max_length=100)
    email: str = Field(..., max_length=255, pattern=EMAIL_PATTERN)
    password: str = Field(..., min_length=6, max_length=72)
    confirm_password: str

    @field_validator("password")
    @classmethod
    def password_strength(cls, value: str) -> str:
        if not any(ch.isupper() for ch in value):
            raise ValueError("Password must contain at least one uppercase letter")
        if not any(ch.isdigit() for ch in value):
            raise ValueError("Password must contain at least one number")
        if len(value.encode("utf-8")) > MAX_PASSWORD_BYTES:
            raise ValueError(f"Password must be at most {MAX_PASSWORD_BYTES} bytes")
        return value

    @model_validator(mode="after")
    def passwords_match(self) -> "RegisterRequest":
        if self.password != self.confirm_password:
            raise ValueError("Passwords do not match")
        return self


class LoginRequest(BaseModel):
    """Request body for POST /v1/auth/login"""

    email: str = Field(..., pattern=EMAIL_PATTERN)
    password: str = Field(..., min_length=1)


class UserResponse(ORMModel):
    id: uuid.UUID
    name: str
    email: str


# Categories


class CategoryCreate(BaseModel):
    name: str = Field(..., min_length=1, max_length=50)
    color: str = Field("#8b5cf6", pattern=HEX_COLOR)
    icon: Optional[str] = Field(None, max_length=50)
    type: CategoryType = "EXPENSE"


class CategoryResponse(ORMModel):
    id: uuid.UUID
    name: str
    color: str
    icon: Optional[str] = None
    type: str


# Expenses and incomes


class ExpenseCreate(BaseModel):
    """Request body for creating or replacing an expense"""

    name: str = Field(..., min_length=1, max_length=100)
    description: Optional[str] = Field(None, max_length=500)
    amount: float = Field(..., gt=0, le=MAX_AMOUNT)
    date: dt.date
    type: ExpenseType
    category_id: Optional[uuid.UUID] = None


class ExpenseResponse(ORMModel):
    id: uuid.UUID
    name: str
    description: Optional[str] = None
    amount: float
    date: dt.date
    type: str
    category_id: Optional[uuid.UUID] = None


class IncomeCreate(BaseModel):
    """Request body for creating or replacing an income"""

    name: str = Field(..., min_length=1, max_length=100)
    description: Optional[str] = Field(None, max_length=500)
    amount: float = Field(..., gt=0, le=MAX_AMOUNT)
    date: dt.date
    type: IncomeType
    is_recurring: bool = False


class IncomeResponse(ORMModel):
    id: uuid.UUID
    name: str
    description: Optional[str] = None
    amount: float
    date: dt.date
    type: str
    is_recurring: bool


# Fixed expenses


class FixedExpenseCreate(BaseModel):
    name: str = Field(..., min_length=1, max_length=100)
    description: Optional[str] = Field(None, max_length=500)
    amount: float = Field(..., gt=0, le=MAX_AMOUNT)
    due_day: int = Field(..., ge=1, le=31)
    frequency: Frequency
    category_id: Optional[uuid.UUID] = None
    is_active: bool = True


class FixedExpensePayment(BaseModel):
    """Request body for PATCH /v1/fixed-expenses/{id}"""

    mark_as_paid: bool


class FixedExpenseResponse(ORMModel):
    id: uuid.UUID
    name: str
    description: Optional[str] = None
    amount: float
    due_day: int
    frequency: str
    category_id: Optional[uuid.UUID] = None
    is_active: bool
    last_paid_at: Optional[dt.datetime] = None


# Credit cards


class CreditCardCreate(BaseModel):
    name: str = Field(..., min_length=1, max_length=100)
    last_digits: Optional[str] = Field(None, pattern=r"^\d{4}$")
    brand: CardBrand
    limit: float = Field(..., gt=0, le=MAX_AMOUNT)
    closing_day: int = Field(..., ge=1, le=31)
    due_day: int = Field(..., ge=1, le=31)
    color: str = Field("#8b5cf6", pattern=HEX_COLOR)
    is_active: bool = True


class CreditCardExpenseCreate(BaseModel):
    """Purchase on a card; the card comes from the URL"""

    name: str = Field(..., min_length=1, max_length=100)
    description: Optional[str] = Field(None, max_length=500)
    total_amount: float = Field(..., gt=0, le=MAX_AMOUNT)
    installments: int = Field(1, ge=1, le=48)
    date: dt.date
    category_id: Optional[uuid.UUID] = None


class CreditCardExpenseResponse(ORMModel):
    id: uuid.UUID
    credit_card_id: uuid.UUID
    name: str
    description: Optional[str] = None
    total_amount: float
    installments: int
    installment_amount: float
    date: dt.date
    category_id: Optional[uuid.UUID] = None


class CreditCardResponse(ORMModel):
    """Card with its purchases and the current statement usage"""

    id: uuid.UUID
    name: str
    last_digits: Optional[str] = None
    brand: str
    limit: float
    closing_day: int
    due_day: int
    color: str
    is_active: bool
    current_bill: float
    usage_percent: float
    available_credit: float
    expenses: List[CreditCardExpenseResponse] = []


class StatementItem(BaseModel):
    """One installment billed on a statement"""

    expense_id: uuid.UUID
    name: str
    installment_number: int
    installments: int
    amount: float


class StatementResponse(BaseModel):
    """Response for GET /v1/credit-cards/{id}/statement"""

    credit_card_id: uuid.UUID
    year: int
    month: int
    total: float
    usage_percent: float
    available_credit: float
    items: List[StatementItem]


# Goals


class GoalCreate(BaseModel):
    name: str = Field(..., min_length=1, max_length=100)
    description: Optional[str] = Field(None, max_length=500)
    target_amount: float = Field(..., gt=0, le=MAX_AMOUNT)
    current_amount: float = Field(0.0, ge=0, le=MAX_AMOUNT)
    deadline: dt.date
    priority: int = Field(1, ge=1, le=5)


class GoalResponse(ORMModel):
    id: uuid.UUID
    name: str
    description: Optional[str] = None
    target_amount: float
    current_amount: float
    deadline: dt.date
    priority: int
    is_completed: bool
    progress: int


# Simulations


class ProjectionRequest(BaseModel):
    """Simulator inputs, range-checked before reaching the projection engine"""

    initial_amount: float = Field(..., ge=0, le=MAX_AMOUNT)
    monthly_contribution: float = Field(..., ge=0, le=MAX_AMOUNT)
    interest_rate: float = Field(..., ge=0, le=100, description="Annual rate in percent")
    interest_type: InterestType
    period_months: int = Field(..., ge=1, le=600)


class SimulationCreate(ProjectionRequest):
    """Request body for POST /v1/simulations"""

    name: str = Field(..., min_length=1, max_length=100)


class SimulationResponse(ORMModel):
    id: uuid.UUID
    name: str
    initial_amount: float
    monthly_contribution: float
    interest_rate: float
    interest_type: InterestType
    period_months: int
    projected_amount: Optional[float] = None
    created_at: dt.datetime


class ProjectionPointSchema(ORMModel):
    month: int
    total_invested: float
    total_with_interest: float
    interest: float


class ProjectionResponse(BaseModel):
    """Response for POST /v1/simulations/preview"""

    final_amount: float
    total_invested: float
    total_interest: float
    points: List[ProjectionPointSchema]


# Dashboard


class CategorySummarySchema(ORMModel):
    category_id: str
    category_name: str
    category_color: str
    total: float
    percentage: int


class MonthlyData(BaseModel):
    year: int
    month: int
    label: str
    income: float
    expenses: float


class UpcomingFixedExpense(BaseModel):
    id: uuid.UUID
    name: str
    amount: float
    due_day: int
    frequency: str
    days_until_due: int
    urgency: str


class GoalOverview(BaseModel):
    id: uuid.UUID
    name: str
    target_amount: float
    current_amount: float
    progress: int
    days_left: int


class CardBill(BaseModel):
    id: uuid.UUID
    name: str
    current_bill: float
    usage_percent: float
    available_credit: float


class DashboardResponse(BaseModel):
    """Response for GET /v1/dashboard"""

    total_income: float
    total_expenses: float
    balance: float
    total_fixed_expenses: float
    total_credit_card_bills: float
    expenses_by_category: List[CategorySummarySchema]
    monthly_data: List[MonthlyData]
    recent_expenses: List[ExpenseResponse]
    recent_incomes: List[IncomeResponse]
    investment_goals: List[GoalOverview]
    upcoming_fixed_expenses: List[UpcomingFixedExpense]
    credit_cards: List[CardBill]
