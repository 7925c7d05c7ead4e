"""SQLAlchemy ORM models for the finance tracker schema"""

import uuid
from sqlalchemy import Column, String, Boolean, Float, DateTime, Date, Integer, ForeignKey, Text, UniqueConstraint
from sqlalchemy.dialects.postgresql import UUID
from sqlalchemy.orm import declarative_base, relationship
from sqlalchemy.sql import func

Base = declarative_base()


class TimestampMixin:
    """created_at / updated_at managed by the database"""

    created_at = Column(DateTime(timezone=True), nullable=False, server_default=func.now())
    updated_at = Column(DateTime(timezone=True), nullable=False, server_default=func.now(), onupdate=func.now())


class User(TimestampMixin, Base):
    """Account owning every other record"""

    __tablename__ = "app_user"

    id = Column(UUID(as_uuid=True), primary_key=True, default=uuid.uuid4)
    name = Column(Text, nullable=False)
    email = Column(String(255), nullable=False, unique=True, index=True)
    password_hash = Column(Text, nullable=False)


class Category(TimestampMixin, Base):
    """Expense or income category"""

    __tablename__ = "category"
    __table_args__ = (UniqueConstraint("user_id", "name", name="uq_category_user_name"),)

    id = Column(UUID(as_uuid=True), primary_key=True, default=uuid.uuid4)
    user_id = Column(UUID(as_uuid=True), ForeignKey("app_user.id", ondelete="CASCADE"), nullable=False, index=True)
    name = Column(String(50), nullable=False)
    color = Column(String(7), nullable=False, default="#8b5cf6")
    icon = Column(String(50), nullable=True)
    type = Column(Text, nullable=False, default="EXPENSE")  # EXPENSE | INCOME


class Expense(TimestampMixin, Base):
    """One-off or recurring expense"""

    __tablename__ = "expense"

    id = Column(UUID(as_uuid=True), primary_key=True, default=uuid.uuid4)
    user_id = Column(UUID(as_uuid=True), ForeignKey("app_user.id", ondelete="CASCADE"), nullable=False, index=True)
    category_id = Column(UUID(as_uuid=True), ForeignKey("category.id", ondelete="SET NULL"), nullable=True)
    name = Column(String(100), nullable=False)
    description = Column(Text, nullable=True)
    amount = Column(Float, nullable=False)
    date = Column(Date, nullable=False, index=True)
    type = Column(Text, nullable=False, default="VARIABLE")  # FIXED | VARIABLE

    category = relationship("Category")


class Income(TimestampMixin, Base):
    """Money received"""

    __tablename__ = "income"

    id = Column(UUID(as_uuid=True), primary_key=True, default=uuid.uuid4)
    user_id = Column(UUID(as_uuid=True), ForeignKey("app_user.id", ondelete="CASCADE"), nullable=False, index=True)
    name = Column(String(100), nullable=False)
    description = Column(Text, nullable=True)
    amount = Column(Float, nullable=False)
    date = Column(Date, nullable=False, index=True)
    type = Column(Text, nullable=False, default="OTHER")
    is_recurring = Column(Boolean, nullable=False, default=False)


class FixedExpense(TimestampMixin, Base):
    """Recurring bill with a nominal due day"""

    __tablename__ = "fixed_expense"

    id = Column(UUID(as_uuid=True), primary_key=True, default=uuid.uuid4)
    user_id = Column(UUID(as_uuid=True), ForeignKey("app_user.id", ondelete="CASCADE"), nullable=False, index=True)
    category_id = Column(UUID(as_uuid=True), ForeignKey("category.id", ondelete="SET NULL"), nullable=True)
    name = Column(String(100), nullable=False)
    description = Column(Text, nullable=True)
    amount = Column(Float, nullable=False)
    due_day = Column(Integer, nullable=False)
    frequency = Column(Text, nullable=False, default="MONTHLY")  # WEEKLY | MONTHLY | YEARLY
    is_active = Column(Boolean, nullable=False, default=True)
    last_paid_at = Column(DateTime(timezone=True), nullable=True)

    category = relationship("Category")


class CreditCard(TimestampMixin, Base):
    """Credit card with statement closing and due days"""

    __tablename__ = "credit_card"

    id = Column(UUID(as_uuid=True), primary_key=True, default=uuid.uuid4)
    user_id = Column(UUID(as_uuid=True), ForeignKey("app_user.id", ondelete="CASCADE"), nullable=False, index=True)
    name = Column(String(100), nullable=False)
    last_digits = Column(String(4), nullable=True)
    brand = Column(Text, nullable=False, default="OTHER")
    limit = Column(Float, nullable=False)
    closing_day = Column(Integer, nullable=False)
    due_day = Column(Integer, nullable=False)
    color = Column(String(7), nullable=False, default="#8b5cf6")
    is_active = Column(Boolean, nullable=False, default=True)

    expenses = relationship(
        "CreditCardExpense",
        back_populates="credit_card",
        cascade="all, delete-orphan",
        order_by="CreditCardExpense.date.desc()",
    )


class CreditCardExpense(TimestampMixin, Base):
    """Purchase on a credit card, possibly split into installments"""

    __tablename__ = "credit_card_expense"

    id = Column(UUID(as_uuid=True), primary_key=True, default=uuid.uuid4)
    user_id = Column(UUID(as_uuid=True), ForeignKey("app_user.id", ondelete="CASCADE"), nullable=False, index=True)
    credit_card_id = Column(
        UUID(as_uuid=True), ForeignKey("credit_card.id", ondelete="CASCADE"), nullable=False, index=True
    )
    category_id = Column(UUID(as_uuid=True), ForeignKey("category.id", ondelete="SET NULL"), nullable=True)
    name = Column(String(100), nullable=False)
    description = Column(Text, nullable=True)
    total_amount = Column(Float, nullable=False)
    installments = Column(Integer, nullable=False, default=1)
    date = Column(Date, nullable=False)

    credit_card = relationship("CreditCard", back_populates="expenses")
    category = relationship("Category")


class InvestmentGoal(TimestampMixin, Base):
    """Savings target with a deadline"""

    __tablename__ = "investment_goal"

    id = Column(UUID(as_uuid=True), primary_key=True, default=uuid.uuid4)
    user_id = Column(UUID(as_uuid=True), ForeignKey("app_user.id", ondelete="CASCADE"), nullable=False, index=True)
    name = Column(String(100), nullable=False)
    description = Column(Text, nullable=True)
    target_amount = Column(Float, nullable=False)
    current_amount = Column(Float, nullable=False, default=0.0)
    deadline = Column(Date, nullable=False)
    priority = Column(Integer, nullable=False, default=1)
    is_completed = Column(Boolean, nullable=False, default=False)


class InvestmentSimulation(TimestampMixin, Base):
    """Saved investment projection; projected_amount is fixed at creation"""

    __tablename__ = "investment_simulation"

    id = Column(UUID(as_uuid=True), primary_key=True, default=uuid.uuid4)
    user_id = Column(UUID(as_uuid=True), ForeignKey("app_user.id", ondelete="CASCADE"), nullable=False, index=True)
    name = Column(String(100), nullable=False)
    initial_amount = Column(Float, nullable=False)
    monthly_contribution = Column(Float, nullable=False)
    interest_rate = Column(Float, nullable=False)
    interest_type = Column(Text, nullable=False)  # SIMPLE | COMPOUND
    period_months = Column(Integer, nullable=False)
    projected_amount = Column(Float, nullable=True)
