"""/v1/credit-cards - cards, their installment purchases and monthly statements"""

import logging
import uuid
from datetime import date
from typing import List, Optional
from fastapi import APIRouter, Depends, HTTPException, Query, Request
from sqlalchemy.orm import Session

from finance_tracker.api.v1.schemas import (
    CreditCardCreate,
    CreditCardExpenseCreate,
    CreditCardExpenseResponse,
    CreditCardResponse,
    StatementItem,
    StatementResponse,
)
from finance_tracker.api.dependencies import ensure_category, get_current_user_id, get_request_id, parse_uuid
from finance_tracker.infrastructure.database.session import get_db
from finance_tracker.infrastructure.database.models import CreditCard, CreditCardExpense
from finance_tracker.infrastructure.database.repositories import CreditCardExpenseRepository, CreditCardRepository
from finance_tracker.infrastructure.observability.metrics import record_created
from finance_tracker.domain.billing import card_usage, installment_schedule
from finance_tracker.domain.models import CardPurchase, ReferenceMonth

router = APIRouter()


def to_purchase(expense: CreditCardExpense) -> CardPurchase:
    return CardPurchase(
        total_amount=expense.total_amount,
        installments=expense.installments,
        purchase_date=expense.date,
    )


def expense_response(expense: CreditCardExpense) -> CreditCardExpenseResponse:
    return CreditCardExpenseResponse(
        id=expense.id,
        credit_card_id=expense.credit_card_id,
        name=expense.name,
        description=expense.description,
        total_amount=expense.total_amount,
        installments=expense.installments,
        installment_amount=expense.total_amount / expense.installments,
        date=expense.date,
        category_id=expense.category_id,
    )


def card_response(card: CreditCard, reference: ReferenceMonth) -> CreditCardResponse:
    """Card with its purchases and the statement usage for the reference month"""
    usage = card_usage(
        [to_purchase(e) for e in card.expenses],
        card.closing_day,
        card.limit,
        reference,
    )
    return CreditCardResponse(
        id=card.id,
        name=card.name,
        last_digits=card.last_digits,
        brand=card.brand,
        limit=card.limit,
        closing_day=card.closing_day,
        due_day=card.due_day,
        color=card.color,
        is_active=card.is_active,
        current_bill=usage.current_bill,
        usage_percent=usage.usage_percent,
        available_credit=usage.available_credit,
        expenses=[expense_response(e) for e in card.expenses],
    )


def _get_card_or_404(repo: CreditCardRepository, credit_card_id: str) -> CreditCard:
    card = repo.get(parse_uuid(credit_card_id, "credit card ID"))
    if not card:
        raise HTTPException(status_code=404, detail="Credit card not found")
    return card


@router.get("/credit-cards", response_model=List[CreditCardResponse])
def list_credit_cards(
    user_id: uuid.UUID = Depends(get_current_user_id),
    db: Session = Depends(get_db),
):
    """List cards with their purchases and this month's bill"""
    reference = ReferenceMonth.from_date(date.today())
    return [card_response(card, reference) for card in CreditCardRepository(db, user_id).list()]


@router.post("/credit-cards", response_model=CreditCardResponse, status_code=201)
def create_credit_card(
    request_body: CreditCardCreate,
    request: Request,
    user_id: uuid.UUID = Depends(get_current_user_id),
    db: Session = Depends(get_db),
):
    try:
        card = CreditCardRepository(db, user_id).create(**request_body.model_dump())
        db.commit()
    except Exception as e:
        db.rollback()
        logging.error(f"Unexpected error: {e}", extra={"request_id": get_request_id(request)})
        raise HTTPException(status_code=500, detail="Internal server error")

    record_created("credit_card")
    return card_response(card, ReferenceMonth.from_date(date.today()))


@router.get("/credit-cards/{credit_card_id}", response_model=CreditCardResponse)
def get_credit_card(
    credit_card_id: str,
    user_id: uuid.UUID = Depends(get_current_user_id),
    db: Session = Depends(get_db),
):
    card = _get_card_or_404(CreditCardRepository(db, user_id), credit_card_id)
    return card_response(card, ReferenceMonth.from_date(date.today()))


@router.put("/credit-cards/{credit_card_id}", response_model=CreditCardResponse)
def update_credit_card(
    credit_card_id: str,
    request_body: CreditCardCreate,
    request: Request,
    user_id: uuid.UUID = Depends(get_current_user_id),
    db: Session = Depends(get_db),
):
    repo = CreditCardRepository(db, user_id)
    card = _get_card_or_404(repo, credit_card_id)

    try:
        repo.update(card, **request_body.model_dump())
        db.commit()
    except Exception as e:
        db.rollback()
        logging.error(f"Unexpected error: {e}", extra={"request_id": get_request_id(request)})
        raise HTTPException(status_code=500, detail="Internal server error")

    return card_response(card, ReferenceMonth.from_date(date.today()))


@router.delete("/credit-cards/{credit_card_id}", status_code=204)
def delete_credit_card(
    credit_card_id: str,
    user_id: uuid.UUID = Depends(get_current_user_id),
    db: Session = Depends(get_db),
):
    """Delete a card together with its purchases"""
    repo = CreditCardRepository(db, user_id)
    repo.delete(_get_card_or_404(repo, credit_card_id))
    db.commit()


@router.get("/credit-cards/{credit_card_id}/statement", response_model=StatementResponse)
def get_statement(
    credit_card_id: str,
    year: Optional[int] = Query(None, ge=1900, le=9999),
    month: Optional[int] = Query(None, ge=1, le=12),
    user_id: uuid.UUID = Depends(get_current_user_id),
    db: Session = Depends(get_db),
):
    """
    Installments billed on one monthly statement.

    Defaults to the current month. Each purchase contributes at most one
    installment to a given month.
    """
    card = _get_card_or_404(CreditCardRepository(db, user_id), credit_card_id)

    today = date.today()
    reference = ReferenceMonth(year=year or today.year, month=month or today.month)

    items = []
    for expense in card.expenses:
        for inst in installment_schedule(to_purchase(expense), card.closing_day):
            if inst.year == reference.year and inst.month == reference.month:
                items.append(
                    StatementItem(
                        expense_id=expense.id,
                        name=expense.name,
                        installment_number=inst.number,
                        installments=expense.installments,
                        amount=inst.amount,
                    )
                )

    usage = card_usage([to_purchase(e) for e in card.expenses], card.closing_day, card.limit, reference)

    return StatementResponse(
        credit_card_id=card.id,
        year=reference.year,
        month=reference.month,
        total=usage.current_bill,
        usage_percent=usage.usage_percent,
        available_credit=usage.available_credit,
        items=items,
    )


@router.get("/credit-cards/{credit_card_id}/expenses", response_model=List[CreditCardExpenseResponse])
def list_card_expenses(
    credit_card_id: str,
    user_id: uuid.UUID = Depends(get_current_user_id),
    db: Session = Depends(get_db),
):
    card = _get_card_or_404(CreditCardRepository(db, user_id), credit_card_id)
    expenses = CreditCardExpenseRepository(db, user_id).list_for_card(card.id)
    return [expense_response(e) for e in expenses]


@router.post(
    "/credit-cards/{credit_card_id}/expenses",
    response_model=CreditCardExpenseResponse,
    status_code=201,
)
def create_card_expense(
    credit_card_id: str,
    request_body: CreditCardExpenseCreate,
    request: Request,
    user_id: uuid.UUID = Depends(get_current_user_id),
    db: Session = Depends(get_db),
):
    card = _get_card_or_404(CreditCardRepository(db, user_id), credit_card_id)
    ensure_category(db, user_id, request_body.category_id)

    try:
        expense = CreditCardExpenseRepository(db, user_id).create(
            credit_card_id=card.id,
            **request_body.model_dump(),
        )
        db.commit()
    except Exception as e:
        db.rollback()
        logging.error(f"Unexpected error: {e}", extra={"request_id": get_request_id(request)})
        raise HTTPException(status_code=500, detail="Internal server error")

    record_created("credit_card_expense")
    return expense_response(expense)


@router.put(
    "/credit-cards/{credit_card_id}/expenses/{expense_id}",
    response_model=CreditCardExpenseResponse,
)
def update_card_expense(
    credit_card_id: str,
    expense_id: str,
    request_body: CreditCardExpenseCreate,
    request: Request,
    user_id: uuid.UUID = Depends(get_current_user_id),
    db: Session = Depends(get_db),
):
    repo = CreditCardExpenseRepository(db, user_id)
    expense = repo.get_for_card(
        parse_uuid(credit_card_id, "credit card ID"),
        parse_uuid(expense_id, "expense ID"),
    )
    if not expense:
        raise HTTPException(status_code=404, detail="Credit card expense not found")
    ensure_category(db, user_id, request_body.category_id)

    try:
        repo.update(expense, **request_body.model_dump())
        db.commit()
    except Exception as e:
        db.rollback()
        logging.error(f"Unexpected error: {e}", extra={"request_id": get_request_id(request)})
        raise HTTPException(status_code=500, detail="Internal server error")

    return expense_response(expense)


@router.delete("/credit-cards/{credit_card_id}/expenses/{expense_id}", status_code=204)
def delete_card_expense(
    credit_card_id: str,
    expense_id: str,
    user_id: uuid.UUID = Depends(get_current_user_id),
    db: Session = Depends(get_db),
):
    repo = CreditCardExpenseRepository(db, user_id)
    expense = repo.get_for_card(
        parse_uuid(credit_card_id, "credit card ID"),
        parse_uuid(expense_id, "expense ID"),
    )
    if not expense:
        raise HTTPException(status_code=404, detail="Credit card expense not found")

    repo.delete(expense)
    db.commit()
