"""/v1/fixed-expenses - recurring bills with a due day"""

import logging
import uuid
from typing import List
from fastapi import APIRouter, Depends, HTTPException, Request
from sqlalchemy.orm import Session

from finance_tracker.api.v1.schemas import FixedExpenseCreate, FixedExpensePayment, FixedExpenseResponse
from finance_tracker.api.dependencies import ensure_category, get_current_user_id, get_request_id, parse_uuid
from finance_tracker.infrastructure.database.session import get_db
from finance_tracker.infrastructure.database.repositories import FixedExpenseRepository
from finance_tracker.infrastructure.observability.metrics import record_created

router = APIRouter()


def _get_or_404(repo: FixedExpenseRepository, fixed_expense_id: str):
    fixed_expense = repo.get(parse_uuid(fixed_expense_id, "fixed expense ID"))
    if not fixed_expense:
        raise HTTPException(status_code=404, detail="Fixed expense not found")
    return fixed_expense


@router.get("/fixed-expenses", response_model=List[FixedExpenseResponse])
def list_fixed_expenses(
    user_id: uuid.UUID = Depends(get_current_user_id),
    db: Session = Depends(get_db),
):
    """List fixed expenses ordered by due day"""
    return FixedExpenseRepository(db, user_id).list()


@router.post("/fixed-expenses", response_model=FixedExpenseResponse, status_code=201)
def create_fixed_expense(
    request_body: FixedExpenseCreate,
    request: Request,
    user_id: uuid.UUID = Depends(get_current_user_id),
    db: Session = Depends(get_db),
):
    ensure_category(db, user_id, request_body.category_id)

    try:
        fixed_expense = FixedExpenseRepository(db, user_id).create(**request_body.model_dump())
        db.commit()
    except Exception as e:
        db.rollback()
        logging.error(f"Unexpected error: {e}", extra={"request_id": get_request_id(request)})
        raise HTTPException(status_code=500, detail="Internal server error")

    record_created("fixed_expense")
    return fixed_expense


@router.get("/fixed-expenses/{fixed_expense_id}", response_model=FixedExpenseResponse)
def get_fixed_expense(
    fixed_expense_id: str,
    user_id: uuid.UUID = Depends(get_current_user_id),
    db: Session = Depends(get_db),
):
    return _get_or_404(FixedExpenseRepository(db, user_id), fixed_expense_id)


@router.put("/fixed-expenses/{fixed_expense_id}", response_model=FixedExpenseResponse)
def update_fixed_expense(
    fixed_expense_id: str,
    request_body: FixedExpenseCreate,
    request: Request,
    user_id: uuid.UUID = Depends(get_current_user_id),
    db: Session = Depends(get_db),
):
    repo = FixedExpenseRepository(db, user_id)
    fixed_expense = _get_or_404(repo, fixed_expense_id)
    ensure_category(db, user_id, request_body.category_id)

    try:
        repo.update(fixed_expense, **request_body.model_dump())
        db.commit()
    except Exception as e:
        db.rollback()
        logging.error(f"Unexpected error: {e}", extra={"request_id": get_request_id(request)})
        raise HTTPException(status_code=500, detail="Internal server error")

    return fixed_expense


@router.patch("/fixed-expenses/{fixed_expense_id}", response_model=FixedExpenseResponse)
def mark_fixed_expense_paid(
    fixed_expense_id: str,
    request_body: FixedExpensePayment,
    user_id: uuid.UUID = Depends(get_current_user_id),
    db: Session = Depends(get_db),
):
    """Stamp the payment time, or clear it with mark_as_paid=false"""
    repo = FixedExpenseRepository(db, user_id)
    fixed_expense = _get_or_404(repo, fixed_expense_id)

    repo.set_paid(fixed_expense, request_body.mark_as_paid)
    db.commit()
    return fixed_expense


@router.delete("/fixed-expenses/{fixed_expense_id}", status_code=204)
def delete_fixed_expense(
    fixed_expense_id: str,
    user_id: uuid.UUID = Depends(get_current_user_id),
    db: Session = Depends(get_db),
):
    repo = FixedExpenseRepository(db, user_id)
    repo.delete(_get_or_404(repo, fixed_expense_id))
    db.commit()
