"""/v1/expenses - one-off and recurring expenses"""

import logging
import uuid
from datetime import date
from typing import List, Optional
from fastapi import APIRouter, Depends, HTTPException, Query, Request
from sqlalchemy.orm import Session

from finance_tracker.api.v1.schemas import ExpenseCreate, ExpenseResponse, ExpenseType
from finance_tracker.api.dependencies import ensure_category, get_current_user_id, get_request_id, parse_uuid
from finance_tracker.infrastructure.database.session import get_db
from finance_tracker.infrastructure.database.repositories import ExpenseRepository
from finance_tracker.infrastructure.observability.metrics import record_created

router = APIRouter()


@router.get("/expenses", response_model=List[ExpenseResponse])
def list_expenses(
    category_id: Optional[uuid.UUID] = Query(None),
    type: Optional[ExpenseType] = Query(None),
    start_date: Optional[date] = Query(None, description="Inclusive lower bound"),
    end_date: Optional[date] = Query(None, description="Inclusive upper bound"),
    user_id: uuid.UUID = Depends(get_current_user_id),
    db: Session = Depends(get_db),
):
    """List expenses, newest first"""
    return ExpenseRepository(db, user_id).list(
        category_id=category_id,
        expense_type=type,
        start_date=start_date,
        end_date=end_date,
    )


@router.post("/expenses", response_model=ExpenseResponse, status_code=201)
def create_expense(
    request_body: ExpenseCreate,
    request: Request,
    user_id: uuid.UUID = Depends(get_current_user_id),
    db: Session = Depends(get_db),
):
    ensure_category(db, user_id, request_body.category_id)

    try:
        expense = ExpenseRepository(db, user_id).create(**request_body.model_dump())
        db.commit()
    except Exception as e:
        db.rollback()
        logging.error(f"Unexpected error: {e}", extra={"request_id": get_request_id(request)})
        raise HTTPException(status_code=500, detail="Internal server error")

    record_created("expense")
    return expense


@router.get("/expenses/{expense_id}", response_model=ExpenseResponse)
def get_expense(
    expense_id: str,
    user_id: uuid.UUID = Depends(get_current_user_id),
    db: Session = Depends(get_db),
):
    expense = ExpenseRepository(db, user_id).get(parse_uuid(expense_id, "expense ID"))
    if not expense:
        raise HTTPException(status_code=404, detail="Expense not found")
    return expense


@router.put("/expenses/{expense_id}", response_model=ExpenseResponse)
def update_expense(
    expense_id: str,
    request_body: ExpenseCreate,
    request: Request,
    user_id: uuid.UUID = Depends(get_current_user_id),
    db: Session = Depends(get_db),
):
    repo = ExpenseRepository(db, user_id)
    expense = repo.get(parse_uuid(expense_id, "expense ID"))
    if not expense:
        raise HTTPException(status_code=404, detail="Expense not found")
    ensure_category(db, user_id, request_body.category_id)

    try:
        repo.update(expense, **request_body.model_dump())
        db.commit()
    except Exception as e:
        db.rollback()
        logging.error(f"Unexpected error: {e}", extra={"request_id": get_request_id(request)})
        raise HTTPException(status_code=500, detail="Internal server error")

    return expense


@router.delete("/expenses/{expense_id}", status_code=204)
def delete_expense(
    expense_id: str,
    user_id: uuid.UUID = Depends(get_current_user_id),
    db: Session = Depends(get_db),
):
    repo = ExpenseRepository(db, user_id)
    expense = repo.get(parse_uuid(expense_id, "expense ID"))
    if not expense:
        raise HTTPException(status_code=404, detail="Expense not found")

    repo.delete(expense)
    db.commit()
