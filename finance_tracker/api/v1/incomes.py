"""/v1/incomes - money received"""

import logging
import uuid
from datetime import date
from typing import List, Optional
from fastapi import APIRouter, Depends, HTTPException, Query, Request
from sqlalchemy.orm import Session

from finance_tracker.api.v1.schemas import IncomeCreate, IncomeResponse, IncomeType
from finance_tracker.api.dependencies import get_current_user_id, get_request_id, parse_uuid
from finance_tracker.infrastructure.database.session import get_db
from finance_tracker.infrastructure.database.repositories import IncomeRepository
from finance_tracker.infrastructure.observability.metrics import record_created

router = APIRouter()


@router.get("/incomes", response_model=List[IncomeResponse])
def list_incomes(
    type: Optional[IncomeType] = Query(None),
    start_date: Optional[date] = Query(None, description="Inclusive lower bound"),
    end_date: Optional[date] = Query(None, description="Inclusive upper bound"),
    user_id: uuid.UUID = Depends(get_current_user_id),
    db: Session = Depends(get_db),
):
    return IncomeRepository(db, user_id).list(income_type=type, start_date=start_date, end_date=end_date)


@router.post("/incomes", response_model=IncomeResponse, status_code=201)
def create_income(
    request_body: IncomeCreate,
    request: Request,
    user_id: uuid.UUID = Depends(get_current_user_id),
    db: Session = Depends(get_db),
):
    try:
        income = IncomeRepository(db, user_id).create(**request_body.model_dump())
        db.commit()
    except Exception as e:
        db.rollback()
        logging.error(f"Unexpected error: {e}", extra={"request_id": get_request_id(request)})
        raise HTTPException(status_code=500, detail="Internal server error")

    record_created("income")
    return income


@router.get("/incomes/{income_id}", response_model=IncomeResponse)
def get_income(
    income_id: str,
    user_id: uuid.UUID = Depends(get_current_user_id),
    db: Session = Depends(get_db),
):
    income = IncomeRepository(db, user_id).get(parse_uuid(income_id, "income ID"))
    if not income:
        raise HTTPException(status_code=404, detail="Income not found")
    return income


@router.put("/incomes/{income_id}", response_model=IncomeResponse)
def update_income(
    income_id: str,
    request_body: IncomeCreate,
    request: Request,
    user_id: uuid.UUID = Depends(get_current_user_id),
    db: Session = Depends(get_db),
):
    repo = IncomeRepository(db, user_id)
    income = repo.get(parse_uuid(income_id, "income ID"))
    if not income:
        raise HTTPException(status_code=404, detail="Income not found")

    try:
        repo.update(income, **request_body.model_dump())
        db.commit()
    except Exception as e:
        db.rollback()
        logging.error(f"Unexpected error: {e}", extra={"request_id": get_request_id(request)})
        raise HTTPException(status_code=500, detail="Internal server error")

    return income


@router.delete("/incomes/{income_id}", status_code=204)
def delete_income(
    income_id: str,
    user_id: uuid.UUID = Depends(get_current_user_id),
    db: Session = Depends(get_db),
):
    repo = IncomeRepository(db, user_id)
    income = repo.get(parse_uuid(income_id, "income ID"))
    if not income:
        raise HTTPException(status_code=404, detail="Income not found")

    repo.delete(income)
    db.commit()
