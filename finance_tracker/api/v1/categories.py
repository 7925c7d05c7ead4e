"""/v1/categories - expense and income categories"""

import logging
import uuid
from typing import List, Optional
from fastapi import APIRouter, Depends, HTTPException, Query, Request
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from finance_tracker.api.v1.schemas import CategoryCreate, CategoryResponse, CategoryType
from finance_tracker.api.dependencies import get_current_user_id, get_request_id, parse_uuid
from finance_tracker.infrastructure.database.session import get_db
from finance_tracker.infrastructure.database.repositories import CategoryRepository
from finance_tracker.infrastructure.observability.metrics import record_created
from finance_tracker.domain.exceptions import DuplicateRecordError

router = APIRouter()

DUPLICATE_NAME = "A category with this name already exists"


@router.get("/categories", response_model=List[CategoryResponse])
def list_categories(
    type: Optional[CategoryType] = Query(None, description="EXPENSE or INCOME"),
    user_id: uuid.UUID = Depends(get_current_user_id),
    db: Session = Depends(get_db),
):
    return CategoryRepository(db, user_id).list(category_type=type)


@router.post("/categories", response_model=CategoryResponse, status_code=201)
def create_category(
    request_body: CategoryCreate,
    request: Request,
    user_id: uuid.UUID = Depends(get_current_user_id),
    db: Session = Depends(get_db),
):
    """Create a category; names are unique per user (409)"""
    request_id = get_request_id(request)
    repo = CategoryRepository(db, user_id)

    try:
        if repo.get_by_name(request_body.name):
            raise DuplicateRecordError(DUPLICATE_NAME)

        category = repo.create(**request_body.model_dump())
        db.commit()

    except (DuplicateRecordError, IntegrityError):
        db.rollback()
        raise HTTPException(status_code=409, detail=DUPLICATE_NAME)

    except Exception as e:
        db.rollback()
        logging.error(f"Unexpected error: {e}", extra={"request_id": request_id})
        raise HTTPException(status_code=500, detail="Internal server error")

    record_created("category")
    return category


@router.delete("/categories/{category_id}", status_code=204)
def delete_category(
    category_id: str,
    user_id: uuid.UUID = Depends(get_current_user_id),
    db: Session = Depends(get_db),
):
    repo = CategoryRepository(db, user_id)
    category = repo.get(parse_uuid(category_id, "category ID"))
    if not category:
        raise HTTPException(status_code=404, detail="Category not found")

    repo.delete(category)
    db.commit()
