"""Dependency injection for FastAPI endpoints"""

import uuid
from typing import Optional
from fastapi import Depends, Header, HTTPException, Request
from sqlalchemy.orm import Session
from finance_tracker.infrastructure.database.session import get_db
from finance_tracker.infrastructure.database.repositories import CategoryRepository, UserRepository
from finance_tracker.infrastructure.observability.metrics import auth_failure_counter


def get_request_id(request: Request) -> str:
    """Extract request ID from request state"""
    return getattr(request.state, "request_id", "unknown")


def parse_uuid(value: str, label: str = "ID") -> uuid.UUID:
    """Parse a path identifier, 400 on malformed input"""
    try:
        return uuid.UUID(value)
    except ValueError:
        raise HTTPException(status_code=400, detail=f"Invalid {label} format")


def get_current_user_id(
    x_user_id: Optional[str] = Header(None, alias="X-User-ID"),
    db: Session = Depends(get_db),
) -> uuid.UUID:
    """
    Resolve the calling user from the X-User-ID header.

    Raises:
        401 when the header is missing or names no user, 400 when malformed
    """
    if not x_user_id:
        auth_failure_counter.labels(reason="missing_identity").inc()
        raise HTTPException(status_code=401, detail="Not authenticated")

    user_id = parse_uuid(x_user_id, "user ID")

    if UserRepository(db).get_by_id(user_id) is None:
        auth_failure_counter.labels(reason="unknown_user").inc()
        raise HTTPException(status_code=401, detail="Not authenticated")

    return user_id


def ensure_category(db: Session, user_id: uuid.UUID, category_id: Optional[uuid.UUID]) -> None:
    """404 when a referenced category does not belong to the user"""
    if category_id and CategoryRepository(db, user_id).get(category_id) is None:
        raise HTTPException(status_code=404, detail="Category not found")
