"""/v1/goals - investment goals with progress tracking"""

import logging
import uuid
from typing import List
from fastapi import APIRouter, Depends, HTTPException, Request
from sqlalchemy.orm import Session

from finance_tracker.api.v1.schemas import GoalCreate, GoalResponse
from finance_tracker.api.dependencies import get_current_user_id, get_request_id, parse_uuid
from finance_tracker.infrastructure.database.session import get_db
from finance_tracker.infrastructure.database.models import InvestmentGoal
from finance_tracker.infrastructure.database.repositories import GoalRepository
from finance_tracker.infrastructure.observability.metrics import record_created
from finance_tracker.domain.dashboard import goal_progress, is_goal_completed

router = APIRouter()


def goal_response(goal: InvestmentGoal) -> GoalResponse:
    return GoalResponse(
        id=goal.id,
        name=goal.name,
        description=goal.description,
        target_amount=goal.target_amount,
        current_amount=goal.current_amount,
        deadline=goal.deadline,
        priority=goal.priority,
        is_completed=goal.is_completed,
        progress=goal_progress(goal.current_amount, goal.target_amount),
    )


def _goal_fields(request_body: GoalCreate) -> dict:
    """Validated fields plus the derived completion flag"""
    fields = request_body.model_dump()
    fields["is_completed"] = is_goal_completed(request_body.current_amount, request_body.target_amount)
    return fields


def _get_or_404(repo: GoalRepository, goal_id: str) -> InvestmentGoal:
    goal = repo.get(parse_uuid(goal_id, "goal ID"))
    if not goal:
        raise HTTPException(status_code=404, detail="Goal not found")
    return goal


@router.get("/goals", response_model=List[GoalResponse])
def list_goals(
    user_id: uuid.UUID = Depends(get_current_user_id),
    db: Session = Depends(get_db),
):
    """List goals, nearest deadline first"""
    return [goal_response(g) for g in GoalRepository(db, user_id).list()]


@router.post("/goals", response_model=GoalResponse, status_code=201)
def create_goal(
    request_body: GoalCreate,
    request: Request,
    user_id: uuid.UUID = Depends(get_current_user_id),
    db: Session = Depends(get_db),
):
    try:
        goal = GoalRepository(db, user_id).create(**_goal_fields(request_body))
        db.commit()
    except Exception as e:
        db.rollback()
        logging.error(f"Unexpected error: {e}", extra={"request_id": get_request_id(request)})
        raise HTTPException(status_code=500, detail="Internal server error")

    record_created("goal")
    return goal_response(goal)


@router.get("/goals/{goal_id}", response_model=GoalResponse)
def get_goal(
    goal_id: str,
    user_id: uuid.UUID = Depends(get_current_user_id),
    db: Session = Depends(get_db),
):
    return goal_response(_get_or_404(GoalRepository(db, user_id), goal_id))


@router.put("/goals/{goal_id}", response_model=GoalResponse)
def update_goal(
    goal_id: str,
    request_body: GoalCreate,
    request: Request,
    user_id: uuid.UUID = Depends(get_current_user_id),
    db: Session = Depends(get_db),
):
    """Replace a goal; completion is re-derived from the new amounts"""
    repo = GoalRepository(db, user_id)
    goal = _get_or_404(repo, goal_id)

    try:
        repo.update(goal, **_goal_fields(request_body))
        db.commit()
    except Exception as e:
        db.rollback()
        logging.error(f"Unexpected error: {e}", extra={"request_id": get_request_id(request)})
        raise HTTPException(status_code=500, detail="Internal server error")

    return goal_response(goal)


@router.delete("/goals/{goal_id}", status_code=204)
def delete_goal(
    goal_id: str,
    user_id: uuid.UUID = Depends(get_current_user_id),
    db: Session = Depends(get_db),
):
    repo = GoalRepository(db, user_id)
    repo.delete(_get_or_404(repo, goal_id))
    db.commit()
