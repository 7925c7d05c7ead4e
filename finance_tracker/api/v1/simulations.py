"""/v1/simulations - saved investment projections and the live simulator"""

import logging
import uuid
from typing import List
from fastapi import APIRouter, Depends, HTTPException, Request
from sqlalchemy.orm import Session

from finance_tracker.api.v1.schemas import (
    ProjectionPointSchema,
    ProjectionRequest,
    ProjectionResponse,
    SimulationCreate,
    SimulationResponse,
)
from finance_tracker.api.dependencies import get_current_user_id, get_request_id, parse_uuid
from finance_tracker.infrastructure.database.session import get_db
from finance_tracker.infrastructure.database.repositories import SimulationRepository
from finance_tracker.infrastructure.observability.logging import log_simulation_created
from finance_tracker.infrastructure.observability.metrics import record_simulation
from finance_tracker.domain.projection import project_investment, project_investment_series, summarize_projection
from finance_tracker.domain.exceptions import InvalidProjectionError

router = APIRouter()


@router.get("/simulations", response_model=List[SimulationResponse])
def list_simulations(
    user_id: uuid.UUID = Depends(get_current_user_id),
    db: Session = Depends(get_db),
):
    """List saved simulations, newest first"""
    return SimulationRepository(db, user_id).list()


@router.post("/simulations", response_model=SimulationResponse, status_code=201)
def create_simulation(
    request_body: SimulationCreate,
    request: Request,
    user_id: uuid.UUID = Depends(get_current_user_id),
    db: Session = Depends(get_db),
):
    """
    Save a simulation with its projected final amount.

    Flow:
    1. Project the final amount with the requested accrual method
    2. Persist inputs + projection (the projection is never recomputed later)
    3. Record metrics and log the outcome
    """
    request_id = get_request_id(request)

    try:
        projected_amount = project_investment(
            request_body.initial_amount,
            request_body.monthly_contribution,
            request_body.interest_rate,
            request_body.period_months,
            request_body.interest_type,
        )

        simulation = SimulationRepository(db, user_id).create(
            name=request_body.name,
            initial_amount=request_body.initial_amount,
            monthly_contribution=request_body.monthly_contribution,
            interest_rate=request_body.interest_rate,
            interest_type=request_body.interest_type.value,
            period_months=request_body.period_months,
            projected_amount=projected_amount,
        )
        db.commit()

    except InvalidProjectionError as e:
        db.rollback()
        logging.warning(f"Invalid projection: {e}", extra={"request_id": request_id})
        raise HTTPException(status_code=422, detail=str(e))

    except Exception as e:
        db.rollback()
        logging.error(f"Unexpected error: {e}", extra={"request_id": request_id})
        raise HTTPException(status_code=500, detail="Internal server error")

    record_simulation(request_body.interest_type.value, projected_amount)
    log_simulation_created(
        request_id,
        str(user_id),
        request_body.interest_type.value,
        request_body.period_months,
        projected_amount,
    )

    return simulation


@router.post("/simulations/preview", response_model=ProjectionResponse)
def preview_simulation(
    request_body: ProjectionRequest,
    user_id: uuid.UUID = Depends(get_current_user_id),
):
    """Month-by-month projection for the simulator chart; nothing is stored"""
    points = list(
        project_investment_series(
            request_body.initial_amount,
            request_body.monthly_contribution,
            request_body.interest_rate,
            request_body.period_months,
            request_body.interest_type,
        )
    )
    summary = summarize_projection(points)

    return ProjectionResponse(
        final_amount=summary.final_amount,
        total_invested=summary.total_invested,
        total_interest=summary.total_interest,
        points=[ProjectionPointSchema.model_validate(p) for p in points],
    )


@router.get("/simulations/{simulation_id}", response_model=SimulationResponse)
def get_simulation(
    simulation_id: str,
    user_id: uuid.UUID = Depends(get_current_user_id),
    db: Session = Depends(get_db),
):
    simulation = SimulationRepository(db, user_id).get(parse_uuid(simulation_id, "simulation ID"))
    if not simulation:
        raise HTTPException(status_code=404, detail="Simulation not found")
    return simulation


@router.delete("/simulations/{simulation_id}", status_code=204)
def delete_simulation(
    simulation_id: str,
    user_id: uuid.UUID = Depends(get_current_user_id),
    db: Session = Depends(get_db),
):
    repo = SimulationRepository(db, user_id)
    simulation = repo.get(parse_uuid(simulation_id, "simulation ID"))
    if not simulation:
        raise HTTPException(status_code=404, detail="Simulation not found")

    repo.delete(simulation)
    db.commit()
