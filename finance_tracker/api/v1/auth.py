"""POST /v1/auth/register, POST /v1/auth/login - account creation and credential check"""

import logging
from fastapi import APIRouter, Depends, HTTPException, Request
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from finance_tracker.api.v1.schemas import LoginRequest, RegisterRequest, UserResponse
from finance_tracker.api.dependencies import get_request_id
from finance_tracker.infrastructure.auth.passwords import hash_password, verify_password
from finance_tracker.infrastructure.database.session import get_db
from finance_tracker.infrastructure.database.repositories import UserRepository
from finance_tracker.infrastructure.observability.logging import log_user_registered
from finance_tracker.infrastructure.observability.metrics import auth_failure_counter, record_created
from finance_tracker.domain.exceptions import AuthenticationError, DuplicateRecordError

router = APIRouter()

DUPLICATE_EMAIL = "This email is already registered"


@router.post("/auth/register", response_model=UserResponse, status_code=201)
def register(request_body: RegisterRequest, request: Request, db: Session = Depends(get_db)):
    """
    Create an account.

    Flow:
    1. Reject emails already registered (409)
    2. Hash the password with bcrypt
    3. Persist the user with the default expense categories
    """
    request_id = get_request_id(request)
    user_repo = UserRepository(db)

    try:
        if user_repo.get_by_email(request_body.email):
            raise DuplicateRecordError(DUPLICATE_EMAIL)

        user = user_repo.create_user(
            name=request_body.name,
            email=request_body.email,
            password_hash=hash_password(request_body.password),
        )
        db.commit()

    except (DuplicateRecordError, IntegrityError) as e:
        # IntegrityError: a concurrent registration won the unique email constraint
        db.rollback()
        logging.warning(f"Registration rejected: {e}", extra={"request_id": request_id})
        raise HTTPException(status_code=409, detail=DUPLICATE_EMAIL)

    except Exception as e:
        db.rollback()
        logging.error(f"Unexpected error: {e}", extra={"request_id": request_id})
        raise HTTPException(status_code=500, detail="Internal server error")

    record_created("user")
    log_user_registered(request_id, str(user.id))

    return user


@router.post("/auth/login", response_model=UserResponse)
def login(request_body: LoginRequest, request: Request, db: Session = Depends(get_db)):
    """
    Verify credentials.

    The returned user id is what clients send back as X-User-ID.
    """
    request_id = get_request_id(request)

    try:
        user = UserRepository(db).get_by_email(request_body.email)
        if user is None or not verify_password(request_body.password, user.password_hash):
            raise AuthenticationError("Invalid email or password")

    except AuthenticationError as e:
        auth_failure_counter.labels(reason="bad_credentials").inc()
        logging.warning(f"Login rejected: {e}", extra={"request_id": request_id})
        raise HTTPException(status_code=401, detail=str(e))

    return user
