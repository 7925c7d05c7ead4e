"""Pytest fixtures for testing"""

import os

# Point settings at SQLite and cheap bcrypt before the app modules read them
os.environ.setdefault("DATABASE_URL", "sqlite:///./test.db")
os.environ.setdefault("BCRYPT_ROUNDS", "4")

import pytest
from datetime import date
from typing import Dict, Generator
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker, Session
from finance_tracker.api.main import create_app
from finance_tracker.infrastructure.auth.passwords import hash_password
from finance_tracker.infrastructure.database.models import Base, User
from finance_tracker.infrastructure.database.repositories import UserRepository
from finance_tracker.infrastructure.database.session import get_db, init_db
from finance_tracker.domain.models import CardPurchase


# Test database
TEST_DATABASE_URL = "sqlite:///./test.db"
engine = create_engine(TEST_DATABASE_URL, connect_args={"check_same_thread": False})
TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)

TEST_PASSWORD = "Secret123"


@pytest.fixture
def db() -> Generator[Session, None, None]:
    """Create test database and session"""
    init_db(bind=engine)
    db = TestingSessionLocal()
    try:
        yield db
    finally:
        db.close()
        Base.metadata.drop_all(bind=engine)


@pytest.fixture
def client(db: Session) -> TestClient:
    """Create FastAPI test client with test database"""
    app = create_app()

    def override_get_db():
        try:
            yield db
        finally:
            pass

    app.dependency_overrides[get_db] = override_get_db
    return TestClient(app)


def make_user(db: Session, email: str) -> User:
    user = UserRepository(db).create_user(
        name="Test User",
        email=email,
        password_hash=hash_password(TEST_PASSWORD, rounds=4),
    )
    db.commit()
    return user


@pytest.fixture
def user(db: Session) -> User:
    """Registered user with the default categories"""
    return make_user(db, "ana@example.com")


@pytest.fixture
def other_user(db: Session) -> User:
    return make_user(db, "bruno@example.com")


@pytest.fixture
def auth_headers(user: User) -> Dict[str, str]:
    return {"X-User-ID": str(user.id)}


@pytest.fixture
def sample_purchases() -> list[CardPurchase]:
    """Purchases on a card closing on day 10"""
    return [
        # Before closing: bills March, April
        CardPurchase(total_amount=200.0, installments=2, purchase_date=date(2024, 3, 5)),
        # After closing: bills April, May, June
        CardPurchase(total_amount=300.0, installments=3, purchase_date=date(2024, 3, 15)),
        # Previous month, single installment: bills February only
        CardPurchase(total_amount=80.0, installments=1, purchase_date=date(2024, 2, 9)),
    ]
