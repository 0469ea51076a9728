"""Pytest fixtures for testing"""

import pytest
from datetime import timedelta
from typing import Callable, Generator, List
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker, Session
from finbridge.api.main import create_app
from finbridge.infrastructure.database.models import Base, GoalRecord, TransactionRecord, UserProgressRecord
from finbridge.infrastructure.database.session import get_db
from finbridge.utils.date_utils import utcnow


# Test database
TEST_DATABASE_URL = "sqlite:///./test_finbridge.db"
engine = create_engine(TEST_DATABASE_URL, connect_args={"check_same_thread": False})
TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)


@pytest.fixture
def db() -> Generator[Session, None, None]:
    """Create test database and session"""
    Base.metadata.create_all(bind=engine)
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


@pytest.fixture
def seed(db: Session) -> Callable[..., None]:
    """Insert ORM rows and commit"""

    def _seed(*records) -> None:
        db.add_all(records)
        db.commit()

    return _seed


@pytest.fixture
def steady_saver_records() -> List[object]:
    """Three months of salary with 20% saved, some investing, insurance and an emergency fund"""
    today = utcnow().date()
    user_id = "user_steady"
    records: List[object] = []

    for month in range(3):
        day = today - timedelta(days=10 + month * 30)
        records.extend([
            TransactionRecord(user_id=user_id, transaction_date=day, amount=50000, transaction_type="income", category="salary"),
            TransactionRecord(user_id=user_id, transaction_date=day, amount=10000, transaction_type="savings", category="savings"),
            TransactionRecord(user_id=user_id, transaction_date=day, amount=5000, transaction_type="investment", category="mutual fund sip"),
            TransactionRecord(user_id=user_id, transaction_date=day, amount=1500, transaction_type="expense", category="Health Insurance"),
            TransactionRecord(user_id=user_id, transaction_date=day, amount=20000, transaction_type="expense", category="rent"),
        ])

    records.append(
        GoalRecord(
            user_id=user_id,
            goal_name="Rainy Day",
            goal_type="emergency_fund",
            target_amount=150000,
            current_amount=150000,
            status="active",
        )
    )
    records.extend(
        UserProgressRecord(user_id=user_id, lesson_id=f"lesson_{i}", progress_status="completed", score=90)
        for i in range(12)
    )
    return records
