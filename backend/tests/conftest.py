"""Shared test fixtures."""

import os

os.environ.setdefault("DATABASE_URL", "sqlite:///:memory:")

import pytest
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool
from fastapi.testclient import TestClient
from datetime import date
from decimal import Decimal
import uuid

from budgetplanner.database import Base
from budgetplanner.dependencies import get_db
from budgetplanner.main import app
from budgetplanner.models import Budget, Category, Transaction, UserPreferences, seed_default_categories


@pytest.fixture(scope="function")
def db_session():
    """Create a fresh database for each test using in-memory SQLite."""
    # Use StaticPool to ensure all connections use the same in-memory database
    engine = create_engine(
        "sqlite:///:memory:",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )

    # Create all tables
    Base.metadata.create_all(bind=engine)

    # Create session
    TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)
    session = TestingSessionLocal()

    try:
        yield session
    finally:
        session.close()
        Base.metadata.drop_all(bind=engine)
        engine.dispose()


@pytest.fixture(scope="function")
def client(db_session):
    """Create a test client with database override."""
    def override_get_db():
        try:
            yield db_session
        finally:
            pass

    app.dependency_overrides[get_db] = override_get_db
    with TestClient(app) as test_client:
        yield test_client
    app.dependency_overrides.clear()


@pytest.fixture
def sample_budget(db_session):
    """Create a budget with the default categories."""
    budget = Budget(id=str(uuid.uuid4()), user_id="user-1", name="Household")
    seed_default_categories(budget)
    db_session.add(budget)
    db_session.commit()
    db_session.refresh(budget)
    return budget


@pytest.fixture
def other_budget(db_session):
    """A second budget belonging to another user."""
    budget = Budget(id=str(uuid.uuid4()), user_id="user-2", name="Other")
    seed_default_categories(budget)
    db_session.add(budget)
    db_session.commit()
    db_session.refresh(budget)
    return budget


@pytest.fixture
def custom_category(db_session, sample_budget):
    """A user-created category on the sample budget."""
    category = Category(
        id=str(uuid.uuid4()),
        budget_id=sample_budget.id,
        key="travel",
        name="Travel",
        color="#9c27b0",
        icon="✈️",
        percentage=0,
        is_default=False,
    )
    db_session.add(category)
    db_session.commit()
    db_session.refresh(category)
    return category


def make_transaction(budget, description, amount, category, txn_date=date(2024, 1, 15), order=None):
    return Transaction(
        id=str(uuid.uuid4()),
        budget_id=budget.id,
        description=description,
        amount=Decimal(amount),
        date=txn_date,
        category=category,
        order=order,
    )


@pytest.fixture
def sample_transactions(db_session, sample_budget):
    """Paycheck, rent and dinner in January 2024."""
    transactions = [
        make_transaction(sample_budget, "Paycheck", "1000.00", "Income", date(2024, 1, 1)),
        make_transaction(sample_budget, "Rent", "-500.00", "Essentials", date(2024, 1, 3)),
        make_transaction(sample_budget, "Dinner out", "-300.00", "Wants", date(2024, 1, 20)),
    ]
    db_session.add_all(transactions)
    db_session.commit()
    for txn in transactions:
        db_session.refresh(txn)
    return transactions


@pytest.fixture
def legacy_preferences(db_session):
    """Global preferences written before preferences were stored per budget."""
    prefs = UserPreferences(
        user_id="user-1",
        budget_preferences={
            "ratios": {"essentials": 60, "wants": 20, "savings": 20},
            "category_customization": {
                "essentials": {"name": "Needs", "color": "#000000", "icon": "🏠"},
            },
            "chart_preferences": {"show_pie_chart": False},
            "display_preferences": {},
        },
    )
    db_session.add(prefs)
    db_session.commit()
    return prefs


@pytest.fixture
def add_transaction(db_session):
    """Factory adding a committed transaction to a budget."""
    def _add(budget, description, amount, category, txn_date=date(2024, 1, 15), order=None):
        txn = make_transaction(budget, description, amount, category, txn_date, order)
        db_session.add(txn)
        db_session.commit()
        db_session.refresh(txn)
        return txn
    return _add
