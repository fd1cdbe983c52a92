"""
FastAPI dependencies.
"""

from typing import Generator

from fastapi import Depends, HTTPException
from sqlalchemy.orm import Session

from budgetplanner.database import SessionLocal
from budgetplanner.models.budget import Budget


def get_db() -> Generator[Session, None, None]:
    """
    Dependency for getting database sessions.
    """
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


def get_budget(budget_id: str, db: Session = Depends(get_db)) -> Budget:
    """Resolve the budget named in the path or fail with 404."""
    budget = db.query(Budget).filter(Budget.id == budget_id).first()
    if not budget:
        raise HTTPException(status_code=404, detail="Budget not found")
    return budget
