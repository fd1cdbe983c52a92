"""
Budget API endpoints.
"""

import logging

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from budgetplanner.dependencies import get_db, get_budget
from budgetplanner.models import Budget, seed_default_categories
from budgetplanner.schemas.budget import BudgetCreate, BudgetUpdate, BudgetResponse

router = APIRouter()
logger = logging.getLogger(__name__)


@router.get("", response_model=list[BudgetResponse])
def list_budgets(
    user_id: str,
    db: Session = Depends(get_db)
):
    """List a user's budgets."""
    return db.query(Budget).filter(Budget.user_id == user_id).order_by(Budget.created_at).all()


@router.post("", response_model=BudgetResponse, status_code=201)
def create_budget(
    budget: BudgetCreate,
    db: Session = Depends(get_db)
):
    """Create a budget with the default Essentials/Wants/Savings/Income categories."""
    db_budget = Budget(user_id=budget.user_id, name=budget.name)
    seed_default_categories(db_budget)
    db.add(db_budget)
    db.commit()
    db.refresh(db_budget)
    logger.info(f"Created budget {db_budget.id} for user {db_budget.user_id}")
    return db_budget


@router.get("/{budget_id}", response_model=BudgetResponse)
def get_budget_detail(budget: Budget = Depends(get_budget)):
    """Get a specific budget."""
    return budget


@router.patch("/{budget_id}", response_model=BudgetResponse)
def update_budget(
    update: BudgetUpdate,
    budget: Budget = Depends(get_budget),
    db: Session = Depends(get_db)
):
    """Rename a budget."""
    if update.name is not None:
        budget.name = update.name
    db.commit()
    db.refresh(budget)
    return budget


@router.delete("/{budget_id}", status_code=204)
def delete_budget(
    budget: Budget = Depends(get_budget),
    db: Session = Depends(get_db)
):
    """Delete a budget with its transactions, categories and preferences."""
    db.delete(budget)
    db.commit()
    logger.info(f"Deleted budget {budget.id}")
    return None
