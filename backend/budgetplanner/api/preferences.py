"""
Preference API endpoints.
"""

from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.orm import Session

from budgetplanner.dependencies import get_db, get_budget
from budgetplanner.models import Budget, UserPreferences
from budgetplanner.schemas.preferences import (
    BudgetPreferencesResponse,
    BudgetPreferencesUpdate,
    UserPreferencesResponse,
    UserPreferencesUpdate,
)
from budgetplanner.services import preferences_service

router = APIRouter(tags=["preferences"])


@router.get("/budgets/{budget_id}/preferences", response_model=BudgetPreferencesResponse)
def get_budget_preferences(
    budget: Budget = Depends(get_budget),
    db: Session = Depends(get_db)
):
    """Budget preferences; migrated or synthesized from defaults on first access."""
    record, _ = preferences_service.resolve_preferences(db, budget)
    return record


@router.put("/budgets/{budget_id}/preferences", response_model=BudgetPreferencesResponse)
def save_budget_preferences(
    update: BudgetPreferencesUpdate,
    budget: Budget = Depends(get_budget),
    db: Session = Depends(get_db)
):
    """Replace budget preferences. Ratios must sum to 100."""
    try:
        return preferences_service.save_preferences(db, budget, update)
    except preferences_service.RatioSumError as e:
        raise HTTPException(status_code=422, detail=str(e))


@router.get("/users/{user_id}/preferences", response_model=UserPreferencesResponse)
def get_user_preferences(
    user_id: str,
    db: Session = Depends(get_db)
):
    """Per-user preferences document."""
    prefs = db.query(UserPreferences).filter(UserPreferences.user_id == user_id).first()
    if not prefs:
        raise HTTPException(status_code=404, detail="No preferences found for user")
    return prefs


@router.put("/users/{user_id}/preferences", response_model=UserPreferencesResponse)
def save_user_preferences(
    user_id: str,
    update: UserPreferencesUpdate,
    db: Session = Depends(get_db)
):
    """Create or update the per-user preferences document."""
    prefs = db.query(UserPreferences).filter(UserPreferences.user_id == user_id).first()
    if not prefs:
        prefs = UserPreferences(user_id=user_id)
        db.add(prefs)

    if update.budget_preferences is not None:
        prefs.budget_preferences = update.budget_preferences.model_dump()
    if update.table_colors is not None:
        prefs.table_colors = update.table_colors

    db.commit()
    db.refresh(prefs)
    return prefs
