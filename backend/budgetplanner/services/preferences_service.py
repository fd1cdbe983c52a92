"""
Budget preferences: resolution, legacy migration and saving.
"""

import logging
from typing import Any, Dict, Iterable, Mapping, Optional, Tuple

from pydantic import ValidationError
from sqlalchemy.orm import Session

from budgetplanner.models.budget import Budget
from budgetplanner.models.category import Category
from budgetplanner.models.preferences import BudgetPreferences, UserPreferences
from budgetplanner.schemas.preferences import (
    BudgetPreferencesBase,
    BudgetPreferencesUpdate,
    CategoryCustomization,
)
from budgetplanner.services.budget_calculator import DEFAULT_RATIOS, category_key

logger = logging.getLogger(__name__)

RATIO_TOTAL = 100

DEFAULT_CUSTOMIZATION = {
    "essentials": {"name": "Essentials", "color": "#2196f3", "icon": "🏠"},
    "wants": {"name": "Wants", "color": "#ff9800", "icon": "🛍️"},
    "savings": {"name": "Savings", "color": "#4caf50", "icon": "💰"},
}


class RatioSumError(ValueError):
    """Ratios must add up to 100 before they can be saved."""

    def __init__(self, total: float):
        self.total = total
        super().__init__("Budget ratios must sum to 100%")


def default_preferences() -> BudgetPreferencesBase:
    return BudgetPreferencesBase(
        ratios=dict(DEFAULT_RATIOS),
        category_customization={
            key: CategoryCustomization(**data) for key, data in DEFAULT_CUSTOMIZATION.items()
        },
    )


def validate_ratios(ratios: Mapping[str, float]) -> None:
    """Raise RatioSumError unless the ratios round to a total of 100."""
    total = sum(ratios.values())
    if round(total) != RATIO_TOTAL:
        raise RatioSumError(total)


def rebalance_ratios(ratios: Mapping[str, float]) -> Dict[str, int]:
    """
    Scale ratios proportionally so they sum to exactly 100.

    Whole percentages are assigned by largest remainder, so rounding never
    leaves the total at 99 or 101. A zero total is returned unchanged.
    """
    total = sum(ratios.values())
    if total <= 0:
        return {key: int(value) for key, value in ratios.items()}

    scaled = {key: value * RATIO_TOTAL / total for key, value in ratios.items()}
    result = {key: int(value) for key, value in scaled.items()}
    shortfall = RATIO_TOTAL - sum(result.values())

    by_remainder = sorted(scaled, key=lambda key: scaled[key] - result[key], reverse=True)
    for key in by_remainder[:shortfall]:
        result[key] += 1

    return result


def synthesize_preferences(categories: Iterable[Category]) -> BudgetPreferencesBase:
    """Build preferences from a budget's category configuration."""
    customization: Dict[str, CategoryCustomization] = {}
    ratios: Dict[str, int] = {}

    for category in categories:
        if category.is_income:
            continue
        key = category.key
        customization[key] = CategoryCustomization(
            name=category.name,
            color=category.color or "#9e9e9e",
            icon=category.icon or "📊",
        )
        ratios[key] = category.percentage or 0

    total = sum(ratios.values())
    if total == 0:
        for key, value in DEFAULT_RATIOS.items():
            if key in ratios:
                ratios[key] = value
    elif total != RATIO_TOTAL:
        ratios = rebalance_ratios(ratios)

    prefs = default_preferences()
    merged_ratios = dict(prefs.ratios)
    merged_ratios.update(ratios)
    merged_customization = dict(prefs.category_customization)
    merged_customization.update(customization)

    return BudgetPreferencesBase(
        ratios=merged_ratios,
        category_customization=merged_customization,
        chart_preferences=prefs.chart_preferences,
        display_preferences=prefs.display_preferences,
    )


def migrate_legacy_preferences(document: Mapping[str, Any]) -> Optional[BudgetPreferencesBase]:
    """
    Normalize a legacy global preferences document for a budget.

    Keys are normalized like saved preferences and ratios are rebalanced to
    sum to 100 (50/30/20 when they are all zero). Returns None when the
    document cannot be read.
    """
    try:
        prefs = BudgetPreferencesBase.model_validate(document)
    except ValidationError as e:
        logger.warning(f"Invalid legacy preferences: {e}")
        return None

    ratios: Dict[str, float] = {}
    for key, value in prefs.ratios.items():
        ratios[category_key(key)] = ratios.get(category_key(key), 0) + value
    if sum(ratios.values()) <= 0:
        ratios = dict(DEFAULT_RATIOS)
    elif round(sum(ratios.values())) != RATIO_TOTAL:
        ratios = rebalance_ratios(ratios)

    customization = {
        category_key(key): value for key, value in prefs.category_customization.items()
    }
    return prefs.model_copy(update={"ratios": ratios, "category_customization": customization})


def _store(db: Session, budget: Budget, prefs: BudgetPreferencesBase) -> BudgetPreferences:
    data = prefs.model_dump()
    record = budget.preferences
    if record is None:
        record = BudgetPreferences()
        budget.preferences = record

    record.ratios = data["ratios"]
    record.category_customization = data["category_customization"]
    record.chart_preferences = data["chart_preferences"]
    record.display_preferences = data["display_preferences"]

    db.commit()
    db.refresh(record)
    return record


def resolve_preferences(db: Session, budget: Budget) -> Tuple[BudgetPreferences, str]:
    """
    Load a budget's preferences, reconciling them on first access.

    Returns the stored record and where it came from: ``stored``,
    ``migrated`` (copied from the user's legacy global document) or
    ``defaults`` (synthesized from the budget's categories).
    """
    if budget.preferences is not None:
        return budget.preferences, "stored"

    legacy = db.query(UserPreferences).filter(UserPreferences.user_id == budget.user_id).first()
    if legacy and legacy.budget_preferences:
        prefs = migrate_legacy_preferences(legacy.budget_preferences)
        if prefs is not None:
            logger.info(f"Migrating global preferences of user {budget.user_id} to budget {budget.id}")
            return _store(db, budget, prefs), "migrated"
        logger.warning(f"Ignoring unreadable global preferences of user {budget.user_id}")

    logger.info(f"No preferences for budget {budget.id}, using defaults based on current categories")
    prefs = synthesize_preferences(budget.categories)
    return _store(db, budget, prefs), "defaults"


def save_preferences(
    db: Session,
    budget: Budget,
    update: BudgetPreferencesUpdate
) -> BudgetPreferences:
    """Validate and persist preferences, then mirror ratios onto categories."""
    ratios = {category_key(key): value for key, value in update.ratios.items()}
    validate_ratios(ratios)

    prefs = update.model_copy(update={"ratios": ratios})
    record = _store(db, budget, prefs)

    for category in budget.categories:
        if not category.is_income and category.key in ratios:
            category.percentage = int(round(ratios[category.key]))
    db.commit()

    logger.info(f"Saved preferences for budget {budget.id}")
    return record


def get_ratios(db: Session, budget: Budget) -> Dict[str, float]:
    record, _ = resolve_preferences(db, budget)
    return dict(record.ratios or DEFAULT_RATIOS)
