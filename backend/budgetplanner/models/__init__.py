"""
Database models package.
"""

from budgetplanner.models.budget import Budget
from budgetplanner.models.category import Category, DEFAULT_CATEGORIES, seed_default_categories
from budgetplanner.models.transaction import Transaction
from budgetplanner.models.preferences import BudgetPreferences, UserPreferences

__all__ = [
    "Budget",
    "Category",
    "DEFAULT_CATEGORIES",
    "seed_default_categories",
    "Transaction",
    "BudgetPreferences",
    "UserPreferences",
]
