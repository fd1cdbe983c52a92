"""
Main API router.
"""

from fastapi import APIRouter
from budgetplanner.api import budgets, categories, transactions, preferences, summary, voice, imports

api_router = APIRouter()

api_router.include_router(budgets.router, prefix="/budgets", tags=["budgets"])
api_router.include_router(categories.router)
api_router.include_router(transactions.router)
api_router.include_router(preferences.router)
api_router.include_router(summary.router)
api_router.include_router(voice.router)
api_router.include_router(imports.router)
