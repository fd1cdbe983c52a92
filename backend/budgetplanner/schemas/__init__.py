"""
Pydantic schemas package.
"""

from budgetplanner.schemas.budget import (
    BudgetCreate,
    BudgetUpdate,
    BudgetResponse,
)
from budgetplanner.schemas.category import (
    CategoryBase,
    CategoryCreate,
    CategoryUpdate,
    CategoryResponse,
    CategoryList,
)
from budgetplanner.schemas.transaction import (
    TransactionBase,
    TransactionCreate,
    TransactionUpdate,
    TransactionResponse,
    TransactionListResponse,
)
from budgetplanner.schemas.summary import (
    BudgetSummary,
    BudgetPlan,
    CategoryStatus,
    RatioBand,
)

__all__ = [
    "BudgetCreate",
    "BudgetUpdate",
    "BudgetResponse",
    "CategoryBase",
    "CategoryCreate",
    "CategoryUpdate",
    "CategoryResponse",
    "CategoryList",
    "TransactionBase",
    "TransactionCreate",
    "TransactionUpdate",
    "TransactionResponse",
    "TransactionListResponse",
    "BudgetSummary",
    "BudgetPlan",
    "CategoryStatus",
    "RatioBand",
]
