"""
Budget summary, plan and suggestion schemas.
"""

import enum
from decimal import Decimal
from typing import Annotated, Dict, List, Optional

from pydantic import BaseModel, ConfigDict, PlainSerializer


# Decimal internally, plain JSON number on the wire
Money = Annotated[Decimal, PlainSerializer(float, return_type=float, when_used="json")]


class RatioBand(str, enum.Enum):
    """Actual vs. recommended classification, ordered from least to most spent."""
    significantly_under = "significantly_under"
    under = "under"
    on_target = "on_target"
    over = "over"
    significantly_over = "significantly_over"

    @property
    def rank(self) -> int:
        return list(RatioBand).index(self)


class BudgetSummary(BaseModel):
    model_config = ConfigDict(frozen=True)

    total_income: Money
    total_expenses: Money
    net_cashflow: Money
    categories: Dict[str, Money]
    percentages: Dict[str, float]
    percent_of_income: Dict[str, float]


class BudgetPlan(BaseModel):
    model_config = ConfigDict(frozen=True)

    income: Money
    recommended: Dict[str, Money]
    actual: Dict[str, Money]
    differences: Dict[str, Money]


class CategoryStatus(BaseModel):
    category: str
    actual: Money
    recommended: Money
    difference: Money
    ratio: Optional[float]
    band: RatioBand


class SummaryResponse(BaseModel):
    month: Optional[str]
    summary: BudgetSummary
    plan: BudgetPlan
    statuses: List[CategoryStatus]
    suggestions: List[str]


class MonthTrend(BaseModel):
    month: str
    income: float
    expenses: float
    net: float
