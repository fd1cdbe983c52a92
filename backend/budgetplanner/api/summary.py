"""
Budget summary and trend endpoints.
"""

from datetime import date
from typing import Optional

from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from budgetplanner.config import settings
from budgetplanner.dependencies import get_db, get_budget
from budgetplanner.models import Budget
from budgetplanner.schemas.summary import SummaryResponse, MonthTrend
from budgetplanner.schemas.transaction import MONTH_PATTERN
from budgetplanner.services import preferences_service, transaction_service
from budgetplanner.services.budget_calculator import (
    calculate_budget_summary,
    category_label_keys,
    create_budget_plan,
    evaluate_plan,
    get_budget_suggestions,
)

router = APIRouter(prefix="/budgets/{budget_id}", tags=["summary"])


@router.get("/summary", response_model=SummaryResponse)
def get_budget_summary(
    month: Optional[str] = Query(None, pattern=MONTH_PATTERN, description="YYYY-MM format"),
    budget: Budget = Depends(get_budget),
    db: Session = Depends(get_db)
):
    """
    Summary, plan and suggestions for the budget.
    Covers all transactions, or a single month when given.
    """
    transactions = transaction_service.budget_transactions(db, budget.id, month=month).all()
    ratios = preferences_service.get_ratios(db, budget)

    summary = calculate_budget_summary(transactions, category_label_keys(budget.categories))
    plan = create_budget_plan(summary, ratios)

    return SummaryResponse(
        month=month,
        summary=summary,
        plan=plan,
        statuses=evaluate_plan(plan),
        suggestions=get_budget_suggestions(plan, currency=settings.currency_symbol),
    )


@router.get("/trends", response_model=list[MonthTrend])
def get_trends(
    months: int = Query(6, ge=1, le=24),
    end_month: Optional[str] = Query(None, pattern=MONTH_PATTERN, description="YYYY-MM format"),
    budget: Budget = Depends(get_budget),
    db: Session = Depends(get_db)
):
    """
    Income and expenses per month, oldest first.
    Returns: [{month, income, expenses, net}, ...]
    """
    if end_month:
        year, last = map(int, end_month.split('-'))
    else:
        today = date.today()
        year, last = today.year, today.month

    label_keys = category_label_keys(budget.categories)
    trends = []
    for i in range(months - 1, -1, -1):
        m = last - i
        y = year
        while m <= 0:
            m += 12
            y -= 1

        month = f"{y:04d}-{m:02d}"
        summary = calculate_budget_summary(
            transaction_service.budget_transactions(db, budget.id, month=month).all(),
            label_keys,
        )
        trends.append(MonthTrend(
            month=month,
            income=float(summary.total_income),
            expenses=float(summary.total_expenses),
            net=float(summary.net_cashflow)
        ))

    return trends
