"""
Budget aggregation, 50/30/20 planning and suggestions.

Everything here is a pure function over plain values. Transactions only need
``amount`` and ``category`` attributes, so ORM rows and schemas both work.
"""

import re
from decimal import Decimal, ROUND_HALF_UP
from typing import Dict, Iterable, List, Mapping, Optional

from budgetplanner.schemas.summary import BudgetPlan, BudgetSummary, CategoryStatus, RatioBand


DEFAULT_RATIOS: Dict[str, int] = {"essentials": 50, "wants": 30, "savings": 20}
BASE_CATEGORIES = ("essentials", "wants", "savings")
INCOME_CATEGORY = "income"
UNCATEGORIZED = "uncategorized"
SAVINGS_GOALS = frozenset({"savings"})

ON_TARGET_LIMIT = Decimal("1.05")
OVER_LIMIT = Decimal("1.2")
SAVINGS_UNDER_LIMIT = Decimal("0.95")
SAVINGS_SIGNIFICANTLY_UNDER_LIMIT = Decimal("0.8")
UNCATEGORIZED_WARNING_SHARE = Decimal("0.1")

NO_INCOME_MESSAGE = (
    "No income detected. Please make sure your transactions include income "
    "so recommendations can be calculated."
)

ZERO = Decimal("0")
CENT = Decimal("0.01")


def category_key(label: Optional[str]) -> str:
    """Normalize a category label into the lowercase key used by ratios."""
    return re.sub(r"\s+", "-", (label or "").strip().lower())


def category_label_keys(categories: Iterable) -> Dict[str, str]:
    """
    Map transaction labels to category keys for a budget's categories.

    A label matches a category by name (case-insensitive) or, failing that,
    by key, so renamed categories keep their ratio. Income categories all
    map to ``income``.
    """
    categories = list(categories)
    label_keys: Dict[str, str] = {}
    for category in categories:
        label_keys[category_key(category.key)] = INCOME_CATEGORY if category.is_income else category.key
    for category in categories:
        label_keys[category_key(category.name)] = INCOME_CATEGORY if category.is_income else category.key
    return label_keys


def _to_decimal(value) -> Decimal:
    if isinstance(value, Decimal):
        return value
    return Decimal(str(value))


def _percent(part: Decimal, whole: Decimal) -> float:
    if whole <= 0:
        return 0.0
    return float(part / whole * 100)


def calculate_budget_summary(
    transactions: Iterable,
    label_keys: Optional[Mapping[str, str]] = None
) -> BudgetSummary:
    """
    Split transactions into income and per-category spend.

    Positive amounts are income whatever their label. Negative amounts are
    spend, stored as positive numbers under the category key; labels are
    resolved through ``label_keys`` (see ``category_label_keys``) when given.
    Income-labelled or unlabelled spend lands in ``uncategorized``.
    """
    label_keys = label_keys or {}
    total_income = ZERO
    total_expenses = ZERO
    categories: Dict[str, Decimal] = {key: ZERO for key in BASE_CATEGORIES}

    for transaction in transactions:
        amount = _to_decimal(transaction.amount)
        if amount > 0:
            total_income += amount
            continue

        spend = -amount
        key = category_key(transaction.category)
        key = label_keys.get(key, key)
        if not key or key == INCOME_CATEGORY:
            key = UNCATEGORIZED
        categories[key] = categories.get(key, ZERO) + spend
        total_expenses += spend

    return BudgetSummary(
        total_income=total_income,
        total_expenses=total_expenses,
        net_cashflow=total_income - total_expenses,
        categories=categories,
        percentages={key: _percent(spend, total_expenses) for key, spend in categories.items()},
        percent_of_income={key: _percent(spend, total_income) for key, spend in categories.items()},
    )


def create_budget_plan(
    summary: BudgetSummary,
    ratios: Optional[Mapping[str, float]] = None
) -> BudgetPlan:
    """Recommended vs. actual spend per category for the given target ratios."""
    if not ratios:
        ratios = DEFAULT_RATIOS

    income = summary.total_income
    actual: Dict[str, Decimal] = {key: summary.categories.get(key, ZERO) for key in BASE_CATEGORIES}
    actual.update(summary.categories)

    recommended: Dict[str, Decimal] = {}
    differences: Dict[str, Decimal] = {}

    for label, ratio in ratios.items():
        key = category_key(label)
        if key == INCOME_CATEGORY:
            continue
        target = (income * _to_decimal(ratio) / 100).quantize(CENT, rounding=ROUND_HALF_UP)
        recommended[key] = target
        actual.setdefault(key, ZERO)
        differences[key] = target - actual[key]

    # Spending without an allocation counts entirely as overspending
    for key, spent in actual.items():
        if key not in recommended:
            recommended[key] = ZERO
            differences[key] = -spent

    return BudgetPlan(
        income=income,
        recommended=recommended,
        actual=actual,
        differences=differences,
    )


def classify_ratio(actual, recommended, savings_goal: bool = False) -> RatioBand:
    """
    Band the actual/recommended ratio.

    Spending categories: <= 1.05 on target, <= 1.2 over, above that
    significantly over. Savings goals invert the concern: < 0.8 is
    significantly under, < 0.95 under, anything higher on target.
    """
    actual = _to_decimal(actual)
    recommended = _to_decimal(recommended)

    if recommended <= 0:
        if actual <= 0 or savings_goal:
            return RatioBand.on_target
        return RatioBand.significantly_over

    ratio = actual / recommended

    if savings_goal:
        if ratio < SAVINGS_SIGNIFICANTLY_UNDER_LIMIT:
            return RatioBand.significantly_under
        if ratio < SAVINGS_UNDER_LIMIT:
            return RatioBand.under
        return RatioBand.on_target

    if ratio <= ON_TARGET_LIMIT:
        return RatioBand.on_target
    if ratio <= OVER_LIMIT:
        return RatioBand.over
    return RatioBand.significantly_over


def evaluate_plan(plan: BudgetPlan, savings_goals: Iterable[str] = SAVINGS_GOALS) -> List[CategoryStatus]:
    """Per-category status for every category in the plan."""
    savings_goals = {category_key(key) for key in savings_goals}
    statuses = []
    for key, recommended in plan.recommended.items():
        actual = plan.actual.get(key, ZERO)
        statuses.append(CategoryStatus(
            category=key,
            actual=actual,
            recommended=recommended,
            difference=plan.differences.get(key, recommended - actual),
            ratio=float(actual / recommended) if recommended > 0 else None,
            band=classify_ratio(actual, recommended, savings_goal=key in savings_goals),
        ))
    return statuses


def _money(value: Decimal, currency: str) -> str:
    return f"{currency}{abs(value):,.2f}"


def _suggestion_for(status: CategoryStatus, savings_goal: bool, currency: str) -> Optional[str]:
    name = status.category
    gap = _money(status.difference, currency)

    if status.band == RatioBand.significantly_over:
        return (
            f"You're spending {gap} more than recommended on {name}. "
            f"Consider reviewing your {name} expenses to find areas to cut back."
        )
    if status.band == RatioBand.over:
        return (
            f"You're spending {gap} more than recommended on {name}. "
            f"Keep an eye on your {name} expenses this month."
        )
    if status.band == RatioBand.significantly_under:
        return (
            f"You're saving {gap} less than recommended. "
            f"Setting up an automatic transfer on payday can help you reach your {name} target."
        )
    if status.band == RatioBand.under:
        return (
            f"You're saving {gap} less than recommended. "
            f"A small increase in your {name} would put you back on target."
        )

    if status.difference > 0 and not savings_goal:
        return f"You're spending {gap} less than the recommended amount on {name}, which is great!"
    if status.difference < 0 and savings_goal:
        return f"You're saving {gap} more than the recommended amount, which is excellent for your financial future!"
    if status.recommended > 0:
        return f"Your {name} are right on target."
    return None


def get_budget_suggestions(
    plan: BudgetPlan,
    currency: str = "$",
    savings_goals: Iterable[str] = SAVINGS_GOALS
) -> List[str]:
    """Advisory strings comparing actual spend against the plan."""
    if plan.income == 0:
        return [NO_INCOME_MESSAGE]

    savings_goals = {category_key(key) for key in savings_goals}
    suggestions = []

    for status in evaluate_plan(plan, savings_goals):
        if status.category == UNCATEGORIZED:
            continue
        message = _suggestion_for(status, status.category in savings_goals, currency)
        if message:
            suggestions.append(message)

    uncategorized = plan.actual.get(UNCATEGORIZED, ZERO)
    if uncategorized > UNCATEGORIZED_WARNING_SHARE * plan.income:
        suggestions.append(
            f"You have a significant amount ({_money(uncategorized, currency)}) in uncategorized "
            f"expenses. Review these transactions to better understand your spending patterns."
        )

    return suggestions
