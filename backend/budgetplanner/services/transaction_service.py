"""
Transaction store operations beyond plain CRUD.
"""

import calendar
import logging
import re
from datetime import date
from decimal import Decimal
from typing import List, Optional, Tuple

from sqlalchemy import func
from sqlalchemy.orm import Query, Session

from budgetplanner.models.budget import Budget
from budgetplanner.models.transaction import Transaction
from budgetplanner.services.budget_calculator import INCOME_CATEGORY, category_key

logger = logging.getLogger(__name__)

LEADING_FILLER = re.compile(r"^(the|my)\s+", re.IGNORECASE)
TRAILING_FILLER = re.compile(r"\s+(expense|transaction|bill|payment)$", re.IGNORECASE)


def month_bounds(month: str) -> Tuple[date, date]:
    """Return [start, end) dates for a YYYY-MM month."""
    year, m = map(int, month.split('-'))
    if not 1 <= m <= 12:
        raise ValueError(f"Invalid month: {month}")
    start_date = date(year, m, 1)
    if m == 12:
        end_date = date(year + 1, 1, 1)
    else:
        end_date = date(year, m + 1, 1)
    return start_date, end_date


def signed_amount(amount, category: str) -> Decimal:
    """Income is stored positive, everything else negative."""
    amount = abs(Decimal(str(amount)))
    return amount if category_key(category) == INCOME_CATEGORY else -amount


def budget_transactions(
    db: Session,
    budget_id: str,
    category: Optional[str] = None,
    month: Optional[str] = None,
    start_date: Optional[date] = None,
    end_date: Optional[date] = None,
    search: Optional[str] = None,
) -> Query:
    """Filtered transactions of a budget, ordered by manual order then date."""
    query = db.query(Transaction).filter(Transaction.budget_id == budget_id)

    if category:
        query = query.filter(func.lower(Transaction.category) == category.strip().lower())
    if month:
        month_start, month_end = month_bounds(month)
        query = query.filter(Transaction.date >= month_start, Transaction.date < month_end)
    if start_date:
        query = query.filter(Transaction.date >= start_date)
    if end_date:
        query = query.filter(Transaction.date <= end_date)
    if search:
        query = query.filter(Transaction.description.ilike(f"%{search}%"))

    return query.order_by(
        Transaction.order.is_(None),
        Transaction.order,
        Transaction.date,
        Transaction.created_at,
    )


def reorder_transactions(db: Session, budget: Budget, transaction_ids: List[str]) -> List[Transaction]:
    """Assign order 0..n-1 following the given id sequence."""
    transactions = db.query(Transaction).filter(
        Transaction.budget_id == budget.id,
        Transaction.id.in_(transaction_ids)
    ).all()
    by_id = {t.id: t for t in transactions}

    missing = [txn_id for txn_id in transaction_ids if txn_id not in by_id]
    if missing:
        raise ValueError(f"Transaction not found: {', '.join(missing)}")

    ordered = []
    for position, txn_id in enumerate(transaction_ids):
        transaction = by_id[txn_id]
        transaction.order = position
        ordered.append(transaction)

    db.commit()
    return ordered


def _description_key(description: str) -> str:
    return description.strip().lower()


def copy_month(
    db: Session,
    budget: Budget,
    category: str,
    source_month: str,
    target_month: str
) -> Tuple[int, int, int]:
    """
    Copy one category's transactions from source_month into target_month.

    A target transaction with the same description (ignoring case) and
    category is updated to the source amount instead of being duplicated.
    Returns (added, updated, unchanged).
    """
    if source_month == target_month:
        raise ValueError("Source and target month must differ")

    source = budget_transactions(db, budget.id, category=category, month=source_month).all()
    existing = {
        _description_key(t.description): t
        for t in budget_transactions(db, budget.id, category=category, month=target_month).all()
    }

    target_start, _ = month_bounds(target_month)
    last_day = calendar.monthrange(target_start.year, target_start.month)[1]

    added = updated = unchanged = 0
    for transaction in source:
        amount = signed_amount(transaction.amount, transaction.category)
        match = existing.get(_description_key(transaction.description))

        if match is not None:
            if abs(match.amount) != abs(amount):
                match.amount = amount
                updated += 1
            else:
                unchanged += 1
            continue

        copy = Transaction(
            budget_id=budget.id,
            description=transaction.description,
            amount=amount,
            date=target_start.replace(day=min(transaction.date.day, last_day)),
            category=transaction.category,
            order=transaction.order,
        )
        db.add(copy)
        existing[_description_key(copy.description)] = copy
        added += 1

    db.commit()
    logger.info(
        f"Copied {category} from {source_month} to {target_month} in budget {budget.id}: "
        f"{added} added, {updated} updated"
    )
    return added, updated, unchanged


def delete_all_transactions(db: Session, budget: Budget) -> int:
    deleted = db.query(Transaction).filter(Transaction.budget_id == budget.id).delete()
    db.commit()
    logger.info(f"Deleted {deleted} transactions from budget {budget.id}")
    return deleted


def clean_spoken_description(description: str) -> str:
    description = LEADING_FILLER.sub("", description.strip())
    return TRAILING_FILLER.sub("", description).strip()


def find_by_description(transactions: List[Transaction], description: str) -> Optional[Transaction]:
    """
    Best match for a loosely spoken description.

    Exact (case-insensitive) match first, then substring, then any word of
    more than two letters.
    """
    needle = clean_spoken_description(description).lower()
    if not needle:
        return None

    for transaction in transactions:
        if transaction.description.lower() == needle:
            return transaction

    for transaction in transactions:
        if needle in transaction.description.lower():
            return transaction

    words = [word for word in needle.split() if len(word) > 2]
    for transaction in transactions:
        haystack = transaction.description.lower()
        if any(word in haystack for word in words):
            return transaction

    return None


def update_amount_by_description(
    db: Session,
    budget: Budget,
    description: str,
    new_amount
) -> Optional[Transaction]:
    """Set the amount of the transaction best matching description."""
    transactions = budget_transactions(db, budget.id).all()
    transaction = find_by_description(transactions, description)
    if transaction is None:
        return None

    transaction.amount = signed_amount(new_amount, transaction.category)
    db.commit()
    db.refresh(transaction)
    return transaction

