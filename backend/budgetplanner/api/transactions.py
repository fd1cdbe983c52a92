"""
Transaction API endpoints.
"""

from datetime import date
from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, Query
from sqlalchemy.orm import Session

from budgetplanner.dependencies import get_db, get_budget
from budgetplanner.models import Budget, Transaction
from budgetplanner.schemas.transaction import (
    MONTH_PATTERN,
    TransactionCreate,
    TransactionResponse,
    TransactionUpdate,
    TransactionListResponse,
    ReorderRequest,
    CopyMonthRequest,
    CopyMonthResponse,
    DeleteAllResponse,
)
from budgetplanner.services import transaction_service

router = APIRouter(prefix="/budgets/{budget_id}/transactions", tags=["transactions"])


def _get_transaction(db: Session, budget: Budget, transaction_id: str) -> Transaction:
    transaction = db.query(Transaction).filter(
        Transaction.id == transaction_id,
        Transaction.budget_id == budget.id
    ).first()
    if not transaction:
        raise HTTPException(status_code=404, detail="Transaction not found")
    return transaction


@router.get("", response_model=TransactionListResponse)
def list_transactions(
    category: Optional[str] = None,
    month: Optional[str] = Query(None, pattern=MONTH_PATTERN, description="YYYY-MM format"),
    start_date: Optional[date] = None,
    end_date: Optional[date] = None,
    search: Optional[str] = None,
    budget: Budget = Depends(get_budget),
    db: Session = Depends(get_db)
):
    """List transactions ordered by manual order, then date"""
    transactions = transaction_service.budget_transactions(
        db,
        budget.id,
        category=category,
        month=month,
        start_date=start_date,
        end_date=end_date,
        search=search,
    ).all()

    return TransactionListResponse(
        items=[TransactionResponse.model_validate(t) for t in transactions],
        total=len(transactions)
    )


@router.post("", response_model=TransactionResponse, status_code=201)
def create_transaction(
    transaction: TransactionCreate,
    budget: Budget = Depends(get_budget),
    db: Session = Depends(get_db)
):
    """Add a transaction"""
    db_transaction = Transaction(budget_id=budget.id, **transaction.model_dump())
    db.add(db_transaction)
    db.commit()
    db.refresh(db_transaction)
    return TransactionResponse.model_validate(db_transaction)


@router.delete("", response_model=DeleteAllResponse)
def delete_all_transactions(
    budget: Budget = Depends(get_budget),
    db: Session = Depends(get_db)
):
    """Reset the budget by deleting every transaction"""
    deleted = transaction_service.delete_all_transactions(db, budget)
    return DeleteAllResponse(deleted=deleted)


@router.post("/reorder", response_model=TransactionListResponse)
def reorder_transactions(
    request: ReorderRequest,
    budget: Budget = Depends(get_budget),
    db: Session = Depends(get_db)
):
    """Persist a manual ordering"""
    try:
        ordered = transaction_service.reorder_transactions(db, budget, request.transaction_ids)
    except ValueError as e:
        raise HTTPException(status_code=404, detail=str(e))

    return TransactionListResponse(
        items=[TransactionResponse.model_validate(t) for t in ordered],
        total=len(ordered)
    )


@router.post("/copy-month", response_model=CopyMonthResponse)
def copy_month(
    request: CopyMonthRequest,
    budget: Budget = Depends(get_budget),
    db: Session = Depends(get_db)
):
    """Copy one category's transactions into another month"""
    try:
        added, updated, unchanged = transaction_service.copy_month(
            db, budget, request.category, request.source_month, request.target_month
        )
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))

    return CopyMonthResponse(added=added, updated=updated, unchanged=unchanged)


@router.get("/{transaction_id}", response_model=TransactionResponse)
def get_transaction(
    transaction_id: str,
    budget: Budget = Depends(get_budget),
    db: Session = Depends(get_db)
):
    """Get a single transaction"""
    return TransactionResponse.model_validate(_get_transaction(db, budget, transaction_id))


@router.patch("/{transaction_id}", response_model=TransactionResponse)
def update_transaction(
    transaction_id: str,
    update: TransactionUpdate,
    budget: Budget = Depends(get_budget),
    db: Session = Depends(get_db)
):
    """Update a transaction, including moving it to another category"""
    transaction = _get_transaction(db, budget, transaction_id)

    update_data = update.model_dump(exclude_unset=True)
    for field, value in update_data.items():
        if value is None and field != "order":
            continue
        setattr(transaction, field, value)

    db.commit()
    db.refresh(transaction)

    return TransactionResponse.model_validate(transaction)


@router.delete("/{transaction_id}", status_code=204)
def delete_transaction(
    transaction_id: str,
    budget: Budget = Depends(get_budget),
    db: Session = Depends(get_db)
):
    """Delete a transaction"""
    transaction = _get_transaction(db, budget, transaction_id)
    db.delete(transaction)
    db.commit()
    return None
