"""
Category API endpoints.
"""

from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy import func
from sqlalchemy.orm import Session

from budgetplanner.dependencies import get_db, get_budget
from budgetplanner.models import Budget, Category
from budgetplanner.schemas.category import (
    CategoryCreate,
    CategoryUpdate,
    CategoryResponse,
    CategoryList,
)
from budgetplanner.services.budget_calculator import category_key

router = APIRouter(prefix="/budgets/{budget_id}/categories", tags=["categories"])


def _get_category(db: Session, budget: Budget, category_id: str) -> Category:
    category = db.query(Category).filter(
        Category.id == category_id,
        Category.budget_id == budget.id
    ).first()
    if not category:
        raise HTTPException(status_code=404, detail="Category not found")
    return category


def _name_taken(db: Session, budget: Budget, name: str, exclude_id: str = None) -> bool:
    query = db.query(Category).filter(
        Category.budget_id == budget.id,
        func.lower(Category.name) == name.strip().lower()
    )
    if exclude_id:
        query = query.filter(Category.id != exclude_id)
    return query.first() is not None


@router.get("", response_model=CategoryList)
def list_categories(
    budget: Budget = Depends(get_budget),
    db: Session = Depends(get_db)
):
    """List the budget's categories."""
    categories = db.query(Category).filter(Category.budget_id == budget.id).order_by(
        Category.is_default.desc(), Category.created_at
    ).all()
    return CategoryList(
        items=[CategoryResponse.model_validate(c) for c in categories],
        total=len(categories)
    )


@router.post("", response_model=CategoryResponse, status_code=201)
def create_category(
    category: CategoryCreate,
    budget: Budget = Depends(get_budget),
    db: Session = Depends(get_db)
):
    """Create a new category."""
    key = category_key(category.name)
    existing_key = db.query(Category).filter(
        Category.budget_id == budget.id,
        Category.key == key
    ).first()
    if existing_key or _name_taken(db, budget, category.name):
        raise HTTPException(
            status_code=409,
            detail=f'Category "{category.name}" already exists in this budget'
        )

    db_category = Category(
        budget_id=budget.id,
        key=key,
        name=category.name.strip(),
        color=category.color,
        icon=category.icon,
        percentage=category.percentage,
        is_income=category.is_income,
        is_default=False  # User-created categories can always be deleted
    )
    db.add(db_category)
    db.commit()
    db.refresh(db_category)
    return db_category


@router.get("/{category_id}", response_model=CategoryResponse)
def get_category(
    category_id: str,
    budget: Budget = Depends(get_budget),
    db: Session = Depends(get_db)
):
    """Get a specific category."""
    return _get_category(db, budget, category_id)


@router.patch("/{category_id}", response_model=CategoryResponse)
def update_category(
    category_id: str,
    category_update: CategoryUpdate,
    budget: Budget = Depends(get_budget),
    db: Session = Depends(get_db)
):
    """Update a category. The key stays stable across renames."""
    category = _get_category(db, budget, category_id)

    if category_update.name is not None:
        if _name_taken(db, budget, category_update.name, exclude_id=category.id):
            raise HTTPException(
                status_code=409,
                detail=f'Category "{category_update.name}" already exists in this budget'
            )
        category.name = category_update.name.strip()
    if category_update.color is not None:
        category.color = category_update.color
    if category_update.icon is not None:
        category.icon = category_update.icon
    if category_update.percentage is not None:
        category.percentage = category_update.percentage

    db.commit()
    db.refresh(category)
    return category


@router.delete("/{category_id}", status_code=204)
def delete_category(
    category_id: str,
    budget: Budget = Depends(get_budget),
    db: Session = Depends(get_db)
):
    """Delete a user-created category."""
    category = _get_category(db, budget, category_id)

    if category.is_default:
        raise HTTPException(
            status_code=400,
            detail=f'Cannot delete default category "{category.name}"'
        )

    db.delete(category)
    db.commit()
    return None
