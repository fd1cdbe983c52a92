"""
Category database model.
"""

import uuid
from datetime import datetime
from sqlalchemy import Column, String, Boolean, DateTime, Integer, ForeignKey, UniqueConstraint
from sqlalchemy.orm import relationship
from budgetplanner.database import Base


DEFAULT_CATEGORIES = [
    {"key": "essentials", "name": "Essentials", "color": "#2196f3", "icon": "🏠", "percentage": 50},
    {"key": "wants", "name": "Wants", "color": "#ff9800", "icon": "🛍️", "percentage": 30},
    {"key": "savings", "name": "Savings", "color": "#4caf50", "icon": "💰", "percentage": 20},
    {"key": "income", "name": "Income", "color": "#4caf50", "icon": "💵", "percentage": 0, "is_income": True},
]


class Category(Base):
    """Budget category. Default categories can be renamed but not deleted."""

    __tablename__ = "categories"

    id = Column(String(36), primary_key=True, default=lambda: str(uuid.uuid4()))
    budget_id = Column(String(36), ForeignKey("budgets.id"), nullable=False, index=True)
    key = Column(String(100), nullable=False)  # Lowercase identifier used by ratios
    name = Column(String(100), nullable=False)
    color = Column(String(7), nullable=True)  # Hex color
    icon = Column(String(50), nullable=True)
    is_default = Column(Boolean, default=False, nullable=False)
    is_income = Column(Boolean, default=False, nullable=False)
    percentage = Column(Integer, default=0, nullable=False)  # Target share of income
    created_at = Column(DateTime, default=datetime.utcnow, nullable=False)

    # Relationships
    budget = relationship("Budget", back_populates="categories")

    __table_args__ = (
        UniqueConstraint("budget_id", "key", name="uq_category_budget_key"),
    )


def seed_default_categories(budget) -> list:
    """Attach the four default categories to a new budget."""
    categories = [
        Category(
            key=data["key"],
            name=data["name"],
            color=data["color"],
            icon=data["icon"],
            percentage=data["percentage"],
            is_income=data.get("is_income", False),
            is_default=True,
        )
        for data in DEFAULT_CATEGORIES
    ]
    budget.categories.extend(categories)
    return categories
