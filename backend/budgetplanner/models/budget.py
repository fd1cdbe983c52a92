"""
Budget database model.
"""

import uuid
from datetime import datetime
from sqlalchemy import Column, String, DateTime
from sqlalchemy.orm import relationship
from budgetplanner.database import Base


class Budget(Base):
    """A user's budget: owns transactions, categories and preferences."""

    __tablename__ = "budgets"

    id = Column(String(36), primary_key=True, default=lambda: str(uuid.uuid4()))
    user_id = Column(String(128), nullable=False, index=True)
    name = Column(String(100), nullable=False)
    created_at = Column(DateTime, default=datetime.utcnow, nullable=False)

    # Relationships
    transactions = relationship("Transaction", back_populates="budget", cascade="all, delete-orphan")
    categories = relationship(
        "Category",
        back_populates="budget",
        cascade="all, delete-orphan",
        order_by="Category.created_at",
    )
    preferences = relationship(
        "BudgetPreferences",
        back_populates="budget",
        uselist=False,
        cascade="all, delete-orphan",
    )
