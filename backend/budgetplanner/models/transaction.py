"""
Transaction database model.
"""

import uuid
from datetime import datetime
from sqlalchemy import Column, String, DateTime, Date, Integer, Numeric, Text, ForeignKey, Index
from sqlalchemy.orm import relationship
from budgetplanner.database import Base


class Transaction(Base):
    """Transaction model."""

    __tablename__ = "transactions"

    id = Column(String(36), primary_key=True, default=lambda: str(uuid.uuid4()))
    budget_id = Column(String(36), ForeignKey("budgets.id"), nullable=False)
    description = Column(Text, nullable=False)
    amount = Column(Numeric(12, 2), nullable=False)  # Negative = expense, positive = income
    date = Column(Date, nullable=False, index=True)
    category = Column(String(100), nullable=False, default="Essentials")
    order = Column(Integer, nullable=True)  # Manual sort position
    import_hash = Column(String(64), nullable=True, index=True)  # Set by statement import
    created_at = Column(DateTime, default=datetime.utcnow, nullable=False)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow, nullable=False)

    # Relationships
    budget = relationship("Budget", back_populates="transactions")

    # Indexes for common queries
    __table_args__ = (
        Index("idx_transaction_budget_date", "budget_id", "date"),
        Index("idx_transaction_budget_category", "budget_id", "category"),
    )
