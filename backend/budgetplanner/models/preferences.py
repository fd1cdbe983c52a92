"""
Preference models: per-budget preferences and the legacy per-user document.
"""

from datetime import datetime
from sqlalchemy import Column, String, DateTime, JSON, ForeignKey
from sqlalchemy.orm import relationship
from budgetplanner.database import Base


class BudgetPreferences(Base):
    """Ratios, category display metadata and chart/display toggles for one budget."""

    __tablename__ = "budget_preferences"

    budget_id = Column(String(36), ForeignKey("budgets.id"), primary_key=True)
    ratios = Column(JSON, nullable=False, default=dict)
    category_customization = Column(JSON, nullable=False, default=dict)
    chart_preferences = Column(JSON, nullable=False, default=dict)
    display_preferences = Column(JSON, nullable=False, default=dict)
    created_at = Column(DateTime, default=datetime.utcnow, nullable=False)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow, nullable=False)

    budget = relationship("Budget", back_populates="preferences")


class UserPreferences(Base):
    """
    Per-user preferences.
    budget_preferences holds the global preferences document written before
    preferences were scoped per budget; it is only read for migration.
    """

    __tablename__ = "user_preferences"

    user_id = Column(String(128), primary_key=True)
    budget_preferences = Column(JSON, nullable=True)
    table_colors = Column(JSON, nullable=True)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow, nullable=False)
