"""
Budget and user preference schemas.
"""

from pydantic import BaseModel, Field
from datetime import datetime
from typing import Annotated, Dict, Optional


class CategoryCustomization(BaseModel):
    name: str
    color: str
    icon: str


class ChartPreferences(BaseModel):
    show_pie_chart: bool = True
    show_bar_chart: bool = True
    show_progress_bars: bool = True
    show_suggestions: bool = True


class DisplayPreferences(BaseModel):
    show_actual_amounts: bool = True
    show_percentages: bool = True
    show_differences: bool = True


# Target share of income, in percent
Ratio = Annotated[float, Field(ge=0, le=100)]


class BudgetPreferencesBase(BaseModel):
    ratios: Dict[str, Ratio] = Field(default_factory=dict)
    category_customization: Dict[str, CategoryCustomization] = Field(default_factory=dict)
    chart_preferences: ChartPreferences = Field(default_factory=ChartPreferences)
    display_preferences: DisplayPreferences = Field(default_factory=DisplayPreferences)


class BudgetPreferencesUpdate(BudgetPreferencesBase):
    """Full replacement of a budget's preferences."""
    pass


class BudgetPreferencesResponse(BudgetPreferencesBase):
    budget_id: str
    updated_at: datetime

    class Config:
        from_attributes = True


class UserPreferencesUpdate(BaseModel):
    budget_preferences: Optional[BudgetPreferencesBase] = None
    table_colors: Optional[Dict[str, str]] = None


class UserPreferencesResponse(BaseModel):
    user_id: str
    budget_preferences: Optional[BudgetPreferencesBase] = None
    table_colors: Optional[Dict[str, str]] = None

    class Config:
        from_attributes = True
