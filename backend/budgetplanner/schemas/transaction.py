"""
Transaction schemas.
"""

from pydantic import BaseModel, Field, field_validator
from typing import Optional
import datetime as dt
from decimal import Decimal


MONTH_PATTERN = r"^\d{4}-(0[1-9]|1[0-2])$"


class TransactionBase(BaseModel):
    description: str = Field(..., max_length=500)
    amount: Decimal = Field(..., max_digits=12, decimal_places=2)
    date: dt.date
    category: str = Field("Essentials", min_length=1, max_length=100)

    @field_validator("description")
    @classmethod
    def description_not_blank(cls, value: str) -> str:
        value = value.strip()
        if not value:
            raise ValueError("Description is required")
        return value


class TransactionCreate(TransactionBase):
    order: Optional[int] = None


class TransactionUpdate(BaseModel):
    description: Optional[str] = Field(None, max_length=500)
    amount: Optional[Decimal] = Field(None, max_digits=12, decimal_places=2)
    date: Optional[dt.date] = None
    category: Optional[str] = Field(None, min_length=1, max_length=100)
    order: Optional[int] = None

    @field_validator("description")
    @classmethod
    def description_not_blank(cls, value: Optional[str]) -> Optional[str]:
        if value is None:
            return value
        value = value.strip()
        if not value:
            raise ValueError("Description is required")
        return value


class TransactionResponse(BaseModel):
    id: str
    budget_id: str
    description: str
    amount: Decimal
    date: dt.date
    category: str
    order: Optional[int]
    created_at: dt.datetime
    updated_at: dt.datetime

    class Config:
        from_attributes = True


class TransactionListResponse(BaseModel):
    items: list[TransactionResponse]
    total: int


class ReorderRequest(BaseModel):
    transaction_ids: list[str] = Field(..., min_length=1)


class CopyMonthRequest(BaseModel):
    category: str = Field(..., min_length=1, max_length=100)
    source_month: str = Field(..., pattern=MONTH_PATTERN, description="YYYY-MM format")
    target_month: str = Field(..., pattern=MONTH_PATTERN, description="YYYY-MM format")


class CopyMonthResponse(BaseModel):
    added: int
    updated: int
    unchanged: int


class DeleteAllResponse(BaseModel):
    deleted: int
