"""
Statement import schemas.
"""

from pydantic import BaseModel
from typing import List


class ImportResponse(BaseModel):
    filename: str
    imported: int
    skipped: int
    errors: List[str] = []
