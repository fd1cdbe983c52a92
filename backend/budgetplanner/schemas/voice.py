"""
Voice command schemas.
"""

from pydantic import BaseModel, Field
from typing import Literal, Optional

from budgetplanner.schemas.transaction import TransactionResponse


class VoiceCommandRequest(BaseModel):
    transcript: str = Field(..., max_length=1000)


class VoiceCommandResponse(BaseModel):
    status: Literal["success", "error"]
    message: str
    transaction: Optional[TransactionResponse] = None
