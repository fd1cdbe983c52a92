"""
Voice command endpoint.
"""

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from budgetplanner.config import settings
from budgetplanner.dependencies import get_db, get_budget
from budgetplanner.models import Budget
from budgetplanner.schemas.transaction import TransactionResponse
from budgetplanner.schemas.voice import VoiceCommandRequest, VoiceCommandResponse
from budgetplanner.services.voice_commands import execute_command

router = APIRouter(prefix="/budgets/{budget_id}/voice", tags=["voice"])


@router.post("", response_model=VoiceCommandResponse)
def run_voice_command(
    request: VoiceCommandRequest,
    budget: Budget = Depends(get_budget),
    db: Session = Depends(get_db)
):
    """
    Apply a spoken command, e.g. "add $50 for groceries as essentials"
    or "update groceries to $75". Unrecognized commands are not errors:
    they return status "error" with a hint.
    """
    result = execute_command(db, budget, request.transcript, currency=settings.currency_symbol)
    return VoiceCommandResponse(
        status="success" if result.success else "error",
        message=result.message,
        transaction=TransactionResponse.model_validate(result.transaction) if result.transaction else None,
    )
