"""
Statement import endpoint.
"""

from fastapi import APIRouter, Depends, UploadFile, File, HTTPException
from sqlalchemy.orm import Session

from budgetplanner.config import settings
from budgetplanner.dependencies import get_db, get_budget
from budgetplanner.models import Budget
from budgetplanner.parsers import StatementParseError
from budgetplanner.schemas.import_file import ImportResponse
from budgetplanner.services import import_service

router = APIRouter(prefix="/budgets/{budget_id}/imports", tags=["imports"])

ALLOWED_EXTENSIONS = ['.csv', '.ofx', '.qfx']


@router.post("", response_model=ImportResponse)
async def upload_statement(
    file: UploadFile = File(...),
    budget: Budget = Depends(get_budget),
    db: Session = Depends(get_db)
):
    """Upload a bank statement and add its transactions to the budget"""
    if not file.filename:
        raise HTTPException(status_code=400, detail="No filename provided")

    ext = '.' + file.filename.split('.')[-1].lower() if '.' in file.filename else ''
    if ext not in ALLOWED_EXTENSIONS:
        raise HTTPException(
            status_code=400,
            detail=f"File type not supported. Allowed: {', '.join(ALLOWED_EXTENSIONS)}"
        )

    content = await file.read()
    if len(content) > settings.max_import_bytes:
        raise HTTPException(status_code=413, detail="File too large")

    try:
        return import_service.import_statement(db, budget, file.filename, content)
    except (StatementParseError, ValueError) as e:
        raise HTTPException(status_code=400, detail=str(e))
