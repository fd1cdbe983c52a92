"""
Spoken transaction commands.

Transcripts come from the browser's speech input; this module only turns the
text into add/update operations on a budget.
"""

import logging
import re
from datetime import date
from decimal import Decimal, InvalidOperation
from typing import Optional, Union

from pydantic import BaseModel, ConfigDict
from sqlalchemy.orm import Session

from budgetplanner.models.budget import Budget
from budgetplanner.models.transaction import Transaction
from budgetplanner.services.transaction_service import signed_amount, update_amount_by_description

logger = logging.getLogger(__name__)

UPDATE_PATTERN = re.compile(r"update (.*?) to \$([\d.,]+)", re.IGNORECASE)

# "add $50 for groceries as wants", "add a new expense of $12 on lunch"
ADD_PATTERN_AMOUNT_FIRST = re.compile(
    r"add (?:a )?(?:new )?(?:transaction |entry |expense |payment |income )?(?:for |of )?"
    r"\$([\d.,]+) (?:for |on |to |)(.*?)"
    r"(?:(?:as|in|to|for|in the) (essentials|wants|savings|income))?$",
    re.IGNORECASE,
)

# "add a new wants expense for $20 for movies"
ADD_PATTERN_CATEGORY_FIRST = re.compile(
    r"add (?:a )?(?:new )?(essentials|wants|savings|income)(?: transaction| expense| payment)? "
    r"(?:for |of )?\$([\d.,]+) (?:for |on |to |)(.+)",
    re.IGNORECASE,
)

DEFAULT_CATEGORY = "Essentials"

NOT_UNDERSTOOD_MESSAGE = (
    'I didn\'t understand that command. Try "add $50 for groceries as essentials" '
    'or "update groceries to $75".'
)


class AddTransactionCommand(BaseModel):
    amount: Decimal
    description: str
    category: str


class UpdateTransactionCommand(BaseModel):
    description: str
    amount: Decimal


class VoiceCommandResult(BaseModel):
    model_config = ConfigDict(arbitrary_types_allowed=True)

    success: bool
    message: str
    transaction: Optional[Transaction] = None


VoiceCommand = Union[AddTransactionCommand, UpdateTransactionCommand]


def _parse_amount(text: str) -> Optional[Decimal]:
    try:
        amount = Decimal(text.replace(",", ""))
    except InvalidOperation:
        return None
    return amount if amount.is_finite() else None


def _category_label(spoken: Optional[str]) -> str:
    if not spoken:
        return DEFAULT_CATEGORY
    return spoken.strip().capitalize()


def parse_command(transcript: str) -> Optional[VoiceCommand]:
    """Turn a transcript into a command, or None when nothing matches."""
    text = transcript.strip().lower()

    match = UPDATE_PATTERN.search(text)
    if match:
        amount = _parse_amount(match.group(2))
        description = match.group(1).strip()
        if amount is not None and description:
            return UpdateTransactionCommand(description=description, amount=amount)

    match = ADD_PATTERN_AMOUNT_FIRST.search(text)
    if match:
        amount = _parse_amount(match.group(1))
        description = match.group(2).strip()
        if amount is not None and description:
            return AddTransactionCommand(
                amount=amount,
                description=description,
                category=_category_label(match.group(3)),
            )
        return None

    match = ADD_PATTERN_CATEGORY_FIRST.search(text)
    if match:
        amount = _parse_amount(match.group(2))
        description = match.group(3).strip()
        if amount is not None and description:
            return AddTransactionCommand(
                amount=amount,
                description=description,
                category=_category_label(match.group(1)),
            )

    return None


def execute_command(
    db: Session,
    budget: Budget,
    transcript: str,
    currency: str = "$",
    today: Optional[date] = None
) -> VoiceCommandResult:
    """Parse and apply a spoken command against a budget."""
    command = parse_command(transcript)

    if isinstance(command, UpdateTransactionCommand):
        transaction = update_amount_by_description(db, budget, command.description, command.amount)
        if transaction is None:
            return VoiceCommandResult(
                success=False,
                message=f"Couldn't find a transaction named \"{command.description}\"",
            )
        return VoiceCommandResult(
            success=True,
            message=f"Updated transaction \"{command.description}\" to {currency}{command.amount}",
            transaction=transaction,
        )

    if isinstance(command, AddTransactionCommand):
        amount = signed_amount(command.amount, command.category)
        transaction = Transaction(
            budget_id=budget.id,
            description=command.description,
            amount=amount,
            date=today or date.today(),
            category=command.category,
        )
        db.add(transaction)
        db.commit()
        db.refresh(transaction)

        sign = "-" if amount < 0 else ""
        return VoiceCommandResult(
            success=True,
            message=(
                f"Added {command.category} transaction: \"{command.description}\" "
                f"for {sign}{currency}{abs(amount)}"
            ),
            transaction=transaction,
        )

    logger.info(f"Unrecognized voice command: {transcript!r}")
    return VoiceCommandResult(success=False, message=NOT_UNDERSTOOD_MESSAGE)
