"""
Statement import: parse uploaded files into budget transactions.
"""

import hashlib
import logging
from datetime import date
from decimal import Decimal
from typing import List, Optional

from sqlalchemy.orm import Session

from budgetplanner.models.budget import Budget
from budgetplanner.models.transaction import Transaction
from budgetplanner.parsers import BaseParser, CSVParser, OFXParser, StatementParseError
from budgetplanner.schemas.import_file import ImportResponse

logger = logging.getLogger(__name__)

ESSENTIALS_KEYWORDS = (
    'rent', 'mortgage', 'electric', 'water', 'gas', 'grocery', 'groceries', 'food',
    'pharmacy', 'doctor', 'medical', 'insurance', 'bill', 'utility',
)
WANTS_KEYWORDS = (
    'restaurant', 'cafe', 'coffee', 'cinema', 'movie', 'theater', 'amazon', 'shopping',
    'travel', 'hotel', 'flight', 'subscription', 'entertainment',
)
SAVINGS_KEYWORDS = (
    'investment', '401k', 'ira', 'saving', 'deposit', 'transfer to', 'vanguard', 'fidelity',
)


def get_parser(filename: str) -> Optional[BaseParser]:
    """Get appropriate parser for file type"""
    parsers = [CSVParser(), OFXParser()]
    for parser in parsers:
        if parser.can_parse(filename):
            return parser
    return None


def categorize_transaction(description: str, amount: Decimal) -> str:
    """Keyword rules mapping a statement line to a 50/30/20 category."""
    if amount > 0:
        return 'Income'

    desc = description.lower()
    if any(keyword in desc for keyword in ESSENTIALS_KEYWORDS):
        return 'Essentials'
    if any(keyword in desc for keyword in WANTS_KEYWORDS):
        return 'Wants'
    if any(keyword in desc for keyword in SAVINGS_KEYWORDS):
        return 'Savings'
    return 'Essentials'


def generate_import_hash(
    txn_date: date,
    amount: Decimal,
    description: str,
    budget_id: str
) -> str:
    """
    Generate SHA256 hash for deduplication.
    Uses date|amount|description|budget_id
    """
    components = [
        txn_date.isoformat(),
        str(Decimal(amount).quantize(Decimal('0.01'))),
        description.strip().lower(),
        str(budget_id)
    ]
    combined = "|".join(components)
    return hashlib.sha256(combined.encode()).hexdigest()


def is_duplicate(db: Session, budget_id: str, import_hash: str) -> bool:
    """Check if transaction with this hash already exists in the budget"""
    return db.query(Transaction).filter(
        Transaction.budget_id == budget_id,
        Transaction.import_hash == import_hash
    ).first() is not None


def import_statement(
    db: Session,
    budget: Budget,
    filename: str,
    content: bytes
) -> ImportResponse:
    """
    Parse a statement and add its transactions to the budget.

    Raises ValueError when the file type is unsupported and
    StatementParseError when the file cannot be read at all.
    """
    parser = get_parser(filename)
    if not parser:
        raise ValueError(f"No parser available for file: {filename}")

    rows = parser.parse(content)
    if not rows and not parser.errors:
        raise StatementParseError("No transactions found in file")

    imported = 0
    skipped = 0
    errors: List[str] = list(parser.errors)
    seen = set()

    for row in rows:
        import_hash = generate_import_hash(row['date'], row['amount'], row['description'], budget.id)
        if import_hash in seen or is_duplicate(db, budget.id, import_hash):
            skipped += 1
            continue
        seen.add(import_hash)

        db.add(Transaction(
            budget_id=budget.id,
            description=row['description'],
            amount=row['amount'],
            date=row['date'],
            category=row.get('category') or categorize_transaction(row['description'], row['amount']),
            import_hash=import_hash,
        ))
        imported += 1

    db.commit()
    logger.info(
        f"Imported {filename} into budget {budget.id}: "
        f"{imported} imported, {skipped} duplicates skipped, {len(errors)} errors"
    )

    return ImportResponse(
        filename=filename,
        imported=imported,
        skipped=skipped,
        errors=errors,
    )
