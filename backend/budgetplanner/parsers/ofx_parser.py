"""
OFX/QFX statement parser.
"""

import io
from typing import List, Dict, Any
from decimal import Decimal

from ofxparse import OfxParser as OFXParseLib

from budgetplanner.parsers.base import BaseParser, StatementParseError


class OFXParser(BaseParser):
    """Parser for OFX/QFX bank exports"""

    def can_parse(self, filename: str) -> bool:
        return filename.lower().endswith(('.ofx', '.qfx'))

    def parse(self, content: bytes) -> List[Dict[str, Any]]:
        """Parse OFX and return transaction dicts"""
        try:
            ofx = OFXParseLib.parse(io.BytesIO(content))
        except Exception as e:
            raise StatementParseError(f"Unable to read OFX file: {e}")

        transactions = []
        for account in ofx.accounts:
            for txn in account.statement.transactions:
                description = txn.memo or txn.payee or f"Transaction {txn.id}"

                transactions.append({
                    'date': txn.date.date() if hasattr(txn.date, 'date') else txn.date,
                    'amount': Decimal(str(txn.amount)),
                    'description': description.strip()
                })

        return transactions
