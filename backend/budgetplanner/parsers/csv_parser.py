"""
CSV statement parser.
"""

import csv
import io
import logging
import re
from datetime import datetime, date
from decimal import Decimal, InvalidOperation
from typing import List, Dict, Any, Optional

from budgetplanner.parsers.base import BaseParser, StatementParseError

logger = logging.getLogger(__name__)

DATE_HEADERS = ['date', 'transaction date', 'posted date', 'posting date']
DESCRIPTION_HEADERS = ['description', 'transaction', 'details', 'merchant', 'name', 'memo', 'payee']
AMOUNT_HEADERS = ['amount', 'transaction amount', 'value']
DEBIT_HEADERS = ['debit', 'withdrawal', 'withdrawals']
CREDIT_HEADERS = ['credit', 'deposit', 'deposits']
CATEGORY_HEADERS = ['category', 'budget category']

MAX_AMOUNT = Decimal("1e10")

DATE_FORMATS = (
    "%Y-%m-%d",
    "%m/%d/%Y",
    "%d/%m/%Y",
    "%Y/%m/%d",
    "%d-%m-%Y",
    "%m/%d/%y",
    "%d.%m.%Y",
    "%b %d, %Y",
    "%d %b %Y",
)


def find_column(headers: List[str], candidates: List[str]) -> Optional[int]:
    """Index of the first header matching a candidate name (case-insensitive)."""
    normalized = [h.strip().lower() for h in headers]
    for candidate in candidates:
        if candidate in normalized:
            return normalized.index(candidate)
    return None


def parse_date(value: str) -> date:
    value = value.strip()
    for fmt in DATE_FORMATS:
        try:
            return datetime.strptime(value, fmt).date()
        except ValueError:
            continue
    raise ValueError(f"Unrecognized date: {value!r}")


class CSVParser(BaseParser):
    """Parser for CSV bank/card exports"""

    def can_parse(self, filename: str) -> bool:
        return filename.lower().endswith('.csv')

    def parse(self, content: bytes) -> List[Dict[str, Any]]:
        """Parse CSV and return transaction dicts"""
        try:
            text = content.decode('utf-8-sig')
        except UnicodeDecodeError as e:
            raise StatementParseError(f"CSV file is not valid UTF-8: {e}")

        try:
            dialect = csv.Sniffer().sniff(text[:8192], delimiters=",;\t")
        except csv.Error:
            dialect = csv.excel

        reader = csv.reader(io.StringIO(text), dialect)
        headers = next(reader, None)
        if not headers:
            raise StatementParseError("No headers found in CSV file")

        mapping = self._detect_columns(headers)
        transactions = []

        for line_number, row in enumerate(reader, start=2):
            if not row or all(cell.strip() == '' for cell in row):
                continue

            try:
                txn = self._parse_row(row, mapping)
                if txn:
                    transactions.append(txn)
            except (ValueError, IndexError) as e:
                logger.warning(f"Skipping CSV row {line_number}: {e}")
                self.errors.append(f"Row {line_number}: {e}")

        return transactions

    def _detect_columns(self, headers: List[str]) -> Dict[str, Optional[int]]:
        mapping = {
            'date_col': find_column(headers, DATE_HEADERS),
            'description_col': find_column(headers, DESCRIPTION_HEADERS),
            'amount_col': find_column(headers, AMOUNT_HEADERS),
            'debit_col': find_column(headers, DEBIT_HEADERS),
            'credit_col': find_column(headers, CREDIT_HEADERS),
            'category_col': find_column(headers, CATEGORY_HEADERS),
        }

        if mapping['date_col'] is None:
            raise StatementParseError("Could not identify date column")
        if mapping['description_col'] is None:
            raise StatementParseError("Could not identify description column")
        has_split_amount = mapping['debit_col'] is not None and mapping['credit_col'] is not None
        if mapping['amount_col'] is None and not has_split_amount:
            raise StatementParseError("Could not identify amount column")

        return mapping

    def _parse_row(
        self,
        row: List[str],
        mapping: Dict[str, Optional[int]]
    ) -> Optional[Dict[str, Any]]:
        """Parse a single row into a transaction dict"""

        txn_date = parse_date(row[mapping['date_col']])

        amount = self._parse_amount(row, mapping)
        if amount is None:
            raise ValueError("missing or invalid amount")

        description = row[mapping['description_col']].strip() or 'Unknown'

        txn = {
            'date': txn_date,
            'amount': amount,
            'description': description,
        }
        if mapping['category_col'] is not None and row[mapping['category_col']].strip():
            txn['category'] = row[mapping['category_col']].strip()
        return txn

    def _parse_amount(
        self,
        row: List[str],
        mapping: Dict[str, Optional[int]]
    ) -> Optional[Decimal]:
        """Parse amount handling various formats"""

        if mapping['amount_col'] is None:
            debit = self._clean_amount(row[mapping['debit_col']])
            credit = self._clean_amount(row[mapping['credit_col']])

            if debit and debit > 0:
                return -debit
            elif credit and credit > 0:
                return credit
            return Decimal('0')

        return self._clean_amount(row[mapping['amount_col']])

    def _clean_amount(self, amount_str: str) -> Optional[Decimal]:
        """Clean and parse amount string"""
        if not amount_str or not amount_str.strip():
            return None

        amount_str = amount_str.strip()

        if amount_str.startswith('(') and amount_str.endswith(')'):
            amount_str = '-' + amount_str[1:-1]

        amount_str = re.sub(r'[$€£,\s]', '', amount_str)

        try:
            amount = Decimal(amount_str)
        except InvalidOperation:
            return None

        # Must fit the Numeric(12, 2) amount column
        if not amount.is_finite() or abs(amount) >= MAX_AMOUNT:
            return None
        return amount
