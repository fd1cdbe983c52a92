"""
Statement parsers package.
"""

from budgetplanner.parsers.base import BaseParser, StatementParseError
from budgetplanner.parsers.csv_parser import CSVParser
from budgetplanner.parsers.ofx_parser import OFXParser

__all__ = ['BaseParser', 'StatementParseError', 'CSVParser', 'OFXParser']
