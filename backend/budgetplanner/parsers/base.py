"""
Base parser class for statement files.
"""

from abc import ABC, abstractmethod
from typing import List, Dict, Any


class StatementParseError(ValueError):
    """The file could not be read as a statement at all."""


class BaseParser(ABC):
    """Base class for statement parsers"""

    def __init__(self):
        self.errors: List[str] = []

    @abstractmethod
    def can_parse(self, filename: str) -> bool:
        """Check if this parser can handle the file"""
        pass

    @abstractmethod
    def parse(self, content: bytes) -> List[Dict[str, Any]]:
        """
        Parse file content and return list of transaction dicts.
        Each dict has: date, amount, description and optionally category.
        Rows that cannot be read are skipped and reported in self.errors.
        """
        pass
