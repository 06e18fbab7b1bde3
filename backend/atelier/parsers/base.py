"""
Base parser class for statement files.
"""

from abc import ABC, abstractmethod
from typing import Union

from atelier.schemas.statement import BankStatementData


class BaseParser(ABC):
    """Base class for bank statement parsers"""

    @abstractmethod
    def can_parse(self, file_name: str) -> bool:
        """Check if this parser can handle the file"""
        pass

    @abstractmethod
    def parse(
        self,
        content: Union[str, bytes],
        file_name: str
    ) -> BankStatementData:
        """
        Parse file content into a statement.
        Raises StatementParseError when nothing usable can be extracted.
        """
        pass
