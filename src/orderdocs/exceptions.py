"""Exception types raised by the document layout engine."""

from typing import Optional


class OrderDocsError(Exception):
    """Base exception for orderdocs errors."""

    def __init__(self, message: str, details: Optional[str] = None):
        super().__init__(message)
        self.message = message
        self.details = details

    def __str__(self) -> str:
        if self.details:
            return f"{self.message}: {self.details}"
        return self.message


class LayoutError(OrderDocsError):
    """Raised when content cannot be laid out on the page."""

    pass


class TableSpecError(LayoutError):
    """Raised when a table's columns, headers and cells disagree."""

    pass


class RowOverflowError(LayoutError):
    """Raised when a single table row is taller than a whole page."""

    pass


class DocumentError(OrderDocsError):
    """Raised when a document builder receives input it cannot render."""

    pass


class ConfigError(OrderDocsError):
    """Raised when company details cannot be loaded."""

    pass
