"""
SalesDesk Server - Validation Failure Exception

Exception raised when a submitted form field fails validation.
"""

from .salesdesk_error import SalesDeskError


class ValidationFailure(SalesDeskError):
    """Exception for invalid form input, tied to the offending field."""

    def __init__(self, field: str, message: str):
        super().__init__(message)
        self.field = field
        self.message = message
