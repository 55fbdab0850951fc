"""
SalesDesk Server - Persistence Failure Exceptions

Exceptions raised by the users repository when a write fails.
"""

from .salesdesk_error import SalesDeskError


class PersistenceFailure(SalesDeskError):
    """Exception for database write errors."""
    pass


class EmailUniqueViolation(PersistenceFailure):
    """Exception raised when an email is already taken (soft-deleted rows included)."""

    def __init__(self, email: str):
        super().__init__(f"Email '{email}' is already registered")
        self.email = email
