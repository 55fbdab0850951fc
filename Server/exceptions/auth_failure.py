"""
SalesDesk Server - Authentication Failure Exception

Exception raised when the re-entered administrator password does not match.
"""

from .salesdesk_error import SalesDeskError


class AuthFailure(SalesDeskError):
    """Exception for authentication errors."""
    pass
