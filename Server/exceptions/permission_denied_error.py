"""
SalesDesk Server - Permission Denied Error Exception

Exception raised when an admin account is targeted for deletion.
"""

from .salesdesk_error import SalesDeskError


class PermissionDeniedError(SalesDeskError):
    """Exception for operations on protected accounts."""
    pass
