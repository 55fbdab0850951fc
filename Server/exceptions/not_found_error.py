"""
SalesDesk Server - Not Found Error Exceptions

Exceptions raised when a user or role no longer exists.
"""

from .salesdesk_error import SalesDeskError


class NotFoundError(SalesDeskError):
    """Exception for missing records."""
    pass


class UserNotFoundError(NotFoundError):
    """Exception raised when a user cannot be found (or is soft-deleted)."""

    def __init__(self, user_id):
        super().__init__(f"User with ID {user_id} not found")
        self.user_id = user_id


class RoleNotFoundError(NotFoundError):
    """Exception raised when a role cannot be found."""

    def __init__(self, role_id):
        super().__init__(f"Role with ID {role_id} not found")
        self.role_id = role_id
