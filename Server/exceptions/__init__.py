"""
SalesDesk Server - Exceptions Package

Contains all exception classes raised by the users manager and its repository.
"""

from .salesdesk_error import SalesDeskError
from .validation_failure import ValidationFailure
from .not_found_error import NotFoundError, UserNotFoundError, RoleNotFoundError
from .permission_denied_error import PermissionDeniedError
from .auth_failure import AuthFailure
from .persistence_failure import PersistenceFailure, EmailUniqueViolation

__all__ = [
    'SalesDeskError',
    'ValidationFailure',
    'NotFoundError',
    'UserNotFoundError',
    'RoleNotFoundError',
    'PermissionDeniedError',
    'AuthFailure',
    'PersistenceFailure',
    'EmailUniqueViolation',
]
