"""
SalesDesk Server - API Models Package

This package contains Pydantic models for all API endpoints.
"""

from models.api.user_management import (
    UpdateUserRoleRequest,
    ConfirmDeletionRequest
)

__all__ = [
    'UpdateUserRoleRequest',
    'ConfirmDeletionRequest',
]
