"""
SalesDesk Server - Infrastructure Models Package

This package contains dataclass models for infrastructure components
like admin sessions and the users manager screen state.
"""

from models.infrastructure.admin_session import AdminSession
from models.infrastructure.users_manager_state import (
    UsersManagerState, Idle, Editing, Confirming, Flash,
    FLASH_SUCCESS, FLASH_ERROR
)

__all__ = [
    'AdminSession',
    'UsersManagerState',
    'Idle',
    'Editing',
    'Confirming',
    'Flash',
    'FLASH_SUCCESS',
    'FLASH_ERROR',
]
