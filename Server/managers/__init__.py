"""
SalesDesk Server - Managers Package

This package contains the database manager and the users repository.
"""

from managers.database_manager import DatabaseManager
from managers.users_repository import UsersRepository

__all__ = ['DatabaseManager', 'UsersRepository']
