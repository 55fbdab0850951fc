"""
SalesDesk Server - Authentication Utilities

Credential checks for the admin login form.
Passwords are stored as bcrypt hashes (see DatabaseManager.HashPassword).
"""

from typing import Optional

from models.database import User
from managers.database_manager import DatabaseManager


def AuthenticateUser(db_manager: DatabaseManager, email: str, password: str) -> Optional[dict]:
    """
    Authenticate a user with email and password

    Args:
        db_manager: DatabaseManager instance
        email: Login email
        password: Plain text password

    Returns:
        dict: User data dictionary if authentication successful, None otherwise
              Contains: user_id, name, email, role_slug
    """
    session = db_manager.GetSession()

    try:
        user = session.query(User).filter(
            User.email == email,
            User.deleted_at.is_(None)  # Soft-deleted users cannot log in
        ).first()

        if not user:
            return None

        if not db_manager.VerifyPassword(password, user.password_hash):
            return None

        # Return user data as dictionary to avoid SQLAlchemy session issues
        return {
            'user_id': user.user_id,
            'name': user.name,
            'email': user.email,
            'role_slug': user.role.slug if user.role else None
        }

    finally:
        session.close()
