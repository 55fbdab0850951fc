"""
SalesDesk Server - Database Manager

This module manages database connection, initialization, and password hashing.
"""

import logging
import secrets
import string
from datetime import datetime, timezone
from pathlib import Path
from typing import Optional

from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool
import bcrypt

from models.database import Base, Role, User, ADMIN_ROLE_SLUG

logger = logging.getLogger(__name__)

# Email of the admin account created on first run
DEFAULT_ADMIN_EMAIL = "admin@salesdesk.local"

# Roles created on startup if missing: slug -> (name, description)
DEFAULT_ROLES = {
    ADMIN_ROLE_SLUG: ("Admin", "Full administrative access"),
    "sales-mobil": ("Sales Mobil", "Submits daily car sales reports"),
    "sales-motor": ("Sales Motor", "Submits daily motorcycle sales reports"),
}


class DatabaseManager:
    """
    Manages database connection, initialization, and password hashing
    """

    def __init__(self, db_path: str = "database/salesdesk.db"):
        """
        Initialize database manager

        Args:
            db_path: Path to SQLite database file, or ":memory:" for a
                     private in-memory database shared by all sessions
        """
        self.db_path = db_path

        if db_path == ":memory:":
            self.engine = create_engine(
                "sqlite://",
                echo=False,
                connect_args={"check_same_thread": False},
                poolclass=StaticPool
            )
        else:
            # Ensure database directory exists
            db_dir = Path(db_path).parent
            if db_dir and str(db_dir) != '.':
                db_dir.mkdir(parents=True, exist_ok=True)

            self.engine = create_engine(f"sqlite:///{db_path}", echo=False)

        self.SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=self.engine, expire_on_commit=False)

    def InitializeDatabase(self) -> Optional[str]:
        """
        Initialize the database with all tables and default data
        Creates tables if they don't exist, populates default roles,
        and creates a default admin user on first run.

        Returns:
            str: Generated admin password if admin user was created, None otherwise
        """
        # Create all tables
        Base.metadata.create_all(bind=self.engine)

        session = self.SessionLocal()
        admin_password = None

        try:
            # Check if this is first run (no users exist)
            is_first_run = session.query(User).count() == 0

            # Populate default roles (always, even if not first run)
            self.PopulateDefaultRoles(session)

            if is_first_run:
                admin_role = session.query(Role).filter(Role.slug == ADMIN_ROLE_SLUG).first()

                admin_password = self.GenerateRandomPassword()
                admin_user = User(
                    name="Administrator",
                    email=DEFAULT_ADMIN_EMAIL,
                    password_hash=self.HashPassword(admin_password),
                    role_id=admin_role.role_id if admin_role else None,
                    created_at=datetime.now(timezone.utc)
                )
                session.add(admin_user)
                logger.info(f"Created default admin user '{DEFAULT_ADMIN_EMAIL}'")

            session.commit()

        except Exception as e:
            session.rollback()
            raise e
        finally:
            session.close()

        return admin_password

    def PopulateDefaultRoles(self, session):
        """
        Populate default roles
        Only adds roles that don't already exist

        Args:
            session: SQLAlchemy session
        """
        for slug, (role_name, description) in DEFAULT_ROLES.items():
            existing = session.query(Role).filter(Role.slug == slug).first()
            if not existing:
                session.add(Role(role_name=role_name, slug=slug, description=description))
                session.flush()  # Flush to get the role_id
                logger.info(f"Added default role: {role_name}")

    @staticmethod
    def GenerateRandomPassword(length: int = 12) -> str:
        """
        Generate a secure random password

        Args:
            length: Password length (default 12)

        Returns:
            str: Generated password
        """
        alphabet = string.ascii_letters + string.digits + "!@#$%^&*"
        return ''.join(secrets.choice(alphabet) for _ in range(length))

    @staticmethod
    def HashPassword(password: str) -> str:
        """
        Hash a password using bcrypt
        Truncates to 72 bytes to comply with bcrypt's maximum password length

        Args:
            password: Plain text password

        Returns:
            str: Hashed password (as string)
        """
        password_bytes = password.encode('utf-8')[:72]
        hashed = bcrypt.hashpw(password_bytes, bcrypt.gensalt())
        return hashed.decode('utf-8')

    @staticmethod
    def VerifyPassword(plain_password: str, hashed_password: str) -> bool:
        """
        Verify a password against a hash
        Truncates to 72 bytes to match how the hash was created

        Args:
            plain_password: Plain text password to verify
            hashed_password: Stored password hash (as string)

        Returns:
            bool: True if password matches, False otherwise
        """
        password_bytes = plain_password.encode('utf-8')[:72]
        try:
            return bcrypt.checkpw(password_bytes, hashed_password.encode('utf-8'))
        except ValueError:
            # Stored value is not a bcrypt hash
            return False

    def GetSession(self):
        """
        Get a new database session

        Returns:
            Session: SQLAlchemy session
        """
        return self.SessionLocal()
