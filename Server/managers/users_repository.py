"""
SalesDesk Server - Users Repository

Persistence operations used by the users manager, bound to one
SQLAlchemy session. Soft-deleted users are invisible to every lookup
except RegisterUser's unique email check, which the database enforces.
"""

import logging
from datetime import datetime, timezone
from typing import List, Optional

from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import joinedload

from models.database import (
    User, Role, CarReport, MotorReport, MonthlyCarTarget, MonthlyMotorTarget
)
from exceptions import EmailUniqueViolation, PersistenceFailure

logger = logging.getLogger(__name__)


class UsersRepository:
    """
    Repository over users, roles, reports and monthly targets
    """

    def __init__(self, session):
        """
        Args:
            session: SQLAlchemy session owned by the caller
        """
        self.session = session

    # ==================== Lookups ====================

    def FindUser(self, user_id: int, with_role: bool = False) -> Optional[User]:
        """
        Find an active (not soft-deleted) user by ID

        Args:
            user_id: User ID
            with_role: Eagerly load the user's role

        Returns:
            User or None if missing or soft-deleted
        """
        query = self.session.query(User)
        if with_role:
            query = query.options(joinedload(User.role))
        return query.filter(User.user_id == user_id, User.deleted_at.is_(None)).first()

    def FindRole(self, role_id: int) -> Optional[Role]:
        return self.session.query(Role).filter(Role.role_id == role_id).first()

    def ListRoles(self) -> List[Role]:
        """Get all roles, ascending by ID"""
        return self.session.query(Role).order_by(Role.role_id.asc()).all()

    def ListUsers(self, role_id: Optional[int] = None) -> List[User]:
        """
        Get active users with their role, ascending by ID

        Args:
            role_id: Only return users with this role (None for all users)

        Returns:
            list: List of User objects
        """
        query = self.session.query(User).options(
            joinedload(User.role)
        ).filter(User.deleted_at.is_(None))

        if role_id is not None:
            query = query.filter(User.role_id == role_id)

        return query.order_by(User.user_id.asc()).all()

    def HasReport(self, user_id: int) -> bool:
        """
        Check if a user has ever submitted a car or motor report

        Args:
            user_id: User ID

        Returns:
            bool: True if at least one report references the user
        """
        has_car_report = self.session.query(
            self.session.query(CarReport).filter(CarReport.submitted_by == user_id).exists()
        ).scalar()
        if has_car_report:
            return True

        return bool(self.session.query(
            self.session.query(MotorReport).filter(MotorReport.submitted_by == user_id).exists()
        ).scalar())

    # ==================== Mutations ====================

    def AssignRole(self, user: User, role: Role) -> None:
        user.role = role
        user.role_id = role.role_id
        self.session.flush()

    def DeleteMonthlyTargets(self, user_id: int, role_id: int) -> int:
        """
        Delete the car and motor monthly targets of a user under one role

        Args:
            user_id: User ID
            role_id: Role the targets were assigned under

        Returns:
            int: Number of target rows deleted across both categories
        """
        deleted = 0
        for target_model in (MonthlyCarTarget, MonthlyMotorTarget):
            deleted += self.session.query(target_model).filter(
                target_model.user_id == user_id,
                target_model.role_id == role_id
            ).delete(synchronize_session="fetch")
        return deleted

    def SoftDeleteUser(self, user: User) -> None:
        """Mark a user deleted; the row and its email stay in the database"""
        user.deleted_at = datetime.now(timezone.utc)
        self.session.flush()

    def ForceDeleteUser(self, user: User) -> None:
        """Remove a user row permanently; monthly targets cascade with it"""
        self.session.delete(user)
        self.session.flush()

    def RegisterUser(self, name: str, email: str, password_hash: str, role_id: Optional[int] = None) -> User:
        """
        Insert a new user

        Args:
            name: Display name
            email: Login email, unique across active and soft-deleted users
            password_hash: bcrypt hash of the password
            role_id: Optional role assignment

        Returns:
            User: The new user with its ID assigned

        Raises:
            EmailUniqueViolation: If the email is already taken
        """
        user = User(
            name=name,
            email=email,
            password_hash=password_hash,
            role_id=role_id,
            created_at=datetime.now(timezone.utc)
        )
        self.session.add(user)
        try:
            self.session.flush()
        except IntegrityError:
            self.session.rollback()
            logger.info(f"Registration rejected, email '{email}' already registered")
            raise EmailUniqueViolation(email)
        return user

    def Commit(self) -> None:
        """
        Raises:
            PersistenceFailure: If the database rejects the transaction
        """
        try:
            self.session.commit()
        except SQLAlchemyError as e:
            raise PersistenceFailure(str(e)) from e

    def Rollback(self) -> None:
        self.session.rollback()
