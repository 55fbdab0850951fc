"""
SalesDesk Server - User Database Model

User model for authentication and role assignment.

Soft delete:
    Deleted users have deleted_at set. They cannot log in and are excluded
    from normal queries, but the row is kept so the email stays reserved.
    Force-deleted users are removed together with their monthly targets.
"""

from datetime import datetime, timezone
from sqlalchemy import Column, Integer, String, DateTime, ForeignKey
from sqlalchemy.orm import relationship

from models.database.base import Base


class User(Base):
    """
    Users table - stores user credentials and role assignment
    """
    __tablename__ = "users"

    user_id = Column(Integer, primary_key=True, autoincrement=True)
    name = Column(String, nullable=False)
    email = Column(String, unique=True, nullable=False)  # Unique even for soft-deleted rows
    password_hash = Column(String, nullable=False)
    role_id = Column(Integer, ForeignKey("roles.role_id"), nullable=True)
    created_at = Column(DateTime, nullable=False, default=lambda: datetime.now(timezone.utc))
    deleted_at = Column(DateTime, nullable=True)  # NULL while the account is active

    # Relationship to role
    role = relationship("Role", back_populates="users")
    # Relationships to reports
    car_reports = relationship("CarReport", back_populates="submitter")
    motor_reports = relationship("MotorReport", back_populates="submitter")
    # Relationships to monthly targets (purged with the user on force delete)
    monthly_car_targets = relationship(
        "MonthlyCarTarget", back_populates="user", cascade="all, delete-orphan"
    )
    monthly_motor_targets = relationship(
        "MonthlyMotorTarget", back_populates="user", cascade="all, delete-orphan"
    )

    def __repr__(self) -> str:
        return f"User(user_id={self.user_id}, email={self.email})"
