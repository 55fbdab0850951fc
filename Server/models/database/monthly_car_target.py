"""
SalesDesk Server - Monthly Car Target Database Model

Per-user, per-role car sales quota for one month.
"""

from datetime import datetime, timezone
from sqlalchemy import Column, Integer, DateTime, ForeignKey, UniqueConstraint
from sqlalchemy.orm import relationship

from models.database.base import Base


class MonthlyCarTarget(Base):
    """
    Monthly car targets table - quota assigned to a user under a role
    """
    __tablename__ = "monthly_car_targets"
    __table_args__ = (
        UniqueConstraint("user_id", "role_id", "year", "month", name="uq_monthly_car_target"),
    )

    target_id = Column(Integer, primary_key=True, autoincrement=True)
    user_id = Column(Integer, ForeignKey("users.user_id", ondelete="CASCADE"), nullable=False, index=True)
    role_id = Column(Integer, ForeignKey("roles.role_id"), nullable=False)
    year = Column(Integer, nullable=False)
    month = Column(Integer, nullable=False)  # 1-12
    target_units = Column(Integer, nullable=False, default=0)
    created_at = Column(DateTime, nullable=False, default=lambda: datetime.now(timezone.utc))

    # Relationship to user
    user = relationship("User", back_populates="monthly_car_targets")
