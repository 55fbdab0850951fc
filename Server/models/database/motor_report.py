"""
SalesDesk Server - Motor Report Database Model

Daily motorcycle sales report submitted by a user.
"""

from datetime import datetime, timezone
from sqlalchemy import Column, Integer, Date, DateTime, ForeignKey
from sqlalchemy.orm import relationship

from models.database.base import Base


class MotorReport(Base):
    """
    Motor reports table - one row per daily motorcycle sales report
    """
    __tablename__ = "motor_reports"

    report_id = Column(Integer, primary_key=True, autoincrement=True)
    submitted_by = Column(Integer, ForeignKey("users.user_id"), nullable=False, index=True)
    role_id = Column(Integer, ForeignKey("roles.role_id"), nullable=True)
    report_date = Column(Date, nullable=False)
    units_sold = Column(Integer, nullable=False, default=0)
    created_at = Column(DateTime, nullable=False, default=lambda: datetime.now(timezone.utc))

    submitter = relationship("User", back_populates="motor_reports")
