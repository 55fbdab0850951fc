"""
SalesDesk Server - Car Report Database Model

Daily car sales report submitted by a user.
The users manager only checks whether a user has submitted any.
"""

from datetime import datetime, timezone
from sqlalchemy import Column, Integer, Date, DateTime, ForeignKey
from sqlalchemy.orm import relationship

from models.database.base import Base


class CarReport(Base):
    """
    Car reports table - one row per daily car sales report
    """
    __tablename__ = "car_reports"

    report_id = Column(Integer, primary_key=True, autoincrement=True)
    submitted_by = Column(Integer, ForeignKey("users.user_id"), nullable=False, index=True)
    role_id = Column(Integer, ForeignKey("roles.role_id"), nullable=True)  # Area at time of submission
    report_date = Column(Date, nullable=False)
    units_sold = Column(Integer, nullable=False, default=0)
    created_at = Column(DateTime, nullable=False, default=lambda: datetime.now(timezone.utc))

    # Relationship to submitting user
    submitter = relationship("User", back_populates="car_reports")
