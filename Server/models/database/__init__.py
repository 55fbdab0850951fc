"""
SalesDesk Server - Database Models Package

This package contains all SQLAlchemy database model definitions.
All models share a common declarative base for proper table relationships.
"""

# Import Base first
from models.database.base import Base

# Import all models
from models.database.role import Role, ADMIN_ROLE_SLUG
from models.database.user import User
from models.database.car_report import CarReport
from models.database.motor_report import MotorReport
from models.database.monthly_car_target import MonthlyCarTarget
from models.database.monthly_motor_target import MonthlyMotorTarget

# Export all models and Base
__all__ = [
    'Base',
    'Role',
    'ADMIN_ROLE_SLUG',
    'User',
    'CarReport',
    'MotorReport',
    'MonthlyCarTarget',
    'MonthlyMotorTarget',
]
