"""
SalesDesk Server - Models Package

This package contains all data models for the SalesDesk server:
- database: SQLAlchemy database models
- api: API endpoint Pydantic models
- infrastructure: Dataclass models for sessions and screen state
"""

# Re-export all models for convenient importing
from models.database import *
from models.api import *
from models.infrastructure import *
