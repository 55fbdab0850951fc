"""
Shared fixtures for SalesDesk Server tests

Every test gets its own in-memory database seeded with:
- roles: 1 Admin (admin), 2 Sales Mobil, 3 Sales Motor
- user 1 Andi (Sales Mobil) with one car report
- user 2 Budi (Sales Mobil) without reports
- user 3 Administrator (Admin)
- car and motor monthly targets for users 1 and 2 under role 2,
  plus one car target for user 2 under role 3
"""

import sys
from datetime import date
from pathlib import Path

import pytest

# Add parent directory to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent))

from managers.database_manager import DatabaseManager
from managers.users_repository import UsersRepository
from models.database import (
    Base, Role, User, CarReport, MonthlyCarTarget, MonthlyMotorTarget
)
from models.infrastructure import UsersManagerState

ADMIN_PASSWORD = "admin-secret"
USER_PASSWORD = "sales-secret"

# Hash once, bcrypt is slow on purpose
ADMIN_PASSWORD_HASH = DatabaseManager.HashPassword(ADMIN_PASSWORD)
USER_PASSWORD_HASH = DatabaseManager.HashPassword(USER_PASSWORD)


@pytest.fixture
def db_manager():
    manager = DatabaseManager(":memory:")
    Base.metadata.create_all(bind=manager.engine)

    session = manager.GetSession()
    try:
        session.add_all([
            Role(role_id=1, role_name="Admin", slug="admin"),
            Role(role_id=2, role_name="Sales Mobil", slug="sales-mobil"),
            Role(role_id=3, role_name="Sales Motor", slug="sales-motor"),
        ])
        session.flush()

        session.add_all([
            User(user_id=1, name="Andi", email="andi@example.com", password_hash=USER_PASSWORD_HASH, role_id=2),
            User(user_id=2, name="Budi", email="budi@example.com", password_hash=USER_PASSWORD_HASH, role_id=2),
            User(user_id=3, name="Administrator", email="admin@example.com", password_hash=ADMIN_PASSWORD_HASH, role_id=1),
        ])
        session.flush()

        session.add(CarReport(submitted_by=1, role_id=2, report_date=date(2026, 9, 1), units_sold=2))

        for user_id in (1, 2):
            session.add(MonthlyCarTarget(user_id=user_id, role_id=2, year=2026, month=9, target_units=10))
            session.add(MonthlyMotorTarget(user_id=user_id, role_id=2, year=2026, month=9, target_units=20))
        session.add(MonthlyCarTarget(user_id=2, role_id=3, year=2026, month=10, target_units=5))

        session.commit()
    finally:
        session.close()

    yield manager

    manager.engine.dispose()


@pytest.fixture
def open_repository(db_manager):
    """
    Factory for repositories with their own session, one per simulated request
    """
    sessions = []

    def _open():
        session = db_manager.GetSession()
        sessions.append(session)
        return UsersRepository(session)

    yield _open

    for session in sessions:
        session.close()


@pytest.fixture
def repository(open_repository):
    return open_repository()


@pytest.fixture
def state():
    return UsersManagerState()
