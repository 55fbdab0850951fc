"""
Tests for the users repository and database manager
"""

from datetime import date

import pytest
from sqlalchemy.exc import OperationalError

from managers.database_manager import DatabaseManager, DEFAULT_ADMIN_EMAIL
from managers.users_repository import UsersRepository
from models.database import Role, User, MotorReport, ADMIN_ROLE_SLUG
from exceptions import EmailUniqueViolation, PersistenceFailure


def test_find_user_with_role(repository):
    user = repository.FindUser(1, with_role=True)

    assert user.name == "Andi"
    assert user.role.slug == "sales-mobil"
    assert repository.FindUser(999) is None


def test_has_report_car_motor_and_none(open_repository):
    repository = open_repository()
    assert repository.HasReport(1) is True
    assert repository.HasReport(2) is False

    repository.session.add(MotorReport(submitted_by=2, role_id=2, report_date=date(2026, 9, 5), units_sold=3))
    repository.Commit()

    assert open_repository().HasReport(2) is True


def test_delete_monthly_targets_only_for_role(open_repository):
    repository = open_repository()

    deleted = repository.DeleteMonthlyTargets(2, 2)
    repository.Commit()

    assert deleted == 2  # one car and one motor target
    assert open_repository().DeleteMonthlyTargets(2, 2) == 0
    assert open_repository().DeleteMonthlyTargets(2, 3) == 1


def test_register_user_rejects_duplicate_email(open_repository):
    with pytest.raises(EmailUniqueViolation) as exc_info:
        open_repository().RegisterUser("Another Andi", "andi@example.com", "hash", 2)

    assert exc_info.value.email == "andi@example.com"


def test_soft_deleted_user_is_hidden_but_kept(open_repository):
    repository = open_repository()
    repository.SoftDeleteUser(repository.FindUser(2))
    repository.Commit()

    repository = open_repository()
    assert repository.FindUser(2) is None
    row = repository.session.query(User).filter(User.user_id == 2).first()
    assert row.deleted_at is not None


def test_commit_failure_raises_persistence_failure(open_repository, monkeypatch):
    repository = open_repository()

    def failing_commit():
        raise OperationalError("COMMIT", {}, Exception("database is locked"))

    monkeypatch.setattr(repository.session, "commit", failing_commit)

    with pytest.raises(PersistenceFailure) as exc_info:
        repository.Commit()

    assert "database is locked" in str(exc_info.value)
    assert isinstance(exc_info.value.__cause__, OperationalError)


def test_initialize_database_seeds_roles_and_admin():
    manager = DatabaseManager(":memory:")

    admin_password = manager.InitializeDatabase()

    assert admin_password
    assert manager.InitializeDatabase() is None  # Admin only created on first run

    session = manager.GetSession()
    try:
        repository = UsersRepository(session)
        slugs = [role.slug for role in repository.ListRoles()]
        assert slugs == [ADMIN_ROLE_SLUG, "sales-mobil", "sales-motor"]

        admin = session.query(User).filter(User.email == DEFAULT_ADMIN_EMAIL).one()
        assert admin.role.slug == ADMIN_ROLE_SLUG
        assert DatabaseManager.VerifyPassword(admin_password, admin.password_hash)
        assert session.query(Role).count() == 3
    finally:
        session.close()
        manager.engine.dispose()


def test_verify_password():
    password_hash = DatabaseManager.HashPassword("s3cret")

    assert DatabaseManager.VerifyPassword("s3cret", password_hash)
    assert not DatabaseManager.VerifyPassword("wrong", password_hash)
    assert not DatabaseManager.VerifyPassword("s3cret", "not-a-bcrypt-hash")
