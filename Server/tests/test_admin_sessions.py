"""
Tests for the in-memory admin session store
"""

from datetime import datetime, timedelta, timezone

import pytest

import admin_sessions
import users_manager
from models.infrastructure import Idle, UsersManagerState


@pytest.fixture(autouse=True)
def empty_store(monkeypatch):
    monkeypatch.setattr(admin_sessions, "_sessions", {})


def test_each_login_gets_its_own_screen_state():
    first = admin_sessions.CreateSession(3, "admin@example.com")
    second = admin_sessions.CreateSession(3, "admin@example.com")

    assert first.session_id != second.session_id
    assert isinstance(first.users_manager, UsersManagerState)
    assert first.users_manager is not second.users_manager

    users_manager.ApplyFilter(first.users_manager, "2")
    users_manager.SetFlash(first.users_manager, "User role updated.")

    assert second.users_manager.filter_role_id == ""
    assert not second.users_manager.flash.visible
    assert isinstance(second.users_manager.mode, Idle)


def test_relogin_starts_with_empty_state():
    session = admin_sessions.CreateSession(3, "admin@example.com")
    users_manager.SetFlash(session.users_manager, "User role updated.")
    admin_sessions.DeleteSession(session.session_id)

    session = admin_sessions.CreateSession(3, "admin@example.com")

    assert not session.users_manager.flash.visible
    assert session.users_manager.errors == {}


def test_get_session_extends_expiry():
    session = admin_sessions.CreateSession(3, "admin@example.com")
    session.expires_at_utc = datetime.now(timezone.utc) + timedelta(minutes=1)

    found = admin_sessions.GetSession(session.session_id)

    assert found is session
    assert found.expires_at_utc > datetime.now(timezone.utc) + timedelta(hours=admin_sessions.SESSION_IDLE_HOURS - 1)


def test_expired_session_is_purged():
    session = admin_sessions.CreateSession(3, "admin@example.com")
    session.expires_at_utc = datetime.now(timezone.utc) - timedelta(seconds=1)

    assert admin_sessions.GetSession(session.session_id) is None
    assert session.session_id not in admin_sessions._sessions


def test_unknown_and_deleted_sessions():
    assert admin_sessions.GetSession("") is None
    assert admin_sessions.GetSession("no-such-session") is None

    session = admin_sessions.CreateSession(3, "admin@example.com")
    admin_sessions.DeleteSession(session.session_id)

    assert admin_sessions.GetSession(session.session_id) is None
    admin_sessions.DeleteSession(session.session_id)  # second logout is harmless
