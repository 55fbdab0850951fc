"""
SalesDesk Server - Admin Session Store

In-memory store of logged-in admins, keyed by the session cookie.
Each entry carries the users manager screen state for that login, so two
admins (or two logins of the same admin) never share an edit form or a
delete confirmation. Sessions expire after SESSION_IDLE_HOURS without a
request and are lost on restart.
"""

import secrets
import logging
from datetime import datetime, timezone, timedelta
from typing import Optional, Dict

from models.infrastructure import AdminSession, UsersManagerState

logger = logging.getLogger(__name__)

SESSION_COOKIE_NAME = "salesdesk_admin"
SESSION_IDLE_HOURS = 8

# Cookie lifetime; the server side expiry slides with activity
SESSION_LIFETIME_HOURS = SESSION_IDLE_HOURS

_sessions: Dict[str, AdminSession] = {}


def _PurgeExpired() -> None:
    expired = [sid for sid, session in _sessions.items() if session.IsExpired()]
    for sid in expired:
        logger.info(f"Admin session for '{_sessions[sid].email}' expired")
        del _sessions[sid]


def CreateSession(user_id: int, email: str) -> AdminSession:
    """
    Start a session for an admin who just logged in

    The users manager state always starts empty: no filter, no open form,
    no flash left over from an earlier login.

    Args:
        user_id: ID of the admin user
        email: Email the admin logged in with

    Returns:
        AdminSession with a new random session ID
    """
    now = datetime.now(timezone.utc)
    _PurgeExpired()

    session = AdminSession(
        session_id=secrets.token_urlsafe(32),
        user_id=user_id,
        email=email,
        created_at_utc=now,
        expires_at_utc=now + timedelta(hours=SESSION_IDLE_HOURS),
        users_manager=UsersManagerState()
    )
    _sessions[session.session_id] = session

    logger.info(f"Admin '{email}' logged in ({len(_sessions)} active sessions)")
    return session


def GetSession(session_id: str) -> Optional[AdminSession]:
    """
    Look up a live session and push its expiry forward

    Args:
        session_id: Value of the session cookie

    Returns:
        AdminSession, or None if unknown or idle for too long
    """
    if not session_id:
        return None

    now = datetime.now(timezone.utc)
    _PurgeExpired()

    session = _sessions.get(session_id)
    if session:
        session.Touch(now, timedelta(hours=SESSION_IDLE_HOURS))
    return session


def DeleteSession(session_id: str) -> None:
    """Forget a session and its screen state (logout)"""
    session = _sessions.pop(session_id, None)
    if session:
        logger.info(f"Admin '{session.email}' logged out")
