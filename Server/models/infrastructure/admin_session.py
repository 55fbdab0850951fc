"""
SalesDesk Server - Admin Session Model

Dataclass for a logged-in admin and the screen state owned by that login.
"""

from datetime import datetime, timedelta, timezone
from dataclasses import dataclass, field

from models.infrastructure.users_manager_state import UsersManagerState


@dataclass
class AdminSession:
    """Represents a logged-in admin"""
    session_id: str
    user_id: int
    email: str
    created_at_utc: datetime
    expires_at_utc: datetime
    users_manager: UsersManagerState = field(default_factory=UsersManagerState)

    def IsExpired(self) -> bool:
        return datetime.now(timezone.utc) >= self.expires_at_utc

    def Touch(self, now: datetime, idle: timedelta) -> None:
        """Extend the session after activity"""
        self.expires_at_utc = now + idle
