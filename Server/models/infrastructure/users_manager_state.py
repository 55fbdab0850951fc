"""
SalesDesk Server - Users Manager State Models

Dataclasses for the transient state of the users manager screen.
The screen is in exactly one mode at a time: Idle, Editing or Confirming.
State lives in the admin session and is never persisted.
"""

from dataclasses import dataclass, field, asdict
from typing import Dict, Optional, Union

FLASH_SUCCESS = "success"
FLASH_ERROR = "error"


@dataclass
class Idle:
    """No edit or delete confirmation in progress"""
    kind: str = field(default="idle", init=False)


@dataclass
class Editing:
    """Role edit in progress for one user"""
    user_id: int
    selected_role_id: Optional[int]
    original_user_name: str
    original_role_name: str  # '-' when the user had no role
    kind: str = field(default="editing", init=False)


@dataclass
class Confirming:
    """Delete confirmation open for one user"""
    user_id: int
    will_force: bool
    has_reports: bool
    user_name: str
    user_email: str
    admin_password: str = ""
    kind: str = field(default="confirming", init=False)


Mode = Union[Idle, Editing, Confirming]


@dataclass
class Flash:
    """Single-slot notification; a new message overwrites the previous one"""
    message: str = ""
    flash_type: str = FLASH_SUCCESS
    visible: bool = False


@dataclass
class UsersManagerState:
    """All transient state owned by one users manager screen"""
    filter_role_id: str = ""
    mode: Mode = field(default_factory=Idle)
    flash: Flash = field(default_factory=Flash)
    errors: Dict[str, str] = field(default_factory=dict)  # field name -> validation message

    @property
    def editing(self) -> Optional[Editing]:
        return self.mode if isinstance(self.mode, Editing) else None

    @property
    def confirming(self) -> Optional[Confirming]:
        return self.mode if isinstance(self.mode, Confirming) else None

    def ToDict(self) -> dict:
        """Serialize state for the JSON endpoints, never exposing the typed password"""
        data = asdict(self)
        if isinstance(self.mode, Confirming):
            data["mode"]["admin_password"] = ""
        return data
