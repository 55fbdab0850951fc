"""
SalesDesk Server - Users Manager

Workflow handlers for the users administration screen: listing users by
role, reassigning roles and deleting accounts behind an admin password
confirmation.

Handlers are plain functions. Each one receives the screen state and a
UsersRepository, applies one user action and returns the same state
object. Failures are turned into flash messages or field errors on the
state; only Edit raises (UserNotFoundError) when the user does not exist.
"""

import logging
from typing import Optional

from models.database import User
from models.infrastructure import (
    UsersManagerState, Idle, Editing, Confirming, FLASH_SUCCESS, FLASH_ERROR
)
from managers.database_manager import DatabaseManager
from managers.users_repository import UsersRepository
from exceptions import (
    ValidationFailure, NotFoundError, UserNotFoundError, RoleNotFoundError,
    PermissionDeniedError, AuthFailure
)

logger = logging.getLogger(__name__)

# Flash messages
MSG_NOTHING_TO_UPDATE = "Nothing to update."
MSG_USER_NOT_FOUND = "User not found."
MSG_ROLE_NOT_FOUND = "Role not found."
MSG_ROLE_UPDATED = "User role updated."
MSG_ROLE_UPDATED_TARGETS_REMOVED = (
    "User role updated. Old monthly targets (previous area) removed because user had no reports."
)
MSG_ROLE_UPDATE_FAILED = "Failed to update user role: "
MSG_ADMIN_PROTECTED = "Admin tidak bisa menghapus akun admin."
MSG_INVALID_ADMIN_PASSWORD = "Invalid admin password."
MSG_SOFT_DELETED = "User dihapus (soft delete). Email tidak bisa digunakan lagi untuk mendaftar ulang."
MSG_FORCE_DELETED = "User dihapus permanen (force delete). User bisa mendaftar ulang dengan email yang sama."
MSG_DELETE_FAILED = "Gagal menghapus user: "

# Field validation messages
MSG_ROLE_REQUIRED = "The selected role id field is required."
MSG_ROLE_INVALID = "The selected role id is invalid."
MSG_PASSWORD_REQUIRED = "The admin password field is required."

NO_ROLE_NAME = "-"


# ==================== Flash ====================

def SetFlash(state: UsersManagerState, message: str, flash_type: str = FLASH_SUCCESS) -> UsersManagerState:
    """Show a flash message, replacing any previous one"""
    state.flash.message = message
    state.flash.flash_type = flash_type
    state.flash.visible = True
    return state


def HideFlash(state: UsersManagerState) -> UsersManagerState:
    """Hide the flash; the message is kept until the next SetFlash"""
    state.flash.visible = False
    return state


# ==================== Listing ====================

def ParseRoleFilter(filter_role_id) -> Optional[int]:
    """
    Convert the role filter from the query string into a role ID

    Args:
        filter_role_id: Raw filter value ('' or None means no filter)

    Returns:
        int role ID, or None for an unfiltered list
    """
    if filter_role_id is None or filter_role_id == "":
        return None
    try:
        return int(filter_role_id)
    except (TypeError, ValueError):
        return None


def ApplyFilter(state: UsersManagerState, filter_role_id) -> UsersManagerState:
    state.filter_role_id = "" if filter_role_id is None else str(filter_role_id)
    return state


def LoadListing(repository: UsersRepository, filter_role_id="") -> dict:
    """
    Load the data the users page renders

    Args:
        repository: Users repository
        filter_role_id: Role ID to filter users by ('' for all users)

    Returns:
        dict with "users" (ascending by ID, role loaded) and "roles" (ascending by ID)
    """
    roles = repository.ListRoles()
    users = repository.ListUsers(ParseRoleFilter(filter_role_id))
    return {"users": users, "roles": roles}


# ==================== Edit Role ====================

def ResetInput(state: UsersManagerState) -> UsersManagerState:
    """Leave the edit form"""
    if isinstance(state.mode, Editing):
        state.mode = Idle()
    state.errors.pop("selected_role_id", None)
    return state


def Edit(state: UsersManagerState, repository: UsersRepository, user_id: int) -> UsersManagerState:
    """
    Open the role edit form for a user

    Args:
        state: Screen state
        repository: Users repository
        user_id: User to edit

    Returns:
        The state, now Editing

    Raises:
        UserNotFoundError: If the user does not exist or is soft-deleted
    """
    user = repository.FindUser(user_id, with_role=True)
    if not user:
        raise UserNotFoundError(user_id)

    state.errors = {}
    state.mode = Editing(
        user_id=user.user_id,
        selected_role_id=user.role_id,
        original_user_name=user.name,
        original_role_name=user.role.role_name if user.role else NO_ROLE_NAME
    )
    return state


def _IsBlank(value) -> bool:
    """Missing, empty or whitespace-only form input"""
    if value is None:
        return True
    return isinstance(value, str) and not value.strip()


def _ValidateRoleSelection(repository: UsersRepository, selected_role_id) -> int:
    """
    Check the selected role is present and exists

    Returns:
        int: The selected role ID

    Raises:
        ValidationFailure: If the selection is empty or names no role
    """
    if _IsBlank(selected_role_id):
        raise ValidationFailure("selected_role_id", MSG_ROLE_REQUIRED)

    try:
        role_id = int(selected_role_id)
    except (TypeError, ValueError):
        raise ValidationFailure("selected_role_id", MSG_ROLE_INVALID)

    if repository.FindRole(role_id) is None:
        raise ValidationFailure("selected_role_id", MSG_ROLE_INVALID)

    return role_id


def _LoadUserAndRole(repository: UsersRepository, user_id: int, role_id: int):
    """
    Re-fetch the edited user and the selected role

    Raises:
        UserNotFoundError: If the user was deleted since the edit form opened
        RoleNotFoundError: If the role no longer exists
    """
    user = repository.FindUser(user_id)
    if not user:
        raise UserNotFoundError(user_id)

    role = repository.FindRole(role_id)
    if not role:
        raise RoleNotFoundError(role_id)

    return user, role


def UpdateRole(state: UsersManagerState, repository: UsersRepository, selected_role_id) -> UsersManagerState:
    """
    Save the role chosen in the edit form

    If the role changed and the user never submitted a car or motor report,
    the user's monthly targets under the previous role are deleted in the
    same transaction.

    Args:
        state: Screen state
        repository: Users repository
        selected_role_id: Role ID submitted by the form

    Returns:
        The state, back to Idle unless the selection failed validation
    """
    editing = state.editing
    if editing is None:
        return SetFlash(state, MSG_NOTHING_TO_UPDATE, FLASH_ERROR)

    state.errors = {}
    editing.selected_role_id = selected_role_id

    try:
        role_id = _ValidateRoleSelection(repository, selected_role_id)
    except ValidationFailure as e:
        state.errors[e.field] = e.message
        return state

    try:
        user, role = _LoadUserAndRole(repository, editing.user_id, role_id)
    except UserNotFoundError:
        SetFlash(state, MSG_USER_NOT_FOUND, FLASH_ERROR)
        return ResetInput(state)
    except RoleNotFoundError:
        SetFlash(state, MSG_ROLE_NOT_FOUND, FLASH_ERROR)
        return ResetInput(state)

    old_role_id = user.role_id
    targets_removed = False

    try:
        repository.AssignRole(user, role)

        if old_role_id and old_role_id != role.role_id and not repository.HasReport(user.user_id):
            deleted = repository.DeleteMonthlyTargets(user.user_id, old_role_id)
            targets_removed = True
            logger.info(f"Removed {deleted} monthly targets of user {user.user_id} under previous role {old_role_id}")

        repository.Commit()
    except Exception as e:
        repository.Rollback()
        logger.error(f"Error updating role of user {editing.user_id}: {str(e)}")
        SetFlash(state, MSG_ROLE_UPDATE_FAILED + str(e), FLASH_ERROR)
        return ResetInput(state)

    logger.info(f"Changed role of user {user.user_id} from {old_role_id} to {role.role_id}")

    SetFlash(state, MSG_ROLE_UPDATED_TARGETS_REMOVED if targets_removed else MSG_ROLE_UPDATED)
    return ResetInput(state)


# ==================== Delete ====================

def _LoadDeletableUser(repository: UsersRepository, user_id: int) -> User:
    """
    Load a user that may be deleted

    Raises:
        UserNotFoundError: If the user does not exist or is soft-deleted
        PermissionDeniedError: If the user holds the admin role
    """
    user = repository.FindUser(user_id, with_role=True)
    if not user:
        raise UserNotFoundError(user_id)
    if user.role is not None and user.role.IsAdmin():
        raise PermissionDeniedError(f"User {user_id} is an admin account")
    return user


def _VerifyAdminPassword(acting_admin: Optional[User], admin_password: str) -> None:
    """
    Raises:
        AuthFailure: If there is no acting admin or the password does not match its hash
    """
    if acting_admin is None or not DatabaseManager.VerifyPassword(admin_password, acting_admin.password_hash):
        raise AuthFailure("Admin password mismatch")


def ConfirmDelete(state: UsersManagerState, repository: UsersRepository, user_id: int) -> UsersManagerState:
    """
    Open the delete confirmation for a user

    Args:
        state: Screen state
        repository: Users repository
        user_id: User to delete

    Returns:
        The state, Confirming on success, unchanged apart from the flash otherwise
    """
    try:
        user = _LoadDeletableUser(repository, user_id)
    except NotFoundError:
        return SetFlash(state, MSG_USER_NOT_FOUND, FLASH_ERROR)
    except PermissionDeniedError:
        return SetFlash(state, MSG_ADMIN_PROTECTED, FLASH_ERROR)

    has_reports = repository.HasReport(user.user_id)

    state.errors = {}
    state.mode = Confirming(
        user_id=user.user_id,
        will_force=not has_reports,
        has_reports=has_reports,
        user_name=user.name,
        user_email=user.email
    )
    return state


def CancelConfirm(state: UsersManagerState) -> UsersManagerState:
    """Close the delete confirmation and forget the typed password"""
    if isinstance(state.mode, Confirming):
        state.mode = Idle()
    state.errors.pop("admin_password", None)
    return state


def ConfirmDeletion(
    state: UsersManagerState,
    repository: UsersRepository,
    acting_admin: Optional[User],
    admin_password: Optional[str]
) -> UsersManagerState:
    """
    Delete the user under confirmation after checking the admin password

    Users with report history are soft-deleted (email stays reserved),
    users without are removed permanently. Report history is checked
    again here, not taken from the confirmation.

    Args:
        state: Screen state
        repository: Users repository
        acting_admin: Logged-in administrator whose password is checked
        admin_password: Password typed into the confirmation

    Returns:
        The state, Idle after a successful deletion
    """
    confirming = state.confirming
    if confirming is None:
        return state

    state.errors = {}
    confirming.admin_password = admin_password or ""

    try:
        user = _LoadDeletableUser(repository, confirming.user_id)
    except NotFoundError:
        SetFlash(state, MSG_USER_NOT_FOUND, FLASH_ERROR)
        return CancelConfirm(state)
    except PermissionDeniedError:
        SetFlash(state, MSG_ADMIN_PROTECTED, FLASH_ERROR)
        return CancelConfirm(state)

    if _IsBlank(confirming.admin_password):
        state.errors["admin_password"] = MSG_PASSWORD_REQUIRED
        return state

    try:
        _VerifyAdminPassword(acting_admin, confirming.admin_password)
    except AuthFailure:
        confirming.admin_password = ""
        return SetFlash(state, MSG_INVALID_ADMIN_PASSWORD, FLASH_ERROR)

    has_reports = repository.HasReport(user.user_id)

    try:
        if has_reports:
            repository.SoftDeleteUser(user)
            message = MSG_SOFT_DELETED
        else:
            repository.ForceDeleteUser(user)
            message = MSG_FORCE_DELETED
        repository.Commit()
    except Exception as e:
        repository.Rollback()
        logger.error(f"Error deleting user {confirming.user_id}: {str(e)}")
        return SetFlash(state, MSG_DELETE_FAILED + str(e), FLASH_ERROR)

    logger.info(
        f"Deleted user {confirming.user_id} ({'soft' if has_reports else 'force'} delete)"
    )

    CancelConfirm(state)
    return SetFlash(state, message)
