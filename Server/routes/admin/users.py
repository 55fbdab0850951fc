"""
SalesDesk Server - Admin Users Endpoints

The users manager page and the JSON actions its buttons call. Every action
applies one handler from users_manager to the state held in the admin
session and answers with the refreshed listing and state.
"""

import logging
from pathlib import Path
from fastapi import APIRouter, Depends, HTTPException, Request
from fastapi.responses import HTMLResponse
from fastapi.templating import Jinja2Templates

from models.api import UpdateUserRoleRequest, ConfirmDeletionRequest
from managers.users_repository import UsersRepository
from exceptions import UserNotFoundError
from routes.admin.auth import RequireAdminSession
import users_manager

# Create logger
logger = logging.getLogger(__name__)

# Create router instance
router = APIRouter()

# Get the directory where server.py is located
script_dir = Path(__file__).parent.parent.parent

# Initialize Jinja2 templates
templates = Jinja2Templates(directory=str(script_dir / "templates"))


# ==================== Helper Functions ====================

def SerializeUser(user) -> dict:
    return {
        "user_id": user.user_id,
        "name": user.name,
        "email": user.email,
        "role_id": user.role_id,
        "role_name": user.role.role_name if user.role else None,
        "role_slug": user.role.slug if user.role else None
    }


def SerializeRole(role) -> dict:
    return {
        "role_id": role.role_id,
        "role_name": role.role_name,
        "slug": role.slug
    }


def BuildStateResponse(state, repository: UsersRepository) -> dict:
    """
    Build the JSON answer shared by all users manager actions

    Args:
        state: UsersManagerState after the action
        repository: Users repository for the refreshed listing

    Returns:
        dict with users, roles and the serialized screen state
    """
    listing = users_manager.LoadListing(repository, state.filter_role_id)
    return {
        "success": True,
        "users": [SerializeUser(user) for user in listing["users"]],
        "roles": [SerializeRole(role) for role in listing["roles"]],
        "state": state.ToDict()
    }


def LogOutcome(session: dict, action: str, state) -> None:
    """Log what an action did: its field errors if any, else its flash"""
    if state.errors:
        logger.info(f"Admin '{session['email']}' {action} rejected: {state.errors}")
    elif state.flash.visible:
        logger.info(f"Admin '{session['email']}' {action}: {state.flash.message}")


# ==================== Users Page ====================

@router.get("/admin/users", response_class=HTMLResponse, tags=["Admin"])
async def admin_users_page(
    request: Request,
    role_id: str = "",
    session: dict = Depends(RequireAdminSession)
):
    """
    Display user management page

    Args:
        request: FastAPI request object
        role_id: Optional role filter from the query string
        session: Admin session from dependency

    Returns:
        HTML user management page
    """
    from database import db_manager
    db_session = db_manager.GetSession()

    try:
        state = users_manager.ApplyFilter(session["users_manager"], role_id)
        listing = users_manager.LoadListing(UsersRepository(db_session), state.filter_role_id)

        context = {
            "show_nav": True,
            "active_page": "users",
            "email": session["email"],
            "users": listing["users"],
            "roles": listing["roles"],
            "state": state
        }

        return templates.TemplateResponse(request, "users.html", context)

    finally:
        db_session.close()


@router.get("/admin/api/users", tags=["Admin"])
async def admin_list_users(
    role_id: str = "",
    session: dict = Depends(RequireAdminSession)
):
    """
    List users (optionally of one role) with the current screen state

    Args:
        role_id: Optional role filter ('' for all users)
        session: Admin session from dependency
    """
    from database import db_manager
    db_session = db_manager.GetSession()

    try:
        state = users_manager.ApplyFilter(session["users_manager"], role_id)
        return BuildStateResponse(state, UsersRepository(db_session))
    finally:
        db_session.close()


# ==================== Edit Role ====================

@router.post("/admin/api/users/{user_id}/edit", tags=["Admin"])
async def admin_edit_user(
    user_id: int,
    session: dict = Depends(RequireAdminSession)
):
    """
    Open the role edit form for a user

    Args:
        user_id: User to edit
        session: Admin session from dependency

    Raises:
        HTTPException: 404 if the user does not exist or is soft-deleted
    """
    from database import db_manager
    db_session = db_manager.GetSession()

    try:
        repository = UsersRepository(db_session)
        state = users_manager.Edit(session["users_manager"], repository, user_id)
        return BuildStateResponse(state, repository)

    except UserNotFoundError:
        raise HTTPException(status_code=404, detail="User not found")
    except HTTPException:
        raise
    except Exception as e:
        logger.error(f"Error opening edit form for user {user_id}: {str(e)}")
        raise HTTPException(status_code=500, detail="Failed to open edit form")
    finally:
        db_session.close()


@router.post("/admin/api/users/role", tags=["Admin"])
async def admin_update_user_role(
    request_data: UpdateUserRoleRequest,
    session: dict = Depends(RequireAdminSession)
):
    """
    Save the role selected in the edit form

    Validation errors come back in state.errors with the form still open.

    Args:
        request_data: Selected role ID
        session: Admin session from dependency
    """
    from database import db_manager
    db_session = db_manager.GetSession()

    try:
        repository = UsersRepository(db_session)
        state = users_manager.UpdateRole(
            session["users_manager"], repository, request_data.selected_role_id
        )
        LogOutcome(session, f"role update to {request_data.selected_role_id!r}", state)
        return BuildStateResponse(state, repository)

    except HTTPException:
        db_session.rollback()
        raise
    except Exception as e:
        db_session.rollback()
        logger.error(f"Error updating user role: {str(e)}")
        raise HTTPException(status_code=500, detail="Failed to update user role")
    finally:
        db_session.close()


# ==================== Delete User ====================

@router.post("/admin/api/users/{user_id}/confirm-delete", tags=["Admin"])
async def admin_confirm_delete(
    user_id: int,
    session: dict = Depends(RequireAdminSession)
):
    """
    Open the delete confirmation for a user

    Args:
        user_id: User to delete
        session: Admin session from dependency
    """
    from database import db_manager
    db_session = db_manager.GetSession()

    try:
        repository = UsersRepository(db_session)
        state = users_manager.ConfirmDelete(session["users_manager"], repository, user_id)
        return BuildStateResponse(state, repository)

    except HTTPException:
        db_session.rollback()
        raise
    except Exception as e:
        db_session.rollback()
        logger.error(f"Error opening delete confirmation for user {user_id}: {str(e)}")
        raise HTTPException(status_code=500, detail="Failed to open delete confirmation")
    finally:
        db_session.close()


@router.post("/admin/api/users/confirm-delete/cancel", tags=["Admin"])
async def admin_cancel_confirm(
    session: dict = Depends(RequireAdminSession)
):
    """Close the delete confirmation"""
    from database import db_manager
    db_session = db_manager.GetSession()

    try:
        state = users_manager.CancelConfirm(session["users_manager"])
        return BuildStateResponse(state, UsersRepository(db_session))
    finally:
        db_session.close()


@router.post("/admin/api/users/confirm-delete", tags=["Admin"])
async def admin_confirm_deletion(
    request_data: ConfirmDeletionRequest,
    session: dict = Depends(RequireAdminSession)
):
    """
    Delete the user under confirmation

    Requires the logged-in admin's own password. Users with report history
    are soft-deleted, all others are removed permanently.

    Args:
        request_data: Admin password typed into the confirmation
        session: Admin session from dependency
    """
    from database import db_manager
    db_session = db_manager.GetSession()

    try:
        repository = UsersRepository(db_session)
        state = session["users_manager"]
        confirming = state.confirming
        target_id = confirming.user_id if confirming else None

        acting_admin = repository.FindUser(session["user_id"])
        state = users_manager.ConfirmDeletion(
            state, repository, acting_admin, request_data.admin_password
        )
        if target_id is not None:
            LogOutcome(session, f"deletion of user {target_id}", state)
        return BuildStateResponse(state, repository)

    except HTTPException:
        db_session.rollback()
        raise
    except Exception as e:
        db_session.rollback()
        logger.error(f"Error deleting user: {str(e)}")
        raise HTTPException(status_code=500, detail="Failed to delete user")
    finally:
        db_session.close()


# ==================== Flash ====================

@router.post("/admin/api/users/flash/hide", tags=["Admin"])
async def admin_hide_flash(
    session: dict = Depends(RequireAdminSession)
):
    """Hide the flash message"""
    from database import db_manager
    db_session = db_manager.GetSession()

    try:
        state = users_manager.HideFlash(session["users_manager"])
        return BuildStateResponse(state, UsersRepository(db_session))
    finally:
        db_session.close()
