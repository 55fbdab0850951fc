"""
SalesDesk Server - Admin Authentication Endpoints

This module contains admin web interface authentication endpoints:
login, logout and the session dependencies used by the other admin routes.
"""

import logging
from typing import Optional
from pathlib import Path
from fastapi import APIRouter, HTTPException, status, Request, Form
from fastapi.responses import HTMLResponse, RedirectResponse
from fastapi.templating import Jinja2Templates

from models.database import User, ADMIN_ROLE_SLUG
from auth import AuthenticateUser
from admin_sessions import (
    CreateSession, GetSession, DeleteSession,
    SESSION_COOKIE_NAME, SESSION_LIFETIME_HOURS
)


# Create logger
logger = logging.getLogger(__name__)

# Create router instance
router = APIRouter()

# Get the directory where server.py is located
script_dir = Path(__file__).parent.parent.parent

# Initialize Jinja2 templates
templates = Jinja2Templates(directory=str(script_dir / "templates"))


# ==================== Helper Functions ====================

def GetAdminSession(request: Request) -> Optional[dict]:
    """
    Dependency to get admin session from cookie
    Returns session info or None if not logged in
    """
    session_id = request.cookies.get(SESSION_COOKIE_NAME)
    if not session_id:
        return None

    session = GetSession(session_id)
    if not session:
        return None

    return {
        "session_id": session.session_id,
        "user_id": session.user_id,
        "email": session.email,
        "users_manager": session.users_manager
    }


def RequireAdminSession(request: Request) -> dict:
    """
    Dependency to require a session whose user still holds the admin role
    """
    from database import db_manager

    session = GetAdminSession(request)
    if not session:
        raise HTTPException(
            status_code=status.HTTP_303_SEE_OTHER,
            detail="Not authenticated",
            headers={"Location": "/admin/login"}
        )

    db_session = db_manager.GetSession()
    try:
        user = db_session.query(User).filter(
            User.user_id == session['user_id'],
            User.deleted_at.is_(None)
        ).first()
        if not user:
            raise HTTPException(
                status_code=status.HTTP_401_UNAUTHORIZED,
                detail="User not found"
            )

        if not user.role or not user.role.IsAdmin():
            raise HTTPException(
                status_code=status.HTTP_403_FORBIDDEN,
                detail="Admin permission required"
            )

        return session

    finally:
        db_session.close()


# ==================== Admin Authentication Endpoints ====================

@router.get("/admin", response_class=RedirectResponse, tags=["Admin"])
async def admin_root(request: Request):
    """Redirect /admin to the users page or the login page"""
    if not GetAdminSession(request):
        return RedirectResponse(url="/admin/login", status_code=303)
    return RedirectResponse(url="/admin/users", status_code=303)


@router.get("/admin/login", response_class=HTMLResponse, tags=["Admin"])
async def admin_login_page(request: Request):
    """
    Display admin login page

    Returns:
        HTML login form
    """
    if GetAdminSession(request):
        return RedirectResponse(url="/admin/users", status_code=303)

    return templates.TemplateResponse(
        request,
        "login.html",
        {"show_nav": False, "error": None}
    )


@router.post("/admin/login", response_class=HTMLResponse, tags=["Admin"])
async def admin_login_submit(
    request: Request,
    email: str = Form(...),
    password: str = Form(...)
):
    """
    Process admin login form submission

    Args:
        email: Email from form
        password: Password from form

    Returns:
        Redirect to the users page on success, login form with error on failure
    """
    from database import db_manager

    user = AuthenticateUser(db_manager, email, password)

    if not user or user['role_slug'] != ADMIN_ROLE_SLUG:
        logger.info(f"Rejected admin login for '{email}'")
        return templates.TemplateResponse(
            request,
            "login.html",
            {"show_nav": False, "error": "Invalid email or password"}
        )

    session = CreateSession(user['user_id'], user['email'])

    response = RedirectResponse(url="/admin/users", status_code=303)
    response.set_cookie(
        key=SESSION_COOKIE_NAME,
        value=session.session_id,
        max_age=SESSION_LIFETIME_HOURS * 3600,
        httponly=True,
        samesite="lax"
    )

    return response


@router.post("/admin/logout", tags=["Admin"])
@router.get("/admin/logout", tags=["Admin"])
async def admin_logout(request: Request):
    """
    Logout endpoint - clears session and redirects to login page
    Supports both GET and POST methods
    """
    session = GetAdminSession(request)
    if session:
        DeleteSession(session['session_id'])

    response = RedirectResponse(url="/admin/login", status_code=303)
    response.delete_cookie(
        key=SESSION_COOKIE_NAME,
        path="/",
        samesite="lax"
    )

    return response
