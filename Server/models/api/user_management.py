"""
SalesDesk Server - User Management API Models

Pydantic models for the users manager admin endpoints.
"""

from typing import Optional, Union
from pydantic import BaseModel


class UpdateUserRoleRequest(BaseModel):
    """Request model for submitting the role selected in the edit form"""
    selected_role_id: Optional[Union[int, str]] = None  # Validated by the handler, not here


class ConfirmDeletionRequest(BaseModel):
    """Request model for confirming a deletion with the admin password"""
    admin_password: Optional[str] = None
