"""
SalesDesk Server - Role Database Model

Role model for the sales areas users are assigned to.
Roles are seeded on first run and are read-only for the users manager.
"""

from datetime import datetime, timezone
from sqlalchemy import Column, Integer, String, DateTime
from sqlalchemy.orm import relationship

from models.database.base import Base

# Slug of the role whose accounts cannot be deleted from the users manager
ADMIN_ROLE_SLUG = "admin"


class Role(Base):
    """
    Roles table - stores role (sales area) definitions
    """
    __tablename__ = "roles"

    role_id = Column(Integer, primary_key=True, autoincrement=True)
    role_name = Column(String, nullable=False)
    slug = Column(String, unique=True, nullable=False)
    description = Column(String, nullable=True)
    created_at = Column(DateTime, nullable=False, default=lambda: datetime.now(timezone.utc))

    # Relationship to users
    users = relationship("User", back_populates="role")

    def IsAdmin(self) -> bool:
        """Check if this is the protected admin role"""
        return self.slug == ADMIN_ROLE_SLUG
