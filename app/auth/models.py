# =============================================================================
# app/auth/models.py - Authentication Models
# =============================================================================
# Pydantic models for authentication data.
# =============================================================================

from typing import Optional
from uuid import UUID

from pydantic import BaseModel, ConfigDict


class AuthUser(BaseModel):
    """
    Authenticated admin user extracted from a Supabase JWT.

    This is the minimal user info available from the token itself,
    without querying the database.
    """
    model_config = ConfigDict(frozen=True)

    id: UUID
    email: Optional[str] = None
    role: Optional[str] = None


class UserResponse(BaseModel):
    """Returned by GET /auth/me."""
    id: UUID
    email: Optional[str] = None
    role: Optional[str] = None

    @classmethod
    def from_user(cls, user: AuthUser) -> "UserResponse":
        return cls(id=user.id, email=user.email, role=user.role)
