# =============================================================================
# app/auth/__init__.py - Authentication Module
# =============================================================================
# Provides JWT-based authentication using Supabase Auth. Admin endpoints
# depend on get_current_user; the public media endpoints do not.
#
# Usage:
#   from app.auth import get_current_user, AuthUser
#
#   @router.get("/admin/links")
#   def list_links(user: AuthUser = Depends(get_current_user)):
#       ...
# =============================================================================

from app.auth.dependencies import decode_token, get_current_user
from app.auth.models import AuthUser, UserResponse

__all__ = [
    "decode_token",
    "get_current_user",
    "AuthUser",
    "UserResponse",
]
