# =============================================================================
# app/auth/routes.py - Authentication Routes
# =============================================================================
# Signup/login is handled by Supabase Auth client-side. These routes let the
# admin UI check who a token belongs to.
# =============================================================================

from fastapi import APIRouter, Depends

from app.auth.dependencies import get_current_user
from app.auth.models import AuthUser, UserResponse

router = APIRouter(prefix="/auth", tags=["Auth"])


@router.get("/me", response_model=UserResponse)
async def get_current_user_info(
    user: AuthUser = Depends(get_current_user)
) -> UserResponse:
    """
    Identity of the authenticated admin, read from the token.

    Raises:
        401: If not authenticated
    """
    return UserResponse.from_user(user)


@router.get("/verify")
async def verify_token(
    user: AuthUser = Depends(get_current_user)
) -> dict:
    """Confirm that a stored token is still valid."""
    return {
        "valid": True,
        "user_id": str(user.id),
        "email": user.email,
    }
