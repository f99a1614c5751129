# =============================================================================
# app/auth/routes.py - Authentication Routes
# =============================================================================
# Tokens are issued by the identity provider, not by this API.
# This route only lets a client check a token it already holds.
# =============================================================================

from fastapi import APIRouter, Depends

from app.auth.dependencies import get_current_user
from app.auth.models import AuthUser

router = APIRouter()


@router.get("/verify")
async def verify_token(
    user: AuthUser = Depends(get_current_user)
) -> dict:
    """
    Verify that the current token is valid.

    Returns:
        dict: Confirmation with user_id

    Raises:
        401: If token is invalid or expired
    """
    return {
        "valid": True,
        "user_id": user.id,
        "email": user.email
    }
