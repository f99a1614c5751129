# =============================================================================
# app/auth/models.py - Authentication Models
# =============================================================================
# Pydantic models for authentication data.
# =============================================================================

from pydantic import BaseModel, ConfigDict


class AuthUser(BaseModel):
    """
    Authenticated caller extracted from a bearer JWT.

    Built once per request by get_current_user() and passed explicitly to
    every handler that needs it.
    """
    id: str
    email: str | None = None

    model_config = ConfigDict(frozen=True)


class TokenPayload(BaseModel):
    """
    Decoded JWT claims the API relies on.

    Only `sub` is mandatory; it becomes AuthUser.id. Expiry and audience
    are checked by jose before this model is built; other claims are ignored.
    """
    sub: str
    email: str | None = None

    model_config = ConfigDict(extra="ignore")
