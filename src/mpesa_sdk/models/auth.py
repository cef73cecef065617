"""Auth-related data models."""

from __future__ import annotations

from datetime import datetime
from pydantic import BaseModel


class TokenResponse(BaseModel):
    """Response from the Daraja OAuth endpoint.

    ``expires_in`` arrives as a string of seconds, e.g. "3599".
    """
    access_token: str
    expires_in: int = 3599


class CachedToken(BaseModel):
    """An access token with its absolute expiry time."""
    token: str
    expires_at: datetime

    model_config = {"frozen": True}


class TokenStatus(BaseModel):
    """Current state of the cached access token."""
    has_token: bool
    is_expired: bool
    expires_at: datetime | None = None
    seconds_remaining: int | None = None
