"""Authentication schemas."""

from datetime import datetime

from pydantic import BaseModel, Field


class TokenPayload(BaseModel):
    """Supabase access token payload."""

    sub: str = Field(..., description="Subject (user_id)")
    exp: int = Field(..., description="Expiration timestamp")
    aud: str | None = Field(default=None, description="Audience")
    role: str | None = Field(default=None, description="Supabase role")
    email: str | None = Field(default=None, description="User email")


class AuthUser(BaseModel):
    """Authenticated caller."""

    user_id: str = Field(..., description="User identifier")
    email: str | None = Field(default=None, description="User email")
    role: str | None = Field(default=None, description="Supabase role")


class AuthFailureLog(BaseModel):
    """Auth failure log entry."""

    timestamp: datetime = Field(default_factory=datetime.now)
    reason: str
    token_fragment: str | None = None
    ip_address: str | None = None
    user_agent: str | None = None
