"""Bearer token authentication for FastAPI.

Tokens are Supabase access tokens (HS256, audience ``authenticated``) verified
locally with the project's JWT secret. Failures raise AuthenticationError,
which the app renders as 401 ``{error}``.
"""

import logging
from datetime import UTC, datetime, timedelta

from fastapi import Depends, Request
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from jose import ExpiredSignatureError, JWTError, jwt

from seogen.api import config
from seogen.api.core.errors import AuthenticationError

from .schemas import AuthFailureLog, AuthUser, TokenPayload

logger = logging.getLogger(__name__)

DEV_USER_ID = "dev-user-001"

security = HTTPBearer(auto_error=False)


def create_access_token(
    user_id: str,
    email: str | None = None,
    expires_delta: timedelta | None = None,
) -> str:
    """Issue a token in the Supabase format (local tooling and tests)."""
    expire = datetime.now(UTC) + (expires_delta or timedelta(hours=1))
    payload = TokenPayload(
        sub=user_id,
        exp=int(expire.timestamp()),
        aud=config.JWT_AUDIENCE,
        role="authenticated",
        email=email,
    )
    return str(
        jwt.encode(
            payload.model_dump(exclude_none=True),
            config.SUPABASE_JWT_SECRET,
            algorithm=config.JWT_ALGORITHM,
        )
    )


def verify_token(token: str) -> TokenPayload:
    """Verify a bearer token.

    Raises:
        AuthenticationError: Signature, audience or expiry check failed
    """
    try:
        payload = jwt.decode(
            token,
            config.SUPABASE_JWT_SECRET,
            algorithms=[config.JWT_ALGORITHM],
            audience=config.JWT_AUDIENCE,
        )
    except ExpiredSignatureError as e:
        raise AuthenticationError("Invalid authentication", reason="token_expired") from e
    except JWTError as e:
        raise AuthenticationError("Invalid authentication", reason="invalid_token") from e

    try:
        return TokenPayload(**payload)
    except ValueError as e:
        raise AuthenticationError("Invalid authentication", reason="invalid_payload") from e


def log_auth_failure(
    request: Request,
    reason: str,
    token_fragment: str | None = None,
) -> None:
    """Log an auth failure with a truncated token fragment only."""
    log_entry = AuthFailureLog(
        reason=reason,
        token_fragment=token_fragment[:10] if token_fragment else None,
        ip_address=request.client.host if request.client else None,
        user_agent=request.headers.get("user-agent"),
    )
    logger.warning(
        f"Auth failure: {reason}",
        extra={"auth_failure": log_entry.model_dump(mode="json")},
    )


async def get_current_user(
    request: Request,
    credentials: HTTPAuthorizationCredentials | None = Depends(security),
) -> AuthUser:
    """Resolve the caller from ``Authorization: Bearer <token>``.

    Development mode skips verification and returns a fixed user.
    """
    if config.SKIP_AUTH:
        return AuthUser(user_id=DEV_USER_ID, role="authenticated")

    if credentials is None or not credentials.credentials:
        log_auth_failure(request, "missing_credentials")
        raise AuthenticationError("Authentication required", reason="missing_credentials")

    try:
        token_data = verify_token(credentials.credentials)
    except AuthenticationError as e:
        log_auth_failure(request, e.reason, credentials.credentials)
        raise

    return AuthUser(user_id=token_data.sub, email=token_data.email, role=token_data.role)
