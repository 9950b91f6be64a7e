"""
Security Utilities.

Bearer token handling. Accounts live with the external identity provider;
this service only verifies the tokens it issues and reads the subject.
"""

from datetime import timedelta
from typing import Any

from jose import JWTError, jwt

from cloudnotes.backend.core.config import get_app_config, get_settings
from cloudnotes.backend.core.exceptions import AuthenticationError
from cloudnotes.backend.core.logging import get_logger
from cloudnotes.backend.core.utils import utc_now

logger = get_logger(__name__)


def create_access_token(data: dict[str, Any], expires_delta: timedelta | None = None) -> str:
    """
    Create a signed access token.

    Used by tests and the development tooling; production tokens come
    from the identity provider with the same secret and audience.

    Args:
        data: Payload data to encode, must include "sub" (the user id)
        expires_delta: Optional custom expiration time

    Returns:
        Encoded JWT token
    """
    settings = get_settings()
    jwt_config = get_app_config().security.jwt
    to_encode = data.copy()

    if expires_delta:
        expire = utc_now() + expires_delta
    else:
        expire = utc_now() + timedelta(minutes=jwt_config.access_token_expire_minutes)

    to_encode.update({"exp": expire, "aud": jwt_config.audience})
    return jwt.encode(to_encode, settings.jwt_secret, algorithm=jwt_config.algorithm)


def decode_token(token: str) -> dict[str, Any]:
    """
    Decode and validate a JWT token.

    Raises:
        AuthenticationError: If token is invalid or expired
    """
    settings = get_settings()
    jwt_config = get_app_config().security.jwt
    try:
        return jwt.decode(
            token,
            settings.jwt_secret,
            algorithms=[jwt_config.algorithm],
            audience=jwt_config.audience,
        )
    except JWTError as e:
        logger.warning("Token decode failed", extra={"error": str(e)})
        raise AuthenticationError("Invalid or expired token")


def user_id_from_token(token: str) -> str:
    """
    Return the owning user id (the "sub" claim) of a valid token.

    Raises:
        AuthenticationError: If the token is invalid or has no subject
    """
    payload = decode_token(token)
    subject = payload.get("sub")
    if not subject or not isinstance(subject, str):
        raise AuthenticationError("Token has no subject")
    return subject
