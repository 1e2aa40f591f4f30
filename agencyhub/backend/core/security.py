"""
Security Utilities.

Password hashing and JWT token handling.
"""

from datetime import timedelta
from typing import Any

import bcrypt
from jose import JWTError, jwt

from agencyhub.backend.core.config import get_app_config, get_settings
from agencyhub.backend.core.exceptions import AuthenticationError
from agencyhub.backend.core.logging import get_logger
from agencyhub.backend.core.utils import utc_now

logger = get_logger(__name__)

ACCESS_TOKEN = "access"
REFRESH_TOKEN = "refresh"


def hash_password(password: str) -> str:
    """Hash a password using bcrypt."""
    password_bytes = password.encode("utf-8")
    salt = bcrypt.gensalt()
    return bcrypt.hashpw(password_bytes, salt).decode("utf-8")


def verify_password(plain_password: str, hashed_password: str) -> bool:
    """Verify a password against its hash. Malformed hashes never verify."""
    try:
        return bcrypt.checkpw(
            plain_password.encode("utf-8"),
            hashed_password.encode("utf-8"),
        )
    except ValueError:
        logger.warning("Password hash is malformed")
        return False


def _encode(data: dict[str, Any], token_type: str, expire_delta: timedelta) -> str:
    settings = get_settings()
    jwt_config = get_app_config().security.jwt
    to_encode = data.copy()
    to_encode.update({
        "exp": utc_now() + expire_delta,
        "type": token_type,
        "aud": jwt_config.audience,
    })
    return jwt.encode(to_encode, settings.jwt_secret, algorithm=jwt_config.algorithm)


def create_access_token(data: dict[str, Any], expires_delta: timedelta | None = None) -> str:
    """
    Create a JWT access token.

    Args:
        data: Payload data to encode (``sub`` is the user id)
        expires_delta: Optional custom expiration time

    Returns:
        Encoded JWT token
    """
    jwt_config = get_app_config().security.jwt
    delta = expires_delta or timedelta(minutes=jwt_config.access_token_expire_minutes)
    return _encode(data, ACCESS_TOKEN, delta)


def create_refresh_token(data: dict[str, Any]) -> str:
    """Create a JWT refresh token."""
    jwt_config = get_app_config().security.jwt
    return _encode(data, REFRESH_TOKEN, timedelta(days=jwt_config.refresh_token_expire_days))


def decode_token(token: str, expected_type: str | None = None) -> dict[str, Any]:
    """
    Decode and validate a JWT token.

    Args:
        token: JWT token string
        expected_type: "access" or "refresh"; checked when given

    Returns:
        Decoded token payload

    Raises:
        AuthenticationError: If token is invalid, expired or of the wrong type
    """
    settings = get_settings()
    jwt_config = get_app_config().security.jwt
    try:
        payload = jwt.decode(
            token,
            settings.jwt_secret,
            algorithms=[jwt_config.algorithm],
            audience=jwt_config.audience,
        )
    except JWTError as e:
        logger.warning("Token decode failed", extra={"error": str(e)})
        raise AuthenticationError("Invalid or expired token")

    if expected_type is not None and payload.get("type") != expected_type:
        logger.warning(
            "Token type mismatch",
            extra={"expected": expected_type, "actual": payload.get("type")},
        )
        raise AuthenticationError("Invalid or expired token")

    return payload
