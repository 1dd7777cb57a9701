"""Bearer token authentication."""

from dataclasses import dataclass
from typing import Optional

import jwt
from fastapi import Header, Request

from common.logging_config import get_logger
from controller.config import JWT_ALGORITHM, JWT_SECRET
from controller.exceptions import AuthenticationError

logger = get_logger(__name__)

MISSING_HEADER_MESSAGE = "Missing or invalid authorization header"
INVALID_TOKEN_MESSAGE = "Invalid or expired token"


@dataclass(frozen=True)
class AuthenticatedUser:
    """Identity carried by a verified token."""
    user_id: str
    email: str


def decode_token(token: str) -> AuthenticatedUser:
    """
    Verify a JWT and extract the user identity.

    Bad signatures, expired tokens and malformed payloads all raise the
    same error so callers cannot tell them apart.

    Raises:
        AuthenticationError: If the token cannot be trusted
    """
    if not JWT_SECRET:
        logger.error("JWT secret is not configured, rejecting token")
        raise AuthenticationError(INVALID_TOKEN_MESSAGE)

    try:
        payload = jwt.decode(token, JWT_SECRET, algorithms=[JWT_ALGORITHM])
    except jwt.InvalidTokenError as e:
        logger.debug(f"Token rejected: {type(e).__name__}")
        raise AuthenticationError(INVALID_TOKEN_MESSAGE)

    user_id = payload.get("userId")
    if not isinstance(user_id, str) or not user_id:
        raise AuthenticationError(INVALID_TOKEN_MESSAGE)

    return AuthenticatedUser(user_id=user_id, email=str(payload.get("email", "")))


async def get_current_user(
    request: Request,
    authorization: Optional[str] = Header(None),
) -> AuthenticatedUser:
    """
    FastAPI dependency to validate the bearer token and extract the user.

    Args:
        authorization: Authorization header value (format: "Bearer <jwt>")

    Returns:
        The authenticated user

    Raises:
        AuthenticationError: If the header is missing or the token is invalid
    """
    if not authorization or not authorization.startswith("Bearer "):
        raise AuthenticationError(MISSING_HEADER_MESSAGE)

    token = authorization[len("Bearer "):].strip()
    if not token:
        raise AuthenticationError(MISSING_HEADER_MESSAGE)

    user = decode_token(token)
    request.state.user_id = user.user_id
    return user
