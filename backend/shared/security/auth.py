"""
Authentication utilities.

Staff sessions are issued by the external identity provider as HS256 JWTs.
This module verifies them and exposes the claims; it does not log anyone in.

Claims carried by a staff token:
    sub              principal id (integer string)
    role             super_admin | org_admin | manager | server | kitchen | cashier
    organization_id  optional, meaningful for org-scoped roles
    restaurant_id    optional, meaningful for restaurant-scoped roles
    email            optional
"""

from __future__ import annotations

import time
import uuid
from typing import Any

import jwt
from fastapi import Header

from shared.config.constants import Role
from shared.config.settings import (
    JWT_SECRET,
    JWT_ISSUER,
    JWT_AUDIENCE,
    settings,
)
from shared.config.logging import get_logger
from shared.utils.exceptions import AuthenticationError

logger = get_logger(__name__)

_VALID_ROLES = {role.value for role in Role}


def sign_jwt(
    payload: dict[str, Any],
    ttl_seconds: int | None = None,
) -> str:
    """
    Sign a staff JWT with the given claims.

    Used by the CLI and the test-suite to mint tokens the way the identity
    provider does.

    Args:
        payload: Claims to include (sub, role, organization_id, restaurant_id, email).
        ttl_seconds: Token lifetime in seconds. Defaults to access token expiry.

    Returns:
        Signed JWT token string.
    """
    if ttl_seconds is None:
        ttl_seconds = settings.jwt_access_token_expire_minutes * 60

    now = int(time.time())
    data = {
        **payload,
        "iss": JWT_ISSUER,
        "aud": JWT_AUDIENCE,
        "iat": now,
        "exp": now + ttl_seconds,
        "type": "access",
        "jti": str(uuid.uuid4()),
    }
    return jwt.encode(data, JWT_SECRET, algorithm="HS256")


def _optional_int_claim(payload: dict[str, Any], claim: str) -> None:
    value = payload.get(claim)
    if value is None:
        return
    if isinstance(value, bool) or not isinstance(value, (int, str)):
        raise AuthenticationError(f"Invalid token: malformed {claim} claim", reason="invalid_token")
    try:
        int(value)
    except ValueError:
        raise AuthenticationError(f"Invalid token: malformed {claim} claim", reason="invalid_token")


def verify_jwt(token: str) -> dict[str, Any]:
    """
    Verify and decode a staff JWT.

    Validates signature, expiry, issuer, audience and the shape of the
    tenant claims.

    Returns:
        Decoded token claims.

    Raises:
        AuthenticationError: If token is invalid or expired.
    """
    try:
        payload = jwt.decode(
            token,
            JWT_SECRET,
            algorithms=["HS256"],
            audience=JWT_AUDIENCE,
            issuer=JWT_ISSUER,
        )
    except jwt.ExpiredSignatureError:
        raise AuthenticationError("Token has expired", reason="token_expired")
    except jwt.InvalidTokenError as e:
        # Log the actual error, return a generic message to the client
        logger.warning("JWT validation failed", error=str(e))
        raise AuthenticationError("Invalid token", reason="invalid_token")

    if "sub" not in payload:
        raise AuthenticationError("Invalid token: missing subject claim", reason="invalid_token")

    try:
        int(payload["sub"])
    except (ValueError, TypeError):
        raise AuthenticationError("Invalid token: malformed subject claim", reason="invalid_token")

    role = payload.get("role")
    if role is not None and role not in _VALID_ROLES:
        raise AuthenticationError("Invalid token: unknown role claim", reason="invalid_token")

    _optional_int_claim(payload, "organization_id")
    _optional_int_claim(payload, "restaurant_id")

    return payload


def get_bearer_token(authorization: str | None) -> str:
    """
    Extract bearer token from Authorization header.

    Raises:
        AuthenticationError: If header is missing or malformed.
    """
    if not authorization:
        raise AuthenticationError("Missing Authorization header")
    if not authorization.startswith("Bearer "):
        raise AuthenticationError(
            "Invalid Authorization header format. Expected: Bearer <token>",
            reason="invalid_token",
        )
    return authorization.split(" ", 1)[1].strip()


def current_user_context(
    authorization: str | None = Header(default=None, alias="Authorization"),
) -> dict[str, Any]:
    """
    FastAPI dependency to get the verified claims of the calling principal.

    Usage:
        @router.get("/protected")
        def protected_endpoint(ctx: dict = Depends(current_user_context)):
            role = ctx.get("role")
    """
    token = get_bearer_token(authorization)
    return verify_jwt(token)
