"""
Tests for staff token verification.
"""

import time

import jwt
import pytest

from rest_api.services.permissions import Principal
from shared.config.constants import Role
from shared.config.settings import JWT_AUDIENCE, JWT_ISSUER, JWT_SECRET
from shared.security.auth import get_bearer_token, sign_jwt, verify_jwt
from shared.utils.exceptions import AuthenticationError


class TestVerifyJwt:
    """Signature, expiry and claim shape."""

    def test_round_trip_claims(self):
        token = sign_jwt({"sub": "7", "role": "manager", "restaurant_id": 10})
        claims = verify_jwt(token)

        assert claims["sub"] == "7"
        assert claims["role"] == "manager"
        assert claims["restaurant_id"] == 10
        assert claims["iss"] == JWT_ISSUER

    def test_expired_token(self):
        token = sign_jwt({"sub": "7", "role": "server"}, ttl_seconds=-10)
        with pytest.raises(AuthenticationError) as exc_info:
            verify_jwt(token)
        assert exc_info.value.status_code == 401
        assert exc_info.value.reason == "token_expired"

    def test_wrong_signature(self):
        now = int(time.time())
        token = jwt.encode(
            {"sub": "7", "iss": JWT_ISSUER, "aud": JWT_AUDIENCE, "iat": now, "exp": now + 60},
            "some-other-secret-that-is-long-enough",
            algorithm="HS256",
        )
        with pytest.raises(AuthenticationError) as exc_info:
            verify_jwt(token)
        assert exc_info.value.reason == "invalid_token"

    def test_wrong_audience(self):
        now = int(time.time())
        token = jwt.encode(
            {"sub": "7", "iss": JWT_ISSUER, "aud": "someone-else", "iat": now, "exp": now + 60},
            JWT_SECRET,
            algorithm="HS256",
        )
        with pytest.raises(AuthenticationError):
            verify_jwt(token)

    @pytest.mark.parametrize(
        "claims",
        [
            {"role": "server"},
            {"sub": "abc", "role": "server"},
            {"sub": "7", "role": "owner"},
            {"sub": "7", "role": "server", "restaurant_id": "ten"},
            {"sub": "7", "role": "org_admin", "organization_id": True},
        ],
    )
    def test_malformed_claims(self, claims):
        with pytest.raises(AuthenticationError) as exc_info:
            verify_jwt(sign_jwt(claims))
        assert exc_info.value.reason == "invalid_token"


class TestBearerToken:

    def test_extracts_token(self):
        assert get_bearer_token("Bearer abc.def") == "abc.def"

    def test_missing_header(self):
        with pytest.raises(AuthenticationError) as exc_info:
            get_bearer_token(None)
        assert exc_info.value.reason == "authentication_required"

    def test_wrong_scheme(self):
        with pytest.raises(AuthenticationError):
            get_bearer_token("Basic dXNlcjpwYXNz")


class TestPrincipalFromToken:

    def test_string_tenant_claims_become_ints(self):
        claims = verify_jwt(sign_jwt({"sub": "3", "role": "cashier", "restaurant_id": "12"}))
        principal = Principal.from_claims(claims)

        assert principal.id == 3
        assert principal.role is Role.CASHIER
        assert principal.restaurant_id == 12
        assert principal.organization_id is None
