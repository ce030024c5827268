"""Bearer token authentication for the feed API.

Tokens are validated either by the auth service's introspection endpoint
or locally as HS-signed JWTs, depending on OAUTH2_INTROSPECTION_ENABLED.
The token subject is the profile whose feed the request reads.
"""

import hashlib
from typing import Any
from uuid import UUID

from django.conf import settings
from django.core.cache import cache

import jwt
import requests
import structlog
from pydantic import BaseModel, Field, ValidationError
from rest_framework import authentication, exceptions

logger = structlog.get_logger(__name__)

FEED_READ_SCOPES = ("notification:user", "notification:admin")
JWT_ALGORITHMS = ["HS256", "HS384", "HS512"]
ACCESS_TOKEN_TYPE = "access_token"


class TokenClaims(BaseModel):
    """The subset of token claims the feed relies on."""

    active: bool = True
    sub: str | None = None
    client_id: str | None = None
    scopes: list[str] = Field(default_factory=list)


class OAuth2User:
    """Authenticated caller built from token claims (not a Django user)."""

    is_authenticated = True

    def __init__(self, user_id: str, client_id: str, scopes: list[str]):
        self.id = user_id
        self.user_id = user_id
        self.client_id = client_id
        self.scopes = scopes

    @classmethod
    def from_claims(cls, claims: TokenClaims) -> "OAuth2User":
        return cls(
            user_id=claims.sub or claims.client_id or "unknown",
            client_id=claims.client_id or "unknown",
            scopes=claims.scopes,
        )

    def has_scope(self, scope: str) -> bool:
        return scope in self.scopes

    def has_any_scope(self, scopes: tuple[str, ...] = FEED_READ_SCOPES) -> bool:
        """Whether the token grants any of `scopes` (the feed scopes by default)."""
        return any(scope in self.scopes for scope in scopes)

    @property
    def profile_id(self) -> UUID:
        """The token subject as a profile UUID.

        Raises:
            AuthenticationFailed: If the subject is not a UUID, e.g. for a
                client_credentials token.
        """
        try:
            return UUID(str(self.user_id))
        except ValueError as e:
            raise exceptions.AuthenticationFailed(
                "Token subject is not a valid user id"
            ) from e

    def __str__(self):
        return f"OAuth2User(user_id={self.user_id}, client_id={self.client_id})"


def _bearer_token(request) -> str | None:
    header = request.headers.get("authorization")
    if not header:
        return None
    scheme, _, token = header.partition(" ")
    if scheme.lower() != "bearer" or not token or " " in token.strip():
        raise exceptions.AuthenticationFailed("Invalid authorization header format")
    return token.strip()


def _parse_claims(data: dict[str, Any]) -> TokenClaims:
    try:
        return TokenClaims.model_validate(data)
    except ValidationError as e:
        logger.warning("Token claims have unexpected shape", errors=e.errors())
        raise exceptions.AuthenticationFailed("Invalid token claims") from e


class OAuth2Authentication(authentication.BaseAuthentication):
    """DRF authentication class for `Authorization: Bearer <token>`."""

    def authenticate(self, request):
        """Return (OAuth2User, token), or None when no token was sent.

        Raises:
            AuthenticationFailed: If the token is malformed or rejected.
        """
        if not settings.OAUTH2_SERVICE_ENABLED:
            return None

        token = _bearer_token(request)
        if token is None:
            return None

        if settings.OAUTH2_INTROSPECTION_ENABLED:
            claims = self._introspect(token)
        else:
            claims = self._decode_jwt(token)

        return (OAuth2User.from_claims(claims), token)

    def authenticate_header(self, _request):
        return "Bearer"

    def _introspect(self, token: str) -> TokenClaims:
        """Ask the auth service about an opaque token, caching active results."""
        digest = hashlib.sha256(token.encode()).hexdigest()
        cache_key = f"{settings.OAUTH2_TOKEN_CACHE_PREFIX}{digest}"
        cached = cache.get(cache_key)
        if cached is not None:
            return _parse_claims(cached)

        try:
            response = requests.post(
                settings.OAUTH2_INTROSPECT_URL,
                data={"token": token, "token_type_hint": ACCESS_TOKEN_TYPE},
                auth=(settings.OAUTH2_CLIENT_ID, settings.OAUTH2_CLIENT_SECRET),
                timeout=5,
            )
        except requests.RequestException as e:
            logger.error("Token introspection request failed", error=str(e))
            raise exceptions.AuthenticationFailed(
                "Token validation service unavailable"
            ) from e

        if response.status_code != 200:
            logger.warning(
                "Token introspection failed", status_code=response.status_code
            )
            raise exceptions.AuthenticationFailed("Token introspection failed")

        data = response.json()
        claims = _parse_claims(data)
        if not claims.active:
            logger.info("Token is not active")
            raise exceptions.AuthenticationFailed("Token is not active")

        cache.set(cache_key, data, timeout=settings.OAUTH2_TOKEN_CACHE_TTL)
        return claims

    def _decode_jwt(self, token: str) -> TokenClaims:
        """Verify a JWT access token with the shared secret."""
        if not settings.JWT_SECRET:
            logger.error("JWT_SECRET not configured but local validation is enabled")
            raise exceptions.AuthenticationFailed("JWT validation not configured")

        try:
            payload = jwt.decode(
                token,
                settings.JWT_SECRET,
                algorithms=JWT_ALGORITHMS,
                options={"require": ["exp"]},
            )
        except jwt.ExpiredSignatureError as e:
            logger.info("JWT token has expired")
            raise exceptions.AuthenticationFailed("Token has expired") from e
        except jwt.InvalidTokenError as e:
            logger.warning("Invalid JWT token", error=str(e))
            raise exceptions.AuthenticationFailed("Invalid token") from e

        token_type = payload.get("type")
        if token_type != ACCESS_TOKEN_TYPE:
            logger.warning("Invalid token type", token_type=token_type)
            raise exceptions.AuthenticationFailed(f"Invalid token type: {token_type}")

        return _parse_claims(payload)
