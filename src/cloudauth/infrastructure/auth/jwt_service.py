"""JWT token service.

Issues and validates the signed access/refresh token pairs handed out on
login and reissue. Both token kinds carry the member ID as ``sub`` and an
explicit ``type`` claim so one cannot be used in place of the other.
"""

import uuid
from datetime import datetime, timedelta, timezone
from typing import Any

import jwt

from cloudauth.core.config import get_settings
from cloudauth.domain.entities import AuthenticatedIdentity, TokenPair


class JWTError(Exception):
    """Base exception for JWT-related errors."""

    pass


class TokenExpiredError(JWTError):
    """Raised when a token has expired."""

    pass


class InvalidTokenError(JWTError):
    """Raised when a token is invalid."""

    pass


class JWTService:
    """Service for creating and validating JWT tokens."""

    ALGORITHM = "HS256"
    ISSUER = "cloudauth"

    def __init__(
        self,
        secret_key: str | None = None,
        access_token_ttl: timedelta | None = None,
        refresh_token_ttl: timedelta | None = None,
    ) -> None:
        """Initialize the JWT service.

        Args:
            secret_key: Secret key for signing tokens. Defaults to the
                configured secret key.
            access_token_ttl: Access token lifetime. Defaults to config value.
            refresh_token_ttl: Refresh token lifetime. Defaults to config value.
        """
        self._secret_key = secret_key
        self._access_token_ttl = access_token_ttl
        self._refresh_token_ttl = refresh_token_ttl

    @property
    def secret_key(self) -> str:
        if self._secret_key:
            return self._secret_key
        return get_settings().secret_key

    @property
    def access_token_ttl(self) -> timedelta:
        if self._access_token_ttl is not None:
            return self._access_token_ttl
        return timedelta(minutes=get_settings().access_token_expire_minutes)

    @property
    def refresh_token_ttl(self) -> timedelta:
        if self._refresh_token_ttl is not None:
            return self._refresh_token_ttl
        return timedelta(days=get_settings().refresh_token_expire_days)

    def create_access_token(
        self,
        identity: AuthenticatedIdentity,
        expires_delta: timedelta | None = None,
    ) -> tuple[str, datetime]:
        """Create an access token.

        Args:
            identity: The member the token is issued to.
            expires_delta: Custom expiration time. Defaults to config value.

        Returns:
            Tuple of (encoded JWT access token, expiry timestamp).
        """
        now = datetime.now(timezone.utc)
        expire = now + (expires_delta if expires_delta is not None else self.access_token_ttl)

        payload = {
            "iss": self.ISSUER,
            "sub": identity.member_id,
            "iat": now,
            "exp": expire,
            "jti": str(uuid.uuid4()),
            "member_id": identity.member_id,
            "email": identity.email,
            "role": identity.role,
            "type": "access",
        }
        return jwt.encode(payload, self.secret_key, algorithm=self.ALGORITHM), expire

    def create_refresh_token(
        self,
        member_id: str,
        expires_delta: timedelta | None = None,
    ) -> tuple[str, datetime]:
        """Create a refresh token.

        Args:
            member_id: The member's unique identifier.
            expires_delta: Custom expiration time. Defaults to config value.

        Returns:
            Tuple of (encoded JWT refresh token, expiry timestamp).
        """
        now = datetime.now(timezone.utc)
        expire = now + (expires_delta if expires_delta is not None else self.refresh_token_ttl)

        payload = {
            "iss": self.ISSUER,
            "sub": member_id,
            "iat": now,
            "exp": expire,
            "jti": str(uuid.uuid4()),
            "type": "refresh",
        }
        return jwt.encode(payload, self.secret_key, algorithm=self.ALGORITHM), expire

    def create_token_pair(self, identity: AuthenticatedIdentity) -> TokenPair:
        """Issue a fresh access/refresh token pair for ``identity``."""
        access_token, access_expires_at = self.create_access_token(identity)
        refresh_token, refresh_expires_at = self.create_refresh_token(identity.member_id)
        return TokenPair(
            access_token=access_token,
            refresh_token=refresh_token,
            access_token_expires_at=access_expires_at,
            refresh_token_expires_at=refresh_expires_at,
            expires_in=self.get_expires_in(),
        )

    def decode_token(self, token: str, verify_expiry: bool = True) -> dict[str, Any]:
        """Decode and validate a JWT token.

        Args:
            token: The encoded JWT token.
            verify_expiry: Whether an expired token is rejected. The
                signature and issuer are always checked.

        Returns:
            Decoded token payload.

        Raises:
            TokenExpiredError: If the token has expired.
            InvalidTokenError: If the token is invalid.
        """
        try:
            return jwt.decode(
                token,
                self.secret_key,
                algorithms=[self.ALGORITHM],
                issuer=self.ISSUER,
                options={"verify_exp": verify_expiry, "require": ["sub", "exp", "type"]},
            )
        except jwt.ExpiredSignatureError as e:
            raise TokenExpiredError("Token has expired") from e
        except jwt.InvalidTokenError as e:
            raise InvalidTokenError("Invalid token") from e

    def validate_refresh_token(self, token: str) -> dict[str, Any]:
        """Validate that a token is an unexpired refresh token and decode it.

        Raises:
            TokenExpiredError: If the token has expired.
            InvalidTokenError: If the token is invalid or not a refresh token.
        """
        payload = self.decode_token(token)
        if payload.get("type") != "refresh":
            raise InvalidTokenError("Not a refresh token")
        return payload

    def validate_access_token(self, token: str, verify_expiry: bool = True) -> dict[str, Any]:
        """Validate that a token is an access token and decode it.

        Raises:
            TokenExpiredError: If the token has expired and ``verify_expiry`` is set.
            InvalidTokenError: If the token is invalid or not an access token.
        """
        payload = self.decode_token(token, verify_expiry=verify_expiry)
        if payload.get("type") != "access":
            raise InvalidTokenError("Not an access token")
        return payload

    def get_identity(self, access_token: str, verify_expiry: bool = False) -> AuthenticatedIdentity:
        """Read the identity out of an access token.

        Expiry is not checked by default: reissue is exactly the moment a
        client presents an access token that has run out.

        Raises:
            InvalidTokenError: If the signature, issuer, type or claims are bad.
            TokenExpiredError: Only when ``verify_expiry`` is set.
        """
        payload = self.validate_access_token(access_token, verify_expiry=verify_expiry)
        try:
            return AuthenticatedIdentity(
                member_id=payload["sub"],
                email=payload["email"],
                role=payload.get("role", "user"),
            )
        except KeyError as e:
            raise InvalidTokenError(f"Missing claim: {e}") from e

    def is_valid_refresh_token(self, token: str) -> bool:
        """Return True if ``token`` is a well-signed, unexpired refresh token."""
        try:
            self.validate_refresh_token(token)
        except JWTError:
            return False
        return True

    def read_identity(self, access_token: str) -> AuthenticatedIdentity | None:
        """Like ``get_identity`` but returns None instead of raising."""
        try:
            return self.get_identity(access_token)
        except JWTError:
            return None

    def get_expires_in(self, expires_delta: timedelta | None = None) -> int:
        """Get the access token lifetime in seconds."""
        if expires_delta is None:
            expires_delta = self.access_token_ttl
        return int(expires_delta.total_seconds())


# Default JWT service instance
jwt_service = JWTService()
