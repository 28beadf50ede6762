"""Expected failures of the auth operations.

``AuthService`` returns these as values instead of raising, so callers
handle every outcome explicitly.
"""

from dataclasses import dataclass, field
from enum import Enum


class AuthErrorCode(str, Enum):
    """Why an auth operation was rejected."""

    DUPLICATE_IDENTITY = "duplicate_identity"
    UNKNOWN_TAG = "unknown_tag"
    INVALID_CREDENTIALS = "invalid_credentials"
    INVALID_REFRESH_TOKEN = "invalid_refresh_token"
    INVALID_ACCESS_TOKEN = "invalid_access_token"
    NO_ACTIVE_SESSION = "no_active_session"
    TOKEN_MISMATCH = "token_mismatch"


@dataclass(frozen=True)
class AuthError:
    """A rejected auth operation.

    Attributes:
        code: Machine-readable reason.
        message: Human-readable message, safe to return to clients.
        details: Extra context, e.g. the unknown tag names.
    """

    code: AuthErrorCode
    message: str
    details: tuple[str, ...] = field(default_factory=tuple)

    @classmethod
    def duplicate_identity(cls) -> "AuthError":
        return cls(AuthErrorCode.DUPLICATE_IDENTITY, "A member with this email already exists")

    @classmethod
    def unknown_tag(cls, names: list[str]) -> "AuthError":
        return cls(
            AuthErrorCode.UNKNOWN_TAG,
            f"Unknown skill tag(s): {', '.join(names)}",
            tuple(names),
        )

    @classmethod
    def invalid_credentials(cls) -> "AuthError":
        return cls(AuthErrorCode.INVALID_CREDENTIALS, "Invalid credentials")

    @classmethod
    def invalid_refresh_token(cls) -> "AuthError":
        return cls(AuthErrorCode.INVALID_REFRESH_TOKEN, "Refresh token is invalid or expired")

    @classmethod
    def invalid_access_token(cls) -> "AuthError":
        return cls(AuthErrorCode.INVALID_ACCESS_TOKEN, "Access token is invalid")

    @classmethod
    def no_active_session(cls) -> "AuthError":
        return cls(AuthErrorCode.NO_ACTIVE_SESSION, "No active session; please log in again")

    @classmethod
    def token_mismatch(cls) -> "AuthError":
        return cls(
            AuthErrorCode.TOKEN_MISMATCH,
            "Refresh token does not match the active session",
        )
