"""Token value objects shared by the issuer and the auth service."""

from dataclasses import dataclass
from datetime import datetime


@dataclass(frozen=True)
class AuthenticatedIdentity:
    """Identity established by credential verification or read from a token.

    Attributes:
        member_id: The member's ID, used as the refresh token session key.
        email: The member's email address.
        role: The member's role name.
    """

    member_id: str
    email: str
    role: str = "user"


@dataclass(frozen=True)
class TokenPair:
    """An access token together with the refresh token issued alongside it.

    Only the refresh token is persisted (as a hash); the pair itself is
    handed to the caller and forgotten.
    """

    access_token: str
    refresh_token: str
    access_token_expires_at: datetime
    refresh_token_expires_at: datetime
    expires_in: int
    grant_type: str = "Bearer"
