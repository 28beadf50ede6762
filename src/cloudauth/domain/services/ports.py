"""Interfaces the auth service is wired with.

Repositories, the credential verifier and the token issuer are passed to
``AuthService`` explicitly; these protocols describe what it needs from
each so tests can substitute in-memory fakes.
"""

from collections.abc import Iterable, Sequence
from datetime import datetime
from typing import Protocol

from cloudauth.domain.entities import AuthenticatedIdentity, Member, SkillTag, TokenPair


class DuplicateEmailError(Exception):
    """Raised by a member store when the email is already taken."""

    def __init__(self, email: str) -> None:
        self.email = email
        super().__init__(f"A member with email {email!r} already exists")


class MemberStore(Protocol):
    async def create(self, member: Member, skill_tags: Sequence[SkillTag]) -> Member: ...

    async def get_by_id(self, member_id: str) -> Member | None: ...

    async def get_by_email(self, email: str) -> Member | None: ...

    async def exists_by_email(self, email: str) -> bool: ...

    async def update_last_login(self, member_id: str) -> None: ...


class SkillTagStore(Protocol):
    async def get_by_names(self, names: Iterable[str]) -> list[SkillTag]: ...


class RefreshTokenStore(Protocol):
    async def has_session(self, key: str) -> bool: ...

    async def matches(self, key: str, token: str) -> bool: ...

    async def save(self, key: str, token: str, expires_at: datetime) -> object: ...

    async def replace_if_matches(
        self, key: str, expected_token: str, new_token: str, expires_at: datetime
    ) -> bool: ...

    async def delete_by_key(self, key: str) -> bool: ...


class CredentialVerifier(Protocol):
    async def verify(self, email: str, password: str) -> AuthenticatedIdentity | None: ...


class TokenIssuer(Protocol):
    def create_token_pair(self, identity: AuthenticatedIdentity) -> TokenPair: ...

    def is_valid_refresh_token(self, token: str) -> bool: ...

    def read_identity(self, access_token: str) -> AuthenticatedIdentity | None: ...
