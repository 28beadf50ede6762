"""Signup, login and refresh-token rotation.

``AuthService`` composes the member, skill tag and refresh token stores
with a credential verifier and a token issuer. Expected failures come
back as ``AuthError`` values; the caller commits the session only when an
operation succeeds.

Refresh tokens are rotated on every reissue. The stored value is swapped
with a compare-and-swap, so when two requests present the same refresh
token concurrently exactly one wins and the other gets TOKEN_MISMATCH.
"""

import uuid
from collections.abc import Callable, Sequence

from cloudauth.core.logging import get_logger
from cloudauth.domain.entities import Member, TokenPair
from cloudauth.domain.services.auth_errors import AuthError
from cloudauth.domain.services.ports import (
    CredentialVerifier,
    DuplicateEmailError,
    MemberStore,
    RefreshTokenStore,
    SkillTagStore,
    TokenIssuer,
)

logger = get_logger(__name__)


class AuthService:
    """Orchestrates signup, login, reissue and logout."""

    def __init__(
        self,
        members: MemberStore,
        skill_tags: SkillTagStore,
        refresh_tokens: RefreshTokenStore,
        verifier: CredentialVerifier,
        issuer: TokenIssuer,
        hash_password: Callable[[str], str],
    ) -> None:
        """Initialize the service.

        Args:
            members: Member (credential) store.
            skill_tags: Skill tag lookup.
            refresh_tokens: Refresh token store keyed by member ID.
            verifier: Checks an email/password pair.
            issuer: Issues and validates signed tokens.
            hash_password: One-way password hash function.
        """
        self.members = members
        self.skill_tags = skill_tags
        self.refresh_tokens = refresh_tokens
        self.verifier = verifier
        self.issuer = issuer
        self.hash_password = hash_password

    async def signup(
        self,
        email: str,
        password: str,
        tag_names: Sequence[str],
    ) -> Member | AuthError:
        """Register a new member with the given skill tags.

        Nothing is written unless the email is free and every tag exists.
        Repeated tag names are collapsed, keeping the first occurrence.
        """
        if await self.members.exists_by_email(email):
            logger.info("Signup rejected: email already registered")
            return AuthError.duplicate_identity()

        wanted = list(dict.fromkeys(tag_names))
        found = {tag.name: tag for tag in await self.skill_tags.get_by_names(wanted)}
        missing = [name for name in wanted if name not in found]
        if missing:
            logger.info("Signup rejected: unknown skill tags", tags=missing)
            return AuthError.unknown_tag(missing)

        member = Member(
            id=str(uuid.uuid4()),
            email=email,
            password_hash=self.hash_password(password),
        )
        try:
            created = await self.members.create(member, [found[name] for name in wanted])
        except DuplicateEmailError:
            # Lost a race with a concurrent signup for the same email
            logger.info("Signup rejected: email registered concurrently")
            return AuthError.duplicate_identity()

        logger.info("Member signed up", member_id=created.id, skill_tags=created.skill_tags)
        return created

    async def login(self, email: str, password: str) -> TokenPair | AuthError:
        """Verify credentials and start a session.

        Any refresh token previously stored for the member is overwritten,
        which ends the member's other sessions.
        """
        identity = await self.verifier.verify(email, password)
        if identity is None:
            return AuthError.invalid_credentials()

        tokens = self.issuer.create_token_pair(identity)
        await self.refresh_tokens.save(
            identity.member_id,
            tokens.refresh_token,
            tokens.refresh_token_expires_at,
        )
        await self.members.update_last_login(identity.member_id)

        logger.info("Member logged in", member_id=identity.member_id)
        return tokens

    async def reissue(self, access_token: str, refresh_token: str) -> TokenPair | AuthError:
        """Exchange a refresh token for a new token pair.

        The access token may be expired; only its signature is checked and
        it is used to find the session key. The refresh token must be valid
        and equal to the stored one.
        """
        if not self.issuer.is_valid_refresh_token(refresh_token):
            logger.info("Reissue rejected: invalid refresh token")
            return AuthError.invalid_refresh_token()

        identity = self.issuer.read_identity(access_token)
        if identity is None:
            logger.info("Reissue rejected: invalid access token")
            return AuthError.invalid_access_token()

        key = identity.member_id
        if not await self.refresh_tokens.has_session(key):
            logger.info("Reissue rejected: no active session", member_id=key)
            return AuthError.no_active_session()

        if not await self.refresh_tokens.matches(key, refresh_token):
            logger.warning("Reissue rejected: refresh token mismatch", member_id=key)
            return AuthError.token_mismatch()

        tokens = self.issuer.create_token_pair(identity)
        swapped = await self.refresh_tokens.replace_if_matches(
            key,
            refresh_token,
            tokens.refresh_token,
            tokens.refresh_token_expires_at,
        )
        if not swapped:
            logger.warning("Reissue rejected: concurrent rotation", member_id=key)
            return AuthError.token_mismatch()

        logger.info("Tokens reissued", member_id=key)
        return tokens

    async def logout(self, member_id: str) -> bool:
        """End the member's session by dropping the stored refresh token.

        Returns:
            True if a session existed.
        """
        removed = await self.refresh_tokens.delete_by_key(member_id)
        logger.info("Member logged out", member_id=member_id, had_session=removed)
        return removed

    async def get_member(self, member_id: str) -> Member | None:
        """Look up a member by ID."""
        return await self.members.get_by_id(member_id)
