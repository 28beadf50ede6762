"""Repository for refresh token operations.

Refresh tokens are filed under a session key (the member ID), one row per
key. Tokens are never stored in clear; lookups compare SHA-256 hashes.
"""

import hashlib
import hmac
from datetime import datetime, timezone

from sqlalchemy import delete, select, update
from sqlalchemy.dialects.postgresql import insert as postgresql_insert
from sqlalchemy.dialects.sqlite import insert as sqlite_insert
from sqlalchemy.ext.asyncio import AsyncSession

from cloudauth.infrastructure.persistence.models import RefreshTokenModel


class RefreshTokenRepository:
    """Repository for refresh token database operations."""

    def __init__(self, session: AsyncSession) -> None:
        """Initialize the repository.

        Args:
            session: SQLAlchemy async session.
        """
        self.session = session

    @staticmethod
    def hash_token(token: str) -> str:
        """Hash a token using SHA-256.

        Args:
            token: The raw JWT token string.

        Returns:
            SHA-256 hex digest of the token.
        """
        return hashlib.sha256(token.encode()).hexdigest()

    async def get_by_key(self, key: str) -> RefreshTokenModel | None:
        """Look up the stored refresh token for a session key."""
        result = await self.session.execute(
            select(RefreshTokenModel)
            .where(RefreshTokenModel.key == key)
            .execution_options(populate_existing=True)
        )
        return result.scalar_one_or_none()

    async def has_session(self, key: str) -> bool:
        """Check whether a refresh token is stored for this key."""
        return await self.get_by_key(key) is not None

    async def matches(self, key: str, token: str) -> bool:
        """Check whether ``token`` is the value currently stored for ``key``.

        Returns False when nothing is stored.
        """
        stored = await self.get_by_key(key)
        if stored is None:
            return False
        return hmac.compare_digest(stored.token_hash, self.hash_token(token))

    async def save(self, key: str, token: str, expires_at: datetime) -> RefreshTokenModel:
        """Store ``token`` for ``key``, replacing any previous value.

        The write is a single INSERT ... ON CONFLICT DO UPDATE, so two
        first-time saves for the same key cannot both insert; the later
        one overwrites.

        Args:
            key: Session key (member ID).
            token: The raw refresh token.
            expires_at: When the refresh token expires.

        Returns:
            The stored row.
        """
        now = datetime.now(timezone.utc)
        insert = (
            postgresql_insert
            if self.session.get_bind().dialect.name == "postgresql"
            else sqlite_insert
        )
        stmt = insert(RefreshTokenModel).values(
            key=key,
            token_hash=self.hash_token(token),
            expires_at=expires_at,
            created_at=now,
            updated_at=now,
        )
        stmt = stmt.on_conflict_do_update(
            index_elements=[RefreshTokenModel.key],
            set_={
                "token_hash": stmt.excluded.token_hash,
                "expires_at": stmt.excluded.expires_at,
                "updated_at": stmt.excluded.updated_at,
            },
        )
        await self.session.execute(stmt)
        await self.session.flush()
        return await self.get_by_key(key)

    async def replace_if_matches(
        self,
        key: str,
        expected_token: str,
        new_token: str,
        expires_at: datetime,
    ) -> bool:
        """Atomically swap the stored token if it still equals ``expected_token``.

        The check and the write are a single UPDATE, so of two callers
        presenting the same token only one can succeed.

        Returns:
            True if the row was replaced, False if the stored value had
            already changed (or the row is gone).
        """
        stmt = (
            update(RefreshTokenModel)
            .where(
                RefreshTokenModel.key == key,
                RefreshTokenModel.token_hash == self.hash_token(expected_token),
            )
            .values(
                token_hash=self.hash_token(new_token),
                expires_at=expires_at,
                updated_at=datetime.now(timezone.utc),
            )
        )
        result = await self.session.execute(stmt)
        await self.session.flush()
        return result.rowcount == 1

    async def delete_by_key(self, key: str) -> bool:
        """Delete the refresh token for a session key.

        Returns:
            True if a row was deleted.
        """
        result = await self.session.execute(
            delete(RefreshTokenModel).where(RefreshTokenModel.key == key)
        )
        await self.session.flush()
        return result.rowcount > 0

    async def delete_expired(self, now: datetime | None = None) -> int:
        """Delete refresh tokens that expired before ``now``.

        Returns:
            Number of rows deleted.
        """
        if now is None:
            now = datetime.now(timezone.utc)
        result = await self.session.execute(
            delete(RefreshTokenModel)
            .where(RefreshTokenModel.expires_at < now)
            .execution_options(synchronize_session=False)
        )
        await self.session.flush()
        return result.rowcount
