"""SQLAlchemy model for refresh tokens.

One row per session key (the member ID). Reissue overwrites the row in
place, so there is never more than one live refresh token per member.
Only a SHA-256 hash of the signed token is stored.
"""

from datetime import datetime, timezone

from sqlalchemy import DateTime, ForeignKey, String, func
from sqlalchemy.orm import Mapped, mapped_column

from cloudauth.infrastructure.persistence.database import Base


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class RefreshTokenModel(Base):
    """Active refresh token for a member."""

    __tablename__ = "refresh_tokens"

    key: Mapped[str] = mapped_column(
        String(36),
        ForeignKey("members.id", ondelete="CASCADE"),
        primary_key=True,
        comment="Session key (member ID)",
    )
    token_hash: Mapped[str] = mapped_column(
        String(64),
        nullable=False,
        index=True,
        comment="SHA-256 hex digest of the refresh token",
    )
    expires_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
    )
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=_utcnow,
        server_default=func.now(),
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=_utcnow,
        onupdate=_utcnow,
        server_default=func.now(),
    )

    def __repr__(self) -> str:
        return f"RefreshTokenModel(key={self.key!r}, expires_at={self.expires_at!r})"
