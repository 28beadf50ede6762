"""SQLAlchemy model for the members table.

Members are uniquely identified by email and own their skill tag
association rows.
"""

from datetime import datetime, timezone

from sqlalchemy import Boolean, DateTime, String, func
from sqlalchemy.orm import Mapped, mapped_column, relationship

from cloudauth.domain.entities import Member
from cloudauth.infrastructure.persistence.database import Base


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class MemberModel(Base):
    """SQLAlchemy model for the members table.

    Attributes:
        id: Primary key (UUID string).
        email: Email address (globally unique).
        password_hash: Argon2id password hash.
        role: Role name placed in access tokens.
        is_active: Whether the member can log in.
        created_at: Timestamp when the member signed up.
        updated_at: Timestamp when the member was last updated.
        last_login: Timestamp of last successful login.
    """

    __tablename__ = "members"

    id: Mapped[str] = mapped_column(
        String(36),
        primary_key=True,
        comment="Member ID (UUID)",
    )
    email: Mapped[str] = mapped_column(
        String(255),
        nullable=False,
        unique=True,
        index=True,
        comment="Member email address",
    )
    password_hash: Mapped[str] = mapped_column(
        String(255),
        nullable=False,
        comment="Hashed password (argon2id)",
    )
    role: Mapped[str] = mapped_column(
        String(50),
        nullable=False,
        default="user",
        comment="Role name carried in access tokens",
    )
    is_active: Mapped[bool] = mapped_column(
        Boolean,
        nullable=False,
        default=True,
        comment="Whether the member can log in",
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
    last_login: Mapped[datetime | None] = mapped_column(
        DateTime(timezone=True),
        nullable=True,
        comment="Timestamp of last successful login",
    )

    # Owned association rows; SkillTagModel keeps no pointer back here
    skill_tags: Mapped[list["MemberSkillTagModel"]] = relationship(  # noqa: F821
        "MemberSkillTagModel",
        cascade="all, delete-orphan",
        order_by="MemberSkillTagModel.position",
    )

    def to_entity(self) -> Member:
        """Convert to a domain entity.

        Requires ``skill_tags`` and each row's ``skill_tag`` to be loaded.
        """
        return Member(
            id=self.id,
            email=self.email,
            password_hash=self.password_hash,
            role=self.role,
            skill_tags=[row.skill_tag.name for row in self.skill_tags],
            is_active=self.is_active,
            created_at=self.created_at,
            last_login=self.last_login,
        )

    def __repr__(self) -> str:
        return f"<Member(id={self.id}, email={self.email})>"
