"""SQLAlchemy models for skill tags and the member/tag join table."""

from datetime import datetime

from sqlalchemy import DateTime, ForeignKey, Integer, String, func
from sqlalchemy.orm import Mapped, mapped_column, relationship

from cloudauth.domain.entities import SkillTag
from cloudauth.infrastructure.persistence.database import Base


class SkillTagModel(Base):
    """Reference table of skill tags, looked up by unique name."""

    __tablename__ = "skill_tags"

    id: Mapped[int] = mapped_column(
        Integer,
        primary_key=True,
        autoincrement=True,
    )
    name: Mapped[str] = mapped_column(
        String(50),
        nullable=False,
        unique=True,
        index=True,
        comment="Skill tag name (e.g., 'backend')",
    )
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        server_default=func.now(),
    )

    def to_entity(self) -> SkillTag:
        return SkillTag(id=self.id, name=self.name)

    def __repr__(self) -> str:
        return f"<SkillTag(id={self.id}, name={self.name})>"


class MemberSkillTagModel(Base):
    """Join table linking one member to one skill tag.

    Rows are created at signup and owned by the member. Deleting a tag
    that is still referenced is rejected by the foreign key.

    Attributes:
        member_id: Foreign key to members table.
        skill_tag_id: Foreign key to skill_tags table.
        position: Order in which the member listed the tag.
    """

    __tablename__ = "member_skill_tags"

    member_id: Mapped[str] = mapped_column(
        String(36),
        ForeignKey("members.id", ondelete="CASCADE"),
        primary_key=True,
        comment="Foreign key to members table",
    )
    skill_tag_id: Mapped[int] = mapped_column(
        Integer,
        ForeignKey("skill_tags.id", ondelete="RESTRICT"),
        primary_key=True,
        index=True,
        comment="Foreign key to skill_tags table",
    )
    position: Mapped[int] = mapped_column(
        Integer,
        nullable=False,
        default=0,
    )

    skill_tag: Mapped[SkillTagModel] = relationship(SkillTagModel)

    def __repr__(self) -> str:
        return f"<MemberSkillTag(member_id={self.member_id}, skill_tag_id={self.skill_tag_id})>"
