"""Member repository for database operations."""

from collections.abc import Sequence
from datetime import datetime, timezone

from sqlalchemy import select, update
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from cloudauth.domain.entities import Member, SkillTag
from cloudauth.domain.services.ports import DuplicateEmailError
from cloudauth.infrastructure.persistence.models import (
    MemberModel,
    MemberSkillTagModel,
    SkillTagModel,
)


def _with_skill_tags():
    return selectinload(MemberModel.skill_tags).selectinload(MemberSkillTagModel.skill_tag)


class MemberRepository:
    """Repository for member database operations."""

    def __init__(self, session: AsyncSession) -> None:
        """Initialize the repository.

        Args:
            session: SQLAlchemy async session.
        """
        self.session = session

    async def create(self, member: Member, skill_tags: Sequence[SkillTag]) -> Member:
        """Insert a member together with its skill tag association rows.

        The member row and all association rows are flushed together. On a
        constraint violation the session is rolled back before raising.

        Args:
            member: Member to persist.
            skill_tags: Resolved skill tags to associate, in display order.

        Returns:
            The persisted member.

        Raises:
            DuplicateEmailError: If the email is already taken.
            IntegrityError: For any other constraint violation.
        """
        tag_models = {
            tag.id: await self.session.get(SkillTagModel, tag.id) for tag in skill_tags
        }
        model = MemberModel(
            id=member.id,
            email=member.email,
            password_hash=member.password_hash,
            role=member.role,
            is_active=member.is_active,
            created_at=member.created_at,
            last_login=member.last_login,
            skill_tags=[
                MemberSkillTagModel(skill_tag=tag_models[tag.id], position=position)
                for position, tag in enumerate(skill_tags)
            ],
        )
        self.session.add(model)
        try:
            await self.session.flush()
        except IntegrityError as e:
            await self.session.rollback()
            if await self.exists_by_email(member.email):
                raise DuplicateEmailError(member.email) from e
            raise
        return model.to_entity()

    async def get_by_id(self, member_id: str) -> Member | None:
        """Get a member by ID with skill tags loaded.

        Args:
            member_id: Member ID (UUID string).

        Returns:
            The member if found, None otherwise.
        """
        result = await self.session.execute(
            select(MemberModel).where(MemberModel.id == member_id).options(_with_skill_tags())
        )
        model = result.scalar_one_or_none()
        return model.to_entity() if model else None

    async def get_by_email(self, email: str) -> Member | None:
        """Get a member by email address.

        Args:
            email: Email address to look up.

        Returns:
            The member if found, None otherwise.
        """
        result = await self.session.execute(
            select(MemberModel).where(MemberModel.email == email).options(_with_skill_tags())
        )
        model = result.scalar_one_or_none()
        return model.to_entity() if model else None

    async def exists_by_email(self, email: str) -> bool:
        """Check whether a member with this email exists."""
        result = await self.session.execute(
            select(MemberModel.id).where(MemberModel.email == email).limit(1)
        )
        return result.scalar_one_or_none() is not None

    async def update_last_login(self, member_id: str) -> None:
        """Set the last_login timestamp for a member to now."""
        now = datetime.now(timezone.utc)
        await self.session.execute(
            update(MemberModel)
            .where(MemberModel.id == member_id)
            .values(last_login=now, updated_at=now)
        )
        await self.session.flush()

    async def list_by_skill_tag(self, tag_name: str) -> list[Member]:
        """List members holding a skill tag, oldest first.

        Args:
            tag_name: Name of the skill tag.
        """
        result = await self.session.execute(
            select(MemberModel)
            .join(MemberSkillTagModel, MemberSkillTagModel.member_id == MemberModel.id)
            .join(SkillTagModel, SkillTagModel.id == MemberSkillTagModel.skill_tag_id)
            .where(SkillTagModel.name == tag_name)
            .order_by(MemberModel.created_at, MemberModel.id)
            .options(_with_skill_tags())
        )
        return [model.to_entity() for model in result.scalars().all()]
