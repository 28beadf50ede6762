"""Skill tag repository for database operations."""

from collections.abc import Iterable

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from cloudauth.domain.entities import SkillTag
from cloudauth.infrastructure.persistence.models import SkillTagModel


class SkillTagRepository:
    """Repository for skill tag lookups and seeding."""

    def __init__(self, session: AsyncSession) -> None:
        """Initialize the repository.

        Args:
            session: SQLAlchemy async session.
        """
        self.session = session

    async def get_by_name(self, name: str) -> SkillTag | None:
        """Get a skill tag by its unique name."""
        result = await self.session.execute(
            select(SkillTagModel).where(SkillTagModel.name == name)
        )
        model = result.scalar_one_or_none()
        return model.to_entity() if model else None

    async def get_by_names(self, names: Iterable[str]) -> list[SkillTag]:
        """Get every skill tag whose name is in ``names``.

        Missing names are simply absent from the result; callers compare
        against what they asked for.
        """
        wanted = set(names)
        if not wanted:
            return []
        result = await self.session.execute(
            select(SkillTagModel).where(SkillTagModel.name.in_(wanted))
        )
        return [model.to_entity() for model in result.scalars().all()]

    async def list_all(self) -> list[SkillTag]:
        """List all skill tags ordered by name."""
        result = await self.session.execute(select(SkillTagModel).order_by(SkillTagModel.name))
        return [model.to_entity() for model in result.scalars().all()]

    async def create(self, name: str) -> SkillTag:
        """Insert a new skill tag."""
        model = SkillTagModel(name=name)
        self.session.add(model)
        await self.session.flush()
        return model.to_entity()

    async def ensure(self, names: Iterable[str]) -> list[SkillTag]:
        """Create any of ``names`` that do not exist yet.

        Returns:
            All requested tags, existing and newly created, in request order.
        """
        ordered = list(dict.fromkeys(name.strip() for name in names if name.strip()))
        existing = {tag.name: tag for tag in await self.get_by_names(ordered)}
        tags = []
        for name in ordered:
            tag = existing.get(name)
            if tag is None:
                tag = await self.create(name)
            tags.append(tag)
        return tags
