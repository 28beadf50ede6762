"""Tests for MemberRepository."""

from unittest.mock import AsyncMock, MagicMock

import pytest
from sqlalchemy import func, select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from cloudauth.domain.entities import Member
from cloudauth.domain.services import DuplicateEmailError
from cloudauth.infrastructure.persistence.models import MemberModel, MemberSkillTagModel
from cloudauth.infrastructure.persistence.repositories import (
    MemberRepository,
    SkillTagRepository,
)


def make_member(member_id: str = "member-1", email: str = "ada@example.com") -> Member:
    return Member(id=member_id, email=email, password_hash="$argon2id$hash")


@pytest.mark.asyncio
async def test_create_member_with_skill_tags(db_session):
    tags = await SkillTagRepository(db_session).get_by_names(["devops", "backend"])
    ordered = sorted(tags, key=lambda tag: tag.name != "devops")
    repo = MemberRepository(db_session)

    created = await repo.create(make_member(), ordered)

    assert created.id == "member-1"
    assert created.skill_tags == ["devops", "backend"]
    count = await db_session.scalar(select(func.count()).select_from(MemberSkillTagModel))
    assert count == 2


@pytest.mark.asyncio
async def test_get_by_id_loads_skill_tags_in_order(db_session):
    tags = await SkillTagRepository(db_session).get_by_names(["frontend", "backend"])
    ordered = sorted(tags, key=lambda tag: tag.name, reverse=True)
    repo = MemberRepository(db_session)
    await repo.create(make_member(), ordered)
    await db_session.commit()
    db_session.expunge_all()

    member = await repo.get_by_id("member-1")

    assert member is not None
    assert member.email == "ada@example.com"
    assert member.skill_tags == ["frontend", "backend"]


@pytest.mark.asyncio
async def test_get_by_email(db_session):
    repo = MemberRepository(db_session)
    await repo.create(make_member(), [])

    assert (await repo.get_by_email("ada@example.com")).id == "member-1"
    assert await repo.get_by_email("nobody@example.com") is None


@pytest.mark.asyncio
async def test_get_by_id_not_found(db_session):
    assert await MemberRepository(db_session).get_by_id("missing") is None


@pytest.mark.asyncio
async def test_exists_by_email(db_session):
    repo = MemberRepository(db_session)
    await repo.create(make_member(), [])

    assert await repo.exists_by_email("ada@example.com") is True
    assert await repo.exists_by_email("nobody@example.com") is False


@pytest.mark.asyncio
async def test_create_duplicate_email_raises(db_session):
    repo = MemberRepository(db_session)
    await repo.create(make_member(), [])
    await db_session.commit()

    with pytest.raises(DuplicateEmailError) as exc_info:
        await repo.create(make_member(member_id="member-2"), [])

    assert exc_info.value.email == "ada@example.com"
    count = await db_session.scalar(select(func.count()).select_from(MemberModel))
    assert count == 1


@pytest.mark.asyncio
async def test_update_last_login(db_session):
    repo = MemberRepository(db_session)
    await repo.create(make_member(), [])
    await db_session.commit()

    await repo.update_last_login("member-1")
    db_session.expunge_all()

    member = await repo.get_by_id("member-1")
    assert member.last_login is not None


@pytest.mark.asyncio
async def test_list_by_skill_tag(db_session):
    tag_repo = SkillTagRepository(db_session)
    backend = await tag_repo.get_by_name("backend")
    frontend = await tag_repo.get_by_name("frontend")
    repo = MemberRepository(db_session)
    await repo.create(make_member("member-1", "ada@example.com"), [backend])
    await repo.create(make_member("member-2", "grace@example.com"), [frontend])
    await repo.create(make_member("member-3", "linus@example.com"), [frontend, backend])

    members = await repo.list_by_skill_tag("backend")

    assert sorted(m.id for m in members) == ["member-1", "member-3"]
    assert await repo.list_by_skill_tag("devops") == []


def _integrity_error(message: str) -> IntegrityError:
    return IntegrityError("INSERT INTO members ...", {}, Exception(message))


@pytest.mark.asyncio
async def test_create_maps_violation_to_duplicate_when_email_taken():
    session = AsyncMock(spec=AsyncSession)
    session.flush.side_effect = _integrity_error("UNIQUE constraint failed: members.email")
    session.execute.return_value = MagicMock(scalar_one_or_none=MagicMock(return_value="member-0"))
    repo = MemberRepository(session)

    with pytest.raises(DuplicateEmailError):
        await repo.create(make_member(), [])

    session.rollback.assert_awaited_once()


@pytest.mark.asyncio
async def test_create_reraises_other_integrity_errors():
    session = AsyncMock(spec=AsyncSession)
    session.flush.side_effect = _integrity_error("FOREIGN KEY constraint failed")
    session.execute.return_value = MagicMock(scalar_one_or_none=MagicMock(return_value=None))
    repo = MemberRepository(session)

    with pytest.raises(IntegrityError) as exc_info:
        await repo.create(make_member(), [])

    assert not isinstance(exc_info.value, DuplicateEmailError)
    session.rollback.assert_awaited_once()
