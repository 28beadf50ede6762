"""Tests for SkillTagRepository."""

import pytest

from cloudauth.infrastructure.persistence.repositories import SkillTagRepository


@pytest.mark.asyncio
async def test_get_by_name(db_session):
    repo = SkillTagRepository(db_session)

    tag = await repo.get_by_name("backend")

    assert tag is not None
    assert tag.name == "backend"
    assert await repo.get_by_name("cobol") is None


@pytest.mark.asyncio
async def test_get_by_names_skips_missing(db_session):
    repo = SkillTagRepository(db_session)

    tags = await repo.get_by_names(["backend", "cobol", "devops"])

    assert sorted(tag.name for tag in tags) == ["backend", "devops"]


@pytest.mark.asyncio
async def test_get_by_names_empty(db_session):
    assert await SkillTagRepository(db_session).get_by_names([]) == []


@pytest.mark.asyncio
async def test_list_all_ordered_by_name(db_session):
    tags = await SkillTagRepository(db_session).list_all()

    assert [tag.name for tag in tags] == ["backend", "devops", "frontend"]


@pytest.mark.asyncio
async def test_create(db_session):
    repo = SkillTagRepository(db_session)

    tag = await repo.create("design")

    assert tag.id is not None
    assert (await repo.get_by_name("design")) == tag


@pytest.mark.asyncio
async def test_ensure_creates_only_missing(db_session):
    repo = SkillTagRepository(db_session)
    backend = await repo.get_by_name("backend")

    tags = await repo.ensure([" data ", "backend", "data", ""])

    assert [tag.name for tag in tags] == ["data", "backend"]
    assert tags[1] == backend
    assert len(await repo.list_all()) == 4
