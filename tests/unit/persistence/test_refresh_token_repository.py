"""Tests for RefreshTokenRepository."""

from datetime import datetime, timedelta, timezone

import pytest
import pytest_asyncio
from sqlalchemy import event, func, select

from cloudauth.core.config import Settings
from cloudauth.domain.entities import Member
from cloudauth.infrastructure.persistence.database import DatabaseManager
from cloudauth.infrastructure.persistence.models import RefreshTokenModel
from cloudauth.infrastructure.persistence.repositories import (
    MemberRepository,
    RefreshTokenRepository,
)

MEMBER_ID = "member-1"


@pytest.fixture
def expires_at():
    return datetime.now(timezone.utc) + timedelta(days=7)


@pytest_asyncio.fixture
async def repo(db_session):
    await MemberRepository(db_session).create(
        Member(id=MEMBER_ID, email="ada@example.com", password_hash="$argon2id$hash"), []
    )
    return RefreshTokenRepository(db_session)


async def row_count(session) -> int:
    return await session.scalar(select(func.count()).select_from(RefreshTokenModel))


def test_hash_token():
    digest = RefreshTokenRepository.hash_token("token")

    assert len(digest) == 64
    assert digest == RefreshTokenRepository.hash_token("token")
    assert digest != RefreshTokenRepository.hash_token("other")


@pytest.mark.asyncio
async def test_save_stores_hash_only(repo, db_session, expires_at):
    await repo.save(MEMBER_ID, "refresh-1", expires_at)

    stored = await repo.get_by_key(MEMBER_ID)
    assert stored.token_hash == RefreshTokenRepository.hash_token("refresh-1")
    assert stored.token_hash != "refresh-1"


@pytest.mark.asyncio
async def test_save_overwrites_existing_row(repo, db_session, expires_at):
    await repo.save(MEMBER_ID, "refresh-1", expires_at)
    await repo.save(MEMBER_ID, "refresh-2", expires_at)

    assert await row_count(db_session) == 1
    assert await repo.matches(MEMBER_ID, "refresh-2") is True
    assert await repo.matches(MEMBER_ID, "refresh-1") is False


@pytest.mark.asyncio
async def test_has_session(repo, expires_at):
    assert await repo.has_session(MEMBER_ID) is False

    await repo.save(MEMBER_ID, "refresh-1", expires_at)

    assert await repo.has_session(MEMBER_ID) is True


@pytest.mark.asyncio
async def test_matches_without_session(repo):
    assert await repo.matches(MEMBER_ID, "refresh-1") is False


@pytest.mark.asyncio
async def test_replace_if_matches(repo, expires_at):
    await repo.save(MEMBER_ID, "refresh-1", expires_at)

    replaced = await repo.replace_if_matches(MEMBER_ID, "refresh-1", "refresh-2", expires_at)

    assert replaced is True
    assert await repo.matches(MEMBER_ID, "refresh-2") is True


@pytest.mark.asyncio
async def test_replace_if_matches_stale_token(repo, expires_at):
    await repo.save(MEMBER_ID, "refresh-1", expires_at)
    await repo.replace_if_matches(MEMBER_ID, "refresh-1", "refresh-2", expires_at)

    replaced = await repo.replace_if_matches(MEMBER_ID, "refresh-1", "refresh-3", expires_at)

    assert replaced is False
    assert await repo.matches(MEMBER_ID, "refresh-2") is True


@pytest.mark.asyncio
async def test_replace_if_matches_without_session(repo, expires_at):
    assert await repo.replace_if_matches(MEMBER_ID, "refresh-1", "refresh-2", expires_at) is False


@pytest.mark.asyncio
async def test_delete_by_key(repo, expires_at):
    await repo.save(MEMBER_ID, "refresh-1", expires_at)

    assert await repo.delete_by_key(MEMBER_ID) is True
    assert await repo.has_session(MEMBER_ID) is False
    assert await repo.delete_by_key(MEMBER_ID) is False


@pytest.mark.asyncio
async def test_delete_expired(repo, db_session):
    await MemberRepository(db_session).create(
        Member(id="member-2", email="grace@example.com", password_hash="$argon2id$hash"), []
    )
    now = datetime.now(timezone.utc)
    await repo.save(MEMBER_ID, "expired", now - timedelta(hours=1))
    await repo.save("member-2", "live", now + timedelta(hours=1))

    deleted = await repo.delete_expired(now)

    assert deleted == 1
    assert await row_count(db_session) == 1
    assert await repo.has_session("member-2") is True


@pytest_asyncio.fixture
async def file_db(tmp_path):
    """File-backed database so separate sessions use separate connections."""
    db = DatabaseManager(
        Settings(database_url=f"sqlite+aiosqlite:///{tmp_path / 'cloudauth.db'}", _env_file=None)
    )
    await db.create_tables()
    async with db.session() as session:
        await MemberRepository(session).create(
            Member(id=MEMBER_ID, email="ada@example.com", password_hash="$argon2id$hash"), []
        )
        await session.commit()
    yield db
    await db.disconnect()


@pytest.mark.asyncio
async def test_first_saves_from_two_sessions_keep_last_token(file_db, expires_at):
    """Both sessions see no stored token, then both save for the same key."""
    async with file_db.session() as first, file_db.session() as second:
        assert await RefreshTokenRepository(first).get_by_key(MEMBER_ID) is None
        assert await RefreshTokenRepository(second).get_by_key(MEMBER_ID) is None

        await RefreshTokenRepository(first).save(MEMBER_ID, "refresh-1", expires_at)
        await first.commit()
        await RefreshTokenRepository(second).save(MEMBER_ID, "refresh-2", expires_at)
        await second.commit()

    async with file_db.session() as session:
        repo = RefreshTokenRepository(session)
        assert await row_count(session) == 1
        assert await repo.matches(MEMBER_ID, "refresh-2") is True
        assert await repo.matches(MEMBER_ID, "refresh-1") is False


@pytest.mark.asyncio
async def test_save_is_a_single_upsert(file_db, expires_at):
    statements: list[str] = []

    def record(conn, cursor, statement, parameters, context, executemany):
        statements.append(statement)

    event.listen(file_db.engine.sync_engine, "before_cursor_execute", record)
    try:
        async with file_db.session() as session:
            await RefreshTokenRepository(session).save(MEMBER_ID, "refresh-1", expires_at)
            await session.commit()
    finally:
        event.remove(file_db.engine.sync_engine, "before_cursor_execute", record)

    writes = [s for s in statements if s.lstrip().upper().startswith(("INSERT", "UPDATE"))]
    assert len(writes) == 1
    assert "ON CONFLICT" in writes[0].upper()
    assert statements.index(writes[0]) == 0


@pytest.mark.asyncio
async def test_save_refreshes_already_loaded_row(repo, db_session, expires_at):
    await repo.save(MEMBER_ID, "refresh-1", expires_at)
    loaded = await repo.get_by_key(MEMBER_ID)

    await repo.save(MEMBER_ID, "refresh-2", expires_at)

    assert loaded.token_hash == RefreshTokenRepository.hash_token("refresh-2")
