"""Tests for PasswordCredentialVerifier."""

from unittest.mock import AsyncMock

import pytest

from cloudauth.domain.entities import AuthenticatedIdentity, Member
from cloudauth.infrastructure.auth.credential_verifier import PasswordCredentialVerifier


@pytest.fixture
def member(password_hash):
    return Member(
        id="member-123",
        email="ada@example.com",
        password_hash=password_hash,
        skill_tags=["backend"],
    )


@pytest.fixture
def members():
    return AsyncMock()


@pytest.mark.asyncio
async def test_verify_valid_credentials(members, member):
    members.get_by_email.return_value = member
    verifier = PasswordCredentialVerifier(members)

    identity = await verifier.verify("ada@example.com", "Sup3r-secret")

    assert identity == AuthenticatedIdentity(
        member_id="member-123", email="ada@example.com", role="user"
    )
    members.get_by_email.assert_awaited_once_with("ada@example.com")


@pytest.mark.asyncio
async def test_verify_wrong_password(members, member):
    members.get_by_email.return_value = member
    verifier = PasswordCredentialVerifier(members)

    assert await verifier.verify("ada@example.com", "wrong-password") is None


@pytest.mark.asyncio
async def test_verify_unknown_email(members):
    members.get_by_email.return_value = None
    verifier = PasswordCredentialVerifier(members)

    assert await verifier.verify("nobody@example.com", "Sup3r-secret") is None


@pytest.mark.asyncio
async def test_verify_inactive_member(members, member):
    member.is_active = False
    members.get_by_email.return_value = member
    verifier = PasswordCredentialVerifier(members)

    assert await verifier.verify("ada@example.com", "Sup3r-secret") is None
