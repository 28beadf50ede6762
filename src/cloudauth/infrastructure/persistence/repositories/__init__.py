"""Persistence repositories for database operations."""

from cloudauth.infrastructure.persistence.repositories.member_repository import (
    DuplicateEmailError,
    MemberRepository,
)
from cloudauth.infrastructure.persistence.repositories.refresh_token_repository import (
    RefreshTokenRepository,
)
from cloudauth.infrastructure.persistence.repositories.skill_tag_repository import (
    SkillTagRepository,
)

__all__ = [
    "DuplicateEmailError",
    "MemberRepository",
    "RefreshTokenRepository",
    "SkillTagRepository",
]
