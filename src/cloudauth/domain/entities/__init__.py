"""Domain entities for CloudAuth.

Entities are plain dataclasses with no dependency on infrastructure.
"""

from cloudauth.domain.entities.member import Member
from cloudauth.domain.entities.skill_tag import SkillTag
from cloudauth.domain.entities.token import AuthenticatedIdentity, TokenPair

__all__ = [
    "AuthenticatedIdentity",
    "Member",
    "SkillTag",
    "TokenPair",
]
