"""SQLAlchemy models for CloudAuth tables.

Importing this package registers every model with ``Base.metadata``.
"""

from cloudauth.infrastructure.persistence.models.member import MemberModel
from cloudauth.infrastructure.persistence.models.refresh_token import RefreshTokenModel
from cloudauth.infrastructure.persistence.models.skill_tag import (
    MemberSkillTagModel,
    SkillTagModel,
)

__all__ = [
    "MemberModel",
    "MemberSkillTagModel",
    "RefreshTokenModel",
    "SkillTagModel",
]
