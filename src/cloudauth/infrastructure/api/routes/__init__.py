"""API Routes for CloudAuth."""

from cloudauth.infrastructure.api.routes.auth_router import router as auth_router
from cloudauth.infrastructure.api.routes.members_router import router as members_router
from cloudauth.infrastructure.api.routes.skill_tags_router import router as skill_tags_router

__all__ = [
    "auth_router",
    "members_router",
    "skill_tags_router",
]
