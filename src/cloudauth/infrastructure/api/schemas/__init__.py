"""API Schemas for request/response validation."""

from cloudauth.infrastructure.api.schemas.auth_schemas import (
    ErrorResponse,
    LoginRequest,
    MemberResponse,
    ReissueRequest,
    SignupRequest,
    TokenResponse,
    ValidationErrorDetail,
    ValidationErrorResponse,
)
from cloudauth.infrastructure.api.schemas.skill_tag_schemas import SkillTagResponse

__all__ = [
    "ErrorResponse",
    "LoginRequest",
    "MemberResponse",
    "ReissueRequest",
    "SignupRequest",
    "SkillTagResponse",
    "TokenResponse",
    "ValidationErrorDetail",
    "ValidationErrorResponse",
]
