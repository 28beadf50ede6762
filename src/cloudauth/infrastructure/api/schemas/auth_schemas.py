"""Pydantic schemas for authentication endpoints."""

from datetime import datetime

from pydantic import BaseModel, EmailStr, Field

from cloudauth.domain.entities import Member, TokenPair


class SignupRequest(BaseModel):
    """Request body for member signup."""

    email: EmailStr = Field(..., description="Member's email address")
    password: str = Field(..., min_length=1, max_length=128, description="Member's password")
    skill_tags: list[str] = Field(
        default_factory=list,
        max_length=50,
        description="Names of existing skill tags to attach",
    )


class LoginRequest(BaseModel):
    """Request body for login."""

    email: EmailStr = Field(..., description="Member's email address")
    password: str = Field(..., min_length=1, description="Member's password")


class ReissueRequest(BaseModel):
    """Request body for token reissue."""

    access_token: str = Field(..., min_length=1, description="Last access token (may be expired)")
    refresh_token: str = Field(..., min_length=1, description="Current refresh token")


class TokenResponse(BaseModel):
    """Token pair returned by login and reissue."""

    grant_type: str = Field("Bearer", description="Token type for the Authorization header")
    access_token: str = Field(..., description="JWT access token")
    refresh_token: str = Field(..., description="JWT refresh token")
    access_token_expires_at: datetime = Field(..., description="When the access token expires")
    expires_in: int = Field(..., description="Access token lifetime in seconds")

    @classmethod
    def from_pair(cls, tokens: TokenPair) -> "TokenResponse":
        return cls(
            grant_type=tokens.grant_type,
            access_token=tokens.access_token,
            refresh_token=tokens.refresh_token,
            access_token_expires_at=tokens.access_token_expires_at,
            expires_in=tokens.expires_in,
        )


class MemberResponse(BaseModel):
    """Member information."""

    id: str = Field(..., description="Member ID")
    email: str = Field(..., description="Member's email address")
    role: str = Field(..., description="Member's role name")
    skill_tags: list[str] = Field(default_factory=list, description="Skill tag names")
    is_active: bool = Field(..., description="Whether the member can log in")
    created_at: datetime = Field(..., description="When the member signed up")

    model_config = {"from_attributes": True}

    @classmethod
    def from_member(cls, member: Member) -> "MemberResponse":
        return cls.model_validate(member)


class ErrorResponse(BaseModel):
    """Response for a rejected auth operation."""

    error: str = Field(..., description="Error type")
    code: str = Field(..., description="Machine-readable error code")
    message: str = Field(..., description="Human-readable error message")
    details: list[str] = Field(default_factory=list, description="Extra context")


class ValidationErrorDetail(BaseModel):
    """Detail for a single validation error."""

    field: str = Field(..., description="Field name that failed validation")
    message: str = Field(..., description="Human-readable error message")
    code: str | None = Field(None, description="Machine-readable error code")


class ValidationErrorResponse(BaseModel):
    """Response for validation errors."""

    error: str = Field(..., description="Error type")
    details: list[ValidationErrorDetail] = Field(..., description="List of validation errors")
