"""FastAPI dependencies for wiring services and authenticating requests."""

from dataclasses import dataclass
from typing import Annotated

from fastapi import Depends, Header, HTTPException, status
from sqlalchemy.ext.asyncio import AsyncSession

from cloudauth.core.config import get_settings
from cloudauth.core.logging import get_logger
from cloudauth.domain.services import AuthService, PasswordValidator
from cloudauth.infrastructure.auth import (
    InvalidTokenError,
    JWTService,
    PasswordCredentialVerifier,
    TokenExpiredError,
    hash_password,
    jwt_service,
)
from cloudauth.infrastructure.persistence.database import get_db_session
from cloudauth.infrastructure.persistence.repositories import (
    MemberRepository,
    RefreshTokenRepository,
    SkillTagRepository,
)

logger = get_logger(__name__)

DbSession = Annotated[AsyncSession, Depends(get_db_session)]


def get_jwt_service() -> JWTService:
    """Token issuer used by the API. Overridden in tests."""
    return jwt_service


def get_password_validator() -> PasswordValidator:
    """Build the signup password policy from settings."""
    settings = get_settings()
    return PasswordValidator(
        min_length=settings.password_min_length,
        require_complexity=settings.password_require_complexity,
    )


def get_auth_service(
    session: DbSession,
    issuer: Annotated[JWTService, Depends(get_jwt_service)],
) -> AuthService:
    """Wire an AuthService onto the request's database session."""
    members = MemberRepository(session)
    return AuthService(
        members=members,
        skill_tags=SkillTagRepository(session),
        refresh_tokens=RefreshTokenRepository(session),
        verifier=PasswordCredentialVerifier(members),
        issuer=issuer,
        hash_password=hash_password,
    )


@dataclass
class CurrentMember:
    """The member an access token was issued to."""

    member_id: str
    email: str
    role: str


async def get_current_member(
    issuer: Annotated[JWTService, Depends(get_jwt_service)],
    authorization: Annotated[str | None, Header()] = None,
) -> CurrentMember:
    """Authenticate the request from its ``Authorization: Bearer`` header.

    Raises:
        HTTPException: 401 if the header is missing or the token is invalid or expired.
    """
    if authorization is None:
        logger.info("Authentication failed: missing Authorization header")
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Missing Authorization header",
            headers={"WWW-Authenticate": "Bearer"},
        )

    parts = authorization.split()
    if len(parts) != 2 or parts[0].lower() != "bearer":
        logger.info("Authentication failed: invalid Authorization header format")
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Could not validate credentials",
            headers={"WWW-Authenticate": "Bearer"},
        )

    try:
        identity = issuer.get_identity(parts[1], verify_expiry=True)
    except TokenExpiredError:
        logger.info("Authentication failed: token expired")
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Token has expired",
            headers={"WWW-Authenticate": "Bearer"},
        )
    except InvalidTokenError as e:
        logger.info("Authentication failed: invalid token", error=str(e))
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid token",
            headers={"WWW-Authenticate": "Bearer"},
        )

    return CurrentMember(
        member_id=identity.member_id,
        email=identity.email,
        role=identity.role,
    )


# Type aliases for dependency injection
AuthenticatedMember = Annotated[CurrentMember, Depends(get_current_member)]
AuthServiceDep = Annotated[AuthService, Depends(get_auth_service)]
