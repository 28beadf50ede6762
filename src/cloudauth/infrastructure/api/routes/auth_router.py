"""Authentication API routes.

Signup, login, token reissue and logout.
"""

from typing import Annotated

from fastapi import APIRouter, Depends, Response, status
from fastapi.responses import JSONResponse

from cloudauth.core.logging import get_logger
from cloudauth.domain.services import AuthError, AuthErrorCode, PasswordValidator
from cloudauth.infrastructure.api.dependencies import (
    AuthenticatedMember,
    AuthServiceDep,
    DbSession,
    get_password_validator,
)
from cloudauth.infrastructure.api.schemas import (
    ErrorResponse,
    LoginRequest,
    MemberResponse,
    ReissueRequest,
    SignupRequest,
    TokenResponse,
    ValidationErrorResponse,
)

logger = get_logger(__name__)

router = APIRouter()

# AuthErrorCode -> (HTTP status, error title)
_ERROR_STATUS: dict[AuthErrorCode, tuple[int, str]] = {
    AuthErrorCode.DUPLICATE_IDENTITY: (status.HTTP_409_CONFLICT, "Conflict"),
    AuthErrorCode.UNKNOWN_TAG: (status.HTTP_404_NOT_FOUND, "Not found"),
    AuthErrorCode.INVALID_CREDENTIALS: (status.HTTP_401_UNAUTHORIZED, "Authentication failed"),
    AuthErrorCode.INVALID_REFRESH_TOKEN: (status.HTTP_401_UNAUTHORIZED, "Authentication failed"),
    AuthErrorCode.INVALID_ACCESS_TOKEN: (status.HTTP_401_UNAUTHORIZED, "Authentication failed"),
    AuthErrorCode.NO_ACTIVE_SESSION: (status.HTTP_401_UNAUTHORIZED, "Authentication failed"),
    AuthErrorCode.TOKEN_MISMATCH: (status.HTTP_409_CONFLICT, "Conflict"),
}


def error_response(error: AuthError) -> JSONResponse:
    """Render an AuthError as a JSON response."""
    status_code, title = _ERROR_STATUS[error.code]
    body = ErrorResponse(
        error=title,
        code=error.code.value,
        message=error.message,
        details=list(error.details),
    )
    headers = {"WWW-Authenticate": "Bearer"} if status_code == status.HTTP_401_UNAUTHORIZED else None
    return JSONResponse(status_code=status_code, content=body.model_dump(), headers=headers)


@router.post(
    "/signup",
    status_code=status.HTTP_201_CREATED,
    response_model=MemberResponse,
    responses={
        400: {"model": ValidationErrorResponse, "description": "Password policy violation"},
        404: {"model": ErrorResponse, "description": "Unknown skill tag"},
        409: {"model": ErrorResponse, "description": "Email already registered"},
    },
)
async def signup(
    request: SignupRequest,
    session: DbSession,
    auth_service: AuthServiceDep,
    password_validator: Annotated[PasswordValidator, Depends(get_password_validator)],
) -> MemberResponse | JSONResponse:
    """Register a new member with a set of existing skill tags."""
    password_errors = password_validator.validate(request.password)
    if password_errors:
        logger.info("Signup failed: password validation", error_count=len(password_errors))
        return JSONResponse(
            status_code=status.HTTP_400_BAD_REQUEST,
            content={
                "error": "Validation error",
                "details": [
                    {"field": e.field, "message": e.message, "code": e.code}
                    for e in password_errors
                ],
            },
        )

    result = await auth_service.signup(request.email, request.password, request.skill_tags)
    if isinstance(result, AuthError):
        await session.rollback()
        return error_response(result)

    await session.commit()
    return MemberResponse.from_member(result)


@router.post(
    "/login",
    status_code=status.HTTP_200_OK,
    response_model=TokenResponse,
    responses={401: {"model": ErrorResponse, "description": "Invalid credentials"}},
)
async def login(
    request: LoginRequest,
    session: DbSession,
    auth_service: AuthServiceDep,
) -> TokenResponse | JSONResponse:
    """Authenticate with email and password and receive a token pair."""
    result = await auth_service.login(request.email, request.password)
    if isinstance(result, AuthError):
        await session.rollback()
        return error_response(result)

    await session.commit()
    return TokenResponse.from_pair(result)


@router.post(
    "/reissue",
    status_code=status.HTTP_200_OK,
    response_model=TokenResponse,
    responses={
        401: {"model": ErrorResponse, "description": "Invalid token or no active session"},
        409: {"model": ErrorResponse, "description": "Refresh token already rotated"},
    },
)
async def reissue(
    request: ReissueRequest,
    session: DbSession,
    auth_service: AuthServiceDep,
) -> TokenResponse | JSONResponse:
    """Exchange a (possibly expired) access token and a refresh token for a new pair."""
    result = await auth_service.reissue(request.access_token, request.refresh_token)
    if isinstance(result, AuthError):
        await session.rollback()
        return error_response(result)

    await session.commit()
    return TokenResponse.from_pair(result)


@router.post(
    "/logout",
    status_code=status.HTTP_204_NO_CONTENT,
    responses={401: {"description": "Missing or invalid access token"}},
)
async def logout(
    current_member: AuthenticatedMember,
    session: DbSession,
    auth_service: AuthServiceDep,
) -> Response:
    """Drop the caller's refresh token so it can no longer be reissued."""
    await auth_service.logout(current_member.member_id)
    await session.commit()
    return Response(status_code=status.HTTP_204_NO_CONTENT)
