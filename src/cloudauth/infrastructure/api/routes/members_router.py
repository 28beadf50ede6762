"""Member API routes."""

from fastapi import APIRouter, HTTPException, status

from cloudauth.core.logging import get_logger
from cloudauth.infrastructure.api.dependencies import AuthenticatedMember, AuthServiceDep
from cloudauth.infrastructure.api.schemas import MemberResponse

logger = get_logger(__name__)

router = APIRouter()


@router.get(
    "/me",
    response_model=MemberResponse,
    responses={
        401: {"description": "Missing or invalid access token"},
        404: {"description": "Member no longer exists"},
    },
)
async def get_me(
    current_member: AuthenticatedMember,
    auth_service: AuthServiceDep,
) -> MemberResponse:
    """Return the authenticated member's profile."""
    member = await auth_service.get_member(current_member.member_id)
    if member is None:
        logger.warning("Token refers to missing member", member_id=current_member.member_id)
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Member not found")
    return MemberResponse.from_member(member)
