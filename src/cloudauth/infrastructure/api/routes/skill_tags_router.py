"""Skill tag API routes."""

from fastapi import APIRouter, HTTPException, status

from cloudauth.infrastructure.api.dependencies import AuthenticatedMember, DbSession
from cloudauth.infrastructure.api.schemas import MemberResponse, SkillTagResponse
from cloudauth.infrastructure.persistence.repositories import (
    MemberRepository,
    SkillTagRepository,
)

router = APIRouter()


@router.get("", response_model=list[SkillTagResponse])
async def list_skill_tags(session: DbSession) -> list[SkillTagResponse]:
    """List every skill tag members can choose from at signup."""
    tags = await SkillTagRepository(session).list_all()
    return [SkillTagResponse.model_validate(tag) for tag in tags]


@router.get(
    "/{name}/members",
    response_model=list[MemberResponse],
    responses={404: {"description": "Skill tag not found"}},
)
async def list_members_with_tag(
    name: str,
    current_member: AuthenticatedMember,
    session: DbSession,
) -> list[MemberResponse]:
    """List members holding a skill tag. Requires authentication."""
    if await SkillTagRepository(session).get_by_name(name) is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Skill tag not found")
    members = await MemberRepository(session).list_by_skill_tag(name)
    return [MemberResponse.from_member(member) for member in members]
