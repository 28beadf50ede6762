"""Pydantic schemas for skill tag endpoints."""

from pydantic import BaseModel, Field


class SkillTagResponse(BaseModel):
    """A skill tag."""

    id: int = Field(..., description="Skill tag ID")
    name: str = Field(..., description="Unique skill tag name")

    model_config = {"from_attributes": True}
