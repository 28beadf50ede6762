"""Skill tag entity."""

from dataclasses import dataclass


@dataclass(frozen=True)
class SkillTag:
    """Reference tag a member can attach to their profile.

    Tags are looked up by their unique name and never change once a
    member references them.
    """

    id: int
    name: str

    def __post_init__(self) -> None:
        if not self.name:
            raise ValueError("Skill tag name is required")
