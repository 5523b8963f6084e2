"""Skill DTOs."""

from datetime import date
from uuid import UUID

from pydantic import BaseModel, Field

from skills_audit_api.models.domain.skill import ProficiencyLevel


class SkillCreate(BaseModel):
    """DTO for recording a skill."""

    employee_id: UUID | None = Field(
        default=None, description="Owner; defaults to the acting employee"
    )
    name: str = Field(min_length=1, max_length=255)
    category: str = Field(default="", max_length=255, description="e.g. Technical, Leadership")
    proficiency_level: ProficiencyLevel = ProficiencyLevel.BEGINNER
    years_of_experience: int | None = Field(default=None, ge=0, le=80)
    last_used: date | None = None


class SkillUpdate(BaseModel):
    """DTO for editing a skill."""

    name: str | None = Field(default=None, min_length=1, max_length=255)
    category: str | None = Field(default=None, max_length=255)
    proficiency_level: ProficiencyLevel | None = None
    years_of_experience: int | None = Field(default=None, ge=0, le=80)
    last_used: date | None = None
