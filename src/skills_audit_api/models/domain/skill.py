"""Skill domain model."""

from datetime import date, datetime
from enum import StrEnum
from uuid import UUID

from pydantic import BaseModel


class ProficiencyLevel(StrEnum):
    """Skill proficiency level."""

    BEGINNER = "beginner"
    INTERMEDIATE = "intermediate"
    ADVANCED = "advanced"
    EXPERT = "expert"


class Skill(BaseModel):
    """Skill domain model."""

    id: UUID
    employee_id: UUID
    name: str
    category: str = ""
    proficiency_level: ProficiencyLevel = ProficiencyLevel.BEGINNER
    years_of_experience: int | None = None
    last_used: date | None = None
    created_at: datetime
    updated_at: datetime

    class Config:
        """Pydantic config."""

        from_attributes = True
