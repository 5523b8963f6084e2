"""Training domain model."""

from datetime import date, datetime
from enum import StrEnum
from uuid import UUID

from pydantic import BaseModel, Field


class TrainingStatus(StrEnum):
    """Training progress status."""

    NOT_STARTED = "not_started"
    SUGGESTED = "suggested"
    IN_PROGRESS = "in_progress"
    COMPLETED = "completed"


# Self-loops are intentionally absent
TRAINING_TRANSITIONS: dict[TrainingStatus, frozenset[TrainingStatus]] = {
    TrainingStatus.NOT_STARTED: frozenset({TrainingStatus.SUGGESTED, TrainingStatus.IN_PROGRESS}),
    TrainingStatus.SUGGESTED: frozenset({TrainingStatus.IN_PROGRESS}),
    TrainingStatus.IN_PROGRESS: frozenset({TrainingStatus.COMPLETED}),
    TrainingStatus.COMPLETED: frozenset(),
}

COMPLETE_PROGRESS = 100


def is_valid_training_transition(current: TrainingStatus, target: TrainingStatus) -> bool:
    """Check a training status change against the transition table."""
    return target in TRAINING_TRANSITIONS[current]


class Training(BaseModel):
    """Training domain model."""

    id: UUID
    employee_id: UUID
    name: str
    description: str | None = None
    provider: str | None = None
    status: TrainingStatus = TrainingStatus.NOT_STARTED
    progress: int = Field(default=0, ge=0, le=COMPLETE_PROGRESS)
    start_date: date | None = None
    end_date: date | None = None
    completion_date: date | None = None
    certificate_url: str | None = None
    suggested_by: UUID | None = None
    created_at: datetime
    updated_at: datetime

    class Config:
        """Pydantic config."""

        from_attributes = True
