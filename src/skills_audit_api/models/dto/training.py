"""Training DTOs."""

from datetime import date
from uuid import UUID

from pydantic import BaseModel, Field, model_validator

from skills_audit_api.models.domain.employee import Employee
from skills_audit_api.models.domain.training import Training, TrainingStatus


class TrainingSuggest(BaseModel):
    """DTO for an administrator suggesting a training."""

    employee_id: UUID
    name: str = Field(min_length=1, max_length=255, description="Training name")
    description: str | None = None
    provider: str | None = Field(default=None, max_length=255)
    start_date: date | None = None
    end_date: date | None = None

    @model_validator(mode="after")
    def validate_dates(self) -> "TrainingSuggest":
        """Reject an end date before the start date."""
        if self.start_date and self.end_date and self.end_date < self.start_date:
            raise ValueError("end_date must not be before start_date")
        return self


class TrainingCreate(BaseModel):
    """DTO for an employee recording a training of their own."""

    employee_id: UUID | None = Field(
        default=None, description="Owner; defaults to the acting employee"
    )
    name: str = Field(min_length=1, max_length=255)
    description: str | None = None
    provider: str | None = Field(default=None, max_length=255)
    status: TrainingStatus = TrainingStatus.NOT_STARTED
    progress: int = Field(default=0, ge=0, le=99)
    start_date: date | None = None
    end_date: date | None = None

    @model_validator(mode="after")
    def validate_dates(self) -> "TrainingCreate":
        """Reject an end date before the start date."""
        if self.start_date and self.end_date and self.end_date < self.start_date:
            raise ValueError("end_date must not be before start_date")
        return self


class TrainingUpdate(BaseModel):
    """DTO for editing a training. Status changes follow the transition table."""

    name: str | None = Field(default=None, min_length=1, max_length=255)
    description: str | None = None
    provider: str | None = Field(default=None, max_length=255)
    status: TrainingStatus | None = None
    progress: int | None = Field(default=None, ge=0, le=100)
    start_date: date | None = None
    end_date: date | None = None
    completion_date: date | None = None
    certificate_url: str | None = Field(default=None, max_length=1000)


class TrainingWithEmployee(BaseModel):
    """Training paired with its owner."""

    training: Training
    employee: Employee
