"""Qualification DTOs."""

from uuid import UUID

from pydantic import BaseModel, Field

from skills_audit_api.models.domain.employee import Employee
from skills_audit_api.models.domain.qualification import Qualification


class QualificationCreate(BaseModel):
    """DTO for submitting a qualification for approval."""

    employee_id: UUID | None = Field(
        default=None, description="Owner; defaults to the submitting employee"
    )
    institution: str = Field(min_length=1, max_length=255)
    name: str = Field(min_length=1, max_length=255)
    year_obtained: int | None = Field(default=None, ge=1900, le=2100)
    certificate_url: str | None = Field(default=None, max_length=1000)


class QualificationReject(BaseModel):
    """DTO for rejecting a qualification."""

    reason: str = Field(max_length=2000, description="Why the qualification was rejected")


class QualificationWithEmployee(BaseModel):
    """Qualification paired with its owner for the approvals queue."""

    qualification: Qualification
    employee: Employee
