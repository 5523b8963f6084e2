"""Qualification domain model."""

from datetime import datetime
from enum import StrEnum
from uuid import UUID

from pydantic import BaseModel


class QualificationStatus(StrEnum):
    """Qualification approval status."""

    PENDING = "pending"
    APPROVED = "approved"
    REJECTED = "rejected"


# Decisions are one-way out of pending
QUALIFICATION_TRANSITIONS: dict[QualificationStatus, frozenset[QualificationStatus]] = {
    QualificationStatus.PENDING: frozenset(
        {QualificationStatus.APPROVED, QualificationStatus.REJECTED}
    ),
    QualificationStatus.APPROVED: frozenset(),
    QualificationStatus.REJECTED: frozenset(),
}


class Qualification(BaseModel):
    """Qualification domain model."""

    id: UUID
    employee_id: UUID
    institution: str
    name: str
    year_obtained: int | None = None
    certificate_url: str | None = None
    status: QualificationStatus = QualificationStatus.PENDING
    approved_by: UUID | None = None
    approved_at: datetime | None = None
    rejection_reason: str | None = None
    created_at: datetime
    updated_at: datetime

    class Config:
        """Pydantic config."""

        from_attributes = True

    def can_transition_to(self, target: QualificationStatus) -> bool:
        """Check whether the workflow allows moving to the target status."""
        return target in QUALIFICATION_TRANSITIONS[self.status]
