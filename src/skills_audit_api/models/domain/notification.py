"""Notification domain models."""

from enum import StrEnum

from pydantic import BaseModel


class NotificationEvent(StrEnum):
    """Workflow events that notify the affected employee."""

    QUALIFICATION_APPROVED = "qualification_approved"
    QUALIFICATION_REJECTED = "qualification_rejected"
    TRAINING_SUGGESTED = "training_suggested"
    PROFILE_UPDATED = "profile_update"


class WorkflowEvent(BaseModel):
    """A workflow transition worth telling the owning employee about."""

    kind: NotificationEvent
    recipient_external_id: str
    subject: str = ""  # Qualification or training name
    reason: str | None = None  # Rejection reason
    message: str | None = None  # Free text for profile updates


class NotificationMessage(BaseModel):
    """Outbound push notification request."""

    recipient_external_id: str
    title: str
    body: str
    data: dict[str, str]
