"""Domain models package."""

from skills_audit_api.models.domain.actor import ActorContext
from skills_audit_api.models.domain.employee import Employee, EmployeeRole
from skills_audit_api.models.domain.notification import (
    NotificationEvent,
    NotificationMessage,
    WorkflowEvent,
)
from skills_audit_api.models.domain.qualification import Qualification, QualificationStatus
from skills_audit_api.models.domain.skill import ProficiencyLevel, Skill
from skills_audit_api.models.domain.training import Training, TrainingStatus

__all__ = [
    "ActorContext",
    "Employee",
    "EmployeeRole",
    "NotificationEvent",
    "NotificationMessage",
    "ProficiencyLevel",
    "Qualification",
    "QualificationStatus",
    "Skill",
    "Training",
    "TrainingStatus",
    "WorkflowEvent",
]
