"""Repositories package."""

from skills_audit_api.repositories.base import BaseRepository
from skills_audit_api.repositories.employee_repository import EmployeeRepository
from skills_audit_api.repositories.qualification_repository import QualificationRepository
from skills_audit_api.repositories.record_store import (
    Collection,
    Record,
    RecordStore,
    SqlRecordStore,
)
from skills_audit_api.repositories.skill_repository import SkillRepository
from skills_audit_api.repositories.training_repository import TrainingRepository

__all__ = [
    "BaseRepository",
    "Collection",
    "EmployeeRepository",
    "QualificationRepository",
    "Record",
    "RecordStore",
    "SkillRepository",
    "SqlRecordStore",
    "TrainingRepository",
]
