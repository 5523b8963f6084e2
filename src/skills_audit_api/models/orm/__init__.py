"""SQLAlchemy ORM models package."""

from skills_audit_api.models.orm.base import Base
from skills_audit_api.models.orm.employee import EmployeeORM
from skills_audit_api.models.orm.qualification import QualificationORM
from skills_audit_api.models.orm.skill import SkillORM
from skills_audit_api.models.orm.training import TrainingORM

__all__ = [
    "Base",
    "EmployeeORM",
    "QualificationORM",
    "SkillORM",
    "TrainingORM",
]
