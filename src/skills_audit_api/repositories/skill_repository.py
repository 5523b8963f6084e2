"""Skill repository."""

from skills_audit_api.models.orm.skill import SkillORM
from skills_audit_api.repositories.base import BaseRepository


class SkillRepository(BaseRepository[SkillORM]):
    """Repository for skill operations."""

    model = SkillORM
