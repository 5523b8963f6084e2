"""Skill service."""

import logging
from uuid import UUID

from skills_audit_api.exceptions import EmployeeNotFoundError, SkillNotFoundError
from skills_audit_api.models.domain.skill import Skill
from skills_audit_api.models.dto.skill import SkillCreate, SkillUpdate
from skills_audit_api.repositories.record_store import Collection, RecordStore

logger = logging.getLogger(__name__)


class SkillService:
    """Service for managing employee skills."""

    def __init__(self, store: RecordStore) -> None:
        """Initialize service with record store."""
        self.store = store

    async def get(self, skill_id: UUID) -> Skill:
        """Get a skill by ID.

        Raises:
            SkillNotFoundError: If the skill does not exist
        """
        skill = await self.store.get(Collection.SKILLS, skill_id)
        if skill is None:
            raise SkillNotFoundError(str(skill_id))
        return skill

    async def list_for_employee(self, employee_id: UUID) -> list[Skill]:
        """Get an employee's skills, grouped by category then name."""
        rows = await self.store.query(Collection.SKILLS, "employee_id", employee_id)
        return sorted(rows, key=lambda s: (s.category.lower(), s.name.lower()))

    async def create(self, employee_id: UUID, data: SkillCreate) -> Skill:
        """Record a skill for an employee.

        Raises:
            EmployeeNotFoundError: If the employee does not exist
        """
        if await self.store.get(Collection.EMPLOYEES, employee_id) is None:
            raise EmployeeNotFoundError(str(employee_id))

        values = data.model_dump(exclude={"employee_id"})
        values["employee_id"] = employee_id
        values["proficiency_level"] = data.proficiency_level.value
        skill_id = await self.store.create(Collection.SKILLS, values)
        logger.info(f"Skill {skill_id} added for employee {employee_id}")
        return await self.get(skill_id)

    async def update(self, skill_id: UUID, changes: SkillUpdate) -> Skill:
        """Apply a partial update to a skill.

        Raises:
            SkillNotFoundError: If the skill does not exist
        """
        values = {
            key: value
            for key, value in changes.model_dump(exclude_unset=True).items()
            if value is not None or key in ("years_of_experience", "last_used")
        }
        if not values:
            return await self.get(skill_id)

        if not await self.store.update(Collection.SKILLS, skill_id, values):
            raise SkillNotFoundError(str(skill_id))
        return await self.get(skill_id)

    async def delete(self, skill_id: UUID) -> None:
        """Delete a skill.

        Raises:
            SkillNotFoundError: If the skill does not exist
        """
        if not await self.store.delete(Collection.SKILLS, skill_id):
            raise SkillNotFoundError(str(skill_id))
        logger.info(f"Skill {skill_id} deleted")
