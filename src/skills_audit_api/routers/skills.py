"""Skills router."""

from typing import Annotated
from uuid import UUID

from fastapi import APIRouter, Depends, status

from skills_audit_api.dependencies import get_skill_service
from skills_audit_api.models.domain.skill import Skill
from skills_audit_api.models.dto.skill import SkillCreate, SkillUpdate
from skills_audit_api.security.auth import CurrentActor, ensure_can_access
from skills_audit_api.services.skill_service import SkillService

router = APIRouter()

SkillServiceDep = Annotated[SkillService, Depends(get_skill_service)]


@router.post("", response_model=Skill, status_code=status.HTTP_201_CREATED)
async def create_skill(
    body: SkillCreate,
    current_user: CurrentActor,
    skill_service: SkillServiceDep,
) -> Skill:
    """Record a skill."""
    employee_id = body.employee_id or current_user.employee_id
    ensure_can_access(current_user, employee_id)
    return await skill_service.create(employee_id, body)


@router.get("/employee/{employee_id}", response_model=list[Skill])
async def list_employee_skills(
    employee_id: UUID,
    current_user: CurrentActor,
    skill_service: SkillServiceDep,
) -> list[Skill]:
    """List an employee's skills."""
    ensure_can_access(current_user, employee_id)
    return await skill_service.list_for_employee(employee_id)


@router.get("/{skill_id}", response_model=Skill)
async def get_skill(
    skill_id: UUID,
    current_user: CurrentActor,
    skill_service: SkillServiceDep,
) -> Skill:
    """Get a skill by ID."""
    skill = await skill_service.get(skill_id)
    ensure_can_access(current_user, skill.employee_id)
    return skill


@router.put("/{skill_id}", response_model=Skill)
async def update_skill(
    skill_id: UUID,
    body: SkillUpdate,
    current_user: CurrentActor,
    skill_service: SkillServiceDep,
) -> Skill:
    """Update a skill."""
    skill = await skill_service.get(skill_id)
    ensure_can_access(current_user, skill.employee_id)
    return await skill_service.update(skill_id, body)


@router.delete("/{skill_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_skill(
    skill_id: UUID,
    current_user: CurrentActor,
    skill_service: SkillServiceDep,
) -> None:
    """Delete a skill."""
    skill = await skill_service.get(skill_id)
    ensure_can_access(current_user, skill.employee_id)
    await skill_service.delete(skill_id)
