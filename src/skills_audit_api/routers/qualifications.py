"""Qualifications router."""

from typing import Annotated
from uuid import UUID

from fastapi import APIRouter, Depends, status

from skills_audit_api.dependencies import get_qualification_service
from skills_audit_api.models.domain.qualification import Qualification
from skills_audit_api.models.dto.qualification import (
    QualificationCreate,
    QualificationReject,
    QualificationWithEmployee,
)
from skills_audit_api.security.auth import AdminActor, CurrentActor, ensure_can_access
from skills_audit_api.services.qualification_service import QualificationService

router = APIRouter()

QualificationServiceDep = Annotated[QualificationService, Depends(get_qualification_service)]


@router.post("", response_model=Qualification, status_code=status.HTTP_201_CREATED)
async def submit_qualification(
    body: QualificationCreate,
    current_user: CurrentActor,
    qualification_service: QualificationServiceDep,
) -> Qualification:
    """Submit a qualification for approval.

    Employees submit for themselves; admins may submit for anyone.
    """
    employee_id = body.employee_id or current_user.employee_id
    ensure_can_access(current_user, employee_id)
    return await qualification_service.submit(employee_id, body)


@router.get("/pending", response_model=list[QualificationWithEmployee])
async def list_pending_qualifications(
    current_user: AdminActor,
    qualification_service: QualificationServiceDep,
) -> list[QualificationWithEmployee]:
    """List qualifications awaiting a decision, with their owners."""
    return await qualification_service.list_pending_with_employees()


@router.get("/employee/{employee_id}", response_model=list[Qualification])
async def list_employee_qualifications(
    employee_id: UUID,
    current_user: CurrentActor,
    qualification_service: QualificationServiceDep,
) -> list[Qualification]:
    """List an employee's qualifications, newest first."""
    ensure_can_access(current_user, employee_id)
    return await qualification_service.list_for_employee(employee_id)


@router.get("/{qualification_id}", response_model=Qualification)
async def get_qualification(
    qualification_id: UUID,
    current_user: CurrentActor,
    qualification_service: QualificationServiceDep,
) -> Qualification:
    """Get a qualification by ID."""
    qualification = await qualification_service.get(qualification_id)
    ensure_can_access(current_user, qualification.employee_id)
    return qualification


@router.post("/{qualification_id}/approve", response_model=Qualification)
async def approve_qualification(
    qualification_id: UUID,
    current_user: AdminActor,
    qualification_service: QualificationServiceDep,
) -> Qualification:
    """Approve a pending qualification."""
    return await qualification_service.approve(qualification_id, current_user)


@router.post("/{qualification_id}/reject", response_model=Qualification)
async def reject_qualification(
    qualification_id: UUID,
    body: QualificationReject,
    current_user: AdminActor,
    qualification_service: QualificationServiceDep,
) -> Qualification:
    """Reject a pending qualification with a reason."""
    return await qualification_service.reject(qualification_id, body.reason, current_user)


@router.delete("/{qualification_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_qualification(
    qualification_id: UUID,
    current_user: CurrentActor,
    qualification_service: QualificationServiceDep,
) -> None:
    """Delete a qualification and release its certificate."""
    qualification = await qualification_service.get(qualification_id)
    ensure_can_access(current_user, qualification.employee_id)
    await qualification_service.delete(qualification_id)
