"""Employees router."""

from typing import Annotated
from uuid import UUID

from fastapi import APIRouter, Depends, status

from skills_audit_api.dependencies import get_aggregation_service, get_employee_service
from skills_audit_api.models.domain.employee import Employee
from skills_audit_api.models.dto.employee import (
    EmployeeCreate,
    EmployeeDeletionResult,
    EmployeeDetails,
    EmployeeUpdate,
)
from skills_audit_api.security.auth import AdminActor, CurrentActor, ensure_can_access
from skills_audit_api.services.aggregation_service import AggregationService
from skills_audit_api.services.employee_service import EmployeeService

router = APIRouter()

EmployeeServiceDep = Annotated[EmployeeService, Depends(get_employee_service)]


@router.get("", response_model=list[Employee])
async def list_employees(
    current_user: AdminActor,
    employee_service: EmployeeServiceDep,
) -> list[Employee]:
    """List all employees ordered by name."""
    return await employee_service.list_employees()


@router.get("/me", response_model=Employee)
async def get_own_profile(
    current_user: CurrentActor,
    employee_service: EmployeeServiceDep,
) -> Employee:
    """Get the acting employee's profile."""
    return await employee_service.get(current_user.employee_id)


@router.get("/{employee_id}", response_model=Employee)
async def get_employee(
    employee_id: UUID,
    current_user: CurrentActor,
    employee_service: EmployeeServiceDep,
) -> Employee:
    """Get an employee by ID."""
    ensure_can_access(current_user, employee_id)
    return await employee_service.get(employee_id)


@router.get("/{employee_id}/details", response_model=EmployeeDetails)
async def get_employee_details(
    employee_id: UUID,
    current_user: CurrentActor,
    aggregation_service: Annotated[AggregationService, Depends(get_aggregation_service)],
) -> EmployeeDetails:
    """Get an employee with qualifications, trainings, skills and statistics."""
    ensure_can_access(current_user, employee_id)
    return await aggregation_service.employee_details(employee_id)


@router.post("", response_model=Employee, status_code=status.HTTP_201_CREATED)
async def create_employee(
    body: EmployeeCreate,
    current_user: AdminActor,
    employee_service: EmployeeServiceDep,
) -> Employee:
    """Register an employee whose identity account already exists."""
    return await employee_service.create(body)


@router.put("/{employee_id}", response_model=Employee)
async def update_employee(
    employee_id: UUID,
    body: EmployeeUpdate,
    current_user: AdminActor,
    employee_service: EmployeeServiceDep,
) -> Employee:
    """Edit an employee profile. The employee is notified of the change."""
    return await employee_service.update(employee_id, body)


@router.post("/{employee_id}/toggle-active", response_model=Employee)
async def toggle_employee_active(
    employee_id: UUID,
    current_user: AdminActor,
    employee_service: EmployeeServiceDep,
) -> Employee:
    """Activate or deactivate an employee."""
    return await employee_service.toggle_active(employee_id)


@router.delete("/{employee_id}", response_model=EmployeeDeletionResult)
async def delete_employee(
    employee_id: UUID,
    current_user: AdminActor,
    employee_service: EmployeeServiceDep,
) -> EmployeeDeletionResult:
    """Delete an employee with its qualifications, trainings and skills."""
    return await employee_service.delete(employee_id)
