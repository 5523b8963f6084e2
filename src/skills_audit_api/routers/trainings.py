"""Trainings router."""

from typing import Annotated
from uuid import UUID

from fastapi import APIRouter, Depends, status

from skills_audit_api.dependencies import get_training_service
from skills_audit_api.models.domain.training import Training, TrainingStatus
from skills_audit_api.models.dto.training import (
    TrainingCreate,
    TrainingSuggest,
    TrainingUpdate,
    TrainingWithEmployee,
)
from skills_audit_api.security.auth import AdminActor, CurrentActor, ensure_can_access
from skills_audit_api.services.training_service import TrainingService

router = APIRouter()

TrainingServiceDep = Annotated[TrainingService, Depends(get_training_service)]


@router.get("", response_model=list[TrainingWithEmployee])
async def list_trainings(
    current_user: AdminActor,
    training_service: TrainingServiceDep,
) -> list[TrainingWithEmployee]:
    """List every training with its owner, newest first."""
    return await training_service.list_all_with_employees()


@router.post("/suggest", response_model=Training, status_code=status.HTTP_201_CREATED)
async def suggest_training(
    body: TrainingSuggest,
    current_user: AdminActor,
    training_service: TrainingServiceDep,
) -> Training:
    """Suggest a training to an employee. The employee is notified."""
    return await training_service.suggest(body, current_user)


@router.post("", response_model=Training, status_code=status.HTTP_201_CREATED)
async def create_training(
    body: TrainingCreate,
    current_user: CurrentActor,
    training_service: TrainingServiceDep,
) -> Training:
    """Record a training chosen by the employee."""
    employee_id = body.employee_id or current_user.employee_id
    ensure_can_access(current_user, employee_id)
    return await training_service.create(employee_id, body)


@router.get("/status/{training_status}", response_model=list[Training])
async def list_trainings_by_status(
    training_status: TrainingStatus,
    current_user: AdminActor,
    training_service: TrainingServiceDep,
) -> list[Training]:
    """List trainings with a given status."""
    return await training_service.list_by_status(training_status)


@router.get("/employee/{employee_id}", response_model=list[Training])
async def list_employee_trainings(
    employee_id: UUID,
    current_user: CurrentActor,
    training_service: TrainingServiceDep,
) -> list[Training]:
    """List an employee's trainings, newest first."""
    ensure_can_access(current_user, employee_id)
    return await training_service.list_for_employee(employee_id)


@router.get("/{training_id}", response_model=Training)
async def get_training(
    training_id: UUID,
    current_user: CurrentActor,
    training_service: TrainingServiceDep,
) -> Training:
    """Get a training by ID."""
    training = await training_service.get(training_id)
    ensure_can_access(current_user, training.employee_id)
    return training


@router.put("/{training_id}", response_model=Training)
async def update_training(
    training_id: UUID,
    body: TrainingUpdate,
    current_user: CurrentActor,
    training_service: TrainingServiceDep,
) -> Training:
    """Update a training. Status changes must follow the training workflow."""
    training = await training_service.get(training_id)
    ensure_can_access(current_user, training.employee_id)
    return await training_service.update(training_id, body)


@router.delete("/{training_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_training(
    training_id: UUID,
    current_user: CurrentActor,
    training_service: TrainingServiceDep,
) -> None:
    """Delete a training."""
    training = await training_service.get(training_id)
    ensure_can_access(current_user, training.employee_id)
    await training_service.delete(training_id)
