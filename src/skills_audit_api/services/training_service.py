"""Training assignment workflow."""

import asyncio
import logging
from datetime import date
from typing import Any
from uuid import UUID

from skills_audit_api.exceptions import (
    EmployeeNotFoundError,
    InvalidTransitionError,
    TrainingNotFoundError,
    ValidationFailedError,
)
from skills_audit_api.models.domain.actor import ActorContext
from skills_audit_api.models.domain.employee import Employee
from skills_audit_api.models.domain.training import (
    COMPLETE_PROGRESS,
    Training,
    TrainingStatus,
    is_valid_training_transition,
)
from skills_audit_api.models.dto.training import (
    TrainingCreate,
    TrainingSuggest,
    TrainingUpdate,
    TrainingWithEmployee,
)
from skills_audit_api.repositories.record_store import Collection, RecordStore
from skills_audit_api.services.notification_service import NotificationService

logger = logging.getLogger(__name__)

# Statuses an employee may record a training with directly
SELF_SERVICE_STATUSES = frozenset({TrainingStatus.NOT_STARTED, TrainingStatus.IN_PROGRESS})

# Fields that cannot be cleared through an update
REQUIRED_FIELDS = ("name", "status", "progress")


class TrainingService:
    """Service for suggesting, recording and tracking trainings."""

    def __init__(self, store: RecordStore, notifications: NotificationService) -> None:
        """Initialize service with store and notification collaborator."""
        self.store = store
        self.notifications = notifications

    async def get(self, training_id: UUID) -> Training:
        """Get a training by ID.

        Raises:
            TrainingNotFoundError: If the training does not exist
        """
        training = await self.store.get(Collection.TRAININGS, training_id)
        if training is None:
            raise TrainingNotFoundError(str(training_id))
        return training

    async def _require_employee(self, employee_id: UUID) -> Employee:
        employee = await self.store.get(Collection.EMPLOYEES, employee_id)
        if employee is None:
            raise EmployeeNotFoundError(str(employee_id))
        return employee

    async def list_for_employee(self, employee_id: UUID) -> list[Training]:
        """Get an employee's trainings, newest first."""
        rows = await self.store.query(Collection.TRAININGS, "employee_id", employee_id)
        return sorted(rows, key=lambda t: t.created_at, reverse=True)

    async def list_by_status(self, status: TrainingStatus | str) -> list[Training]:
        """Get all trainings with a status, in creation order.

        Raises:
            ValidationFailedError: If the status is unknown
        """
        try:
            status = TrainingStatus(status)
        except ValueError as e:
            raise ValidationFailedError(
                f"Unknown training status '{status}'", {"status": str(status)}
            ) from e
        return await self.store.query(Collection.TRAININGS, "status", status)

    async def list_all_with_employees(self) -> list[TrainingWithEmployee]:
        """Get every training joined with its owner, newest first.

        Trainings whose owner no longer exists are left out.
        """
        trainings, employees = await asyncio.gather(
            self.store.list_all(Collection.TRAININGS),
            self.store.list_all(Collection.EMPLOYEES),
        )
        by_id = {employee.id: employee for employee in employees}

        result = [
            TrainingWithEmployee(training=training, employee=by_id[training.employee_id])
            for training in trainings
            if training.employee_id in by_id
        ]
        result.sort(key=lambda item: item.training.created_at, reverse=True)
        return result

    async def suggest(self, data: TrainingSuggest, actor: ActorContext) -> Training:
        """Suggest a training to an employee and notify them.

        Args:
            data: Training details and target employee
            actor: Administrator making the suggestion

        Returns:
            Created training in suggested status

        Raises:
            EmployeeNotFoundError: If the employee does not exist
        """
        employee = await self._require_employee(data.employee_id)

        training_id = await self.store.create(
            Collection.TRAININGS,
            {
                "employee_id": data.employee_id,
                "name": data.name,
                "description": data.description,
                "provider": data.provider,
                "status": TrainingStatus.SUGGESTED.value,
                "progress": 0,
                "start_date": data.start_date,
                "end_date": data.end_date,
                "suggested_by": actor.employee_id,
            },
        )
        logger.info(
            f"Training {training_id} suggested to employee {data.employee_id} "
            f"by {actor.employee_id}"
        )

        await self.notifications.notify_training_suggested(employee.external_id, data.name)
        return await self.get(training_id)

    async def create(self, employee_id: UUID, data: TrainingCreate) -> Training:
        """Record a training the employee chose themselves.

        Raises:
            EmployeeNotFoundError: If the employee does not exist
            ValidationFailedError: If the status is not a self-service status
        """
        if data.status not in SELF_SERVICE_STATUSES:
            raise ValidationFailedError(
                f"Trainings cannot be created with status '{data.status}'",
                {"status": data.status.value},
            )
        await self._require_employee(employee_id)

        training_id = await self.store.create(
            Collection.TRAININGS,
            {
                "employee_id": employee_id,
                "name": data.name,
                "description": data.description,
                "provider": data.provider,
                "status": data.status.value,
                "progress": data.progress,
                "start_date": data.start_date,
                "end_date": data.end_date,
            },
        )
        logger.info(f"Training {training_id} created for employee {employee_id}")
        return await self.get(training_id)

    def _resolve_changes(self, training: Training, changes: TrainingUpdate) -> dict[str, Any]:
        """Validate an update against the transition table and progress policy.

        Progress is 100 exactly when the training is completed. Completing a
        training fills in progress and the completion date when not given.
        """
        values = changes.model_dump(exclude_unset=True)
        for field in REQUIRED_FIELDS:
            if field in values and values[field] is None:
                del values[field]

        status = training.status
        if "status" in values:
            target = TrainingStatus(values["status"])
            if not is_valid_training_transition(training.status, target):
                raise InvalidTransitionError("training", training.status, target)
            status = target
            values["status"] = target.value

        if status == TrainingStatus.COMPLETED:
            if values.get("progress", COMPLETE_PROGRESS) != COMPLETE_PROGRESS:
                raise ValidationFailedError(
                    "Completed trainings must have progress 100",
                    {"progress": values["progress"]},
                )
            if training.status != TrainingStatus.COMPLETED:
                values["progress"] = COMPLETE_PROGRESS
                if values.get("completion_date") is None:
                    values["completion_date"] = date.today()
        elif values.get("progress") == COMPLETE_PROGRESS:
            raise ValidationFailedError(
                "Progress 100 requires the training to be completed",
                {"status": status.value, "progress": COMPLETE_PROGRESS},
            )

        start = values.get("start_date", training.start_date)
        end = values.get("end_date", training.end_date)
        if start and end and end < start:
            raise ValidationFailedError(
                "end_date must not be before start_date",
                {"start_date": str(start), "end_date": str(end)},
            )
        return values

    async def update(self, training_id: UUID, changes: TrainingUpdate) -> Training:
        """Apply a partial update to a training.

        The write only applies while the training still has the status the
        changes were validated against. If a concurrent update moved it, the
        changes are validated again against the new state.

        Args:
            training_id: Training UUID
            changes: Fields to change; an omitted status leaves it as is

        Returns:
            Updated training

        Raises:
            TrainingNotFoundError: If the training does not exist
            InvalidTransitionError: If the status change is not allowed
            ValidationFailedError: If progress and status disagree
        """
        while True:
            training = await self.get(training_id)
            values = self._resolve_changes(training, changes)
            if not values:
                return training
            if await self.store.update(
                Collection.TRAININGS,
                training_id,
                values,
                expected={"status": training.status.value},
            ):
                break
            logger.info(f"Training {training_id} changed concurrently, revalidating update")

        if "status" in values:
            logger.info(
                f"Training {training_id} moved from {training.status} to {values['status']}"
            )
        return await self.get(training_id)

    async def delete(self, training_id: UUID) -> None:
        """Delete a training.

        Raises:
            TrainingNotFoundError: If the training does not exist
        """
        if not await self.store.delete(Collection.TRAININGS, training_id):
            raise TrainingNotFoundError(str(training_id))
        logger.info(f"Training {training_id} deleted")
