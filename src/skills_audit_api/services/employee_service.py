"""Employee service for managing employee records."""

import logging
from uuid import UUID

from skills_audit_api.exceptions import EmployeeAlreadyExistsError, EmployeeNotFoundError
from skills_audit_api.models.domain.employee import Employee, EmployeeRole
from skills_audit_api.models.dto.employee import (
    EmployeeCreate,
    EmployeeDeletionResult,
    EmployeeUpdate,
)
from skills_audit_api.repositories.record_store import Collection, RecordStore
from skills_audit_api.services.notification_service import NotificationService
from skills_audit_api.services.qualification_service import QualificationService
from skills_audit_api.services.storage_service import BlobStorage

logger = logging.getLogger(__name__)

# Fields that cannot be cleared through a profile edit
REQUIRED_FIELDS = ("name", "email", "phone", "profession")


class EmployeeService:
    """Service for employee records."""

    def __init__(
        self,
        store: RecordStore,
        notifications: NotificationService,
        storage: BlobStorage,
    ) -> None:
        """Initialize service with store and collaborators."""
        self.store = store
        self.notifications = notifications
        self.storage = storage
        self.qualifications = QualificationService(store, notifications, storage)

    async def get(self, employee_id: UUID) -> Employee:
        """Get an employee by ID.

        Raises:
            EmployeeNotFoundError: If the employee does not exist
        """
        employee = await self.store.get(Collection.EMPLOYEES, employee_id)
        if employee is None:
            raise EmployeeNotFoundError(str(employee_id))
        return employee

    async def get_by_external_id(self, external_id: str) -> Employee | None:
        """Get an employee by identity provider subject."""
        rows = await self.store.query(Collection.EMPLOYEES, "external_id", external_id)
        return rows[0] if rows else None

    async def list_employees(self) -> list[Employee]:
        """Get all employees ordered by name."""
        employees = await self.store.list_all(Collection.EMPLOYEES)
        return sorted(employees, key=lambda e: e.name.lower())

    async def create(self, data: EmployeeCreate) -> Employee:
        """Register an employee.

        Args:
            data: Employee creation data

        Returns:
            Created employee with the employee role

        Raises:
            EmployeeAlreadyExistsError: If the identity is already registered
        """
        if await self.get_by_external_id(data.external_id) is not None:
            raise EmployeeAlreadyExistsError(data.external_id)

        employee_id = await self.store.create(
            Collection.EMPLOYEES,
            {
                "external_id": data.external_id,
                "name": data.name,
                "email": data.email.lower(),
                "phone": data.phone,
                "profession": data.profession,
                "role": EmployeeRole.EMPLOYEE.value,
                "is_active": True,
            },
        )
        logger.info(f"Employee {employee_id} created")
        return await self.get(employee_id)

    async def update(
        self,
        employee_id: UUID,
        changes: EmployeeUpdate,
        notify: bool = True,
    ) -> Employee:
        """Edit an employee profile and tell the employee about it.

        Args:
            employee_id: Employee UUID
            changes: Profile fields to change
            notify: Send the profile-updated notification

        Returns:
            Updated employee

        Raises:
            EmployeeNotFoundError: If the employee does not exist
        """
        values = changes.model_dump(exclude_unset=True)
        for field in REQUIRED_FIELDS:
            if field in values and values[field] is None:
                del values[field]
        if "email" in values:
            values["email"] = values["email"].lower()

        if not values:
            return await self.get(employee_id)

        if not await self.store.update(Collection.EMPLOYEES, employee_id, values):
            raise EmployeeNotFoundError(str(employee_id))
        employee = await self.get(employee_id)
        logger.info(f"Employee {employee_id} updated ({', '.join(sorted(values))})")

        if notify:
            await self.notifications.notify_profile_updated(employee.external_id)
        return employee

    async def toggle_active(self, employee_id: UUID) -> Employee:
        """Flip an employee between active and inactive.

        Raises:
            EmployeeNotFoundError: If the employee does not exist
        """
        employee = await self.get(employee_id)
        if not await self.store.update(
            Collection.EMPLOYEES, employee_id, {"is_active": not employee.is_active}
        ):
            raise EmployeeNotFoundError(str(employee_id))
        logger.info(
            f"Employee {employee_id} {'deactivated' if employee.is_active else 'activated'}"
        )
        return await self.get(employee_id)

    async def delete(self, employee_id: UUID) -> EmployeeDeletionResult:
        """Delete an employee together with everything it owns.

        Children go first and the employee record last, so repeating a delete
        that failed halfway removes whatever is left.

        Raises:
            EmployeeNotFoundError: If the employee does not exist
        """
        employee = await self.get(employee_id)

        qualifications = await self.store.query(
            Collection.QUALIFICATIONS, "employee_id", employee_id
        )
        certificates = 0
        for qualification in qualifications:
            if await self.qualifications.delete(qualification.id):
                certificates += 1

        trainings = await self.store.query(Collection.TRAININGS, "employee_id", employee_id)
        for training in trainings:
            await self.store.delete(Collection.TRAININGS, training.id)

        skills = await self.store.query(Collection.SKILLS, "employee_id", employee_id)
        for skill in skills:
            await self.store.delete(Collection.SKILLS, skill.id)

        if employee.profile_image_url and not await self.storage.delete(
            employee.profile_image_url
        ):
            logger.warning(f"Profile image for employee {employee_id} was not released")

        if not await self.store.delete(Collection.EMPLOYEES, employee_id):
            raise EmployeeNotFoundError(str(employee_id))

        logger.info(
            f"Employee {employee_id} deleted with {len(qualifications)} qualifications, "
            f"{len(trainings)} trainings and {len(skills)} skills"
        )
        return EmployeeDeletionResult(
            employee_id=str(employee_id),
            qualifications_deleted=len(qualifications),
            trainings_deleted=len(trainings),
            skills_deleted=len(skills),
            certificates_released=certificates,
        )
