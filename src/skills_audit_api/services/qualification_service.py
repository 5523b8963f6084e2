"""Qualification approval workflow."""

import asyncio
import logging
from datetime import datetime, timezone
from uuid import UUID

from skills_audit_api.exceptions import (
    EmployeeNotFoundError,
    InvalidTransitionError,
    OwnerNotFoundError,
    QualificationNotFoundError,
    ValidationFailedError,
)
from skills_audit_api.models.domain.actor import ActorContext
from skills_audit_api.models.domain.employee import Employee
from skills_audit_api.models.domain.qualification import Qualification, QualificationStatus
from skills_audit_api.models.dto.qualification import QualificationCreate, QualificationWithEmployee
from skills_audit_api.repositories.record_store import Collection, RecordStore
from skills_audit_api.services.notification_service import NotificationService
from skills_audit_api.services.storage_service import BlobStorage

logger = logging.getLogger(__name__)


class QualificationService:
    """Service for submitting, deciding and removing qualifications.

    A qualification starts pending and is decided exactly once. The store
    write always happens before the owner is notified; a failed notification
    never undoes the decision.
    """

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

    async def get(self, qualification_id: UUID) -> Qualification:
        """Get a qualification by ID.

        Raises:
            QualificationNotFoundError: If the qualification does not exist
        """
        qualification = await self.store.get(Collection.QUALIFICATIONS, qualification_id)
        if qualification is None:
            raise QualificationNotFoundError(str(qualification_id))
        return qualification

    async def _get_owner(self, qualification: Qualification) -> Employee:
        owner = await self.store.get(Collection.EMPLOYEES, qualification.employee_id)
        if owner is None:
            raise OwnerNotFoundError(str(qualification.employee_id), str(qualification.id))
        return owner

    async def list_pending(self) -> list[Qualification]:
        """Get all qualifications awaiting a decision, in submission order."""
        rows = await self.store.query(
            Collection.QUALIFICATIONS, "status", QualificationStatus.PENDING
        )
        return [q for q in rows if q.status == QualificationStatus.PENDING]

    async def list_pending_with_employees(self) -> list[QualificationWithEmployee]:
        """Get pending qualifications joined with their owners.

        Items whose owner no longer exists are left out.
        """
        pending = await self.list_pending()
        owner_ids = list(dict.fromkeys(q.employee_id for q in pending))
        owners = await asyncio.gather(
            *(self.store.get(Collection.EMPLOYEES, owner_id) for owner_id in owner_ids)
        )
        by_id = {owner.id: owner for owner in owners if owner is not None}

        result = []
        for qualification in pending:
            owner = by_id.get(qualification.employee_id)
            if owner is None:
                logger.warning(f"Pending qualification {qualification.id} has no owner, skipping")
                continue
            result.append(QualificationWithEmployee(qualification=qualification, employee=owner))
        return result

    async def list_for_employee(self, employee_id: UUID) -> list[Qualification]:
        """Get an employee's qualifications, newest first."""
        rows = await self.store.query(Collection.QUALIFICATIONS, "employee_id", employee_id)
        return sorted(rows, key=lambda q: q.created_at, reverse=True)

    async def submit(self, employee_id: UUID, data: QualificationCreate) -> Qualification:
        """Submit a qualification for approval.

        Args:
            employee_id: Owning employee
            data: Qualification details

        Returns:
            Created qualification in pending status

        Raises:
            EmployeeNotFoundError: If the employee does not exist
        """
        if await self.store.get(Collection.EMPLOYEES, employee_id) is None:
            raise EmployeeNotFoundError(str(employee_id))

        qualification_id = await self.store.create(
            Collection.QUALIFICATIONS,
            {
                "employee_id": employee_id,
                "institution": data.institution,
                "name": data.name,
                "year_obtained": data.year_obtained,
                "certificate_url": data.certificate_url,
                "status": QualificationStatus.PENDING.value,
            },
        )
        logger.info(f"Qualification {qualification_id} submitted for employee {employee_id}")
        return await self.get(qualification_id)

    async def approve(self, qualification_id: UUID, actor: ActorContext) -> Qualification:
        """Approve a pending qualification and notify its owner.

        Approving an already approved qualification changes nothing. The
        decision is written only while the record is still pending, so of two
        concurrent decisions exactly one takes effect.

        Args:
            qualification_id: Qualification UUID
            actor: Administrator making the decision

        Returns:
            Approved qualification

        Raises:
            QualificationNotFoundError: If the qualification does not exist
            InvalidTransitionError: If the qualification was rejected
            OwnerNotFoundError: If the owning employee no longer exists
        """
        qualification = await self.get(qualification_id)
        if qualification.status == QualificationStatus.APPROVED:
            return qualification
        if not qualification.can_transition_to(QualificationStatus.APPROVED):
            raise InvalidTransitionError(
                "qualification", qualification.status, QualificationStatus.APPROVED
            )

        owner = await self._get_owner(qualification)

        decided = await self.store.update(
            Collection.QUALIFICATIONS,
            qualification_id,
            {
                "status": QualificationStatus.APPROVED.value,
                "approved_by": actor.employee_id,
                "approved_at": datetime.now(timezone.utc),
                "rejection_reason": None,
            },
            expected={"status": QualificationStatus.PENDING.value},
        )
        if not decided:
            current = await self.get(qualification_id)
            if current.status == QualificationStatus.APPROVED:
                return current
            raise InvalidTransitionError(
                "qualification", current.status, QualificationStatus.APPROVED
            )
        logger.info(f"Qualification {qualification_id} approved by {actor.employee_id}")

        await self.notifications.notify_qualification_approved(
            owner.external_id, qualification.name
        )
        return await self.get(qualification_id)

    async def reject(
        self,
        qualification_id: UUID,
        reason: str,
        actor: ActorContext,
    ) -> Qualification:
        """Reject a pending qualification and notify its owner with the reason.

        The reason is stored as given. Rejecting again with the same reason
        changes nothing. Like approval, the write only applies while the
        record is still pending.

        Args:
            qualification_id: Qualification UUID
            reason: Non-blank rejection reason
            actor: Administrator making the decision

        Returns:
            Rejected qualification

        Raises:
            ValidationFailedError: If the reason is blank
            QualificationNotFoundError: If the qualification does not exist
            InvalidTransitionError: If the qualification was already decided otherwise
            OwnerNotFoundError: If the owning employee no longer exists
        """
        if not reason.strip():
            raise ValidationFailedError("Rejection reason is required", {"field": "reason"})

        qualification = await self.get(qualification_id)
        if self._already_rejected(qualification, reason):
            return qualification
        if not qualification.can_transition_to(QualificationStatus.REJECTED):
            raise InvalidTransitionError(
                "qualification", qualification.status, QualificationStatus.REJECTED
            )

        owner = await self._get_owner(qualification)

        decided = await self.store.update(
            Collection.QUALIFICATIONS,
            qualification_id,
            {
                "status": QualificationStatus.REJECTED.value,
                "rejection_reason": reason,
                "approved_by": None,
                "approved_at": None,
            },
            expected={"status": QualificationStatus.PENDING.value},
        )
        if not decided:
            current = await self.get(qualification_id)
            if self._already_rejected(current, reason):
                return current
            raise InvalidTransitionError(
                "qualification", current.status, QualificationStatus.REJECTED
            )
        logger.info(f"Qualification {qualification_id} rejected by {actor.employee_id}")

        await self.notifications.notify_qualification_rejected(
            owner.external_id, qualification.name, reason
        )
        return await self.get(qualification_id)

    @staticmethod
    def _already_rejected(qualification: Qualification, reason: str) -> bool:
        return (
            qualification.status == QualificationStatus.REJECTED
            and qualification.rejection_reason == reason
        )

    async def delete(self, qualification_id: UUID) -> bool:
        """Delete a qualification and release its certificate.

        The certificate is released before the record is removed. A failed
        release is logged and does not block the delete.

        Returns:
            True if a certificate was released

        Raises:
            QualificationNotFoundError: If the qualification does not exist
        """
        qualification = await self.get(qualification_id)

        released = False
        if qualification.certificate_url:
            released = await self.storage.delete(qualification.certificate_url)
            if not released:
                logger.warning(f"Certificate for qualification {qualification_id} was not released")

        if not await self.store.delete(Collection.QUALIFICATIONS, qualification_id):
            raise QualificationNotFoundError(str(qualification_id))
        logger.info(f"Qualification {qualification_id} deleted")
        return released
