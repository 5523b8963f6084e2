"""Aggregation service joining per-employee records into dashboard views."""

import asyncio
import logging
from collections.abc import Awaitable, Iterable, Sequence
from typing import Any, TypeVar
from uuid import UUID

from skills_audit_api.exceptions import (
    EmployeeNotFoundError,
    StoreUnavailableError,
    ValidationFailedError,
)
from skills_audit_api.models.domain.employee import Employee
from skills_audit_api.models.domain.qualification import QualificationStatus
from skills_audit_api.models.domain.training import TrainingStatus
from skills_audit_api.models.dto.dashboard import DashboardResponse
from skills_audit_api.models.dto.employee import EmployeeDetails, EmployeeStatistics
from skills_audit_api.models.dto.report import EmployeeBundle, EmployeeTotals
from skills_audit_api.repositories.record_store import (
    RECORD_TYPES,
    Collection,
    RecordStore,
    resolve_collection,
)
from skills_audit_api.utils.secure_logging import log_warning

logger = logging.getLogger(__name__)

T = TypeVar("T")

DEFAULT_FANOUT_CONCURRENCY = 8
DEFAULT_PREVIEW_LIMIT = 5

# Sub-collections owned by an employee, keyed by their bundle attribute
SUB_COLLECTIONS: dict[str, Collection] = {
    "qualifications": Collection.QUALIFICATIONS,
    "trainings": Collection.TRAININGS,
    "skills": Collection.SKILLS,
}


class AggregationService:
    """Service computing joins and distributions over the record store.

    The store offers no joins, so per-employee views are built by fanning out
    one query per employee and sub-collection. Fan-out runs with bounded
    concurrency; every task returns its own result and results are merged by
    position afterwards.
    """

    def __init__(
        self,
        store: RecordStore,
        concurrency: int = DEFAULT_FANOUT_CONCURRENCY,
        preview_limit: int = DEFAULT_PREVIEW_LIMIT,
    ) -> None:
        """Initialize service with a record store and fan-out limits."""
        if concurrency < 1:
            raise ValueError("concurrency must be at least 1")
        self.store = store
        self.concurrency = concurrency
        self.preview_limit = preview_limit

    # =========================================================================
    # Fan-out
    # =========================================================================

    async def _load_bundle(
        self,
        employee: Employee,
        include: Sequence[str],
        semaphore: asyncio.Semaphore,
    ) -> EmployeeBundle:
        """Load the requested sub-collections of one employee.

        A store failure leaves the bundle empty and marks it incomplete.
        """
        async with semaphore:
            try:
                results = await asyncio.gather(
                    *(
                        self.store.query(SUB_COLLECTIONS[name], "employee_id", employee.id)
                        for name in include
                    )
                )
            except StoreUnavailableError as e:
                log_warning(logger, f"Could not load records for employee {employee.id}", e)
                return EmployeeBundle(employee=employee, complete=False)

        return EmployeeBundle(employee=employee, **dict(zip(include, results)))

    async def fan_out(
        self,
        employees: Sequence[Employee],
        include: Iterable[str] = ("qualifications", "trainings", "skills"),
    ) -> list[EmployeeBundle]:
        """Join every employee with its sub-records.

        Args:
            employees: Employees to expand
            include: Sub-collections to load (qualifications, trainings, skills)

        Returns:
            One bundle per employee, in the order given
        """
        include = tuple(include)
        unknown = [name for name in include if name not in SUB_COLLECTIONS]
        if unknown:
            raise ValidationFailedError(
                f"Unknown sub-collection(s): {', '.join(unknown)}", {"include": unknown}
            )

        semaphore = asyncio.Semaphore(self.concurrency)
        bundles = await asyncio.gather(
            *(self._load_bundle(employee, include, semaphore) for employee in employees)
        )

        failed = sum(1 for bundle in bundles if not bundle.complete)
        if failed:
            logger.warning(f"Fan-out finished with {failed} of {len(bundles)} employees incomplete")
        return list(bundles)

    async def per_employee_totals(
        self, employees: Sequence[Employee] | None = None
    ) -> list[EmployeeTotals]:
        """Count qualifications, trainings and skills per employee.

        Args:
            employees: Employees to count for; all employees if omitted

        Returns:
            Totals in employee order
        """
        if employees is None:
            employees = await self.list_employees()
        bundles = await self.fan_out(employees)
        return [
            EmployeeTotals(
                employee_id=bundle.employee.id,
                qualifications=len(bundle.qualifications),
                trainings=len(bundle.trainings),
                skills=len(bundle.skills),
                complete=bundle.complete,
            )
            for bundle in bundles
        ]

    # =========================================================================
    # Distributions
    # =========================================================================

    async def group_by(self, collection: Collection | str, field: str) -> dict[str, int]:
        """Count the records of a collection grouped by one field's value.

        Every record lands in exactly one group, so the counts sum to the
        collection size. Records without a value are grouped under "".

        Args:
            collection: Collection name
            field: Field to group by

        Returns:
            Mapping of field value to record count
        """
        coll = resolve_collection(collection)
        if field not in RECORD_TYPES[coll].model_fields:
            raise ValidationFailedError(
                f"Cannot group {coll.value} by '{field}'",
                {"collection": coll.value, "field": field},
            )

        counts: dict[str, int] = {}
        for record in await self.store.list_all(coll):
            value = getattr(record, field)
            key = "" if value is None else str(value)
            counts[key] = counts.get(key, 0) + 1
        return counts

    async def employees_by_profession(self) -> dict[str, int]:
        """Employee count per profession."""
        return await self.group_by(Collection.EMPLOYEES, "profession")

    async def training_status_distribution(self) -> dict[str, int]:
        """Training count per status."""
        return await self.group_by(Collection.TRAININGS, "status")

    async def skill_categories_distribution(self) -> dict[str, int]:
        """Skill count per category."""
        return await self.group_by(Collection.SKILLS, "category")

    # =========================================================================
    # Views
    # =========================================================================

    async def list_employees(self) -> list[Employee]:
        """Get all employees in creation order."""
        return await self.store.list_all(Collection.EMPLOYEES)

    async def _section(self, name: str, pending: Awaitable[T], default: T) -> tuple[T, bool]:
        """Await one dashboard section, degrading to a default on store failure."""
        try:
            return await pending, True
        except StoreUnavailableError as e:
            log_warning(logger, f"Dashboard section '{name}' unavailable", e)
            return default, False

    async def get_dashboard(self) -> DashboardResponse:
        """Build the administrator dashboard.

        The employee list is required; every other section degrades to empty
        on store failure and marks the response as partial.

        Returns:
            DashboardResponse with counts, previews and chart data
        """
        employees = await self.list_employees()
        limit = self.preview_limit

        sections: list[tuple[Any, bool]] = await asyncio.gather(
            self._section(
                "pending_qualifications",
                self.store.query(Collection.QUALIFICATIONS, "status", QualificationStatus.PENDING),
                [],
            ),
            self._section(
                "completed_trainings",
                self.store.query(Collection.TRAININGS, "status", TrainingStatus.COMPLETED),
                [],
            ),
            self._section(
                "in_progress_trainings",
                self.store.query(Collection.TRAININGS, "status", TrainingStatus.IN_PROGRESS),
                [],
            ),
            self._section(
                "suggested_trainings",
                self.store.query(Collection.TRAININGS, "status", TrainingStatus.SUGGESTED),
                [],
            ),
            self._section("employees_by_profession", self.employees_by_profession(), {}),
            self._section("training_status_distribution", self.training_status_distribution(), {}),
            self._section("skill_categories", self.skill_categories_distribution(), {}),
        )
        (
            (pending, pending_ok),
            (completed, completed_ok),
            (in_progress, in_progress_ok),
            (suggested, suggested_ok),
            (by_profession, profession_ok),
            (by_status, status_ok),
            (by_category, category_ok),
        ) = sections

        bundles = await self.fan_out(employees, include=("qualifications",))
        failed_ids = [bundle.employee.id for bundle in bundles if not bundle.complete]

        recent = sorted(employees, key=lambda e: e.created_at, reverse=True)[:limit]
        partial = bool(failed_ids) or not all(ok for _, ok in sections)

        if partial:
            logger.warning("Dashboard built from partial data")

        return DashboardResponse(
            total_employees=len(employees),
            active_employees=sum(1 for e in employees if e.is_active),
            total_qualifications=sum(len(bundle.qualifications) for bundle in bundles),
            pending_approvals=len(pending),
            completed_trainings=len(completed),
            in_progress_trainings=len(in_progress),
            recent_employees=recent,
            pending_qualifications=pending[:limit],
            suggested_trainings=suggested[:limit],
            employees_by_profession=by_profession,
            training_status_distribution=by_status,
            skill_categories=by_category,
            partial=partial,
            failed_employee_ids=failed_ids,
        )

    async def employee_details(self, employee_id: UUID) -> EmployeeDetails:
        """Get one employee with all of its records and statistics.

        Store failures propagate; a detail page is not served from partial data.

        Raises:
            EmployeeNotFoundError: If the employee does not exist
        """
        employee = await self.store.get(Collection.EMPLOYEES, employee_id)
        if employee is None:
            raise EmployeeNotFoundError(str(employee_id))

        qualifications, trainings, skills = await asyncio.gather(
            self.store.query(Collection.QUALIFICATIONS, "employee_id", employee_id),
            self.store.query(Collection.TRAININGS, "employee_id", employee_id),
            self.store.query(Collection.SKILLS, "employee_id", employee_id),
        )

        statistics = EmployeeStatistics(
            total_qualifications=len(qualifications),
            approved_qualifications=sum(
                1 for q in qualifications if q.status == QualificationStatus.APPROVED
            ),
            pending_qualifications=sum(
                1 for q in qualifications if q.status == QualificationStatus.PENDING
            ),
            completed_trainings=sum(1 for t in trainings if t.status == TrainingStatus.COMPLETED),
            in_progress_trainings=sum(
                1 for t in trainings if t.status == TrainingStatus.IN_PROGRESS
            ),
            total_skills=len(skills),
        )

        return EmployeeDetails(
            employee=employee,
            qualifications=sorted(qualifications, key=lambda q: q.created_at, reverse=True),
            trainings=sorted(trainings, key=lambda t: t.created_at, reverse=True),
            skills=skills,
            statistics=statistics,
        )
