"""Report service shaping aggregated workforce data for renderers."""

import asyncio
import logging
from collections.abc import Sequence
from datetime import datetime, timezone
from uuid import UUID

from skills_audit_api.models.domain.employee import Employee
from skills_audit_api.models.domain.qualification import QualificationStatus
from skills_audit_api.models.domain.training import TrainingStatus
from skills_audit_api.models.dto.report import (
    EmployeeDetailReport,
    EmployeeListReport,
    EmployeeListRow,
    QualificationsSummary,
    QualificationStatusRow,
    SkillEntry,
    SkillsAuditSummary,
    SkillsGapAnalysis,
    SkillsGapRow,
    TrainingOverview,
    TrainingProgressReport,
    TrainingProgressRow,
    TrainingStatusRow,
    WorkforcePlanning,
)
from skills_audit_api.repositories.record_store import Collection
from skills_audit_api.services.aggregation_service import AggregationService

logger = logging.getLogger(__name__)


class ReportService:
    """Service for building report data.

    Reports are plain structures; turning them into PDF or spreadsheet bytes
    is left to the renderer.
    """

    def __init__(self, aggregation: AggregationService) -> None:
        """Initialize service with the aggregation engine."""
        self.aggregation = aggregation

    async def _employees(self, employee_ids: Sequence[UUID] | None = None) -> list[Employee]:
        employees = await self.aggregation.list_employees()
        if employee_ids is None:
            return employees
        wanted = set(employee_ids)
        return [e for e in employees if e.id in wanted]

    async def employee_list(self) -> EmployeeListReport:
        """Flat employee list without sub-records.

        Returns:
            EmployeeListReport with one row per employee
        """
        employees = await self._employees()
        rows = [
            EmployeeListRow(
                name=employee.name,
                email=employee.email,
                phone=employee.phone,
                profession=employee.profession,
                status="Active" if employee.is_active else "Inactive",
                created_at=employee.created_at.date(),
            )
            for employee in employees
        ]
        return EmployeeListReport(generated_at=datetime.now(timezone.utc), rows=rows)

    async def employee_detail(
        self, employee_ids: Sequence[UUID] | None = None
    ) -> EmployeeDetailReport:
        """Employees joined with their qualifications, trainings and skills.

        Args:
            employee_ids: Restrict the report to these employees

        Returns:
            EmployeeDetailReport, partial if some employees could not be loaded
        """
        employees = await self._employees(employee_ids)
        bundles = await self.aggregation.fan_out(employees)
        return EmployeeDetailReport(
            generated_at=datetime.now(timezone.utc),
            employees=bundles,
            partial=any(not bundle.complete for bundle in bundles),
        )

    async def skills_audit(self) -> SkillsAuditSummary:
        """Skills by category and employees by profession."""
        categories, professions = await asyncio.gather(
            self.aggregation.skill_categories_distribution(),
            self.aggregation.employees_by_profession(),
        )
        return SkillsAuditSummary(
            skill_categories=categories,
            employees_by_profession=professions,
        )

    async def workforce_planning(self) -> WorkforcePlanning:
        """Headcount and distributions, with employees grouped by profession."""
        employees, professions, statuses = await asyncio.gather(
            self._employees(),
            self.aggregation.employees_by_profession(),
            self.aggregation.training_status_distribution(),
        )

        grouped: dict[str, list[Employee]] = {}
        for employee in employees:
            grouped.setdefault(employee.profession, []).append(employee)

        return WorkforcePlanning(
            total_employees=len(employees),
            active_employees=sum(1 for e in employees if e.is_active),
            employees_by_profession=professions,
            training_status_distribution=statuses,
            employees_grouped=grouped,
        )

    async def qualifications_summary(self) -> QualificationsSummary:
        """Qualification status breakdown per employee."""
        employees = await self._employees()
        bundles = await self.aggregation.fan_out(employees, include=("qualifications",))

        rows = []
        for bundle in bundles:
            statuses = [q.status for q in bundle.qualifications]
            rows.append(
                QualificationStatusRow(
                    employee_id=bundle.employee.id,
                    employee_name=bundle.employee.name,
                    total=len(statuses),
                    approved=statuses.count(QualificationStatus.APPROVED),
                    pending=statuses.count(QualificationStatus.PENDING),
                    rejected=statuses.count(QualificationStatus.REJECTED),
                )
            )

        return QualificationsSummary(
            rows=rows,
            total=sum(row.total for row in rows),
            approved=sum(row.approved for row in rows),
            pending=sum(row.pending for row in rows),
            rejected=sum(row.rejected for row in rows),
            partial=any(not bundle.complete for bundle in bundles),
        )

    async def training_overview(self) -> TrainingOverview:
        """Training status breakdown per employee."""
        employees = await self._employees()
        bundles = await self.aggregation.fan_out(employees, include=("trainings",))

        rows = []
        for bundle in bundles:
            statuses = [t.status for t in bundle.trainings]
            rows.append(
                TrainingStatusRow(
                    employee_id=bundle.employee.id,
                    employee_name=bundle.employee.name,
                    total=len(statuses),
                    completed=statuses.count(TrainingStatus.COMPLETED),
                    in_progress=statuses.count(TrainingStatus.IN_PROGRESS),
                    not_started=statuses.count(TrainingStatus.NOT_STARTED),
                    suggested=statuses.count(TrainingStatus.SUGGESTED),
                )
            )

        return TrainingOverview(
            rows=rows,
            total=sum(row.total for row in rows),
            completed=sum(row.completed for row in rows),
            in_progress=sum(row.in_progress for row in rows),
            not_started=sum(row.not_started for row in rows),
            suggested=sum(row.suggested for row in rows),
            partial=any(not bundle.complete for bundle in bundles),
        )

    async def skills_gap(self) -> SkillsGapAnalysis:
        """Skills held by each employee plus the category distribution."""
        employees = await self._employees()
        bundles, categories = await asyncio.gather(
            self.aggregation.fan_out(employees, include=("skills",)),
            self.aggregation.skill_categories_distribution(),
        )

        rows = [
            SkillsGapRow(
                employee_id=bundle.employee.id,
                employee_name=bundle.employee.name,
                skills=[
                    SkillEntry(
                        name=skill.name,
                        proficiency_level=skill.proficiency_level,
                        category=skill.category,
                    )
                    for skill in bundle.skills
                ],
            )
            for bundle in bundles
        ]
        return SkillsGapAnalysis(
            rows=rows,
            skill_categories=categories,
            partial=any(not bundle.complete for bundle in bundles),
        )

    async def training_progress(self) -> TrainingProgressReport:
        """Progress of every training, in creation order."""
        trainings = await self.aggregation.store.list_all(Collection.TRAININGS)
        rows = [
            TrainingProgressRow(
                training_name=training.name,
                employee_id=training.employee_id,
                status=training.status,
                progress=training.progress,
                start_date=training.start_date,
                end_date=training.end_date,
            )
            for training in trainings
        ]
        logger.debug(f"Training progress report built with {len(rows)} rows")
        return TrainingProgressReport(generated_at=datetime.now(timezone.utc), rows=rows)
