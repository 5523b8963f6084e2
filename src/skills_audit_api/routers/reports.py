"""Reports router."""

from typing import Annotated
from uuid import UUID

from fastapi import APIRouter, Depends, Query

from skills_audit_api.dependencies import get_report_service
from skills_audit_api.models.dto.report import (
    EmployeeDetailReport,
    EmployeeListReport,
    QualificationsSummary,
    SkillsAuditSummary,
    SkillsGapAnalysis,
    TrainingOverview,
    TrainingProgressReport,
    WorkforcePlanning,
)
from skills_audit_api.security.auth import AdminActor
from skills_audit_api.services.report_service import ReportService

router = APIRouter()

ReportServiceDep = Annotated[ReportService, Depends(get_report_service)]


@router.get("/employees", response_model=EmployeeListReport)
async def get_employee_list_report(
    current_user: AdminActor,
    report_service: ReportServiceDep,
) -> EmployeeListReport:
    """Get the flat employee list."""
    return await report_service.employee_list()


@router.get("/employees/details", response_model=EmployeeDetailReport)
async def get_employee_detail_report(
    current_user: AdminActor,
    report_service: ReportServiceDep,
    employee_id: Annotated[list[UUID] | None, Query(description="Restrict to employees")] = None,
) -> EmployeeDetailReport:
    """Get employees joined with their qualifications, trainings and skills."""
    return await report_service.employee_detail(employee_id)


@router.get("/skills-audit", response_model=SkillsAuditSummary)
async def get_skills_audit(
    current_user: AdminActor,
    report_service: ReportServiceDep,
) -> SkillsAuditSummary:
    """Get skills by category and employees by profession."""
    return await report_service.skills_audit()


@router.get("/workforce-planning", response_model=WorkforcePlanning)
async def get_workforce_planning(
    current_user: AdminActor,
    report_service: ReportServiceDep,
) -> WorkforcePlanning:
    """Get headcount, distributions and employees grouped by profession."""
    return await report_service.workforce_planning()


@router.get("/qualifications-summary", response_model=QualificationsSummary)
async def get_qualifications_summary(
    current_user: AdminActor,
    report_service: ReportServiceDep,
) -> QualificationsSummary:
    """Get the qualification status breakdown per employee."""
    return await report_service.qualifications_summary()


@router.get("/training-overview", response_model=TrainingOverview)
async def get_training_overview(
    current_user: AdminActor,
    report_service: ReportServiceDep,
) -> TrainingOverview:
    """Get the training status breakdown per employee."""
    return await report_service.training_overview()


@router.get("/skills-gap", response_model=SkillsGapAnalysis)
async def get_skills_gap(
    current_user: AdminActor,
    report_service: ReportServiceDep,
) -> SkillsGapAnalysis:
    """Get each employee's skills with the category distribution."""
    return await report_service.skills_gap()


@router.get("/training-progress", response_model=TrainingProgressReport)
async def get_training_progress(
    current_user: AdminActor,
    report_service: ReportServiceDep,
) -> TrainingProgressReport:
    """Get the progress of every training."""
    return await report_service.training_progress()
