"""Data transfer objects package."""

from skills_audit_api.models.dto.dashboard import DashboardResponse
from skills_audit_api.models.dto.employee import (
    EmployeeCreate,
    EmployeeDeletionResult,
    EmployeeDetails,
    EmployeeStatistics,
    EmployeeUpdate,
)
from skills_audit_api.models.dto.qualification import (
    QualificationCreate,
    QualificationReject,
    QualificationWithEmployee,
)
from skills_audit_api.models.dto.report import (
    EmployeeBundle,
    EmployeeDetailReport,
    EmployeeListReport,
    EmployeeListRow,
    EmployeeTotals,
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
from skills_audit_api.models.dto.skill import SkillCreate, SkillUpdate
from skills_audit_api.models.dto.training import (
    TrainingCreate,
    TrainingSuggest,
    TrainingUpdate,
    TrainingWithEmployee,
)

__all__ = [
    "DashboardResponse",
    "EmployeeBundle",
    "EmployeeCreate",
    "EmployeeDeletionResult",
    "EmployeeDetailReport",
    "EmployeeDetails",
    "EmployeeListReport",
    "EmployeeListRow",
    "EmployeeStatistics",
    "EmployeeTotals",
    "EmployeeUpdate",
    "QualificationCreate",
    "QualificationReject",
    "QualificationStatusRow",
    "QualificationWithEmployee",
    "QualificationsSummary",
    "SkillCreate",
    "SkillEntry",
    "SkillUpdate",
    "SkillsAuditSummary",
    "SkillsGapAnalysis",
    "SkillsGapRow",
    "TrainingCreate",
    "TrainingOverview",
    "TrainingProgressReport",
    "TrainingProgressRow",
    "TrainingStatusRow",
    "TrainingSuggest",
    "TrainingUpdate",
    "TrainingWithEmployee",
    "WorkforcePlanning",
]
