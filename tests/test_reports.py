"""Report assembly tests."""

from datetime import date

import pytest

from conftest import InMemoryRecordStore, add_employee
from skills_audit_api.repositories.record_store import Collection
from skills_audit_api.services.aggregation_service import AggregationService
from skills_audit_api.services.report_service import ReportService


@pytest.fixture
def reports(store: InMemoryRecordStore) -> ReportService:
    return ReportService(AggregationService(store, concurrency=4))


@pytest.fixture
def workforce(store: InMemoryRecordStore):
    """Two engineers and an inactive nurse with a spread of records."""
    ana = add_employee(store, name="Ana", profession="Engineer")
    ben = add_employee(store, name="Ben", profession="Engineer")
    cat = add_employee(store, name="Cat", profession="Nurse", is_active=False)

    for name, status in [("BSc", "approved"), ("MSc", "pending")]:
        store.seed(
            Collection.QUALIFICATIONS,
            {"employee_id": ana.id, "institution": "UCT", "name": name, "status": status},
        )
    store.seed(
        Collection.QUALIFICATIONS,
        {
            "employee_id": ben.id,
            "institution": "UJ",
            "name": "Diploma",
            "status": "rejected",
            "rejection_reason": "Unverified",
        },
    )

    store.seed(
        Collection.TRAININGS,
        {
            "employee_id": ana.id,
            "name": "Safety 101",
            "status": "completed",
            "progress": 100,
            "start_date": date(2026, 2, 1),
            "end_date": date(2026, 2, 3),
        },
    )
    store.seed(
        Collection.TRAININGS,
        {"employee_id": cat.id, "name": "Triage", "status": "in_progress", "progress": 30},
    )
    store.seed(Collection.TRAININGS, {"employee_id": cat.id, "name": "CPR", "status": "suggested"})

    store.seed(
        Collection.SKILLS,
        {"employee_id": ana.id, "name": "Python", "category": "Technical", "proficiency_level": "advanced"},
    )
    store.seed(
        Collection.SKILLS,
        {"employee_id": cat.id, "name": "Triage", "category": "Clinical"},
    )
    return ana, ben, cat


class TestReports:
    """Tests for each report shape."""

    async def test_employee_list(self, reports: ReportService, workforce) -> None:
        """One row per employee with a readable status."""
        report = await reports.employee_list()

        assert [row.name for row in report.rows] == ["Ana", "Ben", "Cat"]
        assert [row.status for row in report.rows] == ["Active", "Active", "Inactive"]
        assert report.rows[0].created_at == date(2026, 1, 1)

    async def test_employee_detail_filtered(self, reports: ReportService, workforce) -> None:
        """Restricting to one employee returns one full bundle."""
        ana, _, _ = workforce

        report = await reports.employee_detail([ana.id])

        assert len(report.employees) == 1
        bundle = report.employees[0]
        assert bundle.employee.id == ana.id
        assert len(bundle.qualifications) == 2
        assert len(bundle.trainings) == 1
        assert len(bundle.skills) == 1
        assert report.partial is False

    async def test_employee_detail_marks_partial(
        self, reports: ReportService, store: InMemoryRecordStore, workforce
    ) -> None:
        """A failing employee makes the report partial but keeps the others."""
        _, ben, _ = workforce
        store.failing_employee_ids.add(ben.id)

        report = await reports.employee_detail()

        assert report.partial is True
        assert [b.complete for b in report.employees] == [True, False, True]

    async def test_skills_audit(self, reports: ReportService, workforce) -> None:
        """Category and profession distributions."""
        summary = await reports.skills_audit()

        assert summary.skill_categories == {"Technical": 1, "Clinical": 1}
        assert summary.employees_by_profession == {"Engineer": 2, "Nurse": 1}

    async def test_workforce_planning(self, reports: ReportService, workforce) -> None:
        """Headcount with employees grouped by profession."""
        ana, ben, cat = workforce

        planning = await reports.workforce_planning()

        assert planning.total_employees == 3
        assert planning.active_employees == 2
        assert [e.id for e in planning.employees_grouped["Engineer"]] == [ana.id, ben.id]
        assert [e.id for e in planning.employees_grouped["Nurse"]] == [cat.id]
        assert planning.training_status_distribution == {
            "completed": 1,
            "in_progress": 1,
            "suggested": 1,
        }

    async def test_qualifications_summary(self, reports: ReportService, workforce) -> None:
        """Per-employee rows add up to the grand totals."""
        summary = await reports.qualifications_summary()

        ana_row = summary.rows[0]
        assert (ana_row.total, ana_row.approved, ana_row.pending, ana_row.rejected) == (2, 1, 1, 0)
        assert summary.total == 3
        assert summary.approved == 1
        assert summary.pending == 1
        assert summary.rejected == 1
        assert summary.total == sum(row.total for row in summary.rows)

    async def test_training_overview(self, reports: ReportService, workforce) -> None:
        """Training statuses per employee and overall."""
        overview = await reports.training_overview()

        cat_row = overview.rows[2]
        assert cat_row.in_progress == 1
        assert cat_row.suggested == 1
        assert overview.total == 3
        assert overview.completed == 1
        assert overview.not_started == 0

    async def test_skills_gap(self, reports: ReportService, workforce) -> None:
        """Every employee is listed, including those with no skills."""
        analysis = await reports.skills_gap()

        assert [len(row.skills) for row in analysis.rows] == [1, 0, 1]
        assert analysis.rows[0].skills[0].name == "Python"
        assert analysis.rows[0].skills[0].proficiency_level == "advanced"
        assert analysis.skill_categories == {"Technical": 1, "Clinical": 1}

    async def test_training_progress(self, reports: ReportService, workforce) -> None:
        """One row per training in creation order."""
        report = await reports.training_progress()

        assert [row.training_name for row in report.rows] == ["Safety 101", "Triage", "CPR"]
        assert report.rows[0].progress == 100
        assert report.rows[0].end_date == date(2026, 2, 3)
