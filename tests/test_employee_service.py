"""Employee and skill service tests."""

from datetime import date
from uuid import uuid4

import pytest

from conftest import InMemoryRecordStore, RecordingBlobStorage, RecordingTransport, add_employee
from skills_audit_api.exceptions import (
    EmployeeAlreadyExistsError,
    EmployeeNotFoundError,
    SkillNotFoundError,
)
from skills_audit_api.models.domain.employee import Employee, EmployeeRole
from skills_audit_api.models.domain.skill import ProficiencyLevel
from skills_audit_api.models.dto.employee import EmployeeCreate, EmployeeUpdate
from skills_audit_api.models.dto.skill import SkillCreate, SkillUpdate
from skills_audit_api.repositories.record_store import Collection
from skills_audit_api.services.employee_service import EmployeeService
from skills_audit_api.services.notification_service import NotificationService
from skills_audit_api.services.skill_service import SkillService


@pytest.fixture
def service(
    store: InMemoryRecordStore,
    notifications: NotificationService,
    storage: RecordingBlobStorage,
) -> EmployeeService:
    return EmployeeService(store, notifications, storage)


class TestEmployeeService:
    """Tests for employee records."""

    async def test_create_registers_employee(self, service: EmployeeService) -> None:
        """New employees get the employee role and a normalized email."""
        employee = await service.create(
            EmployeeCreate(external_id="uid-new", name="New Hire", email="New@Company.com")
        )

        assert employee.role == EmployeeRole.EMPLOYEE
        assert employee.email == "new@company.com"
        assert employee.is_active is True

    async def test_create_duplicate(self, service: EmployeeService, employee: Employee) -> None:
        """Identity references are unique."""
        with pytest.raises(EmployeeAlreadyExistsError):
            await service.create(
                EmployeeCreate(external_id="uid-eve", name="Eve", email="eve@company.com")
            )

    async def test_list_is_sorted_by_name(
        self, service: EmployeeService, store: InMemoryRecordStore
    ) -> None:
        """Employees are listed alphabetically, case-insensitively."""
        for name in ["zed", "Amy", "bob"]:
            add_employee(store, name=name)

        employees = await service.list_employees()

        assert [e.name for e in employees] == ["Amy", "bob", "zed"]

    async def test_update_notifies_employee(
        self, service: EmployeeService, transport: RecordingTransport, employee: Employee
    ) -> None:
        """Profile edits are saved and announced to the employee."""
        updated = await service.update(employee.id, EmployeeUpdate(profession="Team Lead"))

        assert updated.profession == "Team Lead"
        assert len(transport.sent) == 1
        assert transport.sent[0]["recipient"] == "uid-eve"
        assert transport.sent[0]["title"] == "Profile Updated"

    async def test_update_ignores_cleared_required_fields(
        self, service: EmployeeService, employee: Employee
    ) -> None:
        """Required fields cannot be blanked with null."""
        updated = await service.update(
            employee.id, EmployeeUpdate(name=None, phone="+27 11 000"), notify=False
        )

        assert updated.name == "Eve Employee"
        assert updated.phone == "+27 11 000"

    async def test_update_missing(self, service: EmployeeService) -> None:
        """Updating an unknown employee raises."""
        with pytest.raises(EmployeeNotFoundError):
            await service.update(uuid4(), EmployeeUpdate(name="Ghost"))

    async def test_toggle_active(self, service: EmployeeService, employee: Employee) -> None:
        """Toggling flips the active flag both ways."""
        assert (await service.toggle_active(employee.id)).is_active is False
        assert (await service.toggle_active(employee.id)).is_active is True

    async def test_delete_cascades_children_first(
        self,
        service: EmployeeService,
        store: InMemoryRecordStore,
        storage: RecordingBlobStorage,
        events: list[tuple],
    ) -> None:
        """Children and blobs go before the employee record."""
        employee = add_employee(
            store, profile_image_url="https://storage.googleapis.com/skills-audit-test/p.jpg"
        )
        other = add_employee(store)
        store.seed(
            Collection.QUALIFICATIONS,
            {
                "employee_id": employee.id,
                "institution": "UCT",
                "name": "BSc",
                "certificate_url": "https://storage.googleapis.com/skills-audit-test/c.pdf",
            },
        )
        store.seed(Collection.QUALIFICATIONS, {"employee_id": employee.id, "institution": "UCT", "name": "MSc"})
        store.seed(Collection.TRAININGS, {"employee_id": employee.id, "name": "Safety"})
        store.seed(Collection.SKILLS, {"employee_id": employee.id, "name": "Python"})
        kept = store.seed(Collection.SKILLS, {"employee_id": other.id, "name": "Go"})

        result = await service.delete(employee.id)

        assert result.qualifications_deleted == 2
        assert result.trainings_deleted == 1
        assert result.skills_deleted == 1
        assert result.certificates_released == 1
        assert storage.deleted == [
            "https://storage.googleapis.com/skills-audit-test/c.pdf",
            "https://storage.googleapis.com/skills-audit-test/p.jpg",
        ]
        assert events[-1] == ("delete", Collection.EMPLOYEES, employee.id)
        assert list(store.data[Collection.SKILLS]) == [kept.id]
        assert other.id in store.data[Collection.EMPLOYEES]

    async def test_delete_missing(self, service: EmployeeService) -> None:
        """Deleting an unknown employee raises."""
        with pytest.raises(EmployeeNotFoundError):
            await service.delete(uuid4())


class TestSkillService:
    """Tests for skill records."""

    async def test_create_and_list_sorted(
        self, store: InMemoryRecordStore, employee: Employee
    ) -> None:
        """Skills are listed by category, then name."""
        service = SkillService(store)
        await service.create(employee.id, SkillCreate(name="Python", category="Technical"))
        await service.create(employee.id, SkillCreate(name="Mentoring", category="Leadership"))
        await service.create(employee.id, SkillCreate(name="Docker", category="Technical"))

        skills = await service.list_for_employee(employee.id)

        assert [s.name for s in skills] == ["Mentoring", "Docker", "Python"]

    async def test_create_for_unknown_employee(self, store: InMemoryRecordStore) -> None:
        """Skills need an existing owner."""
        with pytest.raises(EmployeeNotFoundError):
            await SkillService(store).create(uuid4(), SkillCreate(name="Python"))

    async def test_update_allows_clearing_optional_fields(
        self, store: InMemoryRecordStore, employee: Employee
    ) -> None:
        """Optional fields can be cleared, required ones are kept."""
        service = SkillService(store)
        skill = await service.create(
            employee.id,
            SkillCreate(name="Python", years_of_experience=4, last_used=date(2026, 1, 5)),
        )

        updated = await service.update(
            skill.id,
            SkillUpdate(
                name=None,
                proficiency_level=ProficiencyLevel.EXPERT,
                years_of_experience=None,
            ),
        )

        assert updated.name == "Python"
        assert updated.proficiency_level == ProficiencyLevel.EXPERT
        assert updated.years_of_experience is None
        assert updated.last_used == date(2026, 1, 5)

    async def test_delete_missing(self, store: InMemoryRecordStore) -> None:
        """Deleting an unknown skill raises."""
        with pytest.raises(SkillNotFoundError):
            await SkillService(store).delete(uuid4())
