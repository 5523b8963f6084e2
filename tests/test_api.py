"""HTTP API tests with the record store and collaborators overridden."""

from uuid import uuid4

import pytest
from fastapi.testclient import TestClient

from conftest import (
    InMemoryRecordStore,
    RecordingBlobStorage,
    RecordingTransport,
    add_employee,
)
from skills_audit_api.dependencies import (
    get_notification_service,
    get_record_store,
    get_storage_service,
)
from skills_audit_api.main import create_app
from skills_audit_api.models.domain.employee import Employee
from skills_audit_api.repositories.record_store import Collection
from skills_audit_api.security.auth import create_access_token
from skills_audit_api.services.notification_service import NotificationService


@pytest.fixture
def client(
    store: InMemoryRecordStore,
    notifications: NotificationService,
    storage: RecordingBlobStorage,
):
    """Test client wired to the in-memory store and recording collaborators."""
    app = create_app()
    app.dependency_overrides[get_record_store] = lambda: store
    app.dependency_overrides[get_notification_service] = lambda: notifications
    app.dependency_overrides[get_storage_service] = lambda: storage
    with TestClient(app) as test_client:
        yield test_client


def auth_headers(employee: Employee) -> dict[str, str]:
    """Bearer headers for a seeded employee."""
    token = create_access_token(employee.external_id, employee.email)
    return {"Authorization": f"Bearer {token}"}


class TestAuthentication:
    """Tests for token handling and role checks."""

    def test_health_is_public(self, client: TestClient) -> None:
        """The health endpoint needs no token."""
        response = client.get("/health")

        assert response.status_code == 200
        assert response.json() == {"status": "healthy"}
        assert response.headers["X-Content-Type-Options"] == "nosniff"

    def test_missing_token(self, client: TestClient) -> None:
        """Requests without a token are rejected with 401."""
        response = client.get("/api/v1/employees/me")

        assert response.status_code == 401
        assert response.json()["detail"] == "Authentication required"

    def test_invalid_token(self, client: TestClient) -> None:
        """A token with a bad signature is rejected with 401."""
        response = client.get(
            "/api/v1/employees/me", headers={"Authorization": "Bearer not.a.token"}
        )

        assert response.status_code == 401
        assert response.json()["detail"] == "Invalid or expired token"

    def test_unregistered_identity(self, client: TestClient) -> None:
        """A valid token for an unknown employee is forbidden."""
        token = create_access_token("uid-stranger", "stranger@company.com")

        response = client.get(
            "/api/v1/employees/me", headers={"Authorization": f"Bearer {token}"}
        )

        assert response.status_code == 403

    def test_inactive_employee(self, client: TestClient, store: InMemoryRecordStore) -> None:
        """Deactivated employees cannot sign in."""
        inactive = add_employee(store, is_active=False)

        response = client.get("/api/v1/employees/me", headers=auth_headers(inactive))

        assert response.status_code == 403

    def test_own_profile(self, client: TestClient, employee: Employee) -> None:
        """An employee can read their own profile."""
        response = client.get("/api/v1/employees/me", headers=auth_headers(employee))

        assert response.status_code == 200
        assert response.json()["external_id"] == "uid-eve"

    def test_admin_only_endpoint(self, client: TestClient, employee: Employee) -> None:
        """Employees cannot open the dashboard."""
        response = client.get("/api/v1/dashboard", headers=auth_headers(employee))

        assert response.status_code == 403
        assert response.json()["detail"] == "Admin access required"

    def test_other_employees_records_are_off_limits(
        self, client: TestClient, store: InMemoryRecordStore, employee: Employee
    ) -> None:
        """Employees only see their own records."""
        other = add_employee(store)

        response = client.get(
            f"/api/v1/qualifications/employee/{other.id}", headers=auth_headers(employee)
        )

        assert response.status_code == 403


class TestQualificationEndpoints:
    """Tests for the qualification workflow over HTTP."""

    def test_submit_then_approve(
        self,
        client: TestClient,
        transport: RecordingTransport,
        employee: Employee,
        admin: Employee,
    ) -> None:
        """An employee submits, an admin approves, the employee is notified."""
        response = client.post(
            "/api/v1/qualifications",
            json={"institution": "UCT", "name": "BSc", "year_obtained": 2020},
            headers=auth_headers(employee),
        )
        assert response.status_code == 201
        qualification = response.json()
        assert qualification["status"] == "pending"
        assert qualification["employee_id"] == str(employee.id)

        pending = client.get("/api/v1/qualifications/pending", headers=auth_headers(admin))
        assert pending.status_code == 200
        assert [item["qualification"]["id"] for item in pending.json()] == [qualification["id"]]

        approved = client.post(
            f"/api/v1/qualifications/{qualification['id']}/approve",
            headers=auth_headers(admin),
        )
        assert approved.status_code == 200
        assert approved.json()["status"] == "approved"
        assert approved.json()["approved_by"] == str(admin.id)
        assert transport.sent[0]["recipient"] == "uid-eve"

    def test_employee_cannot_approve(
        self, client: TestClient, store: InMemoryRecordStore, employee: Employee
    ) -> None:
        """Approval is an admin action."""
        qualification = store.seed(
            Collection.QUALIFICATIONS,
            {"employee_id": employee.id, "institution": "UCT", "name": "BSc"},
        )

        response = client.post(
            f"/api/v1/qualifications/{qualification.id}/approve",
            headers=auth_headers(employee),
        )

        assert response.status_code == 403

    def test_reject_requires_reason(
        self, client: TestClient, store: InMemoryRecordStore, employee: Employee, admin: Employee
    ) -> None:
        """A blank reason is a 400 with a readable message."""
        qualification = store.seed(
            Collection.QUALIFICATIONS,
            {"employee_id": employee.id, "institution": "UCT", "name": "BSc"},
        )

        response = client.post(
            f"/api/v1/qualifications/{qualification.id}/reject",
            json={"reason": "   "},
            headers=auth_headers(admin),
        )

        assert response.status_code == 400
        assert response.json()["detail"] == "Rejection reason is required"

    def test_decided_qualification_cannot_flip(
        self, client: TestClient, store: InMemoryRecordStore, employee: Employee, admin: Employee
    ) -> None:
        """Approving a rejected qualification is a 400."""
        qualification = store.seed(
            Collection.QUALIFICATIONS,
            {
                "employee_id": employee.id,
                "institution": "UCT",
                "name": "BSc",
                "status": "rejected",
                "rejection_reason": "Illegible",
            },
        )

        response = client.post(
            f"/api/v1/qualifications/{qualification.id}/approve",
            headers=auth_headers(admin),
        )

        assert response.status_code == 400
        assert "rejected" in response.json()["detail"]

    def test_unknown_qualification_is_404(self, client: TestClient, admin: Employee) -> None:
        """Missing records map to 404."""
        response = client.post(
            f"/api/v1/qualifications/{uuid4()}/approve", headers=auth_headers(admin)
        )

        assert response.status_code == 404
        assert response.json()["detail"] == "Qualification not found"

    def test_orphaned_qualification_is_409(
        self, client: TestClient, store: InMemoryRecordStore, admin: Employee
    ) -> None:
        """Deciding a qualification whose owner is gone is a conflict."""
        qualification = store.seed(
            Collection.QUALIFICATIONS,
            {"employee_id": uuid4(), "institution": "UCT", "name": "BSc"},
        )

        response = client.post(
            f"/api/v1/qualifications/{qualification.id}/approve",
            headers=auth_headers(admin),
        )

        assert response.status_code == 409
        assert response.json()["detail"] == "Associated employee not found"


class TestTrainingEndpoints:
    """Tests for the training workflow over HTTP."""

    def test_suggest_and_start(
        self,
        client: TestClient,
        transport: RecordingTransport,
        employee: Employee,
        admin: Employee,
    ) -> None:
        """An admin suggests a training and the employee starts it."""
        response = client.post(
            "/api/v1/trainings/suggest",
            json={"employee_id": str(employee.id), "name": "Safety 101"},
            headers=auth_headers(admin),
        )
        assert response.status_code == 201
        training = response.json()
        assert training["status"] == "suggested"
        assert len(transport.sent) == 1

        started = client.put(
            f"/api/v1/trainings/{training['id']}",
            json={"status": "in_progress", "progress": 10},
            headers=auth_headers(employee),
        )
        assert started.status_code == 200
        assert started.json()["status"] == "in_progress"

    def test_invalid_transition_is_400(
        self, client: TestClient, store: InMemoryRecordStore, employee: Employee
    ) -> None:
        """Skipping straight to completed is refused."""
        training = store.seed(
            Collection.TRAININGS, {"employee_id": employee.id, "name": "Safety 101"}
        )

        response = client.put(
            f"/api/v1/trainings/{training.id}",
            json={"status": "completed"},
            headers=auth_headers(employee),
        )

        assert response.status_code == 400

    def test_unknown_status_in_path_is_422(self, client: TestClient, admin: Employee) -> None:
        """Path statuses are validated against the enum."""
        response = client.get("/api/v1/trainings/status/abandoned", headers=auth_headers(admin))

        assert response.status_code == 422

    def test_store_outage_is_503(
        self, client: TestClient, store: InMemoryRecordStore, employee: Employee
    ) -> None:
        """An unavailable collection surfaces as 503 without internals."""
        store.failing_collections.add(Collection.TRAININGS)

        response = client.get(
            f"/api/v1/trainings/employee/{employee.id}", headers=auth_headers(employee)
        )

        assert response.status_code == 503
        assert response.json() == {"detail": "Record store unavailable"}


class TestEmployeeEndpoints:
    """Tests for employee management over HTTP."""

    def test_create_employee(self, client: TestClient, admin: Employee) -> None:
        """Admins register employees; emails are normalized."""
        response = client.post(
            "/api/v1/employees",
            json={
                "external_id": "uid-new",
                "name": "New Hire",
                "email": "New.Hire@Company.com",
                "profession": "Analyst",
            },
            headers=auth_headers(admin),
        )

        assert response.status_code == 201
        assert response.json()["email"] == "new.hire@company.com"
        assert response.json()["role"] == "employee"

    def test_duplicate_employee_is_409(
        self, client: TestClient, employee: Employee, admin: Employee
    ) -> None:
        """Registering the same identity twice conflicts."""
        response = client.post(
            "/api/v1/employees",
            json={"external_id": "uid-eve", "name": "Eve Again", "email": "eve2@company.com"},
            headers=auth_headers(admin),
        )

        assert response.status_code == 409

    def test_delete_cascades(
        self,
        client: TestClient,
        store: InMemoryRecordStore,
        storage: RecordingBlobStorage,
        employee: Employee,
        admin: Employee,
    ) -> None:
        """Deleting an employee removes everything it owns."""
        store.seed(
            Collection.QUALIFICATIONS,
            {
                "employee_id": employee.id,
                "institution": "UCT",
                "name": "BSc",
                "certificate_url": "https://storage.googleapis.com/skills-audit-test/c.pdf",
            },
        )
        store.seed(Collection.TRAININGS, {"employee_id": employee.id, "name": "Safety"})
        store.seed(Collection.SKILLS, {"employee_id": employee.id, "name": "Python"})

        response = client.delete(f"/api/v1/employees/{employee.id}", headers=auth_headers(admin))

        assert response.status_code == 200
        assert response.json() == {
            "employee_id": str(employee.id),
            "qualifications_deleted": 1,
            "trainings_deleted": 1,
            "skills_deleted": 1,
            "certificates_released": 1,
        }
        assert employee.id not in store.data[Collection.EMPLOYEES]
        assert store.data[Collection.QUALIFICATIONS] == {}
        assert storage.deleted == ["https://storage.googleapis.com/skills-audit-test/c.pdf"]

    def test_dashboard(self, client: TestClient, employee: Employee, admin: Employee) -> None:
        """The dashboard counts the seeded employees."""
        response = client.get("/api/v1/dashboard", headers=auth_headers(admin))

        assert response.status_code == 200
        body = response.json()
        assert body["total_employees"] == 2
        assert body["partial"] is False

    def test_report_endpoint(self, client: TestClient, employee: Employee, admin: Employee) -> None:
        """Reports are served to admins."""
        response = client.get(
            "/api/v1/reports/employees/details",
            params={"employee_id": str(employee.id)},
            headers=auth_headers(admin),
        )

        assert response.status_code == 200
        body = response.json()
        assert [bundle["employee"]["id"] for bundle in body["employees"]] == [str(employee.id)]
