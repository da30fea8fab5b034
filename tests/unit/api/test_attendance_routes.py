"""Unit tests for attendance routes."""

from collections.abc import Callable

import pytest
from fastapi.testclient import TestClient

from seminar_registry.entity_store import Registration, Seminar, User
from seminar_registry.workflow import SeminarRegistry


@pytest.fixture
def registration(
    registry: SeminarRegistry, participant: User, make_seminar: Callable[..., Seminar]
) -> Registration:
    """An approved registration."""
    return registry.registrations.create(make_seminar().id, participant.id)


@pytest.mark.unit
class TestRecordAttendance:
    """Tests for PUT /registrations/{id}/attendance."""

    def test_record_attendance(self, client: TestClient, registration: Registration) -> None:
        """200 with the attendance row."""
        response = client.put(
            f"/api/v1/registrations/{registration.id}/attendance", json={"attended": True}
        )

        assert response.status_code == 200
        data = response.json()["data"]
        assert data["registration_id"] == registration.id
        assert data["attended"] is True

    def test_record_attendance_twice(self, client: TestClient, registration: Registration) -> None:
        """The second call updates the same row."""
        first = client.put(
            f"/api/v1/registrations/{registration.id}/attendance", json={"attended": True}
        )
        second = client.put(
            f"/api/v1/registrations/{registration.id}/attendance", json={"attended": False}
        )

        assert second.json()["data"]["id"] == first.json()["data"]["id"]
        assert second.json()["data"]["attended"] is False

    def test_record_attendance_pending(
        self, client: TestClient, registry: SeminarRegistry, registration: Registration
    ) -> None:
        """400 for registrations that are not approved or paid."""
        registry.registrations.update_status(registration.id, "pending")

        response = client.put(
            f"/api/v1/registrations/{registration.id}/attendance", json={"attended": True}
        )

        assert response.status_code == 400
        assert "approved or paid" in response.json()["error"]

    def test_record_attendance_not_found(self, client: TestClient) -> None:
        """404 for unknown registrations."""
        response = client.put("/api/v1/registrations/999/attendance", json={"attended": True})
        assert response.status_code == 404

    def test_record_attendance_missing_body(
        self, client: TestClient, registration: Registration
    ) -> None:
        """422 without the attended flag."""
        response = client.put(f"/api/v1/registrations/{registration.id}/attendance", json={})
        assert response.status_code == 422


@pytest.mark.unit
class TestGetAttendance:
    """Tests for GET /registrations/{id}/attendance."""

    def test_get_attendance_absent(self, client: TestClient, registration: Registration) -> None:
        """data is null when nothing is recorded."""
        response = client.get(f"/api/v1/registrations/{registration.id}/attendance")

        assert response.status_code == 200
        assert response.json() == {"data": None, "error": None}

    def test_get_attendance(
        self, client: TestClient, registry: SeminarRegistry, registration: Registration
    ) -> None:
        """The recorded row is returned."""
        registry.attendance.record(registration.id, True)

        response = client.get(f"/api/v1/registrations/{registration.id}/attendance")

        assert response.status_code == 200
        assert response.json()["data"]["attended"] is True
