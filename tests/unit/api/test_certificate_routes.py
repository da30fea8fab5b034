"""Unit tests for certificate routes."""

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
class TestIssueCertificate:
    """Tests for POST /registrations/{id}/certificate."""

    def test_issue_certificate(
        self, client: TestClient, registry: SeminarRegistry, registration: Registration
    ) -> None:
        """201 with the certificate."""
        registry.attendance.record(registration.id, True)

        response = client.post(f"/api/v1/registrations/{registration.id}/certificate")

        assert response.status_code == 201
        data = response.json()["data"]
        assert data["registration_id"] == registration.id
        assert data["certificate_url"].startswith(f"/certificates/cert_{registration.id}_")

    def test_issue_certificate_idempotent(
        self, client: TestClient, registry: SeminarRegistry, registration: Registration
    ) -> None:
        """A second call returns the same certificate."""
        registry.attendance.record(registration.id, True)

        first = client.post(f"/api/v1/registrations/{registration.id}/certificate")
        second = client.post(f"/api/v1/registrations/{registration.id}/certificate")

        assert second.json()["data"]["id"] == first.json()["data"]["id"]
        assert second.json()["data"]["certificate_url"] == first.json()["data"]["certificate_url"]

    def test_issue_certificate_without_attendance(
        self, client: TestClient, registration: Registration
    ) -> None:
        """400 when the participant did not attend."""
        response = client.post(f"/api/v1/registrations/{registration.id}/certificate")

        assert response.status_code == 400
        assert "did not attend" in response.json()["error"]

    def test_issue_certificate_not_found(self, client: TestClient) -> None:
        """404 for unknown registrations."""
        assert client.post("/api/v1/registrations/999/certificate").status_code == 404


@pytest.mark.unit
class TestReadCertificates:
    """Tests for GET /registrations/{id}/certificate and GET /certificates."""

    def test_get_certificate_absent(self, client: TestClient, registration: Registration) -> None:
        """data is null before issuance."""
        response = client.get(f"/api/v1/registrations/{registration.id}/certificate")

        assert response.status_code == 200
        assert response.json()["data"] is None

    def test_get_certificate(
        self, client: TestClient, registry: SeminarRegistry, registration: Registration
    ) -> None:
        """The issued certificate is returned."""
        registry.attendance.record(registration.id, True)
        issued = registry.certificates.issue(registration.id)

        response = client.get(f"/api/v1/registrations/{registration.id}/certificate")

        assert response.json()["data"]["id"] == issued.id

    def test_list_certificates(
        self,
        client: TestClient,
        registry: SeminarRegistry,
        registration: Registration,
        participant: User,
    ) -> None:
        """Listings include seminar and participant details."""
        registry.attendance.record(registration.id, True)
        registry.certificates.issue(registration.id)

        response = client.get("/api/v1/certificates")

        assert response.status_code == 200
        data = response.json()["data"]
        assert len(data) == 1
        assert data[0]["participant_name"] == participant.name
        assert data[0]["seminar_id"] == registration.seminar_id
