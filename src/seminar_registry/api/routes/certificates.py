"""Certificate endpoints."""

from fastapi import APIRouter, status

from seminar_registry.api.dependencies import RegistryDep
from seminar_registry.api.models import (
    APIResponse,
    CertificateDetailsResponse,
    CertificateResponse,
    certificate_details_to_response,
    certificate_to_response,
)

router = APIRouter(tags=["certificates"])


@router.get("/certificates", response_model=APIResponse[list[CertificateDetailsResponse]])
def list_certificates(registry: RegistryDep) -> APIResponse[list[CertificateDetailsResponse]]:
    """List all issued certificates."""
    certificates = registry.certificates.list_all()
    return APIResponse(data=[certificate_details_to_response(c) for c in certificates])


@router.post(
    "/registrations/{registration_id}/certificate",
    response_model=APIResponse[CertificateResponse],
    status_code=status.HTTP_201_CREATED,
)
def issue_certificate(
    registration_id: int, registry: RegistryDep
) -> APIResponse[CertificateResponse]:
    """Issue a certificate, or return the one already issued."""
    certificate = registry.certificates.issue(registration_id)
    return APIResponse(data=certificate_to_response(certificate))


@router.get(
    "/registrations/{registration_id}/certificate",
    response_model=APIResponse[CertificateResponse],
)
def get_certificate(
    registration_id: int, registry: RegistryDep
) -> APIResponse[CertificateResponse]:
    """Get the certificate for a registration. Data is null if none was issued."""
    certificate = registry.certificates.get_by_registration(registration_id)
    if certificate is None:
        return APIResponse(data=None)
    return APIResponse(data=certificate_to_response(certificate))
