"""Registration lifecycle endpoints."""

from fastapi import APIRouter, status

from seminar_registry.api.dependencies import RegistryDep
from seminar_registry.api.models import (
    APIResponse,
    RegistrationCreate,
    RegistrationDetailsResponse,
    RegistrationResponse,
    RegistrationStatusUpdate,
    registration_details_to_response,
    registration_to_response,
)
from seminar_registry.workflow import RegistrationNotFoundError

router = APIRouter(prefix="/registrations", tags=["registrations"])


@router.get("", response_model=APIResponse[list[RegistrationDetailsResponse]])
def list_registrations(registry: RegistryDep) -> APIResponse[list[RegistrationDetailsResponse]]:
    """List all registrations with seminar and participant details."""
    registrations = registry.registrations.list_all()
    return APIResponse(data=[registration_details_to_response(r) for r in registrations])


@router.post(
    "",
    response_model=APIResponse[RegistrationResponse],
    status_code=status.HTTP_201_CREATED,
)
def create_registration(
    registration: RegistrationCreate, registry: RegistryDep
) -> APIResponse[RegistrationResponse]:
    """Register a participant for a seminar.

    The initial status follows the seminar's registration type.
    """
    created = registry.registrations.create(
        seminar_id=registration.seminar_id,
        participant_id=registration.participant_id,
        requested_status=registration.status,
    )
    return APIResponse(data=registration_to_response(created))


@router.get("/{registration_id}", response_model=APIResponse[RegistrationResponse])
def get_registration(
    registration_id: int, registry: RegistryDep
) -> APIResponse[RegistrationResponse]:
    """Get a registration by ID."""
    registration = registry.registrations.get(registration_id)
    if registration is None:
        raise RegistrationNotFoundError(f"Registration {registration_id} not found")
    return APIResponse(data=registration_to_response(registration))


@router.patch("/{registration_id}/status", response_model=APIResponse[RegistrationResponse])
def update_registration_status(
    registration_id: int, update: RegistrationStatusUpdate, registry: RegistryDep
) -> APIResponse[RegistrationResponse]:
    """Set a registration's status (approve, reject, mark paid, ...)."""
    registration = registry.registrations.update_status(registration_id, update.status)
    if registration is None:
        raise RegistrationNotFoundError(f"Registration {registration_id} not found")
    return APIResponse(data=registration_to_response(registration))


@router.post("/{registration_id}/cancel", response_model=APIResponse[bool])
def cancel_registration(registration_id: int, registry: RegistryDep) -> APIResponse[bool]:
    """Cancel a registration. Data is False when the registration doesn't exist."""
    return APIResponse(data=registry.registrations.cancel(registration_id))
