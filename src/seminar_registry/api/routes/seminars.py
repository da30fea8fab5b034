"""Seminar CRUD endpoints."""

from fastapi import APIRouter, status

from seminar_registry.api.dependencies import RegistryDep
from seminar_registry.api.models import (
    APIResponse,
    AttendanceResponse,
    RegistrationDetailsResponse,
    SeminarCreate,
    SeminarResponse,
    SeminarUpdate,
    attendance_to_response,
    registration_details_to_response,
    seminar_to_response,
)
from seminar_registry.workflow import SeminarNotFoundError

router = APIRouter(prefix="/seminars", tags=["seminars"])


@router.get("", response_model=APIResponse[list[SeminarResponse]])
def list_seminars(registry: RegistryDep) -> APIResponse[list[SeminarResponse]]:
    """List all seminars, soonest first."""
    return APIResponse(data=[seminar_to_response(s) for s in registry.seminars.list_all()])


@router.post(
    "",
    response_model=APIResponse[SeminarResponse],
    status_code=status.HTTP_201_CREATED,
)
def create_seminar(seminar: SeminarCreate, registry: RegistryDep) -> APIResponse[SeminarResponse]:
    """Create a new seminar."""
    created = registry.seminars.create(
        title=seminar.title,
        description=seminar.description,
        date=seminar.date,
        time=seminar.time,
        location=seminar.location,
        speaker_id=seminar.speaker_id,
        capacity=seminar.capacity,
        cost=seminar.cost,
        registration_type=seminar.registration_type,
    )
    return APIResponse(data=seminar_to_response(created))


@router.get("/{seminar_id}", response_model=APIResponse[SeminarResponse])
def get_seminar(seminar_id: int, registry: RegistryDep) -> APIResponse[SeminarResponse]:
    """Get a seminar by ID."""
    seminar = registry.seminars.get(seminar_id)
    if seminar is None:
        raise SeminarNotFoundError(f"Seminar {seminar_id} not found")
    return APIResponse(data=seminar_to_response(seminar))


@router.patch("/{seminar_id}", response_model=APIResponse[SeminarResponse])
def update_seminar(
    seminar_id: int, seminar: SeminarUpdate, registry: RegistryDep
) -> APIResponse[SeminarResponse]:
    """Update a seminar (partial update)."""
    changes = seminar.model_dump(exclude_unset=True)
    updated = registry.seminars.update(seminar_id, **changes)
    if updated is None:
        raise SeminarNotFoundError(f"Seminar {seminar_id} not found")
    return APIResponse(data=seminar_to_response(updated))


@router.delete("/{seminar_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_seminar(seminar_id: int, registry: RegistryDep) -> None:
    """Delete a seminar with its registrations, attendance and certificates."""
    if not registry.seminars.delete(seminar_id):
        raise SeminarNotFoundError(f"Seminar {seminar_id} not found")


@router.get(
    "/{seminar_id}/registrations",
    response_model=APIResponse[list[RegistrationDetailsResponse]],
)
def list_seminar_registrations(
    seminar_id: int, registry: RegistryDep
) -> APIResponse[list[RegistrationDetailsResponse]]:
    """List registrations for a seminar."""
    registrations = registry.registrations.list_by_seminar(seminar_id)
    return APIResponse(data=[registration_details_to_response(r) for r in registrations])


@router.get("/{seminar_id}/attendance", response_model=APIResponse[list[AttendanceResponse]])
def list_seminar_attendance(
    seminar_id: int, registry: RegistryDep
) -> APIResponse[list[AttendanceResponse]]:
    """List attendance records for a seminar."""
    rows = registry.attendance.list_by_seminar(seminar_id)
    return APIResponse(data=[attendance_to_response(a) for a in rows])
