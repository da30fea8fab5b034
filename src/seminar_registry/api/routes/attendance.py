"""Attendance endpoints."""

from fastapi import APIRouter

from seminar_registry.api.dependencies import RegistryDep
from seminar_registry.api.models import (
    APIResponse,
    AttendanceResponse,
    AttendanceUpdate,
    attendance_to_response,
)

router = APIRouter(prefix="/registrations", tags=["attendance"])


@router.put("/{registration_id}/attendance", response_model=APIResponse[AttendanceResponse])
def record_attendance(
    registration_id: int, update: AttendanceUpdate, registry: RegistryDep
) -> APIResponse[AttendanceResponse]:
    """Mark a registration as attended or absent."""
    attendance = registry.attendance.record(registration_id, update.attended)
    return APIResponse(data=attendance_to_response(attendance))


@router.get("/{registration_id}/attendance", response_model=APIResponse[AttendanceResponse])
def get_attendance(
    registration_id: int, registry: RegistryDep
) -> APIResponse[AttendanceResponse]:
    """Get the attendance record for a registration. Data is null if none exists."""
    attendance = registry.attendance.get_by_registration(registration_id)
    if attendance is None:
        return APIResponse(data=None)
    return APIResponse(data=attendance_to_response(attendance))
