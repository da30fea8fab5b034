"""User administration endpoints."""

from fastapi import APIRouter, status

from seminar_registry.api.dependencies import RegistryDep
from seminar_registry.api.models import (
    APIResponse,
    RegistrationDetailsResponse,
    SeminarResponse,
    UserCreate,
    UserResponse,
    UserUpdate,
    registration_details_to_response,
    seminar_to_response,
    user_to_response,
)
from seminar_registry.workflow import UserNotFoundError

router = APIRouter(prefix="/users", tags=["users"])


@router.get("", response_model=APIResponse[list[UserResponse]])
def list_users(registry: RegistryDep) -> APIResponse[list[UserResponse]]:
    """List all users."""
    return APIResponse(data=[user_to_response(u) for u in registry.users.list_all()])


@router.post(
    "",
    response_model=APIResponse[UserResponse],
    status_code=status.HTTP_201_CREATED,
)
def create_user(user: UserCreate, registry: RegistryDep) -> APIResponse[UserResponse]:
    """Create a new user."""
    created = registry.users.create(
        name=user.name,
        email=user.email,
        role=user.role,
        password=user.password,
    )
    return APIResponse(data=user_to_response(created))


@router.get("/speakers", response_model=APIResponse[list[UserResponse]])
def list_speakers(registry: RegistryDep) -> APIResponse[list[UserResponse]]:
    """List users with the speaker role."""
    return APIResponse(data=[user_to_response(u) for u in registry.users.list_speakers()])


@router.get("/{user_id}", response_model=APIResponse[UserResponse])
def get_user(user_id: int, registry: RegistryDep) -> APIResponse[UserResponse]:
    """Get a user by ID."""
    user = registry.users.get(user_id)
    if user is None:
        raise UserNotFoundError(f"User {user_id} not found")
    return APIResponse(data=user_to_response(user))


@router.patch("/{user_id}", response_model=APIResponse[UserResponse])
def update_user(
    user_id: int, user: UserUpdate, registry: RegistryDep
) -> APIResponse[UserResponse]:
    """Update a user (partial update)."""
    updated = registry.users.update(
        user_id,
        name=user.name,
        email=user.email,
        role=user.role,
        password=user.password,
    )
    if updated is None:
        raise UserNotFoundError(f"User {user_id} not found")
    return APIResponse(data=user_to_response(updated))


@router.delete("/{user_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_user(user_id: int, registry: RegistryDep) -> None:
    """Delete a user that no seminar or registration references."""
    if not registry.users.delete(user_id):
        raise UserNotFoundError(f"User {user_id} not found")


@router.get(
    "/{user_id}/registrations",
    response_model=APIResponse[list[RegistrationDetailsResponse]],
)
def list_user_registrations(
    user_id: int, registry: RegistryDep
) -> APIResponse[list[RegistrationDetailsResponse]]:
    """List registrations held by a participant."""
    registrations = registry.registrations.list_by_participant(user_id)
    return APIResponse(data=[registration_details_to_response(r) for r in registrations])


@router.get("/{user_id}/seminars", response_model=APIResponse[list[SeminarResponse]])
def list_speaker_seminars(
    user_id: int, registry: RegistryDep
) -> APIResponse[list[SeminarResponse]]:
    """List seminars given by a speaker."""
    seminars = registry.seminars.list_by_speaker(user_id)
    return APIResponse(data=[seminar_to_response(s) for s in seminars])
