"""Healthcheck endpoint."""

from fastapi import APIRouter

from seminar_registry.api.models import APIResponse, HealthResponse
from seminar_registry.entity_store import utcnow

router = APIRouter(tags=["health"])


@router.get("/health", response_model=APIResponse[HealthResponse])
def health() -> APIResponse[HealthResponse]:
    """Report that the service is up."""
    return APIResponse(data=HealthResponse(status="ok", timestamp=utcnow()))
