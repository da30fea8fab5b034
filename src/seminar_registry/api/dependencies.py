"""FastAPI dependencies for dependency injection."""

from __future__ import annotations

from collections.abc import Generator  # noqa: TC003
from typing import Annotated

from fastapi import Depends, Request

from seminar_registry.workflow import SeminarRegistry


def get_registry(request: Request) -> Generator[SeminarRegistry, None, None]:
    """Dependency that provides the SeminarRegistry held by the application."""
    registry = getattr(request.app.state, "registry", None)
    if registry is None:
        raise RuntimeError("SeminarRegistry not initialized. Start the app via its lifespan.")
    yield registry


# Type alias for dependency injection
RegistryDep = Annotated[SeminarRegistry, Depends(get_registry)]
