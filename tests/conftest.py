"""Shared pytest fixtures and configuration."""

import logging
from collections.abc import Callable
from datetime import datetime
from decimal import Decimal
from itertools import count

import pytest

from seminar_registry.entity_store import EntityStore, RegistrationType, Seminar, User
from seminar_registry.workflow import SeminarRegistry

# Minimum bcrypt cost; keeps user creation fast in tests
TEST_BCRYPT_ROUNDS = 4


# Register custom markers
def pytest_configure(config: pytest.Config) -> None:
    """Register custom markers for test categorization."""
    config.addinivalue_line("markers", "unit: fast tests with no external dependencies")
    config.addinivalue_line("markers", "integration: component interaction tests")


# Shared fixtures


@pytest.fixture(autouse=True)
def reset_logging():
    """Detach handlers that setup_logging attached during a test."""
    yield
    logger = logging.getLogger("seminar_registry")
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()
    logger.setLevel(logging.NOTSET)


@pytest.fixture
def store():
    """Create an in-memory EntityStore."""
    s = EntityStore(":memory:")
    yield s
    s.close()


@pytest.fixture
def registry(store: EntityStore) -> SeminarRegistry:
    """Create a SeminarRegistry over the in-memory store."""
    return SeminarRegistry.from_store(store, bcrypt_rounds=TEST_BCRYPT_ROUNDS)


@pytest.fixture
def make_user(registry: SeminarRegistry) -> Callable[..., User]:
    """Factory for users with unique emails."""
    seq = count(1)

    def _make(role: str = "participant", name: str | None = None) -> User:
        n = next(seq)
        return registry.users.create(
            name=name or f"{role.title()} {n}",
            email=f"{role}{n}@example.com",
            role=role,
            password="secret123",
        )

    return _make


@pytest.fixture
def speaker(make_user: Callable[..., User]) -> User:
    """A user with the speaker role."""
    return make_user("speaker")


@pytest.fixture
def participant(make_user: Callable[..., User]) -> User:
    """A user with the participant role."""
    return make_user("participant")


@pytest.fixture
def make_seminar(registry: SeminarRegistry, speaker: User) -> Callable[..., Seminar]:
    """Factory for seminars given by the default speaker."""
    seq = count(1)

    def _make(
        capacity: int = 10,
        registration_type: str = RegistrationType.FREE,
        cost: Decimal | None = Decimal("0"),
    ) -> Seminar:
        n = next(seq)
        return registry.seminars.create(
            title=f"Seminar {n}",
            date=datetime(2026, 6, n % 28 + 1, 10, 0),
            time="10:00",
            location="Room A",
            speaker_id=speaker.id,
            capacity=capacity,
            cost=cost,
            registration_type=registration_type,
        )

    return _make
