"""Unit tests for EntityStore and StoreTransaction."""

from datetime import datetime

import pytest
from sqlalchemy import select
from sqlalchemy.exc import IntegrityError

from seminar_registry.entity_store import (
    EmailExistsError,
    EntityStore,
    Registration,
    Seminar,
    User,
)


def _user(store: EntityStore, email: str = "ann@example.com", role: str = "participant") -> User:
    return store.insert(User, name="Ann", email=email, role=role, password="hash")


def _seminar(store: EntityStore, speaker_id: int, capacity: int = 3) -> Seminar:
    return store.insert(
        Seminar,
        title="Intro",
        date=datetime(2026, 6, 1, 10, 0),
        time="10:00",
        location="Room A",
        speaker_id=speaker_id,
        capacity=capacity,
    )


@pytest.mark.unit
class TestInsertAndGet:
    """Tests for insert and get."""

    def test_insert_assigns_id_and_created_at(self, store: EntityStore) -> None:
        """Inserted entities come back with server-generated fields."""
        user = _user(store)
        assert user.id is not None
        assert user.created_at is not None

    def test_get_returns_entity(self, store: EntityStore) -> None:
        """get finds an inserted entity."""
        user = _user(store)
        found = store.get(User, user.id)
        assert found is not None
        assert found.email == "ann@example.com"

    def test_get_missing_returns_none(self, store: EntityStore) -> None:
        """get returns None for unknown ids."""
        assert store.get(User, 999) is None

    def test_duplicate_email_raises(self, store: EntityStore) -> None:
        """A second user with the same email raises EmailExistsError."""
        _user(store)
        with pytest.raises(EmailExistsError) as exc_info:
            _user(store)
        assert isinstance(exc_info.value.__cause__, IntegrityError)

    def test_foreign_key_enforced(self, store: EntityStore) -> None:
        """Rows referencing missing parents are rejected."""
        with pytest.raises(IntegrityError):
            store.insert(Registration, seminar_id=42, participant_id=42)


@pytest.mark.unit
class TestFindAndCount:
    """Tests for find, count and query."""

    def test_find_with_criteria(self, store: EntityStore) -> None:
        """Criteria filter the result."""
        _user(store, "a@example.com", "participant")
        _user(store, "b@example.com", "speaker")
        _user(store, "c@example.com", "speaker")

        speakers = store.find(User, User.role == "speaker")
        assert [u.email for u in speakers] == ["b@example.com", "c@example.com"]

    def test_find_orders_by_id_by_default(self, store: EntityStore) -> None:
        """Results are ordered by primary key."""
        ids = [_user(store, f"u{i}@example.com").id for i in range(3)]
        assert [u.id for u in store.find(User)] == ids

    def test_find_accepts_order_tuple(self, store: EntityStore) -> None:
        """A tuple of ordering clauses is applied in sequence."""
        _user(store, "b@example.com")
        _user(store, "a@example.com")
        users = store.find(User, order_by=(User.email, User.id))
        assert [u.email for u in users] == ["a@example.com", "b@example.com"]

    def test_count(self, store: EntityStore) -> None:
        """count reports matching rows."""
        _user(store, "a@example.com")
        _user(store, "b@example.com", "speaker")
        assert store.count(User) == 2
        assert store.count(User, User.role == "speaker") == 1

    def test_query_join(self, store: EntityStore) -> None:
        """query executes arbitrary selects."""
        speaker = _user(store, "s@example.com", "speaker")
        _seminar(store, speaker.id)
        rows = store.query(select(Seminar, User).join(User, Seminar.speaker_id == User.id))
        assert len(rows) == 1
        seminar, user = rows[0]
        assert user.id == speaker.id
        assert seminar.speaker_id == speaker.id


@pytest.mark.unit
class TestUpdateAndDelete:
    """Tests for update, delete and delete_where."""

    def test_update_fields(self, store: EntityStore) -> None:
        """Only the given fields change."""
        user = _user(store)
        updated = store.update(User, user.id, name="Anne")
        assert updated is not None
        assert updated.name == "Anne"
        assert updated.email == "ann@example.com"

    def test_update_missing_returns_none(self, store: EntityStore) -> None:
        """Updating an unknown id returns None."""
        assert store.update(User, 999, name="Nobody") is None

    def test_delete(self, store: EntityStore) -> None:
        """delete removes one row and reports it."""
        user = _user(store)
        assert store.delete(User, user.id) == 1
        assert store.get(User, user.id) is None
        assert store.delete(User, user.id) == 0

    def test_delete_where(self, store: EntityStore) -> None:
        """delete_where removes every matching row."""
        _user(store, "a@example.com", "speaker")
        _user(store, "b@example.com", "speaker")
        _user(store, "c@example.com")
        assert store.delete_where(User, User.role == "speaker") == 2
        assert store.count(User) == 1


@pytest.mark.unit
class TestTransaction:
    """Tests for transaction()."""

    def test_commits_on_success(self, store: EntityStore) -> None:
        """Writes in a block are visible afterwards."""
        with store.transaction() as tx:
            speaker = tx.insert(
                User, name="S", email="s@example.com", role="speaker", password="h"
            )
            tx.insert(
                Seminar,
                title="T",
                date=datetime(2026, 6, 1),
                time="10:00",
                location="L",
                speaker_id=speaker.id,
                capacity=1,
            )
        assert store.count(Seminar) == 1

    def test_rolls_back_on_error(self, store: EntityStore) -> None:
        """An exception discards every write in the block."""
        with pytest.raises(RuntimeError), store.transaction() as tx:
            tx.insert(User, name="S", email="s@example.com", role="speaker", password="h")
            raise RuntimeError("boom")
        assert store.count(User) == 0

    def test_entities_readable_after_block(self, store: EntityStore) -> None:
        """Returned entities keep their loaded attributes."""
        with store.transaction() as tx:
            user = tx.insert(User, name="S", email="s@example.com", role="speaker", password="h")
        assert user.name == "S"
        assert user.created_at is not None
