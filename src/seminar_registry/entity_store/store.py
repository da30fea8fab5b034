"""EntityStore - Main API for Entity Store operations."""

from __future__ import annotations

from collections.abc import Iterator
from contextlib import contextmanager
from typing import TYPE_CHECKING, Any, TypeVar

from sqlalchemy import delete, func, select
from sqlalchemy.exc import IntegrityError

from seminar_registry.entity_store.database import Database
from seminar_registry.entity_store.exceptions import EmailExistsError
from seminar_registry.entity_store.models import Base, User

if TYPE_CHECKING:
    from sqlalchemy import ColumnElement, Executable, Row
    from sqlalchemy.orm import Session


EntityT = TypeVar("EntityT", bound=Base)


class StoreTransaction:
    """Read/write primitives bound to one open session and transaction.

    Obtained from EntityStore.transaction(). Writes are flushed immediately so
    ids and server defaults are populated on the returned entities, but nothing
    is committed until the surrounding transaction() block exits cleanly.
    """

    def __init__(self, session: Session) -> None:
        self._session = session

    @property
    def session(self) -> Session:
        """The underlying SQLAlchemy session."""
        return self._session

    def get(
        self, model: type[EntityT], entity_id: int, for_update: bool = False
    ) -> EntityT | None:
        """Get an entity by primary key.

        Args:
            model: Mapped class to look up
            entity_id: Primary key value
            for_update: Request a row lock (SELECT ... FOR UPDATE) where supported

        Returns:
            The entity, or None if no row has this id
        """
        return self._session.get(model, entity_id, with_for_update=for_update)

    def find(
        self,
        model: type[EntityT],
        *criteria: ColumnElement[bool],
        order_by: Any = None,
        for_update: bool = False,
    ) -> list[EntityT]:
        """Find entities matching all criteria.

        Args:
            model: Mapped class to scan
            *criteria: SQLAlchemy boolean expressions, ANDed together
            order_by: Ordering clause or tuple of clauses. Defaults to primary key.
            for_update: Request row locks where supported

        Returns:
            Matching entities
        """
        stmt = select(model).where(*criteria)
        if order_by is None:
            order_by = model.id  # type: ignore[attr-defined]
        if isinstance(order_by, (list, tuple)):
            stmt = stmt.order_by(*order_by)
        else:
            stmt = stmt.order_by(order_by)
        if for_update:
            stmt = stmt.with_for_update()
        return list(self._session.execute(stmt).scalars().all())

    def count(self, model: type[Base], *criteria: ColumnElement[bool]) -> int:
        """Count rows matching all criteria."""
        stmt = select(func.count()).select_from(model).where(*criteria)
        return int(self._session.execute(stmt).scalar_one())

    def query(self, statement: Executable) -> list[Row[Any]]:
        """Execute an arbitrary select (e.g. a join) and return its rows."""
        return list(self._session.execute(statement).all())

    def insert(self, model: type[EntityT], **fields: Any) -> EntityT:
        """Insert a new entity.

        Args:
            model: Mapped class to instantiate
            **fields: Constructor arguments

        Returns:
            The inserted entity with id and created_at populated

        Raises:
            EmailExistsError: If a User insert violates the unique email constraint
        """
        entity = model(**fields)
        self._session.add(entity)
        self._flush(entity)
        self._session.refresh(entity)
        return entity

    def update(self, model: type[EntityT], entity_id: int, **fields: Any) -> EntityT | None:
        """Update fields of an existing entity. Only provided fields are updated.

        Args:
            model: Mapped class
            entity_id: Primary key value
            **fields: Attribute values to set

        Returns:
            The updated entity, or None if no row has this id
        """
        entity = self._session.get(model, entity_id)
        if entity is None:
            return None
        for name, value in fields.items():
            setattr(entity, name, value)
        self._flush(entity)
        self._session.refresh(entity)
        return entity

    def delete(self, model: type[Base], entity_id: int) -> int:
        """Delete an entity by primary key.

        Returns:
            Number of rows deleted (0 or 1)
        """
        return self.delete_where(model, model.id == entity_id)  # type: ignore[attr-defined]

    def delete_where(self, model: type[Base], *criteria: ColumnElement[bool]) -> int:
        """Delete all rows matching the criteria.

        Returns:
            Number of rows deleted
        """
        stmt = delete(model).where(*criteria)
        result = self._session.execute(stmt, execution_options={"synchronize_session": False})
        return int(result.rowcount or 0)  # type: ignore[attr-defined]

    def _flush(self, entity: Base) -> None:
        try:
            self._session.flush()
        except IntegrityError as e:
            if isinstance(entity, User) and "email" in str(e.orig).lower():
                raise EmailExistsError(f"User with email '{entity.email}' already exists") from e
            raise


class EntityStore:
    """Main API for Entity Store operations.

    Provides transactional access to Users, Seminars, Registrations, Attendance
    and Certificates. Workflow components take an EntityStore in their
    constructor and run each operation inside a single transaction().
    """

    def __init__(self, db_path: str = "seminar_registry.db") -> None:
        """Initialize Entity Store with SQLite database.

        Creates database and tables if they don't exist.

        Args:
            db_path: Path to SQLite database file
        """
        self._db = Database(db_path)
        self._db.create_tables()

    @property
    def database(self) -> Database:
        """The underlying connection manager."""
        return self._db

    def close(self) -> None:
        """Close the database connection."""
        self._db.close()

    @contextmanager
    def transaction(self) -> Iterator[StoreTransaction]:
        """Open a session and transaction for one unit of work.

        Commits when the block exits normally, rolls back and re-raises on any
        exception. Entities returned from the block stay readable after it exits.

        Yields:
            A StoreTransaction bound to the open session
        """
        session = self._db.get_session()
        try:
            with session.begin():
                yield StoreTransaction(session)
        finally:
            session.close()

    # --- One-shot operations, each in its own transaction ---

    def get(self, model: type[EntityT], entity_id: int) -> EntityT | None:
        """Get an entity by primary key, or None."""
        with self.transaction() as tx:
            return tx.get(model, entity_id)

    def find(
        self, model: type[EntityT], *criteria: ColumnElement[bool], order_by: Any = None
    ) -> list[EntityT]:
        """Find entities matching all criteria."""
        with self.transaction() as tx:
            return tx.find(model, *criteria, order_by=order_by)

    def count(self, model: type[Base], *criteria: ColumnElement[bool]) -> int:
        """Count rows matching all criteria."""
        with self.transaction() as tx:
            return tx.count(model, *criteria)

    def query(self, statement: Executable) -> list[Row[Any]]:
        """Execute a select and return its rows."""
        with self.transaction() as tx:
            return tx.query(statement)

    def insert(self, model: type[EntityT], **fields: Any) -> EntityT:
        """Insert a new entity."""
        with self.transaction() as tx:
            return tx.insert(model, **fields)

    def update(self, model: type[EntityT], entity_id: int, **fields: Any) -> EntityT | None:
        """Update an entity, or return None if it doesn't exist."""
        with self.transaction() as tx:
            return tx.update(model, entity_id, **fields)

    def delete(self, model: type[Base], entity_id: int) -> int:
        """Delete an entity by primary key. Returns rows deleted."""
        with self.transaction() as tx:
            return tx.delete(model, entity_id)

    def delete_where(self, model: type[Base], *criteria: ColumnElement[bool]) -> int:
        """Delete all rows matching the criteria. Returns rows deleted."""
        with self.transaction() as tx:
            return tx.delete_where(model, *criteria)
