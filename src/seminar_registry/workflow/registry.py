"""SeminarRegistry - wires the workflow components to one store."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

from seminar_registry.workflow.attendance import AttendanceTracker
from seminar_registry.workflow.cascade import CascadeDeleter
from seminar_registry.workflow.catalog import BCRYPT_ROUNDS, SeminarCatalog, UserDirectory
from seminar_registry.workflow.certificates import DEFAULT_BASE_PATH, CertificateIssuer
from seminar_registry.workflow.registrations import RegistrationWorkflow

if TYPE_CHECKING:
    from seminar_registry.entity_store import EntityStore


@dataclass
class SeminarRegistry:
    """All workflow components sharing one EntityStore.

    Attributes:
        store: The shared entity store.
        users: User administration.
        seminars: Seminar administration.
        registrations: Registration lifecycle.
        attendance: Attendance tracking.
        certificates: Certificate issuance.
        cascade: Seminar cascade deletion.
    """

    store: EntityStore
    users: UserDirectory
    seminars: SeminarCatalog
    registrations: RegistrationWorkflow
    attendance: AttendanceTracker
    certificates: CertificateIssuer
    cascade: CascadeDeleter

    @classmethod
    def from_store(
        cls,
        store: EntityStore,
        certificate_base_path: str = DEFAULT_BASE_PATH,
        bcrypt_rounds: int = BCRYPT_ROUNDS,
    ) -> SeminarRegistry:
        """Build every component around the given store."""
        cascade = CascadeDeleter(store)
        return cls(
            store=store,
            users=UserDirectory(store, bcrypt_rounds=bcrypt_rounds),
            seminars=SeminarCatalog(store, deleter=cascade),
            registrations=RegistrationWorkflow(store),
            attendance=AttendanceTracker(store),
            certificates=CertificateIssuer(store, base_path=certificate_base_path),
            cascade=cascade,
        )
