"""Read-side projections returned by the workflow components."""

from dataclasses import dataclass
from datetime import datetime
from decimal import Decimal


@dataclass
class RegistrationDetails:
    """A registration joined with its seminar and participant for display.

    Attributes:
        id: Registration ID.
        seminar_id: Seminar the registration belongs to.
        participant_id: Registered participant.
        registration_date: When the registration was created.
        status: Current registration status value.
        created_at: Row creation time.
        seminar_title: Title of the seminar.
        seminar_date: Scheduled date of the seminar.
        seminar_location: Where the seminar takes place.
        seminar_cost: Seminar cost, None for free seminars.
        participant_name: Participant's display name.
        participant_email: Participant's email.
    """

    id: int
    seminar_id: int
    participant_id: int
    registration_date: datetime
    status: str
    created_at: datetime
    seminar_title: str
    seminar_date: datetime
    seminar_location: str
    seminar_cost: Decimal | None
    participant_name: str
    participant_email: str


@dataclass
class CertificateDetails:
    """A certificate joined with the seminar and participant it was issued for."""

    id: int
    registration_id: int
    issue_date: datetime
    certificate_url: str
    created_at: datetime
    seminar_id: int
    seminar_title: str
    participant_id: int
    participant_name: str
