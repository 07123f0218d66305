from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import TYPE_CHECKING
from uuid import UUID

if TYPE_CHECKING:
    from weddingsite.guests.repository.orm_models import Guest


class RegistrationStatus(str, Enum):
    PENDING = "pending"
    APPROVED = "approved"
    REJECTED = "rejected"


class RSVPStatus(str, Enum):
    PENDING = "pending"
    YES = "yes"
    NO = "no"


class RSVPAnswer(str, Enum):
    """What a guest can submit; `pending` is only ever a stored state."""

    YES = "yes"
    NO = "no"


class DietaryPreference(str, Enum):
    VEG = "veg"
    NON_VEG = "non-veg"
    UNSET = ""


@dataclass(frozen=True)
class PartyMemberDTO:
    first_name: str = ""
    last_name: str = ""
    dietary_preference: DietaryPreference = DietaryPreference.UNSET

    @classmethod
    def from_dict(cls, data: dict) -> "PartyMemberDTO":
        return cls(
            first_name=data.get("firstName", "") or "",
            last_name=data.get("lastName", "") or "",
            dietary_preference=DietaryPreference(data.get("dietaryPreference") or ""),
        )

    def to_dict(self) -> dict:
        """Shape stored in the JSON column (same keys the web client sends)."""
        return {
            "firstName": self.first_name,
            "lastName": self.last_name,
            "dietaryPreference": self.dietary_preference.value,
        }

    @property
    def is_blank(self) -> bool:
        return not (self.first_name or self.last_name)


@dataclass(frozen=True)
class QuestionnaireDTO:
    """Questionnaire fields collected at registration and editable at RSVP time.

    Every field is optional so that a submission can carry only what changed;
    `None` means "not provided".
    """

    party_size: int | None = None
    party_members: list[PartyMemberDTO] | None = None
    main_person_dietary_preference: DietaryPreference | None = None
    dec24_attendance: bool | None = None
    dec25_attendance: bool | None = None
    accommodation_dec23: bool | None = None
    accommodation_dec24: bool | None = None
    accommodation_dec25: bool | None = None
    concerns: str | None = None

    @property
    def has_attendance(self) -> bool:
        return self.dec24_attendance is not None or self.dec25_attendance is not None


@dataclass(frozen=True)
class GuestRegistrationDTO:
    first_name: str
    last_name: str
    email: str
    phone: str | None = None
    questionnaire: QuestionnaireDTO = field(default_factory=QuestionnaireDTO)


@dataclass(frozen=True)
class GuestDTO:
    """Full guest record as exposed to the admin back office."""

    id: UUID
    first_name: str
    last_name: str
    email: str
    registration_status: RegistrationStatus
    rsvp_status: RSVPStatus
    party_size: int
    max_party_size: int = 2
    party_members: list[PartyMemberDTO] = field(default_factory=list)
    main_person_dietary_preference: DietaryPreference = DietaryPreference.UNSET
    dec24_attendance: bool = False
    dec25_attendance: bool = False
    accommodation_dec23: bool = False
    accommodation_dec24: bool = False
    accommodation_dec25: bool = False
    concerns: str = ""
    phone: str | None = None
    invite_token: str | None = None
    guest_portal_token: str | None = None
    approved_at: datetime | None = None
    created_at: datetime | None = None

    @property
    def full_name(self) -> str:
        return f"{self.first_name} {self.last_name}".strip()

    @classmethod
    def from_guest(cls, guest: "Guest") -> "GuestDTO":
        """Create GuestDTO from Guest ORM model."""
        return cls(
            id=guest.uuid,
            first_name=guest.first_name,
            last_name=guest.last_name,
            email=guest.email,
            phone=guest.phone,
            registration_status=RegistrationStatus(guest.registration_status),
            rsvp_status=RSVPStatus(guest.rsvp_status),
            party_size=guest.party_size,
            max_party_size=guest.max_party_size,
            party_members=[PartyMemberDTO.from_dict(m) for m in guest.party_members or []],
            main_person_dietary_preference=DietaryPreference(
                guest.main_person_dietary_preference or ""
            ),
            dec24_attendance=guest.dec24_attendance,
            dec25_attendance=guest.dec25_attendance,
            accommodation_dec23=guest.accommodation_dec23,
            accommodation_dec24=guest.accommodation_dec24,
            accommodation_dec25=guest.accommodation_dec25,
            concerns=guest.concerns or "",
            invite_token=guest.invite_token,
            guest_portal_token=guest.guest_portal_token,
            approved_at=guest.approved_at,
            created_at=guest.created_at,
        )


@dataclass(frozen=True)
class RSVPSubmissionDTO:
    response: RSVPAnswer
    message: str = ""
    # Only the questionnaire fields that were sent; None leaves the guest untouched
    updated_details: QuestionnaireDTO | None = None


@dataclass(frozen=True)
class RSVPResponseDTO:
    """DTO for RSVP response."""

    message: str
    response: RSVPAnswer
    rsvp_status: RSVPStatus
    responded_at: datetime


@dataclass(frozen=True)
class DeleteGuestsResultDTO:
    deleted_guests: int
    deleted_rsvps: int
    deleted_messages: int
    deleted_photos: int
