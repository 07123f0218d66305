"""Wire shapes shared by the guest feature routers."""

from datetime import datetime
from uuid import UUID

from weddingsite.guests.dtos import (
    DietaryPreference,
    GuestDTO,
    PartyMemberDTO,
    RegistrationStatus,
    RSVPStatus,
)
from weddingsite.schemas import CamelModel


class PartyMemberSchema(CamelModel):
    first_name: str = ""
    last_name: str = ""
    dietary_preference: DietaryPreference = DietaryPreference.UNSET

    def to_dto(self) -> PartyMemberDTO:
        return PartyMemberDTO(
            first_name=self.first_name,
            last_name=self.last_name,
            dietary_preference=self.dietary_preference,
        )

    @classmethod
    def from_dto(cls, member: PartyMemberDTO) -> "PartyMemberSchema":
        return cls(
            first_name=member.first_name,
            last_name=member.last_name,
            dietary_preference=member.dietary_preference,
        )


class GuestResponse(CamelModel):
    """Full guest record for the admin back office."""

    id: UUID
    first_name: str
    last_name: str
    email: str
    phone: str | None = None
    registration_status: RegistrationStatus
    rsvp_status: RSVPStatus
    party_size: int
    max_party_size: int
    party_members: list[PartyMemberSchema] = []
    main_person_dietary_preference: DietaryPreference = DietaryPreference.UNSET
    dec24_attendance: bool = False
    dec25_attendance: bool = False
    accommodation_dec23: bool = False
    accommodation_dec24: bool = False
    accommodation_dec25: bool = False
    concerns: str = ""
    invite_token: str | None = None
    guest_portal_token: str | None = None
    approved_at: datetime | None = None
    created_at: datetime | None = None

    @classmethod
    def from_dto(cls, guest: GuestDTO) -> "GuestResponse":
        return cls(
            id=guest.id,
            first_name=guest.first_name,
            last_name=guest.last_name,
            email=guest.email,
            phone=guest.phone,
            registration_status=guest.registration_status,
            rsvp_status=guest.rsvp_status,
            party_size=guest.party_size,
            max_party_size=guest.max_party_size,
            party_members=[PartyMemberSchema.from_dto(m) for m in guest.party_members],
            main_person_dietary_preference=guest.main_person_dietary_preference,
            dec24_attendance=guest.dec24_attendance,
            dec25_attendance=guest.dec25_attendance,
            accommodation_dec23=guest.accommodation_dec23,
            accommodation_dec24=guest.accommodation_dec24,
            accommodation_dec25=guest.accommodation_dec25,
            concerns=guest.concerns,
            invite_token=guest.invite_token,
            guest_portal_token=guest.guest_portal_token,
            approved_at=guest.approved_at,
            created_at=guest.created_at,
        )


class GuestActionResponse(CamelModel):
    message: str
    guest: GuestResponse
