from fastapi import APIRouter, Depends, HTTPException

from weddingsite.config.settings import settings
from weddingsite.guests.dtos import DietaryPreference, GuestDTO, RSVPStatus
from weddingsite.guests.repository.read_models import GuestReadModel, SqlGuestReadModel
from weddingsite.guests.schemas import PartyMemberSchema
from weddingsite.guests.urls import GET_GUEST_INFO_URL
from weddingsite.schemas import CamelModel

router = APIRouter()


class RSVPInfoResponse(CamelModel):
    """What the RSVP form needs to prefill itself."""

    first_name: str
    last_name: str
    max_party_size: int
    has_rsvp: bool
    rsvp_status: RSVPStatus
    party_size: int
    party_members: list[PartyMemberSchema] = []
    main_person_dietary_preference: DietaryPreference = DietaryPreference.UNSET
    dec24_attendance: bool = False
    dec25_attendance: bool = False
    accommodation_dec23: bool = False
    accommodation_dec24: bool = False
    accommodation_dec25: bool = False
    concerns: str = ""

    @classmethod
    def from_dto(cls, guest: GuestDTO, max_party_size: int) -> "RSVPInfoResponse":
        return cls(
            first_name=guest.first_name,
            last_name=guest.last_name,
            max_party_size=max_party_size,
            has_rsvp=guest.rsvp_status != RSVPStatus.PENDING,
            rsvp_status=guest.rsvp_status,
            party_size=guest.party_size,
            party_members=[PartyMemberSchema.from_dto(m) for m in guest.party_members],
            main_person_dietary_preference=guest.main_person_dietary_preference,
            dec24_attendance=guest.dec24_attendance,
            dec25_attendance=guest.dec25_attendance,
            accommodation_dec23=guest.accommodation_dec23,
            accommodation_dec24=guest.accommodation_dec24,
            accommodation_dec25=guest.accommodation_dec25,
            concerns=guest.concerns,
        )


def get_guest_read_model() -> GuestReadModel:
    """Dependency to get guest read model instance."""
    return SqlGuestReadModel()


@router.get(GET_GUEST_INFO_URL, response_model=RSVPInfoResponse)
async def get_guest_info(
    token: str,
    read_model: GuestReadModel = Depends(get_guest_read_model),
) -> RSVPInfoResponse:
    """
    Get RSVP page information by invite token.
    Only approved guests hold a working token.
    """
    guest = await read_model.get_by_invite_token(token)
    if not guest:
        raise HTTPException(status_code=404, detail="Invalid RSVP link")

    return RSVPInfoResponse.from_dto(guest, max_party_size=settings.max_party_size)
