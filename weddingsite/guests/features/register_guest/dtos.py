"""Request body for guest registration."""

from pydantic import EmailStr, Field

from weddingsite.guests.dtos import DietaryPreference, GuestRegistrationDTO, QuestionnaireDTO
from weddingsite.guests.schemas import PartyMemberSchema
from weddingsite.schemas import CamelModel


class EventAttendance(CamelModel):
    attendance: bool = False


class Accommodation(CamelModel):
    dec23: bool = False
    dec24: bool = False
    dec25: bool = False


class RegisterGuestRequest(CamelModel):
    first_name: str = Field(min_length=1, max_length=255)
    last_name: str = Field(min_length=1, max_length=255)
    email: EmailStr
    phone: str | None = Field(default=None, max_length=50)

    party_size: int | None = None
    party_members: list[PartyMemberSchema] | None = None
    main_person_dietary_preference: DietaryPreference | None = None
    dec24: EventAttendance | None = None
    dec25: EventAttendance | None = None
    accommodation: Accommodation | None = None
    concerns: str | None = None

    def to_dto(self) -> GuestRegistrationDTO:
        return GuestRegistrationDTO(
            first_name=self.first_name.strip(),
            last_name=self.last_name.strip(),
            email=str(self.email),
            phone=self.phone or None,
            questionnaire=QuestionnaireDTO(
                party_size=self.party_size,
                party_members=(
                    [member.to_dto() for member in self.party_members]
                    if self.party_members is not None
                    else None
                ),
                main_person_dietary_preference=self.main_person_dietary_preference,
                dec24_attendance=self.dec24.attendance if self.dec24 else None,
                dec25_attendance=self.dec25.attendance if self.dec25 else None,
                accommodation_dec23=self.accommodation.dec23 if self.accommodation else None,
                accommodation_dec24=self.accommodation.dec24 if self.accommodation else None,
                accommodation_dec25=self.accommodation.dec25 if self.accommodation else None,
                concerns=self.concerns,
            ),
        )
