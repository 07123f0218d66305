from datetime import datetime

from fastapi import APIRouter, Depends, HTTPException

from weddingsite.email_service import get_email_service
from weddingsite.exceptions import InvalidTokenError, WorkflowValidationError
from weddingsite.guests.dtos import (
    DietaryPreference,
    QuestionnaireDTO,
    RSVPAnswer,
    RSVPStatus,
    RSVPSubmissionDTO,
)
from weddingsite.guests.repository.write_models import RSVPWriteModel, SqlRSVPWriteModel
from weddingsite.guests.schemas import PartyMemberSchema
from weddingsite.guests.urls import UPDATE_RSVP_URL
from weddingsite.schemas import CamelModel

router = APIRouter()


class UpdatedDetails(CamelModel):
    """Questionnaire edits sent with an RSVP. Omitted fields stay as they are."""

    party_size: int | None = None
    party_members: list[PartyMemberSchema] | None = None
    main_person_dietary_preference: DietaryPreference | None = None
    dec24_attendance: bool | None = None
    dec25_attendance: bool | None = None
    accommodation_dec23: bool | None = None
    accommodation_dec24: bool | None = None
    accommodation_dec25: bool | None = None
    concerns: str | None = None

    def to_dto(self) -> QuestionnaireDTO:
        return QuestionnaireDTO(
            party_size=self.party_size,
            party_members=(
                [member.to_dto() for member in self.party_members]
                if self.party_members is not None
                else None
            ),
            main_person_dietary_preference=self.main_person_dietary_preference,
            dec24_attendance=self.dec24_attendance,
            dec25_attendance=self.dec25_attendance,
            accommodation_dec23=self.accommodation_dec23,
            accommodation_dec24=self.accommodation_dec24,
            accommodation_dec25=self.accommodation_dec25,
            concerns=self.concerns,
        )


class SubmitRSVPRequest(CamelModel):
    response: RSVPAnswer
    message: str = ""
    updated_details: UpdatedDetails | None = None


class SubmitRSVPResponse(CamelModel):
    message: str
    response: RSVPAnswer
    rsvp_status: RSVPStatus
    responded_at: datetime


def get_rsvp_write_model() -> RSVPWriteModel:
    """Dependency to get RSVP write model instance."""
    return SqlRSVPWriteModel(email_service=get_email_service())


@router.post(UPDATE_RSVP_URL, response_model=SubmitRSVPResponse)
async def submit_rsvp(
    token: str,
    rsvp_data: SubmitRSVPRequest,
    write_model: RSVPWriteModel = Depends(get_rsvp_write_model),
) -> SubmitRSVPResponse:
    """
    Submit (or resubmit) an RSVP. Questionnaire edits in `updatedDetails`
    are validated before anything is stored.
    """
    submission = RSVPSubmissionDTO(
        response=rsvp_data.response,
        message=rsvp_data.message,
        updated_details=(
            rsvp_data.updated_details.to_dto() if rsvp_data.updated_details else None
        ),
    )
    try:
        result = await write_model.submit_rsvp(token, submission)
    except InvalidTokenError as e:
        raise HTTPException(status_code=404, detail=str(e)) from e
    except WorkflowValidationError as e:
        raise HTTPException(status_code=422, detail=e.as_detail()) from e

    return SubmitRSVPResponse(
        message=result.message,
        response=result.response,
        rsvp_status=result.rsvp_status,
        responded_at=result.responded_at,
    )
