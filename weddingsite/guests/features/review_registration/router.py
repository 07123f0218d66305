from uuid import UUID

from fastapi import APIRouter, Depends, HTTPException

from weddingsite.auth.dependencies import require_admin
from weddingsite.email_service import get_email_service
from weddingsite.exceptions import NotFoundError, StateConflictError
from weddingsite.guests.features.review_registration.write_model import (
    ReviewRegistrationWriteModel,
    SqlReviewRegistrationWriteModel,
)
from weddingsite.guests.schemas import GuestActionResponse, GuestResponse
from weddingsite.guests.urls import APPROVE_GUEST_URL, REJECT_GUEST_URL

router = APIRouter(dependencies=[Depends(require_admin)])


def get_review_registration_write_model() -> ReviewRegistrationWriteModel:
    """Dependency to get review registration write model instance."""
    return SqlReviewRegistrationWriteModel(email_service=get_email_service())


@router.post(APPROVE_GUEST_URL, response_model=GuestActionResponse)
async def approve_guest(
    guest_id: UUID,
    write_model: ReviewRegistrationWriteModel = Depends(get_review_registration_write_model),
) -> GuestActionResponse:
    """Approve a pending registration and send the guest their RSVP link."""
    try:
        guest = await write_model.approve_guest(guest_id)
    except NotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e)) from e
    except StateConflictError as e:
        raise HTTPException(status_code=409, detail=str(e)) from e

    return GuestActionResponse(
        message="Guest registration approved successfully",
        guest=GuestResponse.from_dto(guest),
    )


@router.post(REJECT_GUEST_URL, response_model=GuestActionResponse)
async def reject_guest(
    guest_id: UUID,
    write_model: ReviewRegistrationWriteModel = Depends(get_review_registration_write_model),
) -> GuestActionResponse:
    """Reject a pending registration."""
    try:
        guest = await write_model.reject_guest(guest_id)
    except NotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e)) from e
    except StateConflictError as e:
        raise HTTPException(status_code=409, detail=str(e)) from e

    return GuestActionResponse(
        message="Guest registration rejected",
        guest=GuestResponse.from_dto(guest),
    )
