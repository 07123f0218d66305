from fastapi import APIRouter, Depends, HTTPException, status

from weddingsite.exceptions import WorkflowValidationError
from weddingsite.guests.features.register_guest.dtos import RegisterGuestRequest
from weddingsite.guests.features.register_guest.write_model import (
    RegisterGuestWriteModel,
    SqlRegisterGuestWriteModel,
)
from weddingsite.guests.schemas import GuestActionResponse, GuestResponse
from weddingsite.guests.urls import REGISTER_GUEST_URL

router = APIRouter()


def get_register_guest_write_model() -> RegisterGuestWriteModel:
    """Dependency to get register guest write model instance."""
    return SqlRegisterGuestWriteModel()


@router.post(
    REGISTER_GUEST_URL,
    response_model=GuestActionResponse,
    status_code=status.HTTP_201_CREATED,
)
async def register_guest(
    request: RegisterGuestRequest,
    write_model: RegisterGuestWriteModel = Depends(get_register_guest_write_model),
) -> GuestActionResponse:
    """
    Submit a registration. The guest waits in the `pending` queue until an
    admin approves or rejects it.
    """
    try:
        guest = await write_model.register_guest(request.to_dto())
    except WorkflowValidationError as e:
        raise HTTPException(status_code=422, detail=e.as_detail()) from e

    return GuestActionResponse(
        message="Registration submitted successfully",
        guest=GuestResponse.from_dto(guest),
    )
