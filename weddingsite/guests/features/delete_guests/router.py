from uuid import UUID

from fastapi import APIRouter, Depends, HTTPException
from pydantic import Field

from weddingsite.auth.dependencies import require_admin
from weddingsite.exceptions import NotFoundError
from weddingsite.guests.dtos import DeleteGuestsResultDTO
from weddingsite.guests.features.delete_guests.write_model import (
    DeleteGuestsWriteModel,
    SqlDeleteGuestsWriteModel,
)
from weddingsite.guests.urls import DELETE_ALL_GUESTS_URL, DELETE_SELECTED_GUESTS_URL
from weddingsite.photos.storage import get_photo_storage
from weddingsite.schemas import CamelModel

router = APIRouter(dependencies=[Depends(require_admin)])


class DeleteSelectedGuestsRequest(CamelModel):
    guest_ids: list[UUID] = Field(min_length=1)


class DeleteGuestsResponse(CamelModel):
    message: str
    count: int
    deleted_rsvps: int
    deleted_messages: int
    deleted_photos: int

    @classmethod
    def from_dto(cls, message: str, result: DeleteGuestsResultDTO) -> "DeleteGuestsResponse":
        return cls(
            message=message,
            count=result.deleted_guests,
            deleted_rsvps=result.deleted_rsvps,
            deleted_messages=result.deleted_messages,
            deleted_photos=result.deleted_photos,
        )


def get_delete_guests_write_model() -> DeleteGuestsWriteModel:
    """Dependency to get delete guests write model instance."""
    return SqlDeleteGuestsWriteModel(storage=get_photo_storage())


@router.post(DELETE_SELECTED_GUESTS_URL, response_model=DeleteGuestsResponse)
async def delete_selected_guests(
    request: DeleteSelectedGuestsRequest,
    write_model: DeleteGuestsWriteModel = Depends(get_delete_guests_write_model),
) -> DeleteGuestsResponse:
    """Delete the selected guests with their RSVPs, messages and photos. Unknown ids abort the whole request."""
    try:
        result = await write_model.delete_guests(request.guest_ids)
    except NotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e)) from e

    return DeleteGuestsResponse.from_dto(
        f"{result.deleted_guests} guests deleted successfully", result
    )


@router.delete(DELETE_ALL_GUESTS_URL, response_model=DeleteGuestsResponse)
async def delete_all_guests(
    write_model: DeleteGuestsWriteModel = Depends(get_delete_guests_write_model),
) -> DeleteGuestsResponse:
    result = await write_model.delete_all_guests()
    return DeleteGuestsResponse.from_dto("All guests deleted successfully", result)
