from datetime import datetime
from uuid import UUID

from pydantic import Field

from weddingsite.photos.dtos import BulkResultDTO, PhotoDTO, PhotoStatus
from weddingsite.schemas import CamelModel


class PhotoResponse(CamelModel):
    id: UUID
    file_name: str
    content_type: str
    file_size: int
    status: PhotoStatus
    uploaded_by: str
    uploaded_at: datetime
    thumbnail_url: str
    full_url: str
    width: int
    height: int
    moderated_at: datetime | None = None

    @classmethod
    def from_dto(cls, photo: PhotoDTO) -> "PhotoResponse":
        return cls(
            id=photo.id,
            file_name=photo.file_name,
            content_type=photo.content_type,
            file_size=photo.file_size,
            status=photo.status,
            uploaded_by=photo.uploaded_by,
            uploaded_at=photo.uploaded_at,
            thumbnail_url=photo.thumbnail_url,
            full_url=photo.full_url,
            width=photo.width,
            height=photo.height,
            moderated_at=photo.moderated_at,
        )


class PhotoIdsRequest(CamelModel):
    photo_ids: list[UUID] = Field(min_length=1)


class BulkResultResponse(CamelModel):
    message: str
    processed: list[UUID]
    skipped: list[UUID]

    @classmethod
    def from_dto(cls, message: str, result: BulkResultDTO) -> "BulkResultResponse":
        return cls(message=message, processed=result.processed, skipped=result.skipped)


class AutoApproveRequest(CamelModel):
    enabled: bool


class AutoApproveResponse(CamelModel):
    enabled: bool
