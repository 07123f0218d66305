from fastapi import APIRouter, Depends, File, Form, HTTPException, UploadFile, status

from weddingsite.config.settings import settings
from weddingsite.exceptions import InvalidTokenError, WorkflowValidationError
from weddingsite.photos.dtos import PhotoStatus, PhotoUploadDTO
from weddingsite.photos.models import (
    PhotoReadModel,
    PhotoWriteModel,
    SqlPhotoReadModel,
    SqlPhotoWriteModel,
)
from weddingsite.photos.schemas import PhotoResponse
from weddingsite.photos.settings_store import AutoApproveSetting, get_auto_approve_setting
from weddingsite.photos.storage import PhotoStorage, get_photo_storage, safe_file_name
from weddingsite.photos.urls import PUBLIC_PHOTOS_URL, UPLOAD_PHOTO_URL

router = APIRouter()


def get_photo_read_model(storage: PhotoStorage = Depends(get_photo_storage)) -> PhotoReadModel:
    """Dependency to get photo read model instance."""
    return SqlPhotoReadModel(storage=storage)


def get_photo_write_model(storage: PhotoStorage = Depends(get_photo_storage)) -> PhotoWriteModel:
    """Dependency to get photo write model instance."""
    return SqlPhotoWriteModel(storage=storage)


async def get_auto_approve(
    setting: AutoApproveSetting = Depends(get_auto_approve_setting),
) -> bool:
    """Current value of the auto-approve switch, read once per request."""
    return await setting.is_enabled()


@router.get(PUBLIC_PHOTOS_URL, response_model=list[PhotoResponse])
async def list_public_photos(
    read_model: PhotoReadModel = Depends(get_photo_read_model),
) -> list[PhotoResponse]:
    """The public gallery: approved photos only."""
    photos = await read_model.list_photos(status=PhotoStatus.APPROVED)
    return [PhotoResponse.from_dto(photo) for photo in photos]


@router.post(UPLOAD_PHOTO_URL, response_model=PhotoResponse, status_code=status.HTTP_201_CREATED)
async def upload_photo(
    file: UploadFile = File(...),
    guest_name: str = Form("", alias="guestName"),
    guest_token: str | None = Form(None, alias="guestToken"),
    auto_approve: bool = Depends(get_auto_approve),
    write_model: PhotoWriteModel = Depends(get_photo_write_model),
) -> PhotoResponse:
    """
    Upload one image. It lands in the moderation queue unless auto-approve is on.
    """
    # Read one byte past the limit so oversize files are detected without buffering them whole
    content = await file.read(settings.max_photo_size_bytes + 1)
    upload = PhotoUploadDTO(
        file_name=safe_file_name(file.filename or "photo"),
        content_type=file.content_type or "",
        content=content,
        guest_name=guest_name.strip(),
        guest_token=guest_token or None,
    )
    try:
        photo = await write_model.upload_photo(upload, auto_approve=auto_approve)
    except WorkflowValidationError as e:
        raise HTTPException(status_code=422, detail=e.as_detail()) from e
    except InvalidTokenError as e:
        raise HTTPException(status_code=404, detail=str(e)) from e

    return PhotoResponse.from_dto(photo)
