from uuid import UUID

from fastapi import APIRouter, Depends, HTTPException, Response

from weddingsite.auth.dependencies import require_admin
from weddingsite.exceptions import NotFoundError, StateConflictError
from weddingsite.photos.dtos import PhotoStatus
from weddingsite.photos.models import PhotoReadModel, PhotoWriteModel
from weddingsite.photos.router import get_photo_read_model, get_photo_write_model
from weddingsite.photos.schemas import (
    AutoApproveRequest,
    AutoApproveResponse,
    BulkResultResponse,
    PhotoIdsRequest,
    PhotoResponse,
)
from weddingsite.photos.settings_store import AutoApproveSetting, get_auto_approve_setting
from weddingsite.photos.urls import (
    ADMIN_PENDING_PHOTOS_URL,
    ADMIN_PHOTOS_URL,
    APPROVE_PHOTO_URL,
    AUTO_APPROVE_SETTING_URL,
    BULK_APPROVE_PHOTOS_URL,
    BULK_DELETE_PHOTOS_URL,
    DELETE_PHOTO_URL,
    DOWNLOAD_PHOTOS_ZIP_URL,
    REJECT_PHOTO_URL,
)
from weddingsite.schemas import MessageResponse

router = APIRouter(dependencies=[Depends(require_admin)])

ARCHIVE_FILE_NAME = "wedding-photos.zip"


@router.get(ADMIN_PHOTOS_URL, response_model=list[PhotoResponse])
async def list_all_photos(
    read_model: PhotoReadModel = Depends(get_photo_read_model),
) -> list[PhotoResponse]:
    photos = await read_model.list_photos()
    return [PhotoResponse.from_dto(photo) for photo in photos]


@router.get(ADMIN_PENDING_PHOTOS_URL, response_model=list[PhotoResponse])
async def list_pending_photos(
    read_model: PhotoReadModel = Depends(get_photo_read_model),
) -> list[PhotoResponse]:
    photos = await read_model.list_photos(status=PhotoStatus.PENDING)
    return [PhotoResponse.from_dto(photo) for photo in photos]


@router.patch(APPROVE_PHOTO_URL, response_model=PhotoResponse)
async def approve_photo(
    photo_id: UUID,
    write_model: PhotoWriteModel = Depends(get_photo_write_model),
) -> PhotoResponse:
    try:
        photo = await write_model.approve_photo(photo_id)
    except NotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e)) from e
    except StateConflictError as e:
        raise HTTPException(status_code=409, detail=str(e)) from e
    return PhotoResponse.from_dto(photo)


@router.patch(REJECT_PHOTO_URL, response_model=PhotoResponse)
async def reject_photo(
    photo_id: UUID,
    write_model: PhotoWriteModel = Depends(get_photo_write_model),
) -> PhotoResponse:
    """Take a photo out of the queue. The asset stays until the photo is deleted."""
    try:
        photo = await write_model.reject_photo(photo_id)
    except NotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e)) from e
    except StateConflictError as e:
        raise HTTPException(status_code=409, detail=str(e)) from e
    return PhotoResponse.from_dto(photo)


@router.delete(DELETE_PHOTO_URL, response_model=MessageResponse)
async def delete_photo(
    photo_id: UUID,
    write_model: PhotoWriteModel = Depends(get_photo_write_model),
) -> MessageResponse:
    try:
        await write_model.delete_photo(photo_id)
    except NotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e)) from e
    return MessageResponse(message="Photo deleted successfully")


@router.post(BULK_APPROVE_PHOTOS_URL, response_model=BulkResultResponse)
async def bulk_approve_photos(
    request: PhotoIdsRequest,
    write_model: PhotoWriteModel = Depends(get_photo_write_model),
) -> BulkResultResponse:
    result = await write_model.bulk_approve(request.photo_ids)
    return BulkResultResponse.from_dto(f"{len(result.processed)} photos approved", result)


@router.post(BULK_DELETE_PHOTOS_URL, response_model=BulkResultResponse)
async def bulk_delete_photos(
    request: PhotoIdsRequest,
    write_model: PhotoWriteModel = Depends(get_photo_write_model),
) -> BulkResultResponse:
    result = await write_model.bulk_delete(request.photo_ids)
    return BulkResultResponse.from_dto(f"{len(result.processed)} photos deleted", result)


@router.post(DOWNLOAD_PHOTOS_ZIP_URL)
async def download_photos_zip(
    request: PhotoIdsRequest,
    write_model: PhotoWriteModel = Depends(get_photo_write_model),
) -> Response:
    archive = await write_model.build_archive(request.photo_ids)
    return Response(
        content=archive.content,
        media_type="application/zip",
        headers={
            "Content-Disposition": f'attachment; filename="{ARCHIVE_FILE_NAME}"',
            "X-Photo-Count": str(archive.file_count),
            "X-Skipped-Count": str(len(archive.skipped)),
        },
    )


@router.get(AUTO_APPROVE_SETTING_URL, response_model=AutoApproveResponse)
async def get_auto_approve_setting_value(
    setting: AutoApproveSetting = Depends(get_auto_approve_setting),
) -> AutoApproveResponse:
    return AutoApproveResponse(enabled=await setting.is_enabled())


@router.post(AUTO_APPROVE_SETTING_URL, response_model=AutoApproveResponse)
async def update_auto_approve_setting(
    request: AutoApproveRequest,
    setting: AutoApproveSetting = Depends(get_auto_approve_setting),
) -> AutoApproveResponse:
    """Only affects photos uploaded from now on."""
    return AutoApproveResponse(enabled=await setting.set_enabled(request.enabled))
