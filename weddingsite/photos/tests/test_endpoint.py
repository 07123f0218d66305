from dataclasses import replace
from uuid import UUID, uuid4

import pytest

from weddingsite.exceptions import InvalidTokenError, NotFoundError
from weddingsite.models.base import utcnow
from weddingsite.photos.admin_router import ARCHIVE_FILE_NAME
from weddingsite.photos.archive import build_zip
from weddingsite.photos.dtos import (
    BulkResultDTO,
    PhotoArchiveDTO,
    PhotoDTO,
    PhotoStatus,
    PhotoUploadDTO,
)
from weddingsite.photos.images import make_thumbnail
from weddingsite.photos.models import PhotoReadModel, PhotoWriteModel
from weddingsite.photos.router import get_auto_approve, get_photo_read_model, get_photo_write_model
from weddingsite.photos.settings_store import AutoApproveSetting, get_auto_approve_setting
from weddingsite.photos.tests.factories import make_image_bytes
from weddingsite.photos.urls import (
    ADMIN_PENDING_PHOTOS_URL,
    ADMIN_PHOTOS_URL,
    APPROVE_PHOTO_URL,
    AUTO_APPROVE_SETTING_URL,
    BULK_APPROVE_PHOTOS_URL,
    BULK_DELETE_PHOTOS_URL,
    DELETE_PHOTO_URL,
    DOWNLOAD_PHOTOS_ZIP_URL,
    PUBLIC_PHOTOS_URL,
    REJECT_PHOTO_URL,
    UPLOAD_PHOTO_URL,
)
from weddingsite.workflow import Action, initial_photo_status, photo_transition


def _photo(status: PhotoStatus = PhotoStatus.PENDING, **fields) -> PhotoDTO:
    return PhotoDTO(
        id=fields.pop("id", uuid4()),
        file_name="dance.jpg",
        content_type="image/jpeg",
        file_size=1234,
        status=status,
        uploaded_by="Ann",
        uploaded_at=utcnow(),
        thumbnail_url="/media/t.jpg",
        full_url="/media/f.jpg",
        **fields,
    )


class InMemoryPhotoModel(PhotoReadModel, PhotoWriteModel):
    """In-memory read and write model for testing."""

    def __init__(self, photos: list[PhotoDTO] | None = None):
        self.photos: dict[UUID, PhotoDTO] = {photo.id: photo for photo in photos or []}
        self.uploads: list[tuple[PhotoUploadDTO, bool]] = []

    async def list_photos(self, status: PhotoStatus | None = None) -> list[PhotoDTO]:
        return [p for p in self.photos.values() if status is None or p.status == status]

    async def upload_photo(self, upload: PhotoUploadDTO, auto_approve: bool) -> PhotoDTO:
        if upload.guest_token not in (None, "portal-token-123"):
            raise InvalidTokenError("Invalid guest portal link")
        processed = make_thumbnail(upload.content)
        photo = _photo(
            status=initial_photo_status(auto_approve),
            width=processed.width,
            height=processed.height,
        )
        self.uploads.append((upload, auto_approve))
        self.photos[photo.id] = photo
        return photo

    async def approve_photo(self, photo_id: UUID) -> PhotoDTO:
        return self._moderate(photo_id, Action.APPROVE)

    async def reject_photo(self, photo_id: UUID) -> PhotoDTO:
        return self._moderate(photo_id, Action.REJECT)

    def _moderate(self, photo_id: UUID, action: Action) -> PhotoDTO:
        if photo_id not in self.photos:
            raise NotFoundError(f"Photo {photo_id} not found")
        transition = photo_transition(self.photos[photo_id].status, action)
        self.photos[photo_id] = replace(self.photos[photo_id], status=transition.next_status)
        return self.photos[photo_id]

    async def delete_photo(self, photo_id: UUID) -> None:
        if self.photos.pop(photo_id, None) is None:
            raise NotFoundError(f"Photo {photo_id} not found")

    async def bulk_approve(self, photo_ids: list[UUID]) -> BulkResultDTO:
        processed = [
            i for i in photo_ids if i in self.photos and self.photos[i].status == PhotoStatus.PENDING
        ]
        for photo_id in processed:
            await self.approve_photo(photo_id)
        return BulkResultDTO(processed, [i for i in photo_ids if i not in processed])

    async def bulk_delete(self, photo_ids: list[UUID]) -> BulkResultDTO:
        processed = [i for i in photo_ids if self.photos.pop(i, None) is not None]
        return BulkResultDTO(processed, [i for i in photo_ids if i not in processed])

    async def build_archive(self, photo_ids: list[UUID]) -> PhotoArchiveDTO:
        found = [i for i in photo_ids if i in self.photos]
        content = build_zip((f"{i.hex[:8]}_dance.jpg", b"jpeg") for i in found)
        return PhotoArchiveDTO(content, len(found), [i for i in photo_ids if i not in found])


class InMemoryAutoApproveSetting(AutoApproveSetting):
    def __init__(self, enabled: bool = False):
        self.enabled = enabled

    async def is_enabled(self) -> bool:
        return self.enabled

    async def set_enabled(self, enabled: bool) -> bool:
        self.enabled = enabled
        return enabled


def _overrides(model: InMemoryPhotoModel, auto_approve: bool = False) -> dict:
    return {
        get_photo_read_model: lambda: model,
        get_photo_write_model: lambda: model,
        get_auto_approve: lambda: auto_approve,
    }


async def test_public_gallery_shows_only_approved(client_factory):
    approved = _photo(PhotoStatus.APPROVED)
    model = InMemoryPhotoModel([approved, _photo(), _photo(PhotoStatus.REJECTED)])

    async with client_factory(_overrides(model), as_admin=False) as client:
        response = await client.get(PUBLIC_PHOTOS_URL)

    assert response.status_code == 200
    assert [p["id"] for p in response.json()] == [str(approved.id)]


async def test_upload_photo_pending_by_default(client_factory):
    model = InMemoryPhotoModel()

    async with client_factory(_overrides(model), as_admin=False) as client:
        response = await client.post(
            UPLOAD_PHOTO_URL,
            files={"file": ("dance.jpg", make_image_bytes(), "image/jpeg")},
            data={"guestName": " Ann ", "guestToken": "portal-token-123"},
        )

    assert response.status_code == 201
    assert response.json()["status"] == "pending"
    assert response.json()["width"] == 800
    upload, auto_approve = model.uploads[0]
    assert upload.guest_name == "Ann"
    assert upload.guest_token == "portal-token-123"
    assert upload.content_type == "image/jpeg"
    assert auto_approve is False


@pytest.mark.parametrize(
    "sent_name, stored_name",
    [
        ("../../../etc/cron.d/x.jpg", "x.jpg"),
        ("C:\\Users\\ann\\dance.jpg", "dance.jpg"),
    ],
)
async def test_upload_keeps_only_the_base_file_name(client_factory, sent_name, stored_name):
    model = InMemoryPhotoModel()

    async with client_factory(_overrides(model), as_admin=False) as client:
        response = await client.post(
            UPLOAD_PHOTO_URL, files={"file": (sent_name, make_image_bytes(), "image/jpeg")}
        )

    assert response.status_code == 201
    upload, _ = model.uploads[0]
    assert upload.file_name == stored_name


async def test_upload_photo_auto_approved(client_factory):
    model = InMemoryPhotoModel()

    async with client_factory(_overrides(model, auto_approve=True), as_admin=False) as client:
        response = await client.post(
            UPLOAD_PHOTO_URL, files={"file": ("dance.png", make_image_bytes(fmt="PNG"), "image/png")}
        )

    assert response.status_code == 201
    assert response.json()["status"] == "approved"


async def test_upload_invalid_image_is_422(client_factory):
    model = InMemoryPhotoModel()

    async with client_factory(_overrides(model), as_admin=False) as client:
        response = await client.post(
            UPLOAD_PHOTO_URL, files={"file": ("dance.jpg", b"garbage", "image/jpeg")}
        )

    assert response.status_code == 422
    assert response.json()["detail"][0]["loc"] == ["body", "file"]


async def test_upload_unknown_guest_token_is_404(client_factory):
    model = InMemoryPhotoModel()

    async with client_factory(_overrides(model), as_admin=False) as client:
        response = await client.post(
            UPLOAD_PHOTO_URL,
            files={"file": ("dance.jpg", make_image_bytes(), "image/jpeg")},
            data={"guestToken": "nope"},
        )

    assert response.status_code == 404


async def test_admin_lists(client_factory):
    pending = _photo()
    model = InMemoryPhotoModel([pending, _photo(PhotoStatus.APPROVED)])

    async with client_factory(_overrides(model)) as client:
        all_photos = await client.get(ADMIN_PHOTOS_URL)
        pending_photos = await client.get(ADMIN_PENDING_PHOTOS_URL)

    assert len(all_photos.json()) == 2
    assert [p["id"] for p in pending_photos.json()] == [str(pending.id)]


async def test_admin_routes_require_admin(client_factory):
    model = InMemoryPhotoModel([_photo()])

    async with client_factory(_overrides(model), as_admin=False) as client:
        response = await client.get(ADMIN_PHOTOS_URL)

    assert response.status_code == 401


async def test_approve_reject_and_conflict(client_factory):
    first, second = _photo(), _photo()
    model = InMemoryPhotoModel([first, second])

    async with client_factory(_overrides(model)) as client:
        approved = await client.patch(APPROVE_PHOTO_URL.format(photo_id=first.id))
        rejected = await client.patch(REJECT_PHOTO_URL.format(photo_id=second.id))
        conflict = await client.patch(APPROVE_PHOTO_URL.format(photo_id=second.id))
        missing = await client.patch(APPROVE_PHOTO_URL.format(photo_id=uuid4()))

    assert approved.json()["status"] == "approved"
    assert rejected.json()["status"] == "rejected"
    assert conflict.status_code == 409
    assert missing.status_code == 404


async def test_delete_photo(client_factory):
    photo = _photo()
    model = InMemoryPhotoModel([photo])

    async with client_factory(_overrides(model)) as client:
        response = await client.delete(DELETE_PHOTO_URL.format(photo_id=photo.id))
        again = await client.delete(DELETE_PHOTO_URL.format(photo_id=photo.id))

    assert response.json() == {"message": "Photo deleted successfully"}
    assert again.status_code == 404


async def test_bulk_approve(client_factory):
    pending, approved = _photo(), _photo(PhotoStatus.APPROVED)
    model = InMemoryPhotoModel([pending, approved])

    async with client_factory(_overrides(model)) as client:
        response = await client.post(
            BULK_APPROVE_PHOTOS_URL, json={"photoIds": [str(pending.id), str(approved.id)]}
        )

    assert response.status_code == 200
    assert response.json() == {
        "message": "1 photos approved",
        "processed": [str(pending.id)],
        "skipped": [str(approved.id)],
    }


async def test_bulk_delete_with_missing_id(client_factory):
    photo = _photo()
    unknown = uuid4()
    model = InMemoryPhotoModel([photo])

    async with client_factory(_overrides(model)) as client:
        response = await client.post(
            BULK_DELETE_PHOTOS_URL, json={"photoIds": [str(photo.id), str(unknown)]}
        )

    assert response.status_code == 200
    assert response.json()["message"] == "1 photos deleted"
    assert response.json()["skipped"] == [str(unknown)]
    assert model.photos == {}


async def test_bulk_actions_need_ids(client_factory):
    model = InMemoryPhotoModel()

    async with client_factory(_overrides(model)) as client:
        response = await client.post(BULK_DELETE_PHOTOS_URL, json={"photoIds": []})

    assert response.status_code == 422


async def test_download_zip(client_factory):
    photo = _photo()
    model = InMemoryPhotoModel([photo])

    async with client_factory(_overrides(model)) as client:
        response = await client.post(
            DOWNLOAD_PHOTOS_ZIP_URL, json={"photoIds": [str(photo.id), str(uuid4())]}
        )

    assert response.status_code == 200
    assert response.headers["content-type"] == "application/zip"
    assert ARCHIVE_FILE_NAME in response.headers["content-disposition"]
    assert response.headers["x-photo-count"] == "1"
    assert response.headers["x-skipped-count"] == "1"
    assert response.content[:2] == b"PK"


async def test_auto_approve_setting(client_factory):
    setting = InMemoryAutoApproveSetting(enabled=False)

    async with client_factory({get_auto_approve_setting: lambda: setting}) as client:
        before = await client.get(AUTO_APPROVE_SETTING_URL)
        updated = await client.post(AUTO_APPROVE_SETTING_URL, json={"enabled": True})

    assert before.json() == {"enabled": False}
    assert updated.json() == {"enabled": True}
    assert setting.enabled is True


async def test_upload_reads_auto_approve_setting(client_factory):
    model = InMemoryPhotoModel()
    setting = InMemoryAutoApproveSetting(enabled=True)
    overrides = {
        get_photo_write_model: lambda: model,
        get_auto_approve_setting: lambda: setting,
    }

    async with client_factory(overrides, as_admin=False) as client:
        response = await client.post(
            UPLOAD_PHOTO_URL, files={"file": ("dance.jpg", make_image_bytes(), "image/jpeg")}
        )

    assert response.json()["status"] == "approved"
