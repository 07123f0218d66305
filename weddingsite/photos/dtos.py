from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from uuid import UUID


class PhotoStatus(str, Enum):
    PENDING = "pending"
    APPROVED = "approved"
    REJECTED = "rejected"


@dataclass(frozen=True)
class PhotoUploadDTO:
    file_name: str
    content_type: str
    content: bytes
    guest_name: str
    guest_token: str | None = None


@dataclass(frozen=True)
class PhotoDTO:
    id: UUID
    file_name: str
    content_type: str
    file_size: int
    status: PhotoStatus
    uploaded_by: str
    uploaded_at: datetime
    thumbnail_url: str
    full_url: str
    width: int = 0
    height: int = 0
    guest_token: str | None = None
    moderated_at: datetime | None = None


@dataclass(frozen=True)
class BulkResultDTO:
    """Outcome of a bulk photo action; unknown or ineligible ids are skipped."""

    processed: list[UUID] = field(default_factory=list)
    skipped: list[UUID] = field(default_factory=list)


@dataclass(frozen=True)
class PhotoArchiveDTO:
    content: bytes
    file_count: int
    skipped: list[UUID] = field(default_factory=list)
