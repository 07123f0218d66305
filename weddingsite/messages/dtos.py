from dataclasses import dataclass
from datetime import datetime
from enum import Enum
from uuid import UUID


class MessageStatus(str, Enum):
    UNREAD = "unread"
    READ = "read"


@dataclass(frozen=True)
class MessageDTO:
    id: UUID
    guest_token: str
    guest_name: str
    content: str
    status: MessageStatus
    created_at: datetime


@dataclass(frozen=True)
class MessageListDTO:
    messages: list[MessageDTO]
    unread_count: int
