from dataclasses import dataclass, field
from datetime import datetime
from uuid import UUID

from weddingsite.guests.dtos import GuestDTO, RSVPAnswer


@dataclass(frozen=True)
class RSVPEntryDTO:
    id: UUID
    response: RSVPAnswer
    party_size: int
    message: str
    responded_at: datetime
    guest: GuestDTO


@dataclass(frozen=True)
class RSVPStatsDTO:
    total: int = 0
    yes: int = 0
    no: int = 0
    pending: int = 0
    # Sum of party sizes of guests who said yes
    total_attending: int = 0


@dataclass(frozen=True)
class RSVPListDTO:
    rsvps: list[RSVPEntryDTO]
    stats: RSVPStatsDTO


@dataclass(frozen=True)
class RSVPExportRowDTO:
    guest: GuestDTO
    message: str = ""
    responded_at: datetime | None = None


@dataclass(frozen=True)
class ReminderResultDTO:
    sent: list[str] = field(default_factory=list)
    failed: list[str] = field(default_factory=list)
