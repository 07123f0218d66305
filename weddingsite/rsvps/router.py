from datetime import datetime
from uuid import UUID

from fastapi import APIRouter, Depends, Response

from weddingsite.auth.dependencies import require_admin
from weddingsite.email_service import get_email_service
from weddingsite.guests.dtos import RSVPAnswer
from weddingsite.guests.schemas import GuestResponse
from weddingsite.rsvps.csv_export import render_csv
from weddingsite.rsvps.dtos import RSVPEntryDTO
from weddingsite.rsvps.models import (
    RSVPReadModel,
    RSVPReminderSender,
    SqlRSVPReadModel,
    SqlRSVPReminderSender,
)
from weddingsite.rsvps.urls import EXPORT_RSVPS_URL, LIST_RSVPS_URL, SEND_REMINDERS_URL
from weddingsite.schemas import CamelModel

router = APIRouter(dependencies=[Depends(require_admin)])


class RSVPEntryResponse(CamelModel):
    id: UUID
    response: RSVPAnswer
    party_size: int
    message: str
    responded_at: datetime
    guest: GuestResponse

    @classmethod
    def from_dto(cls, entry: RSVPEntryDTO) -> "RSVPEntryResponse":
        return cls(
            id=entry.id,
            response=entry.response,
            party_size=entry.party_size,
            message=entry.message,
            responded_at=entry.responded_at,
            guest=GuestResponse.from_dto(entry.guest),
        )


class RSVPStatsResponse(CamelModel):
    total: int
    yes: int
    no: int
    pending: int
    total_attending: int


class RSVPListResponse(CamelModel):
    rsvps: list[RSVPEntryResponse]
    stats: RSVPStatsResponse


class SendRemindersResponse(CamelModel):
    message: str
    sent: int
    failed: int


def get_rsvp_read_model() -> RSVPReadModel:
    """Dependency to get RSVP read model instance."""
    return SqlRSVPReadModel()


def get_reminder_sender() -> RSVPReminderSender:
    """Dependency to get the reminder sender instance."""
    return SqlRSVPReminderSender(email_service=get_email_service())


@router.get(LIST_RSVPS_URL, response_model=RSVPListResponse)
async def list_rsvps(
    read_model: RSVPReadModel = Depends(get_rsvp_read_model),
) -> RSVPListResponse:
    result = await read_model.list_rsvps()
    stats = result.stats
    return RSVPListResponse(
        rsvps=[RSVPEntryResponse.from_dto(entry) for entry in result.rsvps],
        stats=RSVPStatsResponse(
            total=stats.total,
            yes=stats.yes,
            no=stats.no,
            pending=stats.pending,
            total_attending=stats.total_attending,
        ),
    )


@router.get(EXPORT_RSVPS_URL)
async def export_rsvps(
    read_model: RSVPReadModel = Depends(get_rsvp_read_model),
) -> Response:
    """Download the guest list with every questionnaire answer as CSV."""
    rows = await read_model.export_rows()
    return Response(
        content=render_csv(rows),
        media_type="text/csv",
        headers={"Content-Disposition": "attachment; filename=rsvps.csv"},
    )


@router.post(SEND_REMINDERS_URL, response_model=SendRemindersResponse)
async def send_reminders(
    sender: RSVPReminderSender = Depends(get_reminder_sender),
) -> SendRemindersResponse:
    """Email every approved guest who still owes an RSVP."""
    result = await sender.send_reminders()
    return SendRemindersResponse(
        message=f"Reminders sent to {len(result.sent)} pending guests",
        sent=len(result.sent),
        failed=len(result.failed),
    )
