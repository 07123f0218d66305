"""Admin RSVP read model and reminder sender."""

import logging
from abc import ABC, abstractmethod

from sqlalchemy import func, select

from weddingsite.config.database import async_session_manager
from weddingsite.config.settings import settings
from weddingsite.email_service.base import EmailServiceBase
from weddingsite.guests.dtos import GuestDTO, RegistrationStatus, RSVPAnswer, RSVPStatus
from weddingsite.guests.repository.orm_models import RSVP, Guest
from weddingsite.guests.urls import rsvp_link
from weddingsite.rsvps.dtos import (
    ReminderResultDTO,
    RSVPEntryDTO,
    RSVPExportRowDTO,
    RSVPListDTO,
    RSVPStatsDTO,
)

logger = logging.getLogger(__name__)


class RSVPReadModel(ABC):
    @abstractmethod
    async def list_rsvps(self) -> RSVPListDTO:
        """Every RSVP, latest response first, plus the headcount over approved guests."""
        raise NotImplementedError

    @abstractmethod
    async def export_rows(self) -> list[RSVPExportRowDTO]:
        """One row per approved guest, answered or not."""
        raise NotImplementedError


class RSVPReminderSender(ABC):
    @abstractmethod
    async def send_reminders(self) -> ReminderResultDTO:
        """Remind every approved guest who has not answered yet."""
        raise NotImplementedError


class SqlRSVPReadModel(RSVPReadModel):
    async def list_rsvps(self) -> RSVPListDTO:
        async with async_session_manager() as session:
            result = await session.execute(
                select(RSVP, Guest)
                .join(Guest, RSVP.guest_id == Guest.uuid)
                .order_by(RSVP.responded_at.desc())
            )
            rsvps = [
                RSVPEntryDTO(
                    id=rsvp.uuid,
                    response=RSVPAnswer(rsvp.response),
                    party_size=rsvp.party_size,
                    message=rsvp.message,
                    responded_at=rsvp.responded_at,
                    guest=GuestDTO.from_guest(guest),
                )
                for rsvp, guest in result.all()
            ]

            counts = await session.execute(
                select(
                    Guest.rsvp_status,
                    func.count(Guest.uuid),
                    func.coalesce(func.sum(Guest.party_size), 0),
                )
                .where(Guest.registration_status == RegistrationStatus.APPROVED)
                .group_by(Guest.rsvp_status)
            )
            by_status = {RSVPStatus(status): (count, size) for status, count, size in counts.all()}

        stats = RSVPStatsDTO(
            total=sum(count for count, _ in by_status.values()),
            yes=by_status.get(RSVPStatus.YES, (0, 0))[0],
            no=by_status.get(RSVPStatus.NO, (0, 0))[0],
            pending=by_status.get(RSVPStatus.PENDING, (0, 0))[0],
            total_attending=int(by_status.get(RSVPStatus.YES, (0, 0))[1]),
        )
        return RSVPListDTO(rsvps=rsvps, stats=stats)

    async def export_rows(self) -> list[RSVPExportRowDTO]:
        async with async_session_manager() as session:
            result = await session.execute(
                select(Guest, RSVP)
                .outerjoin(RSVP, RSVP.guest_id == Guest.uuid)
                .where(Guest.registration_status == RegistrationStatus.APPROVED)
                .order_by(Guest.last_name, Guest.first_name)
            )
            return [
                RSVPExportRowDTO(
                    guest=GuestDTO.from_guest(guest),
                    message=rsvp.message if rsvp else "",
                    responded_at=rsvp.responded_at if rsvp else None,
                )
                for guest, rsvp in result.all()
            ]


class SqlRSVPReminderSender(RSVPReminderSender):
    def __init__(
        self,
        email_service: EmailServiceBase,
        frontend_url: str | None = None,
    ) -> None:
        self.email_service = email_service
        self.frontend_url = frontend_url or settings.frontend_url

    async def send_reminders(self) -> ReminderResultDTO:
        async with async_session_manager() as session:
            result = await session.execute(
                select(Guest).where(
                    Guest.registration_status == RegistrationStatus.APPROVED,
                    Guest.rsvp_status == RSVPStatus.PENDING,
                    Guest.invite_token.is_not(None),
                )
            )
            guests = [GuestDTO.from_guest(guest) for guest in result.scalars().all()]

        sent, failed = [], []
        for guest in guests:
            try:
                await self.email_service.send_rsvp_reminder(
                    to_address=guest.email,
                    guest_name=guest.first_name or guest.full_name,
                    rsvp_url=rsvp_link(self.frontend_url, guest.invite_token),
                )
            except Exception:
                logger.exception("Failed to send RSVP reminder to %s", guest.email)
                failed.append(guest.email)
            else:
                sent.append(guest.email)

        logger.info("RSVP reminders: %s sent, %s failed", len(sent), len(failed))
        return ReminderResultDTO(sent=sent, failed=failed)
