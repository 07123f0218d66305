import logging
from typing import Protocol

import httpx

from weddingsite.email_service.base import EmailServiceBase
from weddingsite.email_service.templates import EmailTemplates

logger = logging.getLogger(__name__)

RESEND_API_URL = "https://api.resend.com/emails"


class ResendEmailConfig(Protocol):
    resend_api_key: str
    emails_from: str
    couple_names: str


class ResendEmailService(EmailServiceBase):
    def __init__(
        self,
        config: ResendEmailConfig,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        self._config = config
        self._transport = transport

    async def _send(
        self,
        to_address: str,
        subject: str,
        html_body: str,
        text_body: str,
    ) -> str | None:
        """Send email via Resend and return the Resend email id."""
        async with httpx.AsyncClient(transport=self._transport) as client:
            response = await client.post(
                RESEND_API_URL,
                headers={
                    "Authorization": f"Bearer {self._config.resend_api_key}",
                    "Content-Type": "application/json",
                },
                json={
                    "from": self._config.emails_from,
                    "to": [to_address],
                    "subject": subject,
                    "html": html_body,
                    "text": text_body,
                },
            )
            response.raise_for_status()

        resend_email_id = response.json().get("id")
        logger.info("Sent '%s' to %s via Resend (id=%s)", subject, to_address, resend_email_id)
        return resend_email_id

    async def send_rsvp_invitation(
        self,
        to_address: str,
        guest_name: str,
        rsvp_url: str,
        portal_url: str,
    ) -> None:
        subject, html_body, text_body = EmailTemplates.render_invitation(
            guest_name=guest_name,
            rsvp_url=rsvp_url,
            portal_url=portal_url,
            couple_names=self._config.couple_names,
        )
        await self._send(to_address, subject, html_body, text_body)

    async def send_rsvp_confirmation(
        self,
        to_address: str,
        guest_name: str,
        attending: str,
        party_size: int,
        message: str,
    ) -> None:
        subject, html_body, text_body = EmailTemplates.render_confirmation(
            guest_name=guest_name,
            attending=attending,
            party_size=party_size,
            message=message or "-",
            couple_names=self._config.couple_names,
        )
        await self._send(to_address, subject, html_body, text_body)

    async def send_rsvp_reminder(
        self,
        to_address: str,
        guest_name: str,
        rsvp_url: str,
    ) -> None:
        subject, html_body, text_body = EmailTemplates.render_reminder(
            guest_name=guest_name,
            rsvp_url=rsvp_url,
            couple_names=self._config.couple_names,
        )
        await self._send(to_address, subject, html_body, text_body)
