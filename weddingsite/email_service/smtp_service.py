import asyncio
import logging
import smtplib
from email.mime.multipart import MIMEMultipart
from email.mime.text import MIMEText

from weddingsite.config.settings import settings
from weddingsite.email_service.base import EmailServiceBase
from weddingsite.email_service.templates import EmailTemplates

logger = logging.getLogger(__name__)


class SMTPEmailService(EmailServiceBase):
    def __init__(self):
        self.host = settings.smtp_host
        self.port = settings.smtp_port
        self.username = settings.smtp_user
        self.password = settings.smtp_password
        self.from_address = settings.emails_from
        self.couple_names = settings.couple_names

    def _create_message(
        self,
        to_address: str,
        subject: str,
        html_body: str,
        text_body: str,
    ) -> MIMEMultipart:
        msg = MIMEMultipart("alternative")
        msg["Subject"] = subject
        msg["From"] = self.from_address
        msg["To"] = to_address

        part1 = MIMEText(text_body, "plain")
        part2 = MIMEText(html_body, "html")
        msg.attach(part1)
        msg.attach(part2)

        return msg

    def _send(self, msg: MIMEMultipart) -> None:
        if self.username and self.password:
            with smtplib.SMTP(self.host, self.port) as server:
                server.starttls()
                server.login(self.username, self.password)
                server.send_message(msg)
        else:
            with smtplib.SMTP(self.host, self.port) as server:
                server.send_message(msg)

    async def _deliver(self, to_address: str, rendered: tuple[str, str, str]) -> None:
        subject, html_body, text_body = rendered
        msg = self._create_message(
            to_address=to_address,
            subject=subject,
            html_body=html_body,
            text_body=text_body,
        )
        # smtplib blocks, keep it off the event loop
        await asyncio.to_thread(self._send, msg)
        logger.info("Sent '%s' to %s via SMTP", subject, to_address)

    async def send_rsvp_invitation(
        self,
        to_address: str,
        guest_name: str,
        rsvp_url: str,
        portal_url: str,
    ) -> None:
        await self._deliver(
            to_address,
            EmailTemplates.render_invitation(
                guest_name=guest_name,
                rsvp_url=rsvp_url,
                portal_url=portal_url,
                couple_names=self.couple_names,
            ),
        )

    async def send_rsvp_confirmation(
        self,
        to_address: str,
        guest_name: str,
        attending: str,
        party_size: int,
        message: str,
    ) -> None:
        await self._deliver(
            to_address,
            EmailTemplates.render_confirmation(
                guest_name=guest_name,
                attending=attending,
                party_size=party_size,
                message=message or "-",
                couple_names=self.couple_names,
            ),
        )

    async def send_rsvp_reminder(
        self,
        to_address: str,
        guest_name: str,
        rsvp_url: str,
    ) -> None:
        await self._deliver(
            to_address,
            EmailTemplates.render_reminder(
                guest_name=guest_name,
                rsvp_url=rsvp_url,
                couple_names=self.couple_names,
            ),
        )
