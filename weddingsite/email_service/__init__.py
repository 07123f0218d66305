from weddingsite.config.settings import settings
from weddingsite.email_service.base import EmailServiceBase
from weddingsite.email_service.resend_service import ResendEmailService
from weddingsite.email_service.smtp_service import SMTPEmailService
from weddingsite.email_service.templates import EmailTemplates


def get_email_service() -> EmailServiceBase:
    if settings.resend_api_key:
        return ResendEmailService(config=settings)
    return SMTPEmailService()


__all__ = [
    "EmailServiceBase",
    "EmailTemplates",
    "get_email_service",
]
