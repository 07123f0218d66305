from dataclasses import dataclass
from html import escape


@dataclass
class EmailTemplates:
    INVITATION_SUBJECT = "Your Wedding RSVP is Ready!"
    INVITATION_HTML = """
    <!DOCTYPE html>
    <html>
    <head>
        <meta charset="utf-8">
        <meta name="viewport" content="width=device-width, initial-scale=1.0">
    </head>
    <body style="font-family: Arial, sans-serif; line-height: 1.6; color: #333; max-width: 600px; margin: 0 auto; padding: 20px;">
        <div style="text-align: center; margin-bottom: 30px;">
            <h1 style="color: #d4a373;">You're on the list!</h1>
        </div>

        <p>Hi {guest_name},</p>

        <p>Great news! Your registration has been approved. You can now RSVP for the wedding.</p>

        <div style="text-align: center; margin: 30px 0;">
            <a href="{rsvp_url}" style="background-color: #d4a373; color: white; padding: 15px 30px; text-decoration: none; border-radius: 5px; font-size: 18px;">
                RSVP Now
            </a>
        </div>

        <p>If the button doesn't work, you can copy and paste the following link into your browser:</p>
        <p style="word-break: break-all; color: #606c38;"><a href="{rsvp_url}">{rsvp_url}</a></p>

        <div style="background-color: #fefae0; padding: 20px; border-radius: 8px; margin: 20px 0;">
            <h2 style="color: #bc6c25; margin-top: 0;">Your Personal Portal</h2>
            <p>After you complete your RSVP, use your personal portal to upload photos and send messages to the couple:</p>
            <p style="word-break: break-all;"><a href="{portal_url}">{portal_url}</a></p>
        </div>

        <p>We can't wait to celebrate with you!</p>

        <p>With love,<br>{couple_names}</p>
    </body>
    </html>
    """

    INVITATION_TEXT = """
    Hi {guest_name},

    Great news! Your registration has been approved. You can now RSVP for the wedding.

    RSVP Link: {rsvp_url}
    Your Personal Portal: {portal_url}

    After you complete your RSVP, you'll be able to use your personal portal to:
    - Upload photos from the wedding
    - Send messages to the couple

    We can't wait to celebrate with you!

    With love,
    {couple_names}
    """

    CONFIRMATION_SUBJECT = "Thank you for your RSVP!"
    CONFIRMATION_HTML = """
    <!DOCTYPE html>
    <html>
    <head>
        <meta charset="utf-8">
        <meta name="viewport" content="width=device-width, initial-scale=1.0">
    </head>
    <body style="font-family: Arial, sans-serif; line-height: 1.6; color: #333; max-width: 600px; margin: 0 auto; padding: 20px;">
        <div style="text-align: center; margin-bottom: 30px;">
            <h1 style="color: #d4a373;">Thank You!</h1>
        </div>

        <p>Dear {guest_name},</p>

        <p>We have received your RSVP.</p>

        <div style="background-color: #fefae0; padding: 20px; border-radius: 8px; margin: 20px 0;">
            <h2 style="color: #bc6c25; margin-top: 0;">Your Response</h2>
            <p><strong>Attending:</strong> {attending}</p>
            <p><strong>Party size:</strong> {party_size}</p>
            <p><strong>Your message:</strong> {message}</p>
        </div>

        <p>If you need to make any changes, simply use your RSVP link again.</p>

        <p>With love,<br>{couple_names}</p>
    </body>
    </html>
    """

    CONFIRMATION_TEXT = """
    Dear {guest_name},

    We have received your RSVP.

    Attending: {attending}
    Party size: {party_size}
    Your message: {message}

    If you need to make any changes, simply use your RSVP link again.

    With love,
    {couple_names}
    """

    REMINDER_SUBJECT = "Reminder: please RSVP for our wedding"
    REMINDER_HTML = """
    <!DOCTYPE html>
    <html>
    <head>
        <meta charset="utf-8">
        <meta name="viewport" content="width=device-width, initial-scale=1.0">
    </head>
    <body style="font-family: Arial, sans-serif; line-height: 1.6; color: #333; max-width: 600px; margin: 0 auto; padding: 20px;">
        <p>Hi {guest_name},</p>

        <p>We haven't received your RSVP yet. Please let us know if you can make it:</p>

        <div style="text-align: center; margin: 30px 0;">
            <a href="{rsvp_url}" style="background-color: #d4a373; color: white; padding: 15px 30px; text-decoration: none; border-radius: 5px; font-size: 18px;">
                RSVP Now
            </a>
        </div>

        <p style="word-break: break-all; color: #606c38;"><a href="{rsvp_url}">{rsvp_url}</a></p>

        <p>With love,<br>{couple_names}</p>
    </body>
    </html>
    """

    REMINDER_TEXT = """
    Hi {guest_name},

    We haven't received your RSVP yet. Please let us know if you can make it:

    {rsvp_url}

    With love,
    {couple_names}
    """

    @classmethod
    def render_invitation(cls, **context) -> tuple[str, str, str]:
        return cls._render(cls.INVITATION_SUBJECT, cls.INVITATION_HTML, cls.INVITATION_TEXT, context)

    @classmethod
    def render_confirmation(cls, **context) -> tuple[str, str, str]:
        return cls._render(
            cls.CONFIRMATION_SUBJECT, cls.CONFIRMATION_HTML, cls.CONFIRMATION_TEXT, context
        )

    @classmethod
    def render_reminder(cls, **context) -> tuple[str, str, str]:
        return cls._render(cls.REMINDER_SUBJECT, cls.REMINDER_HTML, cls.REMINDER_TEXT, context)

    @staticmethod
    def _render(subject: str, html_body: str, text: str, context: dict) -> tuple[str, str, str]:
        # guest names and messages are user input
        escaped = {key: escape(str(value)) for key, value in context.items()}
        return subject, html_body.format(**escaped), text.format(**context)
