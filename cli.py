"""CLI commands for wedding website administration."""

import asyncio
from uuid import UUID

import typer

from weddingsite.auth.models import SqlUserWriteModel
from weddingsite.config.settings import settings
from weddingsite.email_service import get_email_service
from weddingsite.exceptions import NotFoundError, StateConflictError
from weddingsite.guests.dtos import RegistrationStatus
from weddingsite.guests.features.review_registration.write_model import (
    SqlReviewRegistrationWriteModel,
)
from weddingsite.guests.repository.read_models import SqlGuestReadModel
from weddingsite.guests.urls import guest_portal_link, rsvp_link
from weddingsite.rsvps.models import SqlRSVPReminderSender

app = typer.Typer(help="CLI commands for wedding website administration")


@app.command()
def create_admin(
    email: str = typer.Argument(
        ...,
        help="Login email of the new admin",
    ),
    password: str = typer.Option(
        ...,
        "--password",
        "-p",
        prompt=True,
        hide_input=True,
        confirmation_prompt=True,
        help="Password for the new admin",
    ),
):
    """Create an admin account for the back office."""
    user = asyncio.run(SqlUserWriteModel().create_user(email=email, password=password))

    typer.secho("Admin created!", fg=typer.colors.GREEN)
    typer.secho(f"  Email: {user.email}", fg=typer.colors.BLUE)
    typer.secho(f"  ID: {user.id}", fg=typer.colors.CYAN)


@app.command()
def list_pending():
    """Show registrations waiting for review."""
    guests = asyncio.run(
        SqlGuestReadModel().list_guests(registration_status=RegistrationStatus.PENDING)
    )

    if not guests:
        typer.secho("No pending registrations", fg=typer.colors.YELLOW)
        return

    typer.secho(f"{len(guests)} pending registrations", fg=typer.colors.GREEN)
    for guest in guests:
        typer.secho(
            f"  - {guest.full_name} <{guest.email}> party of {guest.party_size}",
            fg=typer.colors.BLUE,
        )
        typer.secho(f"    ID: {guest.id}", fg=typer.colors.CYAN)


@app.command()
def approve(
    guest_id: str = typer.Argument(
        ...,
        help="Guest UUID to approve",
    ),
    send_email: bool = typer.Option(
        True,
        "--send-email/--no-email",
        help="Mail the RSVP invitation to the guest",
    ),
):
    """Approve a pending registration and print the guest's links."""
    write_model = SqlReviewRegistrationWriteModel(
        email_service=get_email_service() if send_email else None
    )
    try:
        guest = asyncio.run(write_model.approve_guest(UUID(guest_id)))
    except (ValueError, NotFoundError, StateConflictError) as e:
        typer.secho(str(e), fg=typer.colors.RED)
        raise typer.Exit(1)

    typer.secho("Guest approved!", fg=typer.colors.GREEN)
    typer.secho(f"  Name: {guest.full_name}", fg=typer.colors.BLUE)
    typer.secho(
        f"  RSVP URL: {rsvp_link(settings.frontend_url, guest.invite_token)}",
        fg=typer.colors.CYAN,
    )
    typer.secho(
        f"  Guest portal: {guest_portal_link(settings.frontend_url, guest.guest_portal_token)}",
        fg=typer.colors.CYAN,
    )


@app.command()
def send_reminders():
    """Email every approved guest who has not answered yet."""
    sender = SqlRSVPReminderSender(email_service=get_email_service())
    result = asyncio.run(sender.send_reminders())

    typer.secho(f"Reminders sent: {len(result.sent)}", fg=typer.colors.GREEN)
    for email in result.failed:
        typer.secho(f"  Failed: {email}", fg=typer.colors.RED)


if __name__ == "__main__":
    app()
