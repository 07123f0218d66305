from dataclasses import replace
from uuid import UUID, uuid4

from weddingsite.exceptions import NotFoundError
from weddingsite.guests.dtos import GuestDTO, RegistrationStatus
from weddingsite.guests.features.review_registration.router import (
    get_review_registration_write_model,
)
from weddingsite.guests.features.review_registration.write_model import (
    ReviewRegistrationWriteModel,
)
from weddingsite.guests.tests.inmemory_models import create_test_guest
from weddingsite.guests.urls import APPROVE_GUEST_URL, REJECT_GUEST_URL
from weddingsite.workflow import Action, registration_transition


class InMemoryReviewRegistrationWriteModel(ReviewRegistrationWriteModel):
    """In-memory write model for testing."""

    def __init__(self, guests: list[GuestDTO]):
        self.guests = {guest.id: guest for guest in guests}

    async def approve_guest(self, guest_id: UUID) -> GuestDTO:
        return self._review(guest_id, Action.APPROVE)

    async def reject_guest(self, guest_id: UUID) -> GuestDTO:
        return self._review(guest_id, Action.REJECT)

    def _review(self, guest_id: UUID, action: Action) -> GuestDTO:
        guest = self.guests.get(guest_id)
        if guest is None:
            raise NotFoundError(f"Guest {guest_id} not found")
        transition = registration_transition(guest.registration_status, action)
        approved = transition.next_status == RegistrationStatus.APPROVED
        guest = replace(
            guest,
            registration_status=transition.next_status,
            invite_token="invite-abc" if approved else None,
            guest_portal_token="portal-abc" if approved else None,
        )
        self.guests[guest_id] = guest
        return guest


async def test_approve_guest(client_factory):
    guest = create_test_guest(registration_status=RegistrationStatus.PENDING)
    write_model = InMemoryReviewRegistrationWriteModel([guest])

    async with client_factory({get_review_registration_write_model: lambda: write_model}) as client:
        response = await client.post(APPROVE_GUEST_URL.format(guest_id=guest.id))

    assert response.status_code == 200
    data = response.json()
    assert data["message"] == "Guest registration approved successfully"
    assert data["guest"]["registrationStatus"] == "approved"
    assert data["guest"]["inviteToken"] == "invite-abc"
    assert data["guest"]["guestPortalToken"] == "portal-abc"


async def test_reject_guest(client_factory):
    guest = create_test_guest(registration_status=RegistrationStatus.PENDING)
    write_model = InMemoryReviewRegistrationWriteModel([guest])

    async with client_factory({get_review_registration_write_model: lambda: write_model}) as client:
        response = await client.post(REJECT_GUEST_URL.format(guest_id=guest.id))

    assert response.status_code == 200
    assert response.json()["guest"]["registrationStatus"] == "rejected"
    assert response.json()["guest"]["inviteToken"] is None


async def test_approve_already_approved_guest_is_409(client_factory):
    guest = create_test_guest(registration_status=RegistrationStatus.APPROVED)
    write_model = InMemoryReviewRegistrationWriteModel([guest])

    async with client_factory({get_review_registration_write_model: lambda: write_model}) as client:
        response = await client.post(APPROVE_GUEST_URL.format(guest_id=guest.id))

    assert response.status_code == 409
    assert "approved" in response.json()["detail"]


async def test_reject_unknown_guest_is_404(client_factory):
    write_model = InMemoryReviewRegistrationWriteModel([])

    async with client_factory({get_review_registration_write_model: lambda: write_model}) as client:
        response = await client.post(REJECT_GUEST_URL.format(guest_id=uuid4()))

    assert response.status_code == 404


async def test_review_requires_admin(client_factory):
    guest = create_test_guest(registration_status=RegistrationStatus.PENDING)
    write_model = InMemoryReviewRegistrationWriteModel([guest])

    async with client_factory(
        {get_review_registration_write_model: lambda: write_model}, as_admin=False
    ) as client:
        response = await client.post(APPROVE_GUEST_URL.format(guest_id=guest.id))

    assert response.status_code == 401
    assert write_model.guests[guest.id].registration_status == RegistrationStatus.PENDING
