from fastapi import APIRouter, Depends

from weddingsite.auth.dependencies import require_admin
from weddingsite.guests.dtos import RegistrationStatus
from weddingsite.guests.repository.read_models import GuestReadModel, SqlGuestReadModel
from weddingsite.guests.schemas import GuestResponse
from weddingsite.guests.urls import LIST_GUESTS_URL, LIST_PENDING_GUESTS_URL

router = APIRouter(dependencies=[Depends(require_admin)])


def get_guest_read_model() -> GuestReadModel:
    """Dependency to get guest read model instance."""
    return SqlGuestReadModel()


@router.get(LIST_GUESTS_URL, response_model=list[GuestResponse])
async def list_guests(
    status: RegistrationStatus | None = None,
    read_model: GuestReadModel = Depends(get_guest_read_model),
) -> list[GuestResponse]:
    """Every guest, newest registration first. `?status=` narrows the list."""
    guests = await read_model.list_guests(registration_status=status)
    return [GuestResponse.from_dto(guest) for guest in guests]


@router.get(LIST_PENDING_GUESTS_URL, response_model=list[GuestResponse])
async def list_pending_guests(
    read_model: GuestReadModel = Depends(get_guest_read_model),
) -> list[GuestResponse]:
    """Registrations waiting for review."""
    guests = await read_model.list_guests(registration_status=RegistrationStatus.PENDING)
    return [GuestResponse.from_dto(guest) for guest in guests]
