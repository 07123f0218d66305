from fastapi import APIRouter, Depends, HTTPException

from weddingsite.guests.repository.read_models import GuestReadModel, SqlGuestReadModel
from weddingsite.guests.urls import GUEST_PORTAL_URL
from weddingsite.schemas import CamelModel

router = APIRouter()


class GuestPortalResponse(CamelModel):
    first_name: str
    last_name: str
    email: str
    phone: str | None = None


def get_guest_read_model() -> GuestReadModel:
    """Dependency to get guest read model instance."""
    return SqlGuestReadModel()


@router.get(GUEST_PORTAL_URL, response_model=GuestPortalResponse)
async def get_guest_portal(
    token: str,
    read_model: GuestReadModel = Depends(get_guest_read_model),
) -> GuestPortalResponse:
    """Identify the guest behind a portal link, for the photo upload and message pages."""
    guest = await read_model.get_by_portal_token(token)
    if not guest:
        raise HTTPException(status_code=404, detail="Invalid guest portal link")

    return GuestPortalResponse(
        first_name=guest.first_name,
        last_name=guest.last_name,
        email=guest.email,
        phone=guest.phone,
    )
