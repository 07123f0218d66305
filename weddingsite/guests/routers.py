from fastapi import APIRouter

from .features.delete_guests.router import router as delete_guests_router
from .features.get_guest_info.router import router as get_guest_info_router
from .features.guest_portal.router import router as guest_portal_router
from .features.list_guests.router import router as list_guests_router
from .features.register_guest.router import router as register_guest_router
from .features.review_registration.router import router as review_registration_router
from .features.update_rsvp.router import router as update_rsvp_router

router = APIRouter()

router.include_router(register_guest_router)
router.include_router(list_guests_router)
router.include_router(review_registration_router)
router.include_router(delete_guests_router)
router.include_router(get_guest_info_router)
router.include_router(update_rsvp_router)
router.include_router(guest_portal_router)
