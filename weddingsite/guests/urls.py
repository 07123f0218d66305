REGISTER_GUEST_URL = "/api/guests/register"
LIST_GUESTS_URL = "/api/guests"
LIST_PENDING_GUESTS_URL = "/api/guests/pending"
APPROVE_GUEST_URL = "/api/guests/{guest_id}/approve"
REJECT_GUEST_URL = "/api/guests/{guest_id}/reject"
DELETE_SELECTED_GUESTS_URL = "/api/guests/delete-selected"
DELETE_ALL_GUESTS_URL = "/api/guests/all"

GET_GUEST_INFO_URL = "/api/rsvp/{token}"
UPDATE_RSVP_URL = "/api/rsvp/{token}/submit"
GUEST_PORTAL_URL = "/api/guest-portal/{token}"


def rsvp_link(frontend_url: str, invite_token: str) -> str:
    return f"{frontend_url.rstrip('/')}/rsvp/{invite_token}"


def guest_portal_link(frontend_url: str, portal_token: str) -> str:
    return f"{frontend_url.rstrip('/')}/guest-portal/{portal_token}"
