from weddingsite.exceptions import InvalidTokenError
from weddingsite.guests.dtos import RSVPResponseDTO, RSVPSubmissionDTO
from weddingsite.guests.features.update_rsvp.router import get_rsvp_write_model
from weddingsite.guests.repository.write_models import RSVPWriteModel
from weddingsite.guests.urls import UPDATE_RSVP_URL
from weddingsite.models.base import utcnow
from weddingsite.workflow import normalize_questionnaire, rsvp_status_for


class InMemoryRSVPWriteModel(RSVPWriteModel):
    """In-memory write model for testing."""

    def __init__(self, valid_token: str = "invite-token-123"):
        self.valid_token = valid_token
        self.submissions: list[RSVPSubmissionDTO] = []

    async def submit_rsvp(self, token: str, submission: RSVPSubmissionDTO) -> RSVPResponseDTO:
        if token != self.valid_token:
            raise InvalidTokenError("Invalid RSVP link")
        if submission.updated_details is not None:
            normalize_questionnaire(submission.updated_details, [], max_party_size=10)
        self.submissions.append(submission)
        return RSVPResponseDTO(
            message="RSVP submitted successfully",
            response=submission.response,
            rsvp_status=rsvp_status_for(submission.response),
            responded_at=utcnow(),
        )


async def test_submit_rsvp(client_factory):
    write_model = InMemoryRSVPWriteModel()

    async with client_factory({get_rsvp_write_model: lambda: write_model}, as_admin=False) as client:
        response = await client.post(
            UPDATE_RSVP_URL.format(token="invite-token-123"),
            json={"response": "yes", "message": "Can't wait!"},
        )

    assert response.status_code == 200
    data = response.json()
    assert data["message"] == "RSVP submitted successfully"
    assert data["response"] == "yes"
    assert data["rsvpStatus"] == "yes"
    assert data["respondedAt"]
    assert write_model.submissions[0].message == "Can't wait!"
    assert write_model.submissions[0].updated_details is None


async def test_submit_rsvp_passes_only_sent_details(client_factory):
    write_model = InMemoryRSVPWriteModel()

    async with client_factory({get_rsvp_write_model: lambda: write_model}, as_admin=False) as client:
        response = await client.post(
            UPDATE_RSVP_URL.format(token="invite-token-123"),
            json={
                "response": "yes",
                "updatedDetails": {"partySize": 2, "dec25Attendance": True, "concerns": "none"},
            },
        )

    assert response.status_code == 200
    details = write_model.submissions[0].updated_details
    assert details.party_size == 2
    assert details.dec25_attendance is True
    assert details.dec24_attendance is None
    assert details.party_members is None
    assert details.concerns == "none"


async def test_submit_rsvp_invalid_answer_is_422(client_factory):
    write_model = InMemoryRSVPWriteModel()

    async with client_factory({get_rsvp_write_model: lambda: write_model}, as_admin=False) as client:
        response = await client.post(
            UPDATE_RSVP_URL.format(token="invite-token-123"), json={"response": "pending"}
        )

    assert response.status_code == 422
    assert write_model.submissions == []


async def test_submit_rsvp_party_too_large_is_422(client_factory):
    write_model = InMemoryRSVPWriteModel()

    async with client_factory({get_rsvp_write_model: lambda: write_model}, as_admin=False) as client:
        response = await client.post(
            UPDATE_RSVP_URL.format(token="invite-token-123"),
            json={"response": "yes", "updatedDetails": {"partySize": 11}},
        )

    assert response.status_code == 422
    assert response.json()["detail"][0]["loc"] == ["body", "partySize"]
    assert write_model.submissions == []


async def test_submit_rsvp_unknown_token_is_404(client_factory):
    write_model = InMemoryRSVPWriteModel()

    async with client_factory({get_rsvp_write_model: lambda: write_model}, as_admin=False) as client:
        response = await client.post(
            UPDATE_RSVP_URL.format(token="wrong"), json={"response": "no"}
        )

    assert response.status_code == 404
    assert response.json()["detail"] == "Invalid RSVP link"
