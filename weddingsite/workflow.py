"""Guest, RSVP and photo lifecycle rules.

Every status change in the application goes through one of the transition
tables below, so an invalid transition is rejected in exactly one place.
Each transition also names the side effects the caller has to carry out.
"""

import secrets
from dataclasses import dataclass
from enum import Enum

from weddingsite.exceptions import StateConflictError, WorkflowValidationError
from weddingsite.guests.dtos import (
    PartyMemberDTO,
    QuestionnaireDTO,
    RegistrationStatus,
    RSVPAnswer,
    RSVPStatus,
)
from weddingsite.photos.dtos import PhotoStatus

TOKEN_BYTES = 32


class Action(str, Enum):
    APPROVE = "approve"
    REJECT = "reject"


class SideEffect(str, Enum):
    ISSUE_TOKENS = "issue_tokens"
    SEND_RSVP_INVITATION = "send_rsvp_invitation"
    PUBLISH_PHOTO = "publish_photo"
    UNPUBLISH_PHOTO = "unpublish_photo"


@dataclass(frozen=True)
class Transition:
    next_status: str
    side_effects: tuple[SideEffect, ...] = ()


REGISTRATION_TRANSITIONS: dict[tuple[RegistrationStatus, Action], Transition] = {
    (RegistrationStatus.PENDING, Action.APPROVE): Transition(
        next_status=RegistrationStatus.APPROVED,
        side_effects=(SideEffect.ISSUE_TOKENS, SideEffect.SEND_RSVP_INVITATION),
    ),
    (RegistrationStatus.PENDING, Action.REJECT): Transition(
        next_status=RegistrationStatus.REJECTED,
    ),
}

PHOTO_TRANSITIONS: dict[tuple[PhotoStatus, Action], Transition] = {
    (PhotoStatus.PENDING, Action.APPROVE): Transition(
        next_status=PhotoStatus.APPROVED,
        side_effects=(SideEffect.PUBLISH_PHOTO,),
    ),
    (PhotoStatus.PENDING, Action.REJECT): Transition(
        next_status=PhotoStatus.REJECTED,
        side_effects=(SideEffect.UNPUBLISH_PHOTO,),
    ),
}


def registration_transition(current: RegistrationStatus, action: Action) -> Transition:
    transition = REGISTRATION_TRANSITIONS.get((RegistrationStatus(current), action))
    if transition is None:
        raise StateConflictError("guest registration", RegistrationStatus(current).value, action.value)
    return transition


def photo_transition(current: PhotoStatus, action: Action) -> Transition:
    transition = PHOTO_TRANSITIONS.get((PhotoStatus(current), action))
    if transition is None:
        raise StateConflictError("photo", PhotoStatus(current).value, action.value)
    return transition


def initial_photo_status(auto_approve: bool) -> PhotoStatus:
    return PhotoStatus.APPROVED if auto_approve else PhotoStatus.PENDING


def rsvp_status_for(answer: RSVPAnswer) -> RSVPStatus:
    return RSVPStatus.YES if answer == RSVPAnswer.YES else RSVPStatus.NO


def generate_token() -> str:
    """Unguessable capability string for invite and portal links."""
    return secrets.token_hex(TOKEN_BYTES)


def resize_party(members: list[PartyMemberDTO], party_size: int) -> list[PartyMemberDTO]:
    """Return exactly `party_size - 1` members.

    Existing entries keep their position; missing slots are filled with blank
    members and entries beyond the new size are dropped.
    """
    wanted = max(party_size - 1, 0)
    resized = list(members[:wanted])
    resized.extend(PartyMemberDTO() for _ in range(wanted - len(resized)))
    return resized


def validate_party_size(party_size: int, max_party_size: int) -> None:
    if party_size < 1:
        raise WorkflowValidationError("partySize", "party size must be at least 1")
    if party_size > max_party_size:
        raise WorkflowValidationError(
            "partySize", f"party size exceeds maximum allowed ({max_party_size})"
        )


def validate_attendance(questionnaire: QuestionnaireDTO) -> None:
    """At least one event day must be attended whenever attendance is sent at all."""
    if not questionnaire.has_attendance:
        return
    if not (questionnaire.dec24_attendance or questionnaire.dec25_attendance):
        raise WorkflowValidationError(
            "attendance", "please select at least one event to attend (Dec 24 or Dec 25)"
        )


def normalize_questionnaire(
    questionnaire: QuestionnaireDTO,
    current_members: list[PartyMemberDTO],
    max_party_size: int,
) -> QuestionnaireDTO:
    """Validate a submitted questionnaire and return it with a consistent party.

    When only the party size changes, the current members are resized; when
    members are sent they are resized to the submitted (or implied) size.
    """
    validate_attendance(questionnaire)

    party_size = questionnaire.party_size
    members = questionnaire.party_members
    if party_size is None and members is None:
        return questionnaire
    if party_size is None:
        party_size = len(members) + 1
    validate_party_size(party_size, max_party_size)

    return QuestionnaireDTO(
        party_size=party_size,
        party_members=resize_party(members if members is not None else current_members, party_size),
        main_person_dietary_preference=questionnaire.main_person_dietary_preference,
        dec24_attendance=questionnaire.dec24_attendance,
        dec25_attendance=questionnaire.dec25_attendance,
        accommodation_dec23=questionnaire.accommodation_dec23,
        accommodation_dec24=questionnaire.accommodation_dec24,
        accommodation_dec25=questionnaire.accommodation_dec25,
        concerns=questionnaire.concerns,
    )
