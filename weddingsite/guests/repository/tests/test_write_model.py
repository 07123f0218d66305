"""Tests for apply_questionnaire."""

from weddingsite.guests.dtos import DietaryPreference, PartyMemberDTO, QuestionnaireDTO
from weddingsite.guests.repository.orm_models import Guest
from weddingsite.guests.repository.write_models import apply_questionnaire


def _guest(**fields) -> Guest:
    defaults = dict(
        first_name="Ann",
        last_name="Lee",
        email="ann@example.com",
        party_size=1,
        max_party_size=2,
        party_members=[],
        main_person_dietary_preference="",
        dec24_attendance=True,
        dec25_attendance=False,
        accommodation_dec23=False,
        accommodation_dec24=False,
        accommodation_dec25=False,
        concerns="",
    )
    defaults.update(fields)
    return Guest(**defaults)


def test_only_provided_fields_change():
    guest = _guest(concerns="Stairs")

    apply_questionnaire(guest, QuestionnaireDTO(accommodation_dec24=True))

    assert guest.accommodation_dec24 is True
    assert guest.concerns == "Stairs"
    assert guest.dec24_attendance is True
    assert guest.party_size == 1


def test_party_is_stored_as_json_dicts_and_cap_grows():
    guest = _guest()
    members = [
        PartyMemberDTO("Ben", "Lee", DietaryPreference.VEG),
        PartyMemberDTO(),
    ]

    apply_questionnaire(guest, QuestionnaireDTO(party_size=3, party_members=members))

    assert guest.party_size == 3
    assert guest.max_party_size == 3
    assert guest.party_members == [
        {"firstName": "Ben", "lastName": "Lee", "dietaryPreference": "veg"},
        {"firstName": "", "lastName": "", "dietaryPreference": ""},
    ]


def test_cap_does_not_shrink():
    guest = _guest(party_size=4, max_party_size=4)

    apply_questionnaire(guest, QuestionnaireDTO(party_size=1, party_members=[]))

    assert guest.party_size == 1
    assert guest.max_party_size == 4


def test_attendance_is_replaced_as_a_whole():
    guest = _guest(dec24_attendance=True, dec25_attendance=False)

    apply_questionnaire(guest, QuestionnaireDTO(dec25_attendance=True))

    assert guest.dec24_attendance is False
    assert guest.dec25_attendance is True


def test_dietary_preference_is_stored_as_value():
    guest = _guest()

    apply_questionnaire(
        guest, QuestionnaireDTO(main_person_dietary_preference=DietaryPreference.NON_VEG)
    )

    assert guest.main_person_dietary_preference == "non-veg"
