import csv
import io
from collections.abc import Iterable

from weddingsite.rsvps.dtos import RSVPExportRowDTO

CSV_HEADER = [
    "First Name",
    "Last Name",
    "Email",
    "Phone",
    "RSVP Status",
    "Party Size",
    "Main Person Dietary",
    "Party Members",
    "Party Member Dietaries",
    "Dec 24 Attendance",
    "Dec 25 Attendance",
    "Accommodation Dec 23",
    "Accommodation Dec 24",
    "Accommodation Dec 25",
    "Special Concerns",
    "RSVP Message",
    "Responded At",
]


def _yes_no(value: bool) -> str:
    return "Yes" if value else "No"


def _row(row: RSVPExportRowDTO) -> list[str]:
    guest = row.guest
    members = guest.party_members
    return [
        guest.first_name,
        guest.last_name,
        guest.email,
        guest.phone or "",
        guest.rsvp_status.value,
        str(guest.party_size),
        guest.main_person_dietary_preference.value,
        "; ".join(f"{m.first_name} {m.last_name}".strip() for m in members),
        "; ".join(m.dietary_preference.value for m in members),
        _yes_no(guest.dec24_attendance),
        _yes_no(guest.dec25_attendance),
        _yes_no(guest.accommodation_dec23),
        _yes_no(guest.accommodation_dec24),
        _yes_no(guest.accommodation_dec25),
        guest.concerns,
        row.message,
        row.responded_at.strftime("%Y-%m-%d %H:%M:%S") if row.responded_at else "",
    ]


def render_csv(rows: Iterable[RSVPExportRowDTO]) -> str:
    buffer = io.StringIO()
    writer = csv.writer(buffer)
    writer.writerow(CSV_HEADER)
    for row in rows:
        writer.writerow(_row(row))
    return buffer.getvalue()
