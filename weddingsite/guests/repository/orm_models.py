from datetime import datetime
from uuid import UUID

from sqlalchemy import JSON, Boolean, DateTime, Enum, ForeignKey, Integer, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from weddingsite.config.table_names import TableNames
from weddingsite.guests.dtos import RegistrationStatus, RSVPAnswer, RSVPStatus
from weddingsite.models.base import Base, TimeStamp


def _enum_values(enum_cls):
    return [e.value for e in enum_cls]


class Guest(Base, TimeStamp):
    __tablename__ = TableNames.GUESTS.value

    first_name: Mapped[str] = mapped_column(String(255), nullable=False, index=True)
    last_name: Mapped[str] = mapped_column(String(255), nullable=False, index=True)
    email: Mapped[str] = mapped_column(String(255), nullable=False, index=True)
    phone: Mapped[str] = mapped_column(String(50), nullable=True)

    registration_status: Mapped[str] = mapped_column(
        Enum(RegistrationStatus, name="registration_status_enum", values_callable=_enum_values),
        default=RegistrationStatus.PENDING,
        nullable=False,
        index=True,
    )
    approved_at: Mapped[datetime | None] = mapped_column(DateTime(timezone=True), nullable=True)

    # Capability tokens, issued on approval only
    invite_token: Mapped[str | None] = mapped_column(
        String(64), nullable=True, unique=True, index=True
    )
    guest_portal_token: Mapped[str | None] = mapped_column(
        String(64), nullable=True, unique=True, index=True
    )

    rsvp_status: Mapped[str] = mapped_column(
        Enum(RSVPStatus, name="rsvp_status_enum", values_callable=_enum_values),
        default=RSVPStatus.PENDING,
        nullable=False,
        index=True,
    )

    # Questionnaire
    party_size: Mapped[int] = mapped_column(Integer, default=1, nullable=False)
    max_party_size: Mapped[int] = mapped_column(Integer, default=2, nullable=False)
    # [{"firstName", "lastName", "dietaryPreference"}], always party_size - 1 long
    party_members: Mapped[list] = mapped_column(JSON, default=list, nullable=False)
    main_person_dietary_preference: Mapped[str] = mapped_column(
        String(20), default="", nullable=False
    )
    dec24_attendance: Mapped[bool] = mapped_column(Boolean, default=False, nullable=False)
    dec25_attendance: Mapped[bool] = mapped_column(Boolean, default=False, nullable=False)
    accommodation_dec23: Mapped[bool] = mapped_column(Boolean, default=False, nullable=False)
    accommodation_dec24: Mapped[bool] = mapped_column(Boolean, default=False, nullable=False)
    accommodation_dec25: Mapped[bool] = mapped_column(Boolean, default=False, nullable=False)
    concerns: Mapped[str] = mapped_column(Text, default="", nullable=False)

    def __repr__(self) -> str:
        return f"<Guest {self.first_name} {self.last_name} - {self.registration_status}>"


class RSVP(Base, TimeStamp):
    __tablename__ = TableNames.RSVPS.value

    # One row per guest; resubmitting overwrites it
    guest_id: Mapped[UUID] = mapped_column(
        ForeignKey(f"{TableNames.GUESTS.value}.uuid", ondelete="CASCADE"),
        nullable=False,
        unique=True,
        index=True,
    )
    response: Mapped[str] = mapped_column(
        Enum(RSVPAnswer, name="rsvp_answer_enum", values_callable=_enum_values),
        nullable=False,
    )
    party_size: Mapped[int] = mapped_column(Integer, default=1, nullable=False)
    message: Mapped[str] = mapped_column(Text, default="", nullable=False)
    responded_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False)

    def __repr__(self) -> str:
        return f"<RSVP {self.response} for guest {self.guest_id}>"
