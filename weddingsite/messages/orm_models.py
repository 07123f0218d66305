from uuid import UUID

from sqlalchemy import Enum, ForeignKey, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from weddingsite.config.table_names import TableNames
from weddingsite.messages.dtos import MessageStatus
from weddingsite.models.base import Base, TimeStamp


class Message(Base, TimeStamp):
    __tablename__ = TableNames.MESSAGES.value

    guest_id: Mapped[UUID | None] = mapped_column(
        ForeignKey(f"{TableNames.GUESTS.value}.uuid", ondelete="CASCADE"),
        nullable=True,
        index=True,
    )
    guest_token: Mapped[str] = mapped_column(String(64), nullable=False, index=True)
    guest_name: Mapped[str] = mapped_column(String(255), nullable=False)
    content: Mapped[str] = mapped_column(Text, nullable=False)
    status: Mapped[str] = mapped_column(
        Enum(
            MessageStatus,
            name="message_status_enum",
            values_callable=lambda x: [e.value for e in x],
        ),
        default=MessageStatus.UNREAD,
        nullable=False,
        index=True,
    )

    def __repr__(self) -> str:
        return f"<Message from {self.guest_name} - {self.status}>"
