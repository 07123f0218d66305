from sqlalchemy import String
from sqlalchemy.orm import Mapped, mapped_column

from weddingsite.config.table_names import TableNames
from weddingsite.models.base import Base, TimeStamp


class AppSetting(Base, TimeStamp):
    """Admin-controlled switches that must survive restarts."""

    __tablename__ = TableNames.APP_SETTINGS.value

    key: Mapped[str] = mapped_column(String(100), unique=True, nullable=False, index=True)
    value: Mapped[str] = mapped_column(String(255), nullable=False)

    def __repr__(self) -> str:
        return f"<AppSetting {self.key}={self.value}>"
