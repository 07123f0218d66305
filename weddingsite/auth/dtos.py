from dataclasses import dataclass
from datetime import datetime
from typing import TYPE_CHECKING
from uuid import UUID

if TYPE_CHECKING:
    from weddingsite.models.user import User


@dataclass(frozen=True)
class UserDTO:
    id: UUID
    email: str
    role: str
    is_active: bool = True
    last_login_at: datetime | None = None
    created_at: datetime | None = None

    @classmethod
    def from_user(cls, user: "User") -> "UserDTO":
        return cls(
            id=user.uuid,
            email=user.email,
            role=user.role,
            is_active=user.is_active,
            last_login_at=user.last_login_at,
            created_at=user.created_at,
        )


@dataclass(frozen=True)
class AccessTokenDTO:
    token: str
    expires_at: datetime
    user: UserDTO
