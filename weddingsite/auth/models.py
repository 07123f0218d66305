"""Admin user read/write models - they return DTOs, never ORM models."""

import logging
from abc import ABC, abstractmethod
from functools import partial
from uuid import UUID

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from weddingsite.auth.dtos import UserDTO
from weddingsite.auth.security import hash_password, verify_password
from weddingsite.config.database import async_session_manager
from weddingsite.models.base import utcnow
from weddingsite.models.user import User

logger = logging.getLogger(__name__)


class UserReadModel(ABC):
    @abstractmethod
    async def get_user(self, user_id: UUID) -> UserDTO | None:
        raise NotImplementedError


class UserWriteModel(ABC):
    @abstractmethod
    async def authenticate(self, email: str, password: str) -> UserDTO | None:
        """Check credentials and stamp the login time. None when they don't match."""
        raise NotImplementedError

    @abstractmethod
    async def create_user(self, email: str, password: str, role: str = "admin") -> UserDTO:
        raise NotImplementedError


class SqlUserReadModel(UserReadModel):
    async_session_manager = staticmethod(partial(async_session_manager))

    def __init__(self, session_overwrite: AsyncSession | None = None) -> None:
        self.session_overwrite = session_overwrite

    async def get_user(self, user_id: UUID) -> UserDTO | None:
        async with self.async_session_manager(session_overwrite=self.session_overwrite) as session:
            user = await session.get(User, user_id)
            if user is None or not user.is_active:
                return None
            return UserDTO.from_user(user)


class SqlUserWriteModel(UserWriteModel):
    async_session_manager = staticmethod(partial(async_session_manager))

    def __init__(self, session_overwrite: AsyncSession | None = None) -> None:
        self.session_overwrite = session_overwrite

    async def authenticate(self, email: str, password: str) -> UserDTO | None:
        async with self.async_session_manager(session_overwrite=self.session_overwrite) as session:
            result = await session.execute(select(User).where(User.email == email))
            user = result.scalar_one_or_none()
            if user is None or not user.is_active:
                return None
            if not verify_password(password, user.hashed_password):
                logger.info("Failed login attempt for %s", email)
                return None

            user.last_login_at = utcnow()
            await session.flush()
            logger.info("Admin %s logged in", email)
            return UserDTO.from_user(user)

    async def create_user(self, email: str, password: str, role: str = "admin") -> UserDTO:
        async with self.async_session_manager(session_overwrite=self.session_overwrite) as session:
            user = User(email=email, hashed_password=hash_password(password), role=role)
            session.add(user)
            await session.flush()
            logger.info("Created %s user %s", role, email)
            return UserDTO.from_user(user)
