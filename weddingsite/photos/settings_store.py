"""The admin-controlled auto-approve switch, persisted in `app_settings`."""

import logging
from abc import ABC, abstractmethod
from functools import partial

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from weddingsite.config.database import async_session_manager
from weddingsite.config.settings import settings
from weddingsite.models.app_setting import AppSetting

logger = logging.getLogger(__name__)

AUTO_APPROVE_KEY = "photos.auto_approve"


class AutoApproveSetting(ABC):
    @abstractmethod
    async def is_enabled(self) -> bool:
        raise NotImplementedError

    @abstractmethod
    async def set_enabled(self, enabled: bool) -> bool:
        raise NotImplementedError


class SqlAutoApproveSetting(AutoApproveSetting):
    async_session_manager = staticmethod(partial(async_session_manager))

    def __init__(
        self,
        session_overwrite: AsyncSession | None = None,
        default: bool | None = None,
    ) -> None:
        self.session_overwrite = session_overwrite
        self.default = settings.photos_auto_approve_default if default is None else default

    async def _get_row(self, session) -> AppSetting | None:
        result = await session.execute(select(AppSetting).where(AppSetting.key == AUTO_APPROVE_KEY))
        return result.scalar_one_or_none()

    async def is_enabled(self) -> bool:
        async with self.async_session_manager(session_overwrite=self.session_overwrite) as session:
            row = await self._get_row(session)
            if row is None:
                return self.default
            return row.value == "true"

    async def set_enabled(self, enabled: bool) -> bool:
        async with self.async_session_manager(session_overwrite=self.session_overwrite) as session:
            row = await self._get_row(session)
            if row is None:
                row = AppSetting(key=AUTO_APPROVE_KEY, value="false")
                session.add(row)
            row.value = "true" if enabled else "false"
            await session.flush()

        logger.info("Photo auto-approve %s", "enabled" if enabled else "disabled")
        return enabled


def get_auto_approve_setting() -> AutoApproveSetting:
    """Dependency to get the auto-approve setting store."""
    return SqlAutoApproveSetting()
