from weddingsite.models.base import Base, BaseModel, TimeStamp
from .app_setting import AppSetting
from .user import User

__all__ = [
    "Base",
    "BaseModel",
    "TimeStamp",
    "AppSetting",
    "User",
]
