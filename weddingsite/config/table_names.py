from enum import Enum


class TableNames(str, Enum):
    USERS = "users"
    GUESTS = "guests"
    RSVPS = "rsvps"
    MESSAGES = "messages"
    PHOTOS = "photos"
    APP_SETTINGS = "app_settings"
