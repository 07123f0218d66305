from functools import lru_cache

from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    # App
    app_host: str = "0.0.0.0"
    app_port: int = 8000
    debug: bool = True
    frontend_url: str = "http://localhost:3000"
    cors_origins: list[str] = ["http://localhost:3000"]

    ENVIRONMENT: str = "Production"

    # Database
    database_url: str = "sqlite+aiosqlite:///./wedding.db"
    LOG_DB: bool = False

    # JWT
    secret_key: str = "your-super-secret-key-change-in-production"
    algorithm: str = "HS256"
    access_token_expire_minutes: int = 60 * 24 * 7  # 7 days
    auth_cookie_name: str = "authToken"
    # only turn off for local http development
    cookie_secure: bool = True

    # Email (SMTP)
    smtp_host: str = "localhost"
    smtp_port: int = 1025
    smtp_user: str = ""
    smtp_password: str = ""
    emails_from: str = "hello@our-wedding.example"
    couple_names: str = "The Happy Couple"

    # Email (Resend) - if set, use Resend API instead of SMTP
    resend_api_key: str = ""

    # Guests
    max_party_size: int = 10

    # Photos
    media_root: str = "./media"
    media_url: str = "/media"
    max_photo_size_bytes: int = 10 * 1024 * 1024  # 10 MiB
    allowed_image_types: list[str] = [
        "image/jpeg",
        "image/jpg",
        "image/png",
        "image/gif",
        "image/webp",
    ]
    thumbnail_max_width: int = 400
    photos_auto_approve_default: bool = False

    SENTRY_DSN: str = ""
    SENTRY_TRACES_SAMPLE_RATE: float = 0.0
    SENTRY_PROFILES_SAMPLE_RATE: float = 0.0

    RUN_MIGRATIONS_ON_STARTUP: bool = False

    class Config:
        env_file = ".env"
        env_file_encoding = "utf-8"


@lru_cache
def get_settings() -> Settings:
    return Settings()


settings = get_settings()
