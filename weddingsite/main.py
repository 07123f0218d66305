import logging
from contextlib import asynccontextmanager
from pathlib import Path

import sentry_sdk
from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from fastapi.staticfiles import StaticFiles
from sentry_sdk.integrations.fastapi import FastApiIntegration
from sentry_sdk.integrations.starlette import StarletteIntegration
from sqlalchemy.exc import SQLAlchemyError

from weddingsite.auth.router import router as auth_router
from weddingsite.config.database import run_migrations
from weddingsite.config.logging import setup_logging
from weddingsite.config.settings import settings
from weddingsite.exceptions import StorageError
from weddingsite.guests.routers import router as guests_router
from weddingsite.messages.router import router as messages_router
from weddingsite.photos.admin_router import router as photos_admin_router
from weddingsite.photos.router import router as photos_router
from weddingsite.routers.healthz.router import router as healthz_router
from weddingsite.rsvps.router import router as rsvps_router

setup_logging()
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    Path(settings.media_root).mkdir(parents=True, exist_ok=True)
    if settings.RUN_MIGRATIONS_ON_STARTUP:
        await run_migrations()
    yield


if settings.SENTRY_DSN:
    sentry_sdk.init(
        dsn=settings.SENTRY_DSN,
        environment=settings.ENVIRONMENT,
        traces_sample_rate=settings.SENTRY_TRACES_SAMPLE_RATE,
        profiles_sample_rate=settings.SENTRY_PROFILES_SAMPLE_RATE,
        integrations=[
            StarletteIntegration(transaction_style="endpoint"),
            FastApiIntegration(transaction_style="endpoint"),
        ],
        send_default_pii=False,
    )

app = FastAPI(
    title="Wedding Website API",
    description="Guest registration, RSVPs, messages and photo moderation for our wedding",
    version="0.1.0",
    lifespan=lifespan,
)

# CORS middleware
app.add_middleware(
    CORSMiddleware,  # type: ignore[arg-type]
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.exception_handler(SQLAlchemyError)
@app.exception_handler(StorageError)
async def infrastructure_error_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.exception("Request %s %s failed", request.method, request.url.path, exc_info=exc)
    return JSONResponse(
        status_code=500,
        content={"detail": "Something went wrong, please try again"},
    )


# Include routers
app.include_router(healthz_router, prefix="/healthz", tags=["Healthz"])
app.include_router(auth_router, tags=["Auth"])
app.include_router(guests_router, tags=["Guests"])
app.include_router(rsvps_router, tags=["RSVPs"])
app.include_router(messages_router, tags=["Messages"])
app.include_router(photos_router, tags=["Photos"])
app.include_router(photos_admin_router, tags=["Photos admin"])

app.mount(
    settings.media_url,
    StaticFiles(directory=settings.media_root, check_dir=False),
    name="media",
)


@app.get("/", tags=["Root"])
async def root():
    return {"message": "Welcome to the Wedding Website API"}
