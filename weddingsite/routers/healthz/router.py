from fastapi import APIRouter, Depends
from pydantic import BaseModel

from weddingsite.config.database import ping_database

router = APIRouter()


class HealthCheckResponse(BaseModel):
    status: str
    version: str = "0.1.0"
    database: str


async def check_database() -> bool:
    return await ping_database()


@router.get("/", response_model=HealthCheckResponse)
async def health_check(database_ok: bool = Depends(check_database)) -> HealthCheckResponse:
    """
    Health check endpoint to verify the API is running and the database answers.
    """
    return HealthCheckResponse(
        status="healthy" if database_ok else "degraded",
        database="ok" if database_ok else "unavailable",
    )
