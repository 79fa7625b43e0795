"""Liveness route."""

from dishka.integrations.fastapi import DishkaRoute, FromDishka
from fastapi import APIRouter
from pydantic import BaseModel

from discuss.__version__ import VERSION
from discuss.config import Settings

router = APIRouter(tags=["health"], route_class=DishkaRoute)


class HealthResponse(BaseModel):
    """Liveness status of the comment service."""

    status: str
    version: str
    git_sha: str
    environment: str


@router.get("/health", response_model=HealthResponse)
async def health_check(settings: FromDishka[Settings]) -> HealthResponse:
    """Report that the process is serving requests.

    Does not touch the database; a broken pool shows up as 500s on the
    comment routes instead.
    """
    return HealthResponse(
        status="healthy",
        version=VERSION,
        git_sha=settings.git_sha,
        environment=settings.environment,
    )
