"""Health check endpoint reporting database connectivity."""

import logging
from typing import Annotated

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from app.core.config import get_settings
from app.core.database import check_db_connected, get_db
from app.schemas.health import HealthResponse

logger = logging.getLogger(__name__)

router = APIRouter()


@router.get("/", response_model=HealthResponse)
def get_health(db: Annotated[Session, Depends(get_db)]) -> HealthResponse:
    """
    Report that the service is up; `database` says whether the database
    answered a trivial query.
    """
    connected = check_db_connected(db)
    if not connected:
        logger.warning("Health check could not reach the database")
    return HealthResponse(
        status="ok",
        environment=get_settings().APP_ENV,
        database="connected" if connected else "disconnected",
    )
