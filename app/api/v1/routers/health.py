import asyncio

from fastapi import APIRouter, Depends
from sqlalchemy import text
from sqlalchemy.exc import InterfaceError, OperationalError

from app.api.v1.dependencies import get_db_session
from app.core.dto.common import ResponseEnvelope
from app.infrastructure.config.config import DB_CONFIG
from app.infrastructure.errors.base import ServiceUnavailable
from app.infrastructure.logging import get_logger


router = APIRouter()
logger = get_logger(__name__)


@router.get(
    "",
    summary="Liveness and database check",
)
async def health(session=Depends(get_db_session)) -> ResponseEnvelope[dict[str, str]]:
    try:
        await asyncio.wait_for(session.execute(text("SELECT 1")), timeout=DB_CONFIG.QUERY_TIMEOUT)
    except (asyncio.TimeoutError, OperationalError, InterfaceError) as exc:
        logger.error("health_check_failed", error=str(exc))
        raise ServiceUnavailable()
    return ResponseEnvelope(data={"status": "ok", "database": "ok"})
