import asyncio
import logging

from fastapi import APIRouter, Depends, status
from fastapi.responses import JSONResponse
from sqlalchemy.engine import Engine
from sqlalchemy.exc import SQLAlchemyError

from services.membership.app.db.session import check_database
from services.membership.app.dependencies import get_database_engine
from services.membership.app.schemas.response import HealthResponse

logger = logging.getLogger(__name__)

router = APIRouter(tags=["Health"])


@router.get("/health", response_model=HealthResponse)
async def health(engine: Engine = Depends(get_database_engine)):
    """DB 연결을 확인합니다."""
    try:
        await asyncio.to_thread(check_database, engine)
    except SQLAlchemyError as exc:
        logger.error("Database ping failed: %s", exc)
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content={"status": "unhealthy"},
        )
    return HealthResponse(status="healthy")
