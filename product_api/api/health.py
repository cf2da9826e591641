import structlog
from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse
from dependency_injector.wiring import inject, Provide
from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncEngine

from product_api.core.container import Container

logger = structlog.get_logger(__name__)

router = APIRouter(
    tags=["health"],
    redirect_slashes=False
)

@router.get("/ping", summary="Liveness check")
async def ping():
    return {"status": "ok"}


@router.get("/ready", summary="Readiness check (БД отвечает)")
@inject
async def ready(engine: AsyncEngine = Depends(Provide[Container.engine])):
    try:
        async with engine.connect() as conn:
            await conn.execute(text("SELECT 1"))
    except SQLAlchemyError as e:
        logger.warning("health.db_unavailable", error=str(e))
        return JSONResponse(status_code=503, content={"status": "unavailable"})
    return {"status": "ok"}
