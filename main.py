from contextlib import asynccontextmanager

import structlog
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from product_api.api import health, product
from product_api.api.errors import register_exception_handlers
from product_api.core.container import Container
from product_api.core.logging import configure_logging
from product_api.core.middleware import RequestLoggingMiddleware
from product_api.core.settings import settings
from product_api.db.session import create_schema, seed_sample_data

logger = structlog.get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    container: Container = app.container
    engine = container.engine()

    if settings.CREATE_SCHEMA:
        await create_schema(engine)
    if settings.SEED_SAMPLE_DATA:
        await seed_sample_data(container.session_factory())

    logger.info("app.started", database=engine.url.render_as_string(hide_password=True))

    yield

    await engine.dispose()
    logger.info("app.stopped")

def create_app() -> FastAPI:
    configure_logging()

    app = FastAPI(title="Product API", lifespan=lifespan)

    # Разрешаем запросы с фронта (CORS)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.CORS_ORIGINS,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    app.add_middleware(RequestLoggingMiddleware)

    container = Container()
    app.container = container
    container.wire()

    register_exception_handlers(app)

    app.include_router(health.router)
    app.include_router(product.router, prefix=settings.API_PREFIX)

    return app

app = create_app()
