# product_api/core/container.py

from dependency_injector import containers, providers

from product_api.core.settings import settings
from product_api.db.session import build_engine, build_session_factory
from product_api.repo.product import ProductRepository
from product_api.services.errors import ErrorTranslator
from product_api.services.product import ProductService


class Container(containers.DeclarativeContainer):
    wiring_config = containers.WiringConfiguration(
        modules=["product_api.api.product", "product_api.api.health"]
    )

    # движок и фабрика сессий живут весь процесс, закрывает их lifespan
    engine = providers.Singleton(
        build_engine,
        settings.DATABASE_URL,
        echo=settings.DB_ECHO,
        pool_pre_ping=settings.DB_POOL_PRE_PING,
    )

    session_factory = providers.Singleton(
        build_session_factory,
        engine=engine,
    )

    # repos
    product_repository = providers.Factory(
        ProductRepository,
        session_factory=session_factory,
    )

    # services
    error_translator = providers.Singleton(ErrorTranslator)

    product_service = providers.Factory(
        ProductService,
        repo=product_repository,
        errors=error_translator,
    )
