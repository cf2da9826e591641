from __future__ import annotations

from decimal import Decimal
from typing import Optional, Sequence

import structlog
from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker, create_async_engine

from product_api.db.base import Base, Product

logger = structlog.get_logger(__name__)


SAMPLE_PRODUCTS = [
    {"name": "Product 1", "stock": 10, "price": Decimal("12.50")},
    {"name": "Product 2", "stock": 20, "price": Decimal("15.75")},
    {"name": "Product 3", "stock": 15, "price": Decimal("10.00")},
    {"name": "Product 4", "stock": 8, "price": Decimal("18.25")},
    {"name": "Product 5", "stock": 25, "price": Decimal("9.99")},
]


def build_engine(url: str, *, echo: bool = False, pool_pre_ping: bool = True) -> AsyncEngine:
    return create_async_engine(
        url,
        echo=echo,
        pool_pre_ping=pool_pre_ping,
    )


def build_session_factory(engine: AsyncEngine) -> async_sessionmaker[AsyncSession]:
    return async_sessionmaker(
        bind=engine,
        expire_on_commit=False,
        class_=AsyncSession,
    )


async def create_schema(engine: AsyncEngine) -> None:
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)


async def seed_sample_data(
    session_factory: async_sessionmaker[AsyncSession],
    rows: Optional[Sequence[dict]] = None,
) -> int:
    """
    Кладёт демо-товары (по умолчанию SAMPLE_PRODUCTS), только если таблица пустая.
    Возвращает, сколько строк вставлено.
    """
    rows = SAMPLE_PRODUCTS if rows is None else rows
    async with session_factory() as session:
        existing = (await session.execute(select(func.count()).select_from(Product))).scalar_one()
        if existing:
            return 0

        session.add_all([Product(**row) for row in rows])
        await session.commit()

    logger.info("db.seeded", count=len(rows))
    return len(rows)
