# product_api/repo/product.py

from __future__ import annotations

from typing import List, Optional

import structlog
from sqlalchemy import delete, select, update
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from product_api.core.exceptions import StoreFailure
from product_api.db.base import Product

logger = structlog.get_logger(__name__)

# products.id — INTEGER (int32 в PostgreSQL); id вне диапазона строкой быть не может
ID_MIN = -(2 ** 31)
ID_MAX = 2 ** 31 - 1


def _id_in_range(product_id: int) -> bool:
    return ID_MIN <= product_id <= ID_MAX


class ProductRepository:
    """
    Единственный путь к таблице products.
    Каждый метод = одна сессия и одна транзакция; сессии берутся из фабрики,
    которую контейнер создаёт один раз на процесс.
    Любая ошибка SQLAlchemy наружу уходит как StoreFailure.
    """

    def __init__(self, session_factory: async_sessionmaker[AsyncSession]):
        self.session_factory = session_factory

    # CREATE
    async def add(self, product: Product) -> Product:
        async with self.session_factory() as session:
            session.add(product)
            try:
                await session.flush()   # после flush product.id уже есть
                await session.commit()
            except SQLAlchemyError as e:
                await session.rollback()
                raise StoreFailure("insert into products failed") from e

        logger.info("product.inserted", product_id=product.id)
        return product

    # READ
    async def get_all(self) -> List[Product]:
        """Все строки без фильтра. Порядок не гарантирован — сортирует вызывающий."""
        async with self.session_factory() as session:
            try:
                res = await session.execute(select(Product))
            except SQLAlchemyError as e:
                raise StoreFailure("select from products failed") from e
            return list(res.scalars().all())

    async def get_by_id(self, product_id: int) -> Optional[Product]:
        if not _id_in_range(product_id):
            return None
        async with self.session_factory() as session:
            try:
                return await session.get(Product, product_id)
            except SQLAlchemyError as e:
                raise StoreFailure(f"select product {product_id} failed") from e

    async def get_by_name_substring(self, text: str) -> List[Product]:
        """
        Регистронезависимый поиск подстроки в name.
        % и _ из запроса экранируются, ищем буквально.
        """
        stmt = select(Product).where(Product.name.icontains(text, autoescape=True))
        async with self.session_factory() as session:
            try:
                res = await session.execute(stmt)
            except SQLAlchemyError as e:
                raise StoreFailure("search products by name failed") from e
            return list(res.scalars().all())

    # UPDATE
    async def update(self, product: Product) -> Product:
        """
        Перезаписывает все изменяемые поля строки с product.id.
        Если строку успели удалить между проверкой и записью — это StoreFailure,
        а не тихий no-op.
        """
        stmt = (
            update(Product)
            .where(Product.id == product.id)
            .values(name=product.name, stock=product.stock, price=product.price)
        )
        async with self.session_factory() as session:
            try:
                res = await session.execute(stmt)
                if not res.rowcount:
                    await session.rollback()
                    raise StoreFailure(f"product {product.id} vanished before update")
                await session.commit()
            except SQLAlchemyError as e:
                await session.rollback()
                raise StoreFailure(f"update product {product.id} failed") from e

        logger.info("product.row_updated", product_id=product.id)
        return product

    # DELETE
    async def delete(self, product_id: int) -> bool:
        if not _id_in_range(product_id):
            return False
        async with self.session_factory() as session:
            try:
                res = await session.execute(delete(Product).where(Product.id == product_id))
                deleted = res.rowcount or 0
                if deleted:
                    await session.commit()
                else:
                    await session.rollback()
            except SQLAlchemyError as e:
                await session.rollback()
                raise StoreFailure(f"delete product {product_id} failed") from e

        logger.info("product.row_deleted", product_id=product_id, count=deleted)
        return deleted > 0
