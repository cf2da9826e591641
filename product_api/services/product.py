# product_api/services/product.py

from __future__ import annotations

from contextlib import contextmanager
from typing import AbstractSet, Iterator, List, Optional

import structlog

from product_api.core.exceptions import ProductNotFoundError, ProductValidationError
from product_api.repo.product import ProductRepository
from product_api.schemas.product import (
    ProductCreate,
    ProductOut,
    apply_to_entity,
    to_entity,
    to_read_view,
)
from product_api.services.errors import ErrorTranslator
from product_api.services.sorting import SortField, sort_products
from product_api.services.validation import validate_product

logger = structlog.get_logger(__name__)


class ProductService:
    """
    Сервисный слой над ProductRepository.

    Порядок для каждой операции:
    - валидация payload (для записи) — до любого обращения к БД
    - вызов репозитория
    - ORM -> ProductOut
    - всё неожиданное -> ErrorTranslator (UnexpectedFailure, 500)

    ProductValidationError и ProductNotFoundError — ожидаемые исходы,
    их пропускаем наружу как есть.
    """

    def __init__(self, repo: ProductRepository, errors: ErrorTranslator):
        self.repo = repo
        self.errors = errors

    @contextmanager
    def _boundary(self, operation: str, **context) -> Iterator[None]:
        try:
            yield
        except (ProductValidationError, ProductNotFoundError):
            raise
        except Exception as e:
            raise self.errors.translate(e, operation=operation, **context) from e

    def _ensure_valid(
        self,
        payload: ProductCreate,
        operation: str,
        only: Optional[AbstractSet[str]] = None,
        **context,
    ) -> None:
        errors = validate_product(payload, only)
        if errors:
            logger.info("product.validation_failed", operation=operation, fields=list(errors), **context)
            raise ProductValidationError(errors)

    # ---------------------------
    # CREATE
    # ---------------------------

    async def create_product(self, payload: ProductCreate) -> ProductOut:
        self._ensure_valid(payload, "create")

        with self._boundary("create"):
            product = await self.repo.add(to_entity(payload))
            created = to_read_view(product)

        logger.info("product.created", product_id=created.id)
        return created

    # ---------------------------
    # READ
    # ---------------------------

    async def list_products(
        self,
        order_by: SortField = SortField.ID,
        ascending: bool = True,
    ) -> List[ProductOut]:
        with self._boundary("list", order_by=order_by.value, ascending=ascending):
            products = await self.repo.get_all()
            return [to_read_view(p) for p in sort_products(products, order_by, ascending)]

    async def get_product(self, product_id: int) -> ProductOut:
        with self._boundary("get_by_id", product_id=product_id):
            product = await self.repo.get_by_id(product_id)
            if product is None:
                logger.info("product.not_found", product_id=product_id)
                raise ProductNotFoundError(product_id)
            return to_read_view(product)

    async def search_products(self, name: str) -> List[ProductOut]:
        """Поиск по подстроке в имени. Ничего не нашли — пустой список, не 404."""
        with self._boundary("search", name=name):
            products = await self.repo.get_by_name_substring(name)
            return [to_read_view(p) for p in products]

    # ---------------------------
    # UPDATE
    # ---------------------------

    async def update_product(self, product_id: int, payload: ProductCreate) -> None:
        """
        Сначала валидация, потом проверка существования, потом запись.
        Если строку удалили между проверкой и записью, репозиторий кидает
        StoreFailure и клиент получает 500, а не ложный 204.
        """
        # на PUT проверяем только присланные поля
        self._ensure_valid(payload, "update", only=payload.model_fields_set, product_id=product_id)

        with self._boundary("update", product_id=product_id):
            product = await self.repo.get_by_id(product_id)
            if product is None:
                logger.info("product.not_found", product_id=product_id)
                raise ProductNotFoundError(product_id)

            await self.repo.update(apply_to_entity(payload, product))

        logger.info("product.updated", product_id=product_id)

    # ---------------------------
    # DELETE
    # ---------------------------

    async def delete_product(self, product_id: int) -> None:
        with self._boundary("delete", product_id=product_id):
            deleted = await self.repo.delete(product_id)

        if not deleted:
            logger.info("product.not_found", product_id=product_id)
            raise ProductNotFoundError(product_id)

        logger.info("product.deleted", product_id=product_id)
