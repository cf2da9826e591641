from __future__ import annotations

from typing import AbstractSet, Dict, Optional

from product_api.schemas.product import ProductCreate


NAME_BLANK = "name must not be blank"
PRICE_NEGATIVE = "price must not be negative"
STOCK_NEGATIVE = "stock must not be negative"


def validate_product(
    payload: ProductCreate,
    only: Optional[AbstractSet[str]] = None,
) -> Dict[str, str]:
    """
    Проверяет все правила (без short-circuit) и возвращает {поле: сообщение}.
    Пустой dict = payload валиден.

    only — проверять только эти поля (PUT: поля, которые клиент реально
    прислал; остальные берутся из уже валидной строки в БД).
    """
    fields = ProductCreate.model_fields.keys() if only is None else only
    errors: Dict[str, str] = {}

    if "name" in fields and (not payload.name or not payload.name.strip()):
        errors["name"] = NAME_BLANK

    if "price" in fields and payload.price < 0:
        errors["price"] = PRICE_NEGATIVE

    if "stock" in fields and payload.stock < 0:
        errors["stock"] = STOCK_NEGATIVE

    return errors
