from __future__ import annotations

from decimal import Decimal
from typing import Annotated, Optional

from pydantic import BaseModel, Field, PlainSerializer

from product_api.db.base import Product


# В JSON цена уходит числом, а не строкой "12.50"
JsonDecimal = Annotated[Decimal, PlainSerializer(float, return_type=float, when_used="json")]


class ProductCreate(BaseModel):
    """
    Тело POST и PUT. Бизнес-правила (пустое имя, отрицательные значения)
    проверяет validation.validate_product, а не Pydantic: ошибки должны
    прийти все сразу в виде {поле: сообщение}.

    Дефолты нужны только для POST. На PUT отсутствующие поля не трогаем,
    см. apply_to_entity.
    """
    name: Optional[str] = Field("", description="Название товара")
    stock: int = Field(0, description="Остаток на складе")
    price: Decimal = Field(Decimal("0"), description="Цена")


class ProductOut(BaseModel):
    id: int
    name: str
    stock: int
    price: JsonDecimal


# ---------------------------
# Маппинг DTO <-> ORM, поле за полем
# ---------------------------

def to_entity(payload: ProductCreate) -> Product:
    """Новый Product без id — id выдаст БД."""
    return Product(
        name=payload.name,
        stock=payload.stock,
        price=payload.price,
    )


def apply_to_entity(payload: ProductCreate, product: Product) -> Product:
    """
    Перезаписывает только присланные поля (model_fields_set).
    id и всё, чего нет в теле запроса, остаётся как было.
    """
    sent = payload.model_fields_set
    if "name" in sent:
        product.name = payload.name
    if "stock" in sent:
        product.stock = payload.stock
    if "price" in sent:
        product.price = payload.price
    return product


def to_read_view(product: Product) -> ProductOut:
    return ProductOut(
        id=product.id,
        name=product.name,
        stock=product.stock,
        price=product.price,
    )
