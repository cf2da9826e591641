from __future__ import annotations

from enum import Enum
from typing import Any, Callable, Dict, Iterable, List, Optional

from product_api.db.base import Product


class SortField(str, Enum):
    ID = "id"
    NAME = "name"
    PRICE = "price"

    @classmethod
    def parse(cls, raw: Optional[str]) -> "SortField":
        """Без учёта регистра; всё незнакомое (и None) -> ID, без ошибки."""
        if not raw:
            return cls.ID
        try:
            return cls(raw.strip().lower())
        except ValueError:
            return cls.ID


# id/price — числовой порядок, name — лексикографический с учётом регистра
_SORT_KEYS: Dict[SortField, Callable[[Product], Any]] = {
    SortField.ID: lambda p: p.id,
    SortField.NAME: lambda p: p.name,
    SortField.PRICE: lambda p: p.price,
}


def sort_products(
    products: Optional[Iterable[Product]],
    field: SortField = SortField.ID,
    ascending: bool = True,
) -> List[Product]:
    """
    Стабильная сортировка. Направление меняется на уровне сравнения
    (reverse=True у sorted), поэтому равные ключи сохраняют исходный
    относительный порядок и при убывании.
    """
    if not products:
        return []

    key = _SORT_KEYS.get(field, _SORT_KEYS[SortField.ID])
    return sorted(products, key=key, reverse=not ascending)
