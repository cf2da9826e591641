import pytest
from decimal import Decimal
from sqlalchemy.ext.asyncio import create_async_engine
from sqlalchemy.pool import StaticPool

from product_api.core.exceptions import StoreFailure
from product_api.db.base import Product
from product_api.db.session import build_session_factory, seed_sample_data
from product_api.repo.product import ProductRepository


@pytest.mark.asyncio
async def test_product_add_assigns_id(product_repo):
    """Создание товара: id выдаёт БД"""
    product = await product_repo.add(Product(name="Test Product", stock=5, price=Decimal("10.99")))

    assert product.id is not None
    assert product.name == "Test Product"
    assert product.stock == 5
    assert product.price == Decimal("10.99")


@pytest.mark.asyncio
async def test_product_ids_are_unique(product_repo):
    first = await product_repo.add(Product(name="A", stock=1, price=Decimal("1")))
    second = await product_repo.add(Product(name="B", stock=1, price=Decimal("1")))

    assert first.id != second.id


@pytest.mark.asyncio
async def test_product_get_all(product_repo, seeded):
    all_products = await product_repo.get_all()

    assert sorted(p.name for p in all_products) == ["Product 1", "Product 2"]


@pytest.mark.asyncio
async def test_product_get_all_empty(product_repo):
    assert await product_repo.get_all() == []


@pytest.mark.asyncio
async def test_product_get_by_id(product_repo):
    created = await product_repo.add(Product(name="Find Me", stock=2, price=Decimal("3.50")))

    found = await product_repo.get_by_id(created.id)
    assert found is not None
    assert found.name == "Find Me"
    assert found.price == Decimal("3.50")


@pytest.mark.asyncio
async def test_product_get_by_id_absent(product_repo):
    """Нет строки — None, а не исключение"""
    assert await product_repo.get_by_id(999) is None


@pytest.mark.asyncio
async def test_product_search_is_case_insensitive(product_repo):
    for name in ("Product 1", "PRODUCT 2", "my product x", "Widget"):
        await product_repo.add(Product(name=name, stock=1, price=Decimal("1")))

    found = await product_repo.get_by_name_substring("product")

    assert sorted(p.name for p in found) == ["PRODUCT 2", "Product 1", "my product x"]


@pytest.mark.asyncio
async def test_product_search_no_match(product_repo, seeded):
    assert await product_repo.get_by_name_substring("nothing-like-this") == []


@pytest.mark.asyncio
async def test_product_search_wildcards_are_literal(product_repo):
    await product_repo.add(Product(name="100% cotton", stock=1, price=Decimal("1")))
    await product_repo.add(Product(name="1000 cotton", stock=1, price=Decimal("1")))

    found = await product_repo.get_by_name_substring("0%")

    assert [p.name for p in found] == ["100% cotton"]


@pytest.mark.asyncio
async def test_product_update_overwrites_fields(product_repo):
    """Обновление всех изменяемых полей, id не меняется"""
    created = await product_repo.add(Product(name="Old", stock=1, price=Decimal("1")))

    created.name = "New"
    created.stock = 42
    created.price = Decimal("99.90")
    await product_repo.update(created)

    reloaded = await product_repo.get_by_id(created.id)
    assert reloaded.id == created.id
    assert reloaded.name == "New"
    assert reloaded.stock == 42
    assert reloaded.price == Decimal("99.90")


@pytest.mark.asyncio
async def test_product_update_vanished_row_fails(product_repo):
    """Строку удалили между проверкой и записью — StoreFailure, не тихий no-op"""
    created = await product_repo.add(Product(name="Doomed", stock=1, price=Decimal("1")))
    await product_repo.delete(created.id)

    created.name = "Too late"
    with pytest.raises(StoreFailure):
        await product_repo.update(created)

    assert await product_repo.get_all() == []


@pytest.mark.asyncio
async def test_product_delete(product_repo):
    created = await product_repo.add(Product(name="Delete Me", stock=1, price=Decimal("1")))

    assert await product_repo.delete(created.id) is True
    assert await product_repo.get_by_id(created.id) is None
    assert await product_repo.delete(created.id) is False


@pytest.mark.asyncio
async def test_store_errors_become_store_failure():
    """Таблицы нет — любая операция падает StoreFailure"""
    engine = create_async_engine(
        "sqlite+aiosqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    repo = ProductRepository(build_session_factory(engine))

    try:
        with pytest.raises(StoreFailure):
            await repo.get_all()
        with pytest.raises(StoreFailure):
            await repo.add(Product(name="X", stock=1, price=Decimal("1")))
        with pytest.raises(StoreFailure):
            await repo.delete(1)
    finally:
        await engine.dispose()


@pytest.mark.asyncio
async def test_seed_only_into_empty_table(session_factory, product_repo):
    assert await seed_sample_data(session_factory) == 5
    assert await seed_sample_data(session_factory) == 0

    all_products = await product_repo.get_all()
    assert sorted(p.name for p in all_products) == [f"Product {i}" for i in range(1, 6)]
    assert sorted(p.price for p in all_products)[0] == Decimal("9.99")


@pytest.mark.asyncio
async def test_product_id_out_of_range(product_repo, seeded):
    """id больше INTEGER — такой строки нет, а не ошибка драйвера"""
    huge = 99999999999999999999

    assert await product_repo.get_by_id(huge) is None
    assert await product_repo.get_by_id(-huge) is None
    assert await product_repo.delete(huge) is False
    assert len(await product_repo.get_all()) == 2
