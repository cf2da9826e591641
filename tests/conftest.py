import os
import sys
import pytest
from decimal import Decimal
from pathlib import Path
from httpx import ASGITransport, AsyncClient
from dependency_injector import providers
from sqlalchemy.ext.asyncio import create_async_engine
from sqlalchemy.pool import StaticPool

# Ensure project root is importable
tests_dir = Path(__file__).resolve().parent
project_root = str(tests_dir.parent)
if project_root not in sys.path:
    sys.path.insert(0, project_root)

# Set minimal environment variables for testing (before settings are imported)
os.environ.setdefault("DATABASE_URL", "sqlite+aiosqlite://")
os.environ.setdefault("LOG_JSON", "false")
os.environ.setdefault("LOG_LEVEL", "WARNING")
os.environ.setdefault("CREATE_SCHEMA", "false")

from product_api.db.base import Base, Product
from product_api.db.session import SAMPLE_PRODUCTS, build_session_factory, seed_sample_data
from product_api.repo.product import ProductRepository


@pytest.fixture
async def engine():
    """In-memory SQLite, one shared connection for the whole test"""
    engine = create_async_engine(
        "sqlite+aiosqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    yield engine

    await engine.dispose()


@pytest.fixture
def session_factory(engine):
    return build_session_factory(engine)


@pytest.fixture
def product_repo(session_factory):
    return ProductRepository(session_factory)


@pytest.fixture
async def seeded(session_factory):
    """Product 1 (10, 12.50) и Product 2 (20, 15.75)"""
    await seed_sample_data(session_factory, SAMPLE_PRODUCTS[:2])


@pytest.fixture
def app(engine):
    """App wired to the test engine"""
    from main import create_app

    app = create_app()
    app.container.engine.override(providers.Object(engine))

    yield app

    app.container.unwire()
    app.container.reset_override()


@pytest.fixture
async def client(app):
    """Create test client"""
    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as client:
        yield client


@pytest.fixture
def sample_product_data():
    return {"name": "Test Product", "stock": 3, "price": 10.99}


@pytest.fixture
def make_product():
    """Detached ORM Product for unit tests"""
    def _make(id: int, name: str, stock: int = 1, price: str = "1.00") -> Product:
        return Product(id=id, name=name, stock=stock, price=Decimal(price))
    return _make
