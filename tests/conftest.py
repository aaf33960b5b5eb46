import os
import tempfile

# Settings are read at import time, so the environment is prepared before
# anything from catalog_api is imported.
_db_dir = tempfile.mkdtemp(prefix="catalog_api_tests_")
os.environ["DATABASE_URL"] = f"sqlite:///{os.path.join(_db_dir, 'catalog.db')}"
os.environ["SECRET_KEY"] = "test-secret-key-not-for-production"
os.environ["ADMIN_USERNAME"] = "admin"
os.environ["ADMIN_PASSWORD"] = "s3cret-pass"
os.environ.pop("ADMIN_PASSWORD_HASH", None)

import httpx
import pytest

from catalog_api import models  # noqa: F401
from catalog_api.config import settings
from catalog_api.database import Base, engine, async_session_factory
from catalog_api.main import app


ADMIN_CREDENTIALS = {"username": "admin", "password": "s3cret-pass"}


@pytest.fixture
async def database():
    """Fresh tables for every test."""
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)
        await conn.run_sync(Base.metadata.create_all)
    yield
    # Connections are bound to the test's event loop
    await engine.dispose()


@pytest.fixture
async def db_session(database):
    async with async_session_factory() as session:
        yield session


@pytest.fixture
async def client(database):
    """Anonymous client (public site visitor)."""
    transport = httpx.ASGITransport(app=app)
    async with httpx.AsyncClient(transport=transport, base_url="http://testserver") as c:
        yield c


@pytest.fixture
async def admin_client(database):
    """Client carrying a valid admin session cookie."""
    transport = httpx.ASGITransport(app=app)
    async with httpx.AsyncClient(transport=transport, base_url="http://testserver") as c:
        response = await c.post("/api/admin/login", json=ADMIN_CREDENTIALS)
        assert response.status_code == 200, response.text
        c.cookies.set(settings.AUTH_COOKIE_NAME, response.cookies[settings.AUTH_COOKIE_NAME])
        yield c


class CatalogFactory:
    """Builds catalog entries through the admin API."""

    def __init__(self, client: httpx.AsyncClient):
        self.client = client

    async def _create(self, path: str, payload: dict) -> dict:
        response = await self.client.post(path, json=payload)
        assert response.status_code == 201, response.text
        return response.json()["data"]

    async def navbar_category(self, name: str = "Networking", **extra) -> dict:
        return await self._create("/api/admin/navbar-category", {"name": name, **extra})

    async def category(self, navbar_category: dict, name: str = "Switches", **extra) -> dict:
        return await self._create(
            "/api/admin/category",
            {"name": name, "navbarCategory": navbar_category["id"], **extra},
        )

    async def subcategory(self, category: dict, name: str = "PoE Switches", **extra) -> dict:
        return await self._create(
            "/api/admin/subcategory",
            {"name": name, "category": category["id"], **extra},
        )

    async def product(
        self,
        category: dict,
        subcategory: dict = None,
        name: str = "Switch-24",
        **extra
    ) -> dict:
        payload = {
            "name": name,
            "description": f"{name} description",
            "image1": f"https://cdn.example.org/{name}.png",
            "keyFeatures": ["24 ports", "Layer 2"],
            "category": category["id"],
            **extra,
        }
        if subcategory:
            payload["subcategory"] = subcategory["id"]
        return await self._create("/api/admin/product", payload)

    async def tree(self) -> dict:
        """Networking > Switches > PoE Switches > Switch-24."""
        navbar = await self.navbar_category("Networking")
        category = await self.category(navbar, "Switches")
        subcategory = await self.subcategory(category, "PoE Switches")
        product = await self.product(category, subcategory, "Switch-24")
        return {
            "navbar": navbar,
            "category": category,
            "subcategory": subcategory,
            "product": product,
        }


@pytest.fixture
def factory(admin_client):
    return CatalogFactory(admin_client)
