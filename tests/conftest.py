"""
Pytest fixtures - temporary SQLite datastore, app, client (TDD/BDD support).
Challenge: Isolated tests; every test gets its own database file.
"""

from typing import AsyncGenerator

import pytest
import pytest_asyncio
from fastapi import FastAPI
from httpx import ASGITransport, AsyncClient
from sqlalchemy import text
from sqlalchemy.ext.asyncio import AsyncSession

from userapi.config import Settings
from userapi.db.session import Database, open_database
from userapi.main import create_app

FRONTEND_HTML = "<!DOCTYPE html><html><body><h1>Users</h1></body></html>"


@pytest.fixture
def settings(tmp_path) -> Settings:
    frontend = tmp_path / "index.html"
    frontend.write_text(FRONTEND_HTML, encoding="utf-8")
    return Settings(
        database_url=f"sqlite+aiosqlite:///{tmp_path / 'test.db'}",
        frontend_path=str(frontend),
    )


@pytest_asyncio.fixture
async def database(settings: Settings) -> AsyncGenerator[Database, None]:
    db = await open_database(settings.database_url)
    yield db
    await db.dispose()


@pytest_asyncio.fixture
async def session(database: Database) -> AsyncGenerator[AsyncSession, None]:
    async with database.session() as s:
        yield s


def _client(app: FastAPI, database: Database) -> AsyncClient:
    # ASGITransport skips the lifespan, so the database is attached by hand
    app.state.database = database
    return AsyncClient(transport=ASGITransport(app=app), base_url="http://test")


@pytest_asyncio.fixture
async def client(settings: Settings, database: Database):
    async with _client(create_app(settings), database) as ac:
        yield ac


@pytest_asyncio.fixture
async def strict_client(settings: Settings, database: Database):
    strict = settings.model_copy(update={"strict_status_codes": True})
    async with _client(create_app(strict), database) as ac:
        yield ac


async def create_user(client: AsyncClient, name: str, email: str, password: str = "secret"):
    return await client.post("/users", json={"name": name, "email": email, "password": password})


async def user_id_by_email(client: AsyncClient, email: str) -> int:
    users = (await client.get("/users")).json()
    return next(u["id"] for u in users if u["email"] == email)


async def drop_users_table(database: Database) -> None:
    """Break the datastore under a running app: every users query now fails."""
    async with database.engine.begin() as conn:
        await conn.execute(text("DROP TABLE users"))
