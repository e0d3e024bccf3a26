import os

# Settings are read at import time; provide test values before importing src
os.environ.setdefault("PROJECT_NAME", "Criteria Weights API Test")
os.environ.setdefault("SERVICE_NAME", "criteria-weights-api-test")
os.environ.setdefault("POSTGRES_SERVER", "localhost")
os.environ.setdefault("POSTGRES_USER", "test")
os.environ.setdefault("POSTGRES_PASSWORD", "test")
os.environ.setdefault("POSTGRES_DB", "test")
os.environ.setdefault("JWT_SECRET_KEY", "test-secret-key")
os.environ.setdefault("LOG_TO_FILE", "false")

from collections.abc import AsyncIterator
from decimal import Decimal
from typing import Optional

import pytest_asyncio
from fastapi import FastAPI
from httpx import ASGITransport, AsyncClient
from sqlalchemy import event
from sqlalchemy.pool import NullPool
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlmodel import SQLModel

from src.auth.jwt import create_access_token
from src.core.database import get_db
from src.main import create_app
from src.models import Criteria, CriteriaCategory
from src.repositories.criteria import CriteriaRepository
from src.repositories.criteria_category import CriteriaCategoryRepository
from src.services.criteria import CriteriaService
from src.services.criteria_category import CriteriaCategoryService

# Use SQLite for testing (no PostgreSQL needed)
TEST_DATABASE_URL = "sqlite+aiosqlite:///./test.db"

# NullPool: every test runs on its own event loop
engine = create_async_engine(TEST_DATABASE_URL, echo=False, poolclass=NullPool)
TestSessionLocal = async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)


@event.listens_for(engine.sync_engine, "connect")
def _set_sqlite_pragma(dbapi_conn, connection_record):
    cursor = dbapi_conn.cursor()
    cursor.execute("PRAGMA foreign_keys=ON")
    cursor.close()


ADMIN = {"id": 1, "email": "admin@test.com", "role": "ADMIN", "is_active": True}
EVALUATOR = {"id": 2, "email": "evaluator@test.com", "role": "EVALUATOR", "is_active": True}
EMPLOYEE = {"id": 3, "email": "employee@test.com", "role": "EMPLOYEE", "is_active": True}


def _headers_for(user: dict) -> dict:
    token = create_access_token({"sub": str(user["id"]), "email": user["email"], "role": user["role"]})
    return {"Authorization": f"Bearer {token}"}


@pytest_asyncio.fixture
async def db_session() -> AsyncIterator[AsyncSession]:
    async with engine.begin() as conn:
        await conn.run_sync(SQLModel.metadata.create_all)

    async with TestSessionLocal() as session:
        yield session

    async with engine.begin() as conn:
        await conn.run_sync(SQLModel.metadata.drop_all)


@pytest_asyncio.fixture
async def app(db_session: AsyncSession) -> FastAPI:
    app = create_app()

    async def override_get_db():
        yield db_session

    app.dependency_overrides[get_db] = override_get_db
    return app


@pytest_asyncio.fixture
async def client(app: FastAPI) -> AsyncIterator[AsyncClient]:
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac


@pytest_asyncio.fixture
async def admin_user() -> dict:
    return dict(ADMIN)


@pytest_asyncio.fixture
async def evaluator_user() -> dict:
    return dict(EVALUATOR)


@pytest_asyncio.fixture
async def employee_user() -> dict:
    return dict(EMPLOYEE)


@pytest_asyncio.fixture
async def admin_headers() -> dict:
    return _headers_for(ADMIN)


@pytest_asyncio.fixture
async def evaluator_headers() -> dict:
    return _headers_for(EVALUATOR)


@pytest_asyncio.fixture
async def employee_headers() -> dict:
    return _headers_for(EMPLOYEE)


@pytest_asyncio.fixture
async def category_repo(db_session: AsyncSession) -> CriteriaCategoryRepository:
    return CriteriaCategoryRepository(db_session)


@pytest_asyncio.fixture
async def criteria_repo(db_session: AsyncSession) -> CriteriaRepository:
    return CriteriaRepository(db_session)


@pytest_asyncio.fixture
async def category_service(
    db_session: AsyncSession,
    category_repo: CriteriaCategoryRepository,
    criteria_repo: CriteriaRepository,
) -> CriteriaCategoryService:
    return CriteriaCategoryService(category_repo, criteria_repo, db_session)


@pytest_asyncio.fixture
async def criteria_service(
    category_repo: CriteriaCategoryRepository,
    criteria_repo: CriteriaRepository,
) -> CriteriaService:
    return CriteriaService(criteria_repo, category_repo)


@pytest_asyncio.fixture
async def make_category(db_session: AsyncSession):
    async def _make(name: str, weight, is_active: bool = True) -> CriteriaCategory:
        category = CriteriaCategory(name=name, weight=Decimal(str(weight)), is_active=is_active)
        db_session.add(category)
        await db_session.commit()
        await db_session.refresh(category)
        return category

    return _make


@pytest_asyncio.fixture
async def make_criteria(db_session: AsyncSession):
    async def _make(category_id: int, name: str, is_active: bool = True, description: Optional[str] = None) -> Criteria:
        criteria = Criteria(
            category_id=category_id,
            name=name,
            base_description=description,
            is_active=is_active,
        )
        db_session.add(criteria)
        await db_session.commit()
        await db_session.refresh(criteria)
        return criteria

    return _make
