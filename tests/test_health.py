import pytest
from httpx import AsyncClient

from src.core.database import check_database, get_db


class BrokenSession:
    async def execute(self, *args, **kwargs):
        raise ConnectionError("database unreachable")


@pytest.mark.asyncio
async def test_health_endpoint(client: AsyncClient):
    response = await client.get("/health")
    assert response.status_code == 200
    assert response.json()["status"] == "healthy"
    assert response.headers["X-Content-Type-Options"] == "nosniff"
    assert "X-Request-ID" in response.headers


@pytest.mark.asyncio
async def test_health_endpoint_reports_database_failure(app, client: AsyncClient):
    async def broken_get_db():
        yield BrokenSession()

    app.dependency_overrides[get_db] = broken_get_db

    response = await client.get("/health")
    assert response.status_code == 503
    assert response.json()["status"] == "unhealthy"


@pytest.mark.asyncio
async def test_check_database_handles_errors():
    assert await check_database(BrokenSession()) is False


@pytest.mark.asyncio
async def test_invalid_token_rejected(client: AsyncClient):
    response = await client.get(
        "/api/v1/criteria-categories",
        headers={"Authorization": "Bearer not-a-token"},
    )
    assert response.status_code == 401
