"""
API 테스트 픽스처

인메모리 DB를 공유하는 앱 + httpx AsyncClient
"""

from typing import AsyncGenerator

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient

from adapters.db.sqlite_adapter import SQLiteAdapter
from core.config.loader import Settings
from web.app import create_app
from web.dependencies import get_app_settings, get_db, get_db_write


@pytest_asyncio.fixture
async def client(settings: Settings, db: SQLiteAdapter) -> AsyncGenerator[AsyncClient, None]:
    """앱 클라이언트 (읽기/쓰기 모두 같은 인메모리 DB)"""
    app = create_app(settings)

    async def override_db() -> AsyncGenerator[SQLiteAdapter, None]:
        yield db

    app.dependency_overrides[get_db] = override_db
    app.dependency_overrides[get_db_write] = override_db
    app.dependency_overrides[get_app_settings] = lambda: settings

    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        yield client


@pytest.fixture
def register_user(client: AsyncClient):
    """가입 함수 (가입 후 {user, tokens} 반환)"""

    async def _register(email: str = "jane@example.com") -> dict:
        response = await client.post(
            "/api/auth/register",
            json={
                "email": email,
                "password": "secret123",
                "firstName": "Jane",
                "lastName": "Doe",
            },
        )
        assert response.status_code == 201, response.text
        return response.json()["data"]

    return _register


@pytest_asyncio.fixture
async def auth_headers(register_user) -> dict[str, str]:
    """가입한 사용자의 Authorization 헤더"""
    data = await register_user()
    return {"Authorization": f"Bearer {data['tokens']['accessToken']}"}


@pytest_asyncio.fixture
async def account_id(client: AsyncClient, auth_headers: dict[str, str]) -> str:
    """기초 잔액 1000인 계좌"""
    response = await client.post(
        "/api/accounts",
        json={"name": "Main Checking", "type": "current", "balance": 1000},
        headers=auth_headers,
    )
    assert response.status_code == 201, response.text
    return response.json()["data"]["id"]
