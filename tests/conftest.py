"""全局 pytest 配置 -- 临时 SQLite 数据库 + 认证组件 + HTTP 客户端 fixture"""

import os
from collections.abc import AsyncGenerator, Awaitable, Callable
from datetime import UTC, datetime, timedelta
from pathlib import Path

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient
from taskpad.auth import Argon2PasswordHasher, TokenService
from taskpad.core.models import User
from taskpad.core.store import StoreGroup, create_store_group
from ulid import ULID

TEST_SECRET = "test-secret-do-not-use"


@pytest.fixture
def hasher() -> Argon2PasswordHasher:
    """低开销 argon2 参数，仅用于测试"""
    return Argon2PasswordHasher(time_cost=1, memory_cost=1024, parallelism=1)


@pytest.fixture
def token_service() -> TokenService:
    return TokenService(TEST_SECRET, timedelta(minutes=30))


@pytest_asyncio.fixture
async def tmp_db_path(tmp_path: Path) -> Path:
    """提供临时 SQLite 数据库路径"""
    return tmp_path / "sqlite" / "test.db"


@pytest_asyncio.fixture
async def store_group(tmp_db_path: Path) -> AsyncGenerator[StoreGroup, None]:
    """提供已初始化的临时 StoreGroup"""
    group = await create_store_group(str(tmp_db_path))
    yield group
    await group.conn.close()


@pytest_asyncio.fixture
async def make_user(
    store_group: StoreGroup, hasher: Argon2PasswordHasher
) -> Callable[..., Awaitable[User]]:
    """直接向凭证库写入用户（绕过注册流程）"""

    async def _make(email: str, password: str = "secret1", name: str = "Tester") -> User:
        user = User(
            user_id=str(ULID()),
            email=email,
            password_hash=hasher.hash(password),
            name=name,
            created_at=datetime.now(UTC),
        )
        await store_group.user_store.insert(user)
        return user

    return _make


@pytest_asyncio.fixture
async def app(store_group: StoreGroup, token_service, hasher, tmp_db_path: Path):
    """创建测试用 FastAPI app，手动初始化 lifespan 状态"""
    os.environ["TASKPAD_DB_PATH"] = str(tmp_db_path)
    os.environ["LOGFIRE_SEND_TO_LOGFIRE"] = "false"

    from taskpad.gateway.main import create_app

    application = create_app()
    application.state.store_group = store_group
    application.state.token_service = token_service
    application.state.password_hasher = hasher

    yield application

    for key in ["TASKPAD_DB_PATH", "LOGFIRE_SEND_TO_LOGFIRE"]:
        os.environ.pop(key, None)


@pytest_asyncio.fixture
async def client(app) -> AsyncGenerator[AsyncClient, None]:
    """提供 httpx AsyncClient 用于测试"""
    async with AsyncClient(
        transport=ASGITransport(app=app),
        base_url="http://test",
    ) as ac:
        yield ac


@pytest_asyncio.fixture
async def register(client: AsyncClient) -> Callable[..., Awaitable[tuple[str, dict]]]:
    """通过 API 注册用户，返回 (token, user)"""

    async def _register(
        email: str, password: str = "secret1", name: str = "Tester"
    ) -> tuple[str, dict]:
        resp = await client.post(
            "/auth/register",
            json={"email": email, "password": password, "name": name},
        )
        assert resp.status_code == 201, resp.text
        data = resp.json()
        return data["token"], data["user"]

    return _register
