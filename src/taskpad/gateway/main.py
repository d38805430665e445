"""FastAPI 应用主文件

app 创建 + lifespan 管理：DB 初始化/关闭 + 认证组件初始化 + 路由注册。
"""

from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager

import structlog
from fastapi import FastAPI
from taskpad.auth import Argon2PasswordHasher, TokenService, load_auth_config
from taskpad.core.config import get_db_path
from taskpad.core.store import create_store_group

from .errors import register_exception_handlers
from .middleware.logging_config import setup_logfire, setup_logging
from .middleware.logging_mw import LoggingMiddleware
from .middleware.trace_mw import TraceMiddleware
from .routes import auth, health, profile, tasks

log = structlog.get_logger()


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """应用生命周期管理：启动时初始化 Store 和认证组件，关闭时清理连接"""
    store_group = await create_store_group(get_db_path())
    app.state.store_group = store_group

    # 认证配置只在启动时加载一次，之后只读
    auth_config = load_auth_config()
    app.state.token_service = TokenService.from_config(auth_config)
    app.state.password_hasher = Argon2PasswordHasher.from_config(auth_config)
    log.info(
        "auth_initialized",
        token_algorithm=auth_config.token_algorithm,
        token_ttl_minutes=auth_config.token_ttl_minutes,
    )

    yield

    if hasattr(app.state, "store_group") and app.state.store_group:
        await app.state.store_group.conn.close()


def create_app() -> FastAPI:
    """创建 FastAPI 应用实例"""
    app = FastAPI(
        title="Taskpad",
        version="0.1.0",
        description="个人任务管理 API",
        lifespan=lifespan,
    )

    # 注册中间件（顺序：先 Trace 后 Logging）
    app.add_middleware(TraceMiddleware)
    app.add_middleware(LoggingMiddleware)

    setup_logging()
    setup_logfire(app)

    register_exception_handlers(app)

    app.include_router(auth.router, tags=["auth"])
    app.include_router(tasks.router, tags=["tasks"])
    app.include_router(profile.router, tags=["profile"])
    app.include_router(health.router, tags=["health"])

    return app


# 默认 app 实例（uvicorn 入口）
app = create_app()
