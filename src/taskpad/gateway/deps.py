"""依赖注入模块 -- 通过 FastAPI Depends 注入 Store 与认证组件

实例通过 app.state 管理，在 lifespan 中初始化/清理。
"""

from fastapi import Depends, Request
from taskpad.auth import PasswordHashing, TokenService
from taskpad.core.store import StoreGroup

from .services.auth_service import AuthService
from .services.profile_service import ProfileService
from .services.task_service import TaskService


def get_store_group(request: Request) -> StoreGroup:
    """从 app.state 获取 StoreGroup 实例"""
    return request.app.state.store_group


def get_token_service(request: Request) -> TokenService:
    """从 app.state 获取 TokenService 实例"""
    return request.app.state.token_service


def get_password_hasher(request: Request) -> PasswordHashing:
    """从 app.state 获取密码哈希器"""
    return request.app.state.password_hasher


def get_task_service(store_group=Depends(get_store_group)) -> TaskService:
    return TaskService(store_group)


def get_profile_service(
    store_group=Depends(get_store_group),
    hasher=Depends(get_password_hasher),
) -> ProfileService:
    return ProfileService(store_group, hasher)


def get_auth_service(
    store_group=Depends(get_store_group),
    token_service=Depends(get_token_service),
    hasher=Depends(get_password_hasher),
) -> AuthService:
    return AuthService(store_group, token_service, hasher)
