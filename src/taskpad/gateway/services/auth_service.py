"""AuthService -- 注册与登录

注册：校验输入 -> 哈希密码 -> 写入凭证库（email 唯一约束）-> 签发 token
登录：按 email 查找 -> 校验密码 -> 签发 token
未知邮箱与密码错误返回同一个 InvalidCredential。
argon2 哈希与校验是 CPU 密集操作，放到线程中执行，不阻塞事件循环。
"""

import asyncio
from collections.abc import Mapping
from datetime import UTC, datetime
from typing import Any

import structlog
from taskpad.auth import PasswordHashing, TokenService
from taskpad.core.config import placeholder_avatar
from taskpad.core.errors import InvalidCredential
from taskpad.core.models import Credentials, Registration, User, parse_input
from taskpad.core.store import StoreGroup
from ulid import ULID

log = structlog.get_logger()


class AuthService:
    """账户业务服务"""

    def __init__(
        self,
        store_group: StoreGroup,
        token_service: TokenService,
        hasher: PasswordHashing,
    ) -> None:
        self._stores = store_group
        self._tokens = token_service
        self._hasher = hasher

    async def register(
        self,
        data: Registration | Mapping[str, Any],
    ) -> tuple[User, str]:
        """注册新用户

        Returns:
            (user, token)

        Raises:
            ValidationError: 字段缺失或非法
            Conflict: email 已注册
        """
        registration = parse_input(Registration, data)
        user_id = str(ULID())
        digest = await asyncio.to_thread(self._hasher.hash, registration.password)
        user = User(
            user_id=user_id,
            email=registration.email,
            password_hash=digest,
            name=registration.name,
            avatar=placeholder_avatar(user_id),
            created_at=datetime.now(UTC),
        )
        await self._stores.user_store.insert(user)
        log.info("user_registered", user_id=user_id)
        return user, self._tokens.issue(user_id)

    async def login(self, data: Credentials | Mapping[str, Any]) -> tuple[User, str]:
        """邮箱 + 密码登录

        Raises:
            InvalidCredential: 邮箱不存在或密码错误
        """
        credentials = parse_input(Credentials, data)
        user = await self._stores.user_store.find_by_email(credentials.email)
        if user is None or not await asyncio.to_thread(
            self._hasher.verify, credentials.password, user.password_hash
        ):
            log.info("login_failed", known_email=user is not None)
            raise InvalidCredential("Invalid email or password")

        log.info("user_logged_in", user_id=user.user_id)
        return user, self._tokens.issue(user.user_id)
