"""ProfileService -- 个人资料更新 + 密码轮换"""

import asyncio
from collections.abc import Mapping
from typing import Any

import structlog
from taskpad.auth import PasswordHashing
from taskpad.core.config import PASSWORD_MIN_LENGTH
from taskpad.core.errors import InvalidCredential, NotFound, ValidationError
from taskpad.core.models import PasswordChange, ProfileUpdate, User, parse_input
from taskpad.core.store import StoreGroup

log = structlog.get_logger()


class ProfileService:
    """个人资料业务服务"""

    def __init__(self, store_group: StoreGroup, hasher: PasswordHashing) -> None:
        self._stores = store_group
        self._hasher = hasher

    async def get_profile(self, caller_id: str) -> User:
        """查询调用者自己的资料"""
        user = await self._stores.user_store.find_by_id(caller_id)
        if user is None:
            raise NotFound("User")
        return user

    async def update_profile(
        self,
        caller_id: str,
        data: ProfileUpdate | Mapping[str, Any],
    ) -> User:
        """更新 name/bio/avatar 中客户端提供的字段，email 与 ID 不可修改"""
        patch = parse_input(ProfileUpdate, data)
        user = await self.get_profile(caller_id)

        changes = patch.changes()
        updated = user.model_copy(update=changes)
        await self._stores.user_store.update(updated)
        log.info("profile_updated", fields=sorted(changes))
        return updated

    async def update_password(
        self,
        caller_id: str,
        data: PasswordChange | Mapping[str, Any],
    ) -> None:
        """修改密码：校验旧密码 -> 校验新密码长度 -> 写入新哈希

        Raises:
            InvalidCredential: 旧密码不匹配
            ValidationError: 新密码过短
        """
        change = parse_input(PasswordChange, data)
        user = await self.get_profile(caller_id)

        if not await asyncio.to_thread(
            self._hasher.verify, change.old_password, user.password_hash
        ):
            log.info("password_change_rejected", reason="old_password_mismatch")
            raise InvalidCredential("Current password is incorrect")

        if len(change.new_password) < PASSWORD_MIN_LENGTH:
            raise ValidationError.for_field(
                "newPassword",
                f"Password must be at least {PASSWORD_MIN_LENGTH} characters",
            )

        digest = await asyncio.to_thread(self._hasher.hash, change.new_password)
        updated = user.model_copy(update={"password_hash": digest})
        await self._stores.user_store.update(updated)
        log.info("password_rotated")
