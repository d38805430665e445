"""UserStore SQLite 实现测试

测试内容：
1. insert + find_by_id / find_by_email
2. email 唯一约束 -> Conflict，且不产生重复记录
3. update 可变字段
4. 驱动异常转换为 Internal
"""

from datetime import UTC, datetime

import pytest
from taskpad.core.errors import Conflict, Internal
from taskpad.core.models import User
from taskpad.core.store.sqlite_init import verify_wal_mode
from ulid import ULID


def _user(email: str) -> User:
    return User(
        user_id=str(ULID()),
        email=email,
        password_hash="$argon2id$placeholder",
        name="Someone",
        created_at=datetime.now(UTC),
    )


class TestSqliteUserStore:
    async def test_insert_and_find(self, store_group):
        user = _user("a@x.com")
        await store_group.user_store.insert(user)

        by_id = await store_group.user_store.find_by_id(user.user_id)
        by_email = await store_group.user_store.find_by_email("a@x.com")
        assert by_id == user
        assert by_email == user
        assert by_id.password_hash == "$argon2id$placeholder"

    async def test_find_missing(self, store_group):
        assert await store_group.user_store.find_by_id("nope") is None
        assert await store_group.user_store.find_by_email("nobody@x.com") is None

    async def test_duplicate_email_conflict(self, store_group):
        await store_group.user_store.insert(_user("dup@x.com"))
        with pytest.raises(Conflict):
            await store_group.user_store.insert(_user("dup@x.com"))

        cursor = await store_group.conn.execute(
            "SELECT COUNT(*) FROM users WHERE email = ?", ("dup@x.com",)
        )
        row = await cursor.fetchone()
        assert row[0] == 1

    async def test_store_usable_after_conflict(self, store_group):
        """冲突回滚后连接仍可继续写入"""
        await store_group.user_store.insert(_user("c@x.com"))
        with pytest.raises(Conflict):
            await store_group.user_store.insert(_user("c@x.com"))

        other = _user("d@x.com")
        await store_group.user_store.insert(other)
        assert await store_group.user_store.find_by_id(other.user_id) == other

    async def test_update(self, store_group):
        user = _user("u@x.com")
        await store_group.user_store.insert(user)

        await store_group.user_store.update(
            user.model_copy(update={"name": "Renamed", "bio": "hello"})
        )
        loaded = await store_group.user_store.find_by_id(user.user_id)
        assert loaded.name == "Renamed"
        assert loaded.bio == "hello"
        assert loaded.email == "u@x.com"

    async def test_driver_error_becomes_internal(self, store_group):
        await store_group.conn.execute("DROP TABLE tasks")
        await store_group.conn.execute("DROP TABLE users")
        await store_group.conn.commit()

        with pytest.raises(Internal):
            await store_group.user_store.find_by_email("a@x.com")

    async def test_wal_mode_enabled(self, store_group):
        assert await verify_wal_mode(store_group.conn) is True
