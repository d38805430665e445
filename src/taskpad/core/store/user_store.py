"""UserStore SQLite 实现

email 唯一性由 users.email UNIQUE 约束保证，
并发注册同一邮箱时由数据库拒绝第二条记录。
"""

import asyncio
from datetime import datetime

import aiosqlite

from ..errors import Conflict
from ..models.user import User
from .failures import store_call

_COLUMNS = "user_id, email, password_hash, name, bio, avatar, created_at"


class SqliteUserStore:
    """UserStore 的 SQLite 实现"""

    def __init__(self, conn: aiosqlite.Connection, lock: asyncio.Lock) -> None:
        self._conn = conn
        self._lock = lock

    @store_call
    async def find_by_id(self, user_id: str) -> User | None:
        """根据 user_id 查询用户"""
        cursor = await self._conn.execute(
            f"SELECT {_COLUMNS} FROM users WHERE user_id = ?",
            (user_id,),
        )
        row = await cursor.fetchone()
        if row is None:
            return None
        return self._row_to_user(row)

    @store_call
    async def find_by_email(self, email: str) -> User | None:
        """根据 email 查询用户"""
        cursor = await self._conn.execute(
            f"SELECT {_COLUMNS} FROM users WHERE email = ?",
            (email,),
        )
        row = await cursor.fetchone()
        if row is None:
            return None
        return self._row_to_user(row)

    @store_call
    async def insert(self, user: User) -> None:
        """插入用户记录，email 冲突时抛出 Conflict"""
        try:
            await self._conn.execute(
                f"INSERT INTO users ({_COLUMNS}) VALUES (?, ?, ?, ?, ?, ?, ?)",
                (
                    user.user_id,
                    user.email,
                    user.password_hash,
                    user.name,
                    user.bio,
                    user.avatar,
                    user.created_at.isoformat(),
                ),
            )
        except aiosqlite.IntegrityError as e:
            await self._conn.rollback()
            if self._is_email_conflict(e):
                raise Conflict("Email already registered") from e
            raise
        await self._conn.commit()

    @store_call
    async def update(self, user: User) -> None:
        """更新可变字段（password_hash、name、bio、avatar）"""
        await self._conn.execute(
            """
            UPDATE users
            SET password_hash = ?, name = ?, bio = ?, avatar = ?
            WHERE user_id = ?
            """,
            (user.password_hash, user.name, user.bio, user.avatar, user.user_id),
        )
        await self._conn.commit()

    @staticmethod
    def _is_email_conflict(exc: aiosqlite.IntegrityError) -> bool:
        return "users.email" in str(exc)

    @staticmethod
    def _row_to_user(row: aiosqlite.Row) -> User:
        """将数据库行转换为 User 模型"""
        return User(
            user_id=row[0],
            email=row[1],
            password_hash=row[2],
            name=row[3],
            bio=row[4],
            avatar=row[5],
            created_at=datetime.fromisoformat(row[6]),
        )
