"""Taskpad Core Store -- SQLite 持久化实现

提供工厂函数创建共享数据库连接的 Store 实例组。
"""

import asyncio
from pathlib import Path

import aiosqlite

from .failures import store_call
from .protocols import TaskStore, UserStore
from .sqlite_init import init_db
from .task_store import SqliteTaskStore
from .user_store import SqliteUserStore


class StoreGroup:
    """Store 实例组 -- 共享同一个数据库连接

    lock 串行化连接上的每次 Store 调用（语句 + 提交/回滚）。
    """

    def __init__(self, conn: aiosqlite.Connection) -> None:
        self.conn = conn
        self.lock = asyncio.Lock()
        self.user_store = SqliteUserStore(conn, self.lock)
        self.task_store = SqliteTaskStore(conn, self.lock)


async def create_store_group(db_path: str) -> StoreGroup:
    """创建 Store 实例组

    Args:
        db_path: SQLite 数据库文件路径

    Returns:
        StoreGroup 实例
    """
    # 确保数据库目录存在
    db_dir = Path(db_path).parent
    db_dir.mkdir(parents=True, exist_ok=True)

    conn = await aiosqlite.connect(db_path)
    conn.row_factory = aiosqlite.Row
    await init_db(conn)

    return StoreGroup(conn=conn)


__all__ = [
    "StoreGroup",
    "create_store_group",
    "UserStore",
    "TaskStore",
    "SqliteUserStore",
    "SqliteTaskStore",
    "init_db",
    "store_call",
]
