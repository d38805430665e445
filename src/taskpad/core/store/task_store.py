"""TaskStore SQLite 实现

每个方法是单条语句 + 立即提交，不跨表事务。
find() 只接受白名单字段的精确匹配，调用方不接触 SQL 方言。
"""

import asyncio
from collections.abc import Mapping
from datetime import date, datetime

import aiosqlite

from ..models.task import Task
from .failures import store_call

_COLUMNS = (
    "task_id, owner_id, title, description, status, priority, "
    "due_date, created_at, updated_at"
)

# find() 允许的查询字段
_QUERYABLE = frozenset({"owner_id", "status", "priority"})


class SqliteTaskStore:
    """TaskStore 的 SQLite 实现"""

    def __init__(self, conn: aiosqlite.Connection, lock: asyncio.Lock) -> None:
        self._conn = conn
        self._lock = lock

    @store_call
    async def find_by_id(self, task_id: str) -> Task | None:
        """根据 task_id 查询任务"""
        cursor = await self._conn.execute(
            f"SELECT {_COLUMNS} FROM tasks WHERE task_id = ?",
            (task_id,),
        )
        row = await cursor.fetchone()
        if row is None:
            return None
        return self._row_to_task(row)

    @store_call
    async def find(self, query: Mapping[str, str]) -> list[Task]:
        """按字段精确匹配查询，按 created_at 倒序"""
        unknown = set(query) - _QUERYABLE
        if unknown:
            raise ValueError(f"Unsupported query fields: {sorted(unknown)}")

        clauses = [f"{field} = ?" for field in query]
        where = f" WHERE {' AND '.join(clauses)}" if clauses else ""
        cursor = await self._conn.execute(
            f"SELECT {_COLUMNS} FROM tasks{where} ORDER BY created_at DESC, rowid DESC",
            tuple(str(value) for value in query.values()),
        )
        rows = await cursor.fetchall()
        return [self._row_to_task(row) for row in rows]

    @store_call
    async def insert(self, task: Task) -> None:
        """插入任务记录"""
        await self._conn.execute(
            f"INSERT INTO tasks ({_COLUMNS}) VALUES (?, ?, ?, ?, ?, ?, ?, ?, ?)",
            (
                task.task_id,
                task.owner_id,
                task.title,
                task.description,
                task.status.value,
                task.priority.value,
                task.due_date.isoformat() if task.due_date else None,
                task.created_at.isoformat(),
                task.updated_at.isoformat(),
            ),
        )
        await self._conn.commit()

    @store_call
    async def update(self, task: Task) -> None:
        """覆盖可变字段，task_id/owner_id/created_at 不变"""
        await self._conn.execute(
            """
            UPDATE tasks
            SET title = ?, description = ?, status = ?, priority = ?,
                due_date = ?, updated_at = ?
            WHERE task_id = ?
            """,
            (
                task.title,
                task.description,
                task.status.value,
                task.priority.value,
                task.due_date.isoformat() if task.due_date else None,
                task.updated_at.isoformat(),
                task.task_id,
            ),
        )
        await self._conn.commit()

    @store_call
    async def delete(self, task_id: str) -> bool:
        """删除任务记录（物理删除）"""
        cursor = await self._conn.execute(
            "DELETE FROM tasks WHERE task_id = ?",
            (task_id,),
        )
        await self._conn.commit()
        return cursor.rowcount > 0

    @staticmethod
    def _row_to_task(row: aiosqlite.Row) -> Task:
        """将数据库行转换为 Task 模型"""
        return Task(
            task_id=row[0],
            owner_id=row[1],
            title=row[2],
            description=row[3],
            status=row[4],
            priority=row[5],
            due_date=date.fromisoformat(row[6]) if row[6] else None,
            created_at=datetime.fromisoformat(row[7]),
            updated_at=datetime.fromisoformat(row[8]),
        )
