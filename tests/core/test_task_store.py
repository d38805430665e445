"""TaskStore SQLite 实现测试

测试内容：
1. insert + find_by_id 往返
2. find() 精确匹配 + created_at 倒序
3. update 只改可变字段
4. delete 物理删除
5. 非白名单查询字段被拒绝
6. 并发调用下冲突回滚不丢失其他写入
"""

import asyncio
from datetime import UTC, date, datetime, timedelta

import aiosqlite
import pytest
from taskpad.core.errors import Conflict
from taskpad.core.models import Task, TaskPriority, TaskStatus
from ulid import ULID


def _task(owner_id: str, title: str, created_at: datetime | None = None, **kwargs) -> Task:
    ts = created_at or datetime.now(UTC)
    return Task(
        task_id=str(ULID()),
        owner_id=owner_id,
        title=title,
        created_at=ts,
        updated_at=ts,
        **kwargs,
    )


class TestSqliteTaskStore:
    async def test_insert_and_find_by_id(self, store_group, make_user):
        owner = await make_user("owner@x.com")
        task = _task(
            owner.user_id,
            "Write report",
            description="Q3",
            priority=TaskPriority.HIGH,
            due_date=date(2026, 12, 1),
        )
        await store_group.task_store.insert(task)

        loaded = await store_group.task_store.find_by_id(task.task_id)
        assert loaded == task

    async def test_find_by_id_missing(self, store_group):
        assert await store_group.task_store.find_by_id("01NONEXISTENT0000000000000") is None

    async def test_find_orders_newest_first(self, store_group, make_user):
        owner = await make_user("order@x.com")
        base = datetime(2026, 1, 1, tzinfo=UTC)
        for i, title in enumerate(["first", "second", "third"]):
            await store_group.task_store.insert(
                _task(owner.user_id, title, created_at=base + timedelta(minutes=i))
            )

        tasks = await store_group.task_store.find({"owner_id": owner.user_id})
        assert [t.title for t in tasks] == ["third", "second", "first"]

    async def test_find_exact_match(self, store_group, make_user):
        a = await make_user("a@x.com")
        b = await make_user("b@x.com")
        await store_group.task_store.insert(_task(a.user_id, "a-pending"))
        await store_group.task_store.insert(
            _task(a.user_id, "a-done", status=TaskStatus.COMPLETED)
        )
        await store_group.task_store.insert(_task(b.user_id, "b-pending"))

        found = await store_group.task_store.find(
            {"owner_id": a.user_id, "status": "pending"}
        )
        assert [t.title for t in found] == ["a-pending"]

    async def test_update(self, store_group, make_user):
        owner = await make_user("upd@x.com")
        task = _task(owner.user_id, "old")
        await store_group.task_store.insert(task)

        later = task.updated_at + timedelta(seconds=5)
        changed = task.model_copy(
            update={"title": "new", "status": TaskStatus.IN_PROGRESS, "updated_at": later}
        )
        await store_group.task_store.update(changed)

        loaded = await store_group.task_store.find_by_id(task.task_id)
        assert loaded.title == "new"
        assert loaded.status == TaskStatus.IN_PROGRESS
        assert loaded.updated_at == later
        assert loaded.created_at == task.created_at
        assert loaded.owner_id == owner.user_id

    async def test_delete(self, store_group, make_user):
        owner = await make_user("del@x.com")
        task = _task(owner.user_id, "bye")
        await store_group.task_store.insert(task)

        assert await store_group.task_store.delete(task.task_id) is True
        assert await store_group.task_store.find_by_id(task.task_id) is None
        assert await store_group.task_store.delete(task.task_id) is False

    async def test_unknown_query_field_rejected(self, store_group):
        with pytest.raises(ValueError):
            await store_group.task_store.find({"title": "x"})


class TestConcurrentStoreCalls:
    """共享连接上的并发调用：一次调用的回滚不影响其他调用的写入"""

    async def test_conflict_rollback_keeps_concurrent_task(
        self, store_group, make_user, tmp_db_path
    ):
        owner = await make_user("taken@x.com")
        duplicate = owner.model_copy(update={"user_id": str(ULID())})
        task = _task(owner.user_id, "must survive")

        results = await asyncio.gather(
            store_group.user_store.insert(duplicate),
            store_group.task_store.insert(task),
            return_exceptions=True,
        )
        assert isinstance(results[0], Conflict)
        assert results[1] is None

        # 另开连接确认写入已落盘
        async with aiosqlite.connect(tmp_db_path) as other:
            cursor = await other.execute(
                "SELECT title FROM tasks WHERE task_id = ?", (task.task_id,)
            )
            row = await cursor.fetchone()
        assert row == ("must survive",)

    async def test_interleaved_writes_and_conflicts(self, store_group, make_user):
        owner = await make_user("busy@x.com")
        tasks = [_task(owner.user_id, f"t{i}") for i in range(10)]
        duplicates = [owner.model_copy(update={"user_id": str(ULID())}) for _ in range(5)]

        calls = [store_group.task_store.insert(t) for t in tasks]
        calls += [store_group.user_store.insert(u) for u in duplicates]
        results = await asyncio.gather(*calls, return_exceptions=True)

        assert results[:10] == [None] * 10
        assert all(isinstance(r, Conflict) for r in results[10:])
        stored = await store_group.task_store.find({"owner_id": owner.user_id})
        assert {t.title for t in stored} == {t.title for t in tasks}
