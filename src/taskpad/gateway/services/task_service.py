"""TaskService -- 任务增删改查 + 所有权校验

所有操作都以 Auth Gate 绑定的 caller_id 为唯一身份来源：
1. 列表查询强制带 owner_id 条件，只返回调用者自己的任务
2. 任务不存在与不属于调用者统一返回 NotFound（不泄露 ID 是否存在）
3. 校验全部通过后才写入存储，被拒绝的更新不改变任何字段
"""

from collections.abc import Mapping
from datetime import UTC, datetime
from typing import Any

import structlog
from taskpad.core.errors import NotFound, ValidationError
from taskpad.core.models import (
    Task,
    TaskCreate,
    TaskFilter,
    TaskStats,
    TaskStatus,
    TaskUpdate,
    parse_input,
    validate_transition,
)
from taskpad.core.store import StoreGroup
from ulid import ULID

log = structlog.get_logger()


class TaskService:
    """任务业务服务"""

    def __init__(self, store_group: StoreGroup) -> None:
        self._stores = store_group

    async def list_tasks(
        self,
        caller_id: str,
        task_filter: TaskFilter | Mapping[str, Any] | None = None,
    ) -> list[Task]:
        """查询调用者的任务列表，支持 status/priority 精确筛选，按创建时间倒序"""
        parsed = parse_input(TaskFilter, task_filter or {})
        # owner_id 最后写入，筛选条件无法覆盖
        query = {**parsed.as_query(), "owner_id": caller_id}
        return await self._stores.task_store.find(query)

    async def get_task(self, caller_id: str, task_id: str) -> Task:
        """查询单个任务（所有权校验）"""
        return await self._load_owned(caller_id, task_id)

    async def create_task(
        self,
        caller_id: str,
        data: TaskCreate | Mapping[str, Any],
    ) -> Task:
        """创建任务

        owner_id 由 caller_id 写入；priority 缺省 medium，status 缺省 pending。
        """
        draft = parse_input(TaskCreate, data)
        now = datetime.now(UTC)
        task = Task(
            task_id=str(ULID()),
            owner_id=caller_id,
            title=draft.title,
            description=draft.description,
            status=draft.status,
            priority=draft.priority,
            due_date=draft.due_date,
            created_at=now,
            updated_at=now,
        )
        await self._stores.task_store.insert(task)
        log.info(
            "task_created",
            task_id=task.task_id,
            status=task.status.value,
            priority=task.priority.value,
        )
        return task

    async def update_task(
        self,
        caller_id: str,
        task_id: str,
        data: TaskUpdate | Mapping[str, Any],
    ) -> Task:
        """部分更新任务，只应用客户端提供的字段

        Raises:
            NotFound: 任务不存在或不属于调用者
            ValidationError: 字段值非法（空标题、枚举越界）
        """
        patch = parse_input(TaskUpdate, data)
        task = await self._load_owned(caller_id, task_id)

        changes = patch.changes()
        new_status = changes.get("status")
        if new_status is not None and not validate_transition(task.status, new_status):
            raise ValidationError.for_field(
                "status",
                f"Cannot move task from {task.status.value} to {TaskStatus(new_status).value}",
            )

        updated = task.model_copy(
            update={**changes, "updated_at": datetime.now(UTC)}
        )
        await self._stores.task_store.update(updated)
        log.info("task_updated", task_id=task_id, fields=sorted(changes))
        return updated

    async def delete_task(self, caller_id: str, task_id: str) -> None:
        """删除任务（物理删除）

        Raises:
            NotFound: 任务不存在或不属于调用者
        """
        await self._load_owned(caller_id, task_id)
        deleted = await self._stores.task_store.delete(task_id)
        if not deleted:
            # 并发删除：校验与删除之间任务已被移除
            raise NotFound("Task")
        log.info("task_deleted", task_id=task_id)

    async def task_stats(self, caller_id: str) -> TaskStats:
        """按状态统计调用者的任务数量"""
        tasks = await self._stores.task_store.find({"owner_id": caller_id})
        counts = {status: 0 for status in TaskStatus}
        for task in tasks:
            counts[task.status] += 1
        return TaskStats(
            total=len(tasks),
            pending=counts[TaskStatus.PENDING],
            in_progress=counts[TaskStatus.IN_PROGRESS],
            completed=counts[TaskStatus.COMPLETED],
        )

    async def _load_owned(self, caller_id: str, task_id: str) -> Task:
        """加载任务并校验所有权，两种失败不可区分"""
        task = await self._stores.task_store.find_by_id(task_id)
        if task is None or task.owner_id != caller_id:
            log.info(
                "task_not_visible",
                task_id=task_id,
                exists=task is not None,
            )
            raise NotFound("Task")
        return task
