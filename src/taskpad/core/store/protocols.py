"""Store Protocol 接口定义

定义 UserStore、TaskStore 的抽象接口，
使用 Python Protocol 实现结构化子类型（duck typing）。
Service 层只依赖这里的能力集合：按 ID 查询、按条件查询、插入、更新、删除。
"""

from collections.abc import Mapping
from typing import Protocol

from ..models.task import Task
from ..models.user import User


class UserStore(Protocol):
    """User 存储接口（凭证库）"""

    async def find_by_id(self, user_id: str) -> User | None:
        """根据 user_id 查询用户"""
        ...

    async def find_by_email(self, email: str) -> User | None:
        """根据（已规范化的）email 查询用户"""
        ...

    async def insert(self, user: User) -> None:
        """插入用户记录

        Raises:
            Conflict: email 已存在
        """
        ...

    async def update(self, user: User) -> None:
        """整体覆盖用户记录（user_id、email 不变）"""
        ...


class TaskStore(Protocol):
    """Task 存储接口"""

    async def find_by_id(self, task_id: str) -> Task | None:
        """根据 task_id 查询任务"""
        ...

    async def find(self, query: Mapping[str, str]) -> list[Task]:
        """按字段精确匹配查询，按 created_at 倒序"""
        ...

    async def insert(self, task: Task) -> None:
        """插入任务记录"""
        ...

    async def update(self, task: Task) -> None:
        """整体覆盖任务记录（task_id、owner_id 不变）"""
        ...

    async def delete(self, task_id: str) -> bool:
        """删除任务记录，返回是否存在并已删除"""
        ...
