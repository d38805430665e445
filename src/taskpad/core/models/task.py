"""Task Domain Model

Task 记录 + 创建/更新/筛选的输入模型。
owner_id 只能由服务端根据认证身份写入，输入模型中没有该字段，
客户端提交的 ownerId/taskId 会被忽略。
"""

from datetime import date, datetime
from typing import Any

from pydantic import Field, ValidationInfo, field_validator

from .base import CamelModel
from .enums import TaskPriority, TaskStatus


def _strip_title(value: str) -> str:
    title = value.strip()
    if not title:
        raise ValueError("Title is required")
    return title


def _blank_as_none(value: Any) -> Any:
    """空白字符串按未设置处理（表单未选择日期、筛选项留空）"""
    if isinstance(value, str) and not value.strip():
        return None
    return value


class Task(CamelModel):
    """Task 数据模型"""

    task_id: str = Field(description="唯一标识，ULID 格式")
    owner_id: str = Field(description="所属用户 ID，创建后不可变")
    title: str = Field(description="任务标题，非空")
    description: str = Field(default="", description="任务描述")
    status: TaskStatus = Field(default=TaskStatus.PENDING, description="当前状态")
    priority: TaskPriority = Field(default=TaskPriority.MEDIUM, description="优先级")
    due_date: date | None = Field(default=None, description="截止日期")
    created_at: datetime = Field(description="创建时间")
    updated_at: datetime = Field(description="最后修改时间")


class TaskCreate(CamelModel):
    """创建任务输入

    description/status/priority 显式传 null 时按缺省处理；dueDate 传空字符串视为未设置。
    """

    title: str
    description: str = ""
    status: TaskStatus = TaskStatus.PENDING
    priority: TaskPriority = TaskPriority.MEDIUM
    due_date: date | None = None

    @field_validator("title")
    @classmethod
    def _title_not_blank(cls, value: str) -> str:
        return _strip_title(value)

    @field_validator("description", "status", "priority", mode="before")
    @classmethod
    def _null_as_default(cls, value: Any, info: ValidationInfo) -> Any:
        if value is None:
            return cls.model_fields[info.field_name].default
        return value

    @field_validator("due_date", mode="before")
    @classmethod
    def _blank_due_date(cls, value: Any) -> Any:
        return _blank_as_none(value)


class TaskUpdate(CamelModel):
    """部分更新输入 -- 只应用 model_fields_set 中的字段

    title/status/priority 不允许显式置空；dueDate 传 null 或空字符串表示清除截止日期。
    """

    title: str | None = None
    description: str | None = None
    status: TaskStatus | None = None
    priority: TaskPriority | None = None
    due_date: date | None = None

    @field_validator("title", "status", "priority", mode="before")
    @classmethod
    def _reject_null(cls, value: Any) -> Any:
        if value is None:
            raise ValueError("Field may not be null")
        return value

    @field_validator("title")
    @classmethod
    def _title_not_blank(cls, value: str) -> str:
        return _strip_title(value)

    @field_validator("description", mode="before")
    @classmethod
    def _null_description(cls, value: Any) -> Any:
        return "" if value is None else value

    @field_validator("due_date", mode="before")
    @classmethod
    def _blank_due_date(cls, value: Any) -> Any:
        return _blank_as_none(value)

    def changes(self) -> dict[str, Any]:
        """返回客户端实际提供的字段"""
        return self.model_dump(include=self.model_fields_set)


class TaskFilter(CamelModel):
    """列表筛选条件 -- 精确匹配，空字符串视为不筛选"""

    status: TaskStatus | None = None
    priority: TaskPriority | None = None

    @field_validator("status", "priority", mode="before")
    @classmethod
    def _empty_as_none(cls, value: Any) -> Any:
        return _blank_as_none(value)

    def as_query(self) -> dict[str, str]:
        """转换为 Store 查询条件（仅包含已设置的字段）"""
        query = {}
        if self.status is not None:
            query["status"] = self.status.value
        if self.priority is not None:
            query["priority"] = self.priority.value
        return query


class TaskStats(CamelModel):
    """任务统计（按状态计数）"""

    total: int = 0
    pending: int = 0
    in_progress: int = 0
    completed: int = 0
