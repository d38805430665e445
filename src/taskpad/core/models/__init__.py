"""Taskpad Core Domain Models -- 公共类型导出

所有公共模型类型从此入口导入。
"""

from .base import CamelModel, field_errors, parse_input
from .enums import (
    VALID_TRANSITIONS,
    TaskPriority,
    TaskStatus,
    validate_transition,
)
from .task import Task, TaskCreate, TaskFilter, TaskStats, TaskUpdate
from .user import (
    Credentials,
    PasswordChange,
    ProfileUpdate,
    Registration,
    User,
    normalize_email,
)

__all__ = [
    # 枚举
    "TaskStatus",
    "TaskPriority",
    # 状态机
    "VALID_TRANSITIONS",
    "validate_transition",
    # Task
    "Task",
    "TaskCreate",
    "TaskUpdate",
    "TaskFilter",
    "TaskStats",
    # User
    "User",
    "Registration",
    "Credentials",
    "ProfileUpdate",
    "PasswordChange",
    "normalize_email",
    # 基础设施
    "CamelModel",
    "parse_input",
    "field_errors",
]
