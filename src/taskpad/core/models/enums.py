"""枚举定义 -- 任务状态与优先级

TaskStatus 与 TaskPriority 都是封闭枚举：取值之外的输入一律拒绝，不做强制转换。
状态之间没有流转限制（completed -> pending 也合法），
VALID_TRANSITIONS 只保证流转结果仍在枚举之内。
"""

from enum import StrEnum


class TaskStatus(StrEnum):
    """任务状态"""

    PENDING = "pending"
    IN_PROGRESS = "in-progress"
    COMPLETED = "completed"


class TaskPriority(StrEnum):
    """任务优先级"""

    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"


# 任意状态可流转到任意状态（包括自身）
VALID_TRANSITIONS: dict[TaskStatus, set[TaskStatus]] = {
    status: set(TaskStatus) for status in TaskStatus
}


def validate_transition(from_status: TaskStatus, to_status: TaskStatus) -> bool:
    """验证状态流转是否合法

    Args:
        from_status: 当前状态
        to_status: 目标状态

    Returns:
        True 如果流转合法，否则 False
    """
    allowed = VALID_TRANSITIONS.get(from_status, set())
    return to_status in allowed
