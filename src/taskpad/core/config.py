"""配置常量模块 -- 可通过环境变量覆盖

包含数据库路径、密码长度下限、头像占位图模板等可配置常量。
"""

import os
from pathlib import Path


def _get_base_dir() -> Path:
    """获取项目 data 基础目录"""
    return Path(os.environ.get("TASKPAD_DATA_DIR", "data"))


def get_db_path() -> str:
    """获取 SQLite 数据库路径"""
    return os.environ.get(
        "TASKPAD_DB_PATH",
        str(_get_base_dir() / "sqlite" / "taskpad.db"),
    )


# 密码最小长度（注册与修改密码共用）
PASSWORD_MIN_LENGTH: int = 6

# 默认头像占位图，seed 为用户 ID
AVATAR_PLACEHOLDER_URL: str = os.environ.get(
    "TASKPAD_AVATAR_PLACEHOLDER_URL",
    "https://api.dicebear.com/7.x/avataaars/svg?seed={seed}",
)


def placeholder_avatar(seed: str) -> str:
    """生成默认头像 URL"""
    return AVATAR_PLACEHOLDER_URL.format(seed=seed)
