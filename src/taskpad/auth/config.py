"""AuthConfig -- 认证配置加载

从环境变量加载 token 签名密钥、有效期与密码哈希参数。
进程启动时加载一次，之后只读，按引用传入 TokenService。
"""

import os
import secrets
from typing import Literal

import structlog
from pydantic import BaseModel, Field, SecretStr

log = structlog.get_logger()


class AuthConfig(BaseModel):
    """认证配置 -- 从环境变量加载

    环境变量:
        TASKPAD_TOKEN_SECRET: token 签名密钥（未设置时生成进程级随机密钥）
        TASKPAD_TOKEN_TTL_MINUTES: token 有效期（分钟，默认 7 天）
        TASKPAD_TOKEN_ALGORITHM: 签名算法（HS256/HS384/HS512）
        TASKPAD_HASH_TIME_COST: argon2 time_cost
        TASKPAD_HASH_MEMORY_COST: argon2 memory_cost（KiB）
    """

    token_secret: SecretStr = Field(description="token 签名密钥")
    token_ttl_minutes: int = Field(
        default=60 * 24 * 7,
        ge=1,
        description="token 有效期（分钟）",
    )
    token_algorithm: Literal["HS256", "HS384", "HS512"] = Field(
        default="HS256",
        description="HMAC 签名算法",
    )
    hash_time_cost: int = Field(default=3, ge=1, description="argon2 迭代次数")
    hash_memory_cost: int = Field(
        default=65536,
        ge=32,
        description="argon2 内存开销（KiB）",
    )


def _int_from_env(name: str, fallback: int) -> int | None:
    """读取整数环境变量，非法值记录警告并返回 None（使用默认值）"""
    val = os.environ.get(name)
    if not val:
        return None
    try:
        return int(val)
    except ValueError:
        log.warning(
            "invalid_auth_config",
            env_var=name,
            value=val,
            fallback=fallback,
        )
        return None


def load_auth_config() -> AuthConfig:
    """从环境变量加载认证配置

    Returns:
        AuthConfig 实例
    """
    kwargs: dict = {}

    if val := os.environ.get("TASKPAD_TOKEN_SECRET"):
        kwargs["token_secret"] = SecretStr(val)
    else:
        # 进程重启后旧 token 全部失效
        log.warning(
            "token_secret_not_configured",
            message="TASKPAD_TOKEN_SECRET 未设置，使用进程级随机密钥",
        )
        kwargs["token_secret"] = SecretStr(secrets.token_urlsafe(32))

    if (ttl := _int_from_env("TASKPAD_TOKEN_TTL_MINUTES", 60 * 24 * 7)) is not None:
        kwargs["token_ttl_minutes"] = ttl

    if val := os.environ.get("TASKPAD_TOKEN_ALGORITHM"):
        kwargs["token_algorithm"] = val

    if (cost := _int_from_env("TASKPAD_HASH_TIME_COST", 3)) is not None:
        kwargs["hash_time_cost"] = cost

    if (memory := _int_from_env("TASKPAD_HASH_MEMORY_COST", 65536)) is not None:
        kwargs["hash_memory_cost"] = memory

    return AuthConfig(**kwargs)
