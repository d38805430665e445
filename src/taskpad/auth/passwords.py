"""密码哈希 -- argon2id

对外只暴露 hash(plain) -> digest 与 verify(plain, digest) -> bool 两个能力。
argon2 摘要自带随机盐，每条记录独立加盐。
"""

from typing import Protocol

from argon2 import PasswordHasher, Type
from argon2.exceptions import InvalidHashError, VerificationError

from .config import AuthConfig


class PasswordHashing(Protocol):
    """密码哈希能力接口"""

    def hash(self, plain: str) -> str: ...

    def verify(self, plain: str, digest: str) -> bool: ...


class Argon2PasswordHasher:
    """argon2id 实现"""

    def __init__(
        self,
        time_cost: int = 3,
        memory_cost: int = 65536,
        parallelism: int = 4,
    ) -> None:
        self._hasher = PasswordHasher(
            time_cost=time_cost,
            memory_cost=memory_cost,
            parallelism=parallelism,
            type=Type.ID,
        )

    @classmethod
    def from_config(cls, config: AuthConfig) -> "Argon2PasswordHasher":
        return cls(
            time_cost=config.hash_time_cost,
            memory_cost=config.hash_memory_cost,
        )

    def hash(self, plain: str) -> str:
        return self._hasher.hash(plain)

    def verify(self, plain: str, digest: str) -> bool:
        """校验明文与摘要是否匹配，摘要损坏时视为不匹配"""
        try:
            return self._hasher.verify(digest, plain)
        except (VerificationError, InvalidHashError):
            return False
