"""Taskpad Auth -- token 签发校验 + 密码哈希

认证原语，不依赖存储与 HTTP 层。
"""

from .config import AuthConfig, load_auth_config
from .exceptions import AuthError, Expired, InvalidToken
from .passwords import Argon2PasswordHasher, PasswordHashing
from .tokens import TokenService

__all__ = [
    "AuthConfig",
    "load_auth_config",
    "TokenService",
    "Argon2PasswordHasher",
    "PasswordHashing",
    "AuthError",
    "InvalidToken",
    "Expired",
]
