"""User Domain Model

password_hash 只在存储层读写，序列化时始终排除。
email 统一去空白并转小写，创建后不可变。
"""

import re
from datetime import datetime
from typing import Any

from pydantic import Field, field_validator

from ..config import PASSWORD_MIN_LENGTH
from .base import CamelModel

_EMAIL_RE = re.compile(r"^[^@\s]+@[^@\s]+\.[^@\s]+$")


def normalize_email(value: str) -> str:
    """邮箱规范化：去空白 + 小写"""
    return value.strip().lower()


def _non_blank(value: str, label: str) -> str:
    text = value.strip()
    if not text:
        raise ValueError(f"{label} is required")
    return text


class User(CamelModel):
    """User 数据模型"""

    user_id: str = Field(description="唯一标识，ULID 格式")
    email: str = Field(description="登录邮箱（小写），唯一")
    password_hash: str = Field(exclude=True, repr=False, description="argon2 哈希")
    name: str = Field(description="显示名称")
    bio: str = Field(default="", description="个人简介")
    avatar: str = Field(default="", description="头像 URL")
    created_at: datetime = Field(description="注册时间")


class Registration(CamelModel):
    """注册输入"""

    email: str
    password: str
    name: str

    @field_validator("email")
    @classmethod
    def _valid_email(cls, value: str) -> str:
        email = normalize_email(value)
        if not _EMAIL_RE.match(email):
            raise ValueError("Invalid email address")
        return email

    @field_validator("password")
    @classmethod
    def _password_length(cls, value: str) -> str:
        if len(value) < PASSWORD_MIN_LENGTH:
            raise ValueError(
                f"Password must be at least {PASSWORD_MIN_LENGTH} characters"
            )
        return value

    @field_validator("name")
    @classmethod
    def _name_not_blank(cls, value: str) -> str:
        return _non_blank(value, "Name")


class Credentials(CamelModel):
    """登录输入"""

    email: str
    password: str

    @field_validator("email")
    @classmethod
    def _normalize(cls, value: str) -> str:
        return normalize_email(value)


class ProfileUpdate(CamelModel):
    """资料更新输入 -- 只包含可展示字段，email/userId 会被忽略"""

    name: str | None = None
    bio: str | None = None
    avatar: str | None = None

    @field_validator("name", "bio", "avatar", mode="before")
    @classmethod
    def _reject_null(cls, value: Any) -> Any:
        if value is None:
            raise ValueError("Field may not be null")
        return value

    @field_validator("name")
    @classmethod
    def _name_not_blank(cls, value: str) -> str:
        return _non_blank(value, "Name")

    def changes(self) -> dict[str, Any]:
        """返回客户端实际提供的字段"""
        return self.model_dump(include=self.model_fields_set)


class PasswordChange(CamelModel):
    """修改密码输入（长度校验在 ProfileService 中完成）"""

    old_password: str
    new_password: str
