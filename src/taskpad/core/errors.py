"""业务异常体系

Service 层只抛出这里定义的异常，HTTP 边界统一映射为响应码。
每个异常携带稳定的 code 与 http_status，message 面向客户端，
不得包含堆栈、密钥或密码哈希。
"""

from typing import Any


class ServiceError(Exception):
    """业务异常基类"""

    code: str = "INTERNAL"
    http_status: int = 500

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message

    @property
    def headers(self) -> dict[str, str] | None:
        """附加响应头（默认无）"""
        return None

    def to_dict(self) -> dict[str, Any]:
        """序列化为响应体中的 error 对象"""
        return {"code": self.code, "message": self.message}


class ValidationError(ServiceError):
    """输入校验失败（缺失字段、空标题、枚举越界等），客户端可修正"""

    code = "VALIDATION_ERROR"
    http_status = 400

    def __init__(
        self,
        message: str = "Invalid input",
        fields: list[dict[str, str]] | None = None,
    ) -> None:
        """
        Args:
            message: 错误描述
            fields: 字段级错误明细，形如 [{"field": "title", "message": "..."}]
        """
        super().__init__(message)
        self.fields = fields or []

    @classmethod
    def for_field(cls, field: str, message: str) -> "ValidationError":
        """构造单字段校验错误"""
        return cls(message, fields=[{"field": field, "message": message}])

    def to_dict(self) -> dict[str, Any]:
        data = super().to_dict()
        if self.fields:
            data["fields"] = self.fields
        return data


class Unauthenticated(ServiceError):
    """缺失/无效/过期的 token

    reason 仅用于内部日志，不返回给客户端。
    """

    code = "UNAUTHENTICATED"
    http_status = 401

    def __init__(self, reason: str = "missing_token") -> None:
        super().__init__("Authentication required")
        self.reason = reason

    @property
    def headers(self) -> dict[str, str]:
        return {"WWW-Authenticate": "Bearer"}


class InvalidCredential(ServiceError):
    """登录或修改密码时密码不匹配"""

    code = "INVALID_CREDENTIAL"
    http_status = 401

    def __init__(self, message: str = "Invalid credentials") -> None:
        super().__init__(message)


class NotFound(ServiceError):
    """资源不存在

    不存在与不属于调用者两种情况统一为 NotFound，避免泄露 ID 是否存在。
    """

    code = "NOT_FOUND"
    http_status = 404

    def __init__(self, resource: str = "Resource") -> None:
        super().__init__(f"{resource} not found")
        self.resource = resource


class Conflict(ServiceError):
    """唯一性冲突（重复邮箱注册）"""

    code = "CONFLICT"
    http_status = 409


class Internal(ServiceError):
    """存储或基础设施故障，响应中不暴露内部细节"""

    code = "INTERNAL"
    http_status = 500

    def __init__(self, message: str = "Internal server error") -> None:
        super().__init__(message)
