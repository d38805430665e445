"""Token 校验异常体系

verify() 的失败结果。Auth Gate 捕获后统一转换为 Unauthenticated，
具体原因只写日志，不返回客户端。
"""


class AuthError(Exception):
    """Token 校验失败基类"""

    reason: str = "invalid_token"


class InvalidToken(AuthError):
    """签名不匹配、结构损坏或缺少身份声明"""

    reason = "invalid_token"


class Expired(AuthError):
    """Token 已过期"""

    reason = "expired"
