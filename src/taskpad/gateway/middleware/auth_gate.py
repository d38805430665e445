"""Auth Gate -- bearer token 校验依赖

挂在 tasks/profile 路由器上，在任何 handler 执行前运行：
1. 解析 Authorization: Bearer <token>，缺失或格式错误 -> Unauthenticated
2. TokenService.verify() 失败 -> Unauthenticated（原因只写日志）
3. 成功后把 user_id 绑定到 request.state 与 structlog contextvars

下游只能通过 require_caller 获得调用者身份，请求体/查询参数中的用户 ID 一律不参与鉴权。
"""

import structlog
from fastapi import Request
from taskpad.auth import AuthError
from taskpad.core.errors import Unauthenticated

log = structlog.get_logger()

_SCHEME = "bearer"


def _extract_bearer(header: str | None) -> str:
    """从 Authorization 头中提取 token"""
    if not header:
        raise Unauthenticated(reason="missing_token")
    scheme, _, token = header.strip().partition(" ")
    token = token.strip()
    if scheme.lower() != _SCHEME or not token:
        raise Unauthenticated(reason="malformed_header")
    return token


async def require_caller(request: Request) -> str:
    """校验请求并返回调用者 user_id

    同一请求内重复调用（路由器依赖 + handler 依赖）只校验一次。
    """
    cached = getattr(request.state, "user_id", None)
    if cached is not None:
        return cached

    try:
        token = _extract_bearer(request.headers.get("Authorization"))
        user_id = request.app.state.token_service.verify(token)
    except Unauthenticated as e:
        log.info("auth_rejected", reason=e.reason)
        raise
    except AuthError as e:
        log.info("auth_rejected", reason=e.reason)
        raise Unauthenticated(reason=e.reason) from e

    request.state.user_id = user_id
    structlog.contextvars.bind_contextvars(user_id=user_id)
    return user_id
