"""TraceMiddleware

为单任务操作（/tasks/{task_id}）绑定 task_id 到 structlog contextvars。
"""

import structlog
from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import Response

# ULID 长度
_TASK_ID_LENGTH = 26


class TraceMiddleware(BaseHTTPMiddleware):
    """任务级追踪中间件"""

    async def dispatch(
        self, request: Request, call_next: RequestResponseEndpoint
    ) -> Response:
        parts = request.url.path.strip("/").split("/")
        # 排除 /tasks/stats 等非 ID 子路由
        if len(parts) >= 2 and parts[0] == "tasks" and len(parts[1]) == _TASK_ID_LENGTH:
            structlog.contextvars.bind_contextvars(task_id=parts[1])

        return await call_next(request)
