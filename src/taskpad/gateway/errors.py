"""异常处理器 -- 业务异常到 HTTP 响应的统一映射

响应体统一为 {"error": {"code", "message", "fields"?}}，
不包含堆栈、密钥或哈希内容。
"""

import structlog
from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from starlette.responses import JSONResponse
from taskpad.core.errors import Internal, ServiceError, ValidationError
from taskpad.core.models import field_errors

log = structlog.get_logger()


async def service_error_handler(request: Request, exc: ServiceError) -> JSONResponse:
    """ServiceError -> 对应状态码"""
    if isinstance(exc, Internal):
        log.error("internal_error", cause=type(exc.__cause__).__name__)
    return JSONResponse(
        status_code=exc.http_status,
        content={"error": exc.to_dict()},
        headers=exc.headers,
    )


async def request_validation_handler(
    request: Request, exc: RequestValidationError
) -> JSONResponse:
    """框架层请求校验失败（缺字段、JSON 类型错误）-> 400 VALIDATION_ERROR"""
    error = ValidationError(fields=field_errors(list(exc.errors())))
    return await service_error_handler(request, error)


def register_exception_handlers(app: FastAPI) -> None:
    """注册异常处理器"""
    app.add_exception_handler(ServiceError, service_error_handler)
    app.add_exception_handler(RequestValidationError, request_validation_handler)
