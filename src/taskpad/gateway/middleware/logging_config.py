"""structlog 配置模块

TASKPAD_LOG_FORMAT=json 输出结构化 JSON，默认 dev 控制台渲染；
TASKPAD_LOG_LEVEL 控制级别。stdlib logging（uvicorn 等）经同一条处理链输出。
凭证类字段在渲染前统一脱敏。
Logfire APM 由 LOGFIRE_SEND_TO_LOGFIRE 控制，默认关闭。
"""

import logging
import os
from typing import Any

import structlog

# 日志事件中出现这些键时值被替换
SENSITIVE_KEYS = frozenset(
    {
        "password",
        "old_password",
        "new_password",
        "password_hash",
        "token",
        "authorization",
        "token_secret",
    }
)
REDACTED = "***"


def redact_sensitive(
    logger: Any, method_name: str, event_dict: dict[str, Any]
) -> dict[str, Any]:
    """structlog processor：脱敏凭证字段"""
    for key in SENSITIVE_KEYS.intersection(event_dict):
        event_dict[key] = REDACTED
    return event_dict


def _shared_processors() -> list[structlog.types.Processor]:
    return [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_logger_name,
        structlog.stdlib.add_log_level,
        structlog.processors.TimeStamper(fmt="iso", utc=True),
        redact_sensitive,
        structlog.processors.StackInfoRenderer(),
        structlog.processors.format_exc_info,
    ]


def setup_logging() -> None:
    """初始化 structlog + stdlib logging"""
    log_format = os.environ.get("TASKPAD_LOG_FORMAT", "dev")
    level = getattr(logging, os.environ.get("TASKPAD_LOG_LEVEL", "INFO").upper(), logging.INFO)

    if log_format == "json":
        renderer: structlog.types.Processor = structlog.processors.JSONRenderer(
            ensure_ascii=False
        )
    else:
        renderer = structlog.dev.ConsoleRenderer()

    shared = _shared_processors()
    structlog.configure(
        processors=[*shared, structlog.stdlib.ProcessorFormatter.wrap_for_formatter],
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=True,
    )

    handler = logging.StreamHandler()
    handler.setFormatter(
        structlog.stdlib.ProcessorFormatter(processor=renderer, foreign_pre_chain=shared)
    )
    root = logging.getLogger()
    root.handlers.clear()
    root.addHandler(handler)
    root.setLevel(level)

    # 请求日志由 LoggingMiddleware 输出，关闭 uvicorn 自带的访问日志
    logging.getLogger("uvicorn.access").setLevel(logging.WARNING)


def setup_logfire(app=None) -> None:
    """可选启用 Logfire（需要 apm extra 与 LOGFIRE_TOKEN）"""
    if os.environ.get("LOGFIRE_SEND_TO_LOGFIRE", "false").lower() != "true":
        return
    try:
        import logfire

        logfire.configure()
        if app is not None:
            logfire.instrument_fastapi(app)
    except Exception:
        structlog.get_logger().warning(
            "logfire_init_failed",
            message="Logfire 初始化失败，继续使用本地日志",
        )
