"""Store 调用保护

所有 Store 共享同一个 aiosqlite 连接，连接上只有一个隐式事务：
一次调用的 execute 与 commit/rollback 之间若插入另一调用的语句，
rollback 会连带丢弃对方已执行但未提交的写入。
因此每次 Store 调用在 StoreGroup 的连接锁内完成，
驱动层异常（aiosqlite.Error）在锁内回滚后统一转换为 Internal。
"""

import contextlib
import functools
from collections.abc import Awaitable, Callable
from typing import Any, TypeVar

import aiosqlite
import structlog

from ..errors import Internal

log = structlog.get_logger()

R = TypeVar("R")


def store_call(
    method: Callable[..., Awaitable[R]],
) -> Callable[..., Awaitable[R]]:
    """装饰 Store 方法：持有连接锁执行；驱动异常回滚 + 记录日志后以 Internal 抛出

    被装饰对象必须持有 _conn（aiosqlite.Connection）与 _lock（asyncio.Lock）。
    被装饰方法内部不得再调用其他被装饰方法（锁不可重入）。
    """

    @functools.wraps(method)
    async def wrapper(self: Any, *args: Any, **kwargs: Any) -> R:
        async with self._lock:
            try:
                return await method(self, *args, **kwargs)
            except aiosqlite.Error as e:
                with contextlib.suppress(aiosqlite.Error):
                    await self._conn.rollback()
                log.error(
                    "store_call_failed",
                    operation=method.__qualname__,
                    error_type=type(e).__name__,
                    error=str(e),
                )
                raise Internal() from e

    return wrapper
