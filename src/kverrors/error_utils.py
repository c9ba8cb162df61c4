from __future__ import annotations

import functools
import inspect
import traceback
from collections.abc import Callable
from typing import Any, ParamSpec, TypeVar

from loguru import logger

from kverrors.config import get_settings
from kverrors.context import Context, ROOT

P = ParamSpec("P")
R = TypeVar("R")


def _format_tail(exc: BaseException, *, limit: int) -> str:
    tb = traceback.format_exception(type(exc), exc, exc.__traceback__)
    return "".join(tb[-limit:])


def _log_tail(exc: BaseException) -> None:
    formatted_tb = _format_tail(exc, limit=get_settings().traceback_limit)
    logger.opt(exception=exc).debug("{}", formatted_tb)


def wrap_exceptions(
    message: str, context: Context = ROOT, **kwargs: Any
) -> Callable[[Callable[P, R]], Callable[P, R]]:
    """Decorator re-raising any exception wrapped with *message* and pairs.

    The raised error is ``context.with_(**kwargs).wrap(exc, message)``,
    chained to the original with ``raise ... from``.
    """
    ctx = context.with_(**kwargs)

    def decorator(func: Callable[P, R]) -> Callable[P, R]:
        if inspect.iscoroutinefunction(func):

            @functools.wraps(func)
            async def async_wrapper(*args: P.args, **kw: P.kwargs):  # type: ignore[override]
                try:
                    return await func(*args, **kw)
                except Exception as exc:
                    _log_tail(exc)
                    wrapped = ctx.wrap(exc, message)
                    if wrapped is exc:
                        raise
                    raise wrapped from exc

            return async_wrapper  # type: ignore[return-value]

        @functools.wraps(func)
        def sync_wrapper(*args: P.args, **kw: P.kwargs):  # type: ignore[override]
            try:
                return func(*args, **kw)
            except Exception as exc:
                _log_tail(exc)
                wrapped = ctx.wrap(exc, message)
                if wrapped is exc:
                    raise
                raise wrapped from exc

        return sync_wrapper  # type: ignore[return-value]

    return decorator
