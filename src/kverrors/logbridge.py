"""Hand error keyvals to structured loggers.

A :class:`LogBridge` wraps the function that turns an error into keyvals, so
log adapters can take it as a dependency instead of importing the error
types. ``bridge`` is the instance built for this package at import time.
"""

from __future__ import annotations

from collections.abc import Callable
from typing import Any

from loguru import logger as _logger

from kverrors.extractor import NO_ERROR, extract_keyvals

Extractor = Callable[[BaseException], tuple[list[Any], bool]]


class LogBridge:
    def __init__(self, extractor: Extractor | None = None) -> None:
        self._extractor = extractor

    @property
    def extractor(self) -> Extractor | None:
        return self._extractor

    def keyvals(self, err: BaseException | None) -> tuple[list[Any], bool]:
        """Return alternating keys and values for *err*, ``"msg"`` first."""
        if err is None:
            return ["msg", NO_ERROR], False
        if self._extractor is None:
            return ["msg", str(err)], False
        return self._extractor(err)

    def map(self, err: BaseException | None) -> dict[str, Any]:
        """Same as :meth:`keyvals` as a dict; later duplicate keys win."""
        keyvals, _ = self.keyvals(err)
        return {str(k): v for k, v in zip(keyvals[::2], keyvals[1::2])}

    def bind(self, log: Any, err: BaseException | None) -> Any:
        """Return a loguru logger with the error's pairs bound as extras."""
        return log.bind(**self.map(err))

    def log_error(
        self, log: Any, err: BaseException | None, level: str = "ERROR", depth: int = 0
    ) -> None:
        """Log the ``msg`` value with the remaining pairs as extras.

        The record is attributed to the caller, *depth* frames further up.
        """
        fields = self.map(err)
        message = fields.pop("msg", str(err))
        log.bind(**fields).opt(depth=depth + 1).log(level, "{}", message)


bridge = LogBridge(extract_keyvals)


def keyvals(err: BaseException | None) -> tuple[list[Any], bool]:
    return bridge.keyvals(err)


def as_map(err: BaseException | None) -> dict[str, Any]:
    return bridge.map(err)


def bind(err: BaseException | None, log: Any = _logger) -> Any:
    return bridge.bind(log, err)


def log_error(err: BaseException | None, level: str = "ERROR", log: Any = _logger) -> None:
    bridge.log_error(log, err, level, depth=1)
