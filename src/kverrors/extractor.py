"""Flatten errors into alternating keys and values for structured logging.

The first pair always has the key ``"msg"``. These keys have special
meaning when present:

    msg     error message
    caller  file and line where the error was created
    cause   message of the wrapped error

The output is meant for log records. Programs should not pick values out of
it to make decisions.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from kverrors.protocols import KeyvalProvider

if TYPE_CHECKING:
    from kverrors.context import Context

NO_MESSAGE = "(no message)"
NO_ERROR = "(no error)"


def build_keyvals(message: str, context: Context, cause: Any = None) -> list[Any]:
    keyvals: list[Any] = []
    if message:
        keyvals += ["msg", message]
    elif cause is not None:
        # wrapped without a message: the cause text stands in for it
        keyvals += ["msg", str(cause)]
    else:
        keyvals += ["msg", NO_MESSAGE]
    keyvals += context.keyvals()
    if context.caller_site:
        keyvals += ["caller", context.caller_site]
    if cause is not None and message:
        keyvals += ["cause", str(cause)]
    return keyvals


def extract_keyvals(err: BaseException | None) -> tuple[list[Any], bool]:
    """Return the keyvals for *err* and whether it described itself."""
    if err is None:
        return ["msg", NO_ERROR], False
    if isinstance(err, KeyvalProvider):
        keyvals = list(err.keyvals())
        if not keyvals or keyvals[0] != "msg":
            keyvals = ["msg", str(err), *keyvals]
        return keyvals, True
    return ["msg", str(err)], False
