from __future__ import annotations

import datetime as dt
from collections.abc import Iterable
from decimal import Decimal
from fractions import Fraction
from io import StringIO
from typing import Any

from loguru import logger
from pydantic import BaseModel

from kverrors.config import get_settings
from kverrors.protocols import TextMarshaler
from kverrors.store import Pair

NULL = "null"
PANIC = "<PANIC>"
ERROR = "<ERROR>"

_NUMBERS = (int, float, complex, Decimal, Fraction)
_TEMPORALS = (dt.datetime, dt.date, dt.time)


def needs_quote(c: str) -> bool:
    # the single quote is not strictly necessary, but quoting it reads better
    return c <= " " or c in "\"\\'"


def quote(s: str) -> str:
    """Return *s* unchanged, or double-quoted with ``\\`` and ``"`` escaped."""
    start = next((i for i, c in enumerate(s) if needs_quote(c)), -1)
    if start < 0:
        return s
    buf = StringIO()
    buf.write('"')
    buf.write(s[:start])
    run = start
    for i in range(start, len(s)):
        if s[i] in "\\\"":
            buf.write(s[run:i])
            buf.write("\\")
            run = i
    buf.write(s[run:])
    buf.write('"')
    return buf.getvalue()


def _marshal(value: Any) -> str | bytes:
    if isinstance(value, TextMarshaler):
        return value.marshal_text()
    if isinstance(value, BaseModel):
        return value.model_dump_json()
    return value.isoformat()


def _report(exc: Exception, template: str, value: Any) -> None:
    # settings or level trouble must leave the sentinel in place
    try:
        level = get_settings().diagnostics_level
        logger.opt(exception=exc).log(level, template, type(value).__name__)
    except ValueError:
        return


def _has_str(value: Any) -> bool:
    return type(value).__str__ is not object.__str__


def _format(value: Any) -> str:
    if value is None:
        return NULL
    if isinstance(value, (bytes, bytearray, memoryview)):
        return quote(bytes(value).decode("utf-8", errors="backslashreplace"))
    if isinstance(value, str):
        return quote(value)
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, _NUMBERS):
        return str(value)
    if isinstance(value, (TextMarshaler, BaseModel, *_TEMPORALS)):
        try:
            text = _marshal(value)
        except Exception as exc:
            _report(exc, "Cannot marshal {} value", value)
            return ERROR
        return _format(text)
    if isinstance(value, BaseException) or _has_str(value):
        return quote(str(value))
    return quote(repr(value))


def render_value(value: Any) -> str:
    """Render a single attribute value; never raises."""
    try:
        return _format(value)
    except Exception as exc:
        _report(exc, "Cannot render {} value", value)
        return PANIC


def write_value(buf: StringIO, value: Any) -> None:
    buf.write(render_value(value))


def render_pairs(buf: StringIO, pairs: Iterable[Pair]) -> None:
    """Append ``key=value`` tokens to *buf*, space separated."""
    for key, value in pairs:
        if buf.tell() > 0:
            buf.write(" ")
        buf.write(key)
        buf.write("=")
        write_value(buf, value)
