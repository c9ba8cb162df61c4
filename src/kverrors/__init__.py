"""Errors with key/value context that work well with structured logging.

::

    err = kverrors.new("file locked").with_("file", "testrun", "line", 101)
    str(err)  # 'file locked file=testrun line=101'

    err = kverrors.wrap(exc, "cannot list directory contents")
    kverrors.cause(err) is exc  # True
"""

from loguru import logger

from kverrors.config import Settings, get_settings
from kverrors.context import Context, attach, caller, new, with_, wrap
from kverrors.error_utils import wrap_exceptions
from kverrors.errors import AttachedError, CausedError, KVError, PlainError
from kverrors.extractor import extract_keyvals
from kverrors.logbridge import LogBridge, as_map, bind, bridge, keyvals, log_error
from kverrors.protocols import (
    CauseProvider,
    ContextExtensible,
    KeyvalProvider,
    TextMarshaler,
)
from kverrors.render import render_value
from kverrors.store import KeyValueStore
from kverrors.unwrap import cause

logger.disable("kverrors")

__all__ = [
    "AttachedError",
    "CausedError",
    "CauseProvider",
    "Context",
    "ContextExtensible",
    "KVError",
    "KeyValueStore",
    "KeyvalProvider",
    "LogBridge",
    "PlainError",
    "Settings",
    "TextMarshaler",
    "as_map",
    "attach",
    "bind",
    "bridge",
    "caller",
    "cause",
    "extract_keyvals",
    "get_settings",
    "keyvals",
    "log_error",
    "new",
    "render_value",
    "with_",
    "wrap",
    "wrap_exceptions",
]
