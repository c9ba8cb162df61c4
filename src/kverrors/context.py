from __future__ import annotations

import os
import sys
from dataclasses import dataclass, replace
from typing import Any

from kverrors.config import get_settings
from kverrors.errors import AttachedError, CausedError, KVError, PlainError
from kverrors.protocols import ContextExtensible
from kverrors.store import EMPTY_STORE, KeyValueStore, flatten


def _trim_path(file: str) -> str:
    """Make *file* relative to the longest ``sys.path`` entry containing it."""
    best = ""
    for entry in sys.path:
        if not entry:
            continue
        entry = os.path.abspath(entry)
        if file.startswith(entry + os.sep) and len(entry) > len(best):
            best = entry
    if not best:
        return file
    return os.path.relpath(file, best).replace(os.sep, "/")


@dataclass(frozen=True, slots=True)
class Context:
    """Key/value pairs attached to every error created or wrapped from it.

    A common pattern is to build a context early in a function and use it
    for every failure path::

        errors = kverrors.with_("id", id, "n", n)
        ...
        raise errors.wrap(exc, "cannot do something")
        ...
        raise errors.new("something bad has happened")

    Contexts are immutable. ``with_`` and ``caller`` return new contexts and
    never change the receiver, so one context can be shared between threads.
    """

    store: KeyValueStore = EMPTY_STORE
    caller_site: str | None = None

    def with_(self, *keyvals: Any, **kwargs: Any) -> Context:
        return replace(self, store=self.store.derive(flatten(keyvals, kwargs)))

    def caller(self, skip: int = 0) -> Context:
        """Record the file and line of the caller.

        *skip* is the number of extra frames to ascend, with 0 identifying
        the caller of this method.
        """
        try:
            frame = sys._getframe(skip + 1)
        except ValueError:
            return self
        file = os.path.abspath(frame.f_code.co_filename)
        if get_settings().trim_caller_paths:
            file = _trim_path(file)
        return replace(self, caller_site=f"{file}:{frame.f_lineno}")

    def merge(self, other: Context) -> Context:
        """Append *other*'s pairs; its call-site, when set, wins."""
        return Context(
            store=self.store.derive(other.store.pairs),
            caller_site=other.caller_site or self.caller_site,
        )

    def is_empty(self) -> bool:
        return not self.store and self.caller_site is None

    def keyvals(self) -> list[Any]:
        return self.store.keyvals()

    def new(self, message: str) -> PlainError:
        return PlainError(context=self, message=message)

    def wrap(
        self, cause: BaseException | None, *messages: str
    ) -> KVError | BaseException | None:
        """Wrap *cause* with a message and this context's pairs.

        Returns ``None`` when *cause* is ``None``. Empty messages are ignored
        and the rest joined with ``": "``; with no message left this is the
        same as :meth:`attach`.
        """
        if cause is None:
            return None
        message = ": ".join(m for m in messages if m)
        if not message:
            return self.attach(cause)
        return CausedError(context=self, message=message, cause=cause)

    def attach(self, cause: BaseException | None) -> KVError | BaseException | None:
        """Attach this context's pairs to *cause* without a new message.

        *cause* comes back unchanged when there is nothing to attach. Errors
        that accept a context are extended in place of nesting a new error.
        """
        if cause is None:
            return None
        if self.is_empty():
            return cause
        if isinstance(cause, ContextExtensible):
            return cause.with_context(self)
        return AttachedError(context=self, cause=cause)


ROOT = Context()


def with_(*keyvals: Any, **kwargs: Any) -> Context:
    return ROOT.with_(*keyvals, **kwargs)


def caller(skip: int = 0) -> Context:
    return ROOT.caller(skip + 1)


def new(message: str) -> PlainError:
    return ROOT.new(message)


def wrap(cause: BaseException | None, *messages: str) -> KVError | BaseException | None:
    return ROOT.wrap(cause, *messages)


def attach(cause: BaseException | None) -> KVError | BaseException | None:
    return ROOT.attach(cause)
