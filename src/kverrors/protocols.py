"""Capabilities an error or attribute value may expose.

Checks against these are done with ``isinstance``, which only looks for the
named attributes, so any object providing them takes part.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Protocol, runtime_checkable

if TYPE_CHECKING:
    from kverrors.context import Context


@runtime_checkable
class CauseProvider(Protocol):
    """An error that wraps another error."""

    @property
    def cause(self) -> Any: ...  # pragma: no cover


@runtime_checkable
class KeyvalProvider(Protocol):
    """An error that can describe itself as alternating keys and values."""

    def keyvals(self) -> list[Any]: ...  # pragma: no cover


@runtime_checkable
class TextMarshaler(Protocol):
    """A value with its own text form for use in ``key=value`` tokens."""

    def marshal_text(self) -> str | bytes: ...  # pragma: no cover


@runtime_checkable
class ContextExtensible(Protocol):
    """An error that can absorb another context's attributes."""

    def with_context(self, context: Context) -> Any: ...  # pragma: no cover
