from __future__ import annotations

from abc import ABCMeta, abstractmethod
from dataclasses import dataclass, replace
from io import StringIO
from typing import TYPE_CHECKING, Any

from kverrors.extractor import build_keyvals
from kverrors.render import render_pairs

if TYPE_CHECKING:
    from kverrors.context import Context


@dataclass(frozen=True, slots=True, kw_only=True, eq=False)
class KVError(Exception, metaclass=ABCMeta):
    """Base error carrying a context of key/value pairs.

    Attributes:
        context: Pairs and call-site attached when the error was created.

    Instances are immutable: ``with_`` returns a new error of the same type.
    """

    context: Context

    @property
    @abstractmethod
    def message(self) -> str: ...  # pragma: no cover

    @property
    @abstractmethod
    def cause(self) -> Any: ...  # pragma: no cover

    def _link_cause(self) -> None:
        if isinstance(self.cause, BaseException):
            object.__setattr__(self, "__cause__", self.cause)

    def _text(self, head: str) -> StringIO:
        buf = StringIO()
        buf.write(head)
        render_pairs(buf, self.context.store)
        return buf

    def with_(self, *keyvals: Any, **kwargs: Any) -> Any:
        return replace(self, context=self.context.with_(*keyvals, **kwargs))

    def with_context(self, context: Context) -> Any:
        return replace(self, context=self.context.merge(context))

    def keyvals(self) -> list[Any]:
        """Return the error as alternating keys and values, ``"msg"`` first."""
        return build_keyvals(self.message, self.context, self.cause)

    def marshal_text(self) -> str:
        return str(self)


@dataclass(frozen=True, slots=True, kw_only=True, eq=False)
class PlainError(KVError):
    """Error with a message and no cause."""

    message: str

    @property
    def cause(self) -> None:
        return None

    def __str__(self) -> str:
        return self._text(self.message).getvalue()


@dataclass(frozen=True, slots=True, kw_only=True, eq=False)
class CausedError(KVError):
    """Error with its own message wrapping another error."""

    message: str
    cause: BaseException

    def __post_init__(self) -> None:
        self._link_cause()

    def __str__(self) -> str:
        buf = self._text(self.message)
        buf.write(": ")
        buf.write(str(self.cause))
        return buf.getvalue()


@dataclass(frozen=True, slots=True, kw_only=True, eq=False)
class AttachedError(KVError):
    """Pairs attached to another error; the cause's text is the message."""

    cause: BaseException

    def __post_init__(self) -> None:
        self._link_cause()

    @property
    def message(self) -> str:
        return str(self.cause)

    def keyvals(self) -> list[Any]:
        return build_keyvals("", self.context, self.cause)

    def __str__(self) -> str:
        return self._text(str(self.cause)).getvalue()
