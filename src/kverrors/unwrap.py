from __future__ import annotations

from typing import Any

from kverrors.protocols import CauseProvider


def cause(err: Any) -> Any:
    """Return the underlying cause of *err*.

    Follows ``err.cause`` until reaching an error without one, or whose cause
    is ``None``, and returns that error. ``None`` is returned unchanged.

    Only the ``cause`` attribute is followed. Python's own ``__cause__``
    link from ``raise ... from`` is not, so an error raised from another
    stays the terminal error unless it also exposes ``cause``. Errors built
    by this package set both.
    """
    while err is not None and isinstance(err, CauseProvider):
        inner = err.cause
        if inner is None:
            break
        err = inner
    return err
