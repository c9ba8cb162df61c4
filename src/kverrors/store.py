from __future__ import annotations

from collections.abc import Iterator, Mapping, Sequence
from dataclasses import dataclass
from typing import Any

Pair = tuple[str, Any]


def flatten(
    keyvals: Sequence[Any], kwargs: Mapping[str, Any] | None = None
) -> tuple[Pair, ...]:
    """Turn alternating ``key, value, ...`` arguments into pairs.

    Non-string keys are converted with ``str()``. A trailing key without a
    value is paired with ``None``. Keyword arguments follow the positional
    pairs in their given order.
    """
    pairs: list[Pair] = []
    for i in range(0, len(keyvals), 2):
        key = keyvals[i]
        value = keyvals[i + 1] if i + 1 < len(keyvals) else None
        pairs.append((key if isinstance(key, str) else str(key), value))
    if kwargs:
        pairs.extend(kwargs.items())
    return tuple(pairs)


@dataclass(frozen=True, slots=True)
class KeyValueStore:
    """Append-only sequence of key/value pairs.

    The pairs live in a tuple, so every ``derive`` allocates fresh storage and
    two stores derived from the same base never share a writable buffer.
    """

    pairs: tuple[Pair, ...] = ()

    def derive(self, pairs: Sequence[Pair]) -> KeyValueStore:
        if not pairs:
            return self
        return KeyValueStore(self.pairs + tuple(pairs))

    def keyvals(self) -> list[Any]:
        out: list[Any] = []
        for key, value in self.pairs:
            out.extend((key, value))
        return out

    def __iter__(self) -> Iterator[Pair]:
        return iter(self.pairs)

    def __len__(self) -> int:
        return len(self.pairs)

    def __bool__(self) -> bool:
        return bool(self.pairs)


EMPTY_STORE = KeyValueStore()
