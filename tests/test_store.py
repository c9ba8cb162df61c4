from concurrent.futures import ThreadPoolExecutor

import kverrors
from kverrors.store import KeyValueStore, flatten


def test_flatten_alternating_and_keywords() -> None:
    assert flatten(("a", 1, "b", 2), {"c": 3}) == (("a", 1), ("b", 2), ("c", 3))


def test_flatten_dangling_key_and_non_string_key() -> None:
    assert flatten((1, "one", "tail"), None) == (("1", "one"), ("tail", None))


def test_derive_keeps_base_untouched() -> None:
    base = KeyValueStore((("a", 1),))
    left = base.derive([("x", "left")])
    right = base.derive([("y", "right")])

    assert list(base) == [("a", 1)]
    assert list(left) == [("a", 1), ("x", "left")]
    assert list(right) == [("a", 1), ("y", "right")]
    assert left.pairs is not right.pairs


def test_iteration_is_restartable() -> None:
    store = KeyValueStore().derive([("k1", "v1"), ("k2", 2)])
    assert list(store) == list(store)
    assert len(store) == 2
    assert store.keyvals() == ["k1", "v1", "k2", 2]


def test_empty_store_is_falsy() -> None:
    store = KeyValueStore()
    assert not store
    assert store.derive([]) is store


def test_concurrent_derive_from_shared_parent() -> None:
    parent = kverrors.with_(*[x for i in range(8) for x in (f"k{i}", i)])

    def child(n: int) -> kverrors.Context:
        return parent.with_("child", n)

    with ThreadPoolExecutor(max_workers=8) as pool:
        children = list(pool.map(child, range(200)))

    assert len(parent.store) == 8
    for n, ctx in enumerate(children):
        pairs = list(ctx.store)
        assert len(pairs) == 9
        assert pairs[:8] == list(parent.store)
        assert pairs[-1] == ("child", n)
