import pytest

from nexelra.store import KVStore, PageRequest, PageResponse, PrefixStore, paginate


def _filled(keys):
    store = KVStore()
    for key in keys:
        store.set(key, key + b"-value")
    return store


def _collect(store, request):
    seen = []
    response = paginate(store, request, lambda k, v: seen.append((k, v)))
    return seen, response


def test_set_get_round_trip():
    store = KVStore()
    store.set(b"alpha", b"one")
    assert store.get(b"alpha") == b"one"
    store.set(b"alpha", b"two")
    assert store.get(b"alpha") == b"two"
    assert len(store) == 1


def test_get_missing_is_none():
    assert KVStore().get(b"missing") is None


def test_delete_removes_key():
    store = _filled([b"a", b"b"])
    store.delete(b"a")
    assert store.get(b"a") is None
    assert [k for k, _ in store.items()] == [b"b"]
    store.delete(b"not-there")
    assert len(store) == 1


def test_empty_key_rejected():
    with pytest.raises(ValueError):
        KVStore().set(b"", b"value")


def test_none_value_rejected():
    with pytest.raises(ValueError):
        KVStore().set(b"key", None)


def test_items_sorted():
    keys = [b"c", b"a", b"b", b"ab"]
    store = _filled(keys)
    assert [k for k, _ in store.items()] == sorted(keys)


def test_items_range():
    store = _filled([b"a", b"b", b"c"])
    assert list(store.items(b"b", b"c")) == [(b"b", b"b-value")]
    assert [k for k, _ in store.items(b"b")] == [b"b", b"c"]


def test_prefix_store_writes_through():
    parent = KVStore()
    view = PrefixStore(parent, b"p/")
    view.set(b"k", b"v")
    assert parent.get(b"p/k") == b"v"
    assert view.get(b"k") == b"v"
    view.delete(b"k")
    assert parent.get(b"p/k") is None


def test_prefix_store_items_only_own_prefix():
    parent = KVStore()
    parent.set(b"other", b"x")
    parent.set(b"p0", b"y")
    view = PrefixStore(parent, b"p/")
    view.set(b"b", b"2")
    view.set(b"a", b"1")
    assert list(view.items()) == [(b"a", b"1"), (b"b", b"2")]


def test_prefix_store_with_ff_prefix():
    parent = KVStore()
    view = PrefixStore(parent, b"\xff")
    view.set(b"\x01", b"v")
    parent.set(b"\x00", b"w")
    assert list(view.items()) == [(b"\x01", b"v")]


def test_paginate_by_offset_covers_everything():
    keys = [bytes([c]) for c in b"abcde"]
    store = _filled(keys)
    gathered = []
    for offset in range(0, len(keys), 2):
        page, _ = _collect(store, PageRequest(offset=offset, limit=2))
        assert len(page) <= 2
        gathered.extend(page)
    assert gathered == list(store.items())


def test_paginate_by_key_chain():
    keys = [bytes([c]) for c in b"abcde"]
    store = _filled(keys)
    gathered = []
    next_key = None
    while True:
        page, response = _collect(store, PageRequest(key=next_key, limit=2))
        assert len(page) <= 2
        gathered.extend(page)
        next_key = response.next_key
        if next_key is None:
            break
    assert gathered == list(store.items())


def test_paginate_limit_zero_counts_total():
    keys = [b"a", b"b", b"c"]
    store = _filled(keys)
    page, response = _collect(store, PageRequest())
    assert response.total == len(keys)
    assert [k for k, _ in page] == keys


def test_paginate_none_request_uses_defaults():
    keys = [b"a", b"b"]
    page, response = _collect(_filled(keys), None)
    assert response == PageResponse(next_key=None, total=len(keys))
    assert len(page) == len(keys)


def test_paginate_count_total_and_next_key():
    keys = [b"a", b"b", b"c", b"d"]
    page, response = _collect(_filled(keys), PageRequest(limit=2, count_total=True))
    assert [k for k, _ in page] == keys[:2]
    assert response.next_key == keys[2]
    assert response.total == len(keys)


def test_paginate_reverse():
    keys = [b"a", b"b", b"c"]
    page, _ = _collect(_filled(keys), PageRequest(limit=10, reverse=True))
    assert [k for k, _ in page] == list(reversed(keys))


def test_paginate_reverse_from_key():
    keys = [b"a", b"b", b"c"]
    page, _ = _collect(_filled(keys), PageRequest(key=b"b", limit=10, reverse=True))
    assert [k for k, _ in page] == [b"b", b"a"]


def test_paginate_offset_and_key_rejected():
    with pytest.raises(ValueError, match="either offset or key"):
        paginate(_filled([b"a"]), PageRequest(key=b"a", offset=1), lambda k, v: None)


def test_paginate_propagates_callback_error():
    def fail(key, value):
        raise RuntimeError(key)

    with pytest.raises(RuntimeError):
        paginate(_filled([b"a"]), PageRequest(limit=1), fail)