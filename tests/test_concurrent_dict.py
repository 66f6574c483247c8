import threading

import pytest

from tinyredis.concurrent_dict import ConcurrentDict, compute_capacity


def test_concurrent_put():
    d = ConcurrentDict(0)
    count = 100
    failures = []

    def worker(i):
        key = "k" + str(i)
        result = d.put(key, i)
        if result != 1:
            failures.append(f"put {key} returned {result}")
        value, ok = d.get(key)
        if not ok:
            failures.append(f"missing {key}")
        elif value != i:
            failures.append(f"{key} holds {value}")

    threads = [threading.Thread(target=worker, args=(i,)) for i in range(count)]
    for thread in threads:
        thread.start()
    for thread in threads:
        thread.join()

    assert failures == []
    assert len(d) == 100


@pytest.mark.parametrize(
    ("param", "expected"),
    [(0, 16), (1, 16), (16, 16), (17, 32), (32, 32), (100, 128)],
)
def test_compute_capacity(param, expected):
    assert compute_capacity(param) == expected


def test_put_existing_key_returns_zero():
    d = ConcurrentDict()
    assert d.put("a", 1) == 1
    assert d.put("a", 2) == 0
    assert d.get("a") == (2, True)
    assert len(d) == 1


def test_get_missing_key():
    d = ConcurrentDict()
    assert d.get("nope") == (None, False)
    assert "nope" not in d


def test_remove():
    d = ConcurrentDict()
    d.put("a", "x")
    d.put("b", "y")
    assert d.remove("a") == ("x", 1)
    assert d.remove("a") == (None, 0)
    assert len(d) == 1
    assert "a" not in d
    assert "b" in d


def test_stored_none_is_found():
    d = ConcurrentDict()
    d.put("k", None)
    assert d.get("k") == (None, True)


def test_concurrent_remove_keeps_count():
    d = ConcurrentDict(64)
    for i in range(200):
        d.put(f"k{i}", i)

    def worker(start):
        for i in range(start, 200, 4):
            d.remove(f"k{i}")

    threads = [threading.Thread(target=worker, args=(s,)) for s in range(4)]
    for thread in threads:
        thread.start()
    for thread in threads:
        thread.join()
    assert len(d) == 0