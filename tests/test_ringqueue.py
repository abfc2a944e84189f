import pytest

from cxkit.ringqueue import RingQueue


def test_single_thread_sequence_with_wraparound():
    q = RingQueue(8)
    assert q.capacity() == 8
    assert len(q) == 0
    q.put_many([0, 1, 2, 3, 4, 5])
    assert len(q) == 6
    assert q.get_many(3) == [0, 1, 2]
    assert len(q) == 3
    q.put_many([6, 7, 8, 9])
    assert len(q) == 7
    assert q.capacity() == 8
    assert q.get_many(7) == [3, 4, 5, 6, 7, 8, 9]
    assert len(q) == 0
    assert q.empty()


def test_put_and_get_single_elements_keep_fifo_order():
    q = RingQueue(3)
    for value in "abcde":
        q.put(value)
    assert [q.get() for _ in range(5)] == list("abcde")


def test_grows_when_full_and_preserves_order():
    q = RingQueue(2)
    q.put_many([1, 2])
    assert q.get() == 1
    q.put_many([3, 4])
    assert q.capacity() == 4
    assert q.get_many(10) == [2, 3, 4]


def test_large_put_grows_enough():
    q = RingQueue(1)
    values = list(range(50))
    q.put_many(values)
    assert q.capacity() >= len(values)
    assert q.get_many(len(values)) == values


def test_get_many_returns_only_available():
    q = RingQueue(4)
    q.put_many(["x", "y"])
    assert q.get_many(5) == ["x", "y"]
    assert q.get_many(5) == []


def test_get_on_empty_raises():
    q = RingQueue(4)
    with pytest.raises(IndexError):
        q.get()


def test_clear_keeps_capacity():
    q = RingQueue(4)
    q.put_many([1, 2, 3, 4, 5])
    cap = q.capacity()
    q.clear()
    assert len(q) == 0
    assert q.empty()
    assert q.capacity() == cap
    q.put(7)
    assert q.get() == 7


@pytest.mark.parametrize("capacity", [0, -1])
def test_invalid_capacity(capacity):
    with pytest.raises(ValueError):
        RingQueue(capacity)


def test_negative_get_count_rejected():
    q = RingQueue(2)
    with pytest.raises(ValueError):
        q.get_many(-1)