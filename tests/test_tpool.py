import threading
import time

import pytest

from cxkit.tpool import PoolClosedError, ThreadPool


class Counter:
    def __init__(self):
        self.value = 0
        self.lock = threading.Lock()

    def increment(self):
        with self.lock:
            self.value += 1


def _worker(counter):
    counter.increment()


@pytest.mark.parametrize("nthreads", [1, 8])
def test_runs_all_work(nthreads):
    nworks = 20
    pool = ThreadPool(nthreads, nworks)
    pool.close()

    pool = ThreadPool(nthreads, nworks)
    counter = Counter()
    for _ in range(nworks):
        pool.run(_worker, counter)
    pool.close()
    assert counter.value == nworks


def test_small_queue_blocks_but_completes():
    counter = Counter()
    with ThreadPool(2, 1) as pool:
        for _ in range(50):
            pool.run(_worker, counter)
    assert counter.value == 50


def test_run_after_close_raises():
    pool = ThreadPool(1, 4)
    pool.close()
    with pytest.raises(PoolClosedError):
        pool.run(_worker, Counter())


def test_work_len_counts_queued_items():
    started = threading.Event()
    release = threading.Event()

    def blocker(_):
        started.set()
        release.wait(5)

    pool = ThreadPool(1, 10)
    pool.run(blocker)
    assert started.wait(5)
    counter = Counter()
    for _ in range(3):
        pool.run(_worker, counter)
    assert pool.work_len() == 3
    release.set()
    pool.close()
    assert pool.work_len() == 0
    assert counter.value == 3


def test_failing_work_does_not_stop_pool(monkeypatch):
    caught = []
    monkeypatch.setattr("sys.excepthook", lambda *args: caught.append(args[0]))

    def boom(_):
        raise ValueError("boom")

    counter = Counter()
    with ThreadPool(1, 4) as pool:
        pool.run(boom)
        pool.run(_worker, counter)
    assert counter.value == 1
    assert caught == [ValueError]


@pytest.mark.parametrize("nthreads,wsize", [(0, 1), (1, 0)])
def test_invalid_arguments(nthreads, wsize):
    with pytest.raises(ValueError):
        ThreadPool(nthreads, wsize)


def test_close_waits_for_running_work():
    done = []

    def slow(_):
        time.sleep(0.05)
        done.append(True)

    pool = ThreadPool(2, 4)
    pool.run(slow)
    pool.run(slow)
    pool.close()
    assert pool.work_len() == 0
    assert done == [True, True]
    with pytest.raises(PoolClosedError):
        pool.run(slow)
    assert done == [True, True]