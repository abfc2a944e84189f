import threading
import time

import pytest

from cxkit.timer import Timer, cmp_ts, secs_from_ts, ts_from_secs


def _wait_until(predicate, timeout=5.0):
    deadline = time.monotonic() + timeout
    while time.monotonic() < deadline:
        if predicate():
            return True
        time.sleep(0.005)
    return predicate()


class State:
    def __init__(self):
        self.results = []
        self.lock = threading.Lock()
        self.periodic_count = 0


def _record(tm, arg):
    with tm.userdata.lock:
        tm.userdata.results.append((arg, time.monotonic()))


def _periodic(tm, count):
    state = tm.userdata
    with state.lock:
        state.results.append((count, time.monotonic()))
    if count == 0:
        return
    with state.lock:
        state.periodic_count += 1
    tm.set(ts_from_secs(0.01), _periodic, count - 1)


def test_ts_from_secs():
    assert ts_from_secs(0.01) == (0, 10000000)
    assert ts_from_secs(1.5) == (1, 500000000)
    assert ts_from_secs(0) == (0, 0)


def test_secs_from_ts_round_trip():
    assert secs_from_ts((1, 500000000)) == 1.5
    for secs in (0.25, 2.0, 3.75):
        assert secs_from_ts(ts_from_secs(secs)) == pytest.approx(secs)


@pytest.mark.parametrize(
    "t1,t2,expected",
    [
        ((1, 0), (2, 0), -1),
        ((2, 0), (1, 0), 1),
        ((1, 5), (1, 6), -1),
        ((1, 6), (1, 5), 1),
        ((1, 5), (1, 5), 0),
    ],
)
def test_cmp_ts(t1, t2, expected):
    assert cmp_ts(t1, t2) == expected


def test_increasing_delays_run_in_order():
    state = State()
    with Timer(state) as tm:
        task_count = 10
        for i in range(task_count):
            tm.set(ts_from_secs(0.01 * (i + 1)), _record, i)
        assert _wait_until(lambda: tm.count() == 0)
        assert len(state.results) == task_count
        assert [arg for arg, _ in state.results] == list(range(task_count))
        times = [t for _, t in state.results]
        assert times == sorted(times)


def test_decreasing_delays_run_in_due_order():
    state = State()
    with Timer(state) as tm:
        task_count = 10
        for i in range(task_count):
            tm.set(ts_from_secs(0.01 * (task_count - i + 1)), _record, i)
        assert _wait_until(lambda: tm.count() == 0)
        assert len(state.results) == task_count
        assert [arg for arg, _ in state.results] == list(reversed(range(task_count)))


def test_clear_all_cancels_pending_tasks():
    state = State()
    with Timer(state) as tm:
        for i in range(10):
            tm.set(ts_from_secs(0.05 * (i + 1)), _record, i)
        time.sleep(0.001)
        tm.clear_all()
        assert tm.count() == 0
        time.sleep(0.1)
        assert state.results == []


def test_clear_single_task():
    state = State()
    with Timer(state) as tm:
        keep = tm.set(0.02, _record, "keep")
        drop = tm.set(0.01, _record, "drop")
        assert drop > keep
        assert tm.clear(drop) is True
        assert tm.clear(drop) is False
        assert _wait_until(lambda: tm.count() == 0)
        assert [arg for arg, _ in state.results] == ["keep"]


def test_periodic_task_reschedules_itself():
    state = State()
    with Timer(state) as tm:
        count = 5
        tm.set(ts_from_secs(0.01), _periodic, count)
        assert _wait_until(lambda: state.periodic_count >= count and tm.count() == 0)
        assert state.periodic_count == count
        assert [arg for arg, _ in state.results] == [5, 4, 3, 2, 1, 0]


def test_set_after_close_raises():
    tm = Timer()
    tm.close()
    with pytest.raises(RuntimeError):
        tm.set(0.01, _record)


def test_userdata_is_kept():
    state = State()
    with Timer(state) as tm:
        assert tm.userdata is state
        assert tm.count() == 0