# cxkit

A small toolkit of general-purpose building blocks. It uses only the
Python standard library.

| Module | What it holds |
| --- | --- |
| `cxkit.dynarray` | `DynArray`: a growable array with explicit capacity |
| `cxkit.hashmap` | `HashMap`: an open-addressing hash map, plus `fnv1a32` and `MapStats` |
| `cxkit.ringqueue` | `RingQueue`: a growable FIFO ring buffer |
| `cxkit.tpool` | `ThreadPool` and `PoolClosedError` |
| `cxkit.timer` | `Timer`, plus `ts_from_secs`, `secs_from_ts` and `cmp_ts` |
| `cxkit.var` | `Var`, `VarType` and `VarTypeError`: a variant value |
| `cxkit.varcopy` | `copy_into` and `deep_copy` for `Var` values |
| `cxkit.tracer` | `Tracer`, `TracerEvent`, `TracerScope` and `TracerError` |

## Installation

```
pip install .
```

To run the tests:

```
pip install .[test]
pytest
```

## DynArray

`DynArray` keeps a capacity apart from its length. The capacity grows by
doubling and is never less than four once it has grown. `set_capacity`,
`reserve` and `set_length` set it directly. `free` drops the capacity to
zero, while `clear` keeps it. An optional `free_el` callable is called on
every element that `clear`, `free`, `delete`, `delete_swap` or item
assignment removes or overwrites.

```python
from cxkit.dynarray import DynArray

a = DynArray([1, 2, 3])
a.push(4)
a.insert(0, 0)
assert list(a) == [0, 1, 2, 3, 4]
assert a.find(3) == 3
a.delete(1, 2)             # remove two elements starting at index 1
assert list(a) == [0, 3, 4]
a.delete_swap(0)           # the last element moves into index 0
assert list(a) == [4, 3]
```

Bad indexes and `pop` or `last` on an empty array raise `IndexError`.

## HashMap

`HashMap` uses open addressing with linear probing. By default it starts
with 17 buckets and hashes keys with 32-bit FNV-1a. The table doubles when
used plus deleted buckets reach 80 % of the bucket count. You can pass a
custom `hash_fn`, and `free_key` and `free_val` callables that run on
entries that are deleted, cleared or freed.

```python
from cxkit.hashmap import HashMap, fnv1a32

m = HashMap()
for i in range(100):
    m[i] = i * 2.0
assert len(m) == 100
assert m.get(7) == 14.0
del m[0]                   # raises KeyError if absent; m.delete() returns a bool
print(m.stats())           # MapStats: buckets, probes, load factor
print(hex(fnv1a32(b"hello")))
```

Iteration and `items()` follow bucket order, not insertion order.

## RingQueue

```python
from cxkit.ringqueue import RingQueue

q = RingQueue(8)
q.put_many([0, 1, 2, 3, 4, 5])
assert q.get_many(3) == [0, 1, 2]
q.put_many([6, 7, 8, 9])   # wraps around the buffer
assert q.get_many(10) == [3, 4, 5, 6, 7, 8, 9]
```

The buffer doubles when there is not enough room. `get` on an empty queue
raises `IndexError`, and `get_many` returns at most what is queued.

## ThreadPool

```python
from cxkit.tpool import ThreadPool

with ThreadPool(4, 16) as pool:
    pool.run(print, "hello from a worker")
```

The pool runs `worker(param)` on a fixed number of threads. At most `wsize`
items wait in the queue, and `run` blocks while the queue is full. `close`,
which leaving the `with` block also calls, finishes all queued work and
joins the threads. After that, `run` raises `PoolClosedError`.

## Timer

```python
import time
from cxkit.timer import Timer

def tick(timer, arg):
    timer.userdata.append(arg)

with Timer(userdata=[]) as tm:
    tm.set(0.01, tick, "a")
    tm.set((0, 5_000_000), tick, "b")   # (seconds, nanoseconds)
    while tm.count():
        time.sleep(0.005)
    assert tm.userdata == ["b", "a"]
```

Each callback runs as `fn(timer, arg)` on the timer's own thread, and may
schedule further tasks. `set` returns a task id. `clear(task_id)` cancels
one task and `clear_all()` cancels them all. A task still counts while its
function runs.

## Var

A `Var` holds a null, bool, signed 64-bit int, float, str, array, map or
byte buffer. Maps have string keys and keep the order in which each key was
first inserted. Asking for the wrong kind of value raises `VarTypeError`.

```python
from cxkit.var import Var, VarType
from cxkit.varcopy import deep_copy

doc = Var().set_map()
doc.set_map_int("answer", 42)
items = doc.set_map_arr("items")
items.push_str("first")
items.push_buf(b"\x00\x01")
assert doc.get("answer").as_int() == 42
assert doc.keys() == ["answer", "items"]
assert doc.get("items").at(1).type() is VarType.BUF

copy = deep_copy(doc)
copy.get("items").push_null()
assert len(doc.get("items")) == 2
```

## Tracer

`Tracer(cap)` records at most `cap` begin (`B`), end (`E`) and instant
(`i`) events from any number of threads and drops any more. The first time
a thread records an event, it gets a small sequential id. `write_json` and
`write_json_file` write the events as a trace-event JSON array, with
timestamps in microseconds. Write failures raise `TracerError`.

```python
from cxkit.tracer import Tracer, TracerScope

tr = Tracer(1024)
tr.begin("load", "io")
tr.end("load", "io")
tr.instant("tick", "misc", TracerScope.THREAD)
assert tr.count() == 3
tr.write_json_file("trace.json")
```

Names and categories of 32 bytes or more are recorded as `?`.

## What it does not do

- `Var` values cannot be read from or written to JSON or any other text
  format. The package only builds and inspects them in memory.
- There is no command-line program. Everything is used as a library.