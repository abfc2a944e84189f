import pytest

from cxkit.hashmap import HashMap, MapStats, fnv1a32


def test_fnv1a32_known_values():
    assert fnv1a32(b"") == 0x811C9DC5
    assert fnv1a32(b"a") == 0xE40C292C


def test_default_nbuckets():
    assert HashMap().nbuckets() == 17
    assert HashMap(5).nbuckets() == 5


def test_set_get_delete_like_source_example():
    m = HashMap()
    size = 100
    for i in range(size):
        m[i] = i * 2.0
    assert len(m) == size
    for i in range(size):
        assert m[i] == i * 2.0
    for i in range(0, size, 2):
        assert m.delete(i)
    assert len(m) == size // 2
    for i in range(size):
        if i % 2 == 0:
            assert i not in m
        else:
            assert m.get(i) == i * 2.0


def test_growth_keeps_load_below_limit():
    m = HashMap()
    for i in range(200):
        m[f"k{i}"] = i
        assert len(m) < m.nbuckets() * 0.8
    assert sorted(m) == sorted(f"k{i}" for i in range(200))


def test_update_existing_key():
    m = HashMap()
    m["a"] = 1
    m["a"] = 2
    assert len(m) == 1
    assert m["a"] == 2


def test_missing_key_errors():
    m = HashMap()
    with pytest.raises(KeyError):
        m["nope"]
    with pytest.raises(KeyError):
        del m["nope"]
    assert m.delete("nope") is False
    assert m.get("nope", "dflt") == "dflt"


def test_items_matches_inserted():
    m = HashMap()
    data = {"x": 1, "y": 2, "z": 3}
    for k, v in data.items():
        m[k] = v
    assert dict(m.items()) == data
    assert set(m) == set(data)


def test_clear_keeps_buckets():
    m = HashMap()
    for i in range(50):
        m[i] = i
    nb = m.nbuckets()
    m.clear()
    assert len(m) == 0
    assert m.nbuckets() == nb
    assert m.items() == []
    m[3] = "three"
    assert m[3] == "three"


def test_free_hooks_called():
    freed_keys = []
    freed_vals = []
    m = HashMap(free_key=freed_keys.append, free_val=freed_vals.append)
    m["a"] = 1
    m["b"] = 2
    m.delete("a")
    assert freed_keys == ["a"]
    assert freed_vals == [1]
    m.free()
    assert freed_keys == ["a", "b"]
    assert freed_vals == [1, 2]
    assert len(m) == 0


def test_collisions_with_constant_hash():
    m = HashMap(hash_fn=lambda k: 0)
    for i in range(10):
        m[i] = str(i)
    for i in range(10):
        assert m[i] == str(i)
    st = m.stats()
    assert st.max_probe == 9
    assert st.min_probe == 0


def test_reinsert_after_delete_no_duplicate():
    m = HashMap(hash_fn=lambda k: 0)
    m["a"] = 1
    m["b"] = 2
    m.delete("a")
    m["b"] = 3
    assert len(m) == 1
    assert list(m) == ["b"]
    assert m["b"] == 3


def test_stats_invariants():
    m = HashMap()
    for i in range(30):
        m[i] = i
    for i in range(10):
        del m[i]
    st = m.stats()
    assert isinstance(st, MapStats)
    assert st.count == len(m)
    assert st.count + st.deleted + st.empty == st.nbuckets
    assert st.load_factor == st.count / st.nbuckets
    assert "nbuckets...: " in str(st)
    assert str(st).splitlines()[0] == f"nbuckets...: {st.nbuckets}"


def test_negative_nbuckets_rejected():
    with pytest.raises(ValueError):
        HashMap(-1)