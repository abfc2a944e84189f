"""Deep copying of :class:`~cxkit.var.Var` values."""

from __future__ import annotations

from .var import Var, VarType


def copy_into(src: Var, dst: Var) -> Var:
    """Replace the value of ``dst`` with a deep copy of ``src`` and return ``dst``.

    Array elements and map values are copied recursively. Map keys keep
    the insertion order of ``src``. Copying a value into itself leaves it
    unchanged.
    """
    if src is dst:
        return dst
    kind = src.type()
    if kind is VarType.NULL:
        dst.set_null()
    elif kind is VarType.BOOL:
        dst.set_bool(src.as_bool())
    elif kind is VarType.INT:
        dst.set_int(src.as_int())
    elif kind is VarType.FLOAT:
        dst.set_float(src.as_float())
    elif kind is VarType.STR:
        dst.set_str(src.as_str())
    elif kind is VarType.BUF:
        dst.set_buf(src.as_buf())
    elif kind is VarType.ARR:
        elements = [src.at(index) for index in range(len(src))]
        dst.set_arr()
        for element in elements:
            dst.append(deep_copy(element))
    elif kind is VarType.MAP:
        entries = [(key, src.get(key)) for key in src.keys()]
        dst.set_map()
        for key, value in entries:
            dst.set_item(key, deep_copy(value))
    else:
        raise ValueError(f"unknown value type: {kind!r}")
    return dst


def deep_copy(src: Var) -> Var:
    """Return a new :class:`Var` holding a deep copy of ``src``."""
    return copy_into(src, Var())