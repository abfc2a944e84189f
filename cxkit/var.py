"""Dynamically typed value holding null, scalars, strings, arrays, maps or buffers."""

from __future__ import annotations

import enum
from typing import Any, Dict, List, Optional, Union

_INT64_MIN = -(2**63)
_INT64_MAX = 2**63 - 1

BytesLike = Union[bytes, bytearray, memoryview]


class VarType(enum.Enum):
    """Kinds of value a :class:`Var` can hold."""

    NULL = 0
    BOOL = 1
    INT = 2
    FLOAT = 3
    STR = 4
    ARR = 5
    MAP = 6
    BUF = 7


class VarTypeError(TypeError):
    """Raised when a :class:`Var` does not hold the requested kind of value."""


class Var:
    """A value whose type is chosen at run time.

    Arrays hold other :class:`Var` objects in order. Maps hold
    :class:`Var` objects under string keys and remember the order in
    which keys were first inserted; replacing a key's value keeps its
    position.
    """

    def __init__(self) -> None:
        self._type = VarType.NULL
        self._value: Any = None

    def __repr__(self) -> str:
        return f"Var({self._type.name}, {self._value!r})"

    def _require(self, kind: VarType) -> None:
        if self._type is not kind:
            raise VarTypeError(
                f"value is {self._type.name}, not {kind.name}"
            )

    def type(self) -> VarType:
        """Return the kind of value held."""
        return self._type

    # Setters

    def set_null(self) -> "Var":
        """Make this value null."""
        self._type = VarType.NULL
        self._value = None
        return self

    def set_bool(self, value: bool) -> "Var":
        """Make this value a boolean."""
        self._type = VarType.BOOL
        self._value = bool(value)
        return self

    def set_int(self, value: int) -> "Var":
        """Make this value a signed 64-bit integer."""
        value = int(value)
        if not _INT64_MIN <= value <= _INT64_MAX:
            raise OverflowError("integer does not fit in 64 bits")
        self._type = VarType.INT
        self._value = value
        return self

    def set_float(self, value: float) -> "Var":
        """Make this value a floating point number."""
        self._type = VarType.FLOAT
        self._value = float(value)
        return self

    def set_str(self, value: str) -> "Var":
        """Make this value a string."""
        if not isinstance(value, str):
            raise TypeError(f"expected str, not {type(value).__name__}")
        self._type = VarType.STR
        self._value = value
        return self

    def set_arr(self) -> "Var":
        """Make this value an empty array."""
        self._type = VarType.ARR
        self._value = []
        return self

    def set_map(self) -> "Var":
        """Make this value an empty map."""
        self._type = VarType.MAP
        self._value = {}
        return self

    def set_buf(self, data: Optional[BytesLike] = None, length: Optional[int] = None) -> "Var":
        """Make this value a byte buffer.

        With ``data`` the buffer holds its first ``length`` bytes (all of
        them if ``length`` is None). Without ``data`` the buffer holds
        ``length`` zero bytes.
        """
        if length is not None and length < 0:
            raise ValueError("length must not be negative")
        if data is None:
            buf = bytearray(length or 0)
        else:
            raw = bytes(data)
            if length is not None:
                if length > len(raw):
                    raise ValueError("length exceeds data size")
                raw = raw[:length]
            buf = bytearray(raw)
        self._type = VarType.BUF
        self._value = buf
        return self

    # Arrays

    def append(self, value: "Var") -> "Var":
        """Append ``value`` to this array and return it."""
        self._require(VarType.ARR)
        if not isinstance(value, Var):
            raise TypeError("array elements must be Var")
        self._value.append(value)
        return value

    def push_null(self) -> "Var":
        """Append a new null element and return it."""
        return self.append(Var().set_null())

    def push_bool(self, value: bool) -> "Var":
        """Append a new boolean element and return it."""
        self._require(VarType.ARR)
        return self.append(Var().set_bool(value))

    def push_int(self, value: int) -> "Var":
        """Append a new integer element and return it."""
        self._require(VarType.ARR)
        return self.append(Var().set_int(value))

    def push_float(self, value: float) -> "Var":
        """Append a new float element and return it."""
        self._require(VarType.ARR)
        return self.append(Var().set_float(value))

    def push_str(self, value: str) -> "Var":
        """Append a new string element and return it."""
        self._require(VarType.ARR)
        return self.append(Var().set_str(value))

    def push_arr(self) -> "Var":
        """Append a new empty array element and return it."""
        return self.append(Var().set_arr())

    def push_map(self) -> "Var":
        """Append a new empty map element and return it."""
        return self.append(Var().set_map())

    def push_buf(self, data: Optional[BytesLike] = None, length: Optional[int] = None) -> "Var":
        """Append a new buffer element and return it."""
        self._require(VarType.ARR)
        return self.append(Var().set_buf(data, length))

    # Maps

    def set_item(self, key: str, value: "Var") -> "Var":
        """Store ``value`` under ``key`` in this map and return it."""
        self._require(VarType.MAP)
        if not isinstance(key, str):
            raise TypeError("map keys must be str")
        if not isinstance(value, Var):
            raise TypeError("map values must be Var")
        self._value[key] = value
        return value

    def set_map_null(self, key: str) -> "Var":
        """Store a new null value under ``key`` and return it."""
        return self.set_item(key, Var().set_null())

    def set_map_bool(self, key: str, value: bool) -> "Var":
        """Store a new boolean under ``key`` and return it."""
        self._require(VarType.MAP)
        return self.set_item(key, Var().set_bool(value))

    def set_map_int(self, key: str, value: int) -> "Var":
        """Store a new integer under ``key`` and return it."""
        self._require(VarType.MAP)
        return self.set_item(key, Var().set_int(value))

    def set_map_float(self, key: str, value: float) -> "Var":
        """Store a new float under ``key`` and return it."""
        self._require(VarType.MAP)
        return self.set_item(key, Var().set_float(value))

    def set_map_str(self, key: str, value: str) -> "Var":
        """Store a new string under ``key`` and return it."""
        self._require(VarType.MAP)
        return self.set_item(key, Var().set_str(value))

    def set_map_arr(self, key: str) -> "Var":
        """Store a new empty array under ``key`` and return it."""
        return self.set_item(key, Var().set_arr())

    def set_map_map(self, key: str) -> "Var":
        """Store a new empty map under ``key`` and return it."""
        return self.set_item(key, Var().set_map())

    def set_map_buf(
        self, key: str, data: Optional[BytesLike] = None, length: Optional[int] = None
    ) -> "Var":
        """Store a new buffer under ``key`` and return it."""
        self._require(VarType.MAP)
        return self.set_item(key, Var().set_buf(data, length))

    # Getters

    def is_null(self) -> bool:
        """Return True if this value is null."""
        return self._type is VarType.NULL

    def as_bool(self) -> bool:
        """Return the boolean held."""
        self._require(VarType.BOOL)
        return self._value

    def as_int(self) -> int:
        """Return the integer held."""
        self._require(VarType.INT)
        return self._value

    def as_float(self) -> float:
        """Return the float held."""
        self._require(VarType.FLOAT)
        return self._value

    def as_num(self) -> float:
        """Return the integer or float held, as a float."""
        if self._type in (VarType.INT, VarType.FLOAT):
            return float(self._value)
        raise VarTypeError(f"value is {self._type.name}, not a number")

    def as_str(self) -> str:
        """Return the string held."""
        self._require(VarType.STR)
        return self._value

    def as_buf(self) -> bytes:
        """Return a copy of the bytes held."""
        self._require(VarType.BUF)
        return bytes(self._value)

    def __len__(self) -> int:
        if self._type in (VarType.ARR, VarType.MAP):
            return len(self._value)
        raise VarTypeError(f"value is {self._type.name}, not an array or map")

    def at(self, index: int) -> "Var":
        """Return the array element at ``index``."""
        self._require(VarType.ARR)
        if not 0 <= index < len(self._value):
            raise IndexError("invalid index")
        return self._value[index]

    def get(self, key: str) -> Optional["Var"]:
        """Return the map value under ``key`` or None if absent."""
        self._require(VarType.MAP)
        return self._value.get(key)

    def key_at(self, order: int) -> str:
        """Return the map key inserted in position ``order``."""
        self._require(VarType.MAP)
        keys = list(self._value)
        if not 0 <= order < len(keys):
            raise IndexError("invalid key order")
        return keys[order]

    def keys(self) -> List[str]:
        """Return the map keys in insertion order."""
        self._require(VarType.MAP)
        entries: Dict[str, Var] = self._value
        return list(entries)