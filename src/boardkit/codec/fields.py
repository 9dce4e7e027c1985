"""Typed field readers and writers shared by every widget shape.

Readers pull one key out of a decoded JSON object and check its JSON
type, returning ``None`` when the key is absent or ``null``.  Any type
mismatch raises ``DecodeError`` with the full JSON path of the field.

Writers are the inverse: they add a key to an output dict only when the
value is not ``None``, so absent fields stay absent while present zero
and empty values are always emitted.
"""
from __future__ import annotations

import math
from collections.abc import Callable, Mapping, Sequence
from typing import Any, TypeVar

from boardkit.codec.errors import DecodeError

T = TypeVar("T")

JsonObject = Mapping[str, Any]
Builder = Callable[[JsonObject, str], T]
Dumper = Callable[[T], dict[str, object]]


# ---------------------------------------------------------------------------
# Paths
# ---------------------------------------------------------------------------


def child_path(path: str, key: str) -> str:
    """Return the JSON path of ``key`` inside the object at ``path``."""
    return f"{path}.{key}"


def item_path(path: str, index: int) -> str:
    """Return the JSON path of element ``index`` of the array at ``path``."""
    return f"{path}[{index}]"


def _json_type(value: object) -> str:
    if value is None:
        return "null"
    if isinstance(value, bool):
        return "boolean"
    if isinstance(value, (int, float)):
        return "number"
    if isinstance(value, str):
        return "string"
    if isinstance(value, Mapping):
        return "object"
    if isinstance(value, (list, tuple)):
        return "array"
    return type(value).__name__


def _mismatch(expected: str, value: object, path: str) -> DecodeError:
    return DecodeError(f"Expected {expected}, found {_json_type(value)}", path)


# ---------------------------------------------------------------------------
# Readers
# ---------------------------------------------------------------------------


def expect_object(value: object, path: str) -> JsonObject:
    """Return ``value`` if it is a JSON object, else raise ``DecodeError``."""
    if not isinstance(value, Mapping):
        raise _mismatch("object", value, path)
    return value


def opt_str(obj: JsonObject, key: str, path: str) -> str | None:
    value = obj.get(key)
    if value is None:
        return None
    if not isinstance(value, str):
        raise _mismatch("string", value, child_path(path, key))
    return value


def opt_bool(obj: JsonObject, key: str, path: str) -> bool | None:
    value = obj.get(key)
    if value is None:
        return None
    if not isinstance(value, bool):
        raise _mismatch("boolean", value, child_path(path, key))
    return value


def opt_int(obj: JsonObject, key: str, path: str) -> int | None:
    """Read an integer; integral floats such as ``3.0`` are accepted."""
    value = obj.get(key)
    if value is None:
        return None
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise _mismatch("integer", value, child_path(path, key))
    if isinstance(value, float):
        if not value.is_integer():
            raise _mismatch("integer", value, child_path(path, key))
        return int(value)
    return value


def opt_float(obj: JsonObject, key: str, path: str) -> float | None:
    value = obj.get(key)
    if value is None:
        return None
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise _mismatch("number", value, child_path(path, key))
    if not math.isfinite(value):
        raise DecodeError(f"Expected finite number, found {value!r}", child_path(path, key))
    return float(value)


def _opt_array(obj: JsonObject, key: str, path: str) -> Sequence[object] | None:
    value = obj.get(key)
    if value is None:
        return None
    if not isinstance(value, (list, tuple)):
        raise _mismatch("array", value, child_path(path, key))
    return value


def opt_str_list(obj: JsonObject, key: str, path: str) -> tuple[str, ...] | None:
    items = _opt_array(obj, key, path)
    if items is None:
        return None
    base = child_path(path, key)
    result: list[str] = []
    for i, item in enumerate(items):
        if not isinstance(item, str):
            raise _mismatch("string", item, item_path(base, i))
        result.append(item)
    return tuple(result)


def opt_object(obj: JsonObject, key: str, path: str, build: Builder[T]) -> T | None:
    """Read a nested object and convert it with ``build(data, path)``."""
    value = obj.get(key)
    if value is None:
        return None
    field_path = child_path(path, key)
    return build(expect_object(value, field_path), field_path)


def opt_object_list(
    obj: JsonObject, key: str, path: str, build: Builder[T]
) -> tuple[T, ...] | None:
    """Read an array of objects, converting each element with ``build``.

    Elements are converted in order and the first failure propagates.
    """
    items = _opt_array(obj, key, path)
    if items is None:
        return None
    base = child_path(path, key)
    result: list[T] = []
    for i, item in enumerate(items):
        element_path = item_path(base, i)
        result.append(build(expect_object(item, element_path), element_path))
    return tuple(result)


# ---------------------------------------------------------------------------
# Writers
# ---------------------------------------------------------------------------


def put(out: dict[str, object], key: str, value: object) -> None:
    """Set ``out[key]`` unless ``value`` is ``None``."""
    if value is not None:
        out[key] = value


def put_list(out: dict[str, object], key: str, values: Sequence[object] | None) -> None:
    if values is not None:
        out[key] = list(values)


def put_object(out: dict[str, object], key: str, value: T | None, dump: Dumper[T]) -> None:
    if value is not None:
        out[key] = dump(value)


def put_object_list(
    out: dict[str, object], key: str, values: Sequence[T] | None, dump: Dumper[T]
) -> None:
    if values is not None:
        out[key] = [dump(v) for v in values]
