# comparable/kinds.py
"""
Closed classification of built-in values into kinds, and the string tags
used as registry keys.

Every value has a tag: the kind's value for built-ins (``"Integer"``,
``"List"``, ...) or ``"<module>.<qualname>"`` for user record types. Tags are
ordered by plain string comparison; that order only decides which of the two
directions of a pair is the canonical one.
"""
from __future__ import annotations
import functools
import multiprocessing.process
import numbers
import subprocess
import threading
import types
import weakref
from enum import Enum
from typing import Any, Optional, Tuple

Pair = Tuple[str, str]


class Kind(str, Enum):
    INTEGER = "Integer"
    FLOAT = "Float"
    ATOM = "Atom"
    STRING = "String"
    BYTES = "Bytes"
    TUPLE = "Tuple"
    LIST = "List"
    MAP = "Map"
    FUNCTION = "Function"
    PROCESS = "Process"
    REFERENCE = "Reference"


_FUNCTION_TYPES = (
    types.FunctionType,
    types.BuiltinFunctionType,
    types.MethodType,
    functools.partial,
)
_PROCESS_TYPES = (threading.Thread, multiprocessing.process.BaseProcess, subprocess.Popen)

# Checked in order; bool must be seen before Integral.
_KIND_TYPES = (
    (Kind.ATOM, (bool, type(None))),
    (Kind.INTEGER, (numbers.Integral,)),
    (Kind.FLOAT, (numbers.Real,)),
    (Kind.STRING, (str,)),
    (Kind.BYTES, (bytes, bytearray)),
    (Kind.TUPLE, (tuple,)),
    (Kind.LIST, (list,)),
    (Kind.MAP, (dict,)),
    (Kind.FUNCTION, _FUNCTION_TYPES),
    (Kind.PROCESS, _PROCESS_TYPES),
    (Kind.REFERENCE, (weakref.ReferenceType,)),
)

_KINDS_BY_NAME = {k.value.lower(): k for k in Kind}


def kind_of(value: Any) -> Optional[Kind]:
    """Return the built-in kind of ``value``, or None for a user record type."""
    for kind, py_types in _KIND_TYPES:
        if isinstance(value, py_types):
            return kind
    return None


def kind_for_type(t: type) -> Optional[Kind]:
    for kind, py_types in _KIND_TYPES:
        if issubclass(t, py_types):
            return kind
    return None


def kind_named(name: str) -> Optional[Kind]:
    return _KINDS_BY_NAME.get((name or "").strip().lower())


def is_numeric(kind: Optional[Kind]) -> bool:
    return kind is Kind.INTEGER or kind is Kind.FLOAT


def type_name(t: type) -> str:
    return f"{t.__module__}.{t.__qualname__}"


def tag_of(value: Any) -> str:
    kind = kind_of(value)
    if kind is not None:
        return kind.value
    return type_name(type(value))


def tag_for_type(t: Any) -> str:
    """
    Resolve a registration argument to its tag.
      - Kind member        -> its value
      - str                -> taken verbatim as an explicit tag
      - built-in type      -> the kind it belongs to (int -> "Integer")
      - any other class    -> "<module>.<qualname>"
    """
    if isinstance(t, Kind):
        return t.value
    if isinstance(t, str):
        if not t.strip():
            raise ValueError("Type tag must be non-empty")
        return t
    if isinstance(t, type):
        kind = kind_for_type(t)
        return kind.value if kind is not None else type_name(t)
    raise TypeError(f"Expected a type, Kind or tag string, got {type(t).__name__}")


def canonical_pair(tag_a: str, tag_b: str) -> Tuple[Pair, bool]:
    """Return the canonical key for two tags and whether the operands had to be swapped."""
    if tag_a <= tag_b:
        return (tag_a, tag_b), False
    return (tag_b, tag_a), True
