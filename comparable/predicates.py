# comparable/predicates.py
from __future__ import annotations
import functools
from typing import Any, Iterable, List, Optional

from .dispatch import compare
from .registry import Registry


def less_than(a: Any, b: Any, *, registry: Optional[Registry] = None) -> bool:
    return compare(a, b, registry=registry) < 0


def less_or_equal(a: Any, b: Any, *, registry: Optional[Registry] = None) -> bool:
    return compare(a, b, registry=registry) <= 0


def greater_than(a: Any, b: Any, *, registry: Optional[Registry] = None) -> bool:
    return compare(a, b, registry=registry) > 0


def greater_or_equal(a: Any, b: Any, *, registry: Optional[Registry] = None) -> bool:
    return compare(a, b, registry=registry) >= 0


def equal(a: Any, b: Any, *, registry: Optional[Registry] = None) -> bool:
    return compare(a, b, registry=registry) == 0


def sort(items: Iterable[Any], *, registry: Optional[Registry] = None) -> List[Any]:
    """
    Stable sort into descending order: greater items first, equal items keep
    their input order. Returns a new list.
    """
    key = functools.cmp_to_key(functools.partial(compare, registry=registry))
    return sorted(items, key=key, reverse=True)
