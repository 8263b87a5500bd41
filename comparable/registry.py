# comparable/registry.py
from __future__ import annotations
import threading
from typing import Any, Callable, Dict, Optional, Union

from . import logging as clog
from .errors import (
    DuplicateImplementationError,
    MalformedImplementationError,
    NoImplementationError,
    UnorderedRegistrationError,
)
from .interface import FunctionImplementation, Implementation
from .kinds import Pair, tag_for_type

ON_DUPLICATE_POLICIES = ("error", "replace")

CompareFn = Union[Implementation, Callable[[Any, Any], int]]


class Registry:
    """
    Canonical pair key -> Implementation.

    Writes are serialised behind a lock; reads are plain dict lookups, so the
    registry should be fully populated before comparisons start.
    """

    def __init__(self, *, on_duplicate: str = "error"):
        self.on_duplicate = _normalize_policy(on_duplicate)
        self._impls: Dict[Pair, Implementation] = {}
        self._lock = threading.Lock()

    def register(self, type_a: Any, type_b: Any, compare_fn: CompareFn) -> Implementation:
        tag_a = tag_for_type(type_a)
        tag_b = tag_for_type(type_b)
        if tag_a > tag_b:
            raise UnorderedRegistrationError(tag_a, tag_b)
        pair = (tag_a, tag_b)

        if isinstance(compare_fn, type) and issubclass(compare_fn, Implementation):
            compare_fn = compare_fn()
            if compare_fn.pair is None:
                compare_fn.pair = pair

        if isinstance(compare_fn, Implementation):
            if compare_fn.pair != pair:
                raise MalformedImplementationError(
                    pair, f"it identifies itself as {compare_fn.pair!r}"
                )
            impl = compare_fn
        else:
            impl = FunctionImplementation(pair, compare_fn)

        with self._lock:
            if pair in self._impls:
                if self.on_duplicate == "error":
                    raise DuplicateImplementationError(pair)
                clog.log_warn(f"Replacing implementation for {tag_a}, {tag_b}")
            self._impls[pair] = impl

        clog.log_debug(f"Registered {impl!r}")
        return impl

    def unregister(self, type_a: Any, type_b: Any) -> Implementation:
        pair = (tag_for_type(type_a), tag_for_type(type_b))
        with self._lock:
            return self._impls.pop(pair)

    def get(self, tag_a: str, tag_b: str) -> Optional[Implementation]:
        return self._impls.get((tag_a, tag_b))

    def lookup(self, pair: Pair) -> Implementation:
        """Checked lookup by canonical key, as used by the dispatcher."""
        impl = self._impls.get(pair)
        if impl is None:
            raise NoImplementationError(*pair)
        reported = getattr(impl, "pair", None)
        if reported != pair:
            raise MalformedImplementationError(pair, f"it identifies itself as {reported!r}")
        if not callable(getattr(impl, "compare", None)):
            raise MalformedImplementationError(pair, "it has no compare()")
        return impl

    def available(self) -> Dict[Pair, Implementation]:
        return dict(self._impls)

    def __contains__(self, pair: object) -> bool:
        return pair in self._impls

    def __len__(self) -> int:
        return len(self._impls)


def _normalize_policy(value: Any) -> str:
    policy = str(value or "").strip().lower()
    if policy not in ON_DUPLICATE_POLICIES:
        raise ValueError(f"on_duplicate must be one of {list(ON_DUPLICATE_POLICIES)}, got {value!r}")
    return policy


_DEFAULT = Registry()


def default_registry() -> Registry:
    return _DEFAULT


def register_implementation(type_a: Any, type_b: Any, compare_fn: CompareFn) -> Implementation:
    return _DEFAULT.register(type_a, type_b, compare_fn)


def get(tag_a: str, tag_b: str) -> Optional[Implementation]:
    return _DEFAULT.get(tag_a, tag_b)


def available() -> Dict[Pair, Implementation]:
    return _DEFAULT.available()


def comparable_for(type_a: Any, type_b: Any, *, registry: Optional[Registry] = None):
    """
    Decorator form of registration.

        @comparable_for(Money, Money)
        def compare_money(a, b): ...

    On an Implementation subclass the class is instantiated without arguments,
    bound to the pair (unless it already declares one) and registered.
    """
    reg = registry if registry is not None else _DEFAULT

    def decorate(target):
        reg.register(type_a, type_b, target)
        return target

    return decorate
