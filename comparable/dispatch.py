# comparable/dispatch.py
"""
Three-way comparison.

Resolution order:
  1. identical operands compare equal without touching the registry;
  2. two numbers, or two values of the same built-in kind, use that kind's
     natural order;
  3. anything else is looked up in the registry under the canonical pair of
     tags, swapping the operands (and negating the result) when the call
     order is not the canonical one.
"""
from __future__ import annotations
import functools
from typing import Any, Callable, Dict, Optional

from . import logging as clog
from .errors import MalformedImplementationError
from .kinds import Kind, Pair, canonical_pair, is_numeric, kind_of, tag_of, type_name
from .registry import Registry, default_registry

_ATOM_RANK = {None: 0, False: 1, True: 2}


def compare(a: Any, b: Any, *, registry: Optional[Registry] = None) -> int:
    """Return -1 if ``a`` < ``b``, 0 if they are equal, 1 if ``a`` > ``b``."""
    if a is b or (type(a) is type(b) and _structurally_equal(a, b)):
        return 0

    reg = registry if registry is not None else default_registry()

    ka = kind_of(a)
    kb = kind_of(b)
    if is_numeric(ka) and is_numeric(kb):
        return _sign(a, b)
    if ka is not None and ka is kb:
        return _BUILTIN_ORDER[ka](a, b, reg)

    tag_a = ka.value if ka is not None else type_name(type(a))
    tag_b = kb.value if kb is not None else type_name(type(b))
    pair, swapped = canonical_pair(tag_a, tag_b)
    impl = reg.lookup(pair)

    clog.log_debug(f"compare {tag_a} with {tag_b} via {impl!r}{' (swapped)' if swapped else ''}")
    if swapped:
        return -_checked(pair, impl.compare(b, a))
    return _checked(pair, impl.compare(a, b))


def _structurally_equal(a: Any, b: Any) -> bool:
    eq = a == b
    return eq is True


def _checked(pair: Pair, result: Any) -> int:
    if type(result) is int and result in (-1, 0, 1):
        return result
    raise MalformedImplementationError(pair, f"compare() returned {result!r}, expected -1, 0 or 1")


def _sign(a: Any, b: Any) -> int:
    if a < b:
        return -1
    if a > b:
        return 1
    return 0


def _compare_atoms(a: Any, b: Any, reg: Registry) -> int:
    return _sign(_ATOM_RANK[a], _ATOM_RANK[b])


def _compare_natural(a: Any, b: Any, reg: Registry) -> int:
    return _sign(a, b)


def _term_group(value: Any) -> str:
    kind = kind_of(value)
    if is_numeric(kind):
        return "Number"
    return kind.value if kind is not None else type_name(type(value))


def _compare_terms(x: Any, y: Any, reg: Registry) -> int:
    # Container elements of unrelated kinds fall back to tag order so containers stay totally ordered.
    gx = _term_group(x)
    gy = _term_group(y)
    if gx != gy:
        pair, _ = canonical_pair(tag_of(x), tag_of(y))
        if pair not in reg:
            return _sign(gx, gy)
    return compare(x, y, registry=reg)


def _compare_elements(a, b, reg: Registry) -> int:
    for x, y in zip(a, b):
        r = _compare_terms(x, y, reg)
        if r:
            return r
    return 0


def _compare_lists(a: list, b: list, reg: Registry) -> int:
    return _compare_elements(a, b, reg) or _sign(len(a), len(b))


def _compare_tuples(a: tuple, b: tuple, reg: Registry) -> int:
    return _sign(len(a), len(b)) or _compare_elements(a, b, reg)


def _compare_maps(a: dict, b: dict, reg: Registry) -> int:
    r = _sign(len(a), len(b))
    if r:
        return r
    key = functools.cmp_to_key(functools.partial(_compare_terms, reg=reg))
    keys_a = sorted(a, key=key)
    keys_b = sorted(b, key=key)
    r = _compare_elements(keys_a, keys_b, reg)
    if r:
        return r
    return _compare_elements([a[k] for k in keys_a], [b[k] for k in keys_b], reg)


def _compare_functions(a: Any, b: Any, reg: Registry) -> int:
    def key(fn):
        module = getattr(fn, "__module__", None) or ""
        qualname = getattr(fn, "__qualname__", None) or type(fn).__qualname__
        return (module, qualname, id(fn))

    return _sign(key(a), key(b))


def _compare_processes(a: Any, b: Any, reg: Registry) -> int:
    def key(p):
        ident = getattr(p, "pid", None)
        if ident is None:
            ident = getattr(p, "ident", None)
        return (ident if ident is not None else -1, str(getattr(p, "name", "") or ""), id(p))

    return _sign(key(a), key(b))


def _compare_references(a: Any, b: Any, reg: Registry) -> int:
    def key(ref):
        target = ref()
        return (0, 0, id(ref)) if target is None else (1, id(target), id(ref))

    return _sign(key(a), key(b))


_BUILTIN_ORDER: Dict[Kind, Callable[[Any, Any, Registry], int]] = {
    Kind.ATOM: _compare_atoms,
    Kind.STRING: _compare_natural,
    Kind.BYTES: _compare_natural,
    Kind.TUPLE: _compare_tuples,
    Kind.LIST: _compare_lists,
    Kind.MAP: _compare_maps,
    Kind.FUNCTION: _compare_functions,
    Kind.PROCESS: _compare_processes,
    Kind.REFERENCE: _compare_references,
}
