# comparable/tests/test_dispatch.py
from __future__ import annotations
import math
import threading
import weakref

import pytest

from comparable.dispatch import compare
from comparable.errors import MalformedImplementationError, NoImplementationError
from comparable.registry import Registry
from utility import Money, Opaque, Price


def _f():
    pass


def _g():
    pass


class _Anchor:
    pass


# Reflexivity: every value compares equal to itself, whether or not an implementation exists.
@pytest.mark.parametrize(
    "value",
    [0, -3, 2.5, math.nan, None, True, "abc", b"xy", (1, 2), [1, [2]], {"a": 1}, _f, Opaque(object())],
    ids=repr,
)
def test_compare_reflexive(value):
    assert compare(value, value, registry=Registry()) == 0


# Identity shortcut: equal instances of a record type need no registered implementation.
def test_equal_records_skip_registry():
    assert compare(Opaque(1), Opaque(1), registry=Registry()) == 0


# Numbers: ints and floats are compared by numeric value.
@pytest.mark.parametrize(
    "a,b,expected",
    [(1, 2, -1), (2, 1, 1), (1, 1.0, 0), (1.5, 1, 1), (-2, -1.5, -1), (10**20, 1e19, 1)],
)
def test_numeric_order(a, b, expected):
    assert compare(a, b) == expected
    assert compare(b, a) == -expected


# NaN is neither less nor greater than another number.
def test_nan_against_number_is_zero():
    assert compare(math.nan, 1.0) == 0


# Atoms: None < False < True, without going through int comparison.
def test_atom_order():
    assert compare(None, False) == -1
    assert compare(False, True) == -1
    assert compare(True, None) == 1


# Strings and bytes use their natural lexicographic order.
def test_string_and_bytes_order():
    assert compare("apple", "banana") == -1
    assert compare(b"b", bytearray(b"a")) == 1


# Lists compare element-wise, a shorter prefix first.
def test_list_order():
    assert compare([1, 2], [1, 3]) == -1
    assert compare([1, 2], [1, 2, 0]) == -1
    assert compare([2], [1, 9, 9]) == 1


# Tuples compare by size first, then element-wise.
def test_tuple_order():
    assert compare((9,), (1, 1)) == -1
    assert compare((1, 2), (1, 1)) == 1


# Nested containers dispatch elements through the registry too.
def test_list_of_records_uses_registry(registry):
    assert compare([Money(1)], [Money(2)], registry=registry) == -1
    assert compare([Money(3), 1], [Money(3), 0], registry=registry) == 1


# Maps compare by size, then sorted keys, then values in key order.
def test_map_order():
    assert compare({"a": 1}, {"a": 1, "b": 2}) == -1
    assert compare({"a": 1}, {"b": 1}) == -1
    assert compare({"a": 2, "b": 0}, {"b": 0, "a": 1}) == 1
    assert compare({1: "x", "k": 0}, {1: "x", "k": 0.0}) == 0


# Functions have a stable total order.
def test_function_order_is_antisymmetric():
    r = compare(_f, _g)
    assert r in (-1, 1)
    assert compare(_g, _f) == -r


# Threads are ordered as process handles.
def test_process_handles_compare():
    t1 = threading.Thread(target=_f, name="a")
    t2 = threading.Thread(target=_f, name="b")
    assert compare(t1, t2) == -1


# Weak references: dead references sort before live ones.
def test_reference_order():
    live = _Anchor()
    dead = _Anchor()
    r_live = weakref.ref(live)
    r_dead = weakref.ref(dead)
    del dead
    assert compare(r_dead, r_live) == -1


# Registered pair in canonical order: result is returned unchanged.
def test_registered_pair_canonical_order(registry):
    assert compare(Money(1), Price(150), registry=registry) == -1
    assert compare(Money(2), Price(150), registry=registry) == 1


# Call order opposite to registration order: result is negated.
@pytest.mark.parametrize(
    "a,b",
    [(Money(1), Price(150)), (Money(2), Price(200)), (3, Money(2)), (Money(5), Money(10))],
    ids=repr,
)
def test_antisymmetry(registry, a, b):
    assert compare(a, b, registry=registry) == -compare(b, a, registry=registry)


# Builtin kinds mixed with a record type go through the registry as well.
def test_builtin_against_record(registry):
    assert compare(3, Money(2), registry=registry) == 1
    assert compare(Money(2), 3, registry=registry) == -1
    assert compare(Money(3), 3, registry=registry) == 0


# Two record types without an implementation fail with both names in the message.
def test_missing_implementation_names_both_types(registry):
    with pytest.raises(NoImplementationError) as ei:
        compare(Price(1), Opaque(1), registry=registry)
    msg = str(ei.value)
    assert "utility.Price" in msg and "utility.Opaque" in msg


# Two builtin kinds of different shape have no relation unless one is registered.
def test_mixed_builtin_kinds_need_implementation():
    with pytest.raises(NoImplementationError):
        compare(1, "1", registry=Registry())

    reg = Registry()
    reg.register(int, str, lambda i, s: compare(str(i), s))
    assert compare("2", 1, registry=reg) == 1


# Same record type without an implementation cannot be ordered.
def test_unequal_records_without_implementation():
    with pytest.raises(NoImplementationError):
        compare(Opaque(1), Opaque(2), registry=Registry())


# An implementation that no longer identifies as its pair is reported as malformed, not missing.
def test_mismatched_self_report_is_malformed(registry):
    impl = registry.get("utility.Money", "utility.Money")
    impl.pair = ("utility.Money", "utility.Price")
    with pytest.raises(MalformedImplementationError):
        compare(Money(1), Money(2), registry=registry)


# Results outside {-1, 0, 1} are rejected.
@pytest.mark.parametrize("bad", [2, -5, True, None, 0.0])
def test_bad_result_is_malformed(bad):
    reg = Registry()
    reg.register(Opaque, Opaque, lambda a, b: bad)
    with pytest.raises(MalformedImplementationError):
        compare(Opaque(1), Opaque(2), registry=reg)


# Exceptions raised inside an implementation reach the caller unchanged.
def test_implementation_errors_propagate():
    def boom(a, b):
        raise ZeroDivisionError("boom")

    reg = Registry()
    reg.register(Opaque, Opaque, boom)
    with pytest.raises(ZeroDivisionError):
        compare(Opaque(1), Opaque(2), registry=reg)


# Containers of one kind stay totally ordered when their elements are of unrelated kinds.
@pytest.mark.parametrize(
    "a,b,expected",
    [
        ([1], ["a"], -1),
        ([1.5, None], [1.5, "x"], -1),
        ((1,), ("a",), -1),
        ({"a": 1}, {1: 1}, 1),
        ({"k": 1}, {"k": "x"}, -1),
        ([Opaque(1)], [Price(1)], -1),
    ],
    ids=["list", "list-tail", "tuple", "map-keys", "map-values", "list-records"],
)
def test_containers_with_mixed_element_kinds(a, b, expected):
    reg = Registry()
    assert compare(a, b, registry=reg) == expected
    assert compare(b, a, registry=reg) == -expected


# A registered implementation still decides between elements of different kinds.
def test_container_elements_prefer_registered_implementation(registry):
    assert compare([5], [Money(3)], registry=registry) == 1
    assert compare({"k": Money(3)}, {"k": 5}, registry=registry) == -1
