# comparable/__init__.py
from __future__ import annotations

from .dispatch import compare
from .errors import (
    ComparableError,
    DuplicateImplementationError,
    MalformedImplementationError,
    NoImplementationError,
    UnorderedRegistrationError,
)
from .interface import FunctionImplementation, Implementation
from .kinds import Kind, kind_of, tag_for_type, tag_of
from .predicates import equal, greater_or_equal, greater_than, less_or_equal, less_than, sort
from .registry import (
    Registry,
    available,
    comparable_for,
    default_registry,
    get,
    register_implementation,
)

__all__ = [
    "compare",
    "less_than",
    "less_or_equal",
    "greater_than",
    "greater_or_equal",
    "equal",
    "sort",
    "register_implementation",
    "comparable_for",
    "get",
    "available",
    "default_registry",
    "Registry",
    "Implementation",
    "FunctionImplementation",
    "Kind",
    "kind_of",
    "tag_of",
    "tag_for_type",
    "ComparableError",
    "UnorderedRegistrationError",
    "DuplicateImplementationError",
    "NoImplementationError",
    "MalformedImplementationError",
]
