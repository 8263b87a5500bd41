# comparable/errors.py
from __future__ import annotations
from typing import Tuple


class ComparableError(Exception):
    """Base class for every usage error raised by this package."""


class UnorderedRegistrationError(ComparableError, ValueError):
    def __init__(self, tag_a: str, tag_b: str):
        self.tag_a = tag_a
        self.tag_b = tag_b
        super().__init__(
            f"Implementation registered with types in non-canonical order `{tag_a}, {tag_b}`! "
            f"Register it as `{tag_b}, {tag_a}` instead."
        )


class DuplicateImplementationError(ComparableError, ValueError):
    def __init__(self, pair: Tuple[str, str]):
        self.pair = pair
        super().__init__(f"An implementation for `{pair[0]}, {pair[1]}` is already registered.")


class NoImplementationError(ComparableError, TypeError):
    def __init__(self, tag_a: str, tag_b: str):
        self.tag_a = tag_a
        self.tag_b = tag_b
        super().__init__(f"No comparison implementation exists for `{tag_a}` and `{tag_b}`.")


class MalformedImplementationError(ComparableError, TypeError):
    """
    A registered implementation does not identify itself as the pair it was
    looked up under, or returned something other than -1, 0 or 1.
    """

    def __init__(self, pair: Tuple[str, str], detail: str):
        self.pair = pair
        super().__init__(f"Implementation for `{pair[0]}, {pair[1]}` is malformed: {detail}")
