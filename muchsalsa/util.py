"""Small conditional helpers."""

from __future__ import annotations

from collections.abc import Iterable
from typing import TypeVar

T = TypeVar("T")
U = TypeVar("U")


def swap_if(first: T, second: T, predicate: bool) -> tuple[T, T]:
    """Return the pair, swapped when ``predicate`` holds."""
    return (second, first) if predicate else (first, second)


def reverse_if(items: Iterable[T], predicate: bool) -> list[T]:
    """Return the items as a list, reversed when ``predicate`` holds."""
    result = list(items)
    if predicate:
        result.reverse()
    return result


def exchange_if(obj: T, new_value: U, predicate: bool) -> T | U:
    """Return ``new_value`` when ``predicate`` holds, else ``obj``."""
    return new_value if predicate else obj