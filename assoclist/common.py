"""Common utility types and functions for the assoclist container library.

This module provides the small base types shared by the map and set
implementations, along with the linear scan that every lookup is built on.
"""

from __future__ import annotations

from abc import ABCMeta, abstractmethod
from dataclasses import dataclass
from typing import Callable, Iterator, Optional, Sequence

__all__ = [
    "Box",
    "Iterating",
    "MISSING",
    "Missing",
    "Sized",
    "find_index",
]


@dataclass
class Box[T]:
    """Mutable container for a single value.

    Lets builders thread an immutable container through a loop.
    """

    value: T


@dataclass(frozen=True)
class Missing:
    """Marker for an absent pair, distinct from a stored None."""

    pass


MISSING = Missing()


class Sized(metaclass=ABCMeta):
    @abstractmethod
    def size(self) -> int: ...

    def is_empty(self) -> bool:
        return self.size() == 0

    def __bool__(self) -> bool:
        return not self.is_empty()

    def __len__(self) -> int:
        return self.size()


class Iterating[U](metaclass=ABCMeta):
    @abstractmethod
    def iter(self) -> Iterator[U]: ...

    def __iter__(self) -> Iterator[U]:
        return self.iter()


def find_index[T](items: Sequence[T], predicate: Callable[[T], bool]) -> Optional[int]:
    """Find the first position whose item satisfies the predicate.

    Time Complexity: O(n)

    Args:
        items: The sequence to scan from the front.
        predicate: Test applied to each item in turn.

    Returns:
        The index of the first matching item, or None if nothing matches.

    Example:
        >>> find_index([[1], [2], [3]], lambda x: x == [2])
        1
    """
    for ix, item in enumerate(items):
        if predicate(item):
            return ix
    return None
