"""Persistent association set backed by a plain tuple of elements.

Elements only need to support ``==``; they are never hashed or ordered.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import (
    Any,
    Callable,
    Iterable,
    Iterator,
    List,
    Optional,
    Tuple,
    Type,
    override,
)

from assoclist.common import Box, Iterating, Sized, find_index

__all__ = ["AssocSet"]


@dataclass(frozen=True, eq=False)
class AssocSet[T](Sized, Iterating[T]):
    """An unordered collection of distinct elements using only equality.

    Callers must not depend on iteration order.
    """

    _elems: Tuple[T, ...]

    @staticmethod
    def empty(_ty: Optional[Type[T]] = None) -> AssocSet[T]:
        """Create an empty set.

        Args:
            _ty: Optional type hint (unused).

        Returns:
            An empty set instance.
        """
        return _ASET_EMPTY

    @staticmethod
    def singleton(value: T) -> AssocSet[T]:
        """Create a set containing a single element.

        Args:
            value: The single element for the set.

        Returns:
            A set containing only the given element.
        """
        return AssocSet((value,))

    @staticmethod
    def from_list(values: Iterable[T]) -> AssocSet[T]:
        """Create a set from an iterable of values.

        Values are inserted left to right. Inserting an element that is
        already present does nothing, so the first of several equal values
        is the one kept. This is the opposite of AssocMap.from_list, where
        the last pair for a key wins.

        Time Complexity: O(n^2)

        Args:
            values: Iterable of values to include in the set.

        Returns:
            A set containing each distinct value once.
        """
        box: Box[AssocSet[T]] = Box(AssocSet.empty())
        count = 0
        for value in values:
            box.value = box.value.insert(value)
            count += 1
        dropped = count - box.value.size()
        if dropped > 0:
            logging.debug("Set from_list skipped %d duplicate elements", dropped)
        return box.value

    @override
    def size(self) -> int:
        return len(self._elems)

    @override
    def iter(self) -> Iterator[T]:
        yield from self._elems

    def to_list(self) -> List[T]:
        """Return the elements as a fresh list that the caller may modify."""
        return list(self._elems)

    def member(self, value: T) -> bool:
        """Check if a value is present in the set.

        Time Complexity: O(n)

        Args:
            value: The value to search for.

        Returns:
            True if an equal value is in the set, False otherwise.
        """
        return _aset_find(self._elems, value) is not None

    def __contains__(self, value: T) -> bool:
        """Support 'in' operator for membership testing."""
        return self.member(value)

    def insert(self, value: T) -> AssocSet[T]:
        """Insert a value into the set.

        Time Complexity: O(n)

        Args:
            value: The value to insert.

        Returns:
            This set if an equal value is already present, otherwise a new
            set with the value at the front.
        """
        if self.member(value):
            return self
        return AssocSet((value,) + self._elems)

    def remove(self, value: T) -> AssocSet[T]:
        """Remove a value from the set.

        Time Complexity: O(n)

        Args:
            value: The value to remove.

        Returns:
            A new set without the value, or this set if it was absent.
        """
        ix = _aset_find(self._elems, value)
        if ix is None:
            return self
        return AssocSet(self._elems[:ix] + self._elems[ix + 1 :])

    def fold[Z](self, fn: Callable[[T, Z], Z], initial: Z) -> Z:
        """Fold over the elements with an accumulator.

        Every element is visited exactly once, in storage order.

        Args:
            fn: Takes an element and the accumulator; returns the new
                accumulator.
            initial: The starting accumulator.

        Returns:
            The final accumulator value.
        """
        acc = initial
        for value in self._elems:
            acc = fn(value, acc)
        return acc

    def filter(self, predicate: Callable[[T], bool]) -> AssocSet[T]:
        """Keep only the elements satisfying the predicate."""
        return AssocSet(tuple(value for value in self._elems if predicate(value)))

    def partition(
        self, predicate: Callable[[T], bool]
    ) -> Tuple[AssocSet[T], AssocSet[T]]:
        """Split the set by a predicate.

        Returns:
            A pair (matching, rest); every original element appears in
            exactly one of them.
        """
        matching: List[T] = []
        rest: List[T] = []
        for value in self._elems:
            if predicate(value):
                matching.append(value)
            else:
                rest.append(value)
        return (AssocSet(tuple(matching)), AssocSet(tuple(rest)))

    def map[U](self, fn: Callable[[T], U]) -> AssocSet[U]:
        """Apply a function to every element.

        Results are inserted one at a time, so equal images collapse and the
        result may be smaller than this set.

        Time Complexity: O(n^2) plus the cost of fn

        Args:
            fn: The function to apply.

        Returns:
            A new set of the distinct results.
        """
        empty: AssocSet[U] = AssocSet.empty()
        return self.fold(lambda value, acc: acc.insert(fn(value)), empty)

    def union(self, other: AssocSet[T]) -> AssocSet[T]:
        """Return the union of two sets.

        Folds this set's elements into the other set as inserts.

        Time Complexity: O(m * n) where m, n are sizes of the sets

        Args:
            other: The set to union with this one.

        Returns:
            A new set containing all elements from both sets.
        """
        return self.fold(lambda value, acc: acc.insert(value), other)

    def intersect(self, other: AssocSet[T]) -> AssocSet[T]:
        """Return the elements of this set that are also in the other.

        Time Complexity: O(m * n)
        """
        return self.filter(other.member)

    def diff(self, other: AssocSet[T]) -> AssocSet[T]:
        """Return the elements of this set that are not in the other.

        Time Complexity: O(m * n)
        """
        return self.filter(lambda value: not other.member(value))

    def symdiff(self, other: AssocSet[T]) -> AssocSet[T]:
        """Symmetric difference.

        Args:
            other: The set to compute symmetric difference with.

        Returns:
            A new set containing elements in either set but not in both.
        """
        return self.diff(other).union(other.diff(self))

    def eq(self, other: AssocSet[T]) -> bool:
        """Check that two sets hold equal elements, ignoring order.

        Time Complexity: O(n^2)
        """
        return self.size() == other.size() and all(
            other.member(value) for value in self._elems
        )

    def __eq__(self, other: Any) -> bool:
        if isinstance(other, AssocSet):
            return self.eq(other)
        else:
            return False

    def __rshift__(self, value: T) -> AssocSet[T]:
        """Insert element using >> operator (element on right)."""
        return self.insert(value)

    def __rlshift__(self, value: T) -> AssocSet[T]:
        """Insert element using << operator (element on left)."""
        return self.insert(value)

    def __or__(self, other: AssocSet[T]) -> AssocSet[T]:
        """Alias for union()."""
        return self.union(other)

    def __and__(self, other: AssocSet[T]) -> AssocSet[T]:
        """Alias for intersect()."""
        return self.intersect(other)

    def __sub__(self, other: AssocSet[T]) -> AssocSet[T]:
        """Alias for diff()."""
        return self.diff(other)

    def __xor__(self, other: AssocSet[T]) -> AssocSet[T]:
        """Alias for symdiff()."""
        return self.symdiff(other)


_ASET_EMPTY: AssocSet[Any] = AssocSet(())


def _aset_find[T](elems: Tuple[T, ...], value: T) -> Optional[int]:
    return find_index(elems, lambda elem: value == elem)
