"""Persistent association map backed by a plain tuple of pairs.

Keys only need to support ``==``. Nothing is hashed or ordered, so keys may be
lists, dicts, mutable dataclasses or other maps. Every operation is a linear
scan and returns a new map.
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
    Union,
    override,
)

from assoclist.common import MISSING, Box, Iterating, Missing, Sized, find_index

__all__ = ["AssocMap"]


type Pairs[K, V] = Tuple[Tuple[K, V], ...]


@dataclass(frozen=True, eq=False)
class AssocMap[K, V](Sized, Iterating[Tuple[K, V]]):
    """An unordered map from keys to values using only key equality.

    The most recently inserted or updated pair sits at the front of the
    underlying tuple. Callers must not depend on iteration order.
    """

    _pairs: Pairs[K, V]

    @staticmethod
    def empty(
        _kty: Optional[Type[K]] = None, _vty: Optional[Type[V]] = None
    ) -> AssocMap[K, V]:
        """Create an empty map.

        Time Complexity: O(1)
        Space Complexity: O(1)

        Args:
            _kty: Optional key type hint (unused).
            _vty: Optional value type hint (unused).

        Returns:
            An empty map instance.
        """
        return _AMAP_EMPTY

    @staticmethod
    def singleton(key: K, value: V) -> AssocMap[K, V]:
        """Create a map containing a single key-value pair."""
        return AssocMap(((key, value),))

    @staticmethod
    def from_list(pairs: Iterable[Tuple[K, V]]) -> AssocMap[K, V]:
        """Create a map from an iterable of key-value pairs.

        Pairs are inserted left to right, so a later pair overwrites an
        earlier pair with an equal key.

        Time Complexity: O(n^2) where n is the number of pairs
        Space Complexity: O(n)

        Args:
            pairs: Iterable of (key, value) tuples.

        Returns:
            A map containing the last value given for each distinct key.
        """
        box: Box[AssocMap[K, V]] = Box(AssocMap.empty())
        count = 0
        for key, value in pairs:
            box.value = box.value.insert(key, value)
            count += 1
        dropped = count - box.value.size()
        if dropped > 0:
            logging.debug("Map from_list overwrote %d duplicate keys", dropped)
        return box.value

    @override
    def size(self) -> int:
        """Get the number of key-value pairs in the map.

        Time Complexity: O(1)
        """
        return len(self._pairs)

    @override
    def iter(self) -> Iterator[Tuple[K, V]]:
        """Iterate over all key-value pairs in storage order."""
        yield from self._pairs

    def keys(self) -> Iterator[K]:
        for key, _ in self._pairs:
            yield key

    def values(self) -> Iterator[V]:
        for _, value in self._pairs:
            yield value

    def items(self) -> Iterator[Tuple[K, V]]:
        yield from self._pairs

    def to_list(self) -> List[Tuple[K, V]]:
        """Return the pairs as a fresh list that the caller may modify."""
        return list(self._pairs)

    def get(self, key: K) -> Optional[V]:
        """Get the value associated with a key, returning None if not found.

        Scans from the front and returns the value of the first pair whose
        key is equal to the given key. A stored None value is
        indistinguishable from absence here; use member() to tell them apart.

        Time Complexity: O(n)

        Args:
            key: The key to look up.

        Returns:
            The associated value, or None if the key is not present.
        """
        found = _amap_lookup(self._pairs, key)
        return None if isinstance(found, Missing) else found

    def member(self, key: K) -> bool:
        """Check if the map contains the given key.

        Time Complexity: O(n)
        """
        return _amap_find(self._pairs, key) is not None

    def __contains__(self, key: K) -> bool:
        return self.member(key)

    def __getitem__(self, key: K) -> V:
        found = _amap_lookup(self._pairs, key)
        if isinstance(found, Missing):
            raise KeyError(key)
        return found

    def insert(self, key: K, value: V) -> AssocMap[K, V]:
        """Insert or update a key-value pair in the map.

        An existing pair with an equal key is replaced. Either way the pair
        moves to the front; all other pairs keep their relative order.

        Time Complexity: O(n)
        Space Complexity: O(n) for the copied tuple

        Args:
            key: The key to insert or update.
            value: The value to associate with the key.

        Returns:
            A new map with the key-value pair inserted or updated.
        """
        return AssocMap(_amap_insert(self._pairs, key, value))

    def remove(self, key: K) -> AssocMap[K, V]:
        """Remove a key-value pair from the map.

        Time Complexity: O(n)

        Args:
            key: The key to remove.

        Returns:
            A new map without the key, or this map if the key was absent.
        """
        ix = _amap_find(self._pairs, key)
        if ix is None:
            return self
        return AssocMap(_splice_out(self._pairs, ix))

    def update(
        self, key: K, fn: Callable[[Optional[V]], Optional[V]]
    ) -> AssocMap[K, V]:
        """Insert, update or delete a key through a single function.

        The function receives the current value (None when the key is absent).
        Returning a value stores it under the key; returning None removes
        the key, or leaves it absent.

        Time Complexity: O(n) plus the cost of fn

        Args:
            key: The key to alter.
            fn: Maps the current optional value to the new optional value.

        Returns:
            A new map reflecting the result of fn.
        """
        ix = _amap_find(self._pairs, key)
        current = None if ix is None else self._pairs[ix][1]
        match fn(current):
            case None:
                if ix is None:
                    return self
                return AssocMap(_splice_out(self._pairs, ix))
            case value:
                rest = self._pairs if ix is None else _splice_out(self._pairs, ix)
                return AssocMap(((key, value),) + rest)

    def map[W](self, fn: Callable[[K, V], W]) -> AssocMap[K, W]:
        """Transform each value, with access to its key, keeping all keys.

        The result is built directly from the existing pairs; keys are already
        distinct so nothing is re-inserted.

        Time Complexity: O(n) plus the cost of fn

        Args:
            fn: A function from (key, value) to the new value.

        Returns:
            A new map with the same keys and transformed values.
        """
        return AssocMap(tuple((key, fn(key, value)) for key, value in self._pairs))

    def map_values[W](self, fn: Callable[[V], W]) -> AssocMap[K, W]:
        """Transform each value, ignoring keys."""
        return self.map(lambda _, value: fn(value))

    def fold[Z](self, fn: Callable[[K, V, Z], Z], initial: Z) -> Z:
        """Fold over the pairs with an accumulator.

        Every pair is visited exactly once, in storage order.

        Time Complexity: O(n) plus the cost of fn

        Args:
            fn: Takes a key, a value and the accumulator; returns the new
                accumulator.
            initial: The starting accumulator.

        Returns:
            The final accumulator value.
        """
        acc = initial
        for key, value in self._pairs:
            acc = fn(key, value, acc)
        return acc

    def filter(self, predicate: Callable[[K, V], bool]) -> AssocMap[K, V]:
        """Keep only the pairs satisfying the predicate.

        Args:
            predicate: A function of key and value returning True to keep.

        Returns:
            A new map with the matching pairs.
        """
        return AssocMap(
            tuple((key, value) for key, value in self._pairs if predicate(key, value))
        )

    def filter_keys(self, predicate: Callable[[K], bool]) -> AssocMap[K, V]:
        return self.filter(lambda key, _: predicate(key))

    def partition(
        self, predicate: Callable[[K, V], bool]
    ) -> Tuple[AssocMap[K, V], AssocMap[K, V]]:
        """Split the map by a predicate.

        Args:
            predicate: A function of key and value.

        Returns:
            A pair (matching, rest); every original pair appears in exactly
            one of them.
        """
        matching: List[Tuple[K, V]] = []
        rest: List[Tuple[K, V]] = []
        for key, value in self._pairs:
            if predicate(key, value):
                matching.append((key, value))
            else:
                rest.append((key, value))
        return (AssocMap(tuple(matching)), AssocMap(tuple(rest)))

    def union(self, other: AssocMap[K, V]) -> AssocMap[K, V]:
        """Combine two maps, preferring this map's values on key collision.

        Folds this map's pairs into the other map as inserts.

        Time Complexity: O(m * n) where m, n are the sizes of the maps

        Args:
            other: The map to merge into.

        Returns:
            A new map containing every key of either map.
        """
        return self.fold(lambda key, value, acc: acc.insert(key, value), other)

    def intersect(self, other: AssocMap[K, Any]) -> AssocMap[K, V]:
        """Keep the pairs whose key is also a key of the other map.

        Values always come from this map.

        Time Complexity: O(m * n)
        """
        return self.filter(lambda key, _: other.member(key))

    def diff(self, other: AssocMap[K, Any]) -> AssocMap[K, V]:
        """Keep the pairs whose key is not a key of the other map.

        The other map's values are never inspected.

        Time Complexity: O(m * n)
        """
        return self.filter(lambda key, _: not other.member(key))

    def eq(self, other: AssocMap[K, Any]) -> bool:
        """Check that two maps have the same keys, ignoring values.

        Time Complexity: O(n^2)

        Args:
            other: The map to compare against.

        Returns:
            True if both maps have the same size and every key of this map is
            a key of the other.
        """
        return self.size() == other.size() and all(
            other.member(key) for key in self.keys()
        )

    def eq_full(self, other: AssocMap[K, V]) -> bool:
        """Check that two maps have the same keys with equal values.

        Time Complexity: O(n^2)
        """
        if self.size() != other.size():
            return False
        for key, value in self._pairs:
            found = _amap_lookup(other._pairs, key)
            if isinstance(found, Missing) or not value == found:
                return False
        return True

    def __eq__(self, other: Any) -> bool:
        """Compare keys and values, ignoring storage order."""
        if isinstance(other, AssocMap):
            return self.eq_full(other)
        else:
            return False

    def __rshift__(self, pair: Tuple[K, V]) -> AssocMap[K, V]:
        """Alias for insert()."""
        key, value = pair
        return self.insert(key, value)

    def __rlshift__(self, pair: Tuple[K, V]) -> AssocMap[K, V]:
        """Alias for insert()."""
        key, value = pair
        return self.insert(key, value)

    def __add__(self, other: AssocMap[K, V]) -> AssocMap[K, V]:
        """Alias for union()."""
        return self.union(other)


_AMAP_EMPTY: AssocMap[Any, Any] = AssocMap(())


def _amap_find[K, V](pairs: Pairs[K, V], key: K) -> Optional[int]:
    return find_index(pairs, lambda pair: key == pair[0])


def _amap_lookup[K, V](pairs: Pairs[K, V], key: K) -> Union[V, Missing]:
    ix = _amap_find(pairs, key)
    return MISSING if ix is None else pairs[ix][1]


def _amap_insert[K, V](pairs: Pairs[K, V], key: K, value: V) -> Pairs[K, V]:
    ix = _amap_find(pairs, key)
    rest = pairs if ix is None else _splice_out(pairs, ix)
    return ((key, value),) + rest


def _splice_out[K, V](pairs: Pairs[K, V], ix: int) -> Pairs[K, V]:
    return pairs[:ix] + pairs[ix + 1 :]
