"""Doubly linked lists and hashed containers of singly linked buckets."""

from __future__ import annotations

from typing import Any, Callable, Generic, Iterable, Iterator, TypeVar

from .arrays import numeric_compare
from .lists import LinkedList, _merge_sort

T = TypeVar("T")

Comparator = Callable[[Any, Any], int]
HashFunction = Callable[[Any], int]

_UNSIGNED_MASK = 0xFFFFFFFF


class DoublyLinkedList(Generic[T]):
    """A doubly linked list reached through a handle on one of its elements.

    New elements go in just before the handle (``add``/``add_before``) or just
    after it (``add_after``). Searches start at the handle, walk back to the
    first element and then forward from the element after the handle.
    Iteration runs from the first element to the last.
    """

    def __init__(self, values: Iterable[T] = (), compare: Comparator = numeric_compare) -> None:
        self.compare = compare
        self._items: list[T] = []
        self._cursor = 0
        for value in values:
            self.add(value)

    def __iter__(self) -> Iterator[T]:
        return iter(list(self._items))

    def __len__(self) -> int:
        return len(self._items)

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self._items!r})"

    @property
    def current(self) -> T | None:
        """The element the list handle points at, or ``None`` when empty."""
        return self._items[self._cursor] if self._items else None

    def _search_order(self) -> Iterator[int]:
        if not self._items:
            return
        yield from range(self._cursor, -1, -1)
        yield from range(self._cursor + 1, len(self._items))

    def _find_index(self, value: T) -> int | None:
        return next(
            (i for i in self._search_order() if self.compare(self._items[i], value) == 0),
            None,
        )

    def add_before(self, value: T) -> None:
        """Insert ``value`` immediately before the handle."""
        if not self._items:
            self._items.append(value)
            self._cursor = 0
            return
        self._items.insert(self._cursor, value)
        self._cursor += 1

    def add(self, value: T) -> None:
        """Insert ``value`` immediately before the handle."""
        self.add_before(value)

    def add_after(self, value: T) -> None:
        """Insert ``value`` immediately after the handle."""
        if not self._items:
            self._items.append(value)
            self._cursor = 0
            return
        self._items.insert(self._cursor + 1, value)

    def add_if_not_member(self, value: T) -> bool:
        """Add ``value`` unless an equal element is present; return whether it was added."""
        if self._find_index(value) is not None:
            return False
        self.add(value)
        return True

    def delete_if_member(self, value: T) -> T | None:
        """Remove and return an element comparing equal to ``value``, if any.

        If the handle's own element goes, the handle moves to its predecessor,
        or to its successor when there is none.
        """
        index = self._find_index(value)
        if index is None:
            return None
        removed = self._items.pop(index)
        if index < self._cursor or (index == self._cursor and self._cursor > 0):
            self._cursor -= 1
        if not self._items:
            self._cursor = 0
        return removed

    def find_member(self, value: T) -> T | None:
        """An element comparing equal to ``value``, or ``None``."""
        index = self._find_index(value)
        return None if index is None else self._items[index]

    def first(self) -> T | None:
        """The first element, or ``None`` when the list is empty."""
        return self._items[0] if self._items else None

    def last(self) -> T | None:
        """The last element, or ``None`` when the list is empty."""
        return self._items[-1] if self._items else None

    def sort(self) -> None:
        """Merge sort the list; the handle then points at the first element."""
        self._items = _merge_sort(self._items, self.compare)
        self._cursor = 0

    def reverse(self) -> None:
        """Reverse the order of the elements; the handle keeps its element."""
        self._items.reverse()
        if self._items:
            self._cursor = len(self._items) - 1 - self._cursor


class HashedContainer(Generic[T]):
    """A fixed table of buckets, each an unordered linked list.

    An element lives in bucket ``hash_function(element) % size``, the hash
    taken as an unsigned 32-bit number.
    """

    def __init__(
        self,
        values: Iterable[T] = (),
        size: int = 20,
        hash_function: HashFunction = hash,
        compare: Comparator = numeric_compare,
    ) -> None:
        if size < 1:
            raise ValueError("a hashed container needs at least one bucket")
        self.size = size
        self.hash_function = hash_function
        self.compare = compare
        self._buckets: list[LinkedList[T]] = [LinkedList(compare=compare) for _ in range(size)]
        for value in values:
            self.add(value)

    def __iter__(self) -> Iterator[T]:
        for bucket in self._buckets:
            yield from bucket

    def __len__(self) -> int:
        return sum(len(bucket) for bucket in self._buckets)

    def __repr__(self) -> str:
        return f"{type(self).__name__}({list(self)!r}, size={self.size})"

    def _bucket(self, value: T) -> LinkedList[T]:
        return self._buckets[(self.hash_function(value) & _UNSIGNED_MASK) % self.size]

    def add(self, value: T) -> None:
        """Put ``value`` at the front of its bucket."""
        self._bucket(value).add(value)

    def add_if_not_member(self, value: T) -> bool:
        """Add ``value`` unless an equal element is present; return whether it was added."""
        return self._bucket(value).add_if_not_member(value)

    def delete_if_member(self, value: T) -> T | None:
        """Remove and return an element comparing equal to ``value``, if any."""
        return self._bucket(value).delete_if_member(value)

    def find_member(self, value: T) -> T | None:
        """An element comparing equal to ``value``, or ``None``."""
        return self._bucket(value).find_member(value)