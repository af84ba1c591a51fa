from __future__ import annotations
from typing import Any, Generic, Iterator, Optional, Tuple, TypeVar

from sparse_matrix.structures.coordinate import Coordinate
from sparse_matrix.structures.sparse_store import SparseStore

T = TypeVar("T")

EntryView = Tuple[Any, ...]


class EntryIterator(Generic[T]):
    """
    Forward-only iterator over the stored cells of a sparse matrix.

    Each step yields an entry view: the coordinate components followed by the
    value, e.g. `(i, j, value)` for a 2D matrix. Cells are visited in ascending
    lexicographic coordinate order and only stored (non-default) cells are
    visited. A fresh iterator restarts the scan.

    Two iterators compare equal when they walk the same store and sit on the
    same entry, or when both are exhausted.

    Parameters
    ----------
    store : SparseStore[T]
        The store to walk.

    Raises
    ------
    RuntimeError
        From `__next__`, if the store gained or lost entries after the
        iterator was created.
    """
    __slots__ = ("_store", "_keys", "_pos", "_version")

    def __init__(self, store: SparseStore[T]):
        self._store = store
        self._keys = store.sorted_keys()
        self._pos = 0
        self._version = store.version

    @property
    def at_end(self) -> bool:
        """True once every entry has been yielded."""
        return self._pos >= len(self._keys)

    @property
    def current_key(self) -> Optional[Coordinate]:
        """Returns the coordinate the next step will yield, or None at the end."""
        if self.at_end:
            return None
        return self._keys[self._pos]

    def __iter__(self) -> Iterator[EntryView]:
        return self

    def __next__(self) -> EntryView:
        if self._store.version != self._version:
            raise RuntimeError("Sparse matrix changed size during iteration")
        if self.at_end:
            raise StopIteration
        key = self._keys[self._pos]
        self._pos += 1
        return (*key, self._store.get(key))

    def __length_hint__(self) -> int:
        return len(self._keys) - self._pos

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, EntryIterator):
            return NotImplemented
        if self.at_end and other.at_end:
            return True
        return self._store is other._store and self.current_key == other.current_key

    __hash__ = None  # type: ignore[assignment]

    def __repr__(self) -> str:
        return f"EntryIterator(position={self._pos}, remaining={self.__length_hint__()})"
