from __future__ import annotations
import copy as _copy
import logging
from typing import Dict, Generic, Iterator, List, Tuple, TypeVar

from sparse_matrix.structures.coordinate import Coordinate

logger = logging.getLogger(__name__)

T = TypeVar("T")


class SparseStore(Generic[T]):
    """
    Ordered, self-compacting storage for the non-default cells of a sparse matrix.

    Cells are kept in a dictionary keyed by coordinate tuples. The store never
    materializes a cell whose value equals the default: writing the default
    value removes the entry instead. Iteration walks the keys in ascending
    lexicographic order (axis 0 most significant), which is the natural
    ordering of Python tuples.

    Parameters
    ----------
    ndim : int
        The number of components in every coordinate key.
    default : T
        The value implicitly held by every cell that is not stored.

    Notes
    -----
    - The store is not synchronized; callers must serialize access themselves.
    - `version` counts structural changes (insertions of new keys, removals,
      clears and moves). Overwriting the value of an existing key is not a
      structural change. Iterators use it to detect mutation mid-scan.
    """
    __slots__ = ("_ndim", "_default", "_data", "_version")

    def __init__(self, ndim: int, default: T):
        self._ndim = ndim
        self._default = default
        self._data: Dict[Coordinate, T] = {}
        self._version = 0

    @property
    def ndim(self) -> int:
        """Returns the coordinate arity of the store."""
        return self._ndim

    @property
    def default(self) -> T:
        """Returns the value reported for unstored cells."""
        return self._default

    @property
    def version(self) -> int:
        """Returns the structural mutation counter."""
        return self._version

    def get(self, coord: Coordinate) -> T:
        """
        Retrieves the value stored at `coord`.

        Parameters
        ----------
        coord : Coordinate
            A fully resolved coordinate tuple.

        Returns
        -------
        T
            The stored value, or the default value if the cell is not stored.
        """
        return self._data.get(coord, self._default)

    def set(self, coord: Coordinate, value: T) -> None:
        """
        Writes `value` at `coord`, keeping the no-default-entries invariant.

        Writing the default value erases the entry (a no-op if it is absent);
        any other value inserts a new entry or overwrites the existing one.

        Parameters
        ----------
        coord : Coordinate
            A fully resolved coordinate tuple.
        value : T
            The value to store.
        """
        if value == self._default:
            if coord in self._data:
                del self._data[coord]
                self._version += 1
            return

        if coord not in self._data:
            self._version += 1
        self._data[coord] = value

    def size(self) -> int:
        """Returns the number of stored (non-default) cells."""
        return len(self._data)

    def __len__(self) -> int:
        return len(self._data)

    def __contains__(self, coord: object) -> bool:
        return coord in self._data

    def clear(self) -> None:
        """Removes every stored cell."""
        if self._data:
            logger.debug(f"Clearing {len(self._data)} stored cells")
            self._data.clear()
            self._version += 1

    def sorted_keys(self) -> List[Coordinate]:
        """Returns the stored coordinates in ascending lexicographic order."""
        return sorted(self._data)

    def items(self) -> Iterator[Tuple[Coordinate, T]]:
        """
        Yields `(coordinate, value)` pairs in ascending coordinate order.

        Yields
        ------
        Iterator[Tuple[Coordinate, T]]
            One pair per stored cell.
        """
        data = self._data
        for key in sorted(data):
            yield key, data[key]

    def __iter__(self) -> Iterator[Coordinate]:
        return iter(sorted(self._data))

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, SparseStore):
            return NotImplemented
        if self is other:
            return True
        return (
            self._ndim == other._ndim
            and self._default == other._default
            and self._data == other._data
        )

    __hash__ = None  # type: ignore[assignment]

    def copy(self) -> SparseStore[T]:
        """Returns a new store holding an independent copy of the entry set."""
        clone = SparseStore(self._ndim, self._default)
        clone._data = dict(self._data)
        return clone

    __copy__ = copy

    def __deepcopy__(self, memo: dict) -> SparseStore[T]:
        clone = SparseStore(self._ndim, _copy.deepcopy(self._default, memo))
        memo[id(self)] = clone
        clone._data = {key: _copy.deepcopy(value, memo) for key, value in self._data.items()}
        return clone

    def assign(self, other: SparseStore[T]) -> None:
        """
        Replaces this store's entries with a copy of `other`'s entries.

        Self-assignment is detected by identity and leaves the store untouched.
        """
        if other is self:
            return
        self._data = dict(other._data)
        self._version += 1

    def take(self) -> SparseStore[T]:
        """
        Moves the entry set into a new store, leaving this store empty.

        Returns
        -------
        SparseStore[T]
            A store that now owns the entries previously held here.
        """
        moved = SparseStore(self._ndim, self._default)
        moved._data, self._data = self._data, {}
        self._version += 1
        logger.debug(f"Moved {len(moved._data)} stored cells out of store")
        return moved

    def move_from(self, other: SparseStore[T]) -> None:
        """Takes ownership of `other`'s entries; `other` is left empty."""
        if other is self:
            return
        self._data, other._data = other._data, {}
        self._version += 1
        other._version += 1

    def __repr__(self) -> str:
        return f"SparseStore(ndim={self._ndim}, default={self._default!r}, size={len(self._data)})"
