from __future__ import annotations
from typing import Any, Generic, Tuple, TypeVar, Union

from sparse_matrix.structures.coordinate import Coordinate, normalize_index
from sparse_matrix.structures.sparse_store import SparseStore

T = TypeVar("T")


class ValueProxy(Generic[T]):
    """
    Accessor bound to one fully resolved cell of a sparse matrix.

    The proxy holds no data of its own: reads delegate to `SparseStore.get`
    and writes to `SparseStore.set`, so writing the default value erases the
    cell. It is the only place element data is mutated through subscripting.

    Parameters
    ----------
    store : SparseStore[T]
        The backing store (borrowed, not owned).
    coord : Coordinate
        The complete coordinate of the cell.
    read_only : bool, optional
        If True, writes raise `TypeError`. By default False.
    """
    __slots__ = ("_store", "_coord", "_read_only")

    def __init__(self, store: SparseStore[T], coord: Coordinate, read_only: bool = False):
        self._store = store
        self._coord = coord
        self._read_only = read_only

    @property
    def coord(self) -> Coordinate:
        """Returns the coordinate this proxy is bound to."""
        return self._coord

    @property
    def read_only(self) -> bool:
        return self._read_only

    def get(self) -> T:
        """Returns the cell value, or the default if the cell is not stored."""
        return self._store.get(self._coord)

    def set(self, value: T) -> None:
        """
        Writes `value` to the cell.

        Raises
        ------
        TypeError
            If the proxy was obtained through a read-only path.
        """
        if self._read_only:
            raise TypeError(f"Cannot assign to cell {self._coord} of a read-only sparse matrix")
        self._store.set(self._coord, value)

    value = property(get, set)

    def delete(self) -> None:
        """Resets the cell to the default value, removing its entry."""
        self.set(self._store.default)

    @property
    def is_set(self) -> bool:
        """True if the cell currently holds a non-default value."""
        return self._coord in self._store

    def __eq__(self, other: object) -> bool:
        if isinstance(other, ValueProxy):
            other = other.get()
        return self.get() == other

    __hash__ = None  # type: ignore[assignment]

    def __repr__(self) -> str:
        return f"ValueProxy(coord={self._coord}, value={self.get()!r})"


class IndexResolver(Generic[T]):
    """
    Per-axis accessor returned by each subscript of a sparse matrix.

    A resolver carries the coordinate prefix accumulated so far and a
    reference to the backing store. Subscripting it narrows one more axis: while
    axes remain it returns a new resolver, and once the final axis is reached
    the read or write is carried out through a `ValueProxy`.

    Resolvers are meant to be consumed within a single indexing expression such
    as `matrix[i][j][k] = v`. A retained resolver keeps observing the same store
    object, including after that store has been cleared or its entries moved out.

    Parameters
    ----------
    store : SparseStore[T]
        The backing store (borrowed, not owned).
    prefix : Coordinate, optional
        The components already resolved. Defaults to the empty prefix.
    read_only : bool, optional
        If True, the terminal write raises `TypeError`. By default False.

    Notes
    -----
    - Tuple subscripts (`resolver[i, j]`) resolve several axes at once.
    - The number of remaining axes is checked at runtime; assigning before the
      final axis is reached raises `TypeError`.
    """
    __slots__ = ("_store", "_prefix", "_read_only")

    def __init__(self, store: SparseStore[T], prefix: Coordinate = (), read_only: bool = False):
        self._store = store
        self._prefix = prefix
        self._read_only = read_only

    @property
    def prefix(self) -> Coordinate:
        """Returns the coordinate components resolved so far."""
        return self._prefix

    @property
    def axes_remaining(self) -> int:
        """Returns how many more subscripts are needed to reach a cell."""
        return self._store.ndim - len(self._prefix)

    @property
    def read_only(self) -> bool:
        return self._read_only

    def _extend(self, index: Union[Any, Tuple[Any, ...]]) -> Coordinate:
        """Appends the subscript component(s) to the prefix after validating them."""
        components = index if isinstance(index, tuple) else (index,)
        if not components:
            raise IndexError("Empty subscript; at least one index is required")
        remaining = self.axes_remaining
        if len(components) > remaining:
            raise IndexError(
                f"Too many indices for a {self._store.ndim}-dimensional sparse matrix: "
                f"{len(components)} given with {remaining} axes remaining"
            )
        return self._prefix + tuple(normalize_index(c) for c in components)

    def cell(self, index: Union[Any, Tuple[Any, ...]]) -> ValueProxy[T]:
        """
        Resolves the final axis (or axes) and returns the terminal proxy.

        Raises
        ------
        IndexError
            If the subscript does not complete the coordinate.
        """
        coord = self._extend(index)
        if len(coord) < self._store.ndim:
            raise IndexError(
                f"Subscript {coord} is incomplete: {self._store.ndim - len(coord)} axes remain"
            )
        return ValueProxy(self._store, coord, self._read_only)

    def __getitem__(self, index: Union[Any, Tuple[Any, ...]]) -> Union[IndexResolver[T], T]:
        coord = self._extend(index)
        if len(coord) < self._store.ndim:
            return IndexResolver(self._store, coord, self._read_only)
        return ValueProxy(self._store, coord, self._read_only).get()

    def __setitem__(self, index: Union[Any, Tuple[Any, ...]], value: T) -> None:
        coord = self._extend(index)
        if len(coord) < self._store.ndim:
            raise TypeError(
                f"Cannot assign to partial index {coord}: "
                f"{self._store.ndim - len(coord)} more axes must be indexed first"
            )
        ValueProxy(self._store, coord, self._read_only).set(value)

    def __delitem__(self, index: Union[Any, Tuple[Any, ...]]) -> None:
        self.cell(index).delete()

    def __repr__(self) -> str:
        return f"IndexResolver(prefix={self._prefix}, axes_remaining={self.axes_remaining})"
