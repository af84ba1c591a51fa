from __future__ import annotations
import copy as _copy
import logging
from typing import Any, Generic, Iterator, Optional, Tuple, TypeVar, Union

import numpy as np

from sparse_matrix.structures.coordinate import Coordinate, coordinate_type, make_coordinate
from sparse_matrix.structures.entry_iter import EntryIterator
from sparse_matrix.structures.index_chain import IndexResolver, ValueProxy
from sparse_matrix.structures.sparse_store import SparseStore

logger = logging.getLogger(__name__)

T = TypeVar("T")

Subscript = Union[Any, Tuple[Any, ...]]


class SparseMatrix(Generic[T]):
    """
    An N-dimensional matrix that only stores cells differing from a default value.

    The coordinate space is unbounded: any non-negative integer is a valid index
    on every axis, and cells that were never written read as the default. Cells
    are addressed with chained subscripts, one per axis::

        m = SparseMatrix[int](default=0, ndim=2)
        m[3][4] = 7      # insert
        m[3][4]          # -> 7
        m[0][1]          # -> 0 (default, nothing stored)
        m[3][4] = 0      # writing the default erases the cell

    Iterating yields `(i, j, ..., value)` tuples for the stored cells only, in
    ascending lexicographic coordinate order.

    Parameters
    ----------
    default : T, optional
        The value held by every unstored cell. Defaults to 0.
    ndim : int, optional
        The number of axes. Defaults to 2.

    Raises
    ------
    ValueError
        If `ndim` is smaller than 1.
    """
    __slots__ = ("_store", "__weakref__")

    _read_only = False

    def __init__(self, default: T = 0, ndim: int = 2):  # type: ignore[assignment]
        if ndim < 1:
            raise ValueError(f"A sparse matrix needs at least one axis, got ndim={ndim}")
        self._store: SparseStore[T] = SparseStore(ndim, default)

    @classmethod
    def _from_store(cls, store: SparseStore[T]) -> SparseMatrix[T]:
        matrix = cls.__new__(cls)
        matrix._store = store
        return matrix

    # ------------------------------------------------------------------
    # Shape information
    # ------------------------------------------------------------------
    @property
    def ndim(self) -> int:
        """Returns the number of axes."""
        return self._store.ndim

    @property
    def default(self) -> T:
        """Returns the value held by unstored cells."""
        return self._store.default

    @property
    def coordinate_type(self) -> Any:
        """Returns the coordinate tuple type used for this matrix's keys."""
        return coordinate_type(self._store.ndim)

    def size(self) -> int:
        """Returns the number of cells holding a non-default value."""
        return self._store.size()

    def __len__(self) -> int:
        return self._store.size()

    def bounding_shape(self) -> Tuple[int, ...]:
        """
        Computes the smallest dense shape that contains every stored cell.

        Returns
        -------
        Tuple[int, ...]
            `max index + 1` on each axis, or all zeros for an empty matrix.
        """
        shape = [0] * self._store.ndim
        for coord in self._store:
            for axis, component in enumerate(coord):
                if component >= shape[axis]:
                    shape[axis] = component + 1
        return tuple(shape)

    # ------------------------------------------------------------------
    # Element access
    # ------------------------------------------------------------------
    def _root(self) -> IndexResolver[T]:
        return IndexResolver(self._store, (), self._read_only)

    def __getitem__(self, index: Subscript) -> Union[IndexResolver[T], T]:
        return self._root()[index]

    def __setitem__(self, index: Subscript, value: T) -> None:
        self._root()[index] = value

    def __delitem__(self, index: Subscript) -> None:
        del self._root()[index]

    def cell(self, *coord: int) -> ValueProxy[T]:
        """Returns the value proxy bound to the cell at `coord`."""
        return self._root().cell(coord)

    def get(self, *coord: int) -> T:
        """
        Retrieves the value at the given coordinate.

        Parameters
        ----------
        *coord : int
            One non-negative index per axis.

        Returns
        -------
        T
            The stored value, or the default for an unstored cell.
        """
        return self._store.get(make_coordinate(coord, self._store.ndim))

    def set(self, *args: Any) -> None:
        """
        Writes a value at the given coordinate: `m.set(i, j, value)`.

        Writing the default value removes the cell.

        Raises
        ------
        TypeError
            On a read-only matrix, or when no value is given.
        """
        if not args:
            raise TypeError("set() requires the coordinate components followed by a value")
        *coord, value = args
        self.cell(*coord).set(value)

    def __contains__(self, coord: object) -> bool:
        if not isinstance(coord, tuple):
            coord = (coord,)
        return coord in self._store

    def clear(self) -> None:
        """Removes every stored cell."""
        self._store.clear()

    # ------------------------------------------------------------------
    # Iteration
    # ------------------------------------------------------------------
    def __iter__(self) -> EntryIterator[T]:
        return EntryIterator(self._store)

    def keys(self) -> Iterator[Coordinate]:
        """Yields the stored coordinates in ascending order."""
        return iter(self._store)

    def items(self) -> Iterator[Tuple[Coordinate, T]]:
        """Yields `(coordinate, value)` pairs in ascending coordinate order."""
        return self._store.items()

    # ------------------------------------------------------------------
    # Equality, copy and move
    # ------------------------------------------------------------------
    def __eq__(self, other: object) -> bool:
        if not isinstance(other, SparseMatrix):
            return NotImplemented
        return self._store == other._store

    __hash__ = None  # type: ignore[assignment]

    def copy(self) -> SparseMatrix[T]:
        """Returns a mutable matrix with an independent copy of the stored cells."""
        return SparseMatrix._from_store(self._store.copy())

    def __copy__(self) -> SparseMatrix[T]:
        return type(self)._from_store(self._store.copy())

    def __deepcopy__(self, memo: dict) -> SparseMatrix[T]:
        return type(self)._from_store(_copy.deepcopy(self._store, memo))

    def assign(self, other: SparseMatrix[T]) -> SparseMatrix[T]:
        """
        Copy-assigns `other`'s cells into this matrix and returns self.

        Raises
        ------
        ValueError
            If the two matrices differ in dimensionality or default value.
        """
        self._check_compatible(other)
        self._store.assign(other._store)
        return self

    def take(self) -> SparseMatrix[T]:
        """Moves the stored cells into a new matrix, leaving this one empty."""
        return SparseMatrix._from_store(self._store.take())

    def move_from(self, other: SparseMatrix[T]) -> SparseMatrix[T]:
        """Move-assigns `other`'s cells into this matrix, leaving `other` empty."""
        self._check_compatible(other)
        self._store.move_from(other._store)
        return self

    def _check_compatible(self, other: SparseMatrix[T]) -> None:
        if other._store.ndim != self._store.ndim or other._store.default != self._store.default:
            raise ValueError(
                f"Incompatible sparse matrices: ndim={other.ndim}, default={other.default!r} "
                f"cannot be assigned to ndim={self.ndim}, default={self.default!r}"
            )

    def readonly(self) -> ReadOnlySparseMatrix[T]:
        """Returns a read-only view over this matrix's storage."""
        return ReadOnlySparseMatrix(self)

    # ------------------------------------------------------------------
    # Dense conversion
    # ------------------------------------------------------------------
    def to_dense(self, shape: Optional[Tuple[int, ...]] = None, dtype: Any = None) -> np.ndarray:
        """
        Materializes the matrix as a dense NumPy array.

        Parameters
        ----------
        shape : Optional[Tuple[int, ...]]
            The output shape. Defaults to `bounding_shape()`. Stored cells that
            fall outside it are left out.
        dtype : Any, optional
            The array dtype. If None, NumPy infers it from the default value
            together with every stored value, so an int default does not
            truncate stored floats.

        Returns
        -------
        np.ndarray
            An array filled with the default and overwritten with stored cells.
        """
        if shape is None:
            shape = self.bounding_shape()
        if len(shape) != self._store.ndim:
            raise ValueError(f"Shape {shape} does not match ndim={self._store.ndim}")

        if dtype is None:
            dtype = self._infer_dense_dtype()
        dense = np.full(shape, self._store.default, dtype=dtype)
        dropped = 0
        for coord, value in self._store.items():
            if all(c < s for c, s in zip(coord, shape)):
                dense[coord] = value
            else:
                dropped += 1
        if dropped:
            logger.debug(f"to_dense: {dropped} stored cells fall outside shape {shape}")
        return dense

    def _infer_dense_dtype(self) -> np.dtype:
        values = [self._store.default, *(value for _, value in self._store.items())]
        try:
            inferred = np.asarray(values)
        except ValueError:
            # ragged sequences
            return np.dtype(object)
        # Sequence-valued cells need one object slot per cell.
        return inferred.dtype if inferred.ndim == 1 else np.dtype(object)

    @classmethod
    def from_dense(cls, array: Any, default: Any = 0) -> SparseMatrix[Any]:
        """
        Builds a sparse matrix from a dense array, storing only non-default cells.

        Parameters
        ----------
        array : array_like
            Any input accepted by `numpy.asarray` with at least one dimension.
        default : Any, optional
            The default value of the new matrix. Defaults to 0.

        Returns
        -------
        SparseMatrix
            A matrix with `ndim == array.ndim`.
        """
        dense = np.asarray(array)
        matrix: SparseMatrix[Any] = SparseMatrix(default=default, ndim=dense.ndim)
        store = matrix._store
        for coord in zip(*np.nonzero(dense != default)):
            key = tuple(int(c) for c in coord)
            value = dense[key]
            store.set(key, value.item() if isinstance(value, np.generic) else value)
        logger.debug(f"from_dense: stored {store.size()} of {dense.size} cells")
        return matrix

    def __repr__(self) -> str:
        return (
            f"{type(self).__name__}(ndim={self._store.ndim}, "
            f"default={self._store.default!r}, size={self._store.size()})"
        )


class ReadOnlySparseMatrix(SparseMatrix[T]):
    """
    A read-only projection over another sparse matrix's storage.

    The view shares the source's store, so it reflects later writes made through
    the source, but every write path through the view raises `TypeError`. Copies
    taken from the view (`copy()`) are ordinary, mutable matrices.

    Parameters
    ----------
    source : SparseMatrix[T]
        The matrix to project.
    """
    __slots__ = ()

    _read_only = True

    def __init__(self, source: SparseMatrix[T]):
        self._store = source._store

    def _refuse(self, action: str) -> None:
        raise TypeError(f"Cannot {action} a read-only sparse matrix")

    def clear(self) -> None:
        self._refuse("clear")

    def assign(self, other: SparseMatrix[T]) -> SparseMatrix[T]:
        self._refuse("assign to")
        return self

    def take(self) -> SparseMatrix[T]:
        self._refuse("move out of")
        return self

    def move_from(self, other: SparseMatrix[T]) -> SparseMatrix[T]:
        self._refuse("move into")
        return self

    def readonly(self) -> ReadOnlySparseMatrix[T]:
        return self
