from __future__ import annotations
from functools import lru_cache
from operator import index as op_index
from typing import Any, Iterable, Tuple

Coordinate = Tuple[int, ...]


@lru_cache(maxsize=None)
def coordinate_type(ndim: int) -> Any:
    """
    Builds the fixed-arity coordinate tuple type for a given dimensionality.

    The type is generated recursively: the type for `ndim` is the type for
    `ndim - 1` with one more `int` component appended, and `ndim == 0`
    terminates with the empty tuple type `Tuple[()]`. Index components are
    always integers, so the result does not depend on the element type or
    default value of any matrix using it.

    Parameters
    ----------
    ndim : int
        The number of coordinate components (the matrix dimensionality).

    Returns
    -------
    Any
        A typing alias such as `Tuple[int, int]` for `ndim == 2`.

    Raises
    ------
    ValueError
        If `ndim` is negative.
    """
    if ndim < 0:
        raise ValueError(f"Dimensionality must be non-negative, got {ndim}")
    if ndim == 0:
        return Tuple[()]
    return Tuple[(*_components(coordinate_type(ndim - 1)), int)]


def _components(tuple_type: Any) -> Tuple[Any, ...]:
    """Returns the component types of a generated tuple type (none for `Tuple[()]`)."""
    args = getattr(tuple_type, "__args__", ())
    # Tuple[()] reports its arguments as ((),) on some interpreters and () on others.
    return tuple(arg for arg in args if arg != ())


def coordinate_arity(tuple_type: Any) -> int:
    """Number of components carried by a type produced by `coordinate_type`."""
    return len(_components(tuple_type))


def normalize_index(index: Any) -> int:
    """
    Validates a single index component.

    Parameters
    ----------
    index : Any
        The subscript value for one axis. Anything implementing `__index__`
        is accepted (e.g. `int`, `numpy.int64`).

    Returns
    -------
    int
        The component as a plain, non-negative `int`.

    Raises
    ------
    TypeError
        If `index` is not integral or is a `bool`.
    IndexError
        If `index` is negative.
    """
    if isinstance(index, bool):
        raise TypeError("Matrix indices must be integers, not bool")
    try:
        value = op_index(index)
    except TypeError:
        raise TypeError(f"Matrix indices must be integers, not {type(index).__name__}") from None
    if value < 0:
        raise IndexError(f"Matrix indices must be non-negative, got {value}")
    return value


def make_coordinate(components: Iterable[Any], ndim: int) -> Coordinate:
    """
    Normalizes a sequence of index components into a coordinate tuple.

    Parameters
    ----------
    components : Iterable[Any]
        One integral, non-negative value per axis.
    ndim : int
        The expected number of components.

    Returns
    -------
    Coordinate
        An immutable tuple of `ndim` plain integers, usable as a storage key.

    Raises
    ------
    IndexError
        If the number of components differs from `ndim`, or a component is negative.
    TypeError
        If a component is not integral.
    """
    coord = tuple(normalize_index(c) for c in components)
    if len(coord) != ndim:
        raise IndexError(f"Expected a coordinate with {ndim} components, got {len(coord)}: {coord}")
    return coord
