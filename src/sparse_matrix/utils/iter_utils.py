from itertools import product
from typing import Iterator, Sequence, Tuple


def iter_coordinates(shape: Sequence[int]) -> Iterator[Tuple[int, ...]]:
    """
    Iterates over every coordinate of a dense box in lexicographic order.

    The last axis varies fastest, so the order matches the iteration order of
    a sparse matrix's stored cells.

    Parameters
    ----------
    shape : Sequence[int]
        The extent of each axis.

    Yields
    ------
    Iterator[Tuple[int, ...]]
        Coordinates `(c0, ..., cN-1)` with `0 <= ck < shape[k]`.
    """
    return product(*(range(extent) for extent in shape))


def iter_window(start: int, stop: int, ndim: int = 2) -> Iterator[Tuple[int, ...]]:
    """
    Iterates over the cube `[start, stop]^ndim` (inclusive bounds) in lexicographic order.
    """
    return product(range(start, stop + 1), repeat=ndim)


def iter_diagonal(n: int) -> Iterator[Tuple[int, int]]:
    """
    Iterates over the main diagonal `(i, i)` of an `n x n` block.

    Parameters
    ----------
    n : int
        The block size.

    Yields
    ------
    Iterator[Tuple[int, int]]
        `(0, 0), (1, 1), ..., (n-1, n-1)`.
    """
    for i in range(n):
        yield i, i


def iter_anti_diagonal(n: int) -> Iterator[Tuple[int, int]]:
    """
    Iterates over the secondary diagonal `(i, n-1-i)` of an `n x n` block.
    """
    for i in range(n):
        yield i, (n - 1) - i


def iter_checkerboard_steps(n: int) -> Iterator[Tuple[int, int]]:
    """
    Iterates over the even `(i, j)` anchors of an `n x n` block.

    Each anchor seeds the two off-diagonal cells `(i+1, j)` and `(i, j+1)`
    of its 2x2 tile, which together form a checkerboard.

    Yields
    ------
    Iterator[Tuple[int, int]]
        `(i, j)` with `i` and `j` even and `0 <= i, j < n`.
    """
    for i in range(0, n, 2):
        for j in range(0, n, 2):
            yield i, j
