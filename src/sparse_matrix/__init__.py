from sparse_matrix.structures import (
    Coordinate,
    EntryIterator,
    IndexResolver,
    ReadOnlySparseMatrix,
    SparseMatrix,
    SparseStore,
    ValueProxy,
    coordinate_type,
    make_coordinate,
)

__version__ = "0.1.0"

__all__ = [
    "Coordinate",
    "EntryIterator",
    "IndexResolver",
    "ReadOnlySparseMatrix",
    "SparseMatrix",
    "SparseStore",
    "ValueProxy",
    "coordinate_type",
    "make_coordinate",
]
