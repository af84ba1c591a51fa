from sparse_matrix.structures.coordinate import Coordinate, coordinate_type, make_coordinate
from sparse_matrix.structures.sparse_store import SparseStore
from sparse_matrix.structures.index_chain import IndexResolver, ValueProxy
from sparse_matrix.structures.entry_iter import EntryIterator
from sparse_matrix.structures.sparse_matrix import SparseMatrix, ReadOnlySparseMatrix

__all__ = [
    "Coordinate",
    "coordinate_type",
    "make_coordinate",
    "SparseStore",
    "IndexResolver",
    "ValueProxy",
    "EntryIterator",
    "SparseMatrix",
    "ReadOnlySparseMatrix",
]
