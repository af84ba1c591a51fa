from sparse_matrix.utils.iter_utils import (
    iter_anti_diagonal,
    iter_checkerboard_steps,
    iter_coordinates,
    iter_diagonal,
    iter_window,
)
from sparse_matrix.utils.yaml_io import read_yaml

__all__ = [
    "iter_anti_diagonal",
    "iter_checkerboard_steps",
    "iter_coordinates",
    "iter_diagonal",
    "iter_window",
    "read_yaml",
]
