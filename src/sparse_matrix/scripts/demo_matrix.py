#!/usr/bin/env python3
"""
Demonstrate the sparse matrix container from the command line.

The run fills the main and secondary diagonals of an N x N matrix, prints a
window of it, the number of occupied cells and every occupied cell, repeats
the listing from a read-only copy, then clears the matrix and fills a
checkerboard pattern into a fresh one.

Examples:
  - python -m sparse_matrix
  - python -m sparse_matrix --size 6 --json
  - python -m sparse_matrix -vv --config /path/to/demo.yaml

"""

# --- Standard Library Imports ---
from __future__ import annotations
import argparse
import json
import sys
import logging
import time
from typing import Any, Dict, List, Optional, Sequence, TextIO

# --- Third-Party Imports ---
import yaml
from tqdm import tqdm

# --- Local Application Imports ---
from sparse_matrix.structures import SparseMatrix
from sparse_matrix.scripts.demo_config import DemoConfig, describe, load_demo_config
from sparse_matrix.utils.iter_utils import (
    iter_anti_diagonal,
    iter_checkerboard_steps,
    iter_coordinates,
    iter_diagonal,
)
from sparse_matrix.utils.logging_utils import DEFAULT_LOG_DIR, configure_loggers

# Set up module logger
logger = logging.getLogger(__name__)


# --------------------------
# Logging Configuration
# --------------------------
def setup_cli_logging(
    verbose_level: int,
    log_file: Optional[str] = None,
    stream: Optional[TextIO] = None,
) -> None:
    """
    Configures logging for the demo and the container modules it drives.

    Parameters
    ----------
    verbose_level : int
        The verbosity level: -1 for ERROR, 0 for WARNING, 1 for INFO, 2 for DEBUG.
    log_file : Optional[str]
        The path to a specific log file. If not provided, a default timestamped
        log file is created in `var/log/` when verbosity is > 0.
    stream : Optional[TextIO]
        The console stream for log records. Defaults to stdout.
    """
    loggers_to_configure = [
        __name__,
        "sparse_matrix.scripts.demo_config",
        "sparse_matrix.structures.sparse_matrix",
        "sparse_matrix.structures.sparse_store",
    ]
    configure_loggers(loggers_to_configure, verbose_level, log_file=log_file, stream=stream)

    if verbose_level > 0 and log_file is None:
        logger.info(f"Logs will be saved to: {DEFAULT_LOG_DIR.resolve()}")


# --------------------------
# Population
# --------------------------
def populate_diagonals(matrix: SparseMatrix[int], n: int, show_progress: bool = False) -> None:
    """
    Writes `m[i][i] = i` and then `m[i][n-1-i] = n-1-i` for `i` in `[0, n)`.

    Writing 0 on the diagonal is a write of the default, so cell `(0, 0)` and,
    for odd `n`, the centre cell stay unstored.
    """
    for i, j in tqdm(iter_diagonal(n), total=n, desc="Main diagonal", disable=not show_progress):
        matrix[i][j] = i

    for i, j in tqdm(iter_anti_diagonal(n), total=n, desc="Secondary diagonal", disable=not show_progress):
        matrix[i][j] = j


def populate_checkerboard(
    matrix: SparseMatrix[int],
    n: int,
    fill_value: int,
    show_progress: bool = False,
) -> int:
    """
    Fills the off-diagonal cells of every 2x2 tile with `fill_value`.

    Returns
    -------
    int
        The number of tiles visited.
    """
    count_step = 0
    steps = list(iter_checkerboard_steps(n))
    for i, j in tqdm(steps, desc="Checkerboard", disable=not show_progress):
        matrix[i + 1][j] = fill_value
        matrix[i][j + 1] = fill_value
        count_step += 1
    return count_step


# --------------------------
# Rendering
# --------------------------
def format_grid(matrix: SparseMatrix[int], start: int, stop: int, width: int = 3) -> str:
    """
    Renders rows and columns `start..stop` (inclusive) of a 2D matrix.

    Every cell is right-aligned to `width` and followed by a space.
    """
    span = stop - start + 1
    lines: List[str] = []
    row: List[str] = []
    for i, j in iter_coordinates((span, span)):
        row.append(f"{matrix[start + i][start + j]:>{width}} ")
        if j == span - 1:
            lines.append("".join(row))
            row = []
    return "\n".join(lines)


def format_entries(matrix: SparseMatrix[int]) -> str:
    """Renders every stored cell as `[i, j] = value`, one per line."""
    return "\n".join(
        f"[{', '.join(str(c) for c in entry[:-1])}] = {entry[-1]}" for entry in matrix
    )


# --------------------------
# Demo Run
# --------------------------
def run_demo(config: DemoConfig, emit: bool = True) -> Dict[str, Any]:
    """
    Runs the full demonstration.

    Parameters
    ----------
    config : DemoConfig
        The run settings.
    emit : bool, optional
        If True, the grids and listings are printed to stdout.

    Returns
    -------
    Dict[str, Any]
        A summary with the occupied cell count, the occupied cells, and the
        checkerboard step count.
    """
    def show(text: str = "") -> None:
        if emit:
            print(text)

    start_time = time.perf_counter()
    logger.info(f"Demo settings: {describe(config)}")

    # --- Phase 1: diagonals ---
    matrix: SparseMatrix[int] = SparseMatrix(default=config.default_value, ndim=2)
    populate_diagonals(matrix, config.size, show_progress=config.show_progress)
    logger.info(f"Diagonals populated: {matrix.size()} cells stored")

    show(format_grid(matrix, config.window_start, config.window_stop, config.cell_width))
    show()
    show(str(matrix.size()))
    show()
    show(format_entries(matrix))
    show()

    # --- Phase 2: read-only copy ---
    frozen = matrix.copy().readonly()
    logger.debug(f"Read-only copy equal to source: {frozen == matrix}")
    show(format_entries(frozen))
    show()

    entries = [list(entry) for entry in matrix]
    diagonal_size = matrix.size()
    matrix.clear()
    logger.info(f"Source cleared; read-only copy still holds {frozen.size()} cells")

    # --- Phase 3: checkerboard ---
    board: SparseMatrix[int] = SparseMatrix(default=config.default_value, ndim=2)
    count_step = populate_checkerboard(board, config.size, config.fill_value, config.show_progress)
    if config.size > 0:
        show(format_grid(board, 0, config.size - 1, config.cell_width))
    show()
    show(f"Count step: {count_step}")

    elapsed = time.perf_counter() - start_time
    logger.info(f"Demo completed in {elapsed:.3f}s")

    return {
        "size": diagonal_size,
        "entries": entries,
        "checkerboard_size": board.size(),
        "count_step": count_step,
    }


# --------------------------
# Command-Line Interface
# --------------------------
def main(argv: Optional[Sequence[str]] = None) -> int:
    """
    Parses command-line arguments and runs the demonstration.
    """
    parser = argparse.ArgumentParser(description="Demonstrate the N-dimensional sparse matrix container.")
    parser.add_argument("--config", default=None,
                        help="Path to a demo settings YAML (defaults to package data).")
    parser.add_argument("--size", type=int, default=None,
                        help="Grid size N (overrides the settings file).")
    parser.add_argument("--json", action="store_true",
                        help="Emit a JSON summary instead of the printed grids.")

    # Logging arguments
    parser.add_argument("-v", "--verbose", action="count", default=0,
                        help="Increase verbosity (-v=INFO, -vv=DEBUG)")
    parser.add_argument("--log-file", default=None,
                        help="Path to log file (default: var/log/<logger>_TIMESTAMP.log if verbose)")
    parser.add_argument("--quiet", action="store_true",
                        help="Suppress all logging except errors")

    cli_args = parser.parse_args(argv)

    verbose_level = -1 if cli_args.quiet else cli_args.verbose
    # Keep stdout parseable when it carries the JSON summary.
    log_stream = sys.stderr if cli_args.json else None
    setup_cli_logging(verbose_level, cli_args.log_file, stream=log_stream)

    try:
        config = load_demo_config(
            cli_args.config,
            size=cli_args.size,
            show_progress=True if verbose_level > 0 else None,
        )
    except (OSError, ValueError, yaml.YAMLError) as e:
        logger.error(f"Failed to load demo settings: {e}")
        print(f"Failed to load demo settings: {e}", file=sys.stderr)
        return 2

    try:
        summary = run_demo(config, emit=not cli_args.json)
    except Exception as e:
        logger.error(f"Demo failed: {e}", exc_info=True)
        print(f"Demo failed: {e}", file=sys.stderr)
        return 1

    if cli_args.json:
        print(json.dumps(summary, indent=2))

    return 0


if __name__ == "__main__":
    raise SystemExit(main())
