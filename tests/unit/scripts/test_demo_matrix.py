"""
Tests for the demonstration driver.

The driver is a consumer of the container API; these tests check that it
prints the expected diagonal grid, listings and checkerboard
and that the CLI reports configuration errors with the right exit codes.
"""
import json
import logging

import pytest

from sparse_matrix import SparseMatrix
from sparse_matrix.scripts.demo_config import DemoConfig
from sparse_matrix.scripts.demo_matrix import (
    format_entries,
    format_grid,
    main,
    populate_checkerboard,
    populate_diagonals,
    run_demo,
)


CLI_LOGGERS = [
    "sparse_matrix.scripts.demo_matrix",
    "sparse_matrix.scripts.demo_config",
    "sparse_matrix.structures.sparse_matrix",
    "sparse_matrix.structures.sparse_store",
]


@pytest.fixture(autouse=True)
def _isolated_cwd(tmp_path, monkeypatch):
    """
    Keeps any default `var/log` directory inside the test's temp dir, and
    detaches the handlers `main()` installs so they do not outlive the test.
    """
    monkeypatch.chdir(tmp_path)
    yield
    for name in CLI_LOGGERS:
        logger = logging.getLogger(name)
        for handler in list(logger.handlers):
            handler.close()
            logger.removeHandler(handler)
        logger.setLevel(logging.NOTSET)


# ---------------------------------------------------------------------------
# Population helpers
# ---------------------------------------------------------------------------
def test_populate_diagonals_skips_default_writes():
    """Writing 0 at (0, 0) and (9, 0) stores nothing, leaving 18 cells for N=10."""
    m = SparseMatrix[int]()
    populate_diagonals(m, 10)
    assert m.size() == 18
    assert m[0][0] == 0
    assert m[3][3] == 3
    assert m[3][6] == 6
    assert (9, 0) not in m


def test_populate_diagonals_odd_size_shares_centre():
    m = SparseMatrix[int]()
    populate_diagonals(m, 5)
    # Main diagonal stores 1..4; the anti-diagonal adds (0,4), (1,3), (3,1); (2,2) is shared.
    assert m.size() == 7
    assert m[2][2] == 2


def test_populate_checkerboard():
    m = SparseMatrix[int]()
    steps = populate_checkerboard(m, 10, fill_value=8)
    assert steps == 25
    assert m.size() == 50
    assert m[1][0] == 8 and m[0][1] == 8
    assert m[0][0] == 0 and m[1][1] == 0


# ---------------------------------------------------------------------------
# Rendering
# ---------------------------------------------------------------------------
def test_format_grid_right_aligns_cells():
    m = SparseMatrix[int]()
    m[1][2] = 7
    assert format_grid(m, 1, 2, width=3) == "  0   7 \n  0   0 "


def test_format_entries():
    m = SparseMatrix[int]()
    m[1][1] = 1
    m[0][9] = 9
    assert format_entries(m) == "[0, 9] = 9\n[1, 1] = 1"


# ---------------------------------------------------------------------------
# Full run
# ---------------------------------------------------------------------------
def test_run_demo_summary_and_output(capsys):
    summary = run_demo(DemoConfig())
    out = capsys.readouterr().out

    assert summary["size"] == 18
    assert summary["count_step"] == 25
    assert summary["checkerboard_size"] == 50
    assert summary["entries"][0] == [0, 9, 9]
    assert summary["entries"] == sorted(summary["entries"])

    assert "\n18\n" in out
    assert "[1, 1] = 1" in out
    assert "Count step: 25" in out
    # Both listings (source and read-only copy) are printed.
    assert out.count("[5, 5] = 5") == 2


def test_run_demo_silent_when_not_emitting(capsys):
    run_demo(DemoConfig(size=4, window_start=0, window_stop=3), emit=False)
    assert capsys.readouterr().out == ""


# ---------------------------------------------------------------------------
# CLI
# ---------------------------------------------------------------------------
def test_main_json_output(capsys):
    assert main(["--json", "--size", "6"]) == 0
    payload = json.loads(capsys.readouterr().out)
    assert payload["count_step"] == 9
    assert payload["size"] == 10


def test_main_reads_config_file(tmp_path, capsys):
    path = tmp_path / "demo.yaml"
    path.write_text("demo:\n  size: 4\n  window_start: 0\n  window_stop: 3\n", encoding="utf-8")
    assert main(["--config", str(path), "--json"]) == 0
    assert json.loads(capsys.readouterr().out)["count_step"] == 4


def test_main_bad_config_returns_2(tmp_path, capsys):
    path = tmp_path / "demo.txt"
    path.write_text("size: 4\n", encoding="utf-8")
    assert main(["--config", str(path)]) == 2
    assert "Failed to load demo settings" in capsys.readouterr().err


def test_main_missing_config_returns_2(tmp_path):
    assert main(["--config", str(tmp_path / "missing.yaml")]) == 2


def test_main_verbose_writes_log_file(tmp_path, capsys):
    log_file = tmp_path / "logs" / "demo.log"
    assert main(["-v", "--json", "--size", "2", "--log-file", str(log_file)]) == 0
    assert "Demo completed" in log_file.read_text(encoding="utf-8")


def test_main_json_stdout_stays_parseable_when_verbose(tmp_path, capsys):
    """Log records go to stderr when stdout carries the JSON summary."""
    log_file = tmp_path / "demo.log"
    assert main(["--json", "-vv", "--size", "4", "--log-file", str(log_file)]) == 0
    captured = capsys.readouterr()
    payload = json.loads(captured.out)
    assert payload["count_step"] == 4
    assert "Loading demo settings" in captured.err


def test_main_quiet_hides_warnings(tmp_path, capsys):
    path = tmp_path / "demo.yaml"
    path.write_text("size: 4\nwindow_start: 0\nwindow_stop: 3\ncolour: blue\n", encoding="utf-8")

    assert main(["--config", str(path), "--json"]) == 0
    assert "colour" in capsys.readouterr().err

    assert main(["--config", str(path), "--json", "--quiet"]) == 0
    captured = capsys.readouterr()
    assert "colour" not in captured.out + captured.err
    assert logging.getLogger("sparse_matrix.scripts.demo_config").level == logging.ERROR
