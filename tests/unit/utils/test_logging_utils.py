"""
Unit tests for the logging helpers.

Each test uses its own logger name and writes files under `tmp_path` so no
handlers or log files leak between tests.
"""
import logging
import sys

from sparse_matrix.utils.logging_utils import (
    configure_loggers,
    get_log_file_path,
    set_log_level,
    setup_logger,
)


def _close_handlers(logger):
    for handler in list(logger.handlers):
        handler.close()
        logger.removeHandler(handler)


def test_get_log_file_path_sanitizes_name(tmp_path):
    path = get_log_file_path("sparse_matrix.scripts.demo", log_dir=tmp_path, include_timestamp=False)
    assert path == tmp_path / "sparse_matrix_scripts_demo.log"


def test_get_log_file_path_creates_directory_and_timestamps(tmp_path):
    log_dir = tmp_path / "nested" / "logs"
    path = get_log_file_path("a.b", log_dir=log_dir)
    assert log_dir.is_dir()
    assert path.parent == log_dir
    assert path.name.startswith("a_b_") and path.suffix == ".log"


def test_setup_logger_console_only(capsys):
    logger = setup_logger("test_sm.console_only", level=logging.INFO, enable_file_logging=False)
    try:
        assert len(logger.handlers) == 1
        logger.info("hello from the console")
        assert "hello from the console" in capsys.readouterr().out
    finally:
        _close_handlers(logger)


def test_setup_logger_does_not_duplicate_handlers():
    name = "test_sm.no_duplicates"
    setup_logger(name, enable_file_logging=False)
    logger = setup_logger(name, enable_file_logging=False)
    try:
        assert len(logger.handlers) == 1
    finally:
        _close_handlers(logger)


def test_setup_logger_explicit_file(tmp_path):
    log_file = tmp_path / "out" / "run.log"
    logger = setup_logger("test_sm.explicit_file", level=logging.DEBUG, log_file=str(log_file))
    try:
        logger.debug("written to file")
        for handler in logger.handlers:
            handler.flush()
        assert "written to file" in log_file.read_text(encoding="utf-8")
    finally:
        _close_handlers(logger)


def test_configure_loggers_maps_verbosity(tmp_path):
    names = ["test_sm.group.a", "test_sm.group.b"]
    try:
        assert configure_loggers(names, 0, log_dir=tmp_path) == logging.WARNING
        # Quiet runs do not create log files.
        assert list(tmp_path.iterdir()) == []

        assert configure_loggers(names, 1, log_dir=tmp_path) == logging.INFO
        assert configure_loggers(names, 5, log_dir=tmp_path) == logging.DEBUG
        assert all(logging.getLogger(n).level == logging.DEBUG for n in names)
        assert len(list(tmp_path.glob("*.log"))) >= 1
    finally:
        for n in names:
            _close_handlers(logging.getLogger(n))


def test_setup_logger_writes_to_given_stream(capsys):
    logger = setup_logger("test_sm.stderr_stream", enable_file_logging=False, stream=sys.stderr)
    try:
        logger.info("routed to stderr")
        captured = capsys.readouterr()
        assert "routed to stderr" in captured.err
        assert captured.out == ""
    finally:
        _close_handlers(logger)


def test_configure_loggers_negative_verbosity_is_error(tmp_path):
    names = ["test_sm.quiet"]
    try:
        assert configure_loggers(names, -1, log_dir=tmp_path) == logging.ERROR
        assert list(tmp_path.iterdir()) == []
    finally:
        _close_handlers(logging.getLogger(names[0]))


def test_set_log_level_updates_handlers():
    logger = setup_logger("test_sm.set_level", level=logging.INFO, enable_file_logging=False)
    try:
        set_log_level(logger, logging.ERROR)
        assert logger.level == logging.ERROR
        assert all(h.level == logging.ERROR for h in logger.handlers)
    finally:
        _close_handlers(logger)
