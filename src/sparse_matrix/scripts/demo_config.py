from __future__ import annotations
from dataclasses import dataclass, fields, replace
from importlib.resources import files as importlib_files
from pathlib import Path
import logging
from typing import Any, Dict

from sparse_matrix.utils.yaml_io import read_yaml

logger = logging.getLogger(__name__)

DEFAULT_CONFIG_RESOURCE = "demo_default.yaml"


@dataclass(slots=True)
class DemoConfig:
    """
    Configuration settings for the sparse matrix demonstration run.

    Attributes
    ----------
    size : int
        N for the diagonal grid and the checkerboard grid. Defaults to 10.
    window_start : int
        First row/column printed from the diagonal grid. Defaults to 1.
    window_stop : int
        Last row/column printed from the diagonal grid (inclusive). Defaults to 8.
    default_value : int
        The default value of the demo matrices. Defaults to 0.
    fill_value : int
        The value written by the checkerboard pass. Defaults to 8.
    cell_width : int
        The column width used when printing grids. Defaults to 3.
    show_progress : bool
        If True, population loops display a progress bar.
    """
    size: int = 10
    window_start: int = 1
    window_stop: int = 8
    default_value: int = 0
    fill_value: int = 8
    cell_width: int = 3
    show_progress: bool = False

    def validate(self) -> DemoConfig:
        """
        Checks the settings and returns self.

        Raises
        ------
        ValueError
            If a size or window bound is negative or the window is reversed.
        """
        if self.size < 0:
            raise ValueError(f"size must be non-negative, got {self.size}")
        if self.window_start < 0 or self.window_stop < 0:
            raise ValueError("window bounds must be non-negative")
        if self.window_start > self.window_stop:
            raise ValueError(
                f"window_start ({self.window_start}) must not exceed window_stop ({self.window_stop})"
            )
        if self.cell_width < 1:
            raise ValueError(f"cell_width must be positive, got {self.cell_width}")
        return self


def default_config_path() -> Path:
    """Returns the path of the packaged default demo settings."""
    return Path(str(importlib_files("sparse_matrix") / "data" / DEFAULT_CONFIG_RESOURCE))


def parse_demo_config(raw: Dict[str, Any]) -> DemoConfig:
    """
    Builds a `DemoConfig` from a parsed YAML mapping.

    Settings may sit at the top level or under a `demo:` section. Unknown keys
    are ignored with a warning.

    Raises
    ------
    ValueError
        If a known setting has the wrong type or the result fails validation.
    """
    section = raw.get("demo", raw)
    if not isinstance(section, dict):
        raise ValueError("The 'demo' section must be a mapping.")

    known = {f.name for f in fields(DemoConfig)}
    values: Dict[str, Any] = {}
    for key, value in section.items():
        if key not in known:
            logger.warning(f"Ignoring unknown demo setting: {key!r}")
            continue
        expected = bool if key == "show_progress" else int
        if expected is int and (isinstance(value, bool) or not isinstance(value, int)):
            raise ValueError(f"Setting {key!r} must be an integer, got {value!r}")
        if expected is bool and not isinstance(value, bool):
            raise ValueError(f"Setting {key!r} must be a boolean, got {value!r}")
        values[key] = value

    return DemoConfig(**values).validate()


def load_demo_config(yaml_path: str | Path | None = None, **overrides: Any) -> DemoConfig:
    """
    Loads the demo settings from YAML, then applies keyword overrides.

    Parameters
    ----------
    yaml_path : str | Path | None
        The settings file. Defaults to the packaged `demo_default.yaml`.
    **overrides : Any
        Settings that replace the file values; `None` values are skipped so
        unset CLI flags can be passed straight through.

    Returns
    -------
    DemoConfig
        The validated settings.
    """
    if yaml_path is None:
        yaml_path = default_config_path()
    logger.info(f"Loading demo settings from: {yaml_path}")

    config = parse_demo_config(read_yaml(yaml_path))
    applied = {key: value for key, value in overrides.items() if value is not None}
    if applied:
        logger.debug(f"Applying overrides: {applied}")
        config = replace(config, **applied).validate()
    return config


def describe(config: DemoConfig) -> str:
    """One-line summary of the settings, for logs."""
    return (
        f"size={config.size}, window=[{config.window_start}..{config.window_stop}], "
        f"default={config.default_value}, fill={config.fill_value}"
    )
