#  Copyright (c) 2025 Tom Villani, Ph.D.

"""Configuration file discovery and loading for the latexfmt CLI.

This module handles automatic discovery of configuration files, loading
configs from TOML, YAML or JSON format, and turning them into printer
options with command-line flags taking priority.
"""

import argparse
import json
import logging
import sys
from pathlib import Path

if sys.version_info >= (3, 11):
    import tomllib
else:
    import tomli as tomllib  # type: ignore[import-not-found,unused-ignore]
from typing import Any, Dict, Optional

import yaml

from latexfmt.constants import CONFIG_FILENAMES, DEFAULT_ENGINE, PYPROJECT_TOOL_SECTION
from latexfmt.exceptions import ValidationError
from latexfmt.options.printers import LayoutOptions, TokenPrinterOptions

logger = logging.getLogger(__name__)

# Keys understood at the top level of a configuration file
CONFIG_KEYS = frozenset({"engine", "print_width", "tab_width", "use_tabs", "max_width", "parser"})


def _load_pyproject_section(pyproject_path: Path) -> Dict[str, Any]:
    """Load the ``[tool.latexfmt]`` table from a pyproject.toml file.

    Parameters
    ----------
    pyproject_path : Path
        Path to pyproject.toml file

    Returns
    -------
    dict
        The table, or an empty dict if the file has none

    Raises
    ------
    argparse.ArgumentTypeError
        If pyproject.toml cannot be parsed

    """
    try:
        with open(pyproject_path, "rb") as f:
            data = tomllib.load(f)
    except tomllib.TOMLDecodeError as e:
        raise argparse.ArgumentTypeError(f"Invalid TOML in pyproject.toml {pyproject_path}: {e}") from e
    except OSError as e:
        raise argparse.ArgumentTypeError(f"Error reading pyproject.toml {pyproject_path}: {e}") from e

    config = data.get("tool", {}).get(PYPROJECT_TOOL_SECTION)
    if config is None:
        return {}
    if not isinstance(config, dict):
        raise argparse.ArgumentTypeError(
            f"[tool.{PYPROJECT_TOOL_SECTION}] section in {pyproject_path} must be a table, "
            f"got {type(config).__name__}"
        )
    return config


def find_config_in_parents(start_dir: Optional[Path] = None) -> Optional[Path]:
    """Find a configuration file by searching parent directories.

    Each directory from ``start_dir`` up to the filesystem root is checked
    for, in order, ``.latexfmt.toml``, ``.latexfmt.yaml``,
    ``.latexfmt.yml``, ``.latexfmt.json`` and a ``pyproject.toml`` holding
    a ``[tool.latexfmt]`` table.

    Parameters
    ----------
    start_dir : Path, optional
        Starting directory for search, defaults to current working directory

    Returns
    -------
    Path or None
        Path to first config file found, or None if not found

    """
    current = (start_dir or Path.cwd()).resolve()

    while True:
        for filename in CONFIG_FILENAMES:
            config_path = current / filename
            if config_path.is_file():
                return config_path

        pyproject_path = current / "pyproject.toml"
        if pyproject_path.is_file():
            try:
                if _load_pyproject_section(pyproject_path):
                    return pyproject_path
            except argparse.ArgumentTypeError as e:
                logger.warning("Skipping unreadable %s: %s", pyproject_path, e)

        parent = current.parent
        if parent == current:
            return None
        current = parent


def load_config_file(config_path: Path | str) -> Dict[str, Any]:
    """Load configuration from a TOML, YAML, JSON or pyproject.toml file.

    The format is chosen from the file name and extension.

    Parameters
    ----------
    config_path : Path or str
        Path to the configuration file

    Returns
    -------
    dict
        Configuration dictionary loaded from file

    Raises
    ------
    argparse.ArgumentTypeError
        If the file cannot be read, parsed, or has invalid format

    Examples
    --------
    >>> config = load_config_file(".latexfmt.toml")
    >>> config.get("print_width")
    100

    """
    config_path = Path(config_path)

    if not config_path.exists():
        raise argparse.ArgumentTypeError(f"Configuration file does not exist: {config_path}")

    if not config_path.is_file():
        raise argparse.ArgumentTypeError(f"Configuration path is not a file: {config_path}")

    filename = config_path.name.lower()
    ext = config_path.suffix.lower()

    if filename == "pyproject.toml":
        return _load_pyproject_section(config_path)
    if ext == ".toml":
        return _load_toml_config(config_path)
    if ext in (".yaml", ".yml"):
        return _load_yaml_config(config_path)
    if ext == ".json":
        return _load_json_config(config_path)
    raise argparse.ArgumentTypeError(f"Unsupported config file format: {ext}. Use .toml, .yaml or .json")


def _load_toml_config(config_path: Path) -> Dict[str, Any]:
    try:
        with open(config_path, "rb") as f:
            return tomllib.load(f)
    except tomllib.TOMLDecodeError as e:
        raise argparse.ArgumentTypeError(f"Invalid TOML in config file {config_path}: {e}") from e
    except OSError as e:
        raise argparse.ArgumentTypeError(f"Error reading TOML config {config_path}: {e}") from e


def _load_json_config(config_path: Path) -> Dict[str, Any]:
    try:
        with open(config_path, "r", encoding="utf-8") as f:
            config = json.load(f)
    except json.JSONDecodeError as e:
        raise argparse.ArgumentTypeError(f"Invalid JSON in config file {config_path}: {e}") from e
    except OSError as e:
        raise argparse.ArgumentTypeError(f"Error reading JSON config {config_path}: {e}") from e

    if not isinstance(config, dict):
        raise argparse.ArgumentTypeError(f"JSON config file must contain an object, got {type(config).__name__}")
    return config


def _load_yaml_config(config_path: Path) -> Dict[str, Any]:
    try:
        with open(config_path, "r", encoding="utf-8") as f:
            config = yaml.safe_load(f)
    except yaml.YAMLError as e:
        raise argparse.ArgumentTypeError(f"Invalid YAML in config file {config_path}: {e}") from e
    except OSError as e:
        raise argparse.ArgumentTypeError(f"Error reading YAML config {config_path}: {e}") from e

    # an empty file loads as None
    if config is None:
        return {}
    if not isinstance(config, dict):
        raise argparse.ArgumentTypeError(f"YAML config file must contain a mapping, got {type(config).__name__}")
    return config


def load_config_with_priority(
    explicit_path: Optional[str] = None, env_var_path: Optional[str] = None
) -> Dict[str, Any]:
    """Load configuration with proper priority handling.

    Priority order (highest to lowest):
    1. Explicit config file path (--config flag)
    2. Environment variable config path (LATEXFMT_CONFIG)
    3. Auto-discovered config file

    Parameters
    ----------
    explicit_path : str, optional
        Explicit config file path from --config flag
    env_var_path : str, optional
        Config file path from the LATEXFMT_CONFIG environment variable

    Returns
    -------
    dict
        Loaded configuration dictionary (empty dict if no config found)

    Raises
    ------
    argparse.ArgumentTypeError
        If a config file is specified but cannot be loaded

    """
    if explicit_path:
        return load_config_file(explicit_path)

    if env_var_path:
        return load_config_file(env_var_path)

    discovered_path = find_config_in_parents()
    if discovered_path:
        logger.debug("Using configuration from %s", discovered_path)
        return load_config_file(discovered_path)

    return {}


def normalize_config(config: Dict[str, Any]) -> Dict[str, Any]:
    """Return ``config`` with snake_case keys, dropping unknown ones with a warning."""
    normalized: Dict[str, Any] = {}
    for key, value in config.items():
        name = "".join("_" + c.lower() if c.isupper() else c for c in str(key)).replace("-", "_")
        if name not in CONFIG_KEYS:
            logger.warning("Ignoring unknown configuration key: %s", key)
            continue
        normalized[name] = value
    return normalized


def build_options(
    config: Dict[str, Any], parsed_args: argparse.Namespace
) -> tuple[str, TokenPrinterOptions, LayoutOptions]:
    """Combine configuration values and command-line flags into printer options.

    Flags given on the command line override the configuration file.
    ``--print-width`` sets the width of whichever engine is in use.

    Parameters
    ----------
    config : dict
        Configuration loaded from file
    parsed_args : argparse.Namespace
        Parsed command-line arguments

    Returns
    -------
    tuple
        The engine name, token printer options and layout options

    Raises
    ------
    ValidationError
        If a value is of the wrong type or out of range.

    """
    values = normalize_config(config)

    engine = parsed_args.engine or values.get("engine", DEFAULT_ENGINE)
    if engine not in ("text", "layout"):
        raise ValidationError(
            f"engine must be 'text' or 'layout', got {engine!r}", parameter_name="engine", parameter_value=engine
        )

    layout_values = {k: values[k] for k in ("print_width", "tab_width", "use_tabs", "parser") if k in values}
    token_values = {k: values[k] for k in ("max_width", "tab_width") if k in values}

    if parsed_args.print_width is not None:
        layout_values["print_width"] = parsed_args.print_width
        token_values["max_width"] = parsed_args.print_width
    if parsed_args.tab_width is not None:
        layout_values["tab_width"] = parsed_args.tab_width
        token_values["tab_width"] = parsed_args.tab_width
    if parsed_args.use_spaces:
        layout_values["use_tabs"] = False

    try:
        token_options = TokenPrinterOptions(**token_values)
    except (TypeError, ValueError) as e:
        raise ValidationError(str(e), parameter_value=token_values, original_error=e) from e

    return engine, token_options, LayoutOptions.from_mapping(layout_values)
