"""
Configuration handling for the Discord Markdown Parser.
"""

import logging
from pathlib import Path
from typing import Any, Dict, Optional, Union

import tomli

from .inline_parser import DEFAULT_MAX_NESTING_DEPTH

logger = logging.getLogger(__name__)

# Keeps recursive descent well below the default interpreter recursion limit
MAX_NESTING_DEPTH_LIMIT = 200

DEFAULT_OPTIONS: Dict[str, Any] = {
    "max_nesting_depth": DEFAULT_MAX_NESTING_DEPTH,
}


def validate_options(options: Optional[Dict[str, Any]] = None) -> Dict[str, Any]:
    """
    Merge options over the defaults and validate them.

    Args:
        options: Parser options, may be None or partial

    Returns:
        New dictionary with every known option set

    Raises:
        ValueError: If an option has a wrong type or is out of range
    """
    merged = dict(DEFAULT_OPTIONS)

    for key, value in (options or {}).items():
        if key not in DEFAULT_OPTIONS:
            logger.warning(f"Unknown markdown option '{key}', ignoring")
            continue
        merged[key] = value

    maxDepth = merged["max_nesting_depth"]
    # bool is an int subclass, but True is not a depth
    if not isinstance(maxDepth, int) or isinstance(maxDepth, bool):
        raise ValueError(f"max_nesting_depth must be an integer, got {type(maxDepth).__name__}")
    if not 1 <= maxDepth <= MAX_NESTING_DEPTH_LIMIT:
        raise ValueError(f"max_nesting_depth must be 1-{MAX_NESTING_DEPTH_LIMIT}, got {maxDepth}")

    return merged


def load_options(configPath: Union[str, Path], section: str = "markdown") -> Dict[str, Any]:
    """
    Load parser options from a TOML file.

    The options live in the table named by section, e.g.:

        [markdown]
        max_nesting_depth = 50

    A missing table means all defaults.

    Args:
        configPath: Path to the TOML file
        section: Name of the table holding the options

    Returns:
        Validated options dictionary
    """
    configFile = Path(configPath)
    if not configFile.exists():
        logger.error(f"Configuration file {configPath} not found!")
        raise FileNotFoundError(f"Configuration file {configPath} not found")

    try:
        with open(configFile, "rb") as f:
            config = tomli.load(f)
    except tomli.TOMLDecodeError as e:
        logger.error(f"Failed to parse configuration {configPath}: {e}")
        raise

    options = config.get(section, {})
    if not isinstance(options, dict):
        raise ValueError(f"Configuration section '{section}' must be a table")

    logger.info(f"Markdown options loaded from {configPath}")
    return validate_options(options)
