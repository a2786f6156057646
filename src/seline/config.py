"""YAML configuration and debug logging for seline.

Config file location:
1. ``$SELINE_CONFIG`` when set
2. ``$XDG_CONFIG_HOME/seline/config.yaml`` (``~/.config/seline/config.yaml``)

Example::

    options:
      hide_numbers: true
      skip_blanks: true
    keys:
      cursor_up: [up, k]
      quit: [q, ctrl-c]
    styles:
      highlighted: "bold black on cyan"
    debug: false
"""

from __future__ import annotations

import copy
import logging
import os
from pathlib import Path
from typing import Any

import yaml

from .errors import ConfigError

logger = logging.getLogger(__name__)

DEFAULT_CONFIG: dict[str, Any] = {
    "options": {},
    "keys": {},
    "styles": {},
    "debug": False,
}

_SECTIONS = ("options", "keys", "styles")
_TRUTHY = ("1", "true", "yes", "on")


def get_config_dir() -> Path:
    """Get the seline config directory."""
    xdg_config = os.environ.get("XDG_CONFIG_HOME", os.path.expanduser("~/.config"))
    return Path(xdg_config) / "seline"


def get_config_path() -> Path:
    """Get the path to the config file, honoring SELINE_CONFIG."""
    override = os.environ.get("SELINE_CONFIG")
    if override:
        return Path(os.path.expanduser(override))
    return get_config_dir() / "config.yaml"


def get_log_path() -> Path:
    """Get the path to the debug log file."""
    return get_config_dir() / "debug.log"


def load_config(path: Path | str | None = None) -> dict[str, Any]:
    """Load the config file merged over defaults.

    A missing default config yields the defaults. An explicitly requested
    path that does not exist is an error. Unparseable YAML is logged and
    ignored.

    Raises:
        ConfigError: If an explicit path is missing or a section is not a mapping.
    """
    explicit = path is not None
    config_path = Path(path) if explicit else get_config_path()
    cfg = copy.deepcopy(DEFAULT_CONFIG)

    try:
        with open(config_path) as f:
            data = yaml.safe_load(f)
    except FileNotFoundError:
        if explicit:
            raise ConfigError(f"Config file not found: {config_path}") from None
        return cfg
    except (yaml.YAMLError, OSError) as e:
        logger.warning("Ignoring unreadable config %s: %s", config_path, e)
        return cfg

    if data is None:
        return cfg
    if not isinstance(data, dict):
        raise ConfigError(f"{config_path}: top level must be a mapping")

    for section in _SECTIONS:
        value = data.get(section)
        if value is None:
            continue
        if not isinstance(value, dict):
            raise ConfigError(f"{config_path}: '{section}' must be a mapping")
        cfg[section] = dict(value)
    cfg["debug"] = bool(data.get("debug", False))

    logger.debug("Loaded config from %s", config_path)
    return cfg


def environment_options() -> dict[str, Any]:
    """Return option overrides derived from the environment.

    Follows the no-color.org convention: any non-empty NO_COLOR disables color.
    """
    if os.environ.get("NO_COLOR"):
        return {"no_color": True}
    return {}


def is_debug_enabled(cfg: dict[str, Any] | None = None) -> bool:
    """Check if debug logging is enabled by config or SELINE_DEBUG."""
    if os.environ.get("SELINE_DEBUG", "").strip().lower() in _TRUTHY:
        return True
    return bool((cfg or {}).get("debug", False))


def configure_logging(debug: bool) -> None:
    """Send seline's debug records to the debug log file.

    Nothing is attached when debug is off, so the picker never writes log
    lines onto the terminal it is drawing on.
    """
    if not debug:
        return

    log_path = get_log_path()
    package_logger = logging.getLogger("seline")
    for handler in package_logger.handlers:
        if isinstance(handler, logging.FileHandler) and Path(handler.baseFilename) == log_path:
            return

    log_path.parent.mkdir(parents=True, exist_ok=True)
    handler = logging.FileHandler(log_path)
    handler.setFormatter(logging.Formatter("%(asctime)s %(levelname)s %(name)s: %(message)s"))
    package_logger.addHandler(handler)
    package_logger.setLevel(logging.DEBUG)
