"""
shapeindex Configuration

Loads configuration from a YAML file, then applies environment variable
overrides. Paths left unset stay None; the registry skips what it cannot
find.
"""

import logging
import os
from pathlib import Path
from typing import Any, Dict, Optional

import yaml

logger = logging.getLogger(__name__)


# Default configuration file locations (checked in order)
CONFIG_SEARCH_PATHS = [
    Path.home() / ".shapeindex" / "config.yaml",
]


DEFAULT_CONFIG: Dict[str, Any] = {
    "installation_dir": None,
    "user_dir": None,
    # Parent of the User_<steamid> folders, used when user_dir is unset
    "user_base_dir": None,
    "workshop_dir": None,

    "parse_definitions": False,
    "max_depth": 64,
    "log_level": "WARNING",
}

_TRUE_STRINGS = ("true", "yes", "on", "1")
_FALSE_STRINGS = ("false", "no", "off", "0")

ENV_OVERRIDES = {
    "SHAPEINDEX_INSTALL_DIR": "installation_dir",
    "SHAPEINDEX_USER_DIR": "user_dir",
    "SHAPEINDEX_WORKSHOP_DIR": "workshop_dir",
    "SHAPEINDEX_LOG_LEVEL": "log_level",
}


def _as_bool(key: str, value) -> bool:
    if isinstance(value, bool):
        return value
    if isinstance(value, str) and value.strip().lower() in _TRUE_STRINGS:
        return True
    if isinstance(value, str) and value.strip().lower() in _FALSE_STRINGS:
        return False
    logger.warning("Invalid %s %r, using %r", key, value, DEFAULT_CONFIG[key])
    return DEFAULT_CONFIG[key]


def _as_positive_int(key: str, value) -> int:
    try:
        number = int(value)
    except (TypeError, ValueError):
        number = 0
    if isinstance(value, bool) or number < 1:
        logger.warning("Invalid %s %r, using %r", key, value, DEFAULT_CONFIG[key])
        return DEFAULT_CONFIG[key]
    return number


def _optional_path(value) -> Optional[Path]:
    if value in (None, ""):
        return None
    return Path(os.path.expanduser(str(value)))


class ShapeIndexConfig:
    """Configuration for locating the game and its mods."""

    def __init__(self, config_path: Optional[Path] = None, load_env: bool = True):
        self._config: Dict[str, Any] = dict(DEFAULT_CONFIG)
        self._config_path: Optional[Path] = None

        self._load_config(config_path)

        if load_env:
            self._apply_env_overrides()

    def _load_config(self, explicit_path: Optional[Path] = None) -> None:
        """Load configuration from YAML file."""
        search_paths = [Path(explicit_path)] if explicit_path else CONFIG_SEARCH_PATHS

        for config_path in search_paths:
            if config_path and config_path.exists():
                try:
                    with open(config_path, 'r', encoding='utf-8') as f:
                        user_config = yaml.safe_load(f) or {}
                    if not isinstance(user_config, dict):
                        raise ValueError("top level must be a mapping")
                except (OSError, ValueError, yaml.YAMLError) as e:
                    logger.warning("Failed to load config from %s: %s", config_path, e)
                    continue
                self._config.update(user_config)
                self._config_path = config_path
                return

    def _apply_env_overrides(self) -> None:
        for env_var, config_key in ENV_OVERRIDES.items():
            if env_var in os.environ:
                self._config[config_key] = os.environ[env_var]

    def set(self, key: str, value: Any) -> None:
        """Override a setting (e.g. from a command line flag). None is ignored."""
        if value is not None:
            self._config[key] = value

    @property
    def config_path(self) -> Optional[Path]:
        """Path to loaded config file, or None if using defaults."""
        return self._config_path

    @property
    def installation_dir(self) -> Optional[Path]:
        return _optional_path(self._config.get("installation_dir"))

    @property
    def user_dir(self) -> Optional[Path]:
        return _optional_path(self._config.get("user_dir"))

    @property
    def user_base_dir(self) -> Optional[Path]:
        return _optional_path(self._config.get("user_base_dir"))

    @property
    def workshop_dir(self) -> Optional[Path]:
        return _optional_path(self._config.get("workshop_dir"))

    @property
    def parse_definitions(self) -> bool:
        return _as_bool("parse_definitions", self._config.get("parse_definitions"))

    @property
    def max_depth(self) -> int:
        return _as_positive_int("max_depth", self._config.get("max_depth"))

    @property
    def log_level(self) -> str:
        return str(self._config.get("log_level", "WARNING")).upper()

    def to_dict(self) -> Dict[str, Any]:
        """Export current configuration as dict."""
        def as_str(p):
            return str(p) if p is not None else None

        return {
            "installation_dir": as_str(self.installation_dir),
            "user_dir": as_str(self.user_dir),
            "user_base_dir": as_str(self.user_base_dir),
            "workshop_dir": as_str(self.workshop_dir),
            "parse_definitions": self.parse_definitions,
            "max_depth": self.max_depth,
            "log_level": self.log_level,
            "config_file": as_str(self._config_path),
        }


# Global config instance (lazy-loaded)
_config: Optional[ShapeIndexConfig] = None


def get_config(config_path: Optional[Path] = None) -> ShapeIndexConfig:
    """Get the global config instance, loading if needed."""
    global _config
    if _config is None or config_path is not None:
        _config = ShapeIndexConfig(config_path)
    return _config


def write_default_config(path: Optional[Path] = None) -> Path:
    """
    Write a default configuration file.

    Returns the path where config was written.
    """
    if path is None:
        path = Path.home() / ".shapeindex" / "config.yaml"

    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)

    config_content = """# shapeindex configuration
#
# Any setting can also be given through SHAPEINDEX_* environment variables.

# Scrap Mechanic installation (the folder holding Data/, Survival/, Release/)
installation_dir: "C:\\\\Program Files (x86)\\\\Steam\\\\steamapps\\\\common\\\\Scrap Mechanic"

# Steam Workshop content for the game
workshop_dir: "C:\\\\Program Files (x86)\\\\Steam\\\\steamapps\\\\workshop\\\\content\\\\387990"

# Either the user profile folder itself...
# user_dir: "~/AppData/Roaming/Axolot Games/Scrap Mechanic/User/User_76561198000000000"
# ...or its parent, in which case the most recently used User_<id> is picked
user_base_dir: "~/AppData/Roaming/Axolot Games/Scrap Mechanic/User"

# Parse ShapeSets when listing mods (same as `shapeindex mods --parse`)
parse_definitions: false

# Maximum ShapeSets directory nesting
max_depth: 64

log_level: WARNING
"""

    with open(path, 'w', encoding='utf-8') as f:
        f.write(config_content)

    return path
