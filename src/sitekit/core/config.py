"""
Configuration Management
========================

This module provides TOML-based configuration file support for sitekit.

Configuration files are searched in the following order (highest to lowest priority):
1. Path specified via --config option
2. ./sitekit.toml (current directory)
3. ~/.config/sitekit/config.toml (user config)
4. /etc/sitekit/config.toml (system config)
5. Built-in defaults

Example configuration file (sitekit.toml):

    [image]
    driver = "auto"
    watermark = "static/image/watermark.png"
    auto_mkdir = true
    quality = 90

    [markup]
    parser = "markdown"
    extensions = ["extra", "sane_lists"]
    filters = ["user", "tag"]

    [user]
    profile_url = "/user/profile/{name}"
    tag_url = "/tag/{tag}"

    [registration]
    captcha = true
    identity_min = 3
    identity_max = 32
    name_min = 3
    name_max = 32
    credential_min = 5
    credential_max = 32

    [logging]
    level = "WARNING"
"""

import sys
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Optional, Union

from sitekit.core.logger import get_logger

logger = get_logger(__name__)

# Use tomli for Python < 3.11, tomllib for Python >= 3.11
if sys.version_info >= (3, 11):
    import tomllib
else:
    try:
        import tomli as tomllib
    except ImportError:
        tomllib = None


# Default configuration values
DEFAULT_CONFIG: Dict[str, Any] = {
    "image": {
        "driver": "auto",
        "watermark": "",
        "auto_mkdir": True,
        "quality": 90,
    },
    "markup": {
        "parser": "markdown",
        "extensions": ["extra", "sane_lists"],
        "filters": ["user", "tag"],
    },
    "user": {
        "profile_url": "/user/profile/{name}",
        "tag_url": "/tag/{tag}",
    },
    "registration": {
        "captcha": True,
        "identity_min": 3,
        "identity_max": 32,
        "name_min": 3,
        "name_max": 32,
        "credential_min": 5,
        "credential_max": 32,
    },
    "logging": {
        "level": "WARNING",
    },
}

# Standard config file locations
CONFIG_LOCATIONS = [
    Path("sitekit.toml"),
    Path("~/.config/sitekit/config.toml").expanduser(),
    Path("/etc/sitekit/config.toml"),
]


@dataclass
class Config:
    """
    Configuration container for sitekit settings.

    Attributes:
        image: Image service settings (driver, watermark, auto_mkdir, quality)
        markup: Markup rendering settings (parser, extensions, filters)
        user: User link templates
        registration: Registration form settings
        logging: Logging settings
        _source: Path to the config file that was loaded
    """

    image: Dict[str, Any] = field(default_factory=dict)
    markup: Dict[str, Any] = field(default_factory=dict)
    user: Dict[str, Any] = field(default_factory=dict)
    registration: Dict[str, Any] = field(default_factory=dict)
    logging: Dict[str, Any] = field(default_factory=dict)
    _source: Optional[str] = None

    def get(self, section: str, key: str, default: Any = None) -> Any:
        """Get a configuration value."""
        section_dict = getattr(self, section, {})
        if section_dict is None:
            return default
        return section_dict.get(key, default)

    def set(self, section: str, key: str, value: Any) -> None:
        """Set a configuration value."""
        section_dict = getattr(self, section, None)
        if section_dict is not None:
            section_dict[key] = value

    def to_dict(self) -> Dict[str, Any]:
        """Convert configuration to dictionary."""
        return {
            "image": self.image,
            "markup": self.markup,
            "user": self.user,
            "registration": self.registration,
            "logging": self.logging,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any], source: Optional[str] = None) -> "Config":
        """Create Config from dictionary."""
        return cls(
            image=data.get("image", {}),
            markup=data.get("markup", {}),
            user=data.get("user", {}),
            registration=data.get("registration", {}),
            logging=data.get("logging", {}),
            _source=source,
        )


def load_toml(filepath: Union[str, Path]) -> Dict[str, Any]:
    """
    Load a TOML configuration file.

    Args:
        filepath: Path to the TOML file

    Returns:
        Dictionary with configuration values

    Raises:
        FileNotFoundError: If file doesn't exist
        ValueError: If TOML parsing fails or tomli not installed
    """
    if tomllib is None:
        raise ValueError(
            "TOML support requires tomli package for Python < 3.11. Install with: pip install tomli"
        )

    path = Path(filepath)
    if not path.exists():
        raise FileNotFoundError(f"Configuration file not found: {filepath}")

    with open(path, "rb") as f:
        try:
            return tomllib.load(f)
        except tomllib.TOMLDecodeError as e:
            raise ValueError(f"Invalid TOML in {filepath}: {e}") from e


def _format_value(value: Any) -> str:
    if isinstance(value, str):
        return f'"{value}"'
    if isinstance(value, bool):
        return str(value).lower()
    if isinstance(value, list):
        return "[" + ", ".join(_format_value(v) for v in value) + "]"
    return str(value)


def save_toml(config: Dict[str, Any], filepath: Union[str, Path]) -> str:
    """
    Save configuration to a TOML file.

    Only one level of sections is written; ``None`` values are skipped
    since TOML has no null.

    Args:
        config: Configuration dictionary
        filepath: Path to save the file

    Returns:
        Path to the saved file
    """
    path = Path(filepath)
    path.parent.mkdir(parents=True, exist_ok=True)

    lines = []
    for section, values in config.items():
        if isinstance(values, dict) and values:
            lines.append(f"[{section}]")
            for key, value in values.items():
                if value is None or isinstance(value, dict):
                    continue
                lines.append(f"{key} = {_format_value(value)}")
            lines.append("")

    path.write_text("\n".join(lines), encoding="utf-8")

    return str(path)


def find_config_file(config_path: Optional[str] = None) -> Optional[Path]:
    """
    Find the configuration file to use.

    Args:
        config_path: Explicit path to config file (highest priority)

    Returns:
        Path to config file, or None if not found
    """
    if config_path:
        path = Path(config_path)
        if path.exists():
            return path
        logger.warning(f"Specified config file not found: {config_path}")
        return None

    for location in CONFIG_LOCATIONS:
        if location.exists():
            return location

    return None


def load_config(config_path: Optional[str] = None) -> Config:
    """
    Load configuration from a single file or use defaults.

    Args:
        config_path: Optional explicit path to config file

    Returns:
        Config object with merged settings
    """
    config_data = _deep_copy_dict(DEFAULT_CONFIG)

    config_file = find_config_file(config_path)

    if config_file:
        try:
            file_config = load_toml(config_file)
            config_data = _merge_dicts(config_data, file_config)
            logger.info(f"Loaded configuration from {config_file}")
            return Config.from_dict(config_data, source=str(config_file))
        except (OSError, ValueError) as e:
            logger.warning(f"Error loading config file {config_file}: {e}")

    return Config.from_dict(config_data)


def load_config_cascade(explicit_path: Optional[str] = None) -> Config:
    """
    Load configuration with full cascade support.

    Merges configs from all levels in priority order:
    defaults -> system -> user -> current dir -> explicit

    Args:
        explicit_path: Explicit config file path (highest priority)

    Returns:
        Config object with merged settings from all sources
    """
    config_data = _deep_copy_dict(DEFAULT_CONFIG)
    source = None

    # Lowest priority first so later files override earlier ones
    for location in reversed(get_config_locations()):
        if location.exists():
            try:
                config_data = _merge_dicts(config_data, load_toml(location))
                source = str(location)
                logger.debug(f"Merged configuration from {location}")
            except (OSError, ValueError) as e:
                logger.warning(f"Error loading {location}: {e}")

    if explicit_path:
        path = Path(explicit_path)
        if path.exists():
            try:
                config_data = _merge_dicts(config_data, load_toml(path))
                source = str(path)
            except (OSError, ValueError) as e:
                logger.warning(f"Error loading {path}: {e}")
        else:
            logger.warning(f"Specified config file not found: {explicit_path}")

    return Config.from_dict(config_data, source=source)


def get_default_config() -> Config:
    """Get the default configuration."""
    return Config.from_dict(_deep_copy_dict(DEFAULT_CONFIG))


def create_default_config_file(filepath: Optional[str] = None) -> str:
    """
    Create a default configuration file.

    Args:
        filepath: Path to create the file (default: ./sitekit.toml)

    Returns:
        Path to the created file
    """
    if filepath is None:
        filepath = "sitekit.toml"

    return save_toml(DEFAULT_CONFIG, filepath)


def _deep_copy_dict(d: Dict[str, Any]) -> Dict[str, Any]:
    """Create a deep copy of a dictionary."""
    result = {}
    for key, value in d.items():
        if isinstance(value, dict):
            result[key] = _deep_copy_dict(value)
        elif isinstance(value, list):
            result[key] = value.copy()
        else:
            result[key] = value
    return result


def _merge_dicts(base: Dict[str, Any], override: Dict[str, Any]) -> Dict[str, Any]:
    """Merge two dictionaries, with override taking precedence."""
    result = _deep_copy_dict(base)
    for key, value in override.items():
        if key in result and isinstance(result[key], dict) and isinstance(value, dict):
            result[key] = _merge_dicts(result[key], value)
        else:
            result[key] = value
    return result


# Global configuration instance
_global_config: Optional[Config] = None


def get_config() -> Config:
    """Get the global configuration instance."""
    global _global_config
    if _global_config is None:
        _global_config = load_config_cascade()
    return _global_config


def set_config(config: Config) -> None:
    """Set the global configuration instance."""
    global _global_config
    _global_config = config


def reset_config() -> None:
    """Reset the global configuration to None (will reload on next access)."""
    global _global_config
    _global_config = None


def get_config_locations() -> List[Path]:
    """
    Get configuration file search locations in priority order.

    Returns:
        List of paths to search, in priority order (highest first)
    """
    return CONFIG_LOCATIONS.copy()
