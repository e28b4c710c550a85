# services/config.py
"""
Service for configuration management operations.
"""

from pathlib import Path
from typing import List, Optional

from sitekit.core.config import Config

from .base import BaseService, ServiceResult


class ConfigService(BaseService):
    """
    ServiceResult-wrapped access to the configuration cascade.
    """

    def get_config(self) -> ServiceResult[Config]:
        """Get the current global configuration."""
        try:
            from sitekit.core.config import get_config as core_get_config

            config = core_get_config()

            return ServiceResult.ok(
                data=config,
                message=f"Loaded config from {config._source or 'defaults'}",
                source=config._source,
            )
        except Exception as e:
            return ServiceResult.fail(f"Failed to get config: {e}")

    def load_config(self, config_path: Optional[str] = None) -> ServiceResult[Config]:
        """
        Load configuration through the full cascade.

        Args:
            config_path: Optional explicit config file, merged last

        Returns:
            ServiceResult containing the Config object on success
        """
        try:
            from sitekit.core.config import load_config_cascade

            if config_path and not Path(config_path).exists():
                return ServiceResult.fail(f"Config file not found: {config_path}")

            config = load_config_cascade(config_path)

            return ServiceResult.ok(
                data=config,
                message=f"Loaded config from {config._source or 'defaults'}",
                source=config._source,
            )
        except Exception as e:
            return ServiceResult.fail(f"Failed to load config: {e}")

    def find_config_file(self, config_path: Optional[str] = None) -> ServiceResult[Optional[str]]:
        """Find the highest priority configuration file that exists."""
        try:
            from sitekit.core.config import find_config_file as core_find

            result = core_find(config_path)

            if result:
                return ServiceResult.ok(data=str(result), message=f"Found config file: {result}")
            return ServiceResult.ok(data=None, message="No config file found")
        except Exception as e:
            return ServiceResult.fail(f"Failed to find config file: {e}")

    def get_config_locations(self) -> ServiceResult[List[str]]:
        """Get configuration file search locations in priority order."""
        try:
            from sitekit.core.config import get_config_locations as core_get_locations

            paths = [str(location) for location in core_get_locations()]

            return ServiceResult.ok(data=paths, message=f"Found {len(paths)} config locations")
        except Exception as e:
            return ServiceResult.fail(f"Failed to get config locations: {e}")

    def create_default_config(
        self,
        filepath: Optional[str] = None,
        force: bool = False,
    ) -> ServiceResult[str]:
        """
        Create a default configuration file.

        Args:
            filepath: Path to create the file (default: ./sitekit.toml)
            force: Overwrite if file exists

        Returns:
            ServiceResult containing the created file path on success
        """
        try:
            from sitekit.core.config import create_default_config_file

            path = Path(filepath) if filepath else Path("sitekit.toml")

            if path.exists() and not force:
                return ServiceResult.fail(
                    f"File already exists: {path}. Use force=True to overwrite."
                )

            result_path = create_default_config_file(str(path))

            return ServiceResult.ok(data=result_path, message=f"Created config file: {result_path}")
        except Exception as e:
            return ServiceResult.fail(f"Failed to create config file: {e}")
