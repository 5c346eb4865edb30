"""
Configuration loader for Outpainter
"""

import logging
from pathlib import Path
from typing import Any, Dict, Optional

import yaml


class ConfigLoader:
    """
    Loads configuration from YAML files
    """

    def __init__(self, config_dir: Path,
                 logger: Optional[logging.Logger] = None):
        """
        Initialize config loader

        Args:
            config_dir: Directory containing config YAML files
            logger: Logger instance
        """
        self.config_dir = Path(config_dir)
        self.logger = logger or logging.getLogger(__name__)

        if not self.config_dir.exists():
            self.logger.warning(
                f"Config directory not found: {self.config_dir}"
            )

    def load_config_file(self, filename: str) -> Dict[str, Any]:
        """
        Load a specific configuration file

        Args:
            filename: Name of config file (with or without .yaml extension)

        Returns:
            Configuration dictionary from file
        """
        if not filename.endswith(".yaml"):
            filename += ".yaml"

        return self.load_path(self.config_dir / filename)

    def load_path(self, file_path: Path) -> Dict[str, Any]:
        """Load any YAML file - FAIL LOUD on missing or malformed files"""
        file_path = Path(file_path)
        if not file_path.exists():
            raise FileNotFoundError(f"Config file not found: {file_path}")

        try:
            with open(file_path, "r") as f:
                config = yaml.safe_load(f) or {}
        except yaml.YAMLError as e:
            raise ValueError(
                f"Failed to parse configuration from {file_path}: {e}\n"
                "The file must be valid YAML."
            ) from e

        if not isinstance(config, dict):
            raise ValueError(
                f"Config {file_path} must contain a mapping, "
                f"got {type(config).__name__}"
            )
        self.logger.debug(f"Loaded config from {file_path}")
        return self._convert_numeric_strings(config)

    def _convert_numeric_strings(self, config: Any) -> Any:
        """Convert integer strings (e.g. "1_048_576" or "64") to ints"""
        if isinstance(config, dict):
            return {k: self._convert_numeric_strings(v)
                    for k, v in config.items()}
        if isinstance(config, list):
            return [self._convert_numeric_strings(v) for v in config]
        if isinstance(config, str):
            stripped = config.replace("_", "")
            if stripped.isdigit():
                return int(stripped)
        return config
