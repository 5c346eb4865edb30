"""Singleton configuration manager - the ONLY way to access config"""

import copy
import json
import logging
import os
from pathlib import Path
from typing import Any, Dict, List, Optional

from jsonschema import Draft7Validator

from ..utils.config_loader import ConfigLoader

ENV_PREFIX = "OUTPAINTER_"
CONFIG_DIR = Path(__file__).parent.parent / "config"
SCHEMA_DIR = CONFIG_DIR / "schemas"


class ConfigurationManager:
    """Singleton configuration manager - the ONLY way to access config"""

    _instance = None
    _initialized = False

    def __new__(cls):
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __init__(self):
        # Prevent re-initialization
        if ConfigurationManager._initialized:
            return
        ConfigurationManager._initialized = True

        self.logger = logging.getLogger(__name__)
        self._config_cache: Dict[str, Any] = {}
        self._master_config: Dict[str, Any] = {}
        self._user_overrides: Dict[str, Any] = {}
        self._env_overrides: Dict[str, Any] = {}
        self._user_config_path: Optional[Path] = None
        self._config_loader = ConfigLoader(CONFIG_DIR, self.logger)
        self._validator = self._load_validator()

        self._load_all_configurations()

    @classmethod
    def reset(cls):
        """Drop the singleton so the next access reloads every source"""
        cls._instance = None
        cls._initialized = False

    def _load_validator(self) -> Draft7Validator:
        """Load the master JSON schema - FAIL LOUD on errors"""
        schema_file = SCHEMA_DIR / "master_defaults.schema.json"
        if not schema_file.exists():
            raise ValueError(
                f"Schema file not found: {schema_file}\n"
                f"This is a critical configuration error."
            )
        try:
            with open(schema_file, "r") as f:
                schema = json.load(f)
        except json.JSONDecodeError as e:
            raise ValueError(
                f"Invalid JSON in schema file {schema_file}:\n"
                f"Error: {e}"
            ) from e
        Draft7Validator.check_schema(schema)
        return Draft7Validator(schema)

    def _validate_config(self, config_data: dict, source: str):
        """Validate config against schema - FAIL LOUD on invalid"""
        errors = sorted(self._validator.iter_errors(config_data),
                        key=lambda e: list(e.path))
        if errors:
            e = errors[0]
            raise ValueError(
                f"Configuration validation failed for {source}!\n"
                f"Error: {e.message}\n"
                f"Failed at path: {' -> '.join(str(p) for p in e.path)}\n"
                f"Invalid value: {e.instance}"
            )

    def _load_all_configurations(self):
        """Load all configurations in proper hierarchy"""
        # 1. Package defaults
        self._master_config = self._config_loader.load_config_file(
            "master_defaults.yaml")
        self._validate_config(self._master_config, "master_defaults.yaml")
        self.logger.debug("Loaded master configuration file")

        # 2. User configuration
        self._load_user_config()

        # 3. Environment overrides
        self._load_env_overrides()

        # 4. Build and validate the merged view
        self._build_config_cache()
        self._validate_config(self._config_cache, "merged configuration")

    def _search_paths(self) -> List[Path]:
        search_paths = []
        env_path = os.environ.get(f"{ENV_PREFIX}CONFIG_PATH", "")
        if env_path:
            search_paths.append(Path(env_path))
        search_paths.extend([
            Path.home() / ".config" / "outpainter" / "config.yaml",
            Path.cwd() / "outpainter.yaml",
        ])
        return search_paths

    def _load_user_config(self):
        """Load user configuration from the first existing search path"""
        for path in self._search_paths():
            if path.is_file():
                self._user_overrides = self._config_loader.load_path(path)
                self._user_config_path = path
                self.logger.info(f"Loaded user config from {path}")
                return
            if path.is_dir():
                self.logger.debug(f"Skipping directory {path} in config search")

    def _load_env_overrides(self):
        """Load environment variable overrides (OUTPAINTER_*)"""
        for key, value in os.environ.items():
            if not key.startswith(ENV_PREFIX) or key == f"{ENV_PREFIX}CONFIG_PATH":
                continue
            # OUTPAINTER_CATALOG_MAX_PIXELS -> catalog.max_pixels
            parts = key[len(ENV_PREFIX):].lower().split("_")
            for i in range(1, len(parts)):
                config_path = f"{'.'.join(parts[:i])}.{'_'.join(parts[i:])}"
                try:
                    self._get_nested_value(self._master_config, config_path)
                    break
                except KeyError:
                    continue
            else:
                config_path = ".".join(parts)

            self._set_nested_value(self._env_overrides, config_path,
                                   self._parse_env_value(value))

    @staticmethod
    def _parse_env_value(value: str) -> Any:
        if value.lower() in ("true", "false"):
            return value.lower() == "true"
        try:
            return int(value)
        except ValueError:
            pass
        try:
            return float(value)
        except ValueError:
            return value

    def has_key(self, key: str) -> bool:
        """Check if a configuration key exists"""
        try:
            self._get_nested_value(self._config_cache, key)
            return True
        except KeyError:
            return False

    def get_value(self, key: str) -> Any:
        """
        Get config value - FAILS LOUD if not found

        Args:
            key: Dot-separated config key (e.g., 'catalog.max_pixels')

        Returns:
            Configuration value

        Raises:
            ValueError: If key not found
        """
        try:
            return self._get_nested_value(self._config_cache, key)
        except KeyError:
            raise ValueError(
                f"Configuration key '{key}' not found!\n"
                f"This is a required configuration value with no default.\n"
                f"Solutions:\n"
                f"1. Add '{key}' to your config file\n"
                f"2. Set environment variable "
                f"{ENV_PREFIX}{key.upper().replace('.', '_')}"
            )

    def get_section(self, section: str) -> Dict[str, Any]:
        """Get a copy of a whole config section (e.g. 'outpaint')"""
        value = self.get_value(section)
        if not isinstance(value, dict):
            raise ValueError(f"Configuration key '{section}' is not a section")
        return copy.deepcopy(value)

    @property
    def user_config_path(self) -> Optional[Path]:
        return self._user_config_path

    def _merge_config(self, base: dict, override: dict):
        """Deep merge override into base config"""
        for key, value in override.items():
            if key in base and isinstance(base[key], dict) and isinstance(value, dict):
                self._merge_config(base[key], value)
            else:
                base[key] = value

    def _get_nested_value(self, config: dict, key: str) -> Any:
        """Get value from nested dict using dot notation"""
        value = config
        for k in key.split('.'):
            if isinstance(value, dict) and k in value:
                value = value[k]
            else:
                raise KeyError(f"Key '{k}' not found in path '{key}'")
        return value

    def _set_nested_value(self, config: dict, key: str, value: Any):
        """Set value in nested dict using dot notation"""
        keys = key.split('.')
        current = config
        for k in keys[:-1]:
            current = current.setdefault(k, {})
        current[keys[-1]] = value

    def _build_config_cache(self):
        """Build final config cache from all sources"""
        self._config_cache = copy.deepcopy(self._master_config)
        self._merge_config(self._config_cache, self._user_overrides)
        # Environment has the highest priority
        self._merge_config(self._config_cache, self._env_overrides)
