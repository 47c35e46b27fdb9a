"""Configuration management for kanban-board using YAML files."""

from pathlib import Path
from typing import Any

import structlog
import yaml

logger = structlog.get_logger()

CONFIG_DIR_NAME = ".kanban-board"

DEFAULTS: dict[str, Any] = {
    "board.seed": True,
    "display.description_width": 100,
}

TRUE_VALUES = {"1", "true", "yes", "on"}
FALSE_VALUES = {"0", "false", "no", "off"}


class Config:
    """Configuration manager using YAML file storage.

    Local config lives in .kanban-board/config.yaml under the current
    directory, global config in ~/.kanban-board/config.yaml. Reads look in
    local config first, then global config.
    """

    def __init__(self, use_global: bool = False, config_dir: Path | None = None) -> None:
        """Initialize configuration manager.

        Args:
            use_global: If True, use global config only. If False, use local config with global fallback.
            config_dir: Custom directory to store config file (overrides use_global)
        """
        if config_dir is not None:
            self.config_dir = Path(config_dir)
            self.is_global = use_global
        elif use_global:
            self.config_dir = Path.home() / CONFIG_DIR_NAME
            self.is_global = True
        else:
            self.config_dir = Path.cwd() / CONFIG_DIR_NAME
            self.is_global = False

        self.config_file = self.config_dir / "config.yaml"
        self.config_dir.mkdir(parents=True, exist_ok=True)
        self._config: dict[str, Any] = self._load()

        self._global_config: dict[str, Any] = {}
        if not self.is_global:
            global_config_file = Path.home() / CONFIG_DIR_NAME / "config.yaml"
            if global_config_file.exists() and global_config_file != self.config_file:
                try:
                    with open(global_config_file, "r") as f:
                        self._global_config = yaml.safe_load(f) or {}
                except Exception as e:
                    logger.warning("Failed to load global config", error=str(e))

        logger.debug("Config initialized", config_file=str(self.config_file), is_global=self.is_global)

    def _load(self) -> dict[str, Any]:
        """Load configuration from YAML file.

        Returns:
            Configuration dictionary
        """
        if not self.config_file.exists():
            logger.debug("Config file does not exist, initializing empty config")
            return {}

        try:
            with open(self.config_file, "r") as f:
                config = yaml.safe_load(f) or {}
                logger.debug("Config loaded successfully", keys=list(config.keys()))
                return config
        except Exception as e:
            logger.error("Failed to load config", error=str(e))
            raise ValueError(f"Failed to load config from {self.config_file}: {e}") from e

    def _save(self) -> None:
        try:
            with open(self.config_file, "w") as f:
                yaml.safe_dump(self._config, f, default_flow_style=False, sort_keys=False)
            logger.debug("Config saved successfully")
        except Exception as e:
            logger.error("Failed to save config", error=str(e))
            raise ValueError(f"Failed to save config to {self.config_file}: {e}") from e

    def get(self, key: str, default: Any = None) -> Any:
        """Get a configuration value, local first, then global, then ``default``."""
        if key in self._config:
            logger.debug("Getting config value from local", key=key)
            return self._config[key]

        if not self.is_global and key in self._global_config:
            logger.debug("Getting config value from global", key=key)
            return self._global_config[key]

        logger.debug("Config value not found", key=key)
        return default

    def get_bool(self, key: str) -> bool:
        """Read a boolean setting, falling back to its default.

        Raises:
            ValueError: If the stored value is not a recognizable boolean
        """
        value = self.get(key, DEFAULTS.get(key, False))
        if isinstance(value, bool):
            return value
        text = str(value).strip().lower()
        if text in TRUE_VALUES:
            return True
        if text in FALSE_VALUES:
            return False
        raise ValueError(f"{key} must be true or false, got {value!r}")

    def get_int(self, key: str, minimum: int | None = None) -> int:
        """Read an integer setting, falling back to its default.

        Args:
            key: Configuration key
            minimum: Smallest accepted value, if any

        Raises:
            ValueError: If the stored value is not an integer or is below ``minimum``
        """
        value = self.get(key, DEFAULTS.get(key, 0))
        try:
            number = int(value)
        except (TypeError, ValueError) as e:
            raise ValueError(f"{key} must be an integer, got {value!r}") from e
        if minimum is not None and number < minimum:
            raise ValueError(f"{key} must be at least {minimum}, got {value!r}")
        return number

    def set(self, key: str, value: str) -> None:
        """Set a configuration value.

        Raises:
            ValueError: If the key is not a known setting
        """
        if key not in DEFAULTS:
            raise ValueError(f"Unknown config key {key!r}; known keys: {', '.join(DEFAULTS)}")
        logger.debug("Setting config value", key=key)
        self._config[key] = value
        self._save()

    def unset(self, key: str) -> None:
        logger.debug("Unsetting config value", key=key)
        if key in self._config:
            del self._config[key]
            self._save()

    def list(self) -> dict[str, Any]:
        """List all configuration settings.

        For local config, merges global config with local config (local takes precedence).
        """
        if self.is_global:
            logger.debug("Listing global config values", count=len(self._config))
            return self._config.copy()
        merged = self._global_config.copy()
        merged.update(self._config)
        logger.debug("Listing merged config values", count=len(merged))
        return merged


def get_config(use_global: bool = False) -> Config:
    """Get a configuration instance.

    Args:
        use_global: If True, return global config. If False, return local config with global fallback.
    """
    return Config(use_global=use_global)
