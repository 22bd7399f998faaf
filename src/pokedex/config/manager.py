"""Configuration loading and saving."""

import logging
import shutil
from pathlib import Path
from typing import Any

import yaml
from pydantic import ValidationError

from pokedex.config.models import PokedexConfig
from pokedex.system.path_resolver import PathResolver

logger = logging.getLogger(__name__)


class ConfigManager:
    """Manages configuration loading and saving."""

    CURRENT_VERSION = "1.0.0"

    def __init__(
        self, path_resolver: PathResolver | None = None, config_path: Path | None = None
    ):
        """Initialize ConfigManager.

        Args:
            path_resolver: Optional PathResolver instance. If None, creates a new one.
            config_path: Explicit config file path, overriding the resolver
        """
        self.path_resolver = path_resolver or PathResolver()
        self.config_path = config_path or self.path_resolver.get_pokedex_config_path()

    def load(self) -> PokedexConfig:
        """Load and validate configuration, creating it from defaults if missing.

        Returns:
            PokedexConfig: Loaded and validated configuration

        Raises:
            ValueError: If the file is not valid YAML or fails validation
        """
        self._ensure_config_exists()
        raw_config = self._read_yaml()

        config_version = raw_config.get("config_version", self.CURRENT_VERSION)
        if config_version != self.CURRENT_VERSION:
            logger.warning(
                "Config version %s differs from %s; loading with current defaults",
                config_version,
                self.CURRENT_VERSION,
            )
            raw_config["config_version"] = self.CURRENT_VERSION

        return self._create_config_object(raw_config)

    def save(self, config: PokedexConfig) -> None:
        """Save configuration to file with backup.

        Args:
            config: Configuration to save

        Raises:
            PermissionError: If config file cannot be written
        """
        self.config_path.parent.mkdir(parents=True, exist_ok=True)

        if self.config_path.exists():
            backup_path = self.config_path.with_suffix(".yaml.backup")
            try:
                shutil.copy2(self.config_path, backup_path)
            except PermissionError:
                logger.warning("Could not create backup at %s", backup_path)

        config_yaml = yaml.dump(config.model_dump(), default_flow_style=False, sort_keys=False)
        self.config_path.write_text(config_yaml)
        logger.info("Configuration saved successfully to %s", self.config_path)

    def _ensure_config_exists(self) -> None:
        """Write a default config file if none exists."""
        if not self.config_path.exists():
            self.config_path.parent.mkdir(parents=True, exist_ok=True)
            defaults = PokedexConfig(config_version=self.CURRENT_VERSION).model_dump()
            self.config_path.write_text(
                yaml.dump(defaults, default_flow_style=False, sort_keys=False)
            )
            logger.info("Created default configuration at %s", self.config_path)

    def _read_yaml(self) -> dict[str, Any]:
        """Read the YAML config file into a dictionary."""
        try:
            raw_config = yaml.safe_load(self.config_path.read_text()) or {}
        except yaml.YAMLError as e:
            raise ValueError(f"Invalid YAML in {self.config_path}: {e}") from e

        if not isinstance(raw_config, dict):
            raise ValueError(f"Configuration in {self.config_path} must be a mapping")
        return raw_config

    def _create_config_object(self, raw_config: dict[str, Any]) -> PokedexConfig:
        """Create a PokedexConfig from a dictionary, dropping unknown fields."""
        expected_fields = set(PokedexConfig.model_fields.keys())
        filtered_config = {k: v for k, v in raw_config.items() if k in expected_fields}

        unexpected_fields = set(raw_config.keys()) - expected_fields
        if unexpected_fields:
            logger.warning("Filtered out unexpected config fields: %s", unexpected_fields)

        try:
            return PokedexConfig(**filtered_config)
        except ValidationError as e:
            raise ValueError(f"Configuration validation failed: {e}") from e
