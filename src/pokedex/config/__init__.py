"""Pokédex configuration package.

This package provides configuration management with:
- Validation through Pydantic models
- YAML parsing and serialization
- Defaults written on first run
"""

from .manager import ConfigManager
from .models import LoggingConfig, PokedexConfig

__all__ = [
    "ConfigManager",
    "LoggingConfig",
    "PokedexConfig",
]
