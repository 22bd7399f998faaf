"""Configuration loading for the container."""

from pokedex.config import ConfigManager, PokedexConfig
from pokedex.system.path_resolver import PathResolver


def get_config(path_resolver: PathResolver | None = None) -> PokedexConfig:
    """Load Pokédex configuration.

    Args:
        path_resolver: Optional PathResolver instance to use. If not provided,
                      creates a new PathResolver instance.

    Returns:
        PokedexConfig: The loaded and validated configuration.
    """
    if path_resolver is None:
        path_resolver = PathResolver()
    return ConfigManager(path_resolver).load()
