import os
from pathlib import Path


class PathResolver:
    """Central authority for file path resolution in the Pokédex.

    Uses environment variables for configuration with sensible defaults.
    """

    def __init__(self) -> None:
        """Initialize PathResolver with environment-based configuration."""
        self.data_dir = Path(
            os.getenv("POKEDEX_DATA", Path.home() / ".local" / "share" / "pokedex")
        )

    def get_pokedex_config_path(self) -> Path:
        """Get the path to the main configuration file.

        Checks POKEDEX_CONFIG environment variable first, then falls back to default.
        """
        config_path = os.getenv("POKEDEX_CONFIG")
        if config_path:
            return Path(config_path)

        return self.data_dir / "config" / "pokedex.yaml"
