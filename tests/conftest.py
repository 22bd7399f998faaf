from pathlib import Path

import pytest

from pokedex.config import ConfigManager, PokedexConfig
from pokedex.system.path_resolver import PathResolver


@pytest.fixture(autouse=True)
def isolated_data_dir(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    """Point the data directory at a temporary location.

    Tests must never create or read ~/.local/share/pokedex, so POKEDEX_DATA is
    redirected and any POKEDEX_CONFIG / POKEDEX_JSON_LOGS from the caller's shell
    is cleared.
    """
    data_dir = tmp_path / "pokedex-data"
    monkeypatch.setenv("POKEDEX_DATA", str(data_dir))
    monkeypatch.delenv("POKEDEX_CONFIG", raising=False)
    monkeypatch.delenv("POKEDEX_JSON_LOGS", raising=False)
    return data_dir


@pytest.fixture
def path_resolver(isolated_data_dir: Path) -> PathResolver:
    """Provide a PathResolver rooted in the temporary data directory."""
    return PathResolver()


@pytest.fixture
def test_config(path_resolver: PathResolver) -> PokedexConfig:
    """Load a default configuration through the temporary path resolver."""
    return ConfigManager(path_resolver).load()
