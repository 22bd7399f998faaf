"""PokéAPI access package."""

from pokedex.api.client import DEFAULT_BASE_URL, PokeApiClient

__all__ = ["DEFAULT_BASE_URL", "PokeApiClient"]
