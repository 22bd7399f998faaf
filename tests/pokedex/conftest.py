"""Shared fixtures for Pokédex tests: canned PokéAPI payloads and a fake client."""

import asyncio
from collections import Counter
from typing import Any

import pytest

from pokedex.catalog.errors import RemoteFailureError
from pokedex.catalog.loader import DetailLoader
from pokedex.catalog.pokedex import Pokedex
from pokedex.catalog.relations import RelationResolver
from pokedex.catalog.store import EntityStore
from pokedex.utils.cache import DetailCache

BASE_URL = "https://pokeapi.test/api/v2"


def make_details(
    name: str,
    types: list[str],
    height: int = 7,
    weight: int = 69,
    stats: dict[str, int] | None = None,
) -> dict[str, Any]:
    """Build a detail document shaped like the PokéAPI response."""
    stats = stats or {"hp": 45, "attack": 49, "defense": 49, "speed": 45}
    return {
        "name": name,
        "height": height,
        "weight": weight,
        "types": [{"slot": i + 1, "type": {"name": t, "url": ""}} for i, t in enumerate(types)],
        "sprites": {
            "front_default": f"https://img.test/{name}.png",
            "back_default": None,
            "other": {"dream_world": {"front_default": f"https://img.test/dw/{name}.svg"}},
            "versions": {"generation-i": {"red-blue": {"front_default": "https://img.test/rb"}}},
        },
        "abilities": [{"ability": {"name": "overgrow"}, "is_hidden": False}],
        "stats": [{"base_stat": v, "stat": {"name": k}} for k, v in stats.items()],
    }


def make_chain(*names: str) -> dict[str, Any]:
    """Build a linear evolution chain document."""
    node: dict[str, Any] | None = None
    for name in reversed(names):
        node = {"species": {"name": name}, "evolves_to": [node] if node else []}
    return {"id": 1, "chain": node}


BULBASAUR_CHAIN = make_chain("bulbasaur", "ivysaur", "venusaur")
PIKACHU_CHAIN = make_chain("pichu", "pikachu", "raichu")
DITTO_CHAIN = make_chain("ditto")

DETAILS = {
    "bulbasaur": make_details("bulbasaur", ["grass", "poison"]),
    "ivysaur": make_details("ivysaur", ["grass", "poison"], height=10, weight=130),
    "venusaur": make_details("venusaur", ["grass", "poison"], height=20, weight=1000),
    "pichu": make_details("pichu", ["electric"], height=3, weight=20),
    "pikachu": make_details("pikachu", ["electric"], height=4, weight=60),
    "raichu": make_details("raichu", ["electric"], height=8, weight=300),
    "ditto": make_details("ditto", ["normal"], height=3, weight=40),
}

CHAINS = {
    "bulbasaur": BULBASAUR_CHAIN,
    "ivysaur": BULBASAUR_CHAIN,
    "venusaur": BULBASAUR_CHAIN,
    "pichu": PIKACHU_CHAIN,
    "pikachu": PIKACHU_CHAIN,
    "raichu": PIKACHU_CHAIN,
    "ditto": DITTO_CHAIN,
}


class FakePokeApiClient:
    """In-memory stand-in for PokeApiClient that counts every call."""

    base_url = BASE_URL

    def __init__(
        self,
        listed: list[str] | None = None,
        details: dict[str, dict[str, Any]] | None = None,
        chains: dict[str, Any] | None = None,
        failing: set[str] | None = None,
    ) -> None:
        self.listed = listed if listed is not None else ["bulbasaur", "ivysaur", "pikachu"]
        self.details = details if details is not None else DETAILS
        self.chains = chains if chains is not None else CHAINS
        self.failing = failing or set()
        self.list_fails = False
        self.calls: Counter = Counter()

    async def __aenter__(self) -> "FakePokeApiClient":
        return self

    async def __aexit__(self, *exc_info: object) -> None:
        return None

    def pokemon_url(self, name: str) -> str:
        return f"{self.base_url}/pokemon/{name.lower()}"

    async def fetch_list(self, limit: int) -> list[dict[str, Any]]:
        self.calls["list"] += 1
        await asyncio.sleep(0)
        if self.list_fails:
            raise RemoteFailureError("list unavailable")
        return [{"name": n, "url": self.pokemon_url(n)} for n in self.listed[:limit]]

    async def fetch_details(self, url: str) -> dict[str, Any]:
        name = url.rstrip("/").rsplit("/", 1)[-1]
        self.calls[f"details:{name}"] += 1
        await asyncio.sleep(0)
        if name in self.failing or name not in self.details:
            raise RemoteFailureError(f"HTTP 404 from {url}", url=url)
        return self.details[name]

    async def fetch_pokemon(self, name: str) -> dict[str, Any]:
        return await self.fetch_details(self.pokemon_url(name))

    async def fetch_evolution_chain(self, name: str) -> Any:  # noqa: ANN401
        self.calls[f"chain:{name}"] += 1
        await asyncio.sleep(0)
        if name in self.failing or name not in self.chains:
            raise RemoteFailureError(f"No species '{name}'")
        return self.chains[name]

    def remote_calls(self) -> int:
        return sum(self.calls.values())


@pytest.fixture
def fake_client() -> FakePokeApiClient:
    """Fake API client serving the canned payloads."""
    return FakePokeApiClient()


@pytest.fixture
def store() -> EntityStore:
    """Empty entity store."""
    return EntityStore()


@pytest.fixture
def detail_cache() -> DetailCache:
    """Empty detail cache."""
    return DetailCache()


@pytest.fixture
def resolver(store, fake_client) -> RelationResolver:
    """Relation resolver over the store and fake client."""
    return RelationResolver(store, fake_client)


@pytest.fixture
def loader(fake_client, detail_cache, resolver) -> DetailLoader:
    """Detail loader wired to the fake client."""
    return DetailLoader(fake_client, detail_cache, resolver)


@pytest.fixture
def pokedex(fake_client, store, loader) -> Pokedex:
    """Pokédex facade over the fake client."""
    return Pokedex(fake_client, store, loader, list_limit=151)


@pytest.fixture
def fake_client_cls() -> type[FakePokeApiClient]:
    """The fake client class, for tests that need custom payloads."""
    return FakePokeApiClient


@pytest.fixture
def payload_builders() -> dict[str, Any]:
    """Builders for detail and chain documents."""
    return {"details": make_details, "chain": make_chain}
