"""Catalog domain package.

This package contains the data pipeline behind the Pokédex views:
- EntityStore: In-memory stubs with case-insensitive unique names
- parse_chain: Evolution chain flattening
- RelationResolver: Positional evolution neighbor selection
- DetailLoader: Memoized detail loading
- Pokedex: Facade consumed by the rendering layer
"""

from pokedex.catalog.chain import parse_chain
from pokedex.catalog.errors import (
    InvalidArgumentError,
    InvalidStateError,
    MissingReferenceError,
    PokedexError,
    RemoteFailureError,
)
from pokedex.catalog.loader import DetailLoader
from pokedex.catalog.models import DetailRecord, EntityStub, NeighborSelection
from pokedex.catalog.pokedex import DetailView, Pokedex
from pokedex.catalog.relations import RelationResolver, select_neighbors
from pokedex.catalog.store import EntityStore

__all__ = [
    "DetailLoader",
    "DetailRecord",
    "DetailView",
    "EntityStore",
    "EntityStub",
    "InvalidArgumentError",
    "InvalidStateError",
    "MissingReferenceError",
    "NeighborSelection",
    "Pokedex",
    "PokedexError",
    "RelationResolver",
    "RemoteFailureError",
    "parse_chain",
    "select_neighbors",
]
