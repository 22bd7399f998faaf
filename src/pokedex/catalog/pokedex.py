"""Pokédex facade used by the rendering layer.

Loading the list and the per-entity details never raises for remote failures:
the failure is logged and the affected entity is left without details, so one
bad response cannot break the whole listing.
"""

import asyncio
import logging
from typing import TYPE_CHECKING, NamedTuple

from pokedex.catalog.errors import InvalidStateError, PokedexError, RemoteFailureError
from pokedex.catalog.models import DetailRecord, EntityStub, NeighborSelection
from pokedex.catalog.store import EntityStore

if TYPE_CHECKING:
    from pokedex.api.client import PokeApiClient
    from pokedex.catalog.loader import DetailLoader

logger = logging.getLogger(__name__)


class DetailView(NamedTuple):
    """Everything the detail card needs for one Pokémon."""

    record: DetailRecord
    neighbors: NeighborSelection
    neighbor_records: dict[str, DetailRecord]


class Pokedex:
    """List and detail access over the store, cache and loader."""

    def __init__(
        self,
        client: "PokeApiClient",
        store: EntityStore,
        loader: "DetailLoader",
        list_limit: int = 151,
    ) -> None:
        self.client = client
        self.store = store
        self.loader = loader
        self.list_limit = list_limit

    async def load_list(self) -> int:
        """Fetch the Pokémon list once and add every entry to the store.

        Returns:
            Number of stubs added; 0 if the list could not be fetched
        """
        try:
            items = await self.client.fetch_list(self.list_limit)
        except RemoteFailureError as e:
            logger.error("Error loading Pokémon list: %s", e)
            return 0

        added = 0
        for item in items:
            try:
                stub = EntityStub.from_list_item(item)
            except (KeyError, TypeError, ValueError) as e:
                logger.warning("Skipping malformed list entry %r: %s", item, e)
                continue
            if self.store.add(stub):
                added += 1

        logger.info("Loaded %d Pokémon from list", added)
        return added

    async def load_all_details(self) -> dict[str, DetailRecord]:
        """Load details for every stub in the store concurrently.

        Neighbors added to the store while these loads run are not loaded here.

        Returns:
            Records by stub name, for the stubs that loaded successfully
        """
        stubs = self.store.get_all()
        results = await asyncio.gather(
            *(self.loader.load_details(stub) for stub in stubs), return_exceptions=True
        )

        records: dict[str, DetailRecord] = {}
        for stub, result in zip(stubs, results, strict=True):
            if isinstance(result, PokedexError):
                logger.error("Skipping %s: %s", stub.name, result)
            elif isinstance(result, BaseException):
                raise result
            else:
                records[stub.name] = result
        return records

    async def show_details(self, name: str) -> DetailView | None:
        """Load one Pokémon's record with its evolution neighbors.

        Returns:
            The view, or None if the name is unknown or its details failed to load
        """
        stub = self.store.find_by_name(name)
        if stub is None:
            return None

        try:
            record = await self.loader.load_details(stub)
        except PokedexError as e:
            logger.error("Could not load details for %s: %s", name, e)
            return None

        try:
            neighbors = await self.loader.neighbors_for(record)
        except InvalidStateError as e:
            logger.warning("No evolution neighbors for %s: %s", name, e)
            neighbors = NeighborSelection()
        except RemoteFailureError as e:
            logger.error("Could not resolve evolution neighbors for %s: %s", name, e)
            neighbors = NeighborSelection()

        neighbor_records = {
            neighbor: cached
            for neighbor in neighbors.names()
            if (cached := self.loader.cache.get(neighbor)) is not None
        }
        return DetailView(record, neighbors, neighbor_records)
