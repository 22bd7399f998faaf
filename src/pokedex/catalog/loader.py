"""Detail loading for Pokémon stubs.

A detail record combines two independent lookups: the Pokémon's own detail
document and its evolution chain, which takes a species request followed by a
chain request. Both run concurrently. Once the chain is parsed, the record's
evolution neighbors are added to the EntityStore so their details can be loaded
too. The merged record is cached by name and never rebuilt. Failed loads are not
cached.
"""

import asyncio
import logging
from collections.abc import Mapping
from functools import partial
from typing import TYPE_CHECKING, Any

from pokedex.catalog.chain import parse_chain
from pokedex.catalog.errors import InvalidStateError, MissingReferenceError, RemoteFailureError
from pokedex.catalog.models import DetailRecord, EntityStub, NeighborSelection
from pokedex.catalog.relations import RelationResolver, select_neighbors

if TYPE_CHECKING:
    from pokedex.api.client import PokeApiClient
    from pokedex.utils.cache import DetailCache

logger = logging.getLogger(__name__)

# Per-game sprite sets are skipped; they add hundreds of slots the views never use
SKIPPED_SPRITE_GROUPS = frozenset({"versions"})


def flatten_sprites(sprites: Any, prefix: str = "") -> dict[str, str]:  # noqa: ANN401
    """Flatten a nested sprites object into `slot -> URL`.

    Nested slots are joined with dots, e.g. ``other.dream_world.front_default``.
    Empty slots are dropped.
    """
    images: dict[str, str] = {}
    if not isinstance(sprites, Mapping):
        return images

    for key, value in sprites.items():
        if not prefix and key in SKIPPED_SPRITE_GROUPS:
            continue
        slot = f"{prefix}{key}"
        if isinstance(value, str) and value:
            images[slot] = value
        elif isinstance(value, Mapping):
            images.update(flatten_sprites(value, prefix=f"{slot}."))
    return images


def build_record(name: str, details: Mapping[str, Any], forms: list[str]) -> DetailRecord:
    """Merge a detail document and a flattened chain into a DetailRecord.

    Raises:
        KeyError, TypeError, ValueError: If the detail document is malformed
    """
    return DetailRecord(
        name=name,
        height=details["height"],
        weight=details["weight"],
        types=tuple(item["type"]["name"] for item in details.get("types") or []),
        images=flatten_sprites(details.get("sprites")),
        forms=tuple(forms),
        stats={
            item["stat"]["name"]: int(item["base_stat"]) for item in details.get("stats") or []
        },
        abilities=tuple(item["ability"]["name"] for item in details.get("abilities") or []),
    )


class DetailLoader:
    """Load, merge and memoize Pokémon detail records."""

    def __init__(
        self,
        client: "PokeApiClient",
        cache: "DetailCache",
        resolver: RelationResolver | None = None,
    ) -> None:
        """Initialize the loader.

        Args:
            client: API client used for all remote requests
            cache: Cache that memoizes records and in-flight loads
            resolver: Neighbor resolver; required only for `neighbors_for`
        """
        self.client = client
        self.cache = cache
        self.resolver = resolver

    async def load_details(self, stub: EntityStub) -> DetailRecord:
        """Return the detail record for a stub, fetching it on first use.

        Args:
            stub: Stub to load

        Returns:
            The detail record

        Raises:
            MissingReferenceError: If the record is not cached and the stub has no URL
            RemoteFailureError: If any request fails or returns unusable data
        """
        if not stub.detail_reference and not (
            self.cache.has(stub.name) or self.cache.is_pending(stub.name)
        ):
            raise MissingReferenceError(f"No details URL provided for '{stub.name}'")

        return await self.cache.get_or_load(stub.name, partial(self._fetch_record, stub))

    async def _fetch_record(self, stub: EntityStub) -> DetailRecord:
        logger.debug("Loading details for %s", stub.name)
        try:
            details, chain = await asyncio.gather(
                self._fetch_details(stub),
                self.client.fetch_evolution_chain(stub.name),
            )
        except RemoteFailureError:
            logger.error("Error loading details for %s", stub.name)
            raise

        try:
            record = build_record(stub.name, details, parse_chain(chain))
        except (KeyError, TypeError, ValueError) as e:
            logger.error("Malformed details for %s: %s", stub.name, e)
            raise RemoteFailureError(
                f"Malformed details for '{stub.name}'", url=stub.detail_reference
            ) from e

        if self.resolver is not None:
            await self._add_neighbors(record)

        logger.debug("Loaded details for %s (%d forms)", stub.name, len(record.forms))
        return record

    async def _add_neighbors(self, record: DetailRecord) -> None:
        """Add the record's evolution neighbors to the store; failures only log."""
        try:
            selection = select_neighbors(record.name, record.forms)
            await self.resolver.ensure_neighbors(selection)
        except InvalidStateError as e:
            logger.warning("No evolution neighbors for %s: %s", record.name, e)
        except RemoteFailureError as e:
            logger.warning("Could not add evolution neighbors of %s: %s", record.name, e)

    async def _fetch_details(self, stub: EntityStub) -> dict[str, Any]:
        if self.resolver is not None:
            prefetched = self.resolver.pop_prefetched(stub.name)
            if prefetched is not None:
                return prefetched
        assert stub.detail_reference is not None
        return await self.client.fetch_details(stub.detail_reference)

    async def neighbors_for(self, record: DetailRecord) -> NeighborSelection:
        """Select a record's evolution neighbors and preload their details.

        Neighbor detail failures are logged and skipped; the selection is still
        returned so the view can show the names.

        Raises:
            InvalidStateError: If the record's name is missing from its forms
            RemoteFailureError: If a missing neighbor cannot be added to the store
        """
        if self.resolver is None:
            raise RuntimeError("DetailLoader was created without a RelationResolver")

        selection = await self.resolver.resolve_neighbors(record.name, record.forms)
        stubs = [self.resolver.store.find_by_name(name) for name in selection.names()]
        results = await asyncio.gather(
            *(self.load_details(stub) for stub in stubs if stub is not None),
            return_exceptions=True,
        )
        for result in results:
            if isinstance(result, Exception):
                logger.warning("Could not preload neighbor of %s: %s", record.name, result)
        return selection
