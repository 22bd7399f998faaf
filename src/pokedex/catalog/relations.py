"""Evolution neighbor selection.

The detail view shows up to two related forms beside the current one. They are
picked by position in the flattened evolution chain, anchored on the first two
forms rather than on strict adjacency:

    forms      position   previous   next       next_alternate
    n >= 3     0          -          forms[1]   forms[2]
    n >= 3     1          forms[0]   forms[2]   -
    n >= 3     >= 2       forms[0]   forms[1]   -
    n == 2     0          -          forms[1]   -
    n == 2     1          forms[0]   -          -
    n <= 1     any        -          -          -

Selected forms that are not yet in the EntityStore are fetched and added so the
view can load their details.
"""

import asyncio
import logging
from collections import OrderedDict
from collections.abc import Sequence
from typing import TYPE_CHECKING, Any

from pokedex.catalog.errors import InvalidStateError
from pokedex.catalog.models import EntityStub, NeighborSelection
from pokedex.catalog.store import EntityStore

if TYPE_CHECKING:
    from pokedex.api.client import PokeApiClient

logger = logging.getLogger(__name__)


def select_neighbors(entity_name: str, ordered_forms: Sequence[str]) -> NeighborSelection:
    """Pick the forms displayed beside `entity_name`.

    Args:
        entity_name: Name of the Pokémon being viewed
        ordered_forms: Its flattened evolution chain

    Returns:
        The selection, naming forms exactly as they appear in `ordered_forms`

    Raises:
        InvalidStateError: If `entity_name` is not one of `ordered_forms`
    """
    wanted = entity_name.casefold()
    position = next(
        (i for i, form in enumerate(ordered_forms) if form.casefold() == wanted),
        None,
    )
    if position is None:
        raise InvalidStateError(
            f"'{entity_name}' is not part of its evolution chain {list(ordered_forms)}"
        )

    count = len(ordered_forms)
    if count >= 3:
        if position == 0:
            return NeighborSelection(
                previous=None, next=ordered_forms[1], next_alternate=ordered_forms[2]
            )
        if position == 1:
            return NeighborSelection(previous=ordered_forms[0], next=ordered_forms[2])
        return NeighborSelection(previous=ordered_forms[0], next=ordered_forms[1])

    if count == 2:
        if position == 0:
            return NeighborSelection(next=ordered_forms[1])
        return NeighborSelection(previous=ordered_forms[0])

    return NeighborSelection()


class RelationResolver:
    """Select evolution neighbors and make sure they exist in the store.

    Detail documents fetched while adding a neighbor are kept so the neighbor's
    own detail load can reuse them. At most `prefetch_max_size` are kept; the
    oldest unclaimed one is dropped first.
    """

    def __init__(
        self, store: EntityStore, client: "PokeApiClient", prefetch_max_size: int = 64
    ) -> None:
        self.store = store
        self.client = client
        self.prefetch_max_size = prefetch_max_size
        self._pending: dict[str, asyncio.Task[EntityStub]] = {}
        self._prefetched: OrderedDict[str, dict[str, Any]] = OrderedDict()

    async def resolve_neighbors(
        self, entity_name: str, ordered_forms: Sequence[str]
    ) -> NeighborSelection:
        """Select neighbors for `entity_name` and add any missing ones to the store.

        Raises:
            InvalidStateError: If `entity_name` is not one of `ordered_forms`
            RemoteFailureError: If a missing neighbor cannot be fetched
        """
        selection = select_neighbors(entity_name, ordered_forms)
        await self.ensure_neighbors(selection)
        return selection

    async def ensure_neighbors(self, selection: NeighborSelection) -> list[EntityStub]:
        """Fetch and add every selected form the store does not know yet.

        Returns:
            Stubs for all selected forms, in display order
        """
        stubs = await asyncio.gather(*(self._ensure(name) for name in selection.names()))
        return list(stubs)

    async def _ensure(self, name: str) -> EntityStub:
        stub = self.store.find_by_name(name)
        if stub is not None:
            return stub

        key = name.casefold()
        task = self._pending.get(key)
        if task is None:
            task = asyncio.ensure_future(self._fetch_and_add(name))
            self._pending[key] = task
            task.add_done_callback(lambda _: self._pending.pop(key, None))
        return await asyncio.shield(task)

    async def _fetch_and_add(self, name: str) -> EntityStub:
        logger.info("Fetching evolution neighbor %s", name)
        payload = await self.client.fetch_pokemon(name)
        stub = EntityStub(name=name, detail_reference=self.client.pokemon_url(name))
        # Another path may have added the same name while this one was fetching
        if not self.store.add(stub):
            existing = self.store.find_by_name(name)
            return existing if existing is not None else stub

        self._prefetched[name.casefold()] = payload
        while len(self._prefetched) > self.prefetch_max_size:
            dropped, _ = self._prefetched.popitem(last=False)
            logger.debug("Dropped unclaimed details for %s", dropped)
        return stub

    def pop_prefetched(self, name: str) -> dict[str, Any] | None:
        """Hand over the detail document fetched while adding `name`, once."""
        return self._prefetched.pop(name.casefold(), None)
