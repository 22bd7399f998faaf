"""In-memory repository of Pokémon stubs."""

import logging

from pokedex.catalog.errors import InvalidArgumentError
from pokedex.catalog.models import EntityStub

logger = logging.getLogger(__name__)


class EntityStore:
    """Ordered collection of entity stubs with case-insensitive unique names.

    All methods are synchronous, so a check-then-insert in `add` can never be
    interleaved with another coroutine's insert.
    """

    def __init__(self) -> None:
        self._stubs: list[EntityStub] = []
        self._index: dict[str, EntityStub] = {}

    def add(self, stub: EntityStub) -> bool:
        """Add a stub unless one with the same name already exists.

        Args:
            stub: Stub to add

        Returns:
            True if the stub was added, False if it was a duplicate
        """
        key = stub.name.casefold()
        if key in self._index:
            logger.warning("Pokémon with the name '%s' already exists", stub.name)
            return False

        self._stubs.append(stub)
        self._index[key] = stub
        return True

    def get_all(self) -> list[EntityStub]:
        """Return a copy of all stubs in insertion order."""
        return list(self._stubs)

    def find_by_name(self, name: str) -> EntityStub | None:
        """Find a stub by name, ignoring case.

        Args:
            name: Name to look up

        Returns:
            The matching stub, or None if no stub has that name

        Raises:
            InvalidArgumentError: If name is not a string
        """
        if not isinstance(name, str):
            raise InvalidArgumentError(f"Pokémon name must be a string, got {type(name).__name__}")

        stub = self._index.get(name.casefold())
        if stub is None:
            logger.info("Pokémon '%s' not found", name)
        return stub

    def __contains__(self, name: object) -> bool:
        return isinstance(name, str) and name.casefold() in self._index

    def __len__(self) -> int:
        return len(self._stubs)
