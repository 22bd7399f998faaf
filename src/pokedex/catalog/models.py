"""Data models for the Pokédex catalog.

Stubs and detail records are frozen once built. The evolution chain is modelled
explicitly as a document with an optional envelope so the parser never has to
inspect loosely-typed JSON.
"""

from typing import Any, NamedTuple

from pydantic import BaseModel, ConfigDict, Field


class EntityStub(BaseModel):
    """Minimal list-view record: a name and where to fetch its details."""

    model_config = ConfigDict(frozen=True)

    name: str
    detail_reference: str | None = None  # URL of the detail endpoint

    @classmethod
    def from_list_item(cls, item: dict[str, Any]) -> "EntityStub":
        """Build a stub from a `{name, url}` entry of the list endpoint."""
        return cls(name=item["name"], detail_reference=item.get("url"))


class DetailRecord(BaseModel):
    """Fully resolved attributes for one Pokémon."""

    model_config = ConfigDict(frozen=True)

    name: str
    height: int | float
    weight: int | float
    types: tuple[str, ...] = ()
    images: dict[str, str] = Field(default_factory=dict)  # slot -> URL
    forms: tuple[str, ...] = ()  # flattened evolution chain, pre-order
    stats: dict[str, int] = Field(default_factory=dict)  # stat name -> base stat
    abilities: tuple[str, ...] = ()

    @property
    def primary_type(self) -> str | None:
        """First listed type, used for coloring."""
        return self.types[0] if self.types else None


class ChainNode(BaseModel):
    """One node of an evolution chain."""

    species_name: str | None = None
    children: list["ChainNode"] = Field(default_factory=list)


class ChainDocument(BaseModel):
    """Evolution chain response.

    `chain` is the enveloped root as the API returns it; `root` is set when the
    document itself carries species/evolves_to fields at the top level.
    """

    chain: ChainNode | None = None
    root: ChainNode | None = None


class NeighborSelection(NamedTuple):
    """Forms shown beside an entity in the detail view."""

    previous: str | None = None
    next: str | None = None
    next_alternate: str | None = None  # second right-side form, first position only

    def names(self) -> list[str]:
        """Selected names in display order, skipping empty slots."""
        return [name for name in (self.previous, self.next, self.next_alternate) if name]
