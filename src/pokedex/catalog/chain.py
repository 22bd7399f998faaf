"""Evolution chain flattening.

PokéAPI describes an evolution family as a tree: each node names a species and
lists the species it evolves into under ``evolves_to``. The detail view only
needs the forms in a fixed order, so the tree is flattened with a pre-order
walk. Branch order follows ``evolves_to`` order because neighbor selection is
purely positional.
"""

import logging
from collections.abc import Mapping
from typing import Any

from pokedex.catalog.models import ChainDocument, ChainNode

logger = logging.getLogger(__name__)


def _node_from_raw(raw: Any) -> ChainNode | None:  # noqa: ANN401
    """Normalize one raw chain node, or return None if it is not a mapping."""
    if not isinstance(raw, Mapping):
        return None

    species = raw.get("species")
    species_name = species.get("name") if isinstance(species, Mapping) else None
    if not isinstance(species_name, str):
        species_name = None

    raw_children = raw.get("evolves_to")
    children = []
    if isinstance(raw_children, list):
        for raw_child in raw_children:
            child = _node_from_raw(raw_child)
            if child is not None:
                children.append(child)

    return ChainNode(species_name=species_name, children=children)


def _is_chain_node(raw: Mapping) -> bool:
    return "species" in raw or "evolves_to" in raw


def normalize_chain(raw: Any) -> ChainDocument:  # noqa: ANN401
    """Build a ChainDocument from an API response.

    Both the enveloped shape ``{"chain": {...}}`` and a bare root node are
    accepted. A document carrying both keeps both roots.
    """
    if not isinstance(raw, Mapping):
        return ChainDocument()

    root = _node_from_raw(raw) if _is_chain_node(raw) else None
    chain = _node_from_raw(raw.get("chain"))
    return ChainDocument(chain=chain, root=root)


def _walk(node: ChainNode, names: list[str]) -> None:
    if node.species_name:
        names.append(node.species_name)
    for child in node.children:
        _walk(child, names)


def parse_chain(document: ChainDocument | ChainNode | Mapping | None) -> list[str]:
    """Flatten an evolution chain into species names in pre-order.

    Args:
        document: A raw API response, a normalized document, a single node or None

    Returns:
        Species names in traversal order; duplicates are kept
    """
    if document is None:
        return []
    if isinstance(document, ChainNode):
        document = ChainDocument(chain=document)
    elif not isinstance(document, ChainDocument):
        document = normalize_chain(document)

    names: list[str] = []
    # Unwrapped root first, then the enveloped one
    for root in (document.root, document.chain):
        if root is not None:
            _walk(root, names)

    if not names:
        logger.debug("Evolution chain yielded no species")
    return names
