"""Dependency injection container for the Pokédex."""

from dependency_injector import containers, providers

from pokedex.api.client import PokeApiClient
from pokedex.catalog.loader import DetailLoader
from pokedex.catalog.pokedex import Pokedex
from pokedex.catalog.relations import RelationResolver
from pokedex.catalog.store import EntityStore
from pokedex.core.config import get_config
from pokedex.system.path_resolver import PathResolver
from pokedex.utils.cache import DetailCache


class Container(containers.DeclarativeContainer):
    """Application dependency injection container.

    Every collaborator is a singleton: the store and cache are shared by the
    loader, the resolver and the rendering layer for the whole session.
    """

    # Core infrastructure services - singletons
    path_resolver = providers.Singleton(PathResolver)

    config = providers.Singleton(
        get_config,
        path_resolver=path_resolver,
    )

    api_client = providers.Singleton(
        PokeApiClient,
        base_url=config.provided.api_base_url,
        timeout=config.provided.request_timeout,
        max_connections=config.provided.max_connections,
    )

    # Catalog state
    entity_store = providers.Singleton(EntityStore)
    detail_cache = providers.Singleton(DetailCache)

    relation_resolver = providers.Singleton(
        RelationResolver,
        store=entity_store,
        client=api_client,
    )

    detail_loader = providers.Singleton(
        DetailLoader,
        client=api_client,
        cache=detail_cache,
        resolver=relation_resolver,
    )

    pokedex = providers.Singleton(
        Pokedex,
        client=api_client,
        store=entity_store,
        loader=detail_loader,
        list_limit=config.provided.list_limit,
    )
