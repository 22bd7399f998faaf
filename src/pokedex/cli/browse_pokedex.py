"""CLI command for browsing the Pokédex in a terminal."""

import asyncio
from pathlib import Path

import click
from dependency_injector import providers

from pokedex.config import ConfigManager, PokedexConfig
from pokedex.core.container import Container
from pokedex.display.terminal import render_card, render_list_item
from pokedex.system.path_resolver import PathResolver
from pokedex.utils.structlog_configurator import configure_structlog


@click.command()
@click.option(
    "--name",
    "name",
    help="Show the detail card of one Pokémon instead of the list",
)
@click.option(
    "--limit",
    type=click.IntRange(1, 2000),
    help="Number of Pokémon to fetch (default from config: 151)",
)
@click.option(
    "--timeout",
    type=click.FloatRange(min=0, min_open=True),
    help="Per-request timeout in seconds",
)
@click.option(
    "--config",
    "config_path",
    type=click.Path(dir_okay=False, path_type=Path),
    help="Path to pokedex.yaml (default: $POKEDEX_CONFIG or the data directory)",
)
def browse_pokedex(
    name: str | None,
    limit: int | None,
    timeout: float | None,
    config_path: Path | None,
) -> None:
    """Browse Pokémon fetched from PokéAPI.

    Examples:
        # List the first 151 Pokémon, colored by type
        browse-pokedex

        # Show one detail card with its evolution neighbors
        browse-pokedex --name pikachu
    """
    config = ConfigManager(PathResolver(), config_path=config_path).load()
    overrides = {}
    if limit is not None:
        overrides["list_limit"] = limit
    if timeout is not None:
        overrides["request_timeout"] = timeout
    if overrides:
        config = config.model_copy(update=overrides)

    configure_structlog(config)

    exit_code = asyncio.run(_browse_async(config, name))
    if exit_code:
        raise SystemExit(exit_code)


async def _browse_async(config: PokedexConfig, name: str | None) -> int:
    """Async implementation of the browse command."""
    container = Container()
    container.config.override(providers.Object(config))
    pokedex = container.pokedex()

    async with container.api_client():
        if not await pokedex.load_list():
            click.echo(click.style("Error: could not load the Pokémon list", fg="red"), err=True)
            return 1

        if name:
            view = await pokedex.show_details(name)
            if view is None:
                click.echo(click.style(f"Error: no details for '{name}'", fg="red"), err=True)
                return 1
            click.echo(render_card(view))
            return 0

        # Loading adds evolution neighbors to the store; only listed entries are shown
        listed = pokedex.store.get_all()
        records = await pokedex.load_all_details()
        for stub in listed:
            click.echo(render_list_item(stub, records.get(stub.name)))

        missing = len(listed) - len(records)
        if missing:
            click.echo(
                click.style(f"{missing} Pokémon could not be loaded", fg="yellow"), err=True
            )
    return 0


if __name__ == "__main__":
    browse_pokedex()
