"""Terminal rendering of Pokédex list entries and detail cards."""

import click

from pokedex.catalog.models import DetailRecord, EntityStub
from pokedex.catalog.pokedex import DetailView

# Terminal color per primary type
TYPE_COLORS = {
    "normal": "white",
    "fighting": "red",
    "flying": "bright_blue",
    "poison": "magenta",
    "ground": "yellow",
    "rock": "yellow",
    "bug": "green",
    "ghost": "magenta",
    "steel": "bright_white",
    "fire": "bright_red",
    "water": "blue",
    "grass": "bright_green",
    "electric": "bright_yellow",
    "psychic": "bright_magenta",
    "ice": "bright_cyan",
    "dragon": "blue",
    "dark": "bright_black",
    "fairy": "bright_magenta",
    "unknown": "cyan",
    "shadow": "bright_black",
}
DEFAULT_COLOR = "white"

MAX_BASE_STAT = 255
STAT_BAR_WIDTH = 30

PREFERRED_IMAGE_SLOTS = (
    "other.dream_world.front_default",
    "other.official-artwork.front_default",
    "front_default",
)


def type_color(record: DetailRecord | None) -> str:
    """Color for a record's primary type."""
    if record is None or record.primary_type is None:
        return DEFAULT_COLOR
    return TYPE_COLORS.get(record.primary_type, DEFAULT_COLOR)


def primary_image(record: DetailRecord) -> str | None:
    """Best available artwork URL."""
    for slot in PREFERRED_IMAGE_SLOTS:
        if slot in record.images:
            return record.images[slot]
    return next(iter(record.images.values()), None)


def stat_bar(value: int) -> str:
    filled = round(STAT_BAR_WIDTH * min(value, MAX_BASE_STAT) / MAX_BASE_STAT)
    return "█" * filled + "░" * (STAT_BAR_WIDTH - filled)


def render_list_item(stub: EntityStub, record: DetailRecord | None) -> str:
    """One styled list line; entities without details are dimmed."""
    if record is None:
        return click.style(stub.name, dim=True)
    types = "/".join(record.types)
    return click.style(f"{stub.name:<14}", fg=type_color(record), bold=True) + f" {types}"


def render_card(view: DetailView) -> str:
    """Multi-line detail card with stats and evolution neighbors."""
    record = view.record
    color = type_color(record)
    lines = [
        click.style(record.name.upper(), fg=color, bold=True),
        f"Height: {record.height}   Weight: {record.weight}",
        f"Types: {', '.join(record.types) or '-'}",
    ]
    if record.abilities:
        lines.append(f"Abilities: {', '.join(record.abilities)}")

    image = primary_image(record)
    if image:
        lines.append(f"Image: {image}")

    if record.stats:
        lines.append("")
        width = max(len(name) for name in record.stats)
        for name, value in record.stats.items():
            lines.append(f"{name:<{width}} {value:>3} {click.style(stat_bar(value), fg=color)}")

    if record.forms:
        lines.append("")
        lines.append(f"Evolution: {' → '.join(record.forms)}")

    neighbors = view.neighbors
    left = neighbors.previous
    right = [name for name in (neighbors.next, neighbors.next_alternate) if name]
    if left or right:
        left_text = _neighbor_label(left, view) if left else ""
        right_text = "  ".join(_neighbor_label(name, view) for name in right)
        lines.append(f"{left_text:<20} ◀ {record.name} ▶ {right_text}".rstrip())

    return "\n".join(lines)


def _neighbor_label(name: str, view: DetailView) -> str:
    return click.style(name, fg=type_color(view.neighbor_records.get(name)))
