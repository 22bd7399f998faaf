"""Tests for terminal rendering."""

import click

from pokedex.catalog.models import DetailRecord, EntityStub, NeighborSelection
from pokedex.catalog.pokedex import DetailView
from pokedex.display.terminal import (
    DEFAULT_COLOR,
    primary_image,
    render_card,
    render_list_item,
    stat_bar,
    type_color,
)

PIKACHU = DetailRecord(
    name="pikachu",
    height=4,
    weight=60,
    types=("electric",),
    images={
        "front_default": "https://img.test/pikachu.png",
        "other.dream_world.front_default": "https://img.test/dw/pikachu.svg",
    },
    forms=("pichu", "pikachu", "raichu"),
    stats={"hp": 35, "speed": 90},
    abilities=("static",),
)


def test_type_color():
    """Should color by primary type and fall back for unknown types."""
    assert type_color(PIKACHU) == "bright_yellow"
    assert type_color(None) == DEFAULT_COLOR
    assert type_color(PIKACHU.model_copy(update={"types": ("cosmic",)})) == DEFAULT_COLOR


def test_primary_image_prefers_dream_world():
    """Should pick the dream world artwork when present."""
    assert primary_image(PIKACHU) == "https://img.test/dw/pikachu.svg"
    assert primary_image(PIKACHU.model_copy(update={"images": {}})) is None


def test_stat_bar_scales_to_max():
    """Should fill the bar proportionally and clamp above the maximum."""
    assert stat_bar(0).count("█") == 0
    assert stat_bar(255).count("█") == 30
    assert stat_bar(999).count("█") == 30


def test_render_list_item():
    """Should show types for loaded entities and the bare name otherwise."""
    stub = EntityStub(name="pikachu")

    assert "electric" in click.unstyle(render_list_item(stub, PIKACHU))
    assert click.unstyle(render_list_item(stub, None)) == "pikachu"


def test_render_card():
    """Should include stats, evolution line and neighbors."""
    view = DetailView(
        record=PIKACHU,
        neighbors=NeighborSelection(previous="pichu", next="raichu"),
        neighbor_records={},
    )

    card = click.unstyle(render_card(view))

    assert card.startswith("PIKACHU")
    assert "Abilities: static" in card
    assert "Evolution: pichu → pikachu → raichu" in card
    assert "◀ pikachu ▶ raichu" in card
    assert "hp     35" in card
