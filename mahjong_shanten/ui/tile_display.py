"""Rich rendering of tiles, decompositions and hand analysis (debug reports)."""

from typing import Iterable, Optional

from rich.console import Console
from rich.table import Table
from rich.text import Text

from mahjong_shanten.core.component import Component, ComponentType
from mahjong_shanten.core.tile import Tile, TileSuit
from mahjong_shanten.rules.analyzer import HandProgress, WinningAnalysis
from mahjong_shanten.rules.effective_tiles import WaitType
from mahjong_shanten.rules.shanten import Decomposition, HandType


# Color schemes
SUIT_COLORS = {
    TileSuit.MAN: "red",
    TileSuit.PIN: "blue",
    TileSuit.SOU: "green",
    TileSuit.WIND: "yellow",
    TileSuit.DRAGON: "yellow",
}

HAND_TYPE_NAMES = {
    HandType.STANDARD: "一般形",
    HandType.SEVEN_PAIRS: "七对子",
    HandType.THIRTEEN_ORPHANS: "国士无双",
}

WAIT_TYPE_NAMES = {
    WaitType.RYANMEN: "两面",
    WaitType.PENCHAN: "边张",
    WaitType.KANCHAN: "嵌张",
    WaitType.SHANPON: "双碰",
    WaitType.TANKI: "单骑",
}

# Complete sets are bracketed, incomplete pieces parenthesized
_BRACKETS = {
    ComponentType.RUN: ("[", "]"),
    ComponentType.TRIPLET: ("[", "]"),
    ComponentType.QUAD: ("[", "]"),
    ComponentType.PAIR: ("(", ")"),
    ComponentType.PARTIAL: ("(", ")"),
    ComponentType.FLOATER: ("(", ")"),
}


def tile_to_rich_text(tile: Tile, highlight: bool = False) -> Text:
    """Convert a tile to a Rich Text object with appropriate colors."""
    if tile.is_red:
        style = "bold red on white"
    else:
        style = f"bold {SUIT_COLORS[tile.suit]}"
        if highlight:
            style += " on white"
    return Text(tile.name, style=style)


def tiles_to_rich_text(tiles: Iterable[Tile], separator: str = " ") -> Text:
    """Convert a list of tiles to Rich Text."""
    result = Text()
    for i, tile in enumerate(tiles):
        if i > 0:
            result.append(separator)
        result.append_text(tile_to_rich_text(tile))
    return result


def component_to_rich_text(component: Component, highlight: Optional[int] = None) -> Text:
    """A component's tiles in brackets; open melds are dimmed.

    ``highlight`` is the position of a tile to emphasize (the winning tile).
    """
    left, right = _BRACKETS[component.type]
    result = Text(left)
    for i, tile in enumerate(component.tiles):
        result.append_text(tile_to_rich_text(tile, highlight=(i == highlight)))
    result.append(right)
    if component.is_open:
        result.stylize("dim")
    return result


def decomposition_to_rich_text(decomposition: Decomposition) -> Text:
    result = Text()
    for i, component in enumerate(decomposition.components):
        if i > 0:
            result.append(" ")
        result.append_text(component_to_rich_text(component))
    if decomposition.called_melds:
        result.append(f" +{decomposition.called_melds}副露", style="dim")
    return result


def shanten_label(shanten: int) -> str:
    if shanten == -1:
        return "和了"
    if shanten == 0:
        return "听牌"
    return f"{shanten}向听"


def progress_table(progress: HandProgress) -> Table:
    """Summary table of a hand's shanten, effective tiles and waits."""
    table = Table(title=shanten_label(progress.shanten), border_style="cyan")
    table.add_column("牌型", style="bold")
    table.add_column("向听", justify="right")
    table.add_column("有效牌")
    table.add_column("枚数", justify="right")

    by_type = progress.effective_tiles_by_hand_type
    for ht, s in progress.shanten_result.by_type.items():
        tiles = by_type.get(ht, ())
        remaining = sum(et.remaining for et in progress.effective_details
                        if ht in et.hand_types)
        style = "green" if s == progress.shanten else ""
        table.add_row(HAND_TYPE_NAMES[ht], str(s), tiles_to_rich_text(tiles),
                      str(remaining), style=style)
    return table


def waits_table(progress: HandProgress) -> Table:
    """One row per (decomposition, waiting tile) of a tenpai hand."""
    table = Table(title="待牌", border_style="cyan")
    table.add_column("牌", justify="center")
    table.add_column("听法", style="bold")
    table.add_column("面子构成")

    for wait in progress.waits:
        table.add_row(tile_to_rich_text(wait.tile), WAIT_TYPE_NAMES[wait.wait_type],
                      decomposition_to_rich_text(wait.decomposition))
    return table


def render_progress(console: Console, progress: HandProgress):
    """Render a hand's progress, with waits when tenpai."""
    console.print(progress_table(progress))
    if progress.is_tenpai:
        console.print(waits_table(progress))


def render_winning(console: Console, analysis: WinningAnalysis):
    """Render every decomposition the winning tile completes."""
    if not analysis.is_winning:
        render_progress(console, analysis.progress)
        return

    table = Table(title=f"和了 {analysis.winning_tile.name}", border_style="gold1")
    table.add_column("牌型", style="bold")
    table.add_column("听法")
    table.add_column("面子构成")

    for d in analysis.decompositions:
        comp_index, tile_index = d.winning_position
        text = Text()
        for i, component in enumerate(d.components):
            if i > 0:
                text.append(" ")
            text.append_text(component_to_rich_text(
                component, highlight=tile_index if i == comp_index else None))
        table.add_row(HAND_TYPE_NAMES[d.hand_type], WAIT_TYPE_NAMES[d.wait_type], text)

    console.print(table)
