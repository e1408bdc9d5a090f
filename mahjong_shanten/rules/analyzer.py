"""Hand progress analysis - shanten, effective tiles, winning and waits.

Ties the shanten search and the effective tile calculation to a Hand:
which tile kinds the hand is waiting on, whether the last tile wins, and,
for a win, every decomposition and wait shape the winning tile completes.
"""

import logging
from dataclasses import dataclass
from enum import Enum
from typing import Dict, Iterable, List, Optional, Tuple

from mahjong_shanten.core.component import Component
from mahjong_shanten.core.hand import Hand
from mahjong_shanten.core.tile import Tile
from mahjong_shanten.core.tile_count import TileCount
from mahjong_shanten.rules.config import AnalyzerConfig
from mahjong_shanten.rules.effective_tiles import (
    EffectiveTile, EffectiveTilesResult, WaitDetail, WaitType, calculate_effective_tiles,
)
from mahjong_shanten.rules.shanten import (
    HAND_TYPE_ORDER, Decomposition, HandType, ShantenResult, calculate_shanten,
)

logger = logging.getLogger(__name__)


class HandState(Enum):
    WINNING = "winning"        # 和了
    TENPAI = "tenpai"          # 听牌
    INCOMPLETE = "incomplete"  # 未听牌


@dataclass(frozen=True)
class HandProgress:
    """Shanten and effective tiles of a hand."""
    shanten_result: ShantenResult
    effective: EffectiveTilesResult

    @property
    def shanten(self) -> int:
        return self.shanten_result.shanten

    @property
    def hand_type(self) -> HandType:
        return self.shanten_result.hand_type

    @property
    def state(self) -> HandState:
        if self.shanten == -1:
            return HandState.WINNING
        if self.shanten == 0:
            return HandState.TENPAI
        return HandState.INCOMPLETE

    @property
    def is_complete(self) -> bool:
        return self.shanten == -1

    @property
    def is_tenpai(self) -> bool:
        return self.shanten == 0

    @property
    def is_iishanten(self) -> bool:
        return self.shanten == 1

    @property
    def effective_tiles(self) -> Tuple[Tile, ...]:
        return tuple(et.tile for et in self.effective.tiles)

    @property
    def effective_details(self) -> Tuple[EffectiveTile, ...]:
        return self.effective.tiles

    @property
    def effective_tiles_by_hand_type(self) -> Dict[HandType, Tuple[Tile, ...]]:
        return self.effective.by_hand_type()

    @property
    def decompositions(self) -> Tuple[Decomposition, ...]:
        """Tied-optimal decompositions of every hand type at the minimum."""
        result: List[Decomposition] = []
        for ht in self.shanten_result.tied_types:
            result.extend(self.shanten_result.decompositions_of(ht))
        return tuple(result)

    @property
    def waits(self) -> Tuple[WaitDetail, ...]:
        return self.effective.waits


@dataclass(frozen=True)
class WinningDecomposition:
    """One way the winning tile completes the hand.

    Attributes:
        wait: The tenpai wait the winning tile resolved
        components: Called melds followed by the completed concealed
            components, ordered by first tile
        winning_position: (component index, index within that component)
            of the winning tile in ``components``
    """
    wait: WaitDetail
    components: Tuple[Component, ...]
    winning_position: Tuple[int, int]

    @property
    def hand_type(self) -> HandType:
        return self.wait.hand_type

    @property
    def wait_type(self) -> WaitType:
        return self.wait.wait_type

    @property
    def waiting_component(self) -> Optional[Component]:
        return self.wait.component

    @property
    def tenpai_decomposition(self) -> Decomposition:
        return self.wait.decomposition

    @property
    def winning_component(self) -> Component:
        return self.components[self.winning_position[0]]


@dataclass(frozen=True)
class WinningAnalysis:
    is_winning: bool
    progress: HandProgress
    winning_tile: Optional[Tile] = None
    decompositions: Tuple[WinningDecomposition, ...] = ()

    @property
    def wait_types(self) -> Tuple[WaitType, ...]:
        found = {d.wait_type for d in self.decompositions}
        return tuple(wt for wt in WaitType if wt in found)

    @property
    def hand_types(self) -> Tuple[HandType, ...]:
        found = {d.hand_type for d in self.decompositions}
        return tuple(ht for ht in HAND_TYPE_ORDER if ht in found)


@dataclass(frozen=True)
class WaitingTileInfo:
    tile: Tile
    wait_types: Tuple[WaitType, ...]
    hand_types: Tuple[HandType, ...]


@dataclass(frozen=True)
class WaitTypeAnalysis:
    waiting_tiles: Tuple[WaitingTileInfo, ...]
    has_multiple_wait_types: bool


def _restore_red_fives(components: List[Component], reds: Iterable[Tile]):
    """Swap each held red five in for a canonical five of the same kind."""
    for red in reds:
        for i, component in enumerate(components):
            tiles = list(component.tiles)
            pos = next((j for j, t in enumerate(tiles) if t.same_kind(red) and not t.is_red), None)
            if pos is not None:
                tiles[pos] = red
                components[i] = Component(tiles, component.type, component.call)
                break


def _winning_decomposition(hand: Hand, wait: WaitDetail, winning_tile: Tile) -> WinningDecomposition:
    # Decompositions are built from canonical tiles; the winning tile is placed last
    reds = [t for t in hand.closed_tiles if t.is_red]
    if winning_tile in reds:
        reds.remove(winning_tile)
    concealed = list(wait.decomposition.components)
    _restore_red_fives(concealed, reds)

    if wait.component is None:
        # Thirteen orphans waiting on its missing kind
        completed = Component.floater(winning_tile)
        concealed.append(completed)
    else:
        pos = wait.decomposition.components.index(wait.component)
        completed = concealed[pos].complete_with(winning_tile)
        concealed[pos] = completed
    concealed.sort(key=Component.sort_key)

    components = tuple(hand.melds) + tuple(concealed)
    comp_index = len(hand.melds) + concealed.index(completed)
    tiles = completed.tiles
    if winning_tile in tiles:
        tile_index = tiles.index(winning_tile)
    else:
        tile_index = next(i for i, t in enumerate(tiles) if t.same_kind(winning_tile))
    return WinningDecomposition(wait, components, (comp_index, tile_index))


class HandAnalyzer:
    """Shanten, effective tile and winning analysis for hands."""

    def __init__(self, config: Optional[AnalyzerConfig] = None):
        self.config = config or AnalyzerConfig()

    def _progress(self, counts: TileCount, hand: Hand) -> HandProgress:
        shanten_result = calculate_shanten(counts, hand.num_melds, hand.special_hands_allowed,
                                           self.config.hand_types)
        effective = calculate_effective_tiles(counts, hand.num_melds, hand.special_hands_allowed,
                                              shanten_result)
        return HandProgress(shanten_result, effective)

    def analyze_progress(self, hand: Hand) -> HandProgress:
        """Shanten and effective tiles.

        With ``exclude_last_tile`` set (the default) a hand holding a last
        tile is analyzed as it stood before that tile arrived.
        """
        if self.config.exclude_last_tile and hand.last_tile is not None:
            counts = hand.tile_count_without_last()
        else:
            counts = hand.tile_count
        return self._progress(counts, hand)

    def is_winning(self, hand: Hand) -> bool:
        """Tenpai without the last tile, and the last tile is a wait."""
        if hand.last_tile is None:
            return False
        progress = self._progress(hand.tile_count_without_last(), hand)
        return progress.is_tenpai and hand.last_tile in progress.effective

    def analyze_winning(self, hand: Hand) -> WinningAnalysis:
        """Winning check plus every decomposition the last tile completes."""
        if hand.last_tile is None:
            return WinningAnalysis(False, self.analyze_progress(hand))

        progress = self._progress(hand.tile_count_without_last(), hand)
        winning_tile = hand.last_tile
        if not (progress.is_tenpai and winning_tile in progress.effective):
            logger.debug("%s does not win %r", winning_tile.name, hand)
            return WinningAnalysis(False, progress)

        decompositions = tuple(_winning_decomposition(hand, w, winning_tile)
                               for w in progress.effective.waits_for(winning_tile))
        logger.debug("%s wins %r in %d ways", winning_tile.name, hand, len(decompositions))
        return WinningAnalysis(True, progress, winning_tile, decompositions)

    def analyze_wait_types(self, hand: Hand) -> WaitTypeAnalysis:
        """Each waiting tile with its wait types and hand types (tenpai only)."""
        progress = self.analyze_progress(hand)
        if not progress.is_tenpai:
            return WaitTypeAnalysis((), False)

        effective = progress.effective
        infos = tuple(WaitingTileInfo(et.tile, effective.wait_types_for(et.tile), et.hand_types)
                      for et in effective.tiles)
        return WaitTypeAnalysis(infos, effective.has_multiple_wait_types)
