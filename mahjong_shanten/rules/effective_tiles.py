"""Effective tiles (有效牌) and tenpai wait shapes (听牌形).

An effective tile is a kind whose acquisition strictly lowers the minimum
shanten. Every available hand type is recomputed for each candidate: the
standard leaf split can under-read a hand by one, so a type above the
minimum may still drop below it with a single tile.

For a tenpai hand every accepted tile is traced back to the component that
consumes it, once per tied decomposition, since the same tile can be a
two-sided wait in one reading and an edge wait in another.
"""

import logging
from dataclasses import dataclass
from enum import Enum
from typing import Dict, FrozenSet, Iterable, List, Optional, Tuple

from mahjong_shanten.core.component import Component, ComponentType
from mahjong_shanten.core.tile import ALL_TILES_34, NUM_KINDS, YAOCHU_INDICES, Tile
from mahjong_shanten.core.tile_count import MAX_COPIES
from mahjong_shanten.rules.shanten import (
    HAND_TYPE_ORDER, MAX_MELDS, CountsLike, Decomposition, HandType, ShantenResult,
    as_tile_count, calculate_shanten, shanten_of_type,
)

logger = logging.getLogger(__name__)


class WaitType(Enum):
    RYANMEN = "ryanmen"   # 两面 (23 waiting 1/4)
    PENCHAN = "penchan"   # 边张 (12 waiting 3)
    KANCHAN = "kanchan"   # 嵌张 (13 waiting 2)
    SHANPON = "shanpon"   # 双碰 (two pairs, either becomes a triplet)
    TANKI = "tanki"       # 单骑 (single tile waiting for its pair)


@dataclass(frozen=True)
class EffectiveTile:
    """A kind that lowers shanten.

    Attributes:
        tile: Canonical (non-red) tile of the kind
        hand_types: Hand types whose shanten drops with this tile
        remaining: Copies not in the hand (4 - held)
    """
    tile: Tile
    hand_types: Tuple[HandType, ...]
    remaining: int

    @property
    def index34(self) -> int:
        return self.tile.index34


@dataclass(frozen=True)
class WaitDetail:
    """How one decomposition accepts one tile at tenpai.

    ``component`` is the incomplete component completed by the tile; it is
    None only for the thirteen orphans wait on the missing kind.
    """
    tile: Tile
    wait_type: WaitType
    component: Optional[Component]
    decomposition: Decomposition

    @property
    def hand_type(self) -> HandType:
        return self.decomposition.hand_type


@dataclass(frozen=True)
class EffectiveTilesResult:
    """Effective tiles of a hand plus, at tenpai, the wait of each tile."""
    shanten: int
    hand_types: Tuple[HandType, ...]
    tiles: Tuple[EffectiveTile, ...]
    waits: Tuple[WaitDetail, ...] = ()

    @property
    def kinds(self) -> FrozenSet[int]:
        return frozenset(t.index34 for t in self.tiles)

    @property
    def total_remaining(self) -> int:
        """Ukeire: unseen copies of all effective tiles."""
        return sum(t.remaining for t in self.tiles)

    @property
    def is_tenpai(self) -> bool:
        return self.shanten == 0

    def __contains__(self, tile: Tile) -> bool:
        return tile.index34 in self.kinds

    def by_hand_type(self) -> Dict[HandType, Tuple[Tile, ...]]:
        grouped: Dict[HandType, List[Tile]] = {}
        for et in self.tiles:
            for ht in et.hand_types:
                grouped.setdefault(ht, []).append(et.tile)
        return {ht: tuple(tiles) for ht, tiles in grouped.items()}

    def waits_for(self, tile: Tile) -> Tuple[WaitDetail, ...]:
        return tuple(w for w in self.waits if w.tile.same_kind(tile))

    def wait_types_for(self, tile: Tile) -> Tuple[WaitType, ...]:
        """Distinct wait types accepting the tile, in WaitType order."""
        found = {w.wait_type for w in self.waits_for(tile)}
        return tuple(wt for wt in WaitType if wt in found)

    @property
    def has_multiple_wait_types(self) -> bool:
        return len({w.wait_type for w in self.waits}) > 1


# --- Wait classification ---

def classify_partial(component: Component) -> WaitType:
    """Wait type of a partial set: closed, edge or open two-sided."""
    if component.type != ComponentType.PARTIAL:
        raise ValueError(f"Not a partial set: {component!r}")
    low, high = component.tiles
    if high.number - low.number == 2:
        return WaitType.KANCHAN
    if low.number == 1 or high.number == 9:
        return WaitType.PENCHAN
    return WaitType.RYANMEN


def _wait_type_of(component: Component) -> WaitType:
    if component.type == ComponentType.PAIR:
        return WaitType.SHANPON
    if component.type == ComponentType.FLOATER:
        return WaitType.TANKI
    return classify_partial(component)


def _completes_standard(decomposition: Decomposition, component: Component) -> bool:
    """Whether completing the component leaves exactly four sets and a pair."""
    others = list(decomposition.incomplete)
    others.remove(component)
    if any(c.type != ComponentType.PAIR for c in others):
        return False
    pairs = len(others)
    melds = decomposition.melds_count
    if component.type == ComponentType.FLOATER:
        pairs += 1
    else:
        melds += 1
    return melds == MAX_MELDS and pairs == 1


def _standard_waits(decomposition: Decomposition, accepted: FrozenSet[int]) -> List[WaitDetail]:
    waits = []
    seen = set()
    for component in decomposition.incomplete:
        if not _completes_standard(decomposition, component):
            continue
        for idx in component.completion_indices():
            # Identical components (e.g. two equal floaters) report once
            if idx not in accepted or (component, idx) in seen:
                continue
            seen.add((component, idx))
            waits.append(WaitDetail(ALL_TILES_34[idx], _wait_type_of(component),
                                    component, decomposition))
    return waits


def _seven_pairs_waits(decomposition: Decomposition, accepted: FrozenSet[int]) -> List[WaitDetail]:
    return [WaitDetail(ALL_TILES_34[c.first_index], WaitType.TANKI, c, decomposition)
            for c in decomposition.components
            if c.type == ComponentType.FLOATER and c.first_index in accepted]


def _thirteen_orphans_waits(decomposition: Decomposition,
                            accepted: FrozenSet[int]) -> List[WaitDetail]:
    held = {c.first_index for c in decomposition.components}
    if decomposition.pairs_count:
        # Twelve kinds and a pair: only the missing kind completes the hand
        return [WaitDetail(ALL_TILES_34[idx], WaitType.TANKI, None, decomposition)
                for idx in YAOCHU_INDICES if idx not in held and idx in accepted]
    # All thirteen kinds: any of them pairs up
    return [WaitDetail(ALL_TILES_34[c.first_index], WaitType.TANKI, c, decomposition)
            for c in decomposition.components
            if c.type == ComponentType.FLOATER and c.first_index in accepted]


_WAIT_FINDERS = {
    HandType.STANDARD: _standard_waits,
    HandType.SEVEN_PAIRS: _seven_pairs_waits,
    HandType.THIRTEEN_ORPHANS: _thirteen_orphans_waits,
}


def tenpai_waits(decompositions: Iterable[Decomposition],
                 accepted: Iterable[int]) -> List[WaitDetail]:
    """Wait detail per (decomposition, accepted tile) of a tenpai hand.

    Only tiles in ``accepted`` (the effective kinds) are reported; a kind
    already held four times cannot be waited on.
    """
    accepted = frozenset(accepted)
    waits: List[WaitDetail] = []
    for decomposition in decompositions:
        waits.extend(_WAIT_FINDERS[decomposition.hand_type](decomposition, accepted))
    return waits


# --- Effective tiles ---

def calculate_effective_tiles(counts: CountsLike, called_melds: int = 0,
                              special_hands_allowed: Optional[bool] = None,
                              shanten_result: Optional[ShantenResult] = None,
                              hand_types: Optional[Iterable[HandType]] = None) -> EffectiveTilesResult:
    """Effective tiles of a concealed count, with waits when tenpai.

    Args:
        counts: Concealed tiles as a TileCount or 34-int list
        called_melds: Number of melds already committed by calls
        special_hands_allowed: Defaults to "no calls"
        shanten_result: Reuse an already computed shanten for these counts
        hand_types: Restrict the hand types considered
    """
    tc = as_tile_count(counts)
    if shanten_result is None:
        shanten_result = calculate_shanten(tc, called_melds, special_hands_allowed, hand_types)

    current = shanten_result.shanten
    tied = shanten_result.tied_types
    available = [ht for ht in HAND_TYPE_ORDER if ht in shanten_result.by_type]
    effective: List[EffectiveTile] = []

    # Nothing beats a complete hand
    if current > -1:
        for idx in range(NUM_KINDS):
            held = tc[idx]
            if held >= MAX_COPIES:
                continue
            tc.add(idx)
            improved = tuple(ht for ht in available
                             if shanten_of_type(ht, tc, called_melds, True) < current)
            tc.take(idx)
            if improved:
                effective.append(EffectiveTile(ALL_TILES_34[idx], improved, MAX_COPIES - held))

    waits: List[WaitDetail] = []
    if current == 0:
        accepted = frozenset(et.index34 for et in effective)
        for ht in tied:
            waits.extend(tenpai_waits(shanten_result.decompositions_of(ht), accepted))

    logger.debug("effective tiles at shanten %d: %s (%d waits)", current,
                 [et.tile.name for et in effective], len(waits))
    return EffectiveTilesResult(current, tuple(tied), tuple(effective), tuple(waits))
