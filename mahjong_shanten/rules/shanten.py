"""Shanten (向听数) calculation.

Shanten = minimum number of tile exchanges needed to reach tenpai.
-1 means already a complete hand (agari).
0 means tenpai (one tile away).

The standard form is found by exhaustive backtracking over the 34 kinds,
keeping every decomposition that ties for the minimum: wait shapes and
scoring depend on which decomposition produced the hand. Seven pairs and
thirteen orphans have closed forms.
"""

import logging
from dataclasses import dataclass, field
from enum import Enum
from typing import Dict, Iterable, List, Optional, Sequence, Tuple, Union

from mahjong_shanten.core.component import Component, ComponentType
from mahjong_shanten.core.errors import IllegalCount, UnsupportedForOpenHand
from mahjong_shanten.core.tile import HONOR_START, NUM_KINDS, YAOCHU_INDICES
from mahjong_shanten.core.tile_count import TileCount

logger = logging.getLogger(__name__)

MAX_MELDS = 4


class HandType(Enum):
    STANDARD = "standard"                  # 4 sets + 1 pair
    SEVEN_PAIRS = "seven_pairs"            # 七对子
    THIRTEEN_ORPHANS = "thirteen_orphans"  # 国士无双


# Display tie-break order when several hand types share the minimum
HAND_TYPE_ORDER = (HandType.STANDARD, HandType.SEVEN_PAIRS, HandType.THIRTEEN_ORPHANS)

SPECIAL_HAND_TYPES = frozenset({HandType.SEVEN_PAIRS, HandType.THIRTEEN_ORPHANS})

CountsLike = Union[TileCount, Sequence[int]]


@dataclass(frozen=True)
class Decomposition:
    """One way of cutting the concealed tiles into components.

    Attributes:
        components: Concealed components, ordered by first tile
        called_melds: Melds already committed by calls (not in components)
        hand_type: Hand construction this decomposition belongs to
    """
    components: Tuple[Component, ...]
    called_melds: int = 0
    hand_type: HandType = HandType.STANDARD

    @property
    def melds_count(self) -> int:
        """Complete sets, called melds included."""
        return self.called_melds + sum(1 for c in self.components if c.is_meld)

    @property
    def pairs_count(self) -> int:
        return self._count(ComponentType.PAIR)

    @property
    def partials_count(self) -> int:
        return self._count(ComponentType.PARTIAL)

    @property
    def floaters_count(self) -> int:
        return self._count(ComponentType.FLOATER)

    def _count(self, component_type: ComponentType) -> int:
        return sum(1 for c in self.components if c.type == component_type)

    @property
    def incomplete(self) -> Tuple[Component, ...]:
        """Pairs, partial sets and floaters."""
        return tuple(c for c in self.components if not c.is_meld)

    def key(self) -> Tuple:
        return (self.hand_type, self.called_melds,
                tuple((c.type.value, c.indices) for c in self.components))

    def __repr__(self):
        parts = " ".join(repr(c) for c in self.components)
        return f"Decomposition({self.hand_type.value}, called={self.called_melds}: {parts})"


@dataclass(frozen=True)
class StandardResult:
    shanten: int
    decompositions: Tuple[Decomposition, ...]


@dataclass(frozen=True)
class ShantenResult:
    """Shanten across the enabled hand types.

    Attributes:
        shanten: Minimum over the available hand types
        hand_type: First type (in HAND_TYPE_ORDER) reaching the minimum
        by_type: Shanten per available hand type
        decompositions: Tied-optimal decompositions per available hand type
    """
    shanten: int
    hand_type: HandType
    by_type: Dict[HandType, int]
    decompositions: Dict[HandType, Tuple[Decomposition, ...]] = field(default_factory=dict)
    called_melds: int = 0

    @property
    def tied_types(self) -> List[HandType]:
        """Every hand type reaching the minimum, in tie-break order."""
        return [ht for ht in HAND_TYPE_ORDER if self.by_type.get(ht) == self.shanten]

    def shanten_of(self, hand_type: HandType) -> int:
        if hand_type not in self.by_type:
            if hand_type in SPECIAL_HAND_TYPES and self.called_melds:
                raise UnsupportedForOpenHand(f"{hand_type.value} is not possible with calls")
            raise KeyError(hand_type)
        return self.by_type[hand_type]

    def decompositions_of(self, hand_type: HandType) -> Tuple[Decomposition, ...]:
        self.shanten_of(hand_type)
        return self.decompositions.get(hand_type, ())

    @property
    def is_complete(self) -> bool:
        return self.shanten == -1

    @property
    def is_tenpai(self) -> bool:
        return self.shanten == 0


def as_tile_count(counts: CountsLike) -> TileCount:
    """Validated private copy of a count snapshot."""
    if isinstance(counts, TileCount):
        return counts.clone()
    return TileCount(counts)


def _check_called_melds(called_melds: int):
    if not (0 <= called_melds <= MAX_MELDS):
        raise IllegalCount(f"Called meld count must be 0..{MAX_MELDS}, got {called_melds}")


# --- Standard form ---

def standard_shanten_formula(melds: int, pairs: int, partials: int) -> int:
    """Shanten of a leaf with the given numbers of sets, pairs and partials.

    Each missing set costs two steps and each block (pair or partial set)
    saves one, up to the number of sets still missing. One pair is kept
    aside as the head and saves one more step; it does not also count as a
    block.
    """
    head = 1 if pairs else 0
    blocks = min(pairs + partials - head, max(MAX_MELDS - melds, 0))
    return max(8 - 2 * melds - blocks - head, -1)


# A piece is (component type, 34 indices); components are only built for the
# leaves that survive the search.
Piece = Tuple[ComponentType, Tuple[int, ...]]


def _split_remainder(tiles: List[int]) -> List[Piece]:
    """Greedy, non-backtracking split of leftovers: pairs, adjacent partials,
    one-gap partials, then floaters."""
    rest = list(tiles)
    pieces: List[Piece] = []
    for i in range(NUM_KINDS):
        if rest[i] >= 2:
            rest[i] -= 2
            pieces.append((ComponentType.PAIR, (i, i)))
    for gap in (1, 2):
        for i in range(HONOR_START):
            if i % 9 + gap > 8:
                continue
            j = i + gap
            while rest[i] > 0 and rest[j] > 0:
                rest[i] -= 1
                rest[j] -= 1
                pieces.append((ComponentType.PARTIAL, (i, j)))
    for i in range(NUM_KINDS):
        pieces.extend((ComponentType.FLOATER, (i,)) for _ in range(rest[i]))
    return pieces


def _merge(best: int, leaves: List[Tuple[Piece, ...]],
           shanten: int, found: List[Tuple[Piece, ...]]) -> Tuple[int, List[Tuple[Piece, ...]]]:
    if shanten < best:
        return shanten, found
    if shanten == best:
        return best, leaves + found
    return best, leaves


def _search(tiles: List[int], pos: int, melds: Tuple[Piece, ...],
            called_melds: int) -> Tuple[int, List[Tuple[Piece, ...]]]:
    """Backtrack from kind ``pos``; returns (min shanten, tied leaves)."""
    while pos < NUM_KINDS and tiles[pos] == 0:
        pos += 1

    if pos >= NUM_KINDS:
        rest = _split_remainder(tiles)
        pairs = sum(1 for t, _ in rest if t == ComponentType.PAIR)
        partials = sum(1 for t, _ in rest if t == ComponentType.PARTIAL)
        s = standard_shanten_formula(called_melds + len(melds), pairs, partials)
        return s, [melds + tuple(rest)]

    best, leaves = 99, []

    # Try koutsu (triplet)
    if tiles[pos] >= 3:
        tiles[pos] -= 3
        triplet = (ComponentType.TRIPLET, (pos, pos, pos))
        s, found = _search(tiles, pos, melds + (triplet,), called_melds)
        tiles[pos] += 3
        best, leaves = _merge(best, leaves, s, found)

    # Try shuntsu (run) - number tiles only, never across a suit boundary
    if pos < HONOR_START and pos % 9 <= 6 and tiles[pos + 1] >= 1 and tiles[pos + 2] >= 1:
        tiles[pos] -= 1
        tiles[pos + 1] -= 1
        tiles[pos + 2] -= 1
        run = (ComponentType.RUN, (pos, pos + 1, pos + 2))
        s, found = _search(tiles, pos, melds + (run,), called_melds)
        tiles[pos] += 1
        tiles[pos + 1] += 1
        tiles[pos + 2] += 1
        best, leaves = _merge(best, leaves, s, found)

    # Take nothing here and move on
    s, found = _search(tiles, pos + 1, melds, called_melds)
    return _merge(best, leaves, s, found)


def search_standard(counts: CountsLike, called_melds: int = 0) -> StandardResult:
    """All tied-optimal standard decompositions of the concealed tiles."""
    _check_called_melds(called_melds)
    tiles = as_tile_count(counts).to_list()
    shanten, leaves = _search(tiles, 0, (), called_melds)

    # The same multiset of sets can be reached in different take orders
    unique: Dict[Tuple, Decomposition] = {}
    for leaf in leaves:
        key = tuple(sorted(leaf, key=lambda p: (p[1][0], len(p[1]), p[1], p[0].value)))
        if key in unique:
            continue
        components = tuple(Component.from_indices(t, idx) for t, idx in key)
        unique[key] = Decomposition(components, called_melds, HandType.STANDARD)

    logger.debug("standard search: shanten=%d, %d leaves, %d unique",
                 shanten, len(leaves), len(unique))
    return StandardResult(shanten, tuple(unique.values()))


def shanten_standard(counts: CountsLike, called_melds: int = 0) -> int:
    """Shanten for standard form (4 mentsu + 1 jantou)."""
    _check_called_melds(called_melds)
    return _search(as_tile_count(counts).to_list(), 0, (), called_melds)[0]


# --- Seven pairs ---

def _check_special(hand_type: HandType, special_hands_allowed: bool):
    if not special_hands_allowed:
        raise UnsupportedForOpenHand(f"{hand_type.value} is not possible with calls")


def shanten_seven_pairs(counts: CountsLike, special_hands_allowed: bool = True) -> int:
    """Shanten for seven pairs (七对子).

    Seven distinct kinds are required, so holding three or four of a kind
    wastes the extra copies.
    """
    _check_special(HandType.SEVEN_PAIRS, special_hands_allowed)
    tc = as_tile_count(counts)
    pairs = tc.count_kinds_with_at_least(2)
    kinds = tc.count_kinds_with_at_least(1)
    if kinds < 7:
        return (6 - pairs) + (7 - kinds)
    waste = sum(max(0, c - 2) for c in tc)
    return (6 - pairs) + waste


def seven_pairs_decomposition(counts: CountsLike) -> Decomposition:
    """Pairs for every kind held twice or more, floaters for the rest."""
    tc = as_tile_count(counts)
    components = []
    for i, c in enumerate(tc):
        rest = c
        if rest >= 2:
            components.append(Component.from_indices(ComponentType.PAIR, (i, i)))
            rest -= 2
        components.extend(
            Component.from_indices(ComponentType.FLOATER, (i,)) for _ in range(rest))
    return Decomposition(tuple(components), 0, HandType.SEVEN_PAIRS)


# --- Thirteen orphans ---

def shanten_thirteen_orphans(counts: CountsLike, special_hands_allowed: bool = True) -> int:
    """Shanten for thirteen orphans (国士无双).

    Formula: 13 - (number of yaochu kinds) - (1 if any yaochu pair).
    """
    _check_special(HandType.THIRTEEN_ORPHANS, special_hands_allowed)
    tc = as_tile_count(counts)
    kinds = sum(1 for idx in YAOCHU_INDICES if tc[idx] >= 1)
    has_pair = any(tc[idx] >= 2 for idx in YAOCHU_INDICES)
    if kinds == len(YAOCHU_INDICES):
        return -1 if has_pair else 0
    return 13 - kinds - (1 if has_pair else 0)


def thirteen_orphans_decomposition(counts: CountsLike) -> Decomposition:
    """The first yaochu pair as head; every other tile as a floater."""
    tc = as_tile_count(counts)
    components = []
    head_taken = False
    for i, c in enumerate(tc):
        rest = c
        if rest >= 2 and i in YAOCHU_INDICES and not head_taken:
            components.append(Component.from_indices(ComponentType.PAIR, (i, i)))
            head_taken = True
            rest -= 2
        components.extend(
            Component.from_indices(ComponentType.FLOATER, (i,)) for _ in range(rest))
    return Decomposition(tuple(components), 0, HandType.THIRTEEN_ORPHANS)


# --- All forms ---

def shanten_of_type(hand_type: HandType, counts: CountsLike, called_melds: int = 0,
                    special_hands_allowed: Optional[bool] = None) -> int:
    if special_hands_allowed is None:
        special_hands_allowed = called_melds == 0
    if hand_type == HandType.STANDARD:
        return shanten_standard(counts, called_melds)
    if hand_type == HandType.SEVEN_PAIRS:
        return shanten_seven_pairs(counts, special_hands_allowed)
    return shanten_thirteen_orphans(counts, special_hands_allowed)


def calculate_shanten(counts: CountsLike, called_melds: int = 0,
                      special_hands_allowed: Optional[bool] = None,
                      hand_types: Optional[Iterable[HandType]] = None) -> ShantenResult:
    """Shanten of a concealed count across the requested hand types.

    Seven pairs and thirteen orphans are left out when special hands are not
    allowed; by default they are allowed exactly when there is no call.
    """
    _check_called_melds(called_melds)
    tc = as_tile_count(counts)
    if special_hands_allowed is None:
        special_hands_allowed = called_melds == 0
    wanted = set(hand_types) if hand_types is not None else set(HAND_TYPE_ORDER)
    if not wanted:
        raise ValueError("At least one hand type must be requested")

    by_type: Dict[HandType, int] = {}
    decompositions: Dict[HandType, Tuple[Decomposition, ...]] = {}

    if HandType.STANDARD in wanted:
        standard = search_standard(tc, called_melds)
        by_type[HandType.STANDARD] = standard.shanten
        decompositions[HandType.STANDARD] = standard.decompositions
    if special_hands_allowed and HandType.SEVEN_PAIRS in wanted:
        by_type[HandType.SEVEN_PAIRS] = shanten_seven_pairs(tc)
        decompositions[HandType.SEVEN_PAIRS] = (seven_pairs_decomposition(tc),)
    if special_hands_allowed and HandType.THIRTEEN_ORPHANS in wanted:
        by_type[HandType.THIRTEEN_ORPHANS] = shanten_thirteen_orphans(tc)
        decompositions[HandType.THIRTEEN_ORPHANS] = (thirteen_orphans_decomposition(tc),)

    if not by_type:
        raise UnsupportedForOpenHand("Only special hand types requested for a hand with calls")

    best = min(by_type.values())
    hand_type = next(ht for ht in HAND_TYPE_ORDER if by_type.get(ht) == best)
    return ShantenResult(best, hand_type, by_type, decompositions, called_melds)


def shanten(tiles_34: CountsLike, called_melds: int = 0) -> int:
    """Calculate minimum shanten number across all hand forms."""
    return calculate_shanten(tiles_34, called_melds).shanten
