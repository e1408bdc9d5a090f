"""Tile definition with 34-kind canonical index and red five support."""

from enum import IntEnum
from typing import Iterable, List


class TileSuit(IntEnum):
    MAN = 0   # 万子
    PIN = 1   # 筒子
    SOU = 2   # 索子
    WIND = 3  # 风牌
    DRAGON = 4  # 三元牌


NUM_KINDS = 34
HONOR_START = 27

# Yaochu (terminal + honor) tile indices in 34 encoding
YAOCHU_INDICES = [0, 8, 9, 17, 18, 26, 27, 28, 29, 30, 31, 32, 33]

# Index of the 5 in each numeral suit (red five candidates)
FIVE_INDICES = (4, 13, 22)

# Tile names for 34 encoding
TILE_NAMES_34 = [
    "1m", "2m", "3m", "4m", "5m", "6m", "7m", "8m", "9m",
    "1p", "2p", "3p", "4p", "5p", "6p", "7p", "8p", "9p",
    "1s", "2s", "3s", "4s", "5s", "6s", "7s", "8s", "9s",
    "東", "南", "西", "北", "白", "發", "中",
]

_SUIT_CHARS = {TileSuit.MAN: 'm', TileSuit.PIN: 'p', TileSuit.SOU: 's'}


def suit_of_index(index34: int) -> TileSuit:
    """Suit of a 34 index."""
    if index34 < 9:
        return TileSuit.MAN
    elif index34 < 18:
        return TileSuit.PIN
    elif index34 < 27:
        return TileSuit.SOU
    elif index34 < 31:
        return TileSuit.WIND
    return TileSuit.DRAGON


def rank_of_index(index34: int) -> int:
    """Rank within the suit (1-9 for numerals, 1-4 winds, 1-3 dragons)."""
    if index34 < HONOR_START:
        return index34 % 9 + 1
    if index34 < 31:
        return index34 - 27 + 1
    return index34 - 31 + 1


def is_numeral_index(index34: int) -> bool:
    return 0 <= index34 < HONOR_START


class Tile:
    """Immutable tile: canonical 34 index plus red flag.

    ``==`` is strict (index and red flag). Use ``same_kind`` to compare by
    rank only. Red fives sort before the plain five of the same suit.
    """
    __slots__ = ('_index34', '_suit', '_number', '_is_red')

    def __init__(self, index34: int, is_red: bool = False):
        if not (0 <= index34 < NUM_KINDS):
            raise ValueError(f"index34 must be 0..33, got {index34}")
        self._index34 = index34
        self._suit = suit_of_index(index34)
        self._number = rank_of_index(index34)
        if is_red and index34 not in FIVE_INDICES:
            raise ValueError(f"Red tile must be a numeral 5, got {TILE_NAMES_34[index34]}")
        self._is_red = is_red

    @property
    def index34(self) -> int:
        return self._index34

    @property
    def suit(self) -> TileSuit:
        return self._suit

    @property
    def number(self) -> int:
        return self._number

    @property
    def is_red(self) -> bool:
        return self._is_red

    @property
    def is_honor(self) -> bool:
        return self._suit in (TileSuit.WIND, TileSuit.DRAGON)

    @property
    def is_terminal(self) -> bool:
        return not self.is_honor and self._number in (1, 9)

    @property
    def is_yaochu(self) -> bool:
        return self.is_honor or self.is_terminal

    @property
    def is_simple(self) -> bool:
        return not self.is_yaochu

    @property
    def is_number_tile(self) -> bool:
        return self._suit in (TileSuit.MAN, TileSuit.PIN, TileSuit.SOU)

    @property
    def name(self) -> str:
        if self._is_red:
            return f"0{_SUIT_CHARS[self._suit]}"
        return TILE_NAMES_34[self._index34]

    def same_kind(self, other: 'Tile') -> bool:
        """Rank-only equality (a red five is the same kind as a plain five)."""
        return self._index34 == other._index34

    def canonical(self) -> 'Tile':
        """The plain (non-red) tile of this kind."""
        return ALL_TILES_34[self._index34]

    def __repr__(self):
        return f"Tile({self.name})"

    def __eq__(self, other):
        if isinstance(other, Tile):
            return self._index34 == other._index34 and self._is_red == other._is_red
        return NotImplemented

    def __hash__(self):
        return self._index34 * 2 + (1 if self._is_red else 0)

    def __lt__(self, other):
        if isinstance(other, Tile):
            if self._index34 != other._index34:
                return self._index34 < other._index34
            return self._is_red and not other._is_red
        return NotImplemented


def tile_34_to_name(index34: int) -> str:
    """Get tile name from 34 encoding."""
    return TILE_NAMES_34[index34]


def tiles_to_34_array(tiles: Iterable[Tile]) -> List[int]:
    """Convert list of tiles to 34-length count array."""
    arr = [0] * NUM_KINDS
    for t in tiles:
        arr[t.index34] += 1
    return arr


# Pre-create the 34 canonical tiles and the three red fives
ALL_TILES_34 = tuple(Tile(i) for i in range(NUM_KINDS))
RED_FIVES = {idx: Tile(idx, is_red=True) for idx in FIVE_INDICES}
