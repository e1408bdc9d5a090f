"""34-kind tile multiset used by the shanten engine."""

from typing import Iterable, Iterator, List, Optional, Union

from .errors import IllegalCount
from .tile import NUM_KINDS, Tile, TileSuit

MAX_COPIES = 4
MAX_HAND_TILES = 14

# Index ranges per suit; winds and dragons share the honor block
_SUIT_RANGES = {
    TileSuit.MAN: (0, 9),
    TileSuit.PIN: (9, 18),
    TileSuit.SOU: (18, 27),
    TileSuit.WIND: (27, 34),
    TileSuit.DRAGON: (27, 34),
}

Kind = Union[Tile, int]


def _kind_index(kind: Kind) -> int:
    if isinstance(kind, Tile):
        return kind.index34
    if not (0 <= kind < NUM_KINDS):
        raise IllegalCount(f"Invalid tile index: {kind}")
    return kind


def _check_count(index: int, count: int):
    if count < 0:
        raise IllegalCount(f"Count of kind {index} cannot be negative, got {count}")
    if count > MAX_COPIES:
        raise IllegalCount(
            f"Count of kind {index} cannot exceed {MAX_COPIES}, got {count}")


class TileCount:
    """Count of each of the 34 tile kinds (0..4 per kind).

    Red fives collapse into their kind. Every mutation is bound-checked and
    raises IllegalCount instead of clamping.
    """
    __slots__ = ('_counts',)

    def __init__(self, counts: Optional[Iterable[int]] = None):
        if counts is None:
            self._counts = [0] * NUM_KINDS
            return
        values = list(counts)
        if len(values) != NUM_KINDS:
            raise IllegalCount(f"TileCount needs exactly 34 entries, got {len(values)}")
        for i, c in enumerate(values):
            _check_count(i, c)
        self._counts = values

    @classmethod
    def from_tiles(cls, tiles: Iterable[Tile]) -> 'TileCount':
        tc = cls()
        for t in tiles:
            tc.add(t)
        return tc

    # --- Mutation ---

    def add(self, tile: Kind):
        """Add one copy of a kind."""
        idx = _kind_index(tile)
        _check_count(idx, self._counts[idx] + 1)
        self._counts[idx] += 1

    def remove(self, tile: Kind) -> bool:
        """Remove one copy. Returns False when the kind is not held."""
        idx = _kind_index(tile)
        if self._counts[idx] == 0:
            return False
        self._counts[idx] -= 1
        return True

    def take(self, kind: Kind, n: int = 1):
        """Remove n copies, failing if fewer are held."""
        idx = _kind_index(kind)
        _check_count(idx, self._counts[idx] - n)
        self._counts[idx] -= n

    def set_count(self, kind: Kind, count: int):
        idx = _kind_index(kind)
        _check_count(idx, count)
        self._counts[idx] = count

    # --- Queries ---

    def count(self, kind: Kind) -> int:
        return self._counts[_kind_index(kind)]

    def __getitem__(self, index: int) -> int:
        return self._counts[index]

    def __iter__(self) -> Iterator[int]:
        return iter(self._counts)

    def __len__(self) -> int:
        return NUM_KINDS

    @property
    def total(self) -> int:
        return sum(self._counts)

    def count_pairs(self) -> int:
        """Number of kinds held at least twice."""
        return self.count_kinds_with_at_least(2)

    def count_kinds_with_at_least(self, min_count: int) -> int:
        return sum(1 for c in self._counts if c >= min_count)

    def suit_counts(self, suit: TileSuit) -> List[int]:
        start, end = _SUIT_RANGES[suit]
        return self._counts[start:end]

    def to_list(self) -> List[int]:
        return list(self._counts)

    def clone(self) -> 'TileCount':
        tc = TileCount()
        tc._counts = list(self._counts)
        return tc

    def validate(self):
        """Check the snapshot is a legal hand (each kind 0..4, total <= 14)."""
        for i, c in enumerate(self._counts):
            _check_count(i, c)
        total = self.total
        if total > MAX_HAND_TILES:
            raise IllegalCount(f"Total tile count {total} exceeds maximum of {MAX_HAND_TILES}")

    def __eq__(self, other):
        if isinstance(other, TileCount):
            return self._counts == other._counts
        return NotImplemented

    def __repr__(self):
        parts = []
        for label, suit in (("m", TileSuit.MAN), ("p", TileSuit.PIN),
                            ("s", TileSuit.SOU), ("z", TileSuit.WIND)):
            counts = self.suit_counts(suit)
            if any(counts):
                parts.append(f"{label}: {','.join(str(c) for c in counts)}")
        return f"TileCount[{', '.join(parts)}]"
