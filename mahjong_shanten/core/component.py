"""Components: the typed tile groups a hand is decomposed into.

A component is one of six shapes. Runs, triplets and quads are complete
melds; pairs, partial sets (two numerals one tile short of a run) and
floaters (single tiles) are the incomplete pieces that effective tiles and
waits attach to. Each shape is checked when the component is built.
"""

from enum import Enum
from typing import Callable, Dict, Iterable, Iterator, List, Optional, Sequence, Tuple

from .errors import IllegalComponent
from .meld import CallInfo
from .tile import ALL_TILES_34, Tile


class ComponentType(Enum):
    RUN = "run"           # 顺子 (123)
    TRIPLET = "triplet"   # 刻子 (111)
    QUAD = "quad"         # 杠子 (1111)
    PAIR = "pair"         # 对子 (11)
    PARTIAL = "partial"   # 搭子 (12, 13)
    FLOATER = "floater"   # 孤张 (1)


MELD_TYPES = frozenset({ComponentType.RUN, ComponentType.TRIPLET, ComponentType.QUAD})

_SIZES = {
    ComponentType.RUN: 3,
    ComponentType.TRIPLET: 3,
    ComponentType.QUAD: 4,
    ComponentType.PAIR: 2,
    ComponentType.PARTIAL: 2,
    ComponentType.FLOATER: 1,
}


def _all_same_kind(tiles: Sequence[Tile]) -> bool:
    return all(t.same_kind(tiles[0]) for t in tiles)


def _check_run(tiles: Sequence[Tile]):
    if not all(t.is_number_tile for t in tiles):
        raise IllegalComponent("Honor tiles cannot form a run")
    if len({t.suit for t in tiles}) != 1:
        raise IllegalComponent("Run tiles must be of the same suit")
    numbers = [t.number for t in tiles]
    if numbers != list(range(numbers[0], numbers[0] + 3)):
        raise IllegalComponent(f"Run tiles must be consecutive, got {numbers}")


def _check_identical(tiles: Sequence[Tile]):
    if not _all_same_kind(tiles):
        raise IllegalComponent(f"Tiles must be identical, got {[t.name for t in tiles]}")


def _check_partial(tiles: Sequence[Tile]):
    low, high = tiles
    if not (low.is_number_tile and high.is_number_tile):
        raise IllegalComponent("Honor tiles cannot form a partial set")
    if low.suit != high.suit:
        raise IllegalComponent("Partial set tiles must be of the same suit")
    if high.number - low.number not in (1, 2):
        raise IllegalComponent(
            f"Partial set must be adjacent or one apart, got {low.name}{high.name}")


_VALIDATORS: Dict[ComponentType, Callable[[Sequence[Tile]], None]] = {
    ComponentType.RUN: _check_run,
    ComponentType.TRIPLET: _check_identical,
    ComponentType.QUAD: _check_identical,
    ComponentType.PAIR: _check_identical,
    ComponentType.PARTIAL: _check_partial,
    ComponentType.FLOATER: lambda tiles: None,
}


class Component:
    """An immutable, shape-checked group of tiles.

    Open components (called from another player) carry a CallInfo; only
    runs, triplets and quads can be called.
    """
    __slots__ = ('_tiles', '_type', '_call')

    def __init__(self, tiles: Iterable[Tile], component_type: ComponentType,
                 call: Optional[CallInfo] = None):
        self._tiles = tuple(sorted(tiles))
        self._type = component_type
        self._call = call

        size = _SIZES[component_type]
        if len(self._tiles) != size:
            raise IllegalComponent(
                f"{component_type.value} must have exactly {size} tiles, got {len(self._tiles)}")
        _VALIDATORS[component_type](self._tiles)

        if call is not None:
            if component_type not in MELD_TYPES:
                raise IllegalComponent(f"A {component_type.value} cannot be called")
            if not any(t.same_kind(call.called_tile) for t in self._tiles):
                raise IllegalComponent(
                    f"Called tile {call.called_tile.name} is not part of the meld")

    # --- Constructors ---

    @classmethod
    def run(cls, tiles: Iterable[Tile], call: Optional[CallInfo] = None) -> 'Component':
        return cls(tiles, ComponentType.RUN, call)

    @classmethod
    def triplet(cls, tiles: Iterable[Tile], call: Optional[CallInfo] = None) -> 'Component':
        return cls(tiles, ComponentType.TRIPLET, call)

    @classmethod
    def quad(cls, tiles: Iterable[Tile], call: Optional[CallInfo] = None) -> 'Component':
        return cls(tiles, ComponentType.QUAD, call)

    @classmethod
    def pair(cls, tiles: Iterable[Tile]) -> 'Component':
        return cls(tiles, ComponentType.PAIR)

    @classmethod
    def partial(cls, tiles: Iterable[Tile]) -> 'Component':
        return cls(tiles, ComponentType.PARTIAL)

    @classmethod
    def floater(cls, tile: Tile) -> 'Component':
        return cls((tile,), ComponentType.FLOATER)

    @classmethod
    def from_indices(cls, component_type: ComponentType, indices: Iterable[int],
                     call: Optional[CallInfo] = None) -> 'Component':
        """Build a component of canonical (non-red) tiles from 34 indices."""
        return cls([ALL_TILES_34[i] for i in indices], component_type, call)

    @classmethod
    def from_tiles(cls, tiles: Iterable[Tile], call: Optional[CallInfo] = None) -> 'Component':
        """Classify 1-4 tiles into the matching component type."""
        ordered = sorted(tiles)
        n = len(ordered)
        if n == 1:
            return cls.floater(ordered[0])
        if n == 2:
            if ordered[0].same_kind(ordered[1]):
                return cls.pair(ordered)
            return cls.partial(ordered)
        if n == 3:
            if _all_same_kind(ordered):
                return cls.triplet(ordered, call)
            return cls.run(ordered, call)
        if n == 4:
            return cls.quad(ordered, call)
        raise IllegalComponent(f"Invalid number of tiles for a component: {n}")

    # --- Properties ---

    @property
    def tiles(self) -> Tuple[Tile, ...]:
        return self._tiles

    @property
    def type(self) -> ComponentType:
        return self._type

    @property
    def call(self) -> Optional[CallInfo]:
        return self._call

    @property
    def is_concealed(self) -> bool:
        return self._call is None

    @property
    def is_open(self) -> bool:
        return self._call is not None

    @property
    def is_meld(self) -> bool:
        """Complete set: run, triplet or quad."""
        return self._type in MELD_TYPES

    @property
    def indices(self) -> Tuple[int, ...]:
        return tuple(t.index34 for t in self._tiles)

    @property
    def first_index(self) -> int:
        return self._tiles[0].index34

    @property
    def is_terminal_or_honor(self) -> bool:
        return any(t.is_yaochu for t in self._tiles)

    def contains(self, tile: Tile) -> bool:
        return any(t.same_kind(tile) for t in self._tiles)

    def completion_indices(self) -> List[int]:
        """Kinds that turn this component into the next larger shape.

        Partial sets complete into runs, pairs into triplets and floaters
        into pairs. Complete melds return an empty list.
        """
        if self._type == ComponentType.PARTIAL:
            low, high = self._tiles
            if high.number - low.number == 2:
                return [low.index34 + 1]
            result = []
            if low.number > 1:
                result.append(low.index34 - 1)
            if high.number < 9:
                result.append(high.index34 + 1)
            return result
        if self._type in (ComponentType.PAIR, ComponentType.FLOATER):
            return [self.first_index]
        return []

    def complete_with(self, tile: Tile) -> 'Component':
        """The component formed by adding one accepted tile."""
        if tile.index34 not in self.completion_indices():
            raise IllegalComponent(f"{tile.name} does not complete {self!r}")
        return Component.from_tiles(self._tiles + (tile,))

    def sort_key(self) -> Tuple[int, int, Tuple[int, ...]]:
        return (self.first_index, _SIZES[self._type], self.indices)

    def __len__(self):
        return len(self._tiles)

    def __iter__(self) -> Iterator[Tile]:
        return iter(self._tiles)

    def __eq__(self, other):
        if isinstance(other, Component):
            return (self._type == other._type and self._tiles == other._tiles
                    and self._call == other._call)
        return NotImplemented

    def __hash__(self):
        return hash((self._type, self._tiles, self._call))

    def __repr__(self):
        names = "".join(t.name for t in self._tiles)
        if self.is_meld:
            prefix = "open " if self.is_open else ""
            return f"Component({prefix}{self._type.value} {names})"
        return f"Component({self._type.value} {names})"
