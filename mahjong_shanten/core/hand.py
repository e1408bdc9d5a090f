"""Hand management - concealed tiles, called melds, last acquired tile."""

from typing import Iterable, List, Optional

from .component import Component
from .errors import ConsistencyError, IllegalComponent
from .tile import Tile
from .tile_count import MAX_HAND_TILES, TileCount


class Hand:
    """A player's hand as seen by the shanten core.

    Attributes:
        closed_tiles: Concealed tiles, kept sorted
        melds: Called melds (open runs/triplets/quads, or concealed quads)
        last_tile: The most recently acquired tile, if any (win candidate)

    Draw and discard mutate in place; not safe for concurrent mutation.
    Copy with ``clone`` before handing the hand to another thread.
    """

    def __init__(self, tiles: Iterable[Tile], melds: Optional[Iterable[Component]] = None,
                 last_tile: Optional[Tile] = None):
        self.closed_tiles: List[Tile] = sorted(tiles)
        self.melds: List[Component] = list(melds or [])
        self.last_tile: Optional[Tile] = last_tile

        for meld in self.melds:
            if not meld.is_meld:
                raise IllegalComponent(f"Only runs, triplets and quads can be melds, got {meld!r}")

        # Each meld stands in for three of the fourteen tiles, quads included
        size = len(self.closed_tiles) + 3 * len(self.melds)
        if size > MAX_HAND_TILES:
            raise ConsistencyError(
                f"Hand holds {len(self.closed_tiles)} tiles and {len(self.melds)} melds, "
                f"more than {MAX_HAND_TILES} tiles")

        if last_tile is not None and self._find(last_tile) is None:
            raise ConsistencyError(f"Last tile {last_tile.name} not found in hand")

        self._tile_count = TileCount.from_tiles(self.closed_tiles)

    def _find(self, tile: Tile) -> Optional[int]:
        """Position of a strictly equal tile, else of one of the same kind."""
        for i, t in enumerate(self.closed_tiles):
            if t == tile:
                return i
        for i, t in enumerate(self.closed_tiles):
            if t.same_kind(tile):
                return i
        return None

    def draw(self, tile: Tile):
        """Acquire a tile (from the wall or a winning discard)."""
        if len(self.closed_tiles) + 1 + 3 * len(self.melds) > MAX_HAND_TILES:
            raise ConsistencyError(
                f"Cannot draw {tile.name}: hand already holds {MAX_HAND_TILES} tiles")
        count = self._tile_count.clone()
        count.add(tile)
        self.closed_tiles.append(tile)
        self.closed_tiles.sort()
        self._tile_count = count
        self.last_tile = tile

    def discard(self, tile: Tile):
        """Remove one matching tile from the concealed tiles."""
        pos = self._find(tile)
        if pos is None:
            raise ConsistencyError(f"Cannot discard {tile.name}: not in hand")
        removed = self.closed_tiles.pop(pos)
        if self.last_tile is not None and self.last_tile == removed:
            self.last_tile = None
        self._tile_count = TileCount.from_tiles(self.closed_tiles)

    def add_meld(self, meld: Component):
        """Add a called meld. The caller removes its tiles from the hand."""
        if not meld.is_meld:
            raise IllegalComponent(f"Only runs, triplets and quads can be melds, got {meld!r}")
        if len(self.closed_tiles) + 3 * (len(self.melds) + 1) > MAX_HAND_TILES:
            raise ConsistencyError("Too many melds for the tiles in hand")
        self.melds.append(meld)

    @property
    def tile_count(self) -> TileCount:
        """Count of the concealed tiles (a copy; safe to mutate)."""
        return self._tile_count.clone()

    def tile_count_without_last(self) -> TileCount:
        """Concealed count with one copy of the last tile removed."""
        count = self._tile_count.clone()
        if self.last_tile is not None:
            count.remove(self.last_tile)
        return count

    def to_34_array(self) -> List[int]:
        return self._tile_count.to_list()

    @property
    def is_concealed(self) -> bool:
        """Whether hand is fully closed (门前); a concealed quad keeps it closed."""
        return all(m.is_concealed for m in self.melds)

    @property
    def num_melds(self) -> int:
        return len(self.melds)

    @property
    def special_hands_allowed(self) -> bool:
        """Seven pairs and thirteen orphans need a hand without any call."""
        return not self.melds

    @property
    def total_tiles(self) -> int:
        """Total tiles (closed + melded)."""
        return len(self.closed_tiles) + sum(len(m) for m in self.melds)

    def clone(self) -> 'Hand':
        """Create an independent copy."""
        return Hand(list(self.closed_tiles), list(self.melds), self.last_tile)

    def __repr__(self):
        tiles = "".join(t.name for t in self.closed_tiles)
        return f"Hand({tiles}, melds={self.melds!r}, last={self.last_tile!r})"
