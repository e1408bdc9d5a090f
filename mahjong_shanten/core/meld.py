"""Call (副露) provenance for open melds."""

from dataclasses import dataclass
from enum import Enum

from .tile import Tile


class MeldFrom(Enum):
    KAMICHA = "kamicha"     # 上家 (left)
    TOIMEN = "toimen"       # 对家 (across)
    SHIMOCHA = "shimocha"   # 下家 (right)


@dataclass(frozen=True)
class CallInfo:
    """Where an open meld's called tile came from.

    Attributes:
        called_from: Seat the tile was called from
        called_tile: The tile taken from that player's discard
    """
    called_from: MeldFrom
    called_tile: Tile
