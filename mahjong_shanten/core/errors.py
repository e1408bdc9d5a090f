"""Errors raised by the shanten core.

All of them are raised eagerly at construction or mutation time; nothing is
clamped.
"""


class MahjongError(Exception):
    """Base class for every error raised by this package."""


class IllegalComponent(MahjongError):
    """Tiles do not form the requested component shape."""


class IllegalCount(MahjongError):
    """A tile count left the 0..4 range, or a meld count left 0..4."""


class ConsistencyError(MahjongError):
    """Hand state contradicts itself (e.g. last tile not in the hand)."""


class UnsupportedForOpenHand(MahjongError):
    """Seven pairs or thirteen orphans asked for while calls are present."""
