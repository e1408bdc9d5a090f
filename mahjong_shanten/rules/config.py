"""Analyzer configuration."""

from typing import Tuple

from mahjong_shanten.rules.shanten import HAND_TYPE_ORDER, HandType


class AnalyzerConfig:
    """Which hand types the analyzer considers, and how it treats the last tile."""

    def __init__(
        self,
        enable_standard: bool = True,
        enable_seven_pairs: bool = True,       # 七对子
        enable_thirteen_orphans: bool = True,  # 国士无双
        exclude_last_tile: bool = True,  # Analyze progress on the hand before its last draw
    ):
        self.enable_standard = enable_standard
        self.enable_seven_pairs = enable_seven_pairs
        self.enable_thirteen_orphans = enable_thirteen_orphans
        self.exclude_last_tile = exclude_last_tile

        if not (enable_standard or enable_seven_pairs or enable_thirteen_orphans):
            raise ValueError("At least one hand type must be enabled")

    @property
    def hand_types(self) -> Tuple[HandType, ...]:
        enabled = {
            HandType.STANDARD: self.enable_standard,
            HandType.SEVEN_PAIRS: self.enable_seven_pairs,
            HandType.THIRTEEN_ORPHANS: self.enable_thirteen_orphans,
        }
        return tuple(ht for ht in HAND_TYPE_ORDER if enabled[ht])

    def __repr__(self):
        types = ", ".join(ht.value for ht in self.hand_types)
        return f"AnalyzerConfig({types}, exclude_last_tile={self.exclude_last_tile})"
