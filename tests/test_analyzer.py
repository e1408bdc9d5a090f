"""Tests for analyzer.py and config.py"""

import sys, os
sys.path.insert(0, os.path.join(os.path.dirname(__file__), '..'))

import pytest

from mahjong_shanten.core.component import Component, ComponentType
from mahjong_shanten.core.hand import Hand
from mahjong_shanten.core.meld import CallInfo, MeldFrom
from mahjong_shanten.core.tile import ALL_TILES_34, RED_FIVES, YAOCHU_INDICES
from mahjong_shanten.rules.analyzer import HandAnalyzer, HandState
from mahjong_shanten.rules.config import AnalyzerConfig
from mahjong_shanten.rules.effective_tiles import WaitType
from mahjong_shanten.rules.shanten import HandType


def make_tiles(tiles_str):
    """Helper: tiles from shorthand like '123m0p1z' (0 = red five, z = honors)."""
    offsets = {'m': 0, 'p': 9, 's': 18, 'z': 27}
    tiles = []
    numbers = []
    for ch in tiles_str:
        if ch.isdigit():
            numbers.append(int(ch))
        else:
            for n in numbers:
                if n == 0:
                    tiles.append(RED_FIVES[offsets[ch] + 4])
                else:
                    tiles.append(ALL_TILES_34[offsets[ch] + n - 1])
            numbers = []
    return tiles


def drawn(tiles_str, tile):
    """A 13-tile hand that has just drawn ``tile``."""
    hand = Hand(make_tiles(tiles_str))
    hand.draw(tile)
    return hand


class TestAnalyzerConfig:
    def test_defaults(self):
        config = AnalyzerConfig()
        assert config.hand_types == (HandType.STANDARD, HandType.SEVEN_PAIRS,
                                     HandType.THIRTEEN_ORPHANS)
        assert config.exclude_last_tile

    def test_nothing_enabled(self):
        with pytest.raises(ValueError):
            AnalyzerConfig(enable_standard=False, enable_seven_pairs=False,
                           enable_thirteen_orphans=False)

    def test_standard_only(self):
        analyzer = HandAnalyzer(AnalyzerConfig(enable_seven_pairs=False,
                                               enable_thirteen_orphans=False))
        progress = analyzer.analyze_progress(Hand(make_tiles("1122m3344p5566s1z")))
        assert progress.shanten == 3
        assert progress.hand_type == HandType.STANDARD


class TestHandProgress:
    def test_tenpai(self):
        progress = HandAnalyzer().analyze_progress(Hand(make_tiles("12345m456p789p11s")))
        assert progress.state == HandState.TENPAI
        assert progress.is_tenpai
        assert [t.index34 for t in progress.effective_tiles] == [2, 5]
        assert len(progress.decompositions) == 2
        assert len(progress.waits) == 3

    def test_iishanten(self):
        progress = HandAnalyzer().analyze_progress(Hand(make_tiles("1239m456p11z78s46s")))
        assert progress.state == HandState.INCOMPLETE
        assert progress.is_iishanten
        assert progress.waits == ()

    def test_effective_by_hand_type(self):
        progress = HandAnalyzer().analyze_progress(Hand(make_tiles("112233m445566p7z")))
        by_type = progress.effective_tiles_by_hand_type
        assert by_type[HandType.STANDARD] == (ALL_TILES_34[33],)
        assert by_type[HandType.SEVEN_PAIRS] == (ALL_TILES_34[33],)

    def test_last_tile_excluded_by_default(self):
        hand = Hand(make_tiles("123m456p789s11122z"), last_tile=ALL_TILES_34[28])
        assert HandAnalyzer().analyze_progress(hand).shanten == 0

        analyzer = HandAnalyzer(AnalyzerConfig(exclude_last_tile=False))
        progress = analyzer.analyze_progress(hand)
        assert progress.shanten == -1
        assert progress.state == HandState.WINNING
        assert progress.is_complete

    def test_hand_not_modified(self):
        hand = drawn("12345m456p789p11s", ALL_TILES_34[2])
        before = list(hand.closed_tiles)
        HandAnalyzer().analyze_winning(hand)
        assert hand.closed_tiles == before
        assert hand.last_tile == ALL_TILES_34[2]


class TestWinning:
    def test_no_last_tile(self):
        hand = Hand(make_tiles("12345m456p789p11s"))
        assert not HandAnalyzer().is_winning(hand)
        analysis = HandAnalyzer().analyze_winning(hand)
        assert not analysis.is_winning
        assert analysis.progress.is_tenpai

    def test_not_a_wait(self):
        hand = drawn("12345m456p789p11s", ALL_TILES_34[8])
        assert not HandAnalyzer().is_winning(hand)
        analysis = HandAnalyzer().analyze_winning(hand)
        assert not analysis.is_winning
        assert analysis.decompositions == ()

    def test_not_tenpai(self):
        hand = drawn("1239m456p11z78s46s", ALL_TILES_34[23])
        assert not HandAnalyzer().is_winning(hand)

    def test_two_readings_of_one_win(self):
        """3m completes 123m+45m as two-sided and 12m+345m as edge."""
        hand = drawn("12345m456p789p11s", ALL_TILES_34[2])
        analyzer = HandAnalyzer()
        assert analyzer.is_winning(hand)

        analysis = analyzer.analyze_winning(hand)
        assert analysis.is_winning
        assert analysis.winning_tile == ALL_TILES_34[2]
        assert analysis.wait_types == (WaitType.RYANMEN, WaitType.PENCHAN)
        assert analysis.hand_types == (HandType.STANDARD,)

        positions = {d.wait_type: d.winning_position for d in analysis.decompositions}
        assert positions[WaitType.RYANMEN] == (1, 0)  # 3m in 345m
        assert positions[WaitType.PENCHAN] == (0, 2)  # 3m in 123m
        for d in analysis.decompositions:
            assert len(d.components) == 5
            assert d.winning_component.type == ComponentType.RUN
            assert d.tenpai_decomposition.hand_type == HandType.STANDARD

    def test_only_accepting_components_reported(self):
        """111222333m4455s + 4s: only the 4s pair completes."""
        hand = drawn("111222333m4455s", ALL_TILES_34[21])
        analysis = HandAnalyzer().analyze_winning(hand)
        assert analysis.is_winning
        assert len(analysis.decompositions) == 2
        for d in analysis.decompositions:
            assert d.wait_type == WaitType.SHANPON
            assert d.waiting_component.indices == (21, 21)
            assert d.winning_component.indices == (21, 21, 21)

    def test_red_five_kept_in_winning_component(self):
        hand = drawn("46m456p789p111s99s", RED_FIVES[4])
        analysis = HandAnalyzer().analyze_winning(hand)
        assert analysis.wait_types == (WaitType.KANCHAN,)
        d = analysis.decompositions[0]
        comp_index, tile_index = d.winning_position
        assert d.components[comp_index].tiles[tile_index].is_red
        assert tile_index == 1

    def test_held_red_five_in_components(self):
        """4m + red 5m completed by 6m keeps the red five in 456m."""
        hand = drawn("40m456p789p111s99s", ALL_TILES_34[5])
        analysis = HandAnalyzer().analyze_winning(hand)
        assert analysis.wait_types == (WaitType.RYANMEN,)
        d = analysis.decompositions[0]
        assert d.winning_position == (0, 2)
        assert d.winning_component.tiles == (ALL_TILES_34[3], RED_FIVES[4], ALL_TILES_34[5])
        assert sum(t.is_red for c in d.components for t in c.tiles) == 1
        assert not d.waiting_component.tiles[1].is_red

    def test_open_hand(self):
        chi = Component.run(make_tiles("123m"), CallInfo(MeldFrom.KAMICHA, ALL_TILES_34[0]))
        hand = Hand(make_tiles("456p789s111z2z"), melds=[chi])
        hand.draw(ALL_TILES_34[28])
        analysis = HandAnalyzer().analyze_winning(hand)
        assert analysis.is_winning
        assert analysis.wait_types == (WaitType.TANKI,)
        d = analysis.decompositions[0]
        assert d.components[0] is chi
        assert d.winning_position == (4, 0)
        assert d.winning_component.type == ComponentType.PAIR

    def test_seven_pairs_win(self):
        hand = drawn("1122m3344p5566s1z", ALL_TILES_34[27])
        analysis = HandAnalyzer().analyze_winning(hand)
        assert analysis.hand_types == (HandType.SEVEN_PAIRS,)
        d = analysis.decompositions[0]
        assert len(d.components) == 7
        assert all(c.type == ComponentType.PAIR for c in d.components)

    def test_thirteen_orphans_missing_kind(self):
        tiles = [ALL_TILES_34[i] for i in YAOCHU_INDICES if i != 33] + [ALL_TILES_34[0]]
        hand = Hand(tiles)
        hand.draw(ALL_TILES_34[33])
        analysis = HandAnalyzer().analyze_winning(hand)
        assert analysis.is_winning
        d = analysis.decompositions[0]
        assert d.hand_type == HandType.THIRTEEN_ORPHANS
        assert d.waiting_component is None
        assert len(d.components) == 13
        assert d.winning_position == (12, 0)


class TestWaitTypes:
    def test_tenpai(self):
        analysis = HandAnalyzer().analyze_wait_types(Hand(make_tiles("12345m456p789p11s")))
        assert analysis.has_multiple_wait_types
        info = {w.tile.index34: w for w in analysis.waiting_tiles}
        assert info[2].wait_types == (WaitType.RYANMEN, WaitType.PENCHAN)
        assert info[5].wait_types == (WaitType.RYANMEN,)
        assert info[2].hand_types == (HandType.STANDARD,)

    def test_single_wait_type(self):
        analysis = HandAnalyzer().analyze_wait_types(Hand(make_tiles("111222333m4455s")))
        assert not analysis.has_multiple_wait_types
        assert len(analysis.waiting_tiles) == 2

    def test_not_tenpai(self):
        analysis = HandAnalyzer().analyze_wait_types(Hand(make_tiles("1239m456p11z78s46s")))
        assert analysis.waiting_tiles == ()
        assert not analysis.has_multiple_wait_types
