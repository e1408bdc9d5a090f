"""Tests for component.py"""

import sys
import os
sys.path.insert(0, os.path.join(os.path.dirname(__file__), '..'))

import pytest

from mahjong_shanten.core.component import Component, ComponentType
from mahjong_shanten.core.errors import IllegalComponent
from mahjong_shanten.core.meld import CallInfo, MeldFrom
from mahjong_shanten.core.tile import ALL_TILES_34, RED_FIVES


def t(*indices):
    return [ALL_TILES_34[i] for i in indices]


class TestComponentShapes:
    def test_run(self):
        run = Component.run(t(2, 0, 1))
        assert run.type == ComponentType.RUN
        assert run.indices == (0, 1, 2)
        assert run.is_meld

    def test_run_rejects_pair_plus_one(self):
        """1m 1m 2m is not a run."""
        with pytest.raises(IllegalComponent):
            Component.run(t(0, 0, 1))

    def test_run_rejects_suit_boundary(self):
        with pytest.raises(IllegalComponent):
            Component.run(t(7, 8, 9))  # 8m 9m 1p

    def test_run_rejects_honors(self):
        with pytest.raises(IllegalComponent):
            Component.run(t(27, 28, 29))

    def test_triplet_and_quad(self):
        assert Component.triplet(t(31, 31, 31)).type == ComponentType.TRIPLET
        assert Component.quad(t(4, 4, 4, 4)).type == ComponentType.QUAD
        with pytest.raises(IllegalComponent):
            Component.triplet(t(31, 31, 32))
        with pytest.raises(IllegalComponent):
            Component.quad(t(4, 4, 4))

    def test_red_five_in_triplet(self):
        triplet = Component.triplet([RED_FIVES[4], ALL_TILES_34[4], ALL_TILES_34[4]])
        assert triplet.tiles[0].is_red

    def test_partial(self):
        assert Component.partial(t(3, 4)).type == ComponentType.PARTIAL
        assert Component.partial(t(3, 5)).type == ComponentType.PARTIAL
        with pytest.raises(IllegalComponent):
            Component.partial(t(3, 6))
        with pytest.raises(IllegalComponent):
            Component.partial(t(27, 28))
        with pytest.raises(IllegalComponent):
            Component.partial(t(8, 9))  # 9m 1p

    def test_wrong_size(self):
        with pytest.raises(IllegalComponent):
            Component.pair(t(0))
        with pytest.raises(IllegalComponent):
            Component.from_tiles(t(0, 0, 0, 0, 0))


class TestFromTiles:
    def test_classification(self):
        assert Component.from_tiles(t(5)).type == ComponentType.FLOATER
        assert Component.from_tiles(t(5, 5)).type == ComponentType.PAIR
        assert Component.from_tiles(t(5, 6)).type == ComponentType.PARTIAL
        assert Component.from_tiles(t(5, 5, 5)).type == ComponentType.TRIPLET
        assert Component.from_tiles(t(5, 6, 7)).type == ComponentType.RUN
        assert Component.from_tiles(t(5, 5, 5, 5)).type == ComponentType.QUAD

    def test_impossible_shapes(self):
        with pytest.raises(IllegalComponent):
            Component.from_tiles(t(0, 8))
        with pytest.raises(IllegalComponent):
            Component.from_tiles(t(0, 0, 1))

    def test_reproduces_melds(self):
        for original in (Component.run(t(12, 13, 14)), Component.triplet(t(27, 27, 27))):
            again = Component.from_tiles(original.tiles)
            assert again.type == original.type
            assert again.tiles == original.tiles


class TestCalls:
    def test_open_meld(self):
        call = CallInfo(MeldFrom.KAMICHA, ALL_TILES_34[1])
        chi = Component.run(t(0, 1, 2), call)
        assert chi.is_open
        assert not chi.is_concealed
        assert chi != Component.run(t(0, 1, 2))

    def test_called_tile_must_be_in_meld(self):
        call = CallInfo(MeldFrom.TOIMEN, ALL_TILES_34[5])
        with pytest.raises(IllegalComponent):
            Component.triplet(t(0, 0, 0), call)

    def test_only_melds_can_be_called(self):
        call = CallInfo(MeldFrom.SHIMOCHA, ALL_TILES_34[0])
        with pytest.raises(IllegalComponent):
            Component(t(0, 0), ComponentType.PAIR, call)


class TestCompletion:
    def test_open_two_sided(self):
        assert Component.partial(t(3, 4)).completion_indices() == [2, 5]

    def test_edge(self):
        assert Component.partial(t(0, 1)).completion_indices() == [2]
        assert Component.partial(t(7, 8)).completion_indices() == [6]

    def test_closed(self):
        assert Component.partial(t(3, 5)).completion_indices() == [4]

    def test_pair_and_floater(self):
        assert Component.pair(t(27, 27)).completion_indices() == [27]
        assert Component.floater(ALL_TILES_34[33]).completion_indices() == [33]
        assert Component.run(t(0, 1, 2)).completion_indices() == []

    def test_complete_with(self):
        run = Component.partial(t(3, 4)).complete_with(ALL_TILES_34[5])
        assert run == Component.run(t(3, 4, 5))
        triplet = Component.pair(t(4, 4)).complete_with(RED_FIVES[4])
        assert triplet.type == ComponentType.TRIPLET
        with pytest.raises(IllegalComponent):
            Component.partial(t(3, 4)).complete_with(ALL_TILES_34[6])
