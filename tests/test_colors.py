"""Tests for wormtype.ui.colors – palette conversion and pair lookup."""

from __future__ import annotations

import pytest

from wormtype.ui.colors import Pair, WormColors, hex_to_curses, worm_pair


# ===========================================================================
# WormColors – constants exist
# ===========================================================================

class TestWormColors:
    @pytest.mark.parametrize("color", [WormColors.CORRECT, WormColors.PINK_WORM, WormColors.DEFAULT_WORM])
    def test_is_hex(self, color: str):
        assert color.startswith("#")
        assert len(color) == 7

    def test_pairs_are_distinct(self):
        pairs = [Pair.CORRECT, Pair.INCORRECT, Pair.PENDING, Pair.PINK_WORM, Pair.DEFAULT_WORM]
        assert len(set(pairs)) == len(pairs)
        assert 0 not in pairs


# ===========================================================================
# hex_to_curses
# ===========================================================================

class TestHexToCurses:
    def test_black(self):
        assert hex_to_curses("#000000") == (0, 0, 0)

    def test_white(self):
        assert hex_to_curses("#FFFFFF") == (1000, 1000, 1000)

    def test_lowercase(self):
        assert hex_to_curses("#ff0000") == (1000, 0, 0)

    def test_midpoint(self):
        # 128 * 1000 // 255 = 501
        assert hex_to_curses("#808080") == (501, 501, 501)

    def test_pink(self):
        assert hex_to_curses(WormColors.PINK_WORM) == (1000, 78, 576)

    @pytest.mark.parametrize("bad", ["FF0000", "#FFF", "#GG0000", "", "#FF00001"])
    def test_bad_format(self, bad: str):
        with pytest.raises(ValueError):
            hex_to_curses(bad)


# ===========================================================================
# worm_pair
# ===========================================================================

class TestWormPair:
    def test_pink(self):
        assert worm_pair("pink") == Pair.PINK_WORM

    def test_default(self):
        assert worm_pair("default") == Pair.DEFAULT_WORM

    def test_unknown_falls_back(self):
        assert worm_pair("golden") == Pair.DEFAULT_WORM
