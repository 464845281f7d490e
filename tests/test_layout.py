"""Tests for wormtype.ui.layout – text wrapping and row formatting."""

from __future__ import annotations

import pytest

from wormtype.core.leaderboard import ScoreRecord
from wormtype.core.scoring import Stats
from wormtype.core.session import TypingSession
from wormtype.ui.layout import (
    WORM_BODY,
    centered_x,
    clip_name,
    find_position,
    format_progress,
    format_stats,
    leaderboard_header,
    leaderboard_row,
    worm_track,
    wrap_target,
)


# ---------------------------------------------------------------------------
# wrap_target
# ---------------------------------------------------------------------------

class TestWrapTarget:
    def test_single_line(self):
        assert wrap_target("ab cd", 20) == [(0, 0), (0, 1), (0, 2), (0, 3), (0, 4)]

    def test_word_moves_to_next_row(self):
        positions = wrap_target("abc def", 5)
        # "abc " fills the first row, "def" would cross the edge.
        assert positions[:4] == [(0, 0), (0, 1), (0, 2), (0, 3)]
        assert positions[4:] == [(1, 0), (1, 1), (1, 2)]

    def test_word_that_exactly_fits(self):
        positions = wrap_target("ab cd", 5)
        assert positions[-1] == (0, 4)

    def test_long_word_is_broken(self):
        assert wrap_target("abcdef", 4) == [(0, 0), (0, 1), (0, 2), (0, 3), (1, 0), (1, 1)]

    def test_one_position_per_char(self):
        text = "the quick brown fox jumps over the lazy dog"
        positions = wrap_target(text, 12)
        assert len(positions) == len(text)
        assert all(col < 12 for _, col in positions)

    def test_rows_never_decrease(self):
        positions = wrap_target("a bb ccc dddd eeeee", 6)
        rows = [row for row, _ in positions]
        assert rows == sorted(rows)

    def test_bad_width(self):
        with pytest.raises(ValueError):
            wrap_target("abc", 0)


class TestFindPosition:
    def test_inside(self):
        assert find_position([(0, 0), (0, 1)], 1) == (0, 1)

    def test_past_end(self):
        assert find_position([(0, 0)], 1) is None


# ---------------------------------------------------------------------------
# Formatting
# ---------------------------------------------------------------------------

class TestFormatting:
    def test_stats_line(self):
        stats = Stats(wpm=45.25, accuracy=97.0, raw_wpm=45.25, elapsed_seconds=12.4)
        assert format_stats(stats) == "WPM: 45.2 | Accuracy: 97.0% | Time: 12s"

    def test_progress_line(self):
        s = TypingSession("cat dog", clock=lambda: 0.0)
        s.apply_char("c")
        assert format_progress(s) == "Progress: 1/7"

    def test_clip_name(self):
        assert clip_name("short", 14) == "SHORT"
        assert clip_name("averyveryverylongname", 14) == "AVERYVERYVE..."

    def test_centered_x(self):
        assert centered_x("abcd", 10) == 3
        assert centered_x("abcd", 10, left=2) == 5
        assert centered_x("too long text", 4) == 0


class TestWormTrack:
    @pytest.mark.parametrize("fraction", [0.0, 0.3, 0.5, 1.0, 2.0, -1.0])
    def test_fixed_width(self, fraction: float):
        assert len(worm_track(fraction, 30)) == 30

    def test_start_and_end(self):
        assert worm_track(0.0, 10).startswith(WORM_BODY)
        assert worm_track(1.0, 10).endswith(WORM_BODY)

    def test_narrow_track(self):
        assert worm_track(0.5, 2) == WORM_BODY


class TestLeaderboardRows:
    def _record(self) -> ScoreRecord:
        return ScoreRecord(
            name="ana", wpm=52.34, accuracy=96.5, elapsed_seconds=31.0,
            date="01/02/2024 10:00", word_count=25, has_punctuation=True,
        )

    def test_wide_row(self):
        row = leaderboard_row(1, self._record(), wide=True)
        assert row.startswith("   1  ANA")
        assert "52.3" in row
        assert "96.5%" in row
        assert " 25w" in row
        assert row.endswith("P     01/02/2024 10:00")

    def test_compact_row_has_no_date(self):
        row = leaderboard_row(2, self._record(), wide=False)
        assert row.startswith(" 2 ANA")
        assert "01/02/2024" not in row

    def test_headers(self):
        for wide in (True, False):
            header, rule = leaderboard_header(wide)
            assert "WPM" in header
            assert set(rule) <= {"-", " "}
