"""Pure text layout helpers for the terminal screens."""

from __future__ import annotations

from typing import List, Optional, Tuple

from wormtype.core.leaderboard import ScoreRecord
from wormtype.core.scoring import Stats
from wormtype.core.session import TypingSession

WORM_BODY = "~~~~o"
# Below this width the leaderboard drops the date column.
WIDE_LEADERBOARD = 95


def wrap_target(target: str, width: int) -> List[Tuple[int, int]]:
    """Return the (row, col) of every character of ``target``.

    Words move to the next row when they would cross ``width``; words longer
    than a whole row are broken wherever the row ends.
    """
    if width < 1:
        raise ValueError(f"width must be positive, got {width}")
    positions: List[Tuple[int, int]] = []
    row = col = 0
    i = 0
    while i < len(target):
        if target[i] == " ":
            end = i + 1
        else:
            end = target.find(" ", i)
            if end == -1:
                end = len(target)
            if col > 0 and col + (end - i) > width:
                row += 1
                col = 0
        for _ in range(i, end):
            if col >= width:
                row += 1
                col = 0
            positions.append((row, col))
            col += 1
        i = end
    return positions


def format_stats(stats: Stats) -> str:
    return f"WPM: {stats.wpm:.1f} | Accuracy: {stats.accuracy:.1f}% | Time: {stats.elapsed_seconds:.0f}s"


def format_progress(session: TypingSession) -> str:
    return f"Progress: {session.cursor_position()}/{len(session.target)}"


def worm_track(fraction: float, width: int) -> str:
    """A worm crawling along a ``width`` track, head at ``fraction`` of the way."""
    width = max(width, len(WORM_BODY))
    fraction = max(0.0, min(1.0, fraction))
    head = len(WORM_BODY) - 1 + int(round(fraction * (width - len(WORM_BODY))))
    start = head - len(WORM_BODY) + 1
    return " " * start + WORM_BODY + " " * (width - head - 1)


def leaderboard_header(wide: bool) -> Tuple[str, str]:
    if wide:
        return (
            "Rank  Name            WPM    Accuracy  Time   Words  Mode  Date & Time",
            "----  --------------  -----  --------  ----   -----  ----  ----------------",
        )
    return (
        "# Name         WPM   Acc%  Time  Words  Mode",
        "- ----------- ----  ----  ----  -----  ----",
    )


def clip_name(name: str, limit: int) -> str:
    name = name.upper()
    if len(name) > limit:
        return name[: limit - 3] + "..."
    return name


def leaderboard_row(position: int, record: ScoreRecord, wide: bool) -> str:
    if wide:
        return (
            f"{position:4d}  {clip_name(record.name, 14):<14s}  {record.wpm:5.1f}  "
            f"{record.accuracy:7.1f}%  {record.elapsed_seconds:4.0f}s  {record.word_count:3d}w   "
            f"{record.mode_label:<4s}  {record.date}"
        )
    return (
        f"{position:2d} {clip_name(record.name, 11):<11s} {record.wpm:4.0f}  "
        f"{record.accuracy:3.0f}%  {record.elapsed_seconds:3.0f}s  {record.word_count:3d}w   "
        f"{record.mode_label:<2s}"
    )


def centered_x(text: str, width: int, left: int = 0) -> int:
    return left + max(0, (width - len(text)) // 2)


def find_position(positions: List[Tuple[int, int]], index: int) -> Optional[Tuple[int, int]]:
    """Layout cell for ``index``, or None past the end of the text."""
    if 0 <= index < len(positions):
        return positions[index]
    return None
