"""WPM and accuracy calculation shared by live and final stats.

Speed follows the usual convention of five characters per word, counted
over *correct* characters only:

  * **Accuracy** – correct characters / typed characters, as a percentage.
  * **Raw WPM** – (correct / 5) / elapsed minutes.
  * **WPM** – raw WPM scaled down linearly below 50% accuracy, so that
    mashing space through the text cannot produce a high score.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Collection

CHARS_PER_WORD = 5.0
PENALTY_THRESHOLD = 50.0


class DivisionGuardError(ZeroDivisionError):
    """Raised when stats are requested for an empty typed buffer."""


@dataclass(frozen=True)
class Stats:
    wpm: float
    accuracy: float
    raw_wpm: float
    elapsed_seconds: float


def count_correct(target: str, typed: str, skipped: Collection[int] = ()) -> int:
    """Count positions where ``typed`` matches ``target`` exactly.

    Positions listed in ``skipped`` were filled by a word skip and are always
    mismatches, whatever character sits there.
    """
    return sum(
        1
        for i, (a, b) in enumerate(zip(typed, target))
        if a == b and i not in skipped
    )


def accuracy_multiplier(accuracy: float) -> float:
    """Linear penalty below 50% accuracy, 1.0 otherwise."""
    if accuracy < PENALTY_THRESHOLD:
        return accuracy / PENALTY_THRESHOLD
    return 1.0


def compute(correct: int, typed_len: int, elapsed_seconds: float) -> Stats:
    if typed_len == 0:
        raise DivisionGuardError("Cannot compute stats for an empty typed buffer")

    accuracy = 100.0 * correct / typed_len
    if elapsed_seconds <= 0:
        raw_wpm = 0.0
    else:
        raw_wpm = (correct / CHARS_PER_WORD) / (elapsed_seconds / 60.0)
    wpm = raw_wpm * accuracy_multiplier(accuracy)
    return Stats(
        wpm=wpm,
        accuracy=accuracy,
        raw_wpm=raw_wpm,
        elapsed_seconds=elapsed_seconds,
    )
