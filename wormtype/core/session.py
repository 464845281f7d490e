from __future__ import annotations

import time
from dataclasses import dataclass
from enum import Enum
from typing import Callable, FrozenSet, List, Optional, Set

from wormtype.core import scoring
from wormtype.core.words import SKIP_SENTINEL


class SessionState(Enum):
    IDLE = "idle"
    ACTIVE = "active"
    COMPLETE = "complete"


class CharState(Enum):
    CORRECT = "correct"
    INCORRECT = "incorrect"
    PENDING = "pending"


@dataclass(frozen=True)
class SessionOutcome:
    """Final result of a round, handed to the leaderboard and achievements."""

    correct_count: int
    typed_length: int
    elapsed_seconds: float
    accuracy_pct: float
    wpm: float


class TypingSession:
    """Compares a growing typed buffer against a fixed target string.

    Input arrives one event at a time through the ``apply_*`` methods. Timing
    starts with the first accepted character or space. Pressing space in the
    middle of a word skips to the start of the next word; the skipped letters
    are filled with ``_`` and always score as mistakes, and a single backspace
    undoes the whole skip.
    """

    def __init__(self, target: str, clock: Callable[[], float] = time.time) -> None:
        self._clock = clock
        self._reset(target)

    def _reset(self, target: str) -> None:
        if not target:
            raise ValueError("A typing session needs a non-empty target")
        self._target = target
        self._typed: List[str] = []
        self._skipped: Set[int] = set()
        self._started = False
        self._start_time: Optional[float] = None
        self._end_time: Optional[float] = None
        self._jumped_from_pos: Optional[int] = None
        self._outcome: Optional[SessionOutcome] = None

    @property
    def target(self) -> str:
        """The text being typed."""
        return self._target

    @property
    def typed(self) -> str:
        """Everything typed so far, skip fill included."""
        return "".join(self._typed)

    @property
    def started(self) -> bool:
        """Whether timing has begun."""
        return self._started

    @property
    def start_time(self) -> Optional[float]:
        """Clock reading at the first accepted keystroke, or None."""
        return self._start_time

    @property
    def jumped_from_pos(self) -> Optional[int]:
        """Where the last word skip began, while it can still be undone."""
        return self._jumped_from_pos

    @property
    def skipped(self) -> FrozenSet[int]:
        """Positions filled by word skips; these never count as correct."""
        return frozenset(self._skipped)

    @property
    def state(self) -> SessionState:
        """IDLE while nothing is typed, even after backspacing to empty.

        A started round stays timed in that case; only the state reads IDLE,
        matching the absence of live stats.
        """
        if self.is_complete():
            return SessionState.COMPLETE
        if self._started and self._typed:
            return SessionState.ACTIVE
        return SessionState.IDLE

    def is_complete(self) -> bool:
        """True once every target position has been filled."""
        return len(self._typed) == len(self._target)

    def cursor_position(self) -> int:
        """Index of the next character to type."""
        return len(self._typed)

    # -- input events ---------------------------------------------------

    def apply_char(self, c: str) -> None:
        """Type one printable character; a space is treated as a word skip."""
        if c == " ":
            self.apply_space()
            return
        if len(c) != 1 or not c.isprintable():
            raise ValueError(f"Expected a single printable character, got {c!r}")
        if self._is_full():
            return
        self._start_timing()
        self._typed.append(c)
        self._jumped_from_pos = None
        self._mark_if_complete()

    def apply_backspace(self) -> None:
        """Erase one character, or undo the whole of the last word skip."""
        if self.is_complete():
            return
        if self._jumped_from_pos is not None and len(self._typed) > self._jumped_from_pos:
            self._truncate(self._jumped_from_pos)
        elif self._typed:
            self._truncate(len(self._typed) - 1)
        self._jumped_from_pos = None

    def apply_space(self) -> None:
        """Type a space, or jump to the next word when inside one."""
        if self._is_full():
            return
        self._start_timing()

        pos = len(self._typed)
        if self._target[pos] == " ":
            self._typed.append(" ")
            self._jumped_from_pos = None
        else:
            self._jumped_from_pos = pos
            for i in range(pos, self._next_word_pos(pos)):
                if self._target[i] == " ":
                    self._typed.append(" ")
                else:
                    self._typed.append(SKIP_SENTINEL)
                    self._skipped.add(i)
        self._mark_if_complete()

    def apply_restart(self, target: str) -> None:
        """Start a new round on a freshly generated ``target``."""
        self._reset(target)

    # -- queries --------------------------------------------------------

    def correct_count(self) -> int:
        """Number of typed characters matching the target."""
        return scoring.count_correct(self._target, self.typed, self._skipped)

    def elapsed(self, now: Optional[float] = None) -> float:
        """Seconds since the first keystroke, frozen once complete."""
        if self._start_time is None:
            return 0.0
        if self._end_time is not None:
            return self._end_time - self._start_time
        if now is None:
            now = self._clock()
        return max(0.0, now - self._start_time)

    def live_stats(self, now: Optional[float] = None) -> Optional[scoring.Stats]:
        """Current stats, or None before anything has been typed."""
        if not self._started or not self._typed:
            return None
        return scoring.compute(self.correct_count(), len(self._typed), self.elapsed(now))

    def outcome(self) -> Optional[SessionOutcome]:
        """The round's result once complete; the same object on every call."""
        if not self.is_complete():
            return None
        if self._outcome is None:
            correct = self.correct_count()
            elapsed = self.elapsed()
            stats = scoring.compute(correct, len(self._typed), elapsed)
            self._outcome = SessionOutcome(
                correct_count=correct,
                typed_length=len(self._typed),
                elapsed_seconds=elapsed,
                accuracy_pct=stats.accuracy,
                wpm=stats.wpm,
            )
        return self._outcome

    def char_states(self) -> List[CharState]:
        """Classification of every target position for rendering."""
        states = []
        for i, expected in enumerate(self._target):
            if i >= len(self._typed):
                states.append(CharState.PENDING)
            elif self._typed[i] == expected and i not in self._skipped:
                states.append(CharState.CORRECT)
            else:
                states.append(CharState.INCORRECT)
        return states

    # -- helpers --------------------------------------------------------

    def _is_full(self) -> bool:
        return len(self._typed) >= len(self._target)

    def _start_timing(self) -> None:
        if not self._started:
            self._started = True
            self._start_time = self._clock()

    def _mark_if_complete(self) -> None:
        if self.is_complete() and self._end_time is None:
            self._end_time = self._clock()

    def _truncate(self, length: int) -> None:
        del self._typed[length:]
        self._skipped = {i for i in self._skipped if i < length}

    def _next_word_pos(self, pos: int) -> int:
        """Start of the word after the one containing ``pos`` (or the end)."""
        space_pos = self._target.find(" ", pos)
        if space_pos == -1:
            return len(self._target)
        while space_pos < len(self._target) and self._target[space_pos] == " ":
            space_pos += 1
        return space_pos
