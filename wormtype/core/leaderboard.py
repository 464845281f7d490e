from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import datetime
from pathlib import Path
from typing import Callable, Iterable, List, Optional

from wormtype.core.session import SessionOutcome

logger = logging.getLogger(__name__)

MAX_ENTRIES = 10
DATE_FORMAT = "%m/%d/%Y %H:%M"
UNKNOWN_DATE = "Unknown"
DEFAULT_WORD_COUNT = 15


@dataclass
class ScoreRecord:
    name: str
    wpm: float
    accuracy: float
    elapsed_seconds: float
    date: str = UNKNOWN_DATE
    word_count: int = DEFAULT_WORD_COUNT
    has_punctuation: bool = False
    has_numbers: bool = False

    @property
    def mode_label(self) -> str:
        """Mode column: P for punctuation, N for numbers, - for plain text."""
        label = ("P" if self.has_punctuation else "") + ("N" if self.has_numbers else "")
        return label or "-"

    @classmethod
    def from_outcome(
        cls,
        name: str,
        outcome: SessionOutcome,
        word_count: int,
        has_punctuation: bool,
        has_numbers: bool,
        when: Optional[datetime] = None,
    ) -> "ScoreRecord":
        when = when or datetime.now()
        return cls(
            name=name,
            wpm=outcome.wpm,
            accuracy=outcome.accuracy_pct,
            elapsed_seconds=outcome.elapsed_seconds,
            date=when.strftime(DATE_FORMAT),
            word_count=word_count,
            has_punctuation=has_punctuation,
            has_numbers=has_numbers,
        )


# ---------------------------------------------------------------------------
# Line codec
#
# Four layouts have been written over time, oldest last:
#   name|wpm|accuracy|time|date|words|punct|numbers
#   name|wpm|accuracy|time|date|words
#   name|wpm|accuracy|time|date
#   name|wpm|accuracy|time
# ---------------------------------------------------------------------------


def encode_record(record: ScoreRecord) -> str:
    return "|".join(
        [
            record.name,
            f"{record.wpm:g}",
            f"{record.accuracy:g}",
            f"{record.elapsed_seconds:g}",
            record.date,
            str(record.word_count),
            "1" if record.has_punctuation else "0",
            "1" if record.has_numbers else "0",
        ]
    )


def _head(fields: List[str]) -> ScoreRecord:
    """Parse the four leading fields every layout shares."""
    return ScoreRecord(
        name=fields[0].upper(),
        wpm=float(fields[1]),
        accuracy=float(fields[2]),
        elapsed_seconds=float(fields[3]),
    )


def _flag(text: str) -> bool:
    return int(text) == 1


def _decode_full(fields: List[str]) -> Optional[ScoreRecord]:
    if len(fields) < 8:
        return None
    record = _head(fields)
    try:
        word_count = int(fields[5])
        has_punctuation = _flag(fields[6])
        has_numbers = _flag(fields[7])
    except ValueError:
        return record
    record.date = fields[4]
    record.word_count = word_count
    record.has_punctuation = has_punctuation
    record.has_numbers = has_numbers
    return record


def _decode_with_word_count(fields: List[str]) -> Optional[ScoreRecord]:
    if len(fields) < 6:
        return None
    record = _head(fields)
    try:
        record.word_count = int(fields[5])
    except ValueError:
        return record
    record.date = fields[4]
    return record


def _decode_with_date(fields: List[str]) -> Optional[ScoreRecord]:
    if len(fields) < 5:
        return None
    record = _head(fields)
    record.date = fields[4] or UNKNOWN_DATE
    return record


def _decode_legacy(fields: List[str]) -> Optional[ScoreRecord]:
    if len(fields) < 4:
        return None
    return _head(fields)


DECODERS: List[Callable[[List[str]], Optional[ScoreRecord]]] = [
    _decode_full,
    _decode_with_word_count,
    _decode_with_date,
    _decode_legacy,
]


def decode_line(line: str) -> Optional[ScoreRecord]:
    """Decode one stored line, newest layout first. None if unusable."""
    fields = line.rstrip("\r\n").split("|")
    for decoder in DECODERS:
        try:
            record = decoder(fields)
        except ValueError:
            return None
        if record is not None:
            return record
    return None


# ---------------------------------------------------------------------------
# Ranking
# ---------------------------------------------------------------------------


def rank(records: Iterable[ScoreRecord]) -> List[ScoreRecord]:
    """Top 10 by WPM, ties broken by accuracy, both descending."""
    ordered = sorted(records, key=lambda r: (r.wpm, r.accuracy), reverse=True)
    return ordered[:MAX_ENTRIES]


def add(record: ScoreRecord, existing: Iterable[ScoreRecord]) -> List[ScoreRecord]:
    return rank([*existing, record])


def unique_names(records: Iterable[ScoreRecord]) -> List[str]:
    """Player names in first-seen order."""
    names: List[str] = []
    for record in records:
        if record.name not in names:
            names.append(record.name)
    return names


class LeaderboardStore:
    """Top-10 score table kept in a pipe-separated text file.

    The file is best effort: read and write failures are logged and play
    continues with the in-memory table.
    """

    def __init__(self, file_path: Path) -> None:
        self._file_path = file_path
        self.records: List[ScoreRecord] = self.load()

    @property
    def file_path(self) -> Path:
        return self._file_path

    def load(self) -> List[ScoreRecord]:
        if not self._file_path.exists():
            return []
        try:
            text = self._file_path.read_text(encoding="utf-8")
        except (OSError, UnicodeDecodeError) as e:
            logger.warning("Could not load leaderboard from %s: %s", self._file_path, e)
            return []

        records = []
        for line in text.splitlines():
            if not line.strip():
                continue
            record = decode_line(line)
            if record is None:
                logger.debug("Dropping unreadable leaderboard line: %r", line)
                continue
            records.append(record)
        return records

    def save(self, records: Optional[List[ScoreRecord]] = None) -> None:
        if records is not None:
            self.records = list(records)
        payload = "".join(encode_record(r) + "\n" for r in self.records)
        try:
            self._file_path.parent.mkdir(parents=True, exist_ok=True)
            self._file_path.write_text(payload, encoding="utf-8")
        except OSError as e:
            logger.warning("Could not save leaderboard to %s: %s", self._file_path, e)

    def add(self, record: ScoreRecord) -> List[ScoreRecord]:
        self.records = add(record, self.records)
        self.save()
        logger.info("Recorded %.1f WPM for %s", record.wpm, record.name)
        return self.records

    def clear(self) -> None:
        self.records = []
        self.save()

    def player_names(self) -> List[str]:
        return unique_names(self.records)
