from __future__ import annotations

import logging
from dataclasses import dataclass, field, fields
from pathlib import Path
from typing import Optional, Tuple

import yaml

logger = logging.getLogger(__name__)

MIN_WORD_COUNT = 1
MAX_WORD_COUNT = 1000
CONFIG_FILE_NAME = "config.yaml"


class InvalidWordCountError(ValueError):
    pass


def parse_word_count(text: str) -> int:
    """Validate a typed word count; only plain digits in [1, 1000] pass."""
    text = text.strip()
    if not (text.isascii() and text.isdigit()):
        raise InvalidWordCountError(f"Not a number: {text!r}")
    value = int(text)
    if not MIN_WORD_COUNT <= value <= MAX_WORD_COUNT:
        raise InvalidWordCountError(
            f"Word count must be between {MIN_WORD_COUNT} and {MAX_WORD_COUNT}, got {value}"
        )
    return value


def default_data_dir() -> Path:
    return Path.home() / ".wormtype"


@dataclass
class AppConfig:
    data_dir: Path = field(default_factory=default_data_dir)
    word_count_presets: Tuple[int, ...] = (5, 10, 25, 50)
    leaderboard_file: str = "leaderboard.txt"
    achievements_file: str = "achievements.txt"
    log_file: str = "wormtype.log"
    log_level: str = "INFO"

    def __post_init__(self) -> None:
        self.data_dir = Path(self.data_dir).expanduser()
        self.leaderboard_file = str(self.leaderboard_file)
        self.achievements_file = str(self.achievements_file)
        self.log_file = str(self.log_file)
        self.log_level = str(self.log_level)
        presets = tuple(int(p) for p in self.word_count_presets)
        for preset in presets:
            if not MIN_WORD_COUNT <= preset <= MAX_WORD_COUNT:
                raise ValueError(f"word_count_presets: {preset} is outside 1-1000")
        self.word_count_presets = presets

    @property
    def leaderboard_path(self) -> Path:
        return self.data_dir / self.leaderboard_file

    @property
    def achievements_path(self) -> Path:
        return self.data_dir / self.achievements_file

    @property
    def log_path(self) -> Path:
        return self.data_dir / self.log_file

    @classmethod
    def load(cls, path: Optional[Path] = None) -> "AppConfig":
        """Read ``config.yaml`` from the data dir; defaults when absent or broken."""
        if path is None:
            path = default_data_dir() / CONFIG_FILE_NAME
        if not path.exists():
            return cls()
        try:
            raw = yaml.safe_load(path.read_text(encoding="utf-8"))
        except (yaml.YAMLError, OSError) as e:
            logger.warning("Could not read config from %s: %s", path, e)
            return cls()
        if raw is None:
            return cls()
        if not isinstance(raw, dict):
            logger.warning("Ignoring %s: expected a mapping", path)
            return cls()

        known = {f.name for f in fields(cls)}
        for key in sorted(set(raw) - known, key=str):
            logger.warning("Unknown config key in %s: %s", path, key)
        try:
            return cls(**{k: v for k, v in raw.items() if k in known})
        except (TypeError, ValueError) as e:
            logger.warning("Invalid value in %s, using defaults: %s", path, e)
            return cls()
