from __future__ import annotations

import random
from dataclasses import dataclass
from pathlib import Path
from typing import Optional, Sequence, Tuple

import yaml

SKIP_SENTINEL = "_"

_POOL_KEYS = ("base", "punctuation", "numbers", "pure_numbers")


def generate(
    word_count: int,
    include_punctuation: bool,
    include_numbers: bool,
    base_pool: Sequence[str],
    punctuation_pool: Sequence[str],
    number_pool: Sequence[str],
    pure_number_pool: Sequence[str],
    rng: Optional[random.Random] = None,
) -> str:
    """Build a target string of ``word_count`` space-joined tokens.

    Numbers without punctuation is the numbers-only mode and draws from
    ``pure_number_pool`` alone. Every other combination draws from the base
    pool extended by whichever optional pools are switched on.
    """
    if word_count < 1:
        raise ValueError(f"word_count must be positive, got {word_count}")
    rng = rng or random.Random()

    if include_numbers and not include_punctuation:
        pool = list(pure_number_pool)
    else:
        pool = list(base_pool)
        if include_punctuation:
            pool.extend(punctuation_pool)
        if include_numbers:
            pool.extend(number_pool)
    if not pool:
        raise ValueError("Cannot generate text from an empty word pool")

    return " ".join(rng.choice(pool) for _ in range(word_count))


@dataclass(frozen=True)
class WordPools:
    base: Tuple[str, ...]
    punctuation: Tuple[str, ...]
    numbers: Tuple[str, ...]
    pure_numbers: Tuple[str, ...]

    @classmethod
    def load(cls, path: Optional[Path] = None) -> "WordPools":
        """Load pools from YAML (defaults to the bundled ``data/words.yaml``)."""
        if path is None:
            path = Path(__file__).resolve().parent.parent / "data" / "words.yaml"
        if not path.exists():
            raise FileNotFoundError(f"Word pool file not found: {path}")

        raw = yaml.safe_load(path.read_text(encoding="utf-8"))
        if not raw or not isinstance(raw, dict):
            raise ValueError(f"{path.name}: expected a mapping of word pools")

        pools = {}
        for key in _POOL_KEYS:
            words = raw.get(key)
            if not isinstance(words, list) or not words:
                raise ValueError(f"{path.name}: '{key}' must be a non-empty list")
            pools[key] = tuple(_check_token(path.name, key, item) for item in words)
        return cls(**pools)

    def generate(
        self,
        word_count: int,
        include_punctuation: bool = False,
        include_numbers: bool = False,
        rng: Optional[random.Random] = None,
    ) -> str:
        return generate(
            word_count,
            include_punctuation,
            include_numbers,
            self.base,
            self.punctuation,
            self.numbers,
            self.pure_numbers,
            rng=rng,
        )


def _check_token(file_name: str, key: str, item: object) -> str:
    # YAML turns bare numbers into ints; the pools are text.
    token = str(item)
    if not token or any(ch.isspace() for ch in token):
        raise ValueError(f"{file_name}: '{key}' contains an empty or spaced token: {token!r}")
    if SKIP_SENTINEL in token:
        raise ValueError(f"{file_name}: '{key}' token {token!r} contains the skip marker")
    return token
