from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Dict, List, Optional

logger = logging.getLogger(__name__)

DEFAULT_COSMETIC = "default"


@dataclass
class Achievement:
    id: str
    name: str
    description: str
    threshold_wpm: float
    unlocked: bool = False


def default_achievements() -> List[Achievement]:
    return [
        Achievement(
            id="pink_worm",
            name="red!worm?pink!worm?",
            description="Achieve 60+ WPM to unlock the pink worm variant!",
            threshold_wpm=60.0,
        ),
    ]


# Cosmetic id -> achievement id that unlocks it (None: always available).
COSMETICS: Dict[str, Optional[str]] = {
    DEFAULT_COSMETIC: None,
    "pink": "pink_worm",
}


class AchievementStore:
    """Unlocked achievements and the equipped worm cosmetic.

    File layout: the first line is the equipped cosmetic, every following
    line is ``id|0`` or ``id|1``.
    """

    def __init__(self, file_path: Path, achievements: Optional[List[Achievement]] = None) -> None:
        self._file_path = file_path
        self._achievements = achievements if achievements is not None else default_achievements()
        self._equipped = DEFAULT_COSMETIC
        self._load()

    @property
    def equipped(self) -> str:
        return self._equipped

    def all(self) -> List[Achievement]:
        return list(self._achievements)

    def get(self, achievement_id: str) -> Optional[Achievement]:
        for achievement in self._achievements:
            if achievement.id == achievement_id:
                return achievement
        return None

    def is_unlocked(self, achievement_id: str) -> bool:
        achievement = self.get(achievement_id)
        return achievement is not None and achievement.unlocked

    def available_cosmetics(self) -> List[str]:
        return [
            cosmetic
            for cosmetic, requirement in COSMETICS.items()
            if requirement is None or self.is_unlocked(requirement)
        ]

    def check(self, wpm: float) -> List[Achievement]:
        """Unlock everything ``wpm`` qualifies for; return the new unlocks.

        An empty list is falsy, so callers can treat the result as the
        "newly unlocked" flag.
        """
        unlocked = []
        for achievement in self._achievements:
            if not achievement.unlocked and wpm >= achievement.threshold_wpm:
                achievement.unlocked = True
                unlocked.append(achievement)
                logger.info("Achievement unlocked: %s", achievement.id)
        if unlocked:
            self.save()
        return unlocked

    def equip(self, cosmetic: str) -> bool:
        if cosmetic not in self.available_cosmetics():
            return False
        self._equipped = cosmetic
        self.save()
        return True

    def save(self) -> None:
        lines = [self._equipped]
        lines.extend(f"{a.id}|{1 if a.unlocked else 0}" for a in self._achievements)
        try:
            self._file_path.parent.mkdir(parents=True, exist_ok=True)
            self._file_path.write_text("\n".join(lines) + "\n", encoding="utf-8")
        except OSError as e:
            logger.warning("Could not save achievements to %s: %s", self._file_path, e)

    def _load(self) -> None:
        if not self._file_path.exists():
            return
        try:
            lines = self._file_path.read_text(encoding="utf-8").splitlines()
        except (OSError, UnicodeDecodeError) as e:
            logger.warning("Could not load achievements from %s: %s", self._file_path, e)
            return
        if not lines:
            return

        equipped = lines[0].strip()
        for line in lines[1:]:
            achievement_id, sep, flag = line.partition("|")
            achievement = self.get(achievement_id)
            if not sep or achievement is None:
                continue
            try:
                achievement.unlocked = int(flag) == 1
            except ValueError:
                logger.debug("Skipping malformed achievement line: %r", line)

        if equipped in self.available_cosmetics():
            self._equipped = equipped
