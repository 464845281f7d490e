"""curses screens: menus, the typing round, leaderboard and worm closet."""

from __future__ import annotations

import curses
import logging
from enum import Enum
from typing import List, Optional, Tuple

from wormtype.core.achievements import AchievementStore, Achievement
from wormtype.core.config import AppConfig, InvalidWordCountError, parse_word_count
from wormtype.core.leaderboard import LeaderboardStore, ScoreRecord
from wormtype.core.session import CharState, TypingSession
from wormtype.core.words import WordPools
from wormtype.ui import layout
from wormtype.ui.colors import Pair, init_colors, worm_pair

logger = logging.getLogger(__name__)

TITLE = "W4RMUP W0RM'S T3RMINAL TYP3R"
KEY_ESC = 27
ENTER_KEYS = (10, 13, curses.KEY_ENTER)
BACKSPACE_KEYS = (curses.KEY_BACKSPACE, 127, 8)
MAX_NAME_LENGTH = 20
MAX_COUNT_DIGITS = 4
TICK_MS = 200

_CHAR_PAIRS = {
    CharState.CORRECT: Pair.CORRECT,
    CharState.INCORRECT: Pair.INCORRECT,
    CharState.PENDING: Pair.PENDING,
}


class RoundResult(Enum):
    FINISHED = "finished"
    ABORTED = "aborted"
    QUIT = "quit"


class LeaderboardAction(Enum):
    CONTINUE = "continue"
    CLEARED = "cleared"
    CHANGE_NAME = "change_name"
    CLOSET = "closet"


def _is_up(ch: int, allow_w: bool = True) -> bool:
    return ch == curses.KEY_UP or (allow_w and ch in (ord("w"), ord("W")))


def _is_down(ch: int) -> bool:
    return ch in (curses.KEY_DOWN, ord("s"), ord("S"))


def _is_quit(ch: int) -> bool:
    return ch in (ord("q"), ord("Q"))


class TerminalUI:
    """Drives the whole program on one curses screen."""

    def __init__(
        self,
        stdscr,
        config: AppConfig,
        pools: WordPools,
        leaderboard: LeaderboardStore,
        achievements: AchievementStore,
    ) -> None:
        self._scr = stdscr
        self._config = config
        self._pools = pools
        self._leaderboard = leaderboard
        self._achievements = achievements
        self._has_colors = False

    # -- drawing helpers ------------------------------------------------

    def _size(self) -> Tuple[int, int]:
        return self._scr.getmaxyx()

    def _put(self, y: int, x: int, text: str, attr: int = 0) -> None:
        try:
            self._scr.addstr(y, x, text, attr)
        except curses.error:
            # Writing into the bottom-right cell or off a small screen.
            pass

    def _color(self, pair: int) -> int:
        return curses.color_pair(pair) if self._has_colors else 0

    def _center(self, y: int, text: str, attr: int = 0) -> None:
        _, max_x = self._size()
        self._put(y, layout.centered_x(text, max_x), text, attr)

    def _box(self, top: int, left: int, height: int, width: int) -> None:
        try:
            self._scr.addch(top, left, curses.ACS_ULCORNER)
            self._scr.hline(top, left + 1, curses.ACS_HLINE, width - 2)
            self._scr.addch(top, left + width - 1, curses.ACS_URCORNER)
            self._scr.vline(top + 1, left, curses.ACS_VLINE, height - 2)
            self._scr.vline(top + 1, left + width - 1, curses.ACS_VLINE, height - 2)
            self._scr.addch(top + height - 1, left, curses.ACS_LLCORNER)
            self._scr.hline(top + height - 1, left + 1, curses.ACS_HLINE, width - 2)
            self._scr.addch(top + height - 1, left + width - 1, curses.ACS_LRCORNER)
        except curses.error:
            pass

    def _titled_box(self, title: str, width: int, height: int) -> Tuple[int, int]:
        """Draw a centered box with a title and separator; return its top-left."""
        max_y, max_x = self._size()
        height = min(height, max(3, max_y - 4))
        top = max(0, (max_y - height) // 2)
        left = max(0, (max_x - width) // 2)
        self._box(top, left, height, width)
        self._put(top + 1, layout.centered_x(title, width, left), title)
        try:
            self._scr.hline(top + 2, left + 2, curses.ACS_HLINE, width - 4)
        except curses.error:
            pass
        return top, left

    def _footer(self, *lines: str) -> None:
        max_y, _ = self._size()
        for offset, line in enumerate(reversed(lines), start=1):
            self._center(max_y - offset, line)

    # -- program flow ---------------------------------------------------

    def run(self) -> None:
        self._has_colors = init_colors()
        curses.curs_set(0)
        self._scr.keypad(True)

        player = self.choose_player()
        if player is None:
            return

        while True:
            word_count = self.word_count_menu()
            if word_count is None:
                return
            punctuation, numbers = self.text_options_menu()
            result = self.play_round(player, word_count, punctuation, numbers)
            if result is RoundResult.QUIT:
                return
            if result is RoundResult.ABORTED:
                continue

            action = self.show_leaderboard()
            if action is LeaderboardAction.CHANGE_NAME:
                new_player = self.choose_player()
                if new_player is None:
                    return
                player = new_player
            elif action is LeaderboardAction.CLOSET:
                self.worm_closet()

    # -- player name ----------------------------------------------------

    def choose_player(self) -> Optional[str]:
        """Pick an existing name or create one. None when cancelled."""
        while True:
            names = self._leaderboard.player_names()
            if not names:
                return self.new_player_name()
            choice = self.name_selection_menu(names)
            if choice is None:
                return None
            if choice == "":
                name = self.new_player_name()
                if name is not None:
                    return name
                continue
            return choice

    def name_selection_menu(self, names: List[str]) -> Optional[str]:
        """Return the chosen name, "" for a new player, None to cancel."""
        shown = names[:6]
        choice = 0
        while True:
            self._scr.erase()
            top, left = self._titled_box("SELECT YOUR NAME", 40, len(shown) + 7)
            for i, option in enumerate([*shown, "Create New Player"]):
                label = layout.clip_name(option, 32) if i < len(shown) else option
                if i == choice:
                    label = f"[{label}]"
                self._put(top + 4 + i, layout.centered_x(label, 40, left), label)
            self._footer("WASD/Arrows + Enter | Q: Back", "Press W for Worm Closet")
            self._scr.refresh()

            ch = self._scr.getch()
            if ch in (ord("w"), ord("W")):
                self.worm_closet()
            elif _is_up(ch, allow_w=False) and choice > 0:
                choice -= 1
            elif _is_down(ch) and choice < len(shown):
                choice += 1
            elif ch in ENTER_KEYS:
                return shown[choice] if choice < len(shown) else ""
            elif _is_quit(ch):
                return None

    def new_player_name(self) -> Optional[str]:
        name = ""
        while True:
            self._scr.erase()
            top, left = self._titled_box("CREATE PLAYER", 40, 8)
            self._put(top + 4, left + 3, "Name: [" + name.ljust(MAX_NAME_LENGTH) + "]")
            self._footer("Enter: Confirm | ESC: Back" if name else "Type your name...")
            curses.curs_set(1)
            self._scr.move(top + 4, left + 10 + len(name))
            self._scr.refresh()

            ch = self._scr.getch()
            if ch in ENTER_KEYS and name:
                curses.curs_set(0)
                return name.upper()
            if ch == KEY_ESC:
                curses.curs_set(0)
                return None
            if ch in BACKSPACE_KEYS:
                name = name[:-1]
            elif 32 <= ch <= 126 and chr(ch) != "|" and len(name) < MAX_NAME_LENGTH:
                name += chr(ch)

    # -- round settings -------------------------------------------------

    def word_count_menu(self) -> Optional[int]:
        presets = self._config.word_count_presets
        choice = 0
        while True:
            self._scr.erase()
            top, left = self._titled_box("WORD COUNT", 30, len(presets) + 8)
            options = [f"{n} words" for n in presets] + ["Custom"]
            for i, option in enumerate(options):
                if i == choice:
                    self._put(top + 4 + i, left + 3, f"[{option}]")
                else:
                    self._put(top + 4 + i, left + 4, option)
            self._footer("WASD/Arrows + Enter | Q: Back")
            self._scr.refresh()

            ch = self._scr.getch()
            if _is_up(ch) and choice > 0:
                choice -= 1
            elif _is_down(ch) and choice < len(presets):
                choice += 1
            elif ch in ENTER_KEYS:
                if choice < len(presets):
                    return presets[choice]
                return self.custom_word_count()
            elif _is_quit(ch):
                return None

    def custom_word_count(self) -> Optional[int]:
        text = ""
        while True:
            self._scr.erase()
            top, left = self._titled_box("CUSTOM WORD COUNT", 40, 8)
            self._put(top + 4, left + 3, "Words: [" + text.ljust(MAX_COUNT_DIGITS) + "]")
            self._footer("Enter: Confirm | Q: Back" if text else "Enter number of words (1-1000)...")
            curses.curs_set(1)
            self._scr.move(top + 4, left + 11 + len(text))
            self._scr.refresh()

            ch = self._scr.getch()
            if ch in ENTER_KEYS and text:
                try:
                    count = parse_word_count(text)
                except InvalidWordCountError as e:
                    logger.debug("Rejected word count: %s", e)
                    text = ""
                    continue
                curses.curs_set(0)
                return count
            if _is_quit(ch):
                curses.curs_set(0)
                return None
            if ch in BACKSPACE_KEYS:
                text = text[:-1]
            elif ord("0") <= ch <= ord("9") and len(text) < MAX_COUNT_DIGITS:
                text += chr(ch)

    def text_options_menu(self) -> Tuple[bool, bool]:
        """Toggle punctuation and numbers. Q keeps both off."""
        flags = [False, False]
        labels = ["Punctuation", "Numbers"]
        choice = 0
        while True:
            self._scr.erase()
            top, left = self._titled_box("TEXT OPTIONS", 38, 10)
            for i, label in enumerate(labels):
                marker = ">" if i == choice else " "
                box = "[X]" if flags[i] else "[ ]"
                self._put(top + 4 + i, left + 3, f"{marker} {box} {label}")
            self._footer(
                "WASD/Arrows: Navigate | Space: Toggle | Enter: Continue | Q: Back",
                "Press W for Worm Closet",
            )
            self._scr.refresh()

            ch = self._scr.getch()
            if ch == curses.KEY_UP and choice > 0:
                choice -= 1
            elif _is_down(ch) and choice < len(labels) - 1:
                choice += 1
            elif ch in (ord("w"), ord("W")):
                self.worm_closet()
            elif ch == ord(" "):
                flags[choice] = not flags[choice]
            elif ch in ENTER_KEYS:
                return flags[0], flags[1]
            elif _is_quit(ch):
                return False, False

    # -- the round ------------------------------------------------------

    def play_round(
        self, player: str, word_count: int, punctuation: bool, numbers: bool
    ) -> RoundResult:
        session = TypingSession(self._pools.generate(word_count, punctuation, numbers))
        logger.info(
            "Round started: %d words, punctuation=%s, numbers=%s",
            word_count,
            punctuation,
            numbers,
        )
        self._scr.timeout(TICK_MS)
        try:
            while True:
                self.draw_round(session)
                if session.is_complete():
                    return self._finish_round(session, player, word_count, punctuation, numbers)

                ch = self._scr.getch()
                if ch == -1 or ch == curses.KEY_RESIZE:
                    continue
                if ch == KEY_ESC:
                    return RoundResult.ABORTED
                if ch in BACKSPACE_KEYS:
                    session.apply_backspace()
                elif ch in ENTER_KEYS:
                    session.apply_restart(self._pools.generate(word_count, punctuation, numbers))
                elif ch == ord(" "):
                    session.apply_space()
                elif 33 <= ch <= 126:
                    session.apply_char(chr(ch))
        finally:
            self._scr.timeout(-1)
            curses.curs_set(0)

    def draw_round(self, session: TypingSession) -> None:
        self._scr.erase()
        max_y, max_x = self._size()
        width = max(10, max_x - 4)
        height = max(10, max_y - 2)
        self._box(0, 2, height, width)
        self._put(1, layout.centered_x(TITLE, width, 2), TITLE)
        self._put(3, layout.centered_x("Type this:", width, 2), "Type this:")

        track_width = max(5, width - 4)
        fraction = session.cursor_position() / len(session.target)
        worm = layout.worm_track(fraction, track_width)
        self._put(4, 4, worm, self._color(worm_pair(self._achievements.equipped)))

        text_top, text_left = 6, 4
        positions = layout.wrap_target(session.target, max(1, width - 4))
        for (row, col), char, state in zip(positions, session.target, session.char_states()):
            self._put(text_top + row, text_left + col, char, self._color(_CHAR_PAIRS[state]))

        last_row = positions[-1][0] if positions else 0
        stats_y = text_top + last_row + 2
        progress = layout.format_progress(session)
        self._put(stats_y, layout.centered_x(progress, width, 2), progress)
        stats = session.live_stats()
        if stats is not None:
            line = layout.format_stats(stats)
            self._put(stats_y + 1, layout.centered_x(line, width, 2), line)

        instructions = "ENTER: restart | ESC: quit"
        self._put(height - 2, layout.centered_x(instructions, width, 2), instructions)

        cursor = layout.find_position(positions, session.cursor_position())
        if cursor is not None:
            curses.curs_set(1)
            try:
                self._scr.move(text_top + cursor[0], text_left + cursor[1])
            except curses.error:
                pass
        else:
            curses.curs_set(0)
        self._scr.refresh()

    def _finish_round(
        self,
        session: TypingSession,
        player: str,
        word_count: int,
        punctuation: bool,
        numbers: bool,
    ) -> RoundResult:
        outcome = session.outcome()
        record = ScoreRecord.from_outcome(player, outcome, word_count, punctuation, numbers)
        self._leaderboard.add(record)
        for achievement in self._achievements.check(outcome.wpm):
            self.achievement_notice(achievement)

        self._scr.timeout(-1)
        curses.curs_set(0)
        self.draw_round(session)
        max_y, _ = self._size()
        self._center(max_y - 6, "COMPLETE!")
        self._center(max_y - 5, "Press Enter to view leaderboard | Q to quit")
        self._scr.refresh()
        while True:
            ch = self._scr.getch()
            if ch in ENTER_KEYS:
                return RoundResult.FINISHED
            if _is_quit(ch):
                return RoundResult.QUIT

    def achievement_notice(self, achievement: Achievement) -> None:
        self._scr.timeout(-1)
        self._scr.erase()
        max_y, _ = self._size()
        self._center(max_y // 2 - 2, "ACHIEVEMENT UNLOCKED!")
        self._center(max_y // 2, achievement.name, self._color(Pair.PINK_WORM))
        self._center(max_y // 2 + 1, achievement.description)
        self._center(max_y // 2 + 3, "Press any key to continue...")
        self._scr.refresh()
        self._scr.getch()

    # -- leaderboard ----------------------------------------------------

    def show_leaderboard(self) -> LeaderboardAction:
        while True:
            self._scr.erase()
            max_y, max_x = self._size()
            self._center(1, "=== TOP 10 LEADERBOARD ===")
            wide = max_x - 4 >= layout.WIDE_LEADERBOARD
            header, rule = layout.leaderboard_header(wide)
            left = layout.centered_x(header, max_x)
            self._put(3, left, header)
            self._put(4, left, rule)
            records = self._leaderboard.records
            for i, record in enumerate(records, start=1):
                self._put(4 + i, left, layout.leaderboard_row(i, record, wide))
            if not records:
                self._center(7, "No scores recorded yet!")
            self._footer(
                "Press 'C' to clear leaderboard",
                "Press 'N' to change player name",
                "Press 'W' to open worm closet",
                "Press any other key to continue",
            )
            self._scr.refresh()

            ch = self._scr.getch()
            if ch == curses.KEY_RESIZE:
                continue
            if ch in (ord("c"), ord("C")):
                if self._confirm_clear():
                    self._leaderboard.clear()
                    return LeaderboardAction.CLEARED
            elif ch in (ord("n"), ord("N")):
                return LeaderboardAction.CHANGE_NAME
            elif ch in (ord("w"), ord("W")):
                return LeaderboardAction.CLOSET
            else:
                return LeaderboardAction.CONTINUE

    def _confirm_clear(self) -> bool:
        self._scr.erase()
        max_y, _ = self._size()
        self._center(max_y // 2 - 1, "Clear all leaderboard data?")
        self._center(max_y // 2, "Press 'Y' to confirm")
        self._center(max_y // 2 + 1, "Press any other key to cancel")
        self._scr.refresh()
        return self._scr.getch() in (ord("y"), ord("Y"))

    # -- worm closet ----------------------------------------------------

    def worm_closet(self) -> None:
        """Equip an unlocked worm cosmetic."""
        slots = ["pink", "default"]
        choice = 0
        while True:
            self._scr.erase()
            top, left = self._titled_box("WORM CLOSET", 50, 12)
            available = self._achievements.available_cosmetics()
            for i, cosmetic in enumerate(slots):
                if cosmetic not in available:
                    content = "[?]"
                elif cosmetic == self._achievements.equipped:
                    content = "[*]"
                else:
                    content = f"[{cosmetic[0].upper()}]"
                x = left + 15 + i * 10
                attr = self._color(worm_pair(cosmetic)) if cosmetic in available else 0
                if i == choice:
                    self._put(top + 5, x - 2, ">")
                    self._put(top + 5, x + 4, "<")
                self._put(top + 5, x, content, attr)

            if slots[choice] == "pink":
                info = (
                    "Pink Worm - Unlocked at 60+ WPM"
                    if "pink" in available
                    else "??? - Achieve 60+ WPM to unlock"
                )
            else:
                info = "Default Worm - Classic orange-red"
            self._put(top + 8, left + 3, info)
            self._footer("WASD/Arrows: Navigate | Enter: Equip | Q: Back")
            self._scr.refresh()

            ch = self._scr.getch()
            if ch in (curses.KEY_LEFT, ord("a"), ord("A")) and choice > 0:
                choice -= 1
            elif ch in (curses.KEY_RIGHT, ord("d"), ord("D")) and choice < len(slots) - 1:
                choice += 1
            elif ch in ENTER_KEYS:
                self._achievements.equip(slots[choice])
            elif _is_quit(ch):
                return
