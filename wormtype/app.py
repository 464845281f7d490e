"""Application entry point and setup for the Wormtype terminal typer."""

import curses
import logging
import os
import sys

from wormtype.core.achievements import AchievementStore
from wormtype.core.config import AppConfig
from wormtype.core.leaderboard import LeaderboardStore
from wormtype.core.words import WordPools
from wormtype.ui.screens import TerminalUI


def configure_logging(config: AppConfig) -> None:
    """Send application logs to a file; curses owns the terminal."""
    try:
        config.data_dir.mkdir(parents=True, exist_ok=True)
        target = {"filename": str(config.log_path), "encoding": "utf-8"}
    except OSError:
        target = {"handlers": [logging.NullHandler()]}
    logging.basicConfig(
        level=getattr(logging, config.log_level.upper(), logging.INFO),
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        **target,
    )


def run() -> None:
    """Load config, pools and stores, then hand the terminal to the UI."""
    config = AppConfig.load()
    configure_logging(config)

    pools = WordPools.load()
    leaderboard = LeaderboardStore(config.leaderboard_path)
    achievements = AchievementStore(config.achievements_path)
    logging.info(
        "Loaded %d leaderboard entries from %s",
        len(leaderboard.records),
        config.leaderboard_path,
    )

    # Make ESC respond without the default one second delay.
    os.environ.setdefault("ESCDELAY", "25")

    def _main(stdscr) -> None:
        TerminalUI(stdscr, config, pools, leaderboard, achievements).run()

    try:
        curses.wrapper(_main)
    except KeyboardInterrupt:
        logging.info("Interrupted, exiting")
    sys.exit(0)
