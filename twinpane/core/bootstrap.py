"""Terminal bootstrap helpers for twinpane startup."""

import curses
import os

ESCAPE_DELAY_MS = 25


def prepare_environment():
    """Shorten curses' ESC wait so Alt chords and Esc feel immediate."""
    os.environ.setdefault('ESCDELAY', str(ESCAPE_DELAY_MS))


def configure_terminal(stdscr, timeout_ms=100):
    """Apply core curses terminal setup."""
    curses.curs_set(0)
    curses.noecho()
    curses.raw()
    stdscr.keypad(True)
    stdscr.nodelay(False)
    stdscr.timeout(timeout_ms)


def resolve_start_directory():
    """Return the working directory; failure here is fatal."""
    try:
        return os.getcwd()
    except OSError as exc:
        raise SystemExit(f'twinpane: cannot resolve working directory: {exc}') from exc
