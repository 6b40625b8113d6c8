"""Constants for twinpane rendering."""

import curses

# Rounded single-line box characters.
BOX_TL = "╭"
BOX_TR = "╮"
BOX_BL = "╰"
BOX_BR = "╯"
BOX_H = "─"
BOX_V = "│"

# Color pair ids.
C_BORDER = 1
C_BORDER_ACTIVE = 2
C_CURSOR = 3
C_SELECTED = 4
C_CURSOR_SELECTED = 5
C_PROMPT = 6
C_STATUS = 7
C_FLASH = 8

# (pair id, foreground, background); -1 keeps the terminal default.
COLOR_PAIRS = (
    (C_BORDER, curses.COLOR_WHITE, -1),
    (C_BORDER_ACTIVE, curses.COLOR_MAGENTA, -1),
    (C_CURSOR, curses.COLOR_MAGENTA, -1),
    (C_SELECTED, curses.COLOR_YELLOW, -1),
    (C_CURSOR_SELECTED, curses.COLOR_BLACK, curses.COLOR_MAGENTA),
    (C_PROMPT, curses.COLOR_CYAN, -1),
    (C_STATUS, curses.COLOR_WHITE, -1),
    (C_FLASH, curses.COLOR_YELLOW, -1),
)

CURSOR_MARK = "● "
SELECTED_MARK = "[*] "
PLAIN_MARK = "   "

KEY_HINTS = (
    "Alt+←/→ panels • Alt+↑/↓ console • "
    "Ctrl+↑/↓ resize • Ctrl+T console mode • q quit"
)
