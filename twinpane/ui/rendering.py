"""Curses rendering for the two panels, the console and the status rows."""

import curses
import os

from ..constants import (
    BOX_BL, BOX_BR, BOX_H, BOX_TL, BOX_TR, BOX_V,
    C_BORDER, C_BORDER_ACTIVE, C_CURSOR, C_CURSOR_SELECTED, C_FLASH,
    C_PROMPT, C_SELECTED, C_STATUS, COLOR_PAIRS,
    CURSOR_MARK, KEY_HINTS, PLAIN_MARK, SELECTED_MARK,
)
from ..core.actions import ConsoleMode
from ..core.panel import PANEL_CHROME_ROWS
from ..core.state import FLASH_SECONDS
from ..utils import fit_text_to_cells, safe_addstr

RENAME_POPUP_WIDTH = 50
PROMPT = '> '


def init_colors():
    """Initialize curses color pairs."""
    curses.start_color()
    curses.use_default_colors()
    for pair_id, fg, bg in COLOR_PAIRS:
        curses.init_pair(pair_id, fg, bg)


def color(pair_id):
    return curses.color_pair(pair_id)


def draw_box(win, y, x, h, w, attr=0):
    """Draw a rounded single-line box."""
    if h < 2 or w < 2:
        return
    safe_addstr(win, y, x, BOX_TL + BOX_H * (w - 2) + BOX_TR, attr)
    for i in range(1, h - 1):
        safe_addstr(win, y + i, x, BOX_V, attr)
        safe_addstr(win, y + i, x + w - 1, BOX_V, attr)
    safe_addstr(win, y + h - 1, x, BOX_BL + BOX_H * (w - 2) + BOX_BR, attr)


def entry_line(name, is_cursor, is_selected, width):
    """Return ``(text, pair_id)`` for one panel row."""
    if is_selected:
        text = SELECTED_MARK + name
        pair = C_CURSOR_SELECTED if is_cursor else C_SELECTED
    elif is_cursor:
        text, pair = CURSOR_MARK + name, C_CURSOR
    else:
        text, pair = PLAIN_MARK + name, 0
    return fit_text_to_cells(text, width), pair


def draw_panel(stdscr, panel, y, x, h, w, active):
    border = color(C_BORDER_ACTIVE if active else C_BORDER)
    draw_box(stdscr, y, x, h, w, border)
    title = f' {os.path.basename(panel.directory) or panel.directory} '
    safe_addstr(stdscr, y, x + 2, title[:max(0, w - 4)], border | curses.A_BOLD)

    rows = max(0, h - 2)
    visible = panel.entries[panel.scroll:panel.scroll + rows]
    for offset, name in enumerate(visible):
        index = panel.scroll + offset
        text, pair = entry_line(
            name, index == panel.cursor, name in panel.selected, max(0, w - 4)
        )
        attr = color(pair) if pair else 0
        if index == panel.cursor:
            attr |= curses.A_BOLD
        safe_addstr(stdscr, y + 1 + offset, x + 2, text, attr)


def console_lines(log, rows):
    """Tail of the console log that fits ``rows`` display lines."""
    if rows <= 0:
        return []
    lines = []
    for entry in log[-rows:]:
        lines.extend(entry.split('\n'))
    return lines[-rows:]


def draw_console(stdscr, state, y, h, w):
    if h <= 0:
        return
    focused = state.console_focused
    prompt_attr = color(C_PROMPT) | (curses.A_BOLD if focused else 0)
    text_w = max(1, w - 6)
    text, cursor_x = state.console_input.visible(text_w)
    if not text and not focused:
        text = state.console_input.placeholder
    if h < 3:
        safe_addstr(stdscr, y, 0, PROMPT + text, prompt_attr)
        return

    draw_box(stdscr, y, 0, h, w, color(C_BORDER_ACTIVE if focused else C_BORDER))
    for row, line in enumerate(console_lines(state.console_log, h - 3)):
        safe_addstr(stdscr, y + 1 + row, 2, fit_text_to_cells(line, w - 4))
    safe_addstr(stdscr, y + h - 2, 2, PROMPT + text, prompt_attr)
    if focused:
        safe_addstr(stdscr, y + h - 2, 4 + cursor_x, ' ', curses.A_REVERSE)


def status_text(state, now):
    """Copy progress and flash message for the status row."""
    parts = [
        f'Copying {os.path.basename(transfer.source)}: {transfer.percent}%'
        for transfer in state.transfers.values()
    ]
    if state.flash is not None:
        message, since = state.flash
        if now - since < FLASH_SECONDS:
            parts.append(message)
    if state.clipboard:
        parts.append(f'{state.clipboard.operation.value}: {len(state.clipboard.sources)} item(s)')
    return ' • '.join(parts)


def draw_rename_popup(stdscr, state, h, w):
    popup_w = min(RENAME_POPUP_WIDTH, max(10, w - 2))
    popup_h = 5
    x = max(0, (w - popup_w) // 2)
    y = max(0, (h - popup_h) // 2)
    for row in range(popup_h):
        safe_addstr(stdscr, y + row, x, ' ' * popup_w)
    draw_box(stdscr, y, x, popup_h, popup_w, color(C_BORDER_ACTIVE))
    safe_addstr(stdscr, y + 1, x + 2, 'Rename file', curses.A_BOLD)
    text, cursor_x = state.rename.input.visible(popup_w - 4)
    safe_addstr(stdscr, y + 3, x + 2, text, color(C_PROMPT))
    safe_addstr(stdscr, y + 3, x + 2 + cursor_x, ' ', curses.A_REVERSE)


def draw_screen(stdscr, state, now):
    """Render one full frame of the application state."""
    h, w = stdscr.getmaxyx()
    console_h = min(state.console_height, max(0, h - 2))
    top_console = state.console_mode is ConsoleMode.HIDDEN_TOP
    panel_y = console_h if top_console else 0
    panel_h = max(PANEL_CHROME_ROWS - 2, h - console_h - 2)
    panel_w = max(10, w // 2)

    for index, panel in enumerate(state.panels):
        active = index == state.active_panel and not state.console_focused
        draw_panel(stdscr, panel, panel_y, index * panel_w, panel_h,
                   panel_w if index == 0 else w - panel_w, active)

    console_y = 0 if top_console else panel_y + panel_h
    draw_console(stdscr, state, console_y, console_h, w)

    safe_addstr(stdscr, h - 2, 0, status_text(state, now), color(C_FLASH) | curses.A_BOLD)
    safe_addstr(stdscr, h - 1, 0, KEY_HINTS, color(C_STATUS) | curses.A_DIM)

    if state.rename.active:
        draw_rename_popup(stdscr, state, h, w)
