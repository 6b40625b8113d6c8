"""
Abstract actions and their key bindings.
"""
from enum import Enum, IntEnum


class Action(str, Enum):
    """Normal-mode actions understood by the dispatcher."""

    QUIT = "quit"
    TOGGLE_SELECTION = "toggle_selection"
    COPY = "copy"
    MOVE = "move"
    PASTE = "paste"
    DELETE = "delete"
    RENAME = "rename"
    CLEAR_CLIPBOARD = "clear_clipboard"
    TOGGLE_HIDDEN = "toggle_hidden"
    FOCUS_LEFT = "focus_left"
    FOCUS_RIGHT = "focus_right"
    SWITCH_PANEL = "switch_panel"
    TOGGLE_CONSOLE_FOCUS = "toggle_console_focus"
    NAVIGATE_UP = "navigate_up"
    ENTER = "enter"
    CURSOR_UP = "cursor_up"
    CURSOR_DOWN = "cursor_down"
    GROW_CONSOLE = "grow_console"
    SHRINK_CONSOLE = "shrink_console"
    CYCLE_CONSOLE_MODE = "cycle_console_mode"


class ConsoleMode(IntEnum):
    """Console layouts cycled with ``ctrl+t``."""

    HIDDEN = 0
    COMPACT = 1
    EXPANDED = 2
    HIDDEN_TOP = 3

    def next(self):
        return ConsoleMode((self + 1) % len(ConsoleMode))


KEY_BINDINGS = {
    "q": Action.QUIT,
    "ctrl+c": Action.QUIT,
    " ": Action.TOGGLE_SELECTION,
    "c": Action.COPY,
    "m": Action.MOVE,
    "p": Action.PASTE,
    "D": Action.DELETE,
    "r": Action.RENAME,
    "x": Action.CLEAR_CLIPBOARD,
    ".": Action.TOGGLE_HIDDEN,
    "alt+left": Action.FOCUS_LEFT,
    "alt+right": Action.FOCUS_RIGHT,
    "tab": Action.SWITCH_PANEL,
    "alt+up": Action.TOGGLE_CONSOLE_FOCUS,
    "alt+down": Action.TOGGLE_CONSOLE_FOCUS,
    "left": Action.NAVIGATE_UP,
    "right": Action.ENTER,
    "up": Action.CURSOR_UP,
    "down": Action.CURSOR_DOWN,
    "ctrl+up": Action.GROW_CONSOLE,
    "ctrl+down": Action.SHRINK_CONSOLE,
    "ctrl+t": Action.CYCLE_CONSOLE_MODE,
}

# Still honoured while the console prompt has focus.
CONSOLE_GLOBAL_KEYS = frozenset({
    "ctrl+c", "ctrl+t", "ctrl+up", "ctrl+down", "alt+up", "alt+down",
})
CONSOLE_SUBMIT_KEY = "enter"


def action_for_key(key):
    return KEY_BINDINGS.get(key)
