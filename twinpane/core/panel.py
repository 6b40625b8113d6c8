"""
Per-pane directory view state.
"""
import os
from dataclasses import dataclass, field
from typing import Callable, List, Optional, Set

from .errors import DirectoryListFailure
from .file_operations import list_directory

LEFT = 0
RIGHT = 1

# Screen rows not available to entries: two borders, status and key hints.
PANEL_CHROME_ROWS = 4


def list_entries(directory, show_hidden, lister=list_directory):
    """Return ``(names, error_message)`` for a panel listing."""
    try:
        names = lister(directory)
    except DirectoryListFailure as exc:
        message = f'Error: {exc.cause or exc}'
        return [message], message
    if not show_hidden:
        names = [name for name in names if not name.startswith('.')]
    return list(names), None


def visible_rows(screen_height, console_height):
    """Number of entry rows that fit in a panel."""
    return max(1, screen_height - console_height - PANEL_CHROME_ROWS)


@dataclass
class PanelState:
    """One directory view: listing, cursor, scroll and selection."""

    directory: str
    show_hidden: bool = False
    entries: List[str] = field(default_factory=list)
    cursor: int = 0
    scroll: int = 0
    selected: Set[str] = field(default_factory=set)
    listing_error: Optional[str] = None
    lister: Callable = field(default=list_directory, repr=False, compare=False)

    @classmethod
    def open(cls, directory, show_hidden=False, lister=list_directory):
        panel = cls(directory=directory, show_hidden=show_hidden, lister=lister)
        panel.refresh()
        return panel

    def refresh(self):
        """Re-list the directory; clears selection and resets the cursor."""
        self.entries, self.listing_error = list_entries(
            self.directory, self.show_hidden, self.lister
        )
        self.selected.clear()
        self.cursor = 0
        self.scroll = 0

    def change_directory(self, path):
        self.directory = path
        self.refresh()

    def toggle_hidden(self):
        self.show_hidden = not self.show_hidden
        self.refresh()

    def highlighted(self):
        """Highlighted entry name, or None for an empty or failed listing."""
        if self.listing_error is not None or not self.entries:
            return None
        return self.entries[self.cursor]

    def highlighted_path(self):
        name = self.highlighted()
        if name is None:
            return None
        return os.path.join(self.directory, name)

    def target_paths(self):
        """Selection in listing order, else the highlighted entry."""
        if self.selected:
            names = [name for name in self.entries if name in self.selected]
        else:
            name = self.highlighted()
            names = [name] if name is not None else []
        return [os.path.join(self.directory, name) for name in names]

    def toggle_selection(self):
        name = self.highlighted()
        if name is None:
            return
        if name in self.selected:
            self.selected.discard(name)
        else:
            self.selected.add(name)

    def move_cursor(self, delta, rows=1):
        if not self.entries:
            self.cursor = 0
            self.scroll = 0
            return
        self.cursor = max(0, min(len(self.entries) - 1, self.cursor + delta))
        if self.cursor < self.scroll:
            self.scroll = self.cursor
        elif self.cursor >= self.scroll + max(1, rows):
            self.scroll = self.cursor - max(1, rows) + 1

    def contains(self, path):
        """Return True when ``path`` is this panel's directory or below it."""
        return is_within(path, self.directory)


def is_within(path, directory):
    """Return True when ``path`` equals ``directory`` or lies beneath it."""
    path = os.path.normpath(os.path.abspath(path))
    directory = os.path.normpath(os.path.abspath(directory))
    try:
        return os.path.commonpath([path, directory]) == directory
    except ValueError:
        return False
