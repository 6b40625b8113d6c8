"""
Application state owned by the control thread.
"""
from dataclasses import dataclass, field
from typing import Dict, List, Optional, Tuple

from .actions import ConsoleMode
from .animator import Animator
from .clipboard import Clipboard
from .panel import LEFT, RIGHT, PanelState, visible_rows
from .rename import RenameMode
from ..ui.text_input import TextInput

DEFAULT_COMPACT_HEIGHT = 6
FLASH_SECONDS = 3.0
WELCOME_LINES = (
    'Welcome to twinpane.',
    'Alt+Up/Down focuses this console; type a command and press Enter.',
)


@dataclass
class Transfer:
    """Status of an asynchronous copy that reported progress."""

    source: str
    percent: int = 0


@dataclass
class AppState:
    """Everything the dispatcher mutates."""

    panels: List[PanelState]
    active_panel: int = LEFT
    clipboard: Clipboard = field(default_factory=Clipboard)
    console_log: List[str] = field(default_factory=lambda: list(WELCOME_LINES))
    console_input: TextInput = field(default_factory=lambda: TextInput(placeholder='$ '))
    console_mode: ConsoleMode = ConsoleMode.COMPACT
    console_focused: bool = False
    compact_height: int = DEFAULT_COMPACT_HEIGHT
    animator: Animator = field(default_factory=lambda: Animator(DEFAULT_COMPACT_HEIGHT))
    rename: RenameMode = field(default_factory=RenameMode)
    width: int = 0
    height: int = 0
    transfers: Dict[int, Transfer] = field(default_factory=dict)
    flash: Optional[Tuple[str, float]] = None
    running: bool = True

    @classmethod
    def initial(cls, directory, show_hidden=False, compact_height=DEFAULT_COMPACT_HEIGHT,
                clipboard=None, lister=None):
        """Two panels on ``directory`` with a compact console."""
        kwargs = {} if lister is None else {'lister': lister}
        return cls(
            panels=[
                PanelState.open(directory, show_hidden, **kwargs),
                PanelState.open(directory, show_hidden, **kwargs),
            ],
            clipboard=clipboard if clipboard is not None else Clipboard(),
            compact_height=compact_height,
            animator=Animator(compact_height),
        )

    @property
    def active(self):
        return self.panels[self.active_panel]

    @property
    def left(self):
        return self.panels[LEFT]

    @property
    def right(self):
        return self.panels[RIGHT]

    @property
    def console_height(self):
        return self.animator.current

    def visible_rows(self):
        return visible_rows(self.height, self.console_height)

    def log(self, line):
        self.console_log.append(line)

    def clear_selections(self):
        for panel in self.panels:
            panel.selected.clear()
