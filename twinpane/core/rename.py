"""
Modal rename sub-mode.
"""
import os
from dataclasses import dataclass
from enum import Enum

from ..ui.text_input import TextInput

CONFIRM_KEY = 'enter'
CANCEL_KEY = 'esc'


class RenameOutcome(str, Enum):
    CONFIRM = 'confirm'
    CANCEL = 'cancel'


@dataclass(frozen=True)
class RenameState:
    target_path: str
    panel_id: int


class RenameMode:
    """Owns input while a rename is pending; ends in confirm or cancel."""

    def __init__(self, text_input=None):
        self.input = text_input or TextInput()
        self.state = None

    @property
    def active(self):
        return self.state is not None

    @property
    def pending_name(self):
        return self.input.value

    def start(self, target_path, panel_id):
        self.state = RenameState(target_path=target_path, panel_id=panel_id)
        self.input.set_value(os.path.basename(target_path))

    def handle_key(self, key):
        """Return the terminal outcome for ``key``, or None after editing."""
        if key == CONFIRM_KEY:
            return RenameOutcome.CONFIRM
        if key == CANCEL_KEY:
            return RenameOutcome.CANCEL
        self.input.handle_key(key)
        return None

    def destination(self):
        """Path the pending name renames to, inside the same parent."""
        return os.path.join(os.path.dirname(self.state.target_path), self.pending_name)

    def finish(self):
        self.state = None
        self.input.reset()
