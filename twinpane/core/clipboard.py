"""
Clipboard of pending source paths for paste.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass, field
from enum import Enum

import pyperclip

LOGGER = logging.getLogger(__name__)


class Operation(str, Enum):
    """What a paste does with the clipboard sources."""

    NONE = "none"
    COPY = "copy"
    MOVE = "move"


@dataclass
class Clipboard:
    """Ordered absolute source paths plus the pending operation."""

    sources: list[str] = field(default_factory=list)
    operation: Operation = Operation.NONE
    sync_system: bool = False

    def __bool__(self) -> bool:
        return bool(self.sources)

    def fill(self, paths, operation: Operation) -> None:
        """Replace the clipboard contents."""
        self.sources = list(paths)
        self.operation = operation if self.sources else Operation.NONE
        if self.sync_system and self.sources:
            _system_copy("\n".join(self.sources))

    def clear(self) -> None:
        self.sources = []
        self.operation = Operation.NONE

    def drain(self) -> tuple[list[str], Operation]:
        """Return sources and operation, leaving the clipboard empty."""
        sources, operation = self.sources, self.operation
        self.clear()
        return sources, operation


def _system_copy(text: str) -> bool:
    """Mirror text into the system clipboard; False when no backend works."""
    try:
        pyperclip.copy(text)
    except pyperclip.PyperclipException:
        LOGGER.debug("system clipboard unavailable", exc_info=True)
        return False
    return True
