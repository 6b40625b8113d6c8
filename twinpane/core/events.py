"""
Typed messages exchanged with the dispatcher.

Inbound events are consumed one at a time by ``Dispatcher.dispatch``.
Effects are returned by it and executed by the application shell.
"""
from dataclasses import dataclass
from typing import Any, Optional


# Inbound events

@dataclass(frozen=True)
class KeyEvent:
    """Normalized key press (see ``key_router.key_name``)."""

    key: str
    raw: Any = None


@dataclass(frozen=True)
class ResizeEvent:
    width: int
    height: int


@dataclass(frozen=True)
class TickEvent:
    """Animation scheduling tick."""


# Job results

@dataclass(frozen=True)
class CopyProgress:
    """Intermediate progress of an asynchronous copy."""

    job_id: int
    source: str
    percent: int


@dataclass(frozen=True)
class CopyDone:
    """Terminal outcome of an asynchronous copy."""

    job_id: int
    source: str
    destination: str
    success: bool
    error: Optional[BaseException] = None

    @property
    def path(self):
        return self.destination if self.success else self.source


@dataclass(frozen=True)
class CommandResult:
    """Terminal outcome of a console command job."""

    command: str
    output: str = ''
    error: Optional[BaseException] = None


# Effects

@dataclass(frozen=True)
class CopyJob:
    source: str
    destination: str


@dataclass(frozen=True)
class CommandJob:
    command: str
    working_dir: str


@dataclass(frozen=True)
class ArmTick:
    """Request one animation tick from the scheduler."""
