"""
Main twinpane application class.
"""
import logging
import time

from ..ui.rendering import draw_screen, init_colors
from .animator import TickScheduler
from .bootstrap import configure_terminal, resolve_start_directory
from .clipboard import Clipboard
from .config import load_config
from .dispatcher import Dispatcher
from .event_loop import run_app_loop
from .events import ArmTick, CommandJob, CopyJob, ResizeEvent
from .jobs import JobEngine
from .state import AppState

LOGGER = logging.getLogger(__name__)


class Twinpane:
    """Wires the state, dispatcher, job engine and scheduler to a curses screen."""

    def __init__(self, stdscr, config=None, start_dir=None, dispatcher=None, jobs=None,
                 clock=time.monotonic):
        self.stdscr = stdscr
        self.config = config or load_config()
        self.clock = clock
        directory = start_dir or resolve_start_directory()

        self.state = AppState.initial(
            directory,
            show_hidden=self.config.show_hidden,
            compact_height=self.config.compact_height,
            clipboard=Clipboard(sync_system=self.config.sync_system_clipboard),
        )
        self.dispatcher = dispatcher or Dispatcher(clock=clock)
        self.jobs = jobs or JobEngine(
            command_timeout=self.config.command_timeout,
            max_output=self.config.max_output_chars,
        )
        self.scheduler = TickScheduler(self.config.tick_ms / 1000.0, clock=clock)

        if stdscr is not None:
            configure_terminal(stdscr)
            init_colors()
            h, w = stdscr.getmaxyx()
            self.handle_event(ResizeEvent(width=w, height=h))

    @property
    def running(self):
        return self.state.running

    def handle_event(self, event):
        """Dispatch one event and start the effects it returns."""
        self.state, effects = self.dispatcher.dispatch(self.state, event)
        for effect in effects:
            self.apply_effect(effect)

    def apply_effect(self, effect):
        if isinstance(effect, ArmTick):
            self.scheduler.arm(self.clock())
        elif isinstance(effect, (CopyJob, CommandJob)):
            self.jobs.submit(effect)
        else:
            LOGGER.debug('Ignoring unknown effect: %r', effect)

    def draw(self):
        draw_screen(self.stdscr, self.state, self.clock())

    def run(self):
        run_app_loop(self)

    def cleanup(self):
        """Let in-flight jobs finish before the terminal is restored."""
        self.jobs.shutdown()
