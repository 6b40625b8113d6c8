"""Main loop helpers for twinpane.

The loop is the single control thread: it renders, reads input, drains
job results and fires animation ticks, feeding each as an event to the
dispatcher.
"""

import curses

from .events import KeyEvent, ResizeEvent, TickEvent
from .key_router import read_key

IDLE_TIMEOUT_MS = 100


def draw_frame(app):
    """Render a full frame before reading input."""
    app.stdscr.erase()
    app.draw()
    app.stdscr.noutrefresh()
    curses.doupdate()


def next_input_event(app):
    """Wait for one key until the next tick is due; None on timeout."""
    app.stdscr.timeout(app.scheduler.timeout_ms(IDLE_TIMEOUT_MS))
    name, raw = read_key(app.stdscr)
    if name is None:
        return None
    if name == 'resize':
        curses.update_lines_cols()
        h, w = app.stdscr.getmaxyx()
        return ResizeEvent(width=w, height=h)
    return KeyEvent(key=name, raw=raw)


def pump_background(app):
    """Feed finished job messages and a due tick to the dispatcher."""
    for message in app.jobs.poll():
        app.handle_event(message)
    if app.scheduler.due():
        app.scheduler.consume()
        app.handle_event(TickEvent())


def run_app_loop(app):
    """Run main draw/input loop with terminal cleanup on exit."""
    try:
        while app.running:
            pump_background(app)
            draw_frame(app)
            event = next_input_event(app)
            if event is not None:
                app.handle_event(event)
            pump_background(app)
    finally:
        app.cleanup()
