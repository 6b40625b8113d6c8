"""
Event dispatcher: the only code that mutates ``AppState``.

``Dispatcher.dispatch`` consumes one event, updates the state in place and
returns the effects (background jobs, animation ticks) the shell must start.
It never blocks on a background job; job outcomes come back later as
ordinary events.
"""
import logging
import os
import time

from .actions import (
    CONSOLE_GLOBAL_KEYS,
    CONSOLE_SUBMIT_KEY,
    Action,
    ConsoleMode,
    action_for_key,
)
from .clipboard import Operation
from .commands import BUILTIN_CD, is_allowed, resolve_cd_target, tokenize
from .errors import CommandRejected, IOFailure
from .events import (
    ArmTick,
    CommandJob,
    CommandResult,
    CopyDone,
    CopyJob,
    CopyProgress,
    KeyEvent,
    ResizeEvent,
    TickEvent,
)
from .file_operations import copy_tree, is_directory, remove_tree, rename_path
from .panel import LEFT, RIGHT, is_within
from .rename import RenameOutcome
from .state import Transfer

LOGGER = logging.getLogger(__name__)

# Rows kept for the panels when the console is grown by hand.
MIN_PANEL_ROWS = 3
HIDDEN_TOP_HEIGHT = 1


def _default_home():
    return os.environ.get('HOME', '')


def _describe(exc):
    return str(exc) or exc.__class__.__name__


class Dispatcher:
    """Interprets events against the application state."""

    def __init__(self, home=_default_home, clock=time.monotonic,
                 copier=copy_tree, remover=remove_tree, renamer=rename_path):
        self._home = home
        self._clock = clock
        self._copy = copier
        self._remove = remover
        self._rename = renamer
        self._actions = {
            Action.QUIT: self._quit,
            Action.TOGGLE_SELECTION: self._toggle_selection,
            Action.COPY: self._copy_to_clipboard,
            Action.MOVE: self._move_to_clipboard,
            Action.PASTE: self._paste_action,
            Action.DELETE: self._delete,
            Action.RENAME: self._start_rename,
            Action.CLEAR_CLIPBOARD: self._clear_clipboard,
            Action.TOGGLE_HIDDEN: self._toggle_hidden,
            Action.FOCUS_LEFT: lambda state, effects: self._focus_panel(state, LEFT),
            Action.FOCUS_RIGHT: lambda state, effects: self._focus_panel(state, RIGHT),
            Action.SWITCH_PANEL: self._switch_panel,
            Action.TOGGLE_CONSOLE_FOCUS: self._toggle_console_focus,
            Action.NAVIGATE_UP: self._navigate_up,
            Action.ENTER: self._enter,
            Action.CURSOR_UP: lambda state, effects: self._move_cursor(state, -1),
            Action.CURSOR_DOWN: lambda state, effects: self._move_cursor(state, 1),
            Action.GROW_CONSOLE: self._grow_console,
            Action.SHRINK_CONSOLE: self._shrink_console,
            Action.CYCLE_CONSOLE_MODE: self._cycle_console_mode,
        }

    def dispatch(self, state, event):
        """Apply ``event`` to ``state``; return ``(state, effects)``."""
        effects = []
        if isinstance(event, KeyEvent):
            self._handle_key(state, event.key, effects)
        elif isinstance(event, TickEvent):
            if state.animator.tick():
                effects.append(ArmTick())
        elif isinstance(event, ResizeEvent):
            self._handle_resize(state, event, effects)
        elif isinstance(event, CopyProgress):
            state.transfers[event.job_id] = Transfer(event.source, event.percent)
        elif isinstance(event, CopyDone):
            self._handle_copy_done(state, event)
        elif isinstance(event, CommandResult):
            self._handle_command_result(state, event)
        else:
            LOGGER.debug('Ignoring unknown event: %r', event)
        return state, effects

    # ------------------------------------------------------------------
    # Input routing
    # ------------------------------------------------------------------

    def _handle_key(self, state, key, effects):
        if state.rename.active:
            self._handle_rename_key(state, key)
            return

        if state.console_focused and key not in CONSOLE_GLOBAL_KEYS:
            if key == CONSOLE_SUBMIT_KEY:
                self._submit_command(state, effects)
            else:
                state.console_input.handle_key(key)
            return

        action = action_for_key(key)
        if action is None:
            return
        self._actions[action](state, effects)

    def _handle_rename_key(self, state, key):
        outcome = state.rename.handle_key(key)
        if outcome is None:
            return
        if outcome is RenameOutcome.CONFIRM:
            self._apply_rename(state)
        state.rename.finish()

    # ------------------------------------------------------------------
    # Selection and clipboard
    # ------------------------------------------------------------------

    def _quit(self, state, effects):
        state.running = False

    def _toggle_selection(self, state, effects):
        state.active.toggle_selection()

    def _fill_clipboard(self, state, operation, message):
        paths = state.active.target_paths()
        if not paths:
            state.log('Nothing selected.')
            return
        state.clipboard.fill(paths, operation)
        state.log(message)
        state.clear_selections()

    def _copy_to_clipboard(self, state, effects):
        self._fill_clipboard(state, Operation.COPY, 'Copied to clipboard.')

    def _move_to_clipboard(self, state, effects):
        self._fill_clipboard(state, Operation.MOVE, 'Ready to move.')

    def _clear_clipboard(self, state, effects):
        state.clipboard.clear()
        state.log('Clipboard cleared.')
        state.clear_selections()

    def _paste_action(self, state, effects):
        if not state.clipboard:
            state.log('Clipboard is empty.')
            return
        self._paste(state, effects, asynchronous=True)

    @staticmethod
    def _paste_conflict(source, destination):
        if os.path.lexists(destination):
            if os.path.realpath(source) == os.path.realpath(destination):
                return 'source and destination are the same'
            return f'destination exists: {destination}'
        if is_directory(source) and is_within(destination, source):
            return 'cannot paste a directory into itself'
        return None

    def _paste(self, state, effects, asynchronous):
        """Copy or move every clipboard entry into the active directory.

        Asynchronous copies become ``CopyJob`` effects whose outcome arrives
        as ``CopyDone``; moves and synchronous copies complete here.
        """
        dest_dir = state.active.directory
        sources, operation = state.clipboard.drain()
        changed = []
        for source in sources:
            destination = os.path.join(dest_dir, os.path.basename(source.rstrip(os.sep)))
            verb = 'moving' if operation is Operation.MOVE else 'copying'
            conflict = self._paste_conflict(source, destination)
            if conflict:
                state.log(f'Error {verb}: {conflict}')
                continue

            if operation is Operation.MOVE:
                try:
                    self._rename(source, destination)
                except IOFailure as exc:
                    state.log(f'Error moving: {_describe(exc)}')
                    continue
                state.log(f'Moved to: {destination}')
                changed.extend((os.path.dirname(source), dest_dir))
            elif asynchronous:
                effects.append(CopyJob(source, destination))
            else:
                try:
                    self._copy(source, destination)
                except IOFailure as exc:
                    state.log(f'Error copying: {_describe(exc)}')
                    continue
                state.log(f'Copied to: {destination}')
                changed.append(dest_dir)

        state.clear_selections()
        self._refresh_affected(state, changed)

    @staticmethod
    def _refresh_affected(state, changed_dirs):
        """Refresh panels showing a changed directory or one of its ancestors."""
        for panel in state.panels:
            if any(panel.contains(changed) for changed in changed_dirs):
                panel.refresh()

    # ------------------------------------------------------------------
    # Filesystem actions
    # ------------------------------------------------------------------

    def _delete(self, state, effects):
        targets = state.active.target_paths()
        if not targets:
            state.log('Nothing to delete.')
            return
        for target in targets:
            try:
                self._remove(target)
            except IOFailure as exc:
                state.log(f'Error deleting {target}: {_describe(exc)}')
                continue
            state.log(f'Deleted: {os.path.basename(target)}')
        for panel in state.panels:
            panel.refresh()

    def _start_rename(self, state, effects):
        target = state.active.highlighted_path()
        if target is None:
            state.log('Nothing to rename.')
            return
        state.rename.start(target, state.active_panel)

    def _apply_rename(self, state):
        rename = state.rename
        new_name = rename.pending_name
        if not new_name or os.sep in new_name or new_name in ('.', '..'):
            state.log(f'Error renaming: invalid name {new_name!r}')
            return
        old_path = rename.state.target_path
        new_path = rename.destination()
        try:
            self._rename(old_path, new_path)
        except IOFailure as exc:
            state.log(f'Error renaming: {_describe(exc)}')
            return
        state.log(f'Renamed to: {new_name}')
        owner = state.panels[rename.state.panel_id]
        owner.refresh()
        for panel in state.panels:
            if panel is not owner and panel.contains(os.path.dirname(old_path)):
                panel.refresh()
        state.clear_selections()

    def _toggle_hidden(self, state, effects):
        state.active.toggle_hidden()

    # ------------------------------------------------------------------
    # Navigation and focus
    # ------------------------------------------------------------------

    def _focus_panel(self, state, panel_id):
        state.active_panel = panel_id

    def _switch_panel(self, state, effects):
        state.active_panel = RIGHT if state.active_panel == LEFT else LEFT

    def _toggle_console_focus(self, state, effects):
        state.console_focused = not state.console_focused

    def _change_directory(self, state, path):
        state.active.change_directory(path)
        state.clear_selections()

    def _navigate_up(self, state, effects):
        panel = state.active
        parent = os.path.dirname(panel.directory)
        if parent != panel.directory:
            self._change_directory(state, parent)

    def _enter(self, state, effects):
        path = state.active.highlighted_path()
        if path is None:
            return
        if is_directory(path):
            self._change_directory(state, path)
        elif state.clipboard:
            self._paste(state, effects, asynchronous=False)
        else:
            state.log(f'Run: {path}')

    def _move_cursor(self, state, delta):
        state.active.move_cursor(delta, state.visible_rows())

    # ------------------------------------------------------------------
    # Console panel
    # ------------------------------------------------------------------

    def _set_console_target(self, state, target, effects):
        if state.animator.set_target(target):
            effects.append(ArmTick())

    def _grow_console(self, state, effects):
        limit = max(0, state.height - MIN_PANEL_ROWS)
        self._set_console_target(state, min(state.animator.target + 1, limit), effects)

    def _shrink_console(self, state, effects):
        self._set_console_target(state, max(0, state.animator.target - 1), effects)

    def _mode_height(self, state, mode):
        if mode is ConsoleMode.HIDDEN:
            return 0
        if mode is ConsoleMode.COMPACT:
            return state.compact_height
        if mode is ConsoleMode.EXPANDED:
            return state.height // 2
        return HIDDEN_TOP_HEIGHT

    def _cycle_console_mode(self, state, effects):
        state.console_mode = state.console_mode.next()
        self._set_console_target(state, self._mode_height(state, state.console_mode), effects)

    def _handle_resize(self, state, event, effects):
        state.width, state.height = event.width, event.height
        target = min(state.animator.target, state.height)
        if state.console_mode is ConsoleMode.EXPANDED:
            target = state.height // 2
        if target != state.animator.target:
            self._set_console_target(state, target, effects)

    def _submit_command(self, state, effects):
        line = state.console_input.value.strip()
        state.console_input.reset()
        parts = tokenize(line)
        if not parts:
            return

        name = parts[0]
        if name == BUILTIN_CD:
            self._change_directory_builtin(state, parts[1:])
            return
        if not is_allowed(name):
            state.log(str(CommandRejected(name)))
            return

        state.log(f'$ {line}')
        effects.append(CommandJob(line, state.active.directory))

    def _change_directory_builtin(self, state, args):
        target = resolve_cd_target(args, state.active.directory, self._home())
        if target and is_directory(target):
            self._change_directory(state, target)
            state.log(f'--> cd {target}')
        else:
            state.log(f'cd: no such directory: {target}')

    # ------------------------------------------------------------------
    # Job results
    # ------------------------------------------------------------------

    def _handle_copy_done(self, state, done):
        state.transfers.pop(done.job_id, None)
        if done.success:
            state.log(f'Copied {done.path} successfully!')
            self._refresh_affected(state, [os.path.dirname(done.destination)])
            state.flash = (f'Copied: {os.path.basename(done.path)}', self._clock())
        else:
            state.log(f'Failed to copy {done.path}: {_describe(done.error)}')
            state.flash = (f'Error copying {os.path.basename(done.path)}', self._clock())

    def _handle_command_result(self, state, result):
        if result.error is not None:
            state.log(f'Error: {_describe(result.error)}')
        if result.output:
            state.console_log.extend(result.output.rstrip('\n').split('\n'))
