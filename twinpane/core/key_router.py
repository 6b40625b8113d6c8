"""Keyboard normalization: curses key values to binding names."""

import curses

from ..utils import normalize_key_code

_CONTROL_NAMES = {
    3: 'ctrl+c',
    8: 'backspace',
    9: 'tab',
    10: 'enter',
    13: 'enter',
    17: 'ctrl+q',
    20: 'ctrl+t',
    27: 'esc',
    127: 'backspace',
}

# terminfo names for modified arrows (3 = Alt, 5 = Ctrl).
_KEYNAME_ALIASES = {
    'kUP5': 'ctrl+up',
    'kDN5': 'ctrl+down',
    'kLFT5': 'ctrl+left',
    'kRIT5': 'ctrl+right',
    'kUP3': 'alt+up',
    'kDN3': 'alt+down',
    'kLFT3': 'alt+left',
    'kRIT3': 'alt+right',
}

_SPECIAL_KEYS = (
    ('KEY_UP', 'up'),
    ('KEY_DOWN', 'down'),
    ('KEY_LEFT', 'left'),
    ('KEY_RIGHT', 'right'),
    ('KEY_HOME', 'home'),
    ('KEY_END', 'end'),
    ('KEY_BACKSPACE', 'backspace'),
    ('KEY_DC', 'delete'),
    ('KEY_ENTER', 'enter'),
    ('KEY_RESIZE', 'resize'),
)

# xterm CSI suffixes after ESC when keypad translation is unavailable.
_ESCAPE_ARROWS = {'A': 'up', 'B': 'down', 'C': 'right', 'D': 'left'}


def _special_key_names():
    names = {}
    for attr, name in _SPECIAL_KEYS:
        code = getattr(curses, attr, None)
        if code is not None:
            names[code] = name
    return names


def key_name(key):
    """Return the binding name for one key value, or None to ignore it."""
    code = normalize_key_code(key)
    if code is None:
        return None

    if isinstance(key, str):
        if code in _CONTROL_NAMES:
            return _CONTROL_NAMES[code]
        return key if key.isprintable() else None

    special = _special_key_names().get(code)
    if special:
        return special
    if code in _CONTROL_NAMES:
        return _CONTROL_NAMES[code]
    if 32 <= code < 127:
        return chr(code)

    keyname = getattr(curses, 'keyname', None)
    if keyname is None:
        return None
    try:
        raw = keyname(code)
    except (ValueError, curses.error):
        return None
    if isinstance(raw, bytes):
        raw = raw.decode('ascii', errors='replace')
    return _KEYNAME_ALIASES.get(raw)


def combine_escape(follow):
    """Merge an ESC with the key read right after it into an Alt chord."""
    if follow is None:
        return 'esc'
    name = key_name(follow)
    if name is None or name == 'esc':
        return 'esc'
    if name in ('up', 'down', 'left', 'right') or len(name) == 1:
        return f'alt+{name}'
    return name


def read_key(stdscr):
    """Read one key and return ``(name, raw)``; ``(None, None)`` on timeout."""
    try:
        raw = stdscr.get_wch()
    except curses.error:
        return None, None

    if normalize_key_code(raw) != 27:
        return key_name(raw), raw

    stdscr.nodelay(True)
    try:
        follow = stdscr.get_wch()
    except curses.error:
        follow = None
    finally:
        stdscr.nodelay(False)

    if follow == '[':
        stdscr.nodelay(True)
        try:
            seq = ''.join(_read_csi(stdscr))
        finally:
            stdscr.nodelay(False)
        return _decode_csi(seq), raw
    return combine_escape(follow), raw


def _read_csi(stdscr):
    while True:
        try:
            ch = stdscr.get_wch()
        except curses.error:
            return
        if not isinstance(ch, str):
            return
        yield ch
        if ch.isalpha() or ch == '~':
            return


def _decode_csi(seq):
    """Decode ``1;3A`` style modified arrows (3 = Alt, 5 = Ctrl)."""
    if not seq:
        return 'alt+['
    arrow = _ESCAPE_ARROWS.get(seq[-1])
    if arrow is None:
        return None
    modifier = seq[:-1].split(';')[-1] if ';' in seq else ''
    if modifier == '3':
        return f'alt+{arrow}'
    if modifier == '5':
        return f'ctrl+{arrow}'
    return arrow
