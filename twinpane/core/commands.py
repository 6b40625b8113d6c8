"""
Console command policy: tokenizing, the allow-list and the ``cd`` builtin.
"""
import os

ALLOWED_COMMANDS = frozenset({
    'ls', 'pwd', 'cat', 'echo', 'head', 'tail', 'stat', 'date',
})
BUILTIN_CD = 'cd'


def tokenize(line):
    """Split a console line on whitespace (no quoting or escapes)."""
    return (line or '').split()


def is_allowed(name):
    """Case-sensitive allow-list check."""
    return name in ALLOWED_COMMANDS


def resolve_cd_target(args, base_dir, home):
    """Return the absolute directory ``cd args`` refers to.

    No argument and ``~`` both mean ``home``; relative paths are joined to
    ``base_dir``.
    """
    if not args or args[0] == '~':
        return home or ''
    target = args[0]
    if not os.path.isabs(target):
        target = os.path.join(base_dir, target)
    return os.path.normpath(target)
