"""
Error taxonomy shared by file operations, jobs and the dispatcher.
"""


class TwinpaneError(Exception):
    """Base class for recoverable twinpane errors."""


class IOFailure(TwinpaneError):
    """Filesystem step failed; always carries the offending path."""

    def __init__(self, path, step, cause=None):
        self.path = path
        self.step = step
        self.cause = cause
        detail = getattr(cause, 'strerror', None) or str(cause or 'failed')
        super().__init__(f'{step} {path}: {detail}')


class DirectoryListFailure(IOFailure):
    """Directory listing could not be read."""

    def __init__(self, path, cause=None):
        super().__init__(path, 'readdir', cause)


class CommandRejected(TwinpaneError):
    """First token of a console command is not on the allow-list."""

    def __init__(self, name):
        self.name = name
        super().__init__(f'command not allowed: {name}')


class CommandTimeout(TwinpaneError):
    """External command exceeded its wall-clock budget."""

    def __init__(self, command, seconds):
        self.command = command
        self.seconds = seconds
        super().__init__('command timed out')


class EmptyInput(TwinpaneError):
    """Blank console command."""

    def __init__(self):
        super().__init__('empty command')
