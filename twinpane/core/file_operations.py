"""
Filesystem primitives used by panels, the dispatcher and copy jobs.
"""
import os
import shutil
import stat

from .errors import DirectoryListFailure, IOFailure

COPY_BUFFER_BYTES = 64 * 1024
PARENT_DIR_MODE = 0o755


def list_directory(path):
    """Return sorted entry names of ``path``."""
    try:
        return sorted(os.listdir(path), key=str.lower)
    except OSError as exc:
        raise DirectoryListFailure(path, exc) from exc


def is_directory(path):
    """Return True when ``path`` is an existing directory (follows links)."""
    try:
        return stat.S_ISDIR(os.stat(path).st_mode)
    except OSError:
        return False


def tree_size(path):
    """Return total bytes of regular files under ``path``."""
    try:
        info = os.lstat(path)
    except OSError:
        return 0
    if not stat.S_ISDIR(info.st_mode):
        return info.st_size
    total = 0
    for dirpath, _dirnames, filenames in os.walk(path):
        for name in filenames:
            try:
                total += os.lstat(os.path.join(dirpath, name)).st_size
            except OSError:
                continue
    return total


def _copy_file(src, dst, mode, progress):
    parent = os.path.dirname(dst)
    if parent:
        try:
            os.makedirs(parent, mode=PARENT_DIR_MODE, exist_ok=True)
        except OSError as exc:
            raise IOFailure(dst, 'mkdir parent', exc) from exc

    try:
        source = open(src, 'rb')
    except OSError as exc:
        raise IOFailure(src, 'open', exc) from exc
    with source:
        try:
            destination = open(dst, 'wb')
        except OSError as exc:
            raise IOFailure(dst, 'create', exc) from exc
        with destination:
            while True:
                try:
                    chunk = source.read(COPY_BUFFER_BYTES)
                    if not chunk:
                        break
                    destination.write(chunk)
                except OSError as exc:
                    raise IOFailure(src, f'copy -> {dst}', exc) from exc
                if progress is not None:
                    progress(len(chunk))

    try:
        os.chmod(dst, mode)
    except OSError as exc:
        raise IOFailure(dst, 'chmod', exc) from exc


def copy_tree(src, dst, progress=None):
    """Copy a file or a directory tree, preserving permission bits.

    ``progress`` is called with the number of bytes written after every
    chunk. Any failure aborts the whole copy with an ``IOFailure`` naming the
    failing path.
    """
    try:
        info = os.lstat(src)
    except OSError as exc:
        raise IOFailure(src, 'stat', exc) from exc
    mode = stat.S_IMODE(info.st_mode)

    if not stat.S_ISDIR(info.st_mode):
        _copy_file(src, dst, mode, progress)
        return

    try:
        os.makedirs(dst, mode=mode | stat.S_IRWXU, exist_ok=True)
    except OSError as exc:
        raise IOFailure(dst, 'mkdir', exc) from exc
    try:
        children = sorted(os.listdir(src))
    except OSError as exc:
        raise IOFailure(src, 'readdir', exc) from exc
    for name in children:
        copy_tree(os.path.join(src, name), os.path.join(dst, name), progress)
    # makedirs honours the umask; restore the exact bits once children exist.
    try:
        os.chmod(dst, mode)
    except OSError as exc:
        raise IOFailure(dst, 'chmod', exc) from exc


def remove_tree(path):
    """Remove a file, link or directory tree."""
    try:
        if os.path.isdir(path) and not os.path.islink(path):
            shutil.rmtree(path)
        else:
            os.remove(path)
    except FileNotFoundError:
        return
    except OSError as exc:
        raise IOFailure(getattr(exc, 'filename', None) or path, 'remove', exc) from exc


def rename_path(old_path, new_path):
    """Rename ``old_path`` to ``new_path`` without overwriting."""
    if os.path.lexists(new_path) and os.path.realpath(new_path) != os.path.realpath(old_path):
        raise IOFailure(new_path, 'rename', FileExistsError('destination exists'))
    try:
        os.rename(old_path, new_path)
    except OSError as exc:
        raise IOFailure(old_path, 'rename', exc) from exc
