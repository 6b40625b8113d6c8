"""
Background job engine for recursive copies and console commands.

Jobs run on worker threads and never touch application state. Each job
delivers its messages to a queue that the control thread drains with
``JobEngine.poll``.
"""
import itertools
import logging
import queue
import subprocess
import threading

from .commands import BUILTIN_CD, is_allowed, tokenize
from .errors import CommandRejected, CommandTimeout, EmptyInput, IOFailure
from .events import CommandJob, CommandResult, CopyDone, CopyJob, CopyProgress
from .file_operations import copy_tree, tree_size

LOGGER = logging.getLogger(__name__)

COMMAND_TIMEOUT_SECONDS = 30.0
MAX_OUTPUT_CHARS = 20000
TRUNCATION_MARKER = '\n...[output truncated]'
PROGRESS_STEP_PERCENT = 10


class CommandFailed(Exception):
    """Allowed command ran but could not complete successfully."""


def truncate_output(text, limit=MAX_OUTPUT_CHARS):
    if len(text) > limit:
        return text[:limit] + TRUNCATION_MARKER
    return text


def _decode(data):
    if data is None:
        return ''
    if isinstance(data, bytes):
        return data.decode('utf-8', errors='replace')
    return data


def run_command(command, working_dir, timeout=COMMAND_TIMEOUT_SECONDS,
                max_output=MAX_OUTPUT_CHARS, runner=subprocess.run):
    """Run one allow-listed command without a shell and capture its output."""
    parts = tokenize(command)
    if not parts:
        return CommandResult(command=command, error=EmptyInput())

    name, args = parts[0], parts[1:]
    if name == BUILTIN_CD:
        return CommandResult(
            command=command,
            error=CommandFailed('cd is a builtin and handled by the application'),
        )
    if not is_allowed(name):
        return CommandResult(command=command, output=str(CommandRejected(name)))

    LOGGER.debug('running %r in %s', parts, working_dir)
    try:
        completed = runner(
            [name, *args],
            cwd=working_dir,
            stdin=subprocess.DEVNULL,
            stdout=subprocess.PIPE,
            stderr=subprocess.STDOUT,
            timeout=timeout,
            check=False,
        )
    except subprocess.TimeoutExpired as exc:
        output = truncate_output(_decode(exc.output), max_output)
        return CommandResult(command=command, output=output,
                             error=CommandTimeout(command, timeout))
    except OSError as exc:
        return CommandResult(command=command, error=CommandFailed(str(exc)))

    output = truncate_output(_decode(completed.stdout), max_output)
    error = None
    if completed.returncode != 0:
        error = CommandFailed(f'exit status {completed.returncode}')
    return CommandResult(command=command, output=output, error=error)


def run_copy_job(job, job_id, emit=None):
    """Copy ``job.source`` to ``job.destination``; return the ``CopyDone``.

    ``emit`` receives a ``CopyProgress`` each time another
    ``PROGRESS_STEP_PERCENT`` of the job's bytes has been written.
    """
    progress = None
    if emit is not None:
        total = tree_size(job.source)
        state = {'copied': 0, 'reported': 0}

        def progress(written):
            state['copied'] += written
            if total <= 0:
                return
            percent = min(100, state['copied'] * 100 // total)
            step = percent - percent % PROGRESS_STEP_PERCENT
            if step > state['reported']:
                state['reported'] = step
                emit(CopyProgress(job_id=job_id, source=job.source, percent=step))

    try:
        copy_tree(job.source, job.destination, progress)
    except IOFailure as exc:
        LOGGER.debug('copy %s -> %s failed: %s', job.source, job.destination, exc)
        return CopyDone(job_id=job_id, source=job.source, destination=job.destination,
                        success=False, error=exc)
    return CopyDone(job_id=job_id, source=job.source, destination=job.destination,
                    success=True)


def _failure_message(job, job_id, exc):
    """Terminal message for a job whose worker raised unexpectedly."""
    if isinstance(job, CopyJob):
        return CopyDone(job_id=job_id, source=job.source, destination=job.destination,
                        success=False, error=exc)
    return CommandResult(command=job.command, error=exc)


class JobEngine:
    """Runs jobs on worker threads and queues their messages."""

    SHUTDOWN_JOIN_TIMEOUT = 5.0

    def __init__(self, command_timeout=COMMAND_TIMEOUT_SECONDS, max_output=MAX_OUTPUT_CHARS,
                 command_runner=subprocess.run):
        self.command_timeout = command_timeout
        self.max_output = max_output
        self._command_runner = command_runner
        self._messages = queue.Queue()
        self._ids = itertools.count(1)
        self._threads = {}
        self._lock = threading.Lock()

    @property
    def pending(self):
        """Number of jobs still running."""
        with self._lock:
            return len(self._threads)

    def submit(self, job):
        """Start ``job`` on a worker thread and return its id."""
        job_id = next(self._ids)
        if isinstance(job, CopyJob):
            work = lambda: run_copy_job(job, job_id, self._messages.put)
        elif isinstance(job, CommandJob):
            work = lambda: run_command(
                job.command, job.working_dir,
                timeout=self.command_timeout,
                max_output=self.max_output,
                runner=self._command_runner,
            )
        else:
            raise TypeError(f'unsupported job: {job!r}')

        def _runner():
            try:
                try:
                    message = work()
                except Exception as exc:
                    LOGGER.debug('job %d crashed: %r', job_id, job, exc_info=True)
                    message = _failure_message(job, job_id, exc)
                self._messages.put(message)
            finally:
                with self._lock:
                    self._threads.pop(job_id, None)

        thread = threading.Thread(target=_runner, name=f'twinpane-job-{job_id}', daemon=True)
        with self._lock:
            self._threads[job_id] = thread
        LOGGER.debug('submitting job %d: %r', job_id, job)
        thread.start()
        return job_id

    def poll(self):
        """Return all delivered messages in arrival order, without blocking."""
        messages = []
        while True:
            try:
                messages.append(self._messages.get_nowait())
            except queue.Empty:
                return messages

    def wait(self, timeout=None):
        """Block until no job is running (used at shutdown and by tests)."""
        with self._lock:
            threads = list(self._threads.values())
        for thread in threads:
            thread.join(timeout)
        return self.pending == 0

    def shutdown(self):
        if not self.wait(self.SHUTDOWN_JOIN_TIMEOUT):
            LOGGER.warning(
                'Background jobs did not finish within %.1fs during shutdown.',
                self.SHUTDOWN_JOIN_TIMEOUT,
            )

