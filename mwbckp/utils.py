# -*- coding: utf-8 -*-
import click
import logging
import os
import shutil
import subprocess
from .constants import *
from .errors import BackupLocked


logger = logging.getLogger('mwbckp')
logger.addHandler(logging.NullHandler())


def echo(msg, fg=None, err=False, level=logging.INFO):
    """Prints a status line and duplicates it into the log file.

    :param msg: The message.
    :param fg: Optional click color for the terminal output.
    :param err: Print to stderr instead of stdout.
    :param level: Level the line is logged with.
    """
    click.echo(click.style(msg, fg=fg) if fg else msg, err=err)
    logger.log(level, msg)


def warn(msg):
    echo(msg, fg='yellow', err=True, level=logging.WARNING)


def debug(msg):
    if logger.isEnabledFor(logging.DEBUG):
        echo(msg, fg='blue', level=logging.DEBUG)


def setup_logging(backup_dir, debug=False):
    """Attaches a file handler writing to ``LOG_FILENAME`` in ``backup_dir``.

    Earlier file handlers are dropped so repeated runs in one process do
    not write lines twice.
    """
    teardown_logging()

    handler = logging.FileHandler(os.path.join(backup_dir, LOG_FILENAME))
    handler.setFormatter(
        logging.Formatter('%(asctime)s %(levelname)s %(message)s'))
    logger.addHandler(handler)
    logger.setLevel(logging.DEBUG if debug else logging.INFO)

    return handler.baseFilename


def teardown_logging():
    for handler in list(logger.handlers):
        if isinstance(handler, logging.FileHandler):
            logger.removeHandler(handler)
            handler.close()


def format_cmd(cmd):
    """Returns ``cmd`` as a string with passwords masked."""
    return ' '.join('--password=***' if part.startswith('--password=')
                    else part for part in cmd)


def run(cmd, cwd=None):
    """Runs ``cmd`` and returns its exit status."""
    debug('Running {} in {}'.format(format_cmd(cmd), cwd or os.getcwd()))
    return subprocess.call(cmd, cwd=cwd)


def pipe_to_file(commands, target_path, cwd=None):
    """Runs ``commands`` as a shell-like pipeline writing into a file.

    The stdout of each command is connected to the stdin of the next, the
    last one writes to ``target_path``.

    :param commands: List of argument lists.
    :param target_path: File receiving the output of the last command.
    :param cwd: Working directory for all commands.
    :return: List of exit statuses in the order of ``commands``.
    """
    debug('Running {} > {} in {}'.format(
        ' | '.join(format_cmd(cmd) for cmd in commands),
        target_path,
        cwd or os.getcwd()))

    procs = list()
    with open(target_path, 'wb') as out:
        stdin = None
        try:
            for idx, cmd in enumerate(commands):
                last = idx == len(commands) - 1
                proc = subprocess.Popen(
                    cmd, cwd=cwd, stdin=stdin,
                    stdout=out if last else subprocess.PIPE)
                # Upstream gets SIGPIPE if the downstream process exits.
                if stdin is not None:
                    stdin.close()
                stdin = proc.stdout
                procs.append(proc)
        except OSError:
            for proc in procs:
                proc.kill()
                proc.wait()
            raise

        return [proc.wait() for proc in procs]


def nice(cmd):
    """Prefixes ``cmd`` with ``nice -n 19`` where nice is available."""
    if shutil.which('nice'):
        return ['nice', '-n', '19'] + cmd
    return cmd


def find_php(php=None):
    """Returns the PHP binary to run maintenance scripts with."""
    if php:
        return php

    for candidate in PHP_CANDIDATES:
        if os.path.isfile(candidate) and os.access(candidate, os.X_OK):
            return candidate

    return 'php'


def acquire_lock(lock_path):
    """Creates ``lock_path`` exclusively.

    :raises: BackupLocked if the file already exists.
    """
    try:
        fd = os.open(lock_path, os.O_CREAT | os.O_EXCL | os.O_WRONLY)
    except FileExistsError:
        raise BackupLocked(lock_path)

    with os.fdopen(fd, 'w') as f:
        f.write('{}\n'.format(os.getpid()))


def release_lock(lock_path):
    if os.path.exists(lock_path):
        os.remove(lock_path)


def remove_file(path):
    """Removes ``path`` if it exists, e.g. a partially written artifact."""
    if os.path.exists(path):
        os.remove(path)
