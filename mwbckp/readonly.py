# -*- coding: utf-8 -*-
import io
import re
from .constants import *


# The optional space is the one added when the message shares a line with
# the closing tag.
READ_ONLY_RE = re.compile(
    re.escape(READ_ONLY_MESSAGE) + r'( (?=\?>))?', re.IGNORECASE)

LINE_END_RE = re.compile(r'(\r\n|\n|\r)$')


def _read_lines(path):
    with io.open(path, encoding='utf-8', errors='surrogateescape',
                 newline='') as f:
        return f.read().splitlines(True)


def _write_lines(path, lines):
    with io.open(path, 'w', encoding='utf-8', errors='surrogateescape',
                 newline='') as f:
        f.write(''.join(lines))


def is_read_only(path):
    """Returns True if ``$wgReadOnly`` is set by us in ``path``."""
    return any(READ_ONLY_RE.search(line) for line in _read_lines(path))


def set_read_only(path, enabled):
    """Adds or removes the ``$wgReadOnly`` line in ``LocalSettings.php``.

    Calling it twice with the same ``enabled`` value leaves the file as it
    was after the first call. The file is only rewritten when the mode
    actually changes.

    :param path: Path to ``LocalSettings.php``.
    :param enabled: True to enter read-only mode, False to leave it.
    :return: True if the file was modified.
    """
    lines = _read_lines(path)
    present = any(READ_ONLY_RE.search(line) for line in lines)

    if enabled and not present:
        _write_lines(path, _insert_message(lines))
        return True

    if not enabled and present:
        _write_lines(path, _remove_message(lines))
        return True

    return False


def _insert_message(lines):
    """Inserts the message before the last ``?>`` or appends it.

    A closing tag alone on its line gets the message on a line of its own
    in front of it. A closing tag sharing its line with code gets the
    message right before the tag on that line.
    """
    newline = _newline_style(lines)

    for idx in range(len(lines) - 1, -1, -1):
        pos = lines[idx].rfind(PHP_CLOSING_TAG)
        if pos == -1:
            continue

        before, after = lines[idx][:pos], lines[idx][pos:]
        if not before.strip():
            return lines[:idx] + [READ_ONLY_MESSAGE + newline] + lines[idx:]

        line = before + READ_ONLY_MESSAGE + ' ' + after
        return lines[:idx] + [line] + lines[idx + 1:]

    if lines and not LINE_END_RE.search(lines[-1]):
        return lines + [newline + READ_ONLY_MESSAGE]

    return lines + [READ_ONLY_MESSAGE + newline]


def _remove_message(lines):
    result = list()
    for idx, line in enumerate(lines):
        if not READ_ONLY_RE.search(line):
            result.append(line)
            continue

        stripped = READ_ONLY_RE.sub('', line)
        # Lines holding nothing but the message go away completely.
        if stripped.strip():
            result.append(stripped)
        elif idx == len(lines) - 1 and result \
                and not LINE_END_RE.search(line):
            # Appended to a file without trailing newline.
            result[-1] = LINE_END_RE.sub('', result[-1])

    return result


def _newline_style(lines):
    for line in lines:
        if line.endswith('\r\n'):
            return '\r\n'
        if line.endswith('\n'):
            return '\n'

    return '\n'
