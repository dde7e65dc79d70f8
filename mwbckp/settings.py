# -*- coding: utf-8 -*-
import io
import os
import re
from collections import namedtuple
from .constants import *
from .errors import ConfigMissing, ConfigFieldMissing


InstallationConfig = namedtuple('InstallationConfig', [
    'database_backend',
    'database_name',
    'host',
    'user',
    'password',
    'charset',
    'data_directory',
])

CHARSET_RE = re.compile(r'CHARSET=([^"\s,;]+)')


def settings_path(install_dir):
    return os.path.join(install_dir, LOCALSETTINGS)


def read_settings(install_dir):
    """Returns an ``InstallationConfig`` read from ``LocalSettings.php``.

    Only plain assignments of a double quoted string at the start of a
    line are understood, e.g. ``$wgDBname = "wikidb";``. The first
    assignment of a variable wins.

    :param install_dir: MediaWiki installation directory.
    :raises: ConfigMissing, ConfigFieldMissing
    """
    path = settings_path(install_dir)
    if not os.path.isfile(path):
        raise ConfigMissing(install_dir)

    with io.open(path, encoding='utf-8', errors='surrogateescape') as f:
        lines = f.readlines()

    def required(key):
        value = extract_value(lines, key)
        if value is None:
            raise ConfigFieldMissing(key, path)
        return value

    backend = extract_value(lines, 'wgDBtype')
    name = required('wgDBname')

    if backend == BACKEND_EMBEDDED:
        return InstallationConfig(
            database_backend=BACKEND_EMBEDDED,
            database_name=name,
            host=None,
            user=None,
            password=None,
            charset=DEFAULT_CHARSET,
            data_directory=required('wgSQLiteDataDir'))

    return InstallationConfig(
        database_backend=BACKEND_NETWORKED,
        database_name=name,
        host=required('wgDBserver'),
        user=required('wgDBuser'),
        password=required('wgDBpassword'),
        charset=extract_charset(lines),
        data_directory=None)


def extract_value(lines, key):
    """Returns the first double quoted value assigned to ``$key``."""
    pattern = re.compile(r'^\${}\s*=[^"]*"([^"]*)"'.format(re.escape(key)))
    for line in lines:
        match = pattern.match(line)
        if match:
            return match.group(1)

    return None


def extract_charset(lines):
    """Returns the charset in ``$wgDBTableOptions`` or defaults to binary."""
    options = extract_value(lines, 'wgDBTableOptions')
    if options:
        match = CHARSET_RE.search(options)
        if match:
            return match.group(1)

    return DEFAULT_CHARSET
