# -*- coding: utf-8 -*-
import click
from .constants import *


class ConfigMissing(click.ClickException):
    """``LocalSettings.php`` does not exist in the installation directory."""
    exit_code = EXIT_USAGE

    def __init__(self, install_dir):
        super(ConfigMissing, self).__init__(
            ERR_NO_LOCALSETTINGS.format(install_dir))


class ConfigFieldMissing(click.ClickException):
    """A setting required by the detected database backend is missing."""
    exit_code = EXIT_USAGE

    def __init__(self, field, path):
        self.field = field
        super(ConfigFieldMissing, self).__init__(
            ERR_CONFIG_FIELD_MISSING.format(field, path))


class DirectoryUncreatable(click.ClickException):
    exit_code = EXIT_USAGE

    def __init__(self, path, reason):
        super(DirectoryUncreatable, self).__init__(
            ERR_DIRECTORY_UNCREATABLE.format(path, reason))


class BackupLocked(click.ClickException):
    exit_code = EXIT_USAGE

    def __init__(self, lock_path):
        super(BackupLocked, self).__init__(
            ERR_BACKUP_LOCKED.format(lock_path))


class DumpFailed(click.ClickException):
    """The database dump tool exited non-zero.

    This is the only error that aborts the pipeline after maintenance mode
    has been entered.
    """
    exit_code = EXIT_DUMP_FAILED

    def __init__(self, program, returncode):
        self.program = program
        self.returncode = returncode
        super(DumpFailed, self).__init__(
            ERR_DUMP_FAILED.format(program, returncode))
