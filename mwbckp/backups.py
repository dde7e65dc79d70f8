# -*- coding: utf-8 -*-
import click
import os
from datetime import datetime
from .constants import *
from .errors import ConfigMissing, DirectoryUncreatable, DumpFailed
from .compressor import Compressor
from .settings import read_settings, settings_path
from .readonly import set_read_only
from .dumper import dump_database
from .archiver import export_pages, export_images, backup_installation
from . import utils


INIT = 'init'
CONFIG_LOADED = 'config_loaded'
MAINTENANCE_ON = 'maintenance_on'
DUMPED = 'dumped'
ARCHIVED = 'archived'
MAINTENANCE_OFF = 'maintenance_off'
DONE = 'done'
FAILED = 'failed'


class Backup(object):
    """Main application class for backups.

    Runs one backup of one MediaWiki installation: reads the database
    settings, puts the wiki into read-only mode, dumps the database,
    exports pages, images and the installation directory and returns the
    wiki to write mode.

    Read-only mode is always left again, also when the database dump fails.
    A lock file next to ``LocalSettings.php`` keeps two runs against the
    same wiki apart, whatever their backup directories.
    """
    def __init__(self, backup_dir, install_dir, compressor=None, php=None,
                 exclude_vcs=True, debug=False, now=None):
        install_dir = os.path.expanduser(install_dir)
        if not os.path.isfile(settings_path(install_dir)):
            raise ConfigMissing(install_dir)

        self.install_dir = os.path.realpath(install_dir)
        self.settings_path = settings_path(self.install_dir)
        self.target = BackupTarget(backup_dir, now=now)
        self.lock_path = os.path.join(self.install_dir, LOCK_FILENAME)
        self.compressor = Compressor.detect(compressor)
        self.php = utils.find_php(php)
        self.exclude_vcs = exclude_vcs
        self.debug = debug

        self.config = None
        self.state = INIT
        self.artifacts = dict()
        self.warnings = list()

    def run(self):
        """Runs the whole backup.

        :raises: ConfigMissing, ConfigFieldMissing, DirectoryUncreatable,
                 BackupLocked, DumpFailed
        """
        try:
            self.prepare()
            self.load_config()

            utils.acquire_lock(self.lock_path)
            try:
                self.execute()
            finally:
                utils.release_lock(self.lock_path)

        except click.ClickException as e:
            utils.logger.error(e.format_message())
            raise

        finally:
            utils.teardown_logging()

    def prepare(self):
        """Creates the backup directories and opens the log file."""
        self.target.check_or_create_backup_dir()
        utils.setup_logging(self.target.backup_dir, self.debug)

        utils.echo("Backing up wiki installed in {} {}".format(
            self.install_dir, datetime.now().strftime('%c')))
        utils.echo("Backing up to {}".format(self.target.backup_dir))

        self.target.check_or_create_base_path()
        utils.echo("Backing up to {}".format(self.target.base_path))
        utils.debug("Compressing with {}, PHP binary {}".format(
            self.compressor.program, self.php))

    def load_config(self):
        self.config = read_settings(self.install_dir)
        self.state = CONFIG_LOADED

        if self.config.database_backend == BACKEND_EMBEDDED:
            utils.echo("The MediaWiki instance uses SQLite database, backup "
                       "using file copying and compressing")
        else:
            utils.echo("The MediaWiki instance uses MySQL database, backup "
                       "using mysqldump")

    def execute(self):
        """Runs dump and archives between entering and leaving read-only."""
        self.enter_read_only()
        try:
            self.dump()
            self.archive()
        except DumpFailed:
            self.state = FAILED
            raise
        finally:
            self.leave_read_only()

        self.state = DONE
        utils.echo("Backup finished", fg='green')

    def enter_read_only(self):
        if set_read_only(self.settings_path, True):
            utils.echo("Entering read-only mode")
        self.state = MAINTENANCE_ON

    def leave_read_only(self):
        if set_read_only(self.settings_path, False):
            utils.echo("Returning to write mode")
        if self.state != FAILED:
            self.state = MAINTENANCE_OFF

    def dump(self):
        path = dump_database(self.config, self.target, self.compressor,
                             self.install_dir, self.php)
        if path:
            self.artifacts['database'] = path
        else:
            self.warnings.append(('DumpFailedNonFatal', 'database'))
        self.state = DUMPED

    def archive(self):
        steps = (
            ('pages', lambda: export_pages(
                self.target, self.compressor, self.install_dir, self.php)),
            ('images', lambda: export_images(
                self.target, self.compressor, self.install_dir,
                self.exclude_vcs)),
            ('mwdir', lambda: backup_installation(
                self.target, self.compressor, self.install_dir)),
        )

        for kind, step in steps:
            path = step()
            if path:
                self.artifacts[kind] = path
            else:
                self.warnings.append(('ArchiveWarning', kind))

        self.state = ARCHIVED


class BackupTarget(object):
    """Directory layout of one backup run.

    Artifacts go into a sub-directory named after the current date, e.g.
    ``<backup_dir>/backup_20141115/backup_20141115-pages.xml.gz``.
    """
    def __init__(self, backup_dir, now=None):
        now = now or datetime.now()
        self.backup_dir = os.path.abspath(os.path.expanduser(backup_dir))
        self.filename_prefix = now.strftime(FILENAME_PREFIX_FORMAT)
        self.base_path = os.path.join(self.backup_dir, self.filename_prefix)

    def check_or_create_backup_dir(self):
        _check_or_create(self.backup_dir)

    def check_or_create_base_path(self):
        """Creates ``base_path`` on file system if it does not exist."""
        _check_or_create(self.base_path)

    def artifact_path(self, kind, ext):
        return os.path.join(self.base_path, '{}-{}{}'.format(
            self.filename_prefix, kind, ext))


def _check_or_create(path):
    if os.path.isdir(path):
        return

    try:
        os.makedirs(path)
    except OSError as e:
        raise DirectoryUncreatable(path, e.strerror or e)
