# -*- coding: utf-8 -*-
import os
from .constants import *
from .errors import DumpFailed
from . import utils


def dump_database(config, target, compressor, install_dir, php):
    """Creates the compressed database artifact for ``config``.

    :param config: ``InstallationConfig`` of the wiki.
    :param target: ``BackupTarget`` the artifact is written to.
    :param compressor: ``Compressor`` used for the artifact.
    :param install_dir: MediaWiki installation directory.
    :param php: PHP binary for the SQLite maintenance script.
    :return: Path of the artifact or None if a SQLite dump failed.
    :raises: DumpFailed if mysqldump fails.
    """
    if config.database_backend == BACKEND_EMBEDDED:
        return backup_sqlite(config, target, compressor, install_dir, php)

    return export_sql(config, target, compressor)


def mysqldump_cmd(config):
    return utils.nice([
        'mysqldump',
        '--single-transaction',
        '--default-character-set={}'.format(config.charset),
        '--host={}'.format(config.host),
        '--user={}'.format(config.user),
        '--password={}'.format(config.password),
        config.database_name,
    ])


def export_sql(config, target, compressor):
    """Dumps a MySQL database through the compressor into the backup."""
    sql_file = target.artifact_path('database.sql', compressor.stream_ext)
    utils.echo("Logging in as {} to {} to backup {}".format(
        config.user, config.host, config.database_name))
    utils.echo("Character set in use: {}".format(config.charset))
    utils.echo("Dumping database to {}".format(sql_file))

    try:
        dump_ret, zip_ret = utils.pipe_to_file(
            [mysqldump_cmd(config), compressor.stream_cmd()], sql_file)
    except OSError as e:
        utils.remove_file(sql_file)
        utils.echo(str(e), fg='red', err=True)
        raise DumpFailed('mysqldump', 127)

    if dump_ret != 0:
        utils.remove_file(sql_file)
        raise DumpFailed('mysqldump', dump_ret)

    if zip_ret != 0:
        utils.remove_file(sql_file)
        raise DumpFailed(compressor.program, zip_ret)

    utils.echo('Wrote {}'.format(sql_file), fg='green')
    return sql_file


def backup_sqlite(config, target, compressor, install_dir, php):
    """Dumps a SQLite database with MediaWiki's ``sqlite.php``.

    The maintenance script writes an uncompressed copy which is compressed
    afterwards. Failures are reported but do not stop the backup.
    """
    if not os.path.isdir(config.data_directory):
        utils.warn(WARN_SQLITE_DIR_MISSING.format(config.data_directory))
        return None

    backup_file = target.artifact_path('database.sqlite',
                                       compressor.stream_ext)
    tmp_file = target.artifact_path('database__tmp.sqlite', '')
    utils.echo("Dumping database {} to {}".format(
        os.path.join(config.data_directory, config.database_name + '.sqlite'),
        backup_file))

    cmd = [php, 'sqlite.php', '--backup-to', tmp_file]
    try:
        ret = utils.run(cmd, cwd=os.path.join(install_dir, 'maintenance'))
    except OSError as e:
        utils.warn(WARN_SQLITE_DUMP_FAILED.format(e))
        return None

    if os.path.isfile(tmp_file):
        try:
            zip_ret, = utils.pipe_to_file([compressor.file_cmd(tmp_file)],
                                          backup_file)
        except OSError as e:
            utils.remove_file(backup_file)
            utils.warn(WARN_SQLITE_COMPRESS_FAILED.format(
                tmp_file, compressor.program, e))
            return None

        if zip_ret != 0:
            utils.remove_file(backup_file)
            utils.warn(WARN_SQLITE_COMPRESS_FAILED.format(
                tmp_file, compressor.program, zip_ret))
            return None

    if os.path.isfile(tmp_file) and os.path.isfile(backup_file):
        os.remove(tmp_file)
        utils.echo('Wrote {}'.format(backup_file), fg='green')
        return backup_file

    utils.warn(WARN_SQLITE_DUMP_FAILED.format(ret))
    return None
