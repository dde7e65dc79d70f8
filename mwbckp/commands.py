# -*- coding: utf-8 -*-
import click
import mwbckp
import os
from .constants import *
from .errors import ConfigMissing
from .readonly import is_read_only, set_read_only
from .settings import settings_path


COMPRESSORS = ['auto', 'pbzip2', 'pigz', 'gzip', 'bzip2']


@click.group()
@click.option('--debug/--no-debug', default=False)
@click.pass_context
def cli(ctx, debug):
    """Backup MediaWiki instances including databases, files and pages.

    Creates a dated sub-directory in the backup directory holding a dump
    of the database, an XML export of all pages, an archive of the images
    directory and an archive of the whole installation directory. The wiki
    is set to read-only mode while the backup is running.

    The tool is not daemonized and can be scheduled with cron jobs.
    """
    ctx.obj = {'debug': debug}


@cli.command()
@click.option('-d', '--backup-dir', default=None, help=HELP_BACKUP_DIR)
@click.option('-w', '--wiki-dir', default=None, help=HELP_WIKI_DIR)
@click.option('--compressor', type=click.Choice(COMPRESSORS),
              default='auto', help=HELP_COMPRESSOR)
@click.option('--php', default=None, help=HELP_PHP)
@click.option('--exclude-vcs/--include-vcs', default=True,
              help=HELP_EXCLUDE_VCS)
@click.pass_context
def start(ctx, backup_dir, wiki_dir, compressor, php, exclude_vcs):
    """Start a backup.

    Exits with status 1 on usage and configuration errors and with status
    3 if the MySQL dump failed. Failures to archive pages, images or the
    installation directory are reported but do not change the exit status.

    Only one backup per wiki runs at a time, a lock file is kept in the
    wiki directory while the backup is running.
    """
    _require(ctx, backup_dir, ERR_NO_BACKUP_DIR)
    _require(ctx, wiki_dir, ERR_NO_WIKI_DIR)

    backup = mwbckp.Backup(backup_dir, wiki_dir,
                           compressor=compressor,
                           php=php,
                           exclude_vcs=exclude_vcs,
                           debug=ctx.obj['debug'])
    backup.run()

    for kind, step in backup.warnings:
        msg = '{}: {} was not backed up'.format(kind, step)
        click.echo(click.style(msg, fg='yellow'), err=True)


@cli.command()
@click.option('-w', '--wiki-dir', default=None, help=HELP_WIKI_DIR)
@click.argument('mode', required=False, type=click.Choice(['on', 'off']))
@click.pass_context
def readonly(ctx, wiki_dir, mode):
    """Show or set read-only mode.

    Useful to return a wiki to write mode by hand, e.g. after a backup was
    killed. Without MODE the current mode is printed.
    """
    _require(ctx, wiki_dir, ERR_NO_WIKI_DIR)

    path = settings_path(wiki_dir)
    if not os.path.isfile(path):
        raise ConfigMissing(wiki_dir)

    if mode is None:
        state = 'on' if is_read_only(path) else 'off'
        click.echo('Read-only mode is {}'.format(state))
        return

    if set_read_only(path, mode == 'on'):
        msg = 'Entering read-only mode' if mode == 'on' \
            else 'Returning to write mode'
        click.echo(click.style(msg, fg='green'))
    else:
        click.echo('Read-only mode is already {}'.format(mode))


def _require(ctx, value, msg):
    """Prints usage and exits with status 1 if ``value`` is missing."""
    if not value:
        click.echo(ctx.get_usage(), err=True)
        raise click.ClickException(msg)
