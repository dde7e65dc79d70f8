# -*- coding: utf-8 -*-
import os
from .constants import *
from . import utils


def export_pages(target, compressor, install_dir, php):
    """Exports all revisions of all pages to compressed XML.

    Uses ``dumpBackup.php`` from the wiki's maintenance directory.
    """
    xml_dump = target.artifact_path('pages.xml', compressor.stream_ext)
    utils.echo("Exporting XML to {}".format(xml_dump))

    cmd = [php, '-d', 'error_reporting=E_ERROR', 'dumpBackup.php',
           '--quiet', '--full']
    try:
        php_ret, zip_ret = utils.pipe_to_file(
            [cmd, compressor.stream_cmd()], xml_dump,
            cwd=os.path.join(install_dir, 'maintenance'))
    except OSError as e:
        utils.remove_file(xml_dump)
        utils.warn(WARN_ARCHIVE_FAILED.format(xml_dump, cmd[0], e))
        return None

    if php_ret != 0:
        utils.remove_file(xml_dump)
        utils.warn(WARN_ARCHIVE_FAILED.format(xml_dump, 'dumpBackup.php',
                                              php_ret))
        return None

    if zip_ret != 0:
        utils.remove_file(xml_dump)
        utils.warn(WARN_ARCHIVE_FAILED.format(xml_dump, compressor.program,
                                              zip_ret))
        return None

    utils.echo('Wrote {}'.format(xml_dump), fg='green')
    return xml_dump


def export_images(target, compressor, install_dir, exclude_vcs=True):
    """Archives the ``images`` directory holding uploaded files."""
    img_backup = target.artifact_path('images', compressor.tar_ext)
    utils.echo("Compressing images to {}".format(img_backup))

    if not os.path.isdir(os.path.join(install_dir, 'images')):
        utils.warn(WARN_IMAGES_MISSING.format(install_dir))
        return None

    cmd = ['tar']
    if exclude_vcs:
        cmd.append('--exclude-vcs')
    cmd += [compressor.tar_option(), '-cf', img_backup, 'images']

    return _tar(cmd, img_backup, install_dir)


def backup_installation(target, compressor, install_dir):
    """Archives the whole installation directory.

    This includes ``LocalSettings.php`` (with the read-only line currently
    set), extensions and skins. The archive is created relative to the
    parent directory so it unpacks into a directory of the same name.
    """
    mwdir_backup = target.artifact_path('mwdir', compressor.tar_ext)
    utils.echo("Compressing MediaWiki installation directory to {}".format(
        mwdir_backup))

    install_dir = os.path.abspath(install_dir)
    parent = os.path.dirname(install_dir)
    basename = os.path.basename(install_dir)

    if not os.path.isdir(parent):
        utils.warn(WARN_PARENT_MISSING.format(parent))
        return None

    cmd = ['tar', '--exclude={}'.format(LOCK_FILENAME),
           compressor.tar_option(), '-cf', mwdir_backup, basename]
    return _tar(cmd, mwdir_backup, parent)


def _tar(cmd, archive, cwd):
    try:
        ret = utils.run(cmd, cwd=cwd)
    except OSError as e:
        utils.remove_file(archive)
        utils.warn(WARN_ARCHIVE_FAILED.format(archive, 'tar', e))
        return None

    if ret != 0:
        utils.remove_file(archive)
        utils.warn(WARN_ARCHIVE_FAILED.format(archive, 'tar', ret))
        return None

    utils.echo('Wrote {}'.format(archive), fg='green')
    return archive
