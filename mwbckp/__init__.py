# -*- coding: utf-8 -*-
"""
      Title: mwbckp
     Author: Stephan Herzog (sthzg@gmx.net)
       Date: October 2026
      Usage: $ mwbckp
             $ mwbckp start --help
             $ mwbckp readonly --help
  Platforms: Developed on Linux

Description:
    Naive and simple app to backup MediaWiki installations. A backup
    consists of a dump of the database (MySQL via mysqldump or SQLite via
    MediaWiki's sqlite.php), an XML export of all pages, an archive of the
    uploaded images and an archive of the installation directory.

    While the backup is running the wiki is put into read-only mode by
    adding ``$wgReadOnly`` to LocalSettings.php.

    Type ``mwbckp --help`` to learn about command line options.

    The tool is not daemonized and can be scheduled with cron jobs.

Dependencies:
    * Click
    * colorama

"""
from .backups import Backup, BackupTarget
from .compressor import Compressor
from .settings import InstallationConfig, read_settings
from .readonly import set_read_only, is_read_only


# >>>>> Global Todos <<<<<<<<<<<<<<<<<<<<<<<<<<<<<<<<<<<<<<<<<<<<<<<<<<<<<<<<<<<
# TODO(sthzg) Add option to encrypt backups.
