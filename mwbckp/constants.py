# -*- coding: utf-8 -*-


HELP_BACKUP_DIR = (
    "Directory to write backups to. A dated sub-directory is created "
    "inside of it for every run.")

HELP_WIKI_DIR = (
    "Installation directory of the MediaWiki instance, i.e. the directory "
    "containing LocalSettings.php.")

HELP_COMPRESSOR = (
    "Compression program to use. By default pbzip2 is used if available, "
    "then pigz, then gzip.")

HELP_PHP = (
    "PHP binary used to run the MediaWiki maintenance scripts.")

HELP_EXCLUDE_VCS = (
    "Exclude version control metadata (.git, .svn, ...) from the images "
    "archive.")

ERR_NO_BACKUP_DIR = (
    "Please provide a backup directory with -d")

ERR_NO_WIKI_DIR = (
    "Please specify the wiki directory with -w")

ERR_NO_LOCALSETTINGS = (
    "No LocalSettings.php found in {}")

ERR_CONFIG_FIELD_MISSING = (
    "Could not find ${} in {}")

ERR_DIRECTORY_UNCREATABLE = (
    "Backup directory {} does not exist and could not be created ({})")

ERR_BACKUP_LOCKED = (
    "Another backup seems to be running, lock file {} exists. Remove it if "
    "that is not the case.")

ERR_DUMP_FAILED = (
    "MySQL Dump failed! (return code of {}: {})")

WARN_SQLITE_DIR_MISSING = (
    "SQLite data directory {} does not exist, skipping database dump")

WARN_SQLITE_DUMP_FAILED = (
    "SQLite Dump failed! (return code of sqlite.php: {})")

WARN_SQLITE_COMPRESS_FAILED = (
    "Compressing SQLite dump {} failed (return code of {}: {})")

WARN_IMAGES_MISSING = (
    "No images directory found in {}, skipping images archive")

WARN_PARENT_MISSING = (
    "{} is not a valid path, fail to backup MediaWiki dir")

WARN_ARCHIVE_FAILED = (
    "Creating {} failed (return code of {}: {})")

READ_ONLY_MESSAGE = "$wgReadOnly = 'Backup in progress.';"

PHP_CLOSING_TAG = '?>'

LOCALSETTINGS = 'LocalSettings.php'

LOG_FILENAME = 'mediawiki_backup.log'

LOCK_FILENAME = '.mwbckp.lock'

FILENAME_PREFIX_FORMAT = 'backup_%Y%m%d'

PHP_CANDIDATES = (
    '/usr/local/php54/bin/php',
    '/usr/local/php53/bin/php',
)

BACKEND_NETWORKED = 'mysql'
BACKEND_EMBEDDED = 'sqlite'

DEFAULT_CHARSET = 'binary'

EXIT_USAGE = 1
EXIT_DUMP_FAILED = 3
