# -*- coding: utf-8 -*-
import datetime
import os
import shutil
import tempfile
import unittest
from unittest import mock
from mwbckp.backups import BackupTarget
from mwbckp.compressor import Compressor
from mwbckp.constants import BACKEND_EMBEDDED, BACKEND_NETWORKED
from mwbckp.dumper import dump_database
from mwbckp.errors import DumpFailed
from mwbckp.settings import InstallationConfig


def mysql_config():
    return InstallationConfig(
        database_backend=BACKEND_NETWORKED,
        database_name='wikidb',
        host='db.example.org',
        user='wikiuser',
        password='s3cret',
        charset='utf8',
        data_directory=None)


def sqlite_config(data_directory):
    return InstallationConfig(
        database_backend=BACKEND_EMBEDDED,
        database_name='my_wiki',
        host=None,
        user=None,
        password=None,
        charset='binary',
        data_directory=data_directory)


def touch(path):
    with open(path, 'w') as f:
        f.write('data')


def writing_pipe(*returncodes):
    """Fake ``pipe_to_file`` creating the target and returning codes."""
    def pipe_to_file(commands, target_path, cwd=None):
        touch(target_path)
        return list(returncodes)
    return pipe_to_file


class TestDumper(unittest.TestCase):
    def setUp(self):
        self.tmp_dir = tempfile.mkdtemp()
        self.install_dir = os.path.join(self.tmp_dir, 'wiki')
        os.makedirs(os.path.join(self.install_dir, 'maintenance'))
        self.target = BackupTarget(os.path.join(self.tmp_dir, 'backups'),
                                   now=datetime.datetime(2014, 11, 15))
        self.target.check_or_create_backup_dir()
        self.target.check_or_create_base_path()
        self.compressor = Compressor('gzip')

    def tearDown(self):
        shutil.rmtree(self.tmp_dir)

    def dump(self, config):
        return dump_database(config, self.target, self.compressor,
                             self.install_dir, 'php')

    def test_mysqldump(self):
        with mock.patch('mwbckp.utils.pipe_to_file',
                        side_effect=writing_pipe(0, 0)) as pipe:
            path = self.dump(mysql_config())

        self.assertEqual(os.path.join(
            self.target.base_path, 'backup_20141115-database.sql.gz'), path)

        dump_cmd, zip_cmd = pipe.call_args[0][0]
        self.assertIn('mysqldump', dump_cmd)
        self.assertIn('--single-transaction', dump_cmd)
        self.assertIn('--default-character-set=utf8', dump_cmd)
        self.assertIn('--host=db.example.org', dump_cmd)
        self.assertIn('--user=wikiuser', dump_cmd)
        self.assertIn('--password=s3cret', dump_cmd)
        self.assertEqual('wikidb', dump_cmd[-1])
        self.assertEqual(['gzip', '-9', '-c'], zip_cmd)

    def test_mysqldump_failure_is_fatal(self):
        with mock.patch('mwbckp.utils.pipe_to_file',
                        side_effect=writing_pipe(2, 0)):
            with self.assertRaises(DumpFailed) as cm:
                self.dump(mysql_config())

        self.assertEqual(2, cm.exception.returncode)
        self.assertEqual(3, cm.exception.exit_code)
        self.assertEqual([], os.listdir(self.target.base_path))

    def test_compressor_failure_is_fatal(self):
        with mock.patch('mwbckp.utils.pipe_to_file',
                        side_effect=writing_pipe(0, 1)):
            with self.assertRaises(DumpFailed) as cm:
                self.dump(mysql_config())

        self.assertEqual('gzip', cm.exception.program)

    def test_mysqldump_not_installed(self):
        with mock.patch('mwbckp.utils.pipe_to_file',
                        side_effect=OSError('No such file or directory')):
            with self.assertRaises(DumpFailed) as cm:
                self.dump(mysql_config())

        self.assertEqual(127, cm.exception.returncode)

    def test_sqlite_missing_data_dir(self):
        """A missing data directory is reported but not fatal."""
        config = sqlite_config(os.path.join(self.tmp_dir, 'missing'))
        with mock.patch('mwbckp.utils.run') as run:
            self.assertIsNone(self.dump(config))

        self.assertFalse(run.called)

    def test_sqlite(self):
        data_dir = os.path.join(self.tmp_dir, 'data')
        os.mkdir(data_dir)

        def run(cmd, cwd=None):
            touch(cmd[-1])
            return 0

        with mock.patch('mwbckp.utils.run', side_effect=run) as run_mock, \
                mock.patch('mwbckp.utils.pipe_to_file',
                           side_effect=writing_pipe(0)) as pipe:
            path = self.dump(sqlite_config(data_dir))

        cmd = run_mock.call_args[0][0]
        tmp_file = os.path.join(self.target.base_path,
                                'backup_20141115-database__tmp.sqlite')
        self.assertEqual(['php', 'sqlite.php', '--backup-to', tmp_file], cmd)
        self.assertEqual(os.path.join(self.install_dir, 'maintenance'),
                         run_mock.call_args[1]['cwd'])
        self.assertEqual([['gzip', '-9', '-c', tmp_file]],
                         pipe.call_args[0][0])

        self.assertEqual(os.path.join(
            self.target.base_path, 'backup_20141115-database.sqlite.gz'), path)
        self.assertTrue(os.path.isfile(path))
        self.assertFalse(os.path.exists(tmp_file))

    def test_sqlite_helper_failure(self):
        data_dir = os.path.join(self.tmp_dir, 'data')
        os.mkdir(data_dir)

        with mock.patch('mwbckp.utils.run', return_value=1), \
                mock.patch('mwbckp.utils.pipe_to_file') as pipe:
            self.assertIsNone(self.dump(sqlite_config(data_dir)))

        self.assertFalse(pipe.called)

    def test_sqlite_compression_failure_keeps_tmp_file(self):
        data_dir = os.path.join(self.tmp_dir, 'data')
        os.mkdir(data_dir)

        def run(cmd, cwd=None):
            touch(cmd[-1])
            return 0

        with mock.patch('mwbckp.utils.run', side_effect=run), \
                mock.patch('mwbckp.utils.pipe_to_file',
                           side_effect=writing_pipe(1)), \
                mock.patch('mwbckp.utils.warn') as warn:
            self.assertIsNone(self.dump(sqlite_config(data_dir)))

        self.assertEqual(['backup_20141115-database__tmp.sqlite'],
                         os.listdir(self.target.base_path))

        msg = warn.call_args[0][0]
        self.assertIn('return code of gzip: 1', msg)
        self.assertNotIn('sqlite.php', msg)
        self.assertEqual(1, warn.call_count)


if __name__ == '__main__':
    unittest.main()
