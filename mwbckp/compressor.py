# -*- coding: utf-8 -*-
import shutil


class Compressor(object):
    """Compression program used for all backup artifacts.

    Mostly a small wrapper that knows the command line and file extensions
    of the program. Parallel compressors are preferred over gzip since
    images and the installation directory can get big.
    """
    EXTENSIONS = {
        'pbzip2': '.bz2',
        'bzip2': '.bz2',
        'pigz': '.gz',
        'gzip': '.gz',
    }

    PREFERENCE = ('pbzip2', 'pigz', 'gzip')

    def __init__(self, program):
        if program not in self.EXTENSIONS:
            raise ValueError("Unsupported compressor {}".format(program))

        self.program = program
        self.stream_ext = self.EXTENSIONS[program]
        self.tar_ext = '.tar' + self.stream_ext

    @classmethod
    def detect(cls, preferred=None):
        """Returns the ``Compressor`` for ``preferred`` or the best found.

        :param preferred: Program name or None/``'auto'`` to search ``PATH``.
        """
        if preferred and preferred != 'auto':
            return cls(preferred)

        for program in cls.PREFERENCE:
            if shutil.which(program):
                return cls(program)

        return cls('gzip')

    def stream_cmd(self):
        """Compresses stdin to stdout."""
        return [self.program, '-9', '-c']

    def file_cmd(self, path):
        """Compresses ``path`` to stdout and keeps the original file."""
        return [self.program, '-9', '-c', path]

    def tar_option(self):
        return '--use-compress-program={}'.format(self.program)

    def __repr__(self):
        return 'Compressor({!r})'.format(self.program)
