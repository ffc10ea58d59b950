'''
The filesystem service used by bank. Every call is a single attempt, and any
OSError is re-raised as exceptions.FilesystemError carrying the offending path.

The classifier and the time resolver take a Filesystem instance as a keyword
argument, so tests can substitute their own.
'''
import os
import stat as statmodule

from bank import exceptions
from bank import vlogging

log = vlogging.get_logger(__name__)

class EntryKind:
    '''
    A named constant for the kind of a filesystem entry. Separate instances
    never == each other even if they share a name.
    '''
    def __init__(self, name):
        self.name = name

    def __repr__(self):
        return f'<EntryKind {self.name}>'

    def __str__(self):
        return self.name

FILE = EntryKind('file')
DIRECTORY = EntryKind('directory')
LINK = EntryKind('symlink')

class Metadata:
    def __init__(self, accessed_ns, modified_ns, kind):
        self.accessed_ns = accessed_ns
        self.modified_ns = modified_ns
        self.kind = kind

    def __repr__(self):
        return f'Metadata(accessed_ns={self.accessed_ns}, modified_ns={self.modified_ns}, kind={self.kind})'

def _kind_from_stat(stat):
    if statmodule.S_ISLNK(stat.st_mode):
        return LINK
    if statmodule.S_ISDIR(stat.st_mode):
        return DIRECTORY
    return FILE

class Filesystem:
    def exists(self, path):
        return os.path.exists(path)

    def lexists(self, path):
        '''
        True for broken symlinks too, unlike exists.
        '''
        return os.path.lexists(path)

    def is_directory(self, path):
        return os.path.isdir(path)

    def is_link(self, path):
        return os.path.islink(path)

    def kind(self, path, follow_symlinks=True):
        '''
        Return FILE, DIRECTORY, or LINK (only when follow_symlinks is False),
        or None if nothing is there. Anything that is not a directory or a
        link counts as FILE.
        '''
        try:
            if follow_symlinks:
                stat = os.stat(path)
            else:
                stat = os.lstat(path)
        except FileNotFoundError:
            return None
        except OSError as exc:
            raise exceptions.FilesystemError(f'Failed to read metadata for {path}', path, exc) from exc
        return _kind_from_stat(stat)

    def create_file(self, path):
        log.debug('Creating file %s.', path)
        try:
            open(path, 'a').close()
        except OSError as exc:
            raise exceptions.FilesystemError(f'Failed to create file {path}', path, exc) from exc

    def create_directory(self, path):
        log.debug('Creating directory %s.', path)
        try:
            os.mkdir(path)
        except OSError as exc:
            raise exceptions.FilesystemError(f'Failed to create directory {path}', path, exc) from exc

    def create_directories(self, path):
        log.debug('Creating directories %s.', path)
        try:
            os.makedirs(path, exist_ok=True)
        except OSError as exc:
            raise exceptions.FilesystemError(f'Failed to create parent directories {path}', path, exc) from exc

    def read_metadata(self, path, follow_symlinks=True):
        try:
            stat = os.stat(path, follow_symlinks=follow_symlinks)
        except OSError as exc:
            raise exceptions.FilesystemError(f'Failed to read current timestamps for {path}', path, exc) from exc
        return Metadata(
            accessed_ns=stat.st_atime_ns,
            modified_ns=stat.st_mtime_ns,
            kind=_kind_from_stat(stat),
        )

    def supports_link_times(self):
        return os.utime in os.supports_follow_symlinks

    def set_times(self, path, accessed_ns, modified_ns, follow_symlinks=True):
        log.loud('Setting %s times to atime=%s mtime=%s.', path, accessed_ns, modified_ns)
        try:
            os.utime(path, ns=(accessed_ns, modified_ns), follow_symlinks=follow_symlinks)
        except NotImplementedError as exc:
            raise exceptions.UnsupportedOperationError(
                f'Symlink timestamp modification is not supported on this platform: {path}'
            ) from exc
        except OSError as exc:
            raise exceptions.FilesystemError(f'Failed to set timestamps for {path}', path, exc) from exc

    def set_mode(self, path, mode):
        log.debug('Setting %s mode to %s.', path, oct(mode))
        try:
            os.chmod(path, mode)
        except OSError as exc:
            raise exceptions.FilesystemError(f'Failed to set permissions for {path}', path, exc) from exc

DEFAULT = Filesystem()
