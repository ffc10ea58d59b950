'''
bank
====

Create files and directories, and set their timestamps, with one tool.
bank combines mkdir and touch: for each PATH it decides whether to make a file
or a directory, optionally creates the parents, applies the timestamps, and
sets the permission bits.

When neither --directory nor --file is given, the kind is decided by:
1. whatever already exists at the path,
2. a file extension means file,
3. a trailing slash means directory,
4. asking you, with --interactive,
5. otherwise file.

Paths are processed in order and the first error stops the run.
'''
import argparse
import os
import re
import sys

from bank import __version__
from bank import betterhelp
from bank import classify
from bank import colors
from bank import exceptions
from bank import filesystem
from bank import interactive
from bank import pipeable
from bank import timeresolve
from bank import timetools
from bank import vlogging

log = vlogging.get_logger(__name__, 'bank')

CHECK = '✓'

class Echo:
    '''
    Writes bank's user-facing progress lines to stdout.
    '''
    def __init__(self, verbose=False, palette=None):
        self.verbose = verbose
        self.color = colors.PLAIN if palette is None else palette

    def __call__(self, line):
        pipeable.stdout(line)

    def paint(self, name, text):
        return self.color.paint(name, text)

    def info(self, line):
        if self.verbose:
            self(line)

def parse_mode(mode):
    '''
    Parse the octal permission string, like 755 or 0644.
    '''
    if mode is None:
        return None
    if not re.fullmatch(r'0?[oO]?[0-7]{1,4}', mode):
        raise exceptions.ValidationError(f'Invalid mode format: {mode}')
    return int(re.sub(r'^0?[oO]', '', mode) or '0', 8)

def validate_arguments(
        *,
        directory=False,
        file=False,
        date=None,
        timestamp=None,
        reference=None,
        atime_only=False,
        mtime_only=False,
        mode=None,
    ):
    '''
    Check the flag combinations before anything on disk is touched.
    Return the TimeSource and the parsed mode.
    '''
    if directory and file:
        raise exceptions.ValidationError('Cannot specify both --directory and --file flags')

    time_source = timeresolve.time_source_from_args(date=date, timestamp=timestamp, reference=reference)

    if atime_only and mtime_only:
        raise exceptions.ValidationError('Cannot specify both --atime and --mtime flags')

    mode = parse_mode(mode)

    return (time_source, mode)

def update_times(path, options, instant, echo):
    application = timeresolve.get_time_application(
        instant,
        atime_only=options.atime_only,
        mtime_only=options.mtime_only,
        now=options.now,
    )
    if options.no_dereference and options.filesystem.is_link(path):
        echo.info(f'Setting timestamps on symlink: {echo.paint("link", path)}')
    timeresolve.apply_times(
        path,
        application,
        no_dereference=options.no_dereference,
        filesystem=options.filesystem,
    )
    echo.info(f'Updated timestamps for: {echo.paint("link", path)}')

def create_parents(path, options, echo):
    parent = os.path.dirname(os.fspath(path).rstrip('/\\'))
    if not parent or options.filesystem.exists(parent):
        return
    options.filesystem.create_directories(parent)
    echo.info(f'Created parent directories: {echo.paint("created", parent)}')

def create_file(path, options, echo):
    if options.filesystem.exists(path):
        echo.info(f'File already exists: {echo.paint("existing", path)}')
        return
    options.filesystem.create_file(path)

def create_directory(path, options, echo):
    if options.filesystem.exists(path):
        if not options.filesystem.is_directory(path):
            raise exceptions.FilesystemError(f'Path exists but is not a directory: {path}', path)
        echo.info(f'Directory already exists: {echo.paint("existing", path)}')
        return
    options.filesystem.create_directory(path)

def acknowledge(path, options, echo, verb):
    check = echo.paint('check', CHECK)
    if options.verbose:
        echo(f'{check} {verb}: {echo.paint("created", path)}')
    elif options.multiple:
        echo(f'{check} {echo.paint("created", path)}')

def process_path(path, options, instant, echo):
    '''
    Run one path through classify, create parents, create, apply times, and
    apply permissions. Raises on the first failure.
    '''
    fs = options.filesystem

    if options.no_create:
        # A dangling symlink only counts when we would touch the link itself.
        if options.no_dereference:
            present = fs.lexists(path)
        else:
            present = fs.exists(path)
        if not present:
            echo.info(f'Skipping non-existent path in no-create mode: {echo.paint("existing", path)}')
            return
        update_times(path, options, instant, echo)
        acknowledge(path, options, echo, 'Updated timestamps')
        return

    kind = classify.classify(
        path,
        directory=options.directory,
        file=options.file,
        raw=path,
        interactive=options.interactive,
        filesystem=fs,
        prompter=options.prompter,
    )
    echo.info(f'Creating {kind}: {echo.paint("path", path)}')

    if options.parents:
        create_parents(path, options, echo)

    if kind is classify.DIRECTORY:
        create_directory(path, options, echo)
    else:
        create_file(path, options, echo)

    if instant is not None or options.atime_only or options.mtime_only:
        update_times(path, options, instant, echo)

    if options.mode is not None:
        fs.set_mode(path, options.mode)
        echo.info(f'Set permissions to {echo.paint("created", oct(options.mode)[2:])} for {path}')

    acknowledge(path, options, echo, 'Created')

class Options:
    def __init__(
            self,
            *,
            directory=False,
            file=False,
            parents=False,
            mode=None,
            interactive=False,
            verbose=False,
            no_create=False,
            atime_only=False,
            mtime_only=False,
            no_dereference=False,
            multiple=False,
            filesystem,
            prompter,
            now,
        ):
        self.directory = directory
        self.file = file
        self.parents = parents
        self.mode = mode
        self.interactive = interactive
        self.verbose = verbose
        self.no_create = no_create
        self.atime_only = atime_only
        self.mtime_only = mtime_only
        self.no_dereference = no_dereference
        self.multiple = multiple
        self.filesystem = filesystem
        self.prompter = prompter
        self.now = now

def bank(
        paths,
        *,
        directory=False,
        file=False,
        parents=False,
        mode=None,
        interactive=False,
        verbose=False,
        no_create=False,
        date=None,
        timestamp=None,
        reference=None,
        atime_only=False,
        mtime_only=False,
        no_dereference=False,
        filesystem=filesystem.DEFAULT,
        prompter=interactive.prompt_choice,
        now=timetools.now,
        echo=None,
    ):
    '''
    Create or update every path in order. All flag combinations are checked
    before the first path is touched, and the time source is resolved once
    for the whole batch. The first error stops the run.

    mode:
        Octal permission string like '755'.

    echo:
        An Echo for the progress lines. Defaults to a plain one.
    '''
    paths = list(paths)
    if not paths:
        raise exceptions.ValidationError('At least one PATH is required')

    (time_source, mode) = validate_arguments(
        directory=directory,
        file=file,
        date=date,
        timestamp=timestamp,
        reference=reference,
        atime_only=atime_only,
        mtime_only=mtime_only,
        mode=mode,
    )

    if echo is None:
        echo = Echo(verbose=verbose)

    options = Options(
        directory=directory,
        file=file,
        parents=parents,
        mode=mode,
        interactive=interactive,
        verbose=verbose,
        no_create=no_create,
        atime_only=atime_only,
        mtime_only=mtime_only,
        no_dereference=no_dereference,
        multiple=len(paths) > 1,
        filesystem=filesystem,
        prompter=prompter,
        now=now,
    )

    if verbose:
        echo(f'{echo.paint("headline", "Bank")} {echo.paint("version", "v" + __version__)}')
        if options.multiple:
            echo(f'Processing {echo.paint("version", len(paths))} paths...')

    instant = timeresolve.resolve(time_source, filesystem=filesystem, now=now)

    for path in paths:
        process_path(path, options, instant, echo)

    return 0

@pipeable.ctrlc_return1
def bank_argparse(args):
    paths = list(pipeable.input_many(args.paths, skip_blank=True, strip=True))
    echo = Echo(verbose=args.verbose, palette=colors.get_palette())
    try:
        return bank(
            paths,
            directory=args.directory,
            file=args.file,
            parents=args.parents,
            mode=args.mode,
            interactive=args.interactive,
            verbose=args.verbose,
            no_create=args.no_create,
            date=args.date,
            timestamp=args.timestamp,
            reference=args.reference,
            atime_only=args.atime_only,
            mtime_only=args.mtime_only,
            no_dereference=args.no_dereference,
            echo=echo,
        )
    except exceptions.BankException as exc:
        log.error('%s', exc)
        return 1

def make_parser():
    parser = argparse.ArgumentParser(description=__doc__)
    parser.examples = [
        {'args': 'report.txt', 'comment': 'Create an empty file.'},
        {'args': 'data/', 'comment': 'Create a directory.'},
        {'args': 'src/app/main.py -p -m 644', 'comment': 'Create the parents too, and chmod.'},
        {'args': 'notes -t 202312251530', 'comment': 'Set both times to 2023-12-25 15:30 utc.'},
        {'args': 'notes --mtime --date "2023-12-25 15:30:45"'},
        {'args': 'notes -c -r other.txt', 'comment': 'Copy the mtime of other.txt, but only if notes exists.'},
    ]
    parser.add_argument(
        'paths',
        metavar='PATH',
        nargs='+',
        help='''
        The files or directories to create. Uses pipeable to support !c
        clipboard, !i stdin, one path per line.
        ''',
    )
    parser.add_argument(
        '-m',
        '--mode',
        metavar='OCTAL',
        default=None,
        help='''
        Set the permission bits, in octal, e.g. 755.
        ''',
    )
    parser.add_argument(
        '--date',
        metavar='STRING',
        default=None,
        help='''
        Use this date instead of the current time. Accepts YYYY-MM-DD,
        MM/DD/YYYY, and DD.MM.YYYY, each optionally followed by hh:mm or
        hh:mm:ss. Times are utc.
        ''',
    )
    parser.add_argument(
        '-t',
        '--timestamp',
        metavar='STAMP',
        default=None,
        help='''
        Use [[CC]YY]MMDDhhmm[.ss] instead of the current time. Times are utc.
        ''',
    )
    parser.add_argument(
        '-r',
        '--reference',
        metavar='FILE',
        default=None,
        help='''
        Use the modification time of this file instead of the current time.
        Only one of --date, --timestamp, --reference may be given.
        ''',
    )
    parser.add_argument(
        '-d',
        '--directory',
        action='store_true',
        help='''
        Create every PATH as a directory, like mkdir.
        ''',
    )
    parser.add_argument(
        '-f',
        '--file',
        action='store_true',
        help='''
        Create every PATH as a file, like touch. Can't be used with --directory.
        ''',
    )
    parser.add_argument(
        '-p',
        '--parents',
        action='store_true',
        help='''
        Create the parent directories as needed.
        ''',
    )
    parser.add_argument(
        '-i',
        '--interactive',
        action='store_true',
        help='''
        Ask whether an ambiguous PATH should be a file or a directory.
        ''',
    )
    parser.add_argument(
        '-v',
        '--verbose',
        action='store_true',
        help='''
        Print each action as it happens.
        ''',
    )
    parser.add_argument(
        '-c',
        '--no-create',
        dest='no_create',
        action='store_true',
        help='''
        Don't create anything, only update the timestamps of PATHs
        that exist.
        ''',
    )
    parser.add_argument(
        '-a',
        '--atime',
        dest='atime_only',
        action='store_true',
        help='''
        Change only the access time.
        ''',
    )
    parser.add_argument(
        '--mtime',
        dest='mtime_only',
        action='store_true',
        help='''
        Change only the modification time. Can't be used with --atime.
        ''',
    )
    parser.add_argument(
        '--no-dereference',
        dest='no_dereference',
        action='store_true',
        help='''
        Change the times of symbolic links themselves instead of the files
        they point to.
        ''',
    )
    parser.set_defaults(func=bank_argparse)
    return parser

@vlogging.main_decorator
def main(argv):
    parser = make_parser()
    return betterhelp.go(parser, argv)

if __name__ == '__main__':
    raise SystemExit(main(sys.argv[1:]))
