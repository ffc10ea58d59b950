'''
Decide whether a path should be created as a file or as a directory.

The decision is a strict priority chain. Each check in CHECKS looks at the
request and returns a TargetKind or None, and the first one to answer wins:

1. explicit --directory or --file flag
2. the kind of whatever already exists at the path
3. a non-empty extension on the raw input means file
4. a trailing / or \\ on the raw input means directory
5. ask the user, if interactive
6. file
'''
import os

from bank import exceptions
from bank import filesystem
from bank import interactive
from bank import vlogging

log = vlogging.get_logger(__name__)

FILE = filesystem.FILE
DIRECTORY = filesystem.DIRECTORY

SEPARATORS = ('/', '\\')

PROMPT_OPTIONS = [
    ('File', FILE),
    ('Directory', DIRECTORY),
]

class ClassifyRequest:
    def __init__(
            self,
            path,
            *,
            directory=False,
            file=False,
            raw=None,
            interactive=False,
            filesystem,
            prompter,
        ):
        self.path = path
        self.directory = directory
        self.file = file
        self.raw = os.fspath(path) if raw is None else raw
        self.interactive = interactive
        self.filesystem = filesystem
        self.prompter = prompter

def has_extension(raw):
    '''
    Return True if the final component of the raw path string has a non-empty
    extension, according to os.path.splitext. A leading dot does not start an
    extension, so ".gitignore" has none but ".config.toml" does. A string that
    ends with a separator has an empty final component and no extension.
    '''
    return os.path.splitext(raw)[1] not in ('', '.')

def ends_with_separator(raw):
    return raw.endswith(SEPARATORS)

def check_explicit(request):
    if request.directory:
        return DIRECTORY
    if request.file:
        return FILE
    return None

def check_existing(request):
    fs = request.filesystem
    if not fs.exists(request.path):
        return None
    if fs.is_directory(request.path):
        return DIRECTORY
    return FILE

def check_extension(request):
    if has_extension(request.raw):
        return FILE
    return None

def check_separator(request):
    if ends_with_separator(request.raw):
        return DIRECTORY
    return None

def check_interactive(request):
    if not request.interactive:
        return None
    options = [name for (name, kind) in PROMPT_OPTIONS]
    message = f'What should \'{request.raw}\' be?'
    try:
        index = request.prompter(message, options, 0)
    except exceptions.NoAnswerError as exc:
        raise exceptions.NoAnswerError(f'No answer for \'{request.raw}\'') from exc
    return PROMPT_OPTIONS[index][1]

def check_default(request):
    return FILE

CHECKS = [
    check_explicit,
    check_existing,
    check_extension,
    check_separator,
    check_interactive,
    check_default,
]

def classify(
        path,
        *,
        directory=False,
        file=False,
        raw=None,
        interactive=False,
        filesystem=filesystem.DEFAULT,
        prompter=interactive.prompt_choice,
    ):
    '''
    Return FILE or DIRECTORY for this path.

    path:
        The path to probe for an existing entry.

    directory, file:
        The explicit flags. Passing both raises ValidationError.

    raw:
        The path string exactly as the user typed it, which is where the
        extension and trailing separator are read from. Defaults to path.

    interactive:
        If True, ambiguous paths are put to the user through prompter.

    prompter:
        A function (message, options, default_index) -> index.
    '''
    if directory and file:
        raise exceptions.ValidationError('Cannot specify both --directory and --file flags')

    request = ClassifyRequest(
        path,
        directory=directory,
        file=file,
        raw=raw,
        interactive=interactive,
        filesystem=filesystem,
        prompter=prompter,
    )
    for check in CHECKS:
        kind = check(request)
        if kind is not None:
            log.debug('%s decided %s is a %s.', check.__name__, request.raw, kind)
            return kind

    # check_default always answers.
    raise AssertionError('No classification check answered.')
