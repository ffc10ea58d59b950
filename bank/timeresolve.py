'''
Turn the user's chosen time source into a single utc instant, decide which of
the access and modification times it applies to, and apply it.

There are three time sources, and at most one may be given:

--reference FILE
    The modification time of FILE.

--date STRING
    A free-form date like "2023-12-25 15:30:45", "12/25/2023 15:30", or
    "25.12.2023". The time of day is optional and defaults to midnight.

--timestamp STAMP
    The compact [[CC]YY]MMDDhhmm[.ss] format of POSIX touch.

Every parsed time is taken to be utc. No local timezone is involved.
'''
import datetime
import re

from bank import exceptions
from bank import filesystem
from bank import timetools
from bank import vlogging

log = vlogging.get_logger(__name__)

# TIME SOURCES
################################################################################

class TimeSource:
    def __init__(self, value):
        self.value = value

    def __eq__(self, other):
        return type(self) is type(other) and self.value == other.value

    def __hash__(self):
        return hash((type(self), self.value))

    def __repr__(self):
        return f'{self.__class__.__name__}({self.value!r})'

class ReferenceFile(TimeSource):
    pass

class DateString(TimeSource):
    pass

class CompactStamp(TimeSource):
    pass

def time_source_from_args(date=None, timestamp=None, reference=None):
    '''
    Return the one TimeSource given, or None if none were given.
    Raises ValidationError if more than one was given.
    '''
    sources = [
        ReferenceFile(reference) if reference is not None else None,
        DateString(date) if date is not None else None,
        CompactStamp(timestamp) if timestamp is not None else None,
    ]
    sources = [source for source in sources if source is not None]

    if len(sources) > 1:
        raise exceptions.ValidationError('Cannot specify multiple time sources (--date, --timestamp, --reference)')

    if not sources:
        return None

    return sources[0]

# REFERENCE FILE
################################################################################

def resolve_reference(path, *, filesystem=filesystem.DEFAULT):
    '''
    Return the modification time of the entry at path.
    '''
    # Check existence first so the user gets a clear message instead of a
    # stat error.
    if not filesystem.exists(path):
        raise exceptions.NotFoundError(f'Reference file does not exist: {path}')

    try:
        metadata = filesystem.read_metadata(path)
    except exceptions.FilesystemError as exc:
        raise exceptions.FilesystemError(
            f'Failed to read metadata from reference file: {path}',
            path,
            exc.error,
        ) from exc

    return timetools.from_ns(metadata.modified_ns)

# DATE STRINGS
################################################################################

DATE_FORMATS = [
    '%Y-%m-%d %H:%M:%S',
    '%Y-%m-%d %H:%M',
    '%Y-%m-%d',
    '%m/%d/%Y %H:%M:%S',
    '%m/%d/%Y %H:%M',
    '%m/%d/%Y',
    '%d.%m.%Y %H:%M:%S',
    '%d.%m.%Y %H:%M',
    '%d.%m.%Y',
]

def date_only_format(format):
    return format.split(' ', 1)[0]

def _candidate_formats():
    '''
    Yield each format followed by its date-only form. When the format is
    already date-only, it is not repeated.
    '''
    for format in DATE_FORMATS:
        yield format
        date_format = date_only_format(format)
        if date_format != format:
            yield date_format

def try_strptime(text, format):
    '''
    Return the utc datetime parsed from text by format, or None if it
    does not match.
    '''
    try:
        moment = datetime.datetime.strptime(text, format)
    except ValueError:
        return None
    return moment.replace(tzinfo=datetime.timezone.utc)

def parse_date_string(text):
    stripped = text.strip()
    for format in _candidate_formats():
        moment = try_strptime(stripped, format)
        if moment is not None:
            log.debug('Parsed date string %r with format %r.', text, format)
            return moment
        log.loud('Date string %r does not match %r.', text, format)

    raise exceptions.ParseError(f'Unable to parse date string: {text}')

# COMPACT STAMPS
################################################################################

STAMP_LENGTHS = (8, 10, 12)
TWO_DIGIT_YEAR_PIVOT = 70

def expand_two_digit_year(yy):
    '''
    POSIX touch: 70-99 are 1970-1999, 00-69 are 2000-2069.
    '''
    if yy >= TWO_DIGIT_YEAR_PIVOT:
        return 1900 + yy
    return 2000 + yy

def parse_compact_stamp(text, *, now=timetools.now):
    '''
    Parse the [[CC]YY]MMDDhhmm[.ss] format.

    8 digits use the current year, 10 digits use a two-digit year with the
    POSIX pivot, and 12 digits give the full year. The optional .ss gives
    the seconds, which otherwise are 0.

    now:
        A function returning the current utc datetime, used for the year of
        8 digit stamps.
    '''
    if text.count('.') > 1:
        raise exceptions.ParseError(f'Invalid timestamp format: {text}')

    (digits, dot, seconds) = text.partition('.')

    if dot:
        if not re.fullmatch(r'[0-9]{2}', seconds):
            raise exceptions.ParseError(f'Invalid timestamp seconds, expected two digits: {text}')
        seconds = int(seconds)
    else:
        seconds = 0

    if len(digits) not in STAMP_LENGTHS:
        raise exceptions.ParseError(
            f'Invalid timestamp format length: {len(digits)} '
            f'(expected 8, 10, or 12 digits): {text}'
        )

    if not re.fullmatch(r'[0-9]+', digits):
        raise exceptions.ParseError(f'Invalid timestamp format, expected only digits: {text}')

    if len(digits) == 8:
        year = now().year
    elif len(digits) == 10:
        year = expand_two_digit_year(int(digits[:2]))
        digits = digits[2:]
    else:
        year = int(digits[:2]) * 100 + int(digits[2:4])
        digits = digits[4:]

    (month, day, hour, minute) = (int(digits[i:i+2]) for i in range(0, 8, 2))

    try:
        return datetime.datetime(year, month, day, hour, minute, seconds, tzinfo=datetime.timezone.utc)
    except ValueError:
        raise exceptions.ParseError(
            f'Invalid timestamp values: '
            f'{year:04d}-{month:02d}-{day:02d} {hour:02d}:{minute:02d}:{seconds:02d}'
        ) from None

# RESOLVE
################################################################################

def resolve(time_source, *, filesystem=filesystem.DEFAULT, now=timetools.now):
    '''
    Return the utc datetime for the given TimeSource, or None if time_source
    is None.
    '''
    if time_source is None:
        return None

    if isinstance(time_source, ReferenceFile):
        moment = resolve_reference(time_source.value, filesystem=filesystem)
    elif isinstance(time_source, DateString):
        moment = parse_date_string(time_source.value)
    elif isinstance(time_source, CompactStamp):
        moment = parse_compact_stamp(time_source.value, now=now)
    else:
        raise TypeError(f'time_source should be {TimeSource}, not {type(time_source)}.')

    log.debug('Resolved %r to %s.', time_source, moment.isoformat())
    return moment

# TIME APPLICATION
################################################################################

class TimeApplication:
    '''
    The access and modification times to apply to a path. A field that is
    None keeps the path's current value.
    '''
    def __init__(self, accessed=None, modified=None):
        if accessed is None and modified is None:
            raise ValueError('TimeApplication needs at least one of accessed, modified.')
        self.accessed = accessed
        self.modified = modified

    def __eq__(self, other):
        if not isinstance(other, TimeApplication):
            return NotImplemented
        return (self.accessed, self.modified) == (other.accessed, other.modified)

    def __repr__(self):
        return f'TimeApplication(accessed={self.accessed!r}, modified={self.modified!r})'

def get_time_application(instant=None, *, atime_only=False, mtime_only=False, now=timetools.now):
    '''
    Decide which times to set. If instant is None the current time is used.
    With neither flag, both times are set.
    '''
    if atime_only and mtime_only:
        raise exceptions.ValidationError('Cannot specify both --atime and --mtime flags')

    if instant is None:
        instant = now()

    if atime_only:
        return TimeApplication(accessed=instant)
    if mtime_only:
        return TimeApplication(modified=instant)
    return TimeApplication(accessed=instant, modified=instant)

def apply_times(path, application, *, no_dereference=False, filesystem=filesystem.DEFAULT):
    '''
    Set the path's times. A field left as None in the application is filled
    from the path's current metadata, so it stays exactly as it was.

    no_dereference:
        If the path is a symlink, set the link's own times instead of its
        target's. Raises UnsupportedOperationError if the platform can't.
    '''
    follow_symlinks = True
    if no_dereference and filesystem.is_link(path):
        if not filesystem.supports_link_times():
            log.warning('Cannot set timestamps on the symlink itself on this platform: %s', path)
            raise exceptions.UnsupportedOperationError(
                f'Symlink timestamp modification is not supported on this platform: {path}'
            )
        follow_symlinks = False

    current = filesystem.read_metadata(path, follow_symlinks=follow_symlinks)

    if application.accessed is None:
        accessed_ns = current.accessed_ns
    else:
        accessed_ns = timetools.to_ns(application.accessed)

    if application.modified is None:
        modified_ns = current.modified_ns
    else:
        modified_ns = timetools.to_ns(application.modified)

    filesystem.set_times(path, accessed_ns, modified_ns, follow_symlinks=follow_symlinks)
