import datetime

class NanoDatetime(datetime.datetime):
    '''
    A datetime that remembers the exact nanosecond count it was made from, so
    that to_ns can give back more than the microsecond field holds.
    Arithmetic or replace() on it produces a datetime whose ns is None.
    '''
    ns = None

def now():
    return datetime.datetime.now(tz=datetime.timezone.utc)

def fromtimestamp(unix):
    return datetime.datetime.fromtimestamp(unix, tz=datetime.timezone.utc)

def from_ns(ns):
    '''
    Convert integer nanoseconds since the epoch, as found on os.stat_result's
    st_*time_ns, into a utc datetime. The datetime fields only go down to the
    microsecond, but the full value is kept on its ns attribute.
    '''
    (seconds, remainder) = divmod(ns, 1_000_000_000)
    moment = fromtimestamp(seconds) + datetime.timedelta(microseconds=remainder // 1000)
    moment = NanoDatetime.combine(moment.date(), moment.timetz())
    moment.ns = ns
    return moment

def to_ns(moment):
    '''
    Convert a datetime into integer nanoseconds since the epoch, suitable for
    os.utime(ns=...). Naive datetimes are taken to be utc.
    '''
    exact = getattr(moment, 'ns', None)
    if exact is not None:
        return exact
    if moment.tzinfo is None:
        moment = moment.replace(tzinfo=datetime.timezone.utc)
    delta = moment - EPOCH
    return (delta.days * 86400 + delta.seconds) * 1_000_000_000 + delta.microseconds * 1000

EPOCH = datetime.datetime(1970, 1, 1, tzinfo=datetime.timezone.utc)
