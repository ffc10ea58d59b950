'''
vlogging
========

This module forwards everything from logging, with the addition of levels LOUD
and SILENT, and all loggers from get_logger are given the `loud` method.

bank's main function is wrapped by main_decorator, so the user can pass
--loud, --debug, --warning, --quiet, or --silent on the command line to choose
how much of the log reaches stderr. These flags are removed from argv before
the argparser sees them.
'''
from logging import *

_getLogger = getLogger

# The root logger gets no level of its own so that each handler can choose
# what it wants to receive.
root = getLogger()
root.setLevel(NOTSET)

LOUD = 1
SILENT = 99999999999

LEVEL_FLAGS = {
    '--loud': LOUD,
    '--debug': DEBUG,
    '--warning': WARNING,
    '--quiet': ERROR,
    '--silent': SILENT,
}

BETTERHELP_EPILOGUE = '''
You can add these flags to choose how much logging is shown on stderr:

--loud
--debug
--warning
--quiet
--silent

The default level is INFO.
'''

def add_loud(log):
    '''
    Add the `loud` method to the given logger.
    '''
    def loud(self, message, *args, **kwargs):
        if self.isEnabledFor(LOUD):
            self._log(LOUD, message, args, **kwargs)

    addLevelName(LOUD, 'LOUD')
    log.loud = loud.__get__(log, log.__class__)

def basic_config(level):
    '''
    Add a stderr handler with the given level to the root logger, but only if
    it has no handlers yet.
    '''
    if root.handlers:
        return

    handler = StreamHandler()
    handler.setFormatter(Formatter('{levelname}:{name}:{message}', style='{'))
    handler.setLevel(level)
    root.addHandler(handler)

def get_level_by_argv(argv):
    '''
    Return the log level chosen by the first LEVEL_FLAGS flag found in argv,
    or INFO if there are none, along with a copy of argv that has every level
    flag removed.
    '''
    level = INFO
    found = False
    new_argv = []
    for arg in argv:
        if arg in LEVEL_FLAGS:
            if not found:
                level = LEVEL_FLAGS[arg]
                found = True
            continue
        new_argv.append(arg)

    return (level, new_argv)

def get_logger(name=None, main_fallback=None):
    '''
    When running a module directly, its __name__ is "__main__", which is not
    a helpful name to see in the log. main_fallback is used instead in
    that case.
    '''
    if name == '__main__' and main_fallback is not None:
        name = main_fallback
    log = _getLogger(name)
    add_loud(log)
    return log

getLogger = get_logger

def main_decorator(main):
    '''
    Add this decorator to the application's main function to set the stderr
    handler level from argv before the argparser runs.
    '''
    from bank import betterhelp
    betterhelp.HELPTEXT_EPILOGUES.add(BETTERHELP_EPILOGUE)

    def wrapped(argv):
        argv = main_level_by_argv(argv)
        return main(argv)
    return wrapped

def main_level_by_argv(argv):
    '''
    Put a handler on the root logger with the level chosen by argv, then
    return the rest of argv for the argparser.
    '''
    (level, argv) = get_level_by_argv(argv)

    basic_config(level)

    return argv
