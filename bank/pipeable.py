'''
This module provides functions for writing bank's output and for resolving the
PATH arguments.

A PATH argument of !i reads newline separated paths from stdin, and !c reads
them from the clipboard. Anything else is taken literally, so a path string
keeps its trailing separator.
'''
# import pyperclip moved to stay lazy.
import sys

CLIPBOARD_STRINGS = ['!c', '!clip', '!clipboard']
INPUT_STRINGS = ['!i', '!in', '!input', '!stdin']
EOF = '\x1a'

def ctrlc_return1(function):
    '''
    Apply this decorator to the argparse gateway, and if the user presses
    ctrl+c then the gateway will return 1 as its status code without the
    stacktrace appearing.
    '''
    def wrapped(*args, **kwargs):
        try:
            return function(*args, **kwargs)
        except KeyboardInterrupt:
            return 1
    return wrapped

def _multi_line_input():
    while True:
        line = sys.stdin.readline()
        parts = line.split(EOF)
        line = parts[0]
        has_eof = len(parts) > 1

        # An empty string means EOF was the first character of the line, not
        # that the user submitted a blank line, which would be '\n'.
        if line == '':
            break

        line = line.rstrip('\n')
        yield line

        if has_eof:
            break

def input(arg, *, skip_blank=False, strip=False):
    '''
    Resolve one argument into a list of lines.

    If the arg is in CLIPBOARD_STRINGS, the contents of the clipboard are taken.
    If the arg is in INPUT_STRINGS, lines are read from stdin until EOF.
    Otherwise the argument is a single literal line, returned as is.
    '''
    if not isinstance(arg, str):
        raise TypeError(f'arg should be {str}, not {type(arg)}.')

    arg_lower = arg.lower()

    if arg_lower in INPUT_STRINGS:
        lines = list(_multi_line_input())

    elif arg_lower in CLIPBOARD_STRINGS:
        import pyperclip
        lines = pyperclip.paste().splitlines()

    else:
        return [arg]

    if strip:
        lines = [line.strip() for line in lines]
    if skip_blank:
        lines = [line for line in lines if line]

    return lines

def input_many(args, *input_args, **input_kwargs):
    '''
    Given a list of arguments, yield the input() results for all of them.
    '''
    if isinstance(args, str):
        yield from input(args, *input_args, **input_kwargs)
        return

    for arg in args:
        yield from input(arg, *input_args, **input_kwargs)

def output(stream, line, *, end):
    line = str(line)
    stream.write(line)
    if not line.endswith(end):
        stream.write(end)
    if stream.isatty():
        stream.flush()

def stdout(line='', end='\n'):
    # In pythonw, stdout is None.
    if sys.stdout is not None:
        output(sys.stdout, line, end=end)

def stderr(line='', end='\n'):
    # In pythonw, stderr is None.
    if sys.stderr is not None:
        output(sys.stderr, line, end=end)

def stdout_tty():
    if sys.stdout is not None and sys.stdout.isatty():
        return sys.stdout

def stderr_tty():
    if sys.stderr is not None and sys.stderr.isatty():
        return sys.stderr
