'''
This module provides the interactive prompt used when bank can't tell whether
a path should be a file or a directory.
'''
import string
import sys

from bank import exceptions
from bank import pipeable

def assert_stdin():
    if sys.stdin is None:
        raise exceptions.NoAnswerError('Interactive functions don\'t work when stdin is None.')

def _abc_make_option_letters(options):
    if len(options) > len(string.ascii_lowercase):
        raise ValueError(f'Too many options, max {len(string.ascii_lowercase)}.')
    return {letter: index for (index, letter) in zip(range(len(options)), string.ascii_lowercase)}

def prompt_choice(message, options, default_index=0):
    '''
    Show the message and a lettered menu of options on stderr, and return the
    index of the option the user picked.

    message:
        Shown above the menu.

    options:
        A list of strings.

    default_index:
        The index returned when the user submits a blank line. It is marked
        with an asterisk in the menu.

    The user may type the letter or the full option text. Unrecognized input
    shows the menu again. If stdin is missing or runs out before an answer is
    given, NoAnswerError is raised.
    '''
    assert_stdin()

    if not options:
        raise ValueError('options must not be empty.')

    if not 0 <= default_index < len(options):
        raise IndexError(f'default_index {default_index} is out of range.')

    option_letters = _abc_make_option_letters(options)
    option_names = {option.lower(): index for (index, option) in enumerate(options)}
    default_letter = string.ascii_lowercase[default_index]

    while True:
        pipeable.stderr(message)
        for (letter, index) in option_letters.items():
            marker = '*' if letter == default_letter else ' '
            pipeable.stderr(f'{marker}{letter}. {options[index]}')

        try:
            choice = input(f'[{default_letter}]> ')
        except EOFError:
            raise exceptions.NoAnswerError(f'No answer for: {message}') from None
        choice = choice.strip().lower()

        if not choice:
            return default_index

        if choice in option_letters:
            return option_letters[choice]

        if choice in option_names:
            return option_names[choice]

        pipeable.stderr()
