'''
Console colors for bank's output and help text. Colors are only used when the
relevant streams are terminals and the NO_COLOR environment variable is unset.
'''
import colorama
import os

from bank import pipeable

class Palette:
    def __init__(self, **codes):
        self.codes = codes
        for (name, code) in codes.items():
            setattr(self, name, code)

    def __bool__(self):
        return any(self.codes.values())

    def __repr__(self):
        return f'Palette({self.codes})'

    def paint(self, name, text):
        code = self.codes[name]
        if not code:
            return str(text)
        return f'{code}{text}{self.reset}'

NAMES = [
    'positional',
    'named',
    'flag',
    'headline',
    'version',
    'path',
    'created',
    'existing',
    'link',
    'check',
    'required',
    'reset',
]

PLAIN = Palette(**{name: '' for name in NAMES})

def colors_wanted():
    return os.environ.get('NO_COLOR', None) is None

def get_palette(do_colors=True, streams=None):
    '''
    Return the colorful Palette if do_colors is True, NO_COLOR is unset and
    every stream in `streams` is a tty. Otherwise return PLAIN, whose codes are
    all empty strings.

    streams:
        A list of tty checks from pipeable. Defaults to stdout only.
    '''
    if streams is None:
        streams = [pipeable.stdout_tty]

    if not (do_colors and colors_wanted()):
        return PLAIN

    if not all(check() for check in streams):
        return PLAIN

    colorama.init()
    style = colorama.Style
    fore = colorama.Fore
    return Palette(
        positional=style.BRIGHT + fore.CYAN,
        named=style.BRIGHT + fore.GREEN,
        flag=style.BRIGHT + fore.MAGENTA,
        headline=style.BRIGHT + fore.GREEN,
        version=fore.CYAN,
        path=fore.YELLOW,
        created=fore.GREEN,
        existing=fore.YELLOW,
        link=fore.CYAN,
        check=style.BRIGHT + fore.GREEN,
        required=style.BRIGHT + fore.RED,
        reset=style.RESET_ALL,
    )
