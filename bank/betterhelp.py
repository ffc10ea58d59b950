'''
Colorized help text for bank's argparser.

Running bank with -h, --help, or with no arguments at all prints the program
description, the invocation, and the help of every argument to stderr.
'''
import argparse
import os
import re
import sys
import textwrap

from bank import colors
from bank import pipeable
from bank import vlogging

log = vlogging.get_logger(__name__)

HELP_ARGS = {'-h', '--help'}

# Modules can add additional helptexts to this set, and they will appear
# after the program's main docstring is shown. vlogging.main_decorator uses
# this to document --debug, --quiet etc., which the argparser never sees.
HELPTEXT_EPILOGUES = set()

FLAG_TYPES = {
    argparse._StoreTrueAction,
    argparse._StoreFalseAction,
    argparse._StoreConstAction,
}

# INTERNALS
################################################################################

def can_use_bare(parser) -> bool:
    '''
    Return true if the given parser has no required arguments, ie can run bare.
    '''
    has_func = bool(parser.get_default('func'))
    has_required_args = any(is_required(action) for action in parser._actions)
    return has_func and not has_required_args

def get_program_name():
    program_name = os.path.basename(sys.argv[0])
    program_name = re.sub(r'\.pyw?$', '', program_name)
    if program_name in {'__main__', ''}:
        program_name = 'bank'
    return program_name

def is_required(action):
    # Positionals with nargs=* are marked required by argparse but can be
    # omitted.
    if action.option_strings == [] and action.nargs == '*':
        return False
    return action.required

def render_nargs(argname, nargs):
    if nargs is None:
        return argname
    elif isinstance(nargs, int):
        return ' '.join([argname] * nargs)
    elif nargs == '?':
        return f'[{argname}]'
    elif nargs == '*':
        return f'[{argname}, {argname}, ...]'
    elif nargs == '+':
        return f'{argname} [{argname}, ...]'
    return argname

def make_helptext(parser, *, do_colors=True, program_name=None):
    # The text goes out on stderr, but only colorize it if both stdout and
    # stderr are tty.
    color = colors.get_palette(
        do_colors=do_colors,
        streams=[pipeable.stdout_tty, pipeable.stderr_tty],
    )

    if program_name is None:
        program_name = get_program_name()

    positional_actions = []
    named_actions = []
    flag_actions = []
    all_names = {}

    for action in parser._actions:
        if type(action) is argparse._HelpAction:
            continue

        if type(action) is argparse._StoreAction:
            if action.option_strings == []:
                positional_actions.append(action)
                all_names[action.metavar or action.dest] = color.positional
            else:
                named_actions.append(action)
                for alias in action.option_strings:
                    all_names[alias] = color.named
        elif type(action) in FLAG_TYPES:
            flag_actions.append(action)
            for alias in action.option_strings:
                all_names[alias] = color.flag
        else:
            raise TypeError(f'betterhelp doesn\'t know what to do with {action}.')

    # Longest names first so that --no-create is colored before -c can claim
    # part of it.
    ordered_names = sorted(all_names, key=len, reverse=True)

    def colorize_names(text):
        if not color:
            return text
        for name in ordered_names:
            code = all_names[name]
            text = re.sub(rf'((?:^|(?<=\s)){re.escape(name)}(?![\w-]))', rf'{code}\1{color.reset}', text)
        return text

    main_invocation = [program_name]
    action_invocations = {}

    for action in positional_actions:
        argname = action.metavar or action.dest
        inv = f'{color.positional}{render_nargs(argname, action.nargs)}{color.reset}'
        action_invocations[action] = [inv]
        main_invocation.append(inv)

    for action in named_actions:
        argname = action.metavar or action.dest
        action_invocations[action] = [
            f'{color.named}{alias} {render_nargs(argname, action.nargs)}{color.reset}'
            for alias in action.option_strings
        ]
        if action.required:
            main_invocation.append(action_invocations[action][0])

    if any(not action.required for action in named_actions):
        main_invocation.append(f'{color.named}[options]{color.reset}')

    for action in flag_actions:
        action_invocations[action] = [
            f'{color.flag}{alias}{color.reset}'
            for alias in action.option_strings
        ]

    if flag_actions:
        main_invocation.append(f'{color.flag}[flags]{color.reset}')

    program_description = parser.description or ''
    program_description = textwrap.dedent(program_description).strip()

    argument_helps = []
    for action in (positional_actions + named_actions + flag_actions):
        inv = '\n'.join(action_invocations[action])
        arghelp = []
        if action.help is not None:
            arghelp.append(textwrap.dedent(action.help).strip())
        if type(action) is argparse._StoreAction and action.default is not None:
            arghelp.append(f'Default: {repr(action.default)}')
        if action.option_strings and action.required:
            arghelp.append(f'{color.required}(*){color.reset} Required')
        arghelp = '\n'.join(arghelp)
        arghelp = colorize_names(arghelp)
        arghelp = textwrap.indent(arghelp, '    ')
        argument_helps.append(f'{inv}\n{arghelp}'.strip())

    main_invocation = '> ' + ' '.join(main_invocation)

    example_invocations = []
    for example in getattr(parser, 'examples', []):
        if isinstance(example, dict):
            comment = example.get('comment')
            example = example['args']
        else:
            comment = None
        example_invocation = f'> {program_name} {colorize_names(example)}'
        if comment:
            example_invocation = f'# {comment}\n{example_invocation}'
        example_invocations.append(example_invocation)

    example_invocations = '\n\n'.join(example_invocations)
    if example_invocations:
        example_invocations = f'Examples:\n{example_invocations}'

    headline = program_name + '\n' + ('=' * len(program_name))

    parts = [
        headline,
        program_description,
        main_invocation,
        '\n\n'.join(argument_helps),
        example_invocations,
    ]
    parts = [part.strip() for part in parts if part]
    parts = [part for part in parts if part]
    helptext = '\n\n'.join(parts)
    return helptext

def print_helptext(text) -> None:
    '''
    Print the given text to stderr, along with any epilogues added by
    other modules.
    '''
    fulltext = []
    fulltext.append(text.strip())
    epilogues = {textwrap.dedent(epi).strip() for epi in HELPTEXT_EPILOGUES}
    fulltext.extend(sorted(epi.strip() for epi in epilogues))
    separator = '\n' + ('-' * 80) + '\n'
    fulltext = separator.join(fulltext)
    # Ensure one blank line above helptext.
    pipeable.stderr()
    pipeable.stderr(fulltext)

# MAINS
################################################################################

def go(parser, argv):
    '''
    Show the helptext and return 1 if argv asks for help or is empty while the
    parser has required arguments. Otherwise parse argv and return the result
    of calling args.func(args).
    '''
    needs_help = (
        any(arg.lower() in HELP_ARGS for arg in argv) or
        len(argv) == 0 and not can_use_bare(parser)
    )
    if needs_help:
        do_colors = colors.colors_wanted()
        print_helptext(make_helptext(parser, do_colors=do_colors))
        return 1

    args = parser.parse_args(argv)
    return args.func(args)
