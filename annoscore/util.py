# License: BSD3

"""
Miscellaneous utility functions
"""


def add_subcommand(subparsers, module):
    '''
    Add a subparser for a subcommand module and return it.

    The module gives the command name in its NAME constant; the first
    line of its docstring is the help text shown in the command list,
    and the whole docstring is the description shown by `--help`.
    '''
    doc = module.__doc__.strip()
    return subparsers.add_parser(module.NAME,
                                 help=doc.split('\n', 1)[0],
                                 description=doc)
