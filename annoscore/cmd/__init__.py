# License: BSD3

"""
Subcommands for the annoscore utility
"""

import argparse

from annoscore.util import add_subcommand
from . import annotate, score

SUBCOMMANDS = [score,
               annotate]


def main(argv=None):
    """
    Parse the command line and run the requested subcommand
    """
    arg_parser = argparse.ArgumentParser(
        description='Score documents by the words they contain')
    subparsers = arg_parser.add_subparsers(dest='subcommand',
                                           help='sub-command help')
    subparsers.required = True
    for module in SUBCOMMANDS:
        subparser = add_subcommand(subparsers, module)
        module.config_argparser(subparser)
    args = arg_parser.parse_args(argv)
    args.func(args)
