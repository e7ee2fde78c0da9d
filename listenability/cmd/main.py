# License: BSD3

"""
The `listenability` command and its subcommands
"""

import argparse

from listenability.util import add_subcommand
from . import SUBCOMMAND_SECTIONS, SUBCOMMANDS


def _epilog():
    "list of subcommands, by section"
    lines = []
    for descr, section in SUBCOMMAND_SECTIONS:
        lines.append(descr + ': ' +
                     ', '.join(add_name(x) for x in section))
    return '\n'.join(lines)


def add_name(module):
    "name of the subcommand for a module"
    return getattr(module, 'NAME', module.__name__.split('.')[-1])


def mk_argparser():
    """
    Argument parser with one subparser per subcommand
    """
    arg_parser = argparse.ArgumentParser(
        description='Listenability analysis of texts, and realignment '
        'of their annotations after edits',
        epilog=_epilog(),
        formatter_class=argparse.RawDescriptionHelpFormatter)
    subparsers = arg_parser.add_subparsers(dest='subcommand',
                                           help='sub-command help')
    subparsers.required = True
    for module in SUBCOMMANDS:
        subparser = add_subcommand(subparsers, module)
        module.config_argparser(subparser)
    return arg_parser


def main(argv=None):
    "listenability main"
    args = mk_argparser().parse_args(argv)
    args.func(args)
