# License: BSD3

"""
Command line options
"""

import os
import sys
import tempfile

from listenability.engines import ENGINES
import listenability.util


DEFAULT_ENGINES = 'tokenizer,ortmann19'


def read_corpus(args, reader, verbose=None):
    """
    Read the section of the corpus specified in the command line arguments.
    """
    verbose = args.verbose if verbose is None else verbose
    is_interesting = listenability.util.mk_is_interesting(args)
    files = reader.filter(reader.files(), is_interesting)
    return reader.slurp(files, verbose=verbose)


def get_output_dir(args):
    """Return the output dir specified or inferred from command
    line args.

    We try the following in order:

    1. If `--output` is given explicitly, we'll just use/create that
    2. OK just make a temporary directory. Later on, you'll probably want
       to call `announce_output_dir`.
    """
    if args.output:
        if os.path.isfile(args.output):
            oops = "Sorry, %s already exists and is not a directory" %\
                args.output
            sys.exit(oops)
        elif not os.path.isdir(args.output):
            os.makedirs(args.output)
        return args.output
    else:
        return tempfile.mkdtemp()


def announce_output_dir(output_dir):
    """
    Tell the user where we saved the output
    """
    print("Output files written to", output_dir, file=sys.stderr)


def engine_names(string):
    """
    Split a comma delimited list of engine names. Used for argparse
    (unknown names are left for `build_pipeline` to complain about)
    """
    return [x.strip() for x in string.split(',') if x.strip()]


def add_usual_input_args(parser):
    """Augment a subcommand argparser with typical input arguments:
    a corpus directory, and a `--doc` filter on document names.
    Sometimes your subcommand may require slightly different input
    arguments, in which case, just don't call this function.
    """
    parser.add_argument('corpus', metavar='DIR',
                        help='corpus dir')
    listenability.util.add_corpus_filters(parser, fields=['doc'])
    parser.add_argument('--verbose', '-v', action='store_true',
                        help='report progress on stderr')


def add_usual_output_args(parser):
    """
    Augment a subcommand argparser with typical output arguments,
    Sometimes your subcommand may require slightly different output
    arguments, in which case, just don't call this function.
    """
    parser.add_argument('--output', '-o', metavar='DIR',
                        help='output directory (default mktemp)')


def add_engine_args(parser, default=None):
    """
    Augment a subcommand argparser with a choice of analysis engines
    """
    default_help = 'none' if default is None else default
    parser.add_argument('--engines', metavar='NAMES', type=engine_names,
                        default=engine_names(default) if default else [],
                        help='comma separated analysis engines, among: ' +
                        ', '.join(sorted(ENGINES)) +
                        ' (default: {})'.format(default_help))
    parser.add_argument('--lexicon', metavar='FILE',
                        help='lexicon CSV file for the kuperman12 engine')


def engine_options(args):
    """
    Constructor arguments for the engines, from the command line
    """
    options = {}
    if args.lexicon:
        options['kuperman12'] = {'lexicon': args.lexicon}
    return options
