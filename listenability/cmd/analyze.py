# License: BSD3

"""Analyse plain text documents

Reads a directory of UTF-8 `.txt` files, runs the analysis engines
over each, and saves the results as `<doc>.xmi`.
"""

import os
import sys

from listenability.corpus import TextReader
from listenability.engines import (UnknownEngineError,
                                   build_pipeline, run_pipeline)
from listenability.xmi import write_xmi_file

from .args import (DEFAULT_ENGINES, add_engine_args, engine_options,
                   add_usual_input_args, add_usual_output_args,
                   announce_output_dir, get_output_dir, read_corpus)


NAME = 'analyze'


def config_argparser(parser):
    """
    Subcommand flags.

    You should create and pass in the subparser to which the flags
    are to be added.
    """
    add_usual_input_args(parser)
    add_usual_output_args(parser)
    add_engine_args(parser, default=DEFAULT_ENGINES)
    parser.set_defaults(func=main)


def main(args):
    """
    Subcommand main.

    You shouldn't need to call this yourself if you're using
    `config_argparser`
    """
    try:
        engines = build_pipeline(args.engines, engine_options(args))
    except (UnknownEngineError, OSError, ValueError) as oops:
        sys.exit(str(oops))
    corpus = read_corpus(args, TextReader(args.corpus))
    output_dir = get_output_dir(args)
    for key in sorted(corpus):
        doc = run_pipeline(corpus[key], engines)
        write_xmi_file(os.path.join(output_dir, key.doc + '.xmi'), doc)
    announce_output_dir(output_dir)
