# License: BSD3

"""Apply delta requests to their documents

Reads a directory of delta requests (`.json` or `.json.gz`), applies
each one, optionally re-analyses the edited document, and writes a
`<doc>.json` response holding the new XMI and the client state.
"""

import codecs
import os
import sys
import warnings

from listenability.delta import (MalformedEditsError,
                                 process_request, write_response)
from listenability.delta.reader import DeltaReader
from listenability.engines import (UnknownEngineError,
                                   build_pipeline, run_pipeline)
from listenability.xmi import InvalidDocumentError
import listenability.util

from .args import (add_engine_args, engine_options,
                   add_usual_input_args, add_usual_output_args,
                   announce_output_dir, get_output_dir)


NAME = 'apply-delta'


def apply_one(request, engines):
    """
    Apply a single request and re-analyse the result.

    Returns
    -------
    response : DeltaResponse
    """
    response = process_request(request)
    run_pipeline(response.doc, engines)
    return response


def save_response(output_dir, key, response):
    """
    Write a response as `<doc>.json` in the output dir
    """
    path = os.path.join(output_dir, key.doc + '.json')
    with codecs.open(path, 'w', 'utf-8') as fout:
        fout.write(write_response(response))
    return path


def config_argparser(parser):
    """
    Subcommand flags.

    You should create and pass in the subparser to which the flags
    are to be added.
    """
    add_usual_input_args(parser)
    add_usual_output_args(parser)
    add_engine_args(parser)
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
    reader = DeltaReader(args.corpus)
    is_interesting = listenability.util.mk_is_interesting(args)
    files = reader.filter(reader.files(), is_interesting)
    if not files:
        sys.exit("No delta requests in %s" % args.corpus)
    output_dir = get_output_dir(args)
    failures = []
    for key in sorted(files):
        if args.verbose:
            print("Applying", key, file=sys.stderr)
        try:
            request = reader.read_file(key, files[key])
            response = apply_one(request, engines)
        except (InvalidDocumentError, MalformedEditsError) as oops:
            warnings.warn("Skipping %s: %s" % (key.doc, oops))
            failures.append(key)
            continue
        if response.dropped:
            warnings.warn("%s: %d annotation(s) did not survive the edits: %s"
                          % (key.doc, len(response.dropped),
                             ", ".join(str(x.local_id())
                                       for x in response.dropped)))
        save_response(output_dir, key, response)
    announce_output_dir(output_dir)
    if failures:
        sys.exit("Could not apply %d of %d request(s)" %
                 (len(failures), len(files)))
