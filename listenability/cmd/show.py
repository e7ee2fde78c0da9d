# License: BSD3

"""Display the annotations of an XMI document
"""

from collections import Counter
import sys

from tabulate import tabulate

from listenability.xmi import InvalidDocumentError, read_xmi_file


NAME = 'show'

MAX_TEXT = 40


def _snippet(doc, unit):
    "text under a unit, shortened for display"
    text = (doc.text(unit.span) or '').replace('\n', ' ')
    if len(text) > MAX_TEXT:
        text = text[:MAX_TEXT - 3] + '...'
    return text


def annotation_table(doc, atype=None):
    """
    Table (as a string) of the annotations in a document, optionally
    restricted to a type
    """
    headers = ['id', 'type', 'start', 'end', 'text', 'features']
    rows = []
    for unit in doc.index.select(atype):
        feats = ' '.join('%s=%s' % (k, unit.features[k])
                         for k in sorted(unit.features))
        rows.append([unit.local_id(), unit.type,
                     unit.span.char_start, unit.span.char_end,
                     _snippet(doc, unit), feats])
    return tabulate(rows, headers=headers)


def count_table(doc):
    """
    Table (as a string) counting the annotations of each type
    """
    counts = Counter(x.type for x in doc.index)
    rows = sorted(counts.items())
    return tabulate(rows, headers=['type', 'count'])


def config_argparser(parser):
    """
    Subcommand flags.

    You should create and pass in the subparser to which the flags
    are to be added.
    """
    parser.add_argument('input', metavar='FILE',
                        help='XMI document')
    parser.add_argument('--type', metavar='TYPE',
                        help='only show annotations of this type')
    parser.add_argument('--count', action='store_true',
                        help='count annotations per type instead')
    parser.set_defaults(func=main)


def main(args):
    """
    Subcommand main.

    You shouldn't need to call this yourself if you're using
    `config_argparser`
    """
    try:
        doc = read_xmi_file(args.input)
    except InvalidDocumentError as oops:
        sys.exit("%s: %s" % (args.input, oops))
    if args.count:
        print(count_table(doc))
    else:
        print(annotation_table(doc, atype=args.type))
