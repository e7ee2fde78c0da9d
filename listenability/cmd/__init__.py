"""
listenability subcommands
"""

# License: BSD3

from . import (analyze,
               apply_delta,
               show)

# at the time of this writing argparse doesn't support a way to group
# subcommands into sections, so we abuse the command epilog
SUBCOMMAND_SECTIONS = [
    ('Analysis', [
        analyze,
        apply_delta,
    ]),
    ('Querying', [
        show,
    ]),
]

SUBCOMMANDS = []
for descr, section in SUBCOMMAND_SECTIONS:
    SUBCOMMANDS.extend(section)
