# License: BSD3

"""
Analysis engines and the registry to build pipelines of them by name.

Engines are looked up in `ENGINES`; to make a new engine available,
add its class there.
"""

from .base import (DOCUMENT, PARAGRAPH, SENTENCE, TOKEN,
                   DeltaComponent, Engine)
from .kuperman12 import Kuperman12
from .ortmann19 import FEATURES, SCORE, Ortmann19, score_value
from .tokenizer import Tokenizer


ENGINES = dict((x.NAME, x) for x in [Tokenizer, Ortmann19, Kuperman12])
"""
Engine classes by name
"""


class UnknownEngineError(Exception):
    """
    An engine name that is not in the registry
    """
    def __init__(self, msg):
        super(UnknownEngineError, self).__init__(msg)


def build_pipeline(names, options=None):
    """
    Instantiate the named engines, in order

    Parameters
    ----------
    names : list of string
        Keys of `ENGINES`
    options : dict(string, dict), optional
        Keyword arguments to pass to the constructor of some engines,
        by engine name

    Raise UnknownEngineError if any of the names is not registered
    """
    unknown = [x for x in names if x not in ENGINES]
    if unknown:
        raise UnknownEngineError(
            "Unknown engine(s): {} (known: {})".format(
                ", ".join(unknown), ", ".join(sorted(ENGINES))))
    options = options or {}
    return [ENGINES[x](**options.get(x, {})) for x in names]


def run_pipeline(doc, engines):
    """
    Run each engine over the document, in order
    """
    for engine in engines:
        engine.process(doc)
    return doc
