# License: BSD3

"""
Word level lexical features looked up in a lexicon, in the manner of
Kuperman et al. (2012) who use the English Lexicon Project.

The lexicon is a CSV file with a header row: one row per word, one
column per feature. Each token found in the lexicon gets one `Score`
per feature: ::

    Score (4,7) {'name': 'WordFrequency', 'value': '3124.0', 'level': 'Token'}
"""

import csv
import warnings

from listenability.annotation import Span
from .base import TOKEN, Engine
from .ortmann19 import SCORE


DEFAULT_LEXICON = 'english-lexicon-project.csv'

DEFAULT_WORD_COLUMN = 'Word'

DEFAULT_MAPPING = (
    'Length:OrthographicLength,'
    'Freq_HAL:WordFrequency,'
    'Ortho_N:OrthographicNeighbors,'
    'Phono_N:PhonologicalNeighbors,'
    'Phono_N_H:PhonologicalNeighborsNH,'
    'OG_N:PhonographicNeighbors,'
    'OG_N_H:PhonographicNeighborsNH,'
    'Freq_N:FreqOrthographicNeighbors,'
    'Freq_N_P:FreqPhonologicalNeighbors,'
    'Freq_N_PH:FreqPhonologicalNeighborsNH,'
    'Freq_N_OG:FreqPhonographicNeighbors,'
    'Freq_N_OGH:FreqPhonographicNeighborsNH,'
    'OLD:OLD20,'
    'PLD:PLD20,'
    'BG_Mean:MeanBigramFrequencies,'
    'BG_Sum:SumBigramFrequencies,'
    'NSyll:SyllableCount,'
    'NMorph:MorphemeCount,'
    'NPhon:PhonemesCount')
"""
Lexicon columns to score names, as `column:name,column:name,...`.
Columns left out of the mapping are ignored.
"""


def parse_mapping(string):
    """
    Parse a `column:name,...` mapping into a dictionary.

    Malformed entries are skipped with a warning
    """
    mapping = {}
    for item in string.split(','):
        parts = item.split(':')
        if len(parts) == 2 and all(parts):
            mapping[parts[0].strip()] = parts[1].strip()
        else:
            warnings.warn("Found malformed mapping at '%s'" % item)
    return mapping


def read_lexicon(path, word_column=DEFAULT_WORD_COLUMN, mapping=None):
    """
    Read a lexicon CSV file.

    Returns
    -------
    lexicon : dict(string, dict(string, float))
        Feature values by lowercased word. Empty cells are left out.

    Raise ValueError if there is no word column or a value is not a
    number
    """
    mapping = parse_mapping(DEFAULT_MAPPING) if mapping is None else mapping
    lexicon = {}
    with open(path, newline='') as stream:
        reader = csv.DictReader(stream)
        if word_column not in (reader.fieldnames or []):
            raise ValueError("No %s column in lexicon %s"
                             % (word_column, path))
        for row in reader:
            entry = {}
            for column, name in mapping.items():
                value = row.get(column)
                if value is None or value == '':
                    continue
                entry[name] = float(value)
            lexicon[row[word_column].lower()] = entry
    return lexicon


class Kuperman12(Engine):
    """
    Scores each token with the features its lowercased text has in a
    lexicon. Tokens missing from the lexicon are not scored.

    Needs tokens (see `Tokenizer`). The lexicon is read when the
    engine is created, so a missing file is reported before any
    document is processed.

    Parameters
    ----------
    lexicon : string, optional
        Path to the lexicon CSV file
    word_column : string, optional
        Header of the column holding the words
    mapping : dict or string, optional
        Lexicon columns to score names (see `DEFAULT_MAPPING`)
    """
    NAME = 'kuperman12'
    PRODUCES = (SCORE,)

    def __init__(self, lexicon=DEFAULT_LEXICON,
                 word_column=DEFAULT_WORD_COLUMN,
                 mapping=None):
        if isinstance(mapping, str):
            mapping = parse_mapping(mapping)
        self.lexicon = read_lexicon(lexicon, word_column, mapping)

    def produced(self, doc):
        return [x for x in Engine.produced(self, doc)
                if x.features.get('level') == TOKEN]

    def annotate(self, doc):
        for token in doc.index.select(TOKEN):
            entry = self.lexicon.get(doc.text(token.span).lower())
            if not entry:
                continue
            for name in sorted(entry):
                doc.add_unit(SCORE, Span(token.span.char_start,
                                         token.span.char_end),
                             {'name': name,
                              'value': repr(entry[name]),
                              'level': TOKEN})
