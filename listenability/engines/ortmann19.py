# License: BSD3

"""
Listenability features of Ortmann et al. (2019), "Variation between
different discourse types: literate vs. oral".

Each feature is computed for units of some levels (document,
paragraph, sentence) and stored as a `Score` unit over the same span
as the unit it scores: ::

    Score (0,57) {'name': 'mean_word', 'value': '4.2', 'level': 'Paragraph'}

Only the features that can be computed from tokens alone are here
(those needing a part of speech tagger or a parser are not).
"""

import numpy as np

from listenability.annotation import Span
from .base import (DOCUMENT, PARAGRAPH, SENTENCE, TOKEN,
                   DeltaComponent)
from .tokenizer import TOKEN_KIND


SCORE = 'Score'


def _covered(doc, unit, atype):
    "units of the given type within the unit"
    return [x for x in doc.index.covered_by(unit.span.char_start,
                                            unit.span.char_end)
            if x.type == atype]


def _words(doc, unit):
    "non-punctuation tokens within the unit"
    return [x for x in _covered(doc, unit, TOKEN)
            if x.features.get(TOKEN_KIND) != 'punct']


def _mean(values):
    return float(np.mean(values)) if values else 0.0


def _median(values):
    return float(np.median(values)) if values else 0.0


def _final_punctuation(doc, sentence, mark):
    "true if the last token of the sentence is punctuation with the mark"
    tokens = _covered(doc, sentence, TOKEN)
    if not tokens:
        return False
    last = max(tokens, key=lambda x: x.span.char_end)
    return last.features.get(TOKEN_KIND) == 'punct' and\
        mark in doc.text(last.span)


class Feature(object):
    """
    A named value computed for units of certain levels
    """
    NAME = None
    LEVELS = frozenset()

    def check(self, level):
        """
        True if this feature can be computed for units of this level
        """
        return level in self.LEVELS

    def compute(self, doc, unit):
        """
        Value of this feature for a unit of the document
        """
        raise NotImplementedError()


class MeanWordLength(Feature):
    "mean word length in characters, punctuation excluded"
    NAME = 'mean_word'
    LEVELS = frozenset([DOCUMENT, PARAGRAPH, SENTENCE])

    def compute(self, doc, unit):
        return _mean([x.span.length() for x in _words(doc, unit)])


class MedianWordLength(Feature):
    "median word length in characters, punctuation excluded"
    NAME = 'med_word'
    LEVELS = frozenset([DOCUMENT, PARAGRAPH, SENTENCE])

    def compute(self, doc, unit):
        return _median([x.span.length() for x in _words(doc, unit)])


class MeanSentenceLength(Feature):
    "mean sentence length in words"
    NAME = 'mean_sent'
    LEVELS = frozenset([DOCUMENT, PARAGRAPH])

    def compute(self, doc, unit):
        return _mean([len(_words(doc, x))
                      for x in _covered(doc, unit, SENTENCE)])


class MedianSentenceLength(Feature):
    "median sentence length in words"
    NAME = 'med_sent'
    LEVELS = frozenset([DOCUMENT, PARAGRAPH])

    def compute(self, doc, unit):
        return _median([len(_words(doc, x))
                        for x in _covered(doc, unit, SENTENCE)])


class Question(Feature):
    "share of sentences that are questions"
    NAME = 'question'
    LEVELS = frozenset([DOCUMENT, PARAGRAPH])
    MARK = '?'

    def compute(self, doc, unit):
        sentences = _covered(doc, unit, SENTENCE)
        marked = [x for x in sentences
                  if _final_punctuation(doc, x, self.MARK)]
        return float(len(marked)) / len(sentences) if sentences else 0.0


class AnswerParticles(Feature):
    "share of words that are answer particles"
    NAME = 'PTC'
    LEVELS = frozenset([DOCUMENT, PARAGRAPH, SENTENCE])
    PARTICLES = frozenset(['yes', 'no', 'please', 'thanks'])

    def compute(self, doc, unit):
        words = [doc.text(x.span).lower() for x in _words(doc, unit)]
        particles = [x for x in words if x in self.PARTICLES]
        return float(len(particles)) / len(words) if words else 0.0


FEATURES = dict((x.NAME, x) for x in [MeanWordLength,
                                      MedianWordLength,
                                      MeanSentenceLength,
                                      MedianSentenceLength,
                                      Question,
                                      AnswerParticles])
"""
Feature classes by name
"""


def score_value(doc, unit, name):
    """
    The score of that name for the unit, as a float (None if the unit
    has not been scored)
    """
    for score in doc.index.at(unit.span, SCORE):
        if score.features.get('name') == name and\
                score.features.get('level') == unit.type:
            return float(score.features['value'])
    return None


class Ortmann19(DeltaComponent):
    """
    Scores documents, paragraphs and sentences with the Ortmann19
    features.

    Needs tokens, sentences and paragraphs (see `Tokenizer`). After an
    edit, sentence and paragraph scores away from the edit are kept;
    only missing scores are computed.

    Parameters
    ----------
    features : list of string, optional
        Names of the features to compute (default: all of `FEATURES`)
    """
    NAME = 'ortmann19'
    PRODUCES = (SCORE,)
    LEVELS = (DOCUMENT, PARAGRAPH, SENTENCE)

    def __init__(self, features=None):
        names = sorted(FEATURES) if features is None else features
        unknown = [x for x in names if x not in FEATURES]
        if unknown:
            raise ValueError("Unknown Ortmann19 features: " +
                             ", ".join(unknown))
        self.features = [FEATURES[x]() for x in names]

    def produced(self, doc):
        return [x for x in DeltaComponent.produced(self, doc)
                if x.features.get('level') in self.LEVELS]

    def is_local_to_sentence(self):
        return True

    def is_local_to_paragraph(self):
        return True

    def keep(self, annotation, in_paragraph, in_sentence):
        level = annotation.features.get('level')
        if level == SENTENCE:
            return not in_sentence
        elif level == PARAGRAPH:
            return not in_paragraph
        else:
            return False

    def _drop_orphans(self, doc):
        "remove scores whose unit is no longer there"
        for score in self.produced(doc):
            level = score.features.get('level')
            if not doc.index.at(score.span, level):
                doc.index.remove(score)

    def annotate(self, doc):
        self._drop_orphans(doc)
        for level in self.LEVELS:
            for unit in doc.index.select(level):
                for feature in self.features:
                    if not feature.check(level):
                        continue
                    if score_value(doc, unit, feature.NAME) is not None:
                        continue
                    value = feature.compute(doc, unit)
                    doc.add_unit(SCORE, Span(unit.span.char_start,
                                             unit.span.char_end),
                                 {'name': feature.NAME,
                                  'value': repr(value),
                                  'level': level})
