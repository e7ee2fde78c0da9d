# License: BSD3
# pylint: disable=too-many-public-methods, invalid-name

"""
Tests for listenability.engines
"""

import unittest

import pytest

from listenability.annotation import Span, Unit, Document
from listenability.delta import EditPlan, TextEdit, apply_edits

from . import (ENGINES, UnknownEngineError, build_pipeline, run_pipeline)
from .base import (DOCUMENT, PARAGRAPH, SENTENCE, TOKEN,
                   DeltaComponent, delta_markers, touched)
from .kuperman12 import Kuperman12, parse_mapping, read_lexicon
from .ortmann19 import SCORE, Ortmann19, score_value
from .tokenizer import TOKEN_KIND, Tokenizer


def spans(doc, atype):
    "(start, end) of the units of a given type"
    return [(x.span.char_start, x.span.char_end)
            for x in doc.index.select(atype)]


def analysed(text):
    "a document run through the default pipeline"
    doc = Document([], text)
    return run_pipeline(doc, build_pipeline(['tokenizer', 'ortmann19']))


class TokenizerTest(unittest.TestCase):
    "tests for listenability.engines.tokenizer"

    def test_segments(self):
        doc = Document([], 'The cat sat. Did it?')
        Tokenizer().process(doc)
        self.assertEqual([(0, 20)], spans(doc, DOCUMENT))
        self.assertEqual([(0, 20)], spans(doc, PARAGRAPH))
        self.assertEqual([(0, 12), (13, 20)], spans(doc, SENTENCE))
        self.assertEqual([(0, 3), (4, 7), (8, 11), (11, 12),
                          (13, 16), (17, 19), (19, 20)],
                         spans(doc, TOKEN))
        kinds = [x.features[TOKEN_KIND] for x in doc.index.select(TOKEN)]
        self.assertEqual(['word', 'word', 'word', 'punct',
                          'word', 'word', 'punct'], kinds)

    def test_paragraphs(self):
        doc = Document([], '  The cat sat.\n\n\nDid it rain?\n')
        Tokenizer().process(doc)
        self.assertEqual([(2, 14), (17, 29)], spans(doc, PARAGRAPH))
        self.assertEqual('Did it rain?', doc.text(Span(17, 29)))

    def test_rerun(self):
        "running again replaces the earlier segmentation"
        doc = Document([], 'The cat sat.')
        tokenizer = Tokenizer()
        tokenizer.process(doc)
        tokenizer.process(doc)
        self.assertEqual(1, len(doc.index.select(DOCUMENT)))
        self.assertEqual(4, len(doc.index.select(TOKEN)))

    def test_empty(self):
        doc = Document([], '')
        Tokenizer().process(doc)
        self.assertEqual([(0, 0)], spans(doc, DOCUMENT))
        self.assertEqual([], spans(doc, PARAGRAPH))


class Ortmann19Test(unittest.TestCase):
    "tests for listenability.engines.ortmann19"

    def setUp(self):
        self.doc = analysed('The cat sat. Did it?')
        self.document = self.doc.index.select(DOCUMENT)[0]
        self.sentences = self.doc.index.select(SENTENCE)

    def test_document_scores(self):
        def score(name):
            "document level score"
            return score_value(self.doc, self.document, name)
        self.assertAlmostEqual(2.8, score('mean_word'))
        self.assertAlmostEqual(3.0, score('med_word'))
        self.assertAlmostEqual(2.5, score('mean_sent'))
        self.assertAlmostEqual(2.5, score('med_sent'))
        self.assertAlmostEqual(0.5, score('question'))
        self.assertAlmostEqual(0.0, score('PTC'))

    def test_sentence_scores(self):
        first, second = self.sentences
        self.assertAlmostEqual(3.0, score_value(self.doc, first, 'mean_word'))
        self.assertAlmostEqual(2.5,
                               score_value(self.doc, second, 'med_word'))
        # not computed at this level
        self.assertIsNone(score_value(self.doc, first, 'question'))

    def test_one_score_per_unit_and_feature(self):
        # 6 features for the document and the paragraph, 3 per sentence
        self.assertEqual(18, len(self.doc.index.select(SCORE)))
        Ortmann19().process(self.doc)
        self.assertEqual(18, len(self.doc.index.select(SCORE)))

    def test_feature_subset(self):
        doc = Document([], 'Yes. Thanks, please come.')
        run_pipeline(doc, [Tokenizer(), Ortmann19(features=['PTC'])])
        self.assertEqual(['PTC'],
                         [x.features['name']
                          for x in doc.index.select(SCORE)
                          if x.features['level'] == DOCUMENT])
        self.assertAlmostEqual(0.75, score_value(doc,
                                                 doc.index.select(DOCUMENT)[0],
                                                 'PTC'))

    def test_unknown_feature(self):
        self.assertRaises(ValueError, Ortmann19, features=['nope'])


class DeltaComponentTest(unittest.TestCase):
    "re-analysing an edited document"

    def setUp(self):
        self.doc = analysed('The cat sat.\n\nDid it rain?')

    def scores_at(self, doc, start):
        "score units starting at an offset"
        return [x for x in doc.index.select(SCORE)
                if x.span.char_start == start]

    def test_keeps_scores_away_from_edit(self):
        untouched = self.scores_at(self.doc, 14)
        # sentence and paragraph coincide there
        self.assertEqual(9, len(untouched))
        new_doc, _ = apply_edits(EditPlan(self.doc,
                                          [TextEdit(4, 7, 'big dog')]))
        run_pipeline(new_doc, build_pipeline(['tokenizer', 'ortmann19']))
        moved = self.scores_at(new_doc, 18)
        self.assertEqual(9, len(moved))
        for score in untouched:
            self.assertIn(score, new_doc.index)
        # the rest is computed again
        first = new_doc.index.select(SENTENCE)[0]
        self.assertEqual(Span(0, 16), first.span)
        self.assertAlmostEqual(3.0,
                               score_value(new_doc, first, 'mean_word'))
        document = new_doc.index.select(DOCUMENT)[0]
        self.assertAlmostEqual(3.0,
                               score_value(new_doc, document, 'mean_word'))
        self.assertEqual(24, len(new_doc.index.select(SCORE)))

    def test_edit_next_to_sentence(self):
        "an insertion right after a sentence counts as touching it"
        kept = self.scores_at(self.doc, 0)
        new_doc, _ = apply_edits(EditPlan(self.doc,
                                          [TextEdit(12, 12, ' Yes.')]))
        run_pipeline(new_doc, build_pipeline(['tokenizer', 'ortmann19']))
        for score in kept:
            self.assertNotIn(score, new_doc.index)

    def test_no_edits(self):
        "without delta markers, everything is recomputed"
        before = list(self.doc.index.select(SCORE))
        Ortmann19().process(self.doc)
        after = self.doc.index.select(SCORE)
        self.assertEqual(len(before), len(after))
        self.assertFalse(any(x in after for x in before))


def test_keep():
    "Ortmann19 keeps sentence and paragraph scores outside edits"
    engine = Ortmann19()

    def score(level):
        "a score unit at the given level"
        return Unit('1', Span(0, 1), SCORE, {'level': level})
    assert engine.keep(score(SENTENCE), True, False)
    assert not engine.keep(score(SENTENCE), True, True)
    assert engine.keep(score(PARAGRAPH), False, False)
    assert not engine.keep(score(PARAGRAPH), True, False)
    assert not engine.keep(score(DOCUMENT), False, False)


def test_touched():
    "overlap or adjacency"
    sents = [Unit('1', Span(0, 12), SENTENCE),
             Unit('2', Span(14, 26), SENTENCE)]
    assert touched(sents, [Unit('3', Span(12, 12), 'Delta')]) == sents[:1]
    assert touched(sents, [Unit('3', Span(13, 13), 'Delta')]) == []
    assert touched(sents, [Unit('3', Span(10, 20), 'Delta')]) == sents


def test_delta_component_is_abstract():
    with pytest.raises(NotImplementedError):
        DeltaComponent().process(Document([], 'Hi.'))


def test_registry():
    assert sorted(ENGINES) == ['kuperman12', 'ortmann19', 'tokenizer']
    engines = build_pipeline(['tokenizer', 'ortmann19'])
    assert [type(x) for x in engines] == [Tokenizer, Ortmann19]
    with pytest.raises(UnknownEngineError):
        build_pipeline(['tokenizer', 'parser'])


def test_delta_markers():
    doc = Document([], 'The cat sat.')
    Tokenizer().process(doc)
    assert delta_markers(doc) == []
    new_doc, _ = apply_edits(EditPlan(doc, [TextEdit(4, 7, 'dog'),
                                            TextEdit(11, 12, '!')]))
    assert [x.span for x in delta_markers(new_doc)] ==\
        [Span(4, 7), Span(11, 12)]


# ---------------------------------------------------------------------
# kuperman12
# ---------------------------------------------------------------------

LEXICON = """Word,Length,Freq_HAL,NSyll,Unused
the,3,10000000,1,x
cat,3,2000,1,x
Sat,3,,1,x
"""


@pytest.fixture
def lexicon(tmp_path):
    "path to a small lexicon file"
    path = tmp_path / 'lexicon.csv'
    path.write_text(LEXICON)
    return str(path)


def token_scores(doc):
    "(start, name, value) of the token level scores"
    return sorted((x.span.char_start, x.features['name'],
                   float(x.features['value']))
                  for x in doc.index.select(SCORE)
                  if x.features['level'] == TOKEN)


def test_read_lexicon(lexicon):
    words = read_lexicon(lexicon)
    assert sorted(words) == ['cat', 'sat', 'the']
    assert words['cat'] == {'OrthographicLength': 3.0,
                            'WordFrequency': 2000.0,
                            'SyllableCount': 1.0}
    # empty cells are left out
    assert 'WordFrequency' not in words['sat']


def test_read_lexicon_no_word_column(lexicon):
    with pytest.raises(ValueError):
        read_lexicon(lexicon, word_column='Lemma')


def test_parse_mapping():
    with pytest.warns(UserWarning, match='oops'):
        mapping = parse_mapping('Length:Len,oops,NSyll:Syll')
    assert mapping == {'Length': 'Len', 'NSyll': 'Syll'}


def test_kuperman12(lexicon):
    doc = Document([], 'The cat sat. Did it?')
    run_pipeline(doc, [Tokenizer(), Kuperman12(lexicon=lexicon)])
    assert token_scores(doc) == [
        (0, 'OrthographicLength', 3.0),
        (0, 'SyllableCount', 1.0),
        (0, 'WordFrequency', 10000000.0),
        (4, 'OrthographicLength', 3.0),
        (4, 'SyllableCount', 1.0),
        (4, 'WordFrequency', 2000.0),
        (8, 'OrthographicLength', 3.0),
        (8, 'SyllableCount', 1.0)]
    cat = doc.index.select(TOKEN)[1]
    assert score_value(doc, cat, 'WordFrequency') == 2000.0


def test_kuperman12_mapping(lexicon):
    doc = Document([], 'The cat sat.')
    engine = Kuperman12(lexicon=lexicon, mapping='NSyll:Syllables')
    run_pipeline(doc, [Tokenizer(), engine])
    assert token_scores(doc) == [(0, 'Syllables', 1.0),
                                 (4, 'Syllables', 1.0),
                                 (8, 'Syllables', 1.0)]


def test_kuperman12_missing_lexicon(tmp_path):
    with pytest.raises(OSError):
        build_pipeline(['kuperman12'],
                       {'kuperman12': {'lexicon': str(tmp_path / 'nope')}})


def test_scores_of_both_engines(lexicon):
    "each engine only replaces its own scores"
    doc = Document([], 'The cat sat. Did it?')
    ortmann = Ortmann19()
    kuperman = Kuperman12(lexicon=lexicon)
    run_pipeline(doc, [Tokenizer(), ortmann, kuperman])
    assert len(doc.index.select(SCORE)) == 18 + 8
    kuperman.process(doc)
    ortmann.process(doc)
    assert len(doc.index.select(SCORE)) == 18 + 8
    assert len(token_scores(doc)) == 8


def test_kuperman12_after_edit(lexicon):
    doc = Document([], 'The cat sat.\n\nDid it rain?')
    engines = build_pipeline(['tokenizer', 'ortmann19', 'kuperman12'],
                             {'kuperman12': {'lexicon': lexicon}})
    run_pipeline(doc, engines)
    new_doc, _ = apply_edits(EditPlan(doc, [TextEdit(4, 7, 'dog')]))
    run_pipeline(new_doc, engines)
    assert [x[0] for x in token_scores(new_doc)] == [0, 0, 0, 8, 8]
    assert len(new_doc.index.select(SCORE)) == 24 + 5
