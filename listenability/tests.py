# -*- coding: utf-8 -*-
#
# License: BSD3
# pylint: disable=too-many-public-methods, invalid-name

"""
Tests for listenability
"""

import argparse
import codecs
import os
import unittest

from listenability.annotation import\
    Span, Unit, Document, AnnotationIndex
from listenability.corpus import FileId, TextReader
from listenability.util import mk_is_interesting
from listenability.xmi import\
    InvalidDocumentError, XmiReader,\
    read_xmi, write_xmi, write_xmi_file
import listenability.util

# ---------------------------------------------------------------------
# spans
# ---------------------------------------------------------------------


class SpanTest(unittest.TestCase):
    "tests for listenability.annotation.Span"

    def assertOverlap(self, expected, pair1, pair2, **kwargs):
        "true if `pair1.overlaps(pair2) == expected` (modulo boxing)"
        (x1, y1) = pair1
        (x2, y2) = pair2
        o = Span(x1, y1).overlaps(Span(x2, y2), **kwargs)
        self.assertEqual(Span(*expected), o)

    def assertNotOverlap(self, pair1, pair2, **kwargs):
        "true if the spans do not overlap"
        (x1, y1) = pair1
        (x2, y2) = pair2
        self.assertIsNone(Span(x1, y1).overlaps(Span(x2, y2), **kwargs))

    def test_overlap(self):
        "Span.overlaps() function"
        self.assertNotOverlap((5, 10), (11, 12))
        self.assertNotOverlap((5, 10), (10, 15))
        self.assertOverlap((10, 10), (5, 10), (10, 15), inclusive=True)
        self.assertOverlap((6, 9), (5, 10), (6, 9))
        self.assertOverlap((7, 10), (7, 12), (5, 10))

    def test_shift(self):
        self.assertEqual(Span(8, 11), Span(12, 15).shift(-4))
        self.assertEqual(Span(3, 4), Span(1, 2).absolute(Span(2, 9)))

    def test_not_equal_to_other_things(self):
        self.assertNotEqual(Span(1, 2), (1, 2))


# ---------------------------------------------------------------------
# index
# ---------------------------------------------------------------------


def mk_unit(anno_id, start, end, utype='Token', features=None):
    "a unit with the given span"
    return Unit(anno_id, Span(start, end), utype, features)


class AnnotationIndexTest(unittest.TestCase):
    "tests for listenability.annotation.AnnotationIndex"

    def setUp(self):
        self.sentence = mk_unit('1', 0, 12, 'Sentence')
        self.the = mk_unit('2', 0, 3)
        self.cat = mk_unit('3', 4, 7)
        self.sat = mk_unit('4', 8, 11)
        self.index = AnnotationIndex([self.sat, self.cat,
                                      self.sentence, self.the])

    def test_order(self):
        "by start, enclosing units first"
        self.assertEqual([self.sentence, self.the, self.cat, self.sat],
                         list(self.index))

    def test_covered_by(self):
        self.assertEqual([self.cat, self.sat],
                         self.index.covered_by(4, 11))
        self.assertEqual([self.cat], self.index.covered_by(3, 10))
        self.assertEqual([], self.index.covered_by(5, 10))

    def test_covered_by_snapshot(self):
        "removing units while walking a covered_by result"
        for unit in self.index.covered_by(0, 12):
            self.index.remove(unit)
        self.assertEqual(0, len(self.index))

    def test_remove(self):
        self.index.remove(self.cat)
        self.assertNotIn(self.cat, self.index)
        self.assertIn(self.sat, self.index)
        self.assertRaises(ValueError, self.index.remove, self.cat)

    def test_remove_among_lookalikes(self):
        "only the very unit is removed, even if another has the same key"
        twin = mk_unit('3', 4, 7)
        self.index.add(twin)
        self.index.remove(self.cat)
        self.assertIn(twin, self.index)
        self.assertNotIn(self.cat, self.index)

    def test_select_at(self):
        self.assertEqual([self.sentence], self.index.select('Sentence'))
        self.assertEqual([self.cat], self.index.at(Span(4, 7)))
        self.assertEqual([], self.index.at(Span(4, 7), 'Sentence'))


class DocumentTest(unittest.TestCase):
    "tests for listenability.annotation.Document"

    def test_next_id(self):
        doc = Document([mk_unit('7', 0, 3), mk_unit('x', 0, 1)],
                       'The cat sat.')
        self.assertEqual('8', doc.next_id())
        unit = doc.add_unit('Token', Span(4, 7))
        self.assertEqual('8', unit.local_id())
        self.assertEqual('9', doc.next_id())

    def test_text(self):
        doc = Document([], 'The cat sat.')
        self.assertEqual('cat', doc.text(Span(4, 7)))
        self.assertEqual(Span(0, 12), doc.text_span())

    def test_origin(self):
        doc = Document([mk_unit('1', 0, 3)], 'The cat sat.')
        doc.set_origin(FileId('d1', 'analysed'))
        self.assertEqual('d1_1', doc.units[0].identifier())


# ---------------------------------------------------------------------
# xmi
# ---------------------------------------------------------------------


class XmiTest(unittest.TestCase):
    "tests for listenability.xmi"

    def setUp(self):
        self.doc = Document([mk_unit('1', 0, 12, 'Sentence'),
                             mk_unit('2', 4, 7, 'Token', {'kind': 'word'})],
                            'The "cat"\nsat.')

    def test_roundtrip(self):
        doc2 = read_xmi(write_xmi(self.doc))
        self.assertEqual(self.doc.text(), doc2.text())
        self.assertEqual([(x.local_id(), x.type, x.span, x.features)
                          for x in self.doc.units],
                         [(x.local_id(), x.type, x.span, x.features)
                          for x in doc2.units])

    def test_marker_past_end(self):
        "spans are not checked against the text"
        self.doc.index.add(mk_unit('3', 10, 20, 'Delta', {'old': 'x'}))
        doc2 = read_xmi(write_xmi(self.doc))
        self.assertEqual([Span(10, 20)],
                         [x.span for x in doc2.index.select('Delta')])

    def test_view_members(self):
        "only the members of the view are read"
        xmi = ('<xmi:XMI xmlns:xmi="http://www.omg.org/XMI"'
               ' xmlns:cas="http:///uima/cas.ecore"'
               ' xmlns:type="http:///de/webis/listenability/types.ecore">'
               '<type:Token xmi:id="1" sofa="9" begin="0" end="3"/>'
               '<type:Token xmi:id="2" sofa="9" begin="4" end="7"/>'
               '<cas:Sofa xmi:id="9" sofaString="The cat sat."/>'
               '<cas:View sofa="9" members="2"/>'
               '</xmi:XMI>')
        doc = read_xmi(xmi)
        self.assertEqual(['2'], [x.local_id() for x in doc.units])
        self.assertEqual('The cat sat.', doc.text())

    def test_invalid(self):
        self.assertRaises(InvalidDocumentError, read_xmi, 'not xml')
        self.assertRaises(InvalidDocumentError, read_xmi,
                          '<xmi:XMI xmlns:xmi="http://www.omg.org/XMI"/>')
        bad_offsets = write_xmi(self.doc).replace('begin="4"',
                                                  'begin="four"')
        self.assertRaises(InvalidDocumentError, read_xmi, bad_offsets)

    def test_reserved_feature(self):
        self.doc.index.add(mk_unit('3', 0, 3, 'Token', {'begin': '0'}))
        self.assertRaises(ValueError, write_xmi, self.doc)


# ---------------------------------------------------------------------
# corpus
# ---------------------------------------------------------------------


def _write(path, text):
    "write a utf-8 file"
    with codecs.open(path, 'w', 'utf-8') as fout:
        fout.write(text)


def test_text_reader(tmp_path):
    "reading a directory of text files"
    root = str(tmp_path)
    _write(os.path.join(root, 'a.txt'), u'Café au lait.')
    _write(os.path.join(root, 'b.txt'), u'Hello.')
    _write(os.path.join(root, 'c.md'), u'ignored')
    reader = TextReader(root)
    files = reader.files()
    assert sorted(k.doc for k in files) == ['a', 'b']
    corpus = reader.slurp(reader.files(doc_glob='a'))
    assert list(corpus) == [FileId('a', 'text')]
    doc = corpus[FileId('a', 'text')]
    assert doc.text() == u'Café au lait.'
    assert doc.origin == FileId('a', 'text')


def test_xmi_reader(tmp_path):
    "reading back what we wrote"
    root = str(tmp_path)
    doc = Document([mk_unit('1', 0, 5)], 'Hello.')
    write_xmi_file(os.path.join(root, 'h.xmi'), doc)
    corpus = XmiReader(root).slurp()
    doc2 = corpus[FileId('h', 'analysed')]
    assert doc2.text() == 'Hello.'
    assert doc2.units[0].identifier() == 'h_1'


def test_is_interesting():
    "filtering file ids with command line style regexes"
    pred = mk_is_interesting(argparse.Namespace(doc="a.*"))
    assert pred(FileId('abc', 'text'))
    assert not pred(FileId('bcd', 'text'))
    assert listenability.util.FILEID_FIELDS == ['doc', 'stage']
