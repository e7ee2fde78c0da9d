# License: BSD3
# pylint: disable=too-many-public-methods, invalid-name

"""
Tests for listenability.delta
"""

import gzip
import json
import os
import unittest

import pytest

from listenability.annotation import Span, Unit, Document, AnnotationIndex
from listenability.corpus import FileId
from listenability.xmi import InvalidDocumentError, read_xmi, write_xmi

from .edits import EditPlan, MalformedEditsError, TextEdit, sort_edits
from .rebuild import rebuild_text
from .relocate import (DELTA_TYPE, OLD_TEXT_FEATURE,
                       apply_edits, relocate_annotations)
from .request import (DeltaRequest, process_request,
                      read_request, write_response)
from .reader import DeltaReader


def mk_unit(anno_id, start, end, utype='Token'):
    "a unit with the given span"
    return Unit(anno_id, Span(start, end), utype)


def spans(doc, atype='Token'):
    "(start, end) of the units of a given type"
    return [(x.span.char_start, x.span.char_end)
            for x in doc.index.select(atype)]


def markers(doc):
    "(start, end, old text) of the delta markers"
    return [(x.span.char_start, x.span.char_end,
             x.features[OLD_TEXT_FEATURE])
            for x in doc.index.select(DELTA_TYPE)]


def cat_sat():
    "'The cat sat.', one token per word"
    return Document([mk_unit('1', 0, 3),
                     mk_unit('2', 4, 7),
                     mk_unit('3', 8, 11)],
                    'The cat sat.')


# ---------------------------------------------------------------------
# edits
# ---------------------------------------------------------------------


class EditPlanTest(unittest.TestCase):
    "tests for listenability.delta.edits"

    def test_sorted(self):
        edits = [TextEdit(8, 11, 'ran'), TextEdit(0, 3, 'A')]
        plan = EditPlan(cat_sat(), edits)
        self.assertEqual([0, 8], [x.begin for x in plan])
        self.assertEqual(2, len(plan))
        self.assertEqual(-2, plan.length_change())

    def test_stable_sort(self):
        "insertions at the same offset keep their order"
        edits = [TextEdit(4, 4, 'a'), TextEdit(0, 1, ''), TextEdit(4, 4, 'b')]
        self.assertEqual(['', 'a', 'b'],
                         [x.new_text for x in sort_edits(edits)])

    def test_overlap(self):
        doc = cat_sat()
        edits = [TextEdit(0, 5, 'X'), TextEdit(4, 7, 'Y')]
        self.assertRaises(MalformedEditsError, EditPlan, doc, edits)
        # nothing happened to the document
        self.assertEqual('The cat sat.', doc.text())
        self.assertEqual([(0, 3), (4, 7), (8, 11)], spans(doc))

    def test_adjacent(self):
        "edits that touch are not overlapping"
        plan = EditPlan(cat_sat(), [TextEdit(4, 7, 'X'), TextEdit(0, 4, '')])
        self.assertEqual(2, len(plan))

    def test_out_of_range(self):
        doc = cat_sat()
        for edit in [TextEdit(-1, 2, ''),
                     TextEdit(5, 4, ''),
                     TextEdit(10, 13, '')]:
            self.assertRaises(MalformedEditsError, EditPlan, doc, [edit])

    def test_whole_text(self):
        plan = EditPlan(cat_sat(), [TextEdit(0, 12, '')])
        self.assertEqual(-12, plan.length_change())


# ---------------------------------------------------------------------
# rebuilding the text
# ---------------------------------------------------------------------


class RebuildTest(unittest.TestCase):
    "tests for listenability.delta.rebuild"

    def test_no_edits(self):
        self.assertEqual('The cat sat.', rebuild_text('The cat sat.', []))

    def test_replace(self):
        self.assertEqual('The dog sat.',
                         rebuild_text('The cat sat.', [TextEdit(4, 7, 'dog')]))

    def test_several(self):
        edits = [TextEdit(0, 3, 'A'),
                 TextEdit(4, 4, 'big '),
                 TextEdit(8, 12, '')]
        self.assertEqual('A big cat ', rebuild_text('The cat sat.', edits))

    def test_length(self):
        original = 'abcdefghijklmnopqrstuvwxyz'
        edits = [TextEdit(1, 3, 'XYZW'), TextEdit(5, 5, '!'),
                 TextEdit(10, 20, ''), TextEdit(26, 26, '.')]
        new_text = rebuild_text(original, edits)
        self.assertEqual(len(original) +
                         sum(x.length_change() for x in edits),
                         len(new_text))


# ---------------------------------------------------------------------
# moving annotations over
# ---------------------------------------------------------------------


class ApplyEditsTest(unittest.TestCase):
    "tests for listenability.delta.relocate"

    def apply(self, doc, edits):
        "apply edits to the document"
        return apply_edits(EditPlan(doc, edits))

    def test_identity(self):
        new_doc, dropped = self.apply(cat_sat(), [])
        self.assertEqual('The cat sat.', new_doc.text())
        self.assertEqual([(0, 3), (4, 7), (8, 11)], spans(new_doc))
        self.assertEqual([], markers(new_doc))
        self.assertEqual([], dropped)

    def test_same_length(self):
        new_doc, dropped = self.apply(cat_sat(), [TextEdit(4, 7, 'dog')])
        self.assertEqual('The dog sat.', new_doc.text())
        self.assertEqual([(0, 3), (8, 11)], spans(new_doc))
        self.assertEqual([(4, 7, 'cat')], markers(new_doc))
        self.assertEqual(['2'], [x.local_id() for x in dropped])

    def test_insertion(self):
        new_doc, _ = self.apply(cat_sat(), [TextEdit(4, 4, 'big ')])
        self.assertEqual('The big cat sat.', new_doc.text())
        # everything from offset 4 on moves right by 4
        self.assertEqual([(0, 3), (8, 11), (12, 15)], spans(new_doc))
        self.assertEqual([(4, 4, '')], markers(new_doc))

    def test_gap_after_shorter_edit(self):
        doc = Document([mk_unit('1', 12, 15)], 'x' * 20)
        new_doc, _ = self.apply(doc, [TextEdit(5, 10, 'X')])
        self.assertEqual(16, len(new_doc.text()))
        self.assertEqual([(8, 11)], spans(new_doc))

    def test_cumulative_shift(self):
        doc = Document([mk_unit('1', 0, 2),
                        mk_unit('2', 5, 8),
                        mk_unit('3', 12, 14),
                        mk_unit('4', 18, 20)],
                       'ab...cde....fg....hi')
        edits = [TextEdit(3, 4, ''),       # -1
                 TextEdit(9, 11, 'XXXXX'),  # +3
                 TextEdit(15, 17, 'Y')]     # -1
        new_doc, dropped = self.apply(doc, edits)
        self.assertEqual([(0, 2), (4, 7), (14, 16), (19, 21)],
                         spans(new_doc))
        self.assertEqual('ab', new_doc.text(Span(0, 2)))
        self.assertEqual('cde', new_doc.text(Span(4, 7)))
        self.assertEqual('fg', new_doc.text(Span(14, 16)))
        self.assertEqual('hi', new_doc.text(Span(19, 21)))
        self.assertEqual([], dropped)

    def test_one_marker_per_edit(self):
        edits = [TextEdit(8, 11, 'ran'),
                 TextEdit(0, 3, 'A'),
                 TextEdit(4, 4, 'big ')]
        new_doc, _ = self.apply(cat_sat(), edits)
        self.assertEqual('A big cat ran.', new_doc.text())
        # marker begins are where each edit starts in the new text; a
        # marker keeps the length of the range it replaced
        self.assertEqual([(0, 3, 'The'), (2, 2, ''), (10, 13, 'sat')],
                         markers(new_doc))

    def test_straddling(self):
        "units partly inside an edit are dropped, not truncated"
        doc = Document([mk_unit('1', 0, 7, 'Chunk'),
                        mk_unit('2', 4, 12, 'Chunk'),
                        mk_unit('3', 8, 11)],
                       'The cat sat.')
        new_doc, dropped = self.apply(doc, [TextEdit(2, 6, '')])
        self.assertEqual([], spans(new_doc, 'Chunk'))
        self.assertEqual([(4, 7)], spans(new_doc))
        self.assertEqual(['1', '2'], sorted(x.local_id() for x in dropped))
        # dropped units stay behind in the original index
        self.assertEqual(2, len(doc.index))

    def test_adjacent_edits(self):
        "edits sharing a boundary, and empty units at gap boundaries"
        doc = Document([mk_unit('1', 4, 4, 'Point'),
                        mk_unit('2', 12, 12, 'Point'),
                        mk_unit('3', 0, 12, 'Sentence')],
                       'The cat sat.')
        edits = [TextEdit(4, 7, ''),
                 TextEdit(7, 8, 'XY'),
                 TextEdit(12, 12, '!')]
        new_doc, dropped = self.apply(doc, edits)
        self.assertEqual('The XYsat.!', new_doc.text())
        self.assertEqual([(4, 7, 'cat'), (4, 5, ' '), (10, 10, '')],
                         markers(new_doc))
        self.assertEqual([(4, 4), (10, 10)], spans(new_doc, 'Point'))
        self.assertEqual(['3'], [x.local_id() for x in dropped])

    def test_insertions_same_offset(self):
        "insertions at one offset are applied in the order given"
        new_doc, _ = self.apply(cat_sat(), [TextEdit(4, 4, 'a'),
                                            TextEdit(4, 4, 'b')])
        self.assertEqual('The abcat sat.', new_doc.text())
        self.assertEqual([(4, 4, ''), (5, 5, '')], markers(new_doc))
        self.assertEqual([(0, 3), (6, 9), (10, 13)], spans(new_doc))
        new_doc, _ = self.apply(cat_sat(), [TextEdit(4, 4, 'b'),
                                            TextEdit(4, 4, 'a')])
        self.assertEqual('The bacat sat.', new_doc.text())

    def test_unit_touching_edit(self):
        "a unit ending where an edit begins survives"
        new_doc, dropped = self.apply(cat_sat(), [TextEdit(3, 4, '_')])
        self.assertEqual([(0, 3), (4, 7), (8, 11)], spans(new_doc))
        self.assertEqual([], dropped)

    def test_tail_deletion(self):
        "markers may reach past the end of the new text"
        new_doc, dropped = self.apply(cat_sat(), [TextEdit(7, 12, '')])
        self.assertEqual('The cat', new_doc.text())
        self.assertEqual([(7, 12, ' sat.')], markers(new_doc))
        self.assertEqual(['3'], [x.local_id() for x in dropped])
        doc2 = read_xmi(write_xmi(new_doc))
        self.assertEqual(markers(new_doc), markers(doc2))

    def test_code_point_offsets(self):
        "offsets count code points, so an emoji is one character"
        doc = Document([mk_unit('1', 0, 1),
                        mk_unit('2', 2, 5),
                        mk_unit('3', 6, 9)],
                       '\U0001F600 cat sat')
        new_doc, dropped = self.apply(doc, [TextEdit(2, 5, 'dog')])
        self.assertEqual('\U0001F600 dog sat', new_doc.text())
        self.assertEqual([(2, 5, 'cat')], markers(new_doc))
        self.assertEqual([(0, 1), (6, 9)], spans(new_doc))
        self.assertEqual(['2'], [x.local_id() for x in dropped])

    def test_fresh_marker_ids(self):
        new_doc, _ = self.apply(cat_sat(), [TextEdit(0, 0, 'X'),
                                            TextEdit(12, 12, 'Y')])
        ids = [x.local_id() for x in new_doc.index.select(DELTA_TYPE)]
        self.assertEqual(['4', '5'], ids)

    def test_origin(self):
        doc = cat_sat()
        doc.set_origin(FileId('d', 'delta'))
        new_doc, _ = self.apply(doc, [TextEdit(4, 7, 'dog')])
        self.assertEqual(FileId('d', 'delta'), new_doc.origin)


def test_relocate_custom_ids():
    "marker ids can be supplied"
    original = AnnotationIndex([mk_unit('1', 0, 3)])
    new = AnnotationIndex()
    dropped = relocate_annotations(original, new, 'The cat sat.',
                                   [TextEdit(4, 7, 'dog')],
                                   ids=iter(['m1']))
    assert dropped == []
    assert [x.local_id() for x in new] == ['1', 'm1']


# ---------------------------------------------------------------------
# json
# ---------------------------------------------------------------------


def mk_request_json(edits, state=None):
    "json object for a request on 'The cat sat.'"
    return {'xmi': write_xmi(cat_sat()),
            'deltas': [{'begin': b, 'end': e, 'new': t}
                       for b, e, t in edits],
            'state': state}


class RequestTest(unittest.TestCase):
    "tests for listenability.delta.request"

    def test_process(self):
        state = {'cursor': 5, 'history': [1, 2]}
        req = DeltaRequest.from_json(mk_request_json([(4, 7, 'dog')], state))
        response = process_request(req)
        obj = json.loads(write_response(response))
        self.assertEqual(['state', 'xmi'], sorted(obj))
        self.assertEqual(state, obj['state'])
        doc = read_xmi(obj['xmi'])
        self.assertEqual('The dog sat.', doc.text())
        self.assertEqual([(4, 7, 'cat')], markers(doc))
        self.assertEqual(['2'], [x.local_id() for x in response.dropped])

    def test_state_passthrough(self):
        for state in [None, [1, 'two'], 'opaque', 3.5]:
            req = read_request(json.dumps(mk_request_json([], state)))
            obj = json.loads(write_response(process_request(req)))
            self.assertEqual(state, obj['state'])

    def test_missing_state(self):
        obj = mk_request_json([])
        del obj['state']
        req = DeltaRequest.from_json(obj)
        self.assertIsNone(req.state)

    def test_not_json(self):
        self.assertRaises(InvalidDocumentError, read_request, '{"xmi": ')
        self.assertRaises(InvalidDocumentError, read_request, '[]')

    def test_bad_xmi(self):
        obj = mk_request_json([])
        obj['xmi'] = '<oops'
        req = DeltaRequest.from_json(obj)
        self.assertRaises(InvalidDocumentError, req.decode)
        del obj['xmi']
        self.assertRaises(InvalidDocumentError, DeltaRequest.from_json, obj)

    def test_bad_deltas(self):
        good = mk_request_json([(4, 7, 'dog')])
        for deltas in [None,
                       [{'begin': 4, 'end': 7}],
                       [{'begin': '4', 'end': 7, 'new': 'x'}],
                       [{'begin': True, 'end': 7, 'new': 'x'}],
                       ['oops']]:
            obj = dict(good)
            obj['deltas'] = deltas
            self.assertRaises(MalformedEditsError,
                              DeltaRequest.from_json, obj)

    def test_overlap_rejected(self):
        obj = mk_request_json([(0, 5, 'X'), (4, 7, 'Y')])
        req = DeltaRequest.from_json(obj)
        self.assertRaises(MalformedEditsError, process_request, req)

    def test_to_json(self):
        obj = mk_request_json([(4, 4, 'big ')], state={'a': 1})
        self.assertEqual(obj, DeltaRequest.from_json(obj).to_json())


def test_delta_reader(tmp_path):
    "plain and gzipped requests"
    root = str(tmp_path)
    text = json.dumps(mk_request_json([(4, 7, 'dog')], state='s1'))
    with open(os.path.join(root, 'plain.json'), 'w') as fout:
        fout.write(text)
    with gzip.open(os.path.join(root, 'packed.json.gz'), 'wb') as fout:
        fout.write(text.encode('utf-8'))
    reader = DeltaReader(root)
    files = reader.files()
    assert sorted(files) == [FileId('packed', 'delta'),
                             FileId('plain', 'delta')]
    corpus = reader.slurp(files)
    for req in corpus.values():
        assert req.state == 's1'
        assert req.deltas == [TextEdit(4, 7, 'dog')]


def test_delta_reader_unreadable(tmp_path):
    "corrupt and truncated gzip files are invalid documents"
    root = str(tmp_path)
    with open(os.path.join(root, 'junk.json.gz'), 'wb') as fout:
        fout.write(b'not gzip at all')
    packed = gzip.compress(json.dumps(mk_request_json([])).encode('utf-8'))
    with open(os.path.join(root, 'short.json.gz'), 'wb') as fout:
        fout.write(packed[:len(packed) // 2])
    reader = DeltaReader(root)
    files = reader.files()
    for key in files:
        with pytest.raises(InvalidDocumentError):
            reader.read_file(key, files[key])
