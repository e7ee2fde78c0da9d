# License: BSD3

"""
Carry the annotations of a document over to its edited version.

Edits split the original text into regions that are either replaced
(inside an edit) or untouched (the gaps before, between and after the
edits). Annotations lying entirely inside a gap are moved over to the
new document, shifted by however much the text before them has grown
or shrunk. Everything else (annotations inside an edit, or straddling
the boundary between a gap and an edit) stays behind in the original
index. In their place, each edit gets a `Delta` unit in the new
document recording the text it replaced.

Note that moving is destructive: annotations are taken out of the
original index as they are moved.
"""

import itertools

from listenability.annotation import Document, Unit, Span
from .rebuild import rebuild_text


DELTA_TYPE = 'Delta'
"""
Type of the units marking an edited region in the new text
"""

OLD_TEXT_FEATURE = 'old'
"""
Feature of a `Delta` unit holding the text the edit replaced
"""


def is_delta(anno):
    """
    True if the annotation marks an edited region
    """
    return anno.type == DELTA_TYPE


def fresh_ids(index):
    """
    Endless supply of numeric ids not used by any unit of the index
    """
    return (str(x) for x in itertools.count(index.max_id() + 1))


def move_annotations(original_index, new_index, start, end, shift):
    """
    Move the units lying entirely within `[start, end)` of the original
    text from the original index to the new one.

    A moved unit gets its span translated from the original text to the
    new one; `shift` is how much longer the original text was than the
    new text up to `start` (see `relocate_annotations`).

    Returns
    -------
    moved : list of Unit
    """
    moved = original_index.covered_by(start, end)
    for anno in moved:
        original_index.remove(anno)
        anno.span = anno.span.shift(0 - shift)
        new_index.add(anno)
    return moved


def add_delta_marker(new_index, edit, shift, original_text, anno_id):
    """
    Mark an edit in the new index, with a `Delta` unit carrying the
    replaced text.

    The marker starts where the edit starts in the new text (given
    `shift`, the drift accumulated by the edits before this one) and
    has the length of the original range, which is not the length of
    the replacement text unless the edit keeps the length unchanged.

    Returns
    -------
    marker : Unit
    """
    span = Span(edit.begin - shift, edit.end - shift)
    old_text = original_text[edit.begin:edit.end]
    marker = Unit(anno_id, span, DELTA_TYPE, {OLD_TEXT_FEATURE: old_text})
    new_index.add(marker)
    return marker


def relocate_annotations(original_index, new_index, original_text, edits,
                         ids=None):
    """
    Populate the new index from the original one and the edits.

    We walk through the edits keeping two running quantities

    * `original_end`: how far into the original text we are
    * `shift`: the length of original text consumed so far minus the
      length of new text produced for it; an original offset after the
      last edit seen corresponds to `offset - shift` in the new text

    Parameters
    ----------
    original_index : AnnotationIndex
        Annotations over the original text (consumed)
    new_index : AnnotationIndex
        Index over the new text (filled in)
    original_text : string
    edits : list of TextEdit
        Sorted and non-overlapping, see `EditPlan`
    ids : iterator of string, optional
        Ids for the delta markers (default: numbers beyond those used
        in the original index)

    Returns
    -------
    dropped : list of Unit
        Annotations that could not be moved (they are left behind in
        the original index)
    """
    if ids is None:
        ids = fresh_ids(original_index)
    original_end = 0
    shift = 0
    for edit in edits:
        if edit.begin > original_end:
            move_annotations(original_index, new_index,
                             original_end, edit.begin, shift)
        add_delta_marker(new_index, edit, shift, original_text, next(ids))
        original_end = edit.end
        shift += (edit.end - edit.begin) - len(edit.new_text)
    if original_end < len(original_text):
        move_annotations(original_index, new_index,
                         original_end, len(original_text), shift)
    return list(original_index)


def apply_edits(plan):
    """
    Apply an edit plan to its document.

    This consumes the annotations of the plan's document: those that
    survive the edits are moved to the new document, the others are
    left behind and returned.

    Returns
    -------
    new_doc : Document
        Edited text, with the surviving annotations and one `Delta`
        marker per edit
    dropped : list of Unit
        Annotations of the original document that did not survive
    """
    original_text = plan.doc.text() or ''
    new_doc = Document([], rebuild_text(original_text, plan.edits))
    dropped = relocate_annotations(plan.doc.index, new_doc.index,
                                   original_text, plan.edits)
    if plan.doc.origin is not None:
        new_doc.set_origin(plan.doc.origin)
    return new_doc, dropped
