# License: BSD3

"""
Text edits requested on an analysed document, and the validated plan
that puts them in order
"""

from collections import namedtuple


class MalformedEditsError(Exception):
    """
    A set of edits that cannot be applied to a text: an edit falls
    outside the text or runs backwards, or two edits overlap
    """
    def __init__(self, msg):
        super(MalformedEditsError, self).__init__(msg)


class TextEdit(namedtuple('TextEdit', 'begin end new_text')):
    """
    Replace the original text between `begin` (inclusive) and `end`
    (exclusive) with `new_text`.

    `begin == end` is a pure insertion; an empty `new_text` is a pure
    deletion. Offsets always refer to the original text, never to the
    text as modified by other edits.
    """
    __slots__ = ()

    def __str__(self):
        return '[%d,%d) -> %r' % (self.begin, self.end, self.new_text)

    def length_change(self):
        """
        How much longer the text gets by applying this edit
        (negative if it gets shorter)
        """
        return len(self.new_text) - (self.end - self.begin)


def sort_edits(edits):
    """
    Edits in ascending order of their `begin` offset.

    The sort is stable, so edits starting at the same offset stay in
    the order they were given.
    """
    return sorted(edits, key=lambda x: x.begin)


def check_edits(edits, text_length):
    """
    Complain (MalformedEditsError) unless the edits, assumed sorted,
    each fit in a text of the given length and are pairwise
    non-overlapping.

    Adjacent edits (one ending where the next begins) are fine, and so
    are several insertions at the same offset.
    """
    for edit in edits:
        if not 0 <= edit.begin <= edit.end:
            raise MalformedEditsError(
                "Edit %s has a negative or backwards range" % (edit,))
        if edit.end > text_length:
            raise MalformedEditsError(
                "Edit %s reaches beyond the end of the text (length %d)" %
                (edit, text_length))
    for edit1, edit2 in zip(edits, edits[1:]):
        if edit1.end > edit2.begin:
            raise MalformedEditsError(
                "Edits %s and %s overlap" % (edit1, edit2))


class EditPlan(object):
    """
    Everything needed to apply a set of edits to an analysed document.

    Parameters
    ----------
    doc : Document
        The original document (text and annotations)
    edits : iterable of TextEdit
        Edits on the original text, in any order
    state : any, optional
        Opaque client state; carried along untouched
    validate : boolean, default True
        If False, only sort the edits. Applying a plan with
        overlapping edits gives meaningless results

    Attributes
    ----------
    edits : list of TextEdit
        The edits, sorted by their begin offset
    """
    def __init__(self, doc, edits, state=None, validate=True):
        self.doc = doc
        self.edits = sort_edits(edits)
        self.state = state
        if validate:
            check_edits(self.edits, len(doc.text() or ''))

    def __len__(self):
        return len(self.edits)

    def __iter__(self):
        return iter(self.edits)

    def length_change(self):
        """
        Difference in length between the edited and original text
        """
        return sum(x.length_change() for x in self.edits)
