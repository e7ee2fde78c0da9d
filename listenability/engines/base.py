# License: BSD3

"""
Analysis engines: things that add annotations to a document
"""

from listenability.annotation import Span
from listenability.delta import is_delta


DOCUMENT = 'Document'
PARAGRAPH = 'Paragraph'
SENTENCE = 'Sentence'
TOKEN = 'Token'


class Engine(object):
    """
    An analysis engine annotates a document in place.

    Subclasses set `NAME` (their key in the engine registry) and
    `PRODUCES` (the annotation types they add), and implement
    `annotate`
    """
    NAME = None
    PRODUCES = ()

    def annotate(self, doc):
        """
        Add this engine's annotations to the document
        """
        raise NotImplementedError()

    def produced(self, doc):
        """
        Annotations of the document that this engine is responsible for
        """
        return [x for x in doc.index if x.type in self.PRODUCES]

    def clear(self, doc):
        """
        Remove all annotations this engine is responsible for
        """
        for anno in self.produced(doc):
            doc.index.remove(anno)

    def process(self, doc):
        """
        (Re)analyse a document from scratch
        """
        self.clear(doc)
        self.annotate(doc)


def delta_markers(doc):
    """
    The `Delta` markers left in a document by `apply_edits`
    """
    return [x for x in doc.index if is_delta(x)]


def touched(units, deltas):
    """
    The units that overlap or touch some delta marker
    """
    return [x for x in units
            if any(x.span.overlaps(d.span, inclusive=True) is not None
                   for d in deltas)]


class DeltaComponent(Engine):
    """
    An engine that can keep some of its earlier annotations when it
    re-analyses an edited document (see `listenability.delta`).

    Sentences and paragraphs touched by an edit (overlapping or
    adjacent to a `Delta` marker) are considered changed. Before
    re-annotating, each surviving annotation of this engine is offered
    to `keep`, which is told whether the annotation sits in a changed
    paragraph or sentence.
    """
    def is_local_to_sentence(self):
        """
        True if an edit can only affect this engine's annotations
        within the sentence it occurs in
        """
        raise NotImplementedError()

    def is_local_to_paragraph(self):
        """
        True if an edit can only affect this engine's annotations
        within the paragraph it occurs in
        """
        raise NotImplementedError()

    def keep(self, annotation, in_paragraph, in_sentence):
        """
        Whether an earlier annotation should survive re-analysis.

        Parameters
        ----------
        annotation : Unit
        in_paragraph : boolean
            True if the annotation lies in a paragraph touched by an edit
        in_sentence : boolean
            True if the annotation lies in a sentence touched by an edit
        """
        raise NotImplementedError()

    def prune(self, doc):
        """
        Remove the earlier annotations of this engine that `keep`
        rejects.

        Returns
        -------
        removed : list of Unit
        """
        deltas = delta_markers(doc)
        changed_paras = touched(doc.index.select(PARAGRAPH), deltas)
        changed_sents = touched(doc.index.select(SENTENCE), deltas)

        def within(anno, units):
            "true if one of the units encloses the annotation"
            return any(x.span.encloses(anno.span) for x in units)

        removed = []
        for anno in self.produced(doc):
            in_paragraph = within(anno, changed_paras)
            in_sentence = within(anno, changed_sents)
            if not self.keep(anno, in_paragraph, in_sentence):
                doc.index.remove(anno)
                removed.append(anno)
        return removed

    def process(self, doc):
        """
        Re-analyse a document, keeping what can be kept if the
        document has been edited
        """
        if not self.is_local_to_sentence() and\
                not self.is_local_to_paragraph():
            Engine.process(self, doc)
        elif not delta_markers(doc):
            Engine.process(self, doc)
        else:
            self.prune(doc)
            self.annotate(doc)


def whole_text(doc):
    """
    Span covering the entire document text
    """
    return Span(0, len(doc.text() or ''))
