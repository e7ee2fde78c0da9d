"""
Low-level representation of text annotations, following somewhat
faithfully the UIMA_ model of a text (the "sofa") plus an index of
annotations over it.

This is low-level in the sense that we make little attempt to interpret
the information stored in these annotations. A token carries its part of
speech as a plain string feature, a score carries its value as a string,
and so forth. Higher-level code (see `listenability.engines`) knows what
the types and features mean.

.. _UIMA: https://uima.apache.org/
"""

# License: BSD3

# pylint: disable=too-many-arguments, too-few-public-methods

from bisect import bisect_left


class Span(object):
    """
    What portion of text an annotation corresponds to.
    Assumed to be in terms of character offsets

    The way we interpret spans amounts to how Python interprets array
    slice indices.

    One way to understand them is to think of offsets as
    sitting in between individual characters ::

          h   o   w   d   y
        0   1   2   3   4   5

    So `(0,5)` covers the whole word above, and `(1,2)`
    picks out the letter "o"
    """
    def __init__(self, start, end):
        self.char_start = start
        self.char_end = end

    def __str__(self):
        return '(%d,%d)' % (self.char_start, self.char_end)

    def __repr__(self):
        return 'Span(%d, %d)' % (self.char_start, self.char_end)

    def __lt__(self, other):
        return self.char_start < other.char_start or\
            (self.char_start == other.char_start and
             self.char_end < other.char_end)

    def __eq__(self, other):
        if not isinstance(other, Span):
            return NotImplemented
        return\
            self.char_start == other.char_start and\
            self.char_end == other.char_end

    def __gt__(self, other):
        return other < self

    def __ne__(self, other):
        return not self == other

    def __le__(self, other):
        return self < other or self == other

    def __ge__(self, other):
        return other <= self

    def __hash__(self):
        return (self.char_start, self.char_end).__hash__()

    def length(self):
        """
        Return the length of this span
        """
        return self.char_end - self.char_start

    def shift(self, offset):
        """
        Return a copy of this span, shifted to the right
        (if offset is positive) or left (if negative).
        """
        return Span(self.char_start + offset, self.char_end + offset)

    def absolute(self, other):
        """
        Assuming this span is relative to some other span,
        return a suitably shifted "absolute" copy.
        """
        return self.shift(other.char_start)

    def encloses(self, other):
        """
        Return True if this span includes the argument

        Note that `x.encloses(x) == True`

        Corner case: `x.encloses(None) == False`
        """
        if other is None:
            return False
        else:
            return\
                self.char_start <= other.char_start and\
                self.char_end >= other.char_end

    def overlaps(self, other, inclusive=False):
        """
        Return the overlapping region if two spans have regions
        in common, or else None. ::

            Span(5, 10).overlaps(Span(8, 12)) == Span(8, 10)
            Span(5, 10).overlaps(Span(11, 12)) == None

        If `inclusive == True`, spans with touching edges are
        considered to overlap ::

            Span(5, 10).overlaps(Span(10, 12)) == None
            Span(5, 10).overlaps(Span(10, 12), inclusive=True) == Span(10, 10)

        """
        if other is None:
            return None
        elif self.encloses(other):
            return other
        elif other.encloses(self):
            return self
        else:
            common_start = max(self.char_start, other.char_start)
            common_end = min(self.char_end, other.char_end)
            if inclusive and common_start <= common_end:
                return Span(common_start, common_end)
            if common_start < common_end:
                return Span(common_start, common_end)
            else:
                return None


# pylint: disable=no-self-use
class Standoff(object):
    """A standoff object ultimately points to some piece of text.

    Attributes
    ----------
    origin : listenability.corpus.FileId, optional
        FileId of the document supporting this standoff.
    """
    def __init__(self, origin=None):
        self.origin = origin

    def text_span(self):
        """
        Return the span of text this object points to.

        Returns
        -------
        res : Span or None
            Span covered by this object ; None if it does not point
            to any text.
        """
        return None
# pylint: enable=no-self-use


class Annotation(Standoff):
    """Any sort of annotation.

    Annotations tend to have:
    * span:     some sort of location (what they are annotating)
    * type:     some key label (we call a type)
    * features: an attribute to value dictionary
    """
    def __init__(self, anno_id, span, atype, features, origin=None):
        """Init method.

        Parameters
        ----------
        anno_id : string
            Identifier for this annotation, unique within its document.
        span : Span
            Coordinates of the annotated span.
        atype : str
            Annotation type.
        features : dict from str to str
            Feature as a dict from feature_name to feature_value.
        origin : FileId, optional
            FileId of the document that supports this annotation.
        """
        Standoff.__init__(self, origin)
        self._anno_id = anno_id
        self.span = span
        self.type = atype
        self.features = features

    def __str__(self):
        feats = str(self.features)
        return ('%s [%s] %s %s' %
                (self.identifier(), self.type, self.span, feats))

    def __repr__(self):
        return '<%s %s>' % (self.__class__.__name__, self)

    def local_id(self):
        """Local identifier.

        An identifier which is sufficient to pick out this annotation
        within a single document.
        """
        return self._anno_id

    def identifier(self):
        """Global identifier if possible, else local identifier.

        If the annotation has an origin (see "FileId"), we combine the
        document name with the local id.
        """
        local_id = self._anno_id
        if self.origin is None:
            return local_id
        else:
            return self.origin.mk_global_id(local_id)


class Unit(Annotation):
    """Unit annotation.

    An annotation over a span of text.
    """

    def __init__(self, unit_id, span, utype, features=None, origin=None):
        Annotation.__init__(self, unit_id, span, utype,
                            features if features is not None else {},
                            origin)

    def text_span(self):
        return self.span


def _sort_key(anno):
    """
    Position of a unit in an `AnnotationIndex`: by start, longest
    first, then by type and id so that the order is total
    """
    span = anno.span
    return (span.char_start, 0 - span.char_end, anno.type,
            str(anno.local_id()))


class AnnotationIndex(object):
    """
    An ordered collection of unit annotations over a single text.

    Units are kept sorted by start offset, longer units first (so a
    unit comes before the units it encloses), with type and id breaking
    ties.

    A unit belongs to at most one index at a time. If you change the
    span of a unit, remove it from its index first and add it back
    afterwards, or the index will no longer be sorted.
    """
    def __init__(self, units=None):
        self._keys = []
        self._units = []
        self._max_id = 0
        for unit in units or []:
            self.add(unit)

    def __len__(self):
        return len(self._units)

    def __iter__(self):
        return iter(list(self._units))

    def __contains__(self, unit):
        return self._find(unit) is not None

    def _find(self, unit):
        "position of this very unit in the index, or None"
        key = _sort_key(unit)
        pos = bisect_left(self._keys, key)
        while pos < len(self._keys) and self._keys[pos] == key:
            if self._units[pos] is unit:
                return pos
            pos += 1
        return None

    def add(self, unit):
        """
        Insert a unit at its position in the index
        """
        key = _sort_key(unit)
        pos = bisect_left(self._keys, key)
        # after any units with the same key
        while pos < len(self._keys) and self._keys[pos] == key:
            pos += 1
        self._keys.insert(pos, key)
        self._units.insert(pos, unit)
        anno_id = str(unit.local_id())
        if anno_id.isdigit():
            self._max_id = max(self._max_id, int(anno_id))

    def remove(self, unit):
        """
        Take a unit out of the index.

        Raise ValueError if the unit is not in the index
        """
        pos = self._find(unit)
        if pos is None:
            raise ValueError('%s is not in this index' % unit)
        del self._keys[pos]
        del self._units[pos]

    def max_id(self):
        """
        Largest numeric id of any unit ever added to this index
        (0 if none)
        """
        return self._max_id

    def covered_by(self, start, end):
        """
        All units lying entirely within `[start, end)`, ie. with
        `start <= char_start` and `char_end <= end`, in index order.

        This returns a fresh list, so it is safe to add or remove
        units from the index while walking through it.
        """
        pos = bisect_left(self._keys, (start,))
        res = []
        for unit in self._units[pos:]:
            if unit.span.char_start > end:
                break
            if unit.span.char_end <= end:
                res.append(unit)
        return res

    def select(self, atype=None):
        """
        All units of the given type (all units if `atype` is None),
        in index order
        """
        return [x for x in self._units if atype is None or x.type == atype]

    def at(self, span, atype=None):
        """
        All units with exactly this span (and type, if given)
        """
        return [x for x in self.covered_by(span.char_start, span.char_end)
                if x.span == span and (atype is None or x.type == atype)]


class Document(Standoff):
    """
    A single document: a text and an index of unit annotations over it
    """
    def __init__(self, units, text):
        Standoff.__init__(self, None)
        self.index = AnnotationIndex(units)
        self._text = text

    @property
    def units(self):
        """
        All unit annotations in index order (a copy)
        """
        return list(self.index)

    def annotations(self):
        """
        All annotations associated with this document
        """
        return self.units

    def text_span(self):
        if self._text is None:
            return None
        return Span(0, len(self._text))

    def set_origin(self, origin):
        """
        If you have more than one document, it's a good idea to
        set its origin to a file ID so that you can more reliably
        tell the annotations apart.

        :type origin: :py:class:`listenability.corpus.FileId`
        """
        self.origin = origin
        for anno in self.annotations():
            anno.origin = origin

    def next_id(self):
        """
        A fresh local id, not used by any annotation currently
        in this document (ids are numeric strings)
        """
        return str(self.index.max_id() + 1)

    def add_unit(self, utype, span, features=None):
        """
        Create a unit with a fresh id and add it to this document.
        Return the new unit
        """
        unit = Unit(self.next_id(), span, utype, features,
                    origin=self.origin)
        self.index.add(unit)
        return unit

    def text(self, span=None):
        """
        Return the text associated with these annotations (or None),
        optionally limited to a span
        """
        if self._text is None:
            return None
        elif span is None:
            return self._text
        else:
            return self._text[span.char_start:span.char_end]
