# License: BSD3

"""
Standoff annotations over a single document's text.

An annotation here is a typed record sitting on a span of the text.
Unlike more general annotation models, the set of record shapes is
closed: the pipeline only ever deals in

* `Sentence` and `Token` (produced by segmentation)
* `Unit` (a token matching the query word, later given a score)
* `Aggregate` (the one document-wide score)

Each record still carries a feature map, restricted to whatever its
type declares in the `TypeSystem`.  The `score` property on units and
aggregates is just a shortcut for the "score" feature.
"""

# pylint: disable=too-few-public-methods

from enum import Enum

from .errors import SchemaError, SpanError
from .store import AnnotationStore
from .typesystem import (TypeSystem,
                         SENTENCE, TOKEN, UNIT, AGGREGATE, SCORE)


class Span(object):
    """
    What portion of text an annotation corresponds to, in terms of
    character offsets.

    Offsets sit in between characters, the same way Python slice
    indices do ::

          t   e   s   t
        0   1   2   3   4

    So `(0,4)` covers the whole word and `(1,2)` picks out the "e".
    A span may be empty (`(2,2)`), but never reversed.
    """
    def __init__(self, start, end):
        if start > end:
            raise SpanError("span start %d is after its end %d"
                            % (start, end))
        self.char_start = start
        self.char_end = end

    def __str__(self):
        return '(%d,%d)' % (self.char_start, self.char_end)

    def __repr__(self):
        return 'Span(%d, %d)' % (self.char_start, self.char_end)

    def _tuple(self):
        "For internal use by __hash__, __eq__, etc"
        return (self.char_start, self.char_end)

    def __eq__(self, other):
        return isinstance(other, Span) and self._tuple() == other._tuple()

    def __ne__(self, other):
        return not self == other

    def __lt__(self, other):
        return self._tuple() < other._tuple()

    def __le__(self, other):
        return self._tuple() <= other._tuple()

    def __gt__(self, other):
        return other < self

    def __ge__(self, other):
        return other <= self

    def __hash__(self):
        return hash(self._tuple())

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

    def within(self, length):
        """
        True if this span fits in a text of the given length
        """
        return 0 <= self.char_start and self.char_end <= length

    def encloses(self, other):
        """
        Return True if this span includes the argument.  This is the
        covered-by relation read backwards: `a.encloses(b)` iff `b`
        is covered by `a`.

        Note that `x.encloses(x) == True`, that spans touching the
        edges of `x` from the inside are enclosed, and that an empty
        span sitting on either boundary is enclosed too.

        Corner case: `x.encloses(None) == False`
        """
        if other is None:
            return False
        return\
            self.char_start <= other.char_start and\
            other.char_end <= self.char_end

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
        common_start = max(self.char_start, other.char_start)
        common_end = min(self.char_end, other.char_end)
        if common_start < common_end or\
                (inclusive and common_start == common_end):
            return Span(common_start, common_end)
        return None


class Annotation(object):
    """
    A typed record over a span of text.

    Subclasses fix the type name (`TYPE_NAME`); the declaration for that
    name, taken from the type system, decides which features the record
    may carry.

    :param span: where in the text the annotation sits
    :type span: Span

    :param atype: declaration of this annotation's type
    :type atype: AnnotationType
    """
    TYPE_NAME = None

    def __init__(self, span, atype):
        if self.TYPE_NAME is not None and atype.name != self.TYPE_NAME:
            raise SchemaError("cannot make a %s from a %s declaration"
                              % (self.TYPE_NAME, atype.name))
        self.span = span
        self.type = atype
        self._features = dict((k, None) for k in atype.features)

    @classmethod
    def create(cls, tsys, span, **features):
        """
        Make an annotation of this class, looking its type up in the
        given type system and setting the given features
        """
        anno = cls(span, tsys.require(cls.TYPE_NAME, features.keys()))
        for name, value in features.items():
            anno.set_feature(name, value)
        return anno

    def __str__(self):
        feats = ", ".join("%s=%s" % kv for kv in self._features.items())
        return '[%s] %s {%s}' % (self.type.name, self.span, feats)

    def __repr__(self):
        return '%s(%r)' % (self.type.name, self.span)

    @property
    def features(self):
        "Copy of the feature map (feature name to value, or None if unset)"
        return dict(self._features)

    def get_feature(self, name):
        """
        Value of a declared feature, None if not yet set.
        Undeclared features are a SchemaError, not a default value.
        """
        self.type.kind(name)
        return self._features[name]

    def set_feature(self, name, value):
        """
        Set a declared feature, checking the value against its kind
        """
        self._features[name] = self.type.check_value(name, value)


class Sentence(Annotation):
    "A sentence, as found by segmentation"
    TYPE_NAME = SENTENCE


class Token(Annotation):
    "A token, as found by segmentation; always inside some sentence"
    TYPE_NAME = TOKEN


class _Scored(Annotation):
    """
    Annotation carrying a float "score" feature
    """
    @property
    def score(self):
        "the score feature (None until it has been set)"
        return self.get_feature(SCORE)

    @score.setter
    def score(self, value):
        self.set_feature(SCORE, value)


class Unit(_Scored):
    """
    A token that matched the query word, later given a score
    """
    TYPE_NAME = UNIT


class Aggregate(_Scored):
    """
    Document-wide annotation holding the mean of the unit scores
    """
    TYPE_NAME = AGGREGATE


class PipelineState(Enum):
    """
    How far along the pipeline a document has got.  The states are
    passed through strictly in order.
    """
    EMPTY = 0
    SEGMENTED = 1
    MARKED = 2
    SCORED = 3
    AGGREGATED = 4


class Document(object):
    """
    A document's text along with the annotation store it owns.

    The same document object may be recycled for a series of texts
    with `reset`; nothing from one text survives into the next.

    :param text: the document text (may be None for a blank document)
    :type text: string

    :param tsys: annotation type declarations (default:
        `TypeSystem.default()`)
    :type tsys: TypeSystem

    :param origin: identifier of where the text came from, if known
    :type origin: annoscore.corpus.FileId
    """
    def __init__(self, text=None, tsys=None, origin=None):
        self.type_system = tsys or TypeSystem.default()
        self.store = AnnotationStore(self.type_system)
        self.origin = origin
        self.state = PipelineState.EMPTY
        self._text = None
        self.reset(text, origin)

    def reset(self, text=None, origin=None):
        """
        Forget all annotations, replace the text and go back to the
        EMPTY state
        """
        self.store.reset()
        self._text = text
        self.origin = origin
        self.state = PipelineState.EMPTY
        self.store.text_length = len(text) if text is not None else 0

    def __str__(self):
        return '%s [%s] (%d annotations)' % (self.origin, self.state.name,
                                             len(self.store))

    def text(self, span=None):
        """
        Return the text of this document (or None), optionally limited
        to a span
        """
        if self._text is None:
            return None
        elif span is None:
            return self._text
        else:
            return self._text[span.char_start:span.char_end]

    def text_span(self):
        """
        Span covering the entire text
        """
        return Span(0, self.store.text_length)

    def covered_text(self, anno):
        """
        The piece of text an annotation sits on
        """
        return self.text(anno.span)

    def create(self, cls, span, **features):
        """
        Make an annotation of class `cls` against this document's type
        system, and add it to the store
        """
        anno = cls.create(self.type_system, span, **features)
        self.store.insert(anno)
        return anno
