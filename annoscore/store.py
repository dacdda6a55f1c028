# License: BSD3

"""
Per-document index of annotations

The store is a flat collection of annotations, indexed by type name.
It knows how long the document text is (so that it can refuse spans
that fall off the end), and which annotation types are declared (so
that it can refuse anything else), but nothing more about the
document.

Queries return annotations in the order they were inserted.
"""

from collections import OrderedDict

from .errors import AnnotationError, SchemaError, SpanError
from .typesystem import AGGREGATE


SINGLETON_TYPES = frozenset([AGGREGATE])
"types of which a store holds at most one annotation"


def type_name(atype):
    """
    Name of an annotation type, given either the name itself or an
    annotation class (eg. `annoscore.annotation.Unit`)
    """
    if isinstance(atype, str):
        return atype
    name = getattr(atype, 'TYPE_NAME', None)
    if name is None:
        raise SchemaError("%r is not an annotation type" % (atype,))
    return name


class AnnotationStore(object):
    """
    Typed, span-indexed annotations for a single document.

    Not safe for concurrent mutation: each document (and thus each
    pipeline run) gets its own store.

    :param tsys: declared annotation types
    :type tsys: annoscore.typesystem.TypeSystem

    :param text_length: length of the document text; spans must lie
        within `[0, text_length]`
    :type text_length: int
    """
    def __init__(self, tsys, text_length=0):
        self.type_system = tsys
        self.text_length = text_length
        self._by_type = OrderedDict()
        self._all = []

    def __len__(self):
        return len(self._all)

    def __iter__(self):
        return iter(list(self._all))

    def insert(self, anno):
        """
        Add an annotation to the store.

        Only malformed spans (outside the text), undeclared types and
        a second document-wide aggregate are refused.
        """
        name = anno.type.name
        if name not in self.type_system:
            raise SchemaError("annotation type '%s' is not declared" % name)
        span = anno.span
        if not span.within(self.text_length):
            raise SpanError("span %s lies outside the text [0,%d]"
                            % (span, self.text_length))
        if name in SINGLETON_TYPES and self._by_type.get(name):
            raise AnnotationError("the document already has a %s annotation"
                                  % name)
        self._by_type.setdefault(name, []).append(anno)
        self._all.append(anno)

    def select_all(self, atype):
        """
        Every annotation of the given type, in insertion order
        """
        return list(self._by_type.get(type_name(atype), []))

    def select_covered(self, atype, span):
        """
        Annotations of the given type whose span is enclosed by `span`
        (the boundaries themselves count as enclosed)
        """
        return [x for x in self._by_type.get(type_name(atype), [])
                if span.encloses(x.span)]

    def select_single(self, atype):
        """
        The one annotation of the given type.

        Raise AnnotationError if there is not exactly one.
        """
        name = type_name(atype)
        annos = self._by_type.get(name, [])
        if len(annos) != 1:
            raise AnnotationError("expected exactly one %s annotation, "
                                  "found %d" % (name, len(annos)))
        return annos[0]

    def reset(self):
        """
        Forget every annotation
        """
        self._by_type = OrderedDict()
        self._all = []
