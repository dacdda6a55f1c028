# License: BSD3

"""
Exceptions raised by the annotation store and the pipeline stages

Everything derives from `AnnoscoreException` so that a batch driver can
record any failure against the document that caused it.
"""

# pylint: disable=too-few-public-methods


class AnnoscoreException(Exception):
    """
    Base class for every error raised by annoscore
    """
    def __init__(self, *args, **kw):
        super(AnnoscoreException, self).__init__(*args, **kw)


class SchemaError(AnnoscoreException):
    """
    An annotation type or feature is not declared in the type system,
    or a feature was given a value of the wrong kind
    """
    pass


class SpanError(AnnoscoreException):
    """
    A span is malformed or falls outside the document text
    """
    pass


class AnnotationError(AnnoscoreException):
    """
    A query on the annotation store did not find what it promised
    (eg. `select_single` on zero or several annotations)
    """
    pass


class PipelineError(AnnoscoreException):
    """
    A pipeline stage could not complete; the document is abandoned
    """
    pass


class StageOrderError(PipelineError):
    """
    A stage was run on a document that is not in the state it requires
    """
    pass


class SegmentationError(PipelineError):
    """
    The segmentation collaborator failed, or produced sentences and
    tokens that do not nest properly
    """
    pass


class AggregationError(PipelineError):
    """
    Unit scores could not be reduced to a document score
    (no units at all, or the document already has an aggregate)
    """
    pass
