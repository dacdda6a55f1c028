# License: BSD3

"""
Running the stages over a document, one document at a time.

A `Pipeline` owns a single `Document` which it recycles for every text
it is given ::

    pipeline = Pipeline(PipelineConfig(query_word='test'))
    score = pipeline.process(u"This is a test.")   # 1.0

The document is reset before and after each run, so whatever happened
to the previous text (including a failure halfway through) cannot leak
into the next.  Pipelines are not shared between threads or processes;
to score several documents at once, give each worker its own pipeline
(see `annoscore.corpus.score_corpus`).
"""

from collections import namedtuple

from .annotation import Aggregate, Document, PipelineState
from .errors import AnnoscoreException
from .scoring import get_scorer
from .stages import (EMPTY_POLICIES,
                     Segmenter, UnitMarker, UnitScorer, ScoreAggregator)

__all__ = ['PipelineConfig', 'Pipeline', 'PipelineState', 'DocumentResult']


class PipelineConfig(namedtuple('PipelineConfig',
                                'query_word scorer empty_policy')):
    """
    Settings for a pipeline

    :param query_word: units are the tokens that are exactly this word
    :type query_word: string

    :param scorer: name of a scoring function in `annoscore.scoring.SCORERS`
    :type scorer: string

    :param empty_policy: 'error' or 'nan', see
        `annoscore.stages.EMPTY_POLICIES`
    :type empty_policy: string
    """
    def __new__(cls, query_word, scorer='constant', empty_policy='error'):
        return super(PipelineConfig, cls).__new__(cls, query_word, scorer,
                                                  empty_policy)

    def check(self):
        """
        Raise ValueError if any of the settings is unknown
        """
        get_scorer(self.scorer)
        if self.empty_policy not in EMPTY_POLICIES:
            raise ValueError("unknown empty-document policy '%s' "
                             "(known: %s)" % (self.empty_policy,
                                              ", ".join(EMPTY_POLICIES)))
        return self


class DocumentResult(namedtuple('DocumentResult', 'key score error')):
    """
    Outcome of running the pipeline on one document: either a score
    or the error that stopped it, never both

    :param key: identifier for the document (eg. a `FileId`)
    :param score: aggregate score (None on failure)
    :type score: float
    :param error: what went wrong (None on success)
    :type error: AnnoscoreException
    """
    @property
    def ok(self):
        "True if the document was scored"
        return self.error is None

    def describe_error(self):
        "Short description of the error, or None"
        if self.error is None:
            return None
        return "%s: %s" % (self.error.__class__.__name__, self.error)


class Pipeline(object):
    """
    Segmentation, marking, scoring and aggregation, in that order.

    :param config: query word and policies
    :type config: PipelineConfig

    :param segmenter: segmentation tool (default: NLTK based, see
        `annoscore.external.segment`)

    :param scorer: scoring function, overriding the one named in the
        config
    :param tsys: annotation type declarations (default:
        `TypeSystem.default()`)
    """
    def __init__(self, config, segmenter=None, scorer=None, tsys=None):
        config.check()
        self.config = config
        self.stages = [Segmenter(segmenter),
                       UnitMarker(config.query_word),
                       UnitScorer(config.query_word,
                                  scorer or get_scorer(config.scorer)),
                       ScoreAggregator(config.empty_policy)]
        self.document = Document(tsys=tsys)

    def run(self, text, origin=None, until=PipelineState.AGGREGATED):
        """
        Reset the document to the given text and run the stages over it
        until it reaches the `until` state.  Return the document.

        The document is left as is (annotations and all) for you to
        inspect, and any stage failure is propagated.  It is wiped on
        the next run.
        """
        doc = self.document
        doc.reset(text, origin)
        for stage in self.stages:
            if doc.state == until:
                break
            stage.process(doc)
        return doc

    def process(self, text, origin=None):
        """
        Return the aggregate score for the text.

        Any stage failure aborts the document and is propagated; the
        document is emptied either way.
        """
        try:
            doc = self.run(text, origin)
            return doc.store.select_single(Aggregate).score
        finally:
            self.document.reset()

    def process_safely(self, key, text):
        """
        Like `process` but return a `DocumentResult`, with any failure
        recorded against the document instead of raised
        """
        try:
            return DocumentResult(key, self.process(text, origin=key), None)
        except AnnoscoreException as err:
            return DocumentResult(key, None, err)
