# License: BSD3

"""
The four pipeline stages.

Each stage takes a `Document` from one state to the next ::

    EMPTY --Segmenter--> SEGMENTED --UnitMarker--> MARKED
          --UnitScorer--> SCORED --ScoreAggregator--> AGGREGATED

and refuses to run on a document in any other state.  Stages are
configured once, on construction, and hold no reference to the
documents they process.
"""

import math

from .annotation import (Aggregate, PipelineState, Sentence, Token, Unit)
from .errors import (AggregationError, AnnoscoreException, PipelineError,
                     SegmentationError, StageOrderError)
from .external.segment import NltkSegmenter
from .scoring import constant_score
from .typesystem import SENTENCE, TOKEN, UNIT, AGGREGATE, SCORE


EMPTY_POLICIES = ('error', 'nan')
"""
What to do when aggregating a document with no units:
fail with AggregationError, or record a not-a-number score
"""


class Stage(object):
    """
    A single step of the pipeline.

    Subclasses give the state they expect a document to be in
    (`REQUIRES`), the state they leave it in (`PRODUCES`), the types
    and features they need declared (`SCHEMA`), and implement
    `_process`.
    """
    REQUIRES = None
    PRODUCES = None
    SCHEMA = {}

    def __str__(self):
        return self.__class__.__name__

    def process(self, doc):
        """
        Run this stage on the document, advancing its state
        """
        if doc.state != self.REQUIRES:
            oops = "%s needs a %s document, but it is %s" %\
                (self, self.REQUIRES.name, doc.state.name)
            raise StageOrderError(oops)
        for name, features in self.SCHEMA.items():
            doc.type_system.require(name, features)
        self._process(doc)
        doc.state = self.PRODUCES

    def _process(self, doc):
        "Annotate the document (subclasses must override)"
        raise NotImplementedError()


class Segmenter(Stage):
    """
    Sentence and token annotation.

    The actual work is delegated to a segmentation tool (see
    `annoscore.external.segment`); we check that what it returns
    nests properly before adding any of it to the store.

    :param tool: segmentation collaborator (default: `NltkSegmenter`)
    """
    REQUIRES = PipelineState.EMPTY
    PRODUCES = PipelineState.SEGMENTED
    SCHEMA = {SENTENCE: [], TOKEN: []}

    def __init__(self, tool=None):
        self.tool = tool or NltkSegmenter()

    def _process(self, doc):
        text = doc.text()
        if text is None:
            raise SegmentationError("document has no text")
        try:
            segments = list(self.tool.segment(text))
            check_segments(segments, len(text))
        except SegmentationError:
            raise
        except Exception as err:
            oops = "segmenter failed: %s: %s" % (err.__class__.__name__, err)
            raise SegmentationError(oops) from err
        for sentence, tokens in segments:
            doc.create(Sentence, sentence)
            for token in tokens:
                doc.create(Token, token)


def check_segments(segments, text_length):
    """
    Raise SegmentationError unless every sentence fits in the text,
    no two sentences overlap, and every token is non-empty and falls
    within its sentence
    """
    previous = None
    for sentence in sorted(s for s, _ in segments):
        if previous is not None and previous.char_end > sentence.char_start:
            raise SegmentationError("sentences %s and %s overlap"
                                    % (previous, sentence))
        previous = sentence
    for sentence, tokens in segments:
        if not sentence.within(text_length):
            raise SegmentationError("sentence %s lies outside the text "
                                    "[0,%d]" % (sentence, text_length))
        for token in tokens:
            if token.length() == 0:
                raise SegmentationError("empty token at %s in sentence %s"
                                        % (token, sentence))
            if not sentence.encloses(token):
                raise SegmentationError("token %s crosses the boundary of "
                                        "sentence %s" % (token, sentence))


class UnitMarker(Stage):
    """
    Mark as a unit every token (within a sentence) that is exactly the
    query word.  Matching is case-sensitive; no normalisation is done.

    :param query_word: word to look for
    :type query_word: string
    """
    REQUIRES = PipelineState.SEGMENTED
    PRODUCES = PipelineState.MARKED
    SCHEMA = {SENTENCE: [], TOKEN: [], UNIT: []}

    def __init__(self, query_word):
        self.query_word = query_word

    def _process(self, doc):
        if not self.query_word:
            return
        store = doc.store
        for sentence in store.select_all(Sentence):
            for token in store.select_covered(Token, sentence.span):
                if doc.covered_text(token) == self.query_word:
                    doc.create(Unit, token.span)


class UnitScorer(Stage):
    """
    Give each unit a score, computed from the query word and the
    texts of the tokens the unit covers.

    :param query_word: word the units were marked for
    :type query_word: string

    :param scorer: scoring function (see `annoscore.scoring`)
    """
    REQUIRES = PipelineState.MARKED
    PRODUCES = PipelineState.SCORED
    SCHEMA = {TOKEN: [], UNIT: [SCORE]}

    def __init__(self, query_word, scorer=None):
        self.query_word = query_word
        self.scorer = scorer or constant_score

    def _process(self, doc):
        store = doc.store
        for unit in store.select_all(Unit):
            tokens = [doc.covered_text(x)
                      for x in store.select_covered(Token, unit.span)]
            try:
                score = self.scorer(self.query_word, tokens)
            except AnnoscoreException:
                raise
            except Exception as err:
                raise PipelineError("scorer failed on unit %s: %s: %s"
                                    % (unit.span, err.__class__.__name__,
                                       err)) from err
            if score is None:
                raise PipelineError("scorer gave no score for unit %s"
                                    % unit.span)
            unit.score = score


class ScoreAggregator(Stage):
    """
    Add a single document-wide aggregate holding the mean unit score.

    :param empty_policy: what to do if there are no units; see
        `EMPTY_POLICIES`
    :type empty_policy: string
    """
    REQUIRES = PipelineState.SCORED
    PRODUCES = PipelineState.AGGREGATED
    SCHEMA = {UNIT: [SCORE], AGGREGATE: [SCORE]}

    def __init__(self, empty_policy='error'):
        if empty_policy not in EMPTY_POLICIES:
            raise ValueError("unknown empty-document policy '%s'"
                             % empty_policy)
        self.empty_policy = empty_policy

    def _process(self, doc):
        store = doc.store
        if store.select_all(Aggregate):
            raise AggregationError("document already has an aggregate")
        units = store.select_all(Unit)
        if units:
            mean = math.fsum(u.score for u in units) / len(units)
        elif self.empty_policy == 'nan':
            mean = float('nan')
        else:
            raise AggregationError("no units to aggregate")
        doc.create(Aggregate, doc.text_span(), score=mean)
