# -*- coding: utf-8 -*-
#
# License: BSD3
# pylint: disable=too-many-public-methods, invalid-name

"""
Tests for annoscore
"""

import math
import os
import shutil
import tempfile
import unittest

from annoscore.annotation import (Span, Document, PipelineState,
                                  Sentence, Token, Unit, Aggregate)
from annoscore.corpus import (FileId, Reader, results_dataframe,
                              score_corpus)
from annoscore.errors import (AggregationError, AnnotationError,
                              PipelineError, SchemaError, SegmentationError,
                              SpanError, StageOrderError)
from annoscore.external.segment import PretokenizedSegmenter
from annoscore.pipeline import DocumentResult, Pipeline, PipelineConfig
from annoscore.scoring import constant_score, get_scorer, match_ratio
from annoscore.stages import (Segmenter, UnitMarker, UnitScorer,
                              ScoreAggregator)
from annoscore.typesystem import AnnotationType, TypeSystem

# ---------------------------------------------------------------------
# fixtures
# ---------------------------------------------------------------------

TEXT = u"This is a test. Test tests test?"
SENTENCES = [["This", "is", "a", "test", "."],
             ["Test", "tests", "test", "?"]]
# the two exact occurrences of "test"
TEST_SPANS = [Span(10, 14), Span(27, 31)]


def segmented_doc(text=TEXT, sentences=None):
    "a document that has been through segmentation"
    doc = Document(text)
    Segmenter(PretokenizedSegmenter(sentences or SENTENCES)).process(doc)
    return doc


def scored_doc(text, spans_scores):
    "a document in SCORED state, with units of the given scores"
    doc = Document(text)
    for span, score in spans_scores:
        doc.create(Unit, span, score=score)
    doc.state = PipelineState.SCORED
    return doc


class BrokenSegmenter(object):
    "segmentation tool returning canned (possibly bad) output"
    def __init__(self, segments=None, exc=None):
        self.segments = segments or []
        self.exc = exc

    def segment(self, text):
        if self.exc is not None:
            raise self.exc
        return self.segments

# ---------------------------------------------------------------------
# spans
# ---------------------------------------------------------------------


class SpanTest(unittest.TestCase):
    "tests for annoscore.annotation.Span"

    def assertOverlap(self, expected, pair1, pair2, **kwargs):
        "true if `pair1.overlaps(pair2) == expected` (modulo boxing)"
        o = Span(*pair1).overlaps(Span(*pair2), **kwargs)
        self.assertTrue(o)
        self.assertEqual(Span(*expected), o)

    def assertNotOverlap(self, pair1, pair2, **kwargs):
        "true if `pair1` and `pair2` do not overlap"
        self.assertIsNone(Span(*pair1).overlaps(Span(*pair2), **kwargs))

    def test_reversed(self):
        self.assertRaises(SpanError, Span, 5, 4)

    def test_encloses(self):
        outer = Span(5, 10)
        self.assertTrue(outer.encloses(outer))
        self.assertTrue(outer.encloses(Span(5, 7)))
        self.assertTrue(outer.encloses(Span(7, 10)))
        self.assertFalse(outer.encloses(Span(4, 7)))
        self.assertFalse(outer.encloses(Span(8, 11)))
        self.assertFalse(outer.encloses(Span(10, 12)))
        self.assertFalse(outer.encloses(Span(0, 3)))
        self.assertFalse(outer.encloses(None))

    def test_encloses_empty(self):
        outer = Span(5, 10)
        self.assertTrue(outer.encloses(Span(5, 5)))
        self.assertTrue(outer.encloses(Span(10, 10)))
        self.assertFalse(outer.encloses(Span(11, 11)))
        self.assertTrue(Span(3, 3).encloses(Span(3, 3)))
        self.assertFalse(Span(3, 3).encloses(Span(3, 4)))

    def test_overlap(self):
        "Span.overlaps() function"
        self.assertNotOverlap((5, 10), (11, 12))
        self.assertNotOverlap((11, 12), (5, 10))
        # should not overlap at edges
        self.assertNotOverlap((5, 10), (10, 15))
        self.assertOverlap((10, 10), (5, 10), (10, 15), inclusive=True)
        self.assertOverlap((6, 9), (5, 10), (6, 9))
        self.assertOverlap((7, 10), (5, 10), (7, 12))
        self.assertOverlap((7, 10), (7, 12), (5, 10))

    def test_ordering(self):
        spans = [Span(3, 5), Span(0, 4), Span(3, 4)]
        self.assertEqual([Span(0, 4), Span(3, 4), Span(3, 5)],
                         sorted(spans))
        self.assertEqual(Span(1, 2), Span(0, 1).shift(1))
        self.assertEqual(1, len(set([Span(1, 2), Span(1, 2)])))

# ---------------------------------------------------------------------
# type system and annotations
# ---------------------------------------------------------------------


class TypeSystemTest(unittest.TestCase):
    "tests for annoscore.typesystem"

    def test_default(self):
        tsys = TypeSystem.default()
        for name in ['Sentence', 'Token', 'Unit', 'Aggregate']:
            self.assertIn(name, tsys)
        self.assertEqual(float, tsys.require('Unit', ['score']).kind('score'))
        self.assertEqual([], list(tsys.get_type('Token').features))

    def test_undeclared(self):
        tsys = TypeSystem.default()
        self.assertRaises(SchemaError, tsys.get_type, 'Paragraph')
        self.assertRaises(SchemaError, tsys.require, 'Unit', ['goodness'])
        self.assertRaises(SchemaError, tsys.require, 'Sentence', ['score'])

    def test_conflict(self):
        unit1 = AnnotationType('Unit', [('score', float)])
        unit2 = AnnotationType('Unit', [('score', int)])
        self.assertRaises(SchemaError, TypeSystem, [unit1, unit2])
        # identical declarations are fine
        self.assertEqual(1, len(TypeSystem([unit1, unit1])))
        merged = TypeSystem([unit1]).merge(TypeSystem.default())
        self.assertEqual(4, len(merged))

    def test_check_value(self):
        atype = AnnotationType('Unit', {'score': float})
        self.assertEqual(2.0, atype.check_value('score', 2))
        self.assertIsInstance(atype.check_value('score', 2), float)
        self.assertIsNone(atype.check_value('score', None))
        self.assertRaises(SchemaError, atype.check_value, 'score', 'high')
        self.assertRaises(SchemaError, atype.check_value, 'score', True)


class AnnotationTest(unittest.TestCase):
    "tests for annoscore.annotation records"

    def setUp(self):
        self.tsys = TypeSystem.default()

    def test_features(self):
        unit = Unit.create(self.tsys, Span(0, 4))
        self.assertIsNone(unit.score)
        unit.score = 0.5
        self.assertEqual(0.5, unit.get_feature('score'))
        self.assertEqual({'score': 0.5}, unit.features)

    def test_undeclared_feature(self):
        unit = Unit.create(self.tsys, Span(0, 4))
        sent = Sentence.create(self.tsys, Span(0, 4))
        self.assertRaises(SchemaError, unit.get_feature, 'goodness')
        self.assertRaises(SchemaError, unit.set_feature, 'goodness', 1.0)
        self.assertRaises(SchemaError, sent.get_feature, 'score')
        self.assertRaises(SchemaError, Token.create, self.tsys, Span(0, 1),
                          score=1.0)

    def test_wrong_kind(self):
        unit = Unit.create(self.tsys, Span(0, 4))
        with self.assertRaises(SchemaError):
            unit.score = 'great'

    def test_wrong_declaration(self):
        self.assertRaises(SchemaError, Unit, Span(0, 1),
                          self.tsys.get_type('Token'))

    def test_document_text(self):
        doc = Document(u"why hello there!")
        self.assertEqual(Span(0, 16), doc.text_span())
        self.assertEqual(u"hello", doc.text(Span(4, 9)))
        tok = doc.create(Token, Span(4, 9))
        self.assertEqual(u"hello", doc.covered_text(tok))

# ---------------------------------------------------------------------
# annotation store
# ---------------------------------------------------------------------


class StoreTest(unittest.TestCase):
    "tests for annoscore.store"

    def setUp(self):
        self.doc = Document(u"a bb ccc dddd")
        self.store = self.doc.store

    def test_insertion_order(self):
        spans = [Span(9, 13), Span(0, 1), Span(5, 8)]
        for span in spans:
            self.doc.create(Token, span)
        self.doc.create(Sentence, Span(0, 13))
        self.assertEqual(spans, [x.span for x in
                                 self.store.select_all(Token)])
        self.assertEqual(spans, [x.span for x in
                                 self.store.select_all('Token')])
        self.assertEqual(4, len(self.store))
        self.assertEqual([], self.store.select_all(Unit))

    def test_select_covered(self):
        for span in [Span(0, 1), Span(2, 4), Span(4, 4), Span(5, 8),
                     Span(3, 6)]:
            self.doc.create(Token, span)
        covered = self.store.select_covered(Token, Span(2, 5))
        # boundaries count; the overlapping (3,6) does not
        self.assertEqual([Span(2, 4), Span(4, 4)],
                         [x.span for x in covered])
        # equal spans are covered
        self.assertEqual([Span(5, 8)],
                         [x.span for x in
                          self.store.select_covered(Token, Span(5, 8))])
        # adjacent spans are not
        self.assertEqual([], self.store.select_covered(Token, Span(1, 2)))
        # only of the requested type
        self.assertEqual([], self.store.select_covered(Unit, Span(0, 13)))

    def test_select_single(self):
        self.assertRaises(AnnotationError, self.store.select_single,
                          Aggregate)
        self.doc.create(Aggregate, Span(0, 13), score=1.0)
        self.assertEqual(1.0, self.store.select_single(Aggregate).score)
        self.doc.create(Token, Span(0, 1))
        self.doc.create(Token, Span(2, 4))
        self.assertRaises(AnnotationError, self.store.select_single, Token)

    def test_one_aggregate(self):
        "a store never holds two aggregates"
        self.doc.create(Aggregate, Span(0, 13), score=1.0)
        self.assertRaises(AnnotationError, self.doc.create, Aggregate,
                          Span(0, 4), score=2.0)
        self.assertEqual([1.0], [x.score for x in
                                 self.store.select_all(Aggregate)])
        # until it is reset
        self.store.reset()
        self.doc.create(Aggregate, Span(0, 13), score=2.0)
        self.assertEqual(2.0, self.store.select_single(Aggregate).score)

    def test_reset(self):
        self.doc.create(Sentence, Span(0, 13))
        self.doc.create(Token, Span(0, 1))
        self.doc.create(Unit, Span(0, 1), score=1.0)
        self.store.reset()
        for atype in [Sentence, Token, Unit, Aggregate]:
            self.assertEqual([], self.store.select_all(atype))
        self.assertEqual(0, len(self.store))

    def test_bad_span(self):
        self.assertRaises(SpanError, self.doc.create, Token, Span(10, 14))
        self.assertRaises(SpanError, self.doc.create, Token, Span(-1, 2))
        # the end of the text is fine
        self.doc.create(Token, Span(13, 13))
        self.assertEqual(1, len(self.store))

    def test_undeclared_type(self):
        tsys = TypeSystem([AnnotationType('Sentence'),
                           AnnotationType('Token')])
        doc = Document(u"test", tsys=tsys)
        unit = Unit(Span(0, 4), AnnotationType('Unit', [('score', float)]))
        self.assertRaises(SchemaError, doc.store.insert, unit)
        self.assertRaises(SchemaError, doc.create, Unit, Span(0, 4))

    def test_document_reset(self):
        self.doc.create(Token, Span(0, 1))
        self.doc.state = PipelineState.SEGMENTED
        self.doc.reset(u"xy")
        self.assertEqual(0, len(self.store))
        self.assertEqual(PipelineState.EMPTY, self.doc.state)
        self.assertEqual(u"xy", self.doc.text())
        self.assertRaises(SpanError, self.doc.create, Token, Span(0, 3))

# ---------------------------------------------------------------------
# stages
# ---------------------------------------------------------------------


class SegmenterTest(unittest.TestCase):
    "tests for the segmentation stage"

    def test_pretokenized(self):
        doc = segmented_doc()
        self.assertEqual(PipelineState.SEGMENTED, doc.state)
        sents = doc.store.select_all(Sentence)
        self.assertEqual([Span(0, 15), Span(16, 32)], [x.span for x in sents])
        self.assertEqual(9, len(doc.store.select_all(Token)))
        for sent, words in zip(sents, SENTENCES):
            toks = doc.store.select_covered(Token, sent.span)
            self.assertEqual(words, [doc.covered_text(x) for x in toks])

    def test_mismatch(self):
        doc = Document(TEXT)
        stage = Segmenter(PretokenizedSegmenter([["This", "was"]]))
        self.assertRaises(SegmentationError, stage.process, doc)
        self.assertEqual(0, len(doc.store))
        self.assertEqual(PipelineState.EMPTY, doc.state)

    def test_crossing_token(self):
        doc = Document(u"ab cd")
        tool = BrokenSegmenter([(Span(0, 2), [Span(0, 2)]),
                                (Span(3, 4), [Span(3, 5)])])
        self.assertRaises(SegmentationError, Segmenter(tool).process, doc)
        # nothing from the valid first sentence either
        self.assertEqual(0, len(doc.store))

    def test_bad_output(self):
        doc = Document(u"ab")
        empty_tok = BrokenSegmenter([(Span(0, 2), [Span(1, 1)])])
        too_long = BrokenSegmenter([(Span(0, 3), [Span(0, 2)])])
        for tool in [empty_tok, too_long]:
            self.assertRaises(SegmentationError, Segmenter(tool).process, doc)
            self.assertEqual(0, len(doc.store))

    def test_tool_failure(self):
        doc = Document(u"ab")
        tool = BrokenSegmenter(exc=LookupError("no model"))
        self.assertRaises(SegmentationError, Segmenter(tool).process, doc)
        tool = BrokenSegmenter(exc=RuntimeError("crashed"))
        with self.assertRaises(SegmentationError) as cm:
            Segmenter(tool).process(doc)
        self.assertIsInstance(cm.exception.__cause__, RuntimeError)
        self.assertEqual(PipelineState.EMPTY, doc.state)

    def test_overlapping_sentences(self):
        "a token inside two sentences would be marked twice"
        doc = Document(u"test test")
        tool = BrokenSegmenter([(Span(0, 9), [Span(0, 4), Span(5, 9)]),
                                (Span(5, 9), [])])
        self.assertRaises(SegmentationError, Segmenter(tool).process, doc)
        self.assertEqual(0, len(doc.store))

    def test_adjacent_sentences(self):
        "sentences may touch without overlapping"
        doc = Document(u"ab")
        tool = BrokenSegmenter([(Span(1, 2), [Span(1, 2)]),
                                (Span(0, 1), [Span(0, 1)])])
        Segmenter(tool).process(doc)
        self.assertEqual(2, len(doc.store.select_all(Sentence)))

    def test_malformed_output(self):
        "plain tuples instead of spans"
        doc = Document(u"ab")
        tool = BrokenSegmenter([((0, 2), [(0, 2)])])
        self.assertRaises(SegmentationError, Segmenter(tool).process, doc)
        self.assertEqual(0, len(doc.store))

    def test_no_text(self):
        self.assertRaises(SegmentationError, Segmenter().process, Document())


class MarkerTest(unittest.TestCase):
    "tests for the marking stage"

    def mark(self, word, doc=None):
        "units found for the given word"
        doc = doc or segmented_doc()
        UnitMarker(word).process(doc)
        self.assertEqual(PipelineState.MARKED, doc.state)
        return [x.span for x in doc.store.select_all(Unit)]

    def test_exact(self):
        # neither "Test" nor "tests"
        self.assertEqual(TEST_SPANS, self.mark("test"))
        self.assertEqual([Span(16, 20)], self.mark("Test"))
        self.assertEqual([], self.mark("tes"))
        self.assertEqual([], self.mark("TEST"))

    def test_empty_query(self):
        self.assertEqual([], self.mark(""))

    def test_repeated(self):
        doc = segmented_doc(u"a a a", [["a", "a"], ["a"]])
        self.assertEqual([Span(0, 1), Span(2, 3), Span(4, 5)],
                         self.mark("a", doc))

    def test_outside_sentence(self):
        "tokens not inside any sentence are never units"
        doc = Document(u"test test")
        doc.create(Sentence, Span(0, 4))
        doc.create(Token, Span(0, 4))
        doc.create(Token, Span(5, 9))
        doc.state = PipelineState.SEGMENTED
        self.assertEqual([Span(0, 4)], self.mark("test", doc))

    def test_order(self):
        doc = Document(TEXT)
        self.assertRaises(StageOrderError, UnitMarker("test").process, doc)


class ScorerTest(unittest.TestCase):
    "tests for the scoring stage and functions"

    def marked_doc(self):
        "document with the units for 'test' marked"
        doc = segmented_doc()
        UnitMarker("test").process(doc)
        return doc

    def test_totality(self):
        doc = self.marked_doc()
        UnitScorer("test").process(doc)
        units = doc.store.select_all(Unit)
        self.assertEqual(2, len(units))
        self.assertEqual([1.0, 1.0], [u.score for u in units])
        self.assertEqual(PipelineState.SCORED, doc.state)

    def test_scorer_input(self):
        seen = []

        def scorer(query, tokens):
            "remember what we are asked to score"
            seen.append((query, tokens))
            return 0.25

        doc = self.marked_doc()
        UnitScorer("test", scorer).process(doc)
        self.assertEqual([("test", ["test"]), ("test", ["test"])], seen)
        self.assertEqual([0.25, 0.25],
                         [u.score for u in doc.store.select_all(Unit)])

    def test_no_score(self):
        doc = self.marked_doc()
        stage = UnitScorer("test", lambda q, t: None)
        self.assertRaises(PipelineError, stage.process, doc)

    def test_scorer_failure(self):
        "whatever the scorer raises becomes a PipelineError"
        doc = self.marked_doc()
        stage = UnitScorer("test", lambda q, t: 1 / 0)
        with self.assertRaises(PipelineError) as cm:
            stage.process(doc)
        self.assertIsInstance(cm.exception.__cause__, ZeroDivisionError)
        self.assertEqual(PipelineState.MARKED, doc.state)

    def test_bad_score(self):
        doc = self.marked_doc()
        stage = UnitScorer("test", lambda q, t: "high")
        self.assertRaises(SchemaError, stage.process, doc)

    def test_order(self):
        doc = segmented_doc()
        self.assertRaises(StageOrderError, UnitScorer("test").process, doc)

    def test_functions(self):
        self.assertEqual(1.0, constant_score("test", []))
        self.assertEqual(1.0, match_ratio("test", ["test"]))
        self.assertEqual(0.5, match_ratio("test", ["test", "Test"]))
        self.assertEqual(0.0, match_ratio("test", []))
        self.assertIs(match_ratio, get_scorer('match-ratio'))
        self.assertRaises(ValueError, get_scorer, 'goodness')


class AggregatorTest(unittest.TestCase):
    "tests for the aggregation stage"

    def test_mean(self):
        text = u"test test test"
        doc = scored_doc(text, [(Span(0, 4), 1.0),
                                (Span(5, 9), 2.0),
                                (Span(10, 14), 4.0)])
        ScoreAggregator().process(doc)
        agg = doc.store.select_single(Aggregate)
        self.assertAlmostEqual(7.0 / 3, agg.score)
        self.assertEqual(Span(0, len(text)), agg.span)
        self.assertEqual(PipelineState.AGGREGATED, doc.state)

    def test_no_units(self):
        doc = scored_doc(u"nothing here", [])
        self.assertRaises(AggregationError, ScoreAggregator().process, doc)
        self.assertEqual([], doc.store.select_all(Aggregate))

    def test_no_units_nan(self):
        doc = scored_doc(u"nothing here", [])
        ScoreAggregator('nan').process(doc)
        self.assertTrue(math.isnan(doc.store.select_single(Aggregate).score))

    def test_second_aggregate(self):
        doc = scored_doc(u"test", [(Span(0, 4), 1.0)])
        doc.create(Aggregate, Span(0, 4), score=1.0)
        self.assertRaises(AggregationError, ScoreAggregator().process, doc)
        self.assertEqual(1, len(doc.store.select_all(Aggregate)))

    def test_bad_policy(self):
        self.assertRaises(ValueError, ScoreAggregator, 'zero')

    def test_missing_type(self):
        tsys = TypeSystem([AnnotationType('Unit', [('score', float)])])
        doc = Document(u"test", tsys=tsys)
        doc.state = PipelineState.SCORED
        self.assertRaises(SchemaError, ScoreAggregator().process, doc)

# ---------------------------------------------------------------------
# pipeline
# ---------------------------------------------------------------------


class PipelineTest(unittest.TestCase):
    "tests for annoscore.pipeline"

    def test_end_to_end(self):
        pipeline = Pipeline(PipelineConfig("test"))
        self.assertEqual(1.0, pipeline.process(u"This is a test."))
        self.assertEqual(0, len(pipeline.document.store))
        self.assertEqual(PipelineState.EMPTY, pipeline.document.state)

    def test_no_units(self):
        pipeline = Pipeline(PipelineConfig("test"))
        self.assertRaises(AggregationError, pipeline.process,
                          u"Nothing to see here.")
        # the failed document does not linger
        self.assertEqual(0, len(pipeline.document.store))
        self.assertEqual(PipelineState.EMPTY, pipeline.document.state)

    def test_no_units_nan(self):
        pipeline = Pipeline(PipelineConfig("test", empty_policy='nan'))
        self.assertTrue(math.isnan(pipeline.process(u"Nothing here.")))

    def test_reuse(self):
        pipeline = Pipeline(PipelineConfig("test"))
        self.assertRaises(AggregationError, pipeline.process, u"No luck.")
        self.assertEqual(1.0, pipeline.process(u"A test, a test."))
        self.assertEqual(1.0, pipeline.process(u"One test."))

    def test_pretokenized(self):
        pipeline = Pipeline(PipelineConfig("test", scorer='match-ratio'),
                            segmenter=PretokenizedSegmenter(SENTENCES))
        self.assertEqual(1.0, pipeline.process(TEXT))

    def test_custom_scorer(self):
        pipeline = Pipeline(PipelineConfig("test"),
                            segmenter=PretokenizedSegmenter(SENTENCES),
                            scorer=lambda q, toks: 3.0)
        self.assertEqual(3.0, pipeline.process(TEXT))

    def test_run_until(self):
        pipeline = Pipeline(PipelineConfig("test"),
                            segmenter=PretokenizedSegmenter(SENTENCES))
        doc = pipeline.run(TEXT, until=PipelineState.MARKED)
        self.assertEqual(PipelineState.MARKED, doc.state)
        units = doc.store.select_all(Unit)
        self.assertEqual(TEST_SPANS, [u.span for u in units])
        self.assertEqual([None, None], [u.score for u in units])
        self.assertEqual([], doc.store.select_all(Aggregate))

    def test_process_safely(self):
        pipeline = Pipeline(PipelineConfig("test"))
        res = pipeline.process_safely('good', u"Just a test.")
        self.assertEqual(DocumentResult('good', 1.0, None), res)
        self.assertTrue(res.ok)
        res = pipeline.process_safely('bad', u"Nope.")
        self.assertFalse(res.ok)
        self.assertIsNone(res.score)
        self.assertIsInstance(res.error, AggregationError)
        self.assertTrue(res.describe_error().startswith('AggregationError'))

    def test_config(self):
        self.assertEqual(PipelineConfig("test", 'constant', 'error'),
                         PipelineConfig("test"))
        self.assertRaises(ValueError, Pipeline,
                          PipelineConfig("test", scorer='goodness'))
        self.assertRaises(ValueError, Pipeline,
                          PipelineConfig("test", empty_policy='zero'))

# ---------------------------------------------------------------------
# corpus
# ---------------------------------------------------------------------


def write_text(path, text):
    "write a UTF-8 text file"
    with open(path, 'w', encoding='utf-8') as stream:
        stream.write(text)


class CorpusTest(unittest.TestCase):
    "tests for annoscore.corpus"

    def setUp(self):
        self.rootdir = tempfile.mkdtemp()
        write_text(os.path.join(self.rootdir, 'doc1.txt'),
                   u"This is a test.\n")

    def tearDown(self):
        shutil.rmtree(self.rootdir)

    def add_documents(self):
        "a failing document, a subdirectory and a non-text file"
        write_text(os.path.join(self.rootdir, 'doc2.txt'),
                   u"Nothing to see here.\n")
        os.mkdir(os.path.join(self.rootdir, 'more'))
        write_text(os.path.join(self.rootdir, 'more', 'doc3.txt'),
                   u"A test. Another test.\n")
        write_text(os.path.join(self.rootdir, 'notes.md'), u"test")

    def test_single_document(self):
        reader = Reader(self.rootdir)
        texts = reader.slurp()
        self.assertEqual([FileId('doc1')], list(texts))
        scores = score_corpus(texts, PipelineConfig("test"))
        self.assertEqual(1, len(scores))
        self.assertTrue(all(r.score > 0 for r in scores))

    def test_files(self):
        self.add_documents()
        reader = Reader(self.rootdir)
        files = reader.files()
        self.assertEqual([FileId('doc1'), FileId('doc2'),
                          FileId('doc3', 'more')], sorted(files))
        subset = reader.filter(files, lambda k: k.subdoc == 'more')
        texts = reader.slurp(subset)
        self.assertEqual({FileId('doc3', 'more'): u"A test. Another test.\n"},
                         texts)
        self.assertEqual("more/doc3", str(FileId('doc3', 'more')))

    def test_failures(self):
        self.add_documents()
        texts = Reader(self.rootdir).slurp()
        results = score_corpus(texts, PipelineConfig("test"))
        self.assertEqual([FileId('doc1'), FileId('doc2'),
                          FileId('doc3', 'more')], [r.key for r in results])
        self.assertEqual([True, False, True], [r.ok for r in results])
        self.assertIsInstance(results[1].error, AggregationError)
        self.assertRaises(AggregationError, score_corpus, texts,
                          PipelineConfig("test"), keep_going=False)

    def test_scorer_failure(self):
        "a failing scorer fails its document, not the batch"
        texts = {FileId('a'): u"A test.", FileId('b'): u"No match."}
        results = score_corpus(texts, PipelineConfig("test"),
                               scorer=lambda q, t: 1 / 0)
        self.assertEqual([False, False], [r.ok for r in results])
        self.assertIsInstance(results[0].error, PipelineError)
        self.assertIsInstance(results[1].error, AggregationError)
        self.assertRaises(PipelineError, score_corpus, texts,
                          PipelineConfig("test"), keep_going=False,
                          scorer=lambda q, t: 1 / 0)

    def test_parallel(self):
        self.add_documents()
        texts = Reader(self.rootdir).slurp()
        config = PipelineConfig("test")
        serial = score_corpus(texts, config)
        parallel = score_corpus(texts, config, n_jobs=2)
        self.assertEqual([(r.key, r.score) for r in serial],
                         [(r.key, r.score) for r in parallel])

    def test_dataframe(self):
        self.add_documents()
        texts = Reader(self.rootdir).slurp()
        frame = results_dataframe(score_corpus(texts, PipelineConfig("test")))
        self.assertEqual(['doc', 'subdoc', 'score', 'error'],
                         list(frame.columns))
        self.assertEqual(['doc1', 'doc2', 'doc3'], list(frame['doc']))
        self.assertEqual(1.0, frame['score'][0])
        self.assertTrue(frame['error'][1].startswith('AggregationError'))
