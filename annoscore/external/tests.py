# -*- coding: utf-8 -*-
#
# License: BSD3

# pylint: disable=R0904

"""
Tests for annoscore.external
"""

import unittest

from annoscore.annotation import Span
from annoscore.errors import SegmentationError
from .segment import (NltkSegmenter, PretokenizedSegmenter,
                      generic_token_spans)


class TokenAlign(unittest.TestCase):
    """Finding pretokenized text in the original"""

    def test_simple_align(self):
        "trivial token realignment"
        tokens = ["a", "bb", "ccc"]
        text = "a bb    ccc"
        spans = list(generic_token_spans(text, tokens))
        expected = [Span(0, 1),
                    Span(2, 4),
                    Span(8, 11)]
        self.assertEqual(expected, spans)

    def test_messy_align(self):
        "ignore whitespace in token"
        tokens = ["a", "b b", "c c c"]
        text = "a bb    ccc"
        spans = list(generic_token_spans(text, tokens))
        expected = [Span(0, 1),
                    Span(2, 4),
                    Span(8, 11)]
        self.assertEqual(expected, spans)

    def test_offset(self):
        spans = list(generic_token_spans("ab c", ["ab", "c"], offset=10))
        self.assertEqual([Span(10, 12), Span(13, 14)], spans)

    def test_mismatch(self):
        with self.assertRaises(SegmentationError):
            list(generic_token_spans("a bb", ["a", "bc"]))
        with self.assertRaises(SegmentationError):
            list(generic_token_spans("a bb", ["a", "bb", "c"]))

    def test_sentences(self):
        tool = PretokenizedSegmenter([["a", "bb"], ["ccc", "."]])
        self.assertEqual([(Span(0, 4), [Span(0, 1), Span(2, 4)]),
                          (Span(5, 9), [Span(5, 8), Span(8, 9)])],
                         tool.segment("a bb ccc."))

    def test_empty_sentence(self):
        tool = PretokenizedSegmenter([["a"], []])
        self.assertRaises(SegmentationError, tool.segment, "a")


class Nltk(unittest.TestCase):
    """NLTK sentence splitting and tokenization"""

    def test_segment(self):
        text = u"Hello world. Bye now."
        segments = NltkSegmenter().segment(text)
        self.assertEqual(2, len(segments))
        first, tokens = segments[0]
        self.assertEqual(Span(0, 12), first)
        self.assertEqual([u"Hello", u"world", u"."],
                         [text[t.char_start:t.char_end] for t in tokens])
        second, tokens = segments[1]
        self.assertEqual(u"Bye now.", text[second.char_start:second.char_end])
        # token offsets are relative to the whole text
        self.assertEqual([Span(13, 16), Span(17, 20), Span(20, 21)], tokens)

    def test_nesting(self):
        text = u"  A test:  does it work?\n\nYes, it's a test!  "
        for sentence, tokens in NltkSegmenter().segment(text):
            self.assertTrue(sentence.within(len(text)))
            for token in tokens:
                self.assertTrue(sentence.encloses(token))
                self.assertTrue(token.length() > 0)
                self.assertFalse(text[token.char_start:token.char_end]
                                 .isspace())
