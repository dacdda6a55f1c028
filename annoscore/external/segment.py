# -*- coding: utf-8 -*-
#
# License: BSD3

"""
Sentence and token segmentation, as done by tools outside of annoscore.

A segmenter is anything with a `segment(text)` method returning a list
of `(sentence_span, token_spans)` pairs, offsets being relative to the
start of the text.  Whether the output actually makes sense (tokens
inside their sentence, nothing off the end of the text) is checked by
`annoscore.stages.Segmenter`, not here.

Two segmenters are provided:

* `NltkSegmenter`: NLTK_'s Punkt sentence splitter followed by one of
  its word tokenizers, run on each sentence in turn
* `PretokenizedSegmenter`: for when some other tool has already
  produced the token strings and we just need to find them in the text

.. _NLTK: http://www.nltk.org
"""

from itertools import islice, filterfalse

from nltk.tokenize import WordPunctTokenizer
from nltk.tokenize.punkt import PunktSentenceTokenizer

from annoscore.annotation import Span
from annoscore.errors import SegmentationError

# pylint: disable=too-few-public-methods


class NltkSegmenter(object):
    """
    Punkt sentence splitting, then word tokenization within each
    sentence.

    The default Punkt model is untrained (no language data needed);
    pass a trained `PunktSentenceTokenizer` for better handling of
    abbreviations.  The word tokenizer must provide `span_tokenize`.
    """
    def __init__(self, sentence_tokenizer=None, word_tokenizer=None):
        self.sentence_tokenizer = sentence_tokenizer or\
            PunktSentenceTokenizer()
        self.word_tokenizer = word_tokenizer or WordPunctTokenizer()

    def segment(self, text):
        "Return a list of (sentence span, token spans)"
        res = []
        for start, end in self.sentence_tokenizer.span_tokenize(text):
            sentence = Span(start, end)
            tokens = [Span(t_start, t_end).shift(start) for t_start, t_end
                      in self.word_tokenizer.span_tokenize(text[start:end])]
            res.append((sentence, tokens))
        return res


class PretokenizedSegmenter(object):
    """
    Sentences and tokens produced elsewhere, as strings.

    :param sentences: one list of token strings per sentence, in
        text order; concatenated, they must match the text modulo
        whitespace
    :type sentences: [[string]]
    """
    def __init__(self, sentences):
        self.sentences = [list(s) for s in sentences]

    def segment(self, text):
        "Return a list of (sentence span, token spans)"
        flat = [tok for sent in self.sentences for tok in sent]
        spans = iter(list(generic_token_spans(text, flat)))
        res = []
        for sent in self.sentences:
            tokens = list(islice(spans, len(sent)))
            if not tokens:
                raise SegmentationError("empty sentence in pretokenized "
                                        "input")
            res.append((Span(tokens[0].char_start, tokens[-1].char_end),
                        tokens))
        return res


def generic_token_spans(text, tokens, offset=0, txtfn=None):
    """
    Given a string and a sequence of substrings within than string,
    infer a span for each of the substrings.

    We do this by walking the text as we consume tokens, skipping over
    any whitespace (including that which is within the tokens).  For
    this to work, the substring sequence must be identical to the text
    modulo whitespace.  Anything else raises SegmentationError.

    Spans are relative to the start of the string itself, but can be
    shifted by passing an offset.  Empty tokens are accepted but have
    a zero-length span.

    This function is lazy so you can use it incrementally
    provided you can generate the tokens lazily too

    :param txtfn: function to extract text from a token (default None,
                  treated as identity function)
    """
    txt_iter = filterfalse(lambda x: x[1].isspace(), enumerate(text))
    txtfn = txtfn or (lambda x: x)
    last = offset  # for corner case of empty tokens
    for token in tokens:
        tok_chars = [x for x in txtfn(token) if not x.isspace()]
        if not tok_chars:
            yield Span(last, last)
            continue
        prefix = list(islice(txt_iter, len(tok_chars)))
        if len(prefix) < len(tok_chars):
            msg = "Too many tokens (current: %s)" % txtfn(token)
            raise SegmentationError(msg)
        last = prefix[-1][0] + 1 + offset
        span = Span(prefix[0][0] + offset, last)
        pretty_prefix = text[span.char_start - offset:span.char_end - offset]
        # the non-whitespace characters must be the same
        for (idx, txt_char), tok_char in zip(prefix, tok_chars):
            if txt_char != tok_char:
                msg = "token mismatch at char %d (%s vs %s)\n"\
                    % (idx, txt_char, tok_char)\
                    + " token: [%s]\n" % txtfn(token)\
                    + " text:  [%s]" % pretty_prefix
                raise SegmentationError(msg)
        yield span
