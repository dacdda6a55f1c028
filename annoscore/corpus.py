# License: BSD3

"""
Corpus management: finding documents, reading them, and scoring them
in bulk.

This is the batch driver around `annoscore.pipeline`.  A corpus is just
a directory of UTF-8 text files ::

    reader = Reader(corpus_dir)
    texts = reader.slurp()
    results = score_corpus(texts, PipelineConfig('test'))

Pick a slice of the corpus first if you don't want all of it ::

    files = reader.filter(reader.files(), lambda k: k.doc.startswith('a'))
    texts = reader.slurp(files)
"""

import codecs
from glob import glob
import os
import sys

from joblib import Parallel, delayed
import pandas as pd

from .pipeline import Pipeline


class FileId(object):
    """
    Information needed to uniquely identify a document in the corpus

    :param doc: document name (file name without its extension)
    :type doc:  string

    :param subdoc: subdirectory the document was found in, relative to
        the corpus root (None if at the top)
    :type subdoc: string
    """
    def __init__(self, doc, subdoc=None):
        self.doc = doc
        self.subdoc = subdoc

    def __str__(self):
        if self.subdoc is None:
            return self.doc
        return "%s/%s" % (self.subdoc, self.doc)

    def __repr__(self):
        return "FileId(%r, %r)" % (self.doc, self.subdoc)

    def _tuple(self):
        """
        For internal use by __hash__, __eq__, etc
        """
        return (self.subdoc or '', self.doc)

    def __hash__(self):
        return hash(self._tuple())

    def __eq__(self, other):
        return isinstance(other, FileId) and self._tuple() == other._tuple()

    def __ne__(self, other):
        return not self == other

    def __lt__(self, other):
        return self._tuple() < other._tuple()


class Reader(object):
    """
    `Reader` provides little more than dictionaries from `FileId`
    to data.

    :param rootdir: the top directory of the corpus
    :type rootdir: string

    :param file_glob: which files count as documents (matched in the
        root directory and in each directory below it)
    :type file_glob: string
    """
    def __init__(self, rootdir, file_glob='*.txt'):
        self.rootdir = rootdir
        self.file_glob = file_glob

    def files(self):
        """
        Return a dictionary from FileId to file path
        """
        res = {}
        for dirpath, _, _ in os.walk(self.rootdir):
            rel = os.path.relpath(dirpath, self.rootdir)
            subdoc = None if rel == os.curdir else rel
            for fname in glob(os.path.join(dirpath, self.file_glob)):
                if not os.path.isfile(fname):
                    continue
                doc = os.path.splitext(os.path.basename(fname))[0]
                res[FileId(doc, subdoc)] = fname
        return res

    def slurp(self, cfiles=None, verbose=False):
        """
        Read the entire corpus if `cfiles` is `None` or else the
        subset specified by `cfiles`.

        Return a dictionary from FileId to document text

        :param cfiles: dict of files like what `Reader.files()` would
            return
        :param verbose: if True, report progress on stderr
        """
        cfiles = self.files() if cfiles is None else cfiles
        corpus = {}
        for counter, k in enumerate(sorted(cfiles)):
            if verbose:
                sys.stderr.write("\rSlurping corpus dir [%d/%d]" %
                                 (counter, len(cfiles)))
            with codecs.open(cfiles[k], 'r', 'utf-8') as stream:
                corpus[k] = stream.read()
        if verbose:
            sys.stderr.write("\rSlurping corpus dir [%d/%d done]\n" %
                             (len(cfiles), len(cfiles)))
        return corpus

    def filter(self, d, pred):
        """
        Convenience function equivalent to ::

            { k:v for k,v in d.items() if pred(k) }
        """
        return dict([(k, v) for k, v in d.items() if pred(k)])


# ---------------------------------------------------------------------
# scoring
# ---------------------------------------------------------------------


def _score_one(config, key, text, segmenter, scorer, keep_going):
    """
    Score a single document with a pipeline of its own
    (for use in parallel workers)
    """
    pipeline = Pipeline(config, segmenter=segmenter, scorer=scorer)
    if keep_going:
        return pipeline.process_safely(key, text)
    return _result_or_raise(pipeline, key, text)


def _result_or_raise(pipeline, key, text):
    "DocumentResult for the text, propagating any failure"
    res = pipeline.process_safely(key, text)
    if not res.ok:
        raise res.error
    return res


def score_corpus(texts, config, n_jobs=1, keep_going=True, segmenter=None,
                 scorer=None, verbose=False):
    """
    Run the pipeline on each document, returning a list of
    `DocumentResult` sorted by key.

    :param texts: document key to text (see `Reader.slurp`)
    :type texts: dict

    :param config: pipeline settings
    :type config: annoscore.pipeline.PipelineConfig

    :param n_jobs: number of documents to process in parallel (as for
        `joblib.Parallel`: -1 means one per CPU).  With a single job,
        one pipeline is recycled from document to document.
    :type n_jobs: int

    :param keep_going: if True, failures are recorded in the results;
        if False, the first failure is raised
    :type keep_going: bool

    :param segmenter: segmentation tool (default: NLTK based)
    :param scorer: scoring function overriding the one in the config
    :param verbose: report progress on stderr
    """
    keys = sorted(texts)
    if n_jobs == 1:
        pipeline = Pipeline(config, segmenter=segmenter, scorer=scorer)
        results = []
        for counter, k in enumerate(keys):
            if verbose:
                sys.stderr.write("\rScoring corpus [%d/%d]" %
                                 (counter, len(keys)))
            if keep_going:
                res = pipeline.process_safely(k, texts[k])
            else:
                res = _result_or_raise(pipeline, k, texts[k])
            if verbose and not res.ok:
                print("\nFailed on %s (%s)" % (k, res.describe_error()),
                      file=sys.stderr)
            results.append(res)
        if verbose:
            sys.stderr.write("\rScoring corpus [%d/%d done]\n" %
                             (len(keys), len(keys)))
        return results
    config.check()
    return Parallel(n_jobs=n_jobs, verbose=10 if verbose else 0)(
        delayed(_score_one)(config, k, texts[k], segmenter, scorer,
                            keep_going)
        for k in keys)


def results_dataframe(results):
    """
    Results as a `pandas.DataFrame` with one row per document and
    columns `doc`, `subdoc`, `score`, `error`
    """
    rows = []
    for res in results:
        key = res.key
        rows.append({
            'doc': getattr(key, 'doc', str(key)),
            'subdoc': getattr(key, 'subdoc', None),
            'score': res.score,
            'error': res.describe_error(),
        })
    return pd.DataFrame(rows, columns=['doc', 'subdoc', 'score', 'error'])
