# License: BSD3

"""
Tests for the annoscore command line
"""

import os

import pandas as pd
import pytest

from annoscore.cmd import main


def write_corpus(rootdir, texts):
    "one UTF-8 file per (name, text) pair"
    for name, text in texts:
        with open(os.path.join(str(rootdir), name), 'w',
                  encoding='utf-8') as stream:
            stream.write(text)


def test_score_table(tmpdir, capsys):
    write_corpus(tmpdir, [('doc1.txt', u"This is a test.\n")])
    main(['score', str(tmpdir), '--query', 'test'])
    out = capsys.readouterr().out
    assert 'doc1' in out
    assert '1.0000' in out


def test_score_csv(tmpdir):
    write_corpus(tmpdir, [('doc1.txt', u"This is a test.\n"),
                          ('doc2.txt', u"No match here.\n")])
    output = str(tmpdir.join('scores.csv'))
    main(['score', str(tmpdir), '--query', 'test', '--empty', 'nan',
          '--output', output])
    frame = pd.read_csv(output)
    assert list(frame['doc']) == ['doc1', 'doc2']
    assert frame['score'][0] == 1.0
    assert pd.isnull(frame['score'][1])


def test_score_failure(tmpdir, capsys):
    write_corpus(tmpdir, [('doc1.txt', u"This is a test.\n"),
                          ('doc2.txt', u"No match here.\n")])
    with pytest.raises(SystemExit) as exc:
        main(['score', str(tmpdir), '--query', 'test'])
    assert '1 of 2 documents failed' in str(exc.value)
    assert 'AggregationError' in capsys.readouterr().out


def test_score_no_corpus(tmpdir):
    with pytest.raises(SystemExit):
        main(['score', str(tmpdir.join('nowhere')), '--query', 'test'])


def test_annotate(tmpdir, capsys):
    write_corpus(tmpdir, [('doc1.txt', u"A test.")])
    main(['annotate', str(tmpdir.join('doc1.txt')), '--query', 'test'])
    out = capsys.readouterr().out
    for name in ['Sentence', 'Token', 'Unit', 'Aggregate']:
        assert name in out
    assert 'AGGREGATED' in out


def test_annotate_failure(tmpdir, capsys):
    write_corpus(tmpdir, [('doc1.txt', u"No match.")])
    with pytest.raises(SystemExit) as exc:
        main(['annotate', str(tmpdir.join('doc1.txt')), '--query', 'test'])
    assert 'ScoreAggregator failed' in str(exc.value)
    out = capsys.readouterr().out
    assert 'Token' in out
    assert 'SCORED' in out


def test_annotate_no_file(tmpdir):
    missing = str(tmpdir.join('nowhere.txt'))
    with pytest.raises(SystemExit) as exc:
        main(['annotate', missing, '--query', 'test'])
    assert 'No input file' in str(exc.value)


def test_subcommand_help(capsys):
    with pytest.raises(SystemExit):
        main(['--help'])
    out = capsys.readouterr().out
    assert 'Score every document' in out
    assert 'Show the annotations' in out
