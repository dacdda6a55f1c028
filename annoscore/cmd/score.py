# License: BSD3

"""Score every document in a corpus directory

Each text file is segmented, tokens matching the query word are marked
and scored, and the unit scores are averaged into one score per
document.
"""

import os
import sys

from tabulate import tabulate

from annoscore.corpus import Reader, results_dataframe, score_corpus
from .args import add_pipeline_args, read_config

NAME = 'score'


def config_argparser(parser):
    """
    Subcommand flags.

    You should create and pass in the subparser to which the flags
    are to be added.
    """
    parser.add_argument('corpus', metavar='DIR',
                        help='corpus directory')
    add_pipeline_args(parser)
    parser.add_argument('--glob', default='*.txt',
                        help='which files to read (default: *.txt)')
    parser.add_argument('--jobs', type=int, default=1,
                        help='documents to score in parallel '
                        '(-1 for one per CPU)')
    parser.add_argument('--stop-on-error', dest='keep_going',
                        action='store_false',
                        help='abort on the first document that fails')
    parser.add_argument('--output', metavar='FILE',
                        help='write results as CSV to this file instead '
                        'of printing a table')
    parser.add_argument('--verbose', '-v', action='store_true',
                        help='report progress on stderr')
    parser.set_defaults(func=main)


def main(args):
    """
    Subcommand main.

    You shouldn't need to call this yourself if you're using
    `config_argparser`
    """
    if not os.path.isdir(args.corpus):
        sys.exit("No corpus directory {corpus}".format(corpus=args.corpus))
    config = read_config(args)
    reader = Reader(args.corpus, file_glob=args.glob)
    texts = reader.slurp(verbose=args.verbose)
    results = score_corpus(texts, config,
                           n_jobs=args.jobs,
                           keep_going=args.keep_going,
                           verbose=args.verbose)
    frame = results_dataframe(results)
    if args.output:
        frame.to_csv(args.output, index=False)
        print("Scores written to", args.output, file=sys.stderr)
    else:
        rows = [(str(r.key), r.score, r.describe_error() or '')
                for r in results]
        print(tabulate(rows, headers=['document', 'score', 'error'],
                       floatfmt='.4f'))
    failures = [r for r in results if not r.ok]
    if failures:
        sys.exit("{} of {} documents failed".format(len(failures),
                                                    len(results)))
