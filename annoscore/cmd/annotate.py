# License: BSD3

"""Show the annotations the pipeline makes on a single document

Stages are run one at a time; if one of them fails, the annotations
made so far are shown along with the error.
"""

import codecs
import os
import sys

from tabulate import tabulate

from annoscore.errors import AnnoscoreException
from annoscore.pipeline import Pipeline
from annoscore.typesystem import SCORE
from .args import add_pipeline_args, read_config

NAME = 'annotate'


def config_argparser(parser):
    """
    Subcommand flags.
    """
    parser.add_argument('input', metavar='FILE',
                        help='text file (UTF-8)')
    add_pipeline_args(parser)
    parser.set_defaults(func=main)


def annotation_rows(doc):
    """
    One (type, start, end, text, score) row per annotation in the
    document's store
    """
    rows = []
    for anno in doc.store:
        score = anno.get_feature(SCORE) if SCORE in anno.type.features\
            else None
        rows.append((anno.type.name,
                     anno.span.char_start,
                     anno.span.char_end,
                     doc.covered_text(anno),
                     '' if score is None else score))
    return rows


def main(args):
    """
    Subcommand main.
    """
    if not os.path.isfile(args.input):
        sys.exit("No input file {input}".format(input=args.input))
    with codecs.open(args.input, 'r', 'utf-8') as stream:
        text = stream.read()
    pipeline = Pipeline(read_config(args))
    doc = pipeline.document
    doc.reset(text)
    error = None
    for stage in pipeline.stages:
        try:
            stage.process(doc)
        except AnnoscoreException as err:
            error = err
            break
    headers = ['type', 'start', 'end', 'text', 'score']
    print(tabulate(annotation_rows(doc), headers=headers))
    print("state:", doc.state.name)
    if error is not None:
        sys.exit("{} failed: {}".format(stage, error))
