# License: BSD3

"""
Command line options shared between subcommands
"""

from annoscore.pipeline import PipelineConfig
from annoscore.scoring import SCORERS
from annoscore.stages import EMPTY_POLICIES


def add_pipeline_args(parser):
    """
    Augment a subcommand argparser with the pipeline settings
    (see `annoscore.pipeline.PipelineConfig`)
    """
    parser.add_argument('--query', metavar='WORD',
                        required=True,
                        help='mark tokens that are exactly this word')
    parser.add_argument('--scorer',
                        choices=sorted(SCORERS),
                        default='constant',
                        help='how to score each unit')
    parser.add_argument('--empty',
                        choices=EMPTY_POLICIES,
                        default='error',
                        help='documents without units: fail (error) '
                        'or score as NaN (nan)')


def read_config(args):
    """
    Pipeline configuration from the parsed arguments
    """
    return PipelineConfig(query_word=args.query,
                          scorer=args.scorer,
                          empty_policy=args.empty).check()
