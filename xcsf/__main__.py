"""Command line entry point.

Usage:
    python -m xcsf inputfile [max_trials] [num_experiments]

The input file is a comma-separated data set whose last column is the
target value; if inputfile does not exist, inputfile_train.csv and
inputfile_test.csv are read instead. Parameters are read from cons.txt in
the working directory when it exists.
"""

import argparse
import logging
import os
import sys

from .algorithms.xcsf import XCSFAlgorithm
from .experiment import run_experiments
from .scenarios import DataProblem

PARAMETER_FILE = 'cons.txt'


def build_parser():
    parser = argparse.ArgumentParser(
        prog='xcsf',
        description='Approximate a data set with the XCSF classifier '
                    'system.'
    )
    parser.add_argument(
        'inputfile',
        help='Data file, or common prefix of <prefix>_train.csv and '
             '<prefix>_test.csv.'
    )
    parser.add_argument(
        'max_trials',
        nargs='?',
        type=int,
        default=None,
        help='Number of trials per experiment (overrides MAX_TRIALS).'
    )
    parser.add_argument(
        'num_experiments',
        nargs='?',
        type=int,
        default=None,
        help='Number of experiments (overrides NUM_EXPERIMENTS).'
    )
    parser.add_argument(
        '--parameters',
        default=PARAMETER_FILE,
        help='Parameter file of NAME=VALUE lines (default: %(default)s).'
    )
    parser.add_argument(
        '--output',
        default=None,
        help='Directory for per-experiment performance files.'
    )
    return parser


def main(argv=None):
    """Parse the arguments and run the experiments. A malformed command
    line exits with status 2 before anything else is done."""
    args = build_parser().parse_args(argv)

    logging.basicConfig(level=logging.INFO)

    overrides = {}
    if args.max_trials is not None:
        overrides['max_trials'] = args.max_trials
    if args.num_experiments is not None:
        overrides['experiment_count'] = args.num_experiments

    if os.path.isfile(args.parameters):
        algorithm = XCSFAlgorithm.from_file(args.parameters, **overrides)
    else:
        algorithm = XCSFAlgorithm()
        algorithm.set_parameters(overrides)

    scenario = DataProblem.load(args.inputfile)
    run_experiments(algorithm, scenario, name=args.inputfile,
                    directory=args.output)
    return 0


if __name__ == '__main__':
    sys.exit(main())
