"""Running independent experiments. Each experiment seeds a fresh
classifier set from its own random stream, trains it for max_trials
trials, and releases its population when it is done."""

import logging
import os
import random

from .algorithms.xcsf import XCSFAlgorithm
from .performance import PerformanceReporter
from . import scenarios


logger = logging.getLogger(__name__)


def experiment_rng(algorithm, experiment):
    """Return the random stream for the given (1-based) experiment."""
    if algorithm.random_seed is None:
        return random.Random()
    return random.Random(algorithm.random_seed + experiment)


def output_path(name, experiment, directory=None):
    """Return the path of the data file for the given experiment."""
    if directory is None:
        return None
    file_name = '%s-%d.dat' % (os.path.basename(name), experiment)
    return os.path.join(directory, file_name)


def run_experiments(algorithm, scenario, name='xcsf', directory=None,
                    trials=None, experiments=None):
    """Run experiment_count independent experiments of the algorithm on
    the scenario. The algorithm's parameters are frozen first, so every
    experiment runs with the same configuration.

    Usage:
        algorithm = XCSFAlgorithm.from_file('cons.txt')
        results = run_experiments(algorithm, SineProblem())

    Arguments:
        algorithm: An XCSFAlgorithm instance.
        scenario: A Scenario instance.
        name: A str used to name the experiments' data files.
        directory: None, or the directory in which the data files are
            written. If None, performance is only logged.
        trials: None, or an int overriding max_trials.
        experiments: None, or an int overriding experiment_count.
    Return:
        A list containing, for each experiment, the list of performance
        reports (trial, train_error, test_error, population_size,
        average_k) it produced.
    """
    assert isinstance(algorithm, XCSFAlgorithm)
    assert isinstance(scenario, scenarios.Scenario)

    if trials is None:
        trials = algorithm.max_trials
    if experiments is None:
        experiments = algorithm.experiment_count

    algorithm.freeze()

    results = []
    for experiment in range(1, experiments + 1):
        logger.info('Experiment: %d', experiment)
        rng = experiment_rng(algorithm, experiment)
        scenario.reset(rng)

        model = algorithm.new_model(scenario, rng)
        model.seed()

        path = output_path(name, experiment, directory)
        with PerformanceReporter(algorithm.performance_window,
                                 path) as reporter:
            model.run(scenario, trials, reporter)

        logger.info('Experiment %d finished with %d rule(s), numerosity '
                    '%d.', experiment, len(model), model.numerosity)
        results.append(reporter.reports)
        model.clear()

    return results
