from .framework import LCSAlgorithm
from .algorithms.xcsf import XCSFAlgorithm
from .performance import PerformanceReporter

from . import scenarios


def test(algorithm=None, scenario=None, trials=10000):
    """Run the algorithm on the scenario, creating a new classifier set in
    the process. Log the performance as the scenario unfolds. Return a
    tuple, (total_steps, final_test_error, total_seconds, model),
    indicating the performance of the algorithm in the scenario and the
    resulting classifier set that was produced. By default, the algorithm
    used is a new XCSFAlgorithm instance with interval conditions and set
    subsumption turned on, and the scenario is a SineProblem instance.

    Usage:
        algorithm = XCSFAlgorithm()
        scenario = SineProblem(2)
        steps, error, seconds, model = test(algorithm, scenario)

    Arguments:
        algorithm: The LCSAlgorithm instance which should be run; default
            is a new XCSFAlgorithm instance with interval conditions and
            GA and set subsumption turned on.
        scenario: The Scenario instance which the algorithm should be run
            on; default is a one-input SineProblem instance.
        trials: The number of train/test trials to run; default is 10,000.
    Return:
        A tuple, (total_steps, final_test_error, total_time, model), where
        total_steps is the number of training steps executed,
        final_test_error is the mean test error over the last reporting
        window, total_time is the time in seconds from start to end of the
        call to model.run(), and model is the ClassifierSet instance that
        was created and trained.
    """

    assert algorithm is None or isinstance(algorithm, LCSAlgorithm)
    assert scenario is None or isinstance(scenario, scenarios.Scenario)

    import logging
    import time

    logging.basicConfig(level=logging.INFO)
    logger = logging.getLogger(__name__)

    if scenario is None:
        # Define the scenario.
        scenario = scenarios.SineProblem()

    if not isinstance(scenario, scenarios.ScenarioObserver):
        # Put the scenario into a wrapper that will report things back to
        # us for visibility.
        scenario = scenarios.ScenarioObserver(scenario)

    if algorithm is None:
        # Define the algorithm.
        algorithm = XCSFAlgorithm()
        algorithm.condition_type = 'interval'
        algorithm.do_ga_subsumption = True
        algorithm.do_set_subsumption = True

    assert isinstance(algorithm, LCSAlgorithm)
    assert isinstance(scenario, scenarios.ScenarioObserver)

    # Create the classifier system from the algorithm.
    model = algorithm.new_model(scenario)
    model.seed()
    reporter = PerformanceReporter(
        min(getattr(algorithm, 'performance_window', 1000), trials)
    )

    # Run the algorithm on the scenario. Each trial trains the model on
    # one situation from the training stream, then measures its error on
    # one situation from the test stream. Since initially the population
    # is empty, error will be high, but it will fall over time as covering
    # and the GA fill the input space with accurate rules.
    start_time = time.time()
    model.run(scenario, trials, reporter)
    end_time = time.time()

    logger.info('Classifiers:\n\n%s\n', model)
    logger.info("Total time: %.5f seconds", end_time - start_time)

    return (
        scenario.steps,
        float(reporter.test_errors.mean()),
        end_time - start_time,
        model
    )
