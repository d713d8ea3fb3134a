"""Performance reporting. The classifier set hands the reporter the training
and test error of every trial; every window of trials the reporter logs the
mean errors, the population size and the average graph connectivity, and,
if it was given a path, appends the same figures to a data file."""

import logging

import numpy


logger = logging.getLogger(__name__)


class PerformanceReporter:
    """Collects per-trial errors in fixed-size ring buffers and reports
    their means every window trials.

    Usage:
        with PerformanceReporter(1000, 'sine-1.dat') as reporter:
            model.run(scenario, 50000, reporter)

    Init Arguments:
        window: An int, the number of trials averaged in each report.
        path: None, or the path of a file to which each report is
            appended as a line of whitespace-separated values.
    """

    def __init__(self, window, path=None):
        assert isinstance(window, int) and window > 0

        self.window = window
        self.path = path
        self.train_errors = numpy.zeros(window)
        self.test_errors = numpy.zeros(window)
        self.reports = []
        self._file = None

    def __enter__(self):
        self.open()
        return self

    def __exit__(self, exc_type, exc_value, traceback):
        self.close()

    def open(self):
        """Open the output file, if a path was given."""
        if self.path is not None and self._file is None:
            self._file = open(self.path, 'w', encoding='utf-8')

    def close(self):
        """Close the output file, if one is open."""
        if self._file is not None:
            self._file.close()
            self._file = None

    def record(self, trial, train_error, test_error, model):
        """Store the errors of one trial, and report if the trial closes a
        window."""
        index = trial % self.window
        self.train_errors[index] = train_error
        self.test_errors[index] = test_error
        if index == 0 and trial > 0:
            self.report(trial, model)

    def report(self, trial, model):
        """Log the mean errors of the current window together with the
        state of the population. Return the reported tuple
        (trial, train_error, test_error, population_size, average_k)."""
        entry = (
            trial,
            float(numpy.mean(self.train_errors)),
            float(numpy.mean(self.test_errors)),
            model.numerosity,
            model.average_k
        )
        self.reports.append(entry)
        logger.info('%d %.5f %.5f %d %.1f', *entry)
        if self._file is not None:
            self._file.write('%d %.5f %.5f %d %.1f\n' % entry)
            self._file.flush()
        return entry
