# -*- coding: utf-8 -*-
# -------------------------------------------------------------------------
# xcsf
# ----
# Accuracy-based Function Approximation for Python 3
#
# (c) Aaron Hosford 2015, all rights reserved
# Revised (3 Clause) BSD License
#
# Implements the XCSF classifier system for function approximation, with
# interval, neural and dynamical graph conditions.
#
# -------------------------------------------------------------------------

"""
Accuracy-based Function Approximation for Python 3

This xcsf submodule provides the scenario interface and a selection of
predefined scenarios and wrappers. A scenario supplies the classifier set
with situations (vectors of real-valued inputs) and, for each situation,
the true value of the target function, which the classifier set tries to
approximate. Every scenario keeps two streams of situations: a training
stream, whose answers are used to update the model, and a test stream,
which is only used to measure the model's error.

If you wish to create a scenario of your own, subclass the Scenario class
and define the appropriate methods. To add logging to an existing scenario,
wrap your scenario in a ScenarioObserver. To treat pre-collected data as a
scenario, use DataProblem, or load it from comma-separated files with
DataProblem.load(). To get a full listing of the classes provided by this
module and see documentation on their appropriate usage, use
"help(xcsf.scenarios)".
"""

__all__ = [
    'DataProblem',
    'FunctionProblem',
    'Scenario',
    'ScenarioObserver',
    'SineProblem',
]

import logging
import math
import os
import random
from abc import ABCMeta, abstractmethod

import numpy


class Scenario(metaclass=ABCMeta):
    """Abstract interface for scenarios accepted by the XCSF algorithm. To
    create a new function to approximate, subclass Scenario and implement
    the methods defined here. See FunctionProblem or DataProblem for
    examples.

    Usage:
        This is an abstract base class; it cannot be instantiated directly.
        You must create a subclass that defines the problem you expect the
        algorithm to solve, and instantiate that subclass instead.

    Init Arguments: n/a (See appropriate subclass.)
    """

    @property
    @abstractmethod
    def state_length(self):
        """The number of inputs in each situation."""
        raise NotImplementedError()

    @abstractmethod
    def reset(self, rng=None):
        """Reset the scenario, starting it over for a new run. If rng is
        provided, it becomes the scenario's random stream.

        Usage:
            scenario.reset(random.Random(seed))

        Arguments:
            rng: None, or a random.Random instance.
        Return: None
        """
        raise NotImplementedError()

    @abstractmethod
    def sense(self, train=True):
        """Return the next situation from the training stream, or from the
        test stream if train is False.

        Usage:
            situation = scenario.sense(train=True)
            answer = scenario.answer(train=True)

        Arguments:
            train: A bool indicating which stream to draw from.
        Return:
            A numpy array of floats of length state_length.
        """
        raise NotImplementedError()

    @abstractmethod
    def answer(self, train=True):
        """Return the true value of the target function for the situation
        most recently returned by sense() for the same stream.

        Usage:
            situation = scenario.sense(train=False)
            error = abs(scenario.answer(train=False) - prediction)

        Arguments:
            train: A bool indicating which stream the situation came from.
        Return:
            A float, the target value.
        """
        raise NotImplementedError()


class FunctionProblem(Scenario):
    """Approximate a Python function of real-valued inputs. Situations are
    drawn uniformly at random from the box [low, high] ** state_length for
    both the training and the test stream.

    Usage:
        scenario = FunctionProblem(lambda x: math.sin(4 * x[0]), 1)
        model = algorithm.run(scenario, 10000)

    Init Arguments:
        function: A callable accepting a numpy array of length
            state_length and returning a float.
        state_length: An int, the number of inputs.
        low: A float, the lower bound of each input; default is -1.
        high: A float, the upper bound of each input; default is 1.
        rng: None, or a random.Random instance used to draw situations.
    """

    def __init__(self, function, state_length, low=-1.0, high=1.0,
                 rng=None):
        assert callable(function)
        assert isinstance(state_length, int) and state_length > 0
        assert low < high

        self.function = function
        self._state_length = state_length
        self.low = low
        self.high = high
        self.rng = rng or random.Random()
        self.current_situations = {True: None, False: None}

    @property
    def state_length(self):
        return self._state_length

    def reset(self, rng=None):
        if rng is not None:
            self.rng = rng
        self.current_situations = {True: None, False: None}

    def sense(self, train=True):
        situation = numpy.array([
            self.low + self.rng.random() * (self.high - self.low)
            for _ in range(self._state_length)
        ])
        self.current_situations[bool(train)] = situation
        return situation

    def answer(self, train=True):
        situation = self.current_situations[bool(train)]
        assert situation is not None
        return float(self.function(situation))


class SineProblem(FunctionProblem):
    """The sum of sines, sin(4 * pi * x) averaged over the inputs, a
    common smoke test for function approximation.

    Init Arguments:
        state_length: An int, the number of inputs; default is 1.
        rng: None, or a random.Random instance.
    """

    def __init__(self, state_length=1, rng=None):
        super().__init__(
            lambda x: float(numpy.mean(numpy.sin(4 * math.pi * x))),
            state_length,
            rng=rng
        )


class DataProblem(Scenario):
    """Wrap pre-collected training and test data as a scenario. Each call
    to sense() returns a row drawn uniformly at random from the requested
    data set.

    Usage:
        scenario = DataProblem(train_x, train_y, test_x, test_y)

        # Or, from "sine_train.csv" and "sine_test.csv":
        scenario = DataProblem.load('sine')

    Init Arguments:
        train_situations: A 2-d array-like of training inputs.
        train_answers: A 1-d array-like of training targets.
        test_situations: A 2-d array-like of test inputs; default is the
            training inputs.
        test_answers: A 1-d array-like of test targets; default is the
            training targets.
        rng: None, or a random.Random instance used to draw rows.
    """

    def __init__(self, train_situations, train_answers,
                 test_situations=None, test_answers=None, rng=None):
        if test_situations is None:
            test_situations, test_answers = train_situations, train_answers

        self.situations = {
            True: numpy.atleast_2d(numpy.asarray(train_situations, float)),
            False: numpy.atleast_2d(numpy.asarray(test_situations, float)),
        }
        self.answers = {
            True: numpy.asarray(train_answers, dtype=float).reshape(-1),
            False: numpy.asarray(test_answers, dtype=float).reshape(-1),
        }
        for train in (True, False):
            if len(self.situations[train]) != len(self.answers[train]):
                raise ValueError("Situation and answer counts differ.")
            if not len(self.answers[train]):
                raise ValueError("Data sets must not be empty.")
        if self.situations[True].shape[1] != self.situations[False].shape[1]:
            raise ValueError("Training and test inputs differ in length.")

        self.rng = rng or random.Random()
        self.current_indices = {True: None, False: None}

    @classmethod
    def load(cls, path, rng=None):
        """Load a problem from comma-separated text files. The last column
        of each row is the answer; the other columns are the inputs. If
        path names an existing file, it is used for both training and
        testing. Otherwise path + '_train.csv' and path + '_test.csv' are
        read.

        Usage:
            scenario = DataProblem.load('data/sine')

        Arguments:
            path: A str, the file path or the common path prefix.
            rng: None, or a random.Random instance.
        Return:
            A new DataProblem instance.
        """
        if os.path.isfile(path):
            train_path = test_path = path
        else:
            train_path = path + '_train.csv'
            test_path = path + '_test.csv'

        arrays = []
        for file_path in train_path, test_path:
            data = numpy.loadtxt(file_path, delimiter=',', ndmin=2)
            if data.shape[1] < 2:
                raise ValueError("%s: expected at least one input column "
                                 "and one answer column." % file_path)
            arrays.append((data[:, :-1], data[:, -1]))

        (train_x, train_y), (test_x, test_y) = arrays
        return cls(train_x, train_y, test_x, test_y, rng)

    @property
    def state_length(self):
        return self.situations[True].shape[1]

    def reset(self, rng=None):
        if rng is not None:
            self.rng = rng
        self.current_indices = {True: None, False: None}

    def sense(self, train=True):
        train = bool(train)
        index = self.rng.randrange(len(self.answers[train]))
        self.current_indices[train] = index
        return self.situations[train][index]

    def answer(self, train=True):
        train = bool(train)
        index = self.current_indices[train]
        assert index is not None
        return float(self.answers[train][index])


class ScenarioObserver(Scenario):
    """Wrapper for other Scenario instances which logs details of the
    model/scenario interaction as they take place, forwarding the actual
    work on to the wrapped instance.

    Usage:
        model = algorithm.run(ScenarioObserver(scenario), 10000)

    Init Arguments:
        wrapped: The Scenario instance to be observed.
    """

    def __init__(self, wrapped):
        # Ensure that the wrapped object implements the same interface
        assert isinstance(wrapped, Scenario)

        self.logger = logging.getLogger(__name__)
        self.wrapped = wrapped
        self.steps = 0

    @property
    def state_length(self):
        return self.wrapped.state_length

    def reset(self, rng=None):
        self.logger.info('Resetting scenario.')
        self.steps = 0
        self.wrapped.reset(rng)

    def sense(self, train=True):
        situation = self.wrapped.sense(train)
        if train:
            self.steps += 1
        self.logger.debug('Situation (%s): %s',
                          'train' if train else 'test', situation)
        return situation

    def answer(self, train=True):
        answer = self.wrapped.answer(train)
        self.logger.debug('Answer: %.5f', answer)
        if train and not self.steps % 1000:
            self.logger.info('Training steps completed: %d', self.steps)
        return answer
