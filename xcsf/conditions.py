"""
Accuracy-based Function Approximation for Python 3

This xcsf submodule provides the matching conditions available to
classifier rules. Exactly one kind of condition is used throughout a run,
selected by the algorithm's condition_type parameter:

    interval  An axis-aligned hyperrectangle, one [lower, upper] interval
              per input.
    graph     A dynamical graph (see xcsf.graphs) which matches when the
              state of its first node exceeds .5.
    neural    A small feed-forward network which matches when its output
              exceeds .5.

Every condition supports the same operations: random creation, covering of
a given situation, matching (by calling the condition on the situation),
mutation, copying, and optionally crossover and subsumption.
"""

import math
import random
from abc import ABCMeta, abstractmethod

import numpy

from .graphs import Graph


def logistic(x):
    """Computes the logistic function, e^x / (e^x + 1)."""
    try:
        return 1 / (1 + math.exp(-x))
    except (ValueError, ZeroDivisionError, OverflowError):
        return int(x > 0)


class Condition(metaclass=ABCMeta):
    """Abstract base class defining the minimal interface for matching
    conditions. Calling a condition on a situation returns a bool
    indicating whether it matches.

    Usage:
        This is an abstract base class. Use a subclass, such as
        GraphCondition, to create an instance.

    Init Arguments: n/a (See appropriate subclass.)
    """

    @classmethod
    @abstractmethod
    def random(cls, algorithm, state_length, rng=random):
        """Create a condition with random structure, using the parameters
        of the given algorithm."""
        raise NotImplementedError()

    @classmethod
    def cover(cls, algorithm, situation, rng=random):
        """Create a condition guaranteed to match the situation. By default
        random conditions are drawn until one matches."""
        while True:
            condition = cls.random(algorithm, len(situation), rng)
            if condition(situation):
                return condition

    @abstractmethod
    def __call__(self, situation):
        """Return a bool indicating whether the situation is matched."""
        raise NotImplementedError()

    @abstractmethod
    def mutate(self, rate, rng=random):
        """Mutate the condition in place with the given per-allele rate.
        Return a bool indicating whether anything changed."""
        raise NotImplementedError()

    @abstractmethod
    def copy(self):
        """Return an independent copy of the condition."""
        raise NotImplementedError()

    @property
    def supports_crossover(self):
        return False

    def crossover_with(self, other, rng=random):
        """Exchange genetic material with another condition of the same
        kind, in place. Return a bool indicating whether either condition
        changed."""
        return False

    def is_more_general(self, other):
        """Return a bool indicating whether this condition matches every
        situation the other one matches."""
        return False


class IntervalCondition(Condition):
    """A hyperrectangle condition: the situation matches if every input
    lies within its interval.

    Usage:
        condition = IntervalCondition.cover(algorithm, situation, rng)
        assert condition(situation)

    Init Arguments:
        intervals: An array-like of shape (state_length, 2), each row a
            (lower, upper) pair.
        bounds: A (min, max) pair bounding every interval.
        step: A float, the maximum size of a mutation step.
    """

    def __init__(self, intervals, bounds=(-1.0, 1.0), step=.1):
        self.intervals = numpy.array(intervals, dtype=float).reshape(-1, 2)
        self.intervals.sort(axis=1)
        self.bounds = tuple(bounds)
        self.step = step

    @classmethod
    def random(cls, algorithm, state_length, rng=random):
        low = algorithm.min_condition
        high = algorithm.max_condition
        intervals = [
            [low + rng.random() * (high - low),
             low + rng.random() * (high - low)]
            for _ in range(state_length)
        ]
        return cls(intervals, (low, high), algorithm.mutation_step)

    @classmethod
    def cover(cls, algorithm, situation, rng=random):
        step = algorithm.mutation_step
        intervals = [
            [value - step * rng.random(), value + step * rng.random()]
            for value in situation
        ]
        return cls(
            intervals,
            (algorithm.min_condition, algorithm.max_condition),
            step
        )

    def __call__(self, situation):
        situation = numpy.asarray(situation, dtype=float)
        return bool(numpy.all((self.intervals[:, 0] <= situation) &
                              (situation <= self.intervals[:, 1])))

    def mutate(self, rate, rng=random):
        modified = False
        alleles = self.intervals.reshape(-1)
        low, high = self.bounds
        for index in range(len(alleles)):
            if rng.random() < rate:
                old = alleles[index]
                new = old + (2 * rng.random() - 1) * self.step
                alleles[index] = min(high, max(low, new))
                if alleles[index] != old:
                    modified = True
        if modified:
            self.intervals.sort(axis=1)
        return modified

    def copy(self):
        return IntervalCondition(self.intervals, self.bounds, self.step)

    @property
    def supports_crossover(self):
        return True

    def crossover_with(self, other, rng=random):
        """Two-point crossover over the flattened interval bounds."""
        assert isinstance(other, IntervalCondition)
        mine = self.intervals.reshape(-1)
        theirs = other.intervals.reshape(-1)
        assert len(mine) == len(theirs)

        point1 = rng.randrange(len(mine))
        point2 = rng.randrange(len(mine)) + 1
        if point1 > point2:
            point1, point2 = point2, point1
        elif point1 == point2:
            point2 += 1

        modified = False
        for index in range(point1, min(point2, len(mine))):
            if mine[index] != theirs[index]:
                mine[index], theirs[index] = theirs[index], mine[index]
                modified = True
        if modified:
            self.intervals.sort(axis=1)
            other.intervals.sort(axis=1)
        return modified

    def is_more_general(self, other):
        if not isinstance(other, IntervalCondition):
            return False
        return bool(
            numpy.all(self.intervals[:, 0] <= other.intervals[:, 0]) and
            numpy.all(self.intervals[:, 1] >= other.intervals[:, 1])
        )

    def __str__(self):
        return ' '.join('(%.5f, %.5f)' % (lower, upper)
                        for lower, upper in self.intervals)


class GraphCondition(Condition):
    """A condition computed by a dynamical graph. The graph is run on the
    situation and the condition matches when the first node's final state
    is above .5.

    Init Arguments:
        graph: A Graph instance. The condition takes ownership of it.
    """

    def __init__(self, graph):
        assert isinstance(graph, Graph)
        self.graph = graph

    @classmethod
    def random(cls, algorithm, state_length, rng=random):
        return cls(Graph.random(
            algorithm.graph_node_count,
            state_length,
            rng,
            algorithm.graph_max_connections,
            algorithm.graph_max_timesteps
        ))

    def __call__(self, situation):
        self.graph.update(situation)
        return self.graph.output(0) > .5

    def mutate(self, rate, rng=random):
        return self.graph.mutate(rate, rng)

    def copy(self):
        return GraphCondition(self.graph.copy())

    @property
    def average_k(self):
        return self.graph.average_k

    def __str__(self):
        return str(self.graph)


class NeuralCondition(Condition):
    """A condition computed by a feed-forward network with one hidden
    layer of tanh units and a single logistic output unit. The condition
    matches when the output is above .5. The last column of each weight
    matrix holds the bias.

    Init Arguments:
        hidden_weights: An array-like of shape (hidden, state_length + 1).
        output_weights: An array-like of shape (hidden + 1,).
        step: A float, the maximum size of a mutation step.
    """

    def __init__(self, hidden_weights, output_weights, step=.1):
        self.hidden_weights = numpy.array(hidden_weights, dtype=float)
        self.output_weights = numpy.array(output_weights, dtype=float)
        assert self.hidden_weights.ndim == 2
        assert self.output_weights.shape == (len(self.hidden_weights) + 1,)
        self.step = step

    @classmethod
    def random(cls, algorithm, state_length, rng=random):
        hidden = algorithm.hidden_neuron_count
        hidden_weights = [
            [2 * rng.random() - 1 for _ in range(state_length + 1)]
            for _ in range(hidden)
        ]
        output_weights = [2 * rng.random() - 1 for _ in range(hidden + 1)]
        return cls(hidden_weights, output_weights, algorithm.mutation_step)

    def output(self, situation):
        """Return the network's output for the situation, in [0, 1]."""
        inputs = numpy.append(numpy.asarray(situation, dtype=float), 1.0)
        hidden = numpy.append(numpy.tanh(self.hidden_weights.dot(inputs)), 1.0)
        return logistic(float(self.output_weights.dot(hidden)))

    def __call__(self, situation):
        return self.output(situation) > .5

    def mutate(self, rate, rng=random):
        modified = False
        for weights in (self.hidden_weights.reshape(-1), self.output_weights):
            for index in range(len(weights)):
                if rng.random() < rate:
                    old = weights[index]
                    weights[index] += (2 * rng.random() - 1) * self.step
                    if weights[index] != old:
                        modified = True
        return modified

    def copy(self):
        return NeuralCondition(self.hidden_weights, self.output_weights,
                               self.step)

    def __str__(self):
        return 'hidden: %s\noutput: %s' % (self.hidden_weights.tolist(),
                                            self.output_weights.tolist())
