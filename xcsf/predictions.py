"""Computed predictions used by classifier rules. Each rule owns one
prediction object, which maps the current situation to a scalar estimate of
the target and is trained on the observed answer."""

from abc import ABCMeta, abstractmethod

import numpy


class Prediction(metaclass=ABCMeta):
    """Abstract base class defining the minimal interface for computed
    predictions.

    Usage:
        This is an abstract base class. Use a subclass, such as
        LinearPrediction, to create an instance.

    Init Arguments: n/a (See appropriate subclass.)
    """

    @classmethod
    @abstractmethod
    def new(cls, algorithm, state_length):
        """Create a fresh, untrained prediction for situations of the given
        length, using the algorithm's parameters."""
        raise NotImplementedError()

    @abstractmethod
    def compute(self, situation):
        """Return the predicted value for the situation."""
        raise NotImplementedError()

    @abstractmethod
    def update(self, answer, situation):
        """Move the prediction for the situation toward the answer."""
        raise NotImplementedError()

    @abstractmethod
    def copy(self):
        """Return an independent copy of this prediction."""
        raise NotImplementedError()


class LinearPrediction(Prediction):
    """A linear prediction, trained with the normalised least mean squares
    (Widrow-Hoff) rule. The first weight multiplies a constant offset
    input; the remaining weights multiply the situation's inputs.

    Usage:
        prediction = LinearPrediction.new(algorithm, len(situation))
        prediction.update(answer, situation)
        value = prediction.compute(situation)

    Init Arguments:
        weights: A sequence of floats of length state_length + 1.
        learning_rate: A float, the correction rate (XCSF_ETA).
        offset: A float, the constant input multiplied by the first weight
            (XCSF_X0).
    """

    def __init__(self, weights, learning_rate, offset):
        self.weights = numpy.array(weights, dtype=float)
        self.learning_rate = learning_rate
        self.offset = offset

    @classmethod
    def new(cls, algorithm, state_length):
        return cls(
            numpy.zeros(state_length + 1),
            algorithm.prediction_learning_rate,
            algorithm.prediction_offset
        )

    def compute(self, situation):
        return float(
            self.offset * self.weights[0] +
            numpy.dot(self.weights[1:], situation)
        )

    def update(self, answer, situation):
        situation = numpy.asarray(situation, dtype=float)
        error = answer - self.compute(situation)
        norm = self.offset ** 2 + float(numpy.dot(situation, situation))
        correction = self.learning_rate * error / (norm or 1)
        self.weights[0] += self.offset * correction
        self.weights[1:] += correction * situation

    def copy(self):
        return LinearPrediction(self.weights, self.learning_rate, self.offset)

    def __str__(self):
        return 'weights: ' + ', '.join('%.5f' % w for w in self.weights)
