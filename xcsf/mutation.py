"""Self-adaptive mutation. When enabled, each classifier rule carries its
own vector of mutation rates instead of relying on the algorithm's single
mutation probability. The rates are inherited by offspring and perturbed
each time the rule reproduces, so useful rates spread through the
population along with the conditions they produced."""

import math
import random
from abc import ABCMeta, abstractmethod


class RateAdaptation(metaclass=ABCMeta):
    """Abstract base class for the perturbation applied to mutation rates
    when a rule reproduces. Define a new strategy by subclassing this
    interface and implementing __call__.

    Callable Instance:
        Arguments:
            rate: A float, the current rate.
            rng: The random stream to draw from.
        Return:
            A float, the perturbed rate (before clamping).
    """

    @abstractmethod
    def __call__(self, rate, rng):
        raise NotImplementedError()


class LogNormalAdaptation(RateAdaptation):
    """Multiply the rate by exp(tau * N(0, 1)).

    Init Arguments:
        tau: A float, the standard deviation of the log-normal step;
            default is 1.
    """

    def __init__(self, tau=1.0):
        assert tau >= 0
        self.tau = tau

    def __call__(self, rate, rng):
        return rate * math.exp(self.tau * rng.gauss(0, 1))


class MutationRates:
    """A rule's vector of self-adaptive mutation rates. Rates are kept in
    [minimum, 1] at all times. The first rate governs the per-allele
    probability of condition mutation.

    Usage:
        rates = MutationRates.random(1, .0005, rng)
        child_rates = rates.copy()
        child_rates.adapt(rng)
        condition.mutate(child_rates.apply(), rng)

    Init Arguments:
        rates: A sequence of floats.
        minimum: A float, the smallest permitted rate (muEPS_0).
        adaptation: A RateAdaptation instance; default is a
            LogNormalAdaptation with tau = 1.
    """

    def __init__(self, rates, minimum, adaptation=None):
        assert rates
        assert 0 <= minimum <= 1

        self.minimum = minimum
        self.adaptation = adaptation or LogNormalAdaptation()
        self.rates = [self._clamp(rate) for rate in rates]

    @classmethod
    def random(cls, count, minimum, rng=random, adaptation=None):
        """Create count rates drawn uniformly from [minimum, 1]."""
        return cls(
            [minimum + rng.random() * (1 - minimum) for _ in range(count)],
            minimum,
            adaptation
        )

    def _clamp(self, rate):
        return min(1.0, max(self.minimum, rate))

    def adapt(self, rng=random):
        """Perturb every rate independently, keeping each in
        [minimum, 1]."""
        self.rates = [
            self._clamp(self.adaptation(rate, rng))
            for rate in self.rates
        ]

    def apply(self):
        """Return the rate to use for condition mutation."""
        return self.rates[0]

    def copy(self):
        return MutationRates(self.rates, self.minimum, self.adaptation)

    def __len__(self):
        return len(self.rates)

    def __iter__(self):
        return iter(self.rates)

    def __getitem__(self, index):
        return self.rates[index]

    def __str__(self):
        return 'mu: ' + ', '.join('%.5f' % rate for rate in self.rates)
