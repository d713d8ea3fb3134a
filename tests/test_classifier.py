__author__ = 'Aaron Hosford'

import random
import unittest

from xcsf.algorithms.xcsf import XCSFAlgorithm, XCSFClassifierRule
from xcsf.conditions import IntervalCondition
from xcsf.mutation import MutationRates
from xcsf.predictions import LinearPrediction


def make_rule(algorithm, intervals, time_stamp=0):
    return XCSFClassifierRule(
        IntervalCondition(intervals),
        LinearPrediction.new(algorithm, len(intervals)),
        algorithm,
        time_stamp
    )


class TestAccuracy(unittest.TestCase):

    def setUp(self):
        self.algorithm = XCSFAlgorithm()

    def test_accurate(self):
        threshold = self.algorithm.error_threshold
        self.assertEqual(self.algorithm.accuracy(0.0), 1.0)
        self.assertEqual(self.algorithm.accuracy(threshold), 1.0)
        self.assertEqual(self.algorithm.accuracy(threshold - 1e-6), 1.0)

    def test_power_law(self):
        threshold = self.algorithm.error_threshold
        self.assertAlmostEqual(self.algorithm.accuracy(2 * threshold),
                               .1 * 2 ** -5)

    def test_strictly_decreasing(self):
        threshold = self.algorithm.error_threshold
        previous = self.algorithm.accuracy(threshold)
        for step in range(1, 50):
            current = self.algorithm.accuracy(threshold * (1 + step * .1))
            self.assertLess(current, previous)
            previous = current

    def test_identical_accurate_rules(self):
        threshold = self.algorithm.error_threshold
        rule1 = make_rule(self.algorithm, [[-1, 1]])
        rule2 = make_rule(self.algorithm, [[-1, 1]])
        rule1.error = rule2.error = threshold - 1e-9
        self.assertEqual(rule1.accuracy, 1.0)
        self.assertEqual(rule2.accuracy, 1.0)


class TestXCSFClassifierRule(unittest.TestCase):

    def setUp(self):
        self.rng = random.Random(6)
        self.algorithm = XCSFAlgorithm()
        self.rule = make_rule(self.algorithm, [[-.5, .5]])

    def test_init(self):
        self.assertEqual(self.rule.error, self.algorithm.initial_error)
        self.assertEqual(self.rule.fitness, self.algorithm.initial_fitness)
        self.assertEqual(self.rule.experience, 0)
        self.assertEqual(self.rule.numerosity, 1)
        self.assertEqual(self.rule.size, 1)
        self.assertEqual(self.rule.weights.tolist(), [0.0, 0.0])
        self.assertEqual(self.rule.prediction_weight, self.rule.fitness)

    def test_update_error(self):
        error = self.rule.update_error(1.0, [.5])
        self.assertEqual(self.rule.experience, 1)
        self.assertAlmostEqual(error, .1)
        self.assertAlmostEqual(self.rule.error, .1)

    def test_update_error_uses_current_prediction(self):
        self.rule.update_prediction(1.0, [.5])
        prediction = self.rule.predict([.5])
        self.assertGreater(prediction, 0)
        self.rule.update_error(1.0, [.5])
        self.assertAlmostEqual(self.rule.error, .1 * (1.0 - prediction))

    def test_update_fitness(self):
        self.rule.update_fitness(2.0, 1.0)
        self.assertAlmostEqual(self.rule.fitness, .01 + .1 * (.5 - .01))

    def test_update_size(self):
        self.rule.update_size(11)
        self.assertAlmostEqual(self.rule.size, 2.0)

    def test_deletion_vote_inexperienced(self):
        self.rule.size = 3
        self.rule.numerosity = 2
        self.rule.experience = self.algorithm.deletion_threshold - 1
        self.rule.fitness = .0001
        self.assertEqual(self.rule.deletion_vote(100.0), 6)

    def test_deletion_vote_unfit(self):
        self.rule.experience = self.algorithm.deletion_threshold
        self.rule.fitness = .01
        self.assertAlmostEqual(self.rule.deletion_vote(1.0), 100.0)

    def test_deletion_vote_fit(self):
        self.rule.experience = self.algorithm.deletion_threshold
        self.rule.fitness = .5
        self.rule.size = 4
        self.assertEqual(self.rule.deletion_vote(1.0), 4)

    def test_is_subsumer(self):
        self.rule.experience = self.algorithm.subsumption_threshold
        self.rule.error = self.algorithm.error_threshold / 2
        self.rule.fitness = 0.0
        self.assertTrue(self.rule.is_subsumer())

        self.rule.experience -= 1
        self.assertFalse(self.rule.is_subsumer())

        self.rule.experience += 1
        self.rule.error = self.algorithm.error_threshold
        self.assertFalse(self.rule.is_subsumer())

    def test_copy_independence(self):
        self.rule.error = .2
        self.rule.experience = 7
        clone = self.rule.copy()
        self.assertEqual(clone.error, .2)
        self.assertEqual(clone.experience, 7)

        clone.mutate(self.rng)
        clone.condition.mutate(1.0, self.rng)
        clone.update_prediction(1.0, [.25])
        clone.update_error(1.0, [.25])
        clone.fitness = .9

        self.assertEqual(self.rule.condition.intervals.tolist(), [[-.5, .5]])
        self.assertEqual(self.rule.weights.tolist(), [0.0, 0.0])
        self.assertEqual(self.rule.error, .2)
        self.assertEqual(self.rule.experience, 7)
        self.assertEqual(self.rule.fitness, .01)

    def test_mutate_with_rates(self):
        self.rule.mutation_rates = MutationRates([1.0], .0005)
        self.assertTrue(self.rule.mutate(self.rng))
        clone = self.rule.copy()
        self.assertIsNot(clone.mutation_rates, self.rule.mutation_rates)

    def test_mutate_without_rates(self):
        self.algorithm.mutation_probability = 0.0
        self.assertFalse(self.rule.mutate(self.rng))

    def test_str(self):
        text = str(self.rule)
        self.assertIn('Fitness', text)
        self.assertIn('weights', text)


def main():
    unittest.main()


if __name__ == "__main__":
    main()
