__author__ = 'Aaron Hosford'

import random
import unittest

from xcsf.algorithms.xcsf import XCSFAlgorithm, XCSFClassifierRule
from xcsf.conditions import IntervalCondition
from xcsf.framework import ClassifierSet, MatchSet
from xcsf.predictions import LinearPrediction
from xcsf.scenarios import FunctionProblem


def make_rule(algorithm, intervals, offset_weight=0.0, fitness=None):
    rule = XCSFClassifierRule(
        IntervalCondition(intervals),
        LinearPrediction.new(algorithm, len(intervals)),
        algorithm,
        0
    )
    rule.weights[0] = offset_weight
    if fitness is not None:
        rule.fitness = fitness
    return rule


class Recorder:

    def __init__(self):
        self.records = []

    def record(self, trial, train_error, test_error, model):
        self.records.append((trial, train_error, test_error))


class TestMatchSet(unittest.TestCase):

    def setUp(self):
        self.algorithm = XCSFAlgorithm()
        self.model = ClassifierSet(self.algorithm, 1, random.Random(20))

    def test_prediction(self):
        rule1 = make_rule(self.algorithm, [[-1, 1]], 1.0, .2)
        rule2 = make_rule(self.algorithm, [[-1, 1]], 3.0, .6)
        match_set = MatchSet(self.model, [0.0], [rule1, rule2])
        self.assertAlmostEqual(match_set.prediction, 2.5)
        self.assertEqual(match_set.numerosity, 2)

    def test_empty_prediction(self):
        match_set = MatchSet(self.model, [0.0], [])
        self.assertEqual(match_set.prediction, 0.0)
        self.assertEqual(match_set.numerosity, 0)

    def test_add_remove(self):
        rule1 = make_rule(self.algorithm, [[-1, 1]], 1.0, .5)
        rule2 = make_rule(self.algorithm, [[-1, 1]], 3.0, .5)
        match_set = MatchSet(self.model, [0.0], [rule1])
        self.assertAlmostEqual(match_set.prediction, 1.0)
        match_set.add(rule2)
        self.assertAlmostEqual(match_set.prediction, 2.0)
        match_set.add(rule2)
        self.assertEqual(len(match_set), 2)
        match_set.remove(rule1)
        self.assertNotIn(rule1, match_set)
        self.assertAlmostEqual(match_set.prediction, 3.0)
        with self.assertRaises(ValueError):
            match_set.remove(rule1)


class TestClassifierSet(unittest.TestCase):

    def setUp(self):
        self.algorithm = XCSFAlgorithm()
        self.algorithm.condition_type = 'interval'
        self.model = ClassifierSet(self.algorithm, 1, random.Random(21))

    def test_match(self):
        inside = make_rule(self.algorithm, [[0, .5]])
        outside = make_rule(self.algorithm, [[.6, .9]])
        self.model.add(inside)
        self.model.add(outside)
        match_set, killed = self.model.match([.25])
        self.assertEqual(killed, [])
        self.assertIn(inside, match_set)
        self.assertNotIn(outside, match_set)
        self.assertEqual(len(self.model), 2)

    def test_discard(self):
        rule = make_rule(self.algorithm, [[0, .5]])
        rule.numerosity = 3
        self.model.add(rule)
        self.assertFalse(self.model.discard(rule))
        self.assertEqual(rule.numerosity, 2)
        self.assertTrue(self.model.discard(rule, 2))
        self.assertEqual(rule.numerosity, 0)
        self.assertNotIn(rule, self.model)
        self.assertFalse(self.model.discard(rule))

    def test_average_fitness(self):
        rule1 = make_rule(self.algorithm, [[0, .5]], fitness=.3)
        rule2 = make_rule(self.algorithm, [[0, .5]], fitness=.6)
        rule2.numerosity = 2
        self.model.add(rule1)
        self.model.add(rule2)
        self.assertEqual(self.model.numerosity, 3)
        self.assertAlmostEqual(self.model.average_fitness, .3)
        self.assertEqual(self.model.average_k, 0.0)

    def test_trial(self):
        scenario = FunctionProblem(lambda x: float(x[0]), 1,
                                   rng=random.Random(22))
        self.model.seed()
        error = self.model.trial(scenario, 0, learn=True)
        self.assertGreaterEqual(error, 0.0)
        self.assertEqual(self.model.time_stamp, 0)
        self.assertEqual(len(self.model), 1)
        for rule in self.model:
            self.assertEqual(rule.experience, 1)

        self.model.trial(scenario, 1, learn=False)
        self.assertEqual(self.model.time_stamp, 1)
        for rule in self.model:
            self.assertLessEqual(rule.experience, 1)

    def test_run(self):
        scenario = FunctionProblem(lambda x: float(x[0]), 1,
                                   rng=random.Random(23))
        recorder = Recorder()
        self.model.seed()
        self.model.run(scenario, 25, recorder)
        self.assertEqual([record[0] for record in recorder.records],
                         list(range(25)))
        for _, train_error, test_error in recorder.records:
            self.assertGreaterEqual(train_error, 0.0)
            self.assertGreaterEqual(test_error, 0.0)
        self.assertTrue(str(self.model))

        self.model.clear()
        self.assertEqual(len(self.model), 0)


def main():
    unittest.main()


if __name__ == "__main__":
    main()
