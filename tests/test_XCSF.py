__author__ = 'Aaron Hosford'

import logging
import os
import random
import tempfile
import unittest

import xcsf
from xcsf.algorithms.xcsf import XCSFAlgorithm, XCSFClassifierRule
from xcsf.conditions import IntervalCondition
from xcsf.configurable import Configurable
from xcsf.framework import ClassifierSet, MatchSet
from xcsf.predictions import LinearPrediction
from xcsf.scenarios import FunctionProblem, SineProblem


def make_rule(algorithm, intervals, time_stamp=0):
    return XCSFClassifierRule(
        IntervalCondition(intervals),
        LinearPrediction.new(algorithm, len(intervals)),
        algorithm,
        time_stamp
    )


class TestXCSF(unittest.TestCase):

    def test_algorithm_configuration(self):
        algorithm = xcsf.XCSFAlgorithm()
        algorithm.condition_type = 'neural'
        algorithm.max_population_size = 500
        algorithm.do_ga_subsumption = True
        algorithm.do_set_subsumption = True

        algorithm_copy = Configurable.build(algorithm.get_configuration())
        assert type(algorithm_copy) is type(algorithm)
        for property_name in dir(algorithm):
            if property_name.startswith('_'):
                continue
            value = getattr(algorithm, property_name)
            if callable(value):
                continue
            copy_value = getattr(algorithm_copy, property_name)
            assert value == copy_value, property_name

    def test_from_file(self):
        with tempfile.TemporaryDirectory() as directory:
            path = os.path.join(directory, 'cons.txt')
            with open(path, 'w', encoding='utf-8') as parameter_file:
                parameter_file.write(
                    '# XCSF parameters\n'
                    'POP_SIZE=50\n'
                    'BETA = 0.2  # learning rate\n'
                    '\n'
                    'SET_SUBSUMPTION=true\n'
                    'muEPS_0=0.001\n'
                    'condition_type=interval\n'
                )
            algorithm = XCSFAlgorithm.from_file(path, MAX_TRIALS=10,
                                                experiment_count=3)

        self.assertEqual(algorithm.max_population_size, 50)
        self.assertEqual(algorithm.learning_rate, .2)
        self.assertIs(algorithm.do_set_subsumption, True)
        self.assertEqual(algorithm.minimum_mutation_rate, .001)
        self.assertEqual(algorithm.condition_type, 'interval')
        self.assertEqual(algorithm.max_trials, 10)
        self.assertEqual(algorithm.experiment_count, 3)
        self.assertEqual(XCSFAlgorithm.max_population_size, 2000)

    def test_bad_parameters(self):
        algorithm = XCSFAlgorithm()
        with self.assertRaises(ValueError):
            algorithm.set_parameters({'NOT_A_PARAMETER': 1})
        with self.assertRaises(ValueError):
            algorithm.set_parameters({'accuracy': 1})
        with self.assertRaises(ValueError):
            algorithm.set_parameters({'frozen': True})

        with tempfile.TemporaryDirectory() as directory:
            path = os.path.join(directory, 'cons.txt')
            with open(path, 'w', encoding='utf-8') as parameter_file:
                parameter_file.write('POP_SIZE 50\n')
            with self.assertRaises(ValueError):
                XCSFAlgorithm.from_file(path)

    def test_freeze(self):
        algorithm = XCSFAlgorithm()
        self.assertFalse(algorithm.frozen)
        algorithm.freeze()
        self.assertTrue(algorithm.frozen)
        with self.assertRaises(AttributeError):
            algorithm.learning_rate = .5
        with self.assertRaises(AttributeError):
            algorithm.configure(algorithm.get_configuration())
        self.assertEqual(algorithm.learning_rate, .1)

    def test_covering(self):
        algorithm = XCSFAlgorithm()
        algorithm.condition_type = 'interval'
        algorithm.minimum_match_set_size = 3
        model = ClassifierSet(algorithm, 2, random.Random(7))
        model.seed()

        situation = [.1, -.4]
        match_set, killed = model.match(situation)
        self.assertEqual(killed, [])
        self.assertEqual(match_set.numerosity, 3)
        self.assertEqual(len(model), 3)
        for rule in match_set:
            self.assertTrue(rule.condition(situation))
            self.assertIn(rule, model)
        sizes = sorted(rule.size for rule in model)
        self.assertEqual(sizes, [1, 2, 3])

    def test_populate(self):
        algorithm = XCSFAlgorithm()
        algorithm.condition_type = 'interval'
        algorithm.initialize_population = True
        algorithm.max_population_size = 10
        model = ClassifierSet(algorithm, 1, random.Random(8))
        model.seed()
        self.assertEqual(model.numerosity, 10)
        self.assertEqual(len(model), 10)

        algorithm.initialize_population = False
        model.seed()
        self.assertEqual(len(model), 0)

    def test_prune(self):
        algorithm = XCSFAlgorithm()
        algorithm.max_population_size = 3
        model = ClassifierSet(algorithm, 1, random.Random(9))

        killed = []
        with self.assertLogs('xcsf.algorithms.xcsf', logging.DEBUG) as logs:
            for _ in range(5):
                killed.extend(model.add(make_rule(algorithm, [[-1, 1]])))
        self.assertEqual(
            sum('Deleted rule' in line for line in logs.output), 2)
        self.assertEqual(model.numerosity, 3)
        self.assertEqual(len(killed), 2)
        for rule in killed:
            self.assertNotIn(rule, model)
            self.assertEqual(rule.numerosity, 0)

    def test_prune_by_numerosity(self):
        algorithm = XCSFAlgorithm()
        algorithm.max_population_size = 4
        model = ClassifierSet(algorithm, 1, random.Random(10))
        rule = make_rule(algorithm, [[-1, 1]])
        rule.numerosity = 6
        killed = model.add(rule)
        self.assertEqual(killed, [])
        self.assertEqual(rule.numerosity, 4)
        self.assertIn(rule, model)

    def test_distribute_payoff(self):
        algorithm = XCSFAlgorithm()
        model = ClassifierSet(algorithm, 1, random.Random(11))
        rule1 = make_rule(algorithm, [[-1, 1]])
        rule2 = make_rule(algorithm, [[0, .5]])
        rule2.numerosity = 2
        rule2.error = .5
        model.add(rule1)
        model.add(rule2)

        match_set = MatchSet(model, [.25], [rule1, rule2])
        killed = algorithm.distribute_payoff(match_set, 0.0)
        self.assertEqual(killed, [])

        # Both rules predict zero, so the answer is matched exactly.
        self.assertEqual(rule1.error, 0.0)
        self.assertAlmostEqual(rule2.error, .45)
        self.assertEqual(rule1.experience, 1)
        self.assertEqual(rule2.experience, 1)

        accuracy1 = 1.0
        accuracy2 = algorithm.accuracy(.45)
        total = accuracy1 + accuracy2
        self.assertAlmostEqual(rule1.fitness,
                               .01 + .1 * (accuracy1 / total - .01))
        self.assertAlmostEqual(rule2.fitness,
                               .01 + .1 * (accuracy2 / total - .01))
        self.assertAlmostEqual(rule1.size, 1 + .1 * (3 - 1))
        self.assertAlmostEqual(rule2.size, 1 + .1 * (3 - 1))

    def test_set_subsumption(self):
        algorithm = XCSFAlgorithm()
        algorithm.do_set_subsumption = True
        model = ClassifierSet(algorithm, 1, random.Random(12))
        general = make_rule(algorithm, [[-1, 1]])
        general.experience = 30
        specific = make_rule(algorithm, [[0, .5]])
        specific.numerosity = 2
        model.add(general)
        model.add(specific)

        match_set = MatchSet(model, [.25], [general, specific])
        with self.assertLogs('xcsf.algorithms.xcsf', logging.DEBUG) as logs:
            killed = algorithm.distribute_payoff(match_set, 0.0)
        self.assertTrue(any('subsumed by' in line for line in logs.output))
        self.assertEqual(len(killed), 1)
        self.assertIs(killed[0], specific)
        self.assertNotIn(specific, model)
        self.assertNotIn(specific, match_set)
        self.assertEqual(general.numerosity, 3)
        self.assertEqual(model.numerosity, 3)

    def test_ga_threshold(self):
        algorithm = XCSFAlgorithm()
        algorithm.condition_type = 'interval'
        model = algorithm.new_model(SineProblem(rng=random.Random(13)),
                                    random.Random(13))
        model.seed()
        model.trial(SineProblem(rng=random.Random(13)), 0, learn=True)
        self.assertEqual(model.numerosity, 1)

    def test_ga_offspring(self):
        algorithm = XCSFAlgorithm()
        algorithm.condition_type = 'interval'
        algorithm.ga_threshold = 0
        scenario = SineProblem(rng=random.Random(14))
        model = algorithm.new_model(scenario, random.Random(14))
        model.seed()
        model.trial(scenario, 0, learn=True)

        self.assertEqual(model.numerosity, 3)
        self.assertEqual(len(model), 3)
        parents = [rule for rule in model if rule.experience == 1]
        children = [rule for rule in model if rule.experience == 0]
        self.assertEqual(len(parents), 1)
        self.assertEqual(len(children), 2)
        parent = parents[0]
        for child in children:
            self.assertEqual(child.numerosity, 1)
            self.assertEqual(child.time_stamp, 0)
            self.assertAlmostEqual(child.fitness, parent.fitness * .1)
            self.assertAlmostEqual(child.error, parent.error)
            self.assertEqual(child.weights.tolist(),
                             parent.weights.tolist())

    def test_odd_offspring_count(self):
        algorithm = XCSFAlgorithm()
        algorithm.condition_type = 'interval'
        algorithm.ga_threshold = 0
        algorithm.offspring_count = 3
        scenario = SineProblem(rng=random.Random(15))
        model = algorithm.new_model(scenario, random.Random(15))
        model.seed()
        model.trial(scenario, 0, learn=True)
        self.assertEqual(model.numerosity, 4)

    def test_ga_subsumption(self):
        algorithm = XCSFAlgorithm()
        algorithm.condition_type = 'interval'
        algorithm.ga_threshold = 0
        algorithm.do_ga_subsumption = True
        algorithm.subsumption_threshold = 0
        algorithm.error_threshold = 10.0
        algorithm.mutation_probability = 0.0
        algorithm.crossover_probability = 0.0
        scenario = SineProblem(rng=random.Random(16))
        model = algorithm.new_model(scenario, random.Random(16))
        model.seed()
        model.trial(scenario, 0, learn=True)

        self.assertEqual(len(model), 1)
        self.assertEqual(model.numerosity, 3)

    def test_ga_with_full_population(self):
        # Inserting offspring deletes match set members; those rules must
        # neither reproduce nor be taken back into the population.
        algorithm = XCSFAlgorithm()
        algorithm.condition_type = 'interval'
        algorithm.ga_threshold = 0
        algorithm.offspring_count = 6
        algorithm.max_population_size = 3
        algorithm.minimum_match_set_size = 3
        algorithm.do_ga_subsumption = True
        algorithm.subsumption_threshold = 0
        algorithm.error_threshold = 10.0

        for seed in range(50):
            scenario = SineProblem(rng=random.Random(seed))
            model = algorithm.new_model(scenario, random.Random(seed))
            model.seed()
            match_set, killed = model.match(scenario.sense())
            killed += algorithm.distribute_payoff(match_set,
                                                  scenario.answer())
            killed += algorithm.update(match_set)

            self.assertLessEqual(model.numerosity, 3)
            for rule in killed:
                self.assertNotIn(rule, model)
                self.assertEqual(rule.numerosity, 0)
            for rule in match_set:
                self.assertIn(rule, model)
                self.assertGreater(rule.numerosity, 0)

    def test_self_adaptive_mutation(self):
        algorithm = XCSFAlgorithm()
        algorithm.condition_type = 'interval'
        algorithm.self_adaptive_mutation = True
        algorithm.mutation_rate_count = 2
        algorithm.ga_threshold = 0
        scenario = SineProblem(rng=random.Random(17))
        model = algorithm.new_model(scenario, random.Random(17))
        model.seed()
        model.trial(scenario, 0, learn=True)
        for rule in model:
            self.assertEqual(len(rule.mutation_rates), 2)
            for rate in rule.mutation_rates:
                self.assertTrue(algorithm.minimum_mutation_rate <= rate <= 1)

    def test_against_linear_function(self):
        scenario = FunctionProblem(lambda x: 2 * x[0] + .5, 1,
                                   rng=random.Random(18))

        algorithm = XCSFAlgorithm()
        algorithm.condition_type = 'interval'
        algorithm.max_population_size = 100
        algorithm.performance_window = 500
        algorithm.do_set_subsumption = True

        logging.disable(logging.CRITICAL)
        try:
            steps, error, time_passed, model = xcsf.test(
                algorithm,
                scenario,
                trials=2000
            )
        finally:
            logging.disable(logging.NOTSET)

        self.assertEqual(steps, 2000)
        self.assertLessEqual(model.numerosity, 100)
        self.assertLess(error, .5)

    def test_graph_conditions(self):
        algorithm = XCSFAlgorithm()
        algorithm.graph_node_count = 5
        algorithm.max_population_size = 50
        algorithm.ga_threshold = 10
        scenario = SineProblem(state_length=2, rng=random.Random(19))
        model = algorithm.run(scenario, 200, random.Random(19))
        self.assertLessEqual(model.numerosity, 50)
        self.assertTrue(0 <= model.average_k <= 3)
        for rule in model:
            self.assertEqual(rule.condition.graph.node_count, 5)


def main():
    unittest.main()


if __name__ == "__main__":
    main()
