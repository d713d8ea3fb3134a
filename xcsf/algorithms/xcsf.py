import logging


from .. import configuration
from ..configurable import Configurable, read_parameter_file
from ..framework import ClassifierRule, LCSAlgorithm, MatchSet, ClassifierSet
from ..mutation import LogNormalAdaptation, MutationRates


logger = logging.getLogger(__name__)


class XCSFClassifierRule(ClassifierRule):
    """This classifier rule subtype is used by the XCSF algorithm. Besides
    its condition and computed prediction, each rule keeps a time stamp
    indicating the last trial at which it participated in a GA invocation,
    an error value tracking the average absolute error of its prediction, a
    fitness value which is used both as the prediction weight and by the GA
    to determine probabilities of reproduction and deletion, an experience
    value counting how many times the rule has been reinforced, a size
    estimate which tracks the average numerosity of the match sets the rule
    has appeared in, and a numerosity value which represents the number of
    (virtual) occurrences of the rule in the classifier set. When
    self-adaptive mutation is enabled the rule also carries its own
    mutation rates.

    Usage:
        rule = XCSFClassifierRule(
            condition=GraphCondition.cover(algorithm, situation),
            prediction=LinearPrediction.new(algorithm, len(situation)),
            algorithm=algorithm,  # An XCSFAlgorithm instance
            time_stamp=model.time_stamp
        )

    Init Arguments:
        condition: The Condition which this rule uses to determine whether
            it should be included in a MatchSet.
        prediction: The Prediction which computes this rule's estimate of
            the target value.
        algorithm: The XCSFAlgorithm managing the classifier set to which
            this rule belongs.
        time_stamp: The time stamp of the classifier set to which this
            rule belongs, as of the moment this rule is created.
        size: The initial match set size estimate; default is 1.
        mutation_rates: None, or a MutationRates instance.
    """

    def __init__(self, condition, prediction, algorithm, time_stamp, size=1,
                 mutation_rates=None):
        assert isinstance(algorithm, XCSFAlgorithm)
        assert isinstance(time_stamp, int)

        self._algorithm = algorithm
        self._condition = condition
        self._prediction = prediction

        self.mutation_rates = mutation_rates

        # The trial at which this rule last took part in the GA
        self.time_stamp = time_stamp

        # The observed error in this rule's prediction
        self.error = algorithm.initial_error

        # The fitness of this rule within the GA
        self.fitness = algorithm.initial_fitness

        # The number of times this rule has been reinforced
        self.experience = 0

        # The average numerosity of the match sets this rule appeared in
        self.size = size

        # The number of instances of this rule in the classifier set, which
        # is used to eliminate redundancy
        self.numerosity = 1

    def __str__(self):
        """Defining this sets the behavior for str(instance)."""
        lines = [str(self.condition), str(self._prediction)]
        if self.mutation_rates is not None:
            lines.append(str(self.mutation_rates))
        return '\n    '.join(
            lines +
            [
                key.replace('_', ' ').title() + ': ' +
                str(getattr(self, key))
                for key in (
                    'time_stamp',
                    'error',
                    'fitness',
                    'experience',
                    'size',
                    'numerosity'
                )
            ]
        )

    def __lt__(self, other):
        """Defining this sets the behavior for instance1 < instance2. This
        is here strictly for sorting purposes in calls to
        ClassifierSet.__str__."""
        if not isinstance(other, XCSFClassifierRule):
            return NotImplemented
        attribute_order = (
            'numerosity',
            'fitness',
            'experience',
            'error',
            'size',
            'time_stamp'
        )
        for attribute in attribute_order:
            my_key = getattr(self, attribute)
            other_key = getattr(other, attribute)
            if my_key < other_key:
                return attribute not in ('error', 'size')
            if my_key > other_key:
                return attribute in ('error', 'size')
        return False

    @property
    def algorithm(self):
        """The algorithm associated with this classifier rule."""
        return self._algorithm

    @property
    def condition(self):
        """The match condition for this classifier rule."""
        return self._condition

    @property
    def prediction(self):
        """The computed prediction object of this classifier rule."""
        return self._prediction

    @property
    def weights(self):
        """The prediction weights, offset weight first."""
        return self._prediction.weights

    @property
    def prediction_weight(self):
        """The weight of this rule's prediction as compared to others in
        the same match set. For XCSF, this is the fitness of the rule."""
        return self.fitness

    @property
    def accuracy(self):
        """The accuracy of the rule given its current error."""
        return self._algorithm.accuracy(self.error)

    def predict(self, situation):
        """Return this rule's computed prediction for the situation."""
        return self._prediction.compute(situation)

    def update_prediction(self, answer, situation):
        """Train the computed prediction toward the answer."""
        self._prediction.update(answer, situation)

    def update_error(self, answer, situation):
        """Count one more reinforcement and move the error toward the
        absolute difference between the answer and the rule's current
        prediction for the situation. Return the updated error."""
        self.experience += 1
        self.error += self._algorithm.learning_rate * (
            abs(answer - self.predict(situation)) - self.error
        )
        return self.error

    def update_fitness(self, accuracy_sum, accuracy):
        """Move the fitness toward the rule's share of the summed accuracy
        of its match set."""
        self.fitness += self._algorithm.learning_rate * (
            accuracy / accuracy_sum - self.fitness
        )

    def update_size(self, numerosity_sum):
        """Move the match set size estimate toward the total numerosity of
        the current match set."""
        self.size += self._algorithm.learning_rate * (
            numerosity_sum - self.size
        )

    def deletion_vote(self, average_fitness):
        """Return this rule's weight in deletion selection. Experienced
        rules whose fitness per micro-classifier is well below the
        population average get a proportionally larger vote."""
        vote = self.size * self.numerosity
        relative_fitness = self.fitness / self.numerosity
        if (self.experience >= self._algorithm.deletion_threshold and
                relative_fitness <
                self._algorithm.fitness_threshold * average_fitness):
            vote *= average_fitness / relative_fitness
        return vote

    def is_subsumer(self):
        """Return a bool indicating whether the rule is experienced and
        accurate enough to subsume others."""
        return (self.experience >= self._algorithm.subsumption_threshold and
                self.error < self._algorithm.error_threshold)

    def mutate(self, rng):
        """Mutate the rule's condition, using its own mutation rate when
        self-adaptive mutation is enabled. Return a bool indicating whether
        the condition changed."""
        if self.mutation_rates is not None:
            rate = self.mutation_rates.apply()
        else:
            rate = self._algorithm.mutation_probability
        return self._condition.mutate(rate, rng)

    def copy(self):
        """Return an independent copy of this rule. Changes to the copy,
        including mutation of its condition, never affect the original."""
        rule = XCSFClassifierRule(
            self._condition.copy(),
            self._prediction.copy(),
            self._algorithm,
            self.time_stamp,
            self.size,
            (None if self.mutation_rates is None
             else self.mutation_rates.copy())
        )
        rule.error = self.error
        rule.fitness = self.fitness
        rule.experience = self.experience
        rule.numerosity = self.numerosity
        return rule


# Canonical parameter names, as they appear in parameter files, mapped to
# the attribute names used by XCSFAlgorithm.
PARAMETER_NAMES = {
    'POP_INIT': 'initialize_population',
    'THETA_MNA': 'minimum_match_set_size',
    'MAX_TRIALS': 'max_trials',
    'NUM_EXPERIMENTS': 'experiment_count',
    'PERF_AVG_TRIALS': 'performance_window',
    'POP_SIZE': 'max_population_size',
    'ALPHA': 'accuracy_coefficient',
    'BETA': 'learning_rate',
    'DELTA': 'fitness_threshold',
    'EPS_0': 'error_threshold',
    'ERR_REDUC': 'error_reduction',
    'FIT_REDUC': 'fitness_reduction',
    'INIT_ERROR': 'initial_error',
    'INIT_FITNESS': 'initial_fitness',
    'NU': 'accuracy_power',
    'THETA_DEL': 'deletion_threshold',
    'P_CROSSOVER': 'crossover_probability',
    'P_MUTATION': 'mutation_probability',
    'THETA_GA': 'ga_threshold',
    'THETA_OFFSPRING': 'offspring_count',
    'muEPS_0': 'minimum_mutation_rate',
    'NUM_MU': 'mutation_rate_count',
    'MAX_CON': 'max_condition',
    'MIN_CON': 'min_condition',
    'S_MUTATION': 'mutation_step',
    'NUM_HIDDEN_NEURONS': 'hidden_neuron_count',
    'DGP_NUM_NODES': 'graph_node_count',
    'XCSF_ETA': 'prediction_learning_rate',
    'XCSF_X0': 'prediction_offset',
    'GA_SUBSUMPTION': 'do_ga_subsumption',
    'SET_SUBSUMPTION': 'do_set_subsumption',
    'THETA_SUB': 'subsumption_threshold',
    'SAM': 'self_adaptive_mutation',
    'MAX_K': 'graph_max_connections',
    'MAX_T': 'graph_max_timesteps',
}


class XCSFAlgorithm(LCSAlgorithm, Configurable):
    """The XCSF algorithm. This class defines how a classifier set is
    managed by the XCSF algorithm to approximate a function of real-valued
    inputs with a population of locally linear, accuracy-weighted rules.
    There are numerous parameters which can be modified to control the
    behavior of the algorithm. Each is listed with its canonical name, as
    used in parameter files:

        accuracy_coefficient (ALPHA, default: .1, range: (0, 1])
            Scales the accuracy of rules whose error exceeds
            error_threshold. Values below 1 leave a "cliff" between
            accurate and inaccurate rules at the threshold.

        accuracy_power (NU, default: 5, range: (0, +inf))
            The rate at which accuracy declines as error rises above
            error_threshold.

        condition_type (default: 'graph')
            The kind of matching condition used by every rule: 'interval',
            'graph' or 'neural'. (See xcsf.conditions.)

        crossover_probability (P_CROSSOVER, default: .8, range: [0, 1])
            The probability that crossover is applied to the offspring of a
            GA step, for conditions that support it (intervals).

        deletion_threshold (THETA_DEL, default: 20, range: [0, +inf))
            The minimum experience of a rule before its fitness is
            considered in its deletion vote.

        do_ga_subsumption (GA_SUBSUMPTION, default: False)
            Whether accurate, experienced parents absorb offspring whose
            conditions they generalize.

        do_set_subsumption (SET_SUBSUMPTION, default: False)
            Whether the most general accurate rule in a match set absorbs
            the others it generalizes after each reinforcement.

        error_reduction (ERR_REDUC, default: 1, range: [0, 1])
            The factor applied to a parent's error to obtain its
            offspring's initial error.

        error_threshold (EPS_0, default: .01, range: (0, +inf))
            The error below which a rule is considered accurate. Set this
            to roughly 1% of the range of the target function.

        experiment_count (NUM_EXPERIMENTS, default: 1)
            The number of independent experiments run by
            xcsf.experiment.run_experiments().

        fitness_reduction (FIT_REDUC, default: .1, range: [0, 1])
            The factor applied to a parent's fitness to obtain its
            offspring's initial fitness.

        fitness_threshold (DELTA, default: .1, range: [0, 1])
            The fraction of the mean fitness of the population below which
            an experienced rule's deletion vote is increased.

        ga_threshold (THETA_GA, default: 50, range: [0, +inf))
            The GA is applied to a match set when the average number of
            trials since its rules last took part in the GA reaches this
            threshold.

        graph_max_connections (MAX_K, default: 3)
            The number of connection slots per graph node.

        graph_max_timesteps (MAX_T, default: 10)
            The maximum number of sweeps a graph is run for.

        graph_node_count (DGP_NUM_NODES, default: 20)
            The number of nodes in each graph condition.

        hidden_neuron_count (NUM_HIDDEN_NEURONS, default: 10)
            The number of hidden units in each neural condition.

        initial_error (INIT_ERROR, default: 0)
            The error of newly created rules.

        initial_fitness (INIT_FITNESS, default: .01, range: (0, 1])
            The fitness of newly created rules.

        initialize_population (POP_INIT, default: False)
            Whether the population starts out filled with
            max_population_size random rules instead of empty.

        learning_rate (BETA, default: .1, range: (0, 1))
            The update rate for the error, fitness and size estimates.

        max_condition, min_condition (MAX_CON, MIN_CON, default: 1, -1)
            The bounds of interval conditions.

        max_population_size (POP_SIZE, default: 2000)
            The maximum total numerosity of the population.

        max_trials (MAX_TRIALS, default: 50000)
            The number of trials in each experiment.

        minimum_match_set_size (THETA_MNA, default: 1)
            The match set numerosity below which covering occurs.

        minimum_mutation_rate (muEPS_0, default: .0005)
            The floor of every self-adaptive mutation rate.

        mutation_probability (P_MUTATION, default: .04, range: [0, 1])
            The per-allele probability of mutation when self-adaptive
            mutation is disabled.

        mutation_rate_count (NUM_MU, default: 1)
            The number of self-adaptive mutation rates per rule.

        mutation_rate_tau (default: 1)
            The standard deviation of the log-normal step applied to
            self-adaptive mutation rates.

        mutation_step (S_MUTATION, default: .1)
            The maximum size of a single mutation step for interval bounds
            and network weights, and the maximum covering spread of an
            interval around the situation.

        offspring_count (THETA_OFFSPRING, default: 2)
            The number of offspring created per GA invocation.

        performance_window (PERF_AVG_TRIALS, default: 1000)
            The number of trials averaged in each performance report.

        prediction_learning_rate (XCSF_ETA, default: .1)
            The correction rate of the computed predictions.

        prediction_offset (XCSF_X0, default: 1)
            The constant input multiplied by the first prediction weight.

        prediction_type (default: 'linear')
            The kind of computed prediction used by every rule.

        random_seed (default: None)
            If set, experiment e is seeded with random_seed + e.

        self_adaptive_mutation (SAM, default: False)
            Whether each rule carries its own mutation rates.

        subsumption_threshold (THETA_SUB, default: 20)
            The minimum experience of a rule before it can subsume
            another.

    Usage:
        scenario = SineProblem()
        algorithm = XCSFAlgorithm()
        algorithm.condition_type = 'interval'
        model = algorithm.run(scenario, 10000)

        # Or, from a parameter file of NAME=VALUE lines:
        algorithm = XCSFAlgorithm.from_file('cons.txt', MAX_TRIALS=1000)

    Init Arguments: None
    """

    # For a detailed explanation of each parameter, please see the
    # documentation above.
    initialize_population = False      # POP_INIT
    minimum_match_set_size = 1         # THETA_MNA
    max_trials = 50000                 # MAX_TRIALS
    experiment_count = 1               # NUM_EXPERIMENTS
    performance_window = 1000          # PERF_AVG_TRIALS
    max_population_size = 2000         # POP_SIZE
    accuracy_coefficient = .1          # ALPHA
    learning_rate = .1                 # BETA
    fitness_threshold = .1             # DELTA
    error_threshold = .01              # EPS_0
    error_reduction = 1.0              # ERR_REDUC
    fitness_reduction = .1             # FIT_REDUC
    initial_error = 0.0                # INIT_ERROR
    initial_fitness = .01              # INIT_FITNESS
    accuracy_power = 5                 # NU
    deletion_threshold = 20            # THETA_DEL
    crossover_probability = .8         # P_CROSSOVER
    mutation_probability = .04         # P_MUTATION
    ga_threshold = 50                  # THETA_GA
    offspring_count = 2                # THETA_OFFSPRING
    minimum_mutation_rate = .0005      # muEPS_0
    mutation_rate_count = 1            # NUM_MU
    max_condition = 1.0                # MAX_CON
    min_condition = -1.0               # MIN_CON
    mutation_step = .1                 # S_MUTATION
    hidden_neuron_count = 10           # NUM_HIDDEN_NEURONS
    graph_node_count = 20              # DGP_NUM_NODES
    prediction_learning_rate = .1      # XCSF_ETA
    prediction_offset = 1.0            # XCSF_X0
    do_ga_subsumption = False          # GA_SUBSUMPTION
    do_set_subsumption = False         # SET_SUBSUMPTION
    subsumption_threshold = 20         # THETA_SUB

    # These are not part of the canonical parameter set.
    condition_type = 'graph'
    prediction_type = 'linear'
    self_adaptive_mutation = False     # SAM
    mutation_rate_tau = 1.0
    graph_max_connections = 3          # MAX_K
    graph_max_timesteps = 10           # MAX_T
    random_seed = None

    _frozen = False

    def __setattr__(self, name, value):
        if self._frozen:
            raise AttributeError("Parameters are frozen; cannot set %r." %
                                 name)
        super().__setattr__(name, value)

    @classmethod
    def from_file(cls, path, **overrides):
        """Create an algorithm from a parameter file of NAME=VALUE lines,
        then apply any keyword overrides. Names may be canonical (POP_SIZE)
        or attribute names (max_population_size).

        Usage:
            algorithm = XCSFAlgorithm.from_file('cons.txt', MAX_TRIALS=500)

        Arguments:
            path: A str, the path of the parameter file.
            overrides: Parameter values which take precedence over the
                file's.
        Return:
            A new XCSFAlgorithm instance.
        """
        algorithm = cls()
        algorithm.set_parameters(read_parameter_file(path))
        algorithm.set_parameters(overrides)
        logger.info('Parameters loaded from %s', path)
        return algorithm

    def set_parameters(self, parameters):
        """Set parameters from a mapping of canonical or attribute names to
        values. Raise a ValueError for an unknown name."""
        for name, value in parameters.items():
            attribute = PARAMETER_NAMES.get(name, name)
            default = getattr(type(self), attribute, None)
            if (attribute.startswith('_') or
                    attribute not in dir(type(self)) or
                    callable(default) or
                    isinstance(default, property)):
                raise ValueError("Unknown parameter: %s" % name)
            setattr(self, attribute, value)

    def configure(self, config):
        if self._frozen:
            raise AttributeError("Parameters are frozen.")
        super().configure(config)

    def freeze(self):
        """Make the parameters immutable. An algorithm is frozen once a run
        begins, so every experiment sees the same configuration."""
        object.__setattr__(self, '_frozen', True)

    @property
    def frozen(self):
        """Whether the parameters have been made immutable."""
        return self._frozen

    @property
    def condition_class(self):
        """The Condition subclass named by condition_type."""
        condition_class = configuration.get_condition(self.condition_type)
        if condition_class is None:
            known = ', '.join(configuration.list_conditions())
            raise ValueError("Unknown condition type: %r (expected one of "
                             "%s)" % (self.condition_type, known))
        return condition_class

    @property
    def prediction_class(self):
        """The Prediction subclass named by prediction_type."""
        prediction_class = configuration.get_prediction(self.prediction_type)
        if prediction_class is None:
            known = ', '.join(configuration.list_predictions())
            raise ValueError("Unknown prediction type: %r (expected one of "
                             "%s)" % (self.prediction_type, known))
        return prediction_class

    def accuracy(self, error):
        """Return the accuracy corresponding to the given error. Accuracy
        is 1 up to error_threshold and falls off as a power law above it.

        Usage:
            accuracy = algorithm.accuracy(rule.error)

        Arguments:
            error: A non-negative float.
        Return:
            A float in (0, 1].
        """
        if error <= self.error_threshold:
            return 1.0
        return (
            self.accuracy_coefficient *
            (error / self.error_threshold) ** -self.accuracy_power
        )

    def new_rule(self, model, situation=None, size=1):
        """Create a new rule for the classifier set. If a situation is
        given, the rule's condition is guaranteed to match it (covering);
        otherwise the condition is random.

        Usage:
            rule = algorithm.new_rule(model, situation, size=3)
            model.add(rule)

        Arguments:
            model: The ClassifierSet the rule is intended for.
            situation: None, or the situation to cover.
            size: The initial match set size estimate of the rule.
        Return:
            A new XCSFClassifierRule instance.
        """
        assert isinstance(model, ClassifierSet)
        rng = model.rng

        condition_class = self.condition_class
        if situation is None:
            condition = condition_class.random(self, model.state_length, rng)
        else:
            condition = condition_class.cover(self, situation, rng)

        prediction = self.prediction_class.new(self, model.state_length)

        if self.self_adaptive_mutation:
            mutation_rates = MutationRates.random(
                self.mutation_rate_count,
                self.minimum_mutation_rate,
                rng,
                LogNormalAdaptation(self.mutation_rate_tau)
            )
        else:
            mutation_rates = None

        return XCSFClassifierRule(
            condition,
            prediction,
            self,
            model.time_stamp,
            size,
            mutation_rates
        )

    def populate(self, model):
        """Fill the population with random rules if initialize_population
        is set; otherwise leave it empty for covering to fill."""
        assert isinstance(model, ClassifierSet)
        if not self.initialize_population:
            return
        while model.numerosity < self.max_population_size:
            model.add(self.new_rule(model, size=self.max_population_size))

    def covering_is_required(self, match_set):
        """Return a Boolean indicating whether covering is required for the
        current match set, i.e. whether its total numerosity is below
        minimum_match_set_size."""
        assert isinstance(match_set, MatchSet)
        assert match_set.algorithm is self

        return match_set.numerosity < self.minimum_match_set_size

    def cover(self, match_set):
        """Return a new classifier rule whose condition matches the
        situation of the match set."""
        assert isinstance(match_set, MatchSet)
        assert match_set.model.algorithm is self

        return self.new_rule(
            match_set.model,
            match_set.situation,
            match_set.numerosity + 1
        )

    def distribute_payoff(self, match_set, answer):
        """Reinforce every rule in the match set with the observed answer:
        first the prediction and error of each rule, then, once every
        rule's accuracy is known, the fitness and set size estimate of
        each. Return the rules removed by set subsumption, if enabled.

        Usage:
            match_set, killed = model.match(situation)
            killed += model.algorithm.distribute_payoff(match_set, answer)

        Arguments:
            match_set: A MatchSet instance.
            answer: A float, the true value of the target function for the
                match set's situation.
        Return:
            A possibly empty list of rules removed from the population.
        """
        assert isinstance(match_set, MatchSet)
        assert match_set.algorithm is self

        situation = match_set.situation
        numerosity = match_set.numerosity
        rules = list(match_set)

        for rule in rules:
            rule.update_prediction(answer, situation)
            rule.update_error(answer, situation)

        # Fitness is relative to the whole match set, so every accuracy
        # must be known before any fitness changes.
        accuracies = [rule.accuracy for rule in rules]
        accuracy_sum = sum(accuracies)

        for rule, accuracy in zip(rules, accuracies):
            rule.update_fitness(accuracy_sum, accuracy)
            rule.update_size(numerosity)

        if self.do_set_subsumption:
            return self._set_subsumption(match_set)
        return []

    def update(self, match_set):
        """Apply the genetic algorithm to the match set, if enough trials
        have passed since its rules last took part in it. Parents are
        selected in proportion to fitness and copied; the offspring are
        crossed over (where the condition supports it) and mutated, then
        either absorbed by a subsuming parent or added to the population.
        Return the rules deleted from the population to make room.

        Usage:
            match_set, killed = model.match(situation)
            model.algorithm.distribute_payoff(match_set, answer)
            killed += model.algorithm.update(match_set)

        Arguments:
            match_set: A MatchSet instance.
        Return:
            A possibly empty list of rules removed from the population.
        """
        assert isinstance(match_set, MatchSet)
        assert match_set.model.algorithm is self

        model = match_set.model
        if not len(match_set):
            return []

        # If the average number of trials since the last GA invocation for
        # each rule in the match set is too small, return early instead of
        # applying the GA.
        average_time_passed = (
            model.time_stamp -
            self._get_average_time_stamp(match_set)
        )
        if average_time_passed < self.ga_threshold:
            return []

        # Update the time step for each rule to indicate that they were
        # updated by the GA.
        self._set_timestamps(match_set)

        rng = model.rng
        killed = []
        for produced in range(0, self.offspring_count, 2):
            # Rules deleted while inserting earlier offspring can no longer
            # reproduce.
            self._drop_killed(match_set, killed)
            if not len(match_set):
                break

            parent1 = self._select_parent(match_set, rng)
            parent2 = self._select_parent(match_set, rng)
            child1 = parent1.copy()
            child2 = parent2.copy()

            if (child1.condition.supports_crossover and
                    rng.random() < self.crossover_probability):
                child1.condition.crossover_with(child2.condition, rng)

            pairs = [(child1, parent1), (child2, parent2)]
            for child, parent in pairs[:self.offspring_count - produced]:
                child.numerosity = 1
                child.experience = 0
                child.time_stamp = model.time_stamp
                child.error = parent.error * self.error_reduction
                child.fitness = parent.fitness * self.fitness_reduction
                if child.mutation_rates is not None:
                    child.mutation_rates.adapt(rng)
                child.mutate(rng)

                # If the parameters specify that GA subsumption should be
                # performed, look for an accurate parent that can subsume
                # the new child.
                if (self.do_ga_subsumption and
                        self._subsume_child(model, child,
                                            (parent1, parent2), killed)):
                    continue

                killed.extend(model.add(child))

        self._drop_killed(match_set, killed)
        logger.debug('GA applied at trial %d; %d rule(s) deleted.',
                     model.time_stamp, len(killed))
        return killed

    def prune(self, model):
        """Reduce the classifier set's population size, if necessary, by
        removing lower-quality rules until the total numerosity is within
        max_population_size. Rules are selected for deletion in proportion
        to their deletion votes. Return a list containing any rules whose
        numerosities dropped to zero as a result of this call.

        Usage:
            deleted_rules = model.algorithm.prune(model)

        Arguments:
            model: A ClassifierSet instance whose population may need to
                be reduced in size.
        Return:
            A possibly empty list of XCSFClassifierRule instances which were
            removed entirely from the classifier set because their
            numerosities dropped to 0.
        """
        assert isinstance(model, ClassifierSet)
        assert model.algorithm is self

        deleted = []
        while model.numerosity > self.max_population_size:
            average_fitness = model.average_fitness

            # Determine the probability of deletion, as a function of both
            # accuracy and niche sparsity.
            rules = list(model)
            votes = [rule.deletion_vote(average_fitness) for rule in rules]

            # Choose a rule to delete based on the probabilities just
            # computed.
            selector = model.rng.uniform(0, sum(votes))
            for rule, vote in zip(rules, votes):
                selector -= vote
                if selector <= 0:
                    break

            if model.discard(rule):
                deleted.append(rule)
                logger.debug('Deleted rule: %s', rule)
        return deleted

    def _set_subsumption(self, match_set):
        """Perform match set subsumption."""
        # Select the most general rule among those having sufficient
        # experience and sufficiently low error.
        selected_rule = None
        for rule in match_set:
            if not rule.is_subsumer():
                continue
            if (selected_rule is None or
                    rule.condition.is_more_general(selected_rule.condition)):
                selected_rule = rule

        # If no rule was found satisfying the requirements, return
        # early.
        if selected_rule is None:
            return []

        # Subsume each rule which the selected rule generalizes. When a
        # rule is subsumed, all instances of the subsumed rule are replaced
        # with instances of the more general one in the population.
        subsumed = []
        for rule in list(match_set):
            if (selected_rule is not rule and
                    selected_rule.condition.is_more_general(rule.condition)):
                selected_rule.numerosity += rule.numerosity
                match_set.model.discard(rule, rule.numerosity)
                match_set.remove(rule)
                subsumed.append(rule)
        if subsumed:
            logger.debug('%d rule(s) subsumed by: %s', len(subsumed),
                         selected_rule)
        return subsumed

    def _subsume_child(self, model, child, parents, killed):
        """Let an accurate parent absorb the child. Return a bool
        indicating whether the child was subsumed. A parent deleted while
        inserting its sibling has been released and cannot subsume."""
        for parent in parents:
            if parent not in model:
                continue
            if not (parent.is_subsumer() and
                    parent.condition.is_more_general(child.condition)):
                continue
            parent.numerosity += 1
            killed.extend(self.prune(model))
            return True
        return False

    @staticmethod
    def _drop_killed(match_set, killed):
        """Remove rules which have left the population from the match
        set."""
        for rule in killed:
            if rule in match_set:
                match_set.remove(rule)

    @staticmethod
    def _get_average_time_stamp(match_set):
        """Return the average time stamp for the rules in this match
        set."""
        # This is the average value of the trial counter upon the most
        # recent GA invocation for each rule in this match set.
        total_time_stamps = sum(rule.time_stamp * rule.numerosity
                                for rule in match_set)
        total_numerosity = sum(rule.numerosity for rule in match_set)
        return total_time_stamps / (total_numerosity or 1)

    @staticmethod
    def _set_timestamps(match_set):
        """Set the time stamp of each rule in this match set to the
        current trial."""
        for rule in match_set:
            rule.time_stamp = match_set.model.time_stamp

    @staticmethod
    def _select_parent(match_set, rng):
        """Select a rule from this match set, with probability
        proportionate to its fitness, to act as a parent for a new rule in
        the classifier set. Return the selected rule."""
        total_fitness = sum(rule.fitness for rule in match_set)
        selector = rng.uniform(0, total_fitness)
        for rule in match_set:
            selector -= rule.fitness
            if selector <= 0:
                return rule
        # If for some reason a case slips through the above loop, perhaps
        # due to floating point error, we fall back on uniform selection.
        return rng.choice(list(match_set))
