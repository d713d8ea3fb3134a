import logging
import random
from abc import ABCMeta, abstractmethod


from . import scenarios


logger = logging.getLogger(__name__)


class ClassifierRule(metaclass=ABCMeta):
    """Abstract base class defining the minimal interface for classifier
    rules appearing in classifier sets. A classifier rule consists of a
    condition and a computed prediction taken as a pair, together with
    associated metadata as determined by the algorithm. If there are
    multiple instances of a single classifier rule in a classifier set,
    this is indicated by incrementing the numerosity attribute of the
    classifier rule, rather than adding another copy of it.

    Usage:
        This is an abstract base class. Use a subclass, such as
        XCSFClassifierRule, to create an instance.

    Init Arguments: n/a (See appropriate subclass.)
    """

    # The number of instances of the classifier rule in its classifier set.
    numerosity = 1

    @abstractmethod
    def __str__(self):
        """Defining this determines the behavior of str(instance)"""
        raise NotImplementedError()

    @abstractmethod
    def __lt__(self, other):
        """Defining this determines the behavior of instance1 < instance2.
        This is here strictly for sorting purposes in calls to
        ClassifierSet.__str__."""
        raise NotImplementedError()

    @property
    @abstractmethod
    def algorithm(self):
        """The algorithm associated with this classifier rule."""
        raise NotImplementedError()

    @property
    @abstractmethod
    def condition(self):
        """The match condition for this classifier rule."""
        raise NotImplementedError()

    @property
    @abstractmethod
    def prediction_weight(self):
        """The weight of this rule's predictions. This is used to resolve
        conflicting predictions made by multiple classifiers appearing in
        the same match set. The combined prediction for the entire match
        set is the weighted average of the predictions made by each
        classifier appearing in that match set."""
        raise NotImplementedError()

    @abstractmethod
    def predict(self, situation):
        """Return this rule's computed prediction for the situation."""
        raise NotImplementedError()


class LCSAlgorithm(metaclass=ABCMeta):
    """Abstract base class defining the minimal interface for LCS
    algorithms. To create a new algorithm that can be used to initialize a
    ClassifierSet, inherit from this class and implement each of the
    abstract methods and properties. An LCS algorithm is responsible for
    managing the population and distributing reinforcement to the
    appropriate rules.

    Usage:
        This is an abstract base class. Use a subclass, such as
        XCSFAlgorithm, to create an instance.

    Init Arguments: n/a (See appropriate subclass.)
    """

    def new_model(self, scenario, rng=None):
        """Create and return a new classifier set initialized for handling
        the given scenario.

        Usage:
            scenario = SineProblem()
            model = algorithm.new_model(scenario)
            model.run(scenario, 10000)

        Arguments:
            scenario: A Scenario instance.
            rng: None, or the random.Random instance the classifier set
                should draw from.
        Return:
            A new, untrained classifier set, suited for the given scenario.
        """
        assert isinstance(scenario, scenarios.Scenario)
        return ClassifierSet(self, scenario.state_length, rng)

    def run(self, scenario, trials, rng=None, reporter=None):
        """Create a classifier set, seed its population, and run it for
        the given number of train/test trials on the scenario. Return the
        classifier set that was created.

        Usage:
            scenario = SineProblem()
            model = algorithm.run(scenario, 10000)

        Arguments:
            scenario: A Scenario instance.
            trials: An int, the number of trials to run.
            rng: None, or a random.Random instance.
            reporter: None, or a PerformanceReporter instance.
        Return:
            A new classifier set, trained on the given scenario.
        """
        assert isinstance(scenario, scenarios.Scenario)
        model = self.new_model(scenario, rng)
        model.seed()
        model.run(scenario, trials, reporter)
        return model

    @abstractmethod
    def populate(self, model):
        """Fill a new classifier set's population, or leave it empty, as
        the algorithm's parameters dictate."""
        raise NotImplementedError()

    @abstractmethod
    def covering_is_required(self, match_set):
        """Return a Boolean indicating whether covering is required for the
        current match set. The match_set argument is a MatchSet instance
        representing the current match set before covering is applied.

        Usage:
            match_set = model.match(situation)
            if model.algorithm.covering_is_required(match_set):
                new_rule = model.algorithm.cover(match_set)
                assert new_rule.condition(situation)
                model.add(new_rule)

        Arguments:
            match_set: A MatchSet instance.
        Return:
            A bool indicating whether match_set contains too few matching
            classifier rules and therefore needs to be augmented with a
            new one.
        """
        raise NotImplementedError()

    @abstractmethod
    def cover(self, match_set):
        """Return a new classifier rule that can be added to the match set,
        with a condition that matches the situation of the match set."""
        raise NotImplementedError()

    @abstractmethod
    def distribute_payoff(self, match_set, answer):
        """Update the parameters of every rule in the match set toward the
        observed answer. Return a list of rules removed from the
        population as a result (for example by subsumption)."""
        raise NotImplementedError()

    @abstractmethod
    def update(self, match_set):
        """Update the classifier set from which the match set was drawn,
        e.g. by applying a genetic algorithm. Return a list of rules
        removed from the population as a result."""
        raise NotImplementedError()

    @abstractmethod
    def prune(self, model):
        """Reduce the classifier set's population size, if necessary, by
        removing lower-quality rules. Return a list containing any rules
        whose numerosities dropped to zero as a result of this call. (The
        list may be empty, if no rule's numerosity dropped to 0.) The
        model argument is a ClassifierSet instance which utilizes this
        algorithm."""
        raise NotImplementedError()


class MatchSet:
    """The rules (classifiers) drawn from the same classifier set whose
    conditions matched the same situation.

    Usage:
        rules = [rule for rule in model if rule.condition(situation)]
        match_set = MatchSet(model, situation, rules)
        prediction = match_set.prediction

    Init Arguments:
        model: The ClassifierSet from which this match set was drawn.
        situation: The situation against which the classifier rules in
            this match set all matched.
        rules: An iterable of ClassifierRule instances.
    """

    def __init__(self, model, situation, rules):
        assert isinstance(model, ClassifierSet)

        self._model = model
        self._situation = situation
        self._algorithm = model.algorithm
        self._rules = list(rules)

        self._prediction = None  # We'll calculate this later as needed

        # Capture the time stamp of the model at which the match set was
        # created, since this can be expected to change later.
        self._time_stamp = model.time_stamp

    @property
    def model(self):
        """The classifier set from which this match set was drawn."""
        return self._model

    @property
    def situation(self):
        """The situation against which the rules in this match set all
        matched."""
        return self._situation

    @property
    def algorithm(self):
        """The algorithm managing the model that produced this match
        set."""
        return self._algorithm

    @property
    def time_stamp(self):
        """The time stamp of the model at which this match set was
        produced."""
        return self._time_stamp

    @property
    def numerosity(self):
        """The total numerosity of the rules in the match set."""
        return sum(rule.numerosity for rule in self._rules)

    def _compute_prediction(self):
        """Compute the combined prediction for this match set: the average
        of the individual rules' predictions, weighted by their prediction
        weights."""
        total_weight = 0
        total_prediction = 0
        for rule in self._rules:
            total_weight += rule.prediction_weight
            total_prediction += (rule.predict(self._situation) *
                                 rule.prediction_weight)
        self._prediction = total_prediction / (total_weight or 1)

    @property
    def prediction(self):
        """The combined prediction of the target value for the situation.
        This is the weighted average of the individual predictions of the
        classifiers constituting this match set."""
        if self._prediction is None:
            self._compute_prediction()
        return self._prediction

    def __contains__(self, rule):
        """Defining this determines the behavior of "item in instance"."""
        assert isinstance(rule, ClassifierRule)
        return any(member is rule for member in self._rules)

    def __iter__(self):
        """Defining this determines the behavior of iter(instance)."""
        return iter(self._rules)

    def __len__(self):
        """Defining this determines the behavior of len(instance)."""
        return len(self._rules)

    def add(self, rule):
        """Add a classifier rule to the match set. (Does not affect the
        classifier set.)"""
        assert isinstance(rule, ClassifierRule)
        if rule not in self:
            self._rules.append(rule)
            self._prediction = None

    def remove(self, rule):
        """Remove this classifier rule from the match set. (Does not
        affect numerosity.) A ValueError is raised if the rule is not
        present in the match set when this method is called.

        Usage:
            if rule in match_set:
                match_set.remove(rule)

        Arguments:
            rule: The ClassifierRule instance to be removed.
        Return: None
        """
        for index, member in enumerate(self._rules):
            if member is rule:
                del self._rules[index]
                self._prediction = None
                return
        raise ValueError(rule)


class ClassifierSet:
    """A set of classifier rules which work together to collectively
    approximate the target function of a scenario. Each rule in the
    classifier set consists of a condition which identifies which
    situations it applies to and a computed prediction of the target value
    for those situations. Each rule has its own associated metadata which
    the algorithm uses to determine how much weight should be given to that
    rule's prediction, as well as how the population should evolve to
    improve future performance.

    Usage:
        algorithm = XCSFAlgorithm()
        model = ClassifierSet(algorithm, state_length=2)
        model.seed()
        error = model.trial(scenario, 0, learn=True)

    Init Arguments:
        algorithm: The LCSAlgorithm instance which will manage this
            classifier set's population and behavior.
        state_length: An int, the number of inputs in each situation.
        rng: None, or a random.Random instance which every stochastic
            operation on this classifier set draws from.
    """

    def __init__(self, algorithm, state_length, rng=None):
        assert isinstance(algorithm, LCSAlgorithm)
        assert isinstance(state_length, int) and state_length > 0

        self._population = []
        self._algorithm = algorithm
        self._state_length = state_length
        self._rng = rng or random.Random()
        self._time_stamp = 0

    @property
    def algorithm(self):
        """The algorithm in charge of managing this classifier set."""
        return self._algorithm

    @property
    def state_length(self):
        """The number of inputs in each situation."""
        return self._state_length

    @property
    def rng(self):
        """The random stream this classifier set draws from."""
        return self._rng

    @property
    def time_stamp(self):
        """The index of the trial currently being run."""
        return self._time_stamp

    @property
    def numerosity(self):
        """The total numerosity of the population."""
        return sum(rule.numerosity for rule in self._population)

    @property
    def average_fitness(self):
        """The total fitness of the population divided by its total
        numerosity."""
        return (sum(rule.fitness for rule in self._population) /
                (self.numerosity or 1))

    @property
    def average_k(self):
        """The average connectivity of the rules' graph conditions, or 0
        if the conditions are not graphs."""
        values = [rule.condition.average_k for rule in self._population
                  if hasattr(rule.condition, 'average_k')]
        return sum(values) / len(values) if values else 0.0

    def __iter__(self):
        """Defining this determines the behavior of instances of this class
        with respect to iteration constructs such as "iter(instance)" and
        "for item in instance:"."""
        return iter(list(self._population))

    def __len__(self):
        """Defining this determines the behavior of len(instance)."""
        return len(self._population)

    def __contains__(self, rule):
        """Defining this determines the behavior of "item in instance"."""
        assert isinstance(rule, ClassifierRule)
        return any(member is rule for member in self._population)

    def __str__(self):
        """Defining this determines the behavior of str(instance)."""
        return '\n'.join(str(rule) for rule in sorted(self._population))

    def seed(self):
        """Initialize the population as the algorithm dictates: left
        empty, or filled with random rules."""
        self._population.clear()
        self._time_stamp = 0
        self._algorithm.populate(self)

    def match(self, situation):
        """Accept a situation (input) and return a MatchSet containing the
        classifier rules whose conditions match the situation, together
        with a list of rules deleted from the population along the way. If
        appropriate per the algorithm managing this classifier set, create
        new rules to ensure sufficient coverage of the situation.

        Usage:
            match_set, killed = model.match(situation)

        Arguments:
            situation: The situation for which a match set is desired.
        Return:
            A tuple (match_set, killed), where match_set is a MatchSet
            instance for the given situation and killed is a possibly
            empty list of rules removed from the population by covering.
        """
        match_set = MatchSet(
            self,
            situation,
            [rule for rule in self._population if rule.condition(situation)]
        )

        killed = []
        while self._algorithm.covering_is_required(match_set):
            # Ask the algorithm to provide a new classifier rule to add to
            # the population.
            rule = self._algorithm.cover(match_set)

            # Ensure that the condition provided by the algorithm does
            # indeed match the situation. If not, there is a bug in the
            # algorithm.
            assert rule.condition(situation)

            logger.debug('Covering situation: %s', situation)

            # Add the new classifier, getting back a list of the rule(s)
            # which had to be removed to make room for it.
            replaced = self.add(rule)
            killed.extend(replaced)

            for replaced_rule in replaced:
                if replaced_rule in match_set:
                    match_set.remove(replaced_rule)

            if not any(replaced_rule is rule for replaced_rule in replaced):
                match_set.add(rule)

        return match_set, killed

    def add(self, rule):
        """Add a new classifier rule to the classifier set. Return a list
        containing zero or more rules that were deleted from the classifier
        set by the algorithm in order to make room for the new rule.

        Usage:
            displaced_rules = model.add(rule)

        Arguments:
            rule: A ClassifierRule instance which is to be added to this
                classifier set.
        Return:
            A possibly empty list of ClassifierRule instances which were
            removed altogether from the classifier set (as opposed to
            simply having their numerosities decremented) in order to make
            room for the newly added rule.
        """
        assert isinstance(rule, ClassifierRule)
        assert rule not in self

        self._population.append(rule)

        # Any time we add a rule, we need to call this to keep the
        # population size under control.
        return self._algorithm.prune(self)

    def discard(self, rule, count=1):
        """Remove one or more instances of a rule from the classifier set.
        Return a Boolean indicating whether the rule's numerosity dropped
        to zero. (If the rule is not present, do nothing and return
        False.)

        Usage:
            if model.discard(rule, count=3):
                print("Rule numerosity dropped to zero.")

        Arguments:
            rule: A ClassifierRule instance whose numerosity is to be
                decremented.
            count: An int, the size of the decrement to the rule's
                numerosity; default is 1.
        Return:
            A bool indicating whether the rule was removed altogether from
            the classifier set, as opposed to simply having its numerosity
            decremented.
        """
        assert isinstance(rule, ClassifierRule)
        assert isinstance(count, int) and count >= 0

        for index, member in enumerate(self._population):
            if member is rule:
                break
        else:
            return False

        # Only actually remove the rule if its numerosity drops below 1.
        rule.numerosity -= count
        if rule.numerosity <= 0:
            # Ensure that if there is still a reference to this rule
            # elsewhere, its numerosity is still well-defined.
            rule.numerosity = 0
            del self._population[index]
            return True

        return False

    def clear(self):
        """Release every rule in the population."""
        self._population.clear()

    def trial(self, scenario, trial, learn=True):
        """Run a single trial: draw a situation and its answer from the
        scenario, form the match set, compute the system prediction, and,
        if learn is True, reinforce the match set and give the algorithm a
        chance to evolve the population. Return the absolute error of the
        system prediction.

        Usage:
            train_error = model.trial(scenario, trial, learn=True)
            test_error = model.trial(scenario, trial, learn=False)

        Arguments:
            scenario: A Scenario instance supplying situations and answers.
            trial: An int, the index of the trial, used as the time stamp
                for the genetic algorithm.
            learn: A bool indicating whether to train on this trial (using
                the scenario's training stream) or only measure error
                (using its test stream).
        Return:
            A float, the absolute difference between the answer and the
            system prediction.
        """
        self._time_stamp = trial

        situation = scenario.sense(learn)
        answer = scenario.answer(learn)

        match_set, killed = self.match(situation)

        prediction = match_set.prediction
        error = abs(answer - prediction)

        if learn:
            killed.extend(self._algorithm.distribute_payoff(match_set,
                                                            answer))
            killed.extend(self._algorithm.update(match_set))

        if killed:
            logger.debug('Trial %d released %d rule(s).', trial,
                               len(killed))
        return error

    def run(self, scenario, trials, reporter=None):
        """Run the given number of trials on the scenario, each consisting
        of a training step followed by a test step. If a reporter is
        given, the errors of each trial are recorded with it.

        Usage:
            model.run(scenario, 10000, reporter)

        Arguments:
            scenario: A Scenario instance which this classifier set is to
                interact with.
            trials: An int, the number of trials to run.
            reporter: None, or a PerformanceReporter instance.
        Return: None
        """
        assert isinstance(scenario, scenarios.Scenario)
        assert scenario.state_length == self._state_length

        for trial in range(trials):
            train_error = self.trial(scenario, trial, learn=True)
            test_error = self.trial(scenario, trial, learn=False)
            if reporter is not None:
                reporter.record(trial, train_error, test_error, self)
