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

This package implements XCSF, the extension of the XCS (Accuracy-based
Classifier System) algorithm to function approximation, as described by
Wilson.[1] Rules may use interval, neural or dynamical graph conditions;
the latter follow Preen and Bull's dynamical genetic programming.[2] The
package also provides a framework for implementing and experimenting with
learning classifier systems for real-valued targets in general.

Usage:
    import logging
    from xcsf import XCSFAlgorithm
    from xcsf.scenarios import SineProblem, ScenarioObserver

    # Create a scenario instance, either by instantiating one of the
    # predefined scenarios provided in xcsf.scenarios, or by creating your
    # own subclass of the xcsf.scenarios.Scenario base class and
    # instantiating it.
    scenario = SineProblem(state_length=1)

    # If you want to log the process of the run as it proceeds, set the
    # logging level with the built-in logging module, and wrap the
    # scenario with a ScenarioObserver.
    logging.root.setLevel(logging.INFO)
    scenario = ScenarioObserver(scenario)

    # Instantiate the algorithm and set the parameters to values that are
    # appropriate for the scenario. Calling help(XCSFAlgorithm) will give
    # you a description of each parameter's meaning.
    algorithm = XCSFAlgorithm()
    algorithm.condition_type = 'interval'
    algorithm.do_set_subsumption = True

    # Create a classifier set from the algorithm, tailored for the
    # scenario you have selected, and train it.
    model = algorithm.run(scenario, 20000)

    # Use the built-in pickle module to save/reload your model for reuse.
    import pickle
    pickle.dump(model, open('model.bin', 'wb'))
    reloaded_model = pickle.load(open('model.bin', 'rb'))

    # Or just print the results out.
    print(model)

    # Or get a quick list of the most accurate classifiers discovered.
    for rule in model:
        if rule.error > algorithm.error_threshold or rule.experience < 10:
            continue
        print(rule.condition, '=>', rule.prediction,
              ' [%.5f]' % rule.fitness)


A quick explanation of the XCSF algorithm:

    The XCSF algorithm approximates a function of real-valued inputs by
    evolving a population of classifier rules of the form

        condition => computed prediction

    where the condition determines the region of the input space a rule
    applies to and the computed prediction is a linear function of the
    input, trained on the situations the rule matches. The system
    prediction for a situation is the fitness-weighted average of the
    predictions of the matching rules. The fitness of each rule is
    determined not by the size of its prediction, but by its accuracy
    relative to the other rules in the same niche, so the genetic
    algorithm favors rules that are accurate over the largest regions
    they can cover.


References:

[1] Wilson, S. (2002). Classifiers that approximate functions. Natural
    Computing, 1(2-3), pages 211-234.

[2] Preen, R. and Bull, L. (2013). Dynamical genetic programming in XCSF.
    Evolutionary Computation, 21(3), pages 361-387.




Copyright (c) 2015, Aaron Hosford
All rights reserved.

Redistribution and use in source and binary forms, with or without
modification, are permitted provided that the following conditions are met:

* Redistributions of source code must retain the above copyright notice,
  this list of conditions and the following disclaimer.

* Redistributions in binary form must reproduce the above copyright notice,
  this list of conditions and the following disclaimer in the documentation
  and/or other materials provided with the distribution.

* Neither the name of xcsf nor the names of its
  contributors may be used to endorse or promote products derived from
  this software without specific prior written permission.

THIS SOFTWARE IS PROVIDED BY THE COPYRIGHT HOLDERS AND CONTRIBUTORS "AS IS"
AND ANY EXPRESS OR IMPLIED WARRANTIES, INCLUDING, BUT NOT LIMITED TO, THE
IMPLIED WARRANTIES OF MERCHANTABILITY AND FITNESS FOR A PARTICULAR PURPOSE
ARE DISCLAIMED. IN NO EVENT SHALL THE COPYRIGHT HOLDER OR CONTRIBUTORS BE
LIABLE FOR ANY DIRECT, INDIRECT, INCIDENTAL, SPECIAL, EXEMPLARY, OR
CONSEQUENTIAL DAMAGES (INCLUDING, BUT NOT LIMITED TO, PROCUREMENT OF
SUBSTITUTE GOODS OR SERVICES; LOSS OF USE, DATA, OR PROFITS; OR BUSINESS
INTERRUPTION) HOWEVER CAUSED AND ON ANY THEORY OF LIABILITY, WHETHER IN
CONTRACT, STRICT LIABILITY, OR TORT (INCLUDING NEGLIGENCE OR OTHERWISE)
ARISING IN ANY WAY OUT OF THE USE OF THIS SOFTWARE, EVEN IF ADVISED OF THE
POSSIBILITY OF SUCH DAMAGE.
"""


from . import conditions, graphs, predictions, scenarios
from .framework import ClassifierRule, ClassifierSet, LCSAlgorithm, MatchSet
from .algorithms.xcsf import XCSFClassifierRule, XCSFAlgorithm
from .experiment import run_experiments
from .performance import PerformanceReporter
from .testing import test


__author__ = 'Aaron Hosford'
__version__ = '1.0.0'

__all__ = [
    # Module Metadata
    '__author__',
    '__version__',

    # Preloaded Submodules
    'conditions',
    'graphs',
    'predictions',
    'scenarios',

    # Classes
    'ClassifierRule',
    'XCSFClassifierRule',
    'ClassifierSet',
    'LCSAlgorithm',
    'XCSFAlgorithm',
    'MatchSet',
    'PerformanceReporter',

    # Functions
    'run_experiments',
    'test',
]
