"""
Accuracy-based Function Approximation for Python 3

This xcsf submodule provides the dynamical graph (DGP) used as an evolvable
matching function. A graph is a fixed number of nodes, each holding a
scalar state in [-1, 1], a transfer function, and a small fixed-length list
of connections. A connection is a signed 1-based index: a positive value
refers to the state of another node, a negative value refers (negated) to an
external input, and zero means the slot is inert.

Evaluation resets every node to its initial state and then sweeps the
nodes in ascending order once per time step, updating each node in place.
A node therefore sees the already-updated state of any lower-indexed node
and the previous state of any higher-indexed node. Replays of the same
graph on the same inputs must produce the same states, so this order is
part of the graph's behavior and must not be changed.

Usage:
    import random
    from xcsf.graphs import Graph

    rng = random.Random(42)
    graph = Graph.random(node_count=20, state_length=2, rng=rng)
    graph.update([.25, -.5])
    if graph.output(0) > .5:
        print("Matched.")
"""

import math
import random


# Transfer function codes
ADD = 0
SUBTRACT = 1
MULTIPLY = 2
DIVIDE = 3
SINE = 4
COSINE = 5
TANH = 6

FUNCTION_SYMBOLS = '+-*/SCT'
NUM_FUNCTIONS = len(FUNCTION_SYMBOLS)

MAX_K = 3   # connection slots per node
MAX_T = 10  # maximum number of update sweeps


def transfer(state, function, value):
    """Apply a node's transfer function to its current state and one input
    value, returning the new state clamped to [-1, 1]. Division by zero
    leaves the state unchanged. The trigonometric functions and tanh
    discard the current state rather than combining with it.

    Usage:
        state = transfer(state, SINE, value)

    Arguments:
        state: A float, the node's current state.
        function: An int, one of the transfer function codes.
        value: A float, the input being applied.
    Return:
        A float in [-1, 1], the node's new state.
    """
    if function == ADD:
        state += value
    elif function == SUBTRACT:
        state -= value
    elif function == MULTIPLY:
        state *= value
    elif function == DIVIDE:
        if value != 0.0:
            state /= value
    elif function == SINE:
        state = math.sin(value)
    elif function == COSINE:
        state = math.cos(value)
    elif function == TANH:
        state = math.tanh(value)

    if state > 1.0:
        return 1.0
    if state < -1.0:
        return -1.0
    return state


def random_connection(node_count, state_length, rng=random):
    """Draw a single connection: inert with probability .1, otherwise an
    external input with probability .2, otherwise another node."""
    if rng.random() < .1:
        return 0
    if rng.random() < .2:
        return -rng.randint(1, state_length)
    return rng.randint(1, node_count)


class Node:
    """A single graph node. The in_degree attribute always equals the
    number of non-inert entries in connections.

    Init Arguments:
        function: An int, the transfer function code.
        connections: A sequence of ints, one per connection slot.
        initial_state: A float in [-1, 1] which the node's state is reset
            to before each evaluation of the graph.
    """

    __slots__ = ('function', 'connections', 'in_degree', 'state',
                 'initial_state')

    def __init__(self, function, connections, initial_state):
        assert 0 <= function < NUM_FUNCTIONS
        assert -1 <= initial_state <= 1

        self.function = function
        self.connections = list(connections)
        self.initial_state = initial_state
        self.state = initial_state
        self.in_degree = 0
        self.refresh_in_degree()

    @classmethod
    def random(cls, node_count, state_length, rng=random, max_k=MAX_K):
        """Create a node with a random initial state, transfer function,
        and connections."""
        initial_state = 2 * rng.random() - 1
        function = rng.randrange(NUM_FUNCTIONS)
        connections = [
            random_connection(node_count, state_length, rng)
            for _ in range(max_k)
        ]
        return cls(function, connections, initial_state)

    def refresh_in_degree(self):
        self.in_degree = sum(1 for conn in self.connections if conn != 0)

    def mutate(self, rate, node_count, state_length, rng=random):
        """Redraw the transfer function and each connection slot, each
        independently with probability rate. Return a bool indicating
        whether anything actually changed."""
        modified = False

        if rng.random() < rate:
            old = self.function
            self.function = rng.randrange(NUM_FUNCTIONS)
            if old != self.function:
                modified = True

        for index, old in enumerate(self.connections):
            if rng.random() < rate:
                new = random_connection(node_count, state_length, rng)
                self.connections[index] = new
                if old != new:
                    modified = True

        if modified:
            self.refresh_in_degree()
        return modified

    def copy(self):
        node = Node(self.function, self.connections, self.initial_state)
        node.state = self.state
        return node

    def __eq__(self, other):
        if not isinstance(other, Node):
            return NotImplemented
        return (self.function == other.function and
                self.connections == other.connections and
                self.initial_state == other.initial_state)

    def __str__(self):
        return 'Node: (%s) c: %s s: %f' % (
            FUNCTION_SYMBOLS[self.function],
            ','.join(str(conn) for conn in self.connections),
            self.state
        )


class Graph:
    """A dynamical graph with a fixed number of nodes, evaluated for a
    number of sweeps (time steps) on each call to update().

    Usage:
        graph = Graph.random(node_count=10, state_length=3)
        graph.update(situation)
        value = graph.output(0)

    Init Arguments:
        nodes: A sequence of Node instances. The graph takes ownership of
            them.
        timesteps: An int in [1, max_t], the number of sweeps performed by
            each call to update().
        state_length: An int, the number of external inputs.
        max_t: An int, the upper bound on timesteps under mutation; default
            is MAX_T.
    """

    def __init__(self, nodes, timesteps, state_length, max_t=MAX_T):
        assert nodes
        assert 1 <= timesteps <= max_t
        assert state_length >= 1

        self.nodes = list(nodes)
        self.timesteps = timesteps
        self.state_length = state_length
        self.max_t = max_t

    @classmethod
    def random(cls, node_count, state_length, rng=random, max_k=MAX_K,
               max_t=MAX_T):
        """Create a new graph with random structure and random initial
        node states.

        Usage:
            graph = Graph.random(20, len(situation), rng)

        Arguments:
            node_count: An int, the number of nodes in the graph.
            state_length: An int, the number of external inputs.
            rng: The random stream to draw from; default is the random
                module itself.
            max_k: An int, the number of connection slots per node.
            max_t: An int, the maximum number of sweeps.
        Return:
            A new Graph instance.
        """
        assert node_count >= 1
        timesteps = rng.randrange(max_t) + 1
        nodes = [
            Node.random(node_count, state_length, rng, max_k)
            for _ in range(node_count)
        ]
        return cls(nodes, timesteps, state_length, max_t)

    @property
    def node_count(self):
        """The number of nodes in the graph."""
        return len(self.nodes)

    @property
    def average_k(self):
        """The average effective in-degree of the nodes. Nodes computing
        sine, cosine or tanh only use their last input, so they count as
        1 if they have any input at all; the arithmetic nodes count their
        full in-degree."""
        k = 0
        for node in self.nodes:
            if node.function >= SINE:
                if node.in_degree > 0:
                    k += 1
            else:
                k += node.in_degree
        return k / len(self.nodes)

    def output(self, index):
        """Return the current state of the node at the given (0-based)
        index."""
        return self.nodes[index].state

    def reset(self):
        """Return every node to its initial state."""
        for node in self.nodes:
            node.state = node.initial_state

    def update(self, inputs):
        """Reset the graph and run it for its number of time steps on the
        given external inputs. Nodes are updated in place, in ascending
        order, so within a sweep each node reads the new state of lower
        nodes and the old state of higher ones.

        Usage:
            graph.update(situation)
            value = graph.output(0)

        Arguments:
            inputs: A sequence of floats, indexed by the negated external
                connection values minus one.
        Return: None
        """
        inputs = [float(value) for value in inputs]
        nodes = self.nodes
        self.reset()
        for _ in range(self.timesteps):
            for node in nodes:
                function = node.function
                for conn in node.connections:
                    if conn < 0:
                        node.state = transfer(node.state, function,
                                              inputs[-conn - 1])
                    elif conn > 0:
                        node.state = transfer(node.state, function,
                                              nodes[conn - 1].state)

    def mutate(self, rate, rng=random):
        """Mutate the graph's structure. Each node's function and each
        connection slot is redrawn with probability rate, and with
        probability rate the number of time steps moves up or down by one
        within [1, max_t]. Return a bool indicating whether any value
        actually changed; redraws that produce the same value do not
        count.

        Usage:
            if graph.mutate(.04, rng):
                print("Changed.")

        Arguments:
            rate: A float in [0, 1], the per-allele mutation probability.
            rng: The random stream to draw from.
        Return:
            A bool indicating whether the graph was changed.
        """
        modified = False
        for node in self.nodes:
            if node.mutate(rate, len(self.nodes), self.state_length, rng):
                modified = True

        if rng.random() < rate:
            timesteps = self.timesteps
            if rng.random() < .5:
                if self.timesteps > 1:
                    self.timesteps -= 1
            elif self.timesteps < self.max_t:
                self.timesteps += 1
            if timesteps != self.timesteps:
                modified = True

        return modified

    def copy(self):
        """Return an independent deep copy of the graph."""
        return Graph(
            [node.copy() for node in self.nodes],
            self.timesteps,
            self.state_length,
            self.max_t
        )

    def copy_from(self, other):
        """Overwrite this graph with a deep copy of another. The nodes this
        graph previously held are dropped, never shared."""
        assert isinstance(other, Graph)
        self.nodes = [node.copy() for node in other.nodes]
        self.timesteps = other.timesteps
        self.state_length = other.state_length
        self.max_t = other.max_t

    def __eq__(self, other):
        if not isinstance(other, Graph):
            return NotImplemented
        return (self.timesteps == other.timesteps and
                self.nodes == other.nodes)

    def __str__(self):
        return 'Graph: N=%d; T=%d\n' % (len(self.nodes), self.timesteps) + \
            '\n'.join('(%d) %s' % (index + 1, node)
                      for index, node in enumerate(self.nodes))
