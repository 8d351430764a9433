"""
Export of an NFA as a labelled graph, for consumption by renderers and
other graph tooling
"""

__all__ = ['GraphEdge', 'NFAStatistics', 'reachable_states',
           'export_edges', 'edge_map', 'to_networkx', 'statistics']

from collections import deque
from typing import Any, NamedTuple

try:
    import numpy as np
except ImportError as e:
    e.add_note("NFA graph export requires numpy: `pip install numpy`")
    raise e  # raise to user
try:
    import networkx
except ImportError as e:
    e.add_note("NFA graph export requires networkx: "
               "`pip install networkx`")
    raise e

from .nfa import NFA
from .nfautil import State


class GraphEdge(NamedTuple):
    """
    All transitions between one pair of states, merged into a single
    edge carrying every label
    """
    source: State
    destination: State
    labels: tuple[str, ...]


class NFAStatistics(NamedTuple):
    """Summary figures describing an NFA"""
    states: int
    transitions: int
    alphabet: tuple[str, ...]
    complexity: str


def reachable_states(nfa: NFA) -> list[State]:
    """
    Breadth-first traversal from the start state.

    Arguments:
        nfa -- The automaton to traverse

    Returns:
        Every reachable state, in the order first visited
    """
    visited = {nfa.start}
    order = [nfa.start]
    queue = deque(order)
    while queue:
        state = queue.popleft()
        for targets in nfa.transitions(state).values():
            for target in targets:
                if target not in visited:
                    visited.add(target)
                    order.append(target)
                    queue.append(target)
    return order


def export_edges(nfa: NFA) -> list[GraphEdge]:
    """
    Lists the edges between reachable states, with parallel transitions
    between the same two states merged into one multi-labelled edge.
    Epsilon transitions are labelled "ε".

    Arguments:
        nfa -- The automaton to export

    Returns:
        The merged edges, ordered by source state visit order
    """
    edges: dict[tuple[State, State], list[str]] = {}
    for state in reachable_states(nfa):
        for symbol, targets in nfa.transitions(state).items():
            label = str(symbol)
            for target in targets:
                labels = edges.setdefault((state, target), [])
                if label not in labels:
                    labels.append(label)
    return [GraphEdge(source, destination, tuple(labels))
            for (source, destination), labels in edges.items()]


def _empty_arr(size: int) -> np.ndarray:
    """
    Create a square ndarray filled with unique empty sets.

    Arguments:
        size -- The length of each side

    Returns:
        A new numpy ndarray.
    """
    return np.vectorize(lambda _: set())(np.empty((size, size),
                                                  dtype=set))


# pylint: disable-next=no-member, unsubscriptable-object
def edge_map(nfa: NFA) -> np.ndarray[Any, np.dtypes.ObjectDType]:
    """
    A 2D array (or matrix) of sets of labels, so that from a given state
    q, the q'th row (edge_map[q, :]) holds the labels of the edges
    leaving q, indexed by their destination state.

    Arguments:
        nfa -- The automaton to export

    Returns:
        A new numpy ndarray of sets
    """
    result = _empty_arr(nfa.size)
    for edge in export_edges(nfa):
        result[edge.source, edge.destination].update(edge.labels)
    return result


def to_networkx(nfa: NFA) -> networkx.MultiDiGraph:
    """
    Builds a networkx representation of the reachable part of the NFA.

    Arguments:
        nfa -- The automaton to export

    Returns:
        A multi-digraph, with one node per state and one edge per
        merged GraphEdge
    """
    graph = networkx.MultiDiGraph()
    for state in reachable_states(nfa):
        graph.add_node(state, label=f"S{state}",
                       start=state == nfa.start,
                       accepting=nfa.is_end_state(state))
    for edge in export_edges(nfa):
        graph.add_edge(edge.source, edge.destination,
                       label=', '.join(edge.labels))
    return graph


def statistics(nfa: NFA) -> NFAStatistics:
    """
    Counts the states and merged transitions of the NFA, and rates how
    complex it is.

    Arguments:
        nfa -- The automaton to summarise

    Returns:
        The statistics of the automaton
    """
    num_states = len(reachable_states(nfa))
    num_transitions = int(np.count_nonzero(
        np.vectorize(len)(edge_map(nfa))))
    alphabet = nfa.alphabet
    complexity = num_states + num_transitions
    if complexity > 20:
        level = 'High'
    elif complexity > 10:
        level = 'Medium'
    else:
        level = 'Low'
    return NFAStatistics(num_states, num_transitions, alphabet, level)
