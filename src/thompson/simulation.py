"""Simulation of an NFA over an input string, by tracking active states"""

__all__ = ['TraceStep', 'epsilon_closure', 'move', 'accepts', 'trace']

from typing import Iterable, NamedTuple, Optional

from .nfa import NFA
from .nfautil import EPSILON, State, Symbol


class TraceStep(NamedTuple):
    """
    One configuration of the simulation: the states active after a
    closure or a read, and the states that were active before it
    """
    states: frozenset[State]
    """The active states after this step"""

    previous: frozenset[State]
    """The active states before this step"""

    symbol: Symbol
    """The char read, or EPSILON for a closure"""

    position: Optional[int]
    """Index of the char being processed, None for the first closure"""


def epsilon_closure(nfa: NFA, states: Iterable[State]) -> frozenset[State]:
    """
    Finds every state reachable from the given states using only epsilon
    transitions. Visited states are tracked, so epsilon cycles are safe.

    Arguments:
        nfa -- The automaton
        states -- The states to start from

    Returns:
        The closed set, including the given states
    """
    closure = set(states)
    stack = list(closure)
    while stack:
        state = stack.pop()
        for target in nfa.targets(state, EPSILON):
            if target not in closure:
                closure.add(target)
                stack.append(target)
    return frozenset(closure)


def move(nfa: NFA, states: Iterable[State], symbol: str) \
        -> frozenset[State]:
    """
    Finds the states reachable by exactly one transition on the given
    char. Never follows epsilon transitions.

    Arguments:
        nfa -- The automaton
        states -- The currently active states
        symbol -- The char being read

    Returns:
        The set of states after the read, empty if {symbol} is EPSILON
    """
    if symbol is EPSILON:
        return frozenset()
    return frozenset(target
                     for state in states
                     for target in nfa.targets(state, symbol))


def accepts(nfa: NFA, value: str) -> bool:
    """
    Tries to match the whole of the given string.

    Arguments:
        nfa -- The automaton
        value -- The string to match against

    Returns:
        Whether the final set of active states holds the accepting state
    """
    current = epsilon_closure(nfa, (nfa.start,))
    for char in value:
        current = epsilon_closure(nfa, move(nfa, current, char))
        if not current:
            # Nothing can revive an empty configuration
            break
    return nfa.end in current


def trace(nfa: NFA, value: str) -> list[TraceStep]:
    """
    Runs the same algorithm as {accepts}, eagerly recording every
    closure and every read. If a read leaves no active states, the empty
    step is recorded and the trace ends there.

    Arguments:
        nfa -- The automaton
        value -- The string to match against

    Returns:
        The ordered list of steps
    """
    previous = frozenset((nfa.start,))
    current = epsilon_closure(nfa, previous)
    steps = [TraceStep(current, previous, EPSILON, None)]
    for position, char in enumerate(value):
        moved = move(nfa, current, char)
        steps.append(TraceStep(moved, current, char, position))
        if not moved:
            break
        current = epsilon_closure(nfa, moved)
        steps.append(TraceStep(current, moved, EPSILON, position))
    return steps
