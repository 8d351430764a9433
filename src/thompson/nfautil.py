"""Utility classes representing the states of a Thompson automaton"""

__all__ = ['State', 'Symbol', 'Epsilon', 'EPSILON', 'StateNode',
           'Fragment', 'StateArena']

from enum import Enum
from types import MappingProxyType
from typing import Iterator, Mapping, NamedTuple, TypeAlias


State: TypeAlias = int
"""
Represents a single state in the NFA, internally represented by a simple
identifier which indexes into the arena that owns the state
"""


class Epsilon(Enum):
    """
    The distinguished symbol of transitions which are taken without
    consuming any input. Kept distinct from every str so that even a
    literal 'ε' in a pattern is a normal char
    """
    EPSILON = "ε"

    def __str__(self) -> str:
        return self.value

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}.{self.name}"


EPSILON = Epsilon.EPSILON
"""The epsilon transition symbol"""

Symbol: TypeAlias = str | Epsilon
"""A transition label: either a single input char, or epsilon"""


class StateNode:
    """
    A single node of the automaton, holding its accepting flag and the
    outgoing transitions, grouped by symbol
    """

    id: State
    """The unique (per compilation) identifier of this state"""

    is_end_state: bool
    """Whether this state is currently accepting"""

    _transitions: dict[Symbol, list[State]]
    """
    Map from symbol to the ordered targets of transitions on that
    symbol. Insertion order is kept, duplicates are allowed
    """

    def __init__(self, state_id: State, is_end_state: bool = False):
        self.id = state_id
        self.is_end_state = is_end_state
        self._transitions = {}

    def add_transition(self, symbol: Symbol, target: State) -> None:
        """
        Add an outgoing transition.

        Arguments:
            symbol -- The char (or epsilon) labelling the transition
            target -- The state the transition leads to
        """
        self._transitions.setdefault(symbol, []).append(target)

    def transitions(self) -> Mapping[Symbol, tuple[State, ...]]:
        """
        Read-only snapshot of the outgoing transitions

        Returns:
            A mapping of symbol to target states, in insertion order
        """
        return MappingProxyType({symbol: tuple(targets)
                                 for symbol, targets
                                 in self._transitions.items()})

    def __repr__(self) -> str:
        return (f"{self.__class__.__name__}({self.id!r}, "
                f"{self.is_end_state!r})")


class Fragment(NamedTuple):
    """
    A partially built automaton, with exactly one start and exactly one
    accepting state
    """
    start: State
    end: State


class StateArena:
    """
    Owns every state created during one compilation, along with the
    counter used to hand out state identifiers. A fresh arena is made
    for every compilation, so identifiers always start at zero
    """

    _next_id: State
    """The identifier the next created state will receive"""

    _nodes: list[StateNode]
    """All states allocated so far, indexed by identifier"""

    def __init__(self) -> None:
        self._next_id = 0
        self._nodes = []

    def new_state(self, is_end_state: bool = False) -> State:
        """
        Allocate a new state.

        Keyword Arguments:
            is_end_state -- Whether the state starts out accepting
                (default: {False})

        Returns:
            The identifier of the new state
        """
        state = self._next_id
        self._next_id += 1
        self._nodes.append(StateNode(state, is_end_state))
        return state

    def connect(self, start_state: State, end_state: State,
                symbol: Symbol) -> None:
        """
        Connects the two given states with a transition.

        Arguments:
            start_state -- The state from which the transition starts
            end_state -- The state at which the transition ends
            symbol -- The label of the transition
        """
        self._nodes[start_state].add_transition(symbol, end_state)

    def set_end_state(self, state: State, is_end_state: bool) -> None:
        """Set or clear the accepting flag of the given state"""
        self._nodes[state].is_end_state = is_end_state

    def __getitem__(self, state: State) -> StateNode:
        return self._nodes[state]

    def __len__(self) -> int:
        return len(self._nodes)

    def __iter__(self) -> Iterator[StateNode]:
        return iter(self._nodes)
