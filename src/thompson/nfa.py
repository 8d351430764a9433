"""Main NFA class for representing compiled regular expressions"""

__all__ = ["NFA"]

from typing import TYPE_CHECKING, Callable, Mapping, Self, overload

from .nfautil import EPSILON, Fragment, State, StateArena, Symbol

if TYPE_CHECKING:
    from .simulation import TraceStep


class NFA:
    """
    Represents a regular expression, compiled to a nondeterministic
    finite automaton by Thompson's construction. Immutable once built.
    """
    if __debug__:
        # Function for debugging
        _debug_function: Callable[['NFA | None', str], None]\
            = lambda *_: None
        """
        A function which gets called during certain important steps of
        the NFA building process, in order to allow logging of certain
        events.

        Arguments:
            nfa -- The NFA object, or None if it is not built yet.
            msg -- A debug message explaining what is happening.
        """

    def _debug(self, msg: str):
        """
        Call the debugging function.

        Arguments:
            msg -- Description of why the function was called, or
                what is happening at the current point in time.
        """
        if __debug__:
            NFA._debug_function(self, msg)

    start: State
    """The identifier of the start state"""

    end: State
    """The identifier of the (one and only) accepting state"""

    pattern: str
    """The pattern this NFA was compiled from"""

    explicit: str
    """The pattern, with explicit concatenation operators"""

    postfix: str
    """The pattern in postfix notation"""

    _transitions: tuple[Mapping[Symbol, tuple[State, ...]], ...]
    """Outgoing transitions of each state, indexed by identifier"""

    _end_states: tuple[bool, ...]
    """The accepting flag of each state, indexed by identifier"""

    @overload
    def __new__(cls, pattern: str) -> Self:
        """
        Compiles a new NFA from the given regular expression pattern.

        Arguments:
            pattern -- the pattern to match, as a string
        """

    @overload
    # Require _privated arg to prevent accidental use
    def __new__(cls, arena: StateArena, fragment: Fragment,
                *, _privated: None, pattern: str = '',
                explicit: str = '', postfix: str = '') -> Self:
        """
        Freeze the states of an arena into an NFA, used only internally.

        Arguments:
            arena -- The arena owning all the states
            fragment -- The start and accepting states
        """

    # Implementation of above
    def __new__(cls, *args, **kwargs) -> Self:
        # Use match statement to determine which overload
        match args, kwargs:
            case (str(pattern),), {}:
                # Import here to resolve cyclic import
                # pylint: disable-next=import-outside-toplevel
                from .nfa_factory import _NFAFactory
                return _NFAFactory(pattern).build()  # type: ignore
            case (StateArena() as arena, Fragment() as fragment), \
                    {"_privated": _, **extra}:
                result = super().__new__(cls)
                result._transitions = tuple(node.transitions()
                                            for node in arena)
                result._end_states = tuple(node.is_end_state
                                           for node in arena)
                result.start = fragment.start
                result.end = fragment.end
                result.pattern = extra.get("pattern", '')
                result.explicit = extra.get("explicit", '')
                result.postfix = extra.get("postfix", '')
                return result
            case _:
                raise TypeError(f"Invalid args to {cls.__name__}(): ",
                                args, kwargs)

    @property
    def size(self) -> int:
        """The total amount of states in the NFA"""
        return len(self._transitions)
    __len__ = size.fget

    @property
    def states(self) -> range:
        """Every state identifier, in ascending order"""
        return range(self.size)

    @property
    def alphabet(self) -> tuple[str, ...]:
        """Every char which labels a transition, sorted"""
        return tuple(sorted({symbol
                             for transitions in self._transitions
                             for symbol in transitions
                             if symbol is not EPSILON}))

    def is_end_state(self, state: State) -> bool:
        """
        Arguments:
            state -- The state to check

        Returns:
            Whether the given state is accepting
        """
        return self._end_states[state]

    def end_states(self) -> list[State]:
        """
        Finds every accepting state. For any NFA produced by the
        compiler, this is exactly [{end}]

        Returns:
            The identifiers of the accepting states
        """
        return [state for state in self.states
                if self._end_states[state]]

    def transitions(self, state: State) \
            -> Mapping[Symbol, tuple[State, ...]]:
        """
        Arguments:
            state -- The state to query

        Returns:
            Read-only map of symbol to target states, in the order the
            transitions were added
        """
        return self._transitions[state]

    def targets(self, state: State, symbol: Symbol) -> tuple[State, ...]:
        """
        Arguments:
            state -- The state to query
            symbol -- The transition label

        Returns:
            The states reachable from {state} by exactly one transition
            labelled {symbol}
        """
        return self._transitions[state].get(symbol, ())

    def accepts(self, value: str) -> bool:
        """
        Simulates the NFA on the given string.

        Arguments:
            value -- The string to match against.

        Returns:
            Whether the entire string matches the regular expression.
        """
        # pylint: disable-next=import-outside-toplevel
        from .simulation import accepts
        return accepts(self, value)
    test = accepts

    def trace(self, value: str) -> list['TraceStep']:
        """
        Simulates the NFA on the given string, recording each set of
        active states on the way.

        Arguments:
            value -- The string to match against.

        Returns:
            The ordered list of simulation steps
        """
        # pylint: disable-next=import-outside-toplevel
        from .simulation import trace
        return trace(self, value)

    def __str__(self) -> str:
        """
        Creates pretty-printable representation of the current NFA
        transition table, useful for debugging.

        Returns:
            The formatted string.
        """
        rows = []
        for state in self.states:
            marker = ('>' if state == self.start else ' ') \
                + ('*' if self._end_states[state] else ' ')
            edges = ', '.join(
                f"{symbol}: {list(targets)}"
                for symbol, targets in self._transitions[state].items())
            rows.append(f"{marker}{state}: {{{edges}}}")
        return '\n'.join(rows) + f"\n{self.start} -> {self.end}"

    def __repr__(self) -> str:
        return (f"{self.__class__.__name__}({self.pattern!r}, "
                f"size={self.size}, start={self.start}, end={self.end})")

