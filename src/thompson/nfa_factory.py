"""Utilities for compiling a pattern into an NFA"""

__all__ = ['InvalidExpression', 'EventKind', 'ConstructionEvent',
           '_NFAFactory']

from enum import IntEnum, auto
from typing import Callable, Optional

from .expression import (CONCAT_SYMBOL, add_explicit_concat,
                         infix_to_postfix)
from .nfa import NFA
from .nfautil import EPSILON, Fragment, State, StateArena, Symbol


class InvalidExpression(Exception):
    """
    An error indicating that a pattern could not be reduced to a single
    automaton.
    """
    message: str
    """The human-readable message associated with the error."""
    pattern: str | None
    """The pattern which caused the error."""
    postfix: str | None
    """The postfix form of the pattern being built."""
    index: int | None
    """The index into the postfix form where the error was caused."""

    def __init__(self, msg: str,
                 pattern: str | None = None,
                 postfix: str | None = None,
                 index: int | None = None) -> None:
        """
        Initializes an invalid expression error.

        Arguments:
            msg -- The human-readable message associated with the error
            pattern -- The pattern being compiled (default: {None})
            postfix -- The postfix form of the pattern (default: {None})
            index -- The index within the postfix form where the error
                was found (default: {None})
        """
        super().__init__(msg, pattern, postfix, index)
        self.message = msg
        self.pattern = pattern
        self.postfix = postfix
        self.index = index

    def __str__(self) -> str:
        """
        Human-readable string representaion of the error.

        Returns:
            human-readable error message, with indication of where
            the error occured within the postfix string.
        """
        result = self.message
        if self.pattern is not None:
            result += f" in pattern \"{self.pattern}\""
        if self.index is not None and self.postfix is not None:
            result += (f" at postfix position {self.index}:"
                       f"\n\"{self.postfix}\""
                       f"\n {' ' * self.index}^- here")
        return result


class EventKind(IntEnum):
    """The step of compilation that a ConstructionEvent describes"""

    INPUT = auto()
    """The pattern as given"""

    EXPLICIT_CONCAT = auto()
    """Insertion of explicit concatenation operators"""

    POSTFIX = auto()
    """Conversion from infix to postfix notation"""

    CHARACTER = auto()
    """A fragment matching a single char was created"""

    CONCATENATION = auto()
    """Two fragments were joined in sequence"""

    UNION = auto()
    """Two fragments were joined as alternatives"""

    KLEENE_STAR = auto()
    """A fragment was made to repeat zero or more times"""


class ConstructionEvent:
    """
    A record of one step of compilation, for consumers which want to
    explain or display how the NFA was produced
    """

    kind: EventKind
    """Which step this is"""

    source: str | None
    """The input of a pipeline stage"""

    result: str | None
    """The output of a pipeline stage"""

    symbol: Symbol | None
    """The char matched by a CHARACTER fragment"""

    fragment: Fragment | None
    """The fragment produced by a construction rule"""

    new_states: tuple[State, ...]
    """States created by a construction rule"""

    linked: tuple[State, ...]
    """Existing states joined together by a construction rule"""

    def __init__(self,  # pylint: disable=too-many-arguments
                 kind: EventKind, *,
                 source: str | None = None,
                 result: str | None = None,
                 symbol: Symbol | None = None,
                 fragment: Fragment | None = None,
                 new_states: tuple[State, ...] = (),
                 linked: tuple[State, ...] = ()) -> None:
        self.kind = kind
        self.source = source
        self.result = result
        self.symbol = symbol
        self.fragment = fragment
        self.new_states = new_states
        self.linked = linked

    def __str__(self) -> str:
        if self.fragment is None:
            if self.source is None:
                return f"{self.kind.name}: {self.result}"
            return f"{self.kind.name}: {self.source} -> {self.result}"
        result = (f"{self.kind.name}: {self.fragment.start} -> "
                  f"{self.fragment.end}")
        if self.symbol is not None:
            result += f" on '{self.symbol}'"
        return result

    def __repr__(self) -> str:
        args_str = ', '.join((f"{key}={value!r}"
                              for key, value in self.__dict__.items()
                              if value is not None and value != ()))
        return f"{self.__class__.__name__}({args_str})"


class _NFAFactory:
    """Factory class to rewrite, parse and construct an NFA"""

    pattern: str
    """The infix pattern being compiled"""

    explicit: str
    """The pattern with explicit concatenation operators"""

    postfix: str
    """The pattern in postfix notation"""

    events: list[ConstructionEvent]
    """Every construction event emitted so far, in order"""

    _arena: StateArena
    """Owner of the states, and the identifier counter"""

    _stack: list[Fragment]
    """The fragments built but not yet consumed by an operator"""

    _listener: Optional[Callable[[ConstructionEvent], None]]
    """Called with each event as it is emitted"""

    def __init__(self, pattern: str,
                 listener: Optional[
                     Callable[[ConstructionEvent], None]] = None) -> None:
        """
        Initialize the factory for the given pattern.

        Arguments:
            pattern -- The regular expression to compile

        Keyword Arguments:
            listener -- Callback receiving each ConstructionEvent, in
                order (default: {None})
        """
        self.pattern = pattern
        self.explicit = ''
        self.postfix = ''
        self.events = []
        self._arena = StateArena()
        self._stack = []
        self._listener = listener

    def _emit(self, event: ConstructionEvent) -> None:
        """Record an event and pass it to the listener"""
        self.events.append(event)
        if self._listener is not None:
            self._listener(event)

    def _pop(self, token: str, index: int) -> Fragment:
        """
        Pop the top fragment off the stack

        Arguments:
            token -- The operator needing the fragment
            index -- The position of the operator in the postfix form

        Raises:
            InvalidExpression: If the stack is empty

        Returns:
            The popped fragment
        """
        if not self._stack:
            raise InvalidExpression(
                f"'{token}' is missing an operand",
                self.pattern, self.postfix, index)
        return self._stack.pop()

    def char_fragment(self, char: str) -> Fragment:
        """
        Create a fragment matching exactly one char

        Arguments:
            char -- The char to match

        Returns:
            The new fragment
        """
        start = self._arena.new_state()
        end = self._arena.new_state(is_end_state=True)
        self._arena.connect(start, end, char)
        fragment = Fragment(start, end)
        self._emit(ConstructionEvent(EventKind.CHARACTER, symbol=char,
                                     fragment=fragment,
                                     new_states=(start, end)))
        return fragment

    def concat_fragment(self, first: Fragment,
                        second: Fragment) -> Fragment:
        """
        Join two fragments in sequence, so that a match of the first is
        followed by a match of the second

        Arguments:
            first -- The fragment to match first
            second -- The fragment to match after it

        Returns:
            The combined fragment
        """
        self._arena.set_end_state(first.end, False)
        self._arena.connect(first.end, second.start, EPSILON)
        fragment = Fragment(first.start, second.end)
        self._emit(ConstructionEvent(EventKind.CONCATENATION,
                                     fragment=fragment,
                                     linked=(first.end, second.start)))
        return fragment

    def union_fragment(self, left: Fragment,
                       right: Fragment) -> Fragment:
        """
        Join two fragments as alternatives, so that either may match

        Arguments:
            left -- The first alternative
            right -- The second alternative

        Returns:
            The combined fragment
        """
        start = self._arena.new_state()
        end = self._arena.new_state(is_end_state=True)
        self._arena.connect(start, left.start, EPSILON)
        self._arena.connect(start, right.start, EPSILON)
        self._arena.set_end_state(left.end, False)
        self._arena.set_end_state(right.end, False)
        self._arena.connect(left.end, end, EPSILON)
        self._arena.connect(right.end, end, EPSILON)
        fragment = Fragment(start, end)
        self._emit(ConstructionEvent(EventKind.UNION, fragment=fragment,
                                     new_states=(start, end),
                                     linked=(left.start, right.start,
                                             left.end, right.end)))
        return fragment

    def star_fragment(self, inner: Fragment) -> Fragment:
        """
        Make a fragment match any number of times, including none

        Arguments:
            inner -- The fragment to repeat

        Returns:
            The repeating fragment
        """
        start = self._arena.new_state()
        end = self._arena.new_state(is_end_state=True)
        self._arena.connect(start, inner.start, EPSILON)
        # Bypass for zero repetitions
        self._arena.connect(start, end, EPSILON)
        self._arena.set_end_state(inner.end, False)
        self._arena.connect(inner.end, inner.start, EPSILON)
        self._arena.connect(inner.end, end, EPSILON)
        fragment = Fragment(start, end)
        self._emit(ConstructionEvent(EventKind.KLEENE_STAR,
                                     fragment=fragment,
                                     new_states=(start, end),
                                     linked=(inner.start, inner.end)))
        return fragment

    def parse_token(self, token: str, index: int) -> None:
        """
        Apply a single postfix token to the fragment stack

        Arguments:
            token -- The token to apply
            index -- The position of the token in the postfix form

        Raises:
            InvalidExpression: If the token cannot be applied
        """
        match token:
            case '*':
                self._stack.append(
                    self.star_fragment(self._pop(token, index)))
            case '|':
                right = self._pop(token, index)
                left = self._pop(token, index)
                self._stack.append(self.union_fragment(left, right))
            case _ if token == CONCAT_SYMBOL:
                right = self._pop(token, index)
                left = self._pop(token, index)
                self._stack.append(self.concat_fragment(left, right))
            case '(' | ')':
                raise InvalidExpression(
                    f"Unbalanced '{token}'",
                    self.pattern, self.postfix, index)
            case char:
                self._stack.append(self.char_fragment(char))

    def build(self) -> NFA:
        """
        Rewrite and parse the pattern, and return the resultant NFA

        Raises:
            InvalidExpression: If the pattern does not reduce to exactly
                one fragment

        Returns:
            The final NFA produced
        """
        self._emit(ConstructionEvent(EventKind.INPUT,
                                     result=self.pattern))
        self.explicit = add_explicit_concat(self.pattern)
        self._emit(ConstructionEvent(EventKind.EXPLICIT_CONCAT,
                                     source=self.pattern,
                                     result=self.explicit))
        self.postfix = infix_to_postfix(self.explicit)
        self._emit(ConstructionEvent(EventKind.POSTFIX,
                                     source=self.explicit,
                                     result=self.postfix))
        if __debug__:
            NFA._debug_function(None, f"postfix: {self.postfix}")
        for index, token in enumerate(self.postfix):
            self.parse_token(token, index)
        if len(self._stack) != 1:
            raise InvalidExpression(
                "Pattern must reduce to exactly one automaton, found "
                f"{len(self._stack)}", self.pattern, self.postfix)
        fragment = self._stack[0]
        self._arena.set_end_state(fragment.end, True)
        result = NFA(self._arena, fragment, _privated=None,
                     pattern=self.pattern, explicit=self.explicit,
                     postfix=self.postfix)
        result._debug("built")  # pylint: disable=protected-access
        return result
