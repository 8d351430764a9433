"""
Regular expression compiler, building a nondeterministic finite
automaton (NFA) by Thompson's construction, and simulating it by
tracking the set of active states

Usage:
    nfa = NFA("(a|b)*c")  # union, kleene star, grouping, concatenation
    nfa.accepts("abbac")  # True
"""

__all__ = ["NFA", "InvalidExpression", "compile", "EPSILON"]
__version__ = "0.0.1"

from typing import Callable, Optional

from .nfa import NFA
from .nfa_factory import ConstructionEvent, InvalidExpression, _NFAFactory
from .nfautil import EPSILON


# pylint: disable-next=redefined-builtin
def compile(pattern: str,
            *, listener: Optional[
                Callable[[ConstructionEvent], None]] = None) -> NFA:
    """
    Compiles the given pattern into an NFA.

    Arguments:
        pattern -- The regular expression to compile

    Keyword Arguments:
        listener -- Callback receiving every ConstructionEvent, in
            order (default: {None})

    Raises:
        InvalidExpression: If the pattern is malformed

    Returns:
        The compiled NFA
    """
    return _NFAFactory(pattern, listener).build()
