"""Command line entrypoint: compile a pattern and test strings on it"""

import sys

from . import compile as compile_nfa
from .graph_export import export_edges, reachable_states, statistics
from .nfa import NFA
from .nfa_factory import ConstructionEvent, InvalidExpression
from .simulation import TraceStep

_USAGE = ("usage: python -m thompson [--trace] [--graph] [--steps] "
          "PATTERN [STRING ...] [-- STRING ...]")

_FLAGS = frozenset({"--trace", "--graph", "--steps"})


def _state_list(states: frozenset[int]) -> str:
    """Format a set of states like {S0, S2}"""
    return '{' + ', '.join(f"S{state}" for state in sorted(states)) + '}'


def _print_step(index: int, step: TraceStep) -> None:
    """Print a single simulation step"""
    where = '' if step.position is None else f" @{step.position}"
    print(f"  {index:>3}: {step.symbol}{where}: "
          f"{_state_list(step.previous)} -> {_state_list(step.states)}")


def _print_graph(nfa: NFA) -> None:
    """Print the states, edges and statistics of the NFA"""
    print("States: " + ', '.join(
        f"S{state}" + ('*' if nfa.is_end_state(state) else '')
        for state in reachable_states(nfa)))
    for edge in export_edges(nfa):
        print(f"  S{edge.source} -> S{edge.destination}: "
              f"{', '.join(edge.labels)}")
    stats = statistics(nfa)
    print(f"{stats.states} states, {stats.transitions} transitions, "
          f"alphabet {{{', '.join(stats.alphabet)}}}, "
          f"complexity {stats.complexity}")


def main(argv: list[str]) -> int:
    """
    Entrypoint.

    Arguments:
        argv -- Command line arguments, excluding the program name

    Returns:
        Exit status: 0 if every string was accepted, 1 if any was
        rejected, 2 for bad usage or an invalid pattern
    """
    # Everything after a bare '--' is positional
    if '--' in argv:
        split = argv.index('--')
        options, rest = argv[:split], argv[split + 1:]
    else:
        options, rest = argv, []
    flags = {arg for arg in options if arg.startswith('--')}
    if flags - _FLAGS:
        print(f"unknown option {', '.join(sorted(flags - _FLAGS))}")
        print(_USAGE)
        return 2
    args = [arg for arg in options if not arg.startswith('--')] + rest
    if not args:
        print(_USAGE)
        return 2
    pattern, *strings = args

    def on_event(event: ConstructionEvent) -> None:
        print(f"  {event}")

    if "--steps" in flags:
        print("Construction:")
    try:
        nfa = compile_nfa(
            pattern,
            listener=on_event if "--steps" in flags else None)
    except InvalidExpression as e:
        print(f"InvalidExpression: {e}")
        return 2
    if "--graph" in flags:
        _print_graph(nfa)
    failed = 0
    for value in strings:
        accepted = nfa.accepts(value)
        failed += not accepted
        print(f"{value!r}: {'accept' if accepted else 'reject'}")
        if "--trace" in flags:
            for index, step in enumerate(nfa.trace(value)):
                _print_step(index, step)
    return 1 if failed else 0


if __name__ == "__main__":
    sys.exit(main(sys.argv[1:]))
