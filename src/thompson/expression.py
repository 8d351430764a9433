"""
Rewriting of infix regular expression patterns: insertion of explicit
concatenation, and conversion to postfix notation
"""

__all__ = ['CONCAT_SYMBOL', 'OPERATORS', 'PRECEDENCE', 'is_literal',
           'should_concat', 'add_explicit_concat', 'infix_to_postfix']

from typing import Optional


CONCAT_SYMBOL = '.'
"""The explicit concatenation operator, inserted by the preprocessor"""

OPERATORS = frozenset({'|', '*', CONCAT_SYMBOL})
"""All operator tokens, excluding parenthesis"""

PRECEDENCE: dict[str, int] = {'|': 1, CONCAT_SYMBOL: 2, '*': 3}
"""Binding strength of each operator, higher binds tighter"""


def is_literal(char: Optional[str]) -> bool:
    """
    Whether the given token is a literal char, i.e. neither an operator
    nor a parenthesis

    Arguments:
        char -- The token to check, or None past the end of the pattern

    Returns:
        Whether the token is a literal
    """
    return bool(char) and char not in OPERATORS and char not in "()"


def should_concat(prev: Optional[str], next_: Optional[str]) -> bool:
    """
    Whether an explicit concatenation belongs between two adjacent
    tokens

    Arguments:
        prev -- The left-hand token
        next_ -- The right-hand token

    Returns:
        True if the left token ends an operand and the right token
        starts one
    """
    if not prev or not next_:
        return False
    ends_operand = is_literal(prev) or prev in ')*'
    starts_operand = is_literal(next_) or next_ == '('
    return ends_operand and starts_operand


def add_explicit_concat(pattern: str) -> str:
    """
    Insert {CONCAT_SYMBOL} between every pair of adjacent tokens that
    are implicitly concatenated. Performs no validation.

    Arguments:
        pattern -- The raw infix pattern

    Returns:
        The equivilent pattern, with explicit concatenation
    """
    result = []
    for i, current in enumerate(pattern):
        result.append(current)
        if should_concat(current, pattern[i + 1:i + 2]):
            result.append(CONCAT_SYMBOL)
    return ''.join(result)


def infix_to_postfix(pattern: str) -> str:
    """
    Convert an explicitly concatenated infix pattern to postfix, using
    the shunting-yard algorithm. Never fails: a ')' with no matching '('
    and a '(' that is never closed are both left in the output, for the
    builder to reject.

    Arguments:
        pattern -- The infix pattern, see {add_explicit_concat}

    Returns:
        The pattern in postfix (reverse polish) notation
    """
    output: list[str] = []
    stack: list[str] = []
    for token in pattern:
        if token == '(':
            stack.append(token)
        elif token == ')':
            while stack and stack[-1] != '(':
                output.append(stack.pop())
            if stack:
                stack.pop()
            else:
                # Unopened bracket
                output.append(token)
        elif token in OPERATORS:
            # Left-associative: pop operators of equal precedence too
            while (stack and stack[-1] in OPERATORS
                   and PRECEDENCE[stack[-1]] >= PRECEDENCE[token]):
                output.append(stack.pop())
            stack.append(token)
        else:
            output.append(token)
    while stack:
        output.append(stack.pop())
    return ''.join(output)
