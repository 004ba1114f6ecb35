"""
Module: analyzer.expressions

Purpose:
    Restricted arithmetic evaluator for the algebra found in lesson text.
    A small recursive-descent parser over a fixed grammar: numbers,
    single-letter variables, + - * / ^ ², parentheses, unary signs and
    implicit multiplication ("2x", "3(x + 1)"). Nothing else is
    evaluated: there are no function calls, attribute lookups or names
    beyond the variable mapping supplied by the caller.

Key Functions:
    - evaluate(): Evaluate an expression with variable bindings
    - solve_check(): Check that a value satisfies "lhs = rhs"

Key Classes:
    - ExpressionError: Raised for malformed or unevaluable input

Used By:
    - analyzer.detection.steps: Verifies synthesized solutions
"""

from __future__ import annotations

import math
import re
from dataclasses import dataclass
from typing import List, Mapping, Optional

_TOKEN_PATTERN = re.compile(r"\s*(?:(\d+\.?\d*|\.\d+)|([a-zA-Z])|(.))")
_OPERATORS = set("+-*/^²()")
_ALIASES = {"×": "*", "·": "*", "÷": "/", "−": "-"}


class ExpressionError(ValueError):
    """Raised when an expression cannot be parsed or evaluated."""


@dataclass(frozen=True)
class _Token:
    kind: str  # "num", "var", "op", "end"
    value: str


def _tokenize(expression: str) -> List[_Token]:
    tokens: List[_Token] = []
    text = expression.strip()
    pos = 0
    while pos < len(text):
        match = _TOKEN_PATTERN.match(text, pos)
        if match is None:
            break
        number, variable, other = match.groups()
        pos = match.end()
        if number is not None:
            tokens.append(_Token("num", number))
        elif variable is not None:
            tokens.append(_Token("var", variable))
        elif other is not None:
            op = _ALIASES.get(other, other)
            if op not in _OPERATORS:
                raise ExpressionError(f"Unexpected character {other!r} in {expression!r}")
            tokens.append(_Token("op", op))
    tokens.append(_Token("end", ""))
    return tokens


class _Parser:
    """
    Grammar:
        expr    := term (("+" | "-") term)*
        term    := unary (("*" | "/") unary | <implicit> power)*
        unary   := ("+" | "-") unary | power
        power   := primary ("^" unary | "²")*
        primary := NUMBER | VARIABLE | "(" expr ")"
    """

    def __init__(self, expression: str, variables: Mapping[str, float]):
        self._expression = expression
        self._tokens = _tokenize(expression)
        self._pos = 0
        self._variables = variables

    def parse(self) -> float:
        value = self._expr()
        if self._peek().kind != "end":
            raise ExpressionError(f"Unexpected {self._peek().value!r} in {self._expression!r}")
        return value

    # ─────────────────────────────────────────────────────────────────────
    # Token helpers
    # ─────────────────────────────────────────────────────────────────────

    def _peek(self) -> _Token:
        return self._tokens[self._pos]

    def _advance(self) -> _Token:
        token = self._tokens[self._pos]
        self._pos += 1
        return token

    def _accept(self, *ops: str) -> Optional[str]:
        token = self._peek()
        if token.kind == "op" and token.value in ops:
            self._pos += 1
            return token.value
        return None

    # ─────────────────────────────────────────────────────────────────────
    # Grammar rules
    # ─────────────────────────────────────────────────────────────────────

    def _expr(self) -> float:
        value = self._term()
        while True:
            op = self._accept("+", "-")
            if op is None:
                return value
            rhs = self._term()
            value = value + rhs if op == "+" else value - rhs

    def _term(self) -> float:
        value = self._unary()
        while True:
            op = self._accept("*", "/")
            if op == "*":
                value *= self._unary()
            elif op == "/":
                divisor = self._unary()
                if divisor == 0:
                    raise ExpressionError(f"Division by zero in {self._expression!r}")
                value /= divisor
            elif self._starts_operand():
                value *= self._power()
            else:
                return value

    def _starts_operand(self) -> bool:
        token = self._peek()
        return token.kind in ("num", "var") or (token.kind == "op" and token.value == "(")

    def _unary(self) -> float:
        op = self._accept("+", "-")
        if op == "-":
            return -self._unary()
        if op == "+":
            return self._unary()
        return self._power()

    def _power(self) -> float:
        value = self._primary()
        while True:
            if self._accept("²"):
                value = _pow(value, 2.0, self._expression)
            elif self._accept("^"):
                value = _pow(value, self._unary(), self._expression)
            else:
                return value

    def _primary(self) -> float:
        token = self._advance()
        if token.kind == "num":
            return float(token.value)
        if token.kind == "var":
            return self._lookup(token.value)
        if token.kind == "op" and token.value == "(":
            value = self._expr()
            if not self._accept(")"):
                raise ExpressionError(f"Missing ')' in {self._expression!r}")
            return value
        found = token.value or "end of input"
        raise ExpressionError(f"Expected a number, variable or '(' but found {found!r} in {self._expression!r}")

    def _lookup(self, name: str) -> float:
        if name in self._variables:
            return float(self._variables[name])
        if name.lower() in self._variables:
            return float(self._variables[name.lower()])
        raise ExpressionError(f"Unknown variable {name!r} in {self._expression!r}")


def _pow(base: float, exponent: float, expression: str) -> float:
    try:
        result = base ** exponent
    except (OverflowError, ZeroDivisionError) as e:
        raise ExpressionError(f"Cannot evaluate power in {expression!r}: {e}") from e
    if isinstance(result, complex):
        raise ExpressionError(f"Complex result in {expression!r}")
    return result


def evaluate(expression: str, variables: Mapping[str, float] | None = None) -> float:
    """
    Evaluate an arithmetic expression.

    Args:
        expression: Expression text, e.g. "2x^2 + 3(x - 1)"
        variables: Values for single-letter variables

    Returns:
        The value as a float.

    Raises:
        ExpressionError: On malformed input, unknown variables,
            division by zero or a non-real result.

    Example:
        >>> evaluate("2x + 3", {"x": 2})
        7.0
    """
    value = _Parser(expression, variables or {}).parse()
    if math.isnan(value) or math.isinf(value):
        raise ExpressionError(f"Non-finite result for {expression!r}")
    return value


def solve_check(
    equation: str,
    variable: str,
    value: float,
    *,
    tolerance: float = 1e-9,
) -> bool:
    """
    Check that ``variable = value`` satisfies ``equation``.

    Args:
        equation: Equation text with exactly one "=", e.g. "2x + 3 = 7"
        variable: Variable letter
        value: Candidate solution
        tolerance: Relative tolerance for the comparison

    Returns:
        True when both sides agree within tolerance.

    Raises:
        ExpressionError: If the equation is malformed.
    """
    sides = equation.split("=")
    if len(sides) != 2:
        raise ExpressionError(f"Expected exactly one '=' in {equation!r}")
    bindings = {variable: value}
    lhs = evaluate(sides[0], bindings)
    rhs = evaluate(sides[1], bindings)
    return math.isclose(lhs, rhs, rel_tol=tolerance, abs_tol=tolerance)
