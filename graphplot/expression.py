"""A small infix expression evaluator with user-defined functions and constants."""

from __future__ import annotations

import functools
import math
import re
from collections.abc import Callable, Mapping
from typing import Optional

Node = Callable[[Mapping[str, float]], float]

_NAME = re.compile(r"[A-Za-z_][A-Za-z0-9_]*\Z")
_LEXEME_PATTERN = re.compile(
    r"\s*(?:"
    r"(?P<num>(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?)"
    r"|(?P<name>[A-Za-z_][A-Za-z0-9_]*)"
    r"|(?P<op><=|>=|==|!=|[-+*/^(),<>])"
    r")"
)


class ExpressionError(Exception):
    """Raised when an expression cannot be parsed or evaluated."""


def _divide(a: float, b: float) -> float:
    if b == 0:
        if a == 0 or math.isnan(a):
            return math.nan
        return math.copysign(math.inf, a) * math.copysign(1.0, b)
    return a / b


def _power(a: float, b: float) -> float:
    try:
        return math.pow(a, b)
    except OverflowError:
        return math.inf
    except ValueError:
        if a == 0 and b < 0:
            return math.inf
        return math.nan


_BINARY: dict[str, Callable[[float, float], float]] = {
    "+": lambda a, b: a + b,
    "-": lambda a, b: a - b,
    "*": lambda a, b: a * b,
    "/": _divide,
    "^": _power,
    "<": lambda a, b: float(a < b),
    ">": lambda a, b: float(a > b),
    "<=": lambda a, b: float(a <= b),
    ">=": lambda a, b: float(a >= b),
    "==": lambda a, b: float(a == b),
    "!=": lambda a, b: float(a != b),
}

_COMPARISONS = ("<", ">", "<=", ">=", "==", "!=")


def _tokenize(text: str) -> list[tuple[str, str]]:
    lexemes = []
    pos = 0
    while pos < len(text):
        match = _LEXEME_PATTERN.match(text, pos)
        if match is None or match.end() == pos:
            rest = text[pos:]
            if rest.strip():
                offset = pos + len(rest) - len(rest.lstrip())
                raise ExpressionError(
                    f'Unexpected character "{text[offset]}" at position {offset}'
                )
            break
        kind = match.lastgroup
        lexemes.append((kind, match.group(kind)))
        pos = match.end()
    return lexemes


class _Compiler:
    """Recursive-descent compiler turning lexemes into a callable tree."""

    def __init__(
        self,
        lexemes: list[tuple[str, str]],
        functions: Mapping[str, Callable[..., float]],
        constants: Mapping[str, float],
    ) -> None:
        self._lexemes = lexemes
        self._pos = 0
        self._functions = functions
        self._constants = constants

    def compile(self) -> Node:
        if not self._lexemes:
            raise ExpressionError("Empty expression")
        node = self._comparison()
        if self._peek() is not None:
            raise ExpressionError(f'Unexpected token "{self._peek()[1]}"')
        return node

    def _peek(self) -> Optional[tuple[str, str]]:
        return self._lexemes[self._pos] if self._pos < len(self._lexemes) else None

    def _next(self) -> tuple[str, str]:
        lexeme = self._peek()
        if lexeme is None:
            raise ExpressionError("Unexpected end of expression")
        self._pos += 1
        return lexeme

    def _accept(self, *ops: str) -> Optional[str]:
        lexeme = self._peek()
        if lexeme is not None and lexeme[0] == "op" and lexeme[1] in ops:
            self._pos += 1
            return lexeme[1]
        return None

    def _expect(self, op: str) -> None:
        if self._accept(op) is None:
            lexeme = self._peek()
            found = "end of expression" if lexeme is None else f'"{lexeme[1]}"'
            raise ExpressionError(f'Expected "{op}" but found {found}')

    @staticmethod
    def _binary(op: str, left: Node, right: Node) -> Node:
        func = _BINARY[op]
        return lambda env: func(left(env), right(env))

    def _comparison(self) -> Node:
        node = self._additive()
        while (op := self._accept(*_COMPARISONS)) is not None:
            node = self._binary(op, node, self._additive())
        return node

    def _additive(self) -> Node:
        node = self._multiplicative()
        while (op := self._accept("+", "-")) is not None:
            node = self._binary(op, node, self._multiplicative())
        return node

    def _multiplicative(self) -> Node:
        node = self._unary()
        while (op := self._accept("*", "/")) is not None:
            node = self._binary(op, node, self._unary())
        return node

    def _unary(self) -> Node:
        if self._accept("-") is not None:
            operand = self._unary()
            return lambda env: -operand(env)
        if self._accept("+") is not None:
            return self._unary()
        return self._power()

    def _power(self) -> Node:
        base = self._primary()
        if self._accept("^") is not None:
            exponent = self._unary()
            return self._binary("^", base, exponent)
        return base

    def _primary(self) -> Node:
        kind, value = self._next()
        if kind == "num":
            number = float(value)
            return lambda env: number
        if kind == "name":
            if self._accept("(") is not None:
                return self._call(value)
            if value in self._constants:
                constant = self._constants[value]
                return lambda env: constant
            return self._variable(value)
        if value == "(":
            node = self._comparison()
            self._expect(")")
            return node
        raise ExpressionError(f'Unexpected token "{value}"')

    @staticmethod
    def _variable(name: str) -> Node:
        def lookup(env: Mapping[str, float]) -> float:
            try:
                return float(env[name])
            except KeyError:
                raise ExpressionError(f'Undefined variable "{name}"') from None

        return lookup

    def _call(self, name: str) -> Node:
        if name not in self._functions:
            raise ExpressionError(f'Unknown function "{name}"')
        func = self._functions[name]
        args: list[Node] = []
        if self._accept(")") is None:
            args.append(self._comparison())
            while self._accept(",") is not None:
                args.append(self._comparison())
            self._expect(")")

        def call(env: Mapping[str, float]) -> float:
            values = [arg(env) for arg in args]
            try:
                return float(func(*values))
            except (ArithmeticError, ValueError, TypeError) as exc:
                raise ExpressionError(f'Error in function "{name}": {exc}') from exc

        return call


class Parser:
    """Holds functions, constants and one expression to evaluate."""

    def __init__(self) -> None:
        self._functions: dict[str, Callable[..., float]] = {}
        self._constants: dict[str, float] = {}
        self._text: Optional[str] = None
        self._compiled: Optional[Node] = None

    @staticmethod
    def _check_name(name: str) -> None:
        if not _NAME.match(name):
            raise ExpressionError(f'Invalid name "{name}"')

    def define_function(self, name: str, func: Callable[..., float]) -> None:
        """Make ``func`` callable from expressions as ``name(...)``."""
        self._check_name(name)
        self._functions[name] = func
        self._compiled = None

    def define_constant(self, name: str, value: float) -> None:
        """Bind ``name`` to a fixed value."""
        self._check_name(name)
        self._constants[name] = float(value)
        self._compiled = None

    def set_expression(self, text: str) -> None:
        """Set the expression; it is compiled on the next evaluation."""
        self._text = text
        self._compiled = None

    @property
    def expression(self) -> Optional[str]:
        return self._text

    def evaluate(self, variables: Optional[Mapping[str, float]] = None) -> float:
        """Evaluate the current expression with the given variable values."""
        if self._text is None:
            raise ExpressionError("No expression has been set")
        if self._compiled is None:
            lexemes = _tokenize(self._text)
            self._compiled = _Compiler(lexemes, self._functions, self._constants).compile()
        return self._compiled(variables or {})


def _ieee(func: Callable[[float], float]) -> Callable[[float], float]:
    """Map domain errors to NaN and overflow to infinity, as floating point does."""

    @functools.wraps(func)
    def wrapper(x: float) -> float:
        try:
            return func(x)
        except OverflowError:
            return math.inf
        except ValueError:
            return math.nan

    return wrapper


def _log(x: float) -> float:
    return -math.inf if x == 0 else math.log(x)


def _log10(x: float) -> float:
    return -math.inf if x == 0 else math.log10(x)


def create_parser() -> Parser:
    """Return a parser with the standard upper-case functions and constants."""
    parser = Parser()
    parser.define_function("COS", _ieee(math.cos))
    parser.define_function("SIN", _ieee(math.sin))
    parser.define_function("TAN", _ieee(math.tan))
    parser.define_function("LOG", _ieee(_log))
    parser.define_function("LOG10", _ieee(_log10))
    parser.define_function("EXP", _ieee(math.exp))
    parser.define_function("SQRT", _ieee(math.sqrt))
    parser.define_function("ABS", _ieee(math.fabs))
    parser.define_constant("PI", 3.14159265358979323846)
    parser.define_constant("E", 2.71828182845904523536)
    return parser