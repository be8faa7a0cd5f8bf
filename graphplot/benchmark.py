"""Timing of expression evaluation against equivalent hand-written functions."""

from __future__ import annotations

import argparse
import math
import re
import time
from collections.abc import Callable, Iterator, Sequence
from dataclasses import dataclass
from typing import Optional

from .expression import ExpressionError, Parser

EXPRESSIONS: tuple[str, ...] = (
    "(y + x)",
    "2 * (y + x)",
    "(2 * y + 2 * x)",
    "((1.23 * x^2) / y) - 123.123",
    "(y + x / y) * (x - y / x)",
    "x / ((x + y) + (x - y)) / y",
    "1 - ((x * y) + (y / x)) - 3",
    "(5.5 + x) + (2 * x - 2 / 3 * y) * (x / 3 + y / 4) + (y + 7.7)",
    "1.1x^1 + 2.2y^2 - 3.3x^3 + 4.4y^15 - 5.5x^23 + 6.6y^55",
    "sin(2 * x) + cos(pi / y)",
    "1 - sin(2 * x) + cos(pi / y)",
    "sqrt(111.111 - sin(2 * x) + cos(pi / y) / 333.333)",
    "(x^2 / sin(2 * pi / y)) - x / 2",
    "x + (cos(y - sin(2 / x * pi)) - sin(x - cos(2 * y / pi))) - y",
    "clamp(-1.0, sin(2 * pi * x) + cos(y / 2 * pi), +1.0)",
    "max(3.33, min(sqrt(1 - sin(2 * x) + cos(pi / y) / 3), 1.11))",
    "if((y + (x * 2.2)) <= (x + y + 1.1), x - y, x * y) + 2 * pi / x",
)

LOWER_BOUND = -100.0
UPPER_BOUND = 100.0
DELTA = 0.0111
PARSE_ROUNDS = 100000
FILE_ROUNDS = 100000

PI = 3.141592653589793238462643383279502

_FILE_VARIABLES = {
    "a": 1.1,
    "b": 2.2,
    "c": 3.3,
    "x": 2.123456,
    "y": 3.123456,
    "z": 4.123456,
    "w": 5.123456,
}

_IMPLICIT_PRODUCT = re.compile(
    r"(?<![A-Za-z_0-9.])((?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?)(?![eE][+-]?\d)(?=[A-Za-z_(])"
)


@dataclass(frozen=True)
class BenchmarkResult:
    """Outcome of evaluating one expression over a grid of points."""

    label: str
    expression: str
    total: float
    count: int
    seconds: float

    @property
    def rate(self) -> float:
        """Evaluations per second."""
        return self.count / self.seconds if self.seconds > 0 else math.inf

    @property
    def ok(self) -> bool:
        """False when the summed result is zero, which marks a broken run."""
        return self.total != 0

    def describe(self) -> str:
        if self.ok:
            return (
                f"[{self.label}] Total Time:{self.seconds:12.8f}  "
                f"Rate:{self.rate:14.3f}evals/sec Expression: {self.expression}"
            )
        return (
            f"run_{self.label}_benchmark() - Error running benchmark "
            f"for expression: {self.expression}"
        )


def clamp(low: float, value: float, high: float) -> float:
    """Limit ``value`` to the range from ``low`` to ``high``."""
    return low if value < low else (high if value > high else value)


def avg(x: float, y: float) -> float:
    """Mean of two values."""
    return (x + y) / 2.0


def _sqrt(value: float) -> float:
    return math.sqrt(value) if value >= 0 else math.nan


def _log(value: float) -> float:
    if value == 0:
        return -math.inf
    return math.log(value) if value > 0 else math.nan


def _log10(value: float) -> float:
    if value == 0:
        return -math.inf
    return math.log10(value) if value > 0 else math.nan


def _func00(x: float, y: float) -> float:
    return y + x


def _func01(x: float, y: float) -> float:
    return 2.0 * (y + x)


def _func02(x: float, y: float) -> float:
    return 2.0 * y + 2.0 * x


def _func03(x: float, y: float) -> float:
    return ((1.23 * (x * x)) / y) - 123.123


def _func04(x: float, y: float) -> float:
    return (y + x / y) * (x - y / x)


def _func05(x: float, y: float) -> float:
    return x / ((x + y) + (x - y)) / y


def _func06(x: float, y: float) -> float:
    return 1.0 - ((x * y) + (y / x)) - 3.0


def _func07(x: float, y: float) -> float:
    return (5.5 + x) + (2.0 * x - 2.0 / 3.0 * y) * (x / 3.0 + y / 4.0) + (y + 7.7)


def _func08(x: float, y: float) -> float:
    pw = math.pow
    return (
        1.1 * pw(x, 1.0)
        + 2.2 * pw(y, 2.0)
        - 3.3 * pw(x, 3.0)
        + 4.4 * pw(y, 15.0)
        - 5.5 * pw(x, 23.0)
        + 6.6 * pw(y, 55.0)
    )


def _func09(x: float, y: float) -> float:
    return math.sin(2.0 * x) + math.cos(PI / y)


def _func10(x: float, y: float) -> float:
    return 1.0 - math.sin(2.0 * x) + math.cos(PI / y)


def _func11(x: float, y: float) -> float:
    return _sqrt(111.111 - math.sin(2.0 * x) + math.cos(PI / y) / 333.333)


def _func12(x: float, y: float) -> float:
    return ((x * x) / math.sin(2.0 * PI / y)) - x / 2.0


def _func13(x: float, y: float) -> float:
    return x + (math.cos(y - math.sin(2.0 / x * PI)) - math.sin(x - math.cos(2.0 * y / PI))) - y


def _func14(x: float, y: float) -> float:
    return clamp(-1.0, math.sin(2.0 * PI * x) + math.cos(y / 2.0 * PI), 1.0)


def _func15(x: float, y: float) -> float:
    return max(3.33, min(_sqrt(1.0 - math.sin(2.0 * x) + math.cos(PI / y) / 3.0), 1.11))


def _func16(x: float, y: float) -> float:
    return (x - y if (y + (x * 2.2)) <= (x + y + 1.1) else x * y) + 2.0 * PI / x


_NATIVE = (
    _func00, _func01, _func02, _func03, _func04, _func05, _func06, _func07, _func08,
    _func09, _func10, _func11, _func12, _func13, _func14, _func15, _func16,
)


def native_functions() -> dict[str, Callable[[float, float], float]]:
    """Map each benchmark expression to the hand-written function computing it."""
    return dict(zip(EXPRESSIONS, _NATIVE))


def _frange(lower: float, upper: float, delta: float) -> Iterator[float]:
    if delta <= 0:
        raise ValueError("delta must be positive")
    value = lower
    while value <= upper:
        yield value
        value += delta


def _call_native(func: Callable[[float, float], float], x: float, y: float) -> float:
    try:
        return func(x, y)
    except ZeroDivisionError:
        return math.nan
    except OverflowError:
        return math.inf
    except ValueError:
        return math.nan


def run_native_benchmark(
    func: Callable[[float, float], float],
    expression: str,
    lower: float = LOWER_BOUND,
    upper: float = UPPER_BOUND,
    delta: float = DELTA,
) -> BenchmarkResult:
    """Evaluate ``func`` at every point of the square grid and time it."""
    ys = list(_frange(lower, upper, delta))
    total = 0.0
    count = 0
    start = time.perf_counter()
    for x in _frange(lower, upper, delta):
        for y in ys:
            total += _call_native(func, x, y)
            count += 1
    elapsed = time.perf_counter() - start
    return BenchmarkResult("native", expression, total, count, elapsed)


def _run_parser_benchmark(
    parser: Parser,
    expression: str,
    lower: float = LOWER_BOUND,
    upper: float = UPPER_BOUND,
    delta: float = DELTA,
) -> BenchmarkResult:
    ys = list(_frange(lower, upper, delta))
    total = 0.0
    count = 0
    env = {"x": 0.0, "y": 0.0}
    start = time.perf_counter()
    for x in _frange(lower, upper, delta):
        env["x"] = x
        for y in ys:
            env["y"] = y
            try:
                total += parser.evaluate(env)
            except ExpressionError:
                total += math.nan
            count += 1
    elapsed = time.perf_counter() - start
    return BenchmarkResult("parser", expression, total, count, elapsed)


def pgo_primer() -> float:
    """Run every hand-written function over a coarse grid and return the sum."""
    total = 0.0
    ys = list(_frange(-50.0, 50.0, 0.07))
    for x in _frange(-50.0, 50.0, 0.07):
        for y in ys:
            for func in _NATIVE:
                total += _call_native(func, x, y)
    return total


def load_expression_file(path) -> list[str]:
    """Read expressions one per line, skipping blank lines and ``#`` comments."""
    with open(path, encoding="utf-8") as stream:
        lines = [line.rstrip("\n") for line in stream]
    return [line for line in lines if line and not line.startswith("#")]


def _prepare(text: str) -> str:
    """Turn implicit products such as ``2x`` or ``3(y)`` into explicit ones."""
    return _IMPLICIT_PRODUCT.sub(r"\1*", text)


def _choose(condition: float, if_true: float, if_false: float) -> float:
    return if_true if condition != 0 else if_false


def _minimum(*values: float) -> float:
    return min(values)


def _maximum(*values: float) -> float:
    return max(values)


def _benchmark_parser() -> Parser:
    parser = Parser()
    functions: dict[str, Callable[..., float]] = {
        "sin": math.sin,
        "cos": math.cos,
        "tan": math.tan,
        "sqrt": _sqrt,
        "exp": math.exp,
        "log": _log,
        "log10": _log10,
        "abs": math.fabs,
        "min": _minimum,
        "max": _maximum,
        "clamp": clamp,
        "avg": avg,
        "if": _choose,
    }
    for name, func in functions.items():
        parser.define_function(name, func)
    parser.define_constant("pi", PI)
    parser.define_constant("epsilon", 1e-10)
    parser.define_constant("inf", math.inf)
    return parser


def _polynomial(degree: int) -> Callable[..., float]:
    def polynomial(x: float, *coefficients: float) -> float:
        if len(coefficients) != degree + 1:
            raise TypeError(f"expected {degree + 1} coefficients, got {len(coefficients)}")
        result = 0.0
        for coefficient in coefficients:
            result = result * x + coefficient
        return result

    return polynomial


def _file_parser() -> Parser:
    parser = _benchmark_parser()
    for degree in range(1, 13):
        parser.define_function(f"poly{degree:02d}", _polynomial(degree))
    parser.define_constant("e", math.e)
    return parser


def _compile(text: str, factory: Callable[[], Parser], probe: dict[str, float]) -> Parser:
    parser = factory()
    parser.set_expression(_prepare(text))
    parser.evaluate(probe)
    return parser


def _run_parse_benchmark(rounds: int) -> bool:
    probe = {"x": 1.0, "y": 1.0}
    parser = _benchmark_parser()
    for text in EXPRESSIONS:
        prepared = _prepare(text)
        start = time.perf_counter()
        for _ in range(rounds):
            parser.set_expression(prepared)
            try:
                parser.evaluate(probe)
            except ExpressionError as exc:
                print(f"[parse benchmark] - Parser Error: {exc}\tExpression: {text}")
                return False
        elapsed = time.perf_counter() - start
        rate = rounds / elapsed if elapsed > 0 else math.inf
        print(
            f"[parse] Total Time:{elapsed:12.8f}  Rate:{rate:14.3f}parse/sec "
            f"Expression: {text}"
        )
    return True


def _file_benchmark(path: str, rounds: int) -> None:
    try:
        texts = load_expression_file(path)
    except OSError:
        texts = []
    if not texts:
        print(f"Failed to load any expressions from: {path}")
        return

    parsers: list[Parser] = []
    for text in texts:
        try:
            parsers.append(_compile(text, _file_parser, dict(_FILE_VARIABLES)))
        except ExpressionError as exc:
            print(f"[file benchmark] - Parser Error: {exc}\tExpression: {text}")
            return

    count = len(parsers)
    single_eval_total = 0.0
    total_start = time.perf_counter()
    for index, (text, parser) in enumerate(zip(texts, parsers), start=1):
        env = dict(_FILE_VARIABLES)
        start = time.perf_counter()
        total = 0.0
        for _ in range(rounds):
            try:
                total += parser.evaluate(env)
            except ExpressionError:
                total += math.nan
            env["a"], env["b"] = env["b"], env["a"]
            env["x"], env["y"] = env["y"], env["x"]
        elapsed = time.perf_counter() - start
        nanoseconds = elapsed * 1e9
        per_eval = nanoseconds / rounds if rounds else math.nan
        print(
            f"Expression {index:3d} of {count:3d} {per_eval:9.3f} ns\t"
            f"{int(nanoseconds):10d} ns\t({total:30.10f})  '{text}'",
            flush=True,
        )
        if rounds:
            single_eval_total += per_eval
    total_elapsed = time.perf_counter() - total_start

    print(f"[*] Number Of Evals:        {rounds * float(count):15.0f}")
    print(f"[*] Total Time:             {total_elapsed:9.3f}sec")
    print(f"[*] Total Single Eval Time: {single_eval_total / 1e6:9.3f}ms")


def main(argv: Optional[Sequence[str]] = None) -> int:
    """Run the grid benchmarks, or time the expressions of a file."""
    arg_parser = argparse.ArgumentParser(
        prog="graphplot-benchmark",
        description="Compare parsed expression evaluation with hand-written functions.",
    )
    arg_parser.add_argument("file", nargs="?", help="file with one expression per line")
    arg_parser.add_argument(
        "rounds", nargs="?", type=int, default=FILE_ROUNDS, help="evaluations per expression"
    )
    arg_parser.add_argument("--delta", type=float, default=DELTA, help="grid step")
    arg_parser.add_argument(
        "--parse-rounds", type=int, default=PARSE_ROUNDS, help="compilations per expression"
    )
    args = arg_parser.parse_args(argv)
    if args.delta <= 0:
        arg_parser.error("--delta must be positive")

    if args.file is not None:
        _file_benchmark(args.file, args.rounds)
        return 0

    pgo_primer()

    compiled: list[Parser] = []
    for text in EXPRESSIONS:
        try:
            compiled.append(_compile(text, _benchmark_parser, {"x": 1.0, "y": 1.0}))
        except ExpressionError as exc:
            print(f"[load expression] - Parser Error: {exc}\tExpression: {text}")
            return 1

    print("--- PARSER ---")
    for text, parser in zip(EXPRESSIONS, compiled):
        result = _run_parser_benchmark(parser, text, delta=args.delta)
        print(result.describe())

    print("--- NATIVE ---")
    for text, func in native_functions().items():
        print(run_native_benchmark(func, text, delta=args.delta).describe())

    print("--- PARSE ----")
    _run_parse_benchmark(args.parse_rounds)
    return 0